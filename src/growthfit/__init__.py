from importlib.metadata import PackageNotFoundError, version

from growthfit.classify.catalog import (
    CONSTANT,
    CUBIC,
    DEFAULT_RATING,
    EXPONENTIAL,
    FACTORIAL,
    HYPER_EXPONENTIAL,
    INVERSE_ACKERMANN,
    LINEAR,
    LINEARITHMIC,
    LOG,
    LOG_LOG,
    N_LOG_STAR_N,
    POLYLOGARITHMIC,
    POLYNOMIAL,
    QUADRATIC,
    UNRATED,
    GrowthClass,
    Rating,
    find_class,
    ordered_classes,
)
from growthfit.classify.classifier import ClassFailure, Classifier
from growthfit.classify.rating import rate, rate_arbitrary_precision
from growthfit.errors import (
    CorrelationError,
    DataSourceError,
    GrowthFitError,
    InsufficientDataError,
    LengthMismatchError,
    PrecisionUnsupportedError,
)

__all__ = [
    "__version__",
    "CONSTANT",
    "CUBIC",
    "DEFAULT_RATING",
    "EXPONENTIAL",
    "FACTORIAL",
    "HYPER_EXPONENTIAL",
    "INVERSE_ACKERMANN",
    "LINEAR",
    "LINEARITHMIC",
    "LOG",
    "LOG_LOG",
    "N_LOG_STAR_N",
    "POLYLOGARITHMIC",
    "POLYNOMIAL",
    "QUADRATIC",
    "UNRATED",
    "ClassFailure",
    "Classifier",
    "CorrelationError",
    "DataSourceError",
    "GrowthClass",
    "GrowthFitError",
    "InsufficientDataError",
    "LengthMismatchError",
    "PrecisionUnsupportedError",
    "Rating",
    "find_class",
    "ordered_classes",
    "rate",
    "rate_arbitrary_precision",
]

try:
    __version__ = version("growthfit")
except PackageNotFoundError:  # pragma: no cover - fallback for editable source trees
    __version__ = "0.1.0"
