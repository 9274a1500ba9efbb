from __future__ import annotations

from growthfit.classify.catalog import DEFAULT_RATING, Rating


class GrowthFitError(Exception):
    """Base error. ``rating`` is always a usable placeholder result."""

    def __init__(self, message: str, rating: Rating | None = None) -> None:
        super().__init__(message)
        self.rating = rating if rating is not None else DEFAULT_RATING


class LengthMismatchError(GrowthFitError):
    pass


class InsufficientDataError(GrowthFitError):
    pass


class CorrelationError(GrowthFitError):
    pass


class PrecisionUnsupportedError(GrowthFitError):
    pass


class DataSourceError(GrowthFitError):
    pass
