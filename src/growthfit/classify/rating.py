from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from decimal import Decimal, DecimalException, localcontext

from growthfit.classify.catalog import CONSTANT, GrowthClass, Rating
from growthfit.errors import CorrelationError, InsufficientDataError, LengthMismatchError
from growthfit.util.math import pearson, pearson_arbitrary
from growthfit.util.precision import ARBITRARY_CONTEXT, ZERO, divide, exact_sum, to_arbitrary, to_fixed

log = logging.getLogger(__name__)

MIN_DATA_POINTS = 3

# Coefficient-of-variation bands: CV below the bound earns the score.
_CV_BANDS: tuple[tuple[float, float], ...] = (
    (0.05, 1.0),
    (0.1, 0.9),
    (0.2, 0.7),
    (0.3, 0.5),
    (0.5, 0.3),
)
_CV_FLOOR_SCORE = 0.1


def cv_to_score(cv: float) -> float:
    if cv == 0 or math.isnan(cv):
        return 1.0
    if math.isinf(cv) and cv > 0:
        return 0.0
    for bound, score in _CV_BANDS:
        if cv < bound:
            return score
    return _CV_FLOOR_SCORE


def _check_lengths(sizes: Sequence[int], values: Sequence[object]) -> None:
    if len(sizes) != len(values):
        raise LengthMismatchError(
            f"sizes and values must be the same length ({len(sizes)} != {len(values)})"
        )


def _positive_pairs(sizes: Sequence[int], values: Sequence[object]) -> tuple[list[int], list]:
    kept_sizes: list[int] = []
    kept_values: list = []
    for size, value in zip(sizes, values, strict=True):
        if size <= 0:
            continue
        kept_sizes.append(size)
        kept_values.append(value)
    filtered = len(sizes) - len(kept_sizes)
    if filtered:
        log.debug("Dropped %d samples with non-positive size", filtered)
    if len(kept_sizes) < MIN_DATA_POINTS:
        raise InsufficientDataError(
            f"at least {MIN_DATA_POINTS} data points with positive size are required "
            f"(got {len(kept_sizes)})"
        )
    return kept_sizes, kept_values


def detect_constant_time(values: Sequence[float]) -> Rating:
    n = len(values)
    if n < MIN_DATA_POINTS:
        raise InsufficientDataError("not enough data points for constant time detection")
    mean = math.fsum(values) / n
    variance = math.fsum((v - mean) * (v - mean) for v in values) / n
    stddev = math.sqrt(variance)
    if mean == 0:
        cv = 0.0 if stddev == 0 else math.inf
    else:
        cv = stddev / mean
    return Rating(growth_class=CONSTANT, score=cv_to_score(cv))


def detect_constant_time_arbitrary(values: Sequence[Decimal]) -> Rating:
    n = len(values)
    if n < MIN_DATA_POINTS:
        raise InsufficientDataError("not enough data points for constant time detection")
    try:
        # Summed exactly so a zero mean is recognized the same way math.fsum does.
        total = exact_sum(values)
        with localcontext(ARBITRARY_CONTEXT):
            count = Decimal(n)
            mean = total / count
            variance = sum(((v - mean) * (v - mean) for v in values), ZERO) / count
    except DecimalException as exc:
        raise CorrelationError(f"constant time detection failed in arbitrary precision ({exc!r})") from exc
    stddev = math.sqrt(float(variance))
    if total == 0:
        cv = 0.0 if stddev == 0 else math.inf
    else:
        cv = float(divide(to_arbitrary(stddev), mean))
    return Rating(growth_class=CONSTANT, score=cv_to_score(cv))


def _out_of_range(growth_class: GrowthClass, exc: DecimalException) -> CorrelationError:
    return CorrelationError(f"{growth_class.label}: reference values are out of arbitrary-precision range ({exc!r})")


def rate(growth_class: GrowthClass, sizes: Sequence[int], values: Sequence[float]) -> Rating:
    """Score how well ``growth_class`` explains ``values`` observed at ``sizes``.

    The score is the Pearson correlation between the class's reference curve
    and the observations. The constant class is scored by its coefficient
    of variation instead, on a [0, 1] staircase, so scores from the two
    methods are comparable only approximately.

    Pairs with a non-positive size are dropped. Raises LengthMismatchError,
    InsufficientDataError or CorrelationError.
    """
    _check_lengths(sizes, values)
    kept_sizes, kept_values = _positive_pairs(sizes, values)

    if growth_class is CONSTANT:
        return detect_constant_time([float(v) for v in kept_values])

    needs_arbitrary = False
    predicted: list[float] = []
    predicted_arbitrary: list[Decimal] = []
    values_arbitrary: list[Decimal] = []

    for size, value in zip(kept_sizes, kept_values, strict=True):
        if size < growth_class.domain_min:
            # Below the valid input range (e.g. log of n < 1) the reference is 0.
            predicted.append(0.0)
            predicted_arbitrary.append(ZERO)
        elif size <= growth_class.domain_max:
            x = float(size)
            predicted.append(growth_class.eval_fixed(x))
            predicted_arbitrary.append(growth_class.eval_fixed_to_arbitrary(x))
        else:
            needs_arbitrary = True
            predicted.append(math.inf)
            try:
                predicted_arbitrary.append(growth_class.eval_arbitrary(to_arbitrary(size)))
            except DecimalException as exc:
                raise _out_of_range(growth_class, exc) from exc
        values_arbitrary.append(to_arbitrary(value))

    if needs_arbitrary:
        log.debug("%s: sizes exceed %g, correlating in arbitrary precision", growth_class.label, growth_class.domain_max)
        score = pearson_arbitrary(predicted_arbitrary, values_arbitrary)
    else:
        score = pearson(predicted, [float(v) for v in kept_values])
    return Rating(growth_class=growth_class, score=score)


def rate_arbitrary_precision(
    growth_class: GrowthClass,
    sizes: Sequence[int],
    values: Sequence[Decimal | float | int | str],
) -> Rating:
    """Variant of :func:`rate` for observations held in arbitrary precision.

    Sizes are divided by the smallest size and values by that size's value
    before evaluating, which keeps high-order classes within tractable
    magnitudes.
    """
    _check_lengths(sizes, values)
    kept_sizes, kept_values = _positive_pairs(sizes, values)
    observed = [to_arbitrary(v) for v in kept_values]

    if growth_class is CONSTANT:
        return detect_constant_time_arbitrary(observed)

    # Input order is not guaranteed; the first smallest size is the anchor.
    anchor_index = min(range(len(kept_sizes)), key=lambda i: kept_sizes[i])
    anchor_size = kept_sizes[anchor_index]
    anchor_value = observed[anchor_index]

    predicted: list[Decimal] = []
    try:
        for size in kept_sizes:
            exact = divide(to_arbitrary(size), to_arbitrary(anchor_size))
            scaled = max(1.0, to_fixed(exact))
            if scaled < growth_class.domain_min:
                predicted.append(ZERO)
            elif scaled <= growth_class.domain_max:
                predicted.append(growth_class.eval_fixed_to_arbitrary(scaled))
            else:
                predicted.append(growth_class.eval_arbitrary(exact))
    except DecimalException as exc:
        raise _out_of_range(growth_class, exc) from exc

    if anchor_value == 0:
        log.debug("%s: anchor value is zero, correlating unscaled values", growth_class.label)
        scaled_values = observed
    else:
        # Magnitude only: dividing by a negative anchor would flip the correlation sign.
        anchor_magnitude = abs(anchor_value)
        scaled_values = [divide(v, anchor_magnitude) for v in observed]

    score = pearson_arbitrary(predicted, scaled_values)
    return Rating(growth_class=growth_class, score=score)
