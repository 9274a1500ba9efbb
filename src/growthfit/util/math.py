from __future__ import annotations

import math
from collections.abc import Sequence
from decimal import Decimal, DecimalException, localcontext

from growthfit.errors import CorrelationError
from growthfit.util.precision import ARBITRARY_CONTEXT, ZERO


def _check_pair(xs: Sequence[object], ys: Sequence[object]) -> None:
    if len(xs) != len(ys):
        raise CorrelationError(f"sequences differ in length ({len(xs)} != {len(ys)})")
    if len(xs) < 2:
        raise CorrelationError("at least 2 points are required for correlation")


def _clamp(r: float) -> float:
    return max(-1.0, min(1.0, r))


def _centered(values: list[float]) -> list[float]:
    # Pearson is invariant under positive scaling, so shrink to [-1, 1] first
    # to keep the sums of products inside float range.
    scale = max(abs(v) for v in values)
    if scale == 0:
        return [0.0 for _ in values]
    scaled = [v / scale for v in values]
    mean = math.fsum(scaled) / len(scaled)
    return [v - mean for v in scaled]


def pearson(xs: Sequence[float], ys: Sequence[float]) -> float:
    _check_pair(xs, ys)
    x_list = [float(x) for x in xs]
    y_list = [float(y) for y in ys]
    if not all(math.isfinite(v) for v in x_list) or not all(math.isfinite(v) for v in y_list):
        raise CorrelationError("correlation input contains non-finite values")
    dx = _centered(x_list)
    dy = _centered(y_list)
    sxx = math.fsum(a * a for a in dx)
    syy = math.fsum(b * b for b in dy)
    if sxx == 0 or syy == 0:
        raise CorrelationError("correlation is undefined for zero-variance input")
    sxy = math.fsum(a * b for a, b in zip(dx, dy, strict=True))
    return _clamp(sxy / math.sqrt(sxx * syy))


def pearson_arbitrary(xs: Sequence[Decimal], ys: Sequence[Decimal]) -> float:
    _check_pair(xs, ys)
    try:
        return _pearson_arbitrary(xs, ys)
    except DecimalException as exc:
        raise CorrelationError(f"correlation failed in arbitrary precision ({exc!r})") from exc


def _pearson_arbitrary(xs: Sequence[Decimal], ys: Sequence[Decimal]) -> float:
    with localcontext(ARBITRARY_CONTEXT):
        n = Decimal(len(xs))
        mean_x = sum(xs, ZERO) / n
        mean_y = sum(ys, ZERO) / n
        dx = [x - mean_x for x in xs]
        dy = [y - mean_y for y in ys]
        sxx = sum((a * a for a in dx), ZERO)
        syy = sum((b * b for b in dy), ZERO)
        if sxx.is_nan() or syy.is_nan():
            raise CorrelationError("correlation input contains NaN values")
        if sxx == 0 or syy == 0:
            raise CorrelationError("correlation is undefined for zero-variance input")
        sxy = sum((a * b for a, b in zip(dx, dy, strict=True)), ZERO)
        r = sxy / (sxx * syy).sqrt()
    return _clamp(float(r))
