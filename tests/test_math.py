from __future__ import annotations

import math
from decimal import Decimal

import pytest

from growthfit.errors import CorrelationError
from growthfit.util.math import pearson, pearson_arbitrary


def test_pearson_perfect_correlations() -> None:
    xs = [1.0, 2.0, 3.0, 4.0]
    assert pearson(xs, [2.0, 4.0, 6.0, 8.0]) == pytest.approx(1.0)
    assert pearson(xs, [8.0, 6.0, 4.0, 2.0]) == pytest.approx(-1.0)


def test_pearson_stays_in_range_near_float_ceiling() -> None:
    xs = [1e300, 1e305, 1e308]
    score = pearson(xs, [1.0, 2.0, 3.0])
    assert -1.0 <= score <= 1.0
    assert pearson(xs, xs) == pytest.approx(1.0)


def test_pearson_rejects_degenerate_input() -> None:
    with pytest.raises(CorrelationError):
        pearson([1.0, 2.0, 3.0], [5.0, 5.0, 5.0])
    with pytest.raises(CorrelationError):
        pearson([1.0, 2.0], [1.0])
    with pytest.raises(CorrelationError):
        pearson([1.0], [1.0])
    with pytest.raises(CorrelationError):
        pearson([1.0, math.inf, 3.0], [1.0, 2.0, 3.0])


def test_pearson_arbitrary_matches_fixed() -> None:
    xs = [1.0, 2.5, 3.0, 7.25, 9.0]
    ys = [2.0, 2.9, 4.1, 8.0, 8.5]
    fixed = pearson(xs, ys)
    arbitrary = pearson_arbitrary([Decimal(x) for x in xs], [Decimal(y) for y in ys])
    assert arbitrary == pytest.approx(fixed, abs=1e-12)


def test_pearson_arbitrary_handles_huge_magnitudes() -> None:
    xs = [Decimal(2) ** 5000 * k for k in (1, 2, 4, 8)]
    ys = [Decimal(k) for k in (1, 2, 4, 8)]
    assert pearson_arbitrary(xs, ys) == pytest.approx(1.0, abs=1e-12)


def test_pearson_arbitrary_rejects_degenerate_input() -> None:
    with pytest.raises(CorrelationError):
        pearson_arbitrary([Decimal(1), Decimal(2)], [Decimal(3), Decimal(3)])
    with pytest.raises(CorrelationError):
        pearson_arbitrary([Decimal(1), Decimal("NaN")], [Decimal(3), Decimal(4)])
    with pytest.raises(CorrelationError):
        pearson_arbitrary([Decimal(1)], [Decimal(1), Decimal(2)])
