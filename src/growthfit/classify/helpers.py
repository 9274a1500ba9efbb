from __future__ import annotations

import math
from decimal import Decimal

from growthfit.util.precision import ONE, ln, to_arbitrary

LOG_STAR_MAX_ITERATIONS = 10
LOG_STAR_EPSILON = Decimal("1e-9")

# Largest input size the step function treats as reachable (int64 max).
MAX_REPRESENTABLE_SIZE = 2**63 - 1


def factorial(n: int) -> float:
    if n <= 1:
        return 1.0
    try:
        return float(math.factorial(n))
    except OverflowError:
        return math.inf


def inverse_ackermann(n: int) -> float:
    """Step approximation of alpha(n), valid for every reachable input size.

    alpha(n) = 1 for n <= 2, 2 for n <= 7, 3 for n <= 2047,
    4 below the int64 ceiling and 5 beyond it.
    """
    if n <= 2:
        return 1.0
    if n <= 7:
        return 2.0
    if n <= 2047:
        return 3.0
    if n < MAX_REPRESENTABLE_SIZE:
        return 4.0
    return 5.0


def inverse_ackermann_arbitrary(n: Decimal) -> Decimal:
    if n <= 2:
        return Decimal(1)
    if n <= 7:
        return Decimal(2)
    if n <= 2047:
        return Decimal(3)
    if n < MAX_REPRESENTABLE_SIZE:
        return Decimal(4)
    return Decimal(5)


def log_star(x: float) -> int:
    """Number of natural-log applications needed to bring ``x`` to <= 1.

    log*(2) = 1, log*(16) = 3, log*(65536) = 3. Capped at
    LOG_STAR_MAX_ITERATIONS.
    """
    if math.isinf(x) and x > 0:
        return 1
    if math.isnan(x) or x <= 1:
        return 0
    count = 0
    while x > 1 and count < LOG_STAR_MAX_ITERATIONS:
        x = math.log(x)
        count += 1
        if math.isnan(x):
            break
    return count


def log_star_arbitrary(x: Decimal | None) -> int:
    if x is None:
        return 0
    x = to_arbitrary(x)
    if x.is_nan():
        return 0
    if x.is_infinite():
        return 1 if x > 0 else 0
    if x <= ONE:
        return 0
    count = 0
    current = x
    while current > ONE and count < LOG_STAR_MAX_ITERATIONS:
        current = ln(current)
        count += 1
        # Snap precision noise around 1 so it does not cost an extra round.
        if abs(current - ONE) < LOG_STAR_EPSILON:
            current = ONE
        if current.is_infinite():
            break
    return count
