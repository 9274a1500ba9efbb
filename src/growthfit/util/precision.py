"""Arbitrary-precision numbers for growth functions that leave float range."""

from __future__ import annotations

import math
from collections.abc import Iterable
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Context, Decimal, localcontext

ARBITRARY_DIGITS = 50

# Widest exponent range decimal supports; results past it raise decimal.Overflow.
ARBITRARY_CONTEXT = Context(prec=ARBITRARY_DIGITS, Emax=MAX_EMAX, Emin=MIN_EMIN)

# Additions under this context never round. Use it for sums only: a division
# would try to expand to MAX_PREC digits.
EXACT_CONTEXT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)

ZERO = Decimal(0)
ONE = Decimal(1)
TWO = Decimal(2)


def to_arbitrary(value: int | float | str | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("bool is not a numeric sample")
    if isinstance(value, (int, float)):
        return Decimal(value)
    if isinstance(value, str):
        return Decimal(value.strip())
    raise TypeError(f"cannot convert {type(value).__name__} to arbitrary precision")


def to_fixed(value: Decimal) -> float:
    # float() of an out-of-range Decimal yields +/-inf rather than raising.
    return float(value)


def ln(x: Decimal) -> Decimal:
    with localcontext(ARBITRARY_CONTEXT):
        return x.ln()


def power(base: Decimal, exponent: Decimal) -> Decimal:
    with localcontext(ARBITRARY_CONTEXT):
        return base**exponent


def exp2(x: Decimal) -> Decimal:
    return power(TWO, x)


def sqrt(x: Decimal) -> Decimal:
    with localcontext(ARBITRARY_CONTEXT):
        return x.sqrt()


def multiply(a: Decimal, b: Decimal) -> Decimal:
    with localcontext(ARBITRARY_CONTEXT):
        return a * b


def divide(a: Decimal, b: Decimal) -> Decimal:
    with localcontext(ARBITRARY_CONTEXT):
        return a / b


def factorial(x: Decimal | float) -> Decimal:
    n = int(x)
    if n <= 1:
        return ONE
    with localcontext(ARBITRARY_CONTEXT):
        return +Decimal(math.factorial(n))


def exact_sum(values: Iterable[Decimal]) -> Decimal:
    with localcontext(EXACT_CONTEXT):
        return sum(values, ZERO)
