"""Reference growth functions that measured data is compared against.

Each class is a plain record carrying three evaluators:

* ``eval_fixed``: float -> float, valid for ``domain_min <= n <= domain_max``
* ``eval_fixed_to_arbitrary``: float -> Decimal, the same value without the
  float ceiling
* ``eval_arbitrary``: Decimal -> Decimal, for sizes past ``domain_max``
"""

from __future__ import annotations

import functools
import math
import sys
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal

from growthfit.classify.helpers import (
    factorial,
    inverse_ackermann,
    inverse_ackermann_arbitrary,
    log_star,
    log_star_arbitrary,
)
from growthfit.util import precision
from growthfit.util.precision import ONE, to_arbitrary

FixedFunc = Callable[[float], float]
FixedToArbitraryFunc = Callable[[float], Decimal]
ArbitraryFunc = Callable[[Decimal], Decimal]

MAX_FLOAT = sys.float_info.max
UNBOUNDED = sys.maxsize


@dataclass(frozen=True)
class GrowthClass:
    key: str
    label: str
    description: str
    rank: int
    active: bool
    domain_min: float
    domain_max: float
    scaling_cutoff: int
    eval_fixed: FixedFunc | None = None
    eval_fixed_to_arbitrary: FixedToArbitraryFunc | None = None
    eval_arbitrary: ArbitraryFunc | None = None

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class Rating:
    growth_class: GrowthClass
    score: float

    def __str__(self) -> str:
        return f"{self.growth_class.label}: {self.score:0.3f}"


def _d(x: float) -> Decimal:
    return to_arbitrary(x)


UNRATED = GrowthClass(
    key="unrated",
    label="O(?)",
    description="Not yet rated",
    rank=0,
    active=False,
    domain_min=0.0,
    domain_max=0.0,
    scaling_cutoff=0,
)

DEFAULT_RATING = Rating(growth_class=UNRATED, score=0.0)

# Scored by the coefficient-of-variation detector, never by correlation.
CONSTANT = GrowthClass(
    key="constant",
    label="O(1)",
    description="Runs in constant time regardless of the input size.",
    rank=1,
    active=True,
    domain_min=5e-324,
    domain_max=MAX_FLOAT,
    scaling_cutoff=UNBOUNDED,
    eval_fixed=lambda _x: 1.0,
    eval_fixed_to_arbitrary=lambda _x: ONE,
    eval_arbitrary=lambda _x: ONE,
)

INVERSE_ACKERMANN = GrowthClass(
    key="inverse_ackermann",
    label="O(α(n))",
    description=(
        "Grows at the rate of the inverse Ackermann function; almost as flat as constant "
        "and close to log log n."
    ),
    rank=2,
    active=False,
    domain_min=1.0,
    domain_max=MAX_FLOAT,
    scaling_cutoff=UNBOUNDED,
    eval_fixed=lambda x: inverse_ackermann(int(x)),
    eval_fixed_to_arbitrary=lambda x: inverse_ackermann_arbitrary(_d(x)),
    eval_arbitrary=inverse_ackermann_arbitrary,
)

LOG_LOG = GrowthClass(
    key="log_log",
    label="O(log log n)",
    description="Grows with the logarithm of the logarithm of the input size.",
    rank=4,
    active=True,
    domain_min=math.exp(math.exp(0)),
    domain_max=MAX_FLOAT,
    scaling_cutoff=UNBOUNDED,
    eval_fixed=lambda x: math.log(math.log(x)),
    eval_fixed_to_arbitrary=lambda x: precision.ln(precision.ln(_d(x))),
    eval_arbitrary=lambda x: precision.ln(precision.ln(x)),
)

LOG = GrowthClass(
    key="log",
    label="O(log n)",
    description=(
        "Grows logarithmically with the input size, typically by halving the problem "
        "at each step."
    ),
    rank=8,
    active=True,
    domain_min=math.exp(0),
    domain_max=MAX_FLOAT,
    scaling_cutoff=UNBOUNDED,
    eval_fixed=math.log,
    eval_fixed_to_arbitrary=lambda x: _d(math.log(x)),
    eval_arbitrary=precision.ln,
)

POLYLOGARITHMIC = GrowthClass(
    key="polylogarithmic",
    label="O((log n)^c)",
    description="Grows with a power of the logarithm of the input size (c = 4).",
    rank=16,
    active=True,
    domain_min=1.0,
    domain_max=MAX_FLOAT,
    scaling_cutoff=UNBOUNDED,
    eval_fixed=lambda x: math.pow(math.log(x), 4),
    eval_fixed_to_arbitrary=lambda x: precision.power(precision.ln(_d(x)), Decimal(4)),
    eval_arbitrary=lambda x: precision.power(precision.ln(x), Decimal(4)),
)

LINEAR = GrowthClass(
    key="linear",
    label="O(n)",
    description="Grows linearly with the input size.",
    rank=32,
    active=True,
    domain_min=1.0,
    domain_max=MAX_FLOAT,
    scaling_cutoff=UNBOUNDED,
    eval_fixed=lambda x: x,
    eval_fixed_to_arbitrary=_d,
    eval_arbitrary=lambda x: x,
)

N_LOG_STAR_N = GrowthClass(
    key="n_log_star_n",
    label="O(n log* n)",
    description="Grows with n times the iterated logarithm of the input size.",
    rank=64,
    active=True,
    domain_min=1.0,
    domain_max=MAX_FLOAT,
    scaling_cutoff=UNBOUNDED,
    eval_fixed=lambda x: x * float(log_star(x)),
    eval_fixed_to_arbitrary=lambda x: precision.multiply(_d(x), Decimal(log_star_arbitrary(_d(x)))),
    eval_arbitrary=lambda x: precision.multiply(x, Decimal(log_star_arbitrary(x))),
)

LINEARITHMIC = GrowthClass(
    key="linearithmic",
    label="O(n log n)",
    description=(
        "Combines linear and logarithmic growth, as in efficient comparison sorts such as "
        "merge sort."
    ),
    rank=128,
    active=True,
    domain_min=1.0,
    domain_max=math.log(MAX_FLOAT),
    scaling_cutoff=UNBOUNDED,
    eval_fixed=lambda x: x * math.log(x),
    eval_fixed_to_arbitrary=lambda x: precision.multiply(_d(x), precision.ln(_d(x))),
    eval_arbitrary=lambda x: precision.multiply(x, precision.ln(x)),
)

QUADRATIC = GrowthClass(
    key="quadratic",
    label="O(n^2)",
    description="Grows quadratically with the input size, as with two nested loops.",
    rank=256,
    active=True,
    domain_min=1.0,
    domain_max=math.sqrt(MAX_FLOAT),
    scaling_cutoff=UNBOUNDED,
    eval_fixed=lambda x: x * x,
    eval_fixed_to_arbitrary=lambda x: precision.multiply(_d(x), _d(x)),
    eval_arbitrary=lambda x: precision.multiply(x, x),
)

CUBIC = GrowthClass(
    key="cubic",
    label="O(n^3)",
    description="Grows cubically with the input size, as with three nested loops.",
    rank=512,
    active=True,
    domain_min=1.0,
    domain_max=MAX_FLOAT ** (1.0 / 3.0),
    scaling_cutoff=UNBOUNDED,
    eval_fixed=lambda x: x * x * x,
    eval_fixed_to_arbitrary=lambda x: precision.power(_d(x), Decimal(3)),
    eval_arbitrary=lambda x: precision.power(x, Decimal(3)),
)

POLYNOMIAL = GrowthClass(
    key="polynomial",
    label="O(n^c)",
    description="Grows with a fixed power of the input size (c = 4).",
    rank=1024,
    active=True,
    domain_min=1.0,
    domain_max=MAX_FLOAT**0.25,
    scaling_cutoff=1_000_000,
    eval_fixed=lambda x: math.pow(x, 4),
    eval_fixed_to_arbitrary=lambda x: precision.power(_d(x), Decimal(4)),
    eval_arbitrary=lambda x: precision.power(x, Decimal(4)),
)

EXPONENTIAL = GrowthClass(
    key="exponential",
    label="O(2^n)",
    description=(
        "Doubles with every unit of input size, as in brute-force recursion over "
        "combinatorial choices."
    ),
    rank=2048,
    active=True,
    domain_min=1.0,
    domain_max=1023.0,
    scaling_cutoff=1_000_000,
    eval_fixed=lambda x: math.pow(2.0, x),
    eval_fixed_to_arbitrary=lambda x: precision.exp2(_d(x)),
    eval_arbitrary=precision.exp2,
)

FACTORIAL = GrowthClass(
    key="factorial",
    label="O(n!)",
    description="Grows factorially with the input size, as when enumerating permutations.",
    rank=4096,
    active=True,
    domain_min=1.0,
    domain_max=170.0,
    scaling_cutoff=1_000,
    eval_fixed=lambda x: factorial(int(x)),
    eval_fixed_to_arbitrary=precision.factorial,
    eval_arbitrary=precision.factorial,
)

HYPER_EXPONENTIAL = GrowthClass(
    key="hyper_exponential",
    label="O(n^n)",
    description="Grows as the input size raised to itself.",
    rank=8192,
    active=True,
    domain_min=1.0,
    domain_max=141.0,
    scaling_cutoff=500,
    eval_fixed=lambda x: math.pow(x, x),
    eval_fixed_to_arbitrary=lambda x: precision.power(_d(x), _d(x)),
    eval_arbitrary=lambda x: precision.power(x, x),
)

ALL_CLASSES: tuple[GrowthClass, ...] = (
    UNRATED,
    CONSTANT,
    INVERSE_ACKERMANN,
    LOG_LOG,
    LOG,
    POLYLOGARITHMIC,
    LINEAR,
    N_LOG_STAR_N,
    LINEARITHMIC,
    QUADRATIC,
    CUBIC,
    POLYNOMIAL,
    EXPONENTIAL,
    FACTORIAL,
    HYPER_EXPONENTIAL,
)


@functools.cache
def ordered_classes() -> tuple[GrowthClass, ...]:
    return tuple(sorted((c for c in ALL_CLASSES if c.active), key=lambda c: c.rank))


def find_class(name: str) -> GrowthClass | None:
    wanted = name.strip().lower()
    for growth_class in ALL_CLASSES:
        if wanted in {growth_class.key, growth_class.label.lower()}:
            return growth_class
    return None
