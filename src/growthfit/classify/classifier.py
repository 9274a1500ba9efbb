from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from growthfit.classify.catalog import DEFAULT_RATING, UNRATED, GrowthClass, Rating, ordered_classes
from growthfit.classify.rating import MIN_DATA_POINTS, rate
from growthfit.errors import (
    GrowthFitError,
    InsufficientDataError,
    LengthMismatchError,
    PrecisionUnsupportedError,
)
from growthfit.util.precision import to_arbitrary

if TYPE_CHECKING:
    from growthfit.bench.runner import BenchmarkResult

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassFailure:
    growth_class: GrowthClass
    error: GrowthFitError


@dataclass(frozen=True)
class _Outcome:
    growth_class: GrowthClass
    rating: Rating | None
    error: GrowthFitError | None


def _mean(values: Sequence[float]) -> float:
    if not values:
        return math.nan
    return math.fsum(values) / len(values)


def _rate_one(growth_class: GrowthClass, sizes: list[int], values: list[float]) -> _Outcome:
    try:
        return _Outcome(growth_class, rate(growth_class, sizes, values), None)
    except GrowthFitError as exc:
        return _Outcome(growth_class, None, exc)


class Classifier:
    """Collects (size, value) samples and picks the best-fitting growth class.

    Several values recorded for one size are averaged. ``classify`` can be
    called again after more samples arrive; each pass replaces the previous
    results. Not thread-safe: serialize recording and classifying.
    """

    def __init__(
        self,
        classes: Iterable[GrowthClass] | None = None,
        workers: int = 0,
    ) -> None:
        if classes is None:
            self._classes = ordered_classes()
        else:
            # Entries without evaluators (the unrated sentinel) cannot be scored.
            self._classes = tuple(
                sorted((c for c in classes if c.eval_fixed is not None), key=lambda c: c.rank)
            )
        self._workers = max(0, int(workers))
        self._data: dict[int, list[float]] = {}
        self._data_arbitrary: dict[int, list[Decimal]] = {}
        self._classified = False
        self._best: Rating = DEFAULT_RATING
        self._ratings: list[Rating] = []
        self._errors: list[ClassFailure] = []

    @property
    def classes(self) -> tuple[GrowthClass, ...]:
        return self._classes

    def record_sample(self, size: int, *values: float) -> None:
        if size <= 0:
            return
        self._data.setdefault(size, []).extend(float(v) for v in values)

    def record_samples(self, sizes: Sequence[int], values: Sequence[Sequence[float]]) -> None:
        # Not atomic: pairs before a failure stay recorded.
        if len(sizes) != len(values):
            raise LengthMismatchError(
                f"sizes and corresponding values must be the same length ({len(sizes)} != {len(values)})"
            )
        for size, size_values in zip(sizes, values, strict=True):
            self.record_sample(size, *size_values)

    def record_sample_arbitrary(self, size: int, *values: Decimal | float | int | str) -> None:
        if size <= 0:
            return
        self._data_arbitrary.setdefault(size, []).extend(to_arbitrary(v) for v in values)

    def record_samples_arbitrary(
        self,
        sizes: Sequence[int],
        values: Sequence[Sequence[Decimal | float | int | str]],
    ) -> None:
        if len(sizes) != len(values):
            raise LengthMismatchError(
                f"sizes and corresponding values must be the same length ({len(sizes)} != {len(values)})"
            )
        for size, size_values in zip(sizes, values, strict=True):
            self.record_sample_arbitrary(size, *size_values)

    def record_benchmark(self, result: BenchmarkResult) -> None:
        self.record_sample(result.size, *result.samples)

    def sample_sizes(self) -> list[int]:
        return sorted(size for size, values in self._data.items() if values)

    def samples(self) -> dict[int, list[float]]:
        return {size: list(values) for size, values in self._data.items()}

    @property
    def data_points(self) -> int:
        return sum(1 for values in self._data.values() if values)

    def _dataset(self) -> tuple[list[int], list[float]]:
        sizes = sorted(size for size, values in self._data.items() if values)
        return sizes, [_mean(self._data[size]) for size in sizes]

    def _rate_all(self, candidates: list[GrowthClass], sizes: list[int], values: list[float]) -> list[_Outcome]:
        if self._workers > 0 and len(candidates) > 1:
            with ThreadPoolExecutor(max_workers=self._workers) as pool:
                # map() yields in submission order, so ties resolve by rank.
                return list(pool.map(lambda c: _rate_one(c, sizes, values), candidates))
        return [_rate_one(c, sizes, values) for c in candidates]

    def classify(self) -> Rating:
        sizes, values = self._dataset()
        if len(sizes) < MIN_DATA_POINTS:
            raise InsufficientDataError(f"not enough data points ({len(sizes)}) to classify")
        if self._data_arbitrary:
            raise PrecisionUnsupportedError("arbitrary-precision samples are not supported by classify() yet")

        largest = sizes[-1]
        candidates: list[GrowthClass] = []
        for growth_class in self._classes:
            if largest > growth_class.scaling_cutoff:
                log.debug(
                    "Skipping %s: largest size %d exceeds its cutoff %d",
                    growth_class.label,
                    largest,
                    growth_class.scaling_cutoff,
                )
                continue
            candidates.append(growth_class)

        best = Rating(growth_class=UNRATED, score=-1.0)
        ratings: list[Rating] = []
        errors: list[ClassFailure] = []
        for outcome in self._rate_all(candidates, sizes, values):
            if outcome.error is not None:
                log.warning("Rating %s failed: %s", outcome.growth_class.label, outcome.error)
                errors.append(ClassFailure(outcome.growth_class, outcome.error))
                continue
            rating = outcome.rating
            ratings.append(rating)
            if rating.score > best.score:
                best = rating

        ratings.sort(key=lambda r: r.growth_class.rank)
        self._best = best
        self._ratings = ratings
        self._errors = errors
        self._classified = True
        log.debug("Classified %d sizes as %s (%.6f)", len(sizes), best.growth_class.label, best.score)
        return best

    @property
    def classified(self) -> bool:
        return self._classified

    @property
    def best(self) -> Rating:
        return self._best

    @property
    def errors(self) -> list[ClassFailure]:
        return list(self._errors)

    @property
    def last_error(self) -> GrowthFitError | None:
        if not self._errors:
            return None
        return self._errors[-1].error

    def all_ratings(self) -> list[Rating] | None:
        if not self._classified:
            return None
        return list(self._ratings)

    def summary(self) -> str:
        if not self._classified:
            return "Not classified yet"
        lines = ["", f"Growth:  {self._best.growth_class.label}", f"Num data points: {self.data_points}"]
        for rating in self._ratings:
            marker = " *" if rating is self._best else ""
            lines.append(f"{rating.growth_class.label:>15}:   {rating.score:0.8f}{marker}")
        return "\n".join(lines) + "\n"
