from __future__ import annotations

import logging
import statistics
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from growthfit.classify.catalog import GrowthClass
from growthfit.classify.classifier import Classifier

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BenchmarkResult:
    size: int
    samples: list[float]

    @property
    def median(self) -> float:
        return statistics.median(self.samples)


def _default_input(size: int) -> list[int]:
    return list(range(size))


def _measure_simple(func: Callable[[], Any], warmups: int, iterations: int) -> list[float]:
    for _ in range(max(0, warmups)):
        func()
    samples: list[float] = []
    for _ in range(max(1, iterations)):
        start = time.perf_counter()
        func()
        samples.append(time.perf_counter() - start)
    return samples


def run_benchmark(
    func: Callable[[Any], Any],
    sizes: Iterable[int],
    make_input: Callable[[int], Any] | None = None,
    iterations: int = 5,
    warmups: int = 1,
) -> list[BenchmarkResult]:
    build = make_input or _default_input
    results: list[BenchmarkResult] = []
    for size in sizes:
        payload = build(size)

        def run_case(local_payload: Any = payload) -> Any:
            return func(local_payload)

        samples = _measure_simple(run_case, warmups=warmups, iterations=iterations)
        log.debug("size=%d median=%.6fs over %d samples", size, statistics.median(samples), len(samples))
        results.append(BenchmarkResult(size=size, samples=samples))
    return results


def classify_callable(
    func: Callable[[Any], Any],
    sizes: Iterable[int],
    make_input: Callable[[int], Any] | None = None,
    iterations: int = 5,
    warmups: int = 1,
    classes: Iterable[GrowthClass] | None = None,
    workers: int = 0,
) -> Classifier:
    classifier = Classifier(classes=classes, workers=workers)
    for result in run_benchmark(func, sizes, make_input=make_input, iterations=iterations, warmups=warmups):
        classifier.record_benchmark(result)
    classifier.classify()
    return classifier
