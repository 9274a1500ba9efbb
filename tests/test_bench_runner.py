from __future__ import annotations

import pytest

from growthfit.bench import runner
from growthfit.bench.runner import BenchmarkResult, classify_callable, run_benchmark
from growthfit.classify.catalog import LINEAR


def test_run_benchmark_counts_calls() -> None:
    calls: list[int] = []

    def func(xs: list[int]) -> None:
        calls.append(len(xs))

    results = run_benchmark(func, [3, 5], iterations=4, warmups=2)

    assert [r.size for r in results] == [3, 5]
    assert all(len(r.samples) == 4 for r in results)
    assert all(s >= 0 for r in results for s in r.samples)
    assert calls == [3] * 6 + [5] * 6


def test_run_benchmark_custom_input() -> None:
    seen: list[str] = []
    run_benchmark(seen.append, [2, 4], make_input=lambda n: "x" * n, iterations=1, warmups=0)
    assert seen == ["xx", "xxxx"]


def test_benchmark_result_median() -> None:
    assert BenchmarkResult(size=1, samples=[3.0, 1.0, 2.0]).median == 2.0


def test_classify_callable_with_fake_clock(monkeypatch: pytest.MonkeyPatch) -> None:
    clock = [0.0]

    def fake_perf_counter() -> float:
        return clock[0]

    def linear_work(xs: list[int]) -> None:
        clock[0] += len(xs) * 1e-6

    monkeypatch.setattr(runner.time, "perf_counter", fake_perf_counter)
    classifier = classify_callable(linear_work, [100, 200, 400, 800, 1600], iterations=3, warmups=1)

    assert classifier.classified
    assert classifier.best.growth_class is LINEAR
    assert classifier.sample_sizes() == [100, 200, 400, 800, 1600]
