from __future__ import annotations

import logging
import random

import pytest

from growthfit.bench.runner import BenchmarkResult
from growthfit.classify.catalog import (
    CONSTANT,
    DEFAULT_RATING,
    EXPONENTIAL,
    FACTORIAL,
    HYPER_EXPONENTIAL,
    LINEAR,
    N_LOG_STAR_N,
    QUADRATIC,
    UNRATED,
    ordered_classes,
)
from growthfit.classify.classifier import Classifier
from growthfit.errors import (
    CorrelationError,
    InsufficientDataError,
    LengthMismatchError,
    PrecisionUnsupportedError,
)


def _linear_classifier(**kwargs) -> Classifier:
    classifier = Classifier(**kwargs)
    for n in [10, 20, 30, 40, 50]:
        classifier.record_sample(n, float(n))
    return classifier


def test_non_positive_sizes_are_ignored() -> None:
    classifier = Classifier()
    classifier.record_sample(0, 5.0)
    classifier.record_sample(-3, 1.0, 2.0)
    classifier.record_sample_arbitrary(0, "1")
    assert classifier.samples() == {}
    assert classifier.sample_sizes() == []


def test_record_samples_pairs_sizes_and_values() -> None:
    classifier = Classifier()
    classifier.record_samples([1, 2], [[1.0, 2.0], [3.0]])
    assert classifier.samples() == {1: [1.0, 2.0], 2: [3.0]}
    with pytest.raises(LengthMismatchError):
        classifier.record_samples([1, 2, 3], [[1.0]])
    with pytest.raises(LengthMismatchError):
        classifier.record_samples_arbitrary([1], [])


def test_classify_needs_three_distinct_sizes() -> None:
    classifier = Classifier()
    classifier.record_sample(10, *[1.0] * 50)
    classifier.record_sample(20, *[2.0] * 50)
    classifier.record_sample(30)
    with pytest.raises(InsufficientDataError) as exc:
        classifier.classify()
    assert exc.value.rating is DEFAULT_RATING
    assert classifier.data_points == 2
    assert classifier.sample_sizes() == [10, 20]
    assert classifier.all_ratings() is None


def test_values_for_one_size_are_averaged() -> None:
    classifier = Classifier(classes=[LINEAR])
    classifier.record_sample(1, 1.0, 2.0, 3.0)
    classifier.record_sample(2, 4.0)
    classifier.record_sample(3, 6.0)
    best = classifier.classify()
    assert best.growth_class is LINEAR
    assert best.score == pytest.approx(1.0)


def test_classify_constant_pattern() -> None:
    classifier = Classifier()
    for n, v in [(100, 1.0), (200, 1.1), (400, 0.9), (800, 1.0), (1600, 1.2)]:
        classifier.record_sample(n, v)
    best = classifier.classify()
    assert best.growth_class is CONSTANT
    assert best.score == 0.9


def test_classify_linear() -> None:
    classifier = _linear_classifier()
    best = classifier.classify()
    assert best.growth_class is LINEAR
    assert best.score == pytest.approx(1.0)
    assert classifier.best is best
    assert classifier.classified


def test_classify_quadratic() -> None:
    classifier = Classifier()
    for n in [10, 20, 30, 40, 50]:
        classifier.record_sample(n, float(n * n))
    assert classifier.classify().growth_class is QUADRATIC


def test_classify_multiple_values_per_size() -> None:
    classifier = Classifier()
    for n in [10, 20, 30, 40, 50]:
        classifier.record_sample(n, n - 1.0, float(n), n + 1.0)
    assert classifier.classify().growth_class is LINEAR


def test_classify_rejects_arbitrary_samples() -> None:
    classifier = _linear_classifier()
    classifier.record_sample_arbitrary(60, "60")
    with pytest.raises(PrecisionUnsupportedError):
        classifier.classify()


def test_classify_again_after_more_data() -> None:
    classifier = Classifier()
    for n in [10, 20, 30]:
        classifier.record_sample(n, float(n))
    assert classifier.classify().growth_class is LINEAR
    classifier.record_sample(40, 40.0)
    classifier.record_sample(50, 50.0)
    assert classifier.classify().growth_class is LINEAR
    assert "Num data points: 5" in classifier.summary()


def test_scaling_cutoff_skips_expensive_classes(caplog: pytest.LogCaptureFixture) -> None:
    classifier = Classifier()
    for n in [1000, 2000, 4000, 8000, 16000]:
        classifier.record_sample(n, n * 0.001)
    with caplog.at_level(logging.DEBUG, logger="growthfit.classify.classifier"):
        best = classifier.classify()
    assert best.growth_class is LINEAR
    rated = {r.growth_class for r in classifier.all_ratings()}
    assert FACTORIAL not in rated
    assert HYPER_EXPONENTIAL not in rated
    assert EXPONENTIAL in rated
    assert "Skipping O(n!)" in caplog.text


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_insertion_order_does_not_matter(seed: int) -> None:
    pairs = [(n, float(n * n)) for n in [5, 10, 15, 20, 25, 30]]
    reference = Classifier()
    for n, v in pairs:
        reference.record_sample(n, v)
    reference.classify()

    shuffled = list(pairs)
    random.Random(seed).shuffle(shuffled)
    classifier = Classifier()
    for n, v in reversed(shuffled):
        classifier.record_sample(n, v)
    best = classifier.classify()

    assert best.growth_class is QUADRATIC
    assert [r.score for r in classifier.all_ratings()] == [r.score for r in reference.all_ratings()]


def test_end_to_end_linear_timings() -> None:
    classifier = Classifier()
    for n, v in [(100, 1250.5), (200, 2501.2), (400, 5002.8), (800, 10008.1)]:
        classifier.record_sample(n, v)
    best = classifier.classify()
    assert best.growth_class is LINEAR
    for rating in classifier.all_ratings():
        if rating.growth_class in (LINEAR, N_LOG_STAR_N):
            # log* n is 3 for every size here, so n log* n ties with n.
            assert rating.score <= best.score
        else:
            assert rating.score < best.score


def test_failed_classes_are_collected() -> None:
    classifier = Classifier()
    for n in [1, 2, 3]:
        classifier.record_sample(n, 5.0)
    best = classifier.classify()
    assert best.growth_class is CONSTANT
    assert classifier.all_ratings() == [best]
    failed = {f.growth_class.key for f in classifier.errors}
    assert failed == {c.key for c in ordered_classes() if c is not CONSTANT}
    assert isinstance(classifier.last_error, CorrelationError)


def test_ratings_sorted_by_rank() -> None:
    classifier = _linear_classifier()
    classifier.classify()
    ranks = [r.growth_class.rank for r in classifier.all_ratings()]
    assert ranks == sorted(ranks)
    assert classifier.errors == []
    assert classifier.last_error is None


def test_parallel_workers_match_sequential() -> None:
    sequential = _linear_classifier()
    parallel = _linear_classifier(workers=4)
    assert parallel.classify() == sequential.classify()
    assert parallel.all_ratings() == sequential.all_ratings()


def test_class_subset_is_rank_sorted_and_drops_unrated() -> None:
    classifier = Classifier(classes=[QUADRATIC, LINEAR, UNRATED])
    assert classifier.classes == (LINEAR, QUADRATIC)


def test_record_benchmark() -> None:
    classifier = Classifier()
    classifier.record_benchmark(BenchmarkResult(size=8, samples=[0.1, 0.3]))
    assert classifier.samples() == {8: [0.1, 0.3]}


def test_summary() -> None:
    classifier = _linear_classifier()
    assert classifier.summary() == "Not classified yet"
    classifier.classify()
    text = classifier.summary()
    assert text.startswith("\nGrowth:  O(n)\nNum data points: 5\n")
    assert text.count(" *") == 1
    assert "           O(n):   1.00000000 *" in text
