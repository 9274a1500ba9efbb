from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from typing import Any

from growthfit.classify.classifier import Classifier

SCHEMA_VERSION = 1


@dataclass(frozen=True)
class RatingReport:
    key: str
    label: str
    rank: int
    score: float
    best: bool = False


@dataclass(frozen=True)
class ClassFailureReport:
    key: str
    label: str
    error: str


@dataclass(frozen=True)
class ClassificationReport:
    schema_version: int
    generated_at: str
    source: str
    data_points: int
    best_key: str
    best_label: str
    best_score: float
    ratings: list[RatingReport] = field(default_factory=list)
    errors: list[ClassFailureReport] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def build_report(classifier: Classifier, source: str = "") -> ClassificationReport:
    best = classifier.best
    ratings = [
        RatingReport(
            key=r.growth_class.key,
            label=r.growth_class.label,
            rank=r.growth_class.rank,
            score=r.score,
            best=r is best,
        )
        for r in classifier.all_ratings() or []
    ]
    errors = [
        ClassFailureReport(key=f.growth_class.key, label=f.growth_class.label, error=str(f.error))
        for f in classifier.errors
    ]
    return ClassificationReport(
        schema_version=SCHEMA_VERSION,
        generated_at=time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        source=source,
        data_points=classifier.data_points,
        best_key=best.growth_class.key,
        best_label=best.growth_class.label,
        best_score=best.score,
        ratings=ratings,
        errors=errors,
    )
