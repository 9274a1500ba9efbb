from __future__ import annotations

import json
from pathlib import Path

from .models import SCHEMA_VERSION, ClassFailureReport, ClassificationReport, RatingReport


def write_json(report: ClassificationReport, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report.to_dict(), indent=2), encoding="utf-8")


def read_json(path: Path) -> ClassificationReport:
    raw = json.loads(path.read_text(encoding="utf-8"))
    ratings = []
    for r in raw.get("ratings", []):
        ratings.append(
            RatingReport(
                key=str(r.get("key", "")),
                label=str(r.get("label", "")),
                rank=int(r.get("rank", 0)),
                score=float(r.get("score", 0.0)),
                best=bool(r.get("best", False)),
            )
        )
    errors = []
    for e in raw.get("errors", []):
        errors.append(
            ClassFailureReport(
                key=str(e.get("key", "")),
                label=str(e.get("label", "")),
                error=str(e.get("error", "")),
            )
        )
    return ClassificationReport(
        schema_version=int(raw.get("schema_version", SCHEMA_VERSION)),
        generated_at=str(raw.get("generated_at", "")),
        source=str(raw.get("source", "")),
        data_points=int(raw.get("data_points", 0)),
        best_key=str(raw.get("best_key", "")),
        best_label=str(raw.get("best_label", "")),
        best_score=float(raw.get("best_score", 0.0)),
        ratings=ratings,
        errors=errors,
    )
