from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GrowthFitConfig:
    header: bool = False
    delimiter: str = ","
    classes: list[str] = field(default_factory=list)
    exclude_classes: list[str] = field(default_factory=list)
    parallel_workers: int = 0
    json_path: str | None = None
    markdown_path: str | None = None
    fail_under: float | None = None
    expect: str | None = None
