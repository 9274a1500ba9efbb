from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from .schema import GrowthFitConfig

log = logging.getLogger(__name__)

CONFIG_FILENAME = ".growthfit.yml"


def _load_raw_config(path: Path) -> dict[str, Any]:
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except Exception as e:
        log.warning("Failed to load %s (%s). Skipping.", path, e)
        return {}


def _get_list(raw: dict[str, Any], key: str) -> list[str] | None:
    if key not in raw:
        return None
    v = raw.get(key)
    if isinstance(v, list):
        return [str(x) for x in v]
    return None


def _get_optional_int(raw: dict[str, Any], key: str) -> int | None:
    if key not in raw:
        return None
    v = raw.get(key)
    if v is None:
        return None
    try:
        return int(v)
    except (TypeError, ValueError):
        return None


def _get_optional_float(raw: dict[str, Any], key: str) -> float | None:
    if key not in raw:
        return None
    v = raw.get(key)
    if v is None:
        return None
    try:
        return float(v)
    except (TypeError, ValueError):
        return None


def _get_optional_str(raw: dict[str, Any], key: str) -> str | None:
    if key not in raw:
        return None
    v = raw.get(key)
    if v is None:
        return None
    return str(v)


def _get_bool(raw: dict[str, Any], key: str, default: bool) -> bool:
    if key not in raw:
        return default
    v = raw.get(key)
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    if isinstance(v, str):
        if v.strip().lower() in {"true", "yes", "1", "on"}:
            return True
        if v.strip().lower() in {"false", "no", "0", "off"}:
            return False
    return default


def _merge_config(base: GrowthFitConfig, raw: dict[str, Any]) -> GrowthFitConfig:
    header = _get_bool(raw, "header", base.header)
    delimiter = _get_optional_str(raw, "delimiter")
    if delimiter is None:
        delimiter = base.delimiter

    classes = base.classes
    raw_classes = _get_list(raw, "classes")
    if raw_classes is not None:
        classes = [*classes, *raw_classes]
    exclude_classes = base.exclude_classes
    raw_exclude_classes = _get_list(raw, "exclude_classes")
    if raw_exclude_classes is not None:
        exclude_classes = [*exclude_classes, *raw_exclude_classes]

    parallel_workers = _get_optional_int(raw, "parallel_workers")
    if parallel_workers is None:
        parallel_workers = base.parallel_workers
    json_path = _get_optional_str(raw, "json_path")
    if json_path is None:
        json_path = base.json_path
    markdown_path = _get_optional_str(raw, "markdown_path")
    if markdown_path is None:
        markdown_path = base.markdown_path
    fail_under = _get_optional_float(raw, "fail_under")
    if fail_under is None:
        fail_under = base.fail_under
    expect = _get_optional_str(raw, "expect")
    if expect is None:
        expect = base.expect

    return GrowthFitConfig(
        header=header,
        delimiter=delimiter,
        classes=classes,
        exclude_classes=exclude_classes,
        parallel_workers=parallel_workers,
        json_path=json_path,
        markdown_path=markdown_path,
        fail_under=fail_under,
        expect=expect,
    )


def _resolve_config_paths(root: Path, config_paths: Iterable[Path] | None) -> list[Path]:
    if config_paths is None:
        return [root / CONFIG_FILENAME]
    resolved: list[Path] = []
    for path in config_paths:
        p = path
        if not p.is_absolute():
            p = root / p
        resolved.append(p)
    return resolved


def load_config(root: Path, config_paths: Iterable[Path] | None = None) -> GrowthFitConfig:
    paths = _resolve_config_paths(root, config_paths)
    if config_paths is None and not paths[0].exists():
        return GrowthFitConfig()

    cfg = GrowthFitConfig()
    for path in paths:
        if not path.exists():
            log.warning("Config %s not found; skipping.", path)
            continue
        raw = _load_raw_config(path)
        if not isinstance(raw, dict):
            log.warning("Config %s is not a mapping; skipping.", path)
            continue
        cfg = _merge_config(cfg, raw)
    return cfg
