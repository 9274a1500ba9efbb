from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from growthfit.classify.catalog import find_class

KNOWN_KEYS = {
    "header",
    "delimiter",
    "classes",
    "exclude_classes",
    "parallel_workers",
    "json_path",
    "markdown_path",
    "fail_under",
    "expect",
}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _validate_class_list(raw: dict[str, Any], key: str, errors: list[str]) -> None:
    if key not in raw:
        return
    value = raw.get(key)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        errors.append(f"{key} must be a list of strings")
        return
    unknown = [name for name in value if find_class(name) is None]
    if unknown:
        errors.append(f"{key} contains unknown growth classes: {', '.join(unknown)}")


def _validate_optional_str(raw: dict[str, Any], key: str, errors: list[str]) -> None:
    if key not in raw:
        return
    value = raw.get(key)
    if value is None:
        return
    if not isinstance(value, str):
        errors.append(f"{key} must be a string")


def validate_raw_config(raw: dict[str, Any]) -> list[str]:
    errors: list[str] = []
    for key in raw.keys():
        if key not in KNOWN_KEYS:
            errors.append(f"Unknown key: {key}")

    if "header" in raw and raw.get("header") is not None and not isinstance(raw.get("header"), bool):
        errors.append("header must be a boolean")

    if "delimiter" in raw:
        delimiter = raw.get("delimiter")
        if not isinstance(delimiter, str) or len(delimiter) != 1:
            errors.append("delimiter must be a single character")

    _validate_class_list(raw, "classes", errors)
    _validate_class_list(raw, "exclude_classes", errors)

    if "parallel_workers" in raw and raw.get("parallel_workers") is not None:
        workers = raw.get("parallel_workers")
        if not _is_int(workers):
            errors.append("parallel_workers must be an integer")
        elif workers < 0:
            errors.append("parallel_workers must be >= 0")

    _validate_optional_str(raw, "json_path", errors)
    _validate_optional_str(raw, "markdown_path", errors)

    if "fail_under" in raw and raw.get("fail_under") is not None and not _is_number(raw.get("fail_under")):
        errors.append("fail_under must be a number")

    if "expect" in raw and raw.get("expect") is not None:
        expect = raw.get("expect")
        if not isinstance(expect, str):
            errors.append("expect must be a string")
        elif find_class(expect) is None:
            errors.append(f"expect names an unknown growth class: {expect}")

    return errors


def validate_config_path(path: Path) -> list[str]:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except Exception as exc:
        return [f"{path}: failed to read ({exc})"]
    if not isinstance(raw, dict):
        return [f"{path}: config must be a mapping"]
    errors = validate_raw_config(raw)
    return [f"{path}: {err}" for err in errors]


def validate_config_paths(paths: Iterable[Path]) -> list[str]:
    errors: list[str] = []
    for path in paths:
        if not path.exists():
            errors.append(f"{path}: file not found")
            continue
        errors.extend(validate_config_path(path))
    return errors
