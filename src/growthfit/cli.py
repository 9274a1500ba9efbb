from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path

import yaml

from growthfit import __version__
from growthfit.classify.catalog import ALL_CLASSES, GrowthClass, find_class, ordered_classes
from growthfit.classify.classifier import Classifier
from growthfit.config.loader import CONFIG_FILENAME, load_config
from growthfit.config.schema import GrowthFitConfig
from growthfit.config.templates import DEFAULT_CONFIG
from growthfit.config.validate import validate_config_paths
from growthfit.data.csv_source import load_csv
from growthfit.errors import GrowthFitError
from growthfit.report.format_json import write_json
from growthfit.report.format_md import to_markdown
from growthfit.report.models import ClassificationReport, build_report
from growthfit.util.logging import setup_logging

log = logging.getLogger(__name__)


def _resolve_classes(cfg: GrowthFitConfig) -> tuple[GrowthClass, ...]:
    if cfg.classes:
        selected: list[GrowthClass] = []
        for name in cfg.classes:
            growth_class = find_class(name)
            if growth_class is None:
                raise GrowthFitError(f"unknown growth class: {name}")
            if growth_class not in selected:
                selected.append(growth_class)
    else:
        selected = list(ordered_classes())
    excluded: set[str] = set()
    for name in cfg.exclude_classes:
        growth_class = find_class(name)
        if growth_class is None:
            raise GrowthFitError(f"unknown growth class: {name}")
        excluded.add(growth_class.key)
    return tuple(c for c in selected if c.key not in excluded)


def _apply_cli_overrides(cfg: GrowthFitConfig, args: argparse.Namespace) -> GrowthFitConfig:
    changes: dict[str, object] = {}
    if args.header is not None:
        changes["header"] = args.header
    if args.delimiter is not None:
        changes["delimiter"] = args.delimiter
    if args.classes:
        changes["classes"] = list(args.classes)
    if args.exclude_classes:
        changes["exclude_classes"] = [*cfg.exclude_classes, *args.exclude_classes]
    if args.parallel_workers is not None:
        changes["parallel_workers"] = args.parallel_workers
    if args.json_path is not None:
        changes["json_path"] = args.json_path
    if args.markdown_path is not None:
        changes["markdown_path"] = args.markdown_path
    if args.fail_under is not None:
        changes["fail_under"] = args.fail_under
    if args.expect is not None:
        changes["expect"] = args.expect
    return dataclasses.replace(cfg, **changes)


def _evaluate_gating(cfg: GrowthFitConfig, report: ClassificationReport) -> int:
    reasons: list[str] = []
    if cfg.fail_under is not None and report.best_score < cfg.fail_under:
        reasons.append(f"best score {report.best_score:.6f} is below {cfg.fail_under}")
    if cfg.expect:
        expected = find_class(cfg.expect)
        expected_key = expected.key if expected is not None else cfg.expect
        if report.best_key != expected_key:
            reasons.append(f"expected {expected_key} but classified as {report.best_key}")
    for reason in reasons:
        log.error("Gating failed: %s", reason)
    return 1 if reasons else 0


def cmd_classify(args: argparse.Namespace) -> int:
    root = Path.cwd()
    config_paths = [Path(p) for p in args.config] if args.config else None
    cfg = _apply_cli_overrides(load_config(root, config_paths), args)
    if len(cfg.delimiter) != 1:
        log.error("Delimiter must be a single character, got %r", cfg.delimiter)
        return 1

    try:
        classifier = Classifier(classes=_resolve_classes(cfg), workers=cfg.parallel_workers)
        for csv_path in args.csv:
            load_csv(classifier, Path(csv_path), header=cfg.header, delimiter=cfg.delimiter)
        classifier.classify()
    except GrowthFitError as exc:
        log.error("%s", exc)
        return 1

    print(classifier.summary())
    report = build_report(classifier, source=", ".join(args.csv))

    if cfg.json_path:
        json_path = Path(cfg.json_path)
        write_json(report, json_path)
        log.info("Wrote JSON report to %s", json_path)
    if cfg.markdown_path:
        md_path = Path(cfg.markdown_path)
        md_path.parent.mkdir(parents=True, exist_ok=True)
        md_path.write_text(to_markdown(report), encoding="utf-8")
        log.info("Wrote Markdown report to %s", md_path)

    return _evaluate_gating(cfg, report)


def cmd_classes(args: argparse.Namespace) -> int:
    for growth_class in sorted(ALL_CLASSES, key=lambda c: c.rank):
        state = "active" if growth_class.active else "inactive"
        print(f"{growth_class.key:<20} {growth_class.label:<15} {growth_class.rank:>5}  {state}")
    return 0


def cmd_init(args: argparse.Namespace) -> int:
    root = Path(args.path).resolve()
    target = Path(args.output) if args.output else root / CONFIG_FILENAME
    if not target.is_absolute():
        target = root / target
    if target.exists() and not args.force:
        log.error("Config %s already exists. Use --force to overwrite.", target)
        return 1
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(DEFAULT_CONFIG, encoding="utf-8")
    log.info("Wrote config to %s", target)
    return 0


def _resolve_config_paths(root: Path, config_args: list[str] | None) -> list[Path]:
    if not config_args:
        return [root / CONFIG_FILENAME]
    out: list[Path] = []
    for p in config_args:
        path = Path(p)
        if not path.is_absolute():
            path = root / path
        out.append(path)
    return out


def cmd_config_show(args: argparse.Namespace) -> int:
    root = Path(args.path).resolve()
    config_paths = [Path(p) for p in args.config] if args.config else None
    cfg = load_config(root, config_paths)
    text = yaml.safe_dump(dataclasses.asdict(cfg), sort_keys=False)
    if args.output:
        out_path = Path(args.output)
        if not out_path.is_absolute():
            out_path = root / out_path
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
    else:
        print(text)
    return 0


def cmd_config_validate(args: argparse.Namespace) -> int:
    root = Path(args.path).resolve()
    config_paths = _resolve_config_paths(root, args.config)
    if not args.config and not config_paths[0].exists():
        log.error("Config %s not found.", config_paths[0])
        return 1
    errors = validate_config_paths(config_paths)
    if errors:
        for err in errors:
            log.error("%s", err)
        return 1
    log.info("Config valid.")
    return 0


def _add_classify_args(a: argparse.ArgumentParser) -> None:
    a.add_argument("csv", nargs="+", help="CSV file(s) with size,value records")
    a.add_argument(
        "--config",
        action="append",
        default=None,
        help="Config file path (repeatable, relative to the working directory or absolute)",
    )
    a.add_argument(
        "--header",
        dest="header",
        action="store_true",
        default=None,
        help="Skip the first record of each CSV file",
    )
    a.add_argument("--no-header", dest="header", action="store_false", help="CSV files have no header")
    a.add_argument("--delimiter", default=None, help="CSV field delimiter (default: ,)")
    a.add_argument(
        "--class",
        dest="classes",
        action="append",
        default=None,
        help="Rate only this growth class (repeatable, key or label)",
    )
    a.add_argument(
        "--exclude-class",
        dest="exclude_classes",
        action="append",
        default=None,
        help="Do not rate this growth class (repeatable)",
    )
    a.add_argument("--parallel-workers", type=int, default=None, help="Rate classes on N threads (0 = sequential)")
    a.add_argument("--json", dest="json_path", default=None, help="Write a JSON report to this path")
    a.add_argument("--markdown", dest="markdown_path", default=None, help="Write a Markdown report to this path")
    a.add_argument(
        "--fail-under",
        type=float,
        default=None,
        help="Exit 1 when the best score is below this value",
    )
    a.add_argument("--expect", default=None, help="Exit 1 unless this growth class wins")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="growthfit", description="growthfit  Empirical growth-class classifier")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")

    sub = p.add_subparsers(dest="cmd", required=True)

    a = sub.add_parser("classify", help="Classify measurements from CSV files")
    _add_classify_args(a)
    a.set_defaults(func=cmd_classify)

    k = sub.add_parser("classes", help="List the known growth classes")
    k.set_defaults(func=cmd_classes)

    c = sub.add_parser("config", help="Config utilities")
    c_sub = c.add_subparsers(dest="config_cmd", required=True)
    c_show = c_sub.add_parser("show", help="Show merged config")
    c_show.add_argument("path", nargs="?", default=".", help="Project root (default: .)")
    c_show.add_argument(
        "--config",
        action="append",
        default=None,
        help="Config file path (repeatable, relative to the root or absolute)",
    )
    c_show.add_argument("--output", default=None, help="Write output to path instead of stdout")
    c_show.set_defaults(func=cmd_config_show)

    c_validate = c_sub.add_parser("validate", help="Validate config file(s)")
    c_validate.add_argument("path", nargs="?", default=".", help="Project root (default: .)")
    c_validate.add_argument(
        "--config",
        action="append",
        default=None,
        help="Config file path (repeatable, relative to the root or absolute)",
    )
    c_validate.set_defaults(func=cmd_config_validate)

    i = sub.add_parser("init", help="Create a growthfit configuration file")
    i.add_argument("path", nargs="?", default=".", help="Project root (default: .)")
    i.add_argument("--output", default=None, help=f"Output path (default: {CONFIG_FILENAME})")
    i.add_argument("--force", action="store_true", help="Overwrite existing config if present")
    i.set_defaults(func=cmd_init)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(bool(args.verbose))
    return int(args.func(args))
