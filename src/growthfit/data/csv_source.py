from __future__ import annotations

import csv
import logging
from pathlib import Path

from growthfit.classify.classifier import Classifier
from growthfit.errors import DataSourceError

log = logging.getLogger(__name__)


def read_csv(path: Path | str, header: bool = False, delimiter: str = ",") -> tuple[list[int], list[float]]:
    """Read (size, value) pairs from the first two columns of a CSV file.

    Extra columns are ignored, blank lines skipped and rows with a
    non-positive size dropped.
    """
    path = Path(path)
    try:
        with path.open(encoding="utf-8", newline="") as fh:
            records = [row for row in csv.reader(fh, delimiter=delimiter) if any(cell.strip() for cell in row)]
    except OSError as exc:
        raise DataSourceError(f"failed to read {path} ({exc})") from exc
    except csv.Error as exc:
        raise DataSourceError(f"malformed CSV in {path} ({exc})") from exc

    if not records:
        raise DataSourceError(f"no records found in file {path}")
    if header:
        records = records[1:]

    sizes: list[int] = []
    values: list[float] = []
    for idx, record in enumerate(records):
        if len(record) < 2:
            raise DataSourceError(f"not enough columns ({len(record)}) for record {idx}")
        try:
            size = int(record[0].strip())
        except ValueError as exc:
            raise DataSourceError(f"invalid size {record[0]!r} in record {idx}") from exc
        try:
            value = float(record[1].strip())
        except ValueError as exc:
            raise DataSourceError(f"invalid value {record[1]!r} in record {idx}") from exc
        if size <= 0:
            log.debug("Skipping record %d of %s: non-positive size %d", idx, path, size)
            continue
        sizes.append(size)
        values.append(value)
    return sizes, values


def load_csv(classifier: Classifier, path: Path | str, header: bool = False, delimiter: str = ",") -> int:
    sizes, values = read_csv(path, header=header, delimiter=delimiter)
    for size, value in zip(sizes, values, strict=True):
        classifier.record_sample(size, value)
    log.info("Loaded %d samples from %s", len(sizes), path)
    return len(sizes)
