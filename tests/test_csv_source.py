from __future__ import annotations

from pathlib import Path

import pytest

from growthfit.classify.catalog import LINEAR
from growthfit.classify.classifier import Classifier
from growthfit.data.csv_source import load_csv, read_csv
from growthfit.errors import DataSourceError


def _write(tmp_path: Path, text: str, name: str = "data.csv") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_read_csv_basic(tmp_path: Path) -> None:
    path = _write(tmp_path, "100,1250.5\n200, 2501.2 ,extra\n\n 400 ,5002.8\n")
    sizes, values = read_csv(path)
    assert sizes == [100, 200, 400]
    assert values == [1250.5, 2501.2, 5002.8]


def test_read_csv_header_and_delimiter(tmp_path: Path) -> None:
    path = _write(tmp_path, "n;ns\n1;-2.5\n2;3\n")
    sizes, values = read_csv(path, header=True, delimiter=";")
    assert sizes == [1, 2]
    assert values == [-2.5, 3.0]


def test_read_csv_skips_non_positive_sizes(tmp_path: Path) -> None:
    path = _write(tmp_path, "0,1\n-5,2\n3,4\n")
    assert read_csv(path) == ([3], [4.0])


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("", "no records"),
        ("1,2\n3\n", r"not enough columns \(1\) for record 1"),
        ("1.5,2\n", "invalid size"),
        ("1,abc\n", "invalid value"),
    ],
)
def test_read_csv_errors(tmp_path: Path, text: str, message: str) -> None:
    path = _write(tmp_path, text)
    with pytest.raises(DataSourceError, match=message):
        read_csv(path)


def test_read_csv_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DataSourceError):
        read_csv(tmp_path / "missing.csv")


def test_load_csv_records_samples(tmp_path: Path) -> None:
    path = _write(tmp_path, "10,10\n20,20\n30,30\n40,40\n10,10\n")
    classifier = Classifier()
    assert load_csv(classifier, path) == 5
    assert classifier.samples() == {10: [10.0, 10.0], 20: [20.0], 30: [30.0], 40: [40.0]}
    assert classifier.classify().growth_class is LINEAR


def test_load_csv_is_all_or_nothing(tmp_path: Path) -> None:
    path = _write(tmp_path, "10,10\n20,20\n30,oops\n")
    classifier = Classifier()
    with pytest.raises(DataSourceError):
        load_csv(classifier, path)
    assert classifier.samples() == {}
