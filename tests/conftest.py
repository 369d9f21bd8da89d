"""Shared test fixtures."""

import csv
import tempfile
from pathlib import Path

import pytest

from keychain_merger.models import Record

EXPORT_HEADER = [
    "Where", "Account", "Password", "Label", "Comment", "Created", "Modified",
    "Kind", "Type", "Domain", "AuthType", "Class", "Creator",
]


def _make_record(**overrides) -> Record:
    values = {
        "location": "https://example.com",
        "account": "alice",
        "password": "secret",
        "label": "example.com",
        "comment": "",
        "created": "2019-01-01 10:00:00",
        "modified": "2019-06-01 10:00:00",
        "kind": "Internet password",
        "type": "",
        "domain": "",
        "auth_type": "form",
        "class_": "inet",
        "creator": "",
    }
    values.update(overrides)
    return Record(**values)


def _write_csv(path: Path, rows: list[list[str]]) -> Path:
    with open(path, "w", newline="", encoding="utf-8") as f:
        csv.writer(f).writerows(rows)
    return path


def _read_csv(path: Path) -> list[list[str]]:
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def export_header():
    """Header row of an exported keychain CSV file."""
    return list(EXPORT_HEADER)


@pytest.fixture
def make_record():
    """Factory building a record with defaults for the fields not given."""
    return _make_record


@pytest.fixture
def write_csv():
    """Write rows to a CSV file and return its path."""
    return _write_csv


@pytest.fixture
def read_csv():
    """Read all rows of a CSV file."""
    return _read_csv


@pytest.fixture
def sample_records():
    """Two overlapping datasets: one match, one row unique to each side."""
    shared_old = _make_record(password="old-pass", modified="2020-01-01")
    shared_new = _make_record(password="new-pass", modified="2021-01-01")
    only_first = _make_record(account="bob", location="https://bob.example")
    only_second = _make_record(
        account="carol", location="", class_="genp", kind="application password"
    )
    return [shared_old, only_first], [shared_new, only_second]


@pytest.fixture
def sample_csvs(temp_dir, sample_records):
    """Write sample_records to two CSV files."""
    records1, records2 = sample_records
    csv1 = _write_csv(
        temp_dir / "first.csv", [EXPORT_HEADER] + [r.to_row() for r in records1]
    )
    csv2 = _write_csv(
        temp_dir / "second.csv", [EXPORT_HEADER] + [r.to_row() for r in records2]
    )
    return csv1, csv2, temp_dir / "merged.csv"


@pytest.fixture
def latin1_csv(temp_dir):
    """An export saved as Latin-1 instead of UTF-8."""
    row = _make_record(label="Café", comment="Crème brûlée").to_row()
    path = temp_dir / "latin1.csv"
    text = ",".join(EXPORT_HEADER) + "\r\n" + ",".join(row) + "\r\n"
    path.write_bytes(text.encode("latin-1"))
    return path
