"""Ordering of credential records."""

from functools import cmp_to_key
from typing import Iterable

from .models import Record


def _cmp(x: str, y: str) -> int:
    return (x > y) - (x < y)


def compare_records(a: Record, b: Record) -> int:
    """
    Three-way comparison of two records.

    Records are ordered by class first. Internet passwords are then keyed on
    (account, location, auth_type), every other class on (account, location).
    A result of 0 means both rows describe the same credential, whatever
    password, label or timestamps they carry.
    """
    if a.class_ != b.class_:
        return _cmp(a.class_, b.class_)

    if a.class_ == "inet":
        keys = ("account", "location", "auth_type")
    else:
        keys = ("account", "location")

    for key in keys:
        result = _cmp(getattr(a, key), getattr(b, key))
        if result:
            return result
    return 0


record_sort_key = cmp_to_key(compare_records)


def sort_records(records: Iterable[Record]) -> list[Record]:
    """Return a new list sorted by compare_records, keeping input order of ties."""
    return sorted(records, key=record_sort_key)
