"""Tests for keychain_merger.models module."""

import pytest

from keychain_merger.models import FIELDS, Choice, ConflictPolicy, MergeStats, Record


class TestConflictPolicy:
    """Tests for ConflictPolicy enum."""

    def test_newest_value(self):
        assert ConflictPolicy.NEWEST.value == "newest"

    def test_interactive_policies(self):
        assert ConflictPolicy.INTERACTIVE.is_interactive
        assert ConflictPolicy.ASK_IF_AMBIGUOUS.is_interactive

    def test_automatic_policies(self):
        assert not ConflictPolicy.NEWEST.is_interactive
        assert not ConflictPolicy.KEEP_ALL.is_interactive
        assert not ConflictPolicy.OVERWRITE.is_interactive


class TestChoice:
    """Tests for Choice enum."""

    def test_choice_letters_are_unique(self):
        letters = [choice.value for choice in Choice]
        assert sorted(letters) == ["b", "c", "l", "n", "r"]


class TestRecord:
    """Tests for Record dataclass."""

    def test_from_row(self):
        row = [f"v{i}" for i in range(13)]
        record = Record.from_row(row)
        assert record.location == "v0"
        assert record.password == "v2"
        assert record.modified == "v6"
        assert record.class_ == "v11"
        assert record.creator == "v12"
        assert record.extra == ()

    def test_to_row_keeps_field_order(self):
        row = [f"v{i}" for i in range(13)]
        assert Record.from_row(row).to_row() == row

    def test_trailing_columns_pass_through(self):
        row = [f"v{i}" for i in range(13)] + ["Internet"]
        record = Record.from_row(row)
        assert record.extra == ("Internet",)
        assert record.to_row() == row

    def test_short_row_raises(self):
        with pytest.raises(ValueError):
            Record.from_row(["only", "three", "columns"])

    def test_has_modified(self, make_record):
        assert make_record(modified="2020-01-01").has_modified()
        assert not make_record(modified="").has_modified()

    def test_records_are_frozen(self, make_record):
        record = make_record()
        with pytest.raises(AttributeError):
            record.password = "changed"

    def test_fields_match_dataclass(self):
        assert len(FIELDS) == 13
        assert FIELDS[11] == "class_"


class TestMergeStats:
    """Tests for MergeStats dataclass."""

    def test_defaults(self):
        stats = MergeStats()
        assert stats.rows_written == 0
        assert stats.matched_pairs == 0
