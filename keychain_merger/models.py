"""Data models for keychain merger."""

from dataclasses import dataclass, field
from enum import Enum

# Column order of the CSV written by the keychain exporter.
FIELDS = (
    "location",
    "account",
    "password",
    "label",
    "comment",
    "created",
    "modified",
    "kind",
    "type",
    "domain",
    "auth_type",
    "class_",
    "creator",
)


class ConflictPolicy(Enum):
    """Strategies for matched pairs of records."""
    NEWEST = "newest"
    KEEP_ALL = "keep_all"
    OVERWRITE = "overwrite"
    ASK_IF_AMBIGUOUS = "ask_if_ambiguous"
    INTERACTIVE = "interactive"

    @property
    def is_interactive(self) -> bool:
        return self in (ConflictPolicy.ASK_IF_AMBIGUOUS, ConflictPolicy.INTERACTIVE)


class Choice(Enum):
    """Answers to the interactive prompt, keyed by their first letter."""
    LEFT = "l"
    RIGHT = "r"
    BOTH = "b"
    NONE = "n"
    CANCEL = "c"


@dataclass(frozen=True)
class Record:
    """One credential row. Columns past the 13th are carried in ``extra``."""
    location: str
    account: str
    password: str
    label: str
    comment: str
    created: str
    modified: str
    kind: str
    type: str
    domain: str
    auth_type: str
    class_: str
    creator: str
    extra: tuple = field(default=(), compare=False)

    @classmethod
    def from_row(cls, row: list[str]) -> "Record":
        if len(row) < len(FIELDS):
            raise ValueError(
                f"expected at least {len(FIELDS)} columns, got {len(row)}"
            )
        return cls(*row[:len(FIELDS)], extra=tuple(row[len(FIELDS):]))

    def to_row(self) -> list[str]:
        return [getattr(self, name) for name in FIELDS] + list(self.extra)

    def has_modified(self) -> bool:
        """Whether the modification timestamp is known."""
        return bool(self.modified)


@dataclass
class MergeStats:
    """Counters collected during one merge run."""
    rows_in_first: int = 0
    rows_in_second: int = 0
    rows_written: int = 0
    matched_pairs: int = 0
    skipped_pairs: int = 0
