"""Category annotation of exported keychain records."""

import csv
import re
from pathlib import Path

from .merger import read_dataset
from .models import FIELDS, Record

CATEGORY_HEADER = [
    "Where", "Account", "Password", "Label", "Comment", "Created", "Modified",
    "Kind", "Type", "Domain", "AuthType", "Class", "Creator", "Category",
]

_SECURE_NOTE = re.compile(r"secure\s+note", re.IGNORECASE)
_NETWORK_KIND = re.compile(r"network|802\.1|airport|handoff|sharing", re.IGNORECASE)
_NETWORK_SCHEME = re.compile(r"^.?(afp|ftp|smb|ssh|teln|vnc)", re.IGNORECASE)
_MAIL_SCHEME = re.compile(r"^.?(pop|smtp|imap|mail)", re.IGNORECASE)


def categorize(record: Record) -> str:
    """Return the group a record belongs to; the first matching rule wins."""
    if _SECURE_NOTE.search(record.kind) or record.type == "note":
        return "Notes"
    if _NETWORK_KIND.search(record.kind) or _NETWORK_SCHEME.search(record.location):
        return "Network"
    if record.class_ == "inet" and _MAIL_SCHEME.search(record.location):
        return "EMail"
    if "://" in record.location:
        return "Internet"
    return "General"


def default_output_path(input_path: Path) -> Path:
    return input_path.with_name(f"{input_path.stem}-out.csv")


def categorize_file(input_path: Path, output: Path) -> int:
    """
    Write input_path to output with a Category column. Returns the row count.

    Only the 13 keychain columns are copied before the category; any trailing
    columns of the input, such as the Category of an already annotated file,
    are dropped so the output always has the 14-column header layout.
    """
    _, records = read_dataset(input_path)
    with open(output, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(CATEGORY_HEADER)
        for record in records:
            writer.writerow(record.to_row()[:len(FIELDS)] + [categorize(record)])
    return len(records)
