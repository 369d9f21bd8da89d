"""Conflict resolution for matched pairs of records."""

from typing import Optional

from .models import Choice, ConflictPolicy, Record

PASSWORD_MASK = "********"
VISIBLE_PASSWORD_CHARS = 2

# ANSI SGR color codes by role.
DEFAULT_PALETTE = {
    "changed": 31,  # red
    "newer": 32,  # green
    "notice": 33,  # yellow
}

PROMPT = "Choose ([l]eft/[r]ight/[b]oth/[n]one/[c]ancel): "

_CHOICE_MESSAGES = {
    Choice.LEFT: "Keeping left",
    Choice.RIGHT: "Keeping right",
    Choice.BOTH: "Keeping both",
    Choice.NONE: "Skipping both",
}

# (row title, record attribute)
_TABLE_ROWS = [
    ("Name", "label"),
    ("Account", "account"),
    ("Where", "location"),
    ("Created", "created"),
    ("Modified", "modified"),
    ("Password", "password"),
]


class MergeCancelled(Exception):
    """Raised when the operator cancels the merge from the prompt."""


def mask_password(password: str) -> str:
    """Keep at most the first two characters of a password."""
    return password[:VISIBLE_PASSWORD_CHARS] + PASSWORD_MASK


def colorize(text: str, color: Optional[str], palette: Optional[dict] = None) -> str:
    """Wrap text in the palette's escape code for color, if it has one."""
    if color is None or not palette or color not in palette:
        return text
    return f"\033[{palette[color]}m{text}\033[0m"


def _display_values(record: Record) -> list[str]:
    values = [getattr(record, attr) for _, attr in _TABLE_ROWS]
    values[-1] = mask_password(record.password)
    return values


def render_comparison(
    r1: Record,
    r2: Record,
    palette: Optional[dict] = DEFAULT_PALETTE
) -> list[str]:
    """
    Build the side-by-side table shown before prompting.

    Rows whose values differ are drawn in the "changed" color. Passwords are
    masked, and are compared on their raw values. A NEWER/OLDER row is
    appended only when both modification times are known and differ.
    """
    left = _display_values(r1)
    right = _display_values(r2)
    pad = max(len(v) for v in left) + 1
    pad2 = max(len(v) for v in right) + 1

    sep = "---------|-" + "-" * pad + "|" + "-" * pad2
    lines = [sep]
    for (title, attr), v1, v2 in zip(_TABLE_ROWS, left, right):
        line = f"{title:>8} | {v1}" + " " * (pad - len(v1)) + f"| {v2}"
        differs = getattr(r1, attr) != getattr(r2, attr)
        lines.append(colorize(line, "changed" if differs else None, palette))
    lines.append(sep)

    if r1.has_modified() and r2.has_modified():
        newer = colorize("NEWER", "newer", palette)
        if r1.modified > r2.modified:
            lines.append("         | " + newer + " " * (pad - 5) + "| OLDER")
        elif r1.modified < r2.modified:
            lines.append("         | OLDER" + " " * (pad - 5) + "| " + newer)
    return lines


def prompt_choice() -> Choice:
    """Read answers until one starts with a known letter. EOF cancels."""
    keys = {choice.value: choice for choice in Choice}
    while True:
        try:
            answer = input(PROMPT)
        except EOFError:
            print()
            return Choice.CANCEL
        answer = answer.lstrip().lower()
        if answer and answer[0] in keys:
            return keys[answer[0]]


def choose_interactively(
    r1: Record,
    r2: Record,
    palette: Optional[dict] = DEFAULT_PALETTE
) -> list[Record]:
    """Show both records and let the operator pick which survive."""
    for line in render_comparison(r1, r2, palette):
        print(line)

    choice = prompt_choice()
    if choice is Choice.CANCEL:
        raise MergeCancelled()

    print(colorize(_CHOICE_MESSAGES[choice], "notice", palette))
    if choice is Choice.LEFT:
        return [r1]
    if choice is Choice.RIGHT:
        return [r2]
    if choice is Choice.BOTH:
        return [r1, r2]
    return []


def keep_newest(r1: Record, r2: Record) -> list[Record]:
    """Keep the more recently modified record, or both if either date is unknown."""
    if not (r1.has_modified() and r2.has_modified()):
        return [r1, r2]
    return [r2] if r2.modified > r1.modified else [r1]


def resolve_pair(
    r1: Record,
    r2: Record,
    policy: ConflictPolicy,
    palette: Optional[dict] = DEFAULT_PALETTE
) -> list[Record]:
    """
    Decide which records of a matched pair go to the output.

    r1 comes from the first dataset and r2 from the second. Returns zero, one
    or two records; raises MergeCancelled if the operator cancels.
    """
    if policy is ConflictPolicy.KEEP_ALL:
        return [r1, r2]
    if policy is ConflictPolicy.OVERWRITE:
        return [r1]
    if policy is ConflictPolicy.INTERACTIVE:
        return choose_interactively(r1, r2, palette)
    if policy is ConflictPolicy.ASK_IF_AMBIGUOUS:
        if not (r1.has_modified() and r2.has_modified()):
            return choose_interactively(r1, r2, palette)
    return keep_newest(r1, r2)
