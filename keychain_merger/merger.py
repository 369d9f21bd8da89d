"""Core merge logic."""

import csv
import sys
from pathlib import Path
from typing import Callable, Optional

from tqdm import tqdm

from .comparator import compare_records, sort_records
from .models import ConflictPolicy, MergeStats, Record
from .resolver import DEFAULT_PALETTE, resolve_pair


class RecordFormatError(Exception):
    """Raised when an input file does not have the keychain column layout."""

    def __init__(self, path: Path, line: Optional[int], error: str):
        self.path = path
        self.line = line
        self.error = error
        where = f"{path}, line {line}" if line is not None else f"{path}"
        super().__init__(f"{where}: {error}")


def read_dataset(path: Path) -> tuple[Optional[list[str]], list[Record]]:
    """
    Read an exported keychain CSV file.

    Returns the header row (None for an empty file) and the data rows as
    records, in file order. Undecodable bytes and broken quoting raise
    RecordFormatError like a row with missing columns does.
    """
    header = None
    records = []
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.reader(f)
        try:
            for row in reader:
                if header is None:
                    header = row
                    continue
                records.append(Record.from_row(row))
        # Decoding runs ahead of the reader, so no line number is known.
        except UnicodeDecodeError as e:
            raise RecordFormatError(path, None, f"not valid UTF-8 ({e.reason})") from e
        except (ValueError, csv.Error) as e:
            raise RecordFormatError(path, reader.line_num, str(e)) from e
    return header, records


def merge_records(
    header: Optional[list[str]],
    records1: list[Record],
    records2: list[Record],
    write_row: Callable[[list[str]], None],
    policy: ConflictPolicy = ConflictPolicy.NEWEST,
    compare: Callable[[Record, Record], int] = compare_records,
    palette: Optional[dict] = DEFAULT_PALETTE,
    progress: bool = True
) -> MergeStats:
    """
    Merge two datasets into write_row.

    Both datasets are sorted, then walked in lock-step: the record that sorts
    first is written and its cursor advances; a matched pair goes through
    resolve_pair and both cursors advance. Once either side runs out the rest
    of the other is written as is.

    Rows are written as soon as they are decided, so a MergeCancelled raised
    from the prompt leaves exactly the rows written so far.
    """
    stats = MergeStats(rows_in_first=len(records1), rows_in_second=len(records2))

    def emit(record: Record) -> None:
        write_row(record.to_row())
        stats.rows_written += 1

    if header is not None:
        write_row(header)

    a = sort_records(records1)
    b = sort_records(records2)
    m, n = len(a), len(b)
    i = j = 0

    with tqdm(total=m + n, desc="Merging", unit="row",
              disable=not progress or policy.is_interactive) as pbar:
        while i < m and j < n:
            r1, r2 = a[i], b[j]
            result = compare(r1, r2)
            if result == -1:
                emit(r1)
                i += 1
                pbar.update(1)
            elif result == 1:
                emit(r2)
                j += 1
                pbar.update(1)
            elif result == 0:
                stats.matched_pairs += 1
                for record in resolve_pair(r1, r2, policy, palette):
                    emit(record)
                i += 1
                j += 1
                pbar.update(2)
            else:
                tqdm.write(
                    f"Warning: skipping items at rows {i + 1} and {j + 1} "
                    f"(comparator returned {result!r})",
                    file=sys.stderr
                )
                stats.skipped_pairs += 1
                i += 1
                j += 1
                pbar.update(2)

        # Copy remaining records
        for record in a[i:]:
            emit(record)
            pbar.update(1)
        for record in b[j:]:
            emit(record)
            pbar.update(1)

    return stats


def merge_files(
    path1: Path,
    path2: Path,
    output: Path,
    policy: ConflictPolicy = ConflictPolicy.NEWEST,
    palette: Optional[dict] = DEFAULT_PALETTE
) -> MergeStats:
    """
    Merge two exported keychain CSV files into output.

    The output keeps the header of the first file (the second one's if the
    first is empty). It is closed even when the merge is cancelled, so the
    rows written before the cancel remain readable.
    """
    header1, records1 = read_dataset(path1)
    header2, records2 = read_dataset(path2)
    header = header1 if header1 is not None else header2

    with open(output, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        return merge_records(
            header,
            records1,
            records2,
            writer.writerow,
            policy=policy,
            palette=palette
        )
