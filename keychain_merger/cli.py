"""Command-line interface for keychain merger."""

import argparse
import sys
from pathlib import Path
from typing import Optional

from .categorizer import categorize_file, default_output_path
from .merger import RecordFormatError, merge_files
from .models import ConflictPolicy
from .resolver import DEFAULT_PALETTE, MergeCancelled


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="keychain-merge",
        description="Merge two exported keychain CSV files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
The default behaviour for matching items is to keep the most recent
item, or both if some timestamp is missing.

Examples:
  %(prog)s old.csv new.csv
  %(prog)s --interactive -o merged.csv laptop.csv desktop.csv
        """
    )

    parser.add_argument("csv1", type=Path, help="First exported CSV file")
    parser.add_argument("csv2", type=Path, help="Second exported CSV file")

    policy = parser.add_mutually_exclusive_group()
    policy.add_argument(
        "--ask", "-a",
        dest="policy",
        action="store_const",
        const=ConflictPolicy.ASK_IF_AMBIGUOUS,
        help="Ask only when timestamps are missing"
    )
    policy.add_argument(
        "--keep", "-k",
        dest="policy",
        action="store_const",
        const=ConflictPolicy.KEEP_ALL,
        help="Keep all duplicates"
    )
    policy.add_argument(
        "--interactive", "-i",
        dest="policy",
        action="store_const",
        const=ConflictPolicy.INTERACTIVE,
        help="Ask what to do with each duplicate"
    )
    policy.add_argument(
        "--overwrite", "-O",
        dest="policy",
        action="store_const",
        const=ConflictPolicy.OVERWRITE,
        help="Overwrite items of the second CSV with items from the first"
    )
    parser.set_defaults(policy=ConflictPolicy.NEWEST)

    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Output file (default: merged.csv next to the first CSV)"
    )

    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Overwrite the output file without asking"
    )

    args = parser.parse_args(argv)
    if args.output is None:
        args.output = args.csv1.parent / "merged.csv"
    return args


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments."""
    for number, path in ((1, args.csv1), (2, args.csv2)):
        if not path.exists():
            print(f"Error: CSV {number} does not exist: {path}", file=sys.stderr)
            sys.exit(1)
        if not path.is_file():
            print(f"Error: CSV {number} is not a file: {path}", file=sys.stderr)
            sys.exit(1)


def confirm_output_overwrite(output: Path) -> bool:
    """Prompt user to confirm if the output file already exists."""
    if output.exists():
        print(f"Warning: Output file already exists: {output}")
        response = input("Overwrite it? (y/N): ").strip().lower()
        return response == 'y'
    return True


def console_palette(stream=None) -> Optional[dict]:
    """Colors for the comparison table, or None when stream is not a terminal."""
    stream = sys.stdout if stream is None else stream
    return DEFAULT_PALETTE if stream.isatty() else None


def main(argv=None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    validate_args(args)

    if not args.yes and not confirm_output_overwrite(args.output):
        print("Aborted.")
        sys.exit(0)

    print("=" * 60)
    print("KEYCHAIN MERGER")
    print("=" * 60)
    print(f"CSV 1:  {args.csv1.absolute()}")
    print(f"CSV 2:  {args.csv2.absolute()}")
    print(f"Output: {args.output.absolute()}")
    print(f"Policy: {args.policy.value}")

    try:
        stats = merge_files(
            args.csv1,
            args.csv2,
            args.output,
            args.policy,
            palette=console_palette()
        )
    except MergeCancelled:
        print("Canceled.")
        sys.exit(0)
    except KeyboardInterrupt:
        print("\n\nInterrupted! The output file is incomplete.")
        sys.exit(1)
    except RecordFormatError as e:
        print(f"Error: Unreadable CSV {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print("\n" + "=" * 60)
    print("MERGE COMPLETE!")
    print("=" * 60)
    print(f"Output file: {args.output}")
    print(f"Rows read:    {stats.rows_in_first} + {stats.rows_in_second}")
    print(f"Rows written: {stats.rows_written}")
    print(f"  - Duplicates found: {stats.matched_pairs}")
    if stats.skipped_pairs:
        print(f"  - Skipped (unordered): {stats.skipped_pairs}")
    print("Done!")


def parse_categorize_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments of the categorize command."""
    parser = argparse.ArgumentParser(
        prog="keychain-categorize",
        description="Add a Category column to an exported keychain CSV file."
    )
    parser.add_argument("csv", type=Path, help="Exported CSV file")
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Output file (default: <name>-out.csv next to the input)"
    )
    args = parser.parse_args(argv)
    if args.output is None:
        args.output = default_output_path(args.csv)
    return args


def categorize_main(argv=None) -> None:
    """Entry point of the categorize command."""
    args = parse_categorize_args(argv)
    if not args.csv.is_file():
        print(f"Error: CSV does not exist: {args.csv}", file=sys.stderr)
        sys.exit(1)

    try:
        count = categorize_file(args.csv, args.output)
    except RecordFormatError as e:
        print(f"Error: Unreadable CSV {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Categorized {count} rows into {args.output}")
    print("Done!")
