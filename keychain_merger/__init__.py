"""
Keychain Merger - A CLI tool to merge two exported keychain CSV files.

Features:
- Sorted merge-join of both datasets (keeps every unmatched credential)
- Automatic "keep newest" resolution of duplicate credentials
- Keep-all, overwrite and interactive conflict policies
- Masked side-by-side comparison for interactive choices
- Progress visualization
- Category annotation of exported records
"""

__version__ = "1.0.0"
