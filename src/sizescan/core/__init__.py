"""Scanning core: subtree sizes, top-level scans and ordering."""

from sizescan.core.accumulator import SizeAccumulator
from sizescan.core.scanner import DirectoryScanner
from sizescan.core.sorter import SortDirection, sort_entries

__all__ = [
    "DirectoryScanner",
    "SizeAccumulator",
    "SortDirection",
    "sort_entries",
]
