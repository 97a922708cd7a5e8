"""Ordering of scan results by size."""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from sizescan.errors import InvalidSortDirection
from sizescan.models.entry import Entry


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, value: SortDirection | str) -> SortDirection:
        """Parse a direction name, ignoring case and surrounding whitespace."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise InvalidSortDirection(value)


def sort_entries(entries: Iterable[Entry], direction: SortDirection | str = SortDirection.ASC) -> list[Entry]:
    """Return *entries* ordered by size.

    The sort is stable in both directions: entries of equal size keep
    their input order.
    """
    direction = SortDirection.parse(direction)
    return sorted(entries, key=lambda e: e.size, reverse=direction is SortDirection.DESC)
