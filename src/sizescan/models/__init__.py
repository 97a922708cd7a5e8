"""Sizescan data models."""

from sizescan.models.entry import Entry

__all__ = [
    "Entry",
]
