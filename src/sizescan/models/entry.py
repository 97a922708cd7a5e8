"""Scan entry dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(slots=True)
class Entry:
    """Single top-level child of a scanned directory.

    For a directory ``size`` is the sum of every regular file in its
    subtree; nested objects are never reported on their own.
    """

    name: str
    size: int
    is_dir: bool
    path: Path

    def to_json(self) -> dict[str, Any]:
        """Return the wire representation used by the CLI and HTTP service."""
        return {"Name": self.name, "Size": self.size, "IsDir": self.is_dir}
