"""Shared test fixtures."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

import pytest


def write_file(path: Path, size: int) -> Path:
    """Create *path* (and its parents) holding exactly *size* bytes."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return path


@pytest.fixture
def make_file() -> Callable[[Path, int], Path]:
    return write_file


@pytest.fixture
def sample_root(tmp_path):
    """a.txt (10 bytes), b.txt (20 bytes) and c/d.txt (5 bytes)."""
    root = tmp_path / "root"
    write_file(root / "a.txt", 10)
    write_file(root / "b.txt", 20)
    write_file(root / "c" / "d.txt", 5)
    return root


@pytest.fixture
def deny_scandir(monkeypatch) -> Callable[[Path], None]:
    """Make ``os.scandir`` raise PermissionError for chosen directories.

    Works regardless of the user running the tests (chmod does not stop root).
    """
    denied: set[str] = set()
    real_scandir = os.scandir

    def fake_scandir(path="."):
        if os.fspath(path) in denied:
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", fake_scandir)
    return lambda path: denied.add(os.fspath(path))


@pytest.fixture
def deny_stat(monkeypatch) -> Callable[[Path], None]:
    """Make ``os.stat`` raise PermissionError for anything under chosen directories.

    Mimics a parent directory without search permission.
    """
    denied: list[Path] = []
    real_stat = os.stat

    def fake_stat(path, *args, **kwargs):
        if isinstance(path, (str, os.PathLike)):
            target = Path(os.fspath(path))
            if any(target == d or d in target.parents for d in denied):
                raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_stat(path, *args, **kwargs)

    monkeypatch.setattr(os, "stat", fake_stat)
    return lambda path: denied.append(Path(path))
