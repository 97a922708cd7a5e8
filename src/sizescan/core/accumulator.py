"""Concurrent subtree size computation."""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import NamedTuple, Sequence

from sizescan.errors import ScanCancelled

log = logging.getLogger(__name__)

POLL_INTERVAL = 0.1  # seconds between cancel checks while waiting on workers


class _Listing(NamedTuple):
    """Regular-file bytes and subdirectories found directly in one directory."""

    file_bytes: int
    subdirs: list[str]


def default_workers() -> int:
    """Worker count sized to the available parallelism."""
    return min(32, (os.cpu_count() or 1) + 4)


def _list_directory(path: str) -> _Listing:
    """List a single directory without descending into it.

    Symbolic links are neither counted nor followed.  Errors are logged
    and the affected directory or file contributes nothing.
    """
    total = 0
    subdirs: list[str] = []
    try:
        with os.scandir(path) as it:
            for entry in it:
                try:
                    if entry.is_dir(follow_symlinks=False):
                        subdirs.append(entry.path)
                    elif entry.is_file(follow_symlinks=False):
                        total += entry.stat(follow_symlinks=False).st_size
                except OSError as e:
                    log.warning("Skipping %s: %s", entry.path, e)
    except OSError as e:
        log.warning("Cannot read directory %s: %s", path, e)
    return _Listing(total, subdirs)


class SizeAccumulator:
    """Sums regular-file sizes of directory subtrees on a bounded thread pool.

    Every directory in a subtree is listed by its own pool task.  Tasks
    hand their result back through a future and never share state; the
    calling thread merges completed listings into per-root totals and
    submits one task for each subdirectory they report.  The walk ends
    when no futures are pending.
    """

    def __init__(self, max_workers: int | None = None) -> None:
        if max_workers is not None and max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.max_workers = max_workers or default_workers()

    def compute_size(self, path: Path | str, cancel_event: threading.Event | None = None) -> int:
        """Return the total size in bytes of all regular files under *path*."""
        return self.compute_sizes([path], cancel_event)[0]

    def compute_sizes(
        self,
        paths: Sequence[Path | str],
        cancel_event: threading.Event | None = None,
    ) -> list[int]:
        """Compute subtree sizes for several directories behind one join.

        Args:
            paths: Directories to measure.
            cancel_event: Optional event; once set, pending work is dropped
                and ``ScanCancelled`` is raised.

        Returns:
            Totals in the same order as *paths*.
        """
        totals = [0] * len(paths)
        if not paths:
            return totals

        executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="sizescan")
        pending: dict[Future[_Listing], int] = {}
        tasks = 0
        try:
            for index, path in enumerate(paths):
                pending[executor.submit(_list_directory, os.fspath(path))] = index
            tasks = len(pending)

            while pending:
                if cancel_event is not None and cancel_event.is_set():
                    raise ScanCancelled(f"Scan cancelled with {len(pending)} directories pending")

                done, _ = wait(pending, timeout=POLL_INTERVAL, return_when=FIRST_COMPLETED)
                for future in done:
                    index = pending.pop(future)
                    listing = future.result()
                    totals[index] += listing.file_bytes
                    for subdir in listing.subdirs:
                        pending[executor.submit(_list_directory, subdir)] = index
                    tasks += len(listing.subdirs)
        finally:
            # Running listings finish; queued ones are dropped.
            executor.shutdown(wait=True, cancel_futures=True)

        log.debug("Listed %d directories under %d roots", tasks, len(paths))
        return totals
