"""Top-level directory scanning."""

from __future__ import annotations

import logging
import os
import stat
import threading
from pathlib import Path

from sizescan.core.accumulator import SizeAccumulator
from sizescan.errors import RootNotADirectory, RootNotFound, RootPermissionDenied, ScanError
from sizescan.models.entry import Entry

log = logging.getLogger(__name__)


class DirectoryScanner:
    """Reports every immediate child of a directory with its total size."""

    def __init__(self, accumulator: SizeAccumulator | None = None) -> None:
        self.accumulator = accumulator or SizeAccumulator()

    def scan(self, root: Path | str, cancel_event: threading.Event | None = None) -> list[Entry]:
        """Scan *root* and return one entry per child, in discovery order.

        Files report their own size.  Directories report the size of their
        whole subtree, computed concurrently for all of them; the call
        returns only once every subtree walk has finished.

        Raises:
            RootNotFound: *root* does not exist.
            RootNotADirectory: *root* is not a directory.
            RootPermissionDenied: *root* cannot be listed.
            ScanError: Any other failure listing *root*.
            ScanCancelled: *cancel_event* was set before the walk finished.
        """
        root = Path(root)
        children = self._list_root(root)

        entries: list[Entry] = []
        dir_indexes: list[int] = []
        for child in children:
            try:
                is_dir = child.is_dir(follow_symlinks=False)
                size = 0 if is_dir else child.stat(follow_symlinks=False).st_size
            except OSError as e:
                log.warning("Cannot stat %s: %s", child.path, e)
                is_dir, size = False, 0
            if is_dir:
                dir_indexes.append(len(entries))
            entries.append(Entry(name=child.name, size=size, is_dir=is_dir, path=Path(child.path)))

        sizes = self.accumulator.compute_sizes([entries[i].path for i in dir_indexes], cancel_event)
        for index, size in zip(dir_indexes, sizes):
            entries[index].size = size

        log.info("Scanned %s: %d entries (%d directories)", root, len(entries), len(dir_indexes))
        return entries

    @staticmethod
    def _list_root(root: Path) -> list[os.DirEntry[str]]:
        """List *root* once, sorted by name, mapping failures to scan errors."""
        try:
            st = root.stat()
        except (FileNotFoundError, NotADirectoryError) as e:
            raise RootNotFound(root, e) from e
        except PermissionError as e:
            raise RootPermissionDenied(root, e) from e
        except OSError as e:
            raise ScanError(root, e) from e
        if not stat.S_ISDIR(st.st_mode):
            raise RootNotADirectory(root)

        try:
            with os.scandir(root) as it:
                children = list(it)
        except FileNotFoundError as e:
            raise RootNotFound(root, e) from e
        except NotADirectoryError as e:
            raise RootNotADirectory(root, e) from e
        except PermissionError as e:
            raise RootPermissionDenied(root, e) from e
        except OSError as e:
            raise ScanError(root, e) from e

        children.sort(key=lambda child: child.name)
        return children
