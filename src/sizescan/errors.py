"""Exceptions raised by sizescan."""

from __future__ import annotations

from pathlib import Path


class SizescanError(Exception):
    """Base class for all sizescan errors."""


class ScanError(SizescanError):
    """The root of a scan could not be listed."""

    def __init__(self, path: Path | str, cause: BaseException | None = None, message: str = "") -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(message or f"Cannot scan {self.path}: {cause}")


class RootNotFound(ScanError):
    def __init__(self, path: Path | str, cause: BaseException | None = None) -> None:
        super().__init__(path, cause, f"Directory not found: {path}")


class RootNotADirectory(ScanError):
    def __init__(self, path: Path | str, cause: BaseException | None = None) -> None:
        super().__init__(path, cause, f"Path is not a directory: {path}")


class RootPermissionDenied(ScanError):
    def __init__(self, path: Path | str, cause: BaseException | None = None) -> None:
        super().__init__(path, cause, f"Permission denied: {path}")


class ScanCancelled(SizescanError):
    """A scan was interrupted through its cancel event."""


class InvalidSortDirection(SizescanError, ValueError):
    """Sort direction is neither ASC nor DESC."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid sort direction {value!r} (expected ASC or DESC)")


class ConfigError(SizescanError):
    """The service configuration could not be loaded."""

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = Path(path)
        super().__init__(message)
