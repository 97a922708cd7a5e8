"""Shared formatting helpers."""

from __future__ import annotations


def bytes_to_human(size_bytes: int) -> str:
    """Convert byte count to a human-readable string."""
    if size_bytes < 1024:
        return f"{size_bytes} bytes"

    value = size_bytes / 1024
    for unit in ("KB", "MB", "GB"):
        if value < 1024:
            return f"{value:.2f} {unit}"
        value /= 1024
    return f"{value:.2f} TB"


def format_elapsed(seconds: float) -> str:
    """Format an elapsed time as a human-readable string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f} ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds) // 60
    if minutes < 60:
        return f"{minutes}m {seconds - minutes * 60:.0f}s"
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes}m"
