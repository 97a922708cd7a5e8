"""Service configuration loaded from a one-line port file."""

from __future__ import annotations

import logging
from pathlib import Path

from sizescan.errors import ConfigError

log = logging.getLogger(__name__)

DEFAULT_PORT_FILE = Path("resources") / "port.config"


def load_port(path: Path | str | None = None) -> int:
    """Read the HTTP listen port from *path*.

    The file holds a single port number; surrounding whitespace and the
    trailing newline are ignored.

    Raises:
        ConfigError: The file is missing, unreadable, empty or does not
            contain a valid TCP port.
    """
    path = Path(path) if path else DEFAULT_PORT_FILE
    try:
        raw = path.read_text(encoding="utf-8").strip()
    except OSError as e:
        raise ConfigError(path, f"Could not read port config {path}: {e}") from e

    if not raw:
        raise ConfigError(path, f"Port config {path} is empty; put the listen port in it")
    try:
        port = int(raw)
    except ValueError as e:
        raise ConfigError(path, f"Invalid port {raw!r} in {path}") from e
    if not 0 < port < 65536:
        raise ConfigError(path, f"Port {port} in {path} is out of range")

    log.debug("Loaded port %d from %s", port, path)
    return port
