"""HTTP service exposing directory scans as JSON.

``GET /files?root=<path>&sort=ASC|DESC`` answers with a JSON array of
``{"Name", "Size", "IsDir"}`` objects for the immediate children of
*root*, ordered by size.
"""

from __future__ import annotations

import asyncio
import logging
import threading

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from sizescan.core.scanner import DirectoryScanner
from sizescan.core.sorter import SortDirection, sort_entries
from sizescan.errors import (
    InvalidSortDirection,
    RootNotADirectory,
    RootNotFound,
    RootPermissionDenied,
    ScanCancelled,
    ScanError,
)
from sizescan.utils import bytes_to_human

log = logging.getLogger(__name__)

ROOT_PROMPT = "Pass the root and sort parameters: /files?root=<path>&sort=ASC|DESC (ASC by default)"

_DISCONNECT_POLL = 0.25  # seconds


def _status_for(error: ScanError) -> int:
    if isinstance(error, RootNotFound):
        return 404
    if isinstance(error, RootNotADirectory):
        return 400
    if isinstance(error, RootPermissionDenied):
        return 403
    return 500


async def _watch_disconnect(request: Request, cancel: threading.Event) -> None:
    """Set *cancel* once the client goes away."""
    while not cancel.is_set():
        if await request.is_disconnected():
            log.info("Client disconnected, cancelling scan")
            cancel.set()
            return
        await asyncio.sleep(_DISCONNECT_POLL)


def create_app(scanner: DirectoryScanner | None = None) -> FastAPI:
    """Build the FastAPI application around *scanner*."""
    app = FastAPI(title="sizescan")
    app.state.scanner = scanner or DirectoryScanner()

    @app.get("/files")
    async def list_files(request: Request, root: str = "", sort: str = "") -> Response:
        if not root:
            return PlainTextResponse(ROOT_PROMPT)
        try:
            direction = SortDirection.parse(sort or SortDirection.ASC)
        except InvalidSortDirection as e:
            return PlainTextResponse(str(e), status_code=400)

        # The scan runs on a worker thread; the event stops it when the
        # client disconnects or this request task is cancelled.
        cancel = threading.Event()
        watcher = asyncio.create_task(_watch_disconnect(request, cancel))
        try:
            entries = await asyncio.to_thread(request.app.state.scanner.scan, root, cancel)
        except ScanCancelled:
            log.info("Scan of %s cancelled", root)
            return PlainTextResponse("Scan cancelled", status_code=503)
        except ScanError as e:
            log.warning("%s", e)
            return PlainTextResponse(str(e), status_code=_status_for(e))
        finally:
            cancel.set()
            watcher.cancel()

        entries = sort_entries(entries, direction)
        for entry in entries:
            log.info("%-4s %12s  %s", "dir" if entry.is_dir else "file", bytes_to_human(entry.size), entry.name)
        return JSONResponse([entry.to_json() for entry in entries])

    return app


def serve(port: int, host: str = "0.0.0.0", shutdown_timeout: int = 5) -> None:
    """Run the service until SIGINT/SIGTERM.

    On a signal uvicorn stops accepting connections and gives in-flight
    requests *shutdown_timeout* seconds to finish before cancelling them.
    """
    config = uvicorn.Config(
        create_app(),
        host=host,
        port=port,
        log_config=None,
        timeout_graceful_shutdown=shutdown_timeout,
    )
    server = uvicorn.Server(config)
    log.info("HTTP service listening on %s:%d", host, port)
    server.run()
    log.info("HTTP service stopped")
