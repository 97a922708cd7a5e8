"""CLI interface for sizescan."""

from __future__ import annotations

import json
import logging
import sys
import time
from pathlib import Path

import click

from sizescan.core.accumulator import SizeAccumulator
from sizescan.core.scanner import DirectoryScanner
from sizescan.core.sorter import SortDirection, sort_entries
from sizescan.errors import InvalidSortDirection, SizescanError
from sizescan.settings import DEFAULT_PORT_FILE, load_port
from sizescan.utils import bytes_to_human, format_elapsed


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _parse_direction(ctx: click.Context, param: click.Parameter, value: str) -> SortDirection:
    try:
        return SortDirection.parse(value)
    except InvalidSortDirection as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param) from exc


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
def main(verbose: int) -> None:
    """List a directory's entries sorted by total size."""
    _setup_logging(verbose)


# ── scan ─────────────────────────────────────────────────────────────────

@main.command()
@click.option("--root", required=True, type=click.Path(path_type=Path), help="Directory to scan")
@click.option("--sort", "direction", default="ASC", callback=_parse_direction, help="ASC or DESC (default ASC)")
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Size of the scan thread pool")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def scan(root: Path, direction: SortDirection, workers: int | None, as_json: bool) -> None:
    """Show the immediate children of a directory with their total sizes."""
    scanner = DirectoryScanner(SizeAccumulator(max_workers=workers))
    try:
        entries = scanner.scan(root)
    except SizescanError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    entries = sort_entries(entries, direction)

    if as_json:
        click.echo(json.dumps([e.to_json() for e in entries], indent=2))
        return

    if not entries:
        click.echo(f"{root} is empty.")
        return

    for entry in entries:
        if entry.is_dir:
            marker = click.style("d", fg="blue", bold=True)
            name = click.style(entry.name + "/", fg="blue", bold=True)
        else:
            marker = click.style("-", fg="bright_black")
            name = entry.name
        click.echo(f"  {marker} {bytes_to_human(entry.size):>12s}  {name}")

    total = sum(e.size for e in entries)
    click.echo(f"\nTotal: {click.style(bytes_to_human(total), fg='green', bold=True)} in {len(entries):,} entries")


# ── service ──────────────────────────────────────────────────────────────

@main.group()
def service() -> None:
    """HTTP service management."""


@service.command("start")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=DEFAULT_PORT_FILE,
    show_default=True,
    help="One-line file holding the listen port",
)
@click.option("--host", default="0.0.0.0", show_default=True, help="Address to bind")
@click.option(
    "--shutdown-timeout",
    type=click.IntRange(min=0),
    default=5,
    show_default=True,
    help="Seconds to let in-flight requests finish on shutdown",
)
def service_start(config_path: Path, host: str, shutdown_timeout: int) -> None:
    """Start the HTTP service in foreground."""
    from sizescan.http_service import serve

    started = time.monotonic()
    try:
        port = load_port(config_path)
    except SizescanError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    click.echo(f"Starting server at http://localhost:{port}")
    try:
        serve(port, host=host, shutdown_timeout=shutdown_timeout)
    finally:
        click.echo(f"\nServer stopped. Uptime: {format_elapsed(time.monotonic() - started)}")
