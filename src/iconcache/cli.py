"""Click CLI for iconcache — inspect and maintain the local icon cache."""

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import datetime

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from iconcache.config.hierarchy import load_config_hierarchy

console = Console()
error_console = Console(stderr=True)


def _setup_logging(verbosity: int) -> None:
    """Configure logging based on verbosity level, falling back to configured log_level."""
    configured = str(load_config_hierarchy().get("log_level", "WARNING")).upper()
    level = logging.getLevelNamesMapping().get(configured, logging.WARNING)
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
    )


def _open_cache(store_path: str | None):
    from iconcache.core import IconCache
    from iconcache.errors.exceptions import StorageError

    config = load_config_hierarchy(store_path=store_path)
    try:
        return IconCache.from_config(config)
    except (StorageError, ValueError) as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


def _format_ts(ts: float | None) -> str:
    if ts is None:
        return "-"
    return datetime.fromtimestamp(ts).isoformat(sep=" ", timespec="seconds")


store_option = click.option(
    "--store", "store_path", type=click.Path(dir_okay=False), default=None,
    help="Path to the SQLite store.",
)
verbose_option = click.option(
    "-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).",
)


@click.group()
@click.version_option(package_name="iconcache")
def cli() -> None:
    """iconcache — local icon asset cache."""


@cli.command("get")
@click.argument("url")
@store_option
@verbose_option
def get_icon(url: str, store_path: str | None, verbose: int) -> None:
    """Fetch URL through the cache and print the cached entry."""
    _setup_logging(verbose)
    icons = _open_cache(store_path)

    async def _run():
        async with icons:
            return await icons.get_or_fetch(url)

    entry = asyncio.run(_run())
    if entry is None:
        error_console.print(f"[yellow]Not available:[/yellow] {url}")
        sys.exit(1)

    console.print(f"[cyan]{entry.kind.value}[/cyan] ({entry.byte_size:,} bytes)")
    if entry.is_vector and verbose >= 1:
        console.print(entry.content, markup=False)


@cli.command("preload")
@click.argument("urls", nargs=-1, required=True)
@store_option
@verbose_option
def preload(urls: tuple[str, ...], store_path: str | None, verbose: int) -> None:
    """Preload several URLs concurrently."""
    _setup_logging(verbose)
    icons = _open_cache(store_path)

    async def _run():
        async with icons:
            return await icons.preload_many(urls)

    outcomes = asyncio.run(_run())

    table = Table(title="Preload Results", show_header=True)
    table.add_column("URL", style="cyan")
    table.add_column("Result")
    for outcome in outcomes:
        if outcome.ok:
            table.add_row(outcome.url, f"[green]{outcome.entry.kind.value}[/green]")
        else:
            table.add_row(outcome.url, f"[red]{outcome.error}[/red]")
    console.print(table)

    succeeded = sum(1 for o in outcomes if o.ok)
    console.print(f"Preloaded {succeeded}/{len(outcomes)} icons")


@cli.group()
def cache() -> None:
    """Cache management commands."""


@cache.command("stats")
@store_option
def cache_stats(store_path: str | None) -> None:
    """Show cache statistics."""
    icons = _open_cache(store_path)

    async def _run():
        async with icons:
            return await icons.stats()

    stats = asyncio.run(_run())

    table = Table(title="Cache Statistics", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")
    table.add_row("Entries", str(stats.total_entries))
    table.add_row("Size (bytes)", f"{stats.total_bytes:,}")
    table.add_row("Oldest entry", _format_ts(stats.oldest_created_at))
    table.add_row("Newest entry", _format_ts(stats.newest_created_at))
    table.add_row("Last cleanup", _format_ts(stats.last_cleanup_at))
    console.print(table)


@cache.command("clear")
@store_option
@click.confirmation_option(prompt="Are you sure you want to clear the cache?")
def cache_clear(store_path: str | None) -> None:
    """Clear all cached icons."""
    icons = _open_cache(store_path)

    async def _run() -> bool:
        async with icons:
            return await icons.clear_all()

    if not asyncio.run(_run()):
        error_console.print("[red]Failed to clear cache.[/red]")
        sys.exit(1)
    console.print("[green]Cache cleared.[/green]")


def main() -> None:
    """Entry point for the CLI."""
    cli()
