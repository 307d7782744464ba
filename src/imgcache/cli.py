"""Click CLI for imgcache: load images through the cache and manage it."""

from __future__ import annotations

import asyncio
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from imgcache.cache.disk import DiskStore
from imgcache.cache.keys import hash_key
from imgcache.config.hierarchy import load_settings

console = Console()
error_console = Console(stderr=True)


def _setup_logging(verbosity: int, default_level: int = logging.WARNING) -> None:
    """Configure logging based on verbosity level."""
    level = default_level
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
    )


@click.group()
@click.version_option(package_name="imgcache")
def cli() -> None:
    """imgcache, a disk-backed image cache keyed by URL."""


@cli.command()
@click.argument("urls", nargs=-1, required=True)
@click.option("--cache-dir", type=click.Path(file_okay=False), help="Cache root directory.")
@click.option("--no-cache", is_flag=True, default=False, help="Bypass the disk cache.")
@click.option("--coalesce", is_flag=True, default=False, help="Share fetches for duplicate URLs.")
@click.option("--workers", type=int, default=None, help="Concurrent loads.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def load(
    urls: tuple[str, ...],
    cache_dir: str | None,
    no_cache: bool,
    coalesce: bool,
    workers: int | None,
    verbose: int,
) -> None:
    """Load image(s) through the cache."""
    settings = load_settings(
        cache_dir=cache_dir,
        cache_disabled=no_cache or None,
        coalesce=coalesce or None,
        max_concurrency=workers,
    )
    _setup_logging(verbose, settings.log_level_number)

    from imgcache.cache.manager import ImageCacheManager
    from imgcache.cache.stats import LoadResult

    async def _run() -> list[LoadResult]:
        async with ImageCacheManager.from_config(settings) as mgr:
            return await mgr.load_all(urls, max_concurrency=settings.max_concurrency)

    results = asyncio.run(_run())

    table = Table(title="Image Loads", show_header=True)
    table.add_column("URL", style="cyan", overflow="fold")
    table.add_column("Outcome")
    table.add_column("Size")
    table.add_column("Mode")
    table.add_column("Key")

    for result in results:
        style = "green" if result.ok else "red"
        size = f"{result.image.width}x{result.image.height}" if result.image else "-"
        mode = result.image.mode if result.image else "-"
        table.add_row(
            result.url, f"[{style}]{result.outcome.value}[/{style}]", size, mode, result.key
        )

    console.print(table)

    if not all(r.ok for r in results):
        sys.exit(1)


@cli.command("key")
@click.argument("url")
def key(url: str) -> None:
    """Print the cache key for a URL."""
    click.echo(hash_key(url))


@cli.group()
def cache() -> None:
    """Cache management commands."""


def _store_from_config() -> DiskStore:
    return DiskStore(load_settings().cache_dir)


@cache.command("stats")
def cache_stats() -> None:
    """Show cache statistics."""
    store = _store_from_config()

    table = Table(title="Cache Statistics", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")

    root = store.resolve_root()
    if root is None or not root.is_dir():
        table.add_row("Root", str(root) if root else "unavailable")
        table.add_row("Status", "[yellow]no cache yet[/yellow]")
        table.add_row("Entries", "0")
        table.add_row("Size (MB)", "0.0")
    else:
        table.add_row("Root", str(root))
        table.add_row("Entries", str(store.entry_count))
        table.add_row("Size (MB)", f"{store.size_mb:.1f}")

    console.print(table)


@cache.command("path")
def cache_path() -> None:
    """Print the cache root directory."""
    store = _store_from_config()
    root = store.ensure_root()
    if root is None:
        error_console.print(f"[red]Error:[/red] {store.root_error}")
        sys.exit(1)
    click.echo(str(root))


@cache.command("clear")
@click.confirmation_option(prompt="Are you sure you want to clear the cache?")
def cache_clear() -> None:
    """Delete all cached images."""
    store = _store_from_config()
    root = store.resolve_root()
    count = store.clear() if root is not None and root.is_dir() else 0
    console.print(f"[green]Cache cleared ({count} entries removed).[/green]")


def main() -> None:
    """Entry point for the CLI."""
    cli()
