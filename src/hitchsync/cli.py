"""CLI entry point."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from hitchsync.core.config import Settings, get_settings
from hitchsync.core.exceptions import ConfigurationError, HitchSyncError
from hitchsync.core.log import configure_logging
from hitchsync.core.orchestrator import SyncOrchestrator
from hitchsync.http.client import HttpClient
from hitchsync.models.sync_pass import PassResult
from hitchsync.reporter import SimpleProgressReporter
from hitchsync.source.fetch import HttpSnapshotFetcher
from hitchsync.store import create_store

app = typer.Typer(
    name="hitchsync",
    help="Incremental Hitchwiki to Firestore spot sync",
    no_args_is_help=True,
)
console = Console()


def _load_settings(**overrides: object) -> Settings:
    settings = get_settings(**{k: v for k, v in overrides.items() if v is not None})
    configure_logging(settings.log_level, settings.log_format)
    return settings


def _print_result(result: PassResult) -> None:
    if result.is_success:
        if result.is_empty:
            console.print(f"[green]Up to date[/green] (watermark {result.cutoff.isoformat()})")
            return
        console.print(
            f"[green]Wrote {result.written:,} of {result.selected:,} spots[/green] "
            f"in {result.duration_seconds or 0:.1f}s"
        )
        if result.budget_exhausted:
            console.print(
                f"[yellow]Write budget reached: {result.remaining:,} spots left for the next pass"
            )
    else:
        console.print(
            f"[red]Failed at {result.failed_stage} stage[/red] "
            f"({result.error_type}): {result.error}"
        )
        if result.written:
            console.print(f"{result.written:,} spots were written before the failure")


@app.command()
def run(
    budget: Optional[int] = typer.Option(
        None, "--budget", "-b", min=1, help="Maximum writes for this pass"
    ),
    snapshot: Optional[Path] = typer.Option(
        None, "--snapshot", "-s", help="Use a local dump instead of downloading it"
    ),
    store: Optional[str] = typer.Option(
        None, "--store", help="Target store backend: firestore or memory"
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
) -> None:
    """Run one sync pass."""
    try:
        settings = _load_settings(
            max_writes=budget,
            snapshot_path=snapshot,
            store_backend=store,
            log_level=log_level,
        )
        target = create_store(settings)
    except (ConfigurationError, ValueError) as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(code=2) from e

    fetcher = None
    if snapshot is None:
        fetcher = HttpSnapshotFetcher(HttpClient(timeout=settings.request_timeout))

    orchestrator = SyncOrchestrator(
        settings,
        target,
        fetcher=fetcher,
        reporter=SimpleProgressReporter(),
    )

    async def _run() -> PassResult:
        try:
            return await orchestrator.run_pass()
        finally:
            if fetcher is not None:
                await fetcher.close()

    result = asyncio.run(_run())
    _print_result(result)
    raise typer.Exit(code=result.exit_code)


@app.command()
def watermark(
    store: Optional[str] = typer.Option(None, "--store", help="Target store backend"),
) -> None:
    """Show the submittedTimestamp the next pass will start after."""
    try:
        settings = _load_settings(store_backend=store)
        target = create_store(settings)
    except (ConfigurationError, ValueError) as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(code=2) from e

    orchestrator = SyncOrchestrator(settings, target)
    try:
        cutoff = asyncio.run(orchestrator.resolve_watermark())
    except HitchSyncError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e
    console.print(cutoff.isoformat())


@app.command()
def version() -> None:
    """Show version."""
    from hitchsync import __version__

    console.print(f"hitchsync {__version__}")


@app.command()
def info() -> None:
    """Show system information."""
    import sys

    from hitchsync import __version__

    settings = get_settings()
    console.print(f"[bold]hitchsync[/bold] {__version__}")
    console.print(f"Python {sys.version}")
    console.print(f"Source: {settings.dump_url}")
    console.print(f"Target: {settings.store_backend} / {settings.collection}")
    console.print(f"Write budget: {settings.max_writes:,}")


if __name__ == "__main__":
    app()
