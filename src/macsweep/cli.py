"""CLI interface for macsweep."""

import logging
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from macsweep import __version__
from macsweep.analyzer import inspect_directory, make_pool, remove_path, scan_system_data
from macsweep.config import CleanerConfig, resolve_path
from macsweep.display import (
    confirm_action,
    console,
    show_error,
    show_inspection,
    show_removal_outcome,
    show_scanning_progress,
    show_scan_summary,
)
from macsweep.errors import MacsweepError

# Create Typer app
app = typer.Typer(
    name="macsweep",
    help="Find and remove macOS system data (caches, logs, temp files) safely",
    add_completion=False,
    no_args_is_help=True,
)


def setup_logging(verbose: bool = False) -> None:
    """Send log records through rich to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=verbose)],
        force=True,
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"macsweep version {__version__}")
        raise typer.Exit()


def _config(ctx: typer.Context) -> CleanerConfig:
    return ctx.obj


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging."),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        min=1,
        envvar="MACSWEEP_WORKERS",
        help="Maximum parallel size jobs (default: CPU count).",
    ),
    chunk_size: Optional[int] = typer.Option(
        None,
        "--chunk-size",
        min=1,
        envvar="MACSWEEP_CHUNK_SIZE",
        help="Jobs submitted at a time when sizing directory children.",
    ),
) -> None:
    """macsweep - inspect and clean macOS system data."""
    setup_logging(verbose)
    try:
        ctx.obj = CleanerConfig.default(max_workers=workers, chunk_size=chunk_size)
    except ValidationError as e:
        show_error(f"Invalid configuration: {e}")
        raise typer.Exit(1)


@app.command()
def scan(ctx: typer.Context) -> None:
    """Show all system data locations and their sizes."""
    config = _config(ctx)
    console.print("[bold blue]Analyzing system data locations...[/bold blue]\n")

    with show_scanning_progress() as progress:
        task = progress.add_task("Scanning...", total=len(config.system_locations))

        def update_progress(path: str, current: int, total: int):
            progress.update(task, completed=current, description=f"Scanned {path}")

        summary = scan_system_data(config, progress_callback=update_progress)

    console.print()
    show_scan_summary(summary)


@app.command()
def inspect(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Directory to inspect"),
) -> None:
    """Show the contents of a directory with sizes."""
    config = _config(ctx)

    try:
        with show_scanning_progress() as progress:
            task = progress.add_task("Sizing entries...", total=None)

            def update_progress(child: str, current: int, total: int):
                progress.update(task, completed=current, total=total)

            entries = inspect_directory(
                path, pool=make_pool(config), progress_callback=update_progress
            )
    except MacsweepError as e:
        show_error(str(e))
        raise typer.Exit(1)

    show_inspection(resolve_path(path), entries)


@app.command()
def remove(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File or directory to remove"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be removed without deleting"),
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation prompt"),
) -> None:
    """Remove a specific file or directory."""
    config = _config(ctx)
    target = resolve_path(path)

    try:
        # Guard and existence checks run before anything is asked or deleted
        preview = remove_path(target, config, dry_run=True)
        if dry_run:
            show_removal_outcome(preview)
            return

        if not yes and not confirm_action(
            f"Permanently remove {target} ({preview.size.size_human})?"
        ):
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(0)

        outcome = remove_path(target, config, known_size=preview.size)
    except MacsweepError as e:
        show_error(str(e))
        raise typer.Exit(1)

    show_removal_outcome(outcome)


if __name__ == "__main__":
    app()
