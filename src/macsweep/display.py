"""Rich terminal display for macsweep."""

from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from macsweep.models import DirectoryEntryReport, RemovalOutcome, ScanSummary

console = Console()


def format_size(size_bytes: int) -> str:
    """Format bytes to human-readable string (decimal units like macOS)."""
    if size_bytes >= 1000**3:
        return f"{size_bytes / (1000**3):.1f} GB"
    elif size_bytes >= 1000**2:
        return f"{size_bytes / (1000**2):.1f} MB"
    elif size_bytes >= 1000:
        return f"{size_bytes / 1000:.1f} KB"
    else:
        return f"{size_bytes} B"


def show_scan_summary(summary: ScanSummary) -> None:
    """Display system data locations and the grand total."""
    if not summary.locations:
        console.print("[yellow]No system data found in the scanned locations.[/yellow]")
        return

    table = Table(title="System Data Analysis", show_header=True, header_style="bold")
    table.add_column("Location")
    table.add_column("Path", style="dim", overflow="fold")
    table.add_column("Size", justify="right")
    table.add_column("Files", justify="right")

    for item in summary.locations:
        table.add_row(
            item.target.label or item.path,
            item.path,
            format_size(item.size.total_bytes),
            str(item.size.item_count),
        )

    console.print(table)
    console.print(
        Panel(
            f"[bold]Total System Data Size:[/bold] {format_size(summary.total_bytes)}\n"
            f"[bold]Total Files:[/bold] {summary.total_items}",
            title="Summary",
            border_style="blue",
        )
    )


def show_inspection(path: str, entries: list[DirectoryEntryReport]) -> None:
    """Display the children of an inspected directory."""
    console.print(f"\n[bold]Analyzing contents of:[/bold] {path}\n")

    if not entries:
        console.print("[yellow]Directory is empty.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Name")
    table.add_column("Size", justify="right")
    table.add_column("Files", justify="right")
    table.add_column("Type")
    table.add_column("Modified")

    for entry in entries:
        table.add_row(
            f"[cyan]{entry.name}/[/cyan]" if entry.is_directory else entry.name,
            format_size(entry.total_bytes),
            str(entry.item_count),
            "directory" if entry.is_directory else "file",
            entry.modified_at.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)
    total = sum(e.total_bytes for e in entries)
    console.print(f"[dim]{len(entries)} entries, {format_size(total)} total[/dim]")


def show_removal_outcome(outcome: RemovalOutcome) -> None:
    """Display the result of a remove operation."""
    kind = "directory" if outcome.was_directory else "file"

    if outcome.dry_run:
        console.print("[yellow]DRY RUN - No files were deleted[/yellow]")
        console.print(f"Would remove {kind}: {outcome.path}")
        console.print(
            f"Would free up: [bold]{format_size(outcome.size.total_bytes)}[/bold] "
            f"({outcome.size.item_count} files)"
        )
        return

    if outcome.skipped:
        console.print(f"[yellow]![/yellow] Partially removed: {outcome.path}")
        console.print(f"  [yellow]{len(outcome.skipped)} entries could not be removed[/yellow]")
        console.print(
            f"Freed up: at most [bold]{format_size(outcome.size.total_bytes)}[/bold] "
            "(approximate, measured before removal)"
        )
        return

    console.print(f"[green]✓[/green] Successfully removed: {outcome.path}")
    console.print(f"Freed up: [bold]{format_size(outcome.size.total_bytes)}[/bold]")


def show_error(message: str) -> None:
    console.print(f"[red]Error: {message}[/red]")


def show_scanning_progress() -> Progress:
    """Create progress bar for scanning."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=console,
    )


def confirm_action(message: str) -> bool:
    """Ask for confirmation."""
    from rich.prompt import Confirm

    return Confirm.ask(message)
