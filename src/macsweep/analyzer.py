"""Scan, inspect and remove operations for macsweep."""

import logging
import os
from datetime import datetime

from macsweep.cleaner import Remover
from macsweep.config import CleanerConfig, resolve_path
from macsweep.dispatcher import ProgressCallback, WorkerPool
from macsweep.errors import InspectionError, TargetNotFoundError
from macsweep.guard import PathGuard
from macsweep.models import (
    DirectoryEntryReport,
    LocationReport,
    RemovalOutcome,
    ScanSummary,
    SizeReport,
)
from macsweep.scanner import EntryFailure, absorb_entry_failure, list_directory

logger = logging.getLogger(__name__)


def make_pool(config: CleanerConfig) -> WorkerPool:
    """Build a worker pool from the run configuration."""
    return WorkerPool(max_workers=config.max_workers, chunk_size=config.chunk_size)


def scan_system_data(
    config: CleanerConfig,
    pool: WorkerPool | None = None,
    progress_callback: ProgressCallback | None = None,
    include_empty: bool = False,
) -> ScanSummary:
    """
    Measure every configured system location.

    Args:
        config: Run configuration holding the location list
        pool: Worker pool to use (default: built from config)
        progress_callback: Optional callback(path, current, total)
        include_empty: Keep locations that measured zero (missing or unreadable)

    Returns:
        ScanSummary with locations sorted by size, largest first
    """
    pool = pool or make_pool(config)
    targets = list(config.system_locations)
    logger.debug("Scanning %d locations with %d workers", len(targets), pool.max_workers)

    results = pool.run_batched([t.path for t in targets], progress_callback=progress_callback)

    locations = [
        LocationReport(target=target, size=size)
        for target, (_, size) in zip(targets, results)
        if include_empty or size.total_bytes > 0
    ]
    locations.sort(key=lambda r: r.size.total_bytes, reverse=True)

    return ScanSummary(timestamp=datetime.now(), locations=locations)


def inspect_directory(
    path: str | os.PathLike,
    pool: WorkerPool | None = None,
    progress_callback: ProgressCallback | None = None,
) -> list[DirectoryEntryReport]:
    """
    List the immediate children of a directory with each child's total size.

    Children that cannot be stat'ed are skipped with a warning. Directory
    children are sized in parallel; files and symlinks use their own size.

    Args:
        path: Directory to inspect (may contain ~ or be relative)
        pool: Worker pool to use (default: one worker per CPU)
        progress_callback: Optional callback(path, current, total)

    Returns:
        DirectoryEntryReports sorted by size, largest first

    Raises:
        TargetNotFoundError: path does not exist
        InspectionError: path is not a directory or cannot be listed
    """
    directory = resolve_path(os.fspath(path))
    pool = pool or WorkerPool()

    listing = list_directory(directory)
    if isinstance(listing, EntryFailure):
        if isinstance(listing.error, FileNotFoundError):
            raise TargetNotFoundError(directory)
        raise InspectionError(directory, listing.error.strerror or str(listing.error))

    children: list[tuple[os.DirEntry, os.stat_result, bool]] = []
    for entry in listing:
        try:
            st = entry.stat(follow_symlinks=False)
            is_directory = entry.is_dir(follow_symlinks=False)
        except OSError as e:
            absorb_entry_failure(EntryFailure(entry.path, e))
            continue
        children.append((entry, st, is_directory))

    directory_paths = [entry.path for entry, _, is_directory in children if is_directory]
    sizes = dict(pool.run_chunked(directory_paths, progress_callback=progress_callback))

    reports = []
    for entry, st, is_directory in children:
        if is_directory:
            size = sizes[entry.path]
        else:
            size = SizeReport(total_bytes=st.st_size, item_count=1)
        reports.append(
            DirectoryEntryReport(
                name=entry.name,
                path=entry.path,
                total_bytes=size.total_bytes,
                item_count=size.item_count,
                is_directory=is_directory,
                modified_at=datetime.fromtimestamp(st.st_mtime),
            )
        )

    reports.sort(key=lambda r: r.total_bytes, reverse=True)
    return reports


def remove_path(
    path: str | os.PathLike,
    config: CleanerConfig,
    dry_run: bool = False,
    known_size: SizeReport | None = None,
) -> RemovalOutcome:
    """
    Remove a path after checking it against the configured protected paths.

    Args:
        path: Path to remove (may contain ~ or be relative)
        config: Run configuration holding the protected path set
        dry_run: If True, report the would-be effect without deleting
        known_size: Size from an earlier dry run, reused instead of walking again

    Returns:
        RemovalOutcome
    """
    remover = Remover(guard=PathGuard(config.protected_paths))
    return remover.remove(path, dry_run=dry_run, known_size=known_size)
