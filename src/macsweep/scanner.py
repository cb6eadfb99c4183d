"""Recursive size aggregation for macsweep."""

import logging
import os
import stat
from typing import NamedTuple

from macsweep.models import SizeReport

logger = logging.getLogger(__name__)


class EntryProbe(NamedTuple):
    """What a single successful lstat tells the walk."""

    path: str
    is_directory: bool
    size: int


class EntryFailure(NamedTuple):
    """A stat or listing that failed for one entry."""

    path: str
    error: OSError


def probe_path(path: str) -> EntryProbe | EntryFailure:
    """lstat a path without following symlinks."""
    try:
        st = os.lstat(path)
    except OSError as e:
        return EntryFailure(path, e)
    return EntryProbe(path, stat.S_ISDIR(st.st_mode), st.st_size)


def _probe_entry(entry: os.DirEntry) -> EntryProbe | EntryFailure:
    try:
        is_directory = entry.is_dir(follow_symlinks=False)
        size = 0 if is_directory else entry.stat(follow_symlinks=False).st_size
    except OSError as e:
        return EntryFailure(entry.path, e)
    return EntryProbe(entry.path, is_directory, size)


def list_directory(path: str) -> list[os.DirEntry] | EntryFailure:
    """Read all entries of a directory, or the failure that stopped it."""
    try:
        with os.scandir(path) as entries:
            return list(entries)
    except OSError as e:
        return EntryFailure(path, e)


def absorb_entry_failure(failure: EntryFailure) -> int:
    """
    Skip an entry that could not be read during a walk.

    Permission errors, entries that vanished mid-walk and I/O errors all end
    here. The entry contributes nothing to the totals and the walk continues
    with its siblings.

    Returns:
        The byte count the entry contributes (always 0)
    """
    logger.warning("Skipping %s: %s", failure.path, failure.error.strerror or failure.error)
    return 0


def _walk_directory(root: str) -> tuple[int, int]:
    """Sum file sizes under root with an explicit stack (no depth limit)."""
    total_bytes = 0
    item_count = 0
    pending = [root]

    while pending:
        listing = list_directory(pending.pop())
        if isinstance(listing, EntryFailure):
            total_bytes += absorb_entry_failure(listing)
            continue

        for entry in listing:
            probe = _probe_entry(entry)
            if isinstance(probe, EntryFailure):
                total_bytes += absorb_entry_failure(probe)
            elif probe.is_directory:
                pending.append(probe.path)
            else:
                total_bytes += probe.size
                item_count += 1

    return total_bytes, item_count


def aggregate(path: str | os.PathLike) -> SizeReport:
    """
    Calculate the total size and file count under a path.

    Never raises. Symlinks are counted as leaves with their own size and are
    never followed. A root that cannot be stat'ed yields the zero report, which
    callers must read as "could not determine" rather than "empty".

    Args:
        path: File or directory to measure

    Returns:
        SizeReport with apparent byte total and leaf file count
    """
    root = os.fspath(path)
    probe = probe_path(root)

    if isinstance(probe, EntryFailure):
        if isinstance(probe.error, FileNotFoundError):
            logger.debug("Not found, treating as empty: %s", root)
        else:
            logger.warning("Cannot read %s: %s", root, probe.error.strerror or probe.error)
        return SizeReport.zero()

    if not probe.is_directory:
        return SizeReport(total_bytes=probe.size, item_count=1)

    total_bytes, item_count = _walk_directory(root)
    return SizeReport(total_bytes=total_bytes, item_count=item_count)
