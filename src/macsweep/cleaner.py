"""Removal execution with safety checks for macsweep."""

import logging
import os
import shutil
import stat
import sys
from typing import Callable

from macsweep.config import resolve_path
from macsweep.errors import ProtectedPathError, RemovalPermissionError, TargetNotFoundError
from macsweep.guard import PathGuard
from macsweep.models import RemovalOutcome, SizeReport
from macsweep.scanner import aggregate

logger = logging.getLogger(__name__)


def _reason(error: OSError) -> str:
    return error.strerror or str(error)


def _rmtree(path: str, onexc: Callable[[Callable, str, BaseException], None]) -> None:
    if sys.version_info >= (3, 12):
        shutil.rmtree(path, onexc=onexc)
    else:
        shutil.rmtree(path, onerror=lambda func, p, exc_info: onexc(func, p, exc_info[1]))


class Remover:
    """
    Deletes files and directories that pass the path guard.

    Removal is not transactional: if it fails partway through a tree, whatever
    was already deleted stays deleted.
    """

    def __init__(
        self,
        guard: PathGuard | None = None,
        aggregate_fn: Callable[[str], SizeReport] | None = None,
    ):
        self.guard = guard or PathGuard()
        self.aggregate_fn = aggregate_fn or aggregate

    def remove(
        self,
        path: str | os.PathLike,
        dry_run: bool = False,
        known_size: SizeReport | None = None,
    ) -> RemovalOutcome:
        """
        Remove a file or directory tree.

        Args:
            path: Path to remove (may contain ~ or be relative)
            dry_run: If True, measure and report but don't delete
            known_size: Size already measured for this path; skips the walk

        Returns:
            RemovalOutcome describing what was (or would be) removed

        Raises:
            ProtectedPathError: path is protected; nothing is touched
            TargetNotFoundError: path does not exist
            RemovalPermissionError: the OS refused to remove the target
        """
        target = resolve_path(os.fspath(path))

        if self._is_protected(target):
            raise ProtectedPathError(target)

        try:
            st = os.lstat(target)
        except FileNotFoundError:
            raise TargetNotFoundError(target)
        except PermissionError as e:
            raise RemovalPermissionError(target, _reason(e)) from e

        is_directory = stat.S_ISDIR(st.st_mode)

        # Measured (or carried over from a dry run) so the caller can report it
        size = known_size if known_size is not None else self.aggregate_fn(target)

        if dry_run:
            logger.info("Dry run: would remove %s (%s)", target, size.size_human)
            return RemovalOutcome(
                path=target,
                was_directory=is_directory,
                size=size,
                executed=False,
            )

        skipped = self._delete_tree(target) if is_directory else self._delete_file(target)

        return RemovalOutcome(
            path=target,
            was_directory=is_directory,
            size=size,
            executed=True,
            skipped=skipped,
        )

    def _is_protected(self, target: str) -> bool:
        """Check the path as given and with its parent directory resolved.

        Only the parent is resolved, so a symlink that is itself the target
        is still judged (and unlinked) as a link.
        """
        if self.guard.is_protected(target):
            return True
        parent = os.path.realpath(os.path.dirname(target))
        return self.guard.is_protected(os.path.join(parent, os.path.basename(target)))

    def _delete_file(self, target: str) -> list[str]:
        try:
            os.unlink(target)
        except FileNotFoundError:
            raise TargetNotFoundError(target)
        except OSError as e:
            raise RemovalPermissionError(target, _reason(e)) from e
        return []

    def _delete_tree(self, target: str) -> list[str]:
        """Remove a directory tree, tolerating sub-entries that are gone or stuck."""
        skipped: list[str] = []
        root_error: list[OSError] = []

        def on_error(func: Callable, failed_path: str, error: BaseException) -> None:
            if isinstance(error, FileNotFoundError):
                return
            if not isinstance(error, OSError):
                raise error
            if os.path.normpath(failed_path) == target:
                root_error.append(error)
                return
            logger.warning("Could not remove %s: %s", failed_path, _reason(error))
            skipped.append(failed_path)

        _rmtree(target, on_error)

        if root_error and os.path.lexists(target):
            if not skipped:
                raise RemovalPermissionError(target, _reason(root_error[0])) from root_error[0]
            logger.warning(
                "Left %s in place: %d entries under it could not be removed",
                target,
                len(skipped),
            )
        return skipped
