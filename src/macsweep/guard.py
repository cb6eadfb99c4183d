"""Protected-path checks that gate every removal."""

import os
from pathlib import PurePosixPath

from macsweep.config import ProtectedPathSet, collapse_root
from macsweep.models import PathClassification


def _segments(path: str) -> tuple[str, ...]:
    return PurePosixPath(collapse_root(os.path.normpath(path))).parts


class PathGuard:
    """Classifies absolute paths against a fixed denylist.

    Matching is by whole path segments, so "/Systemic" is not covered by
    "/System" even though the strings share a prefix.
    """

    def __init__(self, protected: ProtectedPathSet | None = None):
        self.protected = protected or ProtectedPathSet()
        self._prefixes = [_segments(p) for p in self.protected.prefixes]

    def is_protected(self, path: str | os.PathLike) -> bool:
        """
        Check whether a path is a protected path or lies beneath one.

        Args:
            path: Absolute path to check

        Returns:
            True if removal must be refused
        """
        candidate = _segments(os.fspath(path))
        return any(candidate[: len(prefix)] == prefix for prefix in self._prefixes)

    def classify(self, path: str | os.PathLike) -> PathClassification:
        if self.is_protected(path):
            return PathClassification.PROTECTED
        return PathClassification.ALLOWED
