"""Location lists and runtime settings for macsweep.

Everything here is built once per process and passed explicitly into the
scanner, worker pool and guard. Nothing is mutated after construction.
"""

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from macsweep.models import ScanTarget

# (path, label); "~" is expanded against the user's home when the config is built
SYSTEM_LOCATIONS: tuple[tuple[str, str], ...] = (
    ("/private/var/db/diagnostics", "Diagnostics Logs"),
    ("/private/var/folders", "Per-User Temp Folders"),
    ("/private/var/log", "System Logs"),
    ("/Library/Caches", "System Caches"),
    ("/Library/Logs", "Library Logs"),
    ("/System/Library/Caches", "macOS Caches"),
    ("/private/var/vm", "Swap and Sleep Image"),
    ("/private/var/tmp", "System Temp"),
    ("~/Library/Caches", "User Caches"),
    ("~/Library/Containers", "App Containers"),
    ("~/Library/Application Support", "Application Support"),
)

# Paths that must never be removed
PROTECTED_PATHS: tuple[str, ...] = (
    "/System",
    "/Library/LaunchDaemons",
    "/Library/LaunchAgents",
    "/System/Library/LaunchDaemons",
    "/System/Library/LaunchAgents",
)

DEFAULT_CHUNK_SIZE = 32


def default_worker_count() -> int:
    """Number of processing units available on this host."""
    return os.cpu_count() or 1


def resolve_path(raw: str) -> str:
    """Expand ~ and environment variables and normalize to an absolute path.

    Symlinks are left in place; only "." and ".." segments are collapsed.
    A leading "//" becomes "/" too.
    """
    return collapse_root(os.path.abspath(os.path.expanduser(os.path.expandvars(raw))))


def collapse_root(path: str) -> str:
    """Reduce any run of leading slashes on an absolute path to one."""
    if path.startswith("//"):
        return "/" + path.lstrip("/")
    return path


class ProtectedPathSet(BaseModel):
    """Ordered, immutable set of absolute path prefixes."""

    model_config = ConfigDict(frozen=True)

    prefixes: tuple[str, ...] = Field(
        default=PROTECTED_PATHS,
        description="Absolute, normalized paths that guard their whole subtree",
    )

    @field_validator("prefixes")
    @classmethod
    def _must_be_normalized(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        seen: list[str] = []
        for prefix in value:
            if not os.path.isabs(prefix):
                raise ValueError(f"protected path must be absolute: {prefix!r}")
            if os.path.normpath(prefix) != prefix or prefix.startswith("//"):
                raise ValueError(f"protected path must be normalized: {prefix!r}")
            if prefix not in seen:
                seen.append(prefix)
        return tuple(seen)


class CleanerConfig(BaseModel):
    """Immutable configuration for one macsweep run."""

    model_config = ConfigDict(frozen=True)

    system_locations: tuple[ScanTarget, ...] = Field(
        default_factory=tuple,
        description="Locations measured by the scan command",
    )
    protected_paths: ProtectedPathSet = Field(
        default_factory=ProtectedPathSet,
        description="Paths the remover refuses to touch",
    )
    max_workers: int = Field(
        default_factory=default_worker_count,
        ge=1,
        description="Upper bound on concurrent aggregation jobs",
    )
    chunk_size: int = Field(
        default=DEFAULT_CHUNK_SIZE,
        ge=1,
        description="Jobs submitted per chunk when sizing directory children",
    )

    @classmethod
    def default(
        cls,
        home: Path | None = None,
        max_workers: int | None = None,
        chunk_size: int | None = None,
    ) -> "CleanerConfig":
        """
        Build the standard macOS configuration.

        Args:
            home: Home directory for "~" locations (default: current user's)
            max_workers: Worker ceiling (default: CPU count)
            chunk_size: Intra-directory chunk size (default: 32)

        Returns:
            Validated CleanerConfig
        """
        home_str = str(home if home is not None else Path.home())
        targets = []
        for raw, label in SYSTEM_LOCATIONS:
            if raw.startswith("~"):
                raw = home_str + raw[1:]
            targets.append(ScanTarget(path=os.path.normpath(raw), label=label))

        settings: dict = {"system_locations": tuple(targets)}
        if max_workers is not None:
            settings["max_workers"] = max_workers
        if chunk_size is not None:
            settings["chunk_size"] = chunk_size
        return cls(**settings)
