"""Data models for macsweep."""

import os
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PathClassification(str, Enum):
    """Whether a path may be handed to the remover."""

    ALLOWED = "allowed"
    PROTECTED = "protected"


class SizeReport(BaseModel):
    """Aggregate size of a file or directory tree."""

    model_config = ConfigDict(frozen=True)

    total_bytes: int = Field(0, ge=0, description="Sum of apparent file sizes in bytes")
    item_count: int = Field(0, ge=0, description="Number of leaf files counted")

    @classmethod
    def zero(cls) -> "SizeReport":
        """Report for a path that is empty or could not be read."""
        return cls(total_bytes=0, item_count=0)

    @property
    def is_zero(self) -> bool:
        return self.total_bytes == 0 and self.item_count == 0

    @property
    def size_human(self) -> str:
        """Human-readable size string (decimal units like macOS)."""
        if self.total_bytes >= 1000**3:
            return f"{self.total_bytes / (1000**3):.1f} GB"
        elif self.total_bytes >= 1000**2:
            return f"{self.total_bytes / (1000**2):.1f} MB"
        elif self.total_bytes >= 1000:
            return f"{self.total_bytes / 1000:.1f} KB"
        else:
            return f"{self.total_bytes} B"


class DirectoryEntryReport(SizeReport):
    """Size report for an immediate child of an inspected directory."""

    name: str = Field(..., description="Entry name within its parent")
    path: str = Field(..., description="Absolute path of the entry")
    is_directory: bool = Field(False, description="Whether the entry is a directory")
    modified_at: datetime = Field(..., description="Last modification time")


class ScanTarget(BaseModel):
    """A location to measure, with a display label."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Absolute path to scan")
    label: str = Field("", description="Human-readable name for the location")

    @field_validator("path")
    @classmethod
    def _must_be_absolute(cls, value: str) -> str:
        if not os.path.isabs(value):
            raise ValueError(f"scan target must be absolute: {value!r}")
        return value


class LocationReport(BaseModel):
    """Size of one scan target."""

    model_config = ConfigDict(frozen=True)

    target: ScanTarget
    size: SizeReport

    @property
    def path(self) -> str:
        return self.target.path

    @property
    def total_bytes(self) -> int:
        return self.size.total_bytes


class ScanSummary(BaseModel):
    """Result of scanning all configured system locations."""

    timestamp: datetime = Field(default_factory=datetime.now)
    locations: list[LocationReport] = Field(default_factory=list)

    @property
    def total_bytes(self) -> int:
        """Grand total across all locations."""
        return sum(r.size.total_bytes for r in self.locations)

    @property
    def total_items(self) -> int:
        """Total number of files across all locations."""
        return sum(r.size.item_count for r in self.locations)


class RemovalOutcome(BaseModel):
    """Result of a remove operation."""

    path: str = Field(..., description="Path that was removed (or would be)")
    was_directory: bool = Field(False, description="Whether the target was a directory")
    size: SizeReport = Field(default_factory=SizeReport.zero, description="Size before removal")
    executed: bool = Field(False, description="False when this was a dry run")
    skipped: list[str] = Field(
        default_factory=list,
        description="Sub-entries that could not be removed",
    )

    @property
    def dry_run(self) -> bool:
        return not self.executed

    @property
    def complete(self) -> bool:
        """Whether everything under the target was removed."""
        return self.executed and not self.skipped
