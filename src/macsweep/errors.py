"""Error types raised by macsweep operations."""


class MacsweepError(Exception):
    """Base exception for all macsweep failures surfaced to callers."""

    def __init__(self, message: str, path: str, reason: str | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.reason = reason


class ProtectedPathError(MacsweepError):
    """Raised when a remove targets a protected system path."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Cannot remove protected system path: {path}", path)


class TargetNotFoundError(MacsweepError):
    """Raised when the target of an operation does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"No such file or directory: {path}", path)


class RemovalPermissionError(MacsweepError):
    """Raised when the OS refuses to remove the target itself."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to remove {path}: {reason}", path, reason)


class InspectionError(MacsweepError):
    """Raised when a path cannot be listed for inspection."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot inspect {path}: {reason}", path, reason)
