"""
Exceptions raised by the config synchronizer.
"""

from pathlib import Path


class SyncError(Exception):
    """Base exception for sync-related errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ConfigurationError(SyncError):
    """Raised when the requested options cannot be satisfied."""
    pass


class SourceNotFoundError(SyncError):
    """Raised when a required source path is missing."""

    def __init__(self, path: Path, what: str):
        self.path = path
        super().__init__(f"Required {what} not found: expected {path}")


class SourceAccessError(SyncError):
    """Raised when a source path exists but cannot be read."""

    def __init__(self, path: Path, error: OSError):
        self.path = path
        self.error = error
        super().__init__(f"Cannot read source {path}: {error.strerror or error}")


class BackupError(SyncError):
    """Raised when a requested backup could not be written. Nothing is synced afterwards."""
    pass
