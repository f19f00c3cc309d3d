# Author: PB
# Maintainer: PB
# Original date: 2026.10.12
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/treerep/system/exceptions.py

"""
treerep-specific exception classes.

Callers distinguish bad input (InvalidArgumentError, never retriable) from
filesystem failures (FilesystemError and subclasses, which always chain the
underlying OSError via __cause__).
"""

from typing import Optional


class TreeRepError(Exception):
    """Base exception for all treerep-specific errors."""
    pass


class ConfigError(TreeRepError):
    """Raised when there are configuration validation or loading errors."""
    pass


class InvalidArgumentError(TreeRepError, ValueError):
    """Raised for missing or malformed input: fix the call, do not retry."""
    pass


class SnapshotStateError(TreeRepError, RuntimeError):
    """Raised when a change check is requested before any snapshot was taken."""
    pass


# === FILESYSTEM OPERATION ERRORS ===

class FilesystemError(TreeRepError, OSError):
    """Base class for filesystem operation errors."""

    def __init__(self, message: str, path: str = None, retry_possible: bool = False):
        self.path = path
        self.retry_possible = retry_possible
        super().__init__(message)


class ReplicationIOError(FilesystemError):
    """A directory creation or file copy failed during replication.

    When the rollback that follows also fails, the deletion error is kept in
    ``rollback_error`` instead of replacing this one.
    """

    def __init__(self, message: str, path: str = None, retry_possible: bool = False):
        self.rollback_error: Optional[Exception] = None
        super().__init__(message, path=path, retry_possible=retry_possible)


class RollbackError(FilesystemError):
    """Raised when a partially written destination tree could not be removed."""
    pass


class StorageIOError(FilesystemError):
    """Errors reading or writing single files (JSON store, file changes)."""
    pass
