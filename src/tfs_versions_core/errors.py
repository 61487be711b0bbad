"""Exception types raised by tfs_versions_core."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .command import CommandResult


class VersionsError(Exception):
    """Base exception for version-control adapter failures."""
    pass


class ConfigError(VersionsError, ValueError):
    """Raised when configuration cannot be loaded or is invalid."""
    pass


class BackendCommandError(VersionsError):
    """Raised in strict mode when a backend command fails."""

    def __init__(self, message: str, result: "CommandResult"):
        super().__init__(message)
        self.result = result
