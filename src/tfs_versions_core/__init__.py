"""tfs_versions_core: versions controller that stores wiki pages in a TFS workspace."""

from .command import CommandResult, run_command
from .errors import BackendCommandError, ConfigError, VersionsError
from .filesystem import DiskFileSystem, FileSystem
from .vcs import (
    BackendVersionsController,
    ContentFileVersion,
    FileVersion,
    NullBackend,
    RevisionFileVersion,
    TfBackend,
    VcsBackend,
    VersionInfo,
    VersionsController,
    build_controller,
    resolve_backend,
)

__all__ = [
    "BackendCommandError",
    "BackendVersionsController",
    "CommandResult",
    "ConfigError",
    "ContentFileVersion",
    "DiskFileSystem",
    "FileSystem",
    "FileVersion",
    "NullBackend",
    "RevisionFileVersion",
    "TfBackend",
    "VcsBackend",
    "VersionInfo",
    "VersionsController",
    "VersionsError",
    "build_controller",
    "resolve_backend",
    "run_command",
]
