"""VCS abstraction layer for wiki page storage."""

from .base import (
    ContentFileVersion,
    FileVersion,
    RevisionFileVersion,
    VcsBackend,
    VersionInfo,
    VersionsController,
)
from .controller import BackendVersionsController
from .factory import build_controller, resolve_backend
from .null_backend import NullBackend
from .tf_backend import TfBackend

__all__ = [
    "BackendVersionsController",
    "ContentFileVersion",
    "FileVersion",
    "NullBackend",
    "RevisionFileVersion",
    "TfBackend",
    "VcsBackend",
    "VersionInfo",
    "VersionsController",
    "build_controller",
    "resolve_backend",
]
