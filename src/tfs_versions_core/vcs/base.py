"""Versioning contract and data types shared by hosts and backends."""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, List, Protocol

if TYPE_CHECKING:
    from ..filesystem import FileSystem


class FileVersion(Protocol):
    """One requested or observed state of a single file."""

    @property
    def path(self) -> Path: ...

    @property
    def author(self) -> str: ...

    @property
    def last_modified(self) -> datetime: ...

    def get_content(self) -> BinaryIO:
        """Open a new stream over the file content. The caller closes it."""
        ...


@dataclass(frozen=True)
class ContentFileVersion:
    """File version supplied by a host, with its content held in memory."""
    path: Path
    content: bytes = field(repr=False)
    author: str = ""
    last_modified: datetime = field(default_factory=datetime.now)

    def get_content(self) -> BinaryIO:
        return io.BytesIO(self.content)


@dataclass(frozen=True)
class RevisionFileVersion:
    """File version that reads through to the filesystem on demand."""
    path: Path
    filesystem: "FileSystem" = field(repr=False, compare=False)
    author: str = ""

    @property
    def last_modified(self) -> datetime:
        return self.filesystem.last_modified(self.path)

    def get_content(self) -> BinaryIO:
        return self.filesystem.open_read(self.path)


@dataclass(frozen=True)
class VersionInfo:
    """Record of a completed write handed back to the host."""
    author: str
    timestamp: datetime


class VcsBackend(Protocol):
    """Bookkeeping commands a version-control backend must accept."""

    def add(self, path: Path) -> None: ...

    def checkout(self, path: Path) -> None: ...

    def delete(self, path: Path) -> None: ...

    def undo(self, path: Path) -> None: ...

    def has_pending_change(self, path: Path) -> bool:
        """True when ``path`` has uncommitted changes in the backend workspace."""
        ...


class VersionsController(ABC):
    """Versioning capabilities a wiki host expects from its storage plugin."""

    @abstractmethod
    def configure_history_depth(self, depth: int) -> None:
        pass

    @abstractmethod
    def query_revisions(self, label: str, *files: Path) -> List[FileVersion]:
        pass

    @abstractmethod
    def query_history(self, *files: Path) -> List[VersionInfo]:
        pass

    @abstractmethod
    def write(self, *file_versions: FileVersion) -> VersionInfo:
        pass

    @abstractmethod
    def delete(self, *file_versions: FileVersion) -> None:
        pass

    @abstractmethod
    def add_directory(self, dir_version: FileVersion) -> VersionInfo:
        pass

    @abstractmethod
    def rename(self, file_version: FileVersion, old_path: Path) -> None:
        pass
