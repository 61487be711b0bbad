"""Versions controller that pairs disk writes with backend bookkeeping."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from ..filesystem import DiskFileSystem, FileSystem
from .base import (
    FileVersion,
    RevisionFileVersion,
    VcsBackend,
    VersionInfo,
    VersionsController,
)

logger = logging.getLogger(__name__)


def _file_names(file_versions: tuple[FileVersion, ...]) -> str:
    return "".join(f"File: {version.path}\n" for version in file_versions)


class BackendVersionsController(VersionsController):
    """
    Keeps a backend workspace in step with the files a host writes.

    Every local change is followed by the matching backend command: new files
    and directories are added, existing files are checked out before they are
    overwritten, and deletions are routed through the backend. History is not
    kept here; the backend owns it.
    """

    def __init__(self, backend: VcsBackend, filesystem: Optional[FileSystem] = None):
        self.backend = backend
        self.filesystem = filesystem or DiskFileSystem()
        self.history_depth: Optional[int] = None

    def configure_history_depth(self, depth: int) -> None:
        logger.info(f"History depth set to {depth}")
        self.history_depth = depth

    def query_revisions(self, label: str, *files: Path) -> List[FileVersion]:
        logger.info(f"Revision data requested, label={label}")
        versions: List[FileVersion] = []
        for file in files:
            if self.filesystem.exists(file):
                logger.debug(f" -- file = {file}")
                versions.append(RevisionFileVersion(path=Path(file), filesystem=self.filesystem))
        return versions

    def query_history(self, *files: Path) -> List[VersionInfo]:
        logger.info("History requested")
        return []

    def write(self, *file_versions: FileVersion) -> VersionInfo:
        if not file_versions:
            raise ValueError("write requires at least one file version")

        for version in file_versions:
            target = Path(version.path)
            self._ensure_directory(target.parent)

            is_new = not self.filesystem.exists(target)
            content = version.get_content()
            try:
                self.filesystem.make_file(target, content)
            finally:
                content.close()

            if is_new:
                self.backend.add(target)
            else:
                self.backend.checkout(target)

        # Batched writes report the first version only.
        first = file_versions[0]
        return VersionInfo(author=first.author, timestamp=first.last_modified)

    def delete(self, *file_versions: FileVersion) -> None:
        logger.info(f"Deleting files:\n{_file_names(file_versions)}")
        for version in file_versions:
            self._delete_path(Path(version.path))

    def add_directory(self, dir_version: FileVersion) -> VersionInfo:
        logger.info(f"Adding directory {dir_version.path}")
        path = Path(dir_version.path)
        self._ensure_directory(path)
        return VersionInfo(author=dir_version.author, timestamp=self.filesystem.last_modified(path))

    def rename(self, file_version: FileVersion, old_path: Path) -> None:
        # The backend is not told; it records a delete plus an add.
        logger.info(f"Renaming {old_path} -> {file_version.path}")
        self.filesystem.rename(Path(file_version.path), Path(old_path))

    def _ensure_directory(self, path: Path) -> None:
        if not self.filesystem.exists(path):
            self.filesystem.make_directory(path)
            self.backend.add(path)

    def _delete_path(self, path: Path) -> None:
        if self.filesystem.is_directory(path):
            for child in self.filesystem.list_children(path):
                self._delete_path(child)

        if self.backend.has_pending_change(path):
            # A pending change blocks a backend delete; discard it first.
            self.backend.undo(path)
            self.filesystem.delete(path)
        else:
            self.backend.delete(path)
