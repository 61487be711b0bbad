"""Filesystem abstraction used by the versions controller."""

from __future__ import annotations

import shutil
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, List


class FileSystem(ABC):
    """Local file operations the controller delegates to."""

    @abstractmethod
    def exists(self, path: Path) -> bool:
        pass

    @abstractmethod
    def is_directory(self, path: Path) -> bool:
        pass

    @abstractmethod
    def list_children(self, path: Path) -> List[Path]:
        pass

    @abstractmethod
    def open_read(self, path: Path) -> BinaryIO:
        pass

    @abstractmethod
    def make_file(self, path: Path, content: BinaryIO) -> None:
        """Create or overwrite ``path`` with everything readable from ``content``."""
        pass

    @abstractmethod
    def make_directory(self, path: Path) -> None:
        pass

    @abstractmethod
    def last_modified(self, path: Path) -> datetime:
        pass

    @abstractmethod
    def delete(self, path: Path) -> None:
        """Remove a file or a whole directory tree. Missing paths are ignored."""
        pass

    @abstractmethod
    def rename(self, new_path: Path, old_path: Path) -> None:
        """Move ``old_path`` to ``new_path``."""
        pass


class DiskFileSystem(FileSystem):
    """FileSystem backed by the local disk."""

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def is_directory(self, path: Path) -> bool:
        return Path(path).is_dir()

    def list_children(self, path: Path) -> List[Path]:
        return sorted(Path(path).iterdir())

    def open_read(self, path: Path) -> BinaryIO:
        return Path(path).open("rb")

    def make_file(self, path: Path, content: BinaryIO) -> None:
        with Path(path).open("wb") as out:
            shutil.copyfileobj(content, out)

    def make_directory(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def last_modified(self, path: Path) -> datetime:
        return datetime.fromtimestamp(Path(path).stat().st_mtime)

    def delete(self, path: Path) -> None:
        target = Path(path)
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        elif target.exists() or target.is_symlink():
            target.unlink()

    def rename(self, new_path: Path, old_path: Path) -> None:
        shutil.move(str(old_path), str(new_path))
