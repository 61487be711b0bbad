"""Backend that keeps no version control at all."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class NullBackend:
    """
    No-op backend for hosts without a version-control workspace.

    Every path reports a pending change so deletes fall through to the local
    filesystem.
    """

    def add(self, path: Path) -> None:
        logger.debug(f"null add {path}")

    def checkout(self, path: Path) -> None:
        logger.debug(f"null checkout {path}")

    def delete(self, path: Path) -> None:
        logger.debug(f"null delete {path}")

    def undo(self, path: Path) -> None:
        logger.debug(f"null undo {path}")

    def has_pending_change(self, path: Path) -> bool:
        return True
