"""Team Foundation (tf.exe) VCS backend."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..command import CommandResult, CommandRunner, run_command
from ..errors import BackendCommandError

logger = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = "tf.exe"


class TfBackend:
    """
    Drives a TFS workspace through the ``tf`` command-line client.

    Each operation is one ``tf <subcommand> <path>`` invocation. Command
    output is never parsed beyond counting lines, and unless ``strict`` is
    set a failing command is logged and otherwise ignored.
    """

    def __init__(
        self,
        root: Optional[str | Path] = None,
        *,
        executable: str = DEFAULT_EXECUTABLE,
        runner: CommandRunner = run_command,
        timeout: Optional[float] = None,
        strict: bool = False,
    ):
        self.root = Path(root) if root else None
        self.executable = executable
        self.runner = runner
        self.timeout = timeout
        self.strict = strict

    @property
    def executable_path(self) -> Optional[Path]:
        """Path to the client, or None when no root is configured."""
        if self.root is None:
            return None
        return self.root / self.executable

    def run(self, subcommand: str, path: Path) -> CommandResult:
        executable = self.executable_path
        if executable is None:
            # Never fall back to whatever tf.exe is on PATH.
            logger.warning(f"Cannot run tf {subcommand}: backend root is not configured")
            argv = [self.executable, subcommand, str(path)]
            result = CommandResult(argv=argv, output="Error: backend root is not configured")
        else:
            argv = [str(executable), subcommand, str(path)]
            result = self.runner(argv, timeout=self.timeout)
        logger.debug(f"tf {subcommand} {path} -> {result.returncode}: {result.output.strip()}")
        if self.strict and not result.ok:
            raise BackendCommandError(
                f"tf {subcommand} failed for {path}: {result.output.strip() or result.returncode}",
                result,
            )
        return result

    def add(self, path: Path) -> None:
        self.run("add", path)

    def checkout(self, path: Path) -> None:
        self.run("checkout", path)

    def delete(self, path: Path) -> None:
        self.run("delete", path)

    def undo(self, path: Path) -> None:
        self.run("undo", path)

    def status(self, path: Path) -> CommandResult:
        return self.run("status", path)

    def has_pending_change(self, path: Path) -> bool:
        # tf prints a header line plus one line per pending change.
        return self.status(path).line_count > 1
