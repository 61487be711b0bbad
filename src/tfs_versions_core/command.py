"""Synchronous execution of backend command lines."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Captured stdout of one command invocation."""
    argv: List[str]
    output: str
    returncode: Optional[int] = None  # None when the process never ran
    stderr: str = field(default="", repr=False)

    @property
    def launched(self) -> bool:
        return self.returncode is not None

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def line_count(self) -> int:
        return len(self.output.splitlines())


CommandRunner = Callable[..., CommandResult]


def _normalize_lines(text: str) -> str:
    return "".join(f"{line}\n" for line in text.splitlines())


def run_command(
    argv: Sequence[str],
    *,
    cwd: Optional[Path] = None,
    timeout: Optional[float] = None,
) -> CommandResult:
    """
    Run a command line and return its captured output.

    Blocks until the child exits. A launch failure or an expired timeout is
    not raised; the result carries ``"Error: <message>"`` as its output and
    no return code. The exit status is recorded but never interpreted here.

    Args:
        argv: Executable followed by its arguments.
        cwd: Working directory; inherited from this process when None.
        timeout: Seconds to wait before giving up, or None to wait forever.
    """
    args = [str(arg) for arg in argv]
    logger.debug(f"Running: {' '.join(args)}")
    try:
        completed = subprocess.run(
            args,
            cwd=cwd,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.warning(f"Failed to run {args[0] if args else '<empty>'}: {e}")
        return CommandResult(argv=args, output=f"Error: {e}")

    if completed.stderr:
        logger.debug(f"stderr from {args[0]}: {completed.stderr.strip()}")
    return CommandResult(
        argv=args,
        output=_normalize_lines(completed.stdout or ""),
        returncode=completed.returncode,
        stderr=completed.stderr or "",
    )
