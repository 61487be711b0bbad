from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest
from hypothesis import settings

from tfs_versions_core.command import CommandResult
from tfs_versions_core.filesystem import DiskFileSystem
from tfs_versions_core.vcs import BackendVersionsController, TfBackend

# Prevent Hypothesis from writing a local example database (e.g. `.hypothesis/`) during tests.
settings.register_profile("tfs-tests", database=None)
settings.load_profile("tfs-tests")


class EventLog(list):
    """Ordered record of backend commands and filesystem mutations."""

    def commands(self) -> List[Tuple[str, Path]]:
        return [(name, path) for kind, name, path in self if kind == "tf"]

    def subcommands(self) -> List[str]:
        return [name for kind, name, _ in self if kind == "tf"]


class RecordingRunner:
    """Stands in for tf.exe; status output is looked up per path."""

    def __init__(self, events: EventLog, status_output: Optional[Dict[Path, str]] = None):
        self.events = events
        self.status_output = status_output if status_output is not None else {}
        self.calls: List[List[str]] = []
        self.timeouts: List[Optional[float]] = []

    def __call__(self, argv, *, timeout=None) -> CommandResult:
        argv = list(argv)
        self.calls.append(argv)
        self.timeouts.append(timeout)
        subcommand, path = argv[1], Path(argv[2])
        self.events.append(("tf", subcommand, path))
        output = ""
        if subcommand == "status":
            output = self.status_output.get(path, "There are no pending changes.\n")
        return CommandResult(argv=argv, output=output, returncode=0)


class SpyFileSystem(DiskFileSystem):
    def __init__(self, events: EventLog):
        self.events = events

    def delete(self, path: Path) -> None:
        self.events.append(("fs", "delete", Path(path)))
        super().delete(path)

    def rename(self, new_path: Path, old_path: Path) -> None:
        self.events.append(("fs", "rename", Path(new_path)))
        super().rename(new_path, old_path)


PENDING = "File name   Change   Local path\n$/wiki/page.txt   edit   C:\\wiki\\page.txt\n"


@pytest.fixture
def events() -> EventLog:
    return EventLog()


@pytest.fixture
def runner(events: EventLog) -> RecordingRunner:
    return RecordingRunner(events)


@pytest.fixture
def controller(events: EventLog, runner: RecordingRunner) -> BackendVersionsController:
    backend = TfBackend(root="C:/tfs", runner=runner)
    return BackendVersionsController(backend, filesystem=SpyFileSystem(events))
