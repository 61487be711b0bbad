from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import typer

from tfs_versions_core.config import get_config_value, load_config_with_defaults
from tfs_versions_core.errors import VersionsError
from tfs_versions_core.vcs import BackendVersionsController, build_controller

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@dataclass
class CliState:
    """Options collected by the root callback, shared with every command."""
    config_path: Optional[Path] = None
    verbosity: Optional[str] = None
    _config: Optional[Dict[str, Any]] = field(default=None, repr=False)

    def config(self) -> Dict[str, Any]:
        if self._config is None:
            self._config = load_config_with_defaults(config_path=self.config_path)
            if self.verbosity is None:
                configure_logging(get_config_value(self._config, "log.verbosity", "info"))
        return self._config


def configure_logging(verbosity: str) -> None:
    level = getattr(logging, str(verbosity).upper(), logging.INFO)
    logging.basicConfig(format=LOG_FORMAT, level=level, force=True)


def get_state(ctx: typer.Context) -> CliState:
    if not isinstance(ctx.obj, CliState):
        ctx.obj = CliState()
    return ctx.obj


def get_controller(ctx: typer.Context) -> BackendVersionsController:
    return build_controller(get_state(ctx).config())


@contextmanager
def handle_errors() -> Iterator[None]:
    """Report adapter and I/O failures as a one-line message and exit code 1."""
    try:
        yield
    except (VersionsError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
