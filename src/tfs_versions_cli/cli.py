from __future__ import annotations

from pathlib import Path

import typer

from .util import CliState, configure_logging

app = typer.Typer(help="tfs-versions: keep wiki pages in a TFS workspace")


@app.callback()
def _init(
    ctx: typer.Context,
    config: Path | None = typer.Option(None, "--config", help="Config file (default: tfs_versions.toml)"),
    verbosity: str | None = typer.Option(None, "--verbosity", "-v", help="Log level: debug, info, warning, error"),
):
    ctx.obj = CliState(config_path=config, verbosity=verbosity)
    if verbosity:
        configure_logging(verbosity)


# Subcommands are registered in commands/*.py
from .commands import config_cmd  # noqa: E402
from .commands import pages  # noqa: E402
from .commands.doctor import doctor as doctor_fn  # noqa: E402

app.command(name="write")(pages.write)
app.command(name="delete")(pages.delete)
app.command(name="mkdir")(pages.mkdir)
app.command(name="rename")(pages.rename)
app.command(name="revisions")(pages.revisions)
app.command(name="history")(pages.history)
app.add_typer(config_cmd.app, name="config", help="Configuration inspection")
app.command(name="doctor")(doctor_fn)


def main():
    app()
