from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
import tomli_w

from tfs_versions_core.config import (
    DEFAULT_CONFIG_PATH,
    default_config,
    load_config_with_defaults,
    validate_config,
)
from tfs_versions_core.errors import ConfigError

from ..util import get_state

app = typer.Typer(help="Configuration inspection and validation")


def _strip_nulls(value: Any) -> Any:
    if isinstance(value, dict):
        cleaned: dict[str, Any] = {}
        for k, v in value.items():
            cleaned_v = _strip_nulls(v)
            if cleaned_v is not None:
                cleaned[k] = cleaned_v
        return cleaned
    return value


@app.command("show")
def config_show(ctx: typer.Context):
    """Print the effective config (defaults, file, TFS_Path) as JSON."""
    state = get_state(ctx)
    try:
        effective = load_config_with_defaults(config_path=state.config_path)
    except ConfigError as e:
        typer.echo(f"ConfigError: {e}")
        raise typer.Exit(1)
    typer.echo(json.dumps(effective, indent=2, default=str))


@app.command("validate")
def config_validate(ctx: typer.Context):
    """Validate the effective config; exit 0 if ok, 1 otherwise."""
    state = get_state(ctx)
    try:
        effective = load_config_with_defaults(config_path=state.config_path)
    except ConfigError as e:
        typer.echo(f"ConfigError: {e}")
        raise typer.Exit(1)

    errors = validate_config(effective)
    if errors:
        typer.echo("Validation failed:")
        for err in errors:
            typer.echo(f"- {err}")
        raise typer.Exit(1)

    typer.echo("Config is valid")


@app.command("init")
def config_init(
    ctx: typer.Context,
    root: str | None = typer.Option(None, "--root", help="Directory holding tf.exe"),
    provider: str = typer.Option("tf", "--provider", help="Backend provider: tf, null"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
):
    """Write a starter TOML config file."""
    state = get_state(ctx)
    path = state.config_path or Path(DEFAULT_CONFIG_PATH)
    if path.exists() and not force:
        typer.echo(f"Config exists: {path} (use --force to overwrite)")
        raise typer.Exit(1)

    data = default_config()
    data["backend"]["provider"] = provider
    data["backend"]["root"] = root
    errors = validate_config(data)
    if errors:
        typer.echo("Validation failed:")
        for err in errors:
            typer.echo(f"- {err}")
        raise typer.Exit(1)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(tomli_w.dumps(_strip_nulls(data)), encoding="utf-8")
    typer.echo(f"Wrote config: {path}")
