"""
pages.py - Page storage commands.

Each command maps onto one operation of the versions controller so a wiki
operator can drive the TFS workspace by hand.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from tfs_versions_core.vcs import ContentFileVersion, VersionInfo

from ..util import get_controller, handle_errors

console = Console()


def _request(path: Path, author: str = "") -> ContentFileVersion:
    return ContentFileVersion(path=path, content=b"", author=author)


def _echo_version(action: str, path: Path, info: VersionInfo) -> None:
    author = info.author or "-"
    typer.echo(f"{action}: {path} (author={author}, timestamp={info.timestamp.isoformat()})")


def write(
    ctx: typer.Context,
    target: Path = typer.Argument(..., help="File to write"),
    source: Optional[Path] = typer.Option(
        None, "--from", exists=True, dir_okay=False, help="Read content from this file (default: stdin)",
    ),
    author: str = typer.Option("", "--author", "-a", help="Author recorded for the version"),
):
    """Write a file and add or check it out in the workspace."""
    if source is not None:
        content = source.read_bytes()
    else:
        content = typer.get_binary_stream("stdin").read()

    version = ContentFileVersion(path=target, content=content, author=author, last_modified=datetime.now())
    with handle_errors():
        info = get_controller(ctx).write(version)
    _echo_version("Wrote", target, info)


def delete(
    ctx: typer.Context,
    paths: List[Path] = typer.Argument(..., help="Files or directories to delete"),
):
    """Delete files or directory trees through the workspace."""
    with handle_errors():
        get_controller(ctx).delete(*[_request(path) for path in paths])
    for path in paths:
        typer.echo(f"Deleted: {path}")


def mkdir(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Directory to create"),
    author: str = typer.Option("", "--author", "-a", help="Author recorded for the version"),
):
    """Create a directory and add it to the workspace if it is new."""
    with handle_errors():
        info = get_controller(ctx).add_directory(_request(path, author))
    _echo_version("Directory", path, info)


def rename(
    ctx: typer.Context,
    old: Path = typer.Argument(..., exists=True, help="Existing path"),
    new: Path = typer.Argument(..., help="New path"),
):
    """Rename a file locally. The workspace is not told about the move."""
    with handle_errors():
        get_controller(ctx).rename(_request(new), old)
    typer.echo(f"Renamed: {old} -> {new}")


def revisions(
    ctx: typer.Context,
    paths: List[Path] = typer.Argument(..., help="Files to look up"),
    label: str = typer.Option("", "--label", help="Revision label passed to the controller"),
    format: str = typer.Option("plain", "--format", "-f", help="Output format: plain, json"),
):
    """Show the current revision of each existing file."""
    with handle_errors():
        versions = get_controller(ctx).query_revisions(label, *paths)
        rows = [
            {
                "path": str(version.path),
                "author": version.author,
                "last_modified": version.last_modified.isoformat(),
            }
            for version in versions
        ]

    if format == "json":
        typer.echo(json.dumps(rows, indent=2))
        return

    if not rows:
        typer.echo("No existing files.")
        return

    table = Table(title="Revisions", show_header=True)
    table.add_column("Path", style="bold")
    table.add_column("Author")
    table.add_column("Last modified")
    for row in rows:
        table.add_row(row["path"], row["author"] or "-", row["last_modified"])
    console.print(table)


def history(
    ctx: typer.Context,
    paths: List[Path] = typer.Argument(..., help="Files to look up"),
):
    """Show recorded history. History lives in TFS and is not listed here."""
    with handle_errors():
        entries = get_controller(ctx).query_history(*paths)
    if not entries:
        typer.echo("No history available.")
        return
    for entry in entries:
        typer.echo(f"{entry.timestamp.isoformat()} {entry.author}")
