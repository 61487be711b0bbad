"""
doctor.py - Environment health check command.

Checks that the TFS client can be found and the config is usable.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tfs_versions_core.config import (
    BACKEND_ROOT_ENV,
    get_config_value,
    load_config_with_defaults,
    validate_config,
)
from tfs_versions_core.errors import ConfigError
from tfs_versions_core.vcs import TfBackend

from ..util import get_state

console = Console()


@dataclass
class CheckResult:
    """Result of a single check."""
    name: str
    passed: bool
    message: str
    details: Optional[str] = None


@dataclass
class DoctorResult:
    """Overall doctor check result."""
    all_passed: bool
    checks: List[CheckResult]
    provider: str = "tf"
    executable: Optional[str] = None


def check_config(config_path: Optional[Path]) -> tuple[CheckResult, Dict[str, Any]]:
    """Check that the config loads and validates."""
    try:
        config = load_config_with_defaults(config_path=config_path)
    except ConfigError as e:
        return CheckResult(name="Config", passed=False, message=str(e)), {}

    errors = validate_config(config)
    if errors:
        return (
            CheckResult(
                name="Config",
                passed=False,
                message=f"{len(errors)} validation error(s)",
                details="; ".join(errors),
            ),
            config,
        )
    return CheckResult(name="Config", passed=True, message="Config is valid"), config


def check_backend_root(config: Dict[str, Any]) -> CheckResult:
    """Check that the tf.exe install root is configured."""
    if get_config_value(config, "backend.provider", "tf") != "tf":
        return CheckResult(name="Backend Root", passed=True, message="Not required for this provider")

    root = get_config_value(config, "backend.root")
    if not root:
        return CheckResult(
            name="Backend Root",
            passed=False,
            message="Backend root not set",
            details=f"Set {BACKEND_ROOT_ENV} or backend.root in the config file.",
        )
    if not Path(root).is_dir():
        return CheckResult(name="Backend Root", passed=False, message=f"Not a directory: {root}")
    return CheckResult(name="Backend Root", passed=True, message=str(root))


def configured_executable(config: Dict[str, Any]) -> Optional[Path]:
    """Where the tf client is expected, or None when no root is configured."""
    backend = TfBackend(
        root=get_config_value(config, "backend.root"),
        executable=get_config_value(config, "backend.executable", "tf.exe"),
    )
    return backend.executable_path


def check_executable(config: Dict[str, Any]) -> CheckResult:
    """Check that the tf client executable exists."""
    if get_config_value(config, "backend.provider", "tf") != "tf":
        return CheckResult(name="TF Executable", passed=True, message="Not required for this provider")

    executable = configured_executable(config)
    if executable is None:
        return CheckResult(
            name="TF Executable",
            passed=False,
            message="Unknown location",
            details=f"tf commands fail until {BACKEND_ROOT_ENV} or backend.root is set.",
        )
    if executable.is_file():
        return CheckResult(name="TF Executable", passed=True, message=str(executable))
    return CheckResult(
        name="TF Executable",
        passed=False,
        message=f"Not found: {executable}",
        details="Install Team Explorer or point backend.root at the directory holding tf.exe.",
    )


def run_doctor(config_path: Optional[Path] = None) -> DoctorResult:
    """Run all doctor checks."""
    config_check, config = check_config(config_path)
    checks = [config_check]
    provider = "tf"
    executable = None
    if config:
        provider = str(get_config_value(config, "backend.provider", "tf"))
        if provider == "tf":
            path = configured_executable(config)
            executable = str(path) if path is not None else None
        checks.append(check_backend_root(config))
        checks.append(check_executable(config))

    all_passed = all(c.passed for c in checks)
    return DoctorResult(all_passed=all_passed, checks=checks, provider=provider, executable=executable)


def format_result_plain(result: DoctorResult) -> None:
    """Print the checks as a table, followed by the client the backend would run."""
    table = Table(title=f"TFS Versions Doctor ({result.provider} backend)", show_header=True)
    table.add_column("Check", style="bold")
    table.add_column("Status")
    table.add_column("Message")

    for check in result.checks:
        status = "[green]✓ PASS[/green]" if check.passed else "[red]✗ FAIL[/red]"
        table.add_row(check.name, status, escape(check.message))
        if check.details:
            table.add_row("", "", f"[dim]{escape(check.details)}[/dim]")

    console.print(table)

    if result.provider == "tf":
        location = escape(result.executable) if result.executable else "[yellow]not configured[/yellow]"
        console.print(f"tf client: {location}", soft_wrap=True)

    failed = [check.name for check in result.checks if not check.passed]
    if failed:
        console.print(f"\n[red bold]Failed: {', '.join(failed)}[/red bold]")
    else:
        console.print("\n[green bold]All checks passed![/green bold]")


def format_result_json(result: DoctorResult) -> None:
    """Print result in JSON format."""
    typer.echo(json.dumps(asdict(result), indent=2))


def doctor(
    ctx: typer.Context,
    format: str = typer.Option(
        "plain", "--format", "-f",
        help="Output format: plain, json",
    ),
) -> None:
    """
    Check environment health.

    Verifies:
    - Config file loads and validates
    - Backend root is set
    - tf.exe is present
    """
    result = run_doctor(config_path=get_state(ctx).config_path)

    if format == "json":
        format_result_json(result)
    else:
        format_result_plain(result)

    raise typer.Exit(0 if result.all_passed else 1)
