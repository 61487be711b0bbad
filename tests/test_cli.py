import json
import logging
import tomllib
from pathlib import Path

import pytest
from typer.testing import CliRunner

from tfs_versions_cli.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _null_config(tmp_path: Path) -> Path:
    path = tmp_path / "tfs_versions.toml"
    path.write_text('[backend]\nprovider = "null"\n', encoding="utf-8")
    return path


def test_write_then_revisions_and_delete(tmp_path: Path):
    config = _null_config(tmp_path)
    target = tmp_path / "pages" / "home.txt"

    result = runner.invoke(
        app, ["--config", str(config), "write", str(target), "--author", "alice"], input="welcome"
    )
    assert result.exit_code == 0, result.output
    assert "author=alice" in result.output
    assert target.read_text(encoding="utf-8") == "welcome"

    result = runner.invoke(
        app, ["--config", str(config), "--verbosity", "warning", "revisions", str(target), str(tmp_path / "nope"), "-f", "json"]
    )
    assert result.exit_code == 0, result.output
    rows = json.loads(result.output)
    assert [row["path"] for row in rows] == [str(target)]

    result = runner.invoke(app, ["--config", str(config), "delete", str(target.parent)])
    assert result.exit_code == 0, result.output
    assert not target.parent.exists()


def test_write_from_file(tmp_path: Path):
    config = _null_config(tmp_path)
    source = tmp_path / "src.txt"
    source.write_bytes(b"from file")
    target = tmp_path / "copy.txt"

    result = runner.invoke(app, ["--config", str(config), "write", str(target), "--from", str(source)])
    assert result.exit_code == 0, result.output
    assert target.read_bytes() == b"from file"


def test_mkdir_rename_and_history(tmp_path: Path):
    config = _null_config(tmp_path)
    folder = tmp_path / "folder"

    result = runner.invoke(app, ["--config", str(config), "mkdir", str(folder), "--author", "bob"])
    assert result.exit_code == 0, result.output
    assert folder.is_dir()

    old = folder / "old.txt"
    old.write_text("x", encoding="utf-8")
    result = runner.invoke(app, ["--config", str(config), "rename", str(old), str(folder / "new.txt")])
    assert result.exit_code == 0, result.output
    assert (folder / "new.txt").exists()

    result = runner.invoke(app, ["--config", str(config), "history", str(folder / "new.txt")])
    assert result.exit_code == 0, result.output
    assert "No history available." in result.output


def test_bad_config_exits_with_error(tmp_path: Path):
    result = runner.invoke(app, ["--config", str(tmp_path / "missing.toml"), "history", "a.txt"])
    assert result.exit_code == 1


def test_config_init_and_validate(tmp_path: Path):
    path = tmp_path / "conf" / "tfs_versions.toml"

    result = runner.invoke(app, ["--config", str(path), "config", "init", "--root", "C:/VS/IDE"])
    assert result.exit_code == 0, result.output
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    assert data["backend"]["root"] == "C:/VS/IDE"
    assert "timeout" not in data["backend"]

    result = runner.invoke(app, ["--config", str(path), "config", "init"])
    assert result.exit_code == 1

    result = runner.invoke(app, ["--config", str(path), "config", "validate"])
    assert result.exit_code == 0, result.output
    assert "Config is valid" in result.output


def test_config_show_outputs_effective_config(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("TFS_Path", "C:/VS/IDE")
    config = tmp_path / "tfs_versions.toml"
    config.write_text("[log]\nverbosity = \"warning\"\n", encoding="utf-8")

    result = runner.invoke(app, ["--config", str(config), "config", "show"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["backend"]["root"] == "C:/VS/IDE"
    assert data["log"]["verbosity"] == "warning"


def test_doctor_reports_missing_executable(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("TFS_Path", raising=False)
    config = tmp_path / "tfs_versions.toml"
    config.write_text(f'[backend]\nroot = "{tmp_path.as_posix()}"\n', encoding="utf-8")

    result = runner.invoke(app, ["--config", str(config), "--verbosity", "warning", "doctor", "--format", "json"])
    assert result.exit_code == 1
    data = json.loads(result.output)
    checks = {check["name"]: check["passed"] for check in data["checks"]}
    assert checks == {"Config": True, "Backend Root": True, "TF Executable": False}
    assert data["executable"] == str(tmp_path / "tf.exe")


def test_wrong_config_type_is_reported_not_raised(tmp_path: Path):
    config = tmp_path / "tfs_versions.toml"
    config.write_text('[backend]\nroot = "C:/VS/IDE"\ntimeout = "30"\n', encoding="utf-8")

    result = runner.invoke(app, ["--config", str(config), "history", "a.txt"])
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "backend.timeout" in result.output


def test_doctor_plain_shows_client_location(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("TFS_Path", raising=False)
    (tmp_path / "tf.exe").write_bytes(b"")
    config = tmp_path / "tfs_versions.toml"
    config.write_text(f'[backend]\nroot = "{tmp_path.as_posix()}"\n', encoding="utf-8")

    result = runner.invoke(app, ["--config", str(config), "--verbosity", "warning", "doctor"])
    assert result.exit_code == 0, result.output
    assert f"tf client: {tmp_path / 'tf.exe'}" in result.output
    assert "All checks passed!" in result.output


def test_doctor_without_root_has_no_client(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("TFS_Path", raising=False)
    config = tmp_path / "tfs_versions.toml"
    config.write_text("[log]\nverbosity = \"info\"\n", encoding="utf-8")

    result = runner.invoke(app, ["--config", str(config), "--verbosity", "warning", "doctor", "-f", "json"])
    assert result.exit_code == 1
    data = json.loads(result.output)
    assert data["provider"] == "tf"
    assert data["executable"] is None
    assert [c["name"] for c in data["checks"] if not c["passed"]] == ["Backend Root", "TF Executable"]
