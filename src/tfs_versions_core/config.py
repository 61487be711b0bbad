from __future__ import annotations

import copy
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .errors import ConfigError

DEFAULT_CONFIG_PATH = "tfs_versions.toml"
CONFIG_PATH_ENV = "TFS_VERSIONS_CONFIG"
BACKEND_ROOT_ENV = "TFS_Path"

VALID_PROVIDERS = ("tf", "null")
VALID_VERBOSITY = ("debug", "info", "warning", "error")

DEFAULT_CONFIG = {
    "backend": {
        "provider": "tf",
        "root": None,
        "executable": "tf.exe",
        "timeout": None,
        "strict": False,
    },
    "log": {
        "verbosity": "info",
    },
}


def resolve_config_path(
    work_root: Path,
    config_path: Optional[str | Path] = None,
) -> Path:
    raw = config_path or os.getenv(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH
    path = Path(raw)
    if not path.is_absolute():
        path = (work_root / path).resolve()
    return path


def load_config(
    work_root: Optional[Path] = None,
    config_path: Optional[str | Path] = None,
) -> Dict[str, Any]:
    root = work_root or Path.cwd().resolve()
    path = resolve_config_path(root, config_path)
    if not path.exists():
        if config_path:
            raise ConfigError(f"Config file not found: {path}")
        return {}
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid config TOML: {path} ({exc})") from exc
    return data


def default_config() -> Dict[str, Any]:
    return copy.deepcopy(DEFAULT_CONFIG)


def merge_defaults(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_defaults(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config_with_defaults(
    work_root: Optional[Path] = None,
    config_path: Optional[str | Path] = None,
    defaults: Optional[Dict[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """
    Build the effective configuration.

    Defaults are overlaid with the TOML file, then ``backend.root`` falls back
    to the ``TFS_Path`` environment variable when the file leaves it unset.
    The result is meant to be read once and passed around explicitly.
    """
    base = defaults if defaults is not None else default_config()
    overrides = load_config(work_root=work_root, config_path=config_path)
    config = merge_defaults(base, overrides) if overrides else copy.deepcopy(base)

    env = os.environ if environ is None else environ
    env_root = env.get(BACKEND_ROOT_ENV, "").strip()
    backend = config.setdefault("backend", {})
    if not backend.get("root") and env_root:
        backend["root"] = env_root
    return config


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    if not config or not path:
        return default
    current: Any = config
    for segment in path.split("."):
        if not isinstance(current, dict) or segment not in current:
            return default
        current = current[segment]
    if current is None:
        return default
    return current


def validate_config(config: Dict[str, Any]) -> List[str]:
    errors: List[str] = []

    backend = config.get("backend")
    if not isinstance(backend, dict):
        errors.append("[backend] must be a table")
        backend = {}

    provider = backend.get("provider", "tf")
    if provider not in VALID_PROVIDERS:
        errors.append(f"backend.provider must be one of {', '.join(VALID_PROVIDERS)}")

    root = backend.get("root")
    if root is not None and not isinstance(root, str):
        errors.append("backend.root must be a string")

    executable = backend.get("executable", "tf.exe")
    if not isinstance(executable, str) or not executable.strip():
        errors.append("backend.executable must be a non-empty string")

    timeout = backend.get("timeout")
    if timeout is not None:
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            errors.append("backend.timeout must be a positive number")

    if not isinstance(backend.get("strict", False), bool):
        errors.append("backend.strict must be true or false")

    verbosity = get_config_value(config, "log.verbosity", "info")
    if str(verbosity).lower() not in VALID_VERBOSITY:
        errors.append(f"log.verbosity must be one of {', '.join(VALID_VERBOSITY)}")

    return errors
