from __future__ import annotations

from typing import Any, Dict, Optional

from ..config import get_config_value, validate_config
from ..errors import ConfigError
from ..filesystem import FileSystem
from .base import VcsBackend
from .controller import BackendVersionsController
from .null_backend import NullBackend
from .tf_backend import DEFAULT_EXECUTABLE, TfBackend


def resolve_backend(config: Dict[str, Any]) -> VcsBackend:
    """
    Resolve the VCS backend from configuration.

    Config schema expectation:
    {
        "backend": {
            "provider": "tf" | "null",
            "root": "C:/Program Files/.../IDE",
            "executable": "tf.exe",
            "timeout": null,
            "strict": false,
        }
    }
    """
    errors = validate_config(config)
    if errors:
        raise ConfigError("; ".join(errors))

    provider = str(get_config_value(config, "backend.provider", "tf")).lower()

    if provider == "null":
        return NullBackend()

    if provider == "tf":
        return TfBackend(
            root=get_config_value(config, "backend.root"),
            executable=get_config_value(config, "backend.executable", DEFAULT_EXECUTABLE),
            timeout=get_config_value(config, "backend.timeout"),
            strict=bool(get_config_value(config, "backend.strict", False)),
        )

    raise ConfigError(f"Unknown VCS backend: {provider}")


def build_controller(
    config: Dict[str, Any],
    filesystem: Optional[FileSystem] = None,
) -> BackendVersionsController:
    return BackendVersionsController(resolve_backend(config), filesystem=filesystem)
