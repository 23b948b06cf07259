"""Configuration loading for steplib (.steplib.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".steplib.yml"
DEFAULT_EXTENSION = ".java"
DEFAULT_OUTPUT_FILE = "step_library.yaml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class StepLibConfig:
    """Settings read from .steplib.yml next to the scanned sources."""

    root: Path
    extension: str = DEFAULT_EXTENSION
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    output: Optional[str] = None


def load_config(config_path: Path) -> StepLibConfig:
    """Load configuration from a directory or an explicit config file path."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return StepLibConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    extension = _as_str(data.get("extension")) or DEFAULT_EXTENSION
    if not extension.startswith("."):
        extension = f".{extension}"

    return StepLibConfig(
        root=root,
        extension=extension,
        include=_as_str_list(data.get("include")),
        exclude=_as_str_list(data.get("exclude")),
        output=_as_str(data.get("output")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_EXTENSION",
    "DEFAULT_OUTPUT_FILE",
    "ConfigError",
    "StepLibConfig",
    "load_config",
]
