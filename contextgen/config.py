"""Configuration loading for contextgen (.contextgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".contextgen.yml"

DEFAULT_MAX_FILES = 5000
DEFAULT_MAX_FILE_BYTES = 300 * 1024
DEFAULT_MAX_TOTAL_BYTES = 50 * 1024 * 1024
DEFAULT_WORKERS = 8

OUTPUT_FORMATS = ("json", "markdown", "prompt", "summary", "canonical", "report")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class IngestionSettings:
    """Hard caps and worker sizing for project normalization."""

    max_files: int = DEFAULT_MAX_FILES
    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES
    max_total_bytes: int = DEFAULT_MAX_TOTAL_BYTES
    workers: int = DEFAULT_WORKERS
    timeout: Optional[float] = None
    exclude_paths: tuple[str, ...] = ()


@dataclass(frozen=True)
class OutputSettings:
    """Default rendering choices for the CLI."""

    format: str = "json"
    strict: bool = True


@dataclass
class ContextGenConfig:
    """Represents the settings defined in .contextgen.yml."""

    root: Path
    ingestion: IngestionSettings = field(default_factory=IngestionSettings)
    output: OutputSettings = field(default_factory=OutputSettings)
    project_name: Optional[str] = None


def load_config(config_path: Path) -> ContextGenConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ContextGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    ingestion_data = _as_dict(data.get("ingestion"))
    exclude_paths = _as_str_list(data.get("exclude_paths"))
    exclude_paths.extend(_as_str_list(ingestion_data.get("exclude_paths")))

    ingestion = IngestionSettings(
        max_files=_positive_int(ingestion_data.get("max_files"), DEFAULT_MAX_FILES, "max_files"),
        max_file_bytes=_positive_int(
            ingestion_data.get("max_file_bytes"), DEFAULT_MAX_FILE_BYTES, "max_file_bytes"
        ),
        max_total_bytes=_positive_int(
            ingestion_data.get("max_total_bytes"), DEFAULT_MAX_TOTAL_BYTES, "max_total_bytes"
        ),
        workers=_positive_int(ingestion_data.get("workers"), DEFAULT_WORKERS, "workers"),
        timeout=_as_float(ingestion_data.get("timeout")),
        exclude_paths=tuple(exclude_paths),
    )

    output_data = _as_dict(data.get("output"))
    output_format = (_as_str(output_data.get("format")) or "json").lower()
    if output_format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Unsupported output.format '{output_format}'; expected one of {', '.join(OUTPUT_FORMATS)}"
        )
    strict = _as_bool(output_data.get("strict"))
    output = OutputSettings(
        format=output_format,
        strict=True if strict is None else strict,
    )

    project_data = _as_dict(data.get("project"))
    project_name = _as_str(project_data.get("name")) if project_data else None

    return ContextGenConfig(
        root=root,
        ingestion=ingestion,
        output=output,
        project_name=project_name,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _positive_int(value: Any, default: int, name: str) -> int:
    parsed = _as_int(value)
    if parsed is None:
        return default
    if parsed <= 0:
        raise ConfigError(f"ingestion.{name} must be a positive integer")
    return parsed


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


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
    "ConfigError",
    "ContextGenConfig",
    "IngestionSettings",
    "OUTPUT_FORMATS",
    "OutputSettings",
    "load_config",
]
