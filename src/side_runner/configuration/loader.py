"""Configuration file loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import ToolCommands

DEFAULT_CONFIG_FILENAME = ".side.yml"

UNDEFINED_SENTINEL = "undefined"


class ConfigurationError(Exception):
    """Raised when the configuration file is missing or invalid."""


@dataclass(frozen=True)
class FileSettings:  # pylint: disable=too-many-instance-attributes
    """Settings read from the configuration file; unset keys stay None."""

    capabilities: Mapping[str, Any] | None = None
    params: Mapping[str, Any] | None = None
    server: str | None = None
    base_url: str | None = None
    timeout: int | str | None = None
    base_path: Path | None = None
    commands: ToolCommands | None = None


def load_configuration_file(config_path: Path | str) -> FileSettings:
    """Load and validate the YAML configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = _optional_string(parsed.get("path"), "path")
    return FileSettings(
        capabilities=_optional_mapping(parsed.get("capabilities"), "capabilities"),
        params=_optional_mapping(parsed.get("params"), "params"),
        server=_optional_string(parsed.get("server"), "server"),
        base_url=_optional_string(parsed.get("baseUrl"), "baseUrl"),
        timeout=_optional_timeout(parsed.get("timeout")),
        base_path=_resolve_path(path.parent, base_path) if base_path else None,
        commands=_parse_commands_section(parsed.get("commands")),
    )


def _parse_commands_section(value: Any) -> ToolCommands | None:
    if value is None:
        return None
    section = _optional_mapping(value, "commands")
    assert section is not None
    defaults = ToolCommands()
    return ToolCommands(
        generator=_optional_command(section.get("generator"), "commands.generator")
        or defaults.generator,
        installer=_optional_command(section.get("installer"), "commands.installer")
        or defaults.installer,
        runner=_optional_command(section.get("runner"), "commands.runner") or defaults.runner,
    )


def _optional_command(value: Any, field_name: str) -> tuple[str, ...] | None:
    if value is None:
        return None
    if isinstance(value, str):
        parts = tuple(value.split())
    elif isinstance(value, Sequence):
        if not all(isinstance(item, str) for item in value):
            raise ConfigurationError(f"{field_name} entries must be strings.")
        parts = tuple(item for item in value if item.strip())
    else:
        raise ConfigurationError(f"{field_name} must be a string or list of strings.")
    if not parts:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return parts


def _optional_timeout(value: Any) -> int | str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ConfigurationError("timeout must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return value.strip()
    raise ConfigurationError("timeout must be an integer.")


def _optional_mapping(value: Any, field_name: str) -> Mapping[str, Any] | None:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"{field_name} must be a mapping.")
    return dict(value)


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate
