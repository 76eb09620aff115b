"""Layered configuration resolution: defaults, then file, then CLI flags."""

from __future__ import annotations

import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .capability_strings import CapabilityStringError, parse_capability_string
from .loader import (
    DEFAULT_CONFIG_FILENAME,
    UNDEFINED_SENTINEL,
    ConfigurationError,
    FileSettings,
    load_configuration_file,
)
from .runtime_settings import (
    DEFAULT_CAPABILITIES,
    DEFAULT_FILTER,
    DEFAULT_TIMEOUT_MS,
    Configuration,
    ToolCommands,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigurationOverrides:  # pylint: disable=too-many-instance-attributes
    """Raw command line values; None means the flag was not given."""

    capabilities: str | None = None
    server: str | None = None
    params: str | None = None
    filter: str | None = None
    max_workers: int | None = None
    base_url: str | None = None
    timeout: str | None = None
    configuration_file: str | None = None
    output_directory: str | None = None


def generate_run_id() -> str:
    """Return a random identifier shared by every project of one invocation."""
    return secrets.token_hex(16)


def resolve_configuration(
    overrides: ConfigurationOverrides,
    *,
    working_directory: Path,
    run_id_factory: Callable[[], str] = generate_run_id,
) -> Configuration:
    """Merge built-in defaults, the configuration file and command line flags."""
    file_settings = _read_optional_configuration_file(
        overrides.configuration_file, working_directory
    )

    capabilities: dict[str, Any] = dict(DEFAULT_CAPABILITIES)
    if file_settings.capabilities is not None:
        capabilities = dict(file_settings.capabilities)
    params: dict[str, Any] = dict(file_settings.params or {})

    if overrides.capabilities:
        try:
            capabilities.update(parse_capability_string(overrides.capabilities))
        except CapabilityStringError:
            logger.debug("Failed to parse inline capabilities")
    if overrides.params:
        try:
            params.update(parse_capability_string(overrides.params))
        except CapabilityStringError:
            logger.debug("Failed to parse additional params")

    output_directory = None
    if overrides.output_directory:
        output_directory = _resolve_path(working_directory, overrides.output_directory)

    return Configuration(
        capabilities=capabilities,
        params=params,
        run_id=run_id_factory(),
        base_path=file_settings.base_path or working_directory,
        server=overrides.server or file_settings.server,
        base_url=overrides.base_url or file_settings.base_url,
        timeout=_resolve_timeout(overrides.timeout, file_settings.timeout),
        filter=overrides.filter or DEFAULT_FILTER,
        max_workers=overrides.max_workers,
        output_directory=output_directory,
        commands=file_settings.commands or ToolCommands(),
    )


def _read_optional_configuration_file(
    configuration_file: str | None, working_directory: Path
) -> FileSettings:
    relative = configuration_file or DEFAULT_CONFIG_FILENAME
    path = _resolve_path(working_directory, relative)
    try:
        return load_configuration_file(path)
    except (ConfigurationError, OSError) as exc:
        logger.debug("Could not load %s: %s", relative, exc)
        return FileSettings()


def _resolve_timeout(cli_value: str | None, file_value: int | str | None) -> int | None:
    raw: int | str | None = cli_value if cli_value else file_value
    if raw is None or raw == "":
        return DEFAULT_TIMEOUT_MS
    if raw == UNDEFINED_SENTINEL:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        logger.debug("Ignoring invalid timeout %r", raw)
        return DEFAULT_TIMEOUT_MS


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return base_path / candidate
    return candidate
