"""Configuration domain exports."""

from .capability_strings import CapabilityStringError, parse_capability_string
from .loader import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    FileSettings,
    load_configuration_file,
)
from .resolution import ConfigurationOverrides, generate_run_id, resolve_configuration
from .runtime_settings import DEFAULT_TIMEOUT_MS, Configuration, ToolCommands

__all__ = [
    "Configuration",
    "ToolCommands",
    "DEFAULT_TIMEOUT_MS",
    "DEFAULT_CONFIG_FILENAME",
    "ConfigurationError",
    "FileSettings",
    "load_configuration_file",
    "CapabilityStringError",
    "parse_capability_string",
    "ConfigurationOverrides",
    "generate_run_id",
    "resolve_configuration",
]
