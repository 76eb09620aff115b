"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_TIMEOUT_MS = 15000
DEFAULT_CAPABILITIES: Mapping[str, Any] = {"browserName": "chrome"}
DEFAULT_FILTER = "*"

DEFAULT_GENERATOR_COMMAND: tuple[str, ...] = ("npx", "selianize")
DEFAULT_INSTALLER_COMMAND: tuple[str, ...] = ("npm", "install")
DEFAULT_RUNNER_COMMAND: tuple[str, ...] = ("npx", "jest")


@dataclass(frozen=True)
class ToolCommands:
    """External tool invocations used by the orchestrator."""

    generator: tuple[str, ...] = DEFAULT_GENERATOR_COMMAND
    installer: tuple[str, ...] = DEFAULT_INSTALLER_COMMAND
    runner: tuple[str, ...] = DEFAULT_RUNNER_COMMAND


@dataclass(frozen=True)
class Configuration:  # pylint: disable=too-many-instance-attributes
    """Resolved execution parameters shared by every project in a batch."""

    capabilities: Mapping[str, Any]
    params: Mapping[str, Any]
    run_id: str
    base_path: Path
    server: str | None = None
    base_url: str | None = None
    timeout: int | None = DEFAULT_TIMEOUT_MS
    filter: str = DEFAULT_FILTER
    max_workers: int | None = None
    output_directory: Path | None = None
    commands: ToolCommands = field(default_factory=ToolCommands)

    def to_runner_options(self) -> dict[str, Any]:
        """Return the runner environment options with the runner's key names."""
        options: dict[str, Any] = {
            "capabilities": dict(self.capabilities),
            "params": dict(self.params),
            "runId": self.run_id,
            "path": str(self.base_path),
        }
        if self.server is not None:
            options["server"] = self.server
        if self.base_url is not None:
            options["baseUrl"] = self.base_url
        if self.timeout is not None:
            options["timeout"] = self.timeout
        return options
