"""Dependency installation stage."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from side_runner.configuration.runtime_settings import DEFAULT_INSTALLER_COMMAND
from side_runner.errors import DependencyInstallError

from .process_commands import CommandNotFoundError, CommandRunner, run_inheriting_command

logger = logging.getLogger(__name__)


class DependencyStage:
    """Installs a project's third-party packages inside its sandbox."""

    def __init__(
        self,
        command: tuple[str, ...] = DEFAULT_INSTALLER_COMMAND,
        *,
        run_command: CommandRunner | None = None,
    ) -> None:
        self._command = command
        self._run_command = run_command or run_inheriting_command

    def install(self, sandbox_path: Path, dependencies: Mapping[str, str]) -> None:
        if not dependencies:
            return
        logger.debug("Installing %d dependencies in %s", len(dependencies), sandbox_path)
        try:
            exit_code = self._run_command(self._command, sandbox_path)
        except CommandNotFoundError as exc:
            raise DependencyInstallError(str(exc)) from exc
        if exit_code != 0:
            raise DependencyInstallError(
                f"Dependency installation failed with exit code {exit_code}"
            )
