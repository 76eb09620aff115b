"""Test runner invocation stage."""

from __future__ import annotations

import logging
from pathlib import Path

from side_runner.configuration import Configuration
from side_runner.errors import RunFailure

from .process_commands import CommandNotFoundError, CommandRunner, run_inheriting_command

logger = logging.getLogger(__name__)


def build_test_match(name_filter: str) -> str:
    """Match per-test files in parallel suite directories and flat suite files."""
    return f"{{**/*{name_filter}*/*.test.js,**/*{name_filter}*.test.js}}"


def build_runner_arguments(project_name: str, configuration: Configuration) -> list[str]:
    arguments = ["--testMatch", build_test_match(configuration.filter)]
    if configuration.max_workers:
        arguments.extend(["-w", str(configuration.max_workers)])
    if configuration.output_directory is not None:
        arguments.extend(
            [
                "--json",
                "--outputFile",
                str(configuration.output_directory / f"{project_name}.json"),
            ]
        )
    return arguments


class RunStage:
    """Runs the test runner engine inside a sandbox."""

    def __init__(self, *, run_command: CommandRunner | None = None) -> None:
        self._run_command = run_command or run_inheriting_command

    def run(self, project_name: str, sandbox_path: Path, configuration: Configuration) -> None:
        command = (
            *configuration.commands.runner,
            *build_runner_arguments(project_name, configuration),
        )
        logger.debug("test runner args: %s", command)
        logger.debug("test runner cwd: %s", sandbox_path)
        try:
            exit_code = self._run_command(command, sandbox_path)
        except CommandNotFoundError as exc:
            raise RunFailure(str(exc)) from exc
        if exit_code != 0:
            raise RunFailure(f"Test runner exited with code {exit_code}")
