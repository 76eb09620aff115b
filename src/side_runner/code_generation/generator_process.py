"""Subprocess-backed code generator adapter."""

from __future__ import annotations

import json
import logging
import shlex
import subprocess
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from side_runner.configuration.runtime_settings import DEFAULT_GENERATOR_COMMAND
from side_runner.errors import GenerationError
from side_runner.project_model import Project

from .generated_code import GeneratedCode, parse_generated_code

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessOutput:
    """Exit status and captured streams of a finished generator process."""

    returncode: int
    stdout: str
    stderr: str


GeneratorRunner = Callable[[tuple[str, ...], str], ProcessOutput]


class SubprocessCodeGenerator:
    """Runs an external generator that reads the request on stdin and answers on stdout."""

    def __init__(
        self,
        command: tuple[str, ...] = DEFAULT_GENERATOR_COMMAND,
        *,
        run_command: GeneratorRunner | None = None,
    ) -> None:
        self._command = command
        self._run_command = run_command or _run_capturing_command

    def generate(
        self,
        project: Project,
        *,
        silence_errors: bool,
        snapshot: Mapping[str, Any] | None = None,
    ) -> GeneratedCode:
        request = {
            "project": project.to_document(),
            "options": {"silenceErrors": silence_errors},
            "snapshot": dict(snapshot) if snapshot is not None else None,
        }
        logger.debug("Generating code for %s with %s", project.name, shlex.join(self._command))
        output = self._run_command(self._command, json.dumps(request))
        if output.returncode != 0:
            detail = output.stderr.strip() or f"exit code {output.returncode}"
            raise GenerationError(f"Code generation failed for {project.name}: {detail}")
        try:
            payload = json.loads(output.stdout)
        except json.JSONDecodeError as exc:
            raise GenerationError(
                f"Code generator returned invalid JSON for {project.name}: {exc}"
            ) from exc
        return parse_generated_code(payload)


def _run_capturing_command(command: tuple[str, ...], request: str) -> ProcessOutput:
    try:
        completed = subprocess.run(
            list(command),
            input=request,
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=False,
        )
    except FileNotFoundError as exc:
        raise GenerationError(f"Code generator command not found: {shlex.join(command)}") from exc
    return ProcessOutput(
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )
