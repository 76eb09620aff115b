"""Project materialization into a sandbox."""

from __future__ import annotations

import logging
from pathlib import Path

from side_runner.code_generation import (
    CodeGenerator,
    GeneratedCode,
    ParallelSuiteCode,
    SequentialSuiteCode,
)
from side_runner.configuration import Configuration
from side_runner.errors import MaterializationError
from side_runner.project_model import Project, validate_project
from side_runner.sandboxing import SandboxManager

from .generated_files import (
    COMMONS_MODULE,
    GENERATED_HEADER,
    build_manifest,
    write_js_file,
    write_manifest,
)

logger = logging.getLogger(__name__)

SESSION_RESET_HOOKS = "beforeEach(() => {vars = {};});afterEach(async () => (cleanup()));"


class ProjectMaterializer:
    """Turns a project into a self-contained sandbox of runnable test files."""

    def __init__(
        self,
        *,
        sandbox_manager: SandboxManager,
        code_generator: CodeGenerator,
        silence_errors: bool = True,
    ) -> None:
        self._sandbox_manager = sandbox_manager
        self._code_generator = code_generator
        self._silence_errors = silence_errors

    def materialize(self, project: Project, configuration: Configuration) -> Path:
        """Validate, generate and write the project; return the sandbox path.

        Raises:
          ValidationError: If the project has nothing to run. No sandbox is created.
          GenerationError: If the code generator fails.
          MaterializationError: If a generated file cannot be written.

        On either failure the sandbox may be partially populated and the
        caller owns its teardown.
        """
        validate_project(project)

        sandbox_path = self._sandbox_manager.create(project.name)
        manifest = build_manifest(
            project.name,
            project.dependencies,
            configuration.to_runner_options(),
            configuration.base_path,
        )
        try:
            write_manifest(sandbox_path, manifest)
        except OSError as exc:
            raise _materialization_error(project, exc) from exc

        code = self._code_generator.generate(
            project,
            silence_errors=self._silence_errors,
            snapshot=project.snapshot,
        )
        try:
            _write_commons(sandbox_path, code)
            for suite in code.suites:
                if isinstance(suite, SequentialSuiteCode):
                    _write_sequential_suite(sandbox_path, suite, code.global_config)
                elif suite.tests:
                    _write_parallel_suite(sandbox_path, suite, code.global_config)
                else:
                    logger.debug("Skipping parallel suite %s without tests", suite.name)
        except OSError as exc:
            raise _materialization_error(project, exc) from exc
        return sandbox_path


def _materialization_error(project: Project, exc: OSError) -> MaterializationError:
    location = exc.filename if exc.filename is not None else "sandbox"
    return MaterializationError(
        f"Could not write generated files for {project.name} at {location}: {exc.strerror or exc}"
    )


def _write_commons(sandbox_path: Path, code: GeneratedCode) -> None:
    body = "".join(test.code for test in code.tests)
    write_js_file(
        sandbox_path / COMMONS_MODULE,
        f"const tests = {{}};{body}module.exports = tests;",
        ".js",
    )


def _write_sequential_suite(
    sandbox_path: Path, suite: SequentialSuiteCode, global_config: str
) -> None:
    hooks = "" if suite.persist_session else SESSION_RESET_HOOKS
    write_js_file(
        sandbox_path / suite.name,
        f'{GENERATED_HEADER}const tests = require("./{COMMONS_MODULE}.js");'
        f"{global_config}{suite.code}{hooks}",
    )


def _write_parallel_suite(sandbox_path: Path, suite: ParallelSuiteCode, global_config: str) -> None:
    suite_directory = sandbox_path / suite.name
    suite_directory.mkdir()
    for test in suite.tests:
        write_js_file(
            suite_directory / test.name,
            f'{GENERATED_HEADER}const tests = require("../{COMMONS_MODULE}.js");'
            f"{global_config}{test.code}",
        )
