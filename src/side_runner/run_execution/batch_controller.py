"""Sequential batch execution of projects."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from side_runner.configuration import Configuration
from side_runner.errors import ProjectRunError
from side_runner.lifecycle import CancellationToken
from side_runner.materialization import ProjectMaterializer
from side_runner.project_model import Project, check_format_version
from side_runner.sandboxing import SandboxManager

from .dependency_stage import DependencyStage
from .run_contracts import BatchOutcome, ProjectOutcome, RunOptions
from .run_stage import RunStage

logger = logging.getLogger(__name__)

EXTRACTED_PROJECT_NAME = "test"


class BatchController:
    """Runs projects one at a time; a failing project never stops the batch."""

    def __init__(  # pylint: disable=too-many-arguments
        self,
        *,
        configuration: Configuration,
        sandbox_manager: SandboxManager,
        materializer: ProjectMaterializer,
        dependency_stage: DependencyStage,
        run_stage: RunStage,
        options: RunOptions | None = None,
        token: CancellationToken | None = None,
    ) -> None:
        self._configuration = configuration
        self._sandbox_manager = sandbox_manager
        self._materializer = materializer
        self._dependency_stage = dependency_stage
        self._run_stage = run_stage
        self._options = options or RunOptions()
        self._token = token or CancellationToken()

    def run_all(self, projects: Sequence[Project]) -> BatchOutcome:
        outcomes = [self.run_project(project) for project in projects]
        return BatchOutcome(outcomes=tuple(outcomes))

    def run_project(self, project: Project) -> ProjectOutcome:
        logger.info("Running %s", project.path)
        try:
            self._execute_stages(project)
        except ProjectRunError as exc:
            if str(exc):
                logger.error("%s", exc)
            return ProjectOutcome(
                project_name=project.name,
                project_path=project.path,
                succeeded=False,
                error_message=str(exc) or None,
            )
        finally:
            self._finish_sandbox()
        return ProjectOutcome(project_name=project.name, project_path=project.path, succeeded=True)

    def run_extracted(self, sandbox_path: Path) -> ProjectOutcome:
        """Run an already extracted sandbox directory and leave it in place."""
        self._sandbox_manager.adopt(sandbox_path)
        try:
            self._token.raise_if_cancelled()
            self._run_stage.run(EXTRACTED_PROJECT_NAME, sandbox_path, self._configuration)
        except ProjectRunError as exc:
            if str(exc):
                logger.error("%s", exc)
            return ProjectOutcome(
                project_name=EXTRACTED_PROJECT_NAME,
                project_path=sandbox_path,
                succeeded=False,
                error_message=str(exc) or None,
            )
        finally:
            self._sandbox_manager.release_current()
        return ProjectOutcome(
            project_name=EXTRACTED_PROJECT_NAME, project_path=sandbox_path, succeeded=True
        )

    def _execute_stages(self, project: Project) -> None:
        self._token.raise_if_cancelled()
        warning = check_format_version(project.version)
        if warning:
            logger.warning("%s", warning)

        sandbox_path = self._materializer.materialize(project, self._configuration)
        if self._options.extract_only:
            return

        self._token.raise_if_cancelled()
        if project.dependencies:
            self._dependency_stage.install(sandbox_path, project.dependencies)

        self._token.raise_if_cancelled()
        self._run_stage.run(project.name, sandbox_path, self._configuration)

    def _finish_sandbox(self) -> None:
        if self._options.preserves_sandbox:
            self._sandbox_manager.release_current()
        else:
            self._sandbox_manager.destroy_current()
