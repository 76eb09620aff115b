"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class RunOptions:
    """Debug switches that change how far a project is taken."""

    extract_only: bool = False
    keep_sandbox: bool = False

    @property
    def preserves_sandbox(self) -> bool:
        return self.extract_only or self.keep_sandbox


@dataclass(frozen=True)
class ProjectOutcome:
    """Binary result of processing one project."""

    project_name: str
    project_path: Path | None
    succeeded: bool
    error_message: str | None = None


@dataclass(frozen=True)
class BatchOutcome:
    """Aggregate result of one orchestrator invocation."""

    outcomes: tuple[ProjectOutcome, ...]

    @property
    def succeeded(self) -> bool:
        return all(outcome.succeeded for outcome in self.outcomes)

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1

    @property
    def failed_projects(self) -> tuple[str, ...]:
        return tuple(outcome.project_name for outcome in self.outcomes if not outcome.succeeded)
