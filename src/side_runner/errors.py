"""Error taxonomy for project execution."""

from __future__ import annotations

import signal


class ProjectRunError(Exception):
    """Base class for failures that are fatal to one project only."""


class ValidationError(ProjectRunError):
    """Raised when a project is malformed or has nothing to run."""


class ProjectDocumentError(ValidationError):
    """Raised when a project document cannot be read or parsed."""


class VersionError(ProjectRunError):
    """Raised when a project format version is not supported."""


class GenerationError(ProjectRunError):
    """Raised when the code generator reports a fatal failure."""


class MaterializationError(ProjectRunError):
    """Raised when generated files cannot be written into the sandbox."""


class DependencyInstallError(ProjectRunError):
    """Raised when the dependency installer exits with a non-zero code."""


class RunFailure(ProjectRunError):
    """Raised when the test runner exits with a non-zero code."""


class BatchInterrupted(Exception):
    """Raised when an interruption signal stops the batch."""

    def __init__(self, signum: int) -> None:
        self.signum = signum
        try:
            name = signal.Signals(signum).name
        except ValueError:
            name = str(signum)
        super().__init__(f"Interrupted by {name}")

    @property
    def exit_code(self) -> int:
        return 128 + self.signum
