"""Run execution domain exports."""

from .batch_controller import EXTRACTED_PROJECT_NAME, BatchController
from .dependency_stage import DependencyStage
from .process_commands import CommandNotFoundError, CommandRunner, run_inheriting_command
from .run_contracts import BatchOutcome, ProjectOutcome, RunOptions
from .run_stage import RunStage, build_runner_arguments, build_test_match

__all__ = [
    "BatchController",
    "BatchOutcome",
    "CommandNotFoundError",
    "CommandRunner",
    "DependencyStage",
    "EXTRACTED_PROJECT_NAME",
    "ProjectOutcome",
    "RunOptions",
    "RunStage",
    "build_runner_arguments",
    "build_test_match",
    "run_inheriting_command",
]
