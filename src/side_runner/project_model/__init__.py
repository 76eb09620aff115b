"""Project model domain exports."""

from .command_injection import inject_access_token, inject_echo_commands
from .format_versions import SUPPORTED_FORMAT_VERSION, check_format_version
from .project_documents import (
    expand_project_paths,
    load_project_document,
    parse_project_document,
    validate_project,
)
from .project_entities import Command, Project, ProjectTest, SuiteDefinition

__all__ = [
    "Command",
    "Project",
    "ProjectTest",
    "SuiteDefinition",
    "SUPPORTED_FORMAT_VERSION",
    "check_format_version",
    "expand_project_paths",
    "load_project_document",
    "parse_project_document",
    "validate_project",
    "inject_access_token",
    "inject_echo_commands",
]
