"""Materialization domain exports."""

from .generated_files import (
    COMMONS_MODULE,
    GENERATED_HEADER,
    MANIFEST_FILENAME,
    beautify_source,
    build_manifest,
)
from .project_materializer import SESSION_RESET_HOOKS, ProjectMaterializer

__all__ = [
    "COMMONS_MODULE",
    "GENERATED_HEADER",
    "MANIFEST_FILENAME",
    "SESSION_RESET_HOOKS",
    "ProjectMaterializer",
    "beautify_source",
    "build_manifest",
]
