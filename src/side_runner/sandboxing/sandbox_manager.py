"""Per-project sandbox directory lifecycle."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

SANDBOX_PREFIX = "side-suite-"


def sandbox_directory_name(project_name: str) -> str:
    """Derive the sandbox directory name from the project name."""
    safe_name = project_name.replace("/", "-").replace("\\", "-")
    return f"{SANDBOX_PREFIX}{safe_name}"


class SandboxManager:
    """Creates and destroys sandboxes and tracks the one currently in use.

    The current path is set by ``create`` and cleared by ``destroy``; the
    lifecycle guard reads it from a signal handler, so it is the single
    authoritative record of which directory must not leak.
    """

    def __init__(self, root: Path) -> None:
        self._root = root
        self._current: Path | None = None

    @property
    def current(self) -> Path | None:
        return self._current

    def path_for(self, project_name: str) -> Path:
        return self._root / sandbox_directory_name(project_name)

    def create(self, project_name: str) -> Path:
        """Replace whatever sits at the sandbox path with a fresh empty directory."""
        path = self.path_for(project_name)
        self._current = path
        _remove_tree(path)
        path.mkdir(parents=True)
        logger.debug("Created sandbox %s", path)
        return path

    def adopt(self, path: Path) -> Path:
        """Track an existing directory as the current sandbox without recreating it."""
        self._current = path
        return path

    def destroy(self, path: Path) -> None:
        """Remove the sandbox tree; a missing directory is not an error."""
        _remove_tree(path)
        if self._current == path:
            self._current = None
        logger.debug("Removed sandbox %s", path)

    def destroy_current(self) -> None:
        if self._current is not None:
            self.destroy(self._current)

    def release_current(self) -> None:
        """Stop tracking the current sandbox and leave it on disk."""
        self._current = None


def _remove_tree(path: Path) -> None:
    if path.is_symlink() or path.is_file():
        path.unlink(missing_ok=True)
    elif path.exists():
        shutil.rmtree(path, ignore_errors=True)
