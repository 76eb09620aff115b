"""Child process execution with inherited standard streams."""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Callable
from pathlib import Path

CommandRunner = Callable[[tuple[str, ...], Path], int]


class CommandNotFoundError(OSError):
    """Raised when an external tool executable cannot be located."""


def run_inheriting_command(command: tuple[str, ...], cwd: Path) -> int:
    """Run one command in ``cwd`` with the parent's stdio and return its exit code."""
    try:
        completed = subprocess.run(list(command), cwd=cwd, check=False)
    except FileNotFoundError as exc:
        raise CommandNotFoundError(f"Command not found: {shlex.join(command)}") from exc
    return completed.returncode
