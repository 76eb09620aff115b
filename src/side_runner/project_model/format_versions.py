"""Project format version compatibility check."""

from __future__ import annotations

import re

from side_runner.errors import VersionError

SUPPORTED_FORMAT_VERSION = "1.1"

_VERSION_PATTERN = re.compile(r"^\s*(\d+)(?:\.(\d+))?")


def check_format_version(version: str, supported: str = SUPPORTED_FORMAT_VERSION) -> str | None:
    """Return a warning for a compatible but mismatched version, raise when incompatible."""
    project_major, project_minor = _parse_version(version)
    runner_major, runner_minor = _parse_version(supported)
    if project_major > runner_major:
        raise VersionError(
            f"The project you are trying to run was saved with format version {version}, "
            f"which this runner does not support (supported: {supported}). "
            "Please upgrade the runner."
        )
    if project_major < runner_major:
        raise VersionError(
            f"The project you are trying to run uses format version {version}, "
            f"which is too old for this runner (supported: {supported}). "
            "Open it in the IDE to upgrade it."
        )
    if project_minor > runner_minor:
        return (
            f"The project you are trying to run uses format version {version}, "
            f"newer than {supported}; some commands may not be supported."
        )
    if project_minor < runner_minor:
        return (
            f"The project you are trying to run uses an outdated format version {version}; "
            "open it in the IDE and save it to upgrade it."
        )
    return None


def _parse_version(version: str) -> tuple[int, int]:
    match = _VERSION_PATTERN.match(version or "")
    if match is None:
        raise VersionError(f"Unrecognized project format version: {version!r}")
    return int(match.group(1)), int(match.group(2) or 0)
