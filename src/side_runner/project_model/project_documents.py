"""Project document ingestion and validation service."""

from __future__ import annotations

import glob
import json
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from side_runner.errors import ProjectDocumentError, ValidationError

from .project_entities import Command, Project, ProjectTest, SuiteDefinition

_KNOWN_KEYS = frozenset({"name", "version", "url", "tests", "suites", "dependencies", "snapshot"})


def expand_project_paths(patterns: Iterable[str]) -> list[Path]:
    """Expand glob patterns into an ordered, de-duplicated list of paths."""
    seen: dict[str, None] = {}
    for pattern in patterns:
        for match in sorted(glob.glob(pattern)):
            seen.setdefault(match, None)
    return [Path(match) for match in seen]


def load_project_document(project_path: Path | str) -> Project:
    """Read and parse one project document."""
    path = Path(project_path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ProjectDocumentError(f"Could not read project file {path}: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProjectDocumentError(f"Project file {path} is not valid JSON: {exc}") from exc
    return parse_project_document(data, path)


def parse_project_document(data: Any, path: Path) -> Project:
    """Build a Project from decoded document data."""
    if not isinstance(data, Mapping):
        raise ProjectDocumentError(f"Project file {path} must contain a JSON object.")

    name = _require_non_empty_string(data.get("name"), "name", path)
    tests = tuple(
        _parse_test(item, index, path)
        for index, item in enumerate(_optional_sequence(data.get("tests"), "tests", path))
    )
    _ensure_unique_command_ids(tests, path)
    suites = tuple(
        _parse_suite(item, index, path)
        for index, item in enumerate(_optional_sequence(data.get("suites"), "suites", path))
    )
    dependencies = data.get("dependencies") or {}
    if not isinstance(dependencies, Mapping):
        raise ProjectDocumentError(f"Project file {path}: dependencies must be an object.")
    snapshot = data.get("snapshot")
    if snapshot is not None and not isinstance(snapshot, Mapping):
        raise ProjectDocumentError(f"Project file {path}: snapshot must be an object.")

    return Project(
        name=name,
        version=str(data.get("version", "")),
        path=path,
        tests=tests,
        suites=suites,
        url=str(data.get("url") or ""),
        dependencies={str(key): str(value) for key, value in dependencies.items()},
        snapshot=dict(snapshot) if snapshot is not None else None,
        extra={key: value for key, value in data.items() if key not in _KNOWN_KEYS},
    )


def validate_project(project: Project) -> None:
    """Ensure the project has something to run before any sandbox work begins."""
    if not project.suites:
        raise ValidationError(
            f"The project {project.name} has no test suites defined, "
            "create a suite using the IDE."
        )
    if not project.tests:
        raise ValidationError(f"The project {project.name} has no tests defined.")
    seen: set[str] = set()
    for test in project.tests:
        if test.name in seen:
            raise ValidationError(
                f"The project {project.name} defines the test name '{test.name}' more than once."
            )
        seen.add(test.name)


def _parse_test(value: Any, index: int, path: Path) -> ProjectTest:
    label = f"tests[{index}]"
    section = _require_mapping(value, label, path)
    name = _require_non_empty_string(section.get("name"), f"{label}.name", path)
    commands = tuple(
        _parse_command(item, f"{label}.commands[{position}]", path)
        for position, item in enumerate(
            _optional_sequence(section.get("commands"), f"{label}.commands", path)
        )
    )
    test_id = section.get("id")
    return ProjectTest(
        id=str(test_id) if test_id else name,
        name=name,
        commands=commands,
    )


def _parse_command(value: Any, label: str, path: Path) -> Command:
    section = _require_mapping(value, label, path)
    command_id = section.get("id")
    if not isinstance(command_id, str) or not command_id.strip():
        raise ProjectDocumentError(f"Project file {path}: {label}.id must be a non-empty string.")
    return Command(
        id=command_id,
        command=_require_non_empty_string(section.get("command"), f"{label}.command", path),
        target=str(section.get("target") or ""),
        targets=_parse_targets(section.get("targets"), label, path),
        value=str(section.get("value") or ""),
        comment=str(section.get("comment") or ""),
    )


def _parse_targets(value: Any, label: str, path: Path) -> tuple[tuple[str, str], ...]:
    locators: list[tuple[str, str]] = []
    for item in _optional_sequence(value, f"{label}.targets", path):
        if isinstance(item, str) or not isinstance(item, Sequence) or len(item) != 2:
            raise ProjectDocumentError(
                f"Project file {path}: {label}.targets entries must be [locator, strategy] pairs."
            )
        locators.append((str(item[0]), str(item[1])))
    return tuple(locators)


def _parse_suite(value: Any, index: int, path: Path) -> SuiteDefinition:
    label = f"suites[{index}]"
    section = _require_mapping(value, label, path)
    name = _require_non_empty_string(section.get("name"), f"{label}.name", path)
    test_ids = tuple(
        str(item) for item in _optional_sequence(section.get("tests"), f"{label}.tests", path)
    )
    timeout = section.get("timeout")
    suite_id = section.get("id")
    return SuiteDefinition(
        id=str(suite_id) if suite_id else name,
        name=name,
        test_ids=test_ids,
        parallel=bool(section.get("parallel", False)),
        persist_session=bool(section.get("persistSession", False)),
        timeout=timeout if isinstance(timeout, int) and not isinstance(timeout, bool) else None,
    )


def _ensure_unique_command_ids(tests: Sequence[ProjectTest], path: Path) -> None:
    seen: set[str] = set()
    for test in tests:
        for command in test.commands:
            if command.id in seen:
                raise ProjectDocumentError(
                    f"Project file {path}: command id '{command.id}' is used more than once."
                )
            seen.add(command.id)


def _require_mapping(value: Any, label: str, path: Path) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ProjectDocumentError(f"Project file {path}: {label} must be an object.")
    return value


def _optional_sequence(value: Any, label: str, path: Path) -> Sequence[Any]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ProjectDocumentError(f"Project file {path}: {label} must be a list.")
    return value


def _require_non_empty_string(value: Any, label: str, path: Path) -> str:
    if not isinstance(value, str):
        raise ProjectDocumentError(f"Project file {path}: {label} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ProjectDocumentError(f"Project file {path}: {label} must not be empty.")
    return stripped
