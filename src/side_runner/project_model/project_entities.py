"""Project domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class Command:
    """One recorded browser command."""

    id: str
    command: str
    target: str = ""
    targets: tuple[tuple[str, str], ...] = ()
    value: str = ""
    comment: str = ""

    def to_document(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "comment": self.comment,
            "command": self.command,
            "target": self.target,
            "targets": [list(locator) for locator in self.targets],
            "value": self.value,
        }


@dataclass(frozen=True)
class ProjectTest:
    """An ordered sequence of commands."""

    id: str
    name: str
    commands: tuple[Command, ...]

    def to_document(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "commands": [command.to_document() for command in self.commands],
        }


@dataclass(frozen=True)
class SuiteDefinition:
    """A named grouping of test ids as declared in the project document."""

    id: str
    name: str
    test_ids: tuple[str, ...]
    parallel: bool = False
    persist_session: bool = False
    timeout: int | None = None

    def to_document(self) -> dict[str, Any]:
        document: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "persistSession": self.persist_session,
            "parallel": self.parallel,
            "tests": list(self.test_ids),
        }
        if self.timeout is not None:
            document["timeout"] = self.timeout
        return document


@dataclass(frozen=True)
class Project:  # pylint: disable=too-many-instance-attributes
    """A loaded project document; treated as immutable for a run."""

    name: str
    version: str
    path: Path
    tests: tuple[ProjectTest, ...]
    suites: tuple[SuiteDefinition, ...]
    url: str = ""
    dependencies: Mapping[str, str] = field(default_factory=dict)
    snapshot: Mapping[str, Any] | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def to_document(self) -> dict[str, Any]:
        """Rebuild the project document handed to the code generator."""
        document: dict[str, Any] = dict(self.extra)
        document.update(
            {
                "name": self.name,
                "version": self.version,
                "url": self.url,
                "tests": [test.to_document() for test in self.tests],
                "suites": [suite.to_document() for suite in self.suites],
            }
        )
        if self.dependencies:
            document["dependencies"] = dict(self.dependencies)
        if self.snapshot is not None:
            document["snapshot"] = dict(self.snapshot)
        return document
