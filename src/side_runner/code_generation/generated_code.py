"""Code generator output contract."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, TypeAlias

from side_runner.errors import GenerationError
from side_runner.project_model import Project


@dataclass(frozen=True)
class GeneratedTest:
    """Generated source for one test."""

    name: str
    code: str


@dataclass(frozen=True)
class SequentialSuiteCode:
    """A suite emitted as one combined test file."""

    name: str
    code: str
    persist_session: bool = False


@dataclass(frozen=True)
class ParallelSuiteCode:
    """A suite emitted as one file per test."""

    name: str
    tests: tuple[GeneratedTest, ...]


SuiteCode: TypeAlias = SequentialSuiteCode | ParallelSuiteCode


@dataclass(frozen=True)
class GeneratedCode:
    """Everything the code generator produced for one project."""

    tests: tuple[GeneratedTest, ...]
    suites: tuple[SuiteCode, ...]
    global_config: str


class CodeGenerator(Protocol):
    """Converts a project into executable test source."""

    def generate(
        self,
        project: Project,
        *,
        silence_errors: bool,
        snapshot: Mapping[str, Any] | None = None,
    ) -> GeneratedCode: ...


def parse_generated_code(payload: Any) -> GeneratedCode:
    """Resolve the generator's JSON payload into the tagged suite variants."""
    if not isinstance(payload, Mapping):
        raise GenerationError("Code generator output must be a JSON object.")
    tests = tuple(
        _parse_test(item, f"tests[{index}]")
        for index, item in enumerate(_require_sequence(payload.get("tests"), "tests"))
    )
    suites = tuple(
        _parse_suite(item, f"suites[{index}]")
        for index, item in enumerate(_require_sequence(payload.get("suites"), "suites"))
    )
    global_config = payload.get("globalConfig") or ""
    if not isinstance(global_config, str):
        raise GenerationError("Code generator globalConfig must be a string.")
    return GeneratedCode(tests=tests, suites=suites, global_config=global_config)


def _parse_suite(value: Any, label: str) -> SuiteCode:
    section = _require_mapping(value, label)
    name = _require_string(section.get("name"), f"{label}.name")
    if section.get("tests") is not None:
        return ParallelSuiteCode(
            name=name,
            tests=tuple(
                _parse_test(item, f"{label}.tests[{index}]")
                for index, item in enumerate(_require_sequence(section["tests"], f"{label}.tests"))
            ),
        )
    return SequentialSuiteCode(
        name=name,
        code=_require_string(section.get("code", ""), f"{label}.code"),
        persist_session=bool(section.get("persistSession", False)),
    )


def _parse_test(value: Any, label: str) -> GeneratedTest:
    section = _require_mapping(value, label)
    name = section.get("name") or ""
    return GeneratedTest(
        name=_require_string(name, f"{label}.name"),
        code=_require_string(section.get("code"), f"{label}.code"),
    )


def _require_mapping(value: Any, label: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise GenerationError(f"Code generator output {label} must be an object.")
    return value


def _require_sequence(value: Any, label: str) -> Sequence[Any]:
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise GenerationError(f"Code generator output {label} must be a list.")
    return value


def _require_string(value: Any, label: str) -> str:
    if not isinstance(value, str):
        raise GenerationError(f"Code generator output {label} must be a string.")
    return value
