"""Project materializer tests."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pytest
from side_runner.code_generation import (
    GeneratedCode,
    GeneratedTest,
    ParallelSuiteCode,
    SequentialSuiteCode,
)
from side_runner.configuration import Configuration
from side_runner.errors import GenerationError, MaterializationError, ValidationError
from side_runner.materialization import GENERATED_HEADER, ProjectMaterializer, beautify_source
from side_runner.project_model import Command, Project, ProjectTest, SuiteDefinition
from side_runner.sandboxing import SandboxManager


class _FakeGenerator:
    def __init__(self, code: GeneratedCode | None = None, error: Exception | None = None) -> None:
        self.code = code
        self.error = error
        self.calls: list[tuple[Project, bool, Mapping[str, Any] | None]] = []

    def generate(self, project, *, silence_errors, snapshot=None) -> GeneratedCode:
        self.calls.append((project, silence_errors, snapshot))
        if self.error is not None:
            raise self.error
        assert self.code is not None
        return self.code


def _configuration(tmp_path: Path) -> Configuration:
    return Configuration(
        capabilities={"browserName": "chrome"},
        params={"user": "qa"},
        run_id="abc123",
        base_path=tmp_path / "runner",
        server="http://grid:4444/wd/hub",
    )


def _project(test_names=("first", "second"), suites=None, **overrides) -> Project:
    tests = tuple(
        ProjectTest(
            id=f"t{index}",
            name=name,
            commands=(Command(id=f"c{index}", command="open", target="/"),),
        )
        for index, name in enumerate(test_names)
    )
    values = {
        "name": "shop",
        "version": "1.1",
        "path": Path("shop.side"),
        "tests": tests,
        "suites": suites
        if suites is not None
        else (SuiteDefinition(id="s1", name="smoke", test_ids=("t0",)),),
        "dependencies": {"faker": "^4.1.0"},
        "snapshot": {"dependencies": {}},
    }
    values.update(overrides)
    return Project(**values)


def _commons_tests(*names: str) -> tuple[GeneratedTest, ...]:
    return tuple(
        GeneratedTest(name=name, code=f'tests["{name}"] = async function {name}(driver) {{}};')
        for name in names
    )


def test_writes_manifest_commons_and_sequential_suite(tmp_path: Path) -> None:
    generator = _FakeGenerator(
        GeneratedCode(
            tests=_commons_tests("first", "second"),
            suites=(
                SequentialSuiteCode(
                    name="smoke", code='describe("smoke", () => {it("first", async () => {});});'
                ),
            ),
            global_config="jest.setTimeout(30000);",
        )
    )
    materializer = ProjectMaterializer(
        sandbox_manager=SandboxManager(tmp_path), code_generator=generator
    )

    sandbox = materializer.materialize(_project(), _configuration(tmp_path))

    assert sandbox == tmp_path / "side-suite-shop"
    manifest = json.loads((sandbox / "package.json").read_text(encoding="utf-8"))
    assert manifest["name"] == "shop"
    assert manifest["version"] == "0.0.0"
    assert manifest["dependencies"] == {"faker": "^4.1.0"}
    assert manifest["jest"]["testEnvironment"] == "jest-environment-selenium"
    assert manifest["jest"]["modulePaths"] == [str(tmp_path / "runner" / "node_modules")]
    assert manifest["jest"]["testEnvironmentOptions"] == {
        "capabilities": {"browserName": "chrome"},
        "params": {"user": "qa"},
        "runId": "abc123",
        "path": str(tmp_path / "runner"),
        "server": "http://grid:4444/wd/hub",
        "timeout": 15000,
    }

    commons = (sandbox / "commons.js").read_text(encoding="utf-8")
    assert commons.startswith("const tests = {};")
    assert commons.count('tests["first"] =') == 1
    assert commons.count('tests["second"] =') == 1
    assert commons.rstrip().endswith("module.exports = tests;")

    suite_file = (sandbox / "smoke.test.js").read_text(encoding="utf-8")
    assert suite_file.startswith(GENERATED_HEADER.strip())
    assert 'require("./commons.js")' in suite_file
    assert "jest.setTimeout(30000);" in suite_file
    assert "beforeEach" in suite_file
    assert "vars = {}" in suite_file
    assert "afterEach" in suite_file
    assert "cleanup()" in suite_file

    _, silence_errors, snapshot = generator.calls[0]
    assert silence_errors is True
    assert snapshot == {"dependencies": {}}


def test_persisted_session_suite_gets_no_reset_hooks(tmp_path: Path) -> None:
    generator = _FakeGenerator(
        GeneratedCode(
            tests=_commons_tests("first", "second"),
            suites=(
                SequentialSuiteCode(
                    name="journey", code='describe("journey", () => {});', persist_session=True
                ),
            ),
            global_config="",
        )
    )
    materializer = ProjectMaterializer(
        sandbox_manager=SandboxManager(tmp_path), code_generator=generator
    )

    sandbox = materializer.materialize(_project(), _configuration(tmp_path))

    suite_file = (sandbox / "journey.test.js").read_text(encoding="utf-8")
    assert "beforeEach" not in suite_file
    assert "afterEach" not in suite_file


def test_parallel_suite_writes_one_file_per_test(tmp_path: Path) -> None:
    generator = _FakeGenerator(
        GeneratedCode(
            tests=_commons_tests("first", "second", "third"),
            suites=(
                ParallelSuiteCode(
                    name="wide",
                    tests=tuple(
                        GeneratedTest(name=name, code=f'it("{name}", async () => {{}});')
                        for name in ("first", "second", "third")
                    ),
                ),
            ),
            global_config="global.BASE_URL = 'https://shop.example.com';",
        )
    )
    materializer = ProjectMaterializer(
        sandbox_manager=SandboxManager(tmp_path), code_generator=generator
    )

    sandbox = materializer.materialize(
        _project(test_names=("first", "second", "third")), _configuration(tmp_path)
    )

    suite_directory = sandbox / "wide"
    files = sorted(path.name for path in suite_directory.iterdir())
    assert files == ["first.test.js", "second.test.js", "third.test.js"]
    for path in suite_directory.iterdir():
        content = path.read_text(encoding="utf-8")
        assert 'require("../commons.js")' in content
        assert "global.BASE_URL" in content
        assert "beforeEach" not in content


def test_parallel_suite_without_tests_is_skipped(tmp_path: Path) -> None:
    generator = _FakeGenerator(
        GeneratedCode(
            tests=_commons_tests("first", "second"),
            suites=(ParallelSuiteCode(name="empty", tests=()),),
            global_config="",
        )
    )
    materializer = ProjectMaterializer(
        sandbox_manager=SandboxManager(tmp_path), code_generator=generator
    )

    sandbox = materializer.materialize(_project(), _configuration(tmp_path))

    assert not (sandbox / "empty").exists()
    assert not (sandbox / "empty.test.js").exists()
    assert sorted(path.name for path in sandbox.iterdir()) == ["commons.js", "package.json"]


def test_project_without_tests_fails_before_sandbox_creation(tmp_path: Path) -> None:
    generator = _FakeGenerator()
    manager = SandboxManager(tmp_path)
    materializer = ProjectMaterializer(sandbox_manager=manager, code_generator=generator)

    with pytest.raises(ValidationError):
        materializer.materialize(_project(test_names=()), _configuration(tmp_path))

    assert not (tmp_path / "side-suite-shop").exists()
    assert manager.current is None
    assert generator.calls == []


def test_project_without_suites_fails_validation(tmp_path: Path) -> None:
    materializer = ProjectMaterializer(
        sandbox_manager=SandboxManager(tmp_path), code_generator=_FakeGenerator()
    )

    with pytest.raises(ValidationError, match="no test suites"):
        materializer.materialize(_project(suites=()), _configuration(tmp_path))

    assert not (tmp_path / "side-suite-shop").exists()


def test_generation_failure_leaves_sandbox_for_caller(tmp_path: Path) -> None:
    manager = SandboxManager(tmp_path)
    materializer = ProjectMaterializer(
        sandbox_manager=manager,
        code_generator=_FakeGenerator(error=GenerationError("generator crashed")),
    )

    with pytest.raises(GenerationError):
        materializer.materialize(_project(), _configuration(tmp_path))

    assert manager.current == tmp_path / "side-suite-shop"
    assert (tmp_path / "side-suite-shop" / "package.json").exists()


def test_duplicate_parallel_suite_names_raise_materialization_error(tmp_path: Path) -> None:
    duplicated = ParallelSuiteCode(name="dup", tests=_commons_tests("first"))
    manager = SandboxManager(tmp_path)
    materializer = ProjectMaterializer(
        sandbox_manager=manager,
        code_generator=_FakeGenerator(
            GeneratedCode(
                tests=_commons_tests("first"), suites=(duplicated, duplicated), global_config=""
            )
        ),
    )

    with pytest.raises(MaterializationError, match="side-suite-shop") as excinfo:
        materializer.materialize(_project(), _configuration(tmp_path))

    assert isinstance(excinfo.value.__cause__, FileExistsError)
    assert manager.current == tmp_path / "side-suite-shop"


def test_beautify_indents_with_two_spaces() -> None:
    assert beautify_source("function a(){return 1;}") == "function a() {\n  return 1;\n}"
