"""Subprocess code generator adapter tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from side_runner.code_generation import ProcessOutput, SequentialSuiteCode, SubprocessCodeGenerator
from side_runner.errors import GenerationError
from side_runner.project_model import Command, Project, ProjectTest, SuiteDefinition


def _project() -> Project:
    return Project(
        name="search",
        version="1.1",
        path=Path("search.side"),
        tests=(
            ProjectTest(
                id="t1", name="finds", commands=(Command(id="c1", command="open", target="/"),)
            ),
        ),
        suites=(SuiteDefinition(id="s1", name="smoke", test_ids=("t1",)),),
        snapshot={"tests": []},
    )


def test_sends_request_on_stdin_and_parses_stdout() -> None:
    captured: list[tuple[tuple[str, ...], str]] = []

    def _fake_run(command: tuple[str, ...], request: str) -> ProcessOutput:
        captured.append((command, request))
        payload = {
            "tests": [{"code": "tests['finds'] = async () => {};"}],
            "suites": [{"name": "smoke", "code": "describe('smoke');"}],
            "globalConfig": "",
        }
        return ProcessOutput(returncode=0, stdout=json.dumps(payload), stderr="")

    generator = SubprocessCodeGenerator(("gen", "--stdin"), run_command=_fake_run)

    code = generator.generate(_project(), silence_errors=True, snapshot={"tests": []})

    assert captured[0][0] == ("gen", "--stdin")
    request = json.loads(captured[0][1])
    assert request["options"] == {"silenceErrors": True}
    assert request["snapshot"] == {"tests": []}
    assert request["project"]["name"] == "search"
    assert request["project"]["tests"][0]["commands"][0]["id"] == "c1"
    assert code.suites == (SequentialSuiteCode(name="smoke", code="describe('smoke');"),)


def test_non_zero_exit_raises_generation_error() -> None:
    generator = SubprocessCodeGenerator(
        run_command=lambda command, request: ProcessOutput(1, "", "unknown command 'foo'")
    )

    with pytest.raises(GenerationError, match="unknown command 'foo'"):
        generator.generate(_project(), silence_errors=False)


def test_invalid_output_raises_generation_error() -> None:
    generator = SubprocessCodeGenerator(
        run_command=lambda command, request: ProcessOutput(0, "<html>", "")
    )

    with pytest.raises(GenerationError, match="invalid JSON"):
        generator.generate(_project(), silence_errors=True)


def test_missing_generator_executable_raises_generation_error() -> None:
    generator = SubprocessCodeGenerator(("side-runner-generator-that-does-not-exist",))

    with pytest.raises(GenerationError, match="not found"):
        generator.generate(_project(), silence_errors=True)
