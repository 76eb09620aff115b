"""Controlled insertion of authentication and diagnostic commands."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import replace

from .project_entities import Command, Project

FRONTDOOR_TARGET = "/secur/frontdoor.jsp?sid={token}"

IdFactory = Callable[[], str]


def _new_command_id() -> str:
    return str(uuid.uuid4())


def inject_access_token(
    project: Project, access_token: str, *, id_factory: IdFactory = _new_command_id
) -> Project:
    """Prepend an ``open`` command that signs in with the access token to every test."""
    tests = tuple(
        replace(
            test,
            commands=(
                Command(
                    id=id_factory(),
                    command="open",
                    target=FRONTDOOR_TARGET.format(token=access_token),
                ),
                *test.commands,
            ),
        )
        for test in project.tests
    )
    return replace(project, tests=tests)


def inject_echo_commands(project: Project, *, id_factory: IdFactory = _new_command_id) -> Project:
    """Follow every command that carries a value with an ``echo`` of that value."""
    tests = []
    for test in project.tests:
        commands: list[Command] = []
        for command in test.commands:
            commands.append(command)
            if command.value:
                commands.append(
                    Command(id=id_factory(), command="echo", target=_echo_target(command))
                )
        tests.append(replace(test, commands=tuple(commands)))
    return replace(project, tests=tuple(tests))


def _echo_target(command: Command) -> str:
    if command.command == "type":
        return f"type: {command.value}"
    return f"{command.value}: ${{{command.value}}}"
