"""Command line interface entry point."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import click

from side_runner.code_generation import SubprocessCodeGenerator
from side_runner.configuration import (
    DEFAULT_CONFIG_FILENAME,
    DEFAULT_TIMEOUT_MS,
    Configuration,
    ConfigurationOverrides,
    resolve_configuration,
)
from side_runner.errors import BatchInterrupted, ProjectDocumentError
from side_runner.lifecycle import CancellationToken, LifecycleGuard
from side_runner.materialization import ProjectMaterializer
from side_runner.project_model import (
    Project,
    expand_project_paths,
    inject_access_token,
    inject_echo_commands,
    load_project_document,
)
from side_runner.run_execution import (
    BatchController,
    DependencyStage,
    RunOptions,
    RunStage,
)
from side_runner.sandboxing import SandboxManager

PACKAGE_LOGGER_NAME = "side_runner"
MAINTAINER_ENV_VAR = "SIDE_RUNNER_ENV"

logger = logging.getLogger(__name__)

_MAINTAINER_OPTIONS_HIDDEN = os.environ.get(MAINTAINER_ENV_VAR) != "development"


class CliError(Exception):
    """Custom CLI error."""


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    options_metavar="[options]",
)
@click.version_option(package_name="side-runner")
@click.argument("projects", nargs=-1, metavar="project.side [project.side] [*.side]")
@click.option("-c", "--capabilities", help="Webdriver capabilities")
@click.option("-s", "--server", help="Webdriver remote server")
@click.option("-p", "--params", help="General parameters")
@click.option("-f", "--filter", "name_filter", help="Run suites matching name")
@click.option("-t", "--accesstoken", "access_token", help="Salesforce accessToken")
@click.option(
    "-w",
    "--max-workers",
    type=click.IntRange(min=1),
    help="Maximum amount of workers that will run your tests, defaults to number of cores",
)
@click.option("--base-url", help="Override the base URL that was set in the IDE")
@click.option(
    "--timeout",
    metavar="[number | undefined]",
    help=(
        "The maximum amount of time, in milliseconds, to spend attempting to locate an "
        f"element. (default: {DEFAULT_TIMEOUT_MS})"
    ),
)
@click.option(
    "--configuration-file",
    type=click.Path(path_type=str),
    help=f"Use specified YAML file for configuration. (default: {DEFAULT_CONFIG_FILENAME})",
)
@click.option(
    "--output-directory",
    type=click.Path(path_type=str),
    help="Write test results to files, results written in JSON",
)
@click.option("--debug", is_flag=True, default=False, help="Print debug logs")
@click.option(
    "-e",
    "--extract",
    is_flag=True,
    default=False,
    hidden=_MAINTAINER_OPTIONS_HIDDEN,
    help="Only extract the project file to code (this feature is for debugging purposes)",
)
@click.option(
    "-r",
    "--run",
    "run_directory",
    type=click.Path(path_type=str, file_okay=False),
    hidden=_MAINTAINER_OPTIONS_HIDDEN,
    help="Run the extracted project files (this feature is for debugging purposes)",
)
@click.option(
    "--keep-sandbox",
    is_flag=True,
    default=False,
    hidden=_MAINTAINER_OPTIONS_HIDDEN,
    help="Leave generated sandboxes in place for inspection",
)
@click.pass_context
def cli(  # pylint: disable=too-many-arguments,too-many-locals
    ctx: click.Context,
    projects: tuple[str, ...],
    capabilities: str | None,
    server: str | None,
    params: str | None,
    name_filter: str | None,
    access_token: str | None,
    max_workers: int | None,
    base_url: str | None,
    timeout: str | None,
    configuration_file: str | None,
    output_directory: str | None,
    debug: bool,
    extract: bool,
    run_directory: str | None,
    keep_sandbox: bool,
) -> None:
    """Run Selenium IDE project files through the test runner."""
    if not projects and not run_directory:
        click.echo(ctx.get_help())
        ctx.exit(1)

    configure_logging(debug)
    if extract or run_directory or keep_sandbox:
        logger.warning(
            "This feature is used by maintainers for debugging purposes, "
            "we hope you know what you're doing!"
        )

    working_directory = Path.cwd()
    configuration = resolve_configuration(
        ConfigurationOverrides(
            capabilities=capabilities,
            server=server,
            params=params,
            filter=name_filter,
            max_workers=max_workers,
            base_url=base_url,
            timeout=timeout,
            configuration_file=configuration_file,
            output_directory=output_directory,
        ),
        working_directory=working_directory,
    )
    options = RunOptions(extract_only=extract, keep_sandbox=keep_sandbox or bool(run_directory))
    sandbox_manager = SandboxManager(working_directory)

    try:
        with LifecycleGuard(
            sandbox_manager, preserve_sandbox=keep_sandbox or bool(run_directory)
        ) as token:
            controller = _build_controller(configuration, sandbox_manager, options, token)
            if run_directory:
                outcome = controller.run_extracted(Path(run_directory))
                ctx.exit(0 if outcome.succeeded else 1)

            loaded, load_failed = _load_projects(projects, access_token=access_token, debug=debug)
            batch = controller.run_all(loaded)
    except BatchInterrupted as exc:
        logger.debug("%s", exc)
        ctx.exit(exc.exit_code)

    ctx.exit(1 if load_failed else batch.exit_code)


def configure_logging(debug: bool) -> None:
    """Route package log records to stderr at the requested verbosity."""
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    if not any(isinstance(handler, _ClickEchoHandler) for handler in package_logger.handlers):
        handler = _ClickEchoHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        package_logger.addHandler(handler)


class _ClickEchoHandler(logging.Handler):
    """Writes through click so the current stderr stream is always used."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:  # pylint: disable=broad-except
            self.handleError(record)


def _build_controller(
    configuration: Configuration,
    sandbox_manager: SandboxManager,
    options: RunOptions,
    token: CancellationToken,
) -> BatchController:
    return BatchController(
        configuration=configuration,
        sandbox_manager=sandbox_manager,
        materializer=ProjectMaterializer(
            sandbox_manager=sandbox_manager,
            code_generator=SubprocessCodeGenerator(configuration.commands.generator),
        ),
        dependency_stage=DependencyStage(configuration.commands.installer),
        run_stage=RunStage(),
        options=options,
        token=token,
    )


def _load_projects(
    patterns: tuple[str, ...], *, access_token: str | None, debug: bool
) -> tuple[list[Project], bool]:
    paths = expand_project_paths(patterns)
    if not paths:
        raise CliError(f"No project files matched: {' '.join(patterns)}")
    projects: list[Project] = []
    load_failed = False
    for path in paths:
        try:
            project = load_project_document(path)
        except ProjectDocumentError as exc:
            logger.error("%s", exc)
            load_failed = True
            continue
        if access_token:
            project = inject_access_token(project, access_token)
        if debug:
            project = inject_echo_commands(project)
        projects.append(project)
    return projects, load_failed


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        result = cli.main(args=list(argv), prog_name="side-runner", standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return result if isinstance(result, int) else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
