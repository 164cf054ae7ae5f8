"""Docker Compose commands.

This module provides the `clibricks compose` command group, wrapping
`docker compose` with the project's compose file, profile and env file.

Usage:
    clibricks compose build start --file docker-compose.yml
    clibricks compose exec up -d --dry-run
    clibricks compose status web
"""

import logging
import shlex
import sys

import click

from clibricks.click_group import BricksGroup
from clibricks.commands.cli_helpers import echo_if_any, fail, get_project_config
from clibricks.env_file import EnvFileError, write_env_file
from clibricks.modules.docker_compose import ComposeError, DockerCompose, build_command, build_options

logger = logging.getLogger(__name__)

compose_file_option = click.option(
    "--file",
    "-f",
    "compose_file",
    type=str,
    help="Path to docker-compose.yml (defaults to compose_file of the project config)",
)
opts_option = click.option(
    "--opts",
    "-o",
    type=str,
    default="",
    help='Global docker compose options, e.g. "--project-name demo"',
)
passthrough = {"ignore_unknown_options": True}


@click.group(name="compose", cls=BricksGroup)
def compose_group():
    """Build and run docker compose commands for the project."""
    pass


@compose_group.command(name="build", context_settings=passthrough)
@click.argument("command", required=False)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@compose_file_option
@opts_option
@click.pass_context
def compose_build(
    ctx: click.Context, command: str | None, args: tuple[str, ...], compose_file: str | None, opts: str
):
    """Print the docker compose command line for COMMAND.

    Project profile and env file are not added; see `exec --dry-run` for
    the full command.
    """
    compose_file = compose_file or get_project_config(ctx).compose_file
    try:
        click.echo(shlex.join(build_command(compose_file, command, opts, args=args)))
    except ComposeError as e:
        fail(str(e))


@compose_group.command(name="options")
@opts_option
@click.pass_context
def compose_options(ctx: click.Context, opts: str):
    """Print the global options added to every project command."""
    config = get_project_config(ctx)
    echo_if_any(shlex.join(build_options(opts, config.compose_profile, config.compose_env_file)))


@compose_group.command(name="exec", context_settings=passthrough)
@click.argument("command", required=False)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@compose_file_option
@opts_option
@click.option("--dry-run", is_flag=True, help="Print the command instead of running it")
@click.pass_context
def compose_exec(
    ctx: click.Context,
    command: str | None,
    args: tuple[str, ...],
    compose_file: str | None,
    opts: str,
    dry_run: bool,
):
    """Run docker compose COMMAND with the project profile and env file.

    \b
    Examples:
        clibricks compose exec up -d
        clibricks compose exec logs web --dry-run
    """
    compose = DockerCompose.from_config(get_project_config(ctx))
    if compose_file:
        compose.compose_file = compose_file

    try:
        result = compose.exec_command(command, opts, args, dry_run=dry_run)
    except ComposeError as e:
        fail(str(e))
    except KeyboardInterrupt:
        click.echo("\nCancelled by user.")
        sys.exit(130)
    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        logger.exception("Unexpected error in compose exec command")
        sys.exit(1)

    if dry_run:
        click.echo(result.command_line)
        return

    if result.stderr:
        click.echo(result.stderr, err=True)
    if not result.success:
        sys.exit(result.returncode if result.returncode > 0 else 1)


@compose_group.command(name="status")
@click.argument("service", required=False)
@compose_file_option
@click.pass_context
def compose_status(ctx: click.Context, service: str | None, compose_file: str | None):
    """Print the container state of SERVICE (defaults to compose_service)."""
    config = get_project_config(ctx)
    compose = DockerCompose.from_config(config)
    if compose_file:
        compose.compose_file = compose_file

    try:
        click.echo(compose.status(service or config.compose_service))
    except ComposeError as e:
        fail(str(e))
    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        logger.exception("Unexpected error in compose status command")
        sys.exit(1)


@compose_group.command(name="env-file")
@click.argument("assignments", nargs=-1, required=True)
@click.option(
    "--output",
    "output_path",
    type=str,
    help="Env file to write (defaults to compose_env_file of the project config)",
)
@click.option("--merge", is_flag=True, help="Keep variables already in the file")
@click.pass_context
def compose_env_file(ctx: click.Context, assignments: tuple[str, ...], output_path: str | None, merge: bool):
    """Write KEY=VALUE ASSIGNMENTS to the project env file."""
    output_path = output_path or get_project_config(ctx).compose_env_file
    if not output_path:
        fail("Please provide an env file")

    values = {}
    for assignment in assignments:
        if "=" not in assignment:
            fail(f"Invalid assignment (expected KEY=VALUE): {assignment}")
        key, value = assignment.split("=", 1)
        values[key.strip()] = value

    try:
        path = write_env_file(output_path, values, merge=merge)
    except EnvFileError as e:
        fail(str(e))

    click.echo(f"Wrote {len(values)} variable(s) to {path}")


__all__ = ["compose_group"]
