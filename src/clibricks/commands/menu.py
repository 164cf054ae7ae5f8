"""Menu (help generation) commands.

This module provides the `clibricks menu` command group, exposing the menu
engine to shell scripts: option validation, usage fragments and full
usage lines built from a YAML menu file.

Usage:
    clibricks menu check-entries start --file menu.yml
    clibricks menu build-cmd-opts ".opts .start" --file menu.yml
    clibricks menu display-help start --program deploy.sh
"""

import logging

import click
from rich.console import Console

from clibricks.click_group import BricksGroup
from clibricks.commands.cli_helpers import echo_if_any, fail, get_project_config
from clibricks.modules.menu import Menu, MenuError, render_option_table

logger = logging.getLogger(__name__)

menu_file_option = click.option(
    "--file",
    "-f",
    "menu_file",
    type=str,
    help="Menu configuration file (defaults to menu_file of the project config)",
)
scope_option = click.option(
    "--scope",
    "-s",
    type=str,
    help="Sub-command whose options are used (default: global options)",
)


def _load_menu(ctx: click.Context, menu_file: str | None) -> Menu:
    path = menu_file or get_project_config(ctx).menu_file
    try:
        return Menu.load(path)
    except MenuError as e:
        fail(str(e))


@click.group(name="menu", cls=BricksGroup)
def menu_group():
    """Build usage strings and validate options from a menu file.

    Rendered strings are printed on stdout. Errors (missing menu file,
    unknown option) are printed on stderr with exit status 1, so
    $(clibricks menu ...) captures usage strings only.

    Example menu.yml:

    \b
    opts:
      start:
        type: mandatory
        opts:
          detach: {type: mandatory, prefix: "--"}
      logs:
        type: optional
    """
    pass


@menu_group.command(name="check-entries")
@click.argument("candidate", required=False, default="")
@menu_file_option
@scope_option
@click.pass_context
def check_entries(ctx: click.Context, candidate: str, menu_file: str | None, scope: str | None):
    """Check that CANDIDATE is a declared option.

    Succeeds silently when CANDIDATE is declared or empty.
    """
    menu = _load_menu(ctx, menu_file)
    try:
        menu.check_entry(candidate, scope)
    except MenuError as e:
        fail(str(e))


@menu_group.command(name="build-mandatory")
@click.argument("names", nargs=-1)
@menu_file_option
@scope_option
@click.pass_context
def build_mandatory(ctx: click.Context, names: tuple[str, ...], menu_file: str | None, scope: str | None):
    """Render NAMES as a mandatory group, e.g. [start|--build]."""
    menu = _load_menu(ctx, menu_file)
    try:
        echo_if_any(menu.build_mandatory(names, scope))
    except MenuError as e:
        fail(str(e))


@menu_group.command(name="build-optional")
@click.argument("names", nargs=-1)
@menu_file_option
@scope_option
@click.pass_context
def build_optional(ctx: click.Context, names: tuple[str, ...], menu_file: str | None, scope: str | None):
    """Render NAMES as an optional group, e.g. {logs|ps}."""
    menu = _load_menu(ctx, menu_file)
    try:
        echo_if_any(menu.build_optional(names, scope))
    except MenuError as e:
        fail(str(e))


@menu_group.command(name="build-cmd-opts")
@click.argument("exclude_tag", required=False)
@menu_file_option
@scope_option
@click.pass_context
def build_cmd_opts(
    ctx: click.Context, exclude_tag: str | None, menu_file: str | None, scope: str | None
):
    """Render every option of a scope.

    EXCLUDE_TAG (e.g. ".opts .start") narrows the options to those of
    one sub-command.
    """
    menu = _load_menu(ctx, menu_file)
    try:
        echo_if_any(menu.build_cmd_opts(scope, exclude_tag))
    except MenuError as e:
        fail(str(e))


@menu_group.command(name="display-help")
@click.argument("scope", required=False)
@menu_file_option
@click.option("--program", "-p", type=str, help="Program name (defaults to the project config)")
@click.option("--details", is_flag=True, help="Also list every option with its description")
@click.pass_context
def display_help(
    ctx: click.Context,
    scope: str | None,
    menu_file: str | None,
    program: str | None,
    details: bool,
):
    """Print the usage line of the program or of sub-command SCOPE."""
    menu = _load_menu(ctx, menu_file)
    program = program or get_project_config(ctx).program_name

    click.echo(menu.display_help(program, scope))

    if details:
        option_set = menu.resolve(scope)
        if not option_set.is_empty:
            Console().print(render_option_table(option_set))


__all__ = ["menu_group"]
