"""clibricks command line entry point."""

import logging

import click

from clibricks import __version__
from clibricks.click_group import BricksGroup
from clibricks.commands import (
    compose_group,
    github_group,
    init_command,
    menu_group,
    message_group,
    register_help_command,
)


@click.group(
    cls=BricksGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)
@click.option(
    "--config",
    "config_path",
    type=str,
    help="Project config file (default: $CLIBRICKS_CONFIG or ./.clibricks.toml)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
@click.version_option(version=__version__)
def main(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """clibricks - building blocks for project command line tools.

    \b
    PROJECT CONFIGURATION:
        init          Create or update .clibricks.toml

    \b
    HELP MENU:
        menu check-entries     Check an option name against the menu file
        menu build-mandatory   Render names as [a|b]
        menu build-optional    Render names as {a|b}
        menu build-cmd-opts    Render every option of a (sub-)command
        menu display-help      Print the usage line

    \b
    DOCKER COMPOSE:
        compose build     Print a docker compose command line
        compose exec      Run a docker compose command for the project
        compose options   Print the project options (profile, env file)
        compose status    Print the state of a service
        compose env-file  Write variables to the project env file

    \b
    GITHUB RELEASES:
        github latest     Latest release tag
        github exists     Check a release tag exists
        github releases   List release tags
        github compare    Compare two versions

    \b
    MESSAGES:
        message show      Print a message for a level
        message confirm   Ask a yes/no question

    \b
    EXAMPLES:
        $ clibricks init deploy.sh --menu-file config/menu.yml
        $ clibricks menu display-help start
        $ clibricks compose exec up -d
        $ clibricks github exists v1.0.0 --owner acme --repo app

    For help on any command: clibricks <command> --help
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(message)s")

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


main.add_command(init_command)
main.add_command(menu_group)
main.add_command(compose_group)
main.add_command(github_group)
main.add_command(message_group)
register_help_command(main)


if __name__ == "__main__":
    main()
