"""Project configuration command.

Usage:
    clibricks init deploy.sh --config-dir config --menu-file menu/menu.yml
"""

import click

from clibricks.commands.cli_helpers import fail
from clibricks.config_manager import ConfigError, ConfigManager


@click.command(name="init")
@click.argument("program_name")
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False),
    help="Directory relative file settings are resolved against",
)
@click.option("--menu-file", type=str, help="Menu configuration file")
@click.option("--compose-file", type=str, help="docker-compose.yml of the project")
@click.option("--profile", "compose_profile", type=str, help="docker compose profile")
@click.option("--env-file", "compose_env_file", type=str, help="Env file handed to docker compose")
@click.option("--service", "compose_service", type=str, help="Default service for status")
@click.option("--github-owner", type=str, help="GitHub repository owner")
@click.option("--github-repo", type=str, help="GitHub repository name")
@click.pass_context
def init_command(ctx: click.Context, program_name: str, config_dir: str | None, **settings: str | None):
    """Create or update the project configuration.

    PROGRAM_NAME is shown in usage lines (e.g. deploy.sh). Settings not
    given on the command line keep their current value.

    \b
    Examples:
        clibricks init deploy.sh --menu-file config/menu.yml
        clibricks init deploy.sh --config-dir config --compose-file docker-compose.yml --profile dev
    """
    config_path = ctx.find_root().obj.get("config_path") if ctx.find_root().obj else None
    try:
        config = ConfigManager.init_config(
            program_name, config_dir=config_dir, custom_path=config_path, **settings
        )
    except ConfigError as e:
        fail(str(e))

    click.echo(f"Saved config for {config.program_name} to {ConfigManager.get_config_path(config_path)}")


__all__ = ["init_command"]
