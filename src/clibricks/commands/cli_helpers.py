"""Shared helper functions for CLI commands.

Functions in this module should be:
- Side-effect minimal
- Reusable across multiple commands
"""

import logging
import sys
from typing import NoReturn

import click

from clibricks.config_manager import ConfigError, ConfigManager, ProjectConfig

logger = logging.getLogger(__name__)


def fail(message: str, exit_code: int = 1) -> NoReturn:
    """Print an error message to stderr and exit."""
    click.echo(message, err=True)
    sys.exit(exit_code)


def get_project_config(ctx: click.Context) -> ProjectConfig:
    """Load the project configuration selected on the root command.

    The result is cached on the root context so a command loads it once.
    """
    root = ctx.find_root()
    root.ensure_object(dict)
    if "project_config" not in root.obj:
        try:
            root.obj["project_config"] = ConfigManager.load_config(root.obj.get("config_path"))
        except ConfigError as e:
            fail(str(e))
    return root.obj["project_config"]


def echo_if_any(output: str) -> None:
    """Echo output, staying silent when it is empty."""
    if output:
        click.echo(output)


__all__ = ["echo_if_any", "fail", "get_project_config"]
