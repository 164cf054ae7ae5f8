"""Command groups for clibricks CLI."""

from clibricks.commands.compose import compose_group
from clibricks.commands.github import github_group
from clibricks.commands.help import register_help_command
from clibricks.commands.init import init_command
from clibricks.commands.menu import menu_group
from clibricks.commands.message import message_group

__all__ = [
    "compose_group",
    "github_group",
    "init_command",
    "menu_group",
    "message_group",
    "register_help_command",
]
