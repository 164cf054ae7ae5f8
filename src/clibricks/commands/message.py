"""Message and confirmation commands.

Usage:
    clibricks message show "Stack started" --level 0
    answer=$(clibricks message confirm "Remove volumes?")
"""

import click

from clibricks.click_group import BricksGroup
from clibricks.commands.cli_helpers import echo_if_any, fail
from clibricks.modules.messages import (
    CLIMessageHandler,
    MessageError,
    interpret_answer,
    parse_level,
)


@click.group(name="message", cls=BricksGroup)
def message_group():
    """Display messages and ask confirmations."""
    pass


@message_group.command(name="show")
@click.argument("message")
@click.option(
    "--level",
    "-l",
    type=str,
    default=None,
    help="-1 warning, 0 info, 1 error, 2 critical (default: plain)",
)
def message_show(message: str, level: str | None):
    """Print MESSAGE styled for its level.

    The level only affects styling; the exit status stays 0.
    """
    try:
        parsed = parse_level(level)
    except MessageError as e:
        fail(str(e))
    CLIMessageHandler().show_message(message, parsed)


@message_group.command(name="confirm")
@click.argument("message")
@click.option("--default", "default", type=str, default="", help="Printed on an empty answer")
@click.option("--answer", type=str, default=None, help="Answer without prompting")
def message_confirm(message: str, default: str, answer: str | None):
    """Ask MESSAGE and print "y" when confirmed.

    An empty answer prints --default; any other answer prints nothing.
    """
    if answer is not None:
        result = interpret_answer(answer, default)
    else:
        result = CLIMessageHandler().confirm(message, default)
    echo_if_any(result)


__all__ = ["message_group"]
