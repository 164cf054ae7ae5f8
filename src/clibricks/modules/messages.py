"""User messages and confirmations for CLI and testing.

This module provides a protocol-based approach to user interaction, allowing
different implementations for the terminal (using click) and for tests
(scripted answers).

Example:
    >>> handler = CLIMessageHandler()
    >>> handler.show_message("Stack started", MessageLevel.INFO)
    >>> if handler.confirm("Remove volumes?") == "y":
    ...     print("Removing...")

    Testing example:
    >>> test_handler = MockMessageHandler(answers=["yes"])
    >>> test_handler.confirm("Remove volumes?")
    'y'
"""

from enum import Enum
from typing import Protocol, runtime_checkable

import click

YES_ANSWERS = ("y", "yes")


class MessageError(Exception):
    """Raised when a message cannot be displayed."""

    pass


class MessageLevel(Enum):
    """Severity of a message, keyed by the level numbers used on the command line."""

    WARNING = -1
    INFO = 0
    ERROR = 1
    CRITICAL = 2


LEVEL_STYLES = {
    MessageLevel.WARNING: {"fg": "yellow"},
    MessageLevel.INFO: {"fg": "green"},
    MessageLevel.ERROR: {"fg": "red"},
    MessageLevel.CRITICAL: {"fg": "red", "bold": True},
}


def parse_level(value: int | str | MessageLevel | None) -> MessageLevel | None:
    """Convert a level number to a MessageLevel.

    Args:
        value: -1, 0, 1, 2 (as int or str), a MessageLevel, or None for a plain message

    Raises:
        MessageError: If value is not a known level
    """
    if value is None or isinstance(value, MessageLevel):
        return value
    try:
        return MessageLevel(int(value))
    except ValueError as e:
        raise MessageError("Invalid level option") from e


def interpret_answer(answer: str | None, default: str = "") -> str:
    """Turn a raw confirmation answer into ``"y"``, ``""`` or the default.

    - ``y``/``yes`` in any case confirm and return ``"y"``
    - an empty answer returns ``default`` unchanged
    - anything else declines and returns ``""``
    """
    answer = (answer or "").strip()
    if not answer:
        return default
    return "y" if answer.lower() in YES_ANSWERS else ""


@runtime_checkable
class MessageHandler(Protocol):
    """Protocol for displaying messages and asking confirmations."""

    def show_message(self, message: str, level: MessageLevel | None = None) -> None:
        """Display a message.

        Args:
            message: Text to display (never altered, only styled)
            level: Severity, or None for a plain message
        """
        ...

    def confirm(self, message: str, default: str = "") -> str:
        """Ask a yes/no question.

        Args:
            message: Question to display
            default: Value returned when the user just presses Enter

        Returns:
            "y" if confirmed, default on an empty answer, "" otherwise
        """
        ...


class CLIMessageHandler:
    """Click-based message handler with colored output."""

    def show_message(self, message: str, level: MessageLevel | None = None) -> None:
        if level is None:
            click.echo(message)
            return
        click.secho(message, **LEVEL_STYLES[level])

    def confirm(self, message: str, default: str = "") -> str:
        try:
            answer = click.prompt(
                click.style(f"{message} [y/N]", fg="yellow"),
                default="",
                show_default=False,
                prompt_suffix=" ",
            )
        except (KeyboardInterrupt, click.Abort):
            click.echo()
            raise click.Abort()
        return interpret_answer(answer, default)


class MockMessageHandler:
    """Message handler with scripted answers for testing.

    Tracks all interactions for verification in tests.

    Example:
        >>> handler = MockMessageHandler(answers=["n", ""])
        >>> handler.confirm("Continue?")
        ''
        >>> handler.confirm("Continue?", default="later")
        'later'
        >>> len(handler.interactions)
        2
    """

    def __init__(self, answers: list[str] | None = None):
        self.answers = list(answers or [])
        self.interactions: list[dict] = []

    def show_message(self, message: str, level: MessageLevel | None = None) -> None:
        self.interactions.append({"type": "message", "message": message, "level": level})

    def confirm(self, message: str, default: str = "") -> str:
        if not self.answers:
            raise RuntimeError(f"No scripted answer left for: {message}")
        answer = self.answers.pop(0)
        result = interpret_answer(answer, default)
        self.interactions.append(
            {"type": "confirm", "message": message, "answer": answer, "result": result}
        )
        return result


__all__ = [
    "CLIMessageHandler",
    "MessageError",
    "MessageHandler",
    "MessageLevel",
    "MockMessageHandler",
    "interpret_answer",
    "parse_level",
]
