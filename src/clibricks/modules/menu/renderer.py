"""Usage string rendering.

Mandatory options are rendered as ``[a|b]`` and optional ones as ``{c|d}``.
Empty groups are omitted entirely.
"""

from collections.abc import Iterable
from typing import Optional

from rich.table import Table

from clibricks.modules.menu.models import MenuEntry, ResolvedOptionSet


def _join(entries: Iterable[MenuEntry]) -> str:
    return "|".join(entry.display_name for entry in entries)


def render_mandatory(entries: Iterable[MenuEntry]) -> str:
    joined = _join(entries)
    return f"[{joined}]" if joined else ""


def render_optional(entries: Iterable[MenuEntry]) -> str:
    joined = _join(entries)
    return f"{{{joined}}}" if joined else ""


def render_options(option_set: ResolvedOptionSet) -> str:
    """Render both option groups, e.g. ``[a|--b] {c}``."""
    groups = [render_mandatory(option_set.mandatory), render_optional(option_set.optional)]
    return " ".join(group for group in groups if group)


def render_usage(program: str, scope: Optional[str], option_set: ResolvedOptionSet) -> str:
    """Render a full usage line.

    Args:
        program: Program name shown after ``Usage:``
        scope: Sub-command the usage is for, if any
        option_set: Resolved options of that scope

    Returns:
        Usage string, e.g. ``Usage: deploy.sh start [--env] {verbose}``
    """
    parts = [f"Usage: {program}"]
    if scope:
        parts.append(scope)
    options = render_options(option_set)
    if options:
        parts.append(options)
    return " ".join(parts)


def render_option_table(option_set: ResolvedOptionSet, title: Optional[str] = None) -> Table:
    """Build a rich table describing each option of a resolved set."""
    table = Table(title=title)
    table.add_column("Option", style="cyan")
    table.add_column("Kind", style="yellow")
    table.add_column("Description", style="white")

    for entry in option_set.entries:
        table.add_row(entry.display_name, entry.kind.value, entry.description or "-")

    return table


__all__ = [
    "render_mandatory",
    "render_option_table",
    "render_options",
    "render_optional",
    "render_usage",
]
