"""Menu engine tying loading, resolution, rendering and validation together.

Public API:
    Menu: Loaded menu grammar with the operations exposed by `clibricks menu`
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from clibricks.modules.menu.loader import load_menu
from clibricks.modules.menu.models import MenuEntry, OptionKind, ResolvedOptionSet
from clibricks.modules.menu.renderer import (
    render_mandatory,
    render_options,
    render_optional,
    render_usage,
)
from clibricks.modules.menu.resolver import find_entry, resolve
from clibricks.modules.menu.validator import validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Menu:
    """A loaded menu grammar.

    Example:
        >>> menu = Menu.load("config/menu/menu.yml")
        >>> menu.display_help("deploy.sh", "start")
        'Usage: deploy.sh start [--env] {verbose}'
    """

    entries: tuple[MenuEntry, ...]

    @classmethod
    def load(cls, path: Optional[Union[str, Path]]) -> "Menu":
        """Load a menu from a YAML file.

        Raises:
            MenuConfigMissingError: If path is empty or does not exist
            MenuConfigMalformedError: If the file cannot be interpreted
        """
        return cls(entries=tuple(load_menu(path)))

    def resolve(
        self, scope: Optional[str] = None, exclude_tag: Optional[str] = None
    ) -> ResolvedOptionSet:
        return resolve(self.entries, scope, exclude_tag)

    def check_entry(self, candidate: Optional[str], scope: Optional[str] = None) -> None:
        """Raise UnknownOptionError unless candidate is declared (or empty)."""
        validate(self.entries, scope, candidate)

    def build_mandatory(self, names: Sequence[str], scope: Optional[str] = None) -> str:
        """Render the given names as a mandatory group, e.g. ``[test1|--test2]``."""
        return render_mandatory(self._lookup(names, scope, OptionKind.MANDATORY))

    def build_optional(self, names: Sequence[str], scope: Optional[str] = None) -> str:
        """Render the given names as an optional group, e.g. ``{test5|test6}``."""
        return render_optional(self._lookup(names, scope, OptionKind.OPTIONAL))

    def build_cmd_opts(self, scope: Optional[str] = None, exclude_tag: Optional[str] = None) -> str:
        """Render every option of a scope, e.g. ``[test1|--test2] {test5}``."""
        return render_options(self.resolve(scope, exclude_tag))

    def display_help(self, program: str, scope: Optional[str] = None) -> str:
        """Render the usage line of the program or one of its sub-commands."""
        return render_usage(program, scope, self.resolve(scope))

    def _lookup(
        self, names: Sequence[str], scope: Optional[str], kind: OptionKind
    ) -> list[MenuEntry]:
        # Undeclared names are rendered bare, empty ones are skipped
        found = []
        for name in names:
            if not name:
                continue
            entry = find_entry(self.entries, name, scope)
            if entry is None:
                logger.debug(f"Option {name!r} not declared in scope {scope or '<global>'}")
                entry = MenuEntry(name=name, kind=kind)
            found.append(entry)
        return found


__all__ = ["Menu"]
