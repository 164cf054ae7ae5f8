"""Option name validation against a menu grammar."""

import logging
from collections.abc import Sequence
from typing import Optional

from clibricks.modules.menu.models import MenuEntry, UnknownOptionError
from clibricks.modules.menu.resolver import resolve

logger = logging.getLogger(__name__)


def declared_names(entries: Sequence[MenuEntry], scope: Optional[str] = None) -> set[str]:
    """Bare names of every option declared for a scope."""
    return set(resolve(entries, scope).names())


def validate(entries: Sequence[MenuEntry], scope: Optional[str], candidate: Optional[str]) -> None:
    """Check that an option name is declared for the active scope.

    An empty candidate means no option was requested and is always valid.

    Raises:
        UnknownOptionError: If candidate is not declared for the scope
    """
    if not candidate:
        return

    if candidate not in declared_names(entries, scope):
        logger.debug(f"Rejected option {candidate!r} for scope {scope or '<global>'}")
        raise UnknownOptionError(candidate)


__all__ = ["declared_names", "validate"]
