"""Option resolution for a sub-command scope."""

import logging
from collections.abc import Iterable, Sequence
from typing import Optional, Union

from clibricks.modules.menu.models import (
    Exclusion,
    MenuEntry,
    OptionKind,
    ResolvedOptionSet,
)

logger = logging.getLogger(__name__)


def resolve(
    entries: Sequence[MenuEntry],
    scope: Optional[str] = None,
    exclude_tag: Optional[Union[str, Exclusion]] = None,
) -> ResolvedOptionSet:
    """Compute the options applicable to a scope.

    Args:
        entries: Entries as returned by load_menu
        scope: Sub-command name, or None for the global grammar
        exclude_tag: Exclusion directive (e.g. ``.opts .test1``). When given,
            the grammar is narrowed to the options of the named sub-command
            and ``scope`` is ignored.

    Returns:
        ResolvedOptionSet with declaration order preserved in each group

    Raises:
        MenuError: If exclude_tag is malformed
    """
    if exclude_tag:
        exclusion = (
            exclude_tag if isinstance(exclude_tag, Exclusion) else Exclusion.parse(exclude_tag)
        )
        scope = exclusion.scope
        logger.debug(f"Narrowing menu grammar to scope: {scope}")

    selected = [entry for entry in entries if entry.scope.applies_to(scope)]
    return ResolvedOptionSet(
        mandatory=_of_kind(selected, OptionKind.MANDATORY),
        optional=_of_kind(selected, OptionKind.OPTIONAL),
    )


def find_entry(
    entries: Iterable[MenuEntry], name: str, scope: Optional[str] = None
) -> Optional[MenuEntry]:
    """Return the first entry declared with this name in the scope."""
    for entry in entries:
        if entry.name == name and entry.scope.applies_to(scope):
            return entry
    return None


def _of_kind(entries: Iterable[MenuEntry], kind: OptionKind) -> tuple[MenuEntry, ...]:
    return tuple(entry for entry in entries if entry.kind is kind)


__all__ = ["find_entry", "resolve"]
