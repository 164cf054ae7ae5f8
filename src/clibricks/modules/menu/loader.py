"""Menu configuration loading.

Reads a YAML menu definition into an ordered list of MenuEntry records.

Example menu.yml:

    opts:
      start:
        type: mandatory
        description: Start the stack
      build:
        type: optional
        prefix: "--"
      logs:
        type: optional
        opts:
          follow: {type: mandatory, prefix: "--"}

Top-level options form the global grammar. Options declared under
``opts.<name>.opts`` form the grammar of the ``<name>`` sub-command.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from clibricks.modules.menu.models import (
    MenuConfigMalformedError,
    MenuConfigMissingError,
    MenuEntry,
    OptionKind,
    Scope,
)

logger = logging.getLogger(__name__)

OPTIONS_KEY = "opts"

MERGE_TAG = "tag:yaml.org,2002:merge"


class MenuLoader(yaml.SafeLoader):
    """SafeLoader that rejects an option declared twice in the same mapping."""


def _construct_unique_mapping(loader: MenuLoader, node: yaml.MappingNode, deep: bool = False) -> dict:
    # Checked before merge keys are flattened: `<<` overrides are not duplicates
    seen = set()
    for key_node, _ in node.value:
        if key_node.tag == MERGE_TAG:
            continue
        key = loader.construct_object(key_node, deep=deep)
        try:
            duplicate = key in seen
        except TypeError:
            # Unhashable keys are reported by construct_mapping
            continue
        if duplicate:
            raise yaml.constructor.ConstructorError(
                "while constructing a mapping",
                node.start_mark,
                f"found duplicate option '{key}'",
                key_node.start_mark,
            )
        seen.add(key)
    return loader.construct_mapping(node, deep=deep)


MenuLoader.add_constructor(yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_unique_mapping)


def load_menu(path: Optional[Union[str, Path]]) -> list[MenuEntry]:
    """Load menu entries from a YAML file.

    Args:
        path: Path to the menu configuration file

    Returns:
        Entries in declaration order, each sub-command option followed by
        the options of its own grammar

    Raises:
        MenuConfigMissingError: If path is empty or the file does not exist
        MenuConfigMalformedError: If the file cannot be interpreted
    """
    if not path or not Path(path).is_file():
        raise MenuConfigMissingError()

    menu_path = Path(path)
    try:
        with open(menu_path, encoding="utf-8") as f:
            data = yaml.load(f, Loader=MenuLoader)  # noqa: S506 - MenuLoader is a SafeLoader
    except yaml.YAMLError as e:
        raise MenuConfigMalformedError(f"Failed to parse menu file {menu_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise MenuConfigMalformedError(f"Failed to read menu file {menu_path}: {e}") from e

    entries = parse_menu(data)
    logger.debug(f"Loaded {len(entries)} menu option(s) from: {menu_path}")
    return entries


def parse_menu(data: Any) -> list[MenuEntry]:
    """Build menu entries from already-parsed YAML data.

    An empty document or a document without options yields no entries.
    """
    if data is None:
        return []
    if not isinstance(data, dict):
        raise MenuConfigMalformedError("Menu configuration must be a mapping")

    options = data.get(OPTIONS_KEY)
    if options is None:
        return []

    entries: list[MenuEntry] = []
    for name, definition in _iter_options(options, "menu"):
        entries.append(_parse_entry(name, definition, Scope.GLOBAL))

        sub_options = definition.get(OPTIONS_KEY) if isinstance(definition, dict) else None
        if sub_options is None:
            continue
        scope = Scope(str(name))
        for sub_name, sub_definition in _iter_options(sub_options, f"option '{name}'"):
            entries.append(_parse_entry(sub_name, sub_definition, scope))

    return entries


def _iter_options(options: Any, owner: str):
    if not isinstance(options, dict):
        raise MenuConfigMalformedError(f"'{OPTIONS_KEY}' of {owner} must be a mapping")
    return options.items()


def _parse_entry(name: Any, definition: Any, scope: Scope) -> MenuEntry:
    # `test4: mandatory` is shorthand for `test4: {type: mandatory}`
    if definition is None:
        definition = {}
    elif isinstance(definition, str):
        definition = {"type": definition}
    elif not isinstance(definition, dict):
        raise MenuConfigMalformedError(f"Option '{name}' must be a mapping or a type name")

    kind_value = definition.get("type", OptionKind.OPTIONAL.value)
    try:
        kind = OptionKind(str(kind_value).lower())
    except ValueError as e:
        raise MenuConfigMalformedError(
            f"Option '{name}' has unknown type '{kind_value}' (expected mandatory or optional)"
        ) from e

    prefix = definition.get("prefix", "")
    if not isinstance(prefix, str):
        raise MenuConfigMalformedError(f"Option '{name}' prefix must be a string")

    description = definition.get("description") or ""

    return MenuEntry(
        name=str(name),
        kind=kind,
        scope=scope,
        prefix=prefix,
        description=str(description).strip(),
    )


__all__ = ["OPTIONS_KEY", "load_menu", "parse_menu"]
