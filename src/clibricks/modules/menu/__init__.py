"""Configuration-driven help menu engine.

Parses a YAML description of mandatory and optional command options
(optionally scoped to sub-commands), renders usage strings from it and
validates option names against it.

Public API:
    Menu: Loaded menu grammar (load, resolve, render, validate)
    MenuEntry: One declared option
    Scope: Global or sub-command scope of an option
    Exclusion: Directive narrowing a grammar to one sub-command
    ResolvedOptionSet: Mandatory and optional options of one scope
    MenuError: Base exception (missing config, malformed config, unknown option)
"""

from clibricks.modules.menu.engine import Menu
from clibricks.modules.menu.loader import load_menu, parse_menu
from clibricks.modules.menu.models import (
    Exclusion,
    MenuConfigMalformedError,
    MenuConfigMissingError,
    MenuEntry,
    MenuError,
    OptionKind,
    ResolvedOptionSet,
    Scope,
    UnknownOptionError,
)
from clibricks.modules.menu.renderer import (
    render_mandatory,
    render_option_table,
    render_options,
    render_optional,
    render_usage,
)
from clibricks.modules.menu.resolver import find_entry, resolve
from clibricks.modules.menu.validator import declared_names, validate

__all__ = [
    "Exclusion",
    "Menu",
    "MenuConfigMalformedError",
    "MenuConfigMissingError",
    "MenuEntry",
    "MenuError",
    "OptionKind",
    "ResolvedOptionSet",
    "Scope",
    "UnknownOptionError",
    "declared_names",
    "find_entry",
    "load_menu",
    "parse_menu",
    "render_mandatory",
    "render_option_table",
    "render_options",
    "render_optional",
    "render_usage",
    "resolve",
    "validate",
]
