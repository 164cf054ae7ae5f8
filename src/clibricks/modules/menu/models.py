"""Data models for the menu engine.

This module defines the typed grammar the menu engine works on: declared
options, the scope they belong to, exclusion directives and the resolved
option set produced for one scope.

Philosophy:
- Immutable dataclasses for safety
- Scopes are values with an explicit membership predicate
- Simple validation at construction time
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional


class MenuError(Exception):
    """Raised when a menu operation fails."""

    pass


class MenuConfigMissingError(MenuError):
    """Raised when no usable menu configuration file was provided."""

    def __init__(self, message: str = "Please provide a menu configuration file"):
        super().__init__(message)


class MenuConfigMalformedError(MenuError):
    """Raised when a menu configuration file cannot be interpreted."""

    pass


class UnknownOptionError(MenuError):
    """Raised when a requested option is not declared for the active scope."""

    def __init__(self, option: str):
        self.option = option
        super().__init__(f"Option {option} does not exist")


class OptionKind(Enum):
    """Whether an option is rendered in the mandatory or optional group."""

    MANDATORY = "mandatory"
    OPTIONAL = "optional"


@dataclass(frozen=True)
class Scope:
    """Sub-command context an option belongs to.

    A scope without a name is the global scope, i.e. the grammar of the
    program itself rather than one of its sub-commands.
    """

    name: Optional[str] = None

    GLOBAL: ClassVar["Scope"]

    @property
    def is_global(self) -> bool:
        return self.name is None

    def applies_to(self, scope_name: Optional[str]) -> bool:
        """Check if options of this scope belong to the requested scope."""
        return self.name == (scope_name or None)

    def __str__(self) -> str:
        return self.name or "<global>"


Scope.GLOBAL = Scope()


@dataclass(frozen=True)
class Exclusion:
    """Directive narrowing a grammar to the options of one sub-command.

    Parsed from tags such as ``.opts .test1``.
    """

    scope: str
    directive: str = "opts"

    KNOWN_DIRECTIVES: ClassVar[tuple[str, ...]] = ("opts",)
    TAG_PATTERN: ClassVar[re.Pattern] = re.compile(r"^\.(?P<directive>\w+)\s+\.(?P<scope>[\w-]+)$")

    def __post_init__(self):
        if not self.scope:
            raise MenuError("Exclusion scope cannot be empty")
        if self.directive not in self.KNOWN_DIRECTIVES:
            raise MenuError(f"Unknown menu directive: {self.directive}")

    @classmethod
    def parse(cls, tag: str) -> "Exclusion":
        """Parse an exclusion tag.

        Args:
            tag: Tag of the form ``.<directive> .<scope>``

        Returns:
            Parsed Exclusion

        Raises:
            MenuError: If the tag is malformed or uses an unknown directive
        """
        match = cls.TAG_PATTERN.match(tag.strip())
        if not match:
            raise MenuError(f"Invalid exclusion tag: {tag}")
        return cls(scope=match.group("scope"), directive=match.group("directive"))


@dataclass(frozen=True)
class MenuEntry:
    """One option declared in a menu configuration file."""

    name: str
    kind: OptionKind
    scope: Scope = Scope.GLOBAL
    prefix: str = ""
    description: str = ""

    def __post_init__(self):
        if not self.name:
            raise MenuConfigMalformedError("Menu option name cannot be empty")

    @property
    def is_mandatory(self) -> bool:
        return self.kind is OptionKind.MANDATORY

    @property
    def display_name(self) -> str:
        """Name as shown in usage strings, including its prefix."""
        return f"{self.prefix}{self.name}"


@dataclass(frozen=True)
class ResolvedOptionSet:
    """Mandatory and optional options applicable to one scope."""

    mandatory: tuple[MenuEntry, ...] = field(default_factory=tuple)
    optional: tuple[MenuEntry, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.mandatory and not self.optional

    @property
    def entries(self) -> tuple[MenuEntry, ...]:
        """All options, mandatory first."""
        return self.mandatory + self.optional

    def names(self) -> list[str]:
        """Bare option names, mandatory first, in declaration order."""
        return [entry.name for entry in self.entries]


__all__ = [
    "Exclusion",
    "MenuConfigMalformedError",
    "MenuConfigMissingError",
    "MenuEntry",
    "MenuError",
    "OptionKind",
    "ResolvedOptionSet",
    "Scope",
    "UnknownOptionError",
]
