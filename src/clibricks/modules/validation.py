"""Shared validation utilities for project settings.

Philosophy:
- Single source of truth for validation
- Security-first: values end up in command lines and env files
- Clear error messages with actionable guidance
- Zero dependencies on other clibricks modules

Public API:
    validate_program_name: Program name shown in usage strings
    validate_env_key: Environment variable name for env files
    validate_env_value: Environment variable value for env files
    ValidationError: Base exception for validation failures
"""

import re

ENV_KEY_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

UNSAFE_CHARACTERS = [";", "&", "|", "$", "`", "(", ")", "<", ">", "\n", "\r", "\t"]


class ValidationError(Exception):
    """Raised when validation fails."""

    pass


def validate_program_name(name: str) -> str:
    """Validate a program name for use in usage strings.

    Args:
        name: Program name (e.g. ``deploy.sh``)

    Returns:
        Validated name (unchanged if valid)

    Raises:
        ValidationError: If name is empty or contains unsafe characters

    Example:
        >>> validate_program_name("deploy.sh")
        'deploy.sh'
    """
    if not name or not isinstance(name, str):
        raise ValidationError("Program name must be a non-empty string")

    for pattern in UNSAFE_CHARACTERS:
        if pattern in name:
            raise ValidationError(f"Program name contains unsafe character {pattern!r}")

    if " " in name:
        raise ValidationError("Program name cannot contain spaces")

    return name


def validate_env_key(key: str) -> str:
    """Validate an environment variable name.

    Raises:
        ValidationError: If key is not a valid shell variable name

    Example:
        >>> validate_env_key("COMPOSE_PROJECT_NAME")
        'COMPOSE_PROJECT_NAME'
    """
    if not key:
        raise ValidationError("Environment variable name cannot be empty")
    if not ENV_KEY_PATTERN.match(key):
        raise ValidationError(
            f"Invalid environment variable name: {key!r}. "
            "Use letters, digits and underscores, not starting with a digit."
        )
    return key


def validate_env_value(value: str) -> str:
    """Validate an environment variable value (single line only)."""
    if "\n" in value or "\r" in value:
        raise ValidationError("Environment variable values cannot span multiple lines")
    return value


__all__ = [
    "ValidationError",
    "validate_env_key",
    "validate_env_value",
    "validate_program_name",
]
