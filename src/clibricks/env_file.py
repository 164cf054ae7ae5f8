"""Env file reading and writing.

Env files hold one ``KEY=VALUE`` assignment per line and are handed to
``docker compose --env-file``. Blank lines and ``#`` comments are ignored
when reading.
"""

import logging
import os
from pathlib import Path

from clibricks.modules.validation import ValidationError, validate_env_key, validate_env_value

logger = logging.getLogger(__name__)


class EnvFileError(Exception):
    """Raised when an env file cannot be read or written."""

    pass


def write_env_file(path: str | Path, values: dict[str, str], merge: bool = False) -> Path:
    """Write variables to an env file.

    Args:
        path: Env file path
        values: Variables to write
        merge: Keep variables already in the file (new values win)

    Returns:
        Path written

    Raises:
        EnvFileError: If a variable is invalid or the file cannot be written
    """
    env_path = Path(path)

    content: dict[str, str] = {}
    if merge and env_path.exists():
        content.update(read_env_file(env_path))

    try:
        for key, value in values.items():
            content[validate_env_key(key)] = validate_env_value(str(value))
    except ValidationError as e:
        raise EnvFileError(str(e)) from e

    lines = "".join(f"{key}={value}\n" for key, value in content.items())

    temp_path = env_path.with_suffix(env_path.suffix + ".tmp")
    try:
        env_path.parent.mkdir(parents=True, exist_ok=True)
        temp_path.write_text(lines)
        os.chmod(temp_path, 0o600)
        temp_path.replace(env_path)
    except OSError as e:
        if temp_path.exists():
            temp_path.unlink()
        raise EnvFileError(f"Failed to write env file {env_path}: {e}") from e

    logger.debug(f"Wrote {len(content)} variable(s) to: {env_path}")
    return env_path


def read_env_file(path: str | Path) -> dict[str, str]:
    """Read variables from an env file.

    Raises:
        EnvFileError: If the file is missing or contains an invalid line
    """
    env_path = Path(path)
    try:
        text = env_path.read_text()
    except OSError as e:
        raise EnvFileError(f"Failed to read env file {env_path}: {e}") from e

    values: dict[str, str] = {}
    for line_number, raw_line in enumerate(text.splitlines(), 1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            raise EnvFileError(f"{env_path}:{line_number}: expected KEY=VALUE")

        key, value = line.split("=", 1)
        key = key.strip()
        if key.startswith("export "):
            key = key[len("export ") :].strip()
        try:
            validate_env_key(key)
        except ValidationError as e:
            raise EnvFileError(f"{env_path}:{line_number}: {e}") from e

        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
            value = value[1:-1]
        values[key] = value

    return values


__all__ = ["EnvFileError", "read_env_file", "write_env_file"]
