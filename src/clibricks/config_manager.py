"""Project configuration management.

This module handles the project configuration shared by every clibricks
command: the program name shown in usage strings, the menu file, and the
docker compose settings. It is stored as TOML (``.clibricks.toml`` in the
working directory by default) and loaded once per invocation into an
immutable ProjectConfig that is passed explicitly to each brick.

Security:
- Config file permissions: 0600 (owner read/write only)
- Atomic writes (temporary file + rename)
- Input validation
"""

import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any

try:
    import tomli  # type: ignore[import]
except ImportError:
    # Python 3.11+ ships the same parser as tomllib
    try:
        import tomllib as tomli  # type: ignore[import]
    except ImportError as e:
        raise ImportError("toml library not available. Install with: pip install tomli") from e

try:
    import tomlkit
except ImportError as e:
    raise ImportError("tomlkit library not available. Install with: pip install tomlkit") from e

from clibricks.modules.validation import ValidationError, validate_program_name

logger = logging.getLogger(__name__)

DEFAULT_PROGRAM_NAME = "clibricks"

# Settings holding file paths, resolved against the config directory on init
PATH_SETTINGS = ("menu_file", "compose_file", "compose_env_file")


class ConfigError(Exception):
    """Raised when configuration operations fail."""

    pass


@dataclass(frozen=True)
class ProjectConfig:
    """Project configuration data."""

    program_name: str = DEFAULT_PROGRAM_NAME
    menu_file: str | None = None
    compose_file: str | None = None
    compose_profile: str | None = None
    compose_env_file: str | None = None
    compose_service: str | None = None
    github_owner: str | None = None
    github_repo: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, excluding None values."""
        # TOML has no null
        return {k: v for k, v in asdict(self).items() if v is not None}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProjectConfig":
        """Create from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        for key in data:
            if key not in known:
                logger.warning(f"Unknown config key: {key}")

        values = {k: str(v) for k, v in data.items() if k in known and v is not None}
        return cls(**values)


class ConfigManager:
    """Manage the project configuration file.

    The file is looked up, in order, at the explicit path given on the command
    line, at $CLIBRICKS_CONFIG, then at ./.clibricks.toml.
    """

    CONFIG_FILENAME = ".clibricks.toml"
    CONFIG_ENV_VAR = "CLIBRICKS_CONFIG"

    @classmethod
    def get_config_path(cls, custom_path: str | None = None) -> Path:
        """Get configuration file path.

        Args:
            custom_path: Custom config file path (optional)

        Returns:
            Path to config file (may not exist)
        """
        if custom_path:
            return Path(custom_path).expanduser().resolve()

        env_path = os.environ.get(cls.CONFIG_ENV_VAR)
        if env_path:
            return Path(env_path).expanduser().resolve()

        return Path.cwd() / cls.CONFIG_FILENAME

    @classmethod
    def load_config(cls, custom_path: str | None = None) -> ProjectConfig:
        """Load configuration from file.

        Args:
            custom_path: Custom config file path (optional, must exist)

        Returns:
            ProjectConfig (defaults when no config file exists)

        Raises:
            ConfigError: If a custom path does not exist or loading fails
        """
        config_path = cls.get_config_path(custom_path)

        if not config_path.exists():
            if custom_path:
                raise ConfigError(f"Config file not found: {config_path}")
            logger.debug("Config file not found, using defaults")
            return ProjectConfig()

        try:
            mode = config_path.stat().st_mode & 0o777
            if mode & 0o077:  # Check if group/other have any permissions
                logger.warning(
                    f"Config file has insecure permissions: {oct(mode)}. Fixing to 0600..."
                )
                os.chmod(config_path, 0o600)

            with open(config_path, "rb") as f:
                data = tomli.load(f)  # type: ignore[attr-defined]

        except Exception as e:
            raise ConfigError(f"Failed to load config: {e}") from e

        logger.debug(f"Loaded config from: {config_path}")
        return ProjectConfig.from_dict(data)

    @classmethod
    def save_config(cls, config: ProjectConfig, custom_path: str | None = None) -> Path:
        """Save configuration to file.

        Args:
            config: Configuration to save
            custom_path: Custom config file path (optional)

        Returns:
            Path written

        Raises:
            ConfigError: If saving fails
        """
        config_path = cls.get_config_path(custom_path)
        temp_path = config_path.with_suffix(".tmp")
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)

            # Preserve comments and unrelated keys of an existing file
            if config_path.exists():
                with open(config_path) as f:
                    doc = tomlkit.load(f)
            else:
                doc = tomlkit.document()

            for key, value in config.to_dict().items():
                doc[key] = value
            for field in fields(ProjectConfig):
                if getattr(config, field.name) is None and field.name in doc:
                    del doc[field.name]

            with open(temp_path, "w") as f:
                tomlkit.dump(doc, f)

            os.chmod(temp_path, 0o600)
            temp_path.replace(config_path)

            logger.debug(f"Saved config to: {config_path}")
            return config_path

        except Exception as e:
            if temp_path.exists():
                temp_path.unlink()
            raise ConfigError(f"Failed to save config: {e}") from e

    @classmethod
    def init_config(
        cls,
        program_name: str,
        config_dir: str | None = None,
        custom_path: str | None = None,
        **settings: str | None,
    ) -> ProjectConfig:
        """Create or update the project configuration.

        Args:
            program_name: Program name shown in usage strings
            config_dir: Directory relative file settings are resolved against
            custom_path: Custom config file path (optional)
            **settings: Other ProjectConfig fields (empty values are ignored)

        Returns:
            Saved ProjectConfig

        Raises:
            ConfigError: If a setting is invalid or saving fails
        """
        try:
            validate_program_name(program_name)
        except ValidationError as e:
            raise ConfigError(str(e)) from e

        known = {f.name for f in fields(ProjectConfig)}
        unknown = set(settings) - known
        if unknown:
            raise ConfigError(f"Unknown config key(s): {', '.join(sorted(unknown))}")

        base_dir = Path(config_dir).expanduser().resolve() if config_dir else None
        updates: dict[str, str] = {"program_name": program_name}
        for key, value in settings.items():
            if not value:
                continue
            if key in PATH_SETTINGS and base_dir is not None and not Path(value).is_absolute():
                value = str(base_dir / value)
            updates[key] = value

        config_path = cls.get_config_path(custom_path)
        current = cls.load_config(str(config_path)) if config_path.exists() else ProjectConfig()
        config = replace(current, **updates)

        cls.save_config(config, str(config_path))
        return config


__all__ = ["DEFAULT_PROGRAM_NAME", "ConfigError", "ConfigManager", "ProjectConfig"]
