"""Unit tests for project configuration management."""

import os
import stat
from pathlib import Path

import pytest

from clibricks.config_manager import (
    DEFAULT_PROGRAM_NAME,
    ConfigError,
    ConfigManager,
    ProjectConfig,
)

pytestmark = pytest.mark.unit


class TestProjectConfig:
    def test_defaults(self):
        config = ProjectConfig()

        assert config.program_name == DEFAULT_PROGRAM_NAME
        assert config.menu_file is None
        assert config.to_dict() == {"program_name": DEFAULT_PROGRAM_NAME}

    def test_immutable(self):
        config = ProjectConfig()

        with pytest.raises(AttributeError):
            config.program_name = "other"  # type: ignore[misc]

    def test_from_dict_ignores_unknown_keys(self, caplog):
        config = ProjectConfig.from_dict({"program_name": "test.sh", "colour": "blue"})

        assert config.program_name == "test.sh"
        assert "Unknown config key: colour" in caplog.text


class TestGetConfigPath:
    def test_default_in_working_directory(self, isolated_workdir):
        assert ConfigManager.get_config_path() == isolated_workdir / ".clibricks.toml"

    def test_environment_variable(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CLIBRICKS_CONFIG", str(tmp_path / "env.toml"))

        assert ConfigManager.get_config_path() == (tmp_path / "env.toml").resolve()

    def test_custom_path_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CLIBRICKS_CONFIG", str(tmp_path / "env.toml"))

        assert ConfigManager.get_config_path(str(tmp_path / "cli.toml")) == (tmp_path / "cli.toml").resolve()


class TestLoadConfig:
    def test_defaults_without_file(self):
        assert ConfigManager.load_config() == ProjectConfig()

    def test_missing_custom_path(self, tmp_path):
        with pytest.raises(ConfigError, match="Config file not found"):
            ConfigManager.load_config(str(tmp_path / "missing.toml"))

    def test_load(self, isolated_workdir):
        (isolated_workdir / ".clibricks.toml").write_text(
            'program_name = "test.sh"\nmenu_file = "menu.yml"\ncompose_profile = "dev"\n'
        )

        config = ConfigManager.load_config()

        assert config.program_name == "test.sh"
        assert config.menu_file == "menu.yml"
        assert config.compose_profile == "dev"
        assert config.compose_file is None

    def test_invalid_toml(self, isolated_workdir):
        (isolated_workdir / ".clibricks.toml").write_text("program_name = \n")

        with pytest.raises(ConfigError, match="Failed to load config"):
            ConfigManager.load_config()

    def test_fixes_insecure_permissions(self, isolated_workdir):
        config_path = isolated_workdir / ".clibricks.toml"
        config_path.write_text('program_name = "test.sh"\n')
        os.chmod(config_path, 0o644)

        ConfigManager.load_config()

        assert stat.S_IMODE(config_path.stat().st_mode) == 0o600


class TestSaveConfig:
    def test_round_trip(self, tmp_path):
        config = ProjectConfig(program_name="test.sh", compose_file="/srv/docker-compose.yml")
        config_path = tmp_path / "config.toml"

        assert ConfigManager.save_config(config, str(config_path)) == config_path.resolve()
        assert ConfigManager.load_config(str(config_path)) == config

    def test_owner_only_permissions(self, tmp_path):
        config_path = ConfigManager.save_config(ProjectConfig(), str(tmp_path / "config.toml"))

        assert stat.S_IMODE(config_path.stat().st_mode) == 0o600
        assert not (tmp_path / "config.tmp").exists()

    def test_preserves_comments(self, tmp_path):
        config_path = tmp_path / "config.toml"
        config_path.write_text('# project settings\nprogram_name = "old.sh"\n')

        ConfigManager.save_config(ProjectConfig(program_name="new.sh"), str(config_path))

        text = config_path.read_text()
        assert "# project settings" in text
        assert 'program_name = "new.sh"' in text

    def test_removes_cleared_settings(self, tmp_path):
        config_path = tmp_path / "config.toml"
        ConfigManager.save_config(ProjectConfig(compose_profile="dev"), str(config_path))

        ConfigManager.save_config(ProjectConfig(), str(config_path))

        assert "compose_profile" not in config_path.read_text()


class TestInitConfig:
    def test_init(self, isolated_workdir):
        config = ConfigManager.init_config("test.sh", compose_profile="dev", menu_file=None)

        assert config == ProjectConfig(program_name="test.sh", compose_profile="dev")
        assert ConfigManager.load_config() == config

    def test_relative_paths_resolved_against_config_dir(self, tmp_path):
        config = ConfigManager.init_config(
            "test.sh",
            config_dir=str(tmp_path),
            menu_file="menu.yml",
            compose_file="/abs/docker-compose.yml",
            compose_profile="dev",
        )

        assert config.menu_file == str(tmp_path.resolve() / "menu.yml")
        assert config.compose_file == "/abs/docker-compose.yml"
        assert config.compose_profile == "dev"

    def test_updates_existing_config(self):
        ConfigManager.init_config("test.sh", compose_profile="dev")

        config = ConfigManager.init_config("other.sh", compose_service="web")

        assert config.program_name == "other.sh"
        assert config.compose_profile == "dev"
        assert config.compose_service == "web"

    def test_custom_path(self, tmp_path):
        config_path = tmp_path / "custom" / "config.toml"

        ConfigManager.init_config("test.sh", custom_path=str(config_path))

        assert config_path.exists()
        assert not Path(ConfigManager.CONFIG_FILENAME).exists()

    def test_invalid_program_name(self):
        with pytest.raises(ConfigError, match="unsafe character"):
            ConfigManager.init_config("test.sh; rm -rf /")

    def test_unknown_setting(self):
        with pytest.raises(ConfigError, match="Unknown config key"):
            ConfigManager.init_config("test.sh", colour="blue")
