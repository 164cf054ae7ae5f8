"""
Shared test fixtures and configuration for clibricks tests.

This module provides common fixtures used across all test types:
- Paths to the menu and docker compose fixture files
- An isolated working directory (no stray .clibricks.toml)
- A project config pointing at the fixtures
- Click CLI runner
"""

from pathlib import Path
from unittest.mock import Mock

import pytest
from click.testing import CliRunner

from clibricks.config_manager import ConfigManager, ProjectConfig
from clibricks.modules.menu import Menu
from clibricks.modules.subprocess_helper import CommandResult

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# ============================================================================
# ISOLATION
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_workdir(tmp_path, monkeypatch):
    """Run every test from an empty directory without inherited settings.

    Prevents a developer's .clibricks.toml, $CLIBRICKS_CONFIG or
    $GITHUB_TOKEN from leaking into tests.
    """
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.delenv(ConfigManager.CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    return workdir


# ============================================================================
# FIXTURE FILES
# ============================================================================


@pytest.fixture
def menu_file() -> Path:
    """Reference menu file.

    Global grammar: [test1|--test2|test3|test4] {test5|test6}
    Scope test1:    [--test1|test2|test3]
    Scope test6:    [--test1|test2|test3] {test4}
    """
    return FIXTURES_DIR / "menu" / "menu.yml"


@pytest.fixture
def empty_menu_file() -> Path:
    return FIXTURES_DIR / "menu" / "empty.yml"


@pytest.fixture
def menu(menu_file) -> Menu:
    return Menu.load(menu_file)


@pytest.fixture
def compose_dir() -> Path:
    return FIXTURES_DIR / "docker_compose"


@pytest.fixture
def compose_file(compose_dir) -> Path:
    return compose_dir / "docker-compose.yml"


@pytest.fixture
def compose_env_file(compose_dir) -> Path:
    return compose_dir / "test.env"


# ============================================================================
# PROJECT CONFIG
# ============================================================================


@pytest.fixture
def project_config(isolated_workdir, menu_file, compose_file, compose_env_file) -> ProjectConfig:
    """Project config saved to ./.clibricks.toml, pointing at the fixtures."""
    config = ProjectConfig(
        program_name="test.sh",
        menu_file=str(menu_file),
        compose_file=str(compose_file),
        compose_profile="profile_test1",
        compose_env_file=str(compose_env_file),
        compose_service="dc_test1",
        github_owner="acme",
        github_repo="app",
    )
    ConfigManager.save_config(config)
    return config


# ============================================================================
# CLI / SUBPROCESS
# ============================================================================


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def mock_runner():
    """Command runner returning a successful, empty result."""

    def run(cmd, **kwargs):
        return CommandResult(command=cmd, returncode=0)

    return Mock(side_effect=run)
