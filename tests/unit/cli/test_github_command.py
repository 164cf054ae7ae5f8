"""Unit tests for the clibricks github commands."""

from unittest.mock import patch

import pytest

from clibricks.cli import main
from clibricks.modules.github_releases import GitHubReleaseError

pytestmark = pytest.mark.unit


@pytest.fixture
def client():
    with patch("clibricks.commands.github.GitHubReleaseClient") as mock_client_class:
        yield mock_client_class.return_value


class TestGithubExists:
    def test_release_exists(self, runner, client):
        client.release_exists.return_value = True

        result = runner.invoke(main, ["github", "exists", "v1.0.0", "--owner", "acme", "--repo", "app"])

        assert result.exit_code == 0
        assert result.output == "v1.0.0 exist\n"
        client.release_exists.assert_called_once_with("acme", "app", "v1.0.0")

    def test_release_does_not_exist(self, runner, client):
        client.release_exists.return_value = False

        result = runner.invoke(main, ["github", "exists", "v9.9.9", "--owner", "acme", "--repo", "app"])

        assert result.exit_code == 1
        assert "v9.9.9 does not exist" in result.output

    def test_repository_from_project_config(self, runner, client, project_config):
        client.release_exists.return_value = True

        result = runner.invoke(main, ["github", "exists", "v1.0.0"])

        assert result.exit_code == 0
        client.release_exists.assert_called_once_with("acme", "app", "v1.0.0")

    def test_repository_missing(self, runner, client):
        result = runner.invoke(main, ["github", "exists", "v1.0.0", "--owner", "acme"])

        assert result.exit_code == 1
        assert "Please provide a GitHub repository" in result.output
        client.release_exists.assert_not_called()


class TestGithubLatest:
    def test_latest(self, runner, client, project_config):
        client.latest_release.return_value = "v1.2.0"

        result = runner.invoke(main, ["github", "latest"])

        assert result.exit_code == 0
        assert result.output == "v1.2.0\n"

    def test_api_error(self, runner, client, project_config):
        client.latest_release.side_effect = GitHubReleaseError("No release found for acme/app")

        result = runner.invoke(main, ["github", "latest"])

        assert result.exit_code == 1
        assert "No release found for acme/app" in result.output

    def test_unexpected_error(self, runner, client, project_config):
        client.latest_release.side_effect = KeyError("tag_name")

        result = runner.invoke(main, ["github", "latest"])

        assert result.exit_code == 1
        assert "Unexpected error" in result.output


class TestGithubReleases:
    def test_list(self, runner, client, project_config):
        client.list_releases.return_value = ["v1.1.0", "v1.0.0"]

        result = runner.invoke(main, ["github", "releases", "--limit", "2"])

        assert result.output == "v1.1.0\nv1.0.0\n"
        client.list_releases.assert_called_once_with("acme", "app", per_page=2)


class TestGithubCompare:
    @pytest.mark.parametrize(
        "left,right,expected",
        [("v1.0.0", "v1.0.0", "0"), ("v1.2.0", "v1.10.0", "-1"), ("2.0.0", "v1.9.9", "1")],
    )
    def test_compare(self, runner, left, right, expected):
        result = runner.invoke(main, ["github", "compare", left, right])

        assert result.exit_code == 0
        assert result.output == f"{expected}\n"

    def test_invalid_version(self, runner):
        result = runner.invoke(main, ["github", "compare", "latest", "v1.0.0"])

        assert result.exit_code == 1
        assert "Invalid version: latest" in result.output
