"""GitHub Release Lookup Module

Query GitHub releases of a repository and compare semantic versions locally.

Security Requirements:
- HTTPS only for API calls
- Input validation
- Timeout on API calls
"""

import logging
import os
import re
from dataclasses import dataclass

import requests

logger = logging.getLogger(__name__)

VERSION_PATTERN = re.compile(
    r"^v?(?P<major>\d+)(?:\.(?P<minor>\d+))?(?:\.(?P<patch>\d+))?"
    r"(?:-(?P<prerelease>[0-9A-Za-z.-]+))?(?:\+[0-9A-Za-z.-]+)?$"
)


class GitHubReleaseError(Exception):
    """Failed to query GitHub releases."""

    pass


@dataclass(frozen=True)
class SemanticVersion:
    """Parsed semantic version (build metadata is ignored)."""

    major: int
    minor: int = 0
    patch: int = 0
    prerelease: tuple = ()

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def sort_key(self) -> tuple:
        # A release sorts after any of its prereleases
        pre_key = tuple((0, int(p), "") if p.isdigit() else (1, 0, p) for p in self.prerelease)
        return (self.major, self.minor, self.patch, not self.prerelease, pre_key)


def parse_version(version: str) -> SemanticVersion:
    """Parse a version string such as ``v1.2.3`` or ``1.2.0-rc.1``.

    Raises:
        ValueError: If the string is not a semantic version
    """
    match = VERSION_PATTERN.match(version.strip()) if version else None
    if not match:
        raise ValueError(f"Invalid version: {version}")

    prerelease = match.group("prerelease")
    return SemanticVersion(
        major=int(match.group("major")),
        minor=int(match.group("minor") or 0),
        patch=int(match.group("patch") or 0),
        prerelease=tuple(prerelease.split(".")) if prerelease else (),
    )


def compare_versions(left: str, right: str) -> int:
    """Compare two versions.

    Returns:
        -1 if left < right, 0 if equal, 1 if left > right
    """
    left_key = parse_version(left).sort_key()
    right_key = parse_version(right).sort_key()
    return (left_key > right_key) - (left_key < right_key)


def is_newer(candidate: str, current: str) -> bool:
    """Check if candidate is a newer version than current."""
    return compare_versions(candidate, current) > 0


class GitHubReleaseClient:
    """Look up releases of a GitHub repository."""

    API_BASE = "https://api.github.com"
    API_TIMEOUT = 30

    def __init__(self, github_token: str | None = None, session: requests.Session | None = None):
        """Initialize the client.

        Args:
            github_token: Token for authenticated requests (defaults to GITHUB_TOKEN)
            session: requests session (for testing)
        """
        self.github_token = github_token if github_token is not None else os.environ.get("GITHUB_TOKEN")
        self.session = session or requests.Session()

    def latest_release(self, repo_owner: str, repo_name: str) -> str:
        """Get the tag of the latest published release.

        Raises:
            GitHubReleaseError: If the repository has no release or the API call fails
            ValueError: If inputs are invalid
        """
        self._validate_repo(repo_owner, repo_name)

        response = self._get(f"/repos/{repo_owner}/{repo_name}/releases/latest")
        if response.status_code == 404:
            raise GitHubReleaseError(f"No release found for {repo_owner}/{repo_name}")
        data = self._json(response, "Failed to get latest release")
        return data["tag_name"]

    def release_exists(self, repo_owner: str, repo_name: str, tag: str) -> bool:
        """Check if a release with this tag exists.

        Raises:
            GitHubReleaseError: If the API call fails
            ValueError: If inputs are invalid
        """
        self._validate_repo(repo_owner, repo_name)
        self._validate_tag(tag)

        response = self._get(f"/repos/{repo_owner}/{repo_name}/releases/tags/{tag}")
        if response.status_code == 404:
            return False
        self._json(response, f"Failed to look up release {tag}")
        return True

    def list_releases(self, repo_owner: str, repo_name: str, per_page: int = 30) -> list[str]:
        """List release tags, most recent first.

        Raises:
            GitHubReleaseError: If the API call fails
            ValueError: If inputs are invalid
        """
        self._validate_repo(repo_owner, repo_name)

        response = self._get(
            f"/repos/{repo_owner}/{repo_name}/releases", params={"per_page": per_page}
        )
        data = self._json(response, "Failed to list releases")
        return [release["tag_name"] for release in data]

    def _get(self, path: str, params: dict | None = None) -> requests.Response:
        url = f"{self.API_BASE}{path}"

        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.github_token:
            headers["Authorization"] = f"Bearer {self.github_token}"

        logger.debug(f"GET {url}")
        try:
            return self.session.get(url, headers=headers, params=params, timeout=self.API_TIMEOUT)
        except requests.RequestException as e:
            raise GitHubReleaseError(f"GitHub API request failed: {e}") from e

    @staticmethod
    def _json(response: requests.Response, error_prefix: str):
        if response.status_code != 200:
            try:
                error_msg = response.json().get("message", "Unknown error")
            except ValueError:
                error_msg = response.text or "Unknown error"
            raise GitHubReleaseError(f"{error_prefix}: {response.status_code} - {error_msg}")
        return response.json()

    @classmethod
    def _validate_repo(cls, repo_owner: str, repo_name: str) -> None:
        """Validate repository owner and name."""
        if not repo_owner:
            raise ValueError("Repository owner cannot be empty")
        if not re.match(r"^[a-zA-Z0-9_-]+$", repo_owner):
            raise ValueError(f"Invalid repository owner: {repo_owner}")

        if not repo_name:
            raise ValueError("Repository name cannot be empty")
        if not re.match(r"^[a-zA-Z0-9._-]+$", repo_name):
            raise ValueError(f"Invalid repository name: {repo_name}")

    @classmethod
    def _validate_tag(cls, tag: str) -> None:
        """Validate release tag."""
        if not tag:
            raise ValueError("Release tag cannot be empty")
        if not re.match(r"^[a-zA-Z0-9._+-]+$", tag):
            raise ValueError(f"Invalid release tag: {tag}")


__all__ = [
    "GitHubReleaseClient",
    "GitHubReleaseError",
    "SemanticVersion",
    "compare_versions",
    "is_newer",
    "parse_version",
]
