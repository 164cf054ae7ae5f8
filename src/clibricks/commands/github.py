"""GitHub release commands.

Usage:
    clibricks github latest owner repo
    clibricks github exists v1.0.0 --owner owner --repo repo
    clibricks github compare v1.2.0 v1.10.0
"""

import logging
import sys

import click

from clibricks.click_group import BricksGroup
from clibricks.commands.cli_helpers import fail, get_project_config
from clibricks.modules.github_releases import (
    GitHubReleaseClient,
    GitHubReleaseError,
    compare_versions,
)

logger = logging.getLogger(__name__)

owner_option = click.option("--owner", type=str, help="Repository owner (defaults to github_owner)")
repo_option = click.option("--repo", type=str, help="Repository name (defaults to github_repo)")


def _repository(ctx: click.Context, owner: str | None, repo: str | None) -> tuple[str, str]:
    config = get_project_config(ctx)
    owner = owner or config.github_owner
    repo = repo or config.github_repo
    if not owner or not repo:
        fail("Please provide a GitHub repository (--owner and --repo)")
    return owner, repo


@click.group(name="github", cls=BricksGroup)
def github_group():
    """Look up GitHub releases and compare versions."""
    pass


@github_group.command(name="latest")
@owner_option
@repo_option
@click.pass_context
def github_latest(ctx: click.Context, owner: str | None, repo: str | None):
    """Print the tag of the latest release."""
    owner, repo = _repository(ctx, owner, repo)
    try:
        click.echo(GitHubReleaseClient().latest_release(owner, repo))
    except (GitHubReleaseError, ValueError) as e:
        fail(str(e))
    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        logger.exception("Unexpected error in github latest command")
        sys.exit(1)


@github_group.command(name="exists")
@click.argument("tag")
@owner_option
@repo_option
@click.pass_context
def github_exists(ctx: click.Context, tag: str, owner: str | None, repo: str | None):
    """Check that release TAG exists."""
    owner, repo = _repository(ctx, owner, repo)
    try:
        exists = GitHubReleaseClient().release_exists(owner, repo, tag)
    except (GitHubReleaseError, ValueError) as e:
        fail(str(e))

    if not exists:
        fail(f"{tag} does not exist")
    click.echo(f"{tag} exist")


@github_group.command(name="releases")
@owner_option
@repo_option
@click.option("--limit", type=int, default=30, show_default=True, help="Number of releases")
@click.pass_context
def github_releases(ctx: click.Context, owner: str | None, repo: str | None, limit: int):
    """List release tags, most recent first."""
    owner, repo = _repository(ctx, owner, repo)
    try:
        for tag in GitHubReleaseClient().list_releases(owner, repo, per_page=limit):
            click.echo(tag)
    except (GitHubReleaseError, ValueError) as e:
        fail(str(e))
    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        logger.exception("Unexpected error in github releases command")
        sys.exit(1)


@github_group.command(name="compare")
@click.argument("left")
@click.argument("right")
def github_compare(left: str, right: str):
    """Compare two versions: prints -1, 0 or 1."""
    try:
        click.echo(compare_versions(left, right))
    except ValueError as e:
        fail(str(e))


__all__ = ["github_group"]
