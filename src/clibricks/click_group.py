"""Click group reporting usage errors with the help of the failing command.

Every message goes to stderr: scripts capture clibricks output with
``$(...)`` and must never receive help text or errors in place of a
usage string.
"""

import difflib
from typing import Any, NoReturn

import click


def report_usage_error(error: click.UsageError, ctx: click.Context) -> NoReturn:
    """Print the error and the help of the command it belongs to, then exit."""
    error_ctx = error.ctx or ctx
    click.echo(f"Error: {error.format_message()}", err=True)
    click.echo("", err=True)
    click.echo(error_ctx.get_help(), err=True)
    error_ctx.exit(error.exit_code)


class BricksGroup(click.Group):
    """Click group used by clibricks and each of its command groups.

    Unknown commands are reported with the closest known command name,
    e.g. ``clibricks menu dispaly-help`` suggests ``display-help``.
    """

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except click.UsageError as e:
            report_usage_error(e, ctx)

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            # Option errors of the group itself carry no command name
            if isinstance(e, click.BadParameter) or not args or args[0].startswith("-"):
                raise
            suggestion = self.suggest_command(ctx, args[0])
            if suggestion is None:
                raise
            raise click.UsageError(
                f"{e.format_message()} Did you mean '{suggestion}'?", ctx
            ) from e

    def suggest_command(self, ctx: click.Context, name: str) -> str | None:
        """Closest registered command name, if any is close enough."""
        matches = difflib.get_close_matches(name, self.list_commands(ctx), n=1, cutoff=0.6)
        return matches[0] if matches else None


# Sub-groups created with @group.group() also use BricksGroup
BricksGroup.group_class = BricksGroup
