"""Help command for clibricks CLI."""

import click


def register_help_command(main: click.Group) -> None:
    """Register help command with main CLI group.

    Args:
        main: The main CLI group to register commands with
    """

    @main.command(name="help")
    @click.argument("command_path", nargs=-1, type=str)
    @click.pass_context
    def help_command(ctx: click.Context, command_path: tuple[str, ...]) -> None:
        """Show help for commands.

        \b
        Examples:
            clibricks help              # Show general help
            clibricks help menu         # Show help for the menu group
            clibricks help menu display-help
        """
        parent = ctx.parent
        cmd: click.Command = parent.command  # type: ignore[union-attr]
        cmd_ctx = parent

        for name in command_path:
            sub = cmd.commands.get(name) if isinstance(cmd, click.Group) else None
            if sub is None:
                click.echo(f"Error: No such command '{' '.join(command_path)}'.", err=True)
                ctx.exit(1)
            cmd_ctx = click.Context(sub, info_name=name, parent=cmd_ctx)
            cmd = sub

        click.echo(cmd.get_help(cmd_ctx))  # type: ignore[arg-type]


__all__ = ["register_help_command"]
