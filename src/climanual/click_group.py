"""Custom Click group with command aliases.

Click has no notion of aliases, so they are attached to commands as an
``aliases`` attribute and resolved by AliasedGroup at dispatch time. The
manual reads the same attribute to list them.
"""

from collections.abc import Callable, Sequence
from typing import Any

import click


def set_aliases(command: click.Command, *aliases: str) -> click.Command:
    """Attach aliases to a command and return it."""
    command.aliases = [alias for alias in aliases if alias]  # type: ignore[attr-defined]
    return command


def command_aliases(command: click.Command) -> list[str]:
    return list(getattr(command, "aliases", None) or ())


class AliasedGroup(click.Group):
    """Click group that resolves command aliases and shows help for unknown commands."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._aliases: dict[str, str] = {}

    def add_command(self, cmd: click.Command, name: str | None = None) -> None:
        super().add_command(cmd, name)
        for alias in command_aliases(cmd):
            self._aliases[alias] = name or cmd.name  # type: ignore[assignment]

    def command(self, *args: Any, aliases: Sequence[str] = (), **kwargs: Any) -> Any:
        """Like click.Group.command, with an extra ``aliases`` keyword."""
        if args and callable(args[0]):
            return super().command(*args, **kwargs)

        decorator = super().command(*args, **kwargs)

        def _decorator(f: Callable[..., Any]) -> click.Command:
            cmd = decorator(f)
            set_aliases(cmd, *aliases)
            for alias in command_aliases(cmd):
                self._aliases[alias] = cmd.name  # type: ignore[assignment]
            return cmd

        return _decorator

    def group(self, *args: Any, aliases: Sequence[str] = (), **kwargs: Any) -> Any:
        """Like click.Group.group, with an extra ``aliases`` keyword."""
        if args and callable(args[0]):
            return super().group(*args, **kwargs)

        decorator = super().group(*args, **kwargs)

        def _decorator(f: Callable[..., Any]) -> click.Group:
            grp = decorator(f)
            set_aliases(grp, *aliases)
            for alias in command_aliases(grp):
                self._aliases[alias] = grp.name  # type: ignore[assignment]
            return grp

        return _decorator

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        command = super().get_command(ctx, cmd_name)
        if command is None and cmd_name in self._aliases:
            return super().get_command(ctx, self._aliases[cmd_name])
        return command

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        """Override to show help when command is not found."""
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            # Let parameter errors propagate with click's own message
            if isinstance(e, click.exceptions.MissingParameter | click.exceptions.BadParameter):
                raise
            click.echo(f"Error: {e.format_message()}", err=True)
            click.echo("")
            click.echo(ctx.get_help())
            ctx.exit(2)
            return None, None, []  # Explicit return for code clarity (never reached)


# Set group_class so that subgroups created with @main.group() also use AliasedGroup
AliasedGroup.group_class = AliasedGroup


__all__ = ["AliasedGroup", "command_aliases", "set_aliases"]
