"""Command tree flattening.

Walks a click command tree and produces one CommandRecord per reachable
command, each carrying the chain of ancestor commands ("lineage") from the
application root down to, but excluding, the command itself.
"""

from collections.abc import Iterable
from dataclasses import dataclass

import click

from climanual.click_group import command_aliases
from climanual.flags import Flag, as_flags


def subcommands(command: click.Command) -> list[click.Command]:
    """Return the commands registered on a group, or [] for a plain command."""
    if not isinstance(command, click.Group):
        return []
    found = []
    for name in command.list_commands(None):  # type: ignore[arg-type]
        subcommand = command.get_command(None, name)  # type: ignore[arg-type]
        if subcommand is not None:
            found.append(subcommand)
    return found


@dataclass(frozen=True)
class CommandRecord:
    """A visible command together with its ancestors.

    Attributes:
        command: The click command definition
        lineage: Ancestor commands from the root down to the parent
    """

    command: click.Command
    lineage: tuple[click.Command, ...] = ()

    @property
    def name(self) -> str:
        return self.command.name or ""

    @property
    def usage(self) -> str:
        return self.command.short_help or ""

    @property
    def description(self) -> str:
        # drop click's \b no-rewrap markers
        lines = (self.command.help or "").splitlines()
        return "\n".join(line for line in lines if line.strip() != "\b")

    @property
    def flags(self) -> list[Flag]:
        return as_flags(self.command.params)

    @property
    def has_action(self) -> bool:
        """Whether invoking this command runs something.

        A group's callback only runs on the way to one of its subcommands
        unless the group was declared with ``invoke_without_command``.
        """
        if self.command.callback is None:
            return False
        if isinstance(self.command, click.Group):
            return self.command.invoke_without_command
        return True

    def fullname(self, sep: str = " ") -> str:
        names = [ancestor.name or "" for ancestor in self.lineage]
        names.append(self.name)
        return sep.join(names)

    def aliases(self) -> list[str]:
        return [alias for alias in command_aliases(self.command) if alias]

    def __str__(self) -> str:
        return self.fullname(" ")


def lineate(
    commands: Iterable[click.Command], lineage: tuple[click.Command, ...] = ()
) -> list[CommandRecord]:
    """Flatten a command tree into records sorted by full name.

    Hidden commands are skipped along with their whole subtree. The sort key
    is the full name with no separator and the sort is stable, so records
    with equal keys keep their discovery order.

    Args:
        commands: Top-level commands (e.g. the root group's subcommands)
        lineage: Ancestors of ``commands``; empty at the root

    Returns:
        List of CommandRecord objects
    """
    records: list[CommandRecord] = []
    for command in commands:
        if command.hidden:
            continue
        records.append(CommandRecord(command=command, lineage=lineage))
        records.extend(lineate(subcommands(command), (*lineage, command)))
    records.sort(key=lambda record: record.fullname(""))
    return records


__all__ = ["CommandRecord", "lineate", "subcommands"]
