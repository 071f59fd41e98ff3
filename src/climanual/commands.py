"""Self-documentation commands for click applications.

Three commands document whatever application they are registered on:

    manual    Render the Markdown user manual (hidden, alias "man")
    commands  Print every invocable command path
    envvars   Print a NAME= line for every environment variable

Each command builds its complete output before writing anything, so a
failure never leaves partial output on stdout.
"""

import logging
import os
import shutil
import sys
from pathlib import Path

import click

from climanual.click_group import set_aliases
from climanual.config import CONFIG_ENVVAR, ConfigManager
from climanual.errors import ManualError, PathResolutionError
from climanual.flags import envvars
from climanual.fragments import FragmentResolver
from climanual.lineage import lineate, subcommands
from climanual.renderer import render_manual, write_manual

logger = logging.getLogger(__name__)


def _app_name(root: click.Context) -> str:
    return root.info_name or root.command.name or ""


def resolve_executable(program: str | None = None) -> str:
    """Return the running program's path relative to the working directory.

    Args:
        program: Program as invoked; defaults to ``sys.argv[0]``

    Raises:
        PathResolutionError: If the program or working directory cannot be resolved
    """
    program = program if program is not None else sys.argv[0]
    if not program:
        raise PathResolutionError("Cannot determine the running program")

    path = Path(program)
    if not path.exists():
        found = shutil.which(program)
        if found is None:
            raise PathResolutionError(f"Cannot locate executable: {program}")
        path = Path(found)

    try:
        cwd = Path.cwd().resolve()
        return os.path.relpath(path.resolve(), cwd)
    except (OSError, ValueError) as e:
        raise PathResolutionError(f"Cannot resolve {program} relative to cwd: {e}") from e


def command_lines(root: click.Command, prog: str, with_description: bool = False) -> list[str]:
    """Build the ``commands`` listing for an application.

    Only commands with an action are listed. With ``with_description`` each
    line is preceded by a comment holding the description, or the usage
    text when there is no description. Multi-line descriptions become one
    comment line per non-blank line.
    """
    lines = []
    for record in lineate(subcommands(root)):
        if not record.has_action:
            continue
        if with_description:
            comment = record.description or record.usage
            lines.extend(f"# {line}" for line in comment.splitlines() if line.strip())
        lines.append(f"{prog} {record.fullname(' ')}")
    return lines


def envvar_lines(root: click.Command) -> list[str]:
    """Build one ``NAME=`` line per environment variable in the application."""
    flags = list(root.params)
    for record in lineate(subcommands(root)):
        flags.extend(record.command.params)
    return [f"{name}=" for name in envvars(flags)]


def _echo_lines(lines: list[str]) -> None:
    if lines:
        click.echo("\n".join(lines))


def manual_command() -> click.Command:
    """Build the hidden ``manual`` command (alias ``man``)."""

    @click.command(name="manual", hidden=True, short_help="Generate the user manual")
    @click.argument(
        "directories",
        nargs=-1,
        type=click.Path(file_okay=False, path_type=Path),
    )
    @click.option(
        "--output",
        "-o",
        type=click.Path(dir_okay=False, path_type=Path),
        help="Write the manual to a file instead of stdout",
    )
    @click.option(
        "--config",
        "config_path",
        type=click.Path(dir_okay=False, path_type=Path),
        envvar=CONFIG_ENVVAR,
        help="TOML file with template_dirs and output settings",
    )
    @click.pass_context
    def manual(
        ctx: click.Context,
        directories: tuple[Path, ...],
        output: Path | None,
        config_path: Path | None,
    ) -> None:
        """Generate the user manual.

        Fragments are looked up in DIRECTORIES in order; when several hold
        the same fragment the last one wins. The embedded templates are
        used for anything no directory provides.

        \b
        Examples:
            app manual                       # Embedded template only
            app manual docs/ docs/overrides  # Overrides win over docs/
            app manual -o MANUAL.md docs/
        """
        root = ctx.find_root()
        try:
            config = ConfigManager.load_config(config_path)
            resolver = FragmentResolver([*config.template_dirs, *directories])
            manual_args = (
                _app_name(root),
                root.command.help,
                root.command.params,
                lineate(subcommands(root.command)),
                resolver,
            )
            target = output or (Path(config.output) if config.output else None)
            if target is not None:
                text = render_manual(*manual_args)
                target.write_text(text, encoding="utf-8")
                logger.debug(f"Wrote manual to {target}")
            else:
                write_manual(click.get_text_stream("stdout"), *manual_args)
        except ManualError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        except OSError as e:
            click.echo(f"Error: Failed to write manual: {e}", err=True)
            ctx.exit(1)

    return set_aliases(manual, "man")


def commands_command() -> click.Command:
    """Build the ``commands`` command."""

    @click.command(name="commands", short_help="Print all possible commands")
    @click.option(
        "--description",
        "-d",
        is_flag=True,
        help="Print the command description as a comment",
    )
    @click.option(
        "--relative",
        "-r",
        is_flag=True,
        help="Specify the command relative to the current working directory",
    )
    @click.pass_context
    def commands(ctx: click.Context, description: bool, relative: bool) -> None:
        """Print all possible commands.

        \b
        Examples:
            app commands          # One line per command
            app commands -d       # With descriptions as comments
            app commands -r       # Prefixed with the program's relative path
        """
        root = ctx.find_root()
        try:
            prog = resolve_executable() if relative else _app_name(root)
        except PathResolutionError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        _echo_lines(command_lines(root.command, prog, with_description=description))

    return commands


def envvars_command() -> click.Command:
    """Build the ``envvars`` command."""

    @click.command(name="envvars", short_help="Print all the possible environment variables")
    @click.pass_context
    def envvars_(ctx: click.Context) -> None:
        """Useful for creating a .env file for all possible environment variables."""
        _echo_lines(envvar_lines(ctx.find_root().command))

    return envvars_


def register_manual_commands(main: click.Group) -> None:
    """Register manual, commands and envvars with a CLI group.

    Args:
        main: The main CLI group to register commands with
    """
    main.add_command(manual_command())
    main.add_command(commands_command())
    main.add_command(envvars_command())


__all__ = [
    "command_lines",
    "commands_command",
    "envvar_lines",
    "envvars_command",
    "manual_command",
    "register_manual_commands",
    "resolve_executable",
]
