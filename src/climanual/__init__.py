"""climanual - self-documentation for click command-line applications

Walks an application's command tree and renders:
- a Markdown user manual from Jinja2 templates and per-command fragments
- the list of invocable command paths
- the environment variables bound to any flag, as a .env seed

Example Usage:
    >>> import click
    >>> from climanual import register_manual_commands
    >>> @click.group()
    ... def cli():
    ...     pass
    >>> register_manual_commands(cli)
"""

__version__ = "0.1.0"

from climanual.click_group import AliasedGroup, set_aliases
from climanual.commands import (
    commands_command,
    envvars_command,
    manual_command,
    register_manual_commands,
)
from climanual.errors import (
    ConfigError,
    FragmentError,
    FragmentNotFoundError,
    ManualError,
    PathResolutionError,
    RenderError,
)
from climanual.flags import DocumentedFlag, Flag, envvars
from climanual.fragments import FragmentResolver
from climanual.lineage import CommandRecord, lineate
from climanual.renderer import render_manual, write_manual

__all__ = [
    "AliasedGroup",
    "CommandRecord",
    "ConfigError",
    "DocumentedFlag",
    "Flag",
    "FragmentError",
    "FragmentNotFoundError",
    "FragmentResolver",
    "ManualError",
    "PathResolutionError",
    "RenderError",
    "__version__",
    "commands_command",
    "envvars",
    "envvars_command",
    "lineate",
    "manual_command",
    "register_manual_commands",
    "render_manual",
    "set_aliases",
    "write_manual",
]
