"""Manual rendering with Jinja2.

The master template is resolved through a FragmentResolver and rendered
against a RenderContext. Jinja2 is confined to TemplateAdapter, which also
registers the helper functions templates call:

    partial(name)          usage fragment ``<name>.md`` or ""
    join(seq, sep)         join any sequence of strings
    fullname(cmd, sep)     lineage and name of a command joined by sep
    aliases(cmd)           non-empty aliases of a command
    primary(flag)          first (long) flag name
    names(flag)            all but the first flag name, joined by ", "
    envvars(flag)          sorted environment variables of one flag
    description(flag)      help text of a flag, or ""
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field, fields
from typing import IO, Any

import click
from jinja2 import Environment, StrictUndefined, TemplateError, TemplateSyntaxError

from climanual.errors import ManualError, RenderError
from climanual.flags import (
    Flag,
    as_flags,
    flag_description,
    flag_envvars,
    primary_name,
    secondary_names,
)
from climanual.fragments import TEMPLATE_NAME, FragmentResolver
from climanual.lineage import CommandRecord

logger = logging.getLogger(__name__)


@dataclass
class RenderContext:
    """Variables visible to the manual template."""

    app_name: str
    app_description: str = ""
    global_flags: list[Flag] = field(default_factory=list)
    commands: list[CommandRecord] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        # dataclasses.asdict would turn the CommandRecords into plain dicts
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _join(items: Iterable[Any] | None, sep: str) -> str:
    if not items:
        return ""
    return sep.join(str(item) for item in items)


class TemplateAdapter:
    """Jinja2 environment with the manual helper functions registered."""

    def __init__(self, resolver: FragmentResolver):
        self.resolver = resolver
        self.environment = Environment(  # noqa: S701 - renders Markdown, not HTML
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.environment.globals.update(self.helpers())

    def helpers(self) -> dict[str, Callable[..., Any]]:
        return {
            "partial": self.resolver.usage,
            "join": _join,
            "fullname": lambda command, sep: command.fullname(sep),
            "aliases": lambda command: command.aliases(),
            "names": secondary_names,
            "envvars": flag_envvars,
            "description": flag_description,
            "primary": primary_name,
        }

    def render(self, source: str, context: dict[str, Any], name: str = TEMPLATE_NAME) -> str:
        """Render template source to a string.

        Raises:
            RenderError: On syntax errors (with line number) or execution errors
            ManualError: Raised by a helper, e.g. an unreadable fragment
        """
        try:
            template = self.environment.from_string(source)
        except TemplateSyntaxError as e:
            raise RenderError(f"{name}:{e.lineno}: {e.message}") from e

        try:
            return template.render(context)
        except ManualError:
            raise
        except TemplateError as e:
            raise RenderError(f"{name}: {e}") from e
        except Exception as e:
            raise RenderError(f"{name}: {type(e).__name__}: {e}") from e


def render_manual(
    app_name: str,
    app_description: str | None,
    global_flags: Sequence[click.Parameter | Flag],
    commands: list[CommandRecord],
    resolver: FragmentResolver,
) -> str:
    """Render the complete manual.

    Args:
        app_name: Program name shown in the title and syntax lines
        app_description: Long description of the application
        global_flags: Parameters of the root command
        commands: Flattened command list (see lineate)
        resolver: Fragment lookup for the template and usage fragments

    Returns:
        Rendered manual text

    Raises:
        FragmentNotFoundError: If the master template cannot be found
        FragmentError: If a fragment cannot be read
        RenderError: If the template is invalid or fails to execute
    """
    source = resolver.template()
    context = RenderContext(
        app_name=app_name,
        app_description=app_description or "",
        global_flags=as_flags(global_flags),
        commands=commands,
    )
    logger.debug(f"Rendering manual for {app_name} with {len(commands)} commands")
    return TemplateAdapter(resolver).render(source, context.as_dict())


def write_manual(
    stream: IO[str],
    app_name: str,
    app_description: str | None,
    global_flags: Sequence[click.Parameter | Flag],
    commands: list[CommandRecord],
    resolver: FragmentResolver,
) -> None:
    """Render the manual and write it to ``stream`` only once it is complete."""
    text = render_manual(app_name, app_description, global_flags, commands, resolver)
    stream.write(text)
    stream.flush()


__all__ = ["RenderContext", "TemplateAdapter", "render_manual", "write_manual"]
