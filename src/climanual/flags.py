"""Flag adapters and environment variable collection.

Click parameters come in several kinds (options, boolean flags, arguments)
that expose their names, environment bindings and help text differently.
This module wraps them in a small closed set of adapters so the rest of
climanual only talks to the Flag / DocumentedFlag protocols.
"""

from collections.abc import Iterable, Sequence
from typing import Protocol, runtime_checkable

import click


@runtime_checkable
class Flag(Protocol):
    """Anything with names and environment variable bindings."""

    def names(self) -> list[str]: ...

    def envvars(self) -> list[str]: ...


@runtime_checkable
class DocumentedFlag(Flag, Protocol):
    """A flag that also carries help text."""

    def usage(self) -> str: ...


class ParameterFlag:
    """Adapter for any click parameter, including positional arguments."""

    def __init__(self, param: click.Parameter):
        self.param = param

    def names(self) -> list[str]:
        """Return the declared names, canonical (first declared) name first."""
        return [*self.param.opts, *self.param.secondary_opts]

    def envvars(self) -> list[str]:
        """Return the declared environment variables in declaration order."""
        envvar = self.param.envvar
        if not envvar:
            return []
        if isinstance(envvar, str):
            return [envvar]
        return [name for name in envvar if name]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.param.name!r})"


class OptionFlag(ParameterFlag):
    """Adapter for click options, which carry help text."""

    param: click.Option

    def usage(self) -> str:
        return self.param.help or ""


def as_flag(param: click.Parameter | Flag) -> Flag:
    """Wrap a click parameter in its adapter; flags pass through unchanged."""
    if isinstance(param, click.Option):
        return OptionFlag(param)
    if isinstance(param, click.Parameter):
        return ParameterFlag(param)
    return param


def as_flags(params: Iterable[click.Parameter | Flag]) -> list[Flag]:
    return [as_flag(param) for param in params]


def envvars(flags: Iterable[click.Parameter | Flag]) -> list[str]:
    """Collect the distinct environment variables bound to any of the flags.

    Args:
        flags: Flags or raw click parameters, in any order, with duplicates

    Returns:
        Deduplicated variable names sorted ascending

    Example:
        >>> envvars([click.Option(["--foo"], envvar="FOO")])
        ['FOO']
    """
    names: set[str] = set()
    for flag in flags:
        names.update(as_flag(flag).envvars())
    return sorted(names)


def secondary_names(flag: click.Parameter | Flag) -> str:
    """Return every name but the first (the long form), joined by ", "."""
    names = as_flag(flag).names()
    if len(names) <= 1:
        return ""
    return ", ".join(names[1:])


def flag_envvars(flag: click.Parameter | Flag) -> str:
    return ", ".join(envvars([flag]))


def flag_description(flag: click.Parameter | Flag) -> str:
    adapted = as_flag(flag)
    if isinstance(adapted, DocumentedFlag):
        return adapted.usage()
    return ""


def primary_name(flag: click.Parameter | Flag) -> str:
    names: Sequence[str] = as_flag(flag).names()
    return names[0] if names else ""


__all__ = [
    "DocumentedFlag",
    "Flag",
    "OptionFlag",
    "ParameterFlag",
    "as_flag",
    "as_flags",
    "envvars",
    "flag_description",
    "flag_envvars",
    "primary_name",
    "secondary_names",
]
