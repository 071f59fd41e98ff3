"""Fragment lookup across template directories.

A fragment is a named Markdown file such as ``_commands.md`` (the master
manual template) or ``<command fullname>.md`` (extra usage text for one
command). Fragments are read from a list of directories and, when none of
them has it, from the templates embedded in the climanual package.

Every directory is read in order and a later hit replaces an earlier one,
so the LAST directory holding a fragment wins. Order directories from the
least to the most specific. This is not the usual first-match search path.
"""

import logging
from collections.abc import Iterable
from importlib import resources
from pathlib import Path
from typing import Protocol

from climanual.errors import FragmentError, FragmentNotFoundError

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "_commands.md"


class ContentProvider(Protocol):
    """Source of fragment text.

    ``read`` raises FileNotFoundError when the fragment is absent and any
    other OSError when it exists but cannot be read.
    """

    def read(self, name: str) -> str: ...


class DirectoryProvider:
    """Reads fragments from a directory on disk."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def read(self, name: str) -> str:
        return (self.directory / name).read_text(encoding="utf-8")

    def __str__(self) -> str:
        return str(self.directory)


class PackageProvider:
    """Reads fragments bundled as package data."""

    def __init__(self, package: str = "climanual", subdirectory: str = "templates"):
        self.package = package
        self.subdirectory = subdirectory

    def read(self, name: str) -> str:
        resource = resources.files(self.package) / self.subdirectory / name
        return resource.read_text(encoding="utf-8")

    def __str__(self) -> str:
        return f"<embedded {self.package}/{self.subdirectory}>"


def _read(provider: ContentProvider, name: str) -> str:
    """Read from one provider, letting only FileNotFoundError through raw."""
    try:
        return provider.read(name)
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError) as e:
        raise FragmentError(f"Failed to read fragment {name} from {provider}: {e}") from e


class FragmentResolver:
    """Resolves fragments from directories with an embedded fallback.

    Example:
        >>> resolver = FragmentResolver(["docs/base", "docs/overrides"])
        >>> template = resolver.template()
        >>> usage = resolver.usage("storagemount")
    """

    def __init__(
        self,
        directories: Iterable[str | Path] = (),
        fallback: ContentProvider | None = None,
    ):
        self.providers: list[ContentProvider] = [
            DirectoryProvider(directory) for directory in directories
        ]
        self.fallback: ContentProvider = fallback or PackageProvider()

    def read(self, name: str) -> str:
        """Return the contents of a fragment.

        Args:
            name: Fragment file name (e.g. "_commands.md")

        Returns:
            Fragment text from the last directory holding it, else the fallback

        Raises:
            FragmentNotFoundError: If neither a directory nor the fallback has it
            FragmentError: If a fragment exists but cannot be read
        """
        contents: str | None = None
        for provider in self.providers:
            try:
                contents = _read(provider, name)
            except FileNotFoundError:
                continue
            logger.debug(f"Read fragment {name} from {provider}")

        if contents is not None:
            return contents

        try:
            contents = _read(self.fallback, name)
        except FileNotFoundError as e:
            raise FragmentNotFoundError(name) from e
        logger.debug(f"Read fragment {name} from {self.fallback}")
        return contents

    def template(self) -> str:
        """Return the master manual template; a missing template is fatal."""
        return self.read(TEMPLATE_NAME)

    def usage(self, name: str) -> str:
        """Return the usage fragment ``<name>.md``, or "" when there is none."""
        try:
            return self.read(f"{name}.md")
        except FragmentNotFoundError:
            logger.debug(f"No usage fragment for {name}")
            return ""


__all__ = [
    "TEMPLATE_NAME",
    "ContentProvider",
    "DirectoryProvider",
    "FragmentResolver",
    "PackageProvider",
]
