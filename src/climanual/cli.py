"""CLI entry point for climanual.

The ``climanual`` application carries the three self-documentation
commands and therefore documents itself:

    climanual manual              # Markdown manual on stdout
    climanual commands -d         # Every command, with descriptions
    climanual envvars > .env      # Seed a .env file
"""

import logging

import click

from climanual import __version__
from climanual.click_group import AliasedGroup
from climanual.commands import register_manual_commands


@click.group(cls=AliasedGroup, name="climanual")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    envvar="CLIMANUAL_VERBOSE",
    help="Show debug logging on stderr",
)
@click.version_option(version=__version__)
def main(verbose: bool) -> None:
    """Generate manuals, command listings and .env seeds for click applications.

    Register the commands on your own click group with
    climanual.register_manual_commands(group) to document your application.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


register_manual_commands(main)


if __name__ == "__main__":
    main()
