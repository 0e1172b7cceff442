"""Main CLI entry point for flexible_presenter."""

import logging
import click
from .. import __version__
from ..utils.logging import get_logger, setup_logging
from .commands.make import make
from .commands.version import version as version_command

logger = get_logger("cli.main")


@click.group()
@click.version_option(version=__version__, prog_name="flexible-presenter", message="%(prog)s version %(version)s")
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose):
    """flexible-presenter - Presenter scaffolding tools."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING)


cli.add_command(make)
cli.add_command(version_command)


if __name__ == "__main__":
    cli()
