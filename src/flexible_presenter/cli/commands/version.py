"""Version command - show flexible_presenter version."""

import click
from ... import __version__


@click.command()
def version():
    """Show flexible_presenter version."""
    click.echo(f"flexible-presenter version {__version__}")
