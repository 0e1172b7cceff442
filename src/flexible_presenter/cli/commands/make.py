"""Make command - generate a new presenter module."""

import click
from ...config import get_scaffold_config, load_config
from ...scaffold import generate_presenter
from ...utils.errors import FlexiblePresenterError, PresenterExistsError
from ...utils.logging import get_logger
from ..utils import format_error

logger = get_logger("cli.make")


@click.command()
@click.argument('name')
@click.option('--force', is_flag=True, help='Create the class even if the flexible presenter already exists')
@click.option('--base-dir', type=click.Path(file_okay=False), help='Directory presenter packages live under')
@click.option('--namespace', help='Package used when NAME has no folder prefix')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False), help='Path to a config YAML file')
def make(name, force, base_dir, namespace, config_path):
    """
    Create a new Flexible Presenter class.

    NAME is a class name, optionally prefixed with folders (Blog/PostPresenter)
    to place it outside the default presenters package.
    """
    try:
        scaffold = get_scaffold_config(load_config(config_path))

        target = generate_presenter(
            name,
            base_dir=base_dir or scaffold.get("base_dir", "app"),
            namespace=namespace or scaffold.get("namespace", "presenters"),
            force=force,
        )

        click.echo("Flexible Presenter created successfully.")
        click.echo(f"  {target.package}.{target.class_name} -> {target.path}", err=True)

    except PresenterExistsError as e:
        click.echo(format_error(str(e), "Use --force to overwrite it."), err=True)
        click.get_current_context().exit(1)
    except FlexiblePresenterError as e:
        click.echo(format_error(str(e)), err=True)
        click.get_current_context().exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        click.echo(format_error(f"Failed to create presenter: {e}"), err=True)
        click.get_current_context().exit(1)
