"""
Handles the 'check' command: report whether the path holds a repository.
"""

import click

from ..cli_utils import add_common_options, resolve_config, build_service
from ..exit_codes import SUCCESS, GENERAL_ERROR
from ..log import get_logger


@click.command('check')
@add_common_options('path', 'verbose', 'debug', 'config_file')
def check_handler(path, verbose, debug, config_file):
    """Check that the path holds an initialized repository. Never clones."""
    config = resolve_config(config_file, verbose, debug, path=path)
    service = build_service(config, logger=get_logger())

    try:
        valid = service.is_valid()
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        raise click.exceptions.Exit(GENERAL_ERROR)

    if valid:
        click.echo(f"{config.path}: valid repository")
        raise click.exceptions.Exit(SUCCESS)
    click.echo(f"{config.path}: no valid repository found")
    raise click.exceptions.Exit(GENERAL_ERROR)
