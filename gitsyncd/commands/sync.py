"""
Handles the 'sync' command: a single sync cycle, then exit.
"""

import json

import click

from ..cli_utils import add_common_options, resolve_config, build_service
from ..daemon import startup
from ..exit_codes import GENERAL_ERROR
from ..infra.git_client import GitCommandError
from ..log import get_logger


@click.command('sync')
@add_common_options('path', 'remote', 'branch', 'init_from',
                    'verbose', 'debug', 'config_file', 'git')
@click.option('--json', 'as_json', is_flag=True, help='Print the outcome as JSON')
def sync_handler(path, remote, branch, init_from, verbose, debug, config_file, git, as_json):
    """
    Run one sync cycle and exit.

    \b
    Examples:
      gitsyncd sync --path /srv/site
      gitsyncd sync --path /srv/site --json
    """
    config = resolve_config(
        config_file, verbose, debug,
        path=path, remote=remote, branch=branch, init_from=init_from, git=git
    )
    logger = get_logger()
    service = build_service(config, logger=logger)

    result = startup(service, config.init_from, logger=logger)
    if not result.ok:
        logger.critical(f"aborting. error: {result.error}")
        raise click.exceptions.Exit(result.exit_code)

    try:
        outcome = service.sync()
    except (GitCommandError, OSError) as e:
        logger.error(f"error syncing repo: {e}")
        if as_json:
            click.echo(json.dumps({'error': str(e)}))
        raise click.exceptions.Exit(GENERAL_ERROR)

    if as_json:
        click.echo(json.dumps(outcome.to_dict()))
    elif outcome.changed:
        click.echo(f"synced {config.path} to {outcome.remote} (was {outcome.local})")
    else:
        click.echo(f"{config.path} already at {outcome.local}")
