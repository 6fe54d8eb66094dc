"""
Handles the 'run' command: the long-running sync daemon.

Startup errors abort the process with a critical message. Once the loop is
running, failed cycles are logged and retried on the next interval.
"""

import click

from ..cli_utils import add_common_options, resolve_config, build_service
from ..daemon import Daemon, startup
from ..exit_codes import INTERRUPTED
from ..log import get_logger


@click.command('run')
@add_common_options('path', 'remote', 'branch', 'interval', 'init_from',
                    'verbose', 'debug', 'config_file', 'git')
def run_handler(path, remote, branch, interval, init_from, verbose, debug, config_file, git):
    """
    Keep a working copy synced with a remote branch.

    Polls every interval: fetches the remote branch and checks out its
    revision whenever it differs from the local HEAD. Local changes are
    overwritten.

    \b
    Examples:
      gitsyncd run --path /srv/site --branch main --interval 30s
      gitsyncd run --path /srv/site --initfrom https://example.com/site.git -v
    """
    config = resolve_config(
        config_file, verbose, debug,
        path=path, remote=remote, branch=branch, interval=interval,
        init_from=init_from, git=git
    )
    logger = get_logger()
    service = build_service(config, logger=logger)

    result = startup(service, config.init_from, logger=logger)
    if not result.ok:
        logger.critical(f"aborting. error: {result.error}")
        raise click.exceptions.Exit(result.exit_code)

    daemon = Daemon(service, config.interval, logger=logger)
    try:
        daemon.run()
    except KeyboardInterrupt:
        daemon.stop()
        logger.info("interrupted, stopping")
        raise click.exceptions.Exit(INTERRUPTED)
