"""
Common CLI options and helpers shared by the gitsyncd commands.
"""

import click

from .config import SyncConfig, load_config, resolve_log_level, format_duration
from .domain.repository import RepositoryIdentity
from .exit_codes import ConfigError
from .infra.git_client import GitRunner
from .log import configure_logging
from .services.sync_service import SyncService


# Standard options that many commands share
common_options = {
    'path': click.option('--path', help='The path of the repository'),
    'remote': click.option('--remote', help='The name of the remote to sync with (default: origin)'),
    'branch': click.option('--branch', help='The name of the remote branch to sync (default: master)'),
    'interval': click.option('--interval',
                             help='The time interval for syncing (1m, 35s, 2m3s, 500ms...)'),
    'init_from': click.option('--initfrom', '--init-from', 'init_from',
                              help='The repository remote URL to clone from if path is not a repository'),
    'verbose': click.option('-v', '--verbose', is_flag=True, help='Verbose output'),
    'debug': click.option('--debug', is_flag=True,
                          help='More verbose output, for debugging purposes'),
    'config_file': click.option('--config', 'config_file', type=click.Path(dir_okay=False),
                                help='Configuration file (JSON, TOML or YAML)'),
    'git': click.option('--git', help='git executable to run (default: git)'),
}


def add_common_options(*option_names):
    """
    Decorator to add common options to a command.

    Example:
        @add_common_options('path', 'verbose')
        def my_command(path, verbose):
            ...
    """
    def decorator(func):
        for name in reversed(option_names):
            if name in common_options:
                func = common_options[name](func)
        return func
    return decorator


def resolve_config(config_file=None, verbose=False, debug=False, **overrides) -> SyncConfig:
    """
    Load configuration and set up logging for a command.

    Raises:
        click.exceptions.Exit: With the config error's exit code
    """
    try:
        config = load_config(config_file, **overrides)
    except ConfigError as e:
        configure_logging("ERROR").critical(f"aborting. error: {e}")
        raise click.exceptions.Exit(e.exit_code)

    config.log_level = resolve_log_level(verbose, debug, config.log_level)
    logger = configure_logging(config.log_level)

    logger.info(f"repository path: {config.path}")
    logger.info(f"remote: {config.remote}")
    logger.info(f"branch: {config.branch}")
    logger.info(f"sync interval: {format_duration(config.interval)}")
    return config


def build_service(config: SyncConfig, logger=None) -> SyncService:
    """Create the sync service for a resolved configuration."""
    identity = RepositoryIdentity(config.path, config.remote, config.branch)
    runner = GitRunner(identity.path, executable=config.git)
    return SyncService(identity, runner=runner, logger=logger)
