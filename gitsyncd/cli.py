#!/usr/bin/env python3

import click

from gitsyncd.commands.run import run_handler
from gitsyncd.commands.sync import sync_handler
from gitsyncd.commands.check import check_handler
from gitsyncd.commands.config import config_cmd


@click.group()
@click.version_option(package_name="gitsyncd")
def cli():
    """gitsyncd - Keep a local working copy synced with a remote branch.

    Polls the remote on a fixed interval and checks out the remote revision
    whenever it differs from the local HEAD.
    """
    pass


cli.add_command(run_handler, name='run')
cli.add_command(sync_handler, name='sync')
cli.add_command(check_handler, name='check')
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
