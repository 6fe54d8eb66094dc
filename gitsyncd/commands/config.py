import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from ..cli_utils import add_common_options, resolve_config
from ..config import generate_config_example, get_config_path, format_duration


@click.group("config")
def config_cmd():
    """Configuration management commands."""
    pass


@config_cmd.command("show")
@add_common_options('path', 'remote', 'branch', 'interval', 'init_from', 'config_file', 'git')
@click.option("--json", "as_json", is_flag=True, help="Output single-line JSON instead of a table")
def show_config(path, remote, branch, interval, init_from, config_file, git, as_json):
    """Show the resolved configuration with all overrides applied."""
    config = resolve_config(
        config_file,
        path=path, remote=remote, branch=branch, interval=interval,
        init_from=init_from, git=git
    )

    if as_json:
        click.echo(json.dumps(config.to_dict(), ensure_ascii=False))
        return

    source = get_config_path(config_file)
    table = Table(title=f"gitsyncd ({source})" if source else "gitsyncd", header_style="bold")
    table.add_column("setting")
    table.add_column("value")
    for key, value in config.to_dict().items():
        if key == 'interval':
            value = format_duration(value)
        table.add_row(key, "-" if value is None else str(value))
    Console().print(table)


@config_cmd.command("init")
@click.option("--output", "-o", type=click.Path(dir_okay=False),
              help="Where to write the file (default: ~/.gitsyncd/config.yaml)")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init_config(output, force):
    """Write an example configuration file."""
    target = Path(output) if output else Path.home() / '.gitsyncd' / 'config.yaml'
    if target.exists() and not force:
        click.echo(f"Configuration already exists at {target} (use --force to overwrite)", err=True)
        raise click.exceptions.Exit(1)
    written = generate_config_example(target)
    click.echo(f"Example configuration written to {written}")
