#!/usr/bin/env python3

import os
import re
import math
import json
import tomllib
import yaml
from dataclasses import dataclass, asdict, fields, replace
from pathlib import Path
from typing import Optional

import logging

from .exit_codes import ConfigError

logger = logging.getLogger("gitsyncd")

ENV_PREFIX = "GITSYNCD_"
CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

_DURATION_UNITS = {
    'ns': 1e-9,
    'us': 1e-6,
    'µs': 1e-6,
    'ms': 1e-3,
    's': 1.0,
    'm': 60.0,
    'h': 3600.0,
}
_DURATION_PART = re.compile(r'(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)')


@dataclass
class SyncConfig:
    """Resolved settings for one gitsyncd process."""
    path: str = ""
    remote: str = "origin"
    branch: str = "master"
    interval: float = 60.0
    init_from: Optional[str] = None
    log_level: str = "ERROR"
    git: str = "git"

    def validate(self) -> "SyncConfig":
        """Raise ConfigError if a required setting is missing or malformed."""
        for name in ('path', 'remote', 'branch', 'git'):
            if not getattr(self, name):
                raise ConfigError(f"'{name}' must be set")
        if self.interval <= 0:
            raise ConfigError(f"'interval' must be positive, got {self.interval}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(f"unknown log level '{self.log_level}'")
        return self

    def to_dict(self):
        return asdict(self)


def parse_duration(spec) -> float:
    """
    Parse a duration into seconds.

    Supports:
        - Go-style: "1m", "35s", "2m3s", "500ms", "1h30m", "1.5h"
        - Bare numbers, taken as seconds: "90", 90, 0.5

    Args:
        spec: Duration string or number

    Returns:
        Duration in seconds

    Raises:
        ValueError: If spec cannot be parsed or is not positive
    """
    if isinstance(spec, (int, float)) and not isinstance(spec, bool):
        seconds = float(spec)
    else:
        text = str(spec).strip()
        try:
            seconds = float(text)
        except ValueError:
            pos = 0
            seconds = 0.0
            for match in _DURATION_PART.finditer(text):
                if match.start() != pos:
                    break
                seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
                pos = match.end()
            if pos == 0 or pos != len(text):
                raise ValueError(f"invalid duration '{spec}'")

    if not math.isfinite(seconds):
        raise ValueError(f"invalid duration '{spec}'")
    if seconds <= 0:
        raise ValueError(f"duration must be positive, got '{spec}'")
    return seconds


def format_duration(seconds: float) -> str:
    """Render seconds the way they are written on the command line, e.g. 2m3s."""
    if seconds < 1:
        return f"{seconds * 1000:g}ms"
    whole = int(seconds)
    hours, rest = divmod(whole, 3600)
    minutes, secs = divmod(rest, 60)
    secs += seconds - whole
    out = ""
    if hours:
        out += f"{hours}h"
    if hours or minutes:
        out += f"{minutes}m"
    return out + f"{secs:g}s"


def resolve_log_level(verbose: bool = False, debug: bool = False, default: str = "ERROR") -> str:
    """--debug wins over -v; otherwise the configured level applies."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    return default.upper()


def get_config_path(explicit: Optional[str] = None) -> Optional[Path]:
    """Get the path to the configuration file.

    Checks in order:
    1. An explicit path (from --config)
    2. GITSYNCD_CONFIG environment variable
    3. ~/.gitsyncd/config.{json,toml,yaml,yml}
    """
    if explicit:
        return Path(explicit).expanduser()

    if 'GITSYNCD_CONFIG' in os.environ:
        return Path(os.environ['GITSYNCD_CONFIG']).expanduser()

    config_dir = Path.home() / '.gitsyncd'
    for filename in CONFIG_FILENAMES:
        path = config_dir / filename
        if path.exists():
            return path

    return None


def read_config_file(config_path: Path) -> dict:
    """Read a JSON, TOML or YAML config file into a dict."""
    try:
        if config_path.suffix.lower() == '.toml':
            with open(config_path, 'rb') as f:
                data = tomllib.load(f)
        elif config_path.suffix.lower() in ['.yaml', '.yml']:
            with open(config_path, 'r') as f:
                data = yaml.safe_load(f)
        else:
            with open(config_path, 'r') as f:
                data = json.load(f)
    except Exception as e:
        raise ConfigError(f"error loading config from {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config file {config_path} must contain a mapping")
    return data


def _normalize_keys(data: dict) -> dict:
    """Accept 'init-from', 'initfrom' and 'init_from' alike."""
    known = {f.name for f in fields(SyncConfig)}
    aliases = {'initfrom': 'init_from', 'log-level': 'log_level', 'loglevel': 'log_level'}
    out = {}
    for key, value in data.items():
        key = str(key)
        name = aliases.get(key.lower(), key.lower().replace('-', '_'))
        if name not in known:
            logger.warning(f"ignoring unknown config key '{key}'")
            continue
        out[name] = value
    return out


def apply_env_overrides(values: dict) -> dict:
    """
    Apply environment variable overrides.
    Environment variables follow the pattern: GITSYNCD_<FIELD>
    For example: GITSYNCD_BRANCH=main
    """
    overrides = {}
    for f in fields(SyncConfig):
        env_key = ENV_PREFIX + f.name.upper()
        if env_key in os.environ:
            overrides[f.name] = os.environ[env_key]
    return {**values, **overrides}


def load_config(config_file: Optional[str] = None, **overrides) -> SyncConfig:
    """
    Load configuration from defaults, file, environment and explicit overrides.

    Args:
        config_file: Optional path to a config file
        **overrides: Values from the command line; None means "not given"

    Returns:
        Validated SyncConfig

    Raises:
        ConfigError: If the file is unreadable or a value is invalid
    """
    values = {}

    config_path = get_config_path(config_file)
    if config_path is not None:
        if not config_path.exists():
            raise ConfigError(f"config file {config_path} does not exist")
        logger.debug(f"loading config from {config_path}")
        values.update(_normalize_keys(read_config_file(config_path)))

    values = apply_env_overrides(values)
    values.update({k: v for k, v in overrides.items() if v is not None})

    if 'interval' in values:
        try:
            values['interval'] = parse_duration(values['interval'])
        except ValueError as e:
            raise ConfigError(str(e)) from e

    for key in ('path', 'remote', 'branch', 'init_from', 'log_level', 'git'):
        if key in values and values[key] is not None:
            values[key] = str(values[key])
    if values.get('path'):
        values['path'] = os.path.expanduser(values['path'])

    return replace(SyncConfig(), **values).validate()


EXAMPLE_CONFIG = """\
# gitsyncd configuration
# Command-line options and GITSYNCD_* environment variables override these.

# Working copy to keep in sync (required)
path: ~/srv/site

# Remote and branch to follow
remote: origin
branch: master

# How often to poll: 1m, 35s, 2m3s, 500ms...
interval: 1m

# Clone from here when path holds no repository yet
# init_from: https://example.com/site.git

# DEBUG, INFO, WARNING, ERROR or CRITICAL
log_level: ERROR
"""


def generate_config_example(config_path: Optional[Path] = None) -> Path:
    """Write an example YAML configuration file and return its path."""
    config_path = Path(config_path) if config_path else Path.home() / '.gitsyncd' / 'config.yaml'
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(EXAMPLE_CONFIG)
    logger.info(f"An example configuration file has been saved to {config_path}")
    return config_path
