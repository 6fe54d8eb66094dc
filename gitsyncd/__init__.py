"""
gitsyncd - Keep a local git working copy synced with one remote branch.

gitsyncd polls a remote on a fixed interval, fetches the tracked branch and
checks out its revision whenever it differs from the local HEAD. If the
target path holds no repository yet it can bootstrap one by cloning.

Quick Start:
    from gitsyncd import RepositoryIdentity, SyncService, Daemon, startup

    service = SyncService(RepositoryIdentity("/srv/site", "origin", "main"))
    result = startup(service, init_from="https://example.com/site.git")
    if result.ok:
        Daemon(service, interval=60).run()

Command line:
    gitsyncd run --path /srv/site --branch main --interval 30s -v
"""

__version__ = "0.3.0"

from .domain import RepositoryIdentity, SyncResult
from .infra import GitRunner, GitCommandError
from .services import SyncService
from .daemon import Daemon, StartupResult, startup
from .scheduler import Ticker
from .config import SyncConfig, load_config, parse_duration
from .exit_codes import GitSyncError, InvalidRepositoryError, BootstrapError, ConfigError

__all__ = [
    "__version__",
    "RepositoryIdentity",
    "SyncResult",
    "GitRunner",
    "GitCommandError",
    "SyncService",
    "Daemon",
    "StartupResult",
    "startup",
    "Ticker",
    "SyncConfig",
    "load_config",
    "parse_duration",
    "GitSyncError",
    "InvalidRepositoryError",
    "BootstrapError",
    "ConfigError",
]
