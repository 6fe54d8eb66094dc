"""
Startup sequence and polling loop for gitsyncd.

startup() validates or bootstraps the working copy and reports the outcome
as a StartupResult; any failure there is fatal. Daemon then runs one sync per
interval, logging failures and carrying on with the next tick.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .domain.sync_result import SyncResult
from .exit_codes import SUCCESS, GENERAL_ERROR, GitSyncError, InvalidRepositoryError, BootstrapError
from .infra.git_client import GitCommandError
from .scheduler import Ticker
from .services.sync_service import SyncService
from .utils import dir_exists, ensure_directory


@dataclass(frozen=True)
class StartupResult:
    """Outcome of validating or bootstrapping the working copy."""
    ok: bool
    error: Optional[Exception] = None
    exit_code: int = SUCCESS
    cloned: bool = False

    @classmethod
    def failure(cls, error: Exception) -> "StartupResult":
        exit_code = getattr(error, 'exit_code', GENERAL_ERROR)
        return cls(ok=False, error=error, exit_code=exit_code)


def startup(
    service: SyncService,
    init_from: Optional[str] = None,
    logger: Optional[logging.Logger] = None
) -> StartupResult:
    """
    Make sure the service's path holds a repository, cloning it if allowed.

    Args:
        service: Sync service for the working copy
        init_from: URL to clone from when the path is not a repository
        logger: Logging sink (default: the service's)

    Returns:
        StartupResult; never raises for filesystem or git failures
    """
    log = logger if logger is not None else service.log
    path = service.identity.path

    try:
        if service.is_valid():
            log.debug(f"found repository at {path}")
            return StartupResult(ok=True)

        if not init_from:
            return StartupResult.failure(InvalidRepositoryError())

        if not dir_exists(path):
            log.info(f"creating directory for cloning: {path}")
            ensure_directory(path)

        service.init_from(init_from)

        if not service.is_valid():
            return StartupResult.failure(
                BootstrapError(f"clone of {init_from} left no repository in {path}")
            )
    except (OSError, GitCommandError, GitSyncError) as e:
        return StartupResult.failure(e)

    return StartupResult(ok=True, cloned=True)


class Daemon:
    """
    Polls the remote and syncs the working copy every interval.

    Example:
        daemon = Daemon(service, interval=60)
        daemon.run()  # blocks until stop()
    """

    def __init__(
        self,
        service: SyncService,
        interval: float,
        logger: Optional[logging.Logger] = None,
        ticker: Optional[Ticker] = None
    ):
        self.service = service
        self.interval = interval
        self.log = logger if logger is not None else service.log
        self.ticker = ticker or Ticker(interval, self.run_cycle)
        self.failures = 0

    def run_cycle(self) -> Optional[SyncResult]:
        """
        Run one sync; errors are logged, never raised.

        Returns:
            SyncResult on success, None if the cycle failed
        """
        try:
            result = self.service.sync()
        except (GitCommandError, OSError) as e:
            self.failures += 1
            self.log.error(f"error syncing repo: {e}")
            return None
        self.failures = 0
        return result

    def run(self, max_ticks: Optional[int] = None) -> None:
        """Block, syncing every interval, until stop() is called."""
        self.log.debug(f"starting sync loop every {self.interval}s")
        self.ticker.run(max_ticks=max_ticks)

    def stop(self) -> None:
        self.ticker.stop()
