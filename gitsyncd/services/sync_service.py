"""
Sync service for gitsyncd.

Keeps one working copy at the revision of its remote-tracking branch:
fetch, compare HEAD against <remote>/<branch>, and check out the remote
revision when they differ. Errors are raised unchanged to the caller, which
decides whether they are fatal.
"""

import logging
from typing import Optional

from ..domain.repository import RepositoryIdentity
from ..domain.sync_result import SyncResult
from ..infra.git_client import GitRunner
from ..utils import dir_exists


class SyncService:
    """
    Repository controller for a single working copy.

    Example:
        identity = RepositoryIdentity("/srv/site", "origin", "main")
        service = SyncService(identity)
        if not service.is_valid():
            service.init_from("https://example.com/site.git")
        result = service.sync()
    """

    def __init__(
        self,
        identity: RepositoryIdentity,
        runner: Optional[GitRunner] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize SyncService.

        Args:
            identity: Working copy, remote and branch to keep in sync
            runner: Command runner (default: GitRunner on identity.path)
            logger: Logging sink with debug/info/error/critical methods
        """
        self.identity = identity
        self.runner = runner or GitRunner(identity.path)
        self.log = logger if logger is not None else logging.getLogger(__name__)

    def is_valid(self) -> bool:
        """Check if the path holds an initialized repository."""
        return dir_exists(self.identity.metadata_dir)

    def init_from(self, url: str) -> None:
        """
        Clone ``url`` into the repository path.

        The directory must already exist. Not idempotent: gate it behind
        is_valid().
        """
        self.log.info(f"cloning {url} into {self.identity.path}")
        self.runner.run("clone", url, ".")
        self.log.info("clone finished")

    def fetch(self, remote: str, branch: str) -> None:
        """Update the remote-tracking ref without touching the working tree."""
        self.log.debug(f"fetching {remote} {branch}")
        self.runner.run("fetch", remote, branch)

    def checkout(self, revision: str) -> None:
        """Move the working tree to ``revision``. Local edits may be overwritten."""
        self.log.info(f"checking out {revision}")
        self.runner.run("checkout", revision)
        self.log.info(f"synced to revision {revision}")

    def revision(self) -> str:
        """Revision of the local HEAD."""
        return self._revision("HEAD")

    def remote_revision(self) -> str:
        """Latest fetched revision of the tracked remote branch."""
        return self._revision(self.identity.remote_ref)

    def _revision(self, target: str) -> str:
        self.log.debug(f"getting revision for {target}")
        output = self.runner.run("rev-parse", target)
        lines = output.decode("utf-8", errors="replace").strip().splitlines()
        # stderr warnings precede the identifier
        rev = lines[-1].strip() if lines else ""
        self.log.debug(f"revision for {target} is {rev}")
        return rev

    def sync(self) -> SyncResult:
        """
        Bring the working copy to the remote revision if it differs.

        Returns:
            SyncResult with both revisions and whether a checkout ran

        Raises:
            GitCommandError: From the first failing step, unchanged
        """
        self.fetch(self.identity.remote, self.identity.branch)
        local = self.revision()
        remote = self.remote_revision()

        if local == remote:
            self.log.debug("the repo is in sync with remote")
            return SyncResult(local=local, remote=remote, changed=False)

        self.log.info("the repo is out of sync with remote")
        self.checkout(remote)
        return SyncResult(local=local, remote=remote, changed=True)
