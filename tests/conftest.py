"""
Shared fixtures for the gitsyncd test suite.

FakeRunner stands in for GitRunner so no test spawns a real git process.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from gitsyncd.domain.repository import RepositoryIdentity
from gitsyncd.infra.git_client import GitCommandError
from gitsyncd.services.sync_service import SyncService


class FakeRunner:
    """
    In-memory command runner.

    Revisions are served from ``revisions`` (target -> id); any command whose
    full argument tuple or first argument is in ``failures`` raises the mapped error. A successful
    clone creates the .git directory, like the real thing.
    """

    def __init__(self, path, revisions=None, failures=None):
        self.path = str(path)
        self.revisions = dict(revisions or {})
        self.failures = dict(failures or {})
        self.calls = []

    def argv(self, *args):
        return ["-C", self.path, *args]

    def run(self, *args):
        self.calls.append(list(args))
        for key in (tuple(args), args[0]):
            if key in self.failures:
                raise self.failures[key]
        if args[0] == "rev-parse":
            return (self.revisions[args[1]] + "\n").encode()
        if args[0] == "clone":
            (Path(self.path) / ".git").mkdir(parents=True)
            return b"Cloning into '.'...\n"
        if args[0] == "checkout":
            self.revisions["HEAD"] = args[1]
        return b""

    def commands(self):
        """First argument of every call, in order."""
        return [call[0] for call in self.calls]


def command_error(*args, output=b"fatal: boom\n"):
    return GitCommandError(
        "exit status 128",
        "git -C /repo " + " ".join(args),
        output=output,
        returncode=128,
    )


@pytest.fixture
def identity(tmp_path):
    return RepositoryIdentity(str(tmp_path / "repo"), "origin", "master")


@pytest.fixture
def sink():
    """Logging sink double recording debug/info/error/critical calls."""
    return MagicMock(spec=["debug", "info", "warning", "error", "critical"])


@pytest.fixture
def make_service(identity, sink):
    def _make(revisions=None, failures=None):
        runner = FakeRunner(identity.path, revisions=revisions, failures=failures)
        return SyncService(identity, runner=runner, logger=sink), runner
    return _make


@pytest.fixture
def valid_repo(identity):
    (Path(identity.path) / ".git").mkdir(parents=True)
    return identity


class FakeClock:
    """
    Manual clock for Ticker tests.

    ``sleep`` replaces the ticker's stop-event wait so that waiting advances
    the clock instead of blocking.
    """

    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def sleep(self, timeout=None):
        self.now += timeout
        return False

    def install(self, ticker):
        ticker.clock = self
        ticker._stopped.wait = self.sleep
        return ticker
