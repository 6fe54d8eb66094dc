"""
Tests for the startup sequence and the polling daemon.
"""

import os
import pytest
from pathlib import Path
from unittest.mock import MagicMock, patch

from conftest import FakeClock, command_error
from gitsyncd.daemon import Daemon, StartupResult, startup
from gitsyncd.exit_codes import GENERAL_ERROR, BootstrapError, InvalidRepositoryError

URL = "https://example/repo.git"


class TestStartup:
    """Tests for startup()."""

    def test_valid_repository(self, make_service, valid_repo):
        service, runner = make_service()
        result = startup(service)
        assert result == StartupResult(ok=True)
        assert runner.calls == []

    def test_invalid_without_url_fails(self, make_service):
        service, runner = make_service()

        result = startup(service)

        assert not result.ok
        assert isinstance(result.error, InvalidRepositoryError)
        assert str(result.error) == "no valid repository found in the specified path"
        assert result.exit_code == GENERAL_ERROR
        assert runner.calls == []

    def test_invalid_with_url_creates_dir_and_clones(self, make_service, identity, sink):
        service, runner = make_service()
        assert not Path(identity.path).exists()

        result = startup(service, URL)

        assert result.ok and result.cloned
        assert runner.calls == [["clone", URL, "."]]
        assert runner.argv(*runner.calls[0]) == ["-C", identity.path, "clone", URL, "."]
        assert service.is_valid()
        sink.info.assert_any_call(f"creating directory for cloning: {identity.path}")

    def test_directory_created_private(self, make_service, identity):
        service, _ = make_service()
        startup(service, URL)
        assert os.stat(identity.path).st_mode & 0o077 == 0

    def test_existing_empty_directory_is_reused(self, make_service, identity, sink):
        Path(identity.path).mkdir()
        service, runner = make_service()

        result = startup(service, URL)

        assert result.ok
        assert runner.commands() == ["clone"]
        assert f"creating directory for cloning: {identity.path}" not in [
            c.args[0] for c in sink.info.call_args_list
        ]

    def test_clone_failure_is_fatal(self, make_service):
        err = command_error("clone")
        service, _ = make_service(failures={"clone": err})

        result = startup(service, URL)

        assert not result.ok
        assert result.error is err
        assert result.exit_code == GENERAL_ERROR

    def test_clone_without_metadata_is_bootstrap_error(self, make_service):
        service, runner = make_service()
        runner.run = MagicMock(return_value=b"")

        result = startup(service, URL)

        assert not result.ok
        assert isinstance(result.error, BootstrapError)

    def test_directory_creation_failure_is_fatal(self, make_service):
        service, runner = make_service()
        with patch("gitsyncd.utils.os.makedirs", side_effect=PermissionError("denied")):
            result = startup(service, URL)
        assert not result.ok
        assert isinstance(result.error, PermissionError)
        assert result.exit_code == GENERAL_ERROR
        assert runner.calls == []

    def test_validity_check_failure_is_fatal(self, make_service):
        service, _ = make_service()
        with patch("gitsyncd.utils.os.stat", side_effect=PermissionError("denied")):
            result = startup(service, URL)
        assert not result.ok
        assert isinstance(result.error, PermissionError)


class TestDaemon:
    """Tests for Daemon."""

    def test_run_cycle_returns_result(self, make_service, valid_repo):
        service, runner = make_service(revisions={"HEAD": "abc123", "origin/master": "def456"})
        daemon = Daemon(service, interval=60)

        result = daemon.run_cycle()

        assert result.changed
        assert runner.calls[-1] == ["checkout", "def456"]

    def test_run_cycle_logs_and_swallows_errors(self, make_service, sink):
        err = command_error("fetch")
        service, _ = make_service(failures={"fetch": err})
        daemon = Daemon(service, interval=60)

        assert daemon.run_cycle() is None

        sink.error.assert_called_once_with(f"error syncing repo: {err}")
        sink.critical.assert_not_called()
        assert daemon.failures == 1

    def test_failures_reset_after_success(self, make_service):
        service, runner = make_service(
            revisions={"HEAD": "abc", "origin/master": "abc"},
            failures={"fetch": command_error("fetch")},
        )
        daemon = Daemon(service, interval=60)
        daemon.run_cycle()
        daemon.run_cycle()
        assert daemon.failures == 2

        del runner.failures["fetch"]
        assert daemon.run_cycle() is not None
        assert daemon.failures == 0

    def test_loop_keeps_going_after_errors(self, make_service):
        service, runner = make_service(failures={"fetch": command_error("fetch")})
        daemon = Daemon(service, interval=10)
        FakeClock().install(daemon.ticker)

        daemon.run(max_ticks=3)

        assert runner.commands() == ["fetch", "fetch", "fetch"]
        assert daemon.failures == 3

    def test_stop_prevents_further_cycles(self, make_service):
        service, runner = make_service()
        daemon = Daemon(service, interval=3600)
        daemon.stop()
        daemon.run()
        assert runner.calls == []
