"""Tests for gitsyncd.log."""

import io
import logging

from gitsyncd.log import configure_logging


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_level_and_format(self):
        stream = io.StringIO()
        logger = configure_logging("info", stream=stream)

        logger.debug("hidden")
        logger.info("repository path: /srv/site")

        out = stream.getvalue()
        assert "hidden" not in out
        assert "INFO: repository path: /srv/site" in out
        assert logger.level == logging.INFO

    def test_child_loggers_use_package_handler(self):
        stream = io.StringIO()
        configure_logging("DEBUG", stream=stream)
        logging.getLogger("gitsyncd.infra.git_client").debug("running command: git status")
        assert "running command: git status" in stream.getvalue()

    def test_reconfigure_replaces_handler(self):
        first, second = io.StringIO(), io.StringIO()
        configure_logging("ERROR", stream=first)
        logger = configure_logging("ERROR", stream=second)

        streams = [h.stream for h in logger.handlers if type(h) is logging.StreamHandler]
        assert streams == [second]

        logger.error("only once")
        assert first.getvalue() == ""
        assert second.getvalue().count("only once") == 1
