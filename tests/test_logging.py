"""Tests for logging setup."""

import logging

import pytest

from athena_adapter.core.logging import get_logger, setup_logging


@pytest.mark.unit
class TestSetupLogging:
    def test_setup_default(self):
        setup_logging()

    def test_setup_verbose(self):
        setup_logging(verbose=True)


@pytest.mark.unit
class TestGetLogger:
    def test_get_logger_without_name(self):
        setup_logging()
        assert get_logger() is not None

    def test_get_logger_binds_name(self, capsys):
        setup_logging()
        get_logger("athena.client").info("submitted")
        captured = capsys.readouterr()
        assert "athena.client" in captured.err


@pytest.mark.unit
class TestLogOutput:
    def test_logs_go_to_stderr(self, capsys):
        """Query output owns stdout; logs must not leak into it."""
        setup_logging(verbose=True)
        get_logger().info("polling query", job_id="qid-1")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "polling query" in captured.err
        assert "qid-1" in captured.err

    def test_debug_hidden_without_verbose(self, capsys):
        setup_logging(verbose=False)
        get_logger().debug("binding fallback limit")
        assert "binding fallback limit" not in capsys.readouterr().err

    def test_debug_shown_with_verbose(self, capsys):
        setup_logging(verbose=True)
        get_logger().debug("binding fallback limit")
        assert "binding fallback limit" in capsys.readouterr().err


@pytest.mark.unit
class TestAwsLoggers:
    def test_quiet_by_default(self):
        setup_logging(verbose=False)
        assert logging.getLogger("botocore").level == logging.WARNING
        assert logging.getLogger("urllib3").level == logging.WARNING

    def test_verbose_enables_debug(self):
        setup_logging(verbose=True)
        assert logging.getLogger("botocore").level == logging.DEBUG
        assert logging.getLogger("boto3").level == logging.DEBUG
