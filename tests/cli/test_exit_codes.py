"""Tests for exit code mapping through run()."""

from unittest.mock import patch

import pytest

from athena_adapter.cli.main import run
from athena_adapter.core.exceptions import (
    ConfigError,
    InputError,
    NetworkError,
    QueryFailedError,
    QueryTimeoutError,
    UnsupportedOperationError,
)
from athena_adapter.core.exit_codes import ExitCode


@pytest.mark.unit
@pytest.mark.parametrize(
    ("error", "exit_code"),
    [
        (NetworkError("endpoint unreachable"), ExitCode.NETWORK_ERROR),
        (InputError("bad input"), ExitCode.INPUT_ERROR),
        (ConfigError("bad config"), ExitCode.CONFIG_ERROR),
        (QueryFailedError("Query failed: SYNTAX_ERROR"), ExitCode.QUERY_FAILED),
        (QueryTimeoutError("timed out"), ExitCode.TIMEOUT),
        (UnsupportedOperationError("CREATE TABLE"), ExitCode.UNSUPPORTED),
    ],
)
def test_run_maps_adapter_errors(error, exit_code, capsys):
    with patch("athena_adapter.cli.main.app", side_effect=error):
        with pytest.raises(SystemExit) as exc_info:
            run()
    assert exc_info.value.code == exit_code
    assert f"Error: {error.message}" in capsys.readouterr().err


@pytest.mark.unit
def test_run_keyboard_interrupt():
    with patch("athena_adapter.cli.main.app", side_effect=KeyboardInterrupt):
        with pytest.raises(SystemExit) as exc_info:
            run()
    assert exc_info.value.code == 130


@pytest.mark.unit
def test_run_unexpected_error_is_general(capsys):
    with patch("athena_adapter.cli.main.app", side_effect=RuntimeError("boom")):
        with pytest.raises(SystemExit) as exc_info:
            run()
    assert exc_info.value.code == ExitCode.GENERAL_ERROR
    assert "Error: boom" in capsys.readouterr().err


@pytest.mark.unit
def test_run_passes_through_system_exit():
    with patch("athena_adapter.cli.main.app", side_effect=SystemExit(0)):
        with pytest.raises(SystemExit) as exc_info:
            run()
    assert exc_info.value.code == 0
