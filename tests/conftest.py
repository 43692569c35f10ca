"""Shared test fixtures for the Athena adapter."""

from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import MagicMock

import pytest
import structlog
from typer.testing import CliRunner

from athena_adapter.cli.main import app
from athena_adapter.core.adapter import AthenaAdapter
from athena_adapter.core.client import AthenaClient
from athena_adapter.core.config import ResolvedConfig
from tests.athena_fakes import results_response, status_response


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def runner():
    """Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def cli_runner(runner):
    """Invoke the CLI app with the given arguments."""

    def invoke(*args: str, **kwargs):
        return runner.invoke(app, list(args), **kwargs)

    return invoke


@pytest.fixture
def temp_dir():
    """Temporary directory for test files."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def resolved_config():
    return ResolvedConfig(
        database="test_database",
        output_location="s3://test-bucket/query-results/",
        workgroup="primary",
        region="us-east-1",
    )


@pytest.fixture
def athena():
    """Stand-in for the boto3 Athena client: every query succeeds at once."""
    mock = MagicMock(name="athena")
    mock.start_query_execution.return_value = {"QueryExecutionId": "qid-1"}
    mock.get_query_execution.return_value = status_response("SUCCEEDED")
    mock.get_query_results.return_value = results_response([], [])
    return mock


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def client(resolved_config, athena, sleeps):
    c = AthenaClient(resolved_config, sleep=sleeps.append)
    c._athena_client = athena
    return c


@pytest.fixture
def adapter(resolved_config, client):
    return AthenaAdapter(resolved_config, client=client)
