"""CLI fixtures: isolated config and a mocked Athena backend."""

import pytest

from athena_adapter.core.adapter import AthenaAdapter
from athena_adapter.core.client import AthenaClient

_ENV_VARS = (
    "ATHENA_DATABASE",
    "ATHENA_OUTPUT_LOCATION",
    "ATHENA_WORKGROUP",
    "ATHENA_PROFILE",
    "AWS_REGION",
    "AWS_DEFAULT_REGION",
    "AWS_PROFILE",
    "ATHENA_ADAPTER_SENTRY_DSN",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, temp_dir):
    """Point the default config path at an empty temp dir and clear env."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    path = temp_dir / "config.toml"
    monkeypatch.setattr("athena_adapter.core.config.DEFAULT_CONFIG_PATH", path)
    monkeypatch.setattr("athena_adapter.cli.commands.config.DEFAULT_CONFIG_PATH", path)
    return path


@pytest.fixture
def built_configs():
    """ResolvedConfig objects the CLI built adapters from, in order."""
    return []


@pytest.fixture
def mock_backend(monkeypatch, athena, built_configs):
    """Route every adapter the CLI builds to the mocked Athena client."""

    def build(config):
        built_configs.append(config)
        client = AthenaClient(config, sleep=lambda _: None)
        client._athena_client = athena
        return AthenaAdapter(config, client=client)

    monkeypatch.setattr("athena_adapter.cli.commands._shared.AthenaAdapter", build)
    return athena
