"""Tests for Formatter protocol and registry."""

import pytest

from athena_adapter.core.exceptions import InputError
from athena_adapter.core.models import TabularResult
from athena_adapter.formatters.base import Formatter, FormatterRegistry, registry


class _StubFormatter:
    def format(self, result):
        for row in result.rows:
            yield ",".join(row)


class _BadFormatter:
    """Missing format method."""


@pytest.mark.unit
def test_stub_formatter_implements_protocol():
    assert isinstance(_StubFormatter(), Formatter)


@pytest.mark.unit
def test_bad_formatter_does_not_implement_protocol():
    assert not isinstance(_BadFormatter(), Formatter)


@pytest.mark.unit
def test_registry_returns_instances():
    reg = FormatterRegistry()
    reg.register("stub", _StubFormatter)
    fmt = reg.get("stub")
    assert isinstance(fmt, _StubFormatter)
    result = TabularResult(columns=["a", "b"], rows=[["1", "2"]])
    assert list(fmt.format(result)) == ["1,2"]


@pytest.mark.unit
def test_registry_unknown_name():
    reg = FormatterRegistry()
    reg.register("stub", _StubFormatter)
    with pytest.raises(InputError, match="Unknown format .xml.. Available: stub"):
        reg.get("xml")


@pytest.mark.unit
def test_builtin_formatters_registered():
    import athena_adapter.formatters  # noqa: F401

    assert registry.available == ["csv", "json", "table"]
