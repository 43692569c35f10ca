"""Output formatters for athena-tool."""

from athena_adapter.formatters.base import Formatter, FormatterRegistry, registry
from athena_adapter.formatters.csv import CSVFormatter
from athena_adapter.formatters.json import JSONFormatter
from athena_adapter.formatters.table import TableFormatter

__all__ = [
    "CSVFormatter",
    "Formatter",
    "FormatterRegistry",
    "JSONFormatter",
    "TableFormatter",
    "registry",
]
