"""Athena type classification and value coercion.

Athena returns every cell as text; callers that want typed values look the
column kind up here and cast with cast_value().
"""

from __future__ import annotations

import base64
import binascii
import datetime
import decimal
from typing import Any

from athena_adapter.core.models import ColumnKind

# Earlier entries win: "datetime" before "date", "timestamp" before "time".
_PREFIXES: tuple[tuple[tuple[str, ...], ColumnKind], ...] = (
    (("string", "varchar", "char"), ColumnKind.STRING),
    (("bigint", "int", "tinyint", "smallint"), ColumnKind.INTEGER),
    (("double", "float"), ColumnKind.FLOAT),
    (("decimal",), ColumnKind.DECIMAL),
    (("boolean",), ColumnKind.BOOLEAN),
    (("timestamp", "datetime"), ColumnKind.DATETIME),
    (("date",), ColumnKind.DATE),
    (("time",), ColumnKind.TIME),
    (("binary",), ColumnKind.BINARY),
)

# Logical type -> Athena DDL type name.
NATIVE_DATABASE_TYPES: dict[str, str] = {
    "primary_key": "string",
    "string": "string",
    "text": "string",
    "integer": "bigint",
    "bigint": "bigint",
    "float": "double",
    "decimal": "decimal",
    "datetime": "timestamp",
    "time": "time",
    "date": "date",
    "binary": "binary",
    "boolean": "boolean",
    "json": "string",
}

_TRUE_VALUES = frozenset({"true", "t", "1", "yes"})
_FALSE_VALUES = frozenset({"false", "f", "0", "no"})


def lookup_cast_type(sql_type: str) -> ColumnKind:
    """Classify an Athena type string such as ``varchar(255)``.

    Matching is case-insensitive on the type prefix; anything unrecognized
    is a string.
    """
    normalized = (sql_type or "").strip().lower()
    for prefixes, kind in _PREFIXES:
        if normalized.startswith(prefixes):
            return kind
    return ColumnKind.STRING


def valid_type(kind: Any) -> bool:
    try:
        ColumnKind(kind)
    except ValueError:
        return False
    return True


def _parse_time(text: str) -> datetime.time:
    return datetime.time.fromisoformat(text)


def _parse_datetime(text: str) -> datetime.datetime:
    # Athena renders timestamps as "2024-01-02 03:04:05.678"
    return datetime.datetime.fromisoformat(text.replace(" UTC", "+00:00"))


def cast_value(value: str | None, kind: ColumnKind) -> Any:
    """Coerce a textual cell to the Python type for *kind*.

    Empty cells become None for non-string kinds. Values that do not parse
    are returned unchanged.
    """
    if value is None:
        return None
    if kind is ColumnKind.STRING:
        return value
    text = value.strip()
    if not text:
        return None

    try:
        if kind is ColumnKind.INTEGER:
            return int(text)
        if kind is ColumnKind.FLOAT:
            return float(text)
        if kind is ColumnKind.DECIMAL:
            return decimal.Decimal(text)
        if kind is ColumnKind.BOOLEAN:
            lowered = text.lower()
            if lowered in _TRUE_VALUES:
                return True
            if lowered in _FALSE_VALUES:
                return False
            return value
        if kind is ColumnKind.DATETIME:
            return _parse_datetime(text)
        if kind is ColumnKind.DATE:
            return datetime.date.fromisoformat(text)
        if kind is ColumnKind.TIME:
            return _parse_time(text)
        if kind is ColumnKind.BINARY:
            return base64.b64decode(text, validate=True)
    except (ValueError, decimal.InvalidOperation, binascii.Error):
        return value
    return value
