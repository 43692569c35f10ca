"""Capability flags for the Athena backend.

A fixed table callers consult to short-circuit operations Athena cannot
perform, plus the guard used by schema mutation methods.
"""

from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType
from typing import NoReturn

from athena_adapter.core.exceptions import UnsupportedOperationError


class Capability(StrEnum):
    MIGRATIONS = "migrations"
    PRIMARY_KEY = "primary_key"
    FOREIGN_KEYS = "foreign_keys"
    VIEWS = "views"
    TRANSACTIONS = "transactions"
    SAVEPOINTS = "savepoints"
    LAZY_TRANSACTIONS = "lazy_transactions"
    DDL_TRANSACTIONS = "ddl_transactions"
    BULK_ALTER = "bulk_alter"
    JSON = "json"
    DATETIME_WITH_PRECISION = "datetime_with_precision"
    STATEMENT_CACHE = "statement_cache"
    INSERT_RETURNING = "insert_returning"
    INDEXES = "indexes"


CAPABILITIES: MappingProxyType[Capability, bool] = MappingProxyType(
    {
        Capability.MIGRATIONS: False,
        Capability.PRIMARY_KEY: False,
        Capability.FOREIGN_KEYS: False,
        Capability.VIEWS: True,
        Capability.TRANSACTIONS: False,
        Capability.SAVEPOINTS: False,
        Capability.LAZY_TRANSACTIONS: False,
        Capability.DDL_TRANSACTIONS: False,
        Capability.BULK_ALTER: False,
        Capability.JSON: True,
        Capability.DATETIME_WITH_PRECISION: True,
        Capability.STATEMENT_CACHE: True,
        Capability.INSERT_RETURNING: False,
        Capability.INDEXES: False,
    }
)

# Schema mutations rejected locally. DROP TABLE is deliberately absent:
# it is forwarded to Athena.
UNSUPPORTED_OPERATIONS: MappingProxyType[str, str] = MappingProxyType(
    {
        "create_table": "CREATE TABLE",
        "rename_table": "RENAME TABLE",
        "add_column": "ADD COLUMN",
        "remove_column": "REMOVE COLUMN",
        "change_column": "CHANGE COLUMN",
        "rename_column": "RENAME COLUMN",
        "add_index": "ADD INDEX",
        "remove_index": "REMOVE INDEX",
    }
)

_HINTS: dict[str, str] = {
    "create_table": (
        " Use external table creation through the AWS console or CLI."
    ),
}


def supports(name: str | Capability) -> bool:
    """Return whether Athena supports *name*.

    Raises KeyError for capability names that are not registered.
    """
    try:
        capability = Capability(name)
    except ValueError:
        available = ", ".join(sorted(c.value for c in Capability))
        msg = f"Unknown capability {name!r}. Available: {available}"
        raise KeyError(msg) from None
    return CAPABILITIES[capability]


def unsupported(operation: str) -> NoReturn:
    """Raise UnsupportedOperationError for a schema mutation."""
    label = UNSUPPORTED_OPERATIONS.get(operation, operation.replace("_", " ").upper())
    msg = f"{label} is not supported for Athena.{_HINTS.get(operation, '')}"
    raise UnsupportedOperationError(msg)
