"""ORM-facing Athena adapter.

Binds parameters, runs statements through AthenaClient and materializes the
results. Write operations report no generated keys and no affected row
counts because Athena returns neither.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from athena_adapter.core import quoting
from athena_adapter.core.binder import substitute_binds
from athena_adapter.core.capabilities import Capability, supports
from athena_adapter.core.client import AthenaClient
from athena_adapter.core.results import materialize_job_result
from athena_adapter.core.schema import SchemaStatements
from athena_adapter.core.types import NATIVE_DATABASE_TYPES, valid_type

if TYPE_CHECKING:
    from collections.abc import Sequence

    from athena_adapter.core.config import ResolvedConfig
    from athena_adapter.core.models import JobResult, TabularResult

ADAPTER_NAME = "Athena"


def to_sql(arel: Any) -> str:
    """Return SQL text for a string or any object exposing ``to_sql()``."""
    if hasattr(arel, "to_sql"):
        return arel.to_sql()
    return arel


class AthenaAdapter(SchemaStatements):
    """Synchronous SQL adapter over Amazon Athena."""

    adapter_name = ADAPTER_NAME

    def __init__(
        self, config: ResolvedConfig, client: AthenaClient | None = None
    ) -> None:
        self.config = config
        self.client = client if client is not None else AthenaClient(config)

    def __enter__(self) -> AthenaAdapter:
        return self

    def __exit__(self, *exc: object) -> None:
        self.disconnect()

    # -- Connection lifecycle --

    def active(self) -> bool:
        return True

    def reconnect(self) -> None:
        self.client.reconnect()

    def disconnect(self) -> None:
        self.client.close()

    def clear_cache(self) -> None:
        """Statement caching is left to the caller; nothing to clear here."""

    # -- Capabilities --

    def supports(self, capability: str | Capability) -> bool:
        return supports(capability)

    def supports_migrations(self) -> bool:
        return supports(Capability.MIGRATIONS)

    def supports_primary_key(self) -> bool:
        return supports(Capability.PRIMARY_KEY)

    def supports_foreign_keys(self) -> bool:
        return supports(Capability.FOREIGN_KEYS)

    def supports_views(self) -> bool:
        return supports(Capability.VIEWS)

    def supports_transactions(self) -> bool:
        return supports(Capability.TRANSACTIONS)

    def supports_savepoints(self) -> bool:
        return supports(Capability.SAVEPOINTS)

    def supports_lazy_transactions(self) -> bool:
        return supports(Capability.LAZY_TRANSACTIONS)

    def supports_bulk_alter(self) -> bool:
        return supports(Capability.BULK_ALTER)

    def supports_json(self) -> bool:
        return supports(Capability.JSON)

    def supports_datetime_with_precision(self) -> bool:
        return supports(Capability.DATETIME_WITH_PRECISION)

    def supports_statement_cache(self) -> bool:
        return supports(Capability.STATEMENT_CACHE)

    # -- Types and quoting --

    @property
    def native_database_types(self) -> dict[str, str]:
        return dict(NATIVE_DATABASE_TYPES)

    def valid_type(self, kind: Any) -> bool:
        return valid_type(kind)

    def quote(self, value: Any) -> str:
        return quoting.quote(value)

    def quote_table_name(self, name: str) -> str:
        return quoting.quote_table_name(name)

    def quote_column_name(self, name: str) -> str:
        return quoting.quote_column_name(name)

    @property
    def quoted_true(self) -> str:
        return quoting.QUOTED_TRUE

    @property
    def quoted_false(self) -> str:
        return quoting.QUOTED_FALSE

    # -- Statements --

    def execute(self, sql: str, **kwargs: Any) -> JobResult:
        """Run *sql* and return the raw job result.

        Keyword arguments (deadline, cancel_event, on_submit) go to
        AthenaClient.execute_query.
        """
        return self.client.execute_query(sql, **kwargs)

    def exec_query(
        self, sql: Any, binds: Sequence[Any] = (), **kwargs: Any
    ) -> TabularResult:
        prepared = substitute_binds(to_sql(sql), binds)
        return materialize_job_result(self.execute(prepared, **kwargs))

    def select_all(
        self, arel: Any, binds: Sequence[Any] = (), **kwargs: Any
    ) -> TabularResult:
        return self.exec_query(to_sql(arel), binds, **kwargs)

    def exec_insert(self, sql: Any, binds: Sequence[Any] = (), **kwargs: Any) -> None:
        """Run an INSERT. Athena assigns no keys, so nothing is returned."""
        self.execute(substitute_binds(to_sql(sql), binds), **kwargs)
        return None

    def _warn_row_mutation(self, operation: str) -> None:
        log = structlog.get_logger()
        log.warning(
            "row-level mutation warning",
            operation=operation,
            detail=(
                f"{operation} operations in Athena are limited to Iceberg tables "
                "and may not behave as expected"
            ),
        )

    def exec_update(self, sql: Any, binds: Sequence[Any] = (), **kwargs: Any) -> int:
        """Run an UPDATE. Always reports 0 affected rows."""
        self._warn_row_mutation("UPDATE")
        self.execute(substitute_binds(to_sql(sql), binds), **kwargs)
        return 0

    def exec_delete(self, sql: Any, binds: Sequence[Any] = (), **kwargs: Any) -> int:
        """Run a DELETE. Always reports 0 affected rows."""
        self._warn_row_mutation("DELETE")
        self.execute(substitute_binds(to_sql(sql), binds), **kwargs)
        return 0

    def cancel_query(self, job_id: str) -> None:
        self.client.cancel_query(job_id)

    # -- Transactions (no-ops: Athena has none) --

    def begin_db_transaction(self) -> None:
        structlog.get_logger().debug("transactions not supported, begin ignored")

    def commit_db_transaction(self) -> None:
        structlog.get_logger().debug("transactions not supported, commit ignored")

    def rollback_db_transaction(self) -> None:
        structlog.get_logger().debug("transactions not supported, rollback ignored")
