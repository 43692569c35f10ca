"""Schema dump for Athena databases.

Writes one CREATE EXTERNAL TABLE block per table. Athena has no primary
keys, indexes or foreign keys, so those sections are never emitted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import structlog

from athena_adapter.__about__ import __version__
from athena_adapter.core.exceptions import AdapterError
from athena_adapter.core.quoting import quote_ddl_identifier

if TYPE_CHECKING:
    from athena_adapter.core.adapter import AthenaAdapter

_HEADER = """\
-- Auto-generated from the current state of the Athena database by
-- athena-adapter {version}. Tables are external; LOCATION, SerDe and
-- partitioning clauses are not recoverable from DESCRIBE and are omitted.
"""


def _dump_table(adapter: AthenaAdapter, table: str, stream: TextIO) -> None:
    columns = adapter.columns(table)
    specs = ",\n".join(
        f"  {quote_ddl_identifier(column.name)} {column.sql_type}"
        for column in columns
    )
    stream.write(f"CREATE EXTERNAL TABLE {quote_ddl_identifier(table)} (\n")
    stream.write(f"{specs}\n);\n\n")


def dump_schema(adapter: AthenaAdapter, stream: TextIO) -> int:
    """Write the schema of every table to *stream*.

    A table that cannot be introspected is replaced by a comment naming the
    error. Returns the number of tables dumped successfully.
    """
    log = structlog.get_logger()
    stream.write(_HEADER.format(version=__version__))
    stream.write("\n")

    dumped = 0
    for table in sorted(adapter.tables()):
        try:
            _dump_table(adapter, table, stream)
        except AdapterError as e:
            log.warning("could not dump table", table=table, error=e.message)
            stream.write(
                f"-- Could not dump table {table!r} because of following "
                f"{type(e).__name__}\n--   {e.message}\n\n"
            )
            continue
        dumped += 1
    return dumped
