"""Schema introspection and schema statements for Athena.

DESCRIBE output mixes comment lines, repeated header rows and a partition
spec section in with the real column rows; parse_describe_output() reduces
it to ColumnDescriptors. SchemaStatements is mixed into the adapter and
rejects every schema mutation except DROP TABLE.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from athena_adapter.core.capabilities import unsupported
from athena_adapter.core.models import ColumnDescriptor
from athena_adapter.core.quoting import quote_string
from athena_adapter.core.types import lookup_cast_type

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from athena_adapter.core.models import JobResult

COMMENT_MARKER = "#"
COLUMN_HEADER = "col_name"
PARTITION_HEADER = "field_name"
HEADER_SENTINELS = frozenset({COLUMN_HEADER, PARTITION_HEADER})

# Comment lines that open a section which lists no new columns.
_PARTITION_COMMENTS = ("# partition spec", "# partition information")


def _split_cells(row: Sequence[str | None]) -> list[str | None]:
    # Some engines return each DESCRIBE line as one tab-separated cell.
    if len(row) == 1 and row[0] is not None and "\t" in row[0]:
        return list(row[0].split("\t"))
    return list(row)


def _is_partition_sentinel(first: str) -> bool:
    stripped = first.strip()
    return stripped == PARTITION_HEADER or stripped.lower().startswith(
        _PARTITION_COMMENTS
    )


def parse_describe_output(
    rows: Iterable[Sequence[str | None]],
) -> list[ColumnDescriptor]:
    """Extract (name, type) columns from raw DESCRIBE rows.

    Skips blank rows, ``#`` comments, ``col_name``/``field_name`` header rows
    and rows with fewer than two cells. Emission stops at the partition spec
    section. Never raises on malformed rows.
    """
    columns: list[ColumnDescriptor] = []
    seen: set[str] = set()
    in_partition_section = False

    for raw in rows:
        if not raw:
            continue
        cells = _split_cells(raw)
        first = cells[0]
        if first is None or not isinstance(first, str) or not first.strip():
            continue
        if _is_partition_sentinel(first):
            in_partition_section = True
            continue
        if in_partition_section:
            continue
        if first.startswith(COMMENT_MARKER) or first.strip() in HEADER_SENTINELS:
            continue
        if len(cells) < 2 or not isinstance(cells[1], str):
            continue

        name = first.strip()
        sql_type = cells[1].strip()
        if name in seen:
            continue
        seen.add(name)
        columns.append(
            ColumnDescriptor(
                name=name, sql_type=sql_type, kind=lookup_cast_type(sql_type)
            )
        )

    return columns


class SchemaStatements:
    """Schema introspection for the adapter.

    Expects the host class to provide ``execute(sql) -> JobResult``.
    Table names are interpolated unquoted: Athena's DESCRIBE and DROP TABLE
    reject double-quoted identifiers.
    """

    execute: Any

    # -- Tables --

    def data_source_sql(self, name: str | None = None) -> str:
        if name is None:
            return "SHOW TABLES"
        return f"SHOW TABLES LIKE {quote_string(str(name))}"

    def tables(self) -> list[str]:
        """List table names in the configured database."""
        result = self.execute(self.data_source_sql())
        names: list[str] = []
        for row in result.raw_rows:
            if row and row[0]:
                names.append(row[0].strip())
        return names

    def data_sources(self) -> list[str]:
        return self.tables()

    def table_exists(self, table_name: str) -> bool:
        return str(table_name) in self.tables()

    def data_source_exists(self, name: str) -> bool:
        return self.table_exists(name)

    # -- Columns --

    def columns(self, table_name: str) -> list[ColumnDescriptor]:
        result = self.execute(f"DESCRIBE {table_name}")
        return parse_describe_output(result.raw_rows)

    def column_exists(
        self, table_name: str, column_name: str, type: str | None = None
    ) -> bool:
        return any(col.name == str(column_name) for col in self.columns(table_name))

    # -- Keys and indexes --

    def primary_key(self, table_name: str) -> None:
        return None

    def indexes(self, table_name: str) -> list[Any]:
        return []

    def foreign_keys(self, table_name: str) -> list[Any]:
        return []

    # -- Schema mutations --

    def drop_table(self, table_name: str, *, if_exists: bool = False) -> JobResult:
        clause = "IF EXISTS " if if_exists else ""
        return self.execute(f"DROP TABLE {clause}{table_name}")

    def create_table(self, table_name: str, **options: Any) -> None:
        unsupported("create_table")

    def rename_table(self, table_name: str, new_name: str) -> None:
        unsupported("rename_table")

    def add_column(
        self, table_name: str, column_name: str, type: str, **options: Any
    ) -> None:
        unsupported("add_column")

    def remove_column(
        self, table_name: str, column_name: str, type: str | None = None, **options: Any
    ) -> None:
        unsupported("remove_column")

    def change_column(
        self, table_name: str, column_name: str, type: str, **options: Any
    ) -> None:
        unsupported("change_column")

    def rename_column(
        self, table_name: str, column_name: str, new_column_name: str
    ) -> None:
        unsupported("rename_column")

    def add_index(self, table_name: str, column_name: Any, **options: Any) -> None:
        unsupported("add_index")

    def remove_index(
        self, table_name: str, column_name: Any = None, **options: Any
    ) -> None:
        unsupported("remove_index")
