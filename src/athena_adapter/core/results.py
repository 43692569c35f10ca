"""Materialize raw GetQueryResults rows into a TabularResult."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from athena_adapter.core.models import ColumnKind, TabularResult
from athena_adapter.core.types import cast_value, lookup_cast_type

if TYPE_CHECKING:
    from athena_adapter.core.models import JobResult


def materialize(
    columns: list[str],
    raw_rows: list[list[str | None]],
    column_types: list[str] | None = None,
) -> TabularResult:
    """Build a TabularResult from column names and raw row cells.

    Athena echoes the header into the first row of SELECT results; that row
    is dropped when it equals the column list. Rows whose width differs from
    the column count are dropped. No rows yields an empty result with no
    columns.
    """
    if not raw_rows:
        return TabularResult(columns=[], rows=[])

    data_rows = raw_rows
    if raw_rows[0] == columns:
        data_rows = raw_rows[1:]

    width = len(columns)
    rows: list[list[str | None]] = []
    dropped = 0
    for row in data_rows:
        if len(row) != width:
            dropped += 1
            continue
        rows.append(list(row))

    if dropped:
        log = structlog.get_logger()
        log.debug("dropping malformed row", dropped=dropped, width=width)

    types = list(column_types) if column_types and len(column_types) == width else []
    return TabularResult(columns=list(columns), column_types=types, rows=rows)


def materialize_job_result(result: JobResult) -> TabularResult:
    return materialize(result.column_names, result.raw_rows, result.column_types)


def column_kinds(result: TabularResult) -> list[ColumnKind]:
    """Logical kind per column; all strings when types are unknown."""
    if not result.column_types:
        return [ColumnKind.STRING] * len(result.columns)
    return [lookup_cast_type(t) for t in result.column_types]


def typed_rows(result: TabularResult) -> list[list[Any]]:
    """Rows with each cell cast to the Python type of its column."""
    kinds = column_kinds(result)
    return [
        [cast_value(value, kind) for value, kind in zip(row, kinds, strict=True)]
        for row in result.rows
    ]


def typed_dicts(result: TabularResult) -> list[dict[str, Any]]:
    return [dict(zip(result.columns, row, strict=True)) for row in typed_rows(result)]
