"""Data models for the Athena adapter.

Pydantic models for query jobs, raw and materialized results, column
descriptors and bind parameters.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field


class QueryState(StrEnum):
    """Lifecycle states reported by GetQueryExecution."""

    QUEUED = "QUEUED"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in (QueryState.SUCCEEDED, QueryState.FAILED, QueryState.CANCELLED)


class ColumnKind(StrEnum):
    """Logical column kinds a backend type string maps to."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    DATE = "date"
    TIME = "time"
    BINARY = "binary"


class QueryJob(BaseModel):
    """One submitted query execution.

    Owned by a single execute call; mutated only by observed state changes.
    """

    job_id: str
    sql: str
    database: str | None = None
    output_location: str | None = None
    workgroup: str = "primary"
    state: QueryState = QueryState.QUEUED
    reason: str | None = None


class JobResult(BaseModel):
    """Raw GetQueryResults payload, concatenated across pages."""

    job: QueryJob
    column_info: list[dict[str, Any]] = Field(default_factory=list)
    rows: list[dict[str, Any]] = Field(default_factory=list)

    @property
    def column_names(self) -> list[str]:
        return [col.get("Name", "") for col in self.column_info]

    @property
    def column_types(self) -> list[str]:
        return [col.get("Type", "varchar") for col in self.column_info]

    @property
    def raw_rows(self) -> list[list[str | None]]:
        """Row cells as lists of VarCharValue (None where absent)."""
        return [
            [cell.get("VarCharValue") for cell in row.get("Data", [])]
            for row in self.rows
        ]


class TabularResult(BaseModel):
    """Column names plus textual rows aligned positionally with them.

    column_types holds the Athena type name of each column when known.
    """

    columns: list[str] = Field(default_factory=list)
    column_types: list[str] = Field(default_factory=list)
    rows: list[list[str | None]] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def row_count(self) -> int:
        return len(self.rows)

    def to_dicts(self) -> list[dict[str, str | None]]:
        return [dict(zip(self.columns, row, strict=True)) for row in self.rows]


class ColumnDescriptor(BaseModel):
    """A table column as reported by DESCRIBE.

    Athena does not enforce NOT NULL, so every column is nullable.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    sql_type: str
    kind: ColumnKind = ColumnKind.STRING
    nullable: bool = True
    default: str | None = None


class BindParameter(BaseModel):
    """A positional bind value.

    Bare Python values are wrapped by ``BindParameter.wrap`` so the binder
    always reads ``.value``.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    value: Any = None
    name: str | None = None

    @classmethod
    def wrap(cls, obj: Any) -> BindParameter:
        if isinstance(obj, BindParameter):
            return obj
        return cls(value=obj)
