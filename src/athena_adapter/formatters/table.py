"""Rich table formatter for TabularResult output."""

from __future__ import annotations

import shutil
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from athena_adapter.core.models import ColumnKind
from athena_adapter.core.results import column_kinds
from athena_adapter.formatters.base import registry

if TYPE_CHECKING:
    from collections.abc import Iterator

    from athena_adapter.core.models import TabularResult

_NO_RESULTS = "No results"
_NUMERIC_KINDS = frozenset({ColumnKind.INTEGER, ColumnKind.FLOAT, ColumnKind.DECIMAL})
_NULL_DISPLAY = "NULL"


def _truncate(value: str, width: int) -> str:
    if len(value) <= width:
        return value
    return value[: width - 1] + "…"


class TableFormatter:
    """Boxed table; numeric columns are right-aligned, nulls shown dimmed."""

    def __init__(self, width: int = 40) -> None:
        self.width = width

    def format(self, result: TabularResult) -> Iterator[str]:
        if not result.rows:
            yield _NO_RESULTS
            return

        table = Table(show_edge=True, pad_edge=True)
        for name, kind in zip(result.columns, column_kinds(result), strict=True):
            justify = "right" if kind in _NUMERIC_KINDS else "left"
            table.add_column(name, justify=justify, no_wrap=True)

        for row in result.rows:
            table.add_row(*(self._cell(v) for v in row))

        buf = StringIO()
        term_width = shutil.get_terminal_size((120, 24)).columns
        console = Console(file=buf, force_terminal=True, width=term_width)
        console.print(table)
        yield buf.getvalue().rstrip("\n")

    def _cell(self, value: str | None) -> str:
        if value is None:
            return f"[dim]{_NULL_DISPLAY}[/dim]"
        return escape(_truncate(value, self.width))


registry.register("table", TableFormatter)
