"""Schema introspection commands: tables, columns, dump."""

from __future__ import annotations

import sys
from pathlib import Path  # noqa: TC003
from typing import Annotated

import typer

from athena_adapter.cli.commands._shared import get_adapter, output_result
from athena_adapter.core.dumper import dump_schema
from athena_adapter.core.models import TabularResult
from athena_adapter.core.tasks import DatabaseTasks


def tables_command(ctx: typer.Context) -> None:
    """List tables in the configured database."""
    with get_adapter(ctx) as adapter:
        names = adapter.tables()

    result = TabularResult(columns=["table"], rows=[[name] for name in names])
    output_result(ctx, result, adapter.config)


def columns_command(
    ctx: typer.Context,
    table: Annotated[str, typer.Argument(help="Table to describe")],
) -> None:
    """Describe a table's columns with their Athena types and logical kinds."""
    with get_adapter(ctx) as adapter:
        columns = adapter.columns(table)

    result = TabularResult(
        columns=["name", "type", "kind", "nullable"],
        rows=[
            [col.name, col.sql_type, col.kind.value, str(col.nullable).lower()]
            for col in columns
        ],
    )
    output_result(ctx, result, adapter.config)


def dump_command(
    ctx: typer.Context,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the dump to this file"),
    ] = None,
) -> None:
    """Dump CREATE EXTERNAL TABLE statements for every table."""
    with get_adapter(ctx) as adapter:
        if output is None:
            dump_schema(adapter, sys.stdout)
            return
        dumped = DatabaseTasks(adapter.config).structure_dump(adapter, output)

    typer.echo(f"Dumped {dumped} table(s) to {output}", err=True)
