"""query command: run one SQL statement and print its result."""

from __future__ import annotations

import math
import re
import sys
from typing import Annotated, Any

import typer

from athena_adapter.cli.commands._shared import get_adapter, output_result
from athena_adapter.core.exceptions import InputError
from athena_adapter.core.exit_codes import ExitCode
from athena_adapter.core.query_source import resolve_query_source


# Plain decimal literals only: int()/float() also accept "1_000", "nan" and "inf".
_INT_LITERAL = re.compile(r"[+-]?[0-9]+")
_FLOAT_LITERAL = re.compile(r"[+-]?([0-9]+\.[0-9]*|\.[0-9]+|[0-9]+)([eE][+-]?[0-9]+)?")


def parse_param(text: str) -> Any:
    """Interpret a --param value: null, true/false, int, float, else string."""
    lowered = text.lower()
    if lowered == "null":
        return None
    if lowered in ("true", "false"):
        return lowered == "true"
    if _INT_LITERAL.fullmatch(text):
        return int(text)
    if _FLOAT_LITERAL.fullmatch(text):
        value = float(text)
        if math.isfinite(value):
            return value
    return text


def query_command(
    ctx: typer.Context,
    file: Annotated[
        str | None,
        typer.Argument(help="SQL file to execute ('-' for stdin)"),
    ] = None,
    execute: Annotated[
        str | None,
        typer.Option("--execute", "-e", help="Execute inline SQL query"),
    ] = None,
    param: Annotated[
        list[str] | None,
        typer.Option(
            "--param", "-p", help="Bind value for the next '?' placeholder (repeatable)"
        ),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option(
            "--timeout", "-t", help="Stop the query after this many seconds"
        ),
    ] = None,
) -> None:
    """Execute a SQL query from file, inline (-e), or stdin."""
    try:
        is_tty = sys.stdin.isatty()
    except (ValueError, AttributeError):
        is_tty = False
    if execute is None and file is None and is_tty:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    try:
        sql = resolve_query_source(inline=execute, file_path=file)
    except InputError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(ExitCode.INPUT_ERROR) from exc

    binds = [parse_param(p) for p in param or []]
    with get_adapter(ctx, timeout=timeout) as adapter:
        result = adapter.exec_query(sql, binds)

    output_result(ctx, result, adapter.config)
