"""athena-tool main entry point and command registration."""

from __future__ import annotations

import atexit
from pathlib import Path  # noqa: TC003
from typing import Annotated

import sentry_sdk
import typer

from athena_adapter.__about__ import __version__
from athena_adapter.cli.commands._shared import get_adapter, output_result
from athena_adapter.cli.commands.config import config_app
from athena_adapter.cli.commands.query import query_command
from athena_adapter.cli.commands.schema import (
    columns_command,
    dump_command,
    tables_command,
)
from athena_adapter.cli.output import OutputFormat  # noqa: TC001
from athena_adapter.core.capabilities import CAPABILITIES, UNSUPPORTED_OPERATIONS
from athena_adapter.core.exceptions import AdapterError
from athena_adapter.core.logging import setup_logging
from athena_adapter.core.models import TabularResult
from athena_adapter.core.monitoring import setup_sentry

app = typer.Typer(
    help="Athena Tool - run SQL against Amazon Athena and inspect its schema",
    no_args_is_help=True,
)

app.add_typer(config_app, name="config")
app.command("query")(query_command)
app.command("tables")(tables_command)
app.command("columns")(columns_command)
app.command("dump")(dump_command)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"athena-tool {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable verbose logging"),
    ] = False,
    profile: Annotated[
        str | None,
        typer.Option("--profile", "-P", help="Named Athena profile"),
    ] = None,
    database: Annotated[
        str | None,
        typer.Option("--database", "-d", help="Athena database (Glue catalog)"),
    ] = None,
    output_location: Annotated[
        str | None,
        typer.Option("--output-location", help="s3:// URI for query results"),
    ] = None,
    workgroup: Annotated[
        str | None,
        typer.Option("--workgroup", "-w", help="Athena workgroup"),
    ] = None,
    region: Annotated[
        str | None,
        typer.Option("--region", "-r", help="AWS region"),
    ] = None,
    aws_profile: Annotated[
        str | None,
        typer.Option("--aws-profile", help="AWS credentials profile"),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config file"),
    ] = None,
    format: Annotated[
        OutputFormat | None,
        typer.Option("--format", "-f", help="Output format: table|json|csv"),
    ] = None,
    table: Annotated[
        bool,
        typer.Option("--table", help="Shorthand for --format table"),
    ] = False,
    compact: Annotated[
        bool,
        typer.Option("--compact", help="Compact JSON output (no indentation)"),
    ] = False,
    width: Annotated[
        int,
        typer.Option("--width", help="Column width for table format"),
    ] = 40,
    no_header: Annotated[
        bool,
        typer.Option("--no-header", help="Suppress header row in CSV output"),
    ] = False,
) -> None:
    """Athena Tool - run SQL against Amazon Athena and inspect its schema."""
    setup_logging(verbose)
    setup_sentry()

    transaction = sentry_sdk.start_transaction(
        op="cli", name=ctx.invoked_subcommand or "athena-tool"
    )
    transaction.__enter__()

    def cleanup() -> None:
        transaction.__exit__(None, None, None)
        sentry_sdk.flush(timeout=2)

    atexit.register(cleanup)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["profile"] = profile
    ctx.obj["database"] = database
    ctx.obj["output_location"] = output_location
    ctx.obj["workgroup"] = workgroup
    ctx.obj["region"] = region
    ctx.obj["aws_profile"] = aws_profile
    ctx.obj["config_file"] = config_file

    fmt = "table" if table else (format.value if format else None)
    ctx.obj["format"] = fmt
    ctx.obj["compact"] = compact
    ctx.obj["width"] = width
    ctx.obj["no_header"] = no_header


@app.command("capabilities")
def capabilities_command(ctx: typer.Context) -> None:
    """Show which features and schema operations Athena supports."""
    rows: list[list[str | None]] = [
        [capability.value, str(flag).lower()]
        for capability, flag in CAPABILITIES.items()
    ]
    rows.extend([label.lower(), "false"] for label in UNSUPPORTED_OPERATIONS.values())
    rows.append(["drop table", "true"])
    output_result(ctx, TabularResult(columns=["capability", "supported"], rows=rows))


@app.command("cancel")
def cancel_command(
    ctx: typer.Context,
    job_id: Annotated[str, typer.Argument(help="Query execution id to stop")],
) -> None:
    """Stop a running query execution."""
    with get_adapter(ctx) as adapter:
        adapter.cancel_query(job_id)
    typer.echo(f"Stop requested for query {job_id}")


def run() -> None:
    """Entry point with global error handling."""
    try:
        app()
    except AdapterError as e:
        sentry_sdk.capture_exception(e)
        typer.echo(f"Error: {e.message}", err=True)
        raise SystemExit(e.exit_code) from None
    except SystemExit:
        raise
    except KeyboardInterrupt:
        raise SystemExit(130) from None
    except Exception as e:
        sentry_sdk.capture_exception(e)
        typer.echo(f"Error: {e}", err=True)
        raise SystemExit(1) from None
