"""Shared CLI plumbing for command modules.

Adapter creation, format-option handling, and output helpers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from athena_adapter.cli.output import configured_format, get_formatter, write_output
from athena_adapter.core.adapter import AthenaAdapter
from athena_adapter.core.config import load_config, resolve_config

if TYPE_CHECKING:
    import typer

    from athena_adapter.core.config import ResolvedConfig
    from athena_adapter.core.models import TabularResult

_CLI_OVERRIDE_KEYS = ("database", "output_location", "workgroup", "region", "aws_profile")


def get_resolved_config(
    ctx: typer.Context, timeout: float | None = None
) -> ResolvedConfig:
    obj = ctx.ensure_object(dict)
    config = load_config(obj.get("config_file"))

    cli_overrides: dict[str, Any] = {}
    for key in _CLI_OVERRIDE_KEYS:
        val = obj.get(key)
        if val is not None:
            cli_overrides[key] = val
    if timeout is not None:
        cli_overrides["timeout"] = timeout

    return resolve_config(config, profile_name=obj.get("profile"), **cli_overrides)


def get_adapter(ctx: typer.Context, timeout: float | None = None) -> AthenaAdapter:
    return AthenaAdapter(get_resolved_config(ctx, timeout=timeout))


def format_options(ctx: typer.Context) -> dict[str, Any]:
    obj = ctx.ensure_object(dict)
    return {
        "format_flag": obj.get("format"),
        "compact": obj.get("compact", False),
        "width": obj.get("width", 40),
        "no_header": obj.get("no_header", False),
    }


def output_result(
    ctx: typer.Context,
    result: TabularResult,
    config: ResolvedConfig | None = None,
) -> None:
    """Write *result* to stdout in the format chosen for this invocation."""
    opts = format_options(ctx)
    formatter = get_formatter(configured=configured_format(config), **opts)
    write_output(formatter, result)
