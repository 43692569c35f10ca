"""Configuration management CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

from athena_adapter.cli.commands._shared import get_resolved_config
from athena_adapter.core.config import DEFAULT_CONFIG_PATH, load_config

if TYPE_CHECKING:
    from pathlib import Path

config_app = typer.Typer(help="Configuration management commands")


@config_app.callback(invoke_without_command=True)
def config_callback(ctx: typer.Context) -> None:
    if not ctx.invoked_subcommand:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _mask_secret(value: str | None) -> str:
    if value is None:
        return "not set"
    return "***"


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Display resolved configuration with source attribution."""
    resolved = get_resolved_config(ctx)
    config_path: Path | None = ctx.obj.get("config_file")
    sources = resolved.sources

    typer.echo("Athena Settings (resolved):")
    athena_fields = [
        ("database", resolved.database or "not set"),
        ("output_location", resolved.output_location or "not set"),
        ("workgroup", resolved.workgroup),
        ("region", resolved.region or "not set"),
        ("aws_profile", resolved.aws_profile or "not set"),
        ("access_key_id", _mask_secret(resolved.access_key_id)),
        ("secret_access_key", _mask_secret(resolved.secret_access_key)),
    ]
    for field_name, value in athena_fields:
        source = sources.get(field_name, "default")
        typer.echo(f"  {field_name}: {value} ({source})")

    typer.echo("")
    typer.echo("Polling:")
    interval_source = sources.get("poll_interval", "default")
    typer.echo(f"  poll_interval: {resolved.poll_interval}s ({interval_source})")
    deadline = f"{resolved.deadline}s" if resolved.deadline is not None else "none"
    deadline_source = sources.get("deadline", "default")
    typer.echo(f"  deadline: {deadline} ({deadline_source})")

    typer.echo("")
    if resolved.active_profile:
        typer.echo(f"Active Profile: {resolved.active_profile}")
    else:
        typer.echo("Active Profile: none")

    display_path = config_path or DEFAULT_CONFIG_PATH
    typer.echo(f"Config File: {display_path}")


@config_app.command("profiles")
def config_profiles(ctx: typer.Context) -> None:
    """List available Athena profiles."""
    config_path: Path | None = ctx.obj.get("config_file")
    app_config = load_config(config_path)
    active_profile = ctx.obj.get("profile") or None

    if not app_config.profiles:
        typer.echo("No profiles configured.")
        display_path = config_path or DEFAULT_CONFIG_PATH
        typer.echo(f"Add profiles to: {display_path}")
        return

    typer.echo("Available Profiles:")
    typer.echo("")
    for name, profile in sorted(app_config.profiles.items()):
        is_active = name == active_profile
        marker = "* " if is_active else "  "
        label = " (active)" if is_active else ""
        typer.echo(f"{marker}{name}{label}")

        display_fields = [
            ("database", profile.database or "not set"),
            ("workgroup", profile.workgroup),
        ]
        if profile.output_location:
            display_fields.append(("output_location", profile.output_location))
        if profile.region:
            display_fields.append(("region", profile.region))

        for field_name, value in display_fields:
            typer.echo(f"      {field_name}: {value}")
        typer.echo("")
