"""Output format selection and TTY auto-detection.

Precedence: --format/--table flag, then default_format from the config file
or profile, then table on a terminal and csv when piped.
"""

from __future__ import annotations

import sys
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from athena_adapter.core.config import ResolvedConfig
    from athena_adapter.core.models import TabularResult
    from athena_adapter.formatters.base import Formatter


class OutputFormat(StrEnum):
    TABLE = "table"
    JSON = "json"
    CSV = "csv"


# Constructor options each formatter accepts, by format name.
_FORMATTER_OPTIONS: dict[str, tuple[str, ...]] = {
    OutputFormat.TABLE: ("width",),
    OutputFormat.JSON: ("compact",),
    OutputFormat.CSV: ("no_header",),
}


def detect_tty() -> bool:
    return sys.stdout.isatty()


def configured_format(config: ResolvedConfig | None) -> str | None:
    """default_format when the user set one, else None."""
    if config is None or config.sources.get("default_format", "default") == "default":
        return None
    return config.default_format


def resolve_format(format_flag: str | None, configured: str | None = None) -> str:
    if format_flag is not None:
        return format_flag
    if configured is not None:
        return configured
    return OutputFormat.TABLE if detect_tty() else OutputFormat.CSV


def get_formatter(
    format_flag: str | None = None,
    *,
    configured: str | None = None,
    compact: bool = False,
    width: int = 40,
    no_header: bool = False,
) -> Formatter:
    """Build the formatter for the resolved format name.

    Raises InputError for a format name no formatter is registered under.
    """
    # Importing the package populates the registry.
    import athena_adapter.formatters  # noqa: F401
    from athena_adapter.formatters.base import registry

    fmt_name = str(resolve_format(format_flag, configured))
    options: dict[str, Any] = {"compact": compact, "width": width, "no_header": no_header}
    kwargs = {k: options[k] for k in _FORMATTER_OPTIONS.get(fmt_name, ())}
    return registry.get(fmt_name, **kwargs)


def write_output(formatter: Formatter, result: TabularResult) -> None:
    for line in formatter.format(result):
        sys.stdout.write(line + "\n")
