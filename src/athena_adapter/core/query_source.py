"""Query source resolution for athena-tool.

SQL comes from -e (highest priority), a file path, or stdin. A file path of
``-`` reads stdin explicitly. Surrounding whitespace is stripped and an empty
query is rejected locally instead of being submitted to Athena.
"""

from __future__ import annotations

import sys
from pathlib import Path

from athena_adapter.core.exceptions import InputError

STDIN_PATH = "-"


def _read_source(inline: str | None, file_path: str | None) -> str:
    if inline is not None:
        return inline

    if file_path is not None and file_path != STDIN_PATH:
        p = Path(file_path)
        if not p.is_file():
            msg = (
                f"Query file not found: {file_path}\n"
                "Use -e for inline queries or pipe query via stdin."
            )
            raise InputError(msg)
        return p.read_text(encoding="utf-8")

    if file_path == STDIN_PATH or not sys.stdin.isatty():
        return sys.stdin.read()

    msg = "No query provided. Use -e, file path, or pipe to stdin."
    raise InputError(msg)


def resolve_query_source(inline: str | None, file_path: str | None) -> str:
    """Return the SQL text to run.

    Raises InputError when no source is available or the query is blank.
    """
    sql = _read_source(inline, file_path).strip()
    if not sql:
        raise InputError("Query is empty.")
    return sql
