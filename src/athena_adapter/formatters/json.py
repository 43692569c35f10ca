"""JSON formatter for TabularResult output.

Athena returns every cell as text. When the result carries column types the
cells are cast first, so integers, booleans and nulls come out as JSON
scalars; decimals and temporal values are written as strings.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from athena_adapter.core.results import typed_dicts
from athena_adapter.formatters.base import registry

if TYPE_CHECKING:
    from collections.abc import Iterator

    from athena_adapter.core.models import TabularResult


def _default(value: object) -> str:
    if isinstance(value, bytes):
        return value.hex()
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


class JSONFormatter:
    def __init__(self, compact: bool = False) -> None:
        self.compact = compact

    def format(self, result: TabularResult) -> Iterator[str]:
        indent = None if self.compact else 2
        yield json.dumps(typed_dicts(result), indent=indent, default=_default)


registry.register("json", JSONFormatter)
