"""SQL literal and identifier quoting for Athena.

Athena's Trino dialect uses single-quoted string literals with doubled
quotes as the only escape, and double-quoted identifiers in DML. DDL statements
take backtick-quoted identifiers instead.
"""

from __future__ import annotations

import datetime
import math
from enum import Enum
from typing import Any

from athena_adapter.core.models import BindParameter

QUOTED_TRUE = "true"
QUOTED_FALSE = "false"
QUOTED_NULL = "NULL"


def quote_string(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def quote(value: Any) -> str:
    """Render a Python value as an Athena SQL literal.

    Never raises: unrecognized types are stringified and quoted as strings.
    """
    if isinstance(value, BindParameter):
        value = value.value

    if value is None:
        return QUOTED_NULL
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return QUOTED_TRUE if value else QUOTED_FALSE
    if isinstance(value, str):
        return quote_string(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        # nan and inf have no numeric literal form
        return str(value) if math.isfinite(value) else quote_string(str(value))
    # datetime before date: datetime is a date subclass
    if isinstance(value, datetime.datetime):
        return quote_string(value.strftime("%Y-%m-%d %H:%M:%S"))
    if isinstance(value, datetime.date):
        return quote_string(value.strftime("%Y-%m-%d"))
    if isinstance(value, Enum):
        return quote_string(str(value.value))
    return quote_string(str(value))


def quote_identifier(name: str) -> str:
    return '"' + str(name).replace('"', '""') + '"'


def quote_ddl_identifier(name: str) -> str:
    """Backtick-quote *name* for DDL, which rejects double-quoted identifiers."""
    return "`" + str(name).replace("`", "``") + "`"


def quote_table_name(name: str) -> str:
    return quote_identifier(name)


def quote_column_name(name: str) -> str:
    return quote_identifier(name)
