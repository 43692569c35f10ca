"""Positional bind substitution.

Athena's StartQueryExecution takes plain SQL text, so ``?`` placeholders are
replaced with quoted literals before submission. The substitution is purely
textual; the SQL is never parsed.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

import structlog

from athena_adapter.core.models import BindParameter
from athena_adapter.core.quoting import quote

if TYPE_CHECKING:
    from collections.abc import Sequence

PLACEHOLDER = "?"

# Row limit substituted when an ORM paging query arrives with LIMIT ? unbound.
FALLBACK_LIMIT = 1000

_UNBOUND_LIMIT = re.compile(r"LIMIT \?")


def substitute_binds(sql: str, binds: Sequence[Any] = ()) -> str:
    """Replace ``?`` placeholders in *sql* with quoted bind values.

    Placeholders are consumed left to right. When there are fewer binds than
    placeholders, the extra placeholders are left as they are. With no binds
    at all, ``LIMIT ?`` is rewritten to ``LIMIT 1000`` and anything else is
    returned unchanged.
    """
    if not binds:
        if PLACEHOLDER in sql:
            rewritten = _UNBOUND_LIMIT.sub(f"LIMIT {FALLBACK_LIMIT}", sql)
            if rewritten != sql:
                log = structlog.get_logger()
                log.debug("binding fallback limit", limit=FALLBACK_LIMIT)
            return rewritten
        return sql

    params = [BindParameter.wrap(b) for b in binds]
    pieces = sql.split(PLACEHOLDER)
    out = [pieces[0]]
    for i, piece in enumerate(pieces[1:]):
        out.append(quote(params[i].value) if i < len(params) else PLACEHOLDER)
        out.append(piece)
    return "".join(out)
