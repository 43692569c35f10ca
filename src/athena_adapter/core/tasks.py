"""Database-level tasks for Athena.

Athena databases (Glue catalog databases) are managed through the AWS
console or CLI, so create/drop/purge only report that. Structure dumps are
supported; loading them is not.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from athena_adapter.core.dumper import dump_schema

if TYPE_CHECKING:
    from athena_adapter.core.adapter import AthenaAdapter
    from athena_adapter.core.config import ResolvedConfig


class DatabaseTasks:
    def __init__(self, config: ResolvedConfig) -> None:
        self.config = config

    def create(self) -> None:
        log = structlog.get_logger()
        log.warning(
            "Athena databases should be created through AWS console or CLI",
            database=self.config.database,
        )

    def drop(self) -> None:
        log = structlog.get_logger()
        log.warning(
            "Athena databases should be dropped through AWS console or CLI",
            database=self.config.database,
        )

    def purge(self) -> None:
        log = structlog.get_logger()
        log.warning("Athena doesn't support purge operations")

    def charset(self) -> str:
        return "UTF-8"

    def collation(self) -> None:
        return None

    def structure_dump(self, adapter: AthenaAdapter, filename: str | Path) -> int:
        """Write the schema dump for every table to *filename*."""
        path = Path(filename)
        with path.open("w", encoding="utf-8") as f:
            return dump_schema(adapter, f)

    def structure_load(self, filename: str | Path) -> None:
        log = structlog.get_logger()
        log.warning(
            "Structure loading is not supported for Athena", filename=str(filename)
        )
