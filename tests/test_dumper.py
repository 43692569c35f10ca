"""Tests for the schema dump."""

import io
from unittest.mock import MagicMock

import pytest

from athena_adapter.core.dumper import dump_schema
from athena_adapter.core.models import ColumnDescriptor
from tests.athena_fakes import (
    DESCRIBE_ROWS,
    results_response,
    route_queries,
    status_response,
)

_DESCRIBE_COLUMNS = ["col_name", "data_type", "comment"]


def _show_tables(*names):
    return results_response(["tab_name"], [[n] for n in names])


@pytest.mark.unit
class TestDumpSchema:
    def test_writes_create_external_table(self, adapter, athena):
        route_queries(
            athena,
            {
                "SHOW TABLES": _show_tables("users"),
                "DESCRIBE users": results_response(_DESCRIBE_COLUMNS, DESCRIBE_ROWS),
            },
        )
        out = io.StringIO()

        dumped = dump_schema(adapter, out)

        assert dumped == 1
        text = out.getvalue()
        assert text.startswith("-- Auto-generated")
        assert "athena-adapter 0.1.0" in text
        assert (
            "CREATE EXTERNAL TABLE `users` (\n"
            "  `id` bigint,\n"
            "  `name` string,\n"
            "  `active` boolean\n"
            ");\n"
        ) in text

    def test_tables_in_sorted_order(self, adapter, athena):
        route_queries(
            athena,
            {
                "SHOW TABLES": _show_tables("zeta", "alpha"),
                "DESCRIBE zeta": results_response(_DESCRIBE_COLUMNS, DESCRIBE_ROWS),
                "DESCRIBE alpha": results_response(_DESCRIBE_COLUMNS, DESCRIBE_ROWS),
            },
        )
        out = io.StringIO()
        assert dump_schema(adapter, out) == 2
        text = out.getvalue()
        assert text.index("`alpha`") < text.index("`zeta`")

    def test_failed_table_becomes_comment(self, adapter, athena):
        route_queries(
            athena,
            {
                "SHOW TABLES": _show_tables("broken", "users"),
                "DESCRIBE broken": status_response(
                    "FAILED", "HIVE_METASTORE_ERROR: table is corrupt"
                ),
                "DESCRIBE users": results_response(_DESCRIBE_COLUMNS, DESCRIBE_ROWS),
            },
        )
        out = io.StringIO()

        dumped = dump_schema(adapter, out)

        assert dumped == 1
        text = out.getvalue()
        assert (
            "-- Could not dump table 'broken' because of following QueryFailedError\n"
            "--   Query failed: HIVE_METASTORE_ERROR: table is corrupt\n"
        ) in text
        assert "CREATE EXTERNAL TABLE `users`" in text
        assert "CREATE EXTERNAL TABLE `broken`" not in text

    def test_no_tables_writes_header_only(self, adapter):
        out = io.StringIO()
        assert dump_schema(adapter, out) == 0
        assert "CREATE" not in out.getvalue()

    def test_backticks_in_names_are_doubled(self):
        adapter = MagicMock()
        adapter.tables.return_value = ["odd`name"]
        adapter.columns.return_value = [
            ColumnDescriptor(name="we`ird", sql_type="map<string,int>")
        ]
        out = io.StringIO()

        assert dump_schema(adapter, out) == 1
        assert (
            "CREATE EXTERNAL TABLE `odd``name` (\n"
            "  `we``ird` map<string,int>\n"
            ");\n"
        ) in out.getvalue()
