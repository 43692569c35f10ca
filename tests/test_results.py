"""Tests for result materialization."""

import datetime

import pytest
from structlog.testing import capture_logs

from athena_adapter.core.models import ColumnKind, JobResult, QueryJob, TabularResult
from athena_adapter.core.results import (
    column_kinds,
    materialize,
    materialize_job_result,
    typed_dicts,
    typed_rows,
)
from tests.athena_fakes import results_response


@pytest.mark.unit
class TestMaterialize:
    def test_drops_echoed_header_row(self):
        result = materialize(["id", "name"], [["id", "name"], ["1", "Alice"]])
        assert result.columns == ["id", "name"]
        assert result.rows == [["1", "Alice"]]

    def test_keeps_first_data_row(self):
        result = materialize(["id", "name"], [["1", "Alice"], ["2", "Bob"]])
        assert result.rows == [["1", "Alice"], ["2", "Bob"]]

    def test_header_lookalike_later_is_kept(self):
        result = materialize(["id"], [["1"], ["id"]])
        assert result.rows == [["1"], ["id"]]

    def test_no_rows_yields_empty_result(self):
        result = materialize(["id", "name"], [])
        assert result == TabularResult(columns=[], rows=[])

    def test_header_only_yields_columns_without_rows(self):
        result = materialize(["id", "name"], [["id", "name"]])
        assert result.columns == ["id", "name"]
        assert result.rows == []
        assert result.row_count == 0

    def test_drops_rows_of_wrong_width(self):
        with capture_logs() as logs:
            result = materialize(
                ["id", "name"], [["1", "Alice"], ["2"], ["3", "C", "x"]]
            )
        assert result.rows == [["1", "Alice"]]
        assert logs[0]["event"] == "dropping malformed row"
        assert logs[0]["dropped"] == 2

    def test_cells_stay_textual_and_nulls_survive(self):
        result = materialize(["n", "v"], [["1", None]])
        assert result.rows == [["1", None]]


@pytest.mark.unit
def test_materialize_job_result():
    response = results_response(["id", "name"], [["id", "name"], ["1", "Alice"]])
    job_result = JobResult(
        job=QueryJob(job_id="qid-1", sql="SELECT id, name FROM users"),
        column_info=response["ResultSet"]["ResultSetMetadata"]["ColumnInfo"],
        rows=response["ResultSet"]["Rows"],
    )
    result = materialize_job_result(job_result)
    assert result.columns == ["id", "name"]
    assert result.rows == [["1", "Alice"]]
    assert result.to_dicts() == [{"id": "1", "name": "Alice"}]


@pytest.mark.unit
class TestColumnTypes:
    def test_types_kept_when_widths_match(self):
        result = materialize(["id"], [["1"]], ["bigint"])
        assert result.column_types == ["bigint"]

    def test_types_dropped_when_widths_differ(self):
        result = materialize(["id", "name"], [["1", "a"]], ["bigint"])
        assert result.column_types == []

    def test_column_kinds_default_to_string(self):
        result = TabularResult(columns=["a", "b"], rows=[])
        assert column_kinds(result) == [ColumnKind.STRING, ColumnKind.STRING]

    def test_typed_rows_cast_by_kind(self):
        result = TabularResult(
            columns=["id", "ratio", "ok", "ts"],
            column_types=["bigint", "double", "boolean", "timestamp"],
            rows=[["1", "0.5", "false", "2024-01-02 03:04:05.000"], [None, "", "x", "bad"]],
        )
        assert typed_rows(result) == [
            [1, 0.5, False, datetime.datetime(2024, 1, 2, 3, 4, 5)],
            [None, None, "x", "bad"],
        ]

    def test_typed_dicts(self):
        result = TabularResult(columns=["n"], column_types=["integer"], rows=[["3"]])
        assert typed_dicts(result) == [{"n": 3}]

    def test_job_result_types_flow_through(self):
        response = results_response(
            ["n"], [["n"], ["3"]], types=["integer"]
        )
        job_result = JobResult(
            job=QueryJob(job_id="qid-1", sql="SELECT 3 AS n"),
            column_info=response["ResultSet"]["ResultSetMetadata"]["ColumnInfo"],
            rows=response["ResultSet"]["Rows"],
        )
        assert typed_rows(materialize_job_result(job_result)) == [[3]]
