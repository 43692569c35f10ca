"""Canned Athena API responses for unit tests."""

from __future__ import annotations

import botocore.exceptions


def status_response(state: str, reason: str | None = None) -> dict:
    status: dict = {"State": state}
    if reason is not None:
        status["StateChangeReason"] = reason
    return {"QueryExecution": {"QueryExecutionId": "qid-1", "Status": status}}


def _row(values: list[str | None]) -> dict:
    return {"Data": [{"VarCharValue": v} if v is not None else {} for v in values]}


def results_response(
    columns: list[str],
    rows: list[list[str | None]],
    next_token: str | None = None,
    types: list[str] | None = None,
) -> dict:
    if types is None:
        types = ["varchar"] * len(columns)
    response: dict = {
        "ResultSet": {
            "ResultSetMetadata": {
                "ColumnInfo": [
                    {"Name": c, "Type": t} for c, t in zip(columns, types, strict=True)
                ]
            },
            "Rows": [_row(r) for r in rows],
        }
    }
    if next_token is not None:
        response["NextToken"] = next_token
    return response


def client_error(code: str = "InvalidRequestException", message: str = "bad") -> Exception:
    return botocore.exceptions.ClientError(
        {"Error": {"Code": code, "Message": message}}, "StartQueryExecution"
    )


# DESCRIBE output for a table with three columns, as Athena renders it.
DESCRIBE_ROWS: list[list[str | None]] = [
    ["# Table schema:"],
    ["# col_name", "data_type", "comment"],
    ["col_name", "data_type", "comment"],
    ["id", "bigint", ""],
    ["name", "string", ""],
    ["active", "boolean", ""],
    [""],
    ["# Partition spec:"],
    ["# field_name", "field_transform", "column_name"],
    ["field_name", "field_transform", "column_name"],
]

HEADER_ONLY_DESCRIBE_ROWS: list[list[str | None]] = [
    ["# Table schema:"],
    ["# col_name", "data_type", "comment"],
    ["col_name", "data_type", "comment"],
]


def route_queries(athena, routes: dict[str, dict]) -> None:
    """Answer each SQL statement in *routes* with its own result set.

    A route value of ``status_response("FAILED", ...)`` makes that statement
    fail instead of returning rows. Unrouted statements return no rows.
    """
    submitted: dict[str, str] = {}

    def start(**kwargs):
        job_id = f"qid-{len(submitted) + 1}"
        submitted[job_id] = kwargs["QueryString"]
        return {"QueryExecutionId": job_id}

    def status(QueryExecutionId):
        response = routes.get(submitted[QueryExecutionId])
        if response is not None and "QueryExecution" in response:
            return response
        return status_response("SUCCEEDED")

    def results(QueryExecutionId, **kwargs):
        return routes.get(submitted[QueryExecutionId]) or results_response([], [])

    athena.start_query_execution.side_effect = start
    athena.get_query_execution.side_effect = status
    athena.get_query_results.side_effect = results
