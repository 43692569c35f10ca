"""Athena query client.

Turns Athena's asynchronous job API into a synchronous call: submit with
StartQueryExecution, poll GetQueryExecution until the job is terminal, then
page through GetQueryResults. boto3 clients are created lazily and dropped
on reconnect().
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

import boto3
import botocore.exceptions
import sentry_sdk
import structlog

from athena_adapter.core.exceptions import (
    ConfigError,
    NetworkError,
    QueryCancelledError,
    QueryFailedError,
    QueryTimeoutError,
    SubmissionError,
)
from athena_adapter.core.models import JobResult, QueryJob, QueryState

if TYPE_CHECKING:
    import threading
    from collections.abc import Callable

    from athena_adapter.core.config import ResolvedConfig

_AWS_ERRORS = (botocore.exceptions.ClientError, botocore.exceptions.BotoCoreError)


def _parse_state(raw: str | None) -> QueryState:
    try:
        return QueryState(raw)
    except ValueError:
        # Unknown states are treated as still in flight.
        return QueryState.RUNNING


class AthenaClient:
    """Synchronous facade over the Athena query execution API."""

    def __init__(
        self,
        config: ResolvedConfig,
        *,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self._sleep = sleep
        self._clock = clock
        self._session: boto3.Session | None = None
        self._athena_client: Any = None
        self._s3_client: Any = None

    def __enter__(self) -> AthenaClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # -- Client handles --

    def _get_session(self) -> boto3.Session:
        if self._session is None:
            try:
                self._session = boto3.Session(**self.config.aws_config())
            except botocore.exceptions.ProfileNotFound as e:
                raise ConfigError(f"AWS profile not found: {e}") from e
        return self._session

    @property
    def athena_client(self) -> Any:
        if self._athena_client is None:
            self._athena_client = self._get_session().client("athena")
        return self._athena_client

    @property
    def s3_client(self) -> Any:
        if self._s3_client is None:
            self._s3_client = self._get_session().client("s3")
        return self._s3_client

    def reconnect(self) -> None:
        """Discard cached clients; the next call builds fresh ones."""
        self._session = None
        self._athena_client = None
        self._s3_client = None

    def close(self) -> None:
        """Release client handles. Athena keeps no persistent connection."""
        self.reconnect()

    # -- Query lifecycle --

    def start_query_execution(self, sql: str) -> QueryJob:
        """Submit *sql* and return the new job.

        Raises SubmissionError when Athena rejects or cannot accept it.
        """
        log = structlog.get_logger()
        request: dict[str, Any] = {
            "QueryString": sql,
            "WorkGroup": self.config.workgroup,
        }
        if self.config.database:
            request["QueryExecutionContext"] = {"Database": self.config.database}
        if self.config.output_location:
            request["ResultConfiguration"] = {
                "OutputLocation": self.config.output_location
            }

        log.debug("submitting query", workgroup=self.config.workgroup)
        try:
            response = self.athena_client.start_query_execution(**request)
        except _AWS_ERRORS as e:
            log.error("query submission failed", error=str(e))
            raise SubmissionError(f"Query submission failed: {e}") from e

        job = QueryJob(
            job_id=response["QueryExecutionId"],
            sql=sql,
            database=self.config.database,
            output_location=self.config.output_location,
            workgroup=self.config.workgroup,
        )
        log.debug("query submitted", job_id=job.job_id)
        return job

    def get_query_state(self, job: QueryJob) -> QueryState:
        """Refresh *job* from GetQueryExecution and return its state."""
        try:
            response = self.athena_client.get_query_execution(
                QueryExecutionId=job.job_id
            )
        except _AWS_ERRORS as e:
            raise NetworkError(f"Could not get status of query {job.job_id}: {e}") from e

        status = response["QueryExecution"]["Status"]
        job.state = _parse_state(status.get("State"))
        job.reason = status.get("StateChangeReason")
        return job.state

    def wait_for_query_completion(
        self,
        job: QueryJob,
        *,
        deadline: float | None = None,
        cancel_event: threading.Event | None = None,
    ) -> QueryJob:
        """Poll until *job* succeeds.

        Sleeps poll_interval between polls. Without a deadline or cancel
        event the loop has no bound of its own. FAILED and CANCELLED raise
        QueryFailedError with Athena's reason text.
        """
        log = structlog.get_logger().bind(job_id=job.job_id)
        if deadline is None:
            deadline = self.config.deadline
        started = self._clock()

        while True:
            state = self.get_query_state(job)
            log.debug("polling query", state=state.value)

            if state is QueryState.SUCCEEDED:
                return job
            if state in (QueryState.FAILED, QueryState.CANCELLED):
                log.error("query failed", state=state.value, reason=job.reason)
                raise QueryFailedError(
                    f"Query failed: {job.reason}",
                    job_id=job.job_id,
                    state=state.value,
                    reason=job.reason,
                )

            if cancel_event is not None and cancel_event.is_set():
                self.cancel_query(job.job_id)
                raise QueryCancelledError(
                    f"Query {job.job_id} cancelled by caller",
                    job_id=job.job_id,
                    state=QueryState.CANCELLED.value,
                )
            if deadline is not None and self._clock() - started >= deadline:
                self.cancel_query(job.job_id)
                raise QueryTimeoutError(
                    f"Query {job.job_id} timed out after {deadline}s",
                    job_id=job.job_id,
                    state=state.value,
                )

            self._sleep(self.config.poll_interval)

    def get_query_results(self, job: QueryJob) -> JobResult:
        """Fetch every result page for a succeeded job."""
        column_info: list[dict[str, Any]] = []
        rows: list[dict[str, Any]] = []
        request: dict[str, Any] = {"QueryExecutionId": job.job_id}

        while True:
            try:
                response = self.athena_client.get_query_results(**request)
            except _AWS_ERRORS as e:
                raise NetworkError(
                    f"Could not fetch results of query {job.job_id}: {e}"
                ) from e

            result_set = response.get("ResultSet", {})
            if not column_info:
                column_info = list(
                    result_set.get("ResultSetMetadata", {}).get("ColumnInfo", [])
                )
            rows.extend(result_set.get("Rows", []))

            next_token = response.get("NextToken")
            if not next_token:
                break
            request["NextToken"] = next_token

        return JobResult(job=job, column_info=column_info, rows=rows)

    def execute_query(
        self,
        sql: str,
        *,
        deadline: float | None = None,
        cancel_event: threading.Event | None = None,
        on_submit: Callable[[QueryJob], None] | None = None,
    ) -> JobResult:
        """Submit, wait for and fetch one query.

        on_submit receives the job right after submission so callers can
        record the id and stop the query remotely with cancel_query().
        """
        log = structlog.get_logger()
        sql_normalized = " ".join(sql.split())
        with sentry_sdk.start_span(
            op="db.query", description=sql_normalized[:100]
        ) as span:
            start_time = self._clock()
            job = self.start_query_execution(sql)
            span.set_data("job_id", job.job_id)
            if on_submit is not None:
                on_submit(job)

            try:
                self.wait_for_query_completion(
                    job, deadline=deadline, cancel_event=cancel_event
                )
            except QueryTimeoutError:
                span.set_status("deadline_exceeded")
                raise
            except QueryFailedError:
                span.set_status("internal_error")
                raise

            result = self.get_query_results(job)
            duration_ms = (self._clock() - start_time) * 1000
            span.set_data("row_count", len(result.rows))
            span.set_data("duration_ms", duration_ms)
            log.debug(
                "query complete",
                job_id=job.job_id,
                duration_ms=f"{duration_ms:.1f}",
                row_count=len(result.rows),
            )
            return result

    def cancel_query(self, job_id: str) -> None:
        """Ask Athena to stop a running query."""
        log = structlog.get_logger()
        log.info("stopping query", job_id=job_id)
        try:
            self.athena_client.stop_query_execution(QueryExecutionId=job_id)
        except _AWS_ERRORS as e:
            raise NetworkError(f"Could not stop query {job_id}: {e}") from e
