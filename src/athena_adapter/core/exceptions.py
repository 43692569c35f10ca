"""Exception hierarchy for the Athena adapter.

All exceptions carry an exit_code for CLI return value mapping.
Exit codes are defined in exit_codes.py.
"""

from __future__ import annotations

from athena_adapter.core.exit_codes import ExitCode


class AdapterError(Exception):
    """Base exception for all Athena adapter errors."""

    exit_code: int = ExitCode.GENERAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NetworkError(AdapterError):
    """Athena or S3 endpoint unreachable, credentials rejected."""

    exit_code: int = ExitCode.NETWORK_ERROR


class SubmissionError(NetworkError):
    """StartQueryExecution was rejected or could not be sent."""


class QueryFailedError(AdapterError):
    """Query execution reached FAILED or CANCELLED.

    The reason is the service-provided state change reason, verbatim.
    """

    exit_code: int = ExitCode.QUERY_FAILED

    def __init__(
        self,
        message: str,
        *,
        job_id: str | None = None,
        state: str | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message)
        self.job_id = job_id
        self.state = state
        self.reason = reason


class QueryTimeoutError(QueryFailedError):
    """Local deadline elapsed before the query reached a terminal state."""

    exit_code: int = ExitCode.TIMEOUT


class QueryCancelledError(QueryFailedError):
    """Caller cancelled the wait; the query was stopped remotely."""


class UnsupportedOperationError(AdapterError):
    """Operation cannot be performed against Athena.

    Raised before any network call is made.
    """

    exit_code: int = ExitCode.UNSUPPORTED


class MalformedSchemaOutput(AdapterError):
    """DESCRIBE output could not be interpreted."""


class InputError(AdapterError):
    """File not found, invalid parameters."""

    exit_code: int = ExitCode.INPUT_ERROR


class ConfigError(AdapterError):
    """Malformed config, missing profile."""

    exit_code: int = ExitCode.CONFIG_ERROR
