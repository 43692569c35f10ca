"""Sentry integration for error tracking and performance monitoring.

Sentry is initialized early in main() after logging setup. Without a DSN in
the environment the SDK is initialized disabled and spans become no-ops.
"""

import os

import sentry_sdk

from athena_adapter.__about__ import __version__

SENTRY_DSN_ENV = "ATHENA_ADAPTER_SENTRY_DSN"


def setup_sentry(environment: str = "local") -> None:
    """Initialize Sentry using the DSN from ATHENA_ADAPTER_SENTRY_DSN."""
    sentry_sdk.init(
        dsn=os.environ.get(SENTRY_DSN_ENV),
        traces_sample_rate=0.03,
        environment=environment,
        release=__version__,
        attach_stacktrace=True,
        send_default_pii=False,
    )
