"""Logging configuration using structlog.

Logs go to stderr so query output on stdout can be piped. boto3 and its
transport log through the standard library; their loggers are held at
WARNING unless verbose output is requested.
"""

import logging
import sys
from typing import Any

import structlog

_AWS_LOGGERS = ("boto3", "botocore", "s3transfer", "urllib3")


class _LazyStderrFactory:
    """Resolve sys.stderr at logger creation time, not at configure() time.

    PrintLoggerFactory(file=sys.stderr) captures the file handle once, which
    goes stale under CliRunner when stderr is swapped between invocations.
    """

    def __call__(self, *args: Any, **kwargs: Any) -> structlog.PrintLogger:
        return structlog.PrintLogger(file=sys.stderr)


def _configure_aws_loggers(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    for name in _AWS_LOGGERS:
        logging.getLogger(name).setLevel(level)


def setup_logging(verbose: bool = False) -> None:
    """Configure structlog for athena-tool.

    Args:
        verbose: Log at DEBUG, including every poll of a running query.
            Otherwise INFO.
    """
    level = logging.DEBUG if verbose else logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=_LazyStderrFactory(),
        cache_logger_on_first_use=False,
    )
    _configure_aws_loggers(verbose)


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger, optionally bound with a name.

    Never call this at module level. Call inside functions or __init__()
    so that setup_logging() has already run.
    """
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    return logger
