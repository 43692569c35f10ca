"""Amazon Athena adapter: synchronous SQL over the asynchronous query job API."""

from athena_adapter.__about__ import __version__

__all__ = ["__version__"]
