"""Formatter protocol and the registry formatters add themselves to."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from athena_adapter.core.exceptions import InputError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from athena_adapter.core.models import TabularResult


@runtime_checkable
class Formatter(Protocol):
    """Turns a TabularResult into output lines, yielded one at a time."""

    def format(self, result: TabularResult) -> Iterator[str]: ...


class FormatterRegistry:
    def __init__(self) -> None:
        self._formatters: dict[str, type[Formatter]] = {}

    def register(self, name: str, formatter_class: type[Formatter]) -> None:
        self._formatters[name] = formatter_class

    def get(self, name: str, **options: Any) -> Formatter:
        """Instantiate the formatter registered as *name*.

        Raises InputError for names nothing is registered under.
        """
        try:
            formatter_class = self._formatters[name]
        except KeyError:
            msg = f"Unknown format {name!r}. Available: {', '.join(self.available)}"
            raise InputError(msg) from None
        return formatter_class(**options)

    @property
    def available(self) -> list[str]:
        return sorted(self._formatters)


registry = FormatterRegistry()
