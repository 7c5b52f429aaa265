"""Exception types raised by queryfilter."""
from __future__ import annotations

from typing import Any


class QueryFilterError(Exception):
    """Base class for all queryfilter errors."""


class InvalidFilterError(QueryFilterError, TypeError):
    """A filter child is neither a composite filter nor a callable predicate."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(
            f"{value!r} is not a filter: expected a callable predicate "
            "or an object exposing apply(element)"
        )


class ElementLoadError(QueryFilterError, ValueError):
    """An input line could not be decoded into an element."""

    def __init__(self, path: str, lineno: int, reason: str) -> None:
        self.path = path
        self.lineno = lineno
        super().__init__(f"{path}:{lineno}: {reason}")
