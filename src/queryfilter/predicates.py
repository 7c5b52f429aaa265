"""Ready-made leaf predicates for dict-like or attribute-bearing elements.

Fields are read by key from mappings and by attribute from anything else,
so the same predicates work on parsed JSON objects and on plain objects.
"""
from __future__ import annotations

import re
from collections.abc import Container, Mapping
from typing import Any

from .node import LeafPredicate

_MISSING = object()


def get_field(element: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from ``element`` by key or attribute."""
    if isinstance(element, Mapping):
        return element.get(name, default)
    return getattr(element, name, default)


def _named(fn: LeafPredicate, name: str) -> LeafPredicate:
    fn.__name__ = name  # type: ignore[attr-defined]
    fn.__qualname__ = name  # type: ignore[attr-defined]
    return fn


def has_tag(tag: str, field: str = "tags") -> LeafPredicate:
    """Pass elements whose ``field`` collection contains ``tag``."""

    def _predicate(element: Any) -> bool:
        tags = get_field(element, field)
        if isinstance(tags, str):
            return tags == tag
        if not isinstance(tags, Container):
            return False
        return tag in tags

    label = f"has_tag({tag!r})" if field == "tags" else f"has_tag({tag!r}, field={field!r})"
    return _named(_predicate, label)


def field_equals(field: str, value: Any) -> LeafPredicate:
    """Pass elements whose ``field`` equals ``value``."""

    def _predicate(element: Any) -> bool:
        return get_field(element, field, _MISSING) == value

    return _named(_predicate, f"field_equals({field!r}, {value!r})")


def field_exists(field: str) -> LeafPredicate:
    """Pass elements that carry ``field`` at all (even with a None value)."""

    def _predicate(element: Any) -> bool:
        return get_field(element, field, _MISSING) is not _MISSING

    return _named(_predicate, f"field_exists({field!r})")


class RegexMatch:
    """Leaf predicate that searches element values with a compiled regex.

    By default every value of a mapping element is tested.  Pass ``fields``
    to restrict matching to a subset of keys (e.g. ``fields=["title"]``);
    ``fields`` is required for non-mapping elements.
    """

    def __init__(
        self,
        pattern: str,
        flags: int = re.IGNORECASE,
        fields: list[str] | None = None,
    ) -> None:
        self._regex = re.compile(pattern, flags)
        self._fields = fields

    def __call__(self, element: Any) -> bool:
        if self._fields:
            values = [get_field(element, k, _MISSING) for k in self._fields]
            values = [v for v in values if v is not _MISSING]
        elif isinstance(element, Mapping):
            values = list(element.values())
        else:
            values = [element]
        return any(self._regex.search(str(v)) for v in values)

    def __repr__(self) -> str:
        if self._fields:
            return f"RegexMatch({self._regex.pattern!r}, fields={self._fields!r})"
        return f"RegexMatch({self._regex.pattern!r})"
