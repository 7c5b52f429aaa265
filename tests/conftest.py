"""Shared pytest fixtures for queryfilter tests."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest


class CountingPredicate:
    """Leaf predicate that records how often it is called."""

    def __init__(self, result: bool = True) -> None:
        self.result = result
        self.calls = 0

    def __call__(self, element: Any) -> bool:
        self.calls += 1
        return self.result


@pytest.fixture()
def counting() -> Callable[..., CountingPredicate]:
    """Return a factory for call-counting predicates."""
    return CountingPredicate


@pytest.fixture()
def tmp_ndjson_file(tmp_path: Path):
    """Return a factory that writes elements (or raw lines) to an NDJSON file."""

    def _make(rows: list[Any], name: str = "items.ndjson") -> Path:
        p = tmp_path / name
        lines = [r if isinstance(r, str) else json.dumps(r) for r in rows]
        p.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return p

    return _make


@pytest.fixture()
def tagged_elements() -> list[dict[str, Any]]:
    return [
        {"id": 1, "title": "alpha", "status": "open", "tags": ["foo", "bar"]},
        {"id": 2, "title": "beta", "status": "closed", "tags": ["foo"]},
        {"id": 3, "title": "gamma draft", "status": "open", "tags": ["baz"]},
        {"id": 4, "title": "delta", "status": "open", "tags": []},
    ]
