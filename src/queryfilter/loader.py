"""Stream elements out of newline-delimited JSON (NDJSON) files."""
from __future__ import annotations

import json
import logging
from typing import Any, Iterator

from .errors import ElementLoadError

logger = logging.getLogger(__name__)

Element = dict[str, Any]


def parse_element(line: str) -> Element | None:
    """Decode one NDJSON line. Returns None for blank lines.

    Raises ValueError for lines that are not a JSON object.
    """
    line = line.strip()
    if not line:
        return None
    value = json.loads(line)
    if not isinstance(value, dict):
        raise ValueError(f"expected a JSON object, got {type(value).__name__}")
    return value


def iter_elements(path: str, strict: bool = False) -> Iterator[Element]:
    """Stream-parse an NDJSON file one line at a time.

    Undecodable lines are skipped (and logged) unless ``strict`` is set,
    in which case the first one raises :class:`ElementLoadError`.  Invalid
    UTF-8 is replaced in lenient mode and rejected in strict mode.
    """
    errors = "strict" if strict else "replace"
    with open(path, "rb") as f:
        for lineno, raw in enumerate(f, start=1):
            try:
                element = parse_element(raw.decode("utf-8", errors=errors))
            except ValueError as exc:
                if strict:
                    raise ElementLoadError(path, lineno, str(exc)) from exc
                logger.debug("Skipping %s:%d: %s", path, lineno, exc)
                continue
            if element is not None:
                yield element
