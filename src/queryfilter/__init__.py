"""queryfilter — composable boolean filters over opaque elements.

Usage::

    from queryfilter import and_, not_, or_, has_tag

    tree = and_(has_tag("foo"), or_(has_tag("bar"), not_(has_tag("baz"))))
    kept = [el for el in elements if tree.apply(el)]
"""
from __future__ import annotations

from .combinators import and_, filter_, identity, not_, or_
from .errors import ElementLoadError, InvalidFilterError, QueryFilterError
from .node import (
    AnyFilter,
    AsyncLeafPredicate,
    ChainOperator,
    FilterNode,
    LeafPredicate,
    QueryFilter,
)
from .predicates import RegexMatch, field_equals, field_exists, has_tag

__version__ = "1.0.0"

__all__ = [
    "AnyFilter",
    "AsyncLeafPredicate",
    "ChainOperator",
    "ElementLoadError",
    "FilterNode",
    "InvalidFilterError",
    "LeafPredicate",
    "QueryFilter",
    "QueryFilterError",
    "RegexMatch",
    "and_",
    "field_equals",
    "field_exists",
    "filter_",
    "has_tag",
    "identity",
    "not_",
    "or_",
]
