"""Filter tree nodes and their evaluation.

A :class:`FilterNode` combines its children under a chain operator
(intersection = AND, union = OR) and optionally negates the result.
Children are either leaf predicates (plain callables taking one element)
or composite filters (anything exposing ``apply(element)``), including
other nodes, so trees nest to any depth.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Protocol, runtime_checkable

from .errors import InvalidFilterError

LeafPredicate = Callable[[Any], bool]

# Declared for callers that type their async predicates; nothing here awaits one.
AsyncLeafPredicate = Callable[[Any], Awaitable[bool]]


@runtime_checkable
class QueryFilter(Protocol):
    """Protocol for composite filters: duck-typed, no inheritance required."""

    def apply(self, element: Any) -> bool:
        """Return True if the element passes the filter."""
        ...


AnyFilter = LeafPredicate | QueryFilter


class ChainOperator(Enum):
    """How the results of a node's children are combined."""

    INTERSECTION = "and"
    UNION = "or"


def is_composite(item: Any) -> bool:
    """True if ``item`` exposes a callable ``apply`` and is evaluated through it."""
    return isinstance(item, QueryFilter) and callable(item.apply)


def resolve(item: Any) -> LeafPredicate:
    """Return the callable that evaluates ``item`` against one element.

    Composites are recognised first, so a filter that is also callable is
    still evaluated through ``apply``.
    """
    if is_composite(item):
        return item.apply
    if callable(item):
        return item
    raise InvalidFilterError(item)


@dataclass(frozen=True, repr=False)
class FilterNode:
    """Immutable boolean combinator over leaf predicates and nested filters.

    Build nodes with :func:`~queryfilter.combinators.and_`,
    :func:`~queryfilter.combinators.or_`, :func:`~queryfilter.combinators.not_`
    and :func:`~queryfilter.combinators.filter_` rather than directly.

    Usage::

        tree = and_(has_tag("foo"), not_(has_tag("bar")))
        tree.apply({"tags": ["foo"]})   # True
        kept = [el for el in elements if tree.apply(el)]
    """

    chain_op: ChainOperator = ChainOperator.INTERSECTION
    negated: bool = False
    children: tuple[AnyFilter, ...] = ()
    _evaluators: tuple[LeafPredicate, ...] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        children = tuple(self.children)
        object.__setattr__(self, "children", children)
        object.__setattr__(self, "_evaluators", tuple(resolve(c) for c in children))

    def apply(self, element: Any) -> bool:
        """Evaluate the tree against ``element``.

        Children run left to right; evaluation stops once the outcome is
        decided. Exceptions raised by a leaf propagate unchanged.
        """
        results = (evaluate(element) for evaluate in self._evaluators)
        if self.chain_op is ChainOperator.UNION:
            matched = any(results)
        else:
            matched = all(results)
        return not matched if self.negated else matched

    __call__ = apply

    @property
    def depth(self) -> int:
        """Height of the tree; a node over leaves only has depth 1.

        Composites without a ``depth`` of their own count as one level.
        """
        return 1 + max(
            (getattr(c, "depth", 1) for c in self.children if is_composite(c)),
            default=0,
        )

    # Combine nodes with &, | and ~ (always returns a new node)
    def __and__(self, other: AnyFilter) -> FilterNode:
        return FilterNode(ChainOperator.INTERSECTION, False, (self, other))

    def __rand__(self, other: AnyFilter) -> FilterNode:
        return FilterNode(ChainOperator.INTERSECTION, False, (other, self))

    def __or__(self, other: AnyFilter) -> FilterNode:
        return FilterNode(ChainOperator.UNION, False, (self, other))

    def __ror__(self, other: AnyFilter) -> FilterNode:
        return FilterNode(ChainOperator.UNION, False, (other, self))

    def __invert__(self) -> FilterNode:
        return FilterNode(ChainOperator.INTERSECTION, True, (self,))

    def __len__(self) -> int:
        return len(self.children)

    def __bool__(self) -> bool:
        # an empty node is still a filter
        return True

    def __repr__(self) -> str:
        args = ", ".join(_describe(c) for c in self.children)
        if self.chain_op is ChainOperator.UNION:
            text = f"or_({args})"
        elif len(self.children) == 1:
            text = f"filter_({args})"
        else:
            text = f"and_({args})"
        if not self.negated:
            return text
        if self.chain_op is ChainOperator.INTERSECTION and len(self.children) == 1:
            return f"not_({args})"
        return f"not_({text})"


def _describe(child: AnyFilter) -> str:
    if is_composite(child):
        return repr(child)
    name = getattr(child, "__name__", None)
    return name if isinstance(name, str) else repr(child)
