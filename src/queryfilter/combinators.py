"""Factory functions that build filter trees.

``and``, ``or`` and ``not`` are Python keywords, so the factories follow
the :mod:`operator` convention of a trailing underscore.
"""
from __future__ import annotations

from .node import AnyFilter, ChainOperator, FilterNode


def filter_(predicate: AnyFilter) -> FilterNode:
    """Wrap a single predicate in a node that evaluates exactly like it."""
    return FilterNode(ChainOperator.INTERSECTION, False, (predicate,))


def and_(*filters: AnyFilter) -> FilterNode:
    """Construct a filter that passes when every one of ``filters`` passes.

    With no filters the result always passes.

    Example: keep elements tagged both ``foo`` and ``bar``::

        and_(has_tag("foo"), has_tag("bar"))
    """
    return FilterNode(ChainOperator.INTERSECTION, False, filters)


def or_(*filters: AnyFilter) -> FilterNode:
    """Construct a filter that passes when at least one of ``filters`` passes.

    With no filters the result never passes.

    Example: keep elements tagged ``foo`` or ``bar``::

        or_(has_tag("foo"), has_tag("bar"))
    """
    return FilterNode(ChainOperator.UNION, False, filters)


def not_(flt: AnyFilter) -> FilterNode:
    """Construct a filter whose result is the negation of ``flt``.

    Example: tagged ``foo`` but not ``bar``::

        and_(has_tag("foo"), not_(has_tag("bar")))
    """
    return FilterNode(ChainOperator.INTERSECTION, True, (flt,))


def always(element: object) -> bool:
    return True


# The identity filter: passes every element, a neutral default.
identity: FilterNode = filter_(always)
