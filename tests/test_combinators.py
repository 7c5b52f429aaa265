"""Tests for the combinator factories and the boolean laws they satisfy."""
from __future__ import annotations

import itertools
from typing import Any, Callable

import pytest

from queryfilter.combinators import and_, filter_, identity, not_, or_
from queryfilter.node import ChainOperator, FilterNode

Predicate = Callable[[Any], bool]


def _const(value: bool) -> Predicate:
    return lambda element: value


def has_tag(tag: str) -> Predicate:
    return lambda el: tag in el["tags"]


# Every combination of three constant predicates
TRUTH_TABLE = list(itertools.product([True, False], repeat=3))


# ---------------------------------------------------------------------------
# Factory shapes
# ---------------------------------------------------------------------------

class TestFactories:
    def test_filter_shape(self) -> None:
        p = _const(True)
        node = filter_(p)
        assert isinstance(node, FilterNode)
        assert (node.chain_op, node.negated, node.children) == (
            ChainOperator.INTERSECTION, False, (p,)
        )

    def test_and_shape(self) -> None:
        a, b = _const(True), _const(False)
        node = and_(a, b)
        assert (node.chain_op, node.negated, node.children) == (
            ChainOperator.INTERSECTION, False, (a, b)
        )

    def test_or_shape(self) -> None:
        a, b = _const(True), _const(False)
        node = or_(a, b)
        assert (node.chain_op, node.negated, node.children) == (
            ChainOperator.UNION, False, (a, b)
        )

    def test_not_shape(self) -> None:
        a = _const(True)
        node = not_(a)
        assert (node.chain_op, node.negated, node.children) == (
            ChainOperator.INTERSECTION, True, (a,)
        )

    def test_filter_requires_one_argument(self) -> None:
        with pytest.raises(TypeError):
            filter_()  # type: ignore[call-arg]
        with pytest.raises(TypeError):
            filter_(_const(True), _const(False))  # type: ignore[call-arg]

    def test_not_requires_one_argument(self) -> None:
        with pytest.raises(TypeError):
            not_()  # type: ignore[call-arg]

    def test_each_call_builds_fresh_node(self) -> None:
        assert and_() is not and_()


# ---------------------------------------------------------------------------
# Boolean laws
# ---------------------------------------------------------------------------

class TestLaws:
    @pytest.mark.parametrize("value", [True, False])
    def test_filter_is_transparent(self, value: bool) -> None:
        p = _const(value)
        assert filter_(p).apply("x") is p("x")

    @pytest.mark.parametrize("value", [True, False])
    def test_double_negation(self, value: bool) -> None:
        f = filter_(_const(value))
        assert not_(f).apply("x") is (not f.apply("x"))
        assert not_(not_(f)).apply("x") is f.apply("x")

    @pytest.mark.parametrize("element", [None, 0, "", object(), {"tags": []}])
    def test_identities(self, element: Any) -> None:
        assert and_().apply(element) is True
        assert or_().apply(element) is False
        assert identity.apply(element) is True

    @pytest.mark.parametrize("a,b,c", TRUTH_TABLE)
    def test_and_or_match_python_operators(self, a: bool, b: bool, c: bool) -> None:
        fa, fb, fc = _const(a), _const(b), _const(c)
        assert and_(fa, fb).apply(None) is (a and b)
        assert or_(fa, fb).apply(None) is (a or b)
        assert and_(fa, fb, fc).apply(None) is (a and b and c)
        assert or_(fc, fb, fa).apply(None) is (a or b or c)

    @pytest.mark.parametrize("a,b,c", TRUTH_TABLE)
    def test_de_morgan(self, a: bool, b: bool, c: bool) -> None:
        fa, fb = _const(a), _const(b)
        assert not_(and_(fa, fb)).apply(None) is or_(not_(fa), not_(fb)).apply(None)
        assert not_(or_(fa, fb)).apply(None) is and_(not_(fa), not_(fb)).apply(None)

    @pytest.mark.parametrize("a,b,c", TRUTH_TABLE)
    def test_nesting(self, a: bool, b: bool, c: bool) -> None:
        f1, f2, f3 = _const(a), _const(b), _const(c)
        tree = and_(f1, or_(f2, not_(f3)))
        assert tree.apply(None) is (a and (b or not c))

    def test_composites_nest_as_children(self) -> None:
        inner = or_(_const(False), _const(True))
        assert and_(inner, filter_(inner), not_(not_(inner))).apply(None)


# ---------------------------------------------------------------------------
# Tag scenario
# ---------------------------------------------------------------------------

class TestTagScenario:
    def test_and_both_tags(self) -> None:
        f = and_(has_tag("foo"), has_tag("bar"))
        assert f.apply({"tags": ["foo", "bar"]}) is True
        assert f.apply({"tags": ["foo"]}) is False

    def test_or_neither_tag(self) -> None:
        assert or_(has_tag("foo"), has_tag("bar")).apply({"tags": ["baz"]}) is False

    def test_and_not(self) -> None:
        f = and_(has_tag("foo"), not_(has_tag("bar")))
        assert f.apply({"tags": ["foo", "bar"]}) is False
        assert f.apply({"tags": ["foo"]}) is True

    def test_select_subset(self, tagged_elements: list[dict[str, Any]]) -> None:
        tree = or_(has_tag("bar"), has_tag("baz"))
        kept = [el["id"] for el in tagged_elements if tree.apply(el)]
        assert kept == [1, 3]
