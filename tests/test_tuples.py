"""Tests for the Tuple value type and the TupleSupplier protocol."""

from __future__ import annotations

import pytest

from tuplespace import (
    EMPTY,
    Combinator,
    FunctionSupplier,
    PositionOutOfRangeError,
    RelationFilter,
    Tuple,
    TupleSupplier,
    realize,
    t,
)
from tuplespace.core.protocol import SupplierMixin
from tuplespace.core.tuples import as_tuple


# ============================================================
# Tuple
# ============================================================


class TestTuple:
    """Tests for the Tuple class."""

    def test_basic_creation(self):
        row = t("a", "b", 1)
        assert row.values == ("a", "b", 1)
        assert len(row) == 3
        assert list(row) == ["a", "b", 1]

    def test_list_values_are_converted(self):
        row = Tuple(["a", "b"])
        assert row.values == ("a", "b")

    def test_equality_is_element_wise(self):
        assert t("a", 1) == t("a", 1)
        assert t("a", 1) != t(1, "a")
        assert t("a") != t("a", "a")

    def test_equality_is_type_aware(self):
        assert t(True) != t(1)
        assert t(1) != t(1.0)
        assert len({t(True), t(1)}) == 2

    def test_nan_equals_nan(self):
        nan = float("nan")
        assert t(nan) == t(nan)
        assert t(nan, 1) == t(float("nan"), 1)
        assert hash(t(nan)) == hash(t(float("nan")))
        assert len({t(nan), t(float("nan"))}) == 1
        assert t(nan) != t("nan")

    def test_hash(self):
        assert hash(t("a", 1)) == hash(t("a", 1))
        assert len({t("a", 1), t("a", 1)}) == 1

    def test_not_equal_to_plain_tuple(self):
        assert t("a", 1) != ("a", 1)

    def test_indexing_and_slicing(self):
        row = t("a", "b", "c")
        assert row[1] == "b"
        assert row[-1] == "c"
        assert row[:2] == t("a", "b")

    def test_concat(self):
        assert t("a") + t(1, 2) == t("a", 1, 2)
        assert t("a").concat(EMPTY) == t("a")

    def test_add_rejects_non_tuple(self):
        with pytest.raises(TypeError):
            t("a") + ("b",)

    def test_project(self):
        row = t("a", "b", 1, 2)
        assert row.project([0, 3]) == t("a", 2)
        assert row.project((3, 0)) == t(2, "a")
        assert row.project([]) == EMPTY

    def test_project_out_of_range(self):
        with pytest.raises(PositionOutOfRangeError) as exc_info:
            t("a", "b").project([0, 2])
        assert exc_info.value.position == 2
        assert exc_info.value.arity == 2

    def test_project_negative_position(self):
        with pytest.raises(PositionOutOfRangeError):
            t("a", "b").project([-1])

    def test_str(self):
        assert str(t("a", "b", 1, 2)) == "[a, b, 1, 2]"
        assert str(EMPTY) == "[]"

    def test_repr(self):
        assert repr(t("a", 1)) == "Tuple('a', 1)"

    def test_to_list(self):
        assert t("a", 1).to_list() == ["a", 1]

    def test_immutable(self):
        row = t("a")
        with pytest.raises(AttributeError):
            row.values = ("b",)

    def test_as_tuple(self):
        row = t("a")
        assert as_tuple(row) is row
        assert as_tuple(["a", 1]) == t("a", 1)


# ============================================================
# TupleSupplier protocol
# ============================================================


class Booleans:
    """A third-party supplier implementing only stream()."""

    def stream(self):
        yield t(True)
        yield t(False)


class TestTupleSupplier:
    """Tests for the supplier protocol and its adapters."""

    def test_engine_is_supplier(self):
        assert isinstance(Combinator(), TupleSupplier)

    def test_filter_is_supplier(self):
        suite = RelationFilter(Combinator().choose_one(1, 2), [0])
        assert isinstance(suite, TupleSupplier)

    def test_structural_supplier(self):
        assert isinstance(Booleans(), TupleSupplier)

    def test_mixin_requires_stream(self):
        class Incomplete(SupplierMixin):
            pass

        with pytest.raises(TypeError):
            Incomplete()

    def test_plain_values_are_not_suppliers(self):
        assert not isinstance("abc", TupleSupplier)
        assert not isinstance(t("a"), TupleSupplier)
        assert not isinstance(3, TupleSupplier)

    def test_realize(self):
        assert realize(Booleans()) == [[True], [False]]

    def test_array(self):
        engine = Combinator().choose_one("a", "b").choose_one(1)
        assert engine.array() == [["a", 1], ["b", 1]]

    def test_iteration_uses_stream(self):
        engine = Combinator().choose_one("a", "b")
        assert list(engine) == [t("a"), t("b")]


class TestFunctionSupplier:
    """Tests for FunctionSupplier."""

    def test_coerces_sequences(self):
        supplier = FunctionSupplier(lambda: [(1, 2), [3, 4], t(5, 6)])
        assert supplier.to_list() == [t(1, 2), t(3, 4), t(5, 6)]

    def test_factory_called_per_stream(self):
        calls = []

        def factory():
            calls.append(1)
            return [(1,)]

        supplier = FunctionSupplier(factory)
        supplier.to_list()
        supplier.to_list()
        assert len(calls) == 2

    def test_usable_in_pool(self):
        sizes = FunctionSupplier(lambda: [(w, h) for w in (1, 2) for h in (3, 4)])
        engine = Combinator().choose_one(sizes).choose_one("x")
        assert engine.to_list()[0] == t(1, 3, "x")
        assert engine.size() == 4
