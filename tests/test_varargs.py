"""Tests for packing variadic arguments."""

import pytest

from pyjinvoke.varargs import pack_varargs, to_varargs
from pyjinvoke.arrays import JArray
from pyjinvoke.types import ClassJType, ArrayJType, INT, DOUBLE, OBJECT, STRING
from pyjinvoke.errors import ArgumentMismatchError


H_PARAMS = (INT, ArrayJType(STRING))


class TestPackVarargs:
    def test_trailing_arguments_packed(self):
        assert pack_varargs([1, "a", "b"], H_PARAMS) == [1, JArray.of(STRING, "a", "b")]

    def test_no_trailing_arguments(self):
        packed = pack_varargs([1], H_PARAMS)
        assert packed == [1, JArray(STRING)]
        assert len(packed[1]) == 0

    def test_single_trailing_argument(self):
        assert pack_varargs([1, "a"], H_PARAMS) == [1, JArray.of(STRING, "a")]

    def test_array_passed_through(self):
        names = JArray.of(STRING, "a")
        packed = pack_varargs([1, names], H_PARAMS)
        assert packed[1] is names

    def test_null_passed_through(self):
        assert pack_varargs([1, None], H_PARAMS) == [1, None]

    def test_array_of_other_type_is_wrapped(self):
        names = JArray.of(STRING, "a")
        packed = pack_varargs([names], (ArrayJType(OBJECT),))
        assert packed == [JArray.of(OBJECT, names)]

    def test_primitive_component_unboxed(self):
        packed = pack_varargs([1, 2, 3], (ArrayJType(INT),))
        assert packed == [JArray.of(INT, 1, 2, 3)]

    def test_floating_component_widens_ints(self):
        packed = pack_varargs([2, 1.5], (ArrayJType(DOUBLE),))
        assert packed == [JArray.of(DOUBLE, 2.0, 1.5)]
        assert [type(v) for v in packed[0]] == [float, float]

    def test_null_into_primitive_component(self):
        with pytest.raises(ArgumentMismatchError):
            pack_varargs([1, None, 3], (ArrayJType(INT),))

    def test_too_few_arguments(self):
        with pytest.raises(ValueError):
            pack_varargs([], (INT, STRING, ArrayJType(STRING)))


class TestToVarargs:
    def test_only_variadic_members_packed(self, registry):
        overloads = ClassJType("demo.Overloads")
        h = registry.get_member(overloads, "h", H_PARAMS)
        f = registry.get_member(overloads, "f", (STRING,))
        assert to_varargs(h, (1, "a")) == [1, JArray.of(STRING, "a")]
        assert to_varargs(f, ("a",)) == ["a"]
