"""Tests for overload resolution."""

import pytest

from pyjinvoke.resolver import (
    OverloadResolver, get_all_superclasses_and_interfaces, get_all_interfaces,
)
from pyjinvoke.registry import ClassRegistry
from pyjinvoke.types import (
    ClassJType, ArrayJType, INT, OBJECT, NUMBER, STRING, BOOLEAN_WRAPPER, INT_WRAPPER,
)
from pyjinvoke.errors import AmbiguousMemberError


OVERLOADS = ClassJType("demo.Overloads")
CHILD = ClassJType("demo.Child")
HIDDEN = ClassJType("demo.Hidden")


@pytest.fixture
def resolver(registry):
    return OverloadResolver(registry)


def make_registry(declarations):
    registry = ClassRegistry()
    registry.declare_class("public class demo.C")
    for decl in declarations:
        registry.declare_method("demo.C", decl)
    return registry


class TestFindBestMatch:
    def test_exact_match(self, resolver):
        found = resolver.find_best_match(OVERLOADS, "f", (STRING,))
        assert found.param_types == (STRING,)

    def test_subclass_argument(self, resolver):
        found = resolver.find_best_match(OVERLOADS, "f", (INT_WRAPPER,))
        assert found.param_types == (OBJECT,)

    def test_override_is_most_derived(self, resolver):
        found = resolver.find_best_match(CHILD, "f", (STRING,))
        assert found.declaring_class == CHILD

    def test_no_candidates(self, resolver):
        assert resolver.find_best_match(OVERLOADS, "nothing", ()) is None
        assert resolver.find_best_match(OVERLOADS, "f", (STRING, STRING)) is None

    def test_private_members_ignored(self, resolver):
        assert resolver.find_best_match(OVERLOADS, "hidden", (STRING,)) is None

    def test_boxing_preferred_over_subclass(self):
        registry = ClassRegistry()
        found = OverloadResolver(registry).find_best_match(
            STRING, "valueOf", (BOOLEAN_WRAPPER,))
        assert str(found) == "public static java.lang.String java.lang.String.valueOf(boolean)"

    def test_exact_match_through_interface(self, resolver):
        found = resolver.find_best_match(HIDDEN, "name", ())
        assert found.declaring_class == ClassJType("demo.Named")

    def test_exact_match_without_accessible_form(self, resolver):
        assert resolver.find_best_match(HIDDEN, "secret", ()) is None

    def test_null_ties_broken_by_signature(self, resolver):
        found = resolver.find_best_match(OVERLOADS, "f", (None,))
        assert found.param_types == (OBJECT,)

    def test_deterministic_across_declaration_order(self):
        decls = ["public void g(Object a, String b)", "public void g(String a, Object b)"]
        first = OverloadResolver(make_registry(decls)).find_best_match(
            ClassJType("demo.C"), "g", (STRING, STRING))
        second = OverloadResolver(make_registry(list(reversed(decls)))).find_best_match(
            ClassJType("demo.C"), "g", (STRING, STRING))
        assert first == second
        assert first.param_types == (OBJECT, STRING)


class TestVarargs:
    def test_variadic_candidate(self, resolver):
        found = resolver.find_best_match(OVERLOADS, "h", (INT_WRAPPER, STRING, STRING))
        assert found.name == "h"
        assert found.is_varargs

    def test_direct_form_wins_tie(self):
        registry = make_registry([
            "public void v(Comparable... a)",
            "public void v(Object a)",
        ])
        found = OverloadResolver(registry).find_best_match(ClassJType("demo.C"), "v", (STRING,))
        assert found.param_types == (OBJECT,)

    def test_array_argument(self, resolver):
        found = resolver.find_best_match(OVERLOADS, "h", (INT, ArrayJType(STRING)))
        assert found.param_types == (INT, ArrayJType(STRING))

    def test_primitive_component(self, resolver):
        found = resolver.find_best_match(OVERLOADS, "sum", (INT_WRAPPER, INT_WRAPPER))
        assert found.name == "sum"

    def test_component_matching_superclass_accepted(self, resolver):
        found = resolver.find_best_match(OVERLOADS, "total", (STRING, STRING))
        assert found.name == "total"

    def test_component_two_levels_up_rejected(self, resolver):
        # Integer's immediate superclass is Number, not Object
        assert resolver.find_best_match(OVERLOADS, "total", (INT_WRAPPER,)) is None

    def test_unknown_last_argument_accepted(self, resolver):
        found = resolver.find_best_match(OVERLOADS, "total", (INT_WRAPPER, None))
        assert found.name == "total"


class TestFindMatchingMember:
    def test_private_member(self, resolver):
        found = resolver.find_matching_member(OVERLOADS, "hidden", (STRING,))
        assert found.name == "hidden"

    def test_inherited_private_member(self, resolver):
        found = resolver.find_matching_member(CHILD, "hidden", (STRING,))
        assert found.declaring_class == OVERLOADS

    def test_lowest_distance(self, resolver):
        found = resolver.find_matching_member(CHILD, "f", (STRING,))
        assert found.declaring_class == CHILD
        found = resolver.find_matching_member(CHILD, "f", (INT_WRAPPER,))
        assert found.param_types == (OBJECT,)

    def test_no_match(self, resolver):
        assert resolver.find_matching_member(OVERLOADS, "hidden", (INT_WRAPPER,)) is None

    def test_ambiguous(self, resolver):
        with pytest.raises(AmbiguousMemberError):
            resolver.find_matching_member(
                ClassJType("demo.Ambiguous"), "m", (INT_WRAPPER, INT_WRAPPER))

    def test_exact_wins_over_ambiguity(self, resolver):
        found = resolver.find_matching_member(
            ClassJType("demo.Ambiguous"), "m", (INT_WRAPPER, OBJECT))
        assert found.param_types == (INT_WRAPPER, OBJECT)


class TestHierarchy:
    @pytest.fixture
    def hierarchy(self):
        registry = ClassRegistry()
        registry.declare_class("public interface demo.I3")
        registry.declare_class("public interface demo.I1 extends I3")
        registry.declare_class("public interface demo.I2")
        registry.declare_class("public class demo.Mid implements I2")
        registry.declare_class("public class demo.Leaf extends Mid implements I1")
        return registry

    def test_all_interfaces(self, hierarchy):
        names = [t.simple_name for t in get_all_interfaces(hierarchy, ClassJType("demo.Leaf"))]
        assert names == ["I1", "I3", "I2"]

    def test_interleaved(self, hierarchy):
        result = get_all_superclasses_and_interfaces(hierarchy, ClassJType("demo.Leaf"))
        assert [t.simple_name for t in result] == ["I1", "Mid", "I3", "Object", "I2"]

    def test_none(self, hierarchy):
        assert get_all_superclasses_and_interfaces(hierarchy, None) == []


class NumberBoxing(ClassRegistry):
    """Treats Number as the boxed form of Object."""

    def boxed_equivalent(self, t):
        if t == OBJECT:
            return NUMBER
        return super().boxed_equivalent(t)


class TestProviderBoxing:
    def total_for_integer(self, registry):
        registry.declare_class("public class demo.C")
        registry.declare_method("demo.C", "public String total(Object... values)")
        return OverloadResolver(registry).find_best_match(
            ClassJType("demo.C"), "total", (INT_WRAPPER,))

    def test_default_boxing_vetoes(self):
        assert self.total_for_integer(ClassRegistry()) is None

    def test_veto_uses_provider_boxing(self):
        found = self.total_for_integer(NumberBoxing())
        assert found.name == "total"
