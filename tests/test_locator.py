"""Tests for locating accessible forms of members."""

import pytest

from pyjinvoke.locator import AccessibleMemberLocator
from pyjinvoke.registry import ClassRegistry
from pyjinvoke.types import ClassJType, STRING


HIDDEN = ClassJType("demo.Hidden")
NAMED = ClassJType("demo.Named")
OVERLOADS = ClassJType("demo.Overloads")


@pytest.fixture
def locator(registry):
    return AccessibleMemberLocator(registry)


@pytest.fixture
def layered():
    """A package-private class reachable only through its public ancestor."""
    registry = ClassRegistry()
    registry.declare_class("public class demo.PublicBase")
    registry.declare_method("demo.PublicBase", "public String label()")
    registry.declare_class("class demo.Middle extends PublicBase")
    registry.declare_class("class demo.Impl extends Middle")
    registry.declare_method("demo.Impl", "public String label()")
    registry.declare_class("interface demo.Internal")
    registry.declare_method("demo.Internal", "String label()")
    registry.declare_class("class demo.Other implements Internal")
    registry.declare_method("demo.Other", "public String label()")
    return registry


class TestFindAccessibleMember:
    def test_public_class_returns_member(self, registry, locator):
        f = registry.get_declared_member(OVERLOADS, "f", (STRING,))
        assert locator.find_accessible_member(OVERLOADS, f) is f

    def test_none_member(self, locator):
        assert locator.find_accessible_member(OVERLOADS, None) is None

    def test_non_public_member(self, registry, locator):
        hidden = registry.get_declared_member(OVERLOADS, "hidden", (STRING,))
        assert locator.find_accessible_member(OVERLOADS, hidden) is None

    def test_through_public_interface(self, registry, locator):
        name = registry.get_declared_member(HIDDEN, "name", ())
        found = locator.find_accessible_member(HIDDEN, name)
        assert found.declaring_class == NAMED
        assert (found.name, found.param_types) == (name.name, name.param_types)

    def test_no_accessible_form(self, registry, locator):
        secret = registry.get_declared_member(HIDDEN, "secret", ())
        assert locator.find_accessible_member(HIDDEN, secret) is None

    def test_through_first_public_ancestor(self, layered):
        locator = AccessibleMemberLocator(layered)
        impl = ClassJType("demo.Impl")
        label = layered.get_declared_member(impl, "label", ())
        found = locator.find_accessible_member(impl, label)
        assert found.declaring_class == ClassJType("demo.PublicBase")

    def test_non_public_interface_skipped(self, layered):
        locator = AccessibleMemberLocator(layered)
        other = ClassJType("demo.Other")
        label = layered.get_declared_member(other, "label", ())
        assert locator.find_accessible_member(other, label) is None


class TestBySignature:
    def test_exact_signature(self, locator):
        found = locator.find_accessible_member_by_signature(OVERLOADS, "f", (STRING,))
        assert found.param_types == (STRING,)

    def test_inherited_signature(self, locator):
        found = locator.find_accessible_member_by_signature(ClassJType("demo.Child"), "marked")
        assert found.declaring_class == OVERLOADS

    def test_missing_signature(self, locator):
        assert locator.find_accessible_member_by_signature(OVERLOADS, "f", ()) is None
        assert locator.get_member_object(None, "f") is None
        assert locator.get_member_object(OVERLOADS, None) is None


class TestInterfaceNest:
    @pytest.fixture
    def nested(self):
        registry = ClassRegistry()
        registry.declare_class("public interface demo.Base2")
        registry.declare_method("demo.Base2", "String label()")
        registry.declare_class("public interface demo.Sub extends Base2")
        registry.declare_class("class demo.Direct implements Sub")
        registry.declare_method("demo.Direct", "public String label()")
        registry.declare_class("class demo.Parent implements Sub")
        registry.declare_method("demo.Parent", "public String label()")
        registry.declare_class("class demo.Descendant extends Parent")
        registry.declare_method("demo.Descendant", "public String label()")
        return registry

    def test_superinterface_searched(self, nested):
        locator = AccessibleMemberLocator(nested)
        direct = ClassJType("demo.Direct")
        label = nested.get_declared_member(direct, "label", ())
        found = locator.find_accessible_member(direct, label)
        assert found.declaring_class == ClassJType("demo.Base2")

    def test_interface_of_superclass_searched(self, nested):
        locator = AccessibleMemberLocator(nested)
        descendant = ClassJType("demo.Descendant")
        label = nested.get_declared_member(descendant, "label", ())
        found = locator.find_accessible_member(descendant, label)
        assert found.declaring_class == ClassJType("demo.Base2")

    def test_interface_cycle_terminates(self):
        registry = ClassRegistry()
        registry.declare_class("public interface demo.A extends B")
        registry.declare_class("public interface demo.B extends A")
        registry.declare_class("class demo.Cyclic implements A")
        registry.declare_method("demo.Cyclic", "public void run()")
        locator = AccessibleMemberLocator(registry)
        cyclic = ClassJType("demo.Cyclic")
        run = registry.get_declared_member(cyclic, "run", ())
        assert locator.find_accessible_member(cyclic, run) is None


class TestPublicAncestor:
    @pytest.fixture
    def shadowed(self):
        """A public class that inherits its member from a package-private one."""
        registry = ClassRegistry()
        registry.declare_class("class demo.G")
        registry.declare_method("demo.G", "public String m()")
        registry.declare_class("public class demo.P extends G")
        registry.declare_class("class demo.Leaf extends P")
        registry.declare_method("demo.Leaf", "public String m()")
        return registry

    def test_member_inherited_from_non_public_class_rejected(self, shadowed):
        locator = AccessibleMemberLocator(shadowed)
        leaf = ClassJType("demo.Leaf")
        m = shadowed.get_declared_member(leaf, "m", ())
        assert locator.find_accessible_member(leaf, m) is None

    def test_located_member_always_on_public_class(self, shadowed):
        locator = AccessibleMemberLocator(shadowed)
        found = locator.find_accessible_member_by_signature(ClassJType("demo.Leaf"), "m")
        assert found is None or shadowed.is_public(found.declaring_class)
