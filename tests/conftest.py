"""Shared fixtures: a registry populated with a small demo class hierarchy."""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from pyjinvoke import ClassRegistry, MethodInvoker, ClassJType, member


OVERLOADS = ClassJType("demo.Overloads")
CHILD = ClassJType("demo.Child")
HIDDEN = ClassJType("demo.Hidden")
NAMED = ClassJType("demo.Named")
MARKER = ClassJType("demo.Marker")


def build_registry():
    registry = ClassRegistry()

    registry.declare_class("public @interface demo.Marker")

    registry.declare_class("public interface demo.Named")
    registry.declare_method(NAMED, "String name()")

    @registry.define("class demo.Hidden implements Named")
    class Hidden:
        @member("public String name()")
        def name(self):
            return "hidden"

        @member("public String secret()")
        def secret(self):
            return "secret"

    @registry.define("public class demo.Overloads")
    class Overloads:
        @member("public String f(Object o)")
        def f_object(self, o):
            return "object"

        @member("public String f(String s)")
        def f_string(self, s):
            return "string"

        @member("public static String h(int n, String... rest)")
        @staticmethod
        def h(n, rest):
            return f"{n}:{','.join(rest)}"

        @member("public static String join(String sep, String... parts)")
        @staticmethod
        def join(sep, parts):
            return sep.join(parts)

        @member("public static int sum(int... values)")
        @staticmethod
        def sum(values):
            return sum(values)

        @member("public static double half(double d)")
        @staticmethod
        def half(d):
            return d / 2

        @member("public static String kinds(double... values)")
        @staticmethod
        def kinds(values):
            return ",".join(type(v).__name__ for v in values)

        @member("private String bundle(String... parts)")
        def bundle(self, parts):
            return "+".join(parts)

        @member("public String total(Object... values)")
        def total(self, values):
            return str(len(values))

        @member("private String hidden(String s)")
        def hidden(self, s):
            return "private " + s

        @member("public void fail(String message)")
        def fail(self, message):
            raise ValueError(message)

        @member("@Marker public String marked()")
        def marked(self):
            return "marked"

        @member("@Marker private void secretMarked()")
        def secret_marked(self):
            pass

    @registry.define("public class demo.Child extends Overloads")
    class Child(Overloads):
        @member("public String f(String s)")
        def f_string(self, s):
            return "child string"

        @member("@Marker public String childMarked()")
        def child_marked(self):
            return "child marked"

    registry.declare_class("public interface demo.Greeting")
    registry.declare_method("demo.Greeting", "default String greet()",
                            lambda self: "hello from default")

    @registry.define("public class demo.Polite implements Greeting")
    class Polite:
        pass

    registry.declare_class("public interface demo.Unfinished")
    registry.declare_method("demo.Unfinished", "String todo()")

    @registry.define("public class demo.Lazy implements Unfinished")
    class Lazy:
        pass

    @registry.define("public class demo.Ambiguous")
    class Ambiguous:
        @member("private String m(Integer a, Object b)")
        def m_left(self, a, b):
            return "left"

        @member("private String m(Object a, Integer b)")
        def m_right(self, a, b):
            return "right"

    return registry, {
        "Hidden": Hidden,
        "Overloads": Overloads,
        "Child": Child,
        "Polite": Polite,
        "Lazy": Lazy,
        "Ambiguous": Ambiguous,
    }


@pytest.fixture
def demo():
    return build_registry()


@pytest.fixture
def registry(demo):
    return demo[0]


@pytest.fixture
def classes(demo):
    return demo[1]


@pytest.fixture
def invoker(registry):
    return MethodInvoker(registry)
