"""
Core java.lang model every registry starts from.
"""

from .arrays import JArray


JAVA_LANG_CLASSES = {
    "Object", "String", "Class", "System", "Thread", "Throwable",
    "Exception", "RuntimeException", "Error",
    "Math", "StrictMath", "Number",
    "Byte", "Short", "Integer", "Long", "Float", "Double", "Character", "Boolean",
    "StringBuilder", "StringBuffer", "CharSequence",
    "Comparable", "Cloneable", "Runnable", "Iterable", "AutoCloseable",
    "Enum", "Void",
    # Annotations
    "Deprecated", "Override", "SuppressWarnings", "SafeVarargs", "FunctionalInterface",
}


def java_string(value) -> str:
    """String.valueOf for the Python values that stand in for Java ones."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, JArray):
        return "[" + ", ".join(java_string(item) for item in value) + "]"
    return str(value)


def _format(fmt, args):
    return fmt % tuple(args)


# (class declaration, ((member declaration, handle), ...))
CORE_CLASSES = (
    ("public class java.lang.Object", (
        ("public boolean equals(Object obj)", lambda self, other: self == other),
        ("public int hashCode()", lambda self: hash(self)),
        ("public String toString()", java_string),
    )),
    ("public interface java.io.Serializable", ()),
    ("public interface java.lang.Cloneable", ()),
    ("public interface java.lang.Comparable", ()),
    ("public interface java.lang.CharSequence", (
        ("int length()", None),
    )),
    ("public final class java.lang.String implements java.io.Serializable, Comparable, CharSequence", (
        ("public int length()", len),
        ("public boolean isEmpty()", lambda self: len(self) == 0),
        ("public String concat(String str)", lambda self, other: self + other),
        ("public String toString()", lambda self: self),
        ("public static String valueOf(Object obj)", java_string),
        ("public static String valueOf(int i)", java_string),
        ("public static String valueOf(boolean b)", java_string),
        ("public static String format(String format, Object... args)", _format),
    )),
    ("public abstract class java.lang.Number implements java.io.Serializable", (
        ("public abstract int intValue()", None),
        ("public abstract double doubleValue()", None),
    )),
    ("public final class java.lang.Integer extends Number implements Comparable", (
        ("public int intValue()", int),
        ("public double doubleValue()", float),
        ("public static Integer valueOf(int i)", int),
        ("public static int parseInt(String s)", int),
    )),
    ("public final class java.lang.Long extends Number implements Comparable", (
        ("public int intValue()", int),
        ("public double doubleValue()", float),
    )),
    ("public final class java.lang.Short extends Number implements Comparable", ()),
    ("public final class java.lang.Byte extends Number implements Comparable", ()),
    ("public final class java.lang.Float extends Number implements Comparable", ()),
    ("public final class java.lang.Double extends Number implements Comparable", (
        ("public int intValue()", int),
        ("public double doubleValue()", float),
        ("public static double parseDouble(String s)", float),
    )),
    ("public final class java.lang.Boolean implements java.io.Serializable, Comparable", (
        ("public static boolean parseBoolean(String s)", lambda s: s is not None and s.lower() == "true"),
    )),
    ("public final class java.lang.Character implements java.io.Serializable, Comparable", ()),
    ("public final class java.lang.Void", ()),
    ("public @interface java.lang.Deprecated", ()),
    ("public @interface java.lang.Override", ()),
    ("public @interface java.lang.SafeVarargs", ()),
)


def install_java_lang(registry):
    """Declare the core classes on a registry."""
    for class_decl, members in CORE_CLASSES:
        info = registry.declare_class(class_decl)
        for member_decl, handle in members:
            registry.declare_method(info.type, member_decl, handle)
