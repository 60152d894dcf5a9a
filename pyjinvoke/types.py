"""
JVM type model used by the resolution engine.
"""

from dataclasses import dataclass
from typing import Optional
from abc import ABC, abstractmethod


class JType(ABC):
    """Base class for all Java types."""

    @abstractmethod
    def descriptor(self) -> str:
        """Return the JVM type descriptor."""
        pass

    @abstractmethod
    def internal_name(self) -> str:
        """Return the JVM internal name (for class types)."""
        pass

    @abstractmethod
    def java_name(self) -> str:
        """Return the binary name, as Class.getName() spells it."""
        pass

    def type_name(self) -> str:
        """Return the source-style name, as Class.getTypeName() spells it."""
        return self.java_name()

    @property
    @abstractmethod
    def is_primitive(self) -> bool:
        pass

    @property
    @abstractmethod
    def is_reference(self) -> bool:
        pass

    @property
    def is_array(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.type_name()


@dataclass(frozen=True)
class PrimitiveJType(JType):
    """Primitive Java types."""
    name: str
    _descriptor: str

    def descriptor(self) -> str:
        return self._descriptor

    def internal_name(self) -> str:
        return self.name

    def java_name(self) -> str:
        return self.name

    @property
    def is_primitive(self) -> bool:
        return True

    @property
    def is_reference(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.name


VOID = PrimitiveJType("void", "V")
BOOLEAN = PrimitiveJType("boolean", "Z")
BYTE = PrimitiveJType("byte", "B")
CHAR = PrimitiveJType("char", "C")
SHORT = PrimitiveJType("short", "S")
INT = PrimitiveJType("int", "I")
LONG = PrimitiveJType("long", "J")
FLOAT = PrimitiveJType("float", "F")
DOUBLE = PrimitiveJType("double", "D")

PRIMITIVE_TYPES = {
    "void": VOID,
    "boolean": BOOLEAN,
    "byte": BYTE,
    "char": CHAR,
    "short": SHORT,
    "int": INT,
    "long": LONG,
    "float": FLOAT,
    "double": DOUBLE,
}

PRIMITIVE_BY_DESCRIPTOR = {t.descriptor(): t for t in PRIMITIVE_TYPES.values()}


@dataclass(frozen=True)
class ClassJType(JType):
    """Class or interface type."""
    name: str  # Binary name: java.lang.String, java.util.Map$Entry

    def __post_init__(self):
        # Accept internal names too so that equal classes compare equal
        object.__setattr__(self, "name", self.name.replace("/", "."))

    def descriptor(self) -> str:
        return f"L{self.internal_name()};"

    def internal_name(self) -> str:
        return self.name.replace(".", "/")

    def java_name(self) -> str:
        return self.name

    def type_name(self) -> str:
        return self.name

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]

    @property
    def package(self) -> str:
        return self.name.rsplit(".", 1)[0] if "." in self.name else ""

    @property
    def is_primitive(self) -> bool:
        return False

    @property
    def is_reference(self) -> bool:
        return True


@dataclass(frozen=True)
class ArrayJType(JType):
    """Array type."""
    element_type: JType
    dimensions: int = 1

    def __post_init__(self):
        if self.dimensions < 1:
            raise ValueError(f"Array dimensions must be positive: {self.dimensions}")
        # ArrayJType(ArrayJType(INT)) and ArrayJType(INT, 2) are the same type
        if isinstance(self.element_type, ArrayJType):
            inner = self.element_type
            object.__setattr__(self, "element_type", inner.element_type)
            object.__setattr__(self, "dimensions", self.dimensions + inner.dimensions)

    @property
    def component_type(self) -> JType:
        """The type one dimension down: int[][] -> int[], int[] -> int."""
        if self.dimensions == 1:
            return self.element_type
        return ArrayJType(self.element_type, self.dimensions - 1)

    def descriptor(self) -> str:
        return "[" * self.dimensions + self.element_type.descriptor()

    def internal_name(self) -> str:
        return self.descriptor()

    def java_name(self) -> str:
        if isinstance(self.element_type, PrimitiveJType):
            return self.descriptor()
        return "[" * self.dimensions + f"L{self.element_type.java_name()};"

    def type_name(self) -> str:
        return self.element_type.type_name() + "[]" * self.dimensions

    @property
    def is_primitive(self) -> bool:
        return False

    @property
    def is_reference(self) -> bool:
        return True

    @property
    def is_array(self) -> bool:
        return True


OBJECT = ClassJType("java.lang.Object")
STRING = ClassJType("java.lang.String")
NUMBER = ClassJType("java.lang.Number")
CLONEABLE = ClassJType("java.lang.Cloneable")
SERIALIZABLE = ClassJType("java.io.Serializable")

BOOLEAN_WRAPPER = ClassJType("java.lang.Boolean")
BYTE_WRAPPER = ClassJType("java.lang.Byte")
CHAR_WRAPPER = ClassJType("java.lang.Character")
SHORT_WRAPPER = ClassJType("java.lang.Short")
INT_WRAPPER = ClassJType("java.lang.Integer")
LONG_WRAPPER = ClassJType("java.lang.Long")
FLOAT_WRAPPER = ClassJType("java.lang.Float")
DOUBLE_WRAPPER = ClassJType("java.lang.Double")
VOID_WRAPPER = ClassJType("java.lang.Void")

# Autoboxing/unboxing mappings: primitive -> wrapper class
BOXING_MAP = {
    BOOLEAN: BOOLEAN_WRAPPER,
    BYTE: BYTE_WRAPPER,
    CHAR: CHAR_WRAPPER,
    SHORT: SHORT_WRAPPER,
    INT: INT_WRAPPER,
    LONG: LONG_WRAPPER,
    FLOAT: FLOAT_WRAPPER,
    DOUBLE: DOUBLE_WRAPPER,
    VOID: VOID_WRAPPER,
}

# Reverse mapping: wrapper class -> primitive (void has no unboxed form)
UNBOXING_MAP = {v: k for k, v in BOXING_MAP.items() if k != VOID}

# Primitive widening conversions, JLS 5.1.2
WIDENING = {
    BYTE: frozenset({SHORT, INT, LONG, FLOAT, DOUBLE}),
    SHORT: frozenset({INT, LONG, FLOAT, DOUBLE}),
    CHAR: frozenset({INT, LONG, FLOAT, DOUBLE}),
    INT: frozenset({LONG, FLOAT, DOUBLE}),
    LONG: frozenset({FLOAT, DOUBLE}),
    FLOAT: frozenset({DOUBLE}),
}


def primitive_to_wrapper(t: JType) -> JType:
    """Box a primitive type; reference types are returned unchanged."""
    if isinstance(t, PrimitiveJType):
        return BOXING_MAP[t]
    return t


def wrapper_to_primitive(t: JType) -> Optional[PrimitiveJType]:
    """Unbox a wrapper class, or None if t is not a wrapper."""
    return UNBOXING_MAP.get(t)


def is_primitive_or_wrapper(t: Optional[JType]) -> bool:
    if t is None:
        return False
    return t.is_primitive or t in UNBOXING_MAP


def is_widening(from_type: JType, to_type: JType) -> bool:
    """Check if from_type widens to to_type without boxing."""
    return to_type in WIDENING.get(from_type, frozenset())
