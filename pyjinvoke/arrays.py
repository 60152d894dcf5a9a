"""
Typed array values and the copy/boxing helpers the packer relies on.
"""

from typing import Iterable, Sequence

from .types import (
    JType, ArrayJType, PrimitiveJType,
    BOOLEAN, CHAR, FLOAT, DOUBLE, VOID,
    primitive_to_wrapper, wrapper_to_primitive,
)
from .errors import ArgumentMismatchError


def default_value(component_type: JType):
    """The value a freshly allocated array slot holds."""
    if component_type == BOOLEAN:
        return False
    if component_type in (FLOAT, DOUBLE):
        return 0.0
    if component_type == CHAR:
        return "\0"
    if isinstance(component_type, PrimitiveJType):
        return 0
    return None


class JArray(Sequence):
    """A fixed-length array with a declared component type."""

    __slots__ = ("component_type", "_items")

    def __init__(self, component_type: JType, items: Iterable = ()):
        if component_type == VOID:
            raise ValueError("Cannot create an array of void")
        self.component_type = component_type
        self._items = list(items)

    @classmethod
    def of(cls, component_type: JType, *items) -> "JArray":
        return cls(component_type, items)

    @property
    def jtype(self) -> ArrayJType:
        return ArrayJType(self.component_type)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return JArray(self.component_type, self._items[index])
        return self._items[index]

    def __setitem__(self, index: int, value):
        self._items[index] = value

    def __eq__(self, other) -> bool:
        if not isinstance(other, JArray):
            return NotImplemented
        return self.component_type == other.component_type and self._items == other._items

    __hash__ = None

    def __repr__(self) -> str:
        return f"JArray({self.component_type}, {self._items!r})"


def new_array(component_type: JType, length: int) -> JArray:
    """Allocate an array filled with the component type's default value."""
    if length < 0:
        raise ValueError(f"Negative array size: {length}")
    return JArray(component_type, [default_value(component_type)] * length)


def arraycopy(src: Sequence, src_pos: int, dest: JArray, dest_pos: int, length: int) -> JArray:
    """Copy length elements from src into dest, like System.arraycopy."""
    if length < 0 or src_pos < 0 or dest_pos < 0:
        raise IndexError(f"arraycopy: negative index or length ({src_pos}, {dest_pos}, {length})")
    if src_pos + length > len(src) or dest_pos + length > len(dest):
        raise IndexError(
            f"arraycopy: last source index {src_pos + length} out of bounds for length {len(src)}"
            if src_pos + length > len(src)
            else f"arraycopy: last destination index {dest_pos + length} out of bounds for length {len(dest)}"
        )
    for i in range(length):
        dest[dest_pos + i] = src[src_pos + i]
    return dest


def to_primitive(array: JArray) -> JArray:
    """Convert a wrapper-typed array (Integer[]) to its primitive form (int[])."""
    primitive = wrapper_to_primitive(array.component_type)
    if primitive is None:
        if isinstance(array.component_type, PrimitiveJType):
            return array
        raise ArgumentMismatchError(f"Not a wrapper array: {array.jtype}")
    for index, item in enumerate(array):
        if item is None:
            raise ArgumentMismatchError(
                f"Cannot unbox null element {index} into {primitive}[]"
            )
    return JArray(primitive, (widen(item, primitive) for item in array))


def to_boxed(array: JArray) -> JArray:
    """Convert a primitive array (int[]) to its wrapper form (Integer[])."""
    return JArray(primitive_to_wrapper(array.component_type), array)


def widen(value, target: JType):
    """Python int to float for float/double targets; bool never widens."""
    if target in (FLOAT, DOUBLE) and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    return value
