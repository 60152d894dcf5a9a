"""
Type and member metadata, and the provider interface the engine reads it through.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntFlag
from typing import Any, Callable, Optional, Sequence, Union

from .types import (
    JType, PrimitiveJType, ClassJType, ArrayJType,
    OBJECT, CLONEABLE, SERIALIZABLE, VOID,
    primitive_to_wrapper, is_primitive_or_wrapper,
)


class AccessFlags(IntFlag):
    PUBLIC = 0x0001
    PRIVATE = 0x0002
    PROTECTED = 0x0004
    STATIC = 0x0008
    FINAL = 0x0010
    SYNCHRONIZED = 0x0020  # For methods
    BRIDGE = 0x0040
    VARARGS = 0x0080
    NATIVE = 0x0100
    INTERFACE = 0x0200
    ABSTRACT = 0x0400
    STRICT = 0x0800
    SYNTHETIC = 0x1000
    ANNOTATION = 0x2000
    ENUM = 0x4000


# Modifier keywords in java.lang.reflect.Modifier.toString() order
METHOD_MODIFIERS = (
    (AccessFlags.PUBLIC, "public"),
    (AccessFlags.PROTECTED, "protected"),
    (AccessFlags.PRIVATE, "private"),
    (AccessFlags.ABSTRACT, "abstract"),
    (AccessFlags.STATIC, "static"),
    (AccessFlags.FINAL, "final"),
    (AccessFlags.SYNCHRONIZED, "synchronized"),
    (AccessFlags.NATIVE, "native"),
    (AccessFlags.STRICT, "strictfp"),
)

CLASS_MODIFIERS = (
    (AccessFlags.PUBLIC, "public"),
    (AccessFlags.PROTECTED, "protected"),
    (AccessFlags.PRIVATE, "private"),
    (AccessFlags.ABSTRACT, "abstract"),
    (AccessFlags.STATIC, "static"),
    (AccessFlags.FINAL, "final"),
)

MODIFIER_FLAGS = {word: flag for flag, word in METHOD_MODIFIERS + CLASS_MODIFIERS}


def modifier_string(flags: int, table=METHOD_MODIFIERS) -> str:
    return " ".join(word for flag, word in table if flags & flag)


@dataclass(frozen=True)
class Annotation:
    """An annotation attached to a class or member."""
    type: ClassJType
    elements: tuple = ()


@dataclass(frozen=True)
class MemberInfo:
    """A method declared on a class, with the handle used to call it."""
    declaring_class: ClassJType
    name: str
    access_flags: AccessFlags
    param_types: tuple[JType, ...]
    return_type: JType = VOID
    annotations: tuple[Annotation, ...] = ()
    exceptions: tuple[ClassJType, ...] = ()
    is_default: bool = False  # interface member with a body
    handle: Optional[Callable] = field(default=None, compare=False, repr=False)

    @property
    def is_public(self) -> bool:
        return bool(self.access_flags & AccessFlags.PUBLIC)

    @property
    def is_static(self) -> bool:
        return bool(self.access_flags & AccessFlags.STATIC)

    @property
    def is_abstract(self) -> bool:
        return bool(self.access_flags & AccessFlags.ABSTRACT)

    @property
    def is_varargs(self) -> bool:
        return (bool(self.access_flags & AccessFlags.VARARGS)
                and bool(self.param_types)
                and isinstance(self.param_types[-1], ArrayJType))

    def descriptor(self) -> str:
        params = "".join(p.descriptor() for p in self.param_types)
        return f"({params}){self.return_type.descriptor()}"

    def has_annotation(self, annotation: Union[ClassJType, str]) -> bool:
        wanted = annotation if isinstance(annotation, ClassJType) else ClassJType(annotation)
        return any(a.type == wanted for a in self.annotations)

    def signature(self) -> str:
        """The Method.toString() form; the total order used to break ties."""
        if self.is_default:
            # default follows the access modifier and precedes the others
            access = AccessFlags.PUBLIC | AccessFlags.PROTECTED | AccessFlags.PRIVATE
            words = [modifier_string(self.access_flags & access), "default",
                     modifier_string(self.access_flags & ~access)]
        else:
            words = [modifier_string(self.access_flags)]
        head = "".join(f"{w} " for w in words if w)
        params = ",".join(p.type_name() for p in self.param_types)
        text = (f"{head}{self.return_type.type_name()} "
                f"{self.declaring_class.type_name()}.{self.name}({params})")
        if self.exceptions:
            text += " throws " + ",".join(e.type_name() for e in self.exceptions)
        return text

    def __str__(self) -> str:
        return self.signature()


@dataclass(frozen=True)
class ClassInfo:
    """A class or interface known to a provider."""
    type: ClassJType
    access_flags: AccessFlags
    super_class: Optional[ClassJType]
    interfaces: tuple[ClassJType, ...] = ()
    methods: tuple[MemberInfo, ...] = ()
    annotations: tuple[Annotation, ...] = ()

    @property
    def name(self) -> str:
        return self.type.name

    @property
    def is_public(self) -> bool:
        return bool(self.access_flags & AccessFlags.PUBLIC)

    @property
    def is_interface(self) -> bool:
        return bool(self.access_flags & AccessFlags.INTERFACE)

    def declared(self, name: str, param_types: Sequence[JType]) -> Optional[MemberInfo]:
        params = tuple(param_types)
        for method in self.methods:
            if method.name == name and method.param_types == params:
                return method
        return None


ARRAY_INTERFACES = (CLONEABLE, SERIALIZABLE)


class TypeMetadataProvider(ABC):
    """
    Read-only view of a type system.

    Subclasses supply class lookup and runtime typing of values; hierarchy,
    visibility and member queries are derived from those two.
    """

    @abstractmethod
    def find_class(self, t: ClassJType) -> Optional[ClassInfo]:
        """Look up a class or interface, or None if it is unknown."""
        pass

    @abstractmethod
    def type_of(self, value: Any) -> Optional[JType]:
        """The runtime type of a value; None for a null value."""
        pass

    # ==================== HIERARCHY ====================

    def get_superclass(self, t: JType) -> Optional[ClassJType]:
        if isinstance(t, ArrayJType):
            return OBJECT
        if not isinstance(t, ClassJType):
            return None
        info = self.find_class(t)
        return info.super_class if info else None

    def get_interfaces(self, t: JType) -> tuple[ClassJType, ...]:
        if isinstance(t, ArrayJType):
            return ARRAY_INTERFACES
        if not isinstance(t, ClassJType):
            return ()
        info = self.find_class(t)
        return info.interfaces if info else ()

    def is_subtype(self, from_type: JType, to_type: JType) -> bool:
        """Reference subtyping: Class.isAssignableFrom with the arguments swapped."""
        if from_type == to_type:
            return True
        if not (from_type.is_reference and to_type.is_reference):
            return False
        if to_type == OBJECT:
            return True
        if isinstance(from_type, ArrayJType):
            if isinstance(to_type, ArrayJType):
                from_component = from_type.component_type
                to_component = to_type.component_type
                if from_component.is_primitive or to_component.is_primitive:
                    return from_component == to_component
                return self.is_subtype(from_component, to_component)
            return to_type in ARRAY_INTERFACES
        if isinstance(to_type, ArrayJType):
            return False
        seen = set()
        pending = [from_type]
        while pending:
            current = pending.pop()
            if current in seen:
                continue
            seen.add(current)
            if current == to_type:
                return True
            superclass = self.get_superclass(current)
            if superclass is not None:
                pending.append(superclass)
            pending.extend(self.get_interfaces(current))
        return False

    # ==================== VISIBILITY ====================

    def is_public(self, target: Union[JType, MemberInfo]) -> bool:
        if isinstance(target, MemberInfo):
            return target.is_public
        if isinstance(target, PrimitiveJType):
            return True
        if isinstance(target, ArrayJType):
            return self.is_public(target.element_type)
        if isinstance(target, ClassJType):
            info = self.find_class(target)
            return info is not None and info.is_public
        return False

    # ==================== MEMBERS ====================

    def get_declared_members(self, t: JType) -> list[MemberInfo]:
        """Members declared directly on t, of every access level."""
        if not isinstance(t, ClassJType):
            return []
        info = self.find_class(t)
        return list(info.methods) if info else []

    def get_declared_member(self, t: JType, name: str,
                            param_types: Sequence[JType]) -> Optional[MemberInfo]:
        if not isinstance(t, ClassJType):
            return None
        info = self.find_class(t)
        return info.declared(name, param_types) if info else None

    def get_members(self, t: JType, include_non_public: bool = False) -> list[MemberInfo]:
        """
        Members of t.

        With include_non_public the declared members of every access level are
        returned (Class.getDeclaredMethods). Otherwise the public members of t
        and of all its supertypes, with overridden members hidden by the most
        derived declaration (Class.getMethods).
        """
        if include_non_public:
            return self.get_declared_members(t)
        result = []
        seen = set()
        for owner in self._member_search_order(t):
            for method in self.get_declared_members(owner):
                if not method.is_public:
                    continue
                key = (method.name, method.param_types)
                if key in seen:
                    continue
                seen.add(key)
                result.append(method)
        return result

    def get_member(self, t: JType, name: str,
                   param_types: Sequence[JType]) -> Optional[MemberInfo]:
        """The public member with exactly these parameter types (Class.getMethod)."""
        if name is None or t is None:
            return None
        params = tuple(param_types)
        for owner in self._member_search_order(t):
            method = self.get_declared_member(owner, name, params)
            if method is not None and method.is_public:
                return method
        return None

    def _member_search_order(self, t: JType) -> list[JType]:
        """t, its superclass chain, then every superinterface depth first."""
        classes = []
        current = t
        while current is not None and current not in classes:
            classes.append(current)
            current = self.get_superclass(current)
        interfaces = []
        for cls in classes:
            pending = list(reversed(self.get_interfaces(cls)))
            while pending:
                iface = pending.pop()
                if iface in interfaces:
                    continue
                interfaces.append(iface)
                pending.extend(reversed(self.get_interfaces(iface)))
        return classes + interfaces

    # ==================== BOXING / ANNOTATIONS ====================

    def is_primitive_or_boxed(self, t: JType) -> bool:
        return is_primitive_or_wrapper(t)

    def boxed_equivalent(self, t: JType) -> JType:
        return primitive_to_wrapper(t)

    def has_annotation(self, member: MemberInfo, annotation: Union[ClassJType, str]) -> bool:
        return member.has_annotation(annotation)
