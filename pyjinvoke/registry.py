"""
In-memory type metadata provider.

Classes and members are declared in Java syntax and bound to Python callables:

    registry = ClassRegistry()

    @registry.define("public class demo.Greeter")
    class Greeter:
        @member("public String greet(String who)")
        def greet(self, who):
            return "hello " + who

Instances of a bound Python class have the declared class as their runtime type.
"""

from dataclasses import replace
from typing import Any, Callable, Iterator, Optional, Sequence, Union

from .logging_config import logger
from .types import (
    JType, ClassJType, ArrayJType, PRIMITIVE_TYPES, VOID, OBJECT, STRING,
    BOOLEAN_WRAPPER, INT_WRAPPER, DOUBLE_WRAPPER,
)
from .arrays import JArray
from .metadata import (
    AccessFlags, Annotation, ClassInfo, MemberInfo, TypeMetadataProvider, MODIFIER_FLAGS,
)
from .declarations import (
    DeclarationParser, ClassDeclaration, MemberDeclaration, TypeReference,
    default_parser, parse_method_descriptor,
)
from .errors import DeclarationError
from .lang import JAVA_LANG_CLASSES, install_java_lang


# Runtime types of plain Python values
PYTHON_TYPES = {
    bool: BOOLEAN_WRAPPER,
    int: INT_WRAPPER,
    float: DOUBLE_WRAPPER,
    str: STRING,
}


def member(declaration: str):
    """Mark a function as the implementation of a declared member.

    May be stacked to bind one function to several overloads.
    """
    def decorator(fn):
        target = getattr(fn, "__func__", fn)
        declarations = list(getattr(target, "__jmembers__", ()))
        declarations.insert(0, declaration)
        target.__jmembers__ = tuple(declarations)
        return fn
    return decorator


class ClassRegistry(TypeMetadataProvider):
    """A provider holding declared classes and the Python callables behind them."""

    def __init__(self, bootstrap: bool = True, parser: Optional[DeclarationParser] = None):
        self._classes: dict[ClassJType, ClassInfo] = {}
        self._bindings: dict[type, ClassJType] = {}
        self._parser = parser or default_parser()
        if bootstrap:
            install_java_lang(self)

    def __contains__(self, t: Union[ClassJType, str]) -> bool:
        return self._as_class_type(t) in self._classes

    def __iter__(self) -> Iterator[ClassInfo]:
        return iter(list(self._classes.values()))

    def __len__(self) -> int:
        return len(self._classes)

    # ==================== PROVIDER ====================

    def find_class(self, t: Union[ClassJType, str]) -> Optional[ClassInfo]:
        return self._classes.get(self._as_class_type(t))

    def type_of(self, value: Any) -> Optional[JType]:
        if value is None:
            return None
        if isinstance(value, JArray):
            return value.jtype
        for klass in type(value).__mro__:
            if klass in self._bindings:
                return self._bindings[klass]
        declared = getattr(value, "__jclass__", None)
        if declared is not None:
            return self._as_class_type(declared)
        for klass in type(value).__mro__:
            if klass in PYTHON_TYPES:
                return PYTHON_TYPES[klass]
        return OBJECT

    # ==================== NAME RESOLUTION ====================

    def resolve_class_name(self, name: str, package: str = "") -> ClassJType:
        """Resolve a simple class name to its full binary name."""
        # Already qualified
        if "." in name or "/" in name:
            return ClassJType(name)
        # Same package wins over java.lang, as in Java
        if package:
            candidate = ClassJType(f"{package}.{name}")
            if candidate in self._classes:
                return candidate
        if name in JAVA_LANG_CLASSES:
            return ClassJType(f"java.lang.{name}")
        # Otherwise assume it's in the same package, declared later
        if package:
            return ClassJType(f"{package}.{name}")
        return ClassJType(name)

    def resolve_type(self, ref: TypeReference, package: str = "") -> JType:
        """Resolve a declared type reference to a JType."""
        if ref.name in PRIMITIVE_TYPES:
            base = PRIMITIVE_TYPES[ref.name]
        else:
            base = self.resolve_class_name(ref.name, package)
        if ref.dimensions:
            if base == VOID:
                raise DeclarationError("Cannot declare an array of void")
            return ArrayJType(base, ref.dimensions)
        return base

    # ==================== DECLARATIONS ====================

    def declare_class(self, declaration: Union[str, ClassDeclaration]) -> ClassInfo:
        """Declare a class or interface from its Java header."""
        decl = declaration
        if isinstance(declaration, str):
            decl = self._parser.parse_class(declaration)

        jtype = ClassJType(decl.name)
        package = jtype.package
        flags = self._modifier_flags(decl.modifiers, decl.name)
        if decl.is_interface:
            flags |= AccessFlags.INTERFACE | AccessFlags.ABSTRACT
            if decl.is_annotation:
                flags |= AccessFlags.ANNOTATION
            super_class = None
            interfaces = tuple(self.resolve_class_name(n, package) for n in decl.extends)
        else:
            if decl.extends:
                super_class = self.resolve_class_name(decl.extends[0], package)
            elif jtype == OBJECT:
                super_class = None
            else:
                super_class = OBJECT
            interfaces = tuple(self.resolve_class_name(n, package) for n in decl.implements)

        info = ClassInfo(
            type=jtype,
            access_flags=flags,
            super_class=super_class,
            interfaces=interfaces,
            annotations=self._annotations(decl.annotations, package),
        )
        return self.add_class(info)

    def declare_method(self, owner: Union[ClassJType, str],
                       declaration: Union[str, MemberDeclaration],
                       handle: Optional[Callable] = None) -> MemberInfo:
        """Declare a member on an already declared class."""
        info = self._require_class(owner)
        decl = declaration
        if isinstance(declaration, str):
            decl = self._parser.parse_member(declaration)

        package = info.type.package
        flags = self._modifier_flags(decl.modifiers, decl.name)
        if info.is_interface:
            if not flags & (AccessFlags.PRIVATE | AccessFlags.PROTECTED):
                flags |= AccessFlags.PUBLIC
            if "default" not in decl.modifiers and not flags & (AccessFlags.STATIC | AccessFlags.PRIVATE):
                flags |= AccessFlags.ABSTRACT
        if decl.is_varargs:
            flags |= AccessFlags.VARARGS

        param_types = []
        for param in decl.parameters:
            jtype = self.resolve_type(param.type, package)
            if jtype == VOID:
                raise DeclarationError(f"Parameter of {decl.name} cannot be void")
            if param.is_varargs:
                jtype = ArrayJType(jtype)
            param_types.append(jtype)

        method = MemberInfo(
            declaring_class=info.type,
            name=decl.name,
            access_flags=flags,
            param_types=tuple(param_types),
            return_type=self.resolve_type(decl.return_type, package),
            annotations=self._annotations(decl.annotations, package),
            exceptions=tuple(self.resolve_class_name(n, package) for n in decl.throws),
            is_default=info.is_interface and "default" in decl.modifiers,
            handle=handle,
        )
        return self.add_method(method)

    def declare_method_descriptor(self, owner: Union[ClassJType, str], name: str,
                                  descriptor: str, access_flags: int = AccessFlags.PUBLIC,
                                  handle: Optional[Callable] = None,
                                  annotations: Sequence[Union[ClassJType, str]] = ()) -> MemberInfo:
        """Declare a member from a JVM method descriptor such as (I[Ljava/lang/String;)V."""
        info = self._require_class(owner)
        return_type, param_types = parse_method_descriptor(descriptor)
        method = MemberInfo(
            declaring_class=info.type,
            name=name,
            access_flags=AccessFlags(access_flags),
            param_types=param_types,
            return_type=return_type,
            annotations=tuple(Annotation(self._as_class_type(a)) for a in annotations),
            handle=handle,
        )
        return self.add_method(method)

    def add_class(self, info: ClassInfo) -> ClassInfo:
        if info.type in self._classes:
            raise DeclarationError(f"Class already declared: {info.name}")
        self._classes[info.type] = info
        logger.trace("Declared {}", info.name)
        return info

    def add_method(self, method: MemberInfo) -> MemberInfo:
        info = self._require_class(method.declaring_class)
        if info.declared(method.name, method.param_types) is not None:
            raise DeclarationError(f"Member already declared: {method.signature()}")
        self._classes[info.type] = replace(info, methods=info.methods + (method,))
        logger.trace("Declared {}", method)
        return method

    # ==================== PYTHON BINDINGS ====================

    def bind(self, pyclass: type, jclass: Union[ClassJType, str]) -> ClassJType:
        """Make instances of pyclass report jclass as their runtime type."""
        jtype = self._as_class_type(jclass)
        self._require_class(jtype)
        self._bindings[pyclass] = jtype
        return jtype

    def define(self, declaration: str):
        """Class decorator: declare a class and every @member function on it."""
        def decorator(cls):
            info = self.declare_class(declaration)
            for value in vars(cls).values():
                func = getattr(value, "__func__", value)
                for member_decl in getattr(func, "__jmembers__", ()):
                    self.declare_method(info.type, member_decl, handle=func)
            self.bind(cls, info.type)
            return cls
        return decorator

    # ==================== HELPERS ====================

    def _require_class(self, t: Union[ClassJType, str]) -> ClassInfo:
        info = self.find_class(t)
        if info is None:
            raise DeclarationError(f"Class not declared: {t}")
        return info

    def _as_class_type(self, t: Union[ClassJType, str]) -> ClassJType:
        return t if isinstance(t, ClassJType) else ClassJType(t)

    def _modifier_flags(self, modifiers: Sequence[str], name: str) -> AccessFlags:
        flags = AccessFlags(0)
        for word in modifiers:
            if word == "default":
                continue
            flags |= MODIFIER_FLAGS[word]
        access = flags & (AccessFlags.PUBLIC | AccessFlags.PRIVATE | AccessFlags.PROTECTED)
        if bin(int(access)).count("1") > 1:
            raise DeclarationError(f"Conflicting access modifiers on {name}")
        return flags

    def _annotations(self, names: Sequence[str], package: str) -> tuple[Annotation, ...]:
        return tuple(Annotation(self.resolve_class_name(n, package)) for n in names)
