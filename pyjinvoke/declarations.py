"""
Parser for Java declaration headers and JVM descriptors.

Classes and members are registered from the same text a Java programmer would
write, minus the bodies:

    public class com.example.Greeter extends com.example.Base implements Named
    public static int h(int count, String... names)

Names are left unresolved here; the registry resolves simple names against
java.lang and the declaring package.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from lark import Lark, Transformer, Token
from lark.exceptions import LarkError

from .types import JType, ArrayJType, ClassJType, PRIMITIVE_BY_DESCRIPTOR, VOID
from .errors import DeclarationError


GRAMMAR_FILE = Path(__file__).parent / "declarations.lark"


@dataclass(frozen=True)
class TypeReference:
    """A type as written: int, String, java.lang.String[][]."""
    name: str
    dimensions: int = 0

    def __str__(self) -> str:
        return self.name + "[]" * self.dimensions


@dataclass(frozen=True)
class ParameterDeclaration:
    type: TypeReference
    is_varargs: bool = False
    name: Optional[str] = None


@dataclass(frozen=True)
class ClassDeclaration:
    """Class or interface header."""
    modifiers: tuple[str, ...]
    annotations: tuple[str, ...]
    kind: str
    name: str
    extends: tuple[str, ...] = ()
    implements: tuple[str, ...] = ()

    @property
    def is_interface(self) -> bool:
        return self.kind in ("interface", "annotation")

    @property
    def is_annotation(self) -> bool:
        return self.kind == "annotation"


@dataclass(frozen=True)
class MemberDeclaration:
    """Method header."""
    modifiers: tuple[str, ...]
    annotations: tuple[str, ...]
    return_type: TypeReference
    name: str
    parameters: tuple[ParameterDeclaration, ...] = ()
    throws: tuple[str, ...] = ()

    @property
    def is_varargs(self) -> bool:
        return bool(self.parameters) and self.parameters[-1].is_varargs


class DeclarationTransformer(Transformer):
    """Transforms the Lark parse tree into declaration records."""

    def start(self, items):
        return items[0]

    # ==================== CLASSES ====================

    def class_declaration(self, items):
        modifiers, annotations = (), ()
        kind = None
        name = None
        extends = ()
        implements = ()

        for item in items:
            if isinstance(item, tuple) and len(item) == 2 and item[0] == "modifiers":
                modifiers, annotations = item[1]
            elif isinstance(item, Token) and item.type in ("CLASS", "INTERFACE", "ANNOTATION_INTERFACE"):
                kind = "annotation" if item.type == "ANNOTATION_INTERFACE" else str(item)
            elif isinstance(item, str) and name is None:
                name = item
            elif isinstance(item, tuple) and item[0] == "extends":
                extends = item[1]
            elif isinstance(item, tuple) and item[0] == "implements":
                implements = item[1]

        if kind == "class" and len(extends) > 1:
            raise DeclarationError(f"Class {name} cannot extend more than one class")
        if kind != "class" and implements:
            raise DeclarationError(f"Interface {name} cannot implement interfaces; use extends")

        return ClassDeclaration(
            modifiers=modifiers,
            annotations=annotations,
            kind=kind,
            name=name,
            extends=extends,
            implements=implements,
        )

    def class_kind(self, items):
        return items[0]

    def extends_clause(self, items):
        return ("extends", items[0])

    def implements_clause(self, items):
        return ("implements", items[0])

    def type_list(self, items):
        return tuple(items)

    # ==================== MEMBERS ====================

    def member_declaration(self, items):
        modifiers, annotations = (), ()
        return_type = None
        name = None
        params = ()
        throws = ()

        for item in items:
            if isinstance(item, tuple) and len(item) == 2 and item[0] == "modifiers":
                modifiers, annotations = item[1]
            elif isinstance(item, TypeReference):
                return_type = item
            elif isinstance(item, Token) and item.type == "IDENTIFIER":
                name = str(item)
            elif isinstance(item, list):
                params = tuple(item)
            elif isinstance(item, tuple) and item and item[0] == "throws":
                throws = item[1]

        for param in params[:-1]:
            if param.is_varargs:
                raise DeclarationError(f"Only the last parameter of {name} may be variadic")

        return MemberDeclaration(
            modifiers=modifiers,
            annotations=annotations,
            return_type=return_type,
            name=name,
            parameters=params,
            throws=throws,
        )

    def result(self, items):
        item = items[0]
        if isinstance(item, Token) and item.type == "VOID":
            return TypeReference("void")
        return item

    def formal_parameters(self, items):
        return list(items)

    def formal_parameter(self, items):
        param_type = items[0]
        is_varargs = False
        name = None
        for item in items[1:]:
            if item.type == "ELLIPSIS":
                is_varargs = True
            elif item.type == "IDENTIFIER":
                name = str(item)
        return ParameterDeclaration(type=param_type, is_varargs=is_varargs, name=name)

    def throws_clause(self, items):
        return ("throws", items[0])

    # ==================== MODIFIERS ====================

    def modifiers(self, items):
        modifiers = []
        annotations = []
        for item in items:
            if isinstance(item, Token):
                modifiers.append(str(item))
            else:
                annotations.append(item)
        return ("modifiers", (tuple(modifiers), tuple(annotations)))

    def annotation(self, items):
        return items[0]

    def modifier(self, items):
        return items[0]

    # ==================== TYPES ====================

    def type(self, items):
        name = items[0]
        dims = items[1] if len(items) > 1 else 0
        return TypeReference(name=name, dimensions=dims)

    def primitive_type(self, items):
        return str(items[0])

    def dims(self, items):
        return len(items)

    def qualified_name(self, items):
        return ".".join(str(item) for item in items)


class DeclarationParser:
    """Parses class and member declaration headers."""

    def __init__(self):
        with open(GRAMMAR_FILE, "r") as f:
            grammar = f.read()

        self._parser = Lark(
            grammar,
            parser="lalr",
            maybe_placeholders=False,
        )
        self._transformer = DeclarationTransformer()

    def parse(self, source: str) -> Union[ClassDeclaration, MemberDeclaration]:
        try:
            tree = self._parser.parse(source.strip())
            return self._transformer.transform(tree)
        except LarkError as e:
            cause = getattr(e, "orig_exc", None)
            if isinstance(cause, DeclarationError):
                raise cause
            raise DeclarationError(f"Cannot parse declaration {source!r}: {e}") from e

    def parse_class(self, source: str) -> ClassDeclaration:
        result = self.parse(source)
        if not isinstance(result, ClassDeclaration):
            raise DeclarationError(f"Not a class declaration: {source!r}")
        return result

    def parse_member(self, source: str) -> MemberDeclaration:
        result = self.parse(source)
        if not isinstance(result, MemberDeclaration):
            raise DeclarationError(f"Not a member declaration: {source!r}")
        return result


_default_parser: Optional[DeclarationParser] = None


def default_parser() -> DeclarationParser:
    global _default_parser
    if _default_parser is None:
        _default_parser = DeclarationParser()
    return _default_parser


# ==================== DESCRIPTORS ====================

def parse_method_descriptor(descriptor: str) -> tuple[JType, tuple[JType, ...]]:
    """Parse a method descriptor into return type and parameter types."""
    if not descriptor.startswith("("):
        raise DeclarationError(f"Method descriptor must start with '(': {descriptor}")
    params = []
    i = 1  # Skip '('
    while i < len(descriptor) and descriptor[i] != ')':
        jtype, consumed = _parse_type_from_descriptor(descriptor, i)
        params.append(jtype)
        i += consumed
    if i >= len(descriptor):
        raise DeclarationError(f"Unterminated method descriptor: {descriptor}")
    i += 1  # Skip ')'
    return_type, consumed = _parse_type_from_descriptor(descriptor, i)
    if i + consumed != len(descriptor):
        raise DeclarationError(f"Trailing characters in method descriptor: {descriptor}")
    return return_type, tuple(params)


def _parse_type_from_descriptor(desc: str, pos: int) -> tuple[JType, int]:
    """Parse a single type from a descriptor at the given position."""
    if pos >= len(desc):
        raise DeclarationError(f"Truncated descriptor: {desc}")
    ch = desc[pos]
    if ch in PRIMITIVE_BY_DESCRIPTOR:
        return PRIMITIVE_BY_DESCRIPTOR[ch], 1
    if ch == 'L':
        end = desc.find(';', pos)
        if end < 0:
            raise DeclarationError(f"Unterminated class name in descriptor: {desc}")
        return ClassJType(desc[pos + 1:end]), end - pos + 1
    if ch == '[':
        elem_type, consumed = _parse_type_from_descriptor(desc, pos + 1)
        if elem_type == VOID:
            raise DeclarationError(f"Array of void in descriptor: {desc}")
        return ArrayJType(elem_type), consumed + 1
    raise DeclarationError(f"Unknown descriptor char: {ch}")
