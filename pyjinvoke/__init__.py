"""
pyjinvoke - overload resolution and reflective invocation over a JVM-style type model.
"""

__version__ = "0.1.0"

from .types import (
    JType, PrimitiveJType, ClassJType, ArrayJType,
    VOID, BOOLEAN, BYTE, CHAR, SHORT, INT, LONG, FLOAT, DOUBLE,
    OBJECT, STRING,
)
from .arrays import JArray, new_array, to_primitive, to_boxed
from .metadata import AccessFlags, Annotation, MemberInfo, ClassInfo, TypeMetadataProvider
from .registry import ClassRegistry, member
from .compat import TypeOracle
from .locator import AccessibleMemberLocator
from .resolver import OverloadResolver, get_all_superclasses_and_interfaces
from .varargs import pack_varargs, to_varargs
from .invoker import (
    MethodInvoker, default_invoker,
    invoke_method, invoke_exact_method, invoke_static_method, invoke_exact_static_method,
)
from .errors import (
    ReflectionError, DeclarationError, NoSuchMemberError, AmbiguousMemberError,
    AccessRejectedError, ArgumentMismatchError, MissingReceiverError,
    UnboundMemberError, TargetInvocationError,
)
from .logging_config import setup_logging, disable_logging
