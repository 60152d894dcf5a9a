"""
Invocation facade: resolve a member by name and arguments, then call it.

    invoker = MethodInvoker(registry)
    invoker.invoke_method(greeter, "greet", "world")
    invoker.invoke_static_method("java.lang.String", "valueOf", 42)
"""

from typing import Any, Optional, Sequence, Union

from .logging_config import logger
from .types import JType, ClassJType
from .metadata import MemberInfo, TypeMetadataProvider
from .compat import TypeOracle
from .locator import AccessibleMemberLocator
from .resolver import OverloadResolver, get_all_superclasses_and_interfaces, _format_types
from .dispatch import Dispatcher
from .varargs import to_varargs
from .registry import ClassRegistry
from .errors import (
    AccessRejectedError, ArgumentMismatchError, MissingReceiverError, NoSuchMemberError,
)


ClassRef = Union[JType, str]


class MethodInvoker:
    """Resolves and calls members against one metadata provider."""

    def __init__(self, provider: Optional[TypeMetadataProvider] = None):
        if provider is None:
            provider = ClassRegistry()
        self.provider = provider
        self.oracle = TypeOracle(provider)
        self.locator = AccessibleMemberLocator(provider)
        self.resolver = OverloadResolver(provider, self.oracle, self.locator)
        self.dispatcher = Dispatcher(provider, self.oracle)

    # ==================== INVOCATION ====================

    def invoke_method(self, obj: Any, name: str, *args,
                      param_types: Optional[Sequence[JType]] = None,
                      force_access: bool = False) -> Any:
        """
        Call the member of obj named name whose parameters best fit args.

        Variadic members receive their trailing arguments packed into an
        array. With force_access, members of every access level are considered
        and the public-visibility check is skipped.
        """
        if obj is None:
            raise MissingReceiverError(f"Cannot invoke {name} on a null receiver")
        cls = self.provider.type_of(obj)
        types = self._argument_types(args, param_types)

        if force_access:
            member = self.resolver.find_matching_member(cls, name, types)
        else:
            member = self.resolver.find_best_match(cls, name, types)
        if member is None:
            raise self._resolution_failure(cls, name, types, "object", force_access)

        return self.dispatcher.invoke(member, obj, to_varargs(member, args), force_access)

    def invoke_exact_method(self, obj: Any, name: str, *args,
                            param_types: Optional[Sequence[JType]] = None) -> Any:
        """Call the public member of obj whose parameter types equal the argument types."""
        if obj is None:
            raise MissingReceiverError(f"Cannot invoke {name} on a null receiver")
        cls = self.provider.type_of(obj)
        types = self._argument_types(args, param_types)

        member = self.find_accessible_member_by_signature(cls, name, types)
        if member is None:
            raise self._resolution_failure(cls, name, types, "object")
        return self.dispatcher.invoke(member, obj, args)

    def invoke_static_method(self, cls: ClassRef, name: str, *args,
                             param_types: Optional[Sequence[JType]] = None) -> Any:
        """Call the static member of cls whose parameters best fit args."""
        cls = _as_type(cls)
        types = self._argument_types(args, param_types)

        member = self.resolver.find_best_match(cls, name, types)
        if member is None:
            raise self._resolution_failure(cls, name, types, "class")
        self._require_static(member)
        return self.dispatcher.invoke(member, None, to_varargs(member, args))

    def invoke_exact_static_method(self, cls: ClassRef, name: str, *args,
                                   param_types: Optional[Sequence[JType]] = None) -> Any:
        """Call the public static member of cls whose parameter types equal the argument types."""
        cls = _as_type(cls)
        types = self._argument_types(args, param_types)

        member = self.find_accessible_member_by_signature(cls, name, types)
        if member is None:
            raise self._resolution_failure(cls, name, types, "class")
        self._require_static(member)
        return self.dispatcher.invoke(member, None, args)

    # ==================== LOOKUP ====================

    def find_accessible_member(self, cls: ClassRef,
                               member: Optional[MemberInfo]) -> Optional[MemberInfo]:
        return self.locator.find_accessible_member(_as_type(cls), member)

    def find_accessible_member_by_signature(self, cls: ClassRef, name: str,
                                            param_types: Sequence[JType] = ()) -> Optional[MemberInfo]:
        # An unknown argument type cannot take part in an exact signature
        if any(t is None for t in param_types):
            return None
        return self.locator.find_accessible_member_by_signature(_as_type(cls), name, param_types)

    def find_best_match(self, cls: ClassRef, name: str,
                        param_types: Sequence[Optional[JType]] = ()) -> Optional[MemberInfo]:
        return self.resolver.find_best_match(_as_type(cls), name, param_types)

    def find_matching_member(self, cls: ClassRef, name: str,
                             param_types: Sequence[Optional[JType]] = ()) -> Optional[MemberInfo]:
        return self.resolver.find_matching_member(_as_type(cls), name, param_types)

    def get_all_superclasses_and_interfaces(self, cls: ClassRef) -> list[JType]:
        return get_all_superclasses_and_interfaces(self.provider, _as_type(cls))

    def get_members_with_annotation(self, cls: ClassRef, annotation: Union[ClassJType, str],
                                    search_supers: bool = False,
                                    ignore_access: bool = False) -> list[MemberInfo]:
        """
        Members of cls carrying the annotation.

        cls is searched first, then (with search_supers) its superclasses and
        interfaces in interleaved order. ignore_access looks at the members
        declared on each type at every access level; otherwise the public
        members of each type, inherited ones included. A member reached through
        several types is listed once per type.
        """
        cls = _as_type(cls)
        annotation = _as_type(annotation)
        owners = [cls]
        if search_supers:
            owners += get_all_superclasses_and_interfaces(self.provider, cls)

        result = []
        for owner in owners:
            if ignore_access:
                members = self.provider.get_declared_members(owner)
            else:
                members = self.provider.get_members(owner)
            for method in members:
                if self.provider.has_annotation(method, annotation):
                    result.append(method)
        return result

    # ==================== HELPERS ====================

    def _argument_types(self, args: Sequence,
                        param_types: Optional[Sequence[JType]]) -> tuple[Optional[JType], ...]:
        if param_types is None:
            return tuple(self.provider.type_of(arg) for arg in args)
        param_types = tuple(param_types)
        if len(param_types) != len(args):
            raise ArgumentMismatchError(
                f"{len(args)} argument(s) given with {len(param_types)} parameter type(s)"
            )
        return param_types

    def _require_static(self, member: MemberInfo):
        if not member.is_static:
            raise MissingReceiverError(f"Instance member {member} invoked without a receiver")

    def _resolution_failure(self, cls: JType, name: str,
                            types: Sequence[Optional[JType]], kind: str,
                            force_access: bool = False) -> Exception:
        """The error to raise when no accessible member fits."""
        # forced lookups already saw every access level
        hidden = [] if force_access else self._hidden_matches(cls, name, types)
        if hidden:
            logger.debug("{}.{}{} only matches inaccessible {}",
                         cls, name, _format_types(types), hidden[0])
            return AccessRejectedError(
                f"Method {hidden[0]} is not accessible on {kind}: {cls}"
            )
        logger.debug("No accessible member {}{} on {}", name, _format_types(types), cls)
        return NoSuchMemberError(f"No such accessible method: {name}() on {kind}: {cls}")

    def _hidden_matches(self, cls: JType, name: str,
                        types: Sequence[Optional[JType]]) -> list[MemberInfo]:
        owners = [cls] + get_all_superclasses_and_interfaces(self.provider, cls)
        return [
            method
            for owner in owners
            for method in self.provider.get_declared_members(owner)
            if method.name == name
            and self.oracle.is_matching_member(method, types)
            and self.locator.accessible_member_of(method) is None
        ]


def _as_type(t: Union[JType, str]) -> JType:
    return ClassJType(t) if isinstance(t, str) else t


# ==================== DEFAULT REGISTRY ====================

_default_invoker: Optional[MethodInvoker] = None


def default_invoker() -> MethodInvoker:
    """The invoker behind the module-level functions, over a shared registry."""
    global _default_invoker
    if _default_invoker is None:
        _default_invoker = MethodInvoker()
    return _default_invoker


def invoke_method(obj: Any, name: str, *args, **kwargs) -> Any:
    return default_invoker().invoke_method(obj, name, *args, **kwargs)


def invoke_exact_method(obj: Any, name: str, *args, **kwargs) -> Any:
    return default_invoker().invoke_exact_method(obj, name, *args, **kwargs)


def invoke_static_method(cls: ClassRef, name: str, *args, **kwargs) -> Any:
    return default_invoker().invoke_static_method(cls, name, *args, **kwargs)


def invoke_exact_static_method(cls: ClassRef, name: str, *args, **kwargs) -> Any:
    return default_invoker().invoke_exact_static_method(cls, name, *args, **kwargs)
