"""
Overload resolution: choosing the member that best fits an argument list.
"""

from typing import Optional, Sequence

from .logging_config import logger
from .types import JType
from .metadata import MemberInfo, TypeMetadataProvider
from .compat import TypeOracle, INCOMPATIBLE
from .locator import AccessibleMemberLocator
from .errors import AmbiguousMemberError


def signature_key(member: MemberInfo) -> str:
    return member.signature()


class OverloadResolver:
    """Selects the best-fitting member among a name's overloads."""

    def __init__(self, provider: TypeMetadataProvider,
                 oracle: Optional[TypeOracle] = None,
                 locator: Optional[AccessibleMemberLocator] = None):
        self.provider = provider
        self.oracle = oracle or TypeOracle(provider)
        self.locator = locator or AccessibleMemberLocator(provider)

    def find_best_match(self, cls: JType, name: str,
                        param_types: Sequence[Optional[JType]] = ()) -> Optional[MemberInfo]:
        """
        Find an accessible member of cls named name that fits param_types.

        An exact signature match is returned directly. Otherwise every public
        member with a compatible parameter list (variadic ones included) is
        ranked by distance, ties going to the lowest textual signature, so the
        same input always picks the same member.

        A variadic winner is rejected when the last argument type is known,
        has a superclass, and neither its binary name nor that superclass's
        binary name equals the boxed component type's binary name. Only the
        immediate superclass is consulted, so an argument two levels below the
        component type is rejected as well.
        """
        param_types = tuple(param_types or ())

        if all(t is not None for t in param_types):
            candidate = self.provider.get_member(cls, name, param_types)
            if candidate is not None:
                logger.trace("Exact match for {}: {}", name, candidate)
                return self.locator.accessible_member_of(candidate)

        matching = [
            m for m in self.provider.get_members(cls)
            if m.name == name and self.oracle.is_matching_member(m, param_types)
        ]
        # Sort methods by signature to force deterministic result
        matching.sort(key=signature_key)
        logger.debug("{} candidate(s) for {}.{} with {}",
                     len(matching), cls, name, _format_types(param_types))

        best_match = None
        best_fit = None
        for method in matching:
            accessible = self.locator.accessible_member_of(method)
            if accessible is None:
                continue
            fit = self.oracle.member_fit(accessible, param_types)
            if fit[0] == INCOMPATIBLE:
                continue
            if best_match is None or fit < best_fit:
                best_match = accessible
                best_fit = fit

        if best_match is not None and self._rejects_varargs(best_match, param_types):
            logger.debug("Variadic match {} rejected for trailing argument {}",
                         best_match, param_types[-1])
            return None
        return best_match

    def _rejects_varargs(self, method: MemberInfo,
                         param_types: Sequence[Optional[JType]]) -> bool:
        if not method.is_varargs or not method.param_types or not param_types:
            return False
        component = method.param_types[-1].component_type
        component_name = self.provider.boxed_equivalent(component).java_name()
        last = param_types[-1]
        if last is None:
            return False
        last_name = last.java_name()
        superclass = self.provider.get_superclass(last)
        if superclass is None:
            return False
        return component_name != last_name and component_name != superclass.java_name()

    def find_matching_member(self, cls: JType, name: str,
                             param_types: Sequence[Optional[JType]] = ()) -> Optional[MemberInfo]:
        """
        Find a member of any access level on cls or its supertypes.

        Used when access checks are overridden. A member with exactly the given
        parameter types wins outright; otherwise the lowest distance wins and a
        tie raises AmbiguousMemberError.
        """
        param_types = tuple(param_types or ())
        owners = [cls] + get_all_superclasses_and_interfaces(self.provider, cls)

        candidates = []
        seen = set()
        for owner in owners:
            for method in self.provider.get_declared_members(owner):
                if method.name != name or method.param_types in seen:
                    continue
                # Overridden declarations are hidden by the most derived one
                seen.add(method.param_types)
                if method.param_types == param_types:
                    return method
                if self.oracle.is_assignable(param_types, method.param_types, True):
                    candidates.append(method)

        if not candidates:
            return None

        scored = sorted(
            ((self.oracle.distance(param_types, m.param_types), m) for m in candidates),
            key=lambda pair: (pair[0], signature_key(pair[1])),
        )
        best_distance = scored[0][0]
        best = [m for d, m in scored if d == best_distance]
        if len(best) > 1:
            raise AmbiguousMemberError(
                f"Found multiple candidates for member {name}{_format_types(param_types)} "
                f"on class {cls}: {', '.join(m.signature() for m in best)}"
            )
        return best[0]


def get_all_superclasses_and_interfaces(provider: TypeMetadataProvider,
                                        cls: Optional[JType]) -> list[JType]:
    """
    Superclasses and interfaces of cls, interleaved.

    A superclass is taken while its index is below the running interface
    index, so each class is followed by the interfaces discovered at about the
    same depth.
    """
    if cls is None:
        return []
    superclasses = get_all_superclasses(provider, cls)
    interfaces = get_all_interfaces(provider, cls)
    result = []
    superclass_index = 0
    interface_index = 0
    while interface_index < len(interfaces) or superclass_index < len(superclasses):
        if (interface_index >= len(interfaces)
                or (superclass_index < len(superclasses) and superclass_index < interface_index)):
            result.append(superclasses[superclass_index])
            superclass_index += 1
        else:
            result.append(interfaces[interface_index])
            interface_index += 1
    return result


def get_all_superclasses(provider: TypeMetadataProvider, cls: JType) -> list[JType]:
    result = []
    current = provider.get_superclass(cls)
    while current is not None and current not in result:
        result.append(current)
        current = provider.get_superclass(current)
    return result


def get_all_interfaces(provider: TypeMetadataProvider, cls: JType) -> list[JType]:
    """Every interface of cls and its superclasses, in depth-first discovery order."""
    found = []
    current = cls
    seen_classes = set()
    while current is not None and current not in seen_classes:
        seen_classes.add(current)
        pending = list(reversed(provider.get_interfaces(current)))
        while pending:
            iface = pending.pop()
            if iface in found:
                continue
            found.append(iface)
            pending.extend(reversed(provider.get_interfaces(iface)))
        current = provider.get_superclass(current)
    return found


def _format_types(param_types: Sequence[Optional[JType]]) -> str:
    return "(" + ", ".join("null" if t is None else str(t) for t in param_types) + ")"
