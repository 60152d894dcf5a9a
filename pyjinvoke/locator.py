"""
Finding an invokable form of a member.

A public member declared on a non-public class cannot be called through that
class. The same member is usually reachable through a public interface the
class implements, or through a public superclass; the locator finds that form.
"""

from typing import Optional, Sequence

from .logging_config import logger
from .types import JType, ClassJType
from .metadata import MemberInfo, TypeMetadataProvider


class AccessibleMemberLocator:
    """Locates members that can be invoked given visibility rules."""

    def __init__(self, provider: TypeMetadataProvider):
        self.provider = provider

    def find_accessible_member(self, cls: JType, member: Optional[MemberInfo]) -> Optional[MemberInfo]:
        """
        Return an accessible member with the name and parameter types of member.

        If cls is public the member itself is returned. Otherwise the interfaces
        of cls and of its superclasses are searched, then the superclass chain
        for the first public ancestor. Returns None when no accessible form
        exists, including when the member itself is not public.
        """
        if member is None or not self.provider.is_public(member):
            return None

        # If the declaring class is public, we are done
        if self.provider.is_public(cls):
            return member

        name = member.name
        param_types = member.param_types

        found = self._find_in_interface_nest(cls, name, param_types)
        if found is None:
            found = self._find_in_superclass(cls, name, param_types)
        if found is None:
            logger.debug("No accessible form of {} reachable from {}", member, cls)
        return found

    def accessible_member_of(self, member: Optional[MemberInfo]) -> Optional[MemberInfo]:
        """Locate relative to the member's own declaring class."""
        if member is None:
            return None
        return self.find_accessible_member(member.declaring_class, member)

    def find_accessible_member_by_signature(self, cls: JType, name: str,
                                            param_types: Sequence[JType] = ()) -> Optional[MemberInfo]:
        """The accessible form of the public member cls.name(param_types), if any."""
        return self.accessible_member_of(self.get_member_object(cls, name, param_types))

    def get_member_object(self, cls: Optional[JType], name: Optional[str],
                          param_types: Sequence[JType] = ()) -> Optional[MemberInfo]:
        """Exact public lookup on cls and its supertypes; None when absent."""
        if cls is None or name is None:
            return None
        return self.provider.get_member(cls, name, tuple(param_types or ()))

    def _find_in_interface_nest(self, cls: Optional[JType], name: str,
                                param_types: Sequence[JType]) -> Optional[MemberInfo]:
        """Search the interfaces of cls and its superclasses, depth first."""
        visited: set[ClassJType] = set()
        while cls is not None:
            pending = list(reversed(self.provider.get_interfaces(cls)))
            while pending:
                iface = pending.pop()
                if iface in visited:
                    continue
                visited.add(iface)
                # Non-public interfaces are skipped along with their parents
                if not self.provider.is_public(iface):
                    continue
                found = self.provider.get_declared_member(iface, name, param_types)
                if found is not None:
                    logger.trace("Found {} through interface {}", found, iface)
                    return found
                pending.extend(reversed(self.provider.get_interfaces(iface)))
            cls = self.provider.get_superclass(cls)
        return None

    def _find_in_superclass(self, cls: JType, name: str,
                            param_types: Sequence[JType]) -> Optional[MemberInfo]:
        """Re-resolve on the first public ancestor, if there is one."""
        parent = self.provider.get_superclass(cls)
        while parent is not None:
            if self.provider.is_public(parent):
                found = self.get_member_object(parent, name, param_types)
                # the ancestor may inherit it from a non-public class of its own
                if found is not None and not self.provider.is_public(found.declaring_class):
                    return None
                return found
            parent = self.provider.get_superclass(parent)
        return None
