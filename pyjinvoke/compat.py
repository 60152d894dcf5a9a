"""
Type compatibility: assignability between types and argument lists, and the
distance score used to rank overloads.
"""

from typing import Optional, Sequence

from .types import (
    JType, PrimitiveJType, ArrayJType,
    wrapper_to_primitive, is_widening,
)
from .metadata import MemberInfo, TypeMetadataProvider


INCOMPATIBLE = -1


class TypeOracle:
    """Answers assignability questions against a metadata provider."""

    def __init__(self, provider: TypeMetadataProvider):
        self.provider = provider

    def is_type_assignable(self, from_type: Optional[JType], to_type: Optional[JType],
                           autoboxing: bool = True) -> bool:
        """Check if a value of from_type can be passed where to_type is expected.

        None as from_type stands for a null value and fits any reference type.
        """
        if to_type is None:
            return False
        if from_type is None:
            return not to_type.is_primitive

        if autoboxing:
            if from_type.is_primitive and not to_type.is_primitive:
                from_type = self.provider.boxed_equivalent(from_type)
            if to_type.is_primitive and not from_type.is_primitive:
                from_type = wrapper_to_primitive(from_type)
                if from_type is None:
                    return False

        if from_type == to_type:
            return True

        if isinstance(from_type, PrimitiveJType):
            if not isinstance(to_type, PrimitiveJType):
                return False
            return is_widening(from_type, to_type)

        if to_type.is_primitive:
            return False
        return self.provider.is_subtype(from_type, to_type)

    def is_assignable(self, from_types: Optional[Sequence[Optional[JType]]],
                      to_types: Optional[Sequence[JType]],
                      autoboxing: bool = True) -> bool:
        """Check every positional pair; lists of different length never match."""
        from_types = from_types or ()
        to_types = to_types or ()
        if len(from_types) != len(to_types):
            return False
        return all(
            self.is_type_assignable(f, t, autoboxing)
            for f, t in zip(from_types, to_types)
        )

    def distance(self, from_types: Sequence[Optional[JType]], to_types: Sequence[JType]) -> int:
        """
        Fitness of an argument list against a parameter list; lower is better.

        Returns -1 if the lists are not assignable. Otherwise each position costs
        0 when the types are equal or the argument type is unknown, 1 when the
        pair only fits through boxing or unboxing, and 2 for any other fit
        (subclass, interface, primitive widening).
        """
        if not self.is_assignable(from_types, to_types, True):
            return INCOMPATIBLE

        answer = 0
        for from_type, to_type in zip(from_types, to_types):
            if from_type is None or from_type == to_type:
                continue
            if (self.provider.is_primitive_or_boxed(from_type)
                    and self.is_type_assignable(from_type, to_type, True)
                    and not self.is_type_assignable(from_type, to_type, False)):
                answer += 1
            else:
                answer += 2
        return answer

    # ==================== MEMBERS ====================

    def is_matching_member(self, member: MemberInfo,
                           arg_types: Sequence[Optional[JType]]) -> bool:
        """Check if a member accepts the argument types, variadic form included."""
        param_types = member.param_types
        if self.is_assignable(arg_types, param_types, True):
            return True
        if not member.is_varargs:
            return False

        fixed = len(param_types) - 1
        if len(arg_types) < fixed:
            return False
        for i in range(fixed):
            if not self.is_type_assignable(arg_types[i], param_types[i], True):
                return False
        component = param_types[-1].component_type
        return all(
            self.is_type_assignable(arg, component, True)
            for arg in arg_types[fixed:]
        )

    def member_fit(self, member: MemberInfo,
                   arg_types: Sequence[Optional[JType]]) -> tuple[int, bool]:
        """
        Distance of the arguments against the member, and whether the variadic
        expansion was needed to get it.

        A variadic member that does not take the arguments as written is
        scored against its expanded parameter list: the leading parameters
        followed by the component type once per trailing argument.
        """
        direct = self.distance(arg_types, member.param_types)
        if direct != INCOMPATIBLE or not member.is_varargs:
            return direct, False
        expanded = expand_varargs(member.param_types, len(arg_types))
        if expanded is None:
            return INCOMPATIBLE, True
        return self.distance(arg_types, expanded), True


def expand_varargs(param_types: Sequence[JType], arg_count: int) -> Optional[tuple[JType, ...]]:
    """Spell a variadic parameter list out for arg_count arguments."""
    if not param_types or not isinstance(param_types[-1], ArrayJType):
        return None
    fixed = len(param_types) - 1
    if arg_count < fixed:
        return None
    component = param_types[-1].component_type
    return tuple(param_types[:fixed]) + (component,) * (arg_count - fixed)
