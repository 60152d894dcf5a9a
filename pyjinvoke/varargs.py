"""
Packing trailing arguments into the array a variadic member expects.
"""

from typing import Sequence

from .logging_config import logger
from .types import JType, ArrayJType, PrimitiveJType, primitive_to_wrapper
from .arrays import JArray, new_array, arraycopy, to_primitive
from .metadata import MemberInfo


def pack_varargs(args: Sequence, param_types: Sequence[JType]) -> list:
    """
    Reshape a flat argument list for a variadic parameter list.

    h(int, String...) called with (1, "a", "b") becomes (1, String["a", "b"]);
    called with (1) it becomes (1, String[]). An argument list that already
    ends in an array of the declared type, or in None, is returned unchanged.
    The caller guarantees len(args) >= len(param_types) - 1.
    """
    mpt_length = len(param_types)
    if len(args) == mpt_length:
        last = args[-1]
        if last is None or (isinstance(last, JArray) and last.jtype == param_types[-1]):
            # The args are already in the canonical form for the member
            return list(args)

    if len(args) < mpt_length - 1:
        raise ValueError(
            f"Need at least {mpt_length - 1} argument(s) for {mpt_length} parameter(s), got {len(args)}"
        )

    # Copy the normal (non-varargs) parameters
    new_args = list(args[:mpt_length - 1]) + [None]

    varargs_type = param_types[-1]
    if not isinstance(varargs_type, ArrayJType):
        raise ValueError(f"Last parameter is not an array: {varargs_type}")
    component_type = varargs_type.component_type
    varargs_length = len(args) - mpt_length + 1

    # Copy the variadic arguments into the varargs array
    varargs_array = arraycopy(args, mpt_length - 1,
                              new_array(primitive_to_wrapper(component_type), varargs_length),
                              0, varargs_length)
    if isinstance(component_type, PrimitiveJType):
        # unbox from wrapper type to primitive type
        varargs_array = to_primitive(varargs_array)

    new_args[mpt_length - 1] = varargs_array
    logger.trace("Packed {} trailing argument(s) into {}[]", varargs_length, component_type)
    return new_args


def to_varargs(member: MemberInfo, args: Sequence) -> list:
    """Pack args for member if it is variadic; otherwise return them as a list."""
    if member.is_varargs:
        return pack_varargs(args, member.param_types)
    return list(args)
