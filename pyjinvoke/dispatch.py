"""
The raw call: binding a resolved member to a receiver and running it.
"""

from typing import Any, Callable, Optional, Sequence

from .logging_config import logger
from .types import JType, ClassJType
from .arrays import widen
from .metadata import MemberInfo, TypeMetadataProvider
from .compat import TypeOracle
from .resolver import get_all_interfaces
from .errors import (
    AccessRejectedError, ArgumentMismatchError, MissingReceiverError,
    TargetInvocationError, UnboundMemberError,
)


class Dispatcher:
    """Performs checked, late-bound calls of resolved members."""

    def __init__(self, provider: TypeMetadataProvider, oracle: Optional[TypeOracle] = None):
        self.provider = provider
        self.oracle = oracle or TypeOracle(provider)

    def invoke(self, member: MemberInfo, receiver: Any, args: Sequence,
               force_access: bool = False) -> Any:
        """
        Call member on receiver (ignored for static members) with packed args.

        Raises AccessRejectedError, MissingReceiverError or ArgumentMismatchError
        before the call, and TargetInvocationError wrapping whatever the member
        itself raised.
        """
        if not force_access:
            self._check_access(member)

        args = list(args)
        if member.is_static:
            target = member.handle
        else:
            if receiver is None:
                raise MissingReceiverError(f"Receiver required for instance member {member}")
            runtime_type = self.provider.type_of(receiver)
            if not self.oracle.is_type_assignable(runtime_type, member.declaring_class, False):
                raise ArgumentMismatchError(
                    f"Receiver of type {runtime_type} is not an instance of {member.declaring_class}"
                )
            target = self._late_bind(member, runtime_type)

        args = self._check_arguments(member, args)

        if target is None:
            raise UnboundMemberError(f"No implementation bound for {member}")

        logger.debug("Invoking {}", member)
        try:
            if member.is_static:
                return target(*args)
            return target(receiver, *args)
        except Exception as e:
            raise TargetInvocationError(
                f"{member} raised {type(e).__name__}: {e}", e
            ) from e

    def _check_access(self, member: MemberInfo):
        if not self.provider.is_public(member):
            raise AccessRejectedError(f"Member is not public: {member}")
        if not self.provider.is_public(member.declaring_class):
            raise AccessRejectedError(
                f"Class {member.declaring_class} is not public; cannot invoke {member}"
            )

    def _check_arguments(self, member: MemberInfo, args: list) -> list:
        params = member.param_types
        if len(args) != len(params):
            raise ArgumentMismatchError(
                f"Wrong number of arguments for {member}: expected {len(params)}, got {len(args)}"
            )
        converted = []
        for index, (arg, param) in enumerate(zip(args, params)):
            arg_type = self.provider.type_of(arg)
            if not self.oracle.is_type_assignable(arg_type, param, True):
                shown = "null" if arg_type is None else arg_type
                raise ArgumentMismatchError(
                    f"Argument {index} of {member}: {shown} is not assignable to {param}"
                )
            converted.append(widen(arg, param))
        return converted

    def _late_bind(self, member: MemberInfo, runtime_type: Optional[JType]) -> Optional[Callable]:
        """The implementation the receiver's class supplies for member."""
        current = runtime_type
        while isinstance(current, ClassJType):
            impl = self.provider.get_declared_member(current, member.name, member.param_types)
            if impl is not None and impl.handle is not None and not impl.is_static:
                return impl.handle
            current = self.provider.get_superclass(current)
        if member.handle is not None:
            return member.handle
        # Default methods on the receiver's interfaces
        if runtime_type is not None:
            for iface in get_all_interfaces(self.provider, runtime_type):
                impl = self.provider.get_declared_member(iface, member.name, member.param_types)
                if impl is not None and impl.handle is not None and not impl.is_static:
                    return impl.handle
        return None
