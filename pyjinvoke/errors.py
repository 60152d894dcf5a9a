"""
Exceptions raised by member lookup and invocation.
"""


class ReflectionError(Exception):
    """Base class for all pyjinvoke errors."""
    pass


class DeclarationError(ReflectionError):
    """A class or member declaration could not be parsed or registered."""
    pass


class NoSuchMemberError(ReflectionError):
    """No member with the given name and signature exists or is accessible."""
    pass


class AmbiguousMemberError(ReflectionError):
    """More than one member matches equally well."""
    pass


class AccessRejectedError(ReflectionError):
    """The member exists but visibility rules forbid invoking it."""
    pass


class ArgumentMismatchError(ReflectionError):
    """The argument list does not fit the member being called."""
    pass


class MissingReceiverError(ReflectionError):
    """An instance member was called without a receiver."""
    pass


class UnboundMemberError(ReflectionError):
    """The member has no implementation bound for the receiver."""
    pass


class TargetInvocationError(ReflectionError):
    """The invoked member raised; the raised exception is kept."""

    def __init__(self, message: str, target_exception: BaseException):
        super().__init__(message)
        self.target_exception = target_exception
