"""
Error taxonomy for the composer.

Encoders raise EncodeError subclasses describing what is wrong with their
operands. The dispatcher wraps those into MalformedExpression so the top level
can print the offending group together with the action's usage grammar.
"""

from typing import Optional, Sequence


class SewError(Exception):
    """Base exception for every composer failure."""

    pass


class DispatchError(SewError):
    """Raised when an action group cannot be executed."""

    pass


class UnknownAction(DispatchError):
    """Raised when a group's head token matches no registered action."""

    def __init__(self, name: str, group: Optional[Sequence[str]] = None):
        self.name = name
        self.group = list(group) if group is not None else [name]
        message = f"unknown action '{name}'"
        if len(self.group) > 1:
            message += f" in '{' '.join(self.group)}'"
        super().__init__(message)


class MalformedExpression(DispatchError):
    """Raised when an encoder rejects the operands of its group."""

    def __init__(
        self,
        name: str,
        usage: str,
        cause: "EncodeError",
        group: Optional[Sequence[str]] = None,
    ):
        self.name = name
        self.usage = usage
        self.cause = cause
        self.group = list(group) if group is not None else [name]
        super().__init__(f"malformed expression '{' '.join(self.group)}': {cause}")


class EncodeError(SewError, ValueError):
    """Base exception for operand errors raised by encoders."""

    pass


class InvalidOperandCount(EncodeError):
    """Raised when an action receives the wrong number of operands."""

    def __init__(self, action: str, expected: str, got: int):
        self.action = action
        self.expected = expected
        self.got = got
        super().__init__(f"{action}: expected {expected}, got {got}")


class InvalidNumericLiteral(EncodeError):
    """Raised when an operand is not an integer or falls outside its range."""

    def __init__(self, action: str, token: str, reason: str):
        self.action = action
        self.token = token
        self.reason = reason
        super().__init__(f"{action}: {reason} '{token}'")


class InvalidMacLiteral(EncodeError):
    """Raised when a mac operand is neither a keyword nor six hex octets."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"mac: unknown address '{token}'")


class AllocationFailure(SewError):
    """Raised when the output buffer cannot grow. Fatal for the run."""

    pass


class OutputWriteFailure(SewError):
    """Raised when the composed bytes could not be written out completely."""

    pass


class ConfigError(SewError, ValueError):
    """Raised when configuration values are invalid."""

    pass
