"""
Integer literal parsing for action operands.

Two conventions are in use:
- hex byte tokens are always base 16 (an optional 0x prefix is tolerated)
- lengths and VLAN IDs follow the C literal convention: 0x/0X prefix is
  hexadecimal, a leading 0 is octal, anything else is decimal
"""

import re
from typing import Optional

from .errors import InvalidNumericLiteral

_HEX_RE = re.compile(r"(?:0[xX])?([0-9a-fA-F]+)")
_AUTO_RE = re.compile(r"([+-]?)(?:0[xX]([0-9a-fA-F]+)|(0[0-7]*)|([1-9][0-9]*))")


def parse_hex(action: str, token: str) -> int:
    """
    Parse a base-16 token.

    Args:
        action: Action name for error messages
        token: Operand text

    Returns:
        int: Parsed value

    Raises:
        InvalidNumericLiteral: If the token is not a base-16 number
    """
    match = _HEX_RE.fullmatch(token)
    if not match:
        raise InvalidNumericLiteral(action, token, "invalid hex value")
    return int(match.group(1), 16)


def parse_auto(action: str, token: str) -> int:
    """
    Parse a token using the C integer literal convention.

    Args:
        action: Action name for error messages
        token: Operand text, e.g. "64", "0x40" or "0100"

    Returns:
        int: Parsed value, possibly negative

    Raises:
        InvalidNumericLiteral: If the token is not an integer literal
    """
    match = _AUTO_RE.fullmatch(token)
    if not match:
        raise InvalidNumericLiteral(action, token, "invalid integer")

    sign, hex_digits, octal_digits, dec_digits = match.groups()
    if hex_digits is not None:
        value = int(hex_digits, 16)
    elif octal_digits is not None:
        value = int(octal_digits, 8)
    else:
        value = int(dec_digits, 10)
    return -value if sign == "-" else value


def parse_ranged(
    action: str,
    token: str,
    minimum: int,
    maximum: Optional[int] = None,
    what: str = "value",
) -> int:
    """
    Parse a C-convention literal and check it against an inclusive range.

    Args:
        action: Action name for error messages
        token: Operand text
        minimum: Smallest accepted value
        maximum: Largest accepted value, or None for unbounded
        what: Operand name used in the error message

    Returns:
        int: Parsed value within [minimum, maximum]

    Raises:
        InvalidNumericLiteral: If parsing fails or the value is out of range
    """
    value = parse_auto(action, token)
    if value < minimum or (maximum is not None and value > maximum):
        raise InvalidNumericLiteral(action, token, f"{what} out of range,")
    return value
