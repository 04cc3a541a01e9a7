"""
Action encoders.

Each encoder consumes the operands of one action group and appends bytes to
the shared ByteBuffer. Operands are validated completely before any space is
reserved, so a rejected action leaves the buffer untouched.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Optional, Sequence

import numpy as np

from .buffer import ByteBuffer
from .errors import InvalidMacLiteral, InvalidNumericLiteral, InvalidOperandCount
from .numbers import parse_hex, parse_ranged

logger = logging.getLogger(__name__)

# Ethernet constants
MAC_LEN = 6
MAC_BROADCAST_KEYWORDS = frozenset({"bc", "broadcast"})
MAC_RANDOM_KEYWORD = "random"
MAC_MULTICAST_BIT = 0x01
MAC_LOCAL_BIT = 0x02

VLAN_HLEN = 4
VLAN_TPID = 0x8100
VLAN_VID_MAX = 0x0FFF

_MAC_RE = re.compile(r"[0-9a-fA-F]{1,2}(?::[0-9a-fA-F]{1,2}){5}")


def _single_operand(action: str, operands: Sequence[str], what: str) -> str:
    if len(operands) != 1:
        raise InvalidOperandCount(action, f"one argument ({what})", len(operands))
    return operands[0]


class Encoder(ABC):
    """Appends the bytes of one action to a buffer."""

    @abstractmethod
    def encode(self, operands: Sequence[str], buffer: ByteBuffer) -> None:
        """
        Encode operands and append the result to buffer.

        Args:
            operands: Tokens following the action name
            buffer: Output buffer to append to

        Raises:
            EncodeError: If the operands are invalid
        """
        pass


class HexEncoder(Encoder):
    """One byte per base-16 token. No operands is a no-op."""

    def encode(self, operands: Sequence[str], buffer: ByteBuffer) -> None:
        values = []
        for token in operands:
            byte = parse_hex("hex", token)
            if byte > 0xFF:
                raise InvalidNumericLiteral("hex", token, "invalid byte")
            values.append(byte)

        if not values:
            return

        with buffer.reserve(len(values)) as data:
            data[:] = bytes(values)


class PadEncoder(Encoder):
    """Zero-fill until the buffer length is a multiple of the given length."""

    def encode(self, operands: Sequence[str], buffer: ByteBuffer) -> None:
        token = _single_operand("pad", operands, "len")
        alignment = parse_ranged("pad", token, 1, what="len")

        count = -len(buffer) % alignment
        if not count:
            return

        # reserved bytes are already zero
        buffer.reserve(count).release()


class ZeroEncoder(Encoder):
    """Append a fixed number of zero bytes."""

    def encode(self, operands: Sequence[str], buffer: ByteBuffer) -> None:
        token = _single_operand("zero", operands, "len")
        count = parse_ranged("zero", token, 0, what="len")
        buffer.reserve(count).release()


class MacEncoder(Encoder):
    """
    Append a 6-byte MAC address.

    Accepted operands:
    - "bc" or "broadcast": ff:ff:ff:ff:ff:ff
    - "random": random unicast, locally administered address
    - six colon-separated hex octets, e.g. 02:00:5e:10:00:01
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def random_address(self) -> bytes:
        octets = self.rng.integers(0, 256, size=MAC_LEN, dtype=np.uint8)
        # clear multicast, set locally assigned
        octets[0] &= ~MAC_MULTICAST_BIT & 0xFF
        octets[0] |= MAC_LOCAL_BIT
        return octets.tobytes()

    def parse_address(self, token: str) -> bytes:
        if token in MAC_BROADCAST_KEYWORDS:
            return b"\xff" * MAC_LEN
        if token == MAC_RANDOM_KEYWORD:
            return self.random_address()
        if not _MAC_RE.fullmatch(token):
            raise InvalidMacLiteral(token)
        return bytes(int(octet, 16) for octet in token.split(":"))

    def encode(self, operands: Sequence[str], buffer: ByteBuffer) -> None:
        token = _single_operand("mac", operands, "address")
        address = self.parse_address(token)

        with buffer.reserve(MAC_LEN) as mac:
            mac[:] = address
        logger.debug(f"mac {token} -> {address.hex(':')}")


class VlanEncoder(Encoder):
    """Append an 802.1Q tag: TPID 0x8100 followed by a 12-bit VLAN ID."""

    def encode(self, operands: Sequence[str], buffer: ByteBuffer) -> None:
        token = _single_operand("vlan", operands, "vid")
        vid = parse_ranged("vlan", token, 0, VLAN_VID_MAX, what="vid")

        with buffer.reserve(VLAN_HLEN) as vlan:
            vlan[0:2] = VLAN_TPID.to_bytes(2, "big")
            vlan[2] = (vid >> 8) & 0x0F
            vlan[3] = vid & 0xFF
