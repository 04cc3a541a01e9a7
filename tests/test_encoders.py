"""Tests for the per-action encoders."""

import numpy as np
import pytest

from sew.buffer import ByteBuffer
from sew.encoders import (
    HexEncoder,
    MacEncoder,
    PadEncoder,
    VlanEncoder,
    ZeroEncoder,
)
from sew.errors import (
    AllocationFailure,
    EncodeError,
    InvalidMacLiteral,
    InvalidNumericLiteral,
    InvalidOperandCount,
)


@pytest.fixture
def buf():
    return ByteBuffer()


def _prefill(buf, n):
    with buf.reserve(n) as view:
        view[:] = b"\x11" * n


# hex


def test_hex_appends_bytes_in_order(buf):
    HexEncoder().encode(["0a", "0b"], buf)
    assert buf.getvalue() == b"\x0a\x0b"


def test_hex_appends_at_current_position(buf):
    _prefill(buf, 2)
    HexEncoder().encode(["ff", "0"], buf)
    assert buf.getvalue() == b"\x11\x11\xff\x00"


def test_hex_without_operands_is_noop(buf):
    HexEncoder().encode([], buf)
    assert len(buf) == 0


@pytest.mark.parametrize("operands", [["100"], ["zz"], ["01", "-1"], ["01", ""]])
def test_hex_rejects_invalid_bytes_without_writing(buf, operands):
    with pytest.raises(InvalidNumericLiteral):
        HexEncoder().encode(operands, buf)
    assert len(buf) == 0


# zero


@pytest.mark.parametrize("prior", [0, 3, 8])
def test_zero_appends_exact_count(buf, prior):
    _prefill(buf, prior)
    ZeroEncoder().encode(["5"], buf)
    assert len(buf) == prior + 5
    assert buf.getvalue()[prior:] == bytes(5)


def test_zero_of_zero_is_noop(buf):
    ZeroEncoder().encode(["0"], buf)
    assert len(buf) == 0


def test_zero_accepts_prefixed_literals(buf):
    ZeroEncoder().encode(["0x10"], buf)
    ZeroEncoder().encode(["010"], buf)
    assert len(buf) == 16 + 8


@pytest.mark.parametrize("operands", [[], ["1", "2"]])
def test_zero_operand_count(buf, operands):
    with pytest.raises(InvalidOperandCount) as exc:
        ZeroEncoder().encode(operands, buf)
    assert exc.value.got == len(operands)


@pytest.mark.parametrize("token", ["-1", "abc"])
def test_zero_rejects_bad_length(buf, token):
    with pytest.raises(InvalidNumericLiteral):
        ZeroEncoder().encode([token], buf)
    assert len(buf) == 0


# pad


def test_pad_completes_alignment(buf):
    _prefill(buf, 3)
    PadEncoder().encode(["4"], buf)
    assert buf.getvalue() == b"\x11\x11\x11\x00"


def test_pad_when_aligned_appends_nothing(buf):
    _prefill(buf, 8)
    PadEncoder().encode(["4"], buf)
    assert len(buf) == 8


def test_pad_on_empty_buffer_appends_nothing(buf):
    PadEncoder().encode(["60"], buf)
    assert len(buf) == 0


def test_pad_to_minimum_frame_size(buf):
    _prefill(buf, 18)
    PadEncoder().encode(["60"], buf)
    assert len(buf) == 60


@pytest.mark.parametrize("token", ["0", "-4", "four"])
def test_pad_rejects_non_positive_or_invalid(buf, token):
    _prefill(buf, 3)
    with pytest.raises(InvalidNumericLiteral):
        PadEncoder().encode([token], buf)
    assert len(buf) == 3


@pytest.mark.parametrize(
    "encoder,token",
    [(ZeroEncoder(), "0x10000000000000000"), (PadEncoder(), "0x10000000000000000")],
)
def test_huge_length_is_allocation_failure(buf, encoder, token):
    _prefill(buf, 1)
    with pytest.raises(AllocationFailure):
        encoder.encode([token], buf)
    assert len(buf) == 1


def test_pad_operand_count(buf):
    with pytest.raises(InvalidOperandCount):
        PadEncoder().encode([], buf)


# mac


@pytest.mark.parametrize("keyword", ["bc", "broadcast"])
def test_mac_broadcast(buf, keyword):
    MacEncoder().encode([keyword], buf)
    assert buf.getvalue() == b"\xff" * 6


def test_mac_literal(buf):
    MacEncoder().encode(["01:02:03:04:05:06"], buf)
    assert buf.getvalue() == bytes([1, 2, 3, 4, 5, 6])


def test_mac_literal_single_digit_octets(buf):
    MacEncoder().encode(["a:B:0:ff:1:2"], buf)
    assert buf.getvalue() == bytes([0x0A, 0x0B, 0x00, 0xFF, 0x01, 0x02])


def test_mac_random_sets_local_and_clears_multicast(buf):
    encoder = MacEncoder(np.random.default_rng())
    for _ in range(32):
        encoder.encode(["random"], buf)

    data = buf.getvalue()
    assert len(data) == 6 * 32
    for first in data[::6]:
        assert first & 0x01 == 0
        assert first & 0x02 == 0x02


def test_mac_random_is_reproducible_with_seed():
    a, b = ByteBuffer(), ByteBuffer()
    MacEncoder(np.random.default_rng(42)).encode(["random"], a)
    MacEncoder(np.random.default_rng(42)).encode(["random"], b)
    assert a.getvalue() == b.getvalue()


@pytest.mark.parametrize(
    "token",
    [
        "01:02:03:04:05",
        "01:02:03:04:05:06:07",
        "01-02-03-04-05-06",
        "001:02:03:04:05:06",
        "0g:02:03:04:05:06",
        "multicast",
        "",
    ],
)
def test_mac_rejects_bad_literal_without_writing(buf, token):
    with pytest.raises(InvalidMacLiteral):
        MacEncoder().encode([token], buf)
    assert len(buf) == 0


def test_mac_operand_count(buf):
    with pytest.raises(InvalidOperandCount):
        MacEncoder().encode(["bc", "bc"], buf)
    assert len(buf) == 0


# vlan


@pytest.mark.parametrize(
    "token,expected",
    [
        ("0", b"\x81\x00\x00\x00"),
        ("4095", b"\x81\x00\x0f\xff"),
        ("100", b"\x81\x00\x00\x64"),
        ("0x123", b"\x81\x00\x01\x23"),
    ],
)
def test_vlan_tag(buf, token, expected):
    VlanEncoder().encode([token], buf)
    assert buf.getvalue() == expected


@pytest.mark.parametrize("token", ["4096", "-1", "vid"])
def test_vlan_rejects_out_of_range_without_writing(buf, token):
    with pytest.raises(InvalidNumericLiteral):
        VlanEncoder().encode([token], buf)
    assert len(buf) == 0


def test_vlan_operand_count(buf):
    with pytest.raises(InvalidOperandCount):
        VlanEncoder().encode([], buf)


def test_encode_errors_are_value_errors():
    assert issubclass(EncodeError, ValueError)


if __name__ == "__main__":
    pytest.main([__file__])
