"""
Append-only output buffer.

Every action of a run appends to one ByteBuffer. Space is handed out through
reserve(), which grows the buffer and returns a writable view over the new
bytes. Views must be released before the buffer grows again, so callers use
them as context managers:

    with buffer.reserve(4) as view:
        view[:] = b"\\x81\\x00\\x00\\x01"
"""

import logging

from .errors import AllocationFailure

logger = logging.getLogger(__name__)


class ByteBuffer:
    """
    Growable contiguous byte container backed by a bytearray.

    Length only grows during a run. Freshly reserved bytes are zero, so
    callers that need zero fill (pad, zero) do not write at all.
    """

    def __init__(self) -> None:
        self._data = bytearray()

    def __len__(self) -> int:
        return len(self._data)

    def reserve(self, n: int) -> memoryview:
        """
        Append n zero bytes and return a writable view over them.

        Args:
            n: Number of bytes to append (may be zero)

        Returns:
            memoryview: View of exactly n new bytes at the end of the buffer

        Raises:
            ValueError: If n is negative
            AllocationFailure: If the buffer cannot grow
        """
        if n < 0:
            raise ValueError(f"cannot reserve a negative byte count ({n})")

        start = len(self._data)
        try:
            self._data.extend(bytes(n))
        except (MemoryError, OverflowError) as e:
            raise AllocationFailure(
                f"unable to grow buffer from {start} by {n} bytes"
            ) from e

        logger.debug(f"Reserved {n} bytes at offset {start}")
        return memoryview(self._data)[start:]

    def getvalue(self) -> bytes:
        """Return an immutable copy of everything appended so far."""
        return bytes(self._data)
