"""Binary reading helpers, error types and small numeric utilities."""

from __future__ import annotations

import math
import struct
from collections.abc import Iterable

_F2DOT14_SCALE = 16384


class DeserializationError(ValueError):
    """Raised when binary data cannot be decoded."""


class SerializationError(ValueError):
    """Raised when a value cannot be encoded to binary."""


class Reader:
    """A big-endian cursor over a byte buffer with a stack of table starts."""

    def __init__(self, data):
        self._data = bytes(data)
        self.ptr = 0
        self._tops: list[int] = []

    @property
    def top_of_table(self) -> int:
        """Position of the innermost pushed table, or 0 if none."""
        return self._tops[-1] if self._tops else 0

    @property
    def remaining(self) -> int:
        """Number of bytes left after the cursor."""
        return max(len(self._data) - self.ptr, 0)

    def _take(self, size: int) -> int:
        start = self.ptr
        end = start + size
        if start < 0 or end > len(self._data):
            raise DeserializationError(
                f"wanted {size} bytes at offset {start}, "
                f"but the buffer holds {len(self._data)}"
            )
        self.ptr = end
        return start

    def unpack(self, fmt: str):
        """Read values in struct format `fmt`; one value is returned bare."""
        layout = struct.Struct(">" + fmt)
        start = self._take(layout.size)
        values = layout.unpack_from(self._data, start)
        return values[0] if len(values) == 1 else values

    def read_bytes(self, count: int) -> bytes:
        """Read `count` raw bytes."""
        start = self._take(count)
        return self._data[start : start + count]

    def read_array(self, fmt: str, count: int) -> list:
        """Read `count` values of the single struct type `fmt`."""
        if count <= 0:
            return []
        layout = struct.Struct(f">{count}{fmt}")
        start = self._take(layout.size)
        return list(layout.unpack_from(self._data, start))

    def push(self) -> None:
        """Mark the current position as the start of a table."""
        self._tops.append(self.ptr)

    def pop(self) -> None:
        """Forget the innermost table start."""
        if not self._tops:
            raise DeserializationError("pop without a matching push")
        self._tops.pop()

    def seek_from_table(self, offset: int) -> None:
        """Move the cursor to `offset` bytes past the innermost table start."""
        self.ptr = self.top_of_table + offset


def int_list_to_num(int_list: Iterable[int]) -> int:
    """Combine a list of bit positions into a 32-bit integer."""
    flags = 0
    for bit in int_list:
        if not 0 <= bit < 32:
            raise ValueError(f"bit position {bit} does not fit in 32 bits")
        flags |= 1 << bit
    return flags


def is_all_the_same(iterable: Iterable) -> bool:
    """Return True if every item equals the first (or there are none)."""
    iterator = iter(iterable)
    sentinel = object()
    first = next(iterator, sentinel)
    if first is sentinel:
        return True
    return all(item == first for item in iterator)


def f2dot14_to_float(value: int) -> float:
    """Decode a packed signed 2.14 fixed-point number."""
    return value / _F2DOT14_SCALE


def float_to_f2dot14(value: float) -> int:
    """Encode a float as a packed signed 2.14 fixed-point number."""
    scaled = value * _F2DOT14_SCALE
    packed = int(math.copysign(math.floor(abs(scaled) + 0.5), scaled))
    if not -32768 <= packed <= 32767:
        raise SerializationError(f"{value} is out of range for F2DOT14")
    return packed