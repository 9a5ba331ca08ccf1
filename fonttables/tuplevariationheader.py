"""Tuple variation headers, which locate deltas in the design space."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass

from fonttables.utils import (
    Reader,
    SerializationError,
    f2dot14_to_float,
    float_to_f2dot14,
)


class TupleIndexFlags(enum.IntFlag):
    """Flags packed into a tuple variation header's tuple index."""

    EMBEDDED_PEAK_TUPLE = 0x8000
    INTERMEDIATE_REGION = 0x4000
    PRIVATE_POINT_NUMBERS = 0x2000
    TUPLE_INDEX_MASK = 0x0FFF


_KNOWN_BITS = (
    TupleIndexFlags.EMBEDDED_PEAK_TUPLE
    | TupleIndexFlags.INTERMEDIATE_REGION
    | TupleIndexFlags.PRIVATE_POINT_NUMBERS
    | TupleIndexFlags.TUPLE_INDEX_MASK
)


def _read_tuple(reader: Reader, axis_count: int) -> list[float]:
    return [f2dot14_to_float(v) for v in reader.read_array("h", axis_count)]


def _pack_tuple(coords: list[float]) -> bytes:
    return b"".join(struct.pack(">h", float_to_f2dot14(c)) for c in coords)


@dataclass
class TupleVariationHeader:
    """Header of one tuple variation.

    `size` and `flags` are written as given, so they must already match the
    data that follows the header.
    """

    size: int = 0
    flags: TupleIndexFlags = TupleIndexFlags(0)
    shared_tuple_index: int = 0
    peak_tuple: list[float] | None = None
    start_tuple: list[float] | None = None
    end_tuple: list[float] | None = None

    @classmethod
    def decode(cls, reader: Reader, axis_count: int) -> TupleVariationHeader:
        """Read a header for a font with `axis_count` axes."""
        size, raw = reader.unpack("HH")
        flags = TupleIndexFlags(raw & int(_KNOWN_BITS))
        header = cls(
            size=size,
            flags=flags,
            shared_tuple_index=raw & int(TupleIndexFlags.TUPLE_INDEX_MASK),
        )
        if flags & TupleIndexFlags.EMBEDDED_PEAK_TUPLE:
            header.peak_tuple = _read_tuple(reader, axis_count)
        if flags & TupleIndexFlags.INTERMEDIATE_REGION:
            header.start_tuple = _read_tuple(reader, axis_count)
            header.end_tuple = _read_tuple(reader, axis_count)
        return header

    @classmethod
    def from_bytes(cls, data: bytes, axis_count: int) -> TupleVariationHeader:
        """Decode a header from a byte string."""
        return cls.decode(Reader(data), axis_count)

    def to_bytes(self) -> bytes:
        """Encode the header and any embedded tuples."""
        if not 0 <= self.size <= 0xFFFF:
            raise SerializationError(f"header size {self.size} does not fit in 16 bits")
        index = self.shared_tuple_index | int(self.flags)
        if not 0 <= index <= 0xFFFF:
            raise SerializationError(f"tuple index {index} does not fit in 16 bits")
        out = bytearray(struct.pack(">HH", self.size, index))
        if self.flags & TupleIndexFlags.EMBEDDED_PEAK_TUPLE:
            if self.peak_tuple is None:
                raise SerializationError("EMBEDDED_PEAK_TUPLE was set, but there wasn't one.")
            out += _pack_tuple(self.peak_tuple)
        if self.flags & TupleIndexFlags.INTERMEDIATE_REGION:
            if self.start_tuple is None:
                raise SerializationError(
                    "INTERMEDIATE_REGION was set, but there was no start tuple."
                )
            if self.end_tuple is None:
                raise SerializationError(
                    "INTERMEDIATE_REGION was set, but there was no end tuple."
                )
            out += _pack_tuple(self.start_tuple)
            out += _pack_tuple(self.end_tuple)
        return bytes(out)