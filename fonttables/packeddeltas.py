"""Packed delta arrays as stored in tuple variation data."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from fonttables.utils import Reader, SerializationError

DELTAS_ARE_WORDS = 0x40
DELTAS_ARE_ZERO = 0x80
DELTA_RUN_COUNT_MASK = 0x3F
_MAX_RUN = 64


def _is_byte(value: int) -> bool:
    return -128 <= value <= 127


def _emit_zeros(out: bytearray, length: int) -> None:
    full, rest = divmod(length, _MAX_RUN)
    out.extend([DELTAS_ARE_ZERO | (_MAX_RUN - 1)] * full)
    if rest:
        out.append(DELTAS_ARE_ZERO | (rest - 1))


def _emit_runs(out: bytearray, values: list[int], flag: int, fmt: str) -> None:
    for start in range(0, len(values), _MAX_RUN):
        chunk = values[start : start + _MAX_RUN]
        out.append(flag | (len(chunk) - 1))
        out += struct.pack(f">{len(chunk)}{fmt}", *chunk)


@dataclass
class PackedDeltas:
    """A run-length packed array of 16-bit deltas."""

    deltas: list[int] = field(default_factory=list)

    @classmethod
    def decode(cls, reader: Reader, num_points: int) -> PackedDeltas:
        """Read runs from `reader` until at least `num_points` deltas are known."""
        out: list[int] = []
        while len(out) < num_points:
            control = reader.unpack("B")
            count = (control & DELTA_RUN_COUNT_MASK) + 1
            if control & DELTAS_ARE_ZERO:
                out.extend([0] * count)
            elif control & DELTAS_ARE_WORDS:
                out.extend(reader.read_array("h", count))
            else:
                out.extend(reader.read_array("b", count))
        return cls(out)

    @classmethod
    def from_bytes(cls, data: bytes, num_points: int) -> PackedDeltas:
        """Decode `num_points` deltas from a byte string."""
        return cls.decode(Reader(data), num_points)

    def to_bytes(self) -> bytes:
        """Encode the deltas as zero, byte and word runs."""
        deltas = self.deltas
        for value in deltas:
            if not -32768 <= value <= 32767:
                raise SerializationError(f"delta {value} does not fit in 16 bits")
        n = len(deltas)
        out = bytearray()
        pos = 0
        while pos < n:
            start = pos
            if deltas[pos] == 0:
                while pos < n and deltas[pos] == 0:
                    pos += 1
                _emit_zeros(out, pos - start)
            elif _is_byte(deltas[pos]):
                while pos < n:
                    value = deltas[pos]
                    if not _is_byte(value):
                        break
                    # A pair of zeros is cheaper as a zero run.
                    if value == 0 and pos + 1 < n and deltas[pos + 1] == 0:
                        break
                    pos += 1
                _emit_runs(out, deltas[start:pos], 0, "b")
            else:
                while pos < n:
                    value = deltas[pos]
                    if value == 0:
                        break
                    # Two byte-sized values in a row are cheaper as a byte run.
                    if _is_byte(value) and pos + 1 < n and _is_byte(deltas[pos + 1]):
                        break
                    pos += 1
                _emit_runs(out, deltas[start:pos], DELTAS_ARE_WORDS, "h")
        return bytes(out)