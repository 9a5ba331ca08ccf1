"""Packed point-number arrays as stored in tuple variation data."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from itertools import accumulate

from fonttables.utils import Reader, SerializationError

POINTS_ARE_WORDS = 0x80
POINT_RUN_COUNT_MASK = 0x7F
_MAX_BYTE_RUN = 126
_MAX_WORD_RUN = 63


@dataclass
class PackedPoints:
    """Point numbers for which deltas are given; None means all points."""

    points: list[int] | None = None

    @classmethod
    def decode(cls, reader: Reader) -> PackedPoints:
        """Read a packed point array from `reader`."""
        first = reader.unpack("B")
        if first & 0x80:
            count = ((first & 0x7F) << 8) | reader.unpack("B")
        else:
            count = first
        if count == 0:
            return cls(None)
        steps: list[int] = []
        while len(steps) < count:
            control = reader.unpack("B")
            run_count = (control & POINT_RUN_COUNT_MASK) + 1
            fmt = "H" if control & POINTS_ARE_WORDS else "B"
            steps.extend(reader.read_array(fmt, run_count))
        return cls(list(accumulate(steps)))

    @classmethod
    def from_bytes(cls, data: bytes) -> PackedPoints:
        """Decode a packed point array from a byte string."""
        return cls.decode(Reader(data))

    def to_bytes(self) -> bytes:
        """Encode the point numbers as byte and word runs of differences."""
        if self.points is None:
            return b"\x00"
        points = self.points
        count = len(points)
        if count < 0x80:
            out = bytearray([count])
        elif count <= 0x7FFF:
            out = bytearray(struct.pack(">H", count | 0x8000))
        else:
            raise SerializationError(f"too many points to pack: {count}")

        steps = []
        previous = 0
        for point in points:
            step = point - previous
            if not 0 <= step <= 0xFFFF:
                raise SerializationError("point numbers must be increasing 16-bit values")
            steps.append(step)
            previous = point

        pos = 0
        while pos < count:
            use_bytes = steps[pos] <= 0xFF
            limit = _MAX_BYTE_RUN if use_bytes else _MAX_WORD_RUN
            run: list[int] = []
            while pos < count and len(run) < limit:
                step = steps[pos]
                if use_bytes and step > 0xFF:
                    break
                run.append(step)
                pos += 1
            if use_bytes:
                out.append(len(run) - 1)
                out.extend(run)
            else:
                out.append((len(run) - 1) | POINTS_ARE_WORDS)
                out += struct.pack(f">{len(run)}H", *run)
        return bytes(out)