"""Tuple variation stores, the packed form of gvar and cvar variation data."""

from __future__ import annotations

import dataclasses
import struct
from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass, field

from fonttables.delta import Delta, Delta1D, Delta2D
from fonttables.iup import iup_contour
from fonttables.packeddeltas import PackedDeltas
from fonttables.packedpoints import PackedPoints
from fonttables.tuplevariationheader import TupleIndexFlags, TupleVariationHeader
from fonttables.utils import DeserializationError, Reader, SerializationError

SHARED_POINT_NUMBERS = 0x8000
COUNT_MASK = 0x0FFF

Point = tuple[int, int]


@dataclass
class TupleVariation:
    """One variation: a header locating it and its (optionally sparse) deltas.

    A delta of None marks a point whose value is inferred by IUP.
    """

    header: TupleVariationHeader
    deltas: list[Delta | None] = field(default_factory=list)

    def iup_delta(self, coords: Sequence[Point], ends: Sequence[int]) -> list[Point]:
        """Return a full list of (x, y) deltas, interpolating omitted ones.

        `coords` are the glyph's points and `ends` the index of the last
        point of every contour.
        """
        deltas = self.deltas
        if all(d is not None for d in deltas):
            return [d.get_2d() for d in deltas]
        result: list[Point] = []
        start = 0
        for end in ends:
            result.extend(iup_contour(deltas[start : end + 1], coords[start : end + 1]))
            start = end + 1
        return result

    def has_effect(self) -> bool:
        """Whether any explicit delta is non-zero."""
        return any(d is not None and d.get_2d() != (0, 0) for d in self.deltas)


def _points_or_all(packed: PackedPoints, point_count: int) -> list[int]:
    return list(packed.points) if packed.points is not None else list(range(point_count))


@dataclass
class TupleVariationStore:
    """A list of tuple variations for one glyph or for the cvt table."""

    variations: list[TupleVariation] = field(default_factory=list)

    @classmethod
    def decode(
        cls, reader: Reader, axis_count: int, is_gvar: bool, point_count: int
    ) -> TupleVariationStore:
        """Read a store whose data describes `point_count` points."""
        packed_count, _data_offset = reader.unpack("HH")
        count = packed_count & COUNT_MASK
        points_are_shared = bool(packed_count & SHARED_POINT_NUMBERS)

        headers = [TupleVariationHeader.decode(reader, axis_count) for _ in range(count)]

        shared_points: list[int] = []
        if points_are_shared:
            shared_points = _points_or_all(PackedPoints.decode(reader), point_count)

        variations = []
        for header in headers:
            if header.flags & TupleIndexFlags.PRIVATE_POINT_NUMBERS:
                points = deque(_points_or_all(PackedPoints.decode(reader), point_count))
            else:
                points = deque(shared_points)

            if is_gvar:
                xs = PackedDeltas.decode(reader, len(points)).deltas
                ys = PackedDeltas.decode(reader, len(points)).deltas
                values: list[Delta] = [Delta2D(x, y) for x, y in zip(xs, ys)]
            else:
                values = [Delta1D(v) for v in PackedDeltas.decode(reader, len(points)).deltas]
            supply = iter(values)

            all_deltas: list[Delta | None] = []
            for index in range(point_count):
                if points and index == points[0]:
                    try:
                        all_deltas.append(next(supply))
                    except StopIteration:
                        raise DeserializationError(
                            "fewer deltas than point numbers in tuple variation"
                        ) from None
                    points.popleft()
                else:
                    all_deltas.append(None)
            variations.append(TupleVariation(header, all_deltas))
        return cls(variations)

    @classmethod
    def from_bytes(
        cls, data: bytes, axis_count: int, is_gvar: bool, point_count: int
    ) -> TupleVariationStore:
        """Decode a store from a byte string."""
        return cls.decode(Reader(data), axis_count, is_gvar, point_count)

    def to_bytes(self) -> bytes:
        """Encode the store, using shared "all points" and private point lists."""
        count = len(self.variations)
        if count > COUNT_MASK:
            raise SerializationError(f"too many tuple variations: {count}")

        serialized_headers = bytearray()
        # Shared point numbers: zero means every point.
        data_block = bytearray(b"\x00")
        last_len = len(data_block)

        for variation in self.variations:
            header = dataclasses.replace(variation.header)
            deltas = variation.deltas
            if any(d is None for d in deltas):
                header.flags |= TupleIndexFlags.PRIVATE_POINT_NUMBERS
                private = [ix for ix, d in enumerate(deltas) if d is not None]
                data_block += PackedPoints(private).to_bytes()

            dx: list[int] = []
            dy: list[int] = []
            for delta in deltas:
                if isinstance(delta, Delta1D):
                    dx.append(delta.value)
                elif isinstance(delta, Delta2D):
                    dx.append(delta.x)
                    dy.append(delta.y)
            data_block += PackedDeltas(dx).to_bytes()
            if dy:
                data_block += PackedDeltas(dy).to_bytes()

            header.size = len(data_block) - last_len
            last_len = len(data_block)
            serialized_headers += header.to_bytes()

        data_offset = 4 + len(serialized_headers)
        if data_offset > 0xFFFF:
            raise SerializationError("tuple variation headers are too large")
        out = bytearray(struct.pack(">HH", count | SHARED_POINT_NUMBERS, data_offset))
        out += serialized_headers
        out += data_block
        return bytes(out)