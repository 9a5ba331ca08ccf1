"""The maxp (maximum profile) table."""

from __future__ import annotations

import dataclasses
import struct
from dataclasses import dataclass

from fonttables.utils import DeserializationError, Reader, SerializationError

_VERSION_05 = 0x00005000
_VERSION_10 = 0x00010000


@dataclass
class Maxp05:
    """Fields of a version 0.5 maxp table."""

    num_glyphs: int


@dataclass
class Maxp10:
    """Fields of a version 1.0 maxp table."""

    num_glyphs: int
    max_points: int = 0
    max_contours: int = 0
    max_composite_points: int = 0
    max_composite_contours: int = 0
    max_zones: int = 2
    max_twilight_points: int = 0
    max_storage: int = 0
    max_function_defs: int = 0
    max_instruction_defs: int = 0
    max_stack_elements: int = 0
    max_size_of_instructions: int = 0
    max_component_elements: int = 0
    max_component_depth: int = 0


_MAXP10_COUNT = len(dataclasses.fields(Maxp10))


def _encode_version(value: float) -> int:
    major = int(value)
    minor = round((value - major) * 10000)
    if not 0 <= major <= 0xFFFF or not 0 <= minor <= 9999:
        raise SerializationError(f"version {value} cannot be encoded")
    return (major << 16) | int(f"{minor:04d}", 16)


@dataclass
class Maxp:
    """A maxp table of either version."""

    version: float
    table: Maxp05 | Maxp10

    @classmethod
    def new05(cls, num_glyphs: int) -> Maxp:
        """A version 0.5 table with the given number of glyphs."""
        return cls(0.5, Maxp05(num_glyphs))

    @classmethod
    def new10(
        cls,
        num_glyphs: int,
        max_points: int,
        max_contours: int,
        max_composite_points: int,
        max_composite_contours: int,
        max_component_elements: int,
        max_component_depth: int,
    ) -> Maxp:
        """A version 1.0 table from glyph statistics; hinting fields are zero."""
        return cls(
            1.0,
            Maxp10(
                num_glyphs=num_glyphs,
                max_points=max_points,
                max_contours=max_contours,
                max_composite_points=max_composite_points,
                max_composite_contours=max_composite_contours,
                max_component_elements=max_component_elements,
                max_component_depth=max_component_depth,
            ),
        )

    def num_glyphs(self) -> int:
        """The number of glyphs, whichever version this is."""
        return self.table.num_glyphs

    @classmethod
    def from_bytes(cls, data: bytes) -> Maxp:
        """Decode a version 0.5 or 1.0 maxp table."""
        reader = Reader(data)
        version = reader.unpack("i")
        if version == _VERSION_05:
            return cls(0.5, Maxp05(reader.unpack("H")))
        if version == _VERSION_10:
            return cls(1.0, Maxp10(*reader.read_array("H", _MAXP10_COUNT)))
        raise DeserializationError("Unknown maxp version")

    def to_bytes(self) -> bytes:
        """Encode the version followed by the table's fields."""
        values = dataclasses.astuple(self.table)
        try:
            return struct.pack(
                f">I{len(values)}H", _encode_version(self.version), *values
            )
        except struct.error as exc:
            raise SerializationError(f"maxp field out of range: {exc}") from exc