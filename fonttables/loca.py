"""The loca (index to location) table."""

from __future__ import annotations

from dataclasses import dataclass, field

from fonttables.utils import DeserializationError, Reader, SerializationError


@dataclass
class Loca:
    """Glyph offsets into glyf; None marks an empty glyph."""

    indices: list[int | None] = field(default_factory=list)

    def to_bytes(self) -> bytes:
        """Always fails: loca is written together with glyf."""
        glyph_count = len(self.indices)
        empty_count = sum(1 for index in self.indices if index is None)
        raise SerializationError(
            f"Can't serialize loca directly ({glyph_count} glyphs, "
            f"{empty_count} empty); it is written alongside glyf"
        )


def from_bytes(data: bytes, loca_is_32bit: bool) -> Loca:
    """Decode a loca table in the short (16-bit, halved) or long format."""
    size = 4 if loca_is_32bit else 2
    count, leftover = divmod(len(data), size)
    if leftover:
        raise DeserializationError("loca table length is not a whole number of entries")
    reader = Reader(data)
    if loca_is_32bit:
        raw = reader.read_array("I", count)
    else:
        raw = [value * 2 for value in reader.read_array("H", count)]
    return Loca([None if a == b else a for a, b in zip(raw, raw[1:])])