"""The OS/2 (OS/2 and Windows metrics) table."""

from __future__ import annotations

import dataclasses
import struct
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from fonttables.utils import Reader, SerializationError, int_list_to_num

_CORE_FMT = "HhHHH11h10B4I4s3H3h2H"
_V1_FMT = "2I"
_V2_FMT = "hhHHH"
_V5_FMT = "HH"

_HEAD_FIELDS = (
    "version",
    "x_avg_char_width",
    "us_weight_class",
    "us_width_class",
    "fs_type",
    "y_subscript_x_size",
    "y_subscript_y_size",
    "y_subscript_x_offset",
    "y_subscript_y_offset",
    "y_superscript_x_size",
    "y_superscript_y_size",
    "y_superscript_x_offset",
    "y_superscript_y_offset",
    "y_strikeout_size",
    "y_strikeout_position",
    "s_family_class",
)
_TAIL_FIELDS = (
    "ul_unicode_range1",
    "ul_unicode_range2",
    "ul_unicode_range3",
    "ul_unicode_range4",
    "ach_vend_id",
    "fs_selection",
    "us_first_char_index",
    "us_last_char_index",
    "s_typo_ascender",
    "s_typo_descender",
    "s_typo_line_gap",
    "us_win_ascent",
    "us_win_descent",
)
_V1_FIELDS = ("ul_code_page_range1", "ul_code_page_range2")
_V2_FIELDS = (
    "sx_height",
    "s_cap_height",
    "us_default_char",
    "us_break_char",
    "us_max_context",
)
_V5_FIELDS = ("us_lower_optical_point_size", "us_upper_optical_point_size")


@dataclass
class Panose:
    """The ten PANOSE classification bytes."""

    family_type: int = 0
    serif_style: int = 0
    weight: int = 0
    proportion: int = 0
    contrast: int = 0
    stroke_variation: int = 0
    arm_style: int = 0
    letterform: int = 0
    midline: int = 0
    x_height: int = 0


@dataclass
class Os2:
    """A font's OS/2 table; optional fields exist only in later versions."""

    version: int = 0
    x_avg_char_width: int = 0
    us_weight_class: int = 0
    us_width_class: int = 0
    fs_type: int = 0
    y_subscript_x_size: int = 0
    y_subscript_y_size: int = 0
    y_subscript_x_offset: int = 0
    y_subscript_y_offset: int = 0
    y_superscript_x_size: int = 0
    y_superscript_y_size: int = 0
    y_superscript_x_offset: int = 0
    y_superscript_y_offset: int = 0
    y_strikeout_size: int = 0
    y_strikeout_position: int = 0
    s_family_class: int = 0
    panose: Panose = field(default_factory=Panose)
    ul_unicode_range1: int = 0
    ul_unicode_range2: int = 0
    ul_unicode_range3: int = 0
    ul_unicode_range4: int = 0
    ach_vend_id: bytes = b"NONE"
    fs_selection: int = 0
    us_first_char_index: int = 0
    us_last_char_index: int = 0
    s_typo_ascender: int = 0
    s_typo_descender: int = 0
    s_typo_line_gap: int = 0
    us_win_ascent: int = 0
    us_win_descent: int = 0
    ul_code_page_range1: int | None = None
    ul_code_page_range2: int | None = None
    sx_height: int | None = None
    s_cap_height: int | None = None
    us_default_char: int | None = None
    us_break_char: int | None = None
    us_max_context: int | None = None
    us_lower_optical_point_size: int | None = None
    us_upper_optical_point_size: int | None = None

    @classmethod
    def from_bytes(cls, data: bytes) -> Os2:
        """Decode an OS/2 table of any version."""
        reader = Reader(data)
        values = reader.unpack(_CORE_FMT)
        head, panose, tail = values[:16], values[16:26], values[26:]
        table = cls(
            panose=Panose(*panose),
            **dict(zip(_HEAD_FIELDS, head)),
            **dict(zip(_TAIL_FIELDS, tail)),
        )
        if table.version > 0:
            for name, value in zip(_V1_FIELDS, reader.unpack(_V1_FMT)):
                setattr(table, name, value)
        if table.version > 1:
            for name, value in zip(_V2_FIELDS, reader.unpack(_V2_FMT)):
                setattr(table, name, value)
        if table.version > 4:
            for name, value in zip(_V5_FIELDS, reader.unpack(_V5_FMT)):
                setattr(table, name, value)
        return table

    def _optional(self, names: Iterable[str]) -> list[int]:
        return [getattr(self, name) or 0 for name in names]

    def to_bytes(self) -> bytes:
        """Encode the table; missing optional fields are written as zero."""
        if len(self.ach_vend_id) != 4:
            raise SerializationError("vendor ID must be exactly four bytes")
        try:
            out = bytearray(
                struct.pack(
                    ">" + _CORE_FMT,
                    *(getattr(self, name) for name in _HEAD_FIELDS),
                    *dataclasses.astuple(self.panose),
                    *(getattr(self, name) for name in _TAIL_FIELDS),
                )
            )
            if self.version > 0:
                out += struct.pack(">" + _V1_FMT, *self._optional(_V1_FIELDS))
            if self.version > 1:
                out += struct.pack(">" + _V2_FMT, *self._optional(_V2_FIELDS))
            if self.version > 4:
                out += struct.pack(">" + _V5_FMT, *self._optional(_V5_FIELDS))
        except struct.error as exc:
            raise SerializationError(f"OS/2 field out of range: {exc}") from exc
        return bytes(out)

    def int_list_to_code_page_ranges(self, bitlist: Iterable[int]) -> None:
        """Set both code page range fields from a list of bit positions (0-63)."""
        bits = sorted(bitlist)
        low = [bit for bit in bits if bit < 32]
        high = [bit - 32 for bit in bits if bit >= 32]
        self.ul_code_page_range1 = int_list_to_num(low)
        self.ul_code_page_range2 = int_list_to_num(high)

    def calc_code_page_ranges(self, mapping: Mapping[int, int]) -> None:
        """Work out the supported code pages from a codepoint-to-glyph mapping."""
        unicodes = set(mapping)

        def has(char: str) -> bool:
            return ord(char) in unicodes

        has_ascii = all(cp in unicodes for cp in range(0x20, 0x7E))
        has_lineart = has("┤")
        ranges: list[int] = []

        if has("Þ") and has_ascii:
            ranges.append(0)  # Latin 1
        if has("Ľ") and has_ascii:
            ranges.append(1)  # Latin 2
        if has("Б"):
            ranges.append(2)  # Cyrillic
            if has("Ѕ") and has_lineart:
                ranges.append(57)  # IBM Cyrillic
            if has("╜") and has_lineart:
                ranges.append(49)  # MS-DOS Russian
        if has("Ά"):
            ranges.append(3)  # Greek
            if has("½") and has_lineart:
                ranges.append(48)  # IBM Greek
            if has("√") and has_lineart:
                ranges.append(60)  # Greek, former 437 G
        if has("İ") and has_ascii:
            ranges.append(4)  # Turkish
            if has_lineart:
                ranges.append(56)  # IBM Turkish
        if has("א"):
            ranges.append(5)  # Hebrew
            if has_lineart and has("√"):
                ranges.append(53)  # Hebrew
        if has("ر"):
            ranges.append(6)  # Arabic
            if has("√"):
                ranges.append(51)  # Arabic
            if has_lineart:
                ranges.append(61)  # Arabic; ASMO 708
        if has("ŗ") and has_ascii:
            ranges.append(7)  # Windows Baltic
            if has_lineart:
                ranges.append(59)  # MS-DOS Baltic
        if has("₫") and has_ascii:
            ranges.append(8)  # Vietnamese
        if has("ๅ"):
            ranges.append(16)  # Thai
        if has("エ"):
            ranges.append(17)  # JIS/Japan
        if has("ㄅ"):
            ranges.append(18)  # Chinese: Simplified
        if has("ㄱ"):
            ranges.append(19)  # Korean Wansung
        if has("央"):
            ranges.append(20)  # Chinese: Traditional
        if has("곴"):
            ranges.append(21)  # Korean Johab
        if has("♥") and has_ascii:
            ranges.append(30)  # OEM character set
        if has("þ") and has_ascii and has_lineart:
            ranges.append(54)  # MS-DOS Icelandic
        if has("╚") and has_ascii:
            ranges.append(62)  # WE/Latin 1
            ranges.append(63)  # US
        if has_ascii and has_lineart and has("√"):
            if has("Å"):
                ranges.append(50)  # MS-DOS Nordic
            if has("é"):
                ranges.append(52)  # MS-DOS Canadian French
            if has("õ"):
                ranges.append(55)  # MS-DOS Portuguese
        if has_ascii and has("‰") and has("∑"):
            ranges.append(29)  # Macintosh character set (US Roman)
        # With nothing else enabled, fall back to Latin 1 so the font still works.
        if not ranges:
            ranges.append(0)
        self.int_list_to_code_page_ranges(ranges)