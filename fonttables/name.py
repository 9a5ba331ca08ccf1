"""The name (naming) table."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field

from fonttables.utils import DeserializationError, Reader, SerializationError

_RECORD = struct.Struct(">6H")
_HEADER = struct.Struct(">3H")


def get_encoding(platform_id: int, encoding_id: int) -> str:
    """Return the codec name used for a platform/encoding pair."""
    if platform_id == 0:
        return "utf_16_be"
    if platform_id == 1:
        return "mac_cyrillic" if encoding_id == 7 else "mac_roman"
    if platform_id == 2:
        known = {0: "cp1252", 1: "utf_16_be", 2: "cp1252"}
        if encoding_id in known:
            return known[encoding_id]
    elif platform_id == 3:
        known = {
            0: "utf_16_be",
            1: "utf_16_be",
            2: "cp932",
            3: "gbk",
            4: "big5",
            5: "cp949",
        }
        if encoding_id in known:
            return known[encoding_id]
        if encoding_id != 6:
            return "utf_16_be"
    raise ValueError(
        f"no encoding known for platform {platform_id}, encoding {encoding_id}"
    )


class NameRecordID(enum.IntEnum):
    """Meaning of the name table's nameID values."""

    COPYRIGHT = 0
    FONT_FAMILY_NAME = 1
    FONT_SUBFAMILY_NAME = 2
    UNIQUE_ID = 3
    FULL_FONT_NAME = 4
    VERSION = 5
    POSTSCRIPT_NAME = 6
    TRADEMARK = 7
    MANUFACTURER = 8
    DESIGNER = 9
    DESCRIPTION = 10
    MANUFACTURER_URL = 11
    DESIGNER_URL = 12
    LICENSE = 13
    LICENSE_URL = 14
    RESERVED = 15
    PREFERRED_FAMILY_NAME = 16
    PREFERRED_SUBFAMILY_NAME = 17
    COMPATIBLE_FULL_NAME = 18
    SAMPLE_TEXT = 19
    POSTSCRIPT_CID = 20
    WWS_FAMILY_NAME = 21
    WWS_SUBFAMILY_NAME = 22
    LIGHT_BACKGROUND_PALETTE = 23
    DARK_BACKGROUND_PALETTE = 24
    VARIATIONS_POSTSCRIPT_NAME_PREFIX = 25


@dataclass
class NameRecord:
    """A single string in the name table."""

    platform_id: int
    encoding_id: int
    language_id: int
    name_id: int
    string: str

    @classmethod
    def windows_unicode(cls, name_id: int, string: str) -> NameRecord:
        """A Windows English record: (3,1,0x409), or (3,10,0x409) beyond the BMP."""
        encoding_id = 10 if any(ord(ch) > 0xFFFF for ch in string) else 1
        return cls(
            platform_id=3,
            encoding_id=encoding_id,
            language_id=0x409,
            name_id=int(name_id),
            string=string,
        )


@dataclass
class Name:
    """A font's naming table."""

    records: list[NameRecord] = field(default_factory=list)

    @classmethod
    def from_bytes(cls, data: bytes) -> Name:
        """Decode a name table; strings are read from just after the records."""
        reader = Reader(data)
        _format, count, _storage_offset = reader.unpack("HHH")
        raw_records = [reader.unpack("6H") for _ in range(count)]
        records = []
        reader.push()
        for platform_id, encoding_id, language_id, name_id, length, offset in raw_records:
            reader.seek_from_table(offset)
            raw = reader.read_bytes(length)
            try:
                codec = get_encoding(platform_id, encoding_id)
            except ValueError as exc:
                raise DeserializationError(str(exc)) from exc
            records.append(
                NameRecord(
                    platform_id=platform_id,
                    encoding_id=encoding_id,
                    language_id=language_id,
                    name_id=name_id,
                    string=raw.decode(codec, "replace"),
                )
            )
        reader.pop()
        return cls(records)

    def to_bytes(self) -> bytes:
        """Encode the table as a format 0 name table."""
        count = len(self.records)
        out = bytearray()
        pool = bytearray()
        try:
            out += _HEADER.pack(0, count, 6 + 12 * count)
            for record in self.records:
                try:
                    codec = get_encoding(record.platform_id, record.encoding_id)
                except ValueError as exc:
                    raise SerializationError(str(exc)) from exc
                encoded = record.string.encode(codec, "replace")
                out += _RECORD.pack(
                    record.platform_id,
                    record.encoding_id,
                    record.language_id,
                    record.name_id,
                    len(encoded),
                    len(pool),
                )
                pool += encoded
        except struct.error as exc:
            raise SerializationError(f"name table field out of range: {exc}") from exc
        return bytes(out + pool)