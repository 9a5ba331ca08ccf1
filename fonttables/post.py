"""The post (PostScript) table."""

from __future__ import annotations

import math
import struct
from collections.abc import Sequence
from dataclasses import dataclass

from fonttables.utils import DeserializationError, Reader, SerializationError

APPLE_NAMES: tuple[str, ...] = (
    ".notdef", ".null", "nonmarkingreturn", "space", "exclam", "quotedbl",
    "numbersign", "dollar", "percent", "ampersand", "quotesingle", "parenleft",
    "parenright", "asterisk", "plus", "comma", "hyphen", "period", "slash",
    "zero", "one", "two", "three", "four", "five", "six", "seven", "eight",
    "nine", "colon", "semicolon", "less", "equal", "greater", "question", "at",
    "A", "B", "C", "D", "E", "F", "G", "H", "I", "J", "K", "L", "M", "N", "O",
    "P", "Q", "R", "S", "T", "U", "V", "W", "X", "Y", "Z", "bracketleft",
    "backslash", "bracketright", "asciicircum", "underscore", "grave",
    "a", "b", "c", "d", "e", "f", "g", "h", "i", "j", "k", "l", "m", "n", "o",
    "p", "q", "r", "s", "t", "u", "v", "w", "x", "y", "z", "braceleft", "bar",
    "braceright", "asciitilde", "Adieresis", "Aring", "Ccedilla", "Eacute",
    "Ntilde", "Odieresis", "Udieresis", "aacute", "agrave", "acircumflex",
    "adieresis", "atilde", "aring", "ccedilla", "eacute", "egrave",
    "ecircumflex", "edieresis", "iacute", "igrave", "icircumflex", "idieresis",
    "ntilde", "oacute", "ograve", "ocircumflex", "odieresis", "otilde",
    "uacute", "ugrave", "ucircumflex", "udieresis", "dagger", "degree", "cent",
    "sterling", "section", "bullet", "paragraph", "germandbls", "registered",
    "copyright", "trademark", "acute", "dieresis", "notequal", "AE", "Oslash",
    "infinity", "plusminus", "lessequal", "greaterequal", "yen", "mu",
    "partialdiff", "summation", "product", "pi", "integral", "ordfeminine",
    "ordmasculine", "Omega", "ae", "oslash", "questiondown", "exclamdown",
    "logicalnot", "radical", "florin", "approxequal", "Delta", "guillemotleft",
    "guillemotright", "ellipsis", "nonbreakingspace", "Agrave", "Atilde",
    "Otilde", "OE", "oe", "endash", "emdash", "quotedblleft", "quotedblright",
    "quoteleft", "quoteright", "divide", "lozenge", "ydieresis", "Ydieresis",
    "fraction", "currency", "guilsinglleft", "guilsinglright", "fi", "fl",
    "daggerdbl", "periodcentered", "quotesinglbase", "quotedblbase",
    "perthousand", "Acircumflex", "Ecircumflex", "Aacute", "Edieresis",
    "Egrave", "Iacute", "Icircumflex", "Idieresis", "Igrave", "Oacute",
    "Ocircumflex", "apple", "Ograve", "Uacute", "Ucircumflex", "Ugrave",
    "dotlessi", "circumflex", "tilde", "macron", "breve", "dotaccent", "ring",
    "cedilla", "hungarumlaut", "ogonek", "caron", "Lslash", "lslash", "Scaron",
    "scaron", "Zcaron", "zcaron", "brokenbar", "Eth", "eth", "Yacute",
    "yacute", "Thorn", "thorn", "minus", "multiply", "onesuperior",
    "twosuperior", "threesuperior", "onehalf", "onequarter", "threequarters",
    "franc", "Gbreve", "gbreve", "Idotaccent", "Scedilla", "scedilla",
    "Cacute", "cacute", "Ccaron", "ccaron", "dcroat",
)

_APPLE_INDEX = {name: index for index, name in enumerate(APPLE_NAMES)}
_CORE = struct.Struct(">Iihh5I")


def _decode_version(raw: int) -> float:
    major, minor = raw >> 16, raw & 0xFFFF
    digits = f"{minor:04x}"
    if digits.isdigit():
        return major + int(digits) / 10000
    return major + minor / 65536


def _encode_version(value: float) -> int:
    major = math.floor(value)
    minor = round((value - major) * 10000)
    if not 0 <= major <= 0xFFFF or not 0 <= minor <= 9999:
        raise SerializationError(f"version {value} cannot be encoded")
    return (major << 16) | int(f"{minor:04d}", 16)


def _encode_fixed(value: float) -> int:
    packed = round(value * 65536)
    if not -(2**31) <= packed < 2**31:
        raise SerializationError(f"{value} is out of range for Fixed")
    return packed


@dataclass
class Post:
    """A font's post table; glyph names are only stored for version 2."""

    version: float = 3.0
    italic_angle: float = 0.0
    underline_position: int = 0
    underline_thickness: int = 0
    is_fixed_pitch: int = 0
    min_mem_type42: int = 0
    max_mem_type42: int = 0
    min_mem_type1: int = 0
    max_mem_type1: int = 0
    glyphnames: list[str] | None = None

    @classmethod
    def new(
        cls,
        version: float,
        italic_angle: float,
        underline_position: int,
        underline_thickness: int,
        is_fixed_pitch: bool,
        glyphnames: Sequence[str] | None,
    ) -> Post:
        """Create a table with the memory usage fields set to zero."""
        return cls(
            version=version,
            italic_angle=italic_angle,
            underline_position=underline_position,
            underline_thickness=underline_thickness,
            is_fixed_pitch=1 if is_fixed_pitch else 0,
            glyphnames=list(glyphnames) if glyphnames is not None else None,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> Post:
        """Decode a post table of any version."""
        reader = Reader(data)
        (
            raw_version,
            raw_angle,
            underline_position,
            underline_thickness,
            is_fixed_pitch,
            min42,
            max42,
            min1,
            max1,
        ) = reader.unpack("Iihh5I")
        version = _decode_version(raw_version)
        glyphnames = None
        if version == 2.0:
            num_glyphs = reader.unpack("H")
            offsets = reader.read_array("H", num_glyphs)
            table: list[str] = []
            while reader.remaining:
                length = reader.unpack("B")
                raw = reader.read_bytes(length)
                try:
                    table.append(raw.decode("utf-8"))
                except UnicodeDecodeError as exc:
                    raise DeserializationError(f"bad glyph name: {exc}") from exc
            glyphnames = []
            for offset in offsets:
                if offset < len(APPLE_NAMES):
                    glyphnames.append(APPLE_NAMES[offset])
                elif offset - len(APPLE_NAMES) < len(table):
                    glyphnames.append(table[offset - len(APPLE_NAMES)])
                else:
                    raise DeserializationError(f"glyph name index {offset} out of range")
        return cls(
            version=version,
            italic_angle=raw_angle / 65536,
            underline_position=underline_position,
            underline_thickness=underline_thickness,
            is_fixed_pitch=is_fixed_pitch,
            min_mem_type42=min42,
            max_mem_type42=max42,
            min_mem_type1=min1,
            max_mem_type1=max1,
            glyphnames=glyphnames,
        )

    def to_bytes(self) -> bytes:
        """Encode the table, with a glyph name array when version is 2."""
        try:
            out = bytearray(
                _CORE.pack(
                    _encode_version(self.version),
                    _encode_fixed(self.italic_angle),
                    self.underline_position,
                    self.underline_thickness,
                    self.is_fixed_pitch,
                    self.min_mem_type42,
                    self.max_mem_type42,
                    self.min_mem_type1,
                    self.max_mem_type1,
                )
            )
            if self.version == 2.0 and self.glyphnames is not None:
                names = self.glyphnames
                out += struct.pack(">H", len(names))
                pool = bytearray()
                extra = 0
                for name in names:
                    index = _APPLE_INDEX.get(name)
                    if index is not None:
                        out += struct.pack(">H", index)
                        continue
                    out += struct.pack(">H", len(APPLE_NAMES) + extra)
                    encoded = name.encode("utf-8")
                    if len(encoded) > 255:
                        raise SerializationError(f"glyph name too long: {name!r}")
                    pool.append(len(encoded))
                    pool += encoded
                    extra += 1
                out += pool
        except struct.error as exc:
            raise SerializationError(f"post field out of range: {exc}") from exc
        return bytes(out)