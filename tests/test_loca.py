import struct

import pytest

from fonttables.loca import Loca, from_bytes
from fonttables.utils import DeserializationError, SerializationError


def test_loca_de_16bit():
    binary = bytes([0x00, 0x00, 0x01, 0x30, 0x01, 0x30, 0x01, 0x4C])
    assert from_bytes(binary, False).indices == [0, None, 608]


def test_loca_de_32bit():
    binary = struct.pack(">4I", 0, 10, 10, 20)
    assert from_bytes(binary, True).indices == [0, None, 10]


def test_loca_empty():
    assert from_bytes(b"", False) == Loca([])


def test_loca_single_entry_has_no_glyphs():
    assert from_bytes(struct.pack(">I", 0), True).indices == []


def test_loca_partial_entry_raises():
    with pytest.raises(DeserializationError):
        from_bytes(b"\x00\x00\x01", False)


def test_loca_cannot_serialize():
    with pytest.raises(SerializationError):
        Loca([0, None]).to_bytes()