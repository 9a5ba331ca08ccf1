import pytest

from fonttables.itemvariationstore import (
    ItemVariationData,
    ItemVariationStore,
    RegionAxisCoordinates,
    VariationRegionList,
)
from fonttables.utils import DeserializationError, Reader

BINARY_IVD = bytes(
    [
        0x00, 0x04, 0x00, 0x01, 0x00, 0x01, 0x00, 0x00, 0xFF, 0x38, 0xFF, 0xCE, 0x00, 0x64,
        0x00, 0xC8,
    ]
)

BINARY_IVS = bytes(
    [
        0x00, 0x01, 0x00, 0x00, 0x00, 0x0C, 0x00, 0x01, 0x00, 0x00, 0x00, 0x16, 0x00, 0x01,
        0x00, 0x01, 0x00, 0x00, 0x40, 0x00, 0x40, 0x00, 0x00, 0x04, 0x00, 0x01, 0x00, 0x01,
        0x00, 0x00, 0xFF, 0x38, 0xFF, 0xCE, 0x00, 0x64, 0x00, 0xC8,
    ]
)


def _expected_ivd():
    return ItemVariationData(
        region_indexes=[0],
        delta_values=[[-200], [-50], [100], [200]],
    )


def test_ivd_deserialize():
    assert ItemVariationData.from_bytes(BINARY_IVD) == _expected_ivd()


def test_ivs_deserialize():
    expected = ItemVariationStore(
        format=1,
        axis_count=1,
        variation_regions=[[RegionAxisCoordinates(0.0, 1.0, 1.0)]],
        variation_data=[_expected_ivd()],
    )
    assert ItemVariationStore.from_bytes(BINARY_IVS) == expected


def test_ivs_decode_inside_larger_buffer():
    reader = Reader(b"\xAA\xBB" + BINARY_IVS)
    reader.ptr = 2
    store = ItemVariationStore.decode(reader)
    assert store.variation_data == [_expected_ivd()]
    assert store.axis_count == 1


def test_ivd_mixed_word_and_byte_columns():
    data = bytes([0x00, 0x01, 0x00, 0x00, 0x00, 0x02, 0x00, 0x00, 0x00, 0x01, 0xFF, 0x38, 0x05])
    ivd = ItemVariationData.from_bytes(data)
    assert ivd.region_indexes == [0, 1]
    assert ivd.delta_values == [[-200, 5]]


def test_region_list_decode():
    reader = Reader(bytes([0x00, 0x01, 0x00, 0x01, 0xC0, 0x00, 0xC0, 0x00, 0x00, 0x00]))
    regions = VariationRegionList.decode(reader)
    assert regions.region_count == 1
    assert regions.variation_regions == [[RegionAxisCoordinates(-1.0, -1.0, 0.0)]]


def test_truncated_ivd():
    with pytest.raises(DeserializationError):
        ItemVariationData.from_bytes(BINARY_IVD[:-1])


def test_truncated_ivs():
    with pytest.raises(DeserializationError):
        ItemVariationStore.from_bytes(BINARY_IVS[:20])