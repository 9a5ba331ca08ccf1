"""Item variation stores, holding deltas for scalar values (MVAR, HVAR, ...)."""

from __future__ import annotations

from dataclasses import dataclass, field

from fonttables.utils import Reader, f2dot14_to_float


@dataclass
class RegionAxisCoordinates:
    """Start, peak and end of a region along one axis."""

    start_coord: float
    peak_coord: float
    end_coord: float


@dataclass
class ItemVariationData:
    """Delta rows for a set of items; columns correspond to regions."""

    region_indexes: list[int] = field(default_factory=list)
    delta_values: list[list[int]] = field(default_factory=list)

    @classmethod
    def decode(cls, reader: Reader) -> ItemVariationData:
        """Read an item variation data subtable."""
        item_count, short_delta_count, region_count = reader.unpack("HHH")
        region_indexes = reader.read_array("H", region_count)
        delta_values = []
        for _ in range(item_count):
            row = [
                reader.unpack("h" if col <= short_delta_count else "b")
                for col in range(region_count)
            ]
            delta_values.append(row)
        return cls(region_indexes, delta_values)

    @classmethod
    def from_bytes(cls, data: bytes) -> ItemVariationData:
        """Decode an item variation data subtable from a byte string."""
        return cls.decode(Reader(data))


@dataclass
class VariationRegionList:
    """The regions used by an item variation store."""

    axis_count: int
    region_count: int
    variation_regions: list[list[RegionAxisCoordinates]]

    @classmethod
    def decode(cls, reader: Reader) -> VariationRegionList:
        """Read a variation region list."""
        axis_count, region_count = reader.unpack("HH")
        regions = []
        for _ in range(region_count):
            raw = reader.read_array("h", 3 * axis_count)
            coords = [f2dot14_to_float(v) for v in raw]
            regions.append(
                [
                    RegionAxisCoordinates(*coords[axis * 3 : axis * 3 + 3])
                    for axis in range(axis_count)
                ]
            )
        return cls(axis_count, region_count, regions)


@dataclass
class ItemVariationStore:
    """An item variation store: regions plus variation data subtables."""

    format: int = 1
    axis_count: int = 0
    variation_regions: list[list[RegionAxisCoordinates]] = field(default_factory=list)
    variation_data: list[ItemVariationData] = field(default_factory=list)

    @classmethod
    def decode(cls, reader: Reader) -> ItemVariationStore:
        """Read a store; offsets are relative to its first byte."""
        reader.push()
        fmt, region_list_offset, data_count = reader.unpack("HIH")
        data_offsets = reader.read_array("I", data_count)
        reader.seek_from_table(region_list_offset)
        region_list = VariationRegionList.decode(reader)
        variation_data = []
        for offset in data_offsets:
            reader.seek_from_table(offset)
            variation_data.append(ItemVariationData.decode(reader))
        reader.pop()
        return cls(
            format=fmt,
            axis_count=region_list.axis_count,
            variation_regions=region_list.variation_regions,
            variation_data=variation_data,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> ItemVariationStore:
        """Decode a store from a byte string."""
        return cls.decode(Reader(data))