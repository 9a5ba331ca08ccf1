# fonttables

Pure-Python readers and writers for a handful of OpenType font tables and for
the data structures that variable fonts use. It has no dependencies beyond the
standard library.

## Installation

    pip install .

To run the test suite:

    pip install .[test]
    pytest

## What it covers

Tables:

- `fonttables.maxp.Maxp`: maximum profile, versions 0.5 (`Maxp05`) and 1.0
  (`Maxp10`). `Maxp.new05`, `Maxp.new10`, `num_glyphs()`, `from_bytes`,
  `to_bytes`.
- `fonttables.name.Name`: the naming table, made of `NameRecord` entries.
  `NameRecord.windows_unicode` builds a (3, 1, 0x409) record, or
  (3, 10, 0x409) when the string has characters beyond the BMP.
  `NameRecordID` names the standard name IDs, and `get_encoding` gives the
  Python codec used for a platform/encoding pair.
- `fonttables.os2.Os2`: OS/2 metrics for versions 0 to 5, with `Panose`.
  `calc_code_page_ranges` sets the code page range fields from a
  codepoint-to-glyph mapping; `int_list_to_code_page_ranges` sets them from a
  list of bit positions.
- `fonttables.post.Post`: the PostScript table, including the version 2.0
  glyph name array. `Post.new` creates a table with the memory fields zeroed.
- `fonttables.loca`: `from_bytes(data, loca_is_32bit)` decodes glyph offsets
  into a `Loca`, with `None` for empty glyphs.

Variation data:

- `fonttables.delta`: `Delta1D` and `Delta2D` values.
- `fonttables.packeddeltas.PackedDeltas` and
  `fonttables.packedpoints.PackedPoints`: the run-length packed arrays.
- `fonttables.tuplevariationheader`: `TupleVariationHeader` and
  `TupleIndexFlags`.
- `fonttables.tuplevariationstore`: `TupleVariationStore` and
  `TupleVariation` (with `iup_delta` and `has_effect`).
- `fonttables.itemvariationstore`: `ItemVariationStore`,
  `ItemVariationData`, `VariationRegionList` and `RegionAxisCoordinates`
  (decoding only).
- `fonttables.iup`: interpolation of unreferenced points (`iup_segment`,
  `iup_contour`) and delta optimisation (`iup_contour_optimize`,
  `optimize_deltas`, `can_iup_between`).
- `fonttables.locations`: `VariationModel`, which orders master locations and
  computes supports and delta weights, plus `support_scalar` and
  `locations_to_regions`. Locations are dicts of axis tag to normalized value.

Helpers in `fonttables.utils`: the big-endian `Reader`, `int_list_to_num`,
`is_all_the_same`, and F2DOT14 conversion with `f2dot14_to_float` and
`float_to_f2dot14`.

## Example

    from fonttables.maxp import Maxp

    table = Maxp.new05(935)
    data = table.to_bytes()          # b"\x00\x00P\x00\x03\xa7"
    assert Maxp.from_bytes(data).num_glyphs() == 935

    from fonttables.packeddeltas import PackedDeltas

    packed = PackedDeltas([0] * 66).to_bytes()   # b"\xbf\x81"
    assert PackedDeltas.from_bytes(packed, 66) == PackedDeltas([0] * 66)

Malformed input raises `fonttables.utils.DeserializationError`; data that
cannot be written raises `fonttables.utils.SerializationError`.

## What it does not do

- It works on single tables and structures, not on whole font files: there is
  no font file reader or writer, and no `glyf`, `head`, `cmap`, `hmtx`,
  `gvar` or `fvar` table.
- `Loca.to_bytes` always raises `SerializationError`; the loca table is only
  decoded.
- Item variation stores are only decoded, not written.
- `optimize_deltas` and `TupleVariation.iup_delta` take glyph point
  coordinates and contour end indices directly, since there is no glyph model
  to take them from.
- There is no command-line tool.