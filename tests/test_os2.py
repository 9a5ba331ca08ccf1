import pytest

from fonttables.os2 import Os2, Panose
from fonttables.utils import DeserializationError, SerializationError, int_list_to_num

ASCII = {cp: 1 for cp in range(0x20, 0x7E)}


def _sample(version):
    return Os2(
        version=version,
        x_avg_char_width=500,
        us_weight_class=400,
        us_width_class=5,
        y_strikeout_position=-250,
        panose=Panose(2, 0, 5, 3, 0, 0, 0, 0, 0, 0),
        ul_unicode_range1=7,
        ach_vend_id=b"TEST",
        s_typo_ascender=800,
        s_typo_descender=-200,
        us_win_ascent=900,
        us_win_descent=300,
    )


def test_version0_length_and_roundtrip():
    table = _sample(0)
    data = table.to_bytes()
    assert len(data) == 78
    decoded = Os2.from_bytes(data)
    assert decoded == table
    assert decoded.ul_code_page_range1 is None


@pytest.mark.parametrize("version", [1, 2, 3, 4, 5])
def test_later_versions_roundtrip(version):
    table = _sample(version)
    table.ul_code_page_range1 = 1
    table.ul_code_page_range2 = 2
    if version > 1:
        table.sx_height = 500
        table.s_cap_height = 700
        table.us_default_char = 0
        table.us_break_char = 32
        table.us_max_context = 3
    if version > 4:
        table.us_lower_optical_point_size = 8
        table.us_upper_optical_point_size = 72
    assert Os2.from_bytes(table.to_bytes()) == table


def test_missing_optional_fields_written_as_zero():
    decoded = Os2.from_bytes(_sample(2).to_bytes())
    assert decoded.ul_code_page_range1 == 0
    assert decoded.sx_height == 0
    assert decoded.us_lower_optical_point_size is None


def test_version0_ignores_optional_fields():
    with_extra = _sample(0)
    with_extra.ul_code_page_range1 = 5
    assert with_extra.to_bytes() == _sample(0).to_bytes()


def test_longer_versions_extend_shorter():
    assert _sample(5).to_bytes()[2:78] == _sample(0).to_bytes()[2:]


def test_bad_vendor_id():
    table = _sample(0)
    table.ach_vend_id = b"TOOLONG"
    with pytest.raises(SerializationError):
        table.to_bytes()


def test_out_of_range_field():
    table = _sample(0)
    table.us_weight_class = 70000
    with pytest.raises(SerializationError):
        table.to_bytes()


def test_truncated_data():
    data = _sample(1).to_bytes()
    with pytest.raises(DeserializationError):
        Os2.from_bytes(data[:-1])


def test_int_list_to_code_page_ranges_splits_at_32():
    table = _sample(1)
    table.int_list_to_code_page_ranges([33, 0, 4])
    assert table.ul_code_page_range1 == int_list_to_num([0, 4])
    assert table.ul_code_page_range2 == int_list_to_num([1])


def test_calc_empty_falls_back_to_latin1():
    table = _sample(1)
    table.calc_code_page_ranges({})
    assert table.ul_code_page_range1 == int_list_to_num([0])
    assert table.ul_code_page_range2 == 0


def test_calc_latin2_requires_ascii():
    table = _sample(1)
    table.calc_code_page_ranges({ord("Ľ"): 1})
    assert table.ul_code_page_range1 == int_list_to_num([0])

    with_ascii = _sample(1)
    with_ascii.calc_code_page_ranges({**ASCII, ord("Ľ"): 1})
    assert with_ascii.ul_code_page_range1 == int_list_to_num([1])


def test_calc_latin1_and_us():
    table = _sample(1)
    table.calc_code_page_ranges({**ASCII, ord("Þ"): 1, ord("╚"): 2})
    expected = _sample(1)
    expected.int_list_to_code_page_ranges([0, 62, 63])
    assert table.ul_code_page_range1 == expected.ul_code_page_range1
    assert table.ul_code_page_range2 == expected.ul_code_page_range2


def test_calc_cyrillic_with_lineart():
    table = _sample(1)
    table.calc_code_page_ranges({ord("Б"): 1, ord("Ѕ"): 2, ord("┤"): 3})
    expected = _sample(1)
    expected.int_list_to_code_page_ranges([2, 57])
    assert (table.ul_code_page_range1, table.ul_code_page_range2) == (
        expected.ul_code_page_range1,
        expected.ul_code_page_range2,
    )


def test_calc_cjk():
    table = _sample(1)
    table.calc_code_page_ranges({ord("エ"): 1, ord("ㄱ"): 2})
    assert table.ul_code_page_range1 == int_list_to_num([17, 19])
    assert table.ul_code_page_range2 == 0