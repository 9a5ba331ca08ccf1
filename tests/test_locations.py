import pytest

from fonttables.locations import (
    VariationModel,
    locations_to_regions,
    support_scalar,
)


def test_support_scalar_empty():
    assert support_scalar({}, {}) == pytest.approx(1.0)


def test_support_scalar_empty_support():
    assert support_scalar({"wght": 0.2}, {}) == pytest.approx(1.0)


def test_support_scalar_rising_edge():
    assert support_scalar({"wght": 0.2}, {"wght": (0.0, 2.0, 3.0)}) == pytest.approx(0.1)


def test_support_scalar_falling_edge():
    assert support_scalar({"wght": 2.5}, {"wght": (0.0, 2.0, 4.0)}) == pytest.approx(0.75)


def test_support_scalar_outside_region():
    assert support_scalar({"wght": -0.5}, {"wght": (0.0, 1.0, 1.0)}) == 0.0


def test_locations_to_regions():
    regions = locations_to_regions([{"wght": 1.0}, {"wght": -0.5}, {"wght": 0.5}])
    assert regions == [
        {"wght": (0.0, 1.0, 1.0)},
        {"wght": (-0.5, -0.5, 0.0)},
        {"wght": (0.0, 0.5, 1.0)},
    ]


@pytest.fixture
def model():
    locations = [
        {"wght": 0.55, "wdth": 0.0},
        {"wght": -0.55, "wdth": 0.0},
        {"wght": -1.0, "wdth": 0.0},
        {"wght": 0.0, "wdth": 1.0},
        {"wght": 0.66, "wdth": 1.0},
        {"wght": 0.66, "wdth": 0.66},
        {"wght": 0.0, "wdth": 0.0},
        {"wght": 1.0, "wdth": 1.0},
        {"wght": 1.0, "wdth": 0.0},
    ]
    return VariationModel(locations, ["wght"])


def test_model_locations(model):
    assert model.locations == [
        {},
        {"wght": -0.55},
        {"wght": -1.0},
        {"wght": 0.55},
        {"wght": 1.0},
        {"wdth": 1.0},
        {"wdth": 1.0, "wght": 1.0},
        {"wdth": 1.0, "wght": 0.66},
        {"wdth": 0.66, "wght": 0.66},
    ]


def test_model_supports(model):
    assert model.supports == [
        {},
        {"wght": (-1.0, -0.55, 0.0)},
        {"wght": (-1.0, -1.0, -0.55)},
        {"wght": (0.0, 0.55, 1.0)},
        {"wght": (0.55, 1.0, 1.0)},
        {"wdth": (0.0, 1.0, 1.0)},
        {"wdth": (0.0, 1.0, 1.0), "wght": (0.0, 1.0, 1.0)},
        {"wdth": (0.0, 1.0, 1.0), "wght": (0.0, 0.66, 1.0)},
        {"wdth": (0.0, 0.66, 1.0), "wght": (0.0, 0.66, 1.0)},
    ]


def test_model_delta_weights(model):
    weights = model.delta_weights
    assert weights[0] == {}
    for ix in range(1, 6):
        assert weights[ix] == {0: 1.0}
    assert weights[6] == {0: 1.0, 4: 1.0, 5: 1.0}
    assert weights[7][3] == pytest.approx(0.75555557, rel=1e-5)
    assert weights[7][4] == pytest.approx(0.24444449, rel=1e-5)
    assert weights[7][5] == pytest.approx(1.0)
    assert weights[7][6] == pytest.approx(0.66)


def test_model_keeps_original_locations(model):
    assert model.original_locations[0] == {"wght": 0.55, "wdth": 0.0}
    assert len(model.original_locations) == 9


def test_deltas_two_masters():
    vm = VariationModel([{"wght": 0.0}, {"wght": 1.0}], ["wght"])
    result = vm.get_deltas_and_supports([100, 150])
    assert result[0] == (100, {})
    assert result[1][0] == pytest.approx(50)
    assert result[1][1] == {"wght": (0.0, 1.0, 1.0)}


def test_deltas_with_missing_master():
    vm = VariationModel([{}, {"wght": 1.0}, {"wght": -1.0}], ["wght"])
    result = vm.get_deltas_and_supports([100, None, 80])
    assert len(result) == 2
    assert result[0] == (100, {})
    assert result[1][0] == pytest.approx(-20)
    assert result[1][1] == {"wght": (-1.0, -1.0, 0.0)}


def test_deltas_reconstruct_masters(model):
    values = [10.0, 20.0, 35.0, 40.0, 55.0, 60.0, 5.0, 80.0, 90.0]
    result = model.get_deltas_and_supports(values)
    for loc, value in zip(model.original_locations, values):
        interpolated = sum(delta * support_scalar(loc, support) for delta, support in result)
        assert interpolated == pytest.approx(value, abs=1e-4)


def test_deltas_wrong_count_raises():
    vm = VariationModel([{}, {"wght": 1.0}], ["wght"])
    with pytest.raises(ValueError):
        vm.get_deltas_and_supports([1, 2, 3])