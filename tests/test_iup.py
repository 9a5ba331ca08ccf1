import pytest

from fonttables.delta import Delta1D, Delta2D
from fonttables.iup import (
    can_iup_between,
    iup_contour,
    iup_contour_optimize,
    iup_segment,
    optimize_deltas,
)

IUP1_OPTIMIZED = [Delta2D(155, 0), Delta2D(123, 0), Delta2D(32, 0), Delta2D(64, 0), None]
IUP1_COORDS = [(751, 0), (433, 700), (323, 700), (641, 0), (751, 0)]
IUP1_UNOPTIMIZED = [(155, 0), (123, 0), (32, 0), (64, 0), (155, 0)]

IUP2_OPTIMIZED = [Delta2D(38, 27), None, Delta2D(73, -13), None, None]
IUP2_COORDS = [(152, 284), (152, 204), (567, 204), (567, 284), (152, 284)]
IUP2_UNOPTIMIZED = [(38, 27), (38, -13), (73, -13), (73, 27), (38, 27)]


def test_can_iup():
    coords = [(261, 611), (261, 113), (108, 113), (108, 611)]
    deltas = [(38, 125), (38, -125), (-38, -125), (-38, 125)]
    assert can_iup_between(deltas, coords, 1, 3, 0.5) is True
    assert can_iup_between(deltas, coords, -1, 1, 0.5) is True


def test_can_iup_between_rejects_adjacent():
    with pytest.raises(ValueError):
        can_iup_between([(0, 0)] * 3, [(0, 0)] * 3, 0, 1, 0.5)


def test_can_iup_between_false_for_outlier():
    coords = [(0, 0), (5, 0), (10, 0)]
    deltas = [(0, 0), (50, 0), (10, 0)]
    assert can_iup_between(deltas, coords, 0, 2, 0.5) is False


def test_do_iup1_optimize():
    assert iup_contour(IUP1_OPTIMIZED, IUP1_COORDS) == IUP1_UNOPTIMIZED
    assert iup_contour_optimize(IUP1_UNOPTIMIZED, IUP1_COORDS, 0.5) == IUP1_OPTIMIZED


def test_do_iup2_optimize():
    assert iup_contour(IUP2_OPTIMIZED, IUP2_COORDS) == IUP2_UNOPTIMIZED
    assert iup_contour_optimize(IUP2_UNOPTIMIZED, IUP2_COORDS, 0.5) == IUP2_OPTIMIZED


def test_iup_contour_all_missing_gives_zeros():
    assert iup_contour([None, None, None], [(0, 0), (1, 1), (2, 2)]) == [(0, 0)] * 3


def test_iup_segment_clamps_outside():
    result = iup_segment([(-5, 0), (20, 0)], (0, 0), (10, 0), (10, 0), (20, 0))
    assert result == [(10, 0), (20, 0)]


def test_optimize_small_deltas_all_dropped():
    coords = [(0, 0), (10, 0), (10, 10)]
    assert iup_contour_optimize([(0, 0), (0, 0), (0, 0)], coords, 0.5) == [None] * 3


def test_optimize_constant_deltas_keep_first():
    coords = [(0, 0), (10, 0), (10, 10)]
    result = iup_contour_optimize([(4, 4)] * 3, coords, 0.5)
    assert result == [Delta2D(4, 4), None, None]


def test_optimize_deltas_multiple_contours():
    coords = IUP1_COORDS + IUP2_COORDS
    deltas = [Delta2D(*d) for d in IUP1_UNOPTIMIZED + IUP2_UNOPTIMIZED]
    result = optimize_deltas(deltas, coords, [4, 9])
    assert result == IUP1_OPTIMIZED + IUP2_OPTIMIZED


def test_optimize_deltas_reoptimizes_sparse_input():
    result = optimize_deltas(IUP2_OPTIMIZED, IUP2_COORDS, [4])
    assert result == IUP2_OPTIMIZED


def test_optimize_deltas_rejects_scalar_deltas():
    with pytest.raises(TypeError):
        optimize_deltas([Delta1D(1), Delta1D(2)], [(0, 0), (1, 1)], [1])