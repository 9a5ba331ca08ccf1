"""Master locations and the variation model built from them."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from functools import cmp_to_key
from typing import Any

from fonttables.utils import float_to_f2dot14

Location = dict[str, float]
Support = dict[str, tuple[float, float, float]]

_EPSILON = 1.1920929e-07


def _cmp(left: Any, right: Any) -> int:
    return (left > right) - (left < right)


def support_scalar(loc: Mapping[str, float], support: Mapping[str, tuple]) -> float:
    """How strongly a support region applies at a normalized location."""
    scalar = 1.0
    for axis, (lower, peak, upper) in support.items():
        if peak == 0.0:
            continue
        if lower > peak or peak > upper:
            continue
        if lower < 0.0 < upper:
            continue
        value = loc.get(axis, 0.0)
        if abs(value - peak) < _EPSILON:
            continue
        if value <= lower or upper <= value:
            return 0.0
        if value < peak:
            scalar *= (value - lower) / (peak - lower)
        else:
            scalar *= (value - upper) / (peak - upper)
    return scalar


def locations_to_regions(locations: Sequence[Mapping[str, float]]) -> list[Support]:
    """Turn each location into a region reaching out to the axis extremes."""
    axis_minimum: dict[str, float] = {}
    axis_maximum: dict[str, float] = {}
    for loc in locations:
        for tag, value in loc.items():
            axis_maximum[tag] = max(axis_maximum.get(tag, value), value)
            axis_minimum[tag] = min(axis_minimum.get(tag, value), value)
    return [
        {
            axis: (0.0, value, axis_maximum[axis])
            if value > 0.0
            else (axis_minimum[axis], value, 0.0)
            for axis, value in loc.items()
        }
        for loc in locations
    ]


class VariationModel:
    """Orders master locations and computes their supports and delta weights.

    Locations must be given in normalized coordinates (-1..1).
    """

    def __init__(
        self, locations: Sequence[Mapping[str, float]], axis_order: Sequence[str]
    ) -> None:
        self.original_locations: list[Location] = [dict(loc) for loc in locations]
        self.axis_order: list[str] = list(axis_order)
        stripped = [
            {axis: value for axis, value in loc.items() if value != 0.0}
            for loc in locations
        ]
        self.sort_order: list[int] = self._sort_indices(stripped)
        self.locations: list[Location] = [stripped[ix] for ix in self.sort_order]
        self.supports: list[Support] = self._compute_master_supports()
        self.delta_weights: list[dict[int, float]] = self._compute_delta_weights()

    def _sort_indices(self, locations: list[Location]) -> list[int]:
        axis_order = self.axis_order
        axis_points: dict[str, set[int]] = {}
        for loc in locations:
            if len(loc) == 1:
                ((axis, value),) = loc.items()
                points = axis_points.setdefault(axis, {float_to_f2dot14(0.0)})
                points.add(float_to_f2dot14(value))

        def on_point_count(loc: Location) -> int:
            return sum(
                1
                for axis, value in loc.items()
                if axis in axis_points and float_to_f2dot14(value) in axis_points[axis]
            )

        def ordered_axes(loc: Location) -> list[str]:
            return sorted(loc, key=lambda tag: (tag not in axis_order, tag))

        def position(tag: str) -> int | None:
            return axis_order.index(tag) if tag in axis_order else None

        def compare(ia: int, ib: int) -> int:
            a, b = locations[ia], locations[ib]
            if len(a) != len(b):
                return _cmp(len(a), len(b))
            a_on, b_on = on_point_count(a), on_point_count(b)
            if a_on != b_on:
                return _cmp(b_on, a_on)
            a_axes, b_axes = ordered_axes(a), ordered_axes(b)
            for left, right in zip(a_axes, b_axes):
                l_index, r_index = position(left), position(right)
                if l_index is not None and r_index is None:
                    return -1
                if r_index is not None and l_index is None:
                    return 1
                if l_index != r_index:
                    return _cmp(l_index, r_index)
            if a_axes != b_axes:
                return _cmp(a_axes, b_axes)
            for axis in a_axes:
                a_sign = math.copysign(1.0, a[axis])
                b_sign = math.copysign(1.0, b[axis])
                if abs(a_sign - b_sign) > _EPSILON:
                    return _cmp(a_sign, b_sign)
            for axis in a_axes:
                a_abs, b_abs = abs(a[axis]), abs(b[axis])
                if abs(a_abs - b_abs) > _EPSILON:
                    return _cmp(a_abs, b_abs)
            return 0

        return sorted(range(len(locations)), key=cmp_to_key(compare))

    def _compute_master_supports(self) -> list[Support]:
        regions = locations_to_regions(self.locations)
        supports: list[Support] = []
        for i, region in enumerate(regions):
            loc_axes = set(region)
            region_copy = dict(region)
            for prev_region in regions[:i]:
                if not set(prev_region) <= loc_axes:
                    continue
                relevant = all(
                    axis in prev_region
                    and (
                        abs(prev_region[axis][1] - peak) < _EPSILON
                        or lower < prev_region[axis][1] < upper
                    )
                    for axis, (lower, peak, upper) in region.items()
                )
                if not relevant:
                    continue
                best_axes: Support = {}
                best_ratio = -1.0
                for axis, (_, val, _) in prev_region.items():
                    lower, loc_v, upper = region[axis]
                    new_lower, new_upper = lower, upper
                    if val < loc_v:
                        new_lower = val
                        ratio = (val - loc_v) / (lower - loc_v)
                    elif loc_v < val:
                        new_upper = val
                        ratio = (val - loc_v) / (upper - loc_v)
                    else:
                        continue
                    if ratio > best_ratio:
                        best_ratio = ratio
                        best_axes.clear()
                    if abs(ratio - best_ratio) < _EPSILON:
                        best_axes[axis] = (new_lower, loc_v, new_upper)
                region_copy.update(best_axes)
            supports.append(region_copy)
        return supports

    def _compute_delta_weights(self) -> list[dict[int, float]]:
        weights = []
        for i, loc in enumerate(self.locations):
            weight: dict[int, float] = {}
            for j, support in enumerate(self.supports[:i]):
                scalar = support_scalar(loc, support)
                if scalar != 0.0:
                    weight[j] = scalar
            weights.append(weight)
        return weights

    def get_deltas_and_supports(self, master_values: Sequence[Any]) -> list[tuple[Any, Support]]:
        """Return (delta, support) pairs for the given master values.

        A value of None leaves that master out; the default master must be given.
        """
        submodel = VariationModel(
            [
                loc
                for loc, value in zip(self.original_locations, master_values)
                if value is not None
            ],
            self.axis_order,
        )
        present = [value for value in master_values if value is not None]
        if len(present) != len(submodel.delta_weights):
            raise ValueError("the number of master values does not match the model")
        out: list[tuple[Any, Support]] = []
        for ix, weights in enumerate(submodel.delta_weights):
            delta = present[submodel.sort_order[ix]]
            for j, weight in weights.items():
                delta = delta - out[j][0] * weight
            out.append((delta, dict(submodel.supports[ix])))
        return out