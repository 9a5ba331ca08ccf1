"""Interpolation of Unreferenced Points (IUP) and delta optimisation."""

from __future__ import annotations

import struct
from collections.abc import Sequence

from fonttables.delta import Delta, Delta2D

Point = tuple[int, int]

_I16_MIN = -32768
_I16_MAX = 32767


def _f32(value: float) -> float:
    """Round a float to single precision."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _to_i16(value: float) -> int:
    """Truncate toward zero and saturate to the signed 16-bit range."""
    return max(_I16_MIN, min(_I16_MAX, int(value)))


def iup_segment(
    coords: Sequence[Point], rc1: Point, rd1: Point, rc2: Point, rd2: Point
) -> list[Point]:
    """Interpolate deltas for `coords` lying between two reference points."""
    columns: list[list[int]] = []
    for axis in (0, 1):
        x1, x2 = rc1[axis], rc2[axis]
        d1, d2 = rd1[axis], rd2[axis]
        if x1 == x2:
            columns.append([d1 if d1 == d2 else 0] * len(coords))
            continue
        if x1 > x2:
            x1, x2 = x2, x1
            d1, d2 = d2, d1
        scale = _f32((d2 - d1) / (x2 - x1))
        column = []
        for point in coords:
            x = point[axis]
            if x <= x1:
                column.append(d1)
            elif x >= x2:
                column.append(d2)
            else:
                column.append(d1 + _to_i16(_f32((x - x1) * scale)))
        columns.append(column)
    return list(zip(columns[0], columns[1]))


def iup_contour(deltas: Sequence[Delta | None], coords: Sequence[Point]) -> list[Point]:
    """Expand a contour's optional deltas into a full list of (x, y) deltas."""
    if all(d is not None for d in deltas):
        return [d.get_2d() for d in deltas]
    n = len(deltas)
    indices = [i for i, d in enumerate(deltas) if d is not None]
    if not indices:
        return [(0, 0)] * n

    out: list[Point] = []
    start = indices[0]
    very_start = start
    last = indices[-1]
    if start != 0:
        out.extend(
            iup_segment(
                coords[:start],
                coords[start],
                deltas[start].get_2d(),
                coords[last],
                deltas[last].get_2d(),
            )
        )
    out.append(deltas[start].get_2d())
    for end in indices[1:]:
        if end - start > 1:
            out.extend(
                iup_segment(
                    coords[start + 1 : end],
                    coords[start],
                    deltas[start].get_2d(),
                    coords[end],
                    deltas[end].get_2d(),
                )
            )
        out.append(deltas[end].get_2d())
        start = end
    if start != n - 1:
        out.extend(
            iup_segment(
                coords[start + 1 : n],
                coords[start],
                deltas[start].get_2d(),
                coords[very_start],
                deltas[very_start].get_2d(),
            )
        )
    return out


def optimize_deltas(
    deltas: Sequence[Delta | None], coords: Sequence[Point], ends: Sequence[int]
) -> list[Delta | None]:
    """Drop deltas that can be recovered by IUP, contour by contour.

    `ends` holds the index of the last point of every contour.
    """
    if all(d is not None for d in deltas):
        deltas_xy = [d.get_2d() for d in deltas]
    else:
        deltas_xy = []
        start = 0
        for end in ends:
            deltas_xy.extend(iup_contour(deltas[start : end + 1], coords[start : end + 1]))
            start = end + 1

    result: list[Delta | None] = []
    start = 0
    for end in ends:
        contour = iup_contour_optimize(
            deltas_xy[start : end + 1], coords[start : end + 1], 0.5
        )
        result.extend(contour)
        start = end + 1
    return result


def iup_contour_optimize(
    deltas: Sequence[Point], coords: Sequence[Point], tolerance: float
) -> list[Delta | None]:
    """Choose the fewest deltas of a contour from which IUP restores the rest."""
    deltas = list(deltas)
    coords = list(coords)
    n = len(deltas)
    if all(abs(x) <= tolerance and abs(y) <= tolerance for x, y in deltas):
        return [None] * n
    if n == 1:
        return [Delta2D(*deltas[0])]
    first = deltas[0]
    if all(d == first for d in deltas):
        return [Delta2D(*first)] + [None] * (n - 1)

    forced = _bound_forced_set(deltas, coords, tolerance)
    if forced:
        k = (n - 1) - max(forced)
        deltas = _rotate_list(deltas, k)
        coords = _rotate_list(coords, k)
        forced = _rotate_set(forced, k, n)
        chain, _ = _optimize_dp(deltas, coords, forced, tolerance, None)
        solution = set()
        i: int | None = n - 1
        while i is not None:
            solution.add(i)
            i = chain.get(i)
        output: list[Delta | None] = [
            Delta2D(*deltas[ix]) if ix in solution else None for ix in range(n)
        ]
        return _rotate_list(output, -k)

    doubled_deltas = deltas + deltas
    doubled_coords = coords + coords
    chain, costs = _optimize_dp(doubled_deltas, doubled_coords, forced, tolerance, n)
    best_cost = n + 1
    best_solution: set[int] = set()
    for start in range(n - 1, 2 * n + 1):
        solution = set()
        i = start
        while i > start - n:
            solution.add(i % n)
            following = chain.get(i)
            if following is None:
                break
            i = following
        if i == start - n:
            cost = costs.get(start, n * 4) - costs.get(start - n, n * 3)
            if cost <= best_cost:
                best_solution = solution
                best_cost = cost
    return [Delta2D(*deltas[ix]) if ix in best_solution else None for ix in range(n)]


def _rotate_set(values: set[int], k: int, n: int) -> set[int]:
    k %= n
    if k == 0:
        return values
    return {(v + k) % n for v in values}


def _rotate_list(items: list, k: int) -> list:
    n = len(items)
    k %= n
    if k == 0:
        return items
    partition = n - k
    return items[partition:] + items[:partition]


def _bound_forced_set(
    deltas: Sequence[Point], coords: Sequence[Point], tolerance: float
) -> set[int]:
    """Indices whose deltas cannot be interpolated from their neighbours."""
    if len(deltas) != len(coords):
        raise ValueError("deltas and coords must have the same length")
    count = len(deltas)
    forced: set[int] = set()
    nd, nc = deltas[0], coords[0]
    i = count - 1
    ld, lc = deltas[i], coords[i]
    while i > -1:
        d, c = ld, lc
        ld = deltas[(i - 1) % count]
        lc = coords[(i - 1) % count]
        for j in (0, 1):
            cj, dj = c[j], d[j]
            lcj, ldj, ncj, ndj = lc[j], ld[j], nc[j], nd[j]
            if lcj <= ncj:
                c1, c2, d1, d2 = lcj, ncj, ldj, ndj
            else:
                c1, c2, d1, d2 = ncj, lcj, ndj, ldj
            force = False
            if c1 <= cj <= c2:
                if not (min(d1, d2) - tolerance <= dj <= max(d1, d2) + tolerance):
                    force = True
            elif c1 == c2:
                if d1 == d2 and abs(dj - d1) > tolerance:
                    force = True
            elif d1 != d2:
                if cj < c1:
                    if dj != d1 and ((dj - tolerance < d1) != (d1 < d2)):
                        force = True
                elif d2 != dj and ((d2 < dj + tolerance) != (d1 < d2)):
                    force = True
            if force:
                forced.add(i)
                break
        nd, nc = d, c
        i -= 1
    return forced


def _optimize_dp(
    deltas: Sequence[Point],
    coords: Sequence[Point],
    forced: set[int],
    tolerance: float,
    lookback: int | None,
) -> tuple[dict[int, int], dict[int, int]]:
    n = len(deltas)
    if lookback is None:
        lookback = n
    costs: dict[int, int] = {-1: 0}
    chain: dict[int, int] = {}
    for i in range(n):
        best_cost = costs[i - 1] + 1
        costs[i] = best_cost
        chain[i] = i - 1
        if i - 1 in forced:
            continue
        j = i - 2
        while j > max(i - lookback, -2):
            cost = costs[j] + 1
            if cost < best_cost and can_iup_between(deltas, coords, j, i, tolerance):
                best_cost = cost
                costs[i] = best_cost
                chain[i] = j
            if j in forced:
                break
            j -= 1
    return chain, costs


def can_iup_between(
    deltas: Sequence[Point], coords: Sequence[Point], i: int, j: int, tolerance: float
) -> bool:
    """Whether the points strictly between `i` and `j` can be recovered by IUP."""
    if j - i < 2:
        raise ValueError("the two reference points must be at least two apart")
    count = len(deltas)
    i %= count
    j %= count
    if i + 1 > j:
        coord_portion = list(coords[i + 1 :]) + list(coords[:j])
        delta_portion = list(deltas[i + 1 :]) + list(deltas[:j])
    else:
        coord_portion = list(coords[i + 1 : j])
        delta_portion = list(deltas[i + 1 : j])
    interp = iup_segment(coord_portion, coords[i], deltas[i], coords[j], deltas[j])
    return all(
        (x - p) * (x - p) + (y - q) * (y - q) <= tolerance
        for (x, y), (p, q) in zip(delta_portion, interp)
    )