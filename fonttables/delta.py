"""Delta values used by variation stores."""

from __future__ import annotations

from dataclasses import dataclass


def _coordinates(delta: Delta1D | Delta2D) -> tuple[int, int]:
    """Return a delta's (x, y) form, refusing scalar deltas."""
    if isinstance(delta, Delta2D):
        return (delta.x, delta.y)
    raise TypeError(
        f"Tried to turn a scalar delta ({delta.value}) into a coordinate delta"
    )


@dataclass(frozen=True)
class Delta1D:
    """A one-dimensional delta, as used in the cvt variations."""

    value: int

    def get_2d(self) -> tuple[int, int]:
        """Scalar deltas have no coordinate form; raises TypeError."""
        return _coordinates(self)


@dataclass(frozen=True)
class Delta2D:
    """A two-dimensional delta, as used in glyph variations."""

    x: int
    y: int

    def get_2d(self) -> tuple[int, int]:
        """Return the delta as an (x, y) tuple."""
        return _coordinates(self)


Delta = Delta1D | Delta2D