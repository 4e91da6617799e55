"""
Bounds ledger — bounding boxes of the items placed so far in one run.

The ledger is the source of truth for collision and support queries.
It is request-scoped: the engine builds an empty ledger for every call
and nothing survives between runs.

  Queries:
    .collides(box)                      — overlap with any placed box
    .is_supported(x, y, z, l, w)        — floor contact or enough top faces below
    .support_ratio(x, y, z, l, w)       — supported fraction of a footprint

Boxes are mirrored into an (n, 6) numpy array with columns
(min_x, max_x, min_y, max_y, min_z, max_z) so each query is a single
vectorised pass.
"""

from typing import Iterator, List

import numpy as np

from container_packing.core.config import PackingConfig
from container_packing.core.models import BoundingBox, Container

MIN_X, MAX_X, MIN_Y, MAX_Y, MIN_Z, MAX_Z = range(6)


def is_within_container(
    x: float,
    y: float,
    z: float,
    l: float,
    w: float,
    h: float,
    container: Container,
) -> bool:
    """True iff the box lies inside [0, extent] on every axis (no tolerance)."""
    return (
        x >= 0 and x + l <= container.length and
        y >= 0 and y + w <= container.width and
        z >= 0 and z + h <= container.height
    )


class BoundsLedger:
    """Growing set of placed bounding boxes for a single packing run."""

    __slots__ = ("config", "_boxes", "_bounds")

    def __init__(self, config: PackingConfig = PackingConfig()) -> None:
        self.config: PackingConfig = config
        self._boxes: List[BoundingBox] = []
        self._bounds: np.ndarray = np.empty((0, 6), dtype=np.float64)

    # ── Mutation ─────────────────────────────────────────────────────────

    def add(self, box: BoundingBox) -> None:
        """Record a committed placement's bounding box."""
        self._boxes.append(box)
        row = np.array([box.as_tuple()], dtype=np.float64)
        self._bounds = np.vstack([self._bounds, row])

    # ── Access ───────────────────────────────────────────────────────────

    @property
    def boxes(self) -> List[BoundingBox]:
        """Placed boxes in insertion order (copy)."""
        return list(self._boxes)

    def __len__(self) -> int:
        return len(self._boxes)

    def __iter__(self) -> Iterator[BoundingBox]:
        return iter(list(self._boxes))

    # ── Queries ──────────────────────────────────────────────────────────

    def collides(self, box: BoundingBox) -> bool:
        """
        True if `box` overlaps any placed box on all three axes at once.

        Open-interval test with the overlap tolerance taken off the
        candidate on both sides, so boxes that merely touch (or are within
        floating-point noise of touching) do not collide.
        """
        if not self._boxes:
            return False
        b = self._bounds
        tol = self.config.overlap_tolerance
        overlap_x = (box.max_x > b[:, MIN_X] + tol) & (box.min_x < b[:, MAX_X] - tol)
        overlap_y = (box.max_y > b[:, MIN_Y] + tol) & (box.min_y < b[:, MAX_Y] - tol)
        overlap_z = (box.max_z > b[:, MIN_Z] + tol) & (box.min_z < b[:, MAX_Z] - tol)
        return bool(np.any(overlap_x & overlap_y & overlap_z))

    def supported_area(
        self,
        x: float,
        y: float,
        z: float,
        footprint_length: float,
        footprint_width: float,
    ) -> float:
        """
        Footprint area resting on top faces level with `z`.

        Only boxes whose max_z is within the support tolerance of `z`
        contribute; their X-Y overlaps with the footprint are summed in
        ledger order.
        """
        if not self._boxes:
            return 0.0
        b = self._bounds
        level = np.abs(b[:, MAX_Z] - z) < self.config.support_tolerance
        dx = np.minimum(x + footprint_length, b[:, MAX_X]) - np.maximum(x, b[:, MIN_X])
        dy = np.minimum(y + footprint_width, b[:, MAX_Y]) - np.maximum(y, b[:, MIN_Y])
        touching = level & (dx > 0) & (dy > 0)
        areas = (dx * dy)[touching]
        supported = 0.0
        for area in areas.tolist():
            supported += area
        return supported

    def support_ratio(
        self,
        x: float,
        y: float,
        z: float,
        footprint_length: float,
        footprint_width: float,
    ) -> float:
        """Supported fraction of the footprint (1.0 on the floor)."""
        if z < self.config.floor_tolerance:
            return 1.0
        footprint = footprint_length * footprint_width
        if footprint <= 0:
            return 0.0
        return self.supported_area(x, y, z, footprint_length, footprint_width) / footprint

    def is_supported(
        self,
        x: float,
        y: float,
        z: float,
        footprint_length: float,
        footprint_width: float,
    ) -> bool:
        """
        True if the footprint rests on the floor or on enough top faces.

        Stacked placements need at least min_support_ratio of the footprint
        area covered by boxes directly beneath.
        """
        if z < self.config.floor_tolerance:
            return True
        supported = self.supported_area(x, y, z, footprint_length, footprint_width)
        footprint = footprint_length * footprint_width
        return supported >= footprint * self.config.min_support_ratio
