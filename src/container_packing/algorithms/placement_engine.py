"""
Placement engine — volume-ordered extreme-point packing of one container.

Algorithm overview:
    1. Sort items by volume, largest first (stable: ties keep input order).
    2. For each item, generate extreme points from the current ledger and
       sort them by (z, y, x) so the fill grows bottom-left-front.
    3. At each point try orientations X, Y, Z in that order. A candidate
       is admissible when it is inside the container, collides with no
       placed box, and is supported from below. The first admissible
       (point, orientation) is committed and the next item starts.
    4. Items with no admissible candidate are reported as unpacked; the
       ledger is left untouched for them.

The pass is synchronous and deterministic: identical inputs (including
their order) always yield identical placements. Items are never
reconsidered once placed or rejected.
"""

from __future__ import annotations

import asyncio
import logging
import math
import numbers
import time
from typing import Iterable, List, Optional, Sequence

from container_packing.algorithms.extreme_points import (
    CandidatePoint,
    generate_candidates,
    sort_candidates,
)
from container_packing.algorithms.ledger import BoundsLedger, is_within_container
from container_packing.algorithms.orientation import item_extents
from container_packing.core.config import PackingConfig
from container_packing.core.errors import InputValidationError
from container_packing.core.models import (
    ORIENTATION_ORDER,
    BoundingBox,
    Container,
    Item,
    PackingResult,
    Placement,
)

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Input validation
# ─────────────────────────────────────────────────────────────────────────────

def _check_dimensions(label: str, dims: Iterable[float]) -> None:
    for name, value in zip(("length", "width", "height"), dims):
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise InputValidationError(f"{label}: {name} must be a number, got {value!r}")
        if not math.isfinite(value) or value <= 0:
            raise InputValidationError(f"{label}: {name} must be positive and finite, got {value}")


def validate_inputs(items: Sequence[Item], container: Container) -> None:
    """
    Reject malformed input before packing.

    Raises:
        InputValidationError: non-positive / non-finite dimensions or
            duplicate item ids.
    """
    if not isinstance(container, Container):
        raise InputValidationError(f"container must be a Container, got {type(container).__name__}")
    _check_dimensions(f"container {container.id!r}", container.dimensions)

    seen = set()
    for item in items:
        if not isinstance(item, Item):
            raise InputValidationError(f"items must be Item instances, got {type(item).__name__}")
        _check_dimensions(f"item {item.id!r}", item.dimensions)
        if item.id in seen:
            raise InputValidationError(f"duplicate item id: {item.id!r}")
        seen.add(item.id)


# ─────────────────────────────────────────────────────────────────────────────
# Engine
# ─────────────────────────────────────────────────────────────────────────────

class PlacementEngine:
    """
    Packs a list of items into a single container.

    The engine holds only configuration; each call to pack() works on its
    own fresh BoundsLedger, so one engine may serve any number of runs.

    Attributes:
        config: Tolerances used by the ledger's admissibility checks.
    """

    def __init__(self, config: Optional[PackingConfig] = None) -> None:
        self.config = config or PackingConfig()

    def pack(self, items: Sequence[Item], container: Container) -> PackingResult:
        """
        Decide which items fit, where, and in which orientation.

        Args:
            items:     Items to pack; their order breaks volume ties.
            container: The container to pack into.

        Returns:
            PackingResult with placements, unpacked items and volume stats.

        Raises:
            InputValidationError: if the input violates preconditions.
        """
        items = list(items)
        validate_inputs(items, container)

        t0 = time.perf_counter()
        ledger = BoundsLedger(self.config)
        placements: List[Placement] = []
        unpacked: List[Item] = []

        for item in sorted(items, key=lambda it: it.volume, reverse=True):
            placement = self.place_item(item, container, ledger)
            if placement is None:
                unpacked.append(item)
                logger.debug("item %s (%gx%gx%g) unpacked",
                             item.id, item.length, item.width, item.height)
                continue
            ledger.add(placement.bounds)
            placements.append(placement)
            logger.debug("item %s -> (%g, %g, %g) orientation=%s",
                         item.id, placement.x, placement.y, placement.z,
                         placement.orientation.value)

        result = PackingResult.build(container, placements, unpacked)
        logger.info(
            "packed %d/%d items into %s: utilization %.2f%% [%.1fms]",
            result.packed_count, len(items), container.id,
            result.utilization_pct, (time.perf_counter() - t0) * 1000,
        )
        return result

    def place_item(
        self, item: Item, container: Container, ledger: BoundsLedger
    ) -> Optional[Placement]:
        """First admissible placement over the sorted extreme points, or None."""
        points = sort_candidates(generate_candidates(ledger, container))
        for point in points:
            placement = self.try_place(item, point, container, ledger)
            if placement is not None:
                return placement
        return None

    def try_place(
        self,
        item: Item,
        point: CandidatePoint,
        container: Container,
        ledger: BoundsLedger,
    ) -> Optional[Placement]:
        """
        Try orientations X, Y, Z at `point`; return the first admissible one.

        Checks run in order: container bounds, collision, support.
        """
        x, y, z = point
        for orientation in ORIENTATION_ORDER:
            l, w, h = item_extents(item, orientation)
            if not is_within_container(x, y, z, l, w, h, container):
                continue
            if ledger.collides(BoundingBox.from_extents(x, y, z, l, w, h)):
                continue
            if not ledger.is_supported(x, y, z, l, w):
                continue
            return Placement(item=item, x=x, y=y, z=z, orientation=orientation)
        return None


# ─────────────────────────────────────────────────────────────────────────────
# Convenience entry points
# ─────────────────────────────────────────────────────────────────────────────

def pack_items(
    items: Sequence[Item],
    container: Container,
    config: Optional[PackingConfig] = None,
) -> PackingResult:
    """Pack `items` into `container` with a one-off engine."""
    return PlacementEngine(config).pack(items, container)


async def pack_items_async(
    items: Sequence[Item],
    container: Container,
    config: Optional[PackingConfig] = None,
) -> PackingResult:
    """
    Run pack_items on a worker thread.

    The computation has no suspension points; this only keeps an event
    loop responsive while it runs. Cancelling the awaiting task discards
    the result but does not interrupt the pass.
    """
    return await asyncio.to_thread(pack_items, list(items), container, config)
