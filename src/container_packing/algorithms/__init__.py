"""
Packing algorithms: orientation resolver, bounds ledger, extreme-point
candidate generator and the placement engine that drives them.
"""

from container_packing.algorithms.extreme_points import (
    CandidatePoint,
    generate_candidates,
    sort_candidates,
)
from container_packing.algorithms.ledger import BoundsLedger, is_within_container
from container_packing.algorithms.orientation import item_extents, resolve
from container_packing.algorithms.placement_engine import (
    PlacementEngine,
    pack_items,
    pack_items_async,
    validate_inputs,
)
from container_packing.algorithms.verification import find_violations, verify_result

__all__ = [
    "CandidatePoint",
    "generate_candidates",
    "sort_candidates",
    "BoundsLedger",
    "is_within_container",
    "item_extents",
    "resolve",
    "PlacementEngine",
    "pack_items",
    "pack_items_async",
    "validate_inputs",
    "find_violations",
    "verify_result",
]
