"""
Result verifier — checks the physical invariants of a PackingResult.

Checks:
  1. Bounds   — every placed box lies in [0, extent] on every axis
  2. Overlap  — no two placed boxes overlap on all three axes beyond
                the overlap tolerance
  3. Support  — every placed box is on the floor or has at least
                min_support_ratio of its footprint on boxes placed
                before it
  4. Volume   — packed volume does not exceed the container volume

The checks are independent of the engine: the ledger is rebuilt here in
placement order so a result produced elsewhere (or deserialised) can be
audited the same way.
"""

from typing import List, Optional

from container_packing.algorithms.ledger import BoundsLedger, is_within_container
from container_packing.core.config import PackingConfig
from container_packing.core.errors import ResultInvariantError
from container_packing.core.models import PackingResult


def find_violations(
    result: PackingResult, config: Optional[PackingConfig] = None
) -> List[str]:
    """Return a human-readable description of every broken invariant."""
    config = config or PackingConfig()
    container = result.container
    violations: List[str] = []

    ledger = BoundsLedger(config)
    for p in result.placements:
        l, w, h = p.extents
        box = p.bounds
        if not is_within_container(p.x, p.y, p.z, l, w, h, container):
            violations.append(f"item {p.item.id}: outside container bounds")
        if ledger.collides(box):
            violations.append(f"item {p.item.id}: overlaps a placed item")
        if not ledger.is_supported(p.x, p.y, p.z, l, w):
            ratio = ledger.support_ratio(p.x, p.y, p.z, l, w)
            violations.append(
                f"item {p.item.id}: unsupported ({ratio:.0%} of footprint, "
                f"need {config.min_support_ratio:.0%})"
            )
        ledger.add(box)

    if result.packed_volume > result.container_volume:
        violations.append(
            f"packed volume {result.packed_volume} exceeds "
            f"container volume {result.container_volume}"
        )

    placed_ids = [p.item.id for p in result.placements]
    if len(set(placed_ids)) != len(placed_ids):
        violations.append("an item is placed more than once")
    if set(placed_ids) & set(result.unpacked_ids):
        violations.append("an item is reported both placed and unpacked")

    return violations


def verify_result(
    result: PackingResult, config: Optional[PackingConfig] = None
) -> None:
    """Raise ResultInvariantError if `result` breaks any invariant."""
    violations = find_violations(result, config)
    if violations:
        raise ResultInvariantError(violations)
