"""
Extreme-point candidate generation.

Instead of decomposing the free space exactly, only points adjacent to
already-placed geometry are considered. For each placed box three
extreme points are emitted:
  - Right:  (max_x, min_y, min_z)  -- immediately to the right along X
  - Behind: (min_x, max_y, min_z)  -- immediately behind along Y
  - Atop:   (min_x, min_y, max_z)  -- on top of the box along Z

The origin is always a candidate, so the first item and any item that
fits nowhere near existing boxes can still go in the corner. Points
outside [0, extent) on any axis are dropped, which bounds the candidate
count by 1 + 3 * placed.

References:
    Crainic, T.G., Perboli, G., & Tadei, R. (2008).
    "Extreme Point-Based Heuristics for Three-Dimensional Bin Packing."
    INFORMS Journal on Computing, 20(3), 368-384.
"""

from typing import Iterable, List, NamedTuple

from container_packing.algorithms.ledger import BoundsLedger
from container_packing.core.models import Container


class CandidatePoint(NamedTuple):
    """Anchor for the minimum corner of a new item."""
    x: float
    y: float
    z: float


ORIGIN = CandidatePoint(0.0, 0.0, 0.0)


def _inside(p: CandidatePoint, container: Container) -> bool:
    return (
        0 <= p.x < container.length and
        0 <= p.y < container.width and
        0 <= p.z < container.height
    )


def generate_candidates(
    ledger: BoundsLedger, container: Container
) -> List[CandidatePoint]:
    """
    Extreme points for the current ledger, unsorted.

    Order: origin first, then right/behind/atop for each box in ledger
    order. Duplicates are kept; they resolve identically.
    """
    points: List[CandidatePoint] = [ORIGIN]
    for box in ledger:
        points.append(CandidatePoint(box.max_x, box.min_y, box.min_z))
        points.append(CandidatePoint(box.min_x, box.max_y, box.min_z))
        points.append(CandidatePoint(box.min_x, box.min_y, box.max_z))
    return [p for p in points if _inside(p, container)]


def sort_candidates(points: Iterable[CandidatePoint]) -> List[CandidatePoint]:
    """Lowest first, then frontmost, then leftmost: ascending (z, y, x)."""
    return sorted(points, key=lambda p: (p.z, p.y, p.x))
