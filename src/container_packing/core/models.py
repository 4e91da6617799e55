"""
Core data models for container packing.

All modules import their core types from here so the algorithms, runner
and monitoring layers agree on one representation.

Classes:
    Item          — cargo item with dimensions and display metadata
    Container     — the single rectangular container of a packing run
    Orientation   — the three legal rotations and their axis mapping
    BoundingBox   — axis-aligned extent of a placed item
    Placement     — an item committed at an anchor point and orientation
    PackingResult — full outcome of one packing run
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

from container_packing.core.errors import UnknownContainerError


DEFAULT_COLOR = "#4299e1"


# ─────────────────────────────────────────────────────────────────────────────
# Item & Container
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Item:
    """
    A cargo item to be packed.

    Attributes:
        id:     Unique identifier within a packing run.
        length: Extent along the container X axis in orientation X (cm).
        width:  Extent along Y in orientation X.
        height: Extent along Z in orientation X.
        name:   Display name, not used by the algorithm.
        color:  Display color, not used by the algorithm.
    """
    id: str
    length: float
    width: float
    height: float
    name: str = ""
    color: str = DEFAULT_COLOR

    @property
    def volume(self) -> float:
        """Volume of the item, independent of orientation."""
        return self.length * self.width * self.height

    @property
    def dimensions(self) -> Tuple[float, float, float]:
        return (self.length, self.width, self.height)

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "length": self.length,
                "width": self.width, "height": self.height, "color": self.color}

    @classmethod
    def from_dict(cls, d: dict) -> "Item":
        return cls(id=str(d["id"]), length=d["length"], width=d["width"],
                   height=d["height"], name=d.get("name", ""),
                   color=d.get("color", DEFAULT_COLOR))


@dataclass(frozen=True)
class Container:
    """
    The container items are packed into.

    Attributes:
        id:     Identifier (preset key or caller supplied).
        length: X-axis extent (cm).
        width:  Y-axis extent.
        height: Z-axis extent.
        name:   Display name.
    """
    id: str
    length: float
    width: float
    height: float
    name: str = ""

    @property
    def volume(self) -> float:
        return self.length * self.width * self.height

    @property
    def dimensions(self) -> Tuple[float, float, float]:
        return (self.length, self.width, self.height)

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "length": self.length,
                "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, d: dict) -> "Container":
        return cls(id=str(d.get("id", "custom")), length=d["length"],
                   width=d["width"], height=d["height"], name=d.get("name", ""))


CONTAINER_PRESETS: Dict[str, Container] = {
    "20ft": Container(id="20ft", name="20-foot container",
                      length=589.0, width=235.0, height=239.0),
    "40ft": Container(id="40ft", name="40-foot container",
                      length=1203.0, width=235.0, height=239.0),
}


def get_container_preset(name: str) -> Container:
    """Look up a standard container by preset key ("20ft", "40ft")."""
    try:
        return CONTAINER_PRESETS[name]
    except KeyError:
        raise UnknownContainerError(
            f"Unknown container preset: {name}. "
            f"Available: {list(CONTAINER_PRESETS.keys())}"
        ) from None


# ─────────────────────────────────────────────────────────────────────────────
# Orientation
# ─────────────────────────────────────────────────────────────────────────────

class Orientation(str, Enum):
    """
    Legal item rotations.

    Each member maps (length, width, height) onto the container's
    (X, Y, Z) axes:
        X — unchanged
        Y — length and width swapped (rotated about Z)
        Z — width and height swapped (tipped onto its side)
    Only these three of the six axis permutations are allowed.
    """
    X = "x"
    Y = "y"
    Z = "z"

    def resolve(
        self, length: float, width: float, height: float
    ) -> Tuple[float, float, float]:
        """Return the (X, Y, Z) extents of an item in this orientation."""
        dims = (length, width, height)
        i, j, k = _AXIS_PERMUTATIONS[self]
        return dims[i], dims[j], dims[k]


_AXIS_PERMUTATIONS: Dict[Orientation, Tuple[int, int, int]] = {
    Orientation.X: (0, 1, 2),
    Orientation.Y: (1, 0, 2),
    Orientation.Z: (0, 2, 1),
}

# Order in which orientations are tried at every candidate point
ORIENTATION_ORDER: Tuple[Orientation, ...] = (
    Orientation.X, Orientation.Y, Orientation.Z,
)


# ─────────────────────────────────────────────────────────────────────────────
# Placement & bounding box
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned extent of a placed item, derived from its Placement."""
    min_x: float
    max_x: float
    min_y: float
    max_y: float
    min_z: float
    max_z: float

    @classmethod
    def from_extents(
        cls, x: float, y: float, z: float, ex: float, ey: float, ez: float
    ) -> "BoundingBox":
        return cls(x, x + ex, y, y + ey, z, z + ez)

    @property
    def footprint_area(self) -> float:
        """Area of the X-Y footprint."""
        return (self.max_x - self.min_x) * (self.max_y - self.min_y)

    def as_tuple(self) -> Tuple[float, float, float, float, float, float]:
        return (self.min_x, self.max_x, self.min_y, self.max_y,
                self.min_z, self.max_z)


@dataclass(frozen=True)
class Placement:
    """
    An item committed at its minimum corner (x, y, z) in an orientation.

    Frozen: created once per placed item and never mutated.
    """
    item: Item
    x: float
    y: float
    z: float
    orientation: Orientation

    @property
    def extents(self) -> Tuple[float, float, float]:
        """Rotated (X, Y, Z) extents of the placed item."""
        return self.orientation.resolve(
            self.item.length, self.item.width, self.item.height
        )

    @property
    def bounds(self) -> BoundingBox:
        ex, ey, ez = self.extents
        return BoundingBox.from_extents(self.x, self.y, self.z, ex, ey, ez)

    def to_dict(self) -> dict:
        """Serialise as {itemId, x, y, z, orientation} plus item attributes."""
        ex, ey, ez = self.extents
        return {
            "itemId": self.item.id,
            "x": self.x,
            "y": self.y,
            "z": self.z,
            "orientation": self.orientation.value,
            "name": self.item.name,
            "color": self.item.color,
            "length": self.item.length,
            "width": self.item.width,
            "height": self.item.height,
            "extents": [ex, ey, ez],
        }


# ─────────────────────────────────────────────────────────────────────────────
# Packing result
# ─────────────────────────────────────────────────────────────────────────────

def round_percentage(value: float) -> float:
    """Round half-up to two decimal places (12.345 -> 12.35)."""
    return math.floor(value * 100 + 0.5) / 100


@dataclass(frozen=True)
class PackingResult:
    """
    Outcome of one packing run.

    Attributes:
        container:        Container the items were packed into.
        placements:       Committed placements in placement order.
        unpacked:         Items that could not be placed, in processing order.
        container_volume: Container length * width * height.
        packed_volume:    Sum of the volumes of placed items.
        utilization_pct:  packed / container * 100, rounded to 2 decimals.
    """
    container: Container
    placements: Tuple[Placement, ...] = ()
    unpacked: Tuple[Item, ...] = ()
    container_volume: float = 0.0
    packed_volume: float = 0.0
    utilization_pct: float = 0.0

    @classmethod
    def build(
        cls,
        container: Container,
        placements: List[Placement],
        unpacked: List[Item],
    ) -> "PackingResult":
        """Assemble a result and derive its volume statistics."""
        container_volume = container.volume
        packed_volume = 0.0
        for p in placements:
            packed_volume += p.item.volume
        utilization = (packed_volume / container_volume) * 100
        return cls(
            container=container,
            placements=tuple(placements),
            unpacked=tuple(unpacked),
            container_volume=container_volume,
            packed_volume=packed_volume,
            utilization_pct=round_percentage(utilization),
        )

    @property
    def packed_count(self) -> int:
        return len(self.placements)

    @property
    def unpacked_count(self) -> int:
        return len(self.unpacked)

    @property
    def unpacked_ids(self) -> List[str]:
        return [item.id for item in self.unpacked]

    def placement_for(self, item_id: str) -> Placement | None:
        for p in self.placements:
            if p.item.id == item_id:
                return p
        return None

    def to_dict(self) -> dict:
        return {
            "container": self.container.to_dict(),
            "placed": [p.to_dict() for p in self.placements],
            "unpacked": self.unpacked_ids,
            "containerVolume": self.container_volume,
            "packedVolume": self.packed_volume,
            "utilizationPct": self.utilization_pct,
        }
