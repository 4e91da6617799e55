"""
container_packing — extreme-point 3D packing of cargo into a container.

Public API:
    from container_packing import Item, Container, pack_items
    from container_packing.core import PackingConfig, Orientation, PackingResult
    from container_packing.algorithms import PlacementEngine, verify_result
    from container_packing.runner.dataset import load_items, sample_items
"""

from container_packing.algorithms.placement_engine import (
    PlacementEngine,
    pack_items,
    pack_items_async,
)
from container_packing.core.config import PackingConfig
from container_packing.core.models import (
    CONTAINER_PRESETS,
    Container,
    Item,
    Orientation,
    PackingResult,
    Placement,
)

__version__ = "0.1.0"

__all__ = [
    "PlacementEngine",
    "pack_items",
    "pack_items_async",
    "PackingConfig",
    "CONTAINER_PRESETS",
    "Container",
    "Item",
    "Orientation",
    "PackingResult",
    "Placement",
]
