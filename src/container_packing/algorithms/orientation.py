"""Orientation resolver: item dimensions + orientation -> occupied extents."""

from typing import Tuple

from container_packing.core.models import Item, Orientation


def resolve(
    length: float, width: float, height: float, orientation: Orientation
) -> Tuple[float, float, float]:
    """
    Map (length, width, height) to the (X, Y, Z) extents for `orientation`.

    X -> (l, w, h), Y -> (w, l, h), Z -> (l, h, w).
    """
    return Orientation(orientation).resolve(length, width, height)


def item_extents(item: Item, orientation: Orientation) -> Tuple[float, float, float]:
    """Extents of `item` along the container axes in `orientation`."""
    return resolve(item.length, item.width, item.height, orientation)
