"""Core data model, configuration and boundary schemas."""

from container_packing.core.config import PackingConfig, load_config, save_config
from container_packing.core.errors import (
    ConfigError,
    InputValidationError,
    PackingError,
    ResultInvariantError,
    UnknownContainerError,
)
from container_packing.core.models import (
    CONTAINER_PRESETS,
    ORIENTATION_ORDER,
    BoundingBox,
    Container,
    Item,
    Orientation,
    PackingResult,
    Placement,
    get_container_preset,
)

__all__ = [
    "PackingConfig",
    "load_config",
    "save_config",
    "ConfigError",
    "InputValidationError",
    "PackingError",
    "ResultInvariantError",
    "UnknownContainerError",
    "CONTAINER_PRESETS",
    "ORIENTATION_ORDER",
    "BoundingBox",
    "Container",
    "Item",
    "Orientation",
    "PackingResult",
    "Placement",
    "get_container_preset",
]
