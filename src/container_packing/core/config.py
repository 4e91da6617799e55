"""
Packing configuration — the tolerances used by the admissibility checks.

The defaults reproduce the reference behaviour; changing any of them
changes placement outcomes.

YAML layout (the ``packing:`` section is optional)::

    packing:
      overlap_tolerance: 0.1
      floor_tolerance: 1.0
      support_tolerance: 1.0
      min_support_ratio: 0.3
"""

from __future__ import annotations

import math
import numbers
from dataclasses import asdict, dataclass, fields
from pathlib import Path

import yaml

from container_packing.core.errors import ConfigError


# Collision tolerance: candidate extent shrunk by this on each side (cm)
OVERLAP_TOLERANCE: float = 0.1

# A candidate whose z is below this rests on the container floor (cm)
FLOOR_TOLERANCE: float = 1.0

# Top faces within this distance of the candidate's z count as support (cm)
SUPPORT_TOLERANCE: float = 1.0

# Minimum fraction of the footprint that must rest on top faces below
MIN_SUPPORT_RATIO: float = 0.30


@dataclass(frozen=True)
class PackingConfig:
    """
    Tolerances for the bounds ledger queries.

    Attributes:
        overlap_tolerance: Linear tolerance absorbed by the collision test.
        floor_tolerance:   Height under which an item counts as on the floor.
        support_tolerance: Max gap between a top face and the candidate base.
        min_support_ratio: Required supported fraction of the footprint.
    """
    overlap_tolerance: float = OVERLAP_TOLERANCE
    floor_tolerance: float = FLOOR_TOLERANCE
    support_tolerance: float = SUPPORT_TOLERANCE
    min_support_ratio: float = MIN_SUPPORT_RATIO

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ConfigError(f"{f.name} must be a number, got {value!r}")
            if not math.isfinite(value) or value < 0:
                raise ConfigError(f"{f.name} must be finite and >= 0, got {value}")
        if not 0 < self.min_support_ratio <= 1:
            raise ConfigError(
                f"min_support_ratio must be in (0, 1], got {self.min_support_ratio}"
            )

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "PackingConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise ConfigError(f"Unknown packing config keys: {unknown}")
        return cls(**d)


def load_config(path: Path | str) -> PackingConfig:
    """Load a PackingConfig from a YAML file."""
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        return PackingConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at top level")
    section = data.get("packing", data)
    if not isinstance(section, dict):
        raise ConfigError(f"{path}: 'packing' must be a mapping")
    return PackingConfig.from_dict(section)


def save_config(config: PackingConfig, path: Path | str) -> None:
    """Write a PackingConfig as YAML under a ``packing:`` section."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump({"packing": config.to_dict()}, f, sort_keys=False)
