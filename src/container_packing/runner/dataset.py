"""
Item datasets — load, save, generate and sample cargo lists.

Expected file schema (JSON, or the same structure in YAML)::

    {
      "name": "order-17",
      "container": "20ft",
      "items": [
        {"id": "a", "name": "Crate", "length": 100, "width": 80,
         "height": 60, "quantity": 2}
      ]
    }

A bare list of item descriptors is accepted as well.
"""

from __future__ import annotations

import json
import math
import random
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import ValidationError

from container_packing.core.errors import InputValidationError
from container_packing.core.models import Item
from container_packing.core.schemas import PackingRequest

PALETTE = ["#4299e1", "#48bb78", "#ed8936", "#f56565", "#9f7aea",
           "#38b2ac", "#ecc94b", "#ed64a6"]


def sample_items() -> List[Item]:
    """Five demo cargo items (electronics, textiles, furniture, parts, goods)."""
    return [
        Item(id="sample1", name="Electronics A", length=100, width=80, height=60, color="#4299e1"),
        Item(id="sample2", name="Textiles B", length=80, width=60, height=50, color="#48bb78"),
        Item(id="sample3", name="Furniture C", length=120, width=70, height=50, color="#ed8936"),
        Item(id="sample4", name="Parts D", length=60, width=40, height=40, color="#f56565"),
        Item(id="sample5", name="Goods E", length=50, width=40, height=30, color="#9f7aea"),
    ]


def generate_items(
    count: int = 50,
    seed: Optional[int] = None,
    min_dim: float = 20.0,
    max_dim: float = 120.0,
) -> List[Item]:
    """
    Generate random items for benchmarking.

    Args:
        count: Number of items to generate
        seed: Random seed for reproducibility (default: None)
        min_dim, max_dim: Range of each dimension in cm; only whole numbers
            inside the range are drawn

    Returns:
        List of Item objects with ids "item-000", "item-001", ...
    """
    low, high = math.ceil(min_dim), math.floor(max_dim)
    if min_dim <= 0 or high < low:
        raise ValueError(f"invalid dimension range [{min_dim}, {max_dim}]")
    rng = random.Random(seed)

    items = []
    for i in range(count):
        length = float(rng.randint(low, high))
        width = float(rng.randint(low, high))
        height = float(rng.randint(low, high))
        items.append(Item(id=f"item-{i:03d}", name=f"Item {i}", length=length,
                          width=width, height=height,
                          color=PALETTE[i % len(PALETTE)]))
    return items


def _read_file(path: Path):
    with path.open("r", encoding="utf-8") as f:
        if path.suffix.lower() in (".yaml", ".yml"):
            return yaml.safe_load(f)
        return json.load(f)


def load_request(path: Path | str) -> PackingRequest:
    """
    Load and validate a packing request from a JSON or YAML file.

    Raises:
        InputValidationError: if the file content fails validation.
    """
    path = Path(path)
    try:
        data = _read_file(path)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as exc:
        raise InputValidationError(f"{path}: cannot parse: {exc}") from exc

    if isinstance(data, list):
        data = {"items": data}
    if not isinstance(data, dict):
        raise InputValidationError(f"{path}: expected a mapping or a list of items")

    try:
        return PackingRequest.model_validate(data)
    except ValidationError as exc:
        raise InputValidationError(f"{path}: {exc}") from exc


def load_items(path: Path | str) -> List[Item]:
    """Load a dataset file and return its (quantity-expanded) items."""
    return load_request(path).to_items()


def save_items(items: List[Item], path: Path | str, name: Optional[str] = None) -> None:
    """Save items as a JSON dataset file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "name": name or path.stem,
        "item_count": len(items),
        "items": [item.to_dict() for item in items],
    }
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
