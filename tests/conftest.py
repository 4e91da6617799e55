"""Shared fixtures for the container-packing test suite."""

import os
import sys

import pytest

# Ensure the src/ layout is importable without an editable install
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from container_packing.core.config import PackingConfig
from container_packing.core.models import Container, Item, get_container_preset
from container_packing.algorithms.ledger import BoundsLedger


@pytest.fixture
def config():
    """Default tolerances."""
    return PackingConfig()


@pytest.fixture
def ledger(config):
    """Fresh empty ledger."""
    return BoundsLedger(config)


@pytest.fixture
def container_20ft():
    return get_container_preset("20ft")


@pytest.fixture
def cube_container():
    """200 x 100 x 100: room for exactly two 100 cm cubes side by side."""
    return Container(id="pair", length=200.0, width=100.0, height=100.0)


@pytest.fixture
def normal_item():
    """A standard item that fits on the floor of a 20ft container."""
    return Item(id="a", length=100.0, width=80.0, height=60.0, name="Crate")


@pytest.fixture
def giant_item():
    """Larger than the 20ft container in every orientation."""
    return Item(id="giant", length=9999.0, width=9999.0, height=9999.0)


def cube(item_id: str, size: float = 100.0) -> Item:
    return Item(id=item_id, length=size, width=size, height=size)
