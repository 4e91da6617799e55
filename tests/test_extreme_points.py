"""Tests for extreme-point candidate generation and ordering."""

from container_packing.algorithms.extreme_points import (
    ORIGIN,
    CandidatePoint,
    generate_candidates,
    sort_candidates,
)
from container_packing.core.models import BoundingBox, Container


def test_empty_ledger_yields_origin_only(ledger, container_20ft):
    assert generate_candidates(ledger, container_20ft) == [ORIGIN]


def test_three_points_per_box(ledger, container_20ft):
    ledger.add(BoundingBox.from_extents(0, 0, 0, 100, 80, 60))
    points = generate_candidates(ledger, container_20ft)
    assert points == [
        CandidatePoint(0, 0, 0),
        CandidatePoint(100, 0, 0),
        CandidatePoint(0, 80, 0),
        CandidatePoint(0, 0, 60),
    ]


def test_points_on_far_walls_are_dropped(ledger):
    container = Container(id="c", length=100, width=100, height=100)
    ledger.add(BoundingBox.from_extents(0, 0, 0, 100, 100, 100))
    assert generate_candidates(ledger, container) == [ORIGIN]


def test_count_is_bounded(ledger, container_20ft):
    for i in range(4):
        ledger.add(BoundingBox.from_extents(i * 10, 0, 0, 10, 10, 10))
    assert len(generate_candidates(ledger, container_20ft)) <= 1 + 3 * len(ledger)


def test_sort_is_z_then_y_then_x():
    points = [
        CandidatePoint(0, 0, 60),
        CandidatePoint(0, 80, 0),
        CandidatePoint(100, 0, 0),
        CandidatePoint(0, 0, 0),
        CandidatePoint(50, 80, 0),
    ]
    assert sort_candidates(points) == [
        CandidatePoint(0, 0, 0),
        CandidatePoint(100, 0, 0),
        CandidatePoint(0, 80, 0),
        CandidatePoint(50, 80, 0),
        CandidatePoint(0, 0, 60),
    ]
