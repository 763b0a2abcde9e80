"""
Shared fixtures and helpers for the air-wire tests.
"""

import os
import random
import sys
from typing import List, Sequence, Tuple

import pytest

# Get the root directory (parent of tests/)
TESTS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.dirname(TESTS_DIR)
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from airwire_types import AirWire, Point
from geometry_utils import UnionFind


def components_after(points: Sequence[Point], known_edges: Sequence[Tuple[int, int]],
                     air_wires: Sequence[AirWire]) -> int:
    """Count connected components of known edges plus air wires.

    Air wires are matched back to point ids by coordinates, so callers must
    avoid duplicate coordinates unless the duplicates are interchangeable.
    """
    uf = UnionFind()
    for i in range(len(points)):
        uf.add(i)
    ids_at = {}
    for i, p in enumerate(points):
        ids_at.setdefault(p, []).append(i)
    for a, b in known_edges:
        uf.union(a, b)
    for p1, p2 in air_wires:
        # Pick the first pair of ids at these coordinates that is not yet joined
        for a in ids_at[p1]:
            joined = False
            for b in ids_at[p2]:
                if uf.union(a, b):
                    joined = True
                    break
            if joined:
                break
    return uf.num_sets


def total_weight(air_wires: Sequence[AirWire]) -> int:
    """Sum of squared air-wire lengths (nm^2)."""
    return sum(p1.dist2(p2) for p1, p2 in air_wires)


def random_points(count: int, seed: int, extent: int = 50_000_000) -> List[Point]:
    rng = random.Random(seed)
    return [Point(rng.randint(0, extent), rng.randint(0, extent)) for _ in range(count)]


@pytest.fixture
def grid_points() -> List[Point]:
    """4x3 grid with 2.54mm pitch."""
    pitch = 2_540_000
    return [Point(col * pitch, row * pitch) for row in range(3) for col in range(4)]
