"""
Shared geometry utility functions for air-wire building.

This module consolidates geometry calculations used across multiple modules:
- Undirected direction angles
- Collinearity detection on integer point sets
- Union-Find data structure for connectivity
"""

import math
from typing import Any, Dict, Sequence, TYPE_CHECKING

from airwire_constants import COLLINEAR_ANGLE_TOLERANCE, COLLINEAR_MIN_DIST_SQ, HALF_TURN

if TYPE_CHECKING:
    from airwire_types import Point


class UnionFind:
    """
    Union-Find (Disjoint Set Union) data structure with path compression and union by size.

    Used for tracking which points are already mutually reachable.
    Supports arbitrary hashable keys.

    Example:
        uf = UnionFind()
        uf.union('a', 'b')
        uf.union('b', 'c')
        assert uf.find('a') == uf.find('c')  # a and c are connected
    """

    def __init__(self):
        self.parent: Dict[Any, Any] = {}
        self.size: Dict[Any, int] = {}
        self.num_sets = 0

    def add(self, x: Any) -> None:
        """Track x as a singleton set if it is not tracked yet."""
        if x not in self.parent:
            self.parent[x] = x
            self.size[x] = 1
            self.num_sets += 1

    def find(self, x: Any) -> Any:
        """
        Find the root representative of the set containing x.

        Uses path compression for O(α(n)) amortized time complexity.
        Creates a new singleton set if x is not yet tracked.
        """
        self.add(x)
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        # Path compression
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]
        return root

    def union(self, x: Any, y: Any) -> bool:
        """
        Merge the sets containing x and y.

        The smaller set is attached under the larger one.

        Returns:
            True if two different sets were merged, False if x and y were
            already in the same set.
        """
        px, py = self.find(x), self.find(y)
        if px == py:
            return False
        if self.size[px] < self.size[py]:
            px, py = py, px
        self.parent[py] = px
        self.size[px] += self.size[py]
        self.num_sets -= 1
        return True

    def connected(self, x: Any, y: Any) -> bool:
        """Check if x and y are in the same set."""
        return self.find(x) == self.find(y)

    def set_size(self, x: Any) -> int:
        """Number of elements in the set containing x."""
        return self.size[self.find(x)]


def undirected_angle(dx: float, dy: float) -> float:
    """
    Direction angle of the vector (dx, dy), folded into [0, pi).

    Opposite directions map to the same angle since edges have no direction.
    """
    angle = math.atan2(dy, dx)
    if angle < 0:
        angle += HALF_TURN
    # atan2 returns exactly pi for (-x, 0)
    if angle >= HALF_TURN:
        angle -= HALF_TURN
    return angle


def points_collinear(points: Sequence['Point'],
                     min_dist_sq: int = COLLINEAR_MIN_DIST_SQ,
                     angle_tolerance: float = COLLINEAR_ANGLE_TOLERANCE) -> bool:
    """
    Check if all points lie on one line.

    The reference direction goes from the first to the second point. Every
    further point farther than sqrt(min_dist_sq) from the first point must have
    the same undirected direction from the first point within angle_tolerance.
    Points closer than that are treated as coincident with the first point.

    Args:
        points: Points in integer nanometres
        min_dist_sq: Squared distance (nm^2) below which a point is ignored
        angle_tolerance: Allowed absolute angle deviation in radians

    Returns:
        True if the points are collinear (always True for fewer than 3 points)
    """
    if len(points) < 3:
        return True

    p0 = points[0]
    p1 = points[1]
    ref_angle = undirected_angle(p1.x - p0.x, p1.y - p0.y)

    for p in points[2:]:
        dx = p.x - p0.x
        dy = p.y - p0.y
        if dx * dx + dy * dy > min_dist_sq:
            diff = abs(undirected_angle(dx, dy) - ref_angle)
            # Angles just above 0 and just below pi are the same direction
            diff = min(diff, HALF_TURN - diff)
            if diff > angle_tolerance:
                return False

    return True
