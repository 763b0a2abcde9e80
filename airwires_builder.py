"""
Air-wire (ratsnest) builder.

Given the points of one net and the connections that already exist between
them, computes the shortest set of extra segments (air wires) that makes every
point reachable from every other one.

Usage:
    builder = AirWiresBuilder()
    a = builder.add_point(Point(0, 0))
    b = builder.add_point(Point(1000, 0))
    c = builder.add_point(Point(0, 1000))
    builder.add_edge(a, b)
    air_wires = builder.build_air_wires()  # [(Point(0, 0), Point(0, 1000))]

A builder computes exactly one result; use a new builder for every net or
whenever the points or connections change.
"""

from typing import Iterable, List, Optional, Tuple

from airwire_config import AirWireConfig
from airwire_exceptions import BuilderStateError, UnknownPointError
from airwire_types import AirWire, KnownEdge, Point
from candidate_edges import Triangulator, generate_candidates
from forest_selector import select_air_wires


class AirWiresBuilder:
    """Collects points and known connections of one net and builds its air wires."""

    def __init__(self, config: Optional[AirWireConfig] = None,
                 triangulator: Optional[Triangulator] = None):
        self.config = (config or AirWireConfig()).validate()
        self.triangulator = triangulator
        self.points: List[Point] = []
        self.known_edges: List[KnownEdge] = []
        self._built = False

    def add_point(self, point: Point) -> int:
        """
        Register a point and return its id.

        Ids are assigned sequentially from 0. Points with identical
        coordinates are still distinct points.
        """
        self._check_not_built()
        point_id = len(self.points)
        self.points.append(point)
        return point_id

    def add_edge(self, p1: int, p2: int) -> None:
        """
        Declare that two registered points are already connected.

        Self-edges and duplicate edges are accepted and have no effect.

        Raises:
            UnknownPointError: If either id was not returned by add_point()
        """
        self._check_not_built()
        for point_id in (p1, p2):
            if not 0 <= point_id < len(self.points):
                raise UnknownPointError(point_id, len(self.points))
        self.known_edges.append(KnownEdge(p1, p2))

    def build_air_wires(self) -> List[AirWire]:
        """
        Compute the air wires.

        Returns:
            List of (Point, Point) pairs, one per component merge, in the order
            they were selected. Pairs are unordered; see normalize_air_wires().
        """
        self._check_not_built()
        self._built = True

        candidates = generate_candidates(self.points, self.config, self.triangulator)
        return select_air_wires(self.points, self.known_edges, candidates,
                                verbose=self.config.verbose)

    def _check_not_built(self) -> None:
        if self._built:
            raise BuilderStateError("Air wires were already built; use a new AirWiresBuilder")


def build_air_wires(points: Iterable[Point],
                    known_edges: Iterable[Tuple[int, int]] = (),
                    config: Optional[AirWireConfig] = None) -> List[AirWire]:
    """
    Build air wires for a point list in one call.

    Args:
        points: Points of the net; their position in the list is their id
        known_edges: (id, id) pairs of points that are already connected
        config: Optional configuration

    Returns:
        List of (Point, Point) air wires
    """
    builder = AirWiresBuilder(config)
    for point in points:
        builder.add_point(point)
    for p1, p2 in known_edges:
        builder.add_edge(p1, p2)
    return builder.build_air_wires()
