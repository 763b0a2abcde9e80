"""
Minimum forest selection (Kruskal) for air-wire building.

Known edges are merged first at no cost, then candidate edges are taken by
ascending squared length. A candidate becomes an air wire exactly when it
joins two components that are still separate.
"""

from typing import Iterable, List, Sequence

from airwire_exceptions import UnknownPointError
from airwire_types import AirWire, CandidateEdge, KnownEdge, Point
from geometry_utils import UnionFind


class MinimumForestSelector:
    """
    Kruskal reduction over a fixed point set.

    The union-find sets are the component tags: two points share a root
    exactly when they are connected through known edges and/or the air wires
    emitted so far.
    """

    def __init__(self, points: Sequence[Point], verbose: bool = False):
        self.points = points
        self.verbose = verbose
        self.uf = UnionFind()
        for point_id in range(len(points)):
            self.uf.add(point_id)
        # Each successful merge reduces the number of air wires still needed
        self.merges_needed = max(0, len(points) - 1)
        self.known_merges = 0

    @property
    def num_components(self) -> int:
        return self.uf.num_sets

    def merge_known(self, known_edges: Iterable[KnownEdge]) -> int:
        """
        Merge components connected by known edges.

        Returns:
            Number of merges the known edges performed

        Raises:
            UnknownPointError: If an edge references an id outside the point list
        """
        merges = 0
        for edge in known_edges:
            for point_id in (edge.a, edge.b):
                if not 0 <= point_id < len(self.points):
                    raise UnknownPointError(point_id, len(self.points))
            if self.uf.union(edge.a, edge.b):
                merges += 1
                self.known_merges += 1
                self.merges_needed -= 1
        return merges

    def select(self, candidates: Iterable[CandidateEdge]) -> List[AirWire]:
        """
        Pick air wires from candidates, cheapest first.

        The sort is stable, so candidates of equal weight keep their
        generation order.
        """
        air_wires: List[AirWire] = []
        for edge in sorted(candidates, key=lambda e: e.weight):
            if len(air_wires) >= self.merges_needed:
                break
            # Endpoints already connected: would close a cycle
            if self.uf.union(edge.a, edge.b):
                air_wires.append((self.points[edge.a], self.points[edge.b]))

        if self.verbose:
            print(f"  {len(self.points)} points, {self.known_merges} merged by known edges, "
                  f"{len(air_wires)} air wires, {self.num_components} component(s) left")
        return air_wires


def select_air_wires(points: Sequence[Point],
                     known_edges: Iterable[KnownEdge],
                     candidates: Iterable[CandidateEdge],
                     verbose: bool = False) -> List[AirWire]:
    """
    Compute the air wires needed to connect all points.

    Args:
        points: Registered points, indexed by point id
        known_edges: Existing connections (free)
        candidates: Possible air wires weighted by squared length

    Returns:
        Air wires in the order they were accepted
    """
    selector = MinimumForestSelector(points, verbose=verbose)
    selector.merge_known(known_edges)
    return selector.select(candidates)
