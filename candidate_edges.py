"""
Candidate edge generation for air-wire building.

Reduces a point set to a sparse set of geometrically reasonable edges that may
become air wires:
- 0/1 points: nothing
- 2 points: the direct edge
- collinear points: a path along the line
- otherwise: the edges of a Delaunay triangulation

The Euclidean minimum spanning tree is a subgraph of the Delaunay
triangulation, so selecting air wires from these candidates loses nothing
compared to considering all O(n^2) pairs.
"""

import functools
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np
from scipy.spatial import Delaunay, QhullError

from airwire_config import AirWireConfig
from airwire_constants import COLLINEAR_ANGLE_TOLERANCE, COLLINEAR_MIN_DIST_SQ, MIN_TRIANGULATION_POINTS
from airwire_types import CandidateEdge, Point
from geometry_utils import points_collinear

# Maps a point list to index pairs (i, j) of edges worth considering
Triangulator = Callable[[Sequence[Point]], List[Tuple[int, int]]]


def collinear_path_edges(points: Sequence[Point]) -> List[Tuple[int, int]]:
    """
    Connect points lying on one line as a path.

    Points are sorted by their projection onto the line through the first
    point and the point farthest from it, so nearly vertical lines are not
    ordered by x noise. The direction points along its dominant axis (x on a
    tie); the sort is stable so coincident points keep their registration order.
    """
    if not points:
        return []
    p0 = points[0]
    far = max(points, key=p0.dist2)
    dx = far.x - p0.x
    dy = far.y - p0.y
    if (dx if abs(dx) >= abs(dy) else dy) < 0:
        dx, dy = -dx, -dy

    # Integer projection, exact for nanometre coordinates
    order = sorted(range(len(points)),
                   key=lambda i: (points[i].x - p0.x) * dx + (points[i].y - p0.y) * dy)
    return [(order[k - 1], order[k]) for k in range(1, len(order))]


def complete_graph_edges(points: Sequence[Point]) -> List[Tuple[int, int]]:
    """All pairs of points. Always connected, but O(n^2) edges."""
    n = len(points)
    return [(i, j) for i in range(n) for j in range(i + 1, n)]


def delaunay_edges(points: Sequence[Point],
                   min_dist_sq: int = COLLINEAR_MIN_DIST_SQ,
                   angle_tolerance: float = COLLINEAR_ANGLE_TOLERANCE) -> List[Tuple[int, int]]:
    """
    Edges of the Delaunay triangulation of the points.

    Qhull silently drops repeated coordinates and rejects flat inputs, so:
    - points with identical coordinates are collapsed onto the first one and
      linked to it with a (zero-length) edge
    - if the distinct points cannot be triangulated (fewer than 3, or all on
      one line) they are connected as a path instead
    - points Qhull reports as coplanar (not a vertex of any triangle) are
      linked to their nearest vertex
    - if Qhull rejects a nearly degenerate set, it is retried with joggled
      input (QJ), which keeps every point as a vertex

    Args:
        points: Points in integer nanometres
        min_dist_sq: Collinearity separation threshold (nm^2) for the distinct points
        angle_tolerance: Collinearity angle tolerance (rad) for the distinct points

    Returns:
        List of (i, j) index pairs into points, each pair listed once
    """
    edges: List[Tuple[int, int]] = []

    # Collapse coincident points onto their first occurrence
    first_at: Dict[Tuple[int, int], int] = {}
    distinct: List[int] = []
    for i, p in enumerate(points):
        key = (p.x, p.y)
        if key in first_at:
            edges.append((first_at[key], i))
        else:
            first_at[key] = i
            distinct.append(i)

    distinct_points = [points[i] for i in distinct]
    if (len(distinct) < MIN_TRIANGULATION_POINTS or
            points_collinear(distinct_points, min_dist_sq, angle_tolerance)):
        for a, b in collinear_path_edges(distinct_points):
            edges.append((distinct[a], distinct[b]))
        return edges

    # Nanometre coordinates fit exactly into float64
    coords = np.array([(p.x, p.y) for p in distinct_points], dtype=np.float64)
    try:
        tri = Delaunay(coords)
    except QhullError as e:
        reason = str(e).strip().split('\n')[0]
        print(f"  Warning: triangulation of {len(distinct)} points failed ({reason}), retrying with joggled input")
        tri = Delaunay(coords, qhull_options="QJ")

    indptr, indices = tri.vertex_neighbor_vertices
    for k in range(len(distinct)):
        for j in indices[indptr[k]:indptr[k + 1]]:
            j = int(j)
            if k < j:
                edges.append((distinct[k], distinct[j]))

    # coplanar rows are (point index, simplex index, nearest vertex index)
    for point_idx, _simplex_idx, vertex_idx in tri.coplanar:
        edges.append((distinct[int(vertex_idx)], distinct[int(point_idx)]))

    return edges


def generate_candidates(points: Sequence[Point],
                        config: Optional[AirWireConfig] = None,
                        triangulator: Optional[Triangulator] = None) -> List[CandidateEdge]:
    """
    Generate weighted candidate edges for a point set.

    Args:
        points: Registered points, indexed by point id
        config: Collinearity thresholds and triangulation choice (defaults if None)
        triangulator: Replaces the default triangulation for the general case

    Returns:
        Candidate edges weighted by exact squared distance, in generation order
    """
    if config is None:
        config = AirWireConfig()

    n = len(points)
    if n <= 1:
        pairs = []
    elif n == 2:
        # Triangulation is undefined for two points
        pairs = [(0, 1)]
    elif points_collinear(points, config.collinear_min_dist_sq, config.collinear_angle_tolerance):
        # Triangulation is undefined for a zero-area point set
        pairs = collinear_path_edges(points)
        if config.verbose:
            print(f"  {n} collinear points, using path of {len(pairs)} edges")
    else:
        if triangulator is None:
            if config.use_delaunay:
                triangulator = functools.partial(delaunay_edges,
                                                 min_dist_sq=config.collinear_min_dist_sq,
                                                 angle_tolerance=config.collinear_angle_tolerance)
            else:
                triangulator = complete_graph_edges
        try:
            pairs = triangulator(points)
        except QhullError as e:
            reason = str(e).strip().split('\n')[0]
            print(f"  Warning: triangulation of {n} points failed ({reason}), considering all pairs instead")
            pairs = complete_graph_edges(points)
        if config.verbose:
            print(f"  {n} points, {len(pairs)} candidate edges")

    return [CandidateEdge(a, b, points[a].dist2(points[b])) for a, b in pairs]
