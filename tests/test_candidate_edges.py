"""
Tests for candidate edge generation.
"""

import pytest
from scipy.spatial import Delaunay, QhullError

import candidate_edges

from airwire_config import AirWireConfig
from airwire_types import CandidateEdge, Point
from candidate_edges import (
    collinear_path_edges,
    complete_graph_edges,
    delaunay_edges,
    generate_candidates,
)
from conftest import random_points


def edge_set(pairs):
    return {frozenset(p) for p in pairs}


class TestGenerationPolicy:
    """Which strategy is used for which point set."""

    def test_no_points(self):
        assert generate_candidates([]) == []

    def test_one_point(self):
        assert generate_candidates([Point(5, 5)]) == []

    def test_two_points_direct_edge(self):
        candidates = generate_candidates([Point(0, 0), Point(3_000_000, 4_000_000)])
        assert candidates == [CandidateEdge(0, 1, 25_000_000_000_000)]

    def test_collinear_points_form_path(self):
        points = [Point(0, 0), Point(30_000_000, 0), Point(10_000_000, 0), Point(20_000_000, 0)]
        candidates = generate_candidates(points)
        assert edge_set((c.a, c.b) for c in candidates) == edge_set([(0, 2), (2, 3), (3, 1)])

    def test_triangulated_square(self):
        """A square gives its four sides plus one diagonal."""
        side = 10_000_000
        points = [Point(0, 0), Point(side, 0), Point(side, side), Point(0, side)]
        candidates = generate_candidates(points)
        pairs = edge_set((c.a, c.b) for c in candidates)
        assert len(pairs) == 5
        assert edge_set([(0, 1), (1, 2), (2, 3), (3, 0)]) <= pairs

    def test_weights_are_exact_squared_distances(self):
        points = random_points(25, seed=11)
        for c in generate_candidates(points):
            dx = points[c.a].x - points[c.b].x
            dy = points[c.a].y - points[c.b].y
            assert c.weight == dx * dx + dy * dy
            assert isinstance(c.weight, int)

    def test_all_pairs_option(self):
        points = random_points(8, seed=5)
        candidates = generate_candidates(points, AirWireConfig(use_delaunay=False))
        assert len(candidates) == 8 * 7 // 2

    def test_qhull_failure_falls_back_to_all_pairs(self, capsys):
        def failing(points):
            raise QhullError("QH6154 Qhull precision error: initial simplex is flat")

        points = [Point(0, 0), Point(10_000_000, 0), Point(0, 10_000_000), Point(7, 9_000_000)]
        candidates = generate_candidates(points, triangulator=failing)
        assert len(candidates) == 6
        assert "Warning: triangulation of 4 points failed" in capsys.readouterr().out

    def test_config_thresholds_reach_triangulation(self):
        """Duplicates hide near-collinearity from the generator; the config tolerance still applies."""
        points = [Point(0, 0), Point(0, 0), Point(0, 10_000_000), Point(1000, 20_000_000)]
        assert len(generate_candidates(points)) == 4
        candidates = generate_candidates(points, AirWireConfig(collinear_angle_tolerance=1e-3))
        assert edge_set((c.a, c.b) for c in candidates) == edge_set([(0, 1), (0, 2), (2, 3)])


class TestCollinearPath:
    """Path construction for points on one line."""

    def test_sorted_by_x(self):
        points = [Point(0, 0), Point(100, 0), Point(-100, 0)]
        assert collinear_path_edges(points) == [(2, 0), (0, 1)]

    def test_vertical_line_sorted_by_y(self):
        points = [Point(0, 0), Point(0, 30), Point(0, 10), Point(0, 20)]
        assert collinear_path_edges(points) == [(0, 2), (2, 3), (3, 1)]

    def test_coincident_points_keep_order(self):
        points = [Point(5, 5), Point(0, 0), Point(5, 5)]
        assert collinear_path_edges(points) == [(1, 0), (0, 2)]

    def test_near_vertical_line_ordered_along_line(self):
        """Nanometre x jitter on a vertical pin column does not reorder the path."""
        points = [Point(1_000_000, 0), Point(1_000_001, 2_540_000),
                  Point(1_000_000, 5_080_000), Point(999_999, 7_620_000)]
        assert collinear_path_edges(points) == [(0, 1), (1, 2), (2, 3)]

    def test_direction_independent_of_first_point(self):
        points = [Point(0, 20), Point(0, 0), Point(0, 30), Point(0, 10)]
        assert collinear_path_edges(points) == [(1, 3), (3, 0), (0, 2)]

    def test_empty(self):
        assert collinear_path_edges([]) == []


class TestDelaunayEdges:
    """Triangulation robustness."""

    def test_every_point_is_covered(self):
        points = random_points(50, seed=9)
        pairs = delaunay_edges(points)
        covered = {i for pair in pairs for i in pair}
        assert covered == set(range(len(points)))

    def test_each_edge_once(self):
        points = random_points(30, seed=4)
        pairs = delaunay_edges(points)
        assert len(edge_set(pairs)) == len(pairs)
        assert all(a != b for a, b in pairs)

    def test_duplicates_linked_to_first_occurrence(self):
        points = [Point(0, 0), Point(10_000_000, 0), Point(0, 0), Point(0, 10_000_000)]
        pairs = delaunay_edges(points)
        assert (0, 2) in pairs
        assert edge_set(pairs) == edge_set([(0, 2), (0, 1), (0, 3), (1, 3)])

    def test_duplicates_of_collinear_points(self):
        """Leading duplicates hide collinearity from the generator; the path is still used."""
        points = [Point(0, 0), Point(0, 0), Point(0, 10_000_000), Point(0, 20_000_000)]
        candidates = generate_candidates(points)
        assert edge_set((c.a, c.b) for c in candidates) == edge_set([(0, 1), (0, 2), (2, 3)])

    def test_planar_edge_count_bound(self):
        """A planar triangulation has at most 3n - 6 edges."""
        points = random_points(100, seed=12)
        assert len(delaunay_edges(points)) <= 3 * len(points) - 6

    def test_complete_graph(self):
        assert complete_graph_edges([Point(0, 0)] * 4) == [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)]

    def test_qhull_error_retried_with_joggle(self, monkeypatch, capsys):
        calls = []

        def flaky_delaunay(coords, qhull_options=None):
            calls.append(qhull_options)
            if qhull_options is None:
                raise QhullError("QH6154 Qhull precision error: initial simplex is flat")
            return Delaunay(coords, qhull_options=qhull_options)

        monkeypatch.setattr(candidate_edges, "Delaunay", flaky_delaunay)
        points = random_points(40, seed=3)
        pairs = delaunay_edges(points)

        assert calls == [None, "QJ"]
        assert "retrying with joggled input" in capsys.readouterr().out
        assert {i for pair in pairs for i in pair} == set(range(len(points)))
        assert len(pairs) <= 3 * len(points) - 6
