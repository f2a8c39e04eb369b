import math

import numpy as np
import pytest

from trisoup.core.constants import EPS_POINT
from trisoup.core.geometry import Triangle
from trisoup.core.triangulator import DelaunayTriangulator
from trisoup.core.validation import (
    check_triangulation, circumcircles, convex_hull_area, convex_hull_size,
    expected_triangle_count, find_circumcircle_violations, index_triangles,
    points_to_array, triangles_signed_areas, triangles_to_arrays, unique_points,
)

SQUARE_WITH_CENTER = [(0, 0), (2, 0), (0, 2), (2, 2), (1, 1)]


def test_points_to_array():
    arr = points_to_array([(0, 1), (2, 3)])
    assert arr.shape == (2, 2)
    assert arr.dtype == np.float64
    assert points_to_array([]).shape == (0, 2)
    with pytest.raises(ValueError):
        points_to_array(np.zeros((4, 3)))


def test_unique_points_keeps_first_occurrence():
    pts = [(0, 0), (1, 1), (EPS_POINT / 10, 0), (1, 1), (2, 0)]
    out = unique_points(pts)
    assert out.tolist() == [[0.0, 0.0], [1.0, 1.0], [2.0, 0.0]]


def test_index_triangles_marks_foreign_vertices():
    pts = [(0, 0), (1, 0), (0, 1)]
    tris = [Triangle((0, 1), (0, 0), (1, 0)), Triangle((0, 0), (1, 0), (50, 50))]
    idx = index_triangles(tris, pts)
    assert idx.dtype == np.int32
    assert idx.tolist() == [[2, 0, 1], [0, 1, -1]]
    assert index_triangles([], pts).shape == (0, 3)


def test_signed_areas_follow_winding():
    pts = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]])
    areas = triangles_signed_areas(pts, [[0, 1, 2], [0, 2, 1]])
    assert areas.tolist() == pytest.approx([0.5, -0.5])
    assert triangles_signed_areas(pts, np.empty((0, 3), dtype=int)).shape == (0,)


def test_circumcircles():
    pts = np.array([[0.0, 0.0], [4.0, 0.0], [0.0, 4.0], [8.0, 0.0]])
    centers, radii = circumcircles(pts, [[0, 1, 2], [0, 1, 3]])
    assert centers[0].tolist() == pytest.approx([2.0, 2.0])
    assert radii[0] == pytest.approx(math.sqrt(8.0))
    # collinear row
    assert np.all(np.isnan(centers[1]))
    assert np.isinf(radii[1])


def test_hull_measures():
    assert convex_hull_area(SQUARE_WITH_CENTER) == pytest.approx(4.0)
    assert convex_hull_size(SQUARE_WITH_CENTER) == 4
    assert expected_triangle_count(SQUARE_WITH_CENTER) == 4


def test_hull_measures_flat_input():
    line = [(0, 0), (1, 1), (2, 2)]
    assert convex_hull_area(line) == 0.0
    assert convex_hull_size(line) == 0
    assert expected_triangle_count(line) == 0
    assert convex_hull_size([(0, 0), (1, 0)]) == 0


def test_find_circumcircle_violations():
    # A, B, C above and D just below AB: both triangles on AB are illegal
    pts = np.array([[0.0, 0.0], [4.0, 0.0], [2.0, 3.0], [2.0, -0.5]])
    tris = np.array([[0, 1, 2], [0, 1, 3]])
    assert find_circumcircle_violations(pts, tris) == [(0, 3), (1, 2)]
    # flipping the diagonal makes it legal
    flipped = np.array([[0, 3, 2], [3, 1, 2]])
    assert find_circumcircle_violations(pts, flipped) == []


def test_check_triangulation_accepts_result():
    dt = DelaunayTriangulator(SQUARE_WITH_CENTER)
    assert dt.triangulate()
    report = check_triangulation(SQUARE_WITH_CENTER, dt.get_triangles())
    assert report.ok, report.issues
    assert report.n_points == 5
    assert report.n_triangles == 4
    assert report.expected_triangles == 4
    assert report.area == pytest.approx(4.0)
    assert report.hull_area == pytest.approx(4.0)


def test_check_triangulation_reports_gaps():
    dt = DelaunayTriangulator(SQUARE_WITH_CENTER)
    assert dt.triangulate()
    partial = dt.get_triangles()[1:]
    report = check_triangulation(SQUARE_WITH_CENTER, partial)
    assert not report.ok
    assert any('hull area' in issue for issue in report.issues)
    assert any('expected 2n-2-h' in issue for issue in report.issues)

    no_count = check_triangulation(SQUARE_WITH_CENTER, partial, check_count=False)
    assert len(no_count.issues) == 1
    assert 'hull area' in no_count.issues[0]


def test_check_triangulation_foreign_vertex():
    tris = [Triangle((0, 0), (2, 0), (9, 9))]
    report = check_triangulation(SQUARE_WITH_CENTER, tris)
    assert not report.ok
    assert 'not input points' in report.issues[0]


def test_check_triangulation_empty():
    assert not check_triangulation(SQUARE_WITH_CENTER, []).ok
    assert check_triangulation([(0, 0), (1, 1), (2, 2)], []).ok


def test_triangles_to_arrays_matches_triangulator_export():
    dt = DelaunayTriangulator(SQUARE_WITH_CENTER)
    dt.triangulate()
    pts_a, tris_a = triangles_to_arrays(dt.get_triangles(), SQUARE_WITH_CENTER)
    pts_b, tris_b = dt.to_arrays()
    assert np.array_equal(pts_a, pts_b)
    assert np.array_equal(tris_a, tris_b)
    # every triangle uses the center point (index 4)
    assert np.all(np.any(tris_a == 4, axis=1))


@pytest.mark.parametrize('points, h, expected', [
    ([(0, 0), (2, 0), (1, 0), (0, 2)], 4, 2),
    ([(0, 0), (4, 0), (0, 4), (2, 0), (1, 1)], 4, 4),
    ([(3, 0), (0, 3), (0, 0), (1.5, 1.5)], 4, 2),
])
def test_hull_size_counts_points_on_hull_edges(points, h, expected):
    assert convex_hull_size(points) == h
    assert expected_triangle_count(points) == expected


@pytest.mark.parametrize('points', [
    [(0, 0), (2, 0), (1, 0), (0, 2)],
    [(3, 0), (0, 3), (0, 0), (1.5, 1.5)],
])
def test_check_triangulation_with_point_on_hull_edge(points):
    dt = DelaunayTriangulator(points)
    assert dt.triangulate()
    report = check_triangulation(points, dt.get_triangles())
    assert report.ok, report.issues
    assert report.n_triangles == 2
