"""Array export and structural checks for finished triangulations.

Functions operate on raw numpy arrays: ``points`` is an (N, 2) float array and
``tris`` an (M, 3) int array indexing it. :func:`triangles_to_arrays` converts
the triangulator's list of :class:`~trisoup.core.geometry.Triangle` into that
form.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np
from scipy.spatial import ConvexHull, QhullError

from .constants import EPS_AREA, EPS_CIRCUMCIRCLE, EPS_COVERAGE, EPS_POINT
from .geometry import Point, Triangle
from .logging_utils import get_logger

logger = get_logger('trisoup.validation')

__all__ = [
    'points_to_array', 'unique_points', 'index_triangles', 'triangles_to_arrays',
    'triangles_signed_areas', 'circumcircles', 'convex_hull_area', 'convex_hull_size',
    'expected_triangle_count', 'find_circumcircle_violations',
    'ValidationReport', 'check_triangulation',
]


def points_to_array(points) -> np.ndarray:
    """Return an (N, 2) float64 array for Points, pairs or an existing array."""
    if isinstance(points, np.ndarray):
        arr = np.asarray(points, dtype=np.float64)
    else:
        arr = np.asarray([Point.of(p).as_tuple() for p in points], dtype=np.float64)
    if arr.size == 0:
        return np.empty((0, 2), dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"expected an (N, 2) array of points, got shape {arr.shape}")
    return arr


def unique_points(points, eps: float = EPS_POINT) -> np.ndarray:
    """Drop points equal (within ``eps``) to an earlier one, keeping order."""
    pts = points_to_array(points)
    keep: List[int] = []
    for i in range(pts.shape[0]):
        if keep:
            d2 = np.sum((pts[keep] - pts[i]) ** 2, axis=1)
            if np.any(d2 < eps * eps):
                continue
        keep.append(i)
    return pts[keep]


def index_triangles(triangles: Sequence[Triangle], points, eps: float = EPS_POINT) -> np.ndarray:
    """Map triangle vertices back to indices into ``points``.

    Each vertex gets the index of the nearest input point, or -1 when no
    input point lies within ``eps`` (a super-triangle vertex, for instance).
    """
    pts = points_to_array(points)
    if len(triangles) == 0:
        return np.empty((0, 3), dtype=np.int32)
    verts = np.asarray([[v.as_tuple() for v in t] for t in triangles], dtype=np.float64).reshape(-1, 2)
    if pts.shape[0] == 0:
        return np.full((len(triangles), 3), -1, dtype=np.int32)
    d2 = np.sum((verts[:, None, :] - pts[None, :, :]) ** 2, axis=2)
    nearest = np.argmin(d2, axis=1)
    found = d2[np.arange(verts.shape[0]), nearest] < eps * eps
    idx = np.where(found, nearest, -1).astype(np.int32)
    return idx.reshape(-1, 3)


def triangles_to_arrays(triangles: Sequence[Triangle], points) -> Tuple[np.ndarray, np.ndarray]:
    """Return (points (N,2) float64, tris (M,3) int32) for a triangle list."""
    pts = points_to_array(points)
    return pts, index_triangles(triangles, pts)


def triangles_signed_areas(points, tris) -> np.ndarray:
    """Vectorized signed area for a batch of triangles.

    points: (N,2) float array
    tris:   (M,3) int array
    Returns: (M,) float64 array of signed areas (0.5 * cross).
    """
    pts = np.asarray(points, dtype=np.float64)
    T = np.asarray(tris, dtype=np.int32)
    if T.size == 0:
        return np.empty((0,), dtype=float)
    p0 = pts[T[:, 0]]; p1 = pts[T[:, 1]]; p2 = pts[T[:, 2]]
    e1 = p1 - p0
    e2 = p2 - p0
    return 0.5 * (e1[:, 0] * e2[:, 1] - e1[:, 1] * e2[:, 0])


def circumcircles(points, tris) -> Tuple[np.ndarray, np.ndarray]:
    """Vectorized circumcenters (M,2) and radii (M,).

    Degenerate rows get NaN centers and an infinite radius.
    """
    pts = np.asarray(points, dtype=np.float64)
    T = np.asarray(tris, dtype=np.int32)
    if T.size == 0:
        return np.empty((0, 2), dtype=np.float64), np.empty((0,), dtype=np.float64)
    a = pts[T[:, 0]]; b = pts[T[:, 1]]; c = pts[T[:, 2]]
    d = 2.0 * (a[:, 0] * (b[:, 1] - c[:, 1]) + b[:, 0] * (c[:, 1] - a[:, 1]) + c[:, 0] * (a[:, 1] - b[:, 1]))
    a2 = np.sum(a * a, axis=1); b2 = np.sum(b * b, axis=1); c2 = np.sum(c * c, axis=1)
    degenerate = d == 0.0
    safe_d = np.where(degenerate, 1.0, d)
    ux = (a2 * (b[:, 1] - c[:, 1]) + b2 * (c[:, 1] - a[:, 1]) + c2 * (a[:, 1] - b[:, 1])) / safe_d
    uy = (a2 * (c[:, 0] - b[:, 0]) + b2 * (a[:, 0] - c[:, 0]) + c2 * (b[:, 0] - a[:, 0])) / safe_d
    centers = np.column_stack((ux, uy))
    radii = np.linalg.norm(centers - a, axis=1)
    centers[degenerate] = np.nan
    radii[degenerate] = np.inf
    return centers, radii


def _hull(points):
    pts = unique_points(points)
    if pts.shape[0] < 3:
        return None
    try:
        return ConvexHull(pts)
    except QhullError:
        # collinear or otherwise flat input
        return None


def convex_hull_area(points) -> float:
    hull = _hull(points)
    return float(hull.volume) if hull is not None else 0.0


def convex_hull_size(points, eps: float = EPS_POINT) -> int:
    """Number of distinct points on the convex hull boundary.

    Qhull reports corners only; points lying on a hull edge (within ``eps``
    of a facet line) are counted too.
    """
    pts = unique_points(points)
    hull = _hull(pts)
    if hull is None:
        return 0
    # equations rows are (nx, ny, offset) with unit normals
    dist = np.abs(pts @ hull.equations[:, :2].T + hull.equations[:, 2])
    return int(np.count_nonzero(np.any(dist <= eps, axis=1)))


def expected_triangle_count(points) -> int:
    """2n - 2 - h for the distinct input points; 0 for flat input.

    h counts every point on the hull boundary, corners and points lying on
    a hull edge alike.
    """
    n = unique_points(points).shape[0]
    h = convex_hull_size(points)
    if h == 0:
        return 0
    return 2 * n - 2 - h


def find_circumcircle_violations(points, tris, rel_tol: float = EPS_CIRCUMCIRCLE) -> List[Tuple[int, int]]:
    """Return (triangle_row, point_index) pairs with the point strictly inside.

    A point counts as inside when its squared distance to the circumcenter is
    below ``r^2 * (1 - rel_tol)``. Degenerate triangles are skipped.
    """
    pts = np.asarray(points, dtype=np.float64)
    T = np.asarray(tris, dtype=np.int32)
    if T.size == 0 or pts.shape[0] == 0:
        return []
    centers, radii = circumcircles(pts, T)
    finite = np.isfinite(radii)
    out: List[Tuple[int, int]] = []
    for row in np.nonzero(finite)[0]:
        d2 = np.sum((pts - centers[row]) ** 2, axis=1)
        inside = d2 < (radii[row] ** 2) * (1.0 - rel_tol)
        inside[T[row]] = False
        for j in np.nonzero(inside)[0]:
            out.append((int(row), int(j)))
    return out


@dataclass
class ValidationReport:
    n_points: int = 0
    n_triangles: int = 0
    expected_triangles: int = 0
    area: float = 0.0
    hull_area: float = 0.0
    issues: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues


def check_triangulation(points, triangles: Sequence[Triangle], check_count: bool = True) -> ValidationReport:
    """Check a triangle list against the points it was built from.

    Verifies that every vertex is an input point, that no triangle is
    degenerate, the empty-circumcircle property, that the triangles cover the
    convex hull exactly and (optionally) the 2n - 2 - h triangle count.
    """
    pts, tris = triangles_to_arrays(triangles, points)
    report = ValidationReport(n_points=int(unique_points(pts).shape[0]), n_triangles=int(tris.shape[0]))
    report.hull_area = convex_hull_area(pts)
    report.expected_triangles = expected_triangle_count(pts)
    if tris.size == 0:
        if report.hull_area > 0.0:
            report.issues.append("no triangles for a point set with non-zero hull area")
        return report

    unknown = np.nonzero(np.any(tris < 0, axis=1))[0]
    if unknown.size:
        report.issues.append(f"{unknown.size} triangle(s) use vertices that are not input points")
        return report

    areas = triangles_signed_areas(pts, tris)
    report.area = float(np.sum(np.abs(areas)))
    n_flat = int(np.count_nonzero(np.abs(areas) <= EPS_AREA))
    if n_flat:
        report.issues.append(f"{n_flat} degenerate triangle(s)")

    violations = find_circumcircle_violations(pts, tris)
    if violations:
        report.issues.append(f"{len(violations)} empty-circumcircle violation(s), first {violations[0]}")

    scale = max(report.hull_area, 1.0)
    if abs(report.area - report.hull_area) > EPS_COVERAGE * scale:
        report.issues.append(f"triangle area {report.area:.6g} != hull area {report.hull_area:.6g}")

    if check_count and report.n_triangles != report.expected_triangles:
        report.issues.append(
            f"{report.n_triangles} triangles, expected 2n-2-h = {report.expected_triangles}")

    logger.debug("validated %d triangles over %d points: %d issue(s)",
                 report.n_triangles, report.n_points, len(report.issues))
    return report
