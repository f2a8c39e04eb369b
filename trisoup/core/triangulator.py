"""Incremental 2D Delaunay triangulation.

Points are inserted one at a time into a triangle soup seeded with a large
bounding super-triangle. A point strictly inside a triangle splits it in three;
a point that no triangle contains (it sits on an edge, or in a rounding gap
between two containment tests) splits the two triangles around the nearest
edge in four. After each insertion the edges opposite the new vertex are
legalized by flipping until every one of them passes the circumcircle test.
Finally every triangle touching a super-triangle vertex is purged.

A point whose nearest edge lies on the outer hull (only one triangle owns it)
cannot be accommodated: the run stops and reports failure instead of trying
to split the hull triangle. Input whose points all lie on one line has no 2D
triangulation and takes the same failure path.

Example
-------
    >>> dt = DelaunayTriangulator([(0, 0), (1, 0), (0, 1), (1, 1)])
    >>> dt.triangulate()
    True
    >>> len(dt.get_triangles())
    2
"""
from __future__ import annotations

import enum
import time
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .config import TriangulatorConfig
from .constants import EPS_COLLINEAR, SUPER_TRIANGLE_SPAN
from .geometry import Edge, Point, Triangle
from .logging_utils import get_logger
from .soup import TriangleSoup
from .stats import TriangulationStats
from .validation import check_triangulation, triangles_to_arrays

logger = get_logger('trisoup.triangulator')

__all__ = [
    'DelaunayTriangulator', 'TriangulatorState', 'triangulate_points',
    'TriangulationError', 'HullBoundaryError', 'DegenerateInputError',
    'coerce_points', 'is_collinear', 'super_triangle_for',
]

WorkItem = Tuple[int, Edge]


class TriangulationError(Exception):
    pass


class HullBoundaryError(TriangulationError):
    """A point landed on the outer hull where no second triangle shares the nearest edge."""

    def __init__(self, point: Point, index: int, message: Optional[str] = None):
        self.point = point
        self.index = index
        super().__init__(message or f"point #{index} {point.as_tuple()} lies on the hull boundary")


class DegenerateInputError(TriangulationError):
    """The input as a whole admits no triangulation.

    Raised when all points are collinear (or coincide) and when the
    super-triangle collapses to zero area. No single point is to blame, so
    the triangulator leaves ``failed_point`` and ``failed_index`` at None.
    """


class TriangulatorState(enum.Enum):
    EMPTY = 'empty'
    SEEDED = 'seeded'
    INSERTING = 'inserting'
    CLEANED = 'cleaned'
    ABORTED = 'aborted'


def coerce_points(points) -> List[Point]:
    """Accept Points, ``(x, y)`` pairs or an (N, 2) array; raise ValueError otherwise."""
    if points is None:
        return []
    if isinstance(points, np.ndarray):
        arr = np.asarray(points, dtype=np.float64)
        if arr.size == 0:
            return []
        if arr.ndim != 2 or arr.shape[1] != 2:
            raise ValueError(f"expected an (N, 2) array of points, got shape {arr.shape}")
        return [Point(x, y) for x, y in arr]
    return [Point.of(p) for p in points]


def is_collinear(points: Sequence[Point], rel_tol: float = EPS_COLLINEAR) -> bool:
    """True when every point lies on one line through the first point.

    The reference direction runs to the point farthest from the first one;
    a point is off the line when the sine of its angle to that direction
    exceeds ``rel_tol``. Coincident points count as collinear.
    """
    if len(points) < 3:
        return True
    anchor = points[0]
    far = max(points, key=anchor.distance_to)
    if far == anchor:
        return True
    d = far - anchor
    length = d.norm()
    for p in points:
        v = p - anchor
        if abs(d.cross(v)) > rel_tol * length * v.norm():
            return False
    return True


def super_triangle_for(points: Sequence[Point], scale: float, bound_by_magnitude: bool = False) -> Triangle:
    """Bounding triangle (0, 3M), (3M, 0), (-3M, -3M) with M = scale * max coordinate.

    The largest coordinate is the signed ``max(x, y)`` unless
    ``bound_by_magnitude`` asks for ``max(|x|, |y|)``; it is clamped at zero.
    """
    if bound_by_magnitude:
        largest = max(max(abs(p.x), abs(p.y)) for p in points)
    else:
        largest = max(max(p.x, p.y) for p in points)
    m = max(largest, 0.0) * scale
    span = SUPER_TRIANGLE_SPAN * m
    return Triangle(Point(0.0, span), Point(span, 0.0), Point(-span, -span))


class DelaunayTriangulator:
    """Bowyer-Watson style incremental triangulator over a :class:`TriangleSoup`.

    Parameters
    ----------
    points : sequence, optional
        Points to triangulate, in insertion order. May also be passed to
        :meth:`triangulate`.
    config : TriangulatorConfig, optional
    """

    def __init__(self, points=None, config: Optional[TriangulatorConfig] = None):
        self.config = config or TriangulatorConfig()
        self.points: List[Point] = coerce_points(points)
        self.soup = TriangleSoup()
        self.super_triangle: Optional[Triangle] = None
        self.state = TriangulatorState.EMPTY
        self.stats = TriangulationStats()
        self.failed_point: Optional[Point] = None
        self.failed_index: Optional[int] = None

    # -- public API --------------------------------------------------------

    def triangulate(self, points=None) -> bool:
        """Triangulate the point set; True on success.

        On failure the soup is left as it was when the run stopped.
        """
        if points is not None:
            self.points = coerce_points(points)
        self.soup = TriangleSoup()
        self.super_triangle = None
        self.state = TriangulatorState.EMPTY
        self.stats.reset()
        self.failed_point = None
        self.failed_index = None

        t0 = time.perf_counter()
        try:
            return self._run()
        finally:
            self.stats.time_total = time.perf_counter() - t0
            logger.debug("triangulate: state=%s points=%d triangles=%d flips=%d (%.3f ms)",
                         self.state.value, self.stats.points_total, len(self.soup),
                         self.stats.flips, self.stats.time_total * 1000.0)

    def get_triangles(self) -> List[Triangle]:
        if self.state is TriangulatorState.ABORTED:
            logger.warning("reading triangles of an aborted triangulation (partial state)")
        return self.soup.triangles()

    def to_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """(points (N,2) float64, tris (M,3) int32) with tris indexing the input points."""
        return triangles_to_arrays(self.get_triangles(), self.points)

    @property
    def succeeded(self) -> bool:
        return self.state is TriangulatorState.CLEANED

    # -- driver ------------------------------------------------------------

    def _run(self) -> bool:
        pts = self.points
        cfg = self.config
        self.stats.points_total = len(pts)

        if len(pts) < 3:
            self.state = TriangulatorState.CLEANED
            return True

        if is_collinear(pts):
            return self._abort(None, None, DegenerateInputError,
                               "all %d input points are collinear" % len(pts))

        st = super_triangle_for(pts, cfg.super_triangle_scale, cfg.bound_by_magnitude)
        if st.area() == 0.0:
            return self._abort(None, None, DegenerateInputError,
                               "super-triangle has zero area (no positive coordinate); "
                               "see bound_by_magnitude")
        self.super_triangle = st
        self.soup.add(st)
        self.state = TriangulatorState.SEEDED
        logger.debug("seeded super-triangle %s", [v.as_tuple() for v in st])
        outside = sum(1 for p in pts if not st.contains(p))
        if outside:
            logger.warning("super-triangle does not strictly enclose %d of %d points; "
                           "insertion may fail (see bound_by_magnitude)", outside, len(pts))

        self.state = TriangulatorState.INSERTING
        inserted: List[Point] = []
        for i, p in enumerate(pts):
            if cfg.drop_duplicates and any(p == q for q in inserted):
                self.stats.duplicates_skipped += 1
                logger.debug("skipping duplicate point #%d %s", i, p.as_tuple())
                continue
            if not self._insert(p):
                return self._abort(p, i, HullBoundaryError,
                                   "point #%d %s lies on the hull boundary" % (i, p.as_tuple()))
            inserted.append(p)
            self.stats.points_inserted += 1

        for v in st:
            self.stats.purged += self.soup.purge(v)
        self.state = TriangulatorState.CLEANED
        self.stats.triangles_out = len(self.soup)

        if cfg.post_check:
            report = check_triangulation(inserted, self.soup.triangles())
            for issue in report.issues:
                logger.warning("post-check: %s", issue)
        return True

    def _abort(self, point: Optional[Point], index: Optional[int], error_cls, message: str) -> bool:
        self.state = TriangulatorState.ABORTED
        self.failed_point = point
        self.failed_index = index
        if index is not None:
            self.stats.aborted_at = index
        logger.warning("triangulation aborted: %s", message)
        if self.config.strict:
            if error_cls is HullBoundaryError:
                raise HullBoundaryError(point, index, message)
            raise error_cls(message)
        return False

    # -- insertion ---------------------------------------------------------

    def _insert(self, p: Point) -> bool:
        soup = self.soup
        handle = soup.locate(p)
        if handle is not None:
            a, b, c = soup.remove(handle)
            first = soup.add(Triangle(a, b, p))
            second = soup.add(Triangle(b, c, p))
            third = soup.add(Triangle(c, a, p))
            self.stats.interior_inserts += 1
            self._legalize([(first, Edge(a, b)), (second, Edge(b, c)), (third, Edge(c, a))], p)
            return True

        # On an edge, or lost between two containment tests: split the pair
        # of triangles around the nearest edge.
        edge = soup.nearest_edge(p)
        first = soup.one_sharing(edge)
        second = soup.neighbor(first, edge)
        if second is None:
            return False

        apex1 = soup.get(first).opposite_vertex(edge)
        apex2 = soup.get(second).opposite_vertex(edge)
        if apex1 is None or apex2 is None:
            # degenerate triangle with no vertex off the edge
            return False
        soup.remove(first)
        soup.remove(second)

        t1 = soup.add(Triangle(edge.start, apex1, p))
        t2 = soup.add(Triangle(edge.end, apex1, p))
        t3 = soup.add(Triangle(edge.start, apex2, p))
        t4 = soup.add(Triangle(edge.end, apex2, p))
        self.stats.edge_inserts += 1
        self._legalize([
            (t1, Edge(edge.start, apex1)),
            (t2, Edge(edge.end, apex1)),
            (t3, Edge(edge.start, apex2)),
            (t4, Edge(edge.end, apex2)),
        ], p)
        return True

    # -- legalization ------------------------------------------------------

    def _legalize(self, items: List[WorkItem], p: Point) -> None:
        if self.config.legalization == 'recursive':
            for handle, edge in items:
                self._legalize_recursive(handle, edge, p)
            return
        # LIFO so the visiting order matches the recursive form
        stack = list(reversed(items))
        while stack:
            self.stats.max_worklist = max(self.stats.max_worklist, len(stack))
            handle, edge = stack.pop()
            flipped = self._flip_if_illegal(handle, edge, p)
            if flipped is not None:
                stack.append(flipped[1])
                stack.append(flipped[0])

    def _legalize_recursive(self, handle: int, edge: Edge, p: Point) -> None:
        flipped = self._flip_if_illegal(handle, edge, p)
        if flipped is not None:
            for h, e in flipped:
                self._legalize_recursive(h, e, p)

    def _flip_if_illegal(self, handle: int, edge: Edge, p: Point) -> Optional[Tuple[WorkItem, WorkItem]]:
        """Flip ``edge`` when ``p`` lies inside the circumcircle across it.

        Returns the two new (handle, edge) pairs to legalize next, or None
        when the edge is legal.
        """
        soup = self.soup
        self.stats.legalize_calls += 1
        if handle not in soup:
            self.stats.stale_edges += 1
            return None
        nbr = soup.neighbor(handle, edge)
        if nbr is None:
            return None
        nbr_tri = soup.get(nbr)
        if not nbr_tri.in_circumcircle(p):
            return None
        apex = nbr_tri.opposite_vertex(edge)
        if apex is None:
            return None

        soup.remove(handle)
        soup.remove(nbr)
        first = soup.add(Triangle(apex, edge.start, p))
        second = soup.add(Triangle(apex, edge.end, p))
        self.stats.flips += 1
        return (first, Edge(apex, edge.start)), (second, Edge(apex, edge.end))


def triangulate_points(points, config: Optional[TriangulatorConfig] = None) -> Tuple[bool, List[Triangle]]:
    """Functional wrapper: ``(ok, triangles)``; triangles is empty when ok is False."""
    dt = DelaunayTriangulator(points, config=config)
    ok = dt.triangulate()
    return ok, (dt.soup.triangles() if ok else [])
