"""Geometric primitives for incremental Delaunay triangulation.

Points, edges and triangles are small immutable value types. Vertex matching
throughout the triangulator goes through :class:`Point` equality, which is
approximate (see ``EPS_POINT``): coordinates produced by upstream floating
point computations are rarely bit-identical even when they describe the same
vertex. Approximate equality is not transitive, so none of these types are
hashable.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional, Tuple

from .constants import EPS_POINT

__all__ = [
    'Point', 'Edge', 'Triangle', 'EdgeDistance',
    'cross', 'orient', 'sign',
]


def sign(value: float) -> int:
    """Return -1, 0 or 1 following the sign of ``value``."""
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def cross(u: 'Point', v: 'Point') -> float:
    """``u.y * v.x - u.x * v.y``: positive when v is clockwise from u.

    Opposite sign to :meth:`Point.cross`.
    """
    return u.y * v.x - u.x * v.y


def orient(a: 'Point', b: 'Point', c: 'Point') -> float:
    """2D orientation (signed area * 2) for points a, b, c.

    Returns a positive value when (a, b, c) are counter-clockwise, negative when
    clockwise, and zero when collinear.
    """
    return (b.x - a.x) * (c.y - a.y) - (b.y - a.y) * (c.x - a.x)


@dataclass(frozen=True, eq=False)
class Point:
    x: float
    y: float

    def __post_init__(self):
        object.__setattr__(self, 'x', float(self.x))
        object.__setattr__(self, 'y', float(self.y))

    @classmethod
    def of(cls, value) -> 'Point':
        """Coerce a Point, an ``(x, y)`` pair or a length-2 array row."""
        if isinstance(value, Point):
            return value
        try:
            x, y = value
        except (TypeError, ValueError):
            raise ValueError(f"expected a 2D point, got {value!r}") from None
        return cls(x, y)

    def close_to(self, other: 'Point', eps: float = EPS_POINT) -> bool:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy < eps * eps

    def __eq__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return self.close_to(other)

    __hash__ = None

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: 'Point') -> 'Point':
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> 'Point':
        return Point(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __neg__(self) -> 'Point':
        return Point(-self.x, -self.y)

    def dot(self, other: 'Point') -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: 'Point') -> float:
        """z component of the 3D cross product of the two vectors."""
        return self.x * other.y - self.y * other.x

    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    def distance_to(self, other: 'Point') -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True, eq=False)
class Edge:
    """Undirected segment between two points."""
    start: Point
    end: Point

    def __post_init__(self):
        object.__setattr__(self, 'start', Point.of(self.start))
        object.__setattr__(self, 'end', Point.of(self.end))

    def __eq__(self, other):
        if not isinstance(other, Edge):
            return NotImplemented
        return ((self.start == other.start and self.end == other.end)
                or (self.start == other.end and self.end == other.start))

    __hash__ = None

    def __iter__(self) -> Iterator[Point]:
        yield self.start
        yield self.end

    def reversed(self) -> 'Edge':
        return Edge(self.end, self.start)

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)

    def has_vertex(self, vertex: Point) -> bool:
        return self.start == vertex or self.end == vertex

    def closest_point(self, point: Point) -> Point:
        """Closest point to ``point`` on this segment (clamped projection)."""
        ab = self.end - self.start
        denom = ab.dot(ab)
        if denom == 0.0:
            return self.start
        t = (point - self.start).dot(ab) / denom
        if t < 0.0:
            t = 0.0
        elif t > 1.0:
            t = 1.0
        return self.start + ab * t

    def distance_to(self, point: Point) -> float:
        return self.closest_point(point).distance_to(point)

    def intersects(self, other: 'Edge') -> bool:
        """General-position segment intersection.

        Segments cross when each one separates the endpoints of the other.
        Collinear overlaps are not reported.
        """
        o1 = sign(orient(self.start, self.end, other.start))
        o2 = sign(orient(self.start, self.end, other.end))
        o3 = sign(orient(other.start, other.end, self.start))
        o4 = sign(orient(other.start, other.end, self.end))
        return o1 != o2 and o3 != o4


class EdgeDistance(NamedTuple):
    edge: Edge
    distance: float


@dataclass(frozen=True, eq=False)
class Triangle:
    """Triangle with vertices (a, b, c) in the order given.

    Equality is structural and order sensitive: ``Triangle(a, b, c)`` and
    ``Triangle(b, c, a)`` are different values.
    """
    a: Point
    b: Point
    c: Point

    def __post_init__(self):
        object.__setattr__(self, 'a', Point.of(self.a))
        object.__setattr__(self, 'b', Point.of(self.b))
        object.__setattr__(self, 'c', Point.of(self.c))

    def __eq__(self, other):
        if not isinstance(other, Triangle):
            return NotImplemented
        return self.a == other.a and self.b == other.b and self.c == other.c

    __hash__ = None

    def __iter__(self) -> Iterator[Point]:
        yield self.a
        yield self.b
        yield self.c

    @property
    def vertices(self) -> Tuple[Point, Point, Point]:
        return (self.a, self.b, self.c)

    def edges(self) -> Tuple[Edge, Edge, Edge]:
        return (Edge(self.a, self.b), Edge(self.b, self.c), Edge(self.c, self.a))

    # -- orientation -------------------------------------------------------

    def signed_area(self) -> float:
        """Half the cross product of (a - c) and (b - c); positive when CCW."""
        return 0.5 * (self.a - self.c).cross(self.b - self.c)

    def area(self) -> float:
        return abs(self.signed_area())

    def is_ccw(self) -> bool:
        return (self.a - self.c).cross(self.b - self.c) > 0

    def centroid(self) -> Point:
        return Point((self.a.x + self.b.x + self.c.x) / 3.0,
                     (self.a.y + self.b.y + self.c.y) / 3.0)

    # -- predicates --------------------------------------------------------

    def contains(self, point: Point) -> bool:
        """True iff ``point`` lies strictly inside the triangle.

        The point must be on the same side of all three directed edges. A zero
        cross product does not match either side, so points on an edge are
        not contained. See Real-Time Collision Detection, 5.4.
        """
        s_ab = sign(orient(self.a, self.b, point))
        s_bc = sign(orient(self.b, self.c, point))
        if s_ab != s_bc:
            return False
        return s_ab == sign(orient(self.c, self.a, point))

    def in_circumcircle(self, point: Point) -> bool:
        """True iff ``point`` lies strictly inside the circumcircle.

        For a CCW triangle the lifted determinant is positive for interior
        points; the test is reversed for CW triangles so the answer does not
        depend on winding. Cocircular points are outside.
        """
        a11 = self.a.x - point.x
        a21 = self.b.x - point.x
        a31 = self.c.x - point.x
        a12 = self.a.y - point.y
        a22 = self.b.y - point.y
        a32 = self.c.y - point.y
        a13 = a11 * a11 + a12 * a12
        a23 = a21 * a21 + a22 * a22
        a33 = a31 * a31 + a32 * a32

        det = (a11 * a22 * a33
               + a12 * a23 * a31
               + a13 * a21 * a32
               - a13 * a22 * a31
               - a12 * a21 * a33
               - a11 * a23 * a32)

        if self.is_ccw():
            return det > 0
        return det < 0

    def circumcircle(self) -> Tuple[Optional[Point], float]:
        """Return (center, radius); (None, inf) for a degenerate triangle."""
        ax, ay = self.a
        bx, by = self.b
        cx, cy = self.c
        d = 2.0 * (ax * (by - cy) + bx * (cy - ay) + cx * (ay - by))
        if d == 0.0:
            return None, math.inf
        a2 = ax * ax + ay * ay
        b2 = bx * bx + by * by
        c2 = cx * cx + cy * cy
        ux = (a2 * (by - cy) + b2 * (cy - ay) + c2 * (ay - by)) / d
        uy = (a2 * (cx - bx) + b2 * (ax - cx) + c2 * (bx - ax)) / d
        center = Point(ux, uy)
        return center, center.distance_to(self.a)

    def has_vertex(self, vertex: Point) -> bool:
        return self.a == vertex or self.b == vertex or self.c == vertex

    def is_neighbor(self, edge: Edge) -> bool:
        """True if both endpoints of ``edge`` are vertices of this triangle."""
        return self.has_vertex(edge.start) and self.has_vertex(edge.end)

    def opposite_vertex(self, edge: Edge) -> Optional[Point]:
        """Vertex not on ``edge``, or None when every vertex lies on it."""
        for v in (self.a, self.b, self.c):
            if v != edge.start and v != edge.end:
                return v
        return None

    def nearest_edge(self, point: Point) -> EdgeDistance:
        """Edge closest to ``point`` together with its distance.

        ab wins only when strictly closer than both others, then bc; every
        remaining tie resolves to ca.
        """
        ab, bc, ca = self.edges()
        d0 = ab.distance_to(point)
        d1 = bc.distance_to(point)
        d2 = ca.distance_to(point)
        if d0 < d1 and d0 < d2:
            return EdgeDistance(ab, d0)
        if d1 < d0 and d1 < d2:
            return EdgeDistance(bc, d1)
        return EdgeDistance(ca, d2)

    # -- triangle / triangle ----------------------------------------------

    def intersects(self, other: 'Triangle') -> bool:
        """Separating-edge overlap test.

        Two triangles are disjoint when one edge of this triangle has the
        third vertex strictly on one side and all of ``other`` strictly on the
        other side.
        """
        return not (_edge_separates(self.a, self.b, self.c, other)
                    or _edge_separates(self.b, self.c, self.a, other)
                    or _edge_separates(self.c, self.a, self.b, other))

    def closest_distance(self, other: 'Triangle') -> float:
        """Smallest vertex-to-vertex distance between the two triangles."""
        return min(p.distance_to(q) for p in self for q in other)

    def distance_closer_than(self, d: float, other: 'Triangle') -> bool:
        return self.closest_distance(other) < d


def _edge_separates(start: Point, end: Point, third: Point, other: Triangle) -> bool:
    side = -sign(orient(start, end, third))
    return all(sign(orient(start, end, v)) == side for v in other)
