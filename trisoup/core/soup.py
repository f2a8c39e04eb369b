"""Mutable working set of triangles for incremental triangulation.

Triangles are stored in an arena keyed by integer handles. Removal goes by
handle, never by value, so two live triangles that happen to share the same
three coordinates cannot be confused with each other.

Performance:
- add / remove / get: O(1)
- locate / neighbor / one_sharing / nearest_edge / purge: O(T), T = live triangles

There is no spatial index; the whole construction is O(n^2) in the worst case,
which is fine for the tens to hundreds of points this is meant for.

Example:
    >>> soup = TriangleSoup()
    >>> h = soup.add(Triangle((0, 0), (4, 0), (0, 4)))
    >>> soup.locate(Point(1, 1)) == h
    True
"""
from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from .geometry import Edge, Point, Triangle

__all__ = ['TriangleSoup']


class TriangleSoup:
    """Unordered collection of live triangles addressed by handle.

    Iteration order is the insertion order of the live triangles: removing a
    triangle drops it from the order and a new triangle is always appended.
    Every "first match" query below follows that order, which makes all
    results deterministic for a fixed sequence of operations.
    """

    def __init__(self):
        self._tris: Dict[int, Triangle] = {}
        self._next_handle = 0

    # -- container protocol ------------------------------------------------

    def add(self, triangle: Triangle) -> int:
        """Insert ``triangle`` and return its handle. Handles are never reused."""
        handle = self._next_handle
        self._next_handle += 1
        self._tris[handle] = triangle
        return handle

    def remove(self, handle: int) -> Triangle:
        """Remove the triangle behind ``handle`` and return it.

        Raises KeyError for unknown or already removed handles.
        """
        return self._tris.pop(handle)

    def get(self, handle: int) -> Triangle:
        return self._tris[handle]

    def clear(self) -> None:
        self._tris.clear()

    def __contains__(self, handle) -> bool:
        return handle in self._tris

    def __len__(self) -> int:
        return len(self._tris)

    def __iter__(self) -> Iterator[Triangle]:
        return iter(list(self._tris.values()))

    def handles(self) -> List[int]:
        return list(self._tris.keys())

    def items(self) -> List[Tuple[int, Triangle]]:
        return list(self._tris.items())

    def triangles(self) -> List[Triangle]:
        """Snapshot of the live triangles in iteration order."""
        return list(self._tris.values())

    # -- geometric queries -------------------------------------------------

    def locate(self, point: Point) -> Optional[int]:
        """First triangle strictly containing ``point``.

        Returns None when the point is on an edge, outside every triangle, or
        falls into a rounding gap between adjacent containment tests.
        """
        for handle, tri in self._tris.items():
            if tri.contains(point):
                return handle
        return None

    def neighbor(self, handle: int, edge: Edge) -> Optional[int]:
        """The other triangle sharing ``edge`` with ``handle``; None on the hull."""
        for h, tri in self._tris.items():
            if h != handle and tri.is_neighbor(edge):
                return h
        return None

    def one_sharing(self, edge: Edge) -> Optional[int]:
        """Any (the first) triangle owning ``edge``."""
        for h, tri in self._tris.items():
            if tri.is_neighbor(edge):
                return h
        return None

    def nearest_edge(self, point: Point) -> Optional[Edge]:
        """Edge of any live triangle closest to ``point``.

        Each triangle nominates its own nearest edge (see
        :meth:`Triangle.nearest_edge`); among the nominees the smallest
        distance wins and ties keep the earliest triangle in iteration order.
        """
        best: Optional[Edge] = None
        best_d = 0.0
        for tri in self._tris.values():
            edge, d = tri.nearest_edge(point)
            if best is None or d < best_d:
                best, best_d = edge, d
        return best

    def purge(self, vertex: Point) -> int:
        """Remove every triangle that uses ``vertex``; returns how many went."""
        doomed = [h for h, tri in self._tris.items() if tri.has_vertex(vertex)]
        for h in doomed:
            del self._tris[h]
        return len(doomed)
