"""Configuration objects for the Delaunay triangulator."""
from __future__ import annotations

from dataclasses import dataclass

from .constants import SUPER_TRIANGLE_SCALE

LEGALIZATION_MODES = ('worklist', 'recursive')


@dataclass
class TriangulatorConfig:
    """Tunable behaviour of :class:`~trisoup.core.triangulator.DelaunayTriangulator`.

    Attributes
    ----------
    super_triangle_scale : float
        Multiplier M is derived from: ``M = scale * max(0, max coordinate)``.
    bound_by_magnitude : bool
        Size the super-triangle from ``max(|x|, |y|)`` instead of
        ``max(x, y)``. The default keeps the signed formula, which can produce
        a super-triangle that misses inputs dominated by negative coordinates.
    legalization : str
        ``'worklist'`` (explicit stack, no recursion limit) or ``'recursive'``.
        Both visit edges in the same order.
    drop_duplicates : bool
        Skip points equal to an already inserted point instead of inserting
        them a second time (which produces zero-area triangles).
    strict : bool
        Raise :class:`~trisoup.core.triangulator.HullBoundaryError` instead of
        returning ``False`` when an insertion cannot be accommodated.
    post_check : bool
        Validate the result after a successful run and log any issue found.
    """
    super_triangle_scale: float = SUPER_TRIANGLE_SCALE
    bound_by_magnitude: bool = False
    legalization: str = 'worklist'
    drop_duplicates: bool = True
    strict: bool = False
    post_check: bool = False

    def __post_init__(self):
        if self.legalization not in LEGALIZATION_MODES:
            raise ValueError(
                f"legalization must be one of {LEGALIZATION_MODES}, got {self.legalization!r}")
        if not self.super_triangle_scale > 0:
            raise ValueError(f"super_triangle_scale must be positive, got {self.super_triangle_scale!r}")


__all__ = ['TriangulatorConfig', 'LEGALIZATION_MODES']
