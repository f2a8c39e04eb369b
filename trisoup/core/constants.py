"""Central numerical tolerances and super-triangle constants.

This module centralizes tiny numeric thresholds used across the codebase so
they can be tuned consistently and referenced without scattering literals.
"""
from __future__ import annotations

# Point identity
EPS_POINT: float = 1e-5           # two points closer than this are the same vertex

# Degeneracy
EPS_COLLINEAR: float = 1e-12      # |sin| of the angle below which three points are collinear
EPS_AREA: float = 1e-12           # triangles with smaller absolute area count as degenerate

# Validation
EPS_CIRCUMCIRCLE: float = 1e-9    # relative slack for the empty-circumcircle check
EPS_COVERAGE: float = 1e-9        # relative slack for triangulation vs hull area

# Super-triangle seeding
SUPER_TRIANGLE_SCALE: float = 16.0   # multiplier applied to the largest coordinate
SUPER_TRIANGLE_SPAN: float = 3.0     # vertices sit at (0, 3M), (3M, 0), (-3M, -3M)

__all__ = [
    'EPS_POINT',
    'EPS_COLLINEAR',
    'EPS_AREA',
    'EPS_CIRCUMCIRCLE',
    'EPS_COVERAGE',
    'SUPER_TRIANGLE_SCALE',
    'SUPER_TRIANGLE_SPAN',
]
