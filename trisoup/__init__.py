"""Public package API for trisoup, an incremental 2D Delaunay triangulator.

This facade provides a flat import surface on top of the implementation
package ``trisoup.core``. The matplotlib based plotting helper is loaded
lazily so ``import trisoup`` stays light.

Example
-------
    from trisoup import DelaunayTriangulator

    dt = DelaunayTriangulator([(0, 0), (1, 0), (0, 1), (1, 1)])
    if dt.triangulate():
        triangles = dt.get_triangles()
"""
from importlib import import_module as _imp
import logging as _logging

try:
    from importlib.metadata import version as _pkg_version, PackageNotFoundError as _NotFound
    __version__ = _pkg_version("trisoup")
except _NotFound:  # pragma: no cover - running from a source checkout
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

from .core import constants, geometry, soup, triangulator, validation  # noqa: E402
from .core.constants import EPS_POINT, EPS_COLLINEAR, SUPER_TRIANGLE_SCALE  # noqa: E402
from .core.config import TriangulatorConfig  # noqa: E402
from .core.geometry import Point, Edge, Triangle, EdgeDistance, cross, orient  # noqa: E402
from .core.logging_utils import configure_logging, get_logger  # noqa: E402
from .core.soup import TriangleSoup  # noqa: E402
from .core.stats import TriangulationStats, format_stats_table  # noqa: E402
from .core.triangulator import (  # noqa: E402
    DelaunayTriangulator, TriangulatorState, triangulate_points,
    TriangulationError, HullBoundaryError, DegenerateInputError,
)
from .core.validation import check_triangulation, triangles_to_arrays, ValidationReport  # noqa: E402


def plot_triangulation(*args, **kwargs):
    """Lazy proxy for :func:`trisoup.core.visualization.plot_triangulation`."""
    return _imp('trisoup.core.visualization').plot_triangulation(*args, **kwargs)


__all__ = [
    '__version__',
    # primitives
    'Point', 'Edge', 'Triangle', 'EdgeDistance', 'cross', 'orient',
    # tolerances
    'EPS_POINT', 'EPS_COLLINEAR', 'SUPER_TRIANGLE_SCALE',
    # collection / algorithm
    'TriangleSoup', 'DelaunayTriangulator', 'TriangulatorState', 'TriangulatorConfig',
    'triangulate_points', 'TriangulationStats', 'format_stats_table',
    # errors
    'TriangulationError', 'HullBoundaryError', 'DegenerateInputError',
    # checks / export / plotting
    'check_triangulation', 'triangles_to_arrays', 'ValidationReport', 'plot_triangulation',
    # logging
    'configure_logging', 'get_logger',
    # submodules
    'constants', 'geometry', 'soup', 'triangulator', 'validation',
]
