"""Debug plots of triangle lists."""
from __future__ import annotations

import os as _os
from typing import Optional, Sequence

import matplotlib as _mpl
# Non-interactive backend in headless environments, before importing pyplot
if not _os.environ.get('MPLBACKEND'):
    _mpl.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

from .geometry import Triangle
from .logging_utils import get_logger
from .validation import points_to_array

logger = get_logger('trisoup.viz')

__all__ = ['plot_triangulation']


def plot_triangulation(
    triangles: Sequence[Triangle],
    points=None,
    outname: Optional[str] = None,
    ax=None,
    title: Optional[str] = None,
    highlight=None,
):
    """Draw triangle outlines and, optionally, the input points.

    Args:
        triangles: triangles to draw
        points: input points, drawn as dots (may include points no triangle uses)
        outname: if given, save the figure there and close it
        ax: existing matplotlib Axes to draw into; a new figure otherwise
        title: axes title; defaults to a triangle/point count summary
        highlight: iterable of indices into ``triangles`` to fill in orange

    Returns the Axes (already closed when ``outname`` was given).
    """
    own_figure = ax is None
    if own_figure:
        _, ax = plt.subplots(figsize=(6, 6))

    highlight = set(int(i) for i in (highlight or ()))
    for i, tri in enumerate(triangles):
        xy = np.asarray([v.as_tuple() for v in tri] + [tri.a.as_tuple()], dtype=np.float64)
        if i in highlight:
            ax.fill(xy[:-1, 0], xy[:-1, 1], color=(1.0, 0.6, 0.0), alpha=0.5)
        ax.plot(xy[:, 0], xy[:, 1], color=(0.2, 0.3, 0.8), linewidth=0.8)

    n_points = 0
    if points is not None:
        pts = points_to_array(points)
        n_points = pts.shape[0]
        if n_points:
            # Scale marker size down for dense point sets so points don't dominate
            s = max(0.6, min(12.0, 200.0 / float(n_points)))
            ax.scatter(pts[:, 0], pts[:, 1], s=s, color='black', zorder=3)

    ax.set_title(title if title is not None else f'{len(triangles)} triangles, {n_points} points')
    ax.set_aspect('equal')
    if outname:
        ax.figure.savefig(outname, dpi=150)
        logger.info('Wrote %s', outname)
        if own_figure:
            plt.close(ax.figure)
    return ax
