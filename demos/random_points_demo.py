#!/usr/bin/env python3
"""
Demo: triangulate a random point cloud and report the run counters.

    python -m demos.random_points_demo --npts 200 --seed 7 --out random_dt.png

Points are drawn uniformly from [0, scale]^2. With --check the result is
validated (empty circumcircles, hull coverage, 2n-2-h triangle count) and any
issue is logged.
"""
from __future__ import annotations

import argparse
import cProfile as _cprof
import io as _io
import logging
import pstats as _pstats
from typing import Optional

import numpy as np

from trisoup.core.config import TriangulatorConfig
from trisoup.core.logging_utils import configure_logging, get_logger
from trisoup.core.stats import format_stats_table
from trisoup.core.triangulator import DelaunayTriangulator
from trisoup.core.validation import check_triangulation

log = get_logger('trisoup.demo.random')


def random_points(npts: int, seed: int, scale: float = 100.0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.uniform(0.0, scale, size=(npts, 2))


def run_demo(npts: int = 100, seed: int = 0, scale: float = 100.0, legalization: str = 'worklist',
             bound_by_magnitude: bool = False, check: bool = False, out: Optional[str] = None) -> DelaunayTriangulator:
    pts = random_points(npts, seed, scale)
    cfg = TriangulatorConfig(legalization=legalization, bound_by_magnitude=bound_by_magnitude)
    dt = DelaunayTriangulator(pts, cfg)
    ok = dt.triangulate()
    log.info('triangulated %d points: ok=%s triangles=%d', npts, ok, len(dt.soup))
    log.info('run counters:\n%s', format_stats_table(dt.stats))

    if ok and check:
        # hull triangles can go missing near a finite super-triangle, so the count is advisory
        report = check_triangulation(pts, dt.get_triangles())
        if report.ok:
            log.info('check passed: %d triangles, hull area %.6g', report.n_triangles, report.hull_area)
        for issue in report.issues:
            log.warning('check: %s', issue)

    if out:
        from trisoup.core.visualization import plot_triangulation
        plot_triangulation(dt.get_triangles(), points=pts, outname=out,
                           title=f'{npts} random points, seed {seed}')
    return dt


def main():
    ap = argparse.ArgumentParser(description='Triangulate random points and print run counters')
    ap.add_argument('--npts', type=int, default=100, help='Number of points (default: 100)')
    ap.add_argument('--seed', type=int, default=0)
    ap.add_argument('--scale', type=float, default=100.0, help='Points are drawn from [0, scale]^2')
    ap.add_argument('--legalization', choices=['worklist', 'recursive'], default='worklist')
    ap.add_argument('--bound-by-magnitude', action='store_true',
                    help='Size the super-triangle from max(|x|, |y|)')
    ap.add_argument('--check', action='store_true', help='Validate the result and log issues')
    ap.add_argument('--out', type=str, default=None, help='Write a PNG of the triangulation here')
    ap.add_argument('--log-level', type=str, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], default='INFO')
    ap.add_argument('--profile', action='store_true', help='Enable cProfile and print top hotspots')
    ap.add_argument('--profile-top', type=int, default=25, help='How many entries to show in hotspots (default: 25)')
    args = ap.parse_args()

    configure_logging(getattr(logging, args.log_level.upper(), logging.INFO))

    def _run():
        run_demo(npts=args.npts, seed=args.seed, scale=args.scale, legalization=args.legalization,
                 bound_by_magnitude=args.bound_by_magnitude, check=args.check, out=args.out)

    if args.profile:
        pr = _cprof.Profile()
        pr.enable()
        _run()
        pr.disable()
        s = _io.StringIO()
        _pstats.Stats(pr, stream=s).sort_stats('cumtime').print_stats(max(1, int(args.profile_top)))
        log.info('Profile (top %d by cumulative time):\n%s', int(args.profile_top), s.getvalue())
    else:
        _run()


if __name__ == '__main__':
    main()
