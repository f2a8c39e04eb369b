"""Runnable demos for trisoup.

Each module exposes a run_* function callable from Python and a module-level
__main__ guard so it can be executed via:

    python -m demos.random_points_demo
"""
