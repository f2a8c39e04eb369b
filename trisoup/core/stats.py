"""Per-run counters for the triangulator and their presentation."""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass
class TriangulationStats:
    points_total: int = 0
    points_inserted: int = 0
    duplicates_skipped: int = 0
    interior_inserts: int = 0
    edge_inserts: int = 0
    flips: int = 0
    legalize_calls: int = 0
    stale_edges: int = 0
    max_worklist: int = 0
    triangles_out: int = 0
    purged: int = 0
    aborted_at: int = -1
    time_total: float = 0.0

    def reset(self) -> None:
        for name, value in asdict(TriangulationStats()).items():
            setattr(self, name, value)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d['flips_per_point'] = (self.flips / self.points_inserted) if self.points_inserted else 0.0
        d['time_per_point'] = (self.time_total / self.points_inserted) if self.points_inserted else 0.0
        return d


def format_stats_table(stats: TriangulationStats) -> str:
    """Return a human readable two-column table of the run counters."""
    d = stats.to_dict()
    rows = []
    for key, value in d.items():
        if isinstance(value, float):
            if key.startswith('time'):
                text = f"{value * 1000.0:.3f} ms"
            else:
                text = f"{value:.3f}"
        else:
            text = str(value)
        rows.append((key, text))
    kw = max([len('counter')] + [len(k) for k, _ in rows])
    vw = max([len('value')] + [len(v) for _, v in rows])
    lines = [f"{'counter'.ljust(kw)} {'value'.rjust(vw)}", "-" * (kw + vw + 1)]
    lines += [f"{k.ljust(kw)} {v.rjust(vw)}" for k, v in rows]
    return "\n".join(lines)


__all__ = ['TriangulationStats', 'format_stats_table']
