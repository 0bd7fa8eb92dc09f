from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

import numpy as np

from app.raylab.geometry import Vec2
from app.raylab.rays import RaySegment


def estimate_focus(segments: Iterable[RaySegment]) -> Optional[Tuple[Vec2, float]]:
    """Least-squares intersection of the lines carried by escaped segments.

    Returns (focus_point, spot_rms) where spot_rms is RMS perpendicular distance,
    or None with fewer than two lines or when they are all parallel.
    """
    lines = []
    for seg in segments:
        if not seg.escaped:
            continue
        d = seg.end - seg.start
        if d.norm() == 0:
            continue
        lines.append((np.array([seg.start.x, seg.start.y], dtype=float), np.array([d.x, d.y], dtype=float)))
    if len(lines) < 2:
        return None

    A = np.zeros((2, 2), dtype=float)
    b = np.zeros((2,), dtype=float)
    projectors = []
    for p0, u in lines:
        u = u / np.linalg.norm(u)
        P = np.eye(2) - np.outer(u, u)  # projects onto normal space
        A += P
        b += P @ p0
        projectors.append(P)

    if abs(np.linalg.det(A)) < 1e-9:
        return None

    p = np.linalg.solve(A, b)

    # perpendicular distance from the focus to each line
    ds = [np.linalg.norm(P @ (p - p0)) for P, (p0, _) in zip(projectors, lines)]
    spot_rms = float(np.sqrt(np.mean(np.square(ds))))

    return Vec2(float(p[0]), float(p[1])), spot_rms


def summarize(segments: Iterable[RaySegment]) -> Dict:
    segments = list(segments)
    lengths = np.array([s.length() for s in segments], dtype=float)

    hits: Dict[str, int] = {}
    escaped = 0
    for s in segments:
        if s.escaped:
            escaped += 1
        else:
            hits[s.element_id] = hits.get(s.element_id, 0) + 1

    total = len(segments)
    return {
        "segment_count": total,
        "escaped_count": escaped,
        "path_length": float(lengths.sum()) if total else 0.0,
        "elements": {
            el_id: {"hits": n, "percentage": round(n / total * 100, 2)}
            for el_id, n in hits.items()
        },
    }
