"""
Purpose: Drop waypoints that sit on a straight line between their neighbours.
Dependencies: hexnav/config.py, math.
Ext Hooks: Line-of-sight smoothing would replace this pass.
"""

import math

from hexnav.config import COLLINEAR_DOT


def _direction(a, b):
    dx, dy, dz = b[0] - a[0], b[1] - a[1], b[2] - a[2]
    length = math.sqrt(dx * dx + dy * dy + dz * dz)
    if length == 0:
        return 0.0, 0.0, 0.0
    return dx / length, dy / length, dz / length


def simplify_path(path, threshold=COLLINEAR_DOT):
    """
    Single greedy pass: keep both ends, drop an interior point when the
    heading into it and out of it differ by less than acos(threshold).

    Each point is judged against its original neighbours, not the ones kept.
    """
    if len(path) <= 2:
        return list(path)

    simplified = [path[0]]
    for i in range(1, len(path) - 1):
        prev, current, nxt = path[i - 1], path[i], path[i + 1]
        d1 = _direction(prev, current)
        d2 = _direction(current, nxt)
        dot = d1[0] * d2[0] + d1[1] * d2[1] + d1[2] * d2[2]
        if dot <= threshold:
            simplified.append(current)
    simplified.append(path[-1])
    return simplified
