"""
Purpose: Hexagonal playfield boundary - vertex precompute, inside test, edge clamp.
Dependencies: hexnav/config.py, math.
Ext Hooks: Other map shapes would need a new boundary with the same is_inside/clamp API.
Client/Server: Shared; unit movement clamps against the same hexagon the grid is built from.
"""

import math
from typing import List, Tuple

from hexnav.config import HEX_RADIUS, HEX_ROTATION, CLAMP_INSET

Vec2 = Tuple[float, float]


class HexBoundary:
    """
    Regular hexagon centered on the world origin.

    The six vertices are computed once from the circumradius and never change.
    Coordinates are (x, z) on the ground plane.
    """

    def __init__(self, radius=HEX_RADIUS, rotation=HEX_ROTATION, inset=CLAMP_INSET):
        self.radius = radius
        self.inset = inset
        self._vertices: Tuple[Vec2, ...] = tuple(self._compute_vertices(radius, rotation))

    @staticmethod
    def _compute_vertices(radius, rotation) -> List[Vec2]:
        vertices = []
        for i in range(6):
            angle_rad = math.radians(60 * i + rotation)
            vertices.append((math.cos(angle_rad) * radius, math.sin(angle_rad) * radius))
        return vertices

    @property
    def vertices(self) -> Tuple[Vec2, ...]:
        return self._vertices

    def edges(self):
        """Yield (start, end) vertex pairs in order, wrapping back to vertex 0."""
        for i in range(6):
            yield self._vertices[i], self._vertices[(i + 1) % 6]

    def is_inside(self, x: float, z: float) -> bool:
        """Ray-cast point-in-polygon test. Points exactly on an edge may go either way."""
        inside = False
        j = 5
        for i in range(6):
            xi, zi = self._vertices[i]
            xj, zj = self._vertices[j]
            if (zi > z) != (zj > z) and x < (xj - xi) * (z - zi) / (zj - zi) + xi:
                inside = not inside
            j = i
        return inside

    def clamp(self, x: float, z: float) -> Vec2:
        """Return (x, z) unchanged if inside, else the nearest edge point nudged toward the center."""
        if self.is_inside(x, z):
            return x, z

        nearest = (x, z)
        nearest_dist = float('inf')
        for (x1, z1), (x2, z2) in self.edges():
            px, pz = _project_onto_segment(x, z, x1, z1, x2, z2)
            dist = math.hypot(x - px, z - pz)
            if dist < nearest_dist:
                nearest_dist = dist
                nearest = (px, pz)

        nx, nz = nearest
        length = math.hypot(nx, nz)
        if length == 0:
            return nx, nz
        return nx - nx / length * self.inset, nz - nz / length * self.inset


def _project_onto_segment(x, z, x1, z1, x2, z2) -> Vec2:
    """Closest point to (x, z) on the segment (x1, z1)-(x2, z2)."""
    ex, ez = x2 - x1, z2 - z1
    length_sq = ex * ex + ez * ez
    if length_sq == 0:
        return x1, z1
    t = ((x - x1) * ex + (z - z1) * ez) / length_sq
    t = max(0.0, min(1.0, t))
    return x1 + ex * t, z1 + ez * t
