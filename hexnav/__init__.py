"""
Hex playfield navigation: boundary geometry, walkability grid and A* pathfinding.

Public entry point is Pathfinder; the rest is exposed for tests and tooling.
"""

from hexnav.hex.boundary import HexBoundary
from hexnav.pathfinding.a_star import Point3, PathResult, PathStatus, a_star
from hexnav.pathfinding.grid import GridCell, WalkabilityGrid
from hexnav.pathfinding.pathfinder import Pathfinder
from hexnav.pathfinding.simplify import simplify_path

__all__ = [
    "HexBoundary",
    "GridCell",
    "WalkabilityGrid",
    "Point3",
    "PathResult",
    "PathStatus",
    "Pathfinder",
    "a_star",
    "simplify_path",
]
