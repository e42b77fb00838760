"""
Purpose: Public pathfinding API for units - boundary queries, obstacles, find_path.
Dependencies: hexnav/hex/boundary.py, hexnav/pathfinding/grid.py, hexnav/pathfinding/a_star.py, threading.
Ext Hooks: A per-call scratch buffer would let searches run in parallel.
Client/Server: Server keeps one instance per map; client code can embed one for offline play.
"""

import threading
from typing import List, Tuple

from hexnav.config import HEX_RADIUS, GRID_SIZE, CELL_SIZE, CLAMP_INSET
from hexnav.hex.boundary import HexBoundary
from hexnav.pathfinding.a_star import Point3, PathResult, a_star
from hexnav.pathfinding.grid import WalkabilityGrid


class Pathfinder:
    """
    Owns the hex boundary and the walkability grid for one map.

    The grid doubles as A* scratch space, so find_path, set_obstacle and
    is_walkable are serialized on an instance lock. Boundary queries never
    touch the grid and stay lock-free.
    """

    def __init__(self, radius=HEX_RADIUS, grid_size=GRID_SIZE, cell_size=CELL_SIZE, inset=CLAMP_INSET):
        self.boundary = HexBoundary(radius=radius, inset=inset)
        self.grid = WalkabilityGrid(self.boundary, grid_size=grid_size, cell_size=cell_size)
        self._lock = threading.Lock()

    def is_valid_position(self, x: float, z: float) -> bool:
        """Inside the hexagon, regardless of grid resolution or obstacles."""
        return self.boundary.is_inside(x, z)

    def clamp_to_hexagon(self, x: float, z: float) -> Tuple[float, float]:
        return self.boundary.clamp(x, z)

    def is_walkable(self, x: float, z: float) -> bool:
        # Locked so a reader never sees an obstacle half punched
        with self._lock:
            return self.grid.is_walkable(x, z)

    def set_obstacle(self, world_x: float, world_z: float, radius: float) -> int:
        """Block a square of cells around the point; there is no way to undo this."""
        with self._lock:
            return self.grid.set_obstacle(world_x, world_z, radius)

    def find_path_result(self, start, end) -> PathResult:
        with self._lock:
            return a_star(start, end, self.grid)

    def find_path(self, start, end) -> List[Point3]:
        """
        Waypoints from start to end, collinear points removed.

        Never empty. Off-grid ends, a blocked goal and no route all give
        [end]; use find_path_result to tell them apart.
        """
        return self.find_path_result(start, end).path
