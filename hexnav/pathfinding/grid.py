"""
Purpose: Dense walkability grid over the hex playfield plus the obstacle punch.
Dependencies: hexnav/hex/boundary.py, hexnav/config.py, dataclasses, logging, math.
Ext Hooks: Per-cell costs (mud, roads) would live on GridCell next to walkable.
Client/Server: Shared; cells double as the A* scratch buffer (see a_star.py).
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from hexnav.config import GRID_SIZE, CELL_SIZE

logger = logging.getLogger(__name__)

Index = Tuple[int, int]  # (ix, iz) into WalkabilityGrid.cells


@dataclass
class GridCell:
    """
    One grid square.

    ix/iz are the grid indices, x/z the world position of the cell (its
    minimum corner). g/h/f/parent are A* scratch; they only mean something
    during or right after a search and are reset before the next one.
    """
    ix: int
    iz: int
    x: float
    z: float
    walkable: bool = True
    g: float = 0.0
    h: float = 0.0
    f: float = 0.0
    parent: Optional[Index] = None  # Index of the previous cell on the best known path

    @property
    def index(self) -> Index:
        return self.ix, self.iz

    def reset_search(self):
        self.g = 0.0
        self.h = 0.0
        self.f = 0.0
        self.parent = None


class WalkabilityGrid:
    """
    Square grid of cells centered on the world origin.

    Walkability is taken from the boundary test once, at construction. After
    that set_obstacle is the only writer and it only ever clears the flag.
    """

    def __init__(self, boundary, grid_size=GRID_SIZE, cell_size=CELL_SIZE):
        if grid_size <= 0 or grid_size % 2:
            raise ValueError(f"grid_size must be a positive even number, got {grid_size}")
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")

        self.boundary = boundary
        self.size = grid_size
        self.cell_size = cell_size
        self.half = grid_size // 2
        self.cells: List[List[GridCell]] = []
        self._initialize_grid()
        logger.info("Built %dx%d walkability grid (cell %.2f): %d walkable cells",
                    self.size, self.size, self.cell_size, self.walkable_count())

    def _initialize_grid(self):
        for ix in range(self.size):
            column = []
            for iz in range(self.size):
                x, z = self.index_to_world(ix, iz)
                column.append(GridCell(ix, iz, x, z, walkable=self.boundary.is_inside(x, z)))
            self.cells.append(column)

    def world_to_index(self, x: float, z: float) -> Index:
        return (math.floor(x / self.cell_size) + self.half,
                math.floor(z / self.cell_size) + self.half)

    def index_to_world(self, ix: int, iz: int) -> Tuple[float, float]:
        return (ix - self.half) * self.cell_size, (iz - self.half) * self.cell_size

    def is_valid_index(self, ix: int, iz: int) -> bool:
        return 0 <= ix < self.size and 0 <= iz < self.size

    def cell(self, ix: int, iz: int) -> GridCell:
        return self.cells[ix][iz]

    def is_walkable(self, x: float, z: float) -> bool:
        """World-space walkability; anything off the grid is not walkable."""
        if not (math.isfinite(x) and math.isfinite(z)):
            return False
        ix, iz = self.world_to_index(x, z)
        if not self.is_valid_index(ix, iz):
            return False
        return self.cells[ix][iz].walkable

    def walkable_count(self) -> int:
        return sum(1 for column in self.cells for cell in column if cell.walkable)

    def set_obstacle(self, x: float, z: float, radius: float) -> int:
        """
        Mark a square of cells around (x, z) as unwalkable.

        The square's half-width is radius rounded up to whole cells, so it
        covers the whole circle and then some. Cells off the grid are skipped.
        Returns how many cells went from walkable to blocked.
        """
        if not all(math.isfinite(v) for v in (x, z, radius)):
            raise ValueError(f"obstacle needs finite x, z and radius, got ({x}, {z}, {radius})")
        if radius < 0:
            raise ValueError(f"obstacle radius must be non-negative, got {radius}")

        grid_radius = math.ceil(radius / self.cell_size)
        center_x, center_z = self.world_to_index(x, z)
        blocked = 0
        for dx in range(-grid_radius, grid_radius + 1):
            for dz in range(-grid_radius, grid_radius + 1):
                gx, gz = center_x + dx, center_z + dz
                if self.is_valid_index(gx, gz) and self.cells[gx][gz].walkable:
                    self.cells[gx][gz].walkable = False
                    blocked += 1
        logger.info("Obstacle at (%.1f, %.1f) r=%.1f blocked %d cells", x, z, radius, blocked)
        return blocked

    def reset_search_state(self):
        for column in self.cells:
            for cell in column:
                cell.reset_search()

    def neighbors(self, ix: int, iz: int) -> Iterator[Tuple[GridCell, bool]]:
        """Yield (cell, is_diagonal) for the 8 surrounding cells that are on the grid."""
        for dx in (-1, 0, 1):
            for dz in (-1, 0, 1):
                if dx == 0 and dz == 0:
                    continue
                nx, nz = ix + dx, iz + dz
                if self.is_valid_index(nx, nz):
                    yield self.cells[nx][nz], dx != 0 and dz != 0
