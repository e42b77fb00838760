"""
Purpose: Debug view of the walkability grid, hexagon boundary and a path.
Dependencies: pygame, hexnav/pathfinding/pathfinder.py.
Ext Hooks: Overlay frontier/closed cells from a search for tuning.
Client Only: Developer tooling; draws to an off-screen Surface, no display needed.
"""

import pygame

WALKABLE_COLOR = (0, 100, 0)    # Green
BLOCKED_COLOR = (100, 100, 100)  # Gray
OUTLINE_COLOR = (0, 0, 0)
PATH_COLOR = (255, 255, 0)       # Yellow


class GridRenderer:
    def __init__(self, pathfinder, scale=1):
        self.pathfinder = pathfinder
        self.grid = pathfinder.grid
        self.scale = scale

    def world_to_pixel(self, x, z):
        """Top-left pixel of the cell containing (x, z)."""
        ix, iz = self.grid.world_to_index(x, z)
        return ix * self.scale, iz * self.scale

    def _vertex_to_pixel(self, x, z):
        # Vertices are not cell-aligned; keep them fractional so the outline stays true
        return ((x / self.grid.cell_size + self.grid.half) * self.scale,
                (z / self.grid.cell_size + self.grid.half) * self.scale)

    def render(self, path=None):
        size = self.grid.size * self.scale
        surface = pygame.Surface((size, size))
        surface.fill(BLOCKED_COLOR)
        for column in self.grid.cells:
            for cell in column:
                if cell.walkable:
                    surface.fill(WALKABLE_COLOR, (cell.ix * self.scale, cell.iz * self.scale, self.scale, self.scale))

        points = [self._vertex_to_pixel(x, z) for x, z in self.pathfinder.boundary.vertices]
        pygame.draw.lines(surface, OUTLINE_COLOR, True, points, 1)

        if path:
            self.draw_path(surface, path)
        return surface

    def draw_path(self, surface, path):
        """Waypoint cells filled, legs between them drawn as lines."""
        half_cell = self.scale // 2
        centers = []
        for point in path:
            px, py = self.world_to_pixel(point[0], point[2])
            centers.append((px + half_cell, py + half_cell))
            surface.fill(PATH_COLOR, (px, py, self.scale, self.scale))
        if len(centers) >= 2:
            pygame.draw.lines(surface, PATH_COLOR, False, centers, 1)

    def save(self, filename, path=None):
        pygame.image.save(self.render(path), filename)
