"""
Purpose: A* pathfinding over the walkability grid, 8-connected, diagonal cost sqrt(2).
Dependencies: hexnav/pathfinding/grid.py, hexnav/pathfinding/simplify.py, heapq, logging.
Ext Hooks: Per-cell move costs (multiply move_cost by a GridCell cost field).
Client/Server: Shared logic; the server answers /api/find_path with it.
"""

import heapq
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, NamedTuple, Set

from hexnav.pathfinding.grid import GridCell, Index, WalkabilityGrid
from hexnav.pathfinding.simplify import simplify_path

logger = logging.getLogger(__name__)

SQRT2 = math.sqrt(2)


class Point3(NamedTuple):
    x: float
    y: float
    z: float


class PathStatus(Enum):
    FOUND = "found"
    OUT_OF_BOUNDS = "out_of_bounds"  # start or end off the grid
    GOAL_BLOCKED = "goal_blocked"    # end cell not walkable
    UNREACHABLE = "unreachable"      # frontier ran dry


@dataclass
class PathResult:
    """
    Outcome of one search.

    path is never empty: anything other than FOUND carries the direct
    fallback [end] so callers that only want waypoints can ignore status.
    """
    path: List[Point3]
    status: PathStatus
    expanded: int = 0

    @property
    def success(self) -> bool:
        return self.status is PathStatus.FOUND


def to_point(p) -> Point3:
    """Accept any (x, y, z) sequence."""
    return Point3(float(p[0]), float(p[1]), float(p[2]))


def heuristic(a: GridCell, b: GridCell) -> float:
    """Euclidean distance in grid units."""
    return math.hypot(a.ix - b.ix, a.iz - b.iz)


def a_star(start, end, grid: WalkabilityGrid, simplify=True) -> PathResult:
    """
    A* from start to end (world coordinates, y ignored).

    Only the bounds of both ends and the walkability of the goal are checked
    up front; a start on a blocked cell still searches outward from it.

    The frontier is a heap of (f, first_seen, index). first_seen never changes
    once a cell is discovered, so among equal f the earliest discovered cell
    wins, same as scanning an insertion-ordered open list. Entries whose f is
    out of date are skipped when popped.

    Mutates the grid's per-cell search fields; callers must not run two
    searches on one grid at the same time (Pathfinder holds a lock for this).
    """
    end_point = to_point(end)
    if not all(math.isfinite(v) for v in (start[0], start[2], end_point.x, end_point.z)):
        logger.debug("Path %s -> %s: non-finite coordinate", tuple(start), tuple(end))
        return PathResult([end_point], PathStatus.OUT_OF_BOUNDS)

    start_x, start_z = grid.world_to_index(start[0], start[2])
    end_x, end_z = grid.world_to_index(end_point.x, end_point.z)

    if not grid.is_valid_index(start_x, start_z) or not grid.is_valid_index(end_x, end_z):
        logger.debug("Path %s -> %s: out of bounds", tuple(start), tuple(end))
        return PathResult([end_point], PathStatus.OUT_OF_BOUNDS)

    goal = grid.cell(end_x, end_z)
    if not goal.walkable:
        logger.debug("Path %s -> %s: goal cell %s not walkable", tuple(start), tuple(end), goal.index)
        return PathResult([end_point], PathStatus.GOAL_BLOCKED)

    grid.reset_search_state()

    start_cell = grid.cell(start_x, start_z)
    start_cell.g = 0.0
    start_cell.h = heuristic(start_cell, goal)
    start_cell.f = start_cell.h

    counter = 0
    open_heap = [(start_cell.f, counter, start_cell.index)]
    open_seen: Dict[Index, int] = {start_cell.index: counter}  # frontier members -> first_seen
    closed: Set[Index] = set()
    expanded = 0

    while open_heap:
        f, _, index = heapq.heappop(open_heap)
        if index not in open_seen:
            continue
        current = grid.cell(*index)
        if f != current.f:
            continue

        if index == goal.index:
            path = reconstruct_path(grid, current)
            if simplify:
                path = simplify_path(path)
            logger.debug("Path %s -> %s: found, %d expanded, %d waypoints",
                         tuple(start), tuple(end), expanded, len(path))
            return PathResult(path, PathStatus.FOUND, expanded)

        del open_seen[index]
        closed.add(index)
        expanded += 1

        for neighbor, diagonal in grid.neighbors(*index):
            n_index = neighbor.index
            if n_index in closed or not neighbor.walkable:
                continue

            tentative_g = current.g + (SQRT2 if diagonal else 1.0)
            discovered = n_index in open_seen
            if not discovered or tentative_g < neighbor.g:
                neighbor.g = tentative_g
                neighbor.h = heuristic(neighbor, goal)
                neighbor.f = neighbor.g + neighbor.h
                neighbor.parent = index
                if not discovered:
                    counter += 1
                    open_seen[n_index] = counter
                heapq.heappush(open_heap, (neighbor.f, open_seen[n_index], n_index))

    logger.debug("Path %s -> %s: unreachable after %d expanded", tuple(start), tuple(end), expanded)
    return PathResult([end_point], PathStatus.UNREACHABLE, expanded)


def reconstruct_path(grid: WalkabilityGrid, goal: GridCell) -> List[Point3]:
    """Follow parent indices back to the start; returns start -> goal world points."""
    path = []
    current = goal
    while current is not None:
        path.append(Point3(current.x, 0.0, current.z))
        current = grid.cell(*current.parent) if current.parent is not None else None
    path.reverse()
    return path
