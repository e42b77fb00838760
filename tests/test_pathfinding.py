import math
import random
import threading
import unittest
from hexnav.pathfinding.a_star import Point3, PathStatus, a_star
from hexnav.pathfinding.pathfinder import Pathfinder


def _walk_legs(path):
    """Every cell visited along the straight legs between waypoints."""
    cells = [path[0]]
    for a, b in zip(path, path[1:]):
        dx, dz = b.x - a.x, b.z - a.z
        steps = int(max(abs(dx), abs(dz)))
        sx, sz = dx / steps, dz / steps
        # Legs are runs of a single 8-way move
        assert sx in (-1, 0, 1) and sz in (-1, 0, 1), (a, b)
        for i in range(1, steps + 1):
            cells.append(Point3(a.x + sx * i, 0.0, a.z + sz * i))
    return cells


def _linear_scan_path(grid, start, end):
    """
    Plain A* over an insertion-ordered open list, lowest f picked by a strict
    '<' scan. Keeps its own g/f/parent tables and never touches the grid's
    scratch fields. Returns raw (x, z) waypoints, or None when the frontier
    runs dry.
    """
    begin = grid.world_to_index(start[0], start[2])
    goal = grid.world_to_index(end[0], end[2])

    def h(index):
        return math.hypot(index[0] - goal[0], index[1] - goal[1])

    g = {begin: 0.0}
    f = {begin: h(begin)}
    parent = {begin: None}
    open_list = [begin]
    closed = set()
    while open_list:
        best = 0
        for i in range(1, len(open_list)):
            if f[open_list[i]] < f[open_list[best]]:
                best = i
        current = open_list.pop(best)
        if current == goal:
            path = []
            while current is not None:
                path.append(grid.index_to_world(*current))
                current = parent[current]
            return path[::-1]
        closed.add(current)
        for dx in (-1, 0, 1):
            for dz in (-1, 0, 1):
                if dx == 0 and dz == 0:
                    continue
                n = (current[0] + dx, current[1] + dz)
                if not grid.is_valid_index(*n) or n in closed or not grid.cell(*n).walkable:
                    continue
                tentative = g[current] + (math.sqrt(2) if dx and dz else 1.0)
                seen = n in open_list
                if not seen or tentative < g[n]:
                    g[n] = tentative
                    f[n] = tentative + h(n)
                    parent[n] = current
                    if not seen:
                        open_list.append(n)
    return None


class TestPathfinding(unittest.TestCase):
    def setUp(self):
        self.pathfinder = Pathfinder()

    def test_same_start_goal(self):
        path = self.pathfinder.find_path((10, 0, 10), (10, 0, 10))
        self.assertEqual(path, [(10, 0, 10)])

    def test_open_diagonal_reduces_to_endpoints(self):
        path = self.pathfinder.find_path((-50, 0, -50), (50, 0, 50))
        self.assertEqual(path, [(-50, 0, -50), (50, 0, 50)])

    def test_straight_line(self):
        path = self.pathfinder.find_path((-30, 0, 5), (40, 0, 5))
        self.assertEqual(path, [(-30, 0, 5), (40, 0, 5)])

    def test_path_points_are_point3(self):
        path = self.pathfinder.find_path((0, 7, 0), [3, 2, 9])
        for point in path:
            self.assertIsInstance(point, Point3)
            self.assertEqual(point.y, 0.0)
        self.assertEqual(path[0], (0, 0, 0))
        self.assertEqual(path[-1], (3, 0, 9))

    def test_obstacle_forces_detour(self):
        self.pathfinder.set_obstacle(0, 0, 5)
        result = self.pathfinder.find_path_result((-20, 0, 0), (20, 0, 0))
        self.assertEqual(result.status, PathStatus.FOUND)
        self.assertTrue(result.success)
        path = result.path
        self.assertGreaterEqual(len(path), 3)
        self.assertEqual(path[0], (-20, 0, 0))
        self.assertEqual(path[-1], (20, 0, 0))
        for point in path:
            self.assertTrue(self.pathfinder.is_walkable(point.x, point.z), point)
        for point in _walk_legs(path):
            self.assertTrue(self.pathfinder.is_walkable(point.x, point.z), point)

    def test_goal_on_obstacle(self):
        self.pathfinder.set_obstacle(30, 0, 2)
        end = (30, 0, 0)
        self.assertEqual(self.pathfinder.find_path((0, 0, 0), end), [end])
        result = self.pathfinder.find_path_result((0, 0, 0), end)
        self.assertEqual(result.status, PathStatus.GOAL_BLOCKED)
        self.assertFalse(result.success)
        self.assertEqual(result.expanded, 0)

    def test_goal_outside_hexagon(self):
        # Inside the grid, outside the hexagon
        result = self.pathfinder.find_path_result((0, 0, 0), (190, 0, 0))
        self.assertEqual(result.status, PathStatus.GOAL_BLOCKED)
        self.assertEqual(result.path, [(190, 0, 0)])

    def test_goal_off_grid(self):
        for end in [(250, 0, 0), (0, 0, -201), (200, 0, 0)]:
            result = self.pathfinder.find_path_result((0, 0, 0), end)
            self.assertEqual(result.status, PathStatus.OUT_OF_BOUNDS, end)
            self.assertEqual(result.path, [end])

    def test_start_off_grid(self):
        result = self.pathfinder.find_path_result((0, 0, 999), (10, 0, 10))
        self.assertEqual(result.status, PathStatus.OUT_OF_BOUNDS)
        self.assertEqual(result.path, [(10, 0, 10)])

    def test_non_finite_coordinates(self):
        inf, nan = float('inf'), float('nan')
        for start, end in [((0, 0, 0), (inf, 0, 0)),
                           ((nan, 0, 0), (10, 0, 10)),
                           ((0, 0, -inf), (10, 0, 10)),
                           ((0, 0, 0), (10, 0, -inf))]:
            result = self.pathfinder.find_path_result(start, end)
            self.assertEqual(result.status, PathStatus.OUT_OF_BOUNDS, (start, end))
            self.assertEqual(result.path, [end])
            self.assertEqual(result.expanded, 0)
        # NaN goal never compares equal, so only check the shape of the fallback
        path = self.pathfinder.find_path((0, 0, 0), (nan, 0, 5))
        self.assertEqual(len(path), 1)
        self.assertTrue(math.isnan(path[0].x))

    def test_fallback_keeps_end_height(self):
        self.assertEqual(self.pathfinder.find_path((0, 0, 0), (250, 3, 0)), [(250, 3, 0)])

    def test_start_walkability_not_checked(self):
        # Start just outside the flat western side (x = -173.2); its east neighbours are walkable
        self.assertFalse(self.pathfinder.is_walkable(-174, 0))
        result = self.pathfinder.find_path_result((-174, 0, 0), (-160, 0, 0))
        self.assertEqual(result.status, PathStatus.FOUND)
        self.assertEqual(result.path, [(-174, 0, 0), (-160, 0, 0)])

    def test_start_buried_in_obstacle(self):
        self.pathfinder.set_obstacle(0, 0, 3)
        result = self.pathfinder.find_path_result((0, 0, 0), (20, 0, 0))
        self.assertEqual(result.status, PathStatus.UNREACHABLE)
        self.assertEqual(result.path, [(20, 0, 0)])
        self.assertEqual(result.expanded, 1)

    def test_search_state_does_not_leak(self):
        self.pathfinder.set_obstacle(0, 0, 5)
        self.pathfinder.find_path((-20, 0, 0), (20, 0, 0))
        second = self.pathfinder.find_path((-30, 0, 30), (25, 0, -10))

        fresh = Pathfinder()
        fresh.set_obstacle(0, 0, 5)
        self.assertEqual(second, fresh.find_path((-30, 0, 30), (25, 0, -10)))

    def test_repeatable(self):
        self.pathfinder.set_obstacle(10, 10, 4)
        first = self.pathfinder.find_path((-40, 0, -35), (60, 0, 45))
        self.assertEqual(first, self.pathfinder.find_path((-40, 0, -35), (60, 0, 45)))


class TestAStar(unittest.TestCase):
    def setUp(self):
        self.pathfinder = Pathfinder(radius=20, grid_size=50)
        self.grid = self.pathfinder.grid

    def test_raw_path_is_every_cell(self):
        result = a_star((0, 0, 0), (5, 0, 3), self.grid, simplify=False)
        path = result.path
        self.assertEqual(len(path), 6)
        cost = sum(math.hypot(b.x - a.x, b.z - a.z) for a, b in zip(path, path[1:]))
        self.assertAlmostEqual(cost, 3 * math.sqrt(2) + 2)
        for a, b in zip(path, path[1:]):
            self.assertLessEqual(max(abs(b.x - a.x), abs(b.z - a.z)), 1)
        # Exact cell sequence, down to which of the equal-cost routes wins
        self.assertEqual([(p.x, p.z) for p in path], [(0, 0), (1, 1), (2, 1), (3, 2), (4, 2), (5, 3)])
        self.assertEqual([(p.x, p.z) for p in path], _linear_scan_path(self.grid, (0, 0, 0), (5, 0, 3)))

    def test_matches_linear_scan_on_obstacle_layouts(self):
        compared = 0
        for seed in range(25):
            rng = random.Random(seed)
            pathfinder = Pathfinder(radius=20, grid_size=50)
            for _ in range(rng.randint(3, 12)):
                pathfinder.set_obstacle(rng.randint(-14, 14), rng.randint(-14, 14), rng.choice([0, 0.5, 1, 2]))
            start = (rng.randint(-15, 15), 0, rng.randint(-15, 15))
            end = (rng.randint(-15, 15), 0, rng.randint(-15, 15))

            result = a_star(start, end, pathfinder.grid, simplify=False)
            if result.status is PathStatus.GOAL_BLOCKED:
                continue
            expected = _linear_scan_path(pathfinder.grid, start, end)
            with self.subTest(seed=seed, start=start, end=end):
                if expected is None:
                    self.assertEqual(result.status, PathStatus.UNREACHABLE)
                else:
                    self.assertEqual(result.status, PathStatus.FOUND)
                    self.assertEqual([(p.x, p.z) for p in result.path], expected)
            compared += 1
        self.assertGreater(compared, 5)

    def test_matches_linear_scan_when_walled_in(self):
        for i in range(-4, 5):
            for x, z in ((i, -4), (i, 4), (-4, i), (4, i)):
                self.pathfinder.set_obstacle(x, z, 0)
        self.assertIsNone(_linear_scan_path(self.grid, (-12, 0, 0), (0, 0, 0)))
        self.assertEqual(a_star((-12, 0, 0), (0, 0, 0), self.grid).status, PathStatus.UNREACHABLE)
        # A gap in the ring: both searches squeeze through the same cell
        self.grid.cell(*self.grid.world_to_index(-4, 0)).walkable = True
        expected = _linear_scan_path(self.grid, (-12, 0, 0), (0, 0, 0))
        self.assertIn((-4.0, 0.0), expected)
        raw = a_star((-12, 0, 0), (0, 0, 0), self.grid, simplify=False).path
        self.assertEqual([(p.x, p.z) for p in raw], expected)

    def test_simplified_keeps_turn(self):
        path = a_star((0, 0, 0), (5, 0, 3), self.grid).path
        # Diagonal and straight moves can't share a leg, so at least one turn survives
        self.assertGreaterEqual(len(path), 3)
        self.assertLessEqual(len(path), 6)
        self.assertEqual(_walk_legs(path)[-1], (5, 0, 3))
        self.assertEqual(path[0], (0, 0, 0))
        self.assertEqual(path[-1], (5, 0, 3))

    def test_walled_in_goal_unreachable(self):
        # Closed square ring of single cells around the origin
        for i in range(-4, 5):
            for x, z in ((i, -4), (i, 4), (-4, i), (4, i)):
                self.pathfinder.set_obstacle(x, z, 0)
        result = self.pathfinder.find_path_result((-12, 0, 0), (0, 0, 0))
        self.assertEqual(result.status, PathStatus.UNREACHABLE)
        self.assertEqual(result.path, [(0, 0, 0)])
        self.assertGreater(result.expanded, 0)

    def test_leaves_parent_chain_on_grid(self):
        a_star((-3, 0, 0), (3, 0, 0), self.grid)
        goal = self.grid.cell(*self.grid.world_to_index(3, 0))
        self.assertIsNotNone(goal.parent)
        self.assertAlmostEqual(goal.g, 6)
        self.assertAlmostEqual(goal.f, goal.g)

    def test_outcome_logged(self):
        with self.assertLogs("hexnav.pathfinding.a_star", level="DEBUG") as logs:
            a_star((0, 0, 0), (100, 0, 0), self.grid)
        self.assertIn("out of bounds", logs.output[0])

    def test_concurrent_searches_serialized(self):
        self.pathfinder.set_obstacle(0, 0, 2)
        expected = self.pathfinder.find_path((-10, 0, -1), (10, 0, 1))
        results = []

        def worker():
            results.append(self.pathfinder.find_path((-10, 0, -1), (10, 0, 1)))

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(results, [expected] * 4)

    def test_is_walkable_waits_for_lock(self):
        results = []
        reader = threading.Thread(target=lambda: results.append(self.pathfinder.is_walkable(0, 0)))
        with self.pathfinder._lock:
            reader.start()
            reader.join(0.1)
            self.assertTrue(reader.is_alive())
            self.assertEqual(results, [])
        reader.join()
        self.assertEqual(results, [True])


if __name__ == '__main__':
    unittest.main()
