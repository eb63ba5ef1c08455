import unittest

import numpy as np

from maze_collapse.maze import generate_maze, shuffle


def count_components(maze):
    """Union-find over the open edges; returns (components, cycle_found)."""
    parent = {(r, c): (r, c) for r in range(maze.rows) for c in range(maze.columns)}

    def find(cell):
        while parent[cell] != cell:
            parent[cell] = parent[parent[cell]]
            cell = parent[cell]
        return cell

    cycle = False
    for a, b in maze.passages():
        root_a, root_b = find(a), find(b)
        if root_a == root_b:
            cycle = True
        else:
            parent[root_a] = root_b
    components = len({find(cell) for cell in parent})
    return components, cycle


class TestGenerateMaze(unittest.TestCase):

    def assertSpanningTree(self, maze):
        self.assertEqual(maze.open_count, maze.rows * maze.columns - 1)
        components, cycle = count_components(maze)
        self.assertEqual(components, 1)
        self.assertFalse(cycle)

    def test_matrix_shapes(self):
        maze = generate_maze(4, 7, rng=1)
        self.assertEqual(maze.visited.shape, (4, 7))
        self.assertEqual(maze.verticals.shape, (4, 6))
        self.assertEqual(maze.horizontals.shape, (3, 7))

    def test_spanning_tree_for_various_sizes(self):
        for rows, columns in [(1, 1), (1, 5), (6, 1), (2, 3), (10, 22), (17, 9)]:
            for seed in range(5):
                with self.subTest(rows=rows, columns=columns, seed=seed):
                    self.assertSpanningTree(generate_maze(rows, columns, rng=seed))

    def test_every_cell_visited(self):
        maze = generate_maze(8, 13, rng=3)
        self.assertTrue(maze.visited.all())

    def test_single_cell_has_no_openings(self):
        maze = generate_maze(1, 1, rng=0)
        self.assertEqual(maze.open_count, 0)
        self.assertEqual(maze.verticals.shape, (1, 0))
        self.assertEqual(maze.horizontals.shape, (0, 1))
        self.assertEqual(maze.start, (0, 0))

    def test_single_row_is_a_corridor(self):
        maze = generate_maze(1, 6, rng=9)
        self.assertTrue(maze.verticals.all())

    def test_two_by_two_over_many_seeds(self):
        for seed in range(1000):
            maze = generate_maze(2, 2, rng=seed)
            self.assertEqual(maze.open_count, 3)
            components, cycle = count_components(maze)
            self.assertEqual(components, 1)
            self.assertFalse(cycle)

    def test_same_seed_same_maze(self):
        a = generate_maze(9, 11, rng=42)
        b = generate_maze(9, 11, rng=42)
        self.assertEqual(a.start, b.start)
        np.testing.assert_array_equal(a.verticals, b.verticals)
        np.testing.assert_array_equal(a.horizontals, b.horizontals)

    def test_shared_generator_gives_different_mazes(self):
        rng = np.random.default_rng(5)
        a = generate_maze(12, 12, rng=rng)
        b = generate_maze(12, 12, rng=rng)
        self.assertFalse(
            np.array_equal(a.verticals, b.verticals) and np.array_equal(a.horizontals, b.horizontals)
        )

    def test_explicit_start(self):
        maze = generate_maze(5, 5, rng=0, start=(4, 2))
        self.assertEqual(maze.start, (4, 2))
        self.assertSpanningTree(maze)

    def test_invalid_dimensions_rejected(self):
        for rows, columns in [(0, 3), (3, 0), (-1, 2)]:
            with self.assertRaises(ValueError):
                generate_maze(rows, columns)

    def test_start_outside_grid_rejected(self):
        with self.assertRaises(ValueError):
            generate_maze(3, 3, start=(3, 0))

    def test_deep_grid_does_not_hit_recursion_limit(self):
        maze = generate_maze(120, 120, rng=7)
        self.assertEqual(maze.open_count, 120 * 120 - 1)


class TestMazeQueries(unittest.TestCase):

    def setUp(self):
        self.maze = generate_maze(6, 8, rng=11)

    def test_is_open_is_symmetric(self):
        for a, b in self.maze.passages():
            self.assertTrue(self.maze.is_open(a, b))
            self.assertTrue(self.maze.is_open(b, a))

    def test_is_open_rejects_non_adjacent(self):
        with self.assertRaises(ValueError):
            self.maze.is_open((0, 0), (1, 1))

    def test_shortest_path_follows_openings(self):
        path = self.maze.shortest_path((0, 0), (5, 7))
        self.assertEqual(path[0], (0, 0))
        self.assertEqual(path[-1], (5, 7))
        for a, b in zip(path, path[1:]):
            self.assertTrue(self.maze.is_open(a, b))

    def test_shortest_path_to_self(self):
        self.assertEqual(self.maze.shortest_path((2, 3), (2, 3)), [(2, 3)])


class TestShuffle(unittest.TestCase):

    def test_is_a_permutation(self):
        rng = np.random.default_rng(0)
        items = list(range(10))
        result = shuffle(items, rng)
        self.assertIs(result, items)
        self.assertEqual(sorted(result), list(range(10)))

    def test_all_orders_reachable(self):
        rng = np.random.default_rng(1)
        seen = {tuple(shuffle(["a", "b", "c"], rng)) for _ in range(300)}
        self.assertEqual(len(seen), 6)


if __name__ == "__main__":
    unittest.main()
