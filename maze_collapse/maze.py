import logging
from collections import deque
from dataclasses import dataclass

import numpy as np


logger = logging.getLogger(__name__)

# Neighbour offsets in the order they are listed before shuffling.
DIRECTIONS = (
    (-1, 0, "up"),
    (0, 1, "right"),
    (1, 0, "down"),
    (0, -1, "left"),
)


@dataclass
class Maze:
    """
    A perfect maze over a rows x columns grid.

    `verticals[r, c]` is True when the wall between (r, c) and (r, c + 1) is
    open, `horizontals[r, c]` when the wall between (r, c) and (r + 1, c) is.
    """
    rows: int
    columns: int
    start: tuple
    visited: np.ndarray
    verticals: np.ndarray
    horizontals: np.ndarray

    @property
    def open_count(self):
        return int(self.verticals.sum() + self.horizontals.sum())

    def passages(self):
        """Yields every open edge as a pair of cells."""
        for r, c in np.argwhere(self.verticals):
            yield (int(r), int(c)), (int(r), int(c) + 1)
        for r, c in np.argwhere(self.horizontals):
            yield (int(r), int(c)), (int(r) + 1, int(c))

    def is_open(self, a, b):
        (r1, c1), (r2, c2) = sorted((tuple(a), tuple(b)))
        if r1 == r2 and c2 == c1 + 1:
            return bool(self.verticals[r1, c1])
        if c1 == c2 and r2 == r1 + 1:
            return bool(self.horizontals[r1, c1])
        raise ValueError(f"cells {a} and {b} are not adjacent")

    def neighbours(self, cell):
        """Cells reachable from `cell` through one opening."""
        row, column = cell
        for dr, dc, _ in DIRECTIONS:
            r, c = row + dr, column + dc
            if 0 <= r < self.rows and 0 <= c < self.columns and self.is_open((row, column), (r, c)):
                yield (r, c)

    def shortest_path(self, source, target):
        """Breadth-first path of cells from source to target, both included."""
        source, target = tuple(source), tuple(target)
        parents = {source: None}
        queue = deque([source])
        while queue:
            cell = queue.popleft()
            if cell == target:
                break
            for nxt in self.neighbours(cell):
                if nxt not in parents:
                    parents[nxt] = cell
                    queue.append(nxt)
        if target not in parents:
            return []

        path = [target]
        while parents[path[-1]] is not None:
            path.append(parents[path[-1]])
        return path[::-1]


def shuffle(items, rng):
    """Fisher-Yates shuffle in place: walk from the end, swapping each slot with one at or before it."""
    counter = len(items)
    while counter > 0:
        index = int(rng.integers(0, counter))
        counter -= 1
        items[counter], items[index] = items[index], items[counter]
    return items


def generate_maze(rows, columns, rng=None, start=None):
    """
    Carves a spanning-tree maze with a randomized depth-first walk.

    The walk is the classic recursive backtracker, run on an explicit stack of
    (cell, remaining neighbours) frames so large grids do not hit the
    interpreter's recursion limit. A neighbour is entered, and the wall to it
    opened, only if it has not been visited yet, so every cell is entered
    exactly once and the openings form a tree.
    """
    if rows < 1 or columns < 1:
        raise ValueError(f"maze needs at least one row and one column, got {rows}x{columns}")

    rng = np.random.default_rng(rng)

    visited = np.zeros((rows, columns), dtype=bool)
    verticals = np.zeros((rows, columns - 1), dtype=bool)
    horizontals = np.zeros((rows - 1, columns), dtype=bool)

    if start is None:
        start = (int(rng.integers(0, rows)), int(rng.integers(0, columns)))
    start = tuple(start)
    if not (0 <= start[0] < rows and 0 <= start[1] < columns):
        raise ValueError(f"start cell {start} is outside a {rows}x{columns} grid")

    def enter(row, column):
        visited[row, column] = True
        neighbours = shuffle(
            [(row + dr, column + dc, direction) for dr, dc, direction in DIRECTIONS], rng
        )
        return (row, column), iter(neighbours)

    stack = [enter(*start)]
    while stack:
        (row, column), neighbours = stack[-1]
        neighbour = next(neighbours, None)
        if neighbour is None:
            stack.pop()
            continue

        next_row, next_column, direction = neighbour
        if not (0 <= next_row < rows and 0 <= next_column < columns):
            continue
        if visited[next_row, next_column]:
            continue

        # Remove wall
        if direction == "left":
            verticals[row, column - 1] = True
        elif direction == "right":
            verticals[row, column] = True
        elif direction == "up":
            horizontals[row - 1, column] = True
        elif direction == "down":
            horizontals[row, column] = True

        stack.append(enter(next_row, next_column))

    maze = Maze(rows, columns, start, visited, verticals, horizontals)
    logger.debug("Generated %dx%d maze from %s with %d openings", rows, columns, start, maze.open_count)
    return maze
