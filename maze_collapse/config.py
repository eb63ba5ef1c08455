"""
Start-time constants for a maze game.

All lengths are in pixels of the viewport, velocities in pixels per second.
"""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class GameConfig:
    rows: int = 10
    columns: int = 22
    width: int = 640
    height: int = 400
    velocity_step: float = 300.0
    gravity: float = 1000.0
    wall_thickness: float = 5.0
    border_thickness: float = 2.0
    marker_scale: float = 0.7
    wall_density: float = 1.0
    ball_cell: Tuple[int, int] = (0, 0)
    goal_cell: Optional[Tuple[int, int]] = None

    def __post_init__(self):
        if self.rows < 1 or self.columns < 1:
            raise ValueError(f"grid must be at least 1x1, got {self.rows}x{self.columns}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"viewport must be positive, got {self.width}x{self.height}")
        if not 0 < self.marker_scale <= 1:
            raise ValueError(f"marker_scale must be in (0, 1], got {self.marker_scale}")
        for name, cell in (("ball_cell", self.ball_cell), ("goal_cell", self.resolved_goal_cell)):
            if not self.contains(cell):
                raise ValueError(f"{name} {cell} is outside a {self.rows}x{self.columns} grid")

    @property
    def unit_width(self):
        return self.width / self.columns

    @property
    def unit_height(self):
        return self.height / self.rows

    @property
    def smaller_unit(self):
        return min(self.unit_width, self.unit_height)

    @property
    def resolved_goal_cell(self):
        # Bottom-right cell unless placed explicitly
        if self.goal_cell is None:
            return (self.rows - 1, self.columns - 1)
        return tuple(self.goal_cell)

    def contains(self, cell):
        row, column = cell
        return 0 <= row < self.rows and 0 <= column < self.columns

    def cell_center(self, cell):
        row, column = cell
        return ((column + 0.5) * self.unit_width, (row + 0.5) * self.unit_height)
