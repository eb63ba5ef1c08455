from maze_collapse.config import GameConfig
from maze_collapse.game import BodyRole, Direction, GameController, Mode
from maze_collapse.maze import Maze, generate_maze
from maze_collapse.physics import Contact, PhysicsWorld

__all__ = [
    "BodyRole",
    "Contact",
    "Direction",
    "GameConfig",
    "GameController",
    "Maze",
    "Mode",
    "PhysicsWorld",
    "generate_maze",
]
