import logging
import os

import gymnasium as gym
from gymnasium.spaces import MultiDiscrete, Box
import numpy as np
import pygame
import pygame.gfxdraw
import pymunk

from maze_collapse.config import GameConfig
from maze_collapse.game import Direction, GameController
from maze_collapse.maze import generate_maze
from maze_collapse.physics import PhysicsWorld

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

logger = logging.getLogger(__name__)

MOVEMENTS = {
    1: Direction.UP,
    2: Direction.DOWN,
    3: Direction.LEFT,
    4: Direction.RIGHT,
}


class GameEnv(gym.Env):
    """
    A Gymnasium environment for a physics maze.

    The player rolls a ball through a procedurally generated maze. Touching
    the green goal wins the round, switches gravity on and lets every maze
    wall fall.

    **Action Space:** MultiDiscrete([5, 2, 2])
    - actions[0]: Movement (0=none, 1=up, 2=down, 3=left, 4=right)
    - actions[1]: Space button (unused)
    - actions[2]: Shift button (unused)

    **Observation Space:** Box(0, 255, (HEIGHT, WIDTH, 3), uint8)

    **Rewards:**
    - -0.01 per step.
    - +100 on the step the ball reaches the goal.

    **Termination:**
    - Terminated once the goal is reached; the physics keeps running so the
      collapse stays visible.
    - Truncated after MAX_STEPS steps.
    """
    metadata = {"render_modes": ["rgb_array"]}

    user_guide = (
        "Controls: Arrow keys or WASD push the ball. Reach the green goal to bring the maze down."
    )

    game_description = (
        "Roll a ball through a randomly carved maze. Each key press adds speed in that direction, "
        "so momentum builds up. Touch the goal and the walls come crashing down."
    )

    auto_advance = True

    # --- Physics ---
    PHYSICS_FPS = 60
    PHYSICS_SUBSTEPS = 2
    MAX_STEPS = 3000

    # --- Colors ---
    COLOR_BG = (15, 18, 26)
    COLOR_TEXT = (230, 230, 230)
    COLOR_WIN = (120, 255, 140)

    def __init__(self, render_mode="rgb_array", config=None):
        super().__init__()

        self.config = config or GameConfig()
        self.WIDTH, self.HEIGHT = self.config.width, self.config.height

        # --- Gymnasium Spaces ---
        self.observation_space = Box(
            low=0, high=255, shape=(self.HEIGHT, self.WIDTH, 3), dtype=np.uint8
        )
        self.action_space = MultiDiscrete([5, 2, 2])

        # --- Pygame Setup ---
        pygame.init()
        pygame.font.init()
        self.screen = pygame.Surface((self.WIDTH, self.HEIGHT))
        self.clock = pygame.time.Clock()
        self.font_large = pygame.font.Font(None, 64)
        self.font_small = pygame.font.Font(None, 24)

        # --- Game State (initialized in reset) ---
        self.world = None
        self.maze = None
        self.controller = None
        self.steps = 0
        self.score = 0.0

        self.reset()

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)

        self.maze = generate_maze(self.config.rows, self.config.columns, rng=self.np_random)
        self.world = PhysicsWorld(gravity=0.0)
        self.controller = GameController(self.world, self.maze, self.config)

        self.steps = 0
        self.score = 0.0
        logger.info("New %dx%d maze, carved from %s", self.maze.rows, self.maze.columns, self.maze.start)

        return self._get_observation(), self._get_info()

    def step(self, action):
        movement = int(action[0])
        was_won = self.controller.won
        reward = -0.01

        if movement in MOVEMENTS:
            self.controller.on_input(MOVEMENTS[movement])

        dt = 1.0 / self.PHYSICS_FPS
        for _ in range(self.PHYSICS_SUBSTEPS):
            self.world.step(dt)

        self.steps += 1

        if self.controller.won and not was_won:
            reward += 100.0
            # sfx: walls_collapse.wav

        terminated = self.controller.won
        truncated = self.steps >= self.MAX_STEPS
        self.score += reward

        return (
            self._get_observation(),
            reward,
            terminated,
            truncated,
            self._get_info()
        )

    def _get_observation(self):
        self.screen.fill(self.COLOR_BG)
        self._render_game()
        self._render_ui()
        arr = pygame.surfarray.array3d(self.screen)
        return np.transpose(arr, (1, 0, 2)).astype(np.uint8)

    def _get_info(self):
        vx, vy = self.controller.ball.velocity
        return {
            "score": self.score,
            "steps": self.steps,
            "mode": self.controller.mode.value,
            "ball_pos": tuple(self.controller.ball.position),
            "ball_vel": (vx, vy),
        }

    def _render_game(self):
        for body in self.world.bodies:
            color = body.color or self.COLOR_TEXT
            for shape in self.world.shapes_of(body):
                if isinstance(shape, pymunk.Circle):
                    x, y = body.local_to_world(shape.offset)
                    r = max(1, int(shape.radius))
                    pygame.gfxdraw.aacircle(self.screen, int(x), int(y), r, color)
                    pygame.gfxdraw.filled_circle(self.screen, int(x), int(y), r, color)
                else:
                    points = [body.local_to_world(v) for v in shape.get_vertices()]
                    pygame.draw.polygon(self.screen, color, [(p.x, p.y) for p in points])

    def _render_ui(self):
        steps_text = self.font_small.render(f"Steps: {self.steps}", True, self.COLOR_TEXT)
        self.screen.blit(steps_text, (10, 8))

        if self.controller.won:
            win_text = self.font_large.render("YOU WIN!", True, self.COLOR_WIN)
            win_rect = win_text.get_rect(center=(self.WIDTH // 2, self.HEIGHT // 2))
            self.screen.blit(win_text, win_rect)

    def close(self):
        pygame.quit()

    def validate_implementation(self):
        '''
        Sanity check of the spaces and of one reset/step cycle.
        '''
        assert self.action_space.shape == (3,)
        assert self.action_space.nvec.tolist() == [5, 2, 2]

        test_obs = self._get_observation()
        assert test_obs.shape == (self.HEIGHT, self.WIDTH, 3)
        assert test_obs.dtype == np.uint8

        obs, info = self.reset()
        assert obs.shape == (self.HEIGHT, self.WIDTH, 3)
        assert isinstance(info, dict)

        test_action = self.action_space.sample()
        obs, reward, term, trunc, info = self.step(test_action)
        assert obs.shape == (self.HEIGHT, self.WIDTH, 3)
        assert isinstance(reward, (int, float))
        assert isinstance(term, bool)
        assert isinstance(trunc, bool)
        assert isinstance(info, dict)
