"""Play the maze in a window: arrow keys or WASD to push the ball, R for a new maze."""
import logging
import os

_driver_preset = "SDL_VIDEODRIVER" in os.environ

import numpy as np
import pygame

from maze_collapse.env import GameEnv
from maze_collapse.logging_config import setup_logging

# The env module defaults SDL to the headless driver; a window needs the real one
if not _driver_preset:
    os.environ.pop("SDL_VIDEODRIVER", None)


def main():
    setup_logging(logging.INFO)
    env = GameEnv()
    obs, info = env.reset()

    pygame.display.set_caption("Maze Collapse")
    screen = pygame.display.set_mode((env.WIDTH, env.HEIGHT))

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_r:
                    obs, info = env.reset()
                    continue
                # Nudges are applied on key events, not held keys
                env.controller.on_input(pygame.key.name(event.key))

        # No step limit for a human player; truncation is ignored
        obs, reward, terminated, truncated, info = env.step([0, 0, 0])

        frame = np.transpose(obs, (1, 0, 2))
        surf = pygame.surfarray.make_surface(frame)
        screen.blit(surf, (0, 0))
        pygame.display.flip()

        env.clock.tick(env.PHYSICS_FPS // env.PHYSICS_SUBSTEPS)

    env.close()


if __name__ == "__main__":
    main()
