def policy(env):
    # Strategy: locate the ball's cell, take the shortest maze path to the goal cell
    # and push towards the next cell on it. Pushes are skipped while the ball already
    # moves that way at full step speed, so velocity does not pile up in corridors.
    config = env.config
    ball = env.controller.ball
    x, y = ball.position
    row = min(config.rows - 1, max(0, int(y // config.unit_height)))
    column = min(config.columns - 1, max(0, int(x // config.unit_width)))

    path = env.maze.shortest_path((row, column), config.resolved_goal_cell)
    if len(path) < 2:
        # On the goal cell: steer to its center
        gx, gy = config.cell_center(config.resolved_goal_cell)
        dx, dy = gx - x, gy - y
    else:
        next_row, next_column = path[1]
        dx, dy = next_column - column, next_row - row

    vx, vy = ball.velocity
    step = config.velocity_step
    if abs(dx) >= abs(dy):
        if dx > 0 and vx < step:
            return [4, 0, 0]  # Move right
        if dx < 0 and vx > -step:
            return [3, 0, 0]  # Move left
    else:
        if dy > 0 and vy < step:
            return [2, 0, 0]  # Move down
        if dy < 0 and vy > -step:
            return [1, 0, 0]  # Move up
    return [0, 0, 0]  # Already moving the right way
