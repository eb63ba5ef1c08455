import enum
import logging

from maze_collapse.config import GameConfig


logger = logging.getLogger(__name__)

COLOR_WALL = (220, 60, 60)
COLOR_BOUNDARY = (90, 90, 110)
COLOR_GOAL = (60, 200, 90)
COLOR_BALL = (60, 120, 255)


class BodyRole(enum.Enum):
    BALL = "ball"
    GOAL = "goal"
    WALL = "wall"
    BOUNDARY = "boundary"


class Mode(enum.Enum):
    NAVIGATING = "navigating"
    COLLAPSED = "collapsed"


class Direction(enum.Enum):
    UP = (0, -1)
    LEFT = (-1, 0)
    DOWN = (0, 1)
    RIGHT = (1, 0)


KEY_BINDINGS = {
    "w": Direction.UP,
    "up": Direction.UP,
    "arrowup": Direction.UP,
    "a": Direction.LEFT,
    "left": Direction.LEFT,
    "arrowleft": Direction.LEFT,
    "s": Direction.DOWN,
    "down": Direction.DOWN,
    "arrowdown": Direction.DOWN,
    "d": Direction.RIGHT,
    "right": Direction.RIGHT,
    "arrowright": Direction.RIGHT,
}

WIN_ROLES = frozenset((BodyRole.BALL, BodyRole.GOAL))


class GameController:
    """
    Owns the bodies of one maze round and its navigating/collapsed state.

    Construction turns every closed wall of the maze into a static body, then
    places the goal and the ball. The first ball/goal contact collapses the
    maze: gravity comes on and every wall body becomes dynamic.
    """

    def __init__(self, world, maze, config=None):
        self.world = world
        self.config = config or GameConfig(rows=maze.rows, columns=maze.columns)
        if (maze.rows, maze.columns) != (self.config.rows, self.config.columns):
            raise ValueError(
                f"maze is {maze.rows}x{maze.columns} but config expects "
                f"{self.config.rows}x{self.config.columns}"
            )
        self.maze = maze
        self.mode = Mode.NAVIGATING
        self.walls = []
        self._win_listeners = []

        self._build_boundary()
        self._build_walls()
        self.goal = self._build_goal()
        self.ball = self._build_ball()

        world.on_collision_start(self.on_collision_start)
        logger.debug("Built %d wall bodies for a %dx%d maze", len(self.walls), maze.rows, maze.columns)

    @property
    def won(self):
        return self.mode is Mode.COLLAPSED

    def on_win(self, callback):
        self._win_listeners.append(callback)

    # --- Placement ---

    def _build_boundary(self):
        width, height = self.config.width, self.config.height
        t = self.config.border_thickness
        for x, y, w, h in (
            (width / 2, 0, width, t),
            (width / 2, height, width, t),
            (0, height / 2, t, height),
            (width, height / 2, t, height),
        ):
            body = self.world.make_rectangle(x, y, w, h, static=True, role=BodyRole.BOUNDARY, color=COLOR_BOUNDARY)
            self.world.add(body)

    def _build_walls(self):
        unit_w, unit_h = self.config.unit_width, self.config.unit_height
        thickness = self.config.wall_thickness

        # Horizontal edges sit between (r, c) and (r + 1, c)
        for row, column in zip(*(~self.maze.horizontals).nonzero()):
            self._add_wall((column + 0.5) * unit_w, (row + 1) * unit_h, unit_w, thickness)

        # Vertical edges sit between (r, c) and (r, c + 1)
        for row, column in zip(*(~self.maze.verticals).nonzero()):
            self._add_wall((column + 1) * unit_w, (row + 0.5) * unit_h, thickness, unit_h)

    def _add_wall(self, x, y, width, height):
        body = self.world.make_rectangle(
            float(x), float(y), width, height,
            static=True, role=BodyRole.WALL, color=COLOR_WALL, density=self.config.wall_density,
        )
        self.world.add(body)
        self.walls.append(body)

    def _build_goal(self):
        x, y = self.config.cell_center(self.config.resolved_goal_cell)
        side = self.config.smaller_unit * self.config.marker_scale
        body = self.world.make_rectangle(x, y, side, side, static=True, role=BodyRole.GOAL, color=COLOR_GOAL)
        self.world.add(body)
        return body

    def _build_ball(self):
        x, y = self.config.cell_center(self.config.ball_cell)
        radius = self.config.smaller_unit / 2 * self.config.marker_scale
        body = self.world.make_circle(x, y, radius, role=BodyRole.BALL, color=COLOR_BALL)
        self.world.add(body)
        return body

    # --- Input ---

    def on_input(self, key):
        """Nudges the ball along the direction bound to `key`; returns the direction or None."""
        if isinstance(key, Direction):
            direction = key
        else:
            direction = KEY_BINDINGS.get(str(key).lower())
        if direction is None:
            return None

        dx, dy = direction.value
        step = self.config.velocity_step
        vx, vy = self.ball.velocity
        self.world.set_velocity(self.ball, (vx + dx * step, vy + dy * step))
        return direction

    # --- Win condition ---

    def on_collision_start(self, pairs):
        for contact in pairs:
            self.on_collision(contact)

    def on_collision(self, contact):
        """Returns True when this contact is a ball/goal touch."""
        roles = {getattr(contact.body_a, "role", None), getattr(contact.body_b, "role", None)}
        if roles != WIN_ROLES:
            return False
        if self.mode is Mode.NAVIGATING:
            self._collapse()
        return True

    def _collapse(self):
        self.mode = Mode.COLLAPSED
        self.world.set_gravity(self.config.gravity)
        for body in self.world.bodies:
            if body.role is BodyRole.WALL:
                self.world.set_static(body, False)
        logger.info("Ball reached the goal, collapsing %d walls", len(self.walls))
        for callback in self._win_listeners:
            callback(self)
