"""Physics world built on pymunk, in screen coordinates (y grows downwards)."""
import logging
from collections import namedtuple

import pymunk


logger = logging.getLogger(__name__)

Contact = namedtuple("Contact", ["body_a", "body_b"])


class PhysicsWorld:
    """
    The narrow slice of pymunk the game talks to.

    Every body carries a `role` and a `color` attribute set at creation.
    Collision-start pairs seen during `step` are buffered and handed to the
    subscribers after the step returns, when the space is unlocked and bodies
    may be changed.
    """

    def __init__(self, gravity=0.0):
        self.space = pymunk.Space()
        self.space.gravity = (0, gravity)
        self.bodies = []
        self._shapes = {}
        self._pending = []
        self._collision_callbacks = []
        self.space.on_collision(begin=self._on_begin)

    # --- Body creation ---

    def make_rectangle(self, x, y, width, height, static=False, role=None, color=None, density=1.0):
        body_type = pymunk.Body.STATIC if static else pymunk.Body.DYNAMIC
        body = pymunk.Body(body_type=body_type)
        body.position = (x, y)
        shape = pymunk.Poly.create_box(body, (width, height))
        return self._tag(body, shape, role, color, density)

    def make_circle(self, x, y, radius, role=None, color=None, density=1.0):
        body = pymunk.Body()
        body.position = (x, y)
        shape = pymunk.Circle(body, radius)
        return self._tag(body, shape, role, color, density)

    def _tag(self, body, shape, role, color, density):
        shape.density = density
        shape.friction = 0.1
        body.role = role
        body.color = color
        self._shapes[body] = [shape]
        return body

    def shapes_of(self, body):
        return list(self._shapes.get(body, ()))

    # --- World mutation ---

    def add(self, *bodies):
        for body in bodies:
            self.space.add(body, *self._shapes[body])
            self.bodies.append(body)

    def set_static(self, body, is_static):
        body.body_type = pymunk.Body.STATIC if is_static else pymunk.Body.DYNAMIC

    def set_velocity(self, body, velocity):
        body.velocity = tuple(velocity)

    def set_gravity(self, y):
        self.space.gravity = (0, y)

    @property
    def gravity(self):
        return self.space.gravity.y

    # --- Events ---

    def on_collision_start(self, callback):
        self._collision_callbacks.append(callback)

    def _on_begin(self, arbiter, space, data):
        shape_a, shape_b = arbiter.shapes
        self._pending.append(Contact(shape_a.body, shape_b.body))

    def step(self, dt):
        self.space.step(dt)
        if not self._pending:
            return
        pairs, self._pending = self._pending, []
        for callback in self._collision_callbacks:
            callback(pairs)
