"""Reflection of moving points off the walls of a cube centred at the origin."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from jellycube.geometry import Line, Plane


class BoxCollider:
    """Keeps points inside an axis-aligned cube, bouncing them off its walls."""

    def __init__(self, wall_len: float, collision_damping_coef: float) -> None:
        self.max_coordinate = wall_len / 2.0
        self.collision_damping_coef = collision_damping_coef

    def set_wall_len(self, wall_len: float) -> None:
        self.max_coordinate = wall_len / 2.0

    def _crossed_wall(self, pos: np.ndarray, delta: np.ndarray) -> tuple[int, float] | None:
        limit = self.max_coordinate
        for axis in range(3):
            if pos[axis] > limit and delta[axis] > 0.0:
                return axis, 1.0
            if pos[axis] < -limit and delta[axis] < 0.0:
                return axis, -1.0
        return None

    def collide(
        self,
        new_pos: Sequence[float],
        delta_pos: Sequence[float],
        new_vel: Sequence[float],
    ) -> tuple[np.ndarray, np.ndarray]:
        """Return the position and velocity after bouncing off any crossed walls."""
        pos = np.array(new_pos, dtype=float)
        delta = np.array(delta_pos, dtype=float)
        vel = np.array(new_vel, dtype=float)

        while (crossed := self._crossed_wall(pos, delta)) is not None:
            axis, side = crossed
            axis_vec = np.zeros(3)
            axis_vec[axis] = 1.0
            wall = Plane(side * self.max_coordinate * axis_vec, -side * axis_vec)
            pos, delta = self._reflect(pos, delta, wall)
            vel[axis] = -vel[axis] * self.collision_damping_coef

        return pos, vel

    @staticmethod
    def _reflect(pos: np.ndarray, delta: np.ndarray, wall: Plane) -> tuple[np.ndarray, np.ndarray]:
        trajectory = Line(pos - delta, pos)
        collision = wall.intersect(trajectory)
        if collision is None:
            raise ValueError("trajectory does not meet the wall")
        d = trajectory.direction
        reflected = d - 2.0 * np.dot(d, wall.normal) * wall.normal
        new_delta = pos - collision
        return reflected * np.linalg.norm(new_delta) + collision, new_delta