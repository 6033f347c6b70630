"""Mass-spring soft body integration."""

from __future__ import annotations

import math
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import replace

import numpy as np

from jellycube.box_collider import BoxCollider
from jellycube.environment import SimulationEnvironment
from jellycube.graph import MaterialPoint, SpringGraph


def _is_fixed(point: MaterialPoint) -> bool:
    return point.mass == math.inf


class SpringsSimulation:
    """Advances a spring graph in time inside a bouncing box.

    Points with infinite mass are anchors: they are never moved by the
    simulation. All updates and graph access go through one lock.
    """

    def __init__(self, graph: SpringGraph, environment: SimulationEnvironment) -> None:
        self.graph = graph
        self.environment = replace(environment)
        self.box_collider = BoxCollider(
            environment.simulation_area_edge_length, environment.collision_damping
        )
        self._lock = threading.Lock()

    @contextmanager
    def reading_graph(self) -> Iterator[SpringGraph]:
        """Hold the simulation lock while the graph is read."""
        with self._lock:
            yield self.graph

    @contextmanager
    def writing_graph(self) -> Iterator[SpringGraph]:
        """Hold the simulation lock while the graph is modified."""
        with self._lock:
            yield self.graph

    def set_environment(self, environment: SimulationEnvironment) -> None:
        self.environment = replace(environment)
        self.box_collider.set_wall_len(environment.simulation_area_edge_length)

    def viscous_damping_force(self, velocity: Sequence[float]) -> np.ndarray:
        return -self.environment.viscous_damping * np.asarray(velocity, dtype=float)

    def spring_force(
        self,
        p1: Sequence[float],
        p2: Sequence[float],
        v1: Sequence[float],
        v2: Sequence[float],
        spring_coef: float,
        spring_len: float,
    ) -> np.ndarray:
        """Return the force the spring exerts on the point at ``p1``."""
        p1 = np.asarray(p1, dtype=float)
        p2 = np.asarray(p2, dtype=float)
        if np.array_equal(p1, p2):
            return np.zeros(3)

        diff = p1 - p2
        length = float(np.linalg.norm(diff))
        dot_i = self._dot_i(diff, np.asarray(v1, dtype=float) - np.asarray(v2, dtype=float))
        extension = length - spring_len
        force_val = -self.environment.spring_damping * dot_i - spring_coef * extension
        return diff / length * force_val

    @staticmethod
    def _dot_i(diff: np.ndarray, vel_diff: np.ndarray) -> float:
        length = float(np.linalg.norm(diff))
        if length == 0.0:
            return 0.0
        return float(np.dot(diff, vel_diff)) / length

    def _increments(self) -> tuple[np.ndarray, np.ndarray]:
        count = len(self.graph.material_points)
        return np.zeros((count, 3)), np.zeros((count, 3))

    def _movable(self) -> Iterator[tuple[int, MaterialPoint, list]]:
        graph = self.graph
        for i, (mp, neighbours) in enumerate(zip(graph.material_points, graph.neighbours)):
            if not _is_fixed(mp):
                yield i, mp, neighbours

    def update_euler(self) -> None:
        """Advance one time step with the explicit Euler method."""
        with self._lock:
            h = self.environment.delta_t
            dp, dv = self._increments()
            points = self.graph.material_points

            for i, mp1, neighbours in self._movable():
                force = np.zeros(3)
                for neighbour in neighbours:
                    mp2 = points[neighbour.material_point]
                    spring = self.graph.springs[neighbour.spring]
                    force += self.spring_force(
                        mp1.position, mp2.position, mp1.velocity, mp2.velocity,
                        spring.spring_coef, spring.rest_length,
                    )
                force += self.viscous_damping_force(mp1.velocity)

                dp[i] += h * mp1.velocity
                dv[i] += h * force / mp1.mass

            self._apply(dp, dv)

    def update_runge_kutta(self) -> None:
        """Advance one time step integrating each spring pair with RK4."""
        with self._lock:
            h = self.environment.delta_t
            dp, dv = self._increments()
            points = self.graph.material_points

            for i, mp1, neighbours in self._movable():
                m1, v1 = mp1.mass, mp1.velocity
                for neighbour in neighbours:
                    mp2 = points[neighbour.material_point]
                    spring = self.graph.springs[neighbour.spring]
                    m2, v2 = mp2.mass, mp2.velocity

                    def force(dp1, dp2, dv1, dv2):
                        return self.spring_force(
                            mp1.position + dp1, mp2.position + dp2,
                            v1 + dv1, v2 + dv2,
                            spring.spring_coef, spring.rest_length,
                        )

                    zero = np.zeros(3)
                    f = force(zero, zero, zero, zero)
                    k1_v1, k1_v2 = f / m1, -f / m2
                    k1_p1, k1_p2 = v1, v2

                    f = force(h / 2 * k1_p1, h / 2 * k1_p2, h / 2 * k1_v1, h / 2 * k1_v2)
                    k2_v1, k2_v2 = f / m1, -f / m2
                    k2_p1, k2_p2 = v1 + h / 2 * k2_v1, v2 + h / 2 * k2_v2

                    f = force(h / 2 * k2_p1, h / 2 * k2_p2, h / 2 * k2_v1, h / 2 * k2_v2)
                    k3_v1, k3_v2 = f / m1, -f / m2
                    k3_p1, k3_p2 = v1 + h / 2 * k3_v1, v2 + h / 2 * k3_v2

                    f = force(h * k3_p1, h * k3_p2, h * k3_v1, h * k3_v2)
                    k4_v1 = f / m1
                    k4_p1 = v1 + h * k4_v1

                    dv[i] += h / 6 * (k1_v1 + 2 * k2_v1 + 2 * k3_v1 + k4_v1)
                    dp[i] += h / 6 * (k1_p1 + 2 * k2_p1 + 2 * k3_p1 + k4_p1)

                k1 = self.viscous_damping_force(v1) / m1
                k2 = self.viscous_damping_force(v1 + h / 2 * k1) / m1
                k3 = self.viscous_damping_force(v1 + h / 2 * k2) / m1
                k4 = self.viscous_damping_force(v1 + h * k3) / m1
                dv[i] += h / 6 * (k1 + 2 * k2 + 2 * k3 + k4)

            self._apply(dp, dv)

    def update_runge_kutta2(self) -> None:
        """Advance one time step with RK4 over the total force on each point."""
        with self._lock:
            h = self.environment.delta_t
            dp, dv = self._increments()

            for i, mp1, _ in self._movable():
                pos, vel, mass = mp1.position, mp1.velocity, mp1.mass

                k1_v = self._total_force(i, pos, vel) / mass
                k1_p = vel

                k2_v = self._total_force(i, pos + 0.5 * h * k1_p, vel + 0.5 * h * k1_v) / mass
                k2_p = vel + 0.5 * h * k1_v

                k3_v = self._total_force(i, pos + 0.5 * h * k2_p, vel + 0.5 * h * k2_v) / mass
                k3_p = vel + 0.5 * h * k2_v

                k4_v = self._total_force(i, pos + h * k3_p, vel + h * k3_v)
                k4_p = vel + h * k3_v

                dp[i] += h / 6 * (k1_p + 2 * k2_p + 2 * k3_p + k4_p)
                dv[i] += h / 6 * (k1_v + 2 * k2_v + 2 * k3_v + k4_v)

            self._apply(dp, dv)

    def _total_force(self, i: int, position: np.ndarray, velocity: np.ndarray) -> np.ndarray:
        points = self.graph.material_points
        force = np.zeros(3)
        for neighbour in self.graph.neighbours[i]:
            mp2 = points[neighbour.material_point]
            spring = self.graph.springs[neighbour.spring]
            force += self.spring_force(
                position, mp2.position, velocity, mp2.velocity,
                spring.spring_coef, spring.rest_length,
            )
        return force + self.viscous_damping_force(velocity)

    def _apply(self, dp: np.ndarray, dv: np.ndarray) -> None:
        for i, mp, _ in self._movable():
            position = mp.position + dp[i]
            velocity = mp.velocity + dv[i]
            mp.position, mp.velocity = self.box_collider.collide(position, dp[i], velocity)