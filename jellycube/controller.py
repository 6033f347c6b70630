"""Soft jelly cube steered by a rigid control cube."""

from __future__ import annotations

import math
import random
from collections.abc import Iterable, Sequence
from itertools import product

import numpy as np

from jellycube.environment import SimulationEnvironment
from jellycube.graph import MaterialPoint, SpringGraph
from jellycube.grid3d import Grid3D
from jellycube.model import Model

_IDENTITY_QUAT = (1.0, 0.0, 0.0, 0.0)


class SteeringCube:
    """Position, orientation and edge length of the control cube.

    The rotation is a quaternion stored as ``(w, x, y, z)``.
    """

    def __init__(self, edge_length: float = 1.0) -> None:
        self.edge_length = float(edge_length)
        self.position = np.zeros(3)
        self.rotation = np.array(_IDENTITY_QUAT, dtype=float)

    def rotate(self, point: Sequence[float]) -> np.ndarray:
        """Rotate ``point`` about the origin by the cube's rotation."""
        w = self.rotation[0]
        axis = self.rotation[1:]
        vec = np.asarray(point, dtype=float)
        uv = np.cross(axis, vec)
        uuv = np.cross(axis, uv)
        return vec + (uv * w + uuv) * 2.0


class MainController:
    """Builds the jelly cube and exposes the operations a user can perform on it.

    The cube consists of 4x4x4 material points joined by springs along the
    edges and face diagonals of each cell; the eight corners are tied by
    zero-length springs to the eight immovable corners of the steering cube.
    """

    INITIAL_MATERIAL_POINT_MASS = 1.0
    STEERING_CUBE_EDGE_LEN = 0.2
    INITIAL_BEZIER_SPRINGS_COEF = 5.0
    INITIAL_STEERING_SPRINGS_COEF = 30.0

    def __init__(self) -> None:
        self.steering_cube = SteeringCube(self.STEERING_CUBE_EDGE_LEN)
        self.bezier_points_ids = Grid3D(4, 4, 4)
        self.steering_points_ids = Grid3D(2, 2, 2)
        self.bezier_springs: list[int] = []
        self.steering_springs: list[int] = []

        self._bezier_spring_coef = self.INITIAL_BEZIER_SPRINGS_COEF
        self._steering_spring_coef = self.INITIAL_STEERING_SPRINGS_COEF
        self._material_point_mass = self.INITIAL_MATERIAL_POINT_MASS

        self.model = Model(self._initial_spring_graph(), SimulationEnvironment())

    # -- simulation control -------------------------------------------------

    def start_simulation(self) -> None:
        self.model.start_simulation()

    def stop_simulation(self) -> None:
        self.model.end_simulation()

    def update_simulation(self) -> None:
        self.model.update_simulation()

    def simulation_is_running(self) -> bool:
        return self.model.is_simulation_running()

    def __enter__(self) -> MainController:
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self.simulation_is_running():
            self.stop_simulation()

    # -- read-only state ----------------------------------------------------

    @property
    def bezier_springs_coefficient(self) -> float:
        return self._bezier_spring_coef

    @property
    def steering_springs_coefficient(self) -> float:
        return self._steering_spring_coef

    @property
    def material_point_mass(self) -> float:
        return self._material_point_mass

    @property
    def environment(self) -> SimulationEnvironment:
        return self.model.environment()

    # -- steering cube ------------------------------------------------------

    def set_steering_cube_position(self, position: Sequence[float]) -> None:
        self.steering_cube.position = np.array(position, dtype=float)
        self._update_steering_material_points()

    def set_steering_cube_rotation(self, rotation: Sequence[float]) -> None:
        """Set the rotation as a quaternion ``(w, x, y, z)``."""
        quat = np.array(rotation, dtype=float)
        if quat.shape != (4,):
            raise ValueError("rotation must be a quaternion (w, x, y, z)")
        self.steering_cube.rotation = quat
        self._update_steering_material_points()

    def _update_steering_material_points(self) -> None:
        cube = self.steering_cube
        half_diagonal = cube.edge_length / 2.0 * math.sqrt(3.0)

        with self.model.writing_graph() as graph:
            for x, y, z in product(range(2), repeat=3):
                corner = np.array([2 * x - 1, 2 * y - 1, 2 * z - 1], dtype=float)
                offset = corner / np.linalg.norm(corner) * half_diagonal
                point_id = self.steering_points_ids[x, y, z]
                graph.material_points[point_id].position = cube.rotate(offset) + cube.position

    # -- soft body ----------------------------------------------------------

    def disturb_soft_body(self, max_disturb: float, rng: random.Random | None = None) -> None:
        """Add a random velocity of length at most ``max_disturb`` to every cube point."""
        rng = rng if rng is not None else random.Random()
        with self.model.writing_graph() as graph:
            for point_id in self.bezier_points_ids:
                alpha = rng.uniform(0.0, 2.0 * math.pi)
                v = rng.uniform(-1.0, 1.0)
                length = rng.uniform(0.0, max_disturb)
                r = math.sqrt(1.0 - v * v)
                direction = np.array([r * math.cos(alpha), r * math.sin(alpha), v])
                graph.material_points[point_id].velocity += direction * length

    def set_bezier_springs_coefficient(self, coefficient: float) -> None:
        with self.model.writing_graph() as graph:
            self._bezier_spring_coef = coefficient
            self._set_coefficient(graph, self.bezier_springs, coefficient)

    def set_steering_springs_coefficient(self, coefficient: float) -> None:
        with self.model.writing_graph() as graph:
            self._steering_spring_coef = coefficient
            self._set_coefficient(graph, self.steering_springs, coefficient)

    @staticmethod
    def _set_coefficient(graph: SpringGraph, spring_ids: Iterable[int], coefficient: float) -> None:
        for spring_id in spring_ids:
            graph.springs[spring_id].spring_coef = coefficient

    def set_simulation_environment(self, environment: SimulationEnvironment) -> None:
        self.model.set_environment(environment)

    def set_material_point_mass(self, mass: float) -> None:
        self._material_point_mass = mass
        with self.model.writing_graph() as graph:
            for point_id in self.bezier_points_ids:
                graph.material_points[point_id].mass = mass

    def bezier_positions(self) -> np.ndarray:
        """Return the cube's control points as an array indexed ``[x, y, z]``."""
        ids = self.bezier_points_ids
        result = np.zeros((ids.size_x, ids.size_y, ids.size_z, 3))
        with self.model.reading_graph() as graph:
            for key in product(range(ids.size_x), range(ids.size_y), range(ids.size_z)):
                result[key] = graph.material_points[ids[key]].position
        return result

    # -- construction -------------------------------------------------------

    def _initial_spring_graph(self) -> SpringGraph:
        edge = self.STEERING_CUBE_EDGE_LEN
        bezier = self.bezier_points_ids
        steering = self.steering_points_ids
        graph = SpringGraph(
            bezier.size_x * bezier.size_y * bezier.size_z
            + steering.size_x * steering.size_y * steering.size_z,
            0,
        )
        start = np.full(3, -edge / 2.0)
        max_x, max_y, max_z = bezier.size_x - 1, bezier.size_y - 1, bezier.size_z - 1

        for x, y, z in product(range(bezier.size_x), range(bezier.size_y), range(bezier.size_z)):
            pos = start + np.array([x / max_x, y / max_y, z / max_z]) * edge
            bezier[x, y, z] = graph.add_material_point(
                MaterialPoint(self.INITIAL_MATERIAL_POINT_MASS, pos)
            )

        for x, y, z in product(range(steering.size_x), range(steering.size_y), range(steering.size_z)):
            pos = start + np.array([x, y, z], dtype=float) * edge
            steering[x, y, z] = graph.add_material_point(MaterialPoint(math.inf, pos))

        std_len = edge / 3.0
        diagonal_len = edge / 3.0 * math.sqrt(2.0)
        # Neighbour offsets in the order the springs are created.
        offsets = [
            ((1, 0, 0), std_len),
            ((0, 1, 0), std_len),
            ((0, 0, 1), std_len),
            ((1, 1, 0), diagonal_len),
            ((1, 0, 1), diagonal_len),
            ((0, 1, 1), diagonal_len),
            ((1, -1, 0), diagonal_len),
            ((1, 0, -1), diagonal_len),
            ((0, 1, -1), diagonal_len),
        ]
        sizes = (bezier.size_x, bezier.size_y, bezier.size_z)

        for x, y, z in product(range(bezier.size_x), range(bezier.size_y), range(bezier.size_z)):
            for (dx, dy, dz), rest_length in offsets:
                other = (x + dx, y + dy, z + dz)
                if all(0 <= c < size for c, size in zip(other, sizes)):
                    self.bezier_springs.append(
                        graph.add_spring(
                            rest_length,
                            self.INITIAL_BEZIER_SPRINGS_COEF,
                            bezier[x, y, z],
                            bezier[other],
                        )
                    )

        for x, y, z in product(range(steering.size_x), range(steering.size_y), range(steering.size_z)):
            self.steering_springs.append(
                graph.add_spring(
                    0.0,
                    self.INITIAL_STEERING_SPRINGS_COEF,
                    steering[x, y, z],
                    bezier[3 * x, 3 * y, 3 * z],
                )
            )

        return graph