"""Mass points connected by springs."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np


@dataclass
class MaterialPoint:
    """A point mass; infinite mass marks a point that the simulation never moves."""

    mass: float
    position: np.ndarray
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self) -> None:
        self.position = np.array(self.position, dtype=float)
        self.velocity = np.array(self.velocity, dtype=float)


@dataclass
class Spring:
    anchor_point1: int
    anchor_point2: int
    rest_length: float
    spring_coef: float


class Neighbour(NamedTuple):
    material_point: int
    spring: int


class SpringGraph:
    """Material points, springs and, for each point, the springs attached to it."""

    def __init__(self, material_points_nb: int = 0, springs_nb: int = 0) -> None:
        # springs_nb is only a size hint; lists grow as needed.
        self.expected_springs = springs_nb
        self.material_points: list[MaterialPoint] = []
        self.springs: list[Spring] = []
        self.neighbours: list[list[Neighbour]] = [[] for _ in range(material_points_nb)]

    def add_material_point(self, material_point: MaterialPoint) -> int:
        self.material_points.append(material_point)
        while len(self.neighbours) < len(self.material_points):
            self.neighbours.append([])
        return len(self.material_points) - 1

    def add_spring(self, rest_length: float, spring_coef: float, end1: int, end2: int) -> int:
        for end in (end1, end2):
            if not 0 <= end < len(self.material_points):
                raise IndexError(f"no material point with id {end}")
        self.springs.append(Spring(end1, end2, rest_length, spring_coef))
        spring_id = len(self.springs) - 1
        self.neighbours[end1].append(Neighbour(end2, spring_id))
        self.neighbours[end2].append(Neighbour(end1, spring_id))
        return spring_id


def point(mass: float, position: Sequence[float]) -> MaterialPoint:
    """Shorthand for a resting material point."""
    return MaterialPoint(mass, np.array(position, dtype=float))