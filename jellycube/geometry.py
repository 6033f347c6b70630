"""Lines and planes in 3D space."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np


def _unit(vector: np.ndarray, what: str) -> np.ndarray:
    norm = float(np.linalg.norm(vector))
    if norm == 0.0:
        raise ValueError(f"{what} must not be a zero vector")
    return vector / norm


class Line:
    """A line given by a point on it and a unit direction."""

    def __init__(self, point_on_line: Sequence[float], direction: Sequence[float]) -> None:
        self.point = np.array(point_on_line, dtype=float)
        self.direction = _unit(np.array(direction, dtype=float), "line direction")

    @classmethod
    def from_two_points(cls, point1: Sequence[float], point2: Sequence[float]) -> Line:
        start = np.array(point1, dtype=float)
        return cls(start, np.array(point2, dtype=float) - start)

    def point_at(self, t: float) -> np.ndarray:
        """Return the point at parameter ``t`` along the line."""
        return t * self.direction + self.point

    def project_point(self, point: Sequence[float]) -> np.ndarray:
        """Return the orthogonal projection of ``point`` onto the line."""
        offset = np.array(point, dtype=float) - self.point
        return self.point_at(float(np.dot(offset, self.direction)))


class Plane:
    """A plane given by a point on it and a unit normal."""

    def __init__(self, point_on_plane: Sequence[float], normal: Sequence[float]) -> None:
        self.point = np.array(point_on_plane, dtype=float)
        self.normal = _unit(np.array(normal, dtype=float), "plane normal")

    def intersect(self, line: Line) -> np.ndarray | None:
        """Return where ``line`` meets the plane, or None if they are parallel."""
        along = float(np.dot(self.normal, line.direction))
        if along == 0.0:
            return None
        t = (float(np.dot(self.normal, self.point)) - float(np.dot(self.normal, line.point))) / along
        return line.point_at(t)