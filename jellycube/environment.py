"""Parameters of the spring simulation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SimulationEnvironment:
    """Time step, box size and damping coefficients."""

    delta_t: float = 0.01
    simulation_area_edge_length: float = 2.0
    spring_damping: float = 4.0
    viscous_damping: float = 0.4
    collision_damping: float = 0.8