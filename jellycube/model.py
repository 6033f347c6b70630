"""Spring simulation driven by a background timer."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from jellycube.environment import SimulationEnvironment
from jellycube.graph import SpringGraph
from jellycube.simulation import SpringsSimulation
from jellycube.timed_loop import TimedLoop


def _period_ms(environment: SimulationEnvironment) -> int:
    return int(environment.delta_t * 1000.0)


class Model:
    """Owns the simulation and the loop that steps it in real time."""

    def __init__(self, graph: SpringGraph, environment: SimulationEnvironment) -> None:
        self._simulation = SpringsSimulation(graph, environment)
        self._timed_loop = TimedLoop(_period_ms(environment), self._simulation.update_runge_kutta2)

    def start_simulation(self) -> None:
        self._timed_loop.start()

    def end_simulation(self) -> None:
        self._timed_loop.end()

    def update_simulation(self) -> None:
        """Advance the simulation by a single step."""
        self._simulation.update_runge_kutta()

    def is_simulation_running(self) -> bool:
        return self._timed_loop.is_running()

    @contextmanager
    def reading_graph(self) -> Iterator[SpringGraph]:
        with self._simulation.reading_graph() as graph:
            yield graph

    @contextmanager
    def writing_graph(self) -> Iterator[SpringGraph]:
        with self._simulation.writing_graph() as graph:
            yield graph

    def set_environment(self, environment: SimulationEnvironment) -> None:
        self._timed_loop.change_period(_period_ms(environment))
        self._simulation.set_environment(environment)

    def environment(self) -> SimulationEnvironment:
        return self._simulation.environment

    def __enter__(self) -> Model:
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._timed_loop.is_running():
            self._timed_loop.end()