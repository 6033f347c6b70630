import time

import numpy as np
import pytest

from jellycube.environment import SimulationEnvironment
from jellycube.graph import SpringGraph, point
from jellycube.model import Model


def stretched_graph():
    graph = SpringGraph(2, 1)
    graph.add_material_point(point(1.0, (-0.4, 0.0, 0.0)))
    graph.add_material_point(point(1.0, (0.4, 0.0, 0.0)))
    graph.add_spring(0.2, 5.0, 0, 1)
    return graph


def separation(model):
    with model.reading_graph() as graph:
        a, b = graph.material_points
        return float(np.linalg.norm(a.position - b.position))


def test_environment_matches_given():
    env = SimulationEnvironment(spring_damping=2.0)
    model = Model(stretched_graph(), env)
    assert model.environment() == env


def test_set_environment_replaces_environment():
    model = Model(stretched_graph(), SimulationEnvironment())
    new_env = SimulationEnvironment(delta_t=0.02, viscous_damping=0.1)
    model.set_environment(new_env)
    assert model.environment() == new_env


def test_update_simulation_contracts_spring():
    model = Model(stretched_graph(), SimulationEnvironment())
    start = separation(model)
    for _ in range(3):
        model.update_simulation()
    assert separation(model) < start


def test_writing_graph_changes_are_kept():
    model = Model(stretched_graph(), SimulationEnvironment())
    with model.writing_graph() as graph:
        graph.springs[0].spring_coef = 11.0
    with model.reading_graph() as graph:
        assert graph.springs[0].spring_coef == 11.0


def test_running_simulation_moves_points():
    with Model(stretched_graph(), SimulationEnvironment(delta_t=0.001)) as model:
        start = separation(model)
        model.start_simulation()
        assert model.is_simulation_running() is True
        deadline = time.monotonic() + 5.0
        while separation(model) == start and time.monotonic() < deadline:
            time.sleep(0.01)
        model.end_simulation()
        assert model.is_simulation_running() is False
        assert separation(model) < start


def test_end_without_start_raises():
    model = Model(stretched_graph(), SimulationEnvironment())
    with pytest.raises(RuntimeError):
        model.end_simulation()


def test_start_twice_raises():
    with Model(stretched_graph(), SimulationEnvironment()) as model:
        model.start_simulation()
        with pytest.raises(RuntimeError):
            model.start_simulation()
    assert model.is_simulation_running() is False