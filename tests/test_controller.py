import math
import random
from itertools import product

import numpy as np
import pytest

from jellycube.controller import MainController, SteeringCube
from jellycube.environment import SimulationEnvironment


@pytest.fixture
def controller():
    with MainController() as ctrl:
        yield ctrl


def _steering_positions(ctrl):
    with ctrl.model.reading_graph() as graph:
        return np.array(
            [graph.material_points[ctrl.steering_points_ids[k]].position
             for k in product(range(2), repeat=3)]
        )


def test_corner_points_positions(controller):
    positions = controller.bezier_positions()
    assert positions.shape == (4, 4, 4, 3)
    assert np.allclose(positions[0, 0, 0], [-0.1, -0.1, -0.1])
    assert np.allclose(positions[3, 3, 3], [0.1, 0.1, 0.1])


def test_bezier_springs_start_at_rest(controller):
    with controller.model.reading_graph() as graph:
        for spring_id in controller.bezier_springs:
            spring = graph.springs[spring_id]
            p1 = graph.material_points[spring.anchor_point1].position
            p2 = graph.material_points[spring.anchor_point2].position
            assert np.linalg.norm(p1 - p2) == pytest.approx(spring.rest_length)
            assert spring.spring_coef == MainController.INITIAL_BEZIER_SPRINGS_COEF


def test_bezier_springs_are_unique(controller):
    with controller.model.reading_graph() as graph:
        pairs = {
            frozenset((graph.springs[s].anchor_point1, graph.springs[s].anchor_point2))
            for s in controller.bezier_springs
        }
    assert len(pairs) == len(controller.bezier_springs)


def test_steering_springs_tie_corners(controller):
    assert len(controller.steering_springs) == 8
    with controller.model.reading_graph() as graph:
        for spring_id in controller.steering_springs:
            spring = graph.springs[spring_id]
            assert spring.rest_length == 0.0
            steering = graph.material_points[spring.anchor_point1]
            corner = graph.material_points[spring.anchor_point2]
            assert steering.mass == math.inf
            assert np.allclose(steering.position, corner.position)


def test_steering_cube_position_moves_anchors(controller):
    before = _steering_positions(controller)
    controller.set_steering_cube_position((0.5, -0.25, 1.0))
    after = _steering_positions(controller)
    assert np.allclose(after - before, [0.5, -0.25, 1.0])


def test_steering_rotation_keeps_distance_from_center(controller):
    half = math.sqrt(0.5)
    controller.set_steering_cube_rotation((half, 0.0, 0.0, half))
    distances = np.linalg.norm(_steering_positions(controller), axis=1)
    expected = MainController.STEERING_CUBE_EDGE_LEN / 2 * math.sqrt(3)
    assert np.allclose(distances, expected)


def test_steering_rotation_rejects_bad_shape(controller):
    with pytest.raises(ValueError):
        controller.set_steering_cube_rotation((1.0, 0.0, 0.0))


def test_steering_cube_rotate_half_turn():
    cube = SteeringCube(1.0)
    cube.rotation = np.array([0.0, 0.0, 0.0, 1.0])
    assert np.allclose(cube.rotate((1.0, 0.0, 0.0)), [-1.0, 0.0, 0.0])
    cube.rotation = np.array([1.0, 0.0, 0.0, 0.0])
    assert np.allclose(cube.rotate((1.0, 2.0, 3.0)), [1.0, 2.0, 3.0])


def test_disturb_zero_leaves_velocities(controller):
    controller.disturb_soft_body(0.0, random.Random(1))
    with controller.model.reading_graph() as graph:
        assert all(np.allclose(mp.velocity, 0.0) for mp in graph.material_points)


def test_disturb_bounded_and_deterministic():
    with MainController() as a, MainController() as b:
        a.disturb_soft_body(2.0, random.Random(42))
        b.disturb_soft_body(2.0, random.Random(42))
        with a.model.reading_graph() as ga, b.model.reading_graph() as gb:
            for id_ in a.bezier_points_ids:
                va = ga.material_points[id_].velocity
                assert np.linalg.norm(va) <= 2.0 + 1e-9
                assert np.allclose(va, gb.material_points[id_].velocity)
            for id_ in a.steering_points_ids:
                assert np.allclose(ga.material_points[id_].velocity, 0.0)


def test_spring_coefficients(controller):
    controller.set_bezier_springs_coefficient(12.5)
    controller.set_steering_springs_coefficient(7.0)
    assert controller.bezier_springs_coefficient == 12.5
    assert controller.steering_springs_coefficient == 7.0
    with controller.model.reading_graph() as graph:
        assert all(graph.springs[s].spring_coef == 12.5 for s in controller.bezier_springs)
        assert all(graph.springs[s].spring_coef == 7.0 for s in controller.steering_springs)


def test_material_point_mass(controller):
    controller.set_material_point_mass(3.0)
    assert controller.material_point_mass == 3.0
    with controller.model.reading_graph() as graph:
        assert all(graph.material_points[i].mass == 3.0 for i in controller.bezier_points_ids)
        assert all(graph.material_points[i].mass == math.inf for i in controller.steering_points_ids)


def test_set_environment(controller):
    env = SimulationEnvironment(delta_t=0.02, spring_damping=1.5)
    controller.set_simulation_environment(env)
    assert controller.environment == env


def test_update_at_rest_changes_nothing(controller):
    before = controller.bezier_positions()
    controller.update_simulation()
    assert np.allclose(controller.bezier_positions(), before)


def test_start_stop(controller):
    assert controller.simulation_is_running() is False
    controller.start_simulation()
    assert controller.simulation_is_running() is True
    with pytest.raises(RuntimeError):
        controller.start_simulation()
    controller.stop_simulation()
    assert controller.simulation_is_running() is False
    with pytest.raises(RuntimeError):
        controller.stop_simulation()