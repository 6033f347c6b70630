# jellycube

A mass-spring simulation of a soft "jelly" cube. The cube is a 4×4×4 lattice
of material points. Springs join each point to its neighbours along the cell
edges and the face diagonals. Zero-length springs tie the eight corners of the
lattice to the eight corners of a rigid steering cube. The steering cube's
points have infinite mass, so the simulation never moves them. You move the
steering cube by setting its position and rotation. Points that leave the
cubic simulation area bounce off its walls, and each bounce damps their
velocity.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

`jellycube.controller.MainController` builds the whole scene. You can step it
by hand or run it on a background timer.

```python
import random
from jellycube.controller import MainController

controller = MainController()

# Move the steering cube and push the soft body
controller.set_steering_cube_position([0.3, 0.0, 0.0])
controller.set_steering_cube_rotation([1.0, 0.0, 0.0, 0.0])   # quaternion (w, x, y, z)
controller.disturb_soft_body(5.0, random.Random(0))

# Advance one step by hand
controller.update_simulation()

# Or run in real time on a background thread
with controller:
    controller.start_simulation()
    ...
# leaving the block stops a running simulation

positions = controller.bezier_positions()   # array of shape (4, 4, 4, 3)
```

Tuning:

```python
from jellycube.environment import SimulationEnvironment

controller.set_bezier_springs_coefficient(10.0)
controller.set_steering_springs_coefficient(30.0)
controller.set_material_point_mass(2.0)
controller.set_simulation_environment(
    SimulationEnvironment(delta_t=0.005, simulation_area_edge_length=3.0)
)

controller.bezier_springs_coefficient    # 10.0
controller.material_point_mass           # 2.0
controller.environment.delta_t           # 0.005
```

`SimulationEnvironment` has these defaults:

- `delta_t`: 0.01
- `simulation_area_edge_length`: 2.0
- `spring_damping`: 4.0
- `viscous_damping`: 0.4
- `collision_damping`: 0.8

The background timer calls the step once every `int(delta_t * 1000)`
milliseconds.

## Integrators

`SpringsSimulation` offers three ways to advance one time step:

- `update_euler()`: explicit Euler.
- `update_runge_kutta()`: fourth-order Runge–Kutta, computed separately for each spring pair, with viscous damping added afterwards. `update_simulation()` uses this one.
- `update_runge_kutta2()`: fourth-order Runge–Kutta over the total force on each point. The background timer uses this one.

All of them take a lock. `reading_graph()` and `writing_graph()` are context
managers that hold the same lock while you use the graph.

## Building blocks

- `jellycube.graph`: `SpringGraph`, `MaterialPoint`, `Spring` and `Neighbour`. A graph of point masses and springs, with a neighbour list for each point.
- `jellycube.simulation`: `SpringsSimulation`. The integrators listed above, plus `spring_force` and `viscous_damping_force`.
- `jellycube.box_collider`: `BoxCollider`. Reflects points off the walls of an axis-aligned cube centred at the origin.
- `jellycube.timed_loop`: `TimedLoop`. Calls a function once every period on a background thread. Usable as a context manager.
- `jellycube.model`: `Model`. A simulation paired with its timed loop.
- `jellycube.controller`: `MainController` and `SteeringCube`.
- `jellycube.geometry`: `Line` and `Plane`, with projection and intersection.
- `jellycube.grid3d`: `Grid3D`. A dense 3D container indexed by `grid[x, y, z]`.
- `jellycube.mouse_state`: `MouseState` and `MouseButton`. These track pressed buttons and cursor movement.

## What it does not do

The package has no window, no rendering and no interactive interface. It does
not draw the cube, the springs or the simulation area, and it has no camera.
It provides no command to run. Nothing in the package uses `MouseState`. The
package computes the simulation state, and you read the results through
`bezier_positions()` or through the graph.