# roverkit

Building blocks for a small differential-drive rover working in a planar arena.
Everything is a plain library: times are floating-point seconds, positions are
metres, angles are radians.

## What is in the package

- `roverkit.angles` — `normalize_angle` (wraps into (-pi, pi]),
  `shortest_angular_distance`, `yaw_from_quaternion`, `quaternion_from_yaw`
  and `state_from_pose`, which builds an `[x, y, yaw]` numpy array from a
  position and an orientation quaternion.
- `roverkit.costmap` — `Costmap`, a rectangular grid of 8-bit costs with
  `world_to_map_no_bounds`, `in_bounds`, `cost`, `set_cost` and
  `convex_fill_cells`; `polygon_for_circle` for circular footprints;
  `point_key` for quantizing points; and the cost constants `FREE_SPACE`,
  `LETHAL_OBSTACLE` and `NO_INFORMATION`.
- `roverkit.astar` — `AStarPathPlanner` with `PlannerParameters`
  (`goal_threshold`, `grid_size`, `collision_radius`). `plan(start, goal)`
  searches an 8-connected grid of positions, rejecting any position whose
  circular footprint touches a lethal cell, and `expanded()` returns the
  points expanded by the last search.
- `roverkit.particle` — `Particle`, a pose hypothesis (`x`, `y`, `yaw`,
  `x_vel`, `yaw_vel`, `weight`) with `weighted()` and field-wise `+`.
- `roverkit.random_helpers` — seeded `UniformRandomGenerator` (samples in
  [0, 1)) and `GaussianRandomGenerator` (standard normal); the default seed is
  `RANDOM_SEED = 100`.
- `roverkit.motion_model` — `MotionModel` with `MotionSigmas`: a noisy
  unicycle model that moves particles in place from linear and angular
  velocity commands, and `is_enabled` to tell whether a command arrived in the
  last 0.25 s.
- `roverkit.trajectory` — `interpolate_state` along an evenly spaced
  `[x, y, yaw]` trajectory (blending yaw along the shorter arc across the ±pi
  seam) and `clamp_command`.
- `roverkit.lqr` — `LqrController`, an iterative LQR tracker for a unicycle
  robot over a fixed prediction horizon.
- `roverkit.mapping` — `to_log_odds`, `from_log_odds` and `OccupancyMap`, a
  log-odds grid centred on the world origin with `is_location_in_bounds`,
  `index_from_cell` and `occupancy_values` (percentages 0..100).
- `roverkit.obstacle_projection` — `map_camera_properties` for a virtual
  top-down camera (`MapCamera`), `ground_plane_homography` from the robot's
  camera to that camera, and `map_value_from_image_value` (0 → 0, 255 → 100,
  anything else → -1).

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Example: planning a path

```python
from roverkit.costmap import Costmap, LETHAL_OBSTACLE
from roverkit.astar import AStarPathPlanner, PlannerParameters

costmap = Costmap(size_x=100, size_y=100, resolution=0.01, origin_x=-0.5, origin_y=-0.5)
costmap.set_cost(90, 90, LETHAL_OBSTACLE)

planner = AStarPathPlanner(costmap, PlannerParameters())
path = planner.plan((0.0, 0.0), (0.1, 0.05))
print(len(path), "points;", len(planner.expanded()), "states expanded")
```

`plan` returns an empty list (and logs an error) when the start or goal is in
collision or the search space is exhausted without reaching the goal. Cells
outside the costmap are treated as free.

## Example: propagating particles

```python
from roverkit.motion_model import MotionModel, MotionSigmas
from roverkit.particle import Particle
from roverkit.random_helpers import GaussianRandomGenerator

model = MotionModel(MotionSigmas(), GaussianRandomGenerator(100))
particles = [Particle(x=0.1 * i) for i in range(5)]

model.update_particles(particles, linear_x=0.2, angular_z=0.0, current_time=0.5)
print(model.is_enabled(0.6))  # True: the last command was 0.1 s ago
```

The step length is the time since the previous command; a gap longer than
one second is replaced by a 0.01 s step. All noise comes from the generator
you pass in, so runs are reproducible.

## Example: tracking a trajectory with LQR

```python
import numpy as np
from roverkit.lqr import LqrController

controller = LqrController(
    dt=0.1, horizon=1.0, iterations=1, time_between_states=0.1,
    q=np.eye(3), qf=np.eye(3), r=np.eye(2),
)
controller.set_plan([(0.0, 0.0, 0.0), (0.1, 0.0, 0.0), (0.2, 0.0, 0.0)], start_time=0.0)
linear_x, angular_z = controller.compute_velocity_command((0.0, 0.0, 0.0), stamp=0.0)
```

Both commands are clamped to ±2.0 (`roverkit.lqr.COMMAND_LIMIT`). Asking for
a command before `set_plan` raises `RuntimeError`.

## Example: an occupancy grid

```python
from roverkit.mapping import OccupancyMap, to_log_odds

grid = OccupancyMap(width=1.2192, height=0.762, resolution=0.01)
grid.data[grid.index_from_cell(10, 5)] += to_log_odds(0.7)
print(grid.occupancy_values()[grid.index_from_cell(10, 5)])  # 70
```

## What the package does not do

- It has no command-line program, and it does not subscribe to or publish
  messages: callers feed in commands, times and poses and read results back.
- There is no localization filter: `Particle` and `MotionModel` propagate
  hypotheses, but nothing here weighs particles against sensor measurements,
  resamples them or computes a pose estimate and covariance.
- The A\* planner returns bare `(x, y)` points; it does not attach headings or
  turn them into oriented poses.
- `OccupancyMap` holds log-odds values but does not update them from
  observations; callers change `data` themselves.
- The obstacle projection computes the homography and the occupancy value
  mapping, but does not read images, threshold colours or warp images.