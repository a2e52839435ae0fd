"""Time-indexed reference trajectories and command limits for path-tracking controllers."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from roverkit.angles import normalize_angle, shortest_angular_distance

_HALF_PI = math.pi / 2


def interpolate_state(
    trajectory: Sequence[Sequence[float]],
    path_start_time: float,
    time_between_states: float,
    time: float,
) -> np.ndarray:
    """Reference state ``[x, y, yaw]`` at ``time`` along an evenly spaced trajectory.

    Times before the start give the first state and times past the end give
    the last. Between two samples the state is blended linearly; when the
    heading crosses the +/-pi seam the yaw is blended along the shorter arc.
    """
    if not trajectory:
        raise ValueError("trajectory must hold at least one state")
    if time_between_states <= 0:
        raise ValueError("time_between_states must be positive")

    states = [np.asarray(state, dtype=float) for state in trajectory]
    if time > path_start_time + time_between_states * len(states):
        return states[-1].copy()
    if time < path_start_time:
        return states[0].copy()

    rel_time = time - path_start_time
    lower_idx = math.floor(rel_time / time_between_states)
    upper_idx = lower_idx + 1
    if upper_idx >= len(states):
        return states[-1].copy()

    alpha = (rel_time - lower_idx * time_between_states) / time_between_states
    lower = states[lower_idx]
    upper = states[upper_idx]
    interpolated = (1 - alpha) * lower + alpha * upper

    lower_yaw, upper_yaw = lower[2], upper[2]
    opposite_signs = (lower_yaw > 0 and upper_yaw < 0) or (lower_yaw < 0 and upper_yaw > 0)
    if opposite_signs and abs(lower_yaw) > _HALF_PI and abs(upper_yaw) > _HALF_PI:
        angle_diff = shortest_angular_distance(lower_yaw, upper_yaw)
        interpolated[2] = normalize_angle(lower_yaw + alpha * angle_diff)

    return interpolated


def clamp_command(value: float, limit: float) -> float:
    """Limit ``value`` to ``[-limit, limit]``; NaN passes through unchanged."""
    if limit < 0:
        raise ValueError("limit must not be negative")
    if value < -limit:
        return -limit
    if value > limit:
        return limit
    return value