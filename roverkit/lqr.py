"""Iterative LQR trajectory-tracking controller for a unicycle robot."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np

from roverkit.angles import shortest_angular_distance
from roverkit.trajectory import clamp_command, interpolate_state

logger = logging.getLogger(__name__)

COMMAND_LIMIT = 2.0


def _square(matrix, size: int, name: str) -> np.ndarray:
    if matrix is None:
        return np.eye(size)
    result = np.array(matrix, dtype=float)
    if result.shape != (size, size):
        raise ValueError(f"{name} must be a {size}x{size} matrix")
    return result


class LqrController:
    """Tracks a planned trajectory by relinearizing the dynamics along a horizon."""

    def __init__(
        self,
        dt: float = 0.1,
        horizon: float = 1.0,
        iterations: int = 1,
        time_between_states: float = 0.1,
        q=None,
        qf=None,
        r=None,
    ) -> None:
        if dt <= 0:
            raise ValueError("dt must be positive")
        if horizon <= 0:
            raise ValueError("horizon must be positive")
        if iterations < 1:
            raise ValueError("iterations must be at least 1")
        if time_between_states <= 0:
            raise ValueError("time_between_states must be positive")
        steps = int(math.floor(horizon / dt + 1e-9))
        if steps < 1:
            raise ValueError("horizon must cover at least one time step")

        self.dt = float(dt)
        self.horizon = float(horizon)
        self.iterations = int(iterations)
        self.time_between_states = float(time_between_states)
        self.q = _square(q, 3, "q")
        self.qf = _square(qf, 3, "qf")
        self.r = _square(r, 2, "r")

        self._steps = steps
        self._states = [np.zeros(3) for _ in range(steps)]
        self._controls = [np.ones(2) for _ in range(steps)]
        self._s = [self.qf.copy() for _ in range(steps)]
        self._trajectory: list[np.ndarray] = []
        self._path_start_time = 0.0

    @property
    def steps(self) -> int:
        """Number of time steps in the prediction horizon."""
        return self._steps

    @property
    def predicted_states(self) -> list[np.ndarray]:
        """States predicted over the horizon by the latest pass."""
        return [state.copy() for state in self._states]

    @property
    def controls(self) -> list[np.ndarray]:
        """Controls planned over the horizon by the latest pass."""
        return [control.copy() for control in self._controls]

    @property
    def riccati_matrices(self) -> list[np.ndarray]:
        """Cost-to-go matrices from the latest backward pass."""
        return [s.copy() for s in self._s]

    def set_plan(self, states: Sequence[Sequence[float]], start_time: float) -> None:
        """Adopt a trajectory of ``[x, y, yaw]`` states starting at ``start_time``."""
        trajectory = [np.asarray(state, dtype=float) for state in states]
        if not trajectory:
            raise ValueError("plan must hold at least one state")
        if any(state.shape != (3,) for state in trajectory):
            raise ValueError("each plan state must be [x, y, yaw]")
        self._trajectory = trajectory
        self._path_start_time = float(start_time)
        self.reset_states(np.zeros(3))

    def reset_states(self, init_state) -> None:
        """Restart the horizon from ``init_state`` with unit controls."""
        self._states[0] = np.asarray(init_state, dtype=float).copy()
        self._controls = [np.ones(2) for _ in range(self._steps)]
        for t in range(1, self._steps):
            self._states[t] = self.compute_next_state(self._states[t - 1], self._controls[t])

    def compute_a_matrix(self, x, u) -> np.ndarray:
        """Jacobian of the dynamics with respect to the state."""
        a = np.eye(3)
        a[0, 2] = -u[0] * math.sin(x[2]) * self.dt
        a[1, 2] = u[0] * math.cos(x[2]) * self.dt
        return a

    def compute_b_matrix(self, x) -> np.ndarray:
        """Jacobian of the dynamics with respect to the control."""
        b = np.zeros((3, 2))
        b[0, 0] = math.cos(x[2]) * self.dt
        b[1, 0] = math.sin(x[2]) * self.dt
        b[2, 1] = self.dt
        return b

    def compute_next_state(self, x, u) -> np.ndarray:
        """State one step later under control ``[linear, angular]``."""
        return np.array(
            [
                x[0] + u[0] * math.cos(x[2]) * self.dt,
                x[1] + u[0] * math.sin(x[2]) * self.dt,
                x[2] + u[1] * self.dt,
            ]
        )

    def _gain(self, a: np.ndarray, b: np.ndarray, s: np.ndarray) -> np.ndarray:
        return np.linalg.inv(self.r + b.T @ s @ b) @ b.T @ s @ a

    def compute_riccati(self) -> None:
        """Backward pass of the Riccati recursion along the current horizon."""
        self._s[-1] = self.qf.copy()
        for t in range(self._steps - 2, -1, -1):
            last_s = self._s[t + 1]
            a = self.compute_a_matrix(self._states[t], self._controls[t])
            b = self.compute_b_matrix(self._states[t])
            k = self._gain(a, b, last_s)
            self._s[t] = a.T @ last_s @ a - (a.T @ last_s @ b) @ k + self.q

    def compute_forward_pass(self, init_x, current_time: float) -> None:
        """Roll the feedback policy forward from ``init_x``, updating states and controls."""
        if not self._trajectory:
            raise RuntimeError("no plan has been set")
        cur_x = np.asarray(init_x, dtype=float).copy()
        for t in range(self._steps):
            a = self.compute_a_matrix(cur_x, self._controls[t])
            b = self.compute_b_matrix(self._states[t])
            k = self._gain(a, b, self._s[t])

            target_x = interpolate_state(
                self._trajectory,
                self._path_start_time,
                self.time_between_states,
                current_time + self.dt * t,
            )
            state_error = cur_x - target_x
            state_error[2] = shortest_angular_distance(target_x[2], cur_x[2])

            u_star = -k @ state_error
            self._states[t] = cur_x
            self._controls[t] = u_star
            cur_x = self.compute_next_state(cur_x, u_star)

    def compute_velocity_command(self, state, stamp: float) -> tuple[float, float]:
        """Linear and angular velocity command for the robot at ``state`` and time ``stamp``."""
        if not self._trajectory:
            raise RuntimeError("no plan has been set")
        state = np.asarray(state, dtype=float)
        for _ in range(self.iterations):
            self.compute_riccati()
            self.compute_forward_pass(state, stamp)

        first = self._controls[0]
        if np.isnan(first).any():
            logger.info("fixing nan control: %s", first)
        return (
            clamp_command(float(first[0]), COMMAND_LIMIT),
            clamp_command(float(first[1]), COMMAND_LIMIT),
        )