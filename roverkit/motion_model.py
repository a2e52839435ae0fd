"""Noisy unicycle motion model that propagates particles from velocity commands."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from roverkit.angles import normalize_angle
from roverkit.particle import Particle
from roverkit.random_helpers import GaussianRandomGenerator

# Gaps in the command stream longer than this are treated as a restart.
_MAX_COMMAND_GAP = 1.0
# Step used after a restart; a very small motion helps the filter converge.
_RESTART_DT = 0.01
# The model counts as enabled while commands arrive at least this often.
_ENABLED_WINDOW = 0.25


class NoiseSource(Protocol):
    def sample(self) -> float: ...


@dataclass(frozen=True)
class MotionSigmas:
    """Standard deviations of the per-second process noise on each state field."""

    x: float = 0.05
    y: float = 0.05
    yaw: float = 0.2
    x_vel: float = 0.05
    yaw_vel: float = 0.05


class MotionModel:
    """Moves particles according to their velocities and the latest command."""

    def __init__(
        self,
        sigmas: MotionSigmas | None = None,
        noise: NoiseSource | None = None,
    ) -> None:
        self.sigmas = sigmas if sigmas is not None else MotionSigmas()
        self._noise = noise if noise is not None else GaussianRandomGenerator()
        self._last_message_time = 0.0

    def update_particle(
        self, particle: Particle, dt: float, linear_x: float, angular_z: float
    ) -> None:
        """Advance one particle by ``dt`` seconds in place."""
        if dt < 0:
            raise ValueError("dt must not be negative")
        root_dt = math.sqrt(dt)
        sigmas = self.sigmas
        noise = self._noise

        particle.x += (
            math.cos(particle.yaw) * particle.x_vel * dt
            + sigmas.x * noise.sample() * root_dt
        )
        particle.y += (
            -math.sin(particle.yaw) * particle.x_vel * dt
            + sigmas.y * noise.sample() * root_dt
        )
        particle.yaw += particle.yaw_vel * dt + sigmas.yaw * noise.sample() * root_dt

        particle.x_vel = linear_x + sigmas.x_vel * noise.sample() * root_dt
        particle.yaw_vel = -angular_z + sigmas.yaw_vel * noise.sample() * root_dt

        particle.yaw = normalize_angle(particle.yaw)

    def update_particles(
        self,
        particles: Iterable[Particle],
        linear_x: float,
        angular_z: float,
        current_time: float,
    ) -> None:
        """Advance every particle from the previous command time to ``current_time``."""
        dt = current_time - self._last_message_time
        if dt > _MAX_COMMAND_GAP:
            dt = _RESTART_DT
        for particle in particles:
            self.update_particle(particle, dt, linear_x, angular_z)
        self._last_message_time = current_time

    def is_enabled(self, current_time: float) -> bool:
        """Whether a command arrived recently enough for the model to be trusted."""
        return current_time - self._last_message_time < _ENABLED_WINDOW