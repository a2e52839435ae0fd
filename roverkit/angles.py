"""Planar angle helpers and pose-to-state conversion."""

from __future__ import annotations

import math

import numpy as np

_TWO_PI = 2.0 * math.pi


def normalize_angle(angle: float) -> float:
    """Wrap an angle into the interval (-pi, pi]."""
    wrapped = math.fmod(math.fmod(angle, _TWO_PI) + _TWO_PI, _TWO_PI)
    if wrapped > math.pi:
        wrapped -= _TWO_PI
    return wrapped


def shortest_angular_distance(from_angle: float, to_angle: float) -> float:
    """Signed shortest rotation that takes ``from_angle`` to ``to_angle``."""
    return normalize_angle(to_angle - from_angle)


def _rotation_matrix(x: float, y: float, z: float, w: float) -> list[list[float]]:
    tx, ty, tz = 2.0 * x, 2.0 * y, 2.0 * z
    twx, twy, twz = tx * w, ty * w, tz * w
    txx, txy, txz = tx * x, ty * x, tz * x
    tyy, tyz, tzz = ty * y, tz * y, tz * z
    return [
        [1.0 - (tyy + tzz), txy - twz, txz + twy],
        [txy + twz, 1.0 - (txx + tzz), tyz - twx],
        [txz - twy, tyz + twx, 1.0 - (txx + tyy)],
    ]


def yaw_from_quaternion(x: float, y: float, z: float, w: float) -> float:
    """Third angle of the X-Y-Z Euler decomposition of a quaternion's rotation.

    The decomposition keeps the first (roll) angle in [0, pi], matching the
    convention used when reading robot headings from pose messages.
    """
    m = _rotation_matrix(x, y, z, w)
    # Axis order 0, 1, 2 is an even permutation: i=0, j=1, k=2.
    roll = math.atan2(m[1][2], m[2][2])
    c2 = math.hypot(m[0][0], m[0][1])
    if roll > 0:
        roll -= math.pi
        _pitch = math.atan2(-m[0][2], -c2)
    else:
        _pitch = math.atan2(-m[0][2], c2)
    s1, c1 = math.sin(roll), math.cos(roll)
    third = math.atan2(s1 * m[2][0] - c1 * m[1][0], c1 * m[1][1] - s1 * m[2][1])
    return -third


def quaternion_from_yaw(yaw: float) -> tuple[float, float, float, float]:
    """Quaternion ``(x, y, z, w)`` for a rotation of ``yaw`` about the Z axis."""
    half = yaw / 2.0
    return (0.0, 0.0, math.sin(half), math.cos(half))


def state_from_pose(
    x: float, y: float, qx: float, qy: float, qz: float, qw: float
) -> np.ndarray:
    """Planar state vector ``[x, y, yaw]`` for a position and orientation."""
    return np.array([x, y, yaw_from_quaternion(qx, qy, qz, qw)], dtype=float)