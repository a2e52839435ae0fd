import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from roverkit.angles import (
    normalize_angle,
    quaternion_from_yaw,
    shortest_angular_distance,
    state_from_pose,
    yaw_from_quaternion,
)

finite_angles = st.floats(min_value=-100.0, max_value=100.0, allow_nan=False)
inner_yaws = st.floats(min_value=-3.1, max_value=3.1, allow_nan=False)


def test_normalize_wraps_three_pi_to_pi():
    assert normalize_angle(3 * math.pi) == pytest.approx(math.pi)


def test_normalize_keeps_small_angle():
    assert normalize_angle(0.5) == pytest.approx(0.5)


def test_normalize_minus_pi_maps_to_pi():
    assert normalize_angle(-math.pi) == pytest.approx(math.pi)


@given(finite_angles)
def test_normalize_range(angle):
    result = normalize_angle(angle)
    assert -math.pi - 1e-9 < result <= math.pi + 1e-9


@given(finite_angles)
def test_normalize_preserves_direction(angle):
    result = normalize_angle(angle)
    assert math.cos(result) == pytest.approx(math.cos(angle), abs=1e-9)
    assert math.sin(result) == pytest.approx(math.sin(angle), abs=1e-9)


def test_shortest_distance_across_discontinuity():
    assert shortest_angular_distance(math.pi - 0.1, -math.pi + 0.1) == pytest.approx(0.2)


@given(inner_yaws, inner_yaws)
def test_shortest_distance_antisymmetric(a, b):
    forward = shortest_angular_distance(a, b)
    backward = shortest_angular_distance(b, a)
    if abs(abs(forward) - math.pi) > 1e-6:
        assert forward == pytest.approx(-backward, abs=1e-9)
    else:
        assert abs(backward) == pytest.approx(math.pi, abs=1e-6)


@given(inner_yaws)
def test_yaw_round_trip(yaw):
    assert yaw_from_quaternion(*quaternion_from_yaw(yaw)) == pytest.approx(yaw, abs=1e-9)


def test_identity_quaternion_has_zero_yaw():
    assert yaw_from_quaternion(0.0, 0.0, 0.0, 1.0) == pytest.approx(0.0)


def test_quaternion_from_yaw_is_unit():
    q = quaternion_from_yaw(1.234)
    assert sum(c * c for c in q) == pytest.approx(1.0)
    assert q[0] == 0.0 and q[1] == 0.0


def test_state_from_pose():
    qx, qy, qz, qw = quaternion_from_yaw(-1.0)
    state = state_from_pose(2.0, -3.0, qx, qy, qz, qw)
    assert state.shape == (3,)
    assert state[0] == pytest.approx(2.0)
    assert state[1] == pytest.approx(-3.0)
    assert state[2] == pytest.approx(-1.0)