import pytest
from hypothesis import given
from hypothesis import strategies as st

from roverkit.particle import Particle

values = st.floats(min_value=-1e3, max_value=1e3, allow_nan=False)


def test_defaults():
    p = Particle()
    assert (p.x, p.y, p.yaw, p.x_vel, p.yaw_vel, p.weight) == (0.0, 0.0, 0.0, 0.0, 0.0, 1.0)


def test_weighted_scales_fields_and_resets_weight():
    p = Particle(x=2.0, y=-4.0, yaw=1.0, x_vel=0.5, yaw_vel=-1.0, weight=0.5)
    w = p.weighted()
    assert w == Particle(x=1.0, y=-2.0, yaw=0.5, x_vel=0.25, yaw_vel=-0.5, weight=1.0)


def test_weighted_leaves_original_untouched():
    p = Particle(x=2.0, weight=0.5)
    p.weighted()
    assert p.x == 2.0
    assert p.weight == 0.5


def test_add_sums_every_field():
    a = Particle(x=1.0, y=2.0, yaw=3.0, x_vel=4.0, yaw_vel=5.0, weight=0.25)
    b = Particle(x=0.5, y=-2.0, yaw=1.0, x_vel=-4.0, yaw_vel=1.0, weight=0.75)
    assert a + b == Particle(x=1.5, y=0.0, yaw=4.0, x_vel=0.0, yaw_vel=6.0, weight=1.0)


def test_add_rejects_other_types():
    with pytest.raises(TypeError):
        Particle() + 1.0


@given(values, values, values)
def test_weighted_with_unit_weight_is_identity(x, y, yaw):
    p = Particle(x=x, y=y, yaw=yaw)
    assert p.weighted() == p


@given(values, values, values, values)
def test_add_is_commutative(x1, y1, x2, y2):
    a = Particle(x=x1, y=y1)
    b = Particle(x=x2, y=y2)
    assert a + b == b + a


def test_weighted_sum_is_weighted_mean():
    particles = [Particle(x=1.0, weight=0.25), Particle(x=3.0, weight=0.75)]
    total = sum((p.weighted() for p in particles), Particle(weight=0.0))
    assert total.x == pytest.approx(0.25 * 1.0 + 0.75 * 3.0)
    assert total.weight == pytest.approx(2.0)