import numpy as np
import pytest

from fractal_painting.fractal import MAP_A, MAP_B, DragonTransform, flip_coins, koch_curve


def test_map_a_rotates_and_scales(make_settings):
    transform = DragonTransform(make_settings(angle1=np.pi / 2, scale=0.5))

    assert transform.step((2.0, 0.0), MAP_A) == pytest.approx((0.0, 1.0))


def test_map_b_adds_scaled_shift(make_settings):
    transform = DragonTransform(make_settings(angle2=np.pi, shift_x=0.5, shift_y=-0.25, scale=0.5), shift_factor=10)

    assert transform.step((2.0, 4.0), MAP_B) == pytest.approx((-1.0 + 5.0, -2.0 - 2.5))
    assert transform.step((0.0, 0.0), True) == pytest.approx((5.0, -2.5))


def test_trace_matches_repeated_steps(make_settings):
    settings = make_settings(angle1=0.6, angle2=2.2, shift_x=0.8, shift_y=0.3, scale=0.7)
    transform = DragonTransform(settings, shift_factor=40)
    flips = flip_coins(np.random.default_rng(11), 500)

    points = transform.trace(flips)

    p = (0.0, 0.0)
    expected = []
    for flip in flips:
        expected.append(p)
        p = transform.step(p, flip)
    assert points.shape == (500, 2)
    assert np.allclose(points, expected)


def test_trace_of_no_flips_is_empty(make_settings):
    assert DragonTransform(make_settings()).trace(np.array([], dtype=np.int8)).shape == (0, 2)


def test_contracting_orbit_stays_bounded(make_settings):
    size = 100
    settings = make_settings(angle1=0.8, angle2=2.4, shift_x=1.0, shift_y=1.0, scale=0.5)
    transform = DragonTransform(settings, shift_factor=size * 0.8)

    points = transform.trace(flip_coins(np.random.default_rng(0), 10_000))

    assert np.isfinite(points).all()
    assert np.linalg.norm(points, axis=1).max() < 3 * size


def test_flip_coins_is_fair_and_seeded():
    flips = flip_coins(np.random.default_rng(3), 20_000)

    assert set(np.unique(flips)) == {MAP_A, MAP_B}
    assert 0.47 < flips.mean() < 0.53
    assert np.array_equal(flips, flip_coins(np.random.default_rng(3), 20_000))
    assert len(flip_coins(np.random.default_rng(3), -5)) == 0


def test_koch_single_bump():
    vertices = koch_curve((0, 0), (81, 0), min_segment=10)

    assert vertices.shape == (5, 2)
    assert vertices[1] == pytest.approx((27, 0))
    assert vertices[2] == pytest.approx((40.5, -27 * np.sqrt(3) / 2))
    assert vertices[3] == pytest.approx((54, 0))
    assert vertices[4] == pytest.approx((81, 0))


def test_koch_subdivides_until_min_segment():
    vertices = koch_curve((0, 0), (81, 0), min_segment=2)

    assert len(vertices) == 4 ** 3 + 1
    segments = np.linalg.norm(np.diff(vertices, axis=0), axis=1)
    assert segments == pytest.approx(np.full(64, 3.0))


def test_koch_short_segment_is_left_alone():
    vertices = koch_curve((5, 5), (6, 5), min_segment=2)

    assert vertices.tolist() == [[5.0, 5.0], [6.0, 5.0]]
