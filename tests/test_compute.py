import numpy as np
import pytest

from mandelzoom.compute import (
    compute_escape_times,
    escape_times_vectorized,
    get_dtype,
    in_cardioid_or_bulb,
    iterate,
    iterate_point,
)
from mandelzoom.coords import ComplexPoint, PlaneRect
from mandelzoom.grid import generate_grid


CARDIOID_POINTS = [(0.0, 0.0), (-0.5, 0.0), (0.2, 0.1), (-0.1, 0.6), (0.24, 0.0)]
BULB_POINTS = [(-1.0, 0.0), (-1.2, 0.1), (-0.9, -0.15)]


@pytest.mark.parametrize("x, y", CARDIOID_POINTS + BULB_POINTS)
def test_points_inside_cardioid_or_bulb_short_circuit(x, y):
    assert in_cardioid_or_bulb(x, y)
    for cap in (1, 2, 10, 1000):
        assert iterate_point(x, y, cap) == 0


@pytest.mark.parametrize("x, y", [(2.5, 0.0), (-2.5, 0.0), (0.0, 3.0), (1.5, 1.5), (-2.1, -0.1)])
def test_points_outside_radius_two_escape_quickly(x, y):
    assert 1 <= iterate_point(x, y, 1000) <= 2


def test_known_escape_times():
    assert iterate_point(2.5, 0.0, 1000) == 1
    assert iterate_point(0.0, 0.0, 100) == 0
    assert iterate_point(1.0, 1.0, 100) == 2
    # c = 0.5: 0.5, 0.75, 1.0625, 1.6289, 3.1533 -> |z|^2 >= 4 at step 5
    assert iterate_point(0.5, 0.0, 100) == 5


def test_cap_exhaustion_returns_zero():
    # c = 0.5 escapes at step 5, so any cap up to 5 reports "never escaped"
    assert iterate_point(0.5, 0.0, 5) == 0
    assert iterate_point(0.5, 0.0, 6) == 5


def test_boundary_point_outside_shortcut_is_bounded():
    # c = -0.75 + 0.01i sits just off the cardioid/bulb junction and needs
    # roughly pi / 0.01 iterations to escape
    assert not in_cardioid_or_bulb(-0.75, 0.01)
    assert iterate_point(-0.75, 0.01, 100) == 0
    assert iterate_point(-0.75, 0.01, 10000) > 100


def test_iterate_accepts_complex_points():
    assert iterate(ComplexPoint(1.0, 1.0), 100) == 2
    assert iterate(ComplexPoint(np.longdouble(1.0), np.longdouble(1.0)), 100) == 2
    assert iterate(ComplexPoint(np.longdouble(0.0), np.longdouble(0.0)), 100) == 0


def _sample_grid():
    rect = PlaneRect(ComplexPoint(0.6, 1.2), ComplexPoint(-2.2, -1.2))
    return generate_grid(rect, 0.05)


def test_parallel_kernel_matches_scalar_iteration():
    grid = _sample_grid()
    times = compute_escape_times(grid.reals, grid.imags, 200)
    assert times.dtype == np.uint32
    for i in range(0, len(grid), 37):
        assert times[i] == iterate_point(grid.reals[i], grid.imags[i], 200)


def test_vectorized_path_matches_kernel():
    grid = _sample_grid()
    kernel = compute_escape_times(grid.reals, grid.imags, 200)
    vectorized = escape_times_vectorized(grid.reals, grid.imags, 200)
    np.testing.assert_array_equal(kernel, vectorized)


def test_extended_precision_uses_vectorized_path():
    double = _sample_grid()
    reals = double.reals.astype(np.longdouble)
    imags = double.imags.astype(np.longdouble)
    times = compute_escape_times(reals, imags, 100)
    assert times.shape == (len(double),)
    # Only orbits right at the boundary may differ from double precision
    expected = compute_escape_times(double.reals, double.imags, 100)
    assert np.mean(times == expected) > 0.99


def test_compute_escape_times_writes_into_out():
    grid = _sample_grid()
    out = np.zeros(len(grid), dtype=np.uint32)
    result = compute_escape_times(grid.reals, grid.imags, 50, out=out)
    assert result is out
    assert out.any()


def test_get_dtype():
    assert get_dtype('double') is np.float64
    assert get_dtype('extended') is np.longdouble
    with pytest.raises(ValueError):
        get_dtype('quad')
