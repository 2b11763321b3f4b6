import numpy as np
import pytest

from mandelzoom.coords import ComplexPoint, PlaneRect, Viewport, determine_resolution
from mandelzoom.grid import SamplePoint, axis_samples, generate_grid


RECT = PlaneRect(ComplexPoint(1.0, 1.0), ComplexPoint(-2.0, -1.0))


@pytest.fixture
def grid():
    resolution = determine_resolution(RECT, Viewport(100, 100))
    return generate_grid(RECT, resolution)


def test_first_sample_is_lower_left_corner(grid):
    first = grid[0]
    assert first.coord.real == pytest.approx(-2.0)
    assert first.coord.imag == pytest.approx(-1.0)
    assert first.escape_time == 0


def test_axis_counts(grid):
    # floor(3 / 0.02) + 1 = 151 and floor(2 / 0.02) + 1 = 101, give or take
    # one sample of floating-point step drift
    assert abs(grid.columns - 151) <= 1
    assert abs(grid.rows - 101) <= 1
    assert len(grid) == grid.columns * grid.rows


def test_samples_are_ordered_real_major(grid):
    # Inner loop runs over the imaginary axis
    assert grid.reals[0] == grid.reals[grid.rows - 1]
    assert grid.imags[1] > grid.imags[0]
    assert grid.reals[grid.rows] > grid.reals[0]
    assert grid.imags[grid.rows] == grid.imags[0]


def test_samples_stay_near_rectangle(grid):
    step = 0.02
    assert grid.reals.min() == pytest.approx(-2.0)
    assert grid.reals.max() <= 1.0 + step
    assert grid.imags.max() <= 1.0 + step


def test_escape_times_start_at_zero(grid):
    assert grid.escape_times.dtype == np.uint32
    assert not grid.escape_times.any()
    assert not grid.timed


def test_indexing_and_iteration(grid):
    points = list(grid)
    assert len(points) == len(grid)
    assert isinstance(points[5], SamplePoint)
    assert points[5] == grid[5]


def test_axis_samples_accumulates_steps():
    values = axis_samples(0.0, 1.0, 0.25)
    assert values.tolist() == [0.0, 0.25, 0.5, 0.75, 1.0]


def test_extended_precision_grid():
    grid = generate_grid(RECT, 0.25, np.longdouble)
    assert grid.dtype == np.longdouble
    assert grid.columns == 13
    assert grid.rows == 9
