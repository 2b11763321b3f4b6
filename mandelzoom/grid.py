"""
Sample lattice over the visible plane rectangle.

A PlotGrid stores its samples as parallel numpy arrays rather than a list
of objects. Sample i is (reals[i], imags[i]) with escape time
escape_times[i]. Samples are ordered row by row: the outer loop runs over
the real axis and the inner loop over the imaginary axis, which is also
the order they are drawn in.
"""

from collections import namedtuple

import numpy as np

from .coords import ComplexPoint


SamplePoint = namedtuple('SamplePoint', ['coord', 'escape_time'])


def axis_samples(lo, hi, step, dtype=np.float64):
    """
    Sample positions along one axis, from lo while <= hi.

    Positions are accumulated step by step in `dtype` rather than computed
    as lo + i * step, so the last sample can land slightly past `hi`.
    """
    lo, hi, step = dtype(lo), dtype(hi), dtype(step)
    values = []
    v = lo
    while v <= hi:
        values.append(v)
        v += step
    return np.array(values, dtype=dtype)


class PlotGrid:
    """
    Rectangular lattice of sample points and their escape times.

    Attributes:
        reals, imags: 1D coordinate arrays, one entry per sample
        escape_times: 1D uint32 array, 0 until computed
        columns: Number of samples along the real axis
        rows: Number of samples along the imaginary axis
        timed: Whether escape times have been filled in
    """

    def __init__(self, real_axis, imag_axis):
        self.columns = len(real_axis)
        self.rows = len(imag_axis)
        self.reals = np.repeat(real_axis, self.rows)
        self.imags = np.tile(imag_axis, self.columns)
        self.escape_times = np.zeros(self.columns * self.rows, dtype=np.uint32)
        self.timed = False

    @property
    def dtype(self):
        return self.reals.dtype

    def __len__(self):
        return self.reals.shape[0]

    def __getitem__(self, i):
        return SamplePoint(ComplexPoint(self.reals[i], self.imags[i]),
                           int(self.escape_times[i]))

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]


def generate_grid(rect, resolution, dtype=np.float64):
    """
    Generate the sample lattice for a plane rectangle.

    Args:
        rect: PlaneRect to cover
        resolution: Step between samples in plane units (same on both axes)
        dtype: Coordinate dtype (numpy.float64 or numpy.longdouble)

    Returns:
        PlotGrid with all escape times set to 0
    """
    real_axis = axis_samples(rect.min.real, rect.max.real, resolution, dtype)
    imag_axis = axis_samples(rect.min.imag, rect.max.imag, resolution, dtype)
    return PlotGrid(real_axis, imag_axis)
