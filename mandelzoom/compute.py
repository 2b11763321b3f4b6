"""
Escape-time computation for the Mandelbrot set using Numba JIT compilation.

This module contains the performance-critical functions:
- iterate_point: escape time of a single point (with the main cardioid
  and period-2 bulb short-circuit)
- compute_escape_times: the same over a whole grid of points, run in
  parallel across CPU threads with prange
- escape_times_vectorized: a numpy implementation used for dtypes Numba
  cannot compile (numpy.longdouble for extended precision)

An escape time of 0 means the point never escaped: it was either shown to
be inside the set by the short-circuit test or it reached the escape limit.
"""

import numpy as np
from numba import jit, prange


# Supported plane-coordinate precisions
PRECISIONS = {
    'double': np.float64,
    'extended': np.longdouble,
}

ESCAPE_RADIUS_SQUARED = 4.0


def get_dtype(precision):
    """
    Get the numpy dtype for a precision name.

    Raises:
        ValueError if the precision is not one of PRECISIONS
    """
    try:
        return PRECISIONS[precision]
    except KeyError:
        raise ValueError(
            f"Unknown precision {precision!r}, expected one of {sorted(PRECISIONS)}"
        ) from None


@jit(nopython=True, cache=True)
def in_cardioid_or_bulb(x, y):
    """Closed-form membership test for the main cardioid and period-2 bulb."""
    xq = x - 0.25
    y2 = y * y
    q = xq * xq + y2
    if q * (q + xq) <= 0.25 * y2:
        return True
    return (x + 1.0) * (x + 1.0) + y2 <= 0.0625


@jit(nopython=True, cache=True)
def iterate_point(x, y, escape_limit):
    """
    Iterate z = z² + c for c = x + iy, starting from z = 0.

    Args:
        x, y: Real and imaginary parts of c
        escape_limit: Iteration cap

    Returns:
        The 1-based iteration count at which |z|² >= 4 first holds,
        or 0 if c is inside the cardioid/bulb or the cap was reached.
    """
    if in_cardioid_or_bulb(x, y):
        return 0

    zr, zi = 0.0, 0.0
    count = 1
    while count < escape_limit:
        zr, zi = zr * zr - zi * zi + x, 2.0 * zr * zi + y
        if zr * zr + zi * zi >= ESCAPE_RADIUS_SQUARED:
            break
        count += 1

    if count == escape_limit:
        return 0
    return count


# No fastmath here: escape counts must match iterate_point bit for bit.
@jit(nopython=True, parallel=True, cache=True)
def _escape_times_kernel(reals, imags, escape_limit, out):
    for i in prange(reals.shape[0]):
        out[i] = iterate_point(reals[i], imags[i], escape_limit)


def escape_times_vectorized(reals, imags, escape_limit):
    """
    Compute escape times with numpy array operations.

    Works for any floating dtype (including numpy.longdouble, which Numba
    does not support). Points drop out of the working set as soon as they
    escape, so each pass only touches the still-bounded orbits.
    """
    result = np.zeros(reals.shape[0], dtype=np.uint32)

    xq = reals - 0.25
    y2 = imags * imags
    q = xq * xq + y2
    inside = (q * (q + xq) <= 0.25 * y2) | ((reals + 1.0) * (reals + 1.0) + y2 <= 0.0625)

    idx = np.flatnonzero(~inside)
    cr = reals[idx]
    ci = imags[idx]
    zr = np.zeros_like(cr)
    zi = np.zeros_like(ci)

    count = 1
    while count < escape_limit and idx.size:
        zr, zi = zr * zr - zi * zi + cr, 2.0 * zr * zi + ci
        escaped = zr * zr + zi * zi >= ESCAPE_RADIUS_SQUARED
        if escaped.any():
            result[idx[escaped]] = count
            keep = ~escaped
            idx, cr, ci, zr, zi = idx[keep], cr[keep], ci[keep], zr[keep], zi[keep]
        count += 1

    return result


def compute_escape_times(reals, imags, escape_limit, out=None):
    """
    Compute escape times for every point of a grid.

    float64 input runs through the parallel Numba kernel; any other dtype
    falls back to escape_times_vectorized.

    Args:
        reals, imags: 1D arrays with the real/imaginary part of each point
        escape_limit: Iteration cap
        out: Optional uint32 array to write into (modified in place)

    Returns:
        uint32 array of escape times, one per point
    """
    if out is None:
        out = np.zeros(reals.shape[0], dtype=np.uint32)

    if reals.dtype == np.float64 and imags.dtype == np.float64:
        _escape_times_kernel(reals, imags, int(escape_limit), out)
    else:
        out[:] = escape_times_vectorized(reals, imags, int(escape_limit))
    return out


def iterate(c, escape_limit):
    """
    Escape time of a single ComplexPoint.

    Extended-precision points are evaluated with the numpy path so their
    extra bits are not lost to a float64 conversion.
    """
    if isinstance(c.real, np.longdouble) or isinstance(c.imag, np.longdouble):
        result = escape_times_vectorized(
            np.array([c.real], dtype=np.longdouble),
            np.array([c.imag], dtype=np.longdouble),
            int(escape_limit),
        )
        return int(result[0])
    return int(iterate_point(float(c.real), float(c.imag), int(escape_limit)))


def warmup_jit():
    """
    Warm up JIT compilation with small dummy arrays.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on the first real computation.
    """
    iterate_point(0.0, 0.0, 2)
    dummy = np.linspace(-2.0, 1.0, 16)
    compute_escape_times(dummy, dummy, 10)
