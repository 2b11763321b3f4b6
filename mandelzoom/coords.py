"""
Plane and screen coordinate types for the Mandelbrot plot.

The plot lives in the complex plane (real axis to the right, imaginary
axis up) while the window has its origin in the top-left corner with
y growing downwards. CoordinateMapper converts between the two for a
given plane rectangle and viewport size.

All mapping helpers accept either Python scalars or numpy arrays, so the
draw phase can convert a whole grid of samples in one call.
"""

from collections import namedtuple

import numpy as np


ComplexPoint = namedtuple('ComplexPoint', ['real', 'imag'])
PixelPoint = namedtuple('PixelPoint', ['x', 'y'])
Viewport = namedtuple('Viewport', ['width', 'height'])


class PlaneRect(namedtuple('PlaneRect', ['max', 'min'])):
    """
    Visible bounding rectangle of the complex plane.

    `max` holds the largest real and imaginary parts, `min` the smallest.
    Use from_corners() to build one from two arbitrary corner points.
    """

    __slots__ = ()

    @classmethod
    def from_corners(cls, first, second):
        """
        Build a rectangle from two corners given in any order.

        Args:
            first, second: ComplexPoint corners (e.g. the two zoom clicks)

        Returns:
            PlaneRect with componentwise max/min taken
        """
        return cls(
            ComplexPoint(max(first.real, second.real), max(first.imag, second.imag)),
            ComplexPoint(min(first.real, second.real), min(first.imag, second.imag)),
        )

    @property
    def real_span(self):
        return self.max.real - self.min.real

    @property
    def imag_span(self):
        return self.max.imag - self.min.imag

    def is_degenerate(self):
        """True when the rectangle has zero extent along either axis."""
        return self.real_span <= 0 or self.imag_span <= 0


def determine_resolution(rect, viewport):
    """
    Plane units per pixel for drawing `rect` into `viewport`.

    The finer of the two axis scales wins, so the same step is used on
    both axes.
    """
    return min(rect.real_span / viewport.width,
               rect.imag_span / viewport.height)


class CoordinateMapper:
    """
    Affine transform between plane coordinates and screen pixels.

    The imaginary axis is flipped: increasing screen y means a decreasing
    imaginary part. The rectangle must have non-zero extent.
    """

    def __init__(self, rect, viewport):
        self.rect = rect
        self.viewport = viewport

    def x_to_screen(self, x):
        rect = self.rect
        return self.viewport.width * (x - rect.min.real) / (rect.max.real - rect.min.real)

    def y_to_screen(self, y):
        rect = self.rect
        return self.viewport.height * (rect.max.imag - y) / (rect.max.imag - rect.min.imag)

    def screen_to_x(self, sx):
        rect = self.rect
        return rect.min.real + sx * (rect.max.real - rect.min.real) / self.viewport.width

    def screen_to_y(self, sy):
        rect = self.rect
        return rect.max.imag - sy * (rect.max.imag - rect.min.imag) / self.viewport.height

    def plane_to_screen(self, point):
        """
        Map a plane point to (unrounded) screen coordinates.

        Truncation to integer pixels is left to the caller so that
        plane -> screen -> plane round trips stay exact up to rounding.
        """
        return PixelPoint(self.x_to_screen(point.real), self.y_to_screen(point.imag))

    def screen_to_plane(self, pixel):
        """Map a screen position (e.g. a mouse click) to a plane point."""
        return ComplexPoint(self.screen_to_x(pixel[0]), self.screen_to_y(pixel[1]))

    def plane_to_pixels(self, reals, imags):
        """Map coordinate arrays to integer pixel indices (truncated)."""
        xs = np.asarray(self.x_to_screen(reals)).astype(np.int64)
        ys = np.asarray(self.y_to_screen(imags)).astype(np.int64)
        return xs, ys
