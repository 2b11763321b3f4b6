import numpy as np
import pytest

from mandelzoom.controller import PlotController
from mandelzoom.coords import ComplexPoint, PlaneRect, Viewport
from mandelzoom.display import Canvas


class RecordingCanvas(Canvas):
    """Canvas that records draw calls instead of showing them."""

    def __init__(self):
        self.pixels = {}
        self.rects = []
        self.clears = 0
        self.presents = 0
        self.pixel_calls = 0

    def clear(self):
        self.clears += 1
        self.pixels.clear()

    def draw_pixel(self, x, y, color):
        self.pixel_calls += 1
        self.pixels[(x, y)] = color

    def draw_rect(self, x, y, width, height, color):
        self.rects.append((x, y, width, height, color))

    def present(self):
        self.presents += 1


class ScriptedInput:
    """Input source replaying one batch of events per poll."""

    def __init__(self, batches):
        self.batches = list(batches)
        self.polls = 0

    def poll_events(self):
        self.polls += 1
        if self.batches:
            return self.batches.pop(0)
        return []

    def cursor_position(self):
        return (0, 0)


DEFAULT_RECT = PlaneRect(ComplexPoint(1.0, 1.0), ComplexPoint(-2.0, -1.0))


@pytest.fixture
def canvas():
    return RecordingCanvas()


@pytest.fixture
def make_controller(canvas):
    def make(rect=DEFAULT_RECT, viewport=Viewport(30, 20), escape_limit=50, **kwargs):
        return PlotController(canvas, rect, viewport, escape_limit, **kwargs)
    return make


@pytest.fixture
def controller(make_controller):
    return make_controller()
