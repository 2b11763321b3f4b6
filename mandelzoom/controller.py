"""
Plot controller: the zoom state machine and recompute pipeline.

The controller owns all plot state (bounding rectangle, resolution,
escape limit, sample grid) and advances it through four phases:

    NEEDS_POINTS -> NEEDS_ESCAPE_CALC -> NEEDS_DRAW -> IDLE

Each phase handler is a no-op unless the controller is exactly in its
phase, so calling step() every frame is always safe. Completing a zoom
selection (or resetting the view) sends the controller back to
NEEDS_POINTS; a quit or escape puts it in TERMINATED for good.
"""

import enum
import logging
import time
from collections import namedtuple

import numpy as np

from .colormaps import colorize, get_palette
from .compute import compute_escape_times
from .coords import ComplexPoint, CoordinateMapper, PlaneRect, determine_resolution
from .events import (
    BUTTON_PRIMARY, BUTTON_SECONDARY, KEY_ESCAPE, KEY_RESET,
    ButtonDown, KeyDown, Quit,
)
from .grid import generate_grid


logger = logging.getLogger(__name__)


class PlotPhase(enum.Enum):
    NEEDS_POINTS = 'needs_points'
    NEEDS_ESCAPE_CALC = 'needs_escape_calc'
    NEEDS_DRAW = 'needs_draw'
    IDLE = 'idle'
    TERMINATED = 'terminated'


ZoomSelection = namedtuple('ZoomSelection', ['active', 'corner1'])
NO_SELECTION = ZoomSelection(False, None)


class PlotState:
    """Mutable plot state. Only PlotController touches it."""

    def __init__(self, rect, resolution, escape_limit):
        self.rect = rect
        self.resolution = resolution
        self.escape_limit = escape_limit
        self.grid = None
        self.phase = PlotPhase.NEEDS_POINTS
        self.selection = NO_SELECTION


class PlotController:
    """
    Drives the Mandelbrot plot through its compute/draw phases.

    Usage:
        controller = PlotController(canvas, rect, Viewport(800, 600), 1000)
        while controller.phase is not PlotPhase.TERMINATED:
            controller.step(input_source.poll_events())

    Attributes:
        canvas: Drawing target (see display.Canvas)
        viewport: Pixel size of the canvas
        palette: Palette name used by the draw phase
        dtype: Coordinate dtype (numpy.float64 or numpy.longdouble)
        max_escape_limit: Optional ceiling for the escape limit (None = unbounded)
    """

    SELECTION_COLOR = (255, 255, 255)

    def __init__(self, canvas, rect, viewport, escape_limit, palette='Classic',
                 dtype=np.float64, max_escape_limit=None, on_phase_change=None):
        """
        Initialize the controller.

        Args:
            canvas: Canvas to draw into
            rect: Initial PlaneRect
            viewport: Viewport (width, height) in pixels
            escape_limit: Initial iteration cap
            palette: Palette name (see colormaps.PALETTES)
            dtype: Coordinate dtype
            max_escape_limit: Ceiling for escape limit doubling on zoom
            on_phase_change: Optional callable receiving each new PlotPhase

        Raises:
            KeyError if the palette is unknown
            ValueError if the rectangle or viewport is empty
        """
        get_palette(palette)
        if viewport.width <= 0 or viewport.height <= 0:
            raise ValueError(f"Viewport must be positive, got {viewport}")
        if rect.is_degenerate():
            raise ValueError(f"Plot rectangle has zero extent: {rect}")

        self.canvas = canvas
        self.viewport = viewport
        self.palette = palette
        self.dtype = dtype
        self.max_escape_limit = max_escape_limit
        self.on_phase_change = on_phase_change

        self._initial_rect = self._cast_rect(rect)
        self._initial_escape_limit = escape_limit
        self._state = PlotState(
            self._initial_rect,
            determine_resolution(self._initial_rect, viewport),
            escape_limit,
        )

    # ------------------------------------------------------------------
    # Read-only views of the state
    # ------------------------------------------------------------------

    @property
    def phase(self):
        return self._state.phase

    @property
    def rect(self):
        return self._state.rect

    @property
    def resolution(self):
        return self._state.resolution

    @property
    def escape_limit(self):
        return self._state.escape_limit

    @property
    def grid(self):
        return self._state.grid

    @property
    def selection(self):
        return self._state.selection

    @property
    def terminated(self):
        return self._state.phase is PlotPhase.TERMINATED

    @property
    def mapper(self):
        """CoordinateMapper for the current rectangle and viewport."""
        return CoordinateMapper(self._state.rect, self.viewport)

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self, input_source, tick=None):
        """
        Run until terminated.

        Args:
            input_source: Object with a non-blocking poll_events() method
            tick: Optional callable invoked once per pass (e.g. a frame limiter)
        """
        while not self.terminated:
            self.step(input_source.poll_events())
            if tick is not None:
                tick()

    def step(self, events):
        """One pass of the loop: input, then computation, then output."""
        self.handle_input(events)
        self.update_plot()
        self.generate_output()

    def handle_input(self, events):
        """Process a batch of input events."""
        for event in events:
            if self.terminated:
                break
            if isinstance(event, Quit):
                self.terminate()
            elif isinstance(event, KeyDown):
                if event.key == KEY_ESCAPE:
                    self.terminate()
                elif event.key == KEY_RESET:
                    self.reset_view()
            elif isinstance(event, ButtonDown):
                self.handle_click(event.button, event.x, event.y)

    def update_plot(self):
        self.generate_points()
        self.calculate_escape_times()

    def terminate(self):
        self._state.selection = NO_SELECTION
        self._enter(PlotPhase.TERMINATED)

    # ------------------------------------------------------------------
    # Phase handlers
    # ------------------------------------------------------------------

    def generate_points(self):
        """NEEDS_POINTS -> NEEDS_ESCAPE_CALC: build a fresh sample grid."""
        state = self._state
        if state.phase is not PlotPhase.NEEDS_POINTS:
            return
        logger.debug("Generating points at resolution %g", state.resolution)
        start = time.perf_counter()
        state.grid = generate_grid(state.rect, state.resolution, self.dtype)
        self._enter(PlotPhase.NEEDS_ESCAPE_CALC)
        logger.info("Generated %d points (%d x %d) in %.2fs",
                    len(state.grid), state.grid.columns, state.grid.rows,
                    time.perf_counter() - start)

    def calculate_escape_times(self):
        """NEEDS_ESCAPE_CALC -> NEEDS_DRAW: time every point of the grid."""
        state = self._state
        if state.phase is not PlotPhase.NEEDS_ESCAPE_CALC:
            return
        logger.debug("Calculating escape times (limit %d)", state.escape_limit)
        start = time.perf_counter()
        grid = state.grid
        compute_escape_times(grid.reals, grid.imags, state.escape_limit,
                             out=grid.escape_times)
        grid.timed = True
        self._enter(PlotPhase.NEEDS_DRAW)
        logger.info("Calculated escape times for %d points in %.2fs",
                    len(grid), time.perf_counter() - start)

    def generate_output(self):
        """NEEDS_DRAW -> IDLE: draw every sample and present the frame."""
        state = self._state
        if state.phase is not PlotPhase.NEEDS_DRAW:
            return
        start = time.perf_counter()
        grid = state.grid
        mapper = self.mapper
        xs, ys = mapper.plane_to_pixels(grid.reals, grid.imags)
        colors = colorize(grid.escape_times, self.palette)

        self.canvas.clear()
        self.canvas.draw_pixels(xs, ys, colors)
        self.canvas.present()
        self._enter(PlotPhase.IDLE)
        logger.info("Drew %d points in %.2fs", len(grid), time.perf_counter() - start)

    # ------------------------------------------------------------------
    # Zoom selection
    # ------------------------------------------------------------------

    def handle_click(self, button, x, y):
        """Respond to a mouse click at screen position (x, y)."""
        if button == BUTTON_PRIMARY:
            self.gather_new_limits(x, y)
        elif button == BUTTON_SECONDARY and self._state.selection.active:
            self.cancel_selection()

    def gather_new_limits(self, x, y):
        """
        Record one corner of the zoom rectangle.

        The first click starts a selection; the second commits the
        rectangle spanned by both clicks.
        """
        point = self.mapper.screen_to_plane((x, y))
        selection = self._state.selection
        if not selection.active:
            self._state.selection = ZoomSelection(True, point)
            logger.debug("Zoom corner 1 at %s", point)
            return
        self._state.selection = NO_SELECTION
        self.commit_zoom(selection.corner1, point)

    def cancel_selection(self):
        self._state.selection = NO_SELECTION
        logger.debug("Zoom selection cancelled")

    def commit_zoom(self, first, second):
        """
        Zoom into the rectangle spanned by two corners (in any order).

        Returns:
            True if the zoom was committed, False if it was discarded
            (rectangle too small to sample at this precision, or
            terminated controller)
        """
        if self.terminated:
            return False
        rect = self._cast_rect(PlaneRect.from_corners(first, second))
        if not self._resolvable(rect):
            logger.warning("Ignoring zoom selection too small to sample: %s", rect)
            return False
        self.alert_new_limits(rect)
        self.set_plot_limits(first, second)
        self.reset_plot_resolution()
        logger.info("Zoomed to real [%s, %s], imag [%s, %s], escape limit %d",
                    rect.min.real, rect.max.real, rect.min.imag, rect.max.imag,
                    self._state.escape_limit)
        return True

    def set_plot_limits(self, first, second):
        """Set the plot rectangle from two unordered corners."""
        self._state.rect = self._cast_rect(PlaneRect.from_corners(first, second))

    def reset_plot_resolution(self):
        """Recompute resolution, deepen the escape limit and invalidate the grid."""
        state = self._state
        state.grid = None
        state.resolution = determine_resolution(state.rect, self.viewport)
        state.escape_limit = self._next_escape_limit(state.escape_limit)
        self._enter(PlotPhase.NEEDS_POINTS)

    def reset_view(self):
        """Return to the initial rectangle and escape limit."""
        if self.terminated:
            return
        state = self._state
        state.rect = self._initial_rect
        state.resolution = determine_resolution(state.rect, self.viewport)
        state.escape_limit = self._initial_escape_limit
        state.selection = NO_SELECTION
        state.grid = None
        self._enter(PlotPhase.NEEDS_POINTS)
        logger.info("View reset")

    def alert_new_limits(self, rect):
        """Outline the chosen zoom rectangle on the current frame."""
        mapper = self.mapper
        left = mapper.x_to_screen(rect.min.real)
        right = mapper.x_to_screen(rect.max.real)
        top = mapper.y_to_screen(rect.max.imag)
        bottom = mapper.y_to_screen(rect.min.imag)
        self.canvas.draw_rect(int(left), int(top), int(abs(right - left)),
                              int(abs(bottom - top)), self.SELECTION_COLOR)
        self.canvas.present()

    def _resolvable(self, rect):
        """
        Whether the grid scan over `rect` can make progress.

        The step must change every corner coordinate when added in the
        controller's dtype; below that the accumulating scan would never
        pass the far edge.
        """
        if rect.is_degenerate():
            return False
        step = self.dtype(determine_resolution(rect, self.viewport))
        corners = (rect.min.real, rect.max.real, rect.min.imag, rect.max.imag)
        return all(v + step != v for v in corners)

    def _enter(self, phase):
        self._state.phase = phase
        if self.on_phase_change is not None:
            self.on_phase_change(phase)

    def _next_escape_limit(self, escape_limit):
        doubled = escape_limit * 2
        if self.max_escape_limit is not None:
            return max(escape_limit, min(doubled, self.max_escape_limit))
        return doubled

    def _cast_rect(self, rect):
        dtype = self.dtype
        return PlaneRect(
            ComplexPoint(dtype(rect.max.real), dtype(rect.max.imag)),
            ComplexPoint(dtype(rect.min.real), dtype(rect.min.imag)),
        )
