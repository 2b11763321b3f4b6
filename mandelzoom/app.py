"""
Main application module for the Mandelbrot plot.

Contains the MandelbrotApp class which handles:
- Window setup and the main loop
- Handing input events to the plot controller
- Status display in the window caption (phase, cursor position)
"""

import logging

import pygame

from . import settings as settings_module
from .compute import get_dtype, warmup_jit
from .controller import PlotController, PlotPhase
from .display import InitError, PygameCanvas, PygameInput


logger = logging.getLogger(__name__)

LOG_FORMAT = '%(levelname)s - %(message)s'


def configure_logging(level='INFO'):
    """Send this package's log records to the console."""
    package_logger = logging.getLogger('mandelzoom')
    package_logger.setLevel(level)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)


class MandelbrotApp:
    """
    Main application class for the Mandelbrot plot.

    Opens the pygame window, then runs the controller's input/compute/draw
    pass once per frame until the user quits.
    """

    FRAME_RATE = 60
    TITLE = "Mandelbrot"
    HELP = "click two corners to zoom, right-click to cancel, R to reset, Esc to quit"

    def __init__(self, width=None, height=None, escape_limit=None, settings=None):
        """
        Initialize the application.

        Args:
            width: Window width in pixels (default from settings)
            height: Window height in pixels (default from settings)
            escape_limit: Initial iteration cap (default from settings)
            settings: Settings dict, merged over the defaults (default: settings_module.load_settings())
        """
        self.settings = settings_module.merge_settings(
            settings or settings_module.load_settings())
        if width:
            self.settings['width'] = width
        if height:
            self.settings['height'] = height
        if escape_limit:
            self.settings['escape_limit'] = escape_limit

        self.viewport = settings_module.viewport(self.settings)
        self.dtype = get_dtype(self.settings['precision'])

        # Initialized in run()
        self.canvas = None
        self.input = None
        self.clock = None
        self.controller = None
        self._caption = None

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        self._init_controller()
        self._warmup()

        try:
            while not self.controller.terminated:
                self.controller.step(self.input.poll_events())
                self._update_caption()
                self.clock.tick(self.FRAME_RATE)
        finally:
            self.canvas.close()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        self.canvas = PygameCanvas.create(self.viewport.width, self.viewport.height,
                                          self.TITLE)
        self.input = PygameInput()
        self.clock = pygame.time.Clock()

    def _init_controller(self):
        settings = self.settings
        self.controller = PlotController(
            self.canvas,
            settings_module.plane_rect(settings),
            self.viewport,
            settings['escape_limit'],
            palette=settings['palette'],
            dtype=self.dtype,
            max_escape_limit=settings['max_escape_limit'],
            on_phase_change=self._on_phase_change,
        )

    def _warmup(self):
        """Warm up JIT before the first real computation."""
        self._set_caption(f"{self.TITLE} - Compiling (first run only)...")
        warmup_jit()
        self._on_phase_change(self.controller.phase)

    def _on_phase_change(self, phase):
        if phase is PlotPhase.NEEDS_POINTS:
            self._set_caption(f"{self.TITLE} - Computing...")

    def _update_caption(self):
        """Show the plane coordinates under the mouse while idle."""
        controller = self.controller
        if controller.phase is not PlotPhase.IDLE:
            return
        point = controller.mapper.screen_to_plane(self.input.cursor_position())
        prefix = "select second corner" if controller.selection.active else self.HELP
        self._set_caption(
            f"{self.TITLE} - {float(point.real):+.8f} {float(point.imag):+.8f}i "
            f"- limit {controller.escape_limit} - {prefix}"
        )

    def _set_caption(self, caption):
        if caption != self._caption:
            self._caption = caption
            self.canvas.set_caption(caption)


def run(width=None, height=None, escape_limit=None, settings=None):
    """
    Run the Mandelbrot plot.

    Args:
        width: Window width (default from settings.json)
        height: Window height (default from settings.json)
        escape_limit: Initial iteration cap (default from settings.json)
        settings: Settings dict used instead of settings.json; missing keys take defaults

    Raises:
        InitError if the window cannot be created
    """
    settings = settings_module.merge_settings(settings or settings_module.load_settings())
    configure_logging(settings['log_level'])
    app = MandelbrotApp(width, height, escape_limit, settings)
    try:
        app.run()
    except InitError:
        logger.error("Could not start the display")
        raise
    except KeyboardInterrupt:
        pass
