"""
Zoomable Mandelbrot Plot Package

Plots the Mandelbrot set over a window of the complex plane and lets you
zoom by selecting a rectangle with two clicks. Every zoom recomputes the
plot at a finer resolution with twice the iteration depth. Uses Pygame for
display and Numba for JIT-compiled, parallel escape-time computation.

Quick Start:
    from mandelzoom import run
    run()

Or from command line:
    python -m mandelzoom

Package Structure:
    - coords.py: Plane/screen coordinate types and mapping
    - compute.py: JIT-compiled escape-time computation
    - colormaps.py: Escape time to color palettes
    - grid.py: Sample lattice generation
    - controller.py: Zoom state machine and compute/draw pipeline
    - events.py: Backend-neutral input events
    - display.py: Pygame canvas and input bindings
    - settings.py: Startup settings (settings.json)
    - app.py: Main application and window loop

Controls:
    - Left click twice: Zoom into the rectangle between the two clicks
    - Right click: Cancel a half-finished selection
    - R: Reset to the initial view
    - ESC: Quit
"""

from .app import run, MandelbrotApp
from .colormaps import PALETTES, color_for, colorize, list_palette_names
from .compute import compute_escape_times, iterate, iterate_point
from .controller import PlotController, PlotPhase
from .coords import ComplexPoint, CoordinateMapper, PlaneRect, Viewport, determine_resolution
from .display import InitError
from .grid import PlotGrid, generate_grid

__version__ = "1.0.0"
__all__ = [
    "run",
    "MandelbrotApp",
    "PALETTES",
    "color_for",
    "colorize",
    "list_palette_names",
    "compute_escape_times",
    "iterate",
    "iterate_point",
    "PlotController",
    "PlotPhase",
    "ComplexPoint",
    "CoordinateMapper",
    "PlaneRect",
    "Viewport",
    "determine_resolution",
    "InitError",
    "PlotGrid",
    "generate_grid",
]
