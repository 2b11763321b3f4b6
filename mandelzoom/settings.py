"""
Startup settings for the Mandelbrot plot.

Settings are read once from a JSON file (by default the settings.json
shipped next to this module) and merged over DEFAULT_SETTINGS. A missing
or unreadable file only produces a warning; the defaults are used instead.
"""

import json
import logging
import os

from .coords import ComplexPoint, PlaneRect, Viewport


logger = logging.getLogger(__name__)

SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')

DEFAULT_SETTINGS = {
    'width': 2800,
    'height': 1860,
    'escape_limit': 1000,
    'max_escape_limit': None,
    'plane_max': [1.0, 1.0],
    'plane_min': [-2.0, -1.0],
    'precision': 'double',
    'palette': 'Classic',
    'log_level': 'INFO',
}


def load_settings(path=None):
    """
    Load settings from a JSON file.

    Args:
        path: JSON file to read (default: the packaged settings.json)

    Returns:
        dict with every key of DEFAULT_SETTINGS. Unknown keys in the
        file are ignored.
    """
    settings = dict(DEFAULT_SETTINGS)
    path = path or SETTINGS_PATH
    try:
        with open(path, 'r') as f:
            loaded = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.warning("Could not load %s: %s", path, e)
        return settings

    for key, value in loaded.items():
        if key in settings:
            settings[key] = value
        else:
            logger.warning("Ignoring unknown setting %r", key)
    return settings


def merge_settings(settings):
    """Fill in any keys missing from a partial settings dict with defaults."""
    return dict(DEFAULT_SETTINGS, **settings)


def plane_rect(settings):
    """Initial plot rectangle, normalized from the two configured corners."""
    return PlaneRect.from_corners(ComplexPoint(*settings['plane_max']),
                                  ComplexPoint(*settings['plane_min']))


def viewport(settings):
    return Viewport(int(settings['width']), int(settings['height']))
