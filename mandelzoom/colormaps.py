"""
Color palettes mapping escape times to RGB.

Escape time 0 (never escaped) is always black. Every other escape time maps
deterministically to a non-black color:

- 'Classic' uses modular arithmetic on weighted multiples of the escape
  time, with red and green pinned to 0 below a threshold.
- The gradient palettes ('Hot', 'Ocean', ...) are lookup tables that the
  escape time cycles through. The darkest band of each table is skipped so
  slow-escaping points never blend in with the set itself.

To add a new gradient palette:
1. Define a create_colormap_xxx() function returning a (NUM_COLORS, 3) array
2. Add it to the GRADIENTS dictionary below
"""

import numpy as np


NUM_COLORS = 1024    # Gradient table size
COLOR_OFFSET = 128   # Entries at the dark end of each table that are never used
CYCLE_STEP = 8       # Table entries advanced per iteration

BLACK = (0, 0, 0)


def _ramp():
    return np.linspace(0.0, 1.0, NUM_COLORS)


def _to_table(r, g, b):
    table = np.stack([r, g, b], axis=1)
    return np.clip(np.rint(255 * table), 0, 255).astype(np.uint8)


def create_colormap_hot():
    """
    Hot colormap: black -> red -> orange -> yellow -> white.

    Uses a power curve to spend more time in the bright colors.
    """
    t = _ramp() ** 0.8
    return _to_table(np.minimum(1, t * 2.5),
                     np.clip((t - 0.4) * 2.5, 0, 1),
                     np.clip((t - 0.7) * 3.3, 0, 1))


def create_colormap_ocean():
    """Ocean colormap: deep blue -> cyan -> white."""
    t = _ramp()
    return _to_table(np.clip((t - 0.5) * 2, 0, 1), t, (50 + 205 * t) / 255)


def create_colormap_forest():
    """Forest colormap: dark green -> lime -> yellow."""
    t = _ramp()
    return _to_table(np.clip((t - 0.3) * 1.4, 0, 1),
                     (80 + 175 * t) / 255,
                     np.clip((t - 0.7) * 3.3, 0, 1))


def create_colormap_grayscale():
    """Grayscale colormap: black -> white."""
    t = _ramp()
    return _to_table(t, t, t)


# Gradient tables, built once at import.
GRADIENTS = {
    'Hot': create_colormap_hot(),
    'Ocean': create_colormap_ocean(),
    'Forest': create_colormap_forest(),
    'Grayscale': create_colormap_grayscale(),
}


def _classic(escape_times):
    e = escape_times.astype(np.int64)
    rgb = np.empty((e.shape[0], 3), dtype=np.uint8)
    rgb[:, 0] = np.where(e > 200, (10 * e) % 256, 0)
    rgb[:, 1] = np.where(e > 100, (14 * e) % 256, 0)
    rgb[:, 2] = 55 + (7 * e) % 201
    return rgb


def _gradient(table):
    span = NUM_COLORS - COLOR_OFFSET

    def lookup(escape_times):
        e = escape_times.astype(np.int64)
        idx = COLOR_OFFSET + ((e - 1) * CYCLE_STEP) % span
        return table[idx]

    return lookup


# Registry of all available palettes.
# Keys are display names, values map a uint32 escape-time array to RGB rows.
PALETTES = {'Classic': _classic}
PALETTES.update((name, _gradient(table)) for name, table in GRADIENTS.items())


def get_palette(name):
    """
    Get a palette function by name.

    Raises:
        KeyError if name not found
    """
    return PALETTES[name]


def list_palette_names():
    """Get list of available palette names."""
    return list(PALETTES.keys())


def colorize(escape_times, palette='Classic'):
    """
    Map an array of escape times to colors.

    Args:
        escape_times: 1D array of escape times (0 = never escaped)
        palette: Key from PALETTES

    Returns:
        (N, 3) uint8 array of RGB rows
    """
    escape_times = np.asarray(escape_times)
    rgb = get_palette(palette)(escape_times)
    rgb[escape_times == 0] = BLACK
    return rgb


def color_for(escape_time, palette='Classic'):
    """Color of a single escape time as an (r, g, b) tuple."""
    if escape_time == 0:
        return BLACK
    r, g, b = colorize(np.array([escape_time], dtype=np.uint32), palette)[0]
    return int(r), int(g), int(b)
