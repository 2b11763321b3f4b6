"""
Backend-neutral input events consumed by the plot controller.

The pygame binding in display.py translates its own events into these,
so the controller (and its tests) never touch pygame directly.
"""

from collections import namedtuple


BUTTON_PRIMARY = 1
BUTTON_MIDDLE = 2
BUTTON_SECONDARY = 3

KEY_ESCAPE = 'escape'
KEY_RESET = 'r'

Quit = namedtuple('Quit', [])
ButtonDown = namedtuple('ButtonDown', ['button', 'x', 'y'])
KeyDown = namedtuple('KeyDown', ['key'])
