"""
Pygame bindings for the plot controller.

- Canvas: the drawing interface the controller renders into
- PygameCanvas: Canvas backed by the pygame display surface
- PygameInput: drains pygame's event queue into the neutral events
  defined in events.py and reports the mouse position
"""

import pygame

from .events import Quit, ButtonDown, KeyDown


class InitError(RuntimeError):
    """The windowing/rendering subsystem could not be initialized."""


class Canvas:
    """
    Drawing surface used by the plot controller.

    Subclasses implement clear, draw_pixel, draw_rect and present.
    draw_pixels may be overridden with a faster bulk version; the default
    issues one draw_pixel call per point.
    """

    def clear(self):
        raise NotImplementedError

    def draw_pixel(self, x, y, color):
        raise NotImplementedError

    def draw_pixels(self, xs, ys, colors):
        """
        Draw many pixels.

        Args:
            xs, ys: Integer pixel coordinate arrays
            colors: (N, 3) array of RGB rows
        """
        for x, y, (r, g, b) in zip(xs, ys, colors):
            self.draw_pixel(int(x), int(y), (int(r), int(g), int(b)))

    def draw_rect(self, x, y, width, height, color):
        """Draw a rectangle outline."""
        raise NotImplementedError

    def present(self):
        raise NotImplementedError


class PygameCanvas(Canvas):
    """Canvas drawing directly onto the pygame display surface."""

    def __init__(self, screen):
        self.screen = screen
        self.width, self.height = screen.get_size()

    @classmethod
    def create(cls, width, height, caption="Mandelbrot"):
        """
        Initialize pygame and open a window.

        Raises:
            InitError if the display cannot be initialized
        """
        try:
            pygame.init()
            screen = pygame.display.set_mode((width, height), pygame.DOUBLEBUF)
        except pygame.error as e:
            raise InitError(f"Failed to create window: {e}") from e
        pygame.display.set_caption(caption)
        return cls(screen)

    def clear(self):
        self.screen.fill((0, 0, 0))

    def draw_pixel(self, x, y, color):
        # set_at ignores positions outside the surface
        self.screen.set_at((x, y), color)

    def draw_pixels(self, xs, ys, colors):
        inside = (xs >= 0) & (xs < self.width) & (ys >= 0) & (ys < self.height)
        pixels = pygame.surfarray.pixels3d(self.screen)
        try:
            pixels[xs[inside], ys[inside]] = colors[inside]
        finally:
            del pixels  # Unlock the surface

    def draw_rect(self, x, y, width, height, color):
        pygame.draw.rect(self.screen, color, pygame.Rect(x, y, width, height), 1)

    def present(self):
        pygame.display.flip()

    def set_caption(self, caption):
        pygame.display.set_caption(caption)

    def close(self):
        pygame.quit()


class PygameInput:
    """Non-blocking input source over pygame's event queue."""

    def poll_events(self):
        """Drain all pending pygame events into neutral events."""
        events = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                events.append(Quit())
            elif event.type == pygame.MOUSEBUTTONDOWN:
                x, y = event.pos
                events.append(ButtonDown(event.button, x, y))
            elif event.type == pygame.KEYDOWN:
                events.append(KeyDown(pygame.key.name(event.key)))
        return events

    def cursor_position(self):
        return pygame.mouse.get_pos()

