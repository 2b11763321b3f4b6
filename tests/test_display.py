import numpy as np
import pygame
import pytest

from mandelzoom.display import InitError, PygameCanvas, PygameInput
from mandelzoom.events import ButtonDown, KeyDown, Quit


@pytest.fixture
def headless(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    yield
    pygame.quit()


@pytest.fixture
def pygame_canvas(headless):
    return PygameCanvas.create(16, 12, "test")


def test_create_reports_size(pygame_canvas):
    assert (pygame_canvas.width, pygame_canvas.height) == (16, 12)


def test_create_raises_init_error(headless, monkeypatch):
    def fail(*args, **kwargs):
        raise pygame.error("no display")

    monkeypatch.setattr(pygame.display, "set_mode", fail)
    with pytest.raises(InitError):
        PygameCanvas.create(16, 12)


def test_draw_pixel_and_clear(pygame_canvas):
    pygame_canvas.draw_pixel(3, 4, (10, 20, 30))
    pygame_canvas.draw_pixel(100, 100, (255, 255, 255))  # off-surface, ignored
    assert tuple(pygame_canvas.screen.get_at((3, 4)))[:3] == (10, 20, 30)
    pygame_canvas.clear()
    assert tuple(pygame_canvas.screen.get_at((3, 4)))[:3] == (0, 0, 0)


def test_draw_pixels_skips_out_of_range(pygame_canvas):
    xs = np.array([0, 5, 16, -1])
    ys = np.array([0, 6, 2, 3])
    colors = np.array([[1, 2, 3], [4, 5, 6], [7, 8, 9], [10, 11, 12]], dtype=np.uint8)
    pygame_canvas.draw_pixels(xs, ys, colors)
    assert tuple(pygame_canvas.screen.get_at((0, 0)))[:3] == (1, 2, 3)
    assert tuple(pygame_canvas.screen.get_at((5, 6)))[:3] == (4, 5, 6)
    pygame_canvas.present()


def test_draw_rect_outline(pygame_canvas):
    pygame_canvas.draw_rect(2, 2, 6, 5, (255, 255, 255))
    assert tuple(pygame_canvas.screen.get_at((2, 2)))[:3] == (255, 255, 255)
    assert tuple(pygame_canvas.screen.get_at((4, 4)))[:3] == (0, 0, 0)


def test_poll_events_translates_pygame_events(pygame_canvas):
    pygame.event.clear()
    pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(3, 4)))
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_r))
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    events = PygameInput().poll_events()
    assert events == [ButtonDown(1, 3, 4), KeyDown('escape'), KeyDown('r'), Quit()]
    assert PygameInput().poll_events() == []
