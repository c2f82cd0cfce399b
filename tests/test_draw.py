import pygame
import pytest

from orrery.core.config import RenderCfg
from orrery.render.draw import PygameRenderer, to_rgb255


@pytest.fixture
def surface():
    return pygame.Surface((200, 100))


def test_to_rgb255():
    assert to_rgb255((1.0, 0.5, 0.0)) == (255, 128, 0)


def test_origin_maps_to_window_centre(surface):
    renderer = PygameRenderer(surface, RenderCfg(view_half_width=10.0))
    assert renderer.pixels_per_unit == pytest.approx(10.0)
    assert renderer.world_to_screen(0.0, 0.0) == (100, 50)
    assert renderer.world_to_screen(1.0, 1.0) == (110, 40)


def test_view_transform_zooms_then_pans(surface):
    renderer = PygameRenderer(surface, RenderCfg(view_half_width=10.0))
    renderer.set_view(2.0, (1.0, 0.0))
    assert renderer.world_to_screen(0.0, 0.0) == (120, 50)


def test_disc_and_loop_draw_pixels(surface):
    cfg = RenderCfg(view_half_width=10.0, background_color=(0.0, 0.0, 0.0))
    renderer = PygameRenderer(surface, cfg)
    renderer.clear()
    renderer.draw_filled_disc((0.0, 0.0), 0.5, (1.0, 1.0, 0.0))
    assert surface.get_at((100, 50))[:3] == (255, 255, 0)
    renderer.draw_line_loop([(-4.0, -2.0), (4.0, -2.0), (4.0, 2.0), (-4.0, 2.0)], (1.0, 1.0, 1.0))
    assert surface.get_at((100, 70))[:3] != (0, 0, 0)
