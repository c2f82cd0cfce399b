from __future__ import annotations

from typing import Sequence

import pygame

from orrery.core.config import RENDER_CFG, RenderCfg
from orrery.core.model import Color


def to_rgb255(color: Color) -> tuple[int, int, int]:
    """Convert a ``[0, 1]`` float color to 8-bit RGB."""

    return tuple(max(0, min(255, int(round(c * 255)))) for c in color)


class PygameRenderer:
    """Draws world-space primitives onto a pygame surface.

    A fixed orthographic view spans ``±view_half_width`` world units
    horizontally with the star at the centre of the window; the vertical span
    follows the window's aspect ratio.
    """

    def __init__(self, surface: pygame.Surface, cfg: RenderCfg = RENDER_CFG) -> None:
        self._surface = surface
        self._cfg = cfg
        self._background = to_rgb255(cfg.background_color)
        self._zoom = 1.0
        self._pan = (0.0, 0.0)

    @property
    def surface(self) -> pygame.Surface:
        return self._surface

    @property
    def pixels_per_unit(self) -> float:
        width, _ = self._surface.get_size()
        return width / (2.0 * self._cfg.view_half_width)

    def set_view(self, zoom: float, pan: tuple[float, float]) -> None:
        self._zoom = zoom
        self._pan = pan

    def world_to_screen(self, x: float, y: float) -> tuple[int, int]:
        width, height = self._surface.get_size()
        scale = self._zoom * self.pixels_per_unit
        sx = width / 2.0 + (x + self._pan[0]) * scale
        sy = height / 2.0 - (y + self._pan[1]) * scale
        return int(round(sx)), int(round(sy))

    def clear(self) -> None:
        self._surface.fill(self._background)

    def draw_filled_disc(self, center: tuple[float, float], radius: float, color: Color) -> None:
        radius_px = max(self._cfg.min_disc_pixels, int(round(radius * self._zoom * self.pixels_per_unit)))
        pygame.draw.circle(self._surface, to_rgb255(color), self.world_to_screen(*center), radius_px)

    def draw_line_loop(self, points: Sequence[tuple[float, float]], color: Color) -> None:
        if len(points) < 2:
            return
        screen_points = [self.world_to_screen(x, y) for x, y in points]
        pygame.draw.aalines(self._surface, to_rgb255(color), True, screen_points)

    def present(self) -> None:
        pygame.display.flip()


__all__ = ["PygameRenderer", "to_rgb255"]
