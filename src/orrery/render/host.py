from __future__ import annotations

import pygame

from orrery.core.config import RENDER_CFG, RenderCfg
from orrery.core.interfaces import InputHandler
from orrery.core.timekeeping import monotonic_now

_ARROW_KEYS: dict[int, str] = {
    pygame.K_LEFT: "left",
    pygame.K_RIGHT: "right",
    pygame.K_UP: "up",
    pygame.K_DOWN: "down",
}


class PygameHost:
    """Owns the pygame window, the clock and input dispatch."""

    def __init__(self, cfg: RenderCfg = RENDER_CFG) -> None:
        pygame.init()
        pygame.display.set_caption(cfg.caption)
        self._surface = pygame.display.set_mode((cfg.width, cfg.height), pygame.DOUBLEBUF)
        pygame.key.set_repeat(cfg.key_repeat_delay_ms, cfg.key_repeat_interval_ms)
        self._clock = pygame.time.Clock()
        self._fps_limit = cfg.fps_limit
        self._handlers: list[InputHandler] = []
        self._close_requested = False
        self._closed = False

    @property
    def surface(self) -> pygame.Surface:
        return self._surface

    def now(self) -> float:
        return monotonic_now()

    def register(self, handler: InputHandler) -> None:
        self._handlers.append(handler)

    def poll_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._close_requested = True
            elif event.type == pygame.MOUSEWHEEL:
                for handler in self._handlers:
                    handler.on_scroll(float(event.y))
            elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
                pressed = event.type == pygame.KEYDOWN
                if pressed and event.key == pygame.K_ESCAPE:
                    self._close_requested = True
                    continue
                key = _ARROW_KEYS.get(event.key)
                if key is None:
                    continue
                for handler in self._handlers:
                    handler.on_key(key, pressed)
        if self._fps_limit > 0:
            self._clock.tick(self._fps_limit)

    def should_close(self) -> bool:
        return self._close_requested

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        pygame.display.quit()
        pygame.quit()


__all__ = ["PygameHost"]
