"""Capabilities the frame driver needs from the window layer."""
from __future__ import annotations

from typing import Protocol, Sequence

from .model import Color

Point = tuple[float, float]


class Renderer(Protocol):
    def clear(self) -> None: ...

    def set_view(self, zoom: float, pan: Point) -> None: ...

    def draw_filled_disc(self, center: Point, radius: float, color: Color) -> None: ...

    def draw_line_loop(self, points: Sequence[Point], color: Color) -> None: ...

    def present(self) -> None: ...


class InputHandler(Protocol):
    def on_scroll(self, dy: float) -> None: ...

    def on_key(self, key: str, pressed: bool) -> None: ...


class Host(Protocol):
    def now(self) -> float: ...

    def register(self, handler: InputHandler) -> None: ...

    def poll_events(self) -> None: ...

    def should_close(self) -> bool: ...

    def close(self) -> None: ...


__all__ = ["Host", "InputHandler", "Point", "Renderer"]
