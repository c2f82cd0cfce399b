from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from orrery.core.config import CAMERA_CFG, CameraCfg

# Direction of the pan offset change for each arrow key.
_PAN_DIRECTIONS: dict[str, tuple[float, float]] = {
    "left": (1.0, 0.0),
    "right": (-1.0, 0.0),
    "up": (0.0, -1.0),
    "down": (0.0, 1.0),
}


@dataclass
class CameraState:
    zoom: float
    pan: np.ndarray


class Camera:
    """Zoom and pan state driven by scroll and arrow-key input.

    The view transform is ``view = zoom * (world + pan)``.
    """

    def __init__(self, cfg: CameraCfg = CAMERA_CFG) -> None:
        self._cfg = cfg
        self._state = CameraState(
            zoom=max(cfg.zoom, cfg.min_zoom),
            pan=np.array([0.0, 0.0], dtype=float),
        )

    @property
    def zoom(self) -> float:
        return self._state.zoom

    @property
    def pan(self) -> tuple[float, float]:
        return float(self._state.pan[0]), float(self._state.pan[1])

    def set_zoom(self, zoom: float) -> None:
        self._state.zoom = max(zoom, self._cfg.min_zoom)

    def set_pan(self, pan: tuple[float, float]) -> None:
        self._state.pan[:] = pan

    def on_scroll(self, dy: float) -> None:
        self.set_zoom(self._state.zoom * (1.0 + dy * self._cfg.scroll_zoom_factor))

    def on_key(self, key: str, pressed: bool) -> None:
        if not pressed:
            return
        direction = _PAN_DIRECTIONS.get(key)
        if direction is None:
            return
        step = self._cfg.pan_step / self._state.zoom
        self._state.pan += np.asarray(direction) * step

    def world_to_view(self, x: float, y: float) -> tuple[float, float]:
        px, py = self._state.pan
        return self._state.zoom * (x + px), self._state.zoom * (y + py)


__all__ = ["Camera", "CameraState"]
