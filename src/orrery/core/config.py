"""Configuration dataclasses for the orrery."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OrbitCfg:
    time_scale: float = 0.1
    kepler_max_iterations: int = 10
    kepler_tolerance: float = 1e-6
    path_samples: int = 100
    randomize_phase: bool = True

    def __post_init__(self) -> None:
        if self.kepler_max_iterations < 1:
            raise ValueError("kepler_max_iterations must be at least 1")
        if self.kepler_tolerance <= 0.0:
            raise ValueError("kepler_tolerance must be positive")
        if self.path_samples < 3:
            raise ValueError("path_samples must be at least 3")


@dataclass(frozen=True)
class CameraCfg:
    zoom: float = 1.0
    min_zoom: float = 0.1
    scroll_zoom_factor: float = 0.1
    pan_step: float = 0.1

    def __post_init__(self) -> None:
        if self.min_zoom <= 0.0:
            raise ValueError("min_zoom must be positive")
        if self.zoom < self.min_zoom:
            raise ValueError("zoom must not start below min_zoom")


@dataclass(frozen=True)
class RenderCfg:
    width: int = 1200
    height: int = 800
    caption: str = "Orrery - Solar System Simulation"
    view_half_width: float = 10.0
    background_color: tuple[float, float, float] = (0.0, 0.0, 0.0)
    star_radius: float = 0.1
    star_color: tuple[float, float, float] = (1.0, 1.0, 0.0)
    orbit_path_color: tuple[float, float, float] = (0.35, 0.35, 0.35)
    show_orbit_paths: bool = True
    min_disc_pixels: int = 1
    key_repeat_delay_ms: int = 200
    key_repeat_interval_ms: int = 30
    fps_limit: int = 60


ORBIT_CFG = OrbitCfg()
CAMERA_CFG = CameraCfg()
RENDER_CFG = RenderCfg()


__all__ = [
    "CAMERA_CFG",
    "CameraCfg",
    "ORBIT_CFG",
    "OrbitCfg",
    "RENDER_CFG",
    "RenderCfg",
]
