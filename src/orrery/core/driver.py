"""Frame driver: one simulation step plus one rendered frame per tick."""
from __future__ import annotations

from typing import Optional

from .config import RENDER_CFG, RenderCfg
from .interfaces import Host, Renderer
from .logging_utils import RunLogger
from .orbit import OrbitModel
from .timekeeping import FrameTimer


class FrameDriver:
    """Pulls time from the host, advances the orbits and issues draw calls."""

    def __init__(
        self,
        model: OrbitModel,
        renderer: Renderer,
        host: Host,
        cfg: RenderCfg = RENDER_CFG,
        *,
        run_logger: Optional[RunLogger] = None,
    ) -> None:
        self.model = model
        self.renderer = renderer
        self.host = host
        self.cfg = cfg
        self.run_logger = run_logger
        self.timer = FrameTimer()
        host.register(model.state.camera)

    @property
    def state(self):
        return self.model.state

    def tick(self) -> float:
        """Run one frame and return the wall-clock delta it used."""

        delta = self.timer.tick(self.host.now())
        state = self.state
        camera = state.camera

        self.renderer.clear()
        self.renderer.set_view(camera.zoom, camera.pan)
        self.renderer.draw_filled_disc((0.0, 0.0), self.cfg.star_radius, self.cfg.star_color)

        for body in state.bodies:
            if self.cfg.show_orbit_paths:
                self.renderer.draw_line_loop(self.model.orbit_path(body), self.cfg.orbit_path_color)
            position = self.model.advance(body, delta)
            self.renderer.draw_filled_disc(position, body.visual_radius, body.color)
            if self.run_logger is not None:
                self._log_body(body, position)

        self.model.advance_clock(delta)
        state.frame += 1

        self.renderer.present()
        self.host.poll_events()
        return delta

    def run(self, max_frames: Optional[int] = None) -> int:
        """Tick until the host asks to close; returns the number of frames run."""

        frames = 0
        try:
            while not self.host.should_close():
                if max_frames is not None and frames >= max_frames:
                    break
                self.tick()
                frames += 1
        finally:
            self.host.close()
            if self.run_logger is not None:
                self.run_logger.close()
        return frames

    def _log_body(self, body, position: tuple[float, float]) -> None:
        x, y = position
        self.run_logger.log_ts(
            [
                self.state.time,
                body.label,
                x,
                y,
                body.mean_anomaly,
                body.angle,
                (x * x + y * y) ** 0.5,
                body.solver_iterations,
            ]
        )


__all__ = ["FrameDriver"]
