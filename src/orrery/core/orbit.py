"""Per-body orbit propagation on top of :mod:`orrery.core.physics`."""
from __future__ import annotations

import random
import time
from typing import Optional

from .config import ORBIT_CFG, OrbitCfg
from .logging_utils import RunLogger
from .model import TWO_PI, Body, SimState
from .physics import (
    conic_radius,
    polar_to_cartesian,
    sample_orbit_path,
    solve_kepler,
    true_anomaly,
    wrap_angle,
)


class OrbitModel:
    """Advances the phase of every body in a :class:`SimState`."""

    def __init__(
        self,
        state: SimState,
        cfg: OrbitCfg = ORBIT_CFG,
        *,
        run_logger: Optional[RunLogger] = None,
    ) -> None:
        self.state = state
        self.cfg = cfg
        self.run_logger = run_logger
        # keyed on orbit shape, which Body refuses to change after construction
        self._path_cache: dict[tuple[float, float, int], list[tuple[float, float]]] = {}

    @property
    def bodies(self) -> list[Body]:
        return self.state.bodies

    def initialize(self, randomize_phase: bool, seed: Optional[int] = None) -> int | None:
        """Set every body's starting phase.

        Returns the seed used when randomizing so a run can be replayed.
        """

        used_seed: int | None = None
        if randomize_phase:
            used_seed = time.time_ns() if seed is None else seed
            rng = random.Random(used_seed)
            for body in self.bodies:
                body.mean_anomaly = rng.uniform(0.0, TWO_PI) % TWO_PI
        else:
            for body in self.bodies:
                body.mean_anomaly = 0.0
        for body in self.bodies:
            solution = solve_kepler(body.mean_anomaly, body.eccentricity, self.cfg)
            body.angle = true_anomaly(solution.eccentric_anomaly, body.eccentricity)
        self.state.time = 0.0
        self.state.stats.reset()
        return used_seed

    def advance(self, body: Body, delta_time: float) -> tuple[float, float]:
        """Move *body* forward by *delta_time* and return its new position."""

        scaled = delta_time * self.cfg.time_scale
        body.mean_anomaly = wrap_angle(
            body.mean_anomaly + (TWO_PI / body.orbital_period) * scaled
        )

        solution = solve_kepler(body.mean_anomaly, body.eccentricity, self.cfg)
        self.state.stats.record(solution.converged, solution.last_correction)
        body.solver_iterations = solution.iterations
        if not solution.converged and self.run_logger is not None:
            self.run_logger.log_event(
                [
                    self.state.time,
                    "solver_nonconverged",
                    body.label,
                    f"M={body.mean_anomaly:.10g};dE={solution.last_correction:.3g}",
                ]
            )

        nu = true_anomaly(solution.eccentric_anomaly, body.eccentricity)
        r = float(conic_radius(body.semi_major_axis, body.eccentricity, nu))
        body.angle = nu
        return polar_to_cartesian(r, nu)

    def advance_all(self, delta_time: float) -> list[tuple[float, float]]:
        positions = [self.advance(body, delta_time) for body in self.bodies]
        self.advance_clock(delta_time)
        return positions

    def advance_clock(self, delta_time: float) -> None:
        """Add *delta_time*, scaled like the orbits, to the simulation clock."""

        self.state.time += delta_time * self.cfg.time_scale

    def orbit_path(self, body: Body, sample_count: int | None = None) -> list[tuple[float, float]]:
        """Closed polyline of *body*'s orbit; cached since the shape never changes."""

        count = self.cfg.path_samples if sample_count is None else sample_count
        key = (body.semi_major_axis, body.eccentricity, count)
        cached = self._path_cache.get(key)
        if cached is None:
            cached = sample_orbit_path(body.semi_major_axis, body.eccentricity, count)
            self._path_cache[key] = cached
        return list(cached)


__all__ = ["OrbitModel"]
