"""Kepler-orbit helpers for the orrery."""
from __future__ import annotations

import math
from typing import NamedTuple

import numpy as np

from .config import ORBIT_CFG, OrbitCfg
from .model import TWO_PI


class KeplerSolution(NamedTuple):
    eccentric_anomaly: float
    iterations: int
    converged: bool
    last_correction: float


def wrap_angle(angle: float) -> float:
    """Normalise *angle* into ``[0, 2π)``."""

    wrapped = math.fmod(angle, TWO_PI)
    if wrapped < 0.0:
        wrapped += TWO_PI
    # fmod of a tiny negative value can round up to exactly 2π
    if wrapped >= TWO_PI:
        wrapped -= TWO_PI
    return wrapped


def solve_kepler(
    mean_anomaly: float,
    eccentricity: float,
    cfg: OrbitCfg = ORBIT_CFG,
) -> KeplerSolution:
    """Solve ``M = E - e sin(E)`` for ``E`` with Newton-Raphson.

    Starts from ``E = M`` and stops when the correction drops below
    ``cfg.kepler_tolerance`` or after ``cfg.kepler_max_iterations`` steps.
    Running out of iterations is reported through ``converged`` and the last
    estimate is still returned.
    """

    e_anom = mean_anomaly
    correction = 0.0
    for iteration in range(1, cfg.kepler_max_iterations + 1):
        correction = (e_anom - eccentricity * math.sin(e_anom) - mean_anomaly) / (
            1.0 - eccentricity * math.cos(e_anom)
        )
        e_anom -= correction
        if abs(correction) < cfg.kepler_tolerance:
            return KeplerSolution(e_anom, iteration, True, correction)
    return KeplerSolution(e_anom, cfg.kepler_max_iterations, False, correction)


def true_anomaly(eccentric_anomaly: float, eccentricity: float) -> float:
    """Convert eccentric anomaly to true anomaly.

    Uses the half-angle tangent form, which loses precision as ``e`` nears 1
    and around ``E = π``. Callers are expected to stay on bound orbits with
    modest eccentricity.
    """

    factor = math.sqrt((1.0 + eccentricity) / (1.0 - eccentricity))
    return 2.0 * math.atan(factor * math.tan(eccentric_anomaly / 2.0))


def conic_radius(semi_major_axis: float, eccentricity: float, nu):
    """Distance from the focus at true anomaly *nu* (scalar or array)."""

    return semi_major_axis * (1.0 - eccentricity * eccentricity) / (
        1.0 + eccentricity * np.cos(nu)
    )


def polar_to_cartesian(r: float, nu: float) -> tuple[float, float]:
    return r * math.cos(nu), r * math.sin(nu)


def sample_orbit_path(
    semi_major_axis: float,
    eccentricity: float,
    sample_count: int = ORBIT_CFG.path_samples,
) -> list[tuple[float, float]]:
    """Closed polyline tracing the ellipse, first point repeated at the end."""

    if sample_count < 1:
        raise ValueError("sample_count must be positive")
    angles = np.linspace(0.0, TWO_PI, sample_count + 1)
    radii = conic_radius(semi_major_axis, eccentricity, angles)
    xs = radii * np.cos(angles)
    ys = radii * np.sin(angles)
    points = [(float(x), float(y)) for x, y in zip(xs, ys)]
    points[-1] = points[0]
    return points


__all__ = [
    "KeplerSolution",
    "conic_radius",
    "polar_to_cartesian",
    "sample_orbit_path",
    "solve_kepler",
    "true_anomaly",
    "wrap_angle",
]
