"""Data models for the orrery simulation state."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from orrery.render.camera import Camera

TWO_PI = 2.0 * math.pi

Color = tuple[float, float, float]

_FIXED_FIELDS = frozenset(
    {"semi_major_axis", "eccentricity", "orbital_period", "visual_radius", "color"}
)


@dataclass
class Body:
    """A body on a fixed elliptical orbit around the star at the origin.

    Only ``mean_anomaly`` and the values derived from it change once the body
    exists. The orbit shape and appearance are fixed at construction and
    assigning to them afterwards raises ``AttributeError``.
    """

    semi_major_axis: float
    eccentricity: float
    orbital_period: float
    visual_radius: float
    color: Color
    name: str = ""
    mean_anomaly: float = 0.0
    angle: float = 0.0
    solver_iterations: int = 0

    def __post_init__(self) -> None:
        if not self.semi_major_axis > 0.0:
            raise ValueError(f"{self.label}: semi-major axis must be positive")
        if not 0.0 <= self.eccentricity < 1.0:
            raise ValueError(f"{self.label}: eccentricity must lie in [0, 1)")
        if not self.orbital_period > 0.0:
            raise ValueError(f"{self.label}: orbital period must be positive")
        if not self.visual_radius > 0.0:
            raise ValueError(f"{self.label}: visual radius must be positive")
        if len(self.color) != 3 or any(not 0.0 <= c <= 1.0 for c in self.color):
            raise ValueError(f"{self.label}: color components must lie in [0, 1]")
        self.color = tuple(float(c) for c in self.color)
        self.mean_anomaly = self.mean_anomaly % TWO_PI
        object.__setattr__(self, "_sealed", True)

    def __setattr__(self, name: str, value) -> None:
        if name in _FIXED_FIELDS and getattr(self, "_sealed", False):
            raise AttributeError(f"{self.label}: {name} is fixed once the body exists")
        super().__setattr__(name, value)

    @property
    def label(self) -> str:
        return self.name or "body"

    @property
    def perihelion(self) -> float:
        return self.semi_major_axis * (1.0 - self.eccentricity)

    @property
    def aphelion(self) -> float:
        return self.semi_major_axis * (1.0 + self.eccentricity)


@dataclass
class SolverStats:
    """Running diagnostics for the Kepler solver."""

    solves: int = 0
    nonconverged: int = 0
    worst_correction: float = 0.0

    def record(self, converged: bool, correction: float) -> None:
        self.solves += 1
        if not converged:
            self.nonconverged += 1
        self.worst_correction = max(self.worst_correction, abs(correction))

    def reset(self) -> None:
        self.solves = 0
        self.nonconverged = 0
        self.worst_correction = 0.0


@dataclass
class SimState:
    """Everything one running simulation owns."""

    bodies: list[Body]
    camera: "Camera"
    stats: SolverStats = field(default_factory=SolverStats)
    time: float = 0.0
    frame: int = 0


__all__ = ["Body", "Color", "SimState", "SolverStats", "TWO_PI"]
