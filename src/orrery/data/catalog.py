"""Built-in catalog of solar-system bodies."""
from __future__ import annotations

from dataclasses import dataclass

from orrery.core.model import Body, Color

# Orbit radii are multiplied by this so the outer planets fill the default view.
ORBIT_SCALE = 1.5


@dataclass(frozen=True)
class BodySpec:
    key: str
    name: str
    semi_major_axis: float  # AU before ORBIT_SCALE
    eccentricity: float
    orbital_period: float  # years
    visual_radius: float
    color: Color

    def build(self) -> Body:
        return Body(
            semi_major_axis=self.semi_major_axis * ORBIT_SCALE,
            eccentricity=self.eccentricity,
            orbital_period=self.orbital_period,
            visual_radius=self.visual_radius,
            color=self.color,
            name=self.name,
        )


BODY_DEFINITIONS: tuple[BodySpec, ...] = (
    BodySpec("mercury", "Mercury", 0.4, 0.205, 0.24, 0.015, (1.0, 0.0, 0.0)),
    BodySpec("venus", "Venus", 0.7, 0.007, 0.62, 0.02, (1.0, 1.0, 1.0)),
    BodySpec("earth", "Earth", 1.0, 0.017, 1.0, 0.025, (0.0, 0.0, 1.0)),
    BodySpec("mars", "Mars", 1.5, 0.093, 1.88, 0.02, (1.0, 0.0, 0.0)),
    BodySpec("jupiter", "Jupiter", 2.8, 0.048, 11.86, 0.04, (1.0, 0.5, 0.0)),
    BodySpec("saturn", "Saturn", 3.5, 0.056, 29.45, 0.035, (1.0, 1.0, 0.5)),
    BodySpec("uranus", "Uranus", 4.0, 0.046, 84.02, 0.03, (0.0, 0.5, 1.0)),
    BodySpec("neptune", "Neptune", 4.5, 0.010, 164.79, 0.03, (0.0, 0.0, 1.0)),
)

BODIES: dict[str, BodySpec] = {spec.key: spec for spec in BODY_DEFINITIONS}
BODY_DISPLAY_ORDER: list[str] = [spec.key for spec in BODY_DEFINITIONS]


def build_bodies(keys: list[str] | None = None) -> list[Body]:
    """Fresh, independent :class:`Body` instances in catalog order."""

    selected = BODY_DISPLAY_ORDER if keys is None else keys
    unknown = [key for key in selected if key not in BODIES]
    if unknown:
        raise ValueError(f"Unknown bodies: {', '.join(unknown)}")
    return [BODIES[key].build() for key in selected]


__all__ = [
    "BODIES",
    "BODY_DEFINITIONS",
    "BODY_DISPLAY_ORDER",
    "BodySpec",
    "ORBIT_SCALE",
    "build_bodies",
]
