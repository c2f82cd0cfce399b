"""Orrery: animated Kepler orbits of the solar-system planets."""

__version__ = "1.0.0"
