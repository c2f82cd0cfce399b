"""Simulation core: orbit model, frame driver and run recording."""
