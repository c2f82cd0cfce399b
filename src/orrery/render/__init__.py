"""Rendering helpers for the orrery."""

from .camera import Camera, CameraState

__all__ = ["Camera", "CameraState"]
