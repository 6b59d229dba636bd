"""Camera module for primary ray generation.

Components:
    pinhole: Canvas camera at the origin with a unit-distance image plane
        scaled by the canvas dimensions

The camera is the only place that knows about canvas pixels; everything
after it works on rays.
"""

from .pinhole import DEFAULT_CANVAS_SIZE, CanvasCamera, canvas_direction

__all__ = [
    "CanvasCamera",
    "canvas_direction",
    "DEFAULT_CANVAS_SIZE",
]
