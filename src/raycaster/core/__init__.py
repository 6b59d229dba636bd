"""Core rendering module.

Components:
    vector: Immutable Vec3 and vector utilities
    ray: Ray data structure
    quadratic: Real roots of a*t^2 + b*t + c = 0
    integrator: Recursive Whitted-style ray caster (one pixel at a time)
    parallel: Taichi frame renderer evaluating the same model for all pixels
"""

from .quadratic import solve_quadratic
from .ray import Ray, ray_at
from .vector import (
    ZERO,
    Vec3,
    add,
    cross,
    dot,
    length,
    length_squared,
    normalize,
    reflect,
    scale,
    sub,
)

# Note: integrator and parallel are NOT imported here to avoid circular imports.
# Import directly from raycaster.core.integrator or raycaster.core.parallel.

__all__ = [
    "Vec3",
    "ZERO",
    "add",
    "sub",
    "scale",
    "dot",
    "cross",
    "length",
    "length_squared",
    "normalize",
    "reflect",
    "Ray",
    "ray_at",
    "solve_quadratic",
]
