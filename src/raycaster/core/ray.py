"""Ray data structure.

A ray is an origin point and a direction vector, evaluated parametrically as
``origin + t * direction``. The direction does not have to be unit length:
``t`` is measured in units of ``|direction|``, which is what the canvas camera
relies on (its directions have z == 1).
"""

from dataclasses import dataclass

from raycaster.core.vector import Vec3


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Must not be the zero vector.
    """

    origin: Vec3
    direction: Vec3

    def at(self, t: float) -> Vec3:
        return ray_at(self, t)


def ray_at(ray: Ray, t: float) -> Vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + ray.direction.scale(t)
