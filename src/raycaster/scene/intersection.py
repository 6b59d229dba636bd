"""Scene-level closest-hit query.

The scene query is a brute-force linear scan: every sphere is intersected
with the GENERAL root policy and the smallest t strictly inside the window
(t_min, t_max) wins. The comparison is strict, so when two spheres report
exactly the same t the one earlier in scene order is kept.

The same query serves primary rays, reflected rays and shadow rays; only
the window differs:

    camera / reflected rays   t_min = T_MIN,        t_max = inf
    shadow ray, point light   t_min = SHADOW_T_MIN, t_max = 1
    shadow ray, directional   t_min = SHADOW_T_MIN, t_max = inf
"""

from collections.abc import Sequence
from dataclasses import dataclass

from raycaster.core.vector import ZERO, Vec3
from raycaster.geometry.sphere import Sphere

# Object index reported when nothing was hit
NO_OBJECT = -1


@dataclass(frozen=True)
class Intersection:
    """Record of a ray-scene intersection.

    Attributes:
        hit: Whether the ray intersected any sphere inside the window.
        t: The ray parameter of the hit. Only valid if hit is True.
        object_index: Index of the hit sphere in scene order, or NO_OBJECT.
        point: The hit point origin + t * direction. Only valid if hit is True.
    """

    hit: bool
    t: float
    object_index: int
    point: Vec3

    @classmethod
    def miss(cls) -> "Intersection":
        return cls(hit=False, t=0.0, object_index=NO_OBJECT, point=ZERO)


def closest_intersection(
    spheres: Sequence[Sphere],
    origin: Vec3,
    direction: Vec3,
    t_min: float,
    t_max: float,
) -> Intersection:
    """Find the closest sphere hit along a ray inside (t_min, t_max).

    Args:
        spheres: The spheres to test, in scene order.
        origin: The starting point of the ray.
        direction: The direction vector of the ray (non-zero).
        t_min: Exclusive lower bound of the accepted t range.
        t_max: Exclusive upper bound of the accepted t range.

    Returns:
        The closest Intersection, or Intersection.miss() if none was found.
    """
    closest_t = t_max
    closest_index = NO_OBJECT

    for i, sphere in enumerate(spheres):
        t = sphere.intersect(origin, direction)
        if t is not None and t_min < t < closest_t:
            closest_t = t
            closest_index = i

    if closest_index == NO_OBJECT:
        return Intersection.miss()

    return Intersection(
        hit=True,
        t=closest_t,
        object_index=closest_index,
        point=origin + direction.scale(closest_t),
    )
