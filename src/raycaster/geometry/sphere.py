"""Sphere primitive with ray-sphere intersection.

This module provides the immutable Sphere value used by the Python ray caster
and a Taichi function with the same intersection rule for the parallel
renderer.

The ray-sphere intersection is found by solving:
    |origin + t * direction - center|^2 = radius^2

Expanding and rearranging gives the quadratic equation:
    a*t^2 + b*t + c = 0

where:
    oc = origin - center
    a = dot(direction, direction)
    b = 2 * dot(oc, direction)
    c = dot(oc, oc) - radius^2

Two root-selection policies exist. GENERAL returns the smallest real root and
leaves range filtering to the caller (the scene query applies an explicit
[t_min, t_max] window). NEAR_CLIP discards roots <= 1, which only makes sense
for camera rays whose direction ends on the unit-distance image plane.

Example:
    >>> from raycaster.core.vector import Vec3
    >>> from raycaster.geometry.sphere import Sphere
    >>> sphere = Sphere(center=Vec3(0, 0, 3), radius=1.0, color=Vec3(255, 0, 0))
    >>> sphere.intersect(Vec3(0, 0, 0), Vec3(0, 0, 1))
    2.0
"""

from dataclasses import dataclass
from enum import IntEnum

import taichi as ti
import taichi.math as tm

from raycaster.core.quadratic import solve_quadratic
from raycaster.core.vector import Vec3

# Type alias for 3D vectors in Taichi scope
vec3 = tm.vec3

# Sentinel for "this surface has no specular highlight"
NO_SPECULAR = -1.0


class IntersectionPolicy(IntEnum):
    """Root-selection rule for ray-sphere intersection."""

    GENERAL = 0
    NEAR_CLIP = 1


@dataclass(frozen=True)
class Sphere:
    """A shaded sphere.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive).
        color: RGB color with components in [0, 255].
        specular: Phong shininess exponent, or NO_SPECULAR to disable the
            specular term for this surface.
        reflectivity: Fraction of the shaded color replaced by the mirror
            reflection, in [0, 1]. Zero is a purely local surface.
    """

    center: Vec3
    radius: float
    color: Vec3
    specular: float = NO_SPECULAR
    reflectivity: float = 0.0

    def __post_init__(self) -> None:
        if not self.radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")
        if not 0.0 <= self.reflectivity <= 1.0:
            raise ValueError(f"Reflectivity must be in [0, 1], got {self.reflectivity}")
        if self.specular != NO_SPECULAR and self.specular < 0.0:
            raise ValueError(
                f"Specular exponent must be non-negative or NO_SPECULAR, got {self.specular}"
            )

    @property
    def has_specular(self) -> bool:
        return self.specular != NO_SPECULAR

    def normal_at(self, point: Vec3) -> Vec3:
        """Unit outward normal at a point on the surface."""
        return (point - self.center).normalize()

    def intersect(
        self,
        origin: Vec3,
        direction: Vec3,
        policy: IntersectionPolicy = IntersectionPolicy.GENERAL,
    ) -> float | None:
        """Intersect a ray with this sphere.

        Args:
            origin: The ray origin.
            direction: The ray direction (not required to be unit length).
            policy: Root-selection rule. GENERAL accepts any real root;
                NEAR_CLIP discards roots <= 1.

        Returns:
            The smallest accepted ray parameter t, or None if the ray misses.

        Raises:
            ValueError: If ``direction`` is the zero vector.
        """
        oc = origin - self.center
        a = direction.dot(direction)
        b = 2.0 * oc.dot(direction)
        c = oc.dot(oc) - self.radius * self.radius

        closest = None
        for t in solve_quadratic(a, b, c):
            if policy == IntersectionPolicy.NEAR_CLIP and t <= 1.0:
                continue
            if closest is None or t < closest:
                closest = t
        return closest


@ti.func
def hit_sphere_t(ray_origin: vec3, ray_direction: vec3, center: vec3, radius: ti.f32):
    """Smallest real root of the ray-sphere quadratic (GENERAL policy).

    Taichi counterpart of ``Sphere.intersect`` for use inside kernels. The
    caller guarantees a non-zero direction.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray.
        center: The sphere center.
        radius: The sphere radius.

    Returns:
        A tuple (hit, t) where hit is 1 if the quadratic has a real root and
        t is the smallest root (only valid if hit == 1).
    """
    oc = ray_origin - center
    a = tm.dot(ray_direction, ray_direction)
    b = 2.0 * tm.dot(oc, ray_direction)
    c = tm.dot(oc, oc) - radius * radius
    discriminant = b * b - 4.0 * a * c

    did_hit = 0
    hit_t = 0.0
    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)
        t0 = (-b - sqrt_d) / (2.0 * a)
        t1 = (-b + sqrt_d) / (2.0 * a)
        did_hit = 1
        hit_t = ti.min(t0, t1)

    return did_hit, hit_t
