"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with ray-sphere intersection

Spheres are the only primitive. Intersection follows the pattern:
    t = sphere.intersect(ray_origin, ray_direction)   # None on a miss

and the Taichi counterpart for kernels:
    hit, t = hit_sphere_t(ray_origin, ray_direction, center, radius)
"""

from .sphere import NO_SPECULAR, IntersectionPolicy, Sphere, hit_sphere_t

__all__ = [
    "Sphere",
    "IntersectionPolicy",
    "NO_SPECULAR",
    "hit_sphere_t",
]
