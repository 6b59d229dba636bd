"""Light sources and the Phong local illumination model.

A light is one of a small closed set of variants, tagged by ``LightKind``:

    AMBIENT      contributes its intensity everywhere, unconditionally
    POINT        positioned light; shadow rays stop at the light (t_max = 1)
    DIRECTIONAL  light from infinitely far away along a fixed vector

For point and directional lights the contribution at a surface point is the
sum of a Lambertian diffuse term and an optional Phong specular term, and is
zero when a shadow ray toward the light is blocked by another sphere.

Intensities are scalars; the shaded color is ``sphere.color * total``, and
the total is not clamped.

Example:
    >>> from raycaster.core.vector import Vec3
    >>> from raycaster.lighting.light import Light
    >>> lights = (
    ...     Light.ambient(0.2),
    ...     Light.point(0.6, Vec3(2, 1, 0)),
    ...     Light.directional(0.2, Vec3(1, 4, 4)),
    ... )
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING

from raycaster.core.vector import Vec3

if TYPE_CHECKING:
    from raycaster.scene.manager import Scene

# Shadow rays start slightly off the surface to avoid hitting it again
SHADOW_T_MIN = 1e-3


class LightKind(IntEnum):
    """Enumeration of supported light types.

    Used for dispatch in the lighting model; the integer values are also the
    type tags stored by the parallel renderer.
    """

    AMBIENT = 0
    POINT = 1
    DIRECTIONAL = 2


@dataclass(frozen=True)
class Light:
    """A light source.

    Attributes:
        kind: The light variant.
        intensity: Non-negative scalar intensity.
        vector: Position for POINT lights, direction toward the light for
            DIRECTIONAL lights, None for AMBIENT lights.
    """

    kind: LightKind
    intensity: float
    vector: Vec3 | None = None

    def __post_init__(self) -> None:
        if self.intensity < 0.0:
            raise ValueError(f"Light intensity must be non-negative, got {self.intensity}")
        if self.kind == LightKind.AMBIENT:
            if self.vector is not None:
                raise ValueError("Ambient lights take no position or direction")
        elif self.vector is None:
            raise ValueError(f"{self.kind.name.lower()} light requires a vector")
        elif self.kind == LightKind.DIRECTIONAL and self.vector.is_zero():
            raise ValueError("Directional light direction must be non-zero")

    @classmethod
    def ambient(cls, intensity: float) -> Light:
        return cls(LightKind.AMBIENT, intensity)

    @classmethod
    def point(cls, intensity: float, position: Vec3) -> Light:
        return cls(LightKind.POINT, intensity, position)

    @classmethod
    def directional(cls, intensity: float, direction: Vec3) -> Light:
        return cls(LightKind.DIRECTIONAL, intensity, direction)


def _to_light(light: Light, point: Vec3) -> tuple[Vec3, float]:
    """Vector from the surface toward the light and the shadow-ray window end.

    Point lights use t_max = 1 so that occluders beyond the light are ignored.
    """
    if light.kind == LightKind.POINT:
        return light.vector - point, 1.0
    return light.vector, math.inf


def light_intensity(
    light: Light,
    scene: Scene,
    point: Vec3,
    normal: Vec3,
    view: Vec3,
    object_index: int,
) -> float:
    """Scalar intensity one light contributes at a surface point.

    Args:
        light: The light to evaluate.
        scene: The scene, used for the shadow query and the specular exponent.
        point: The shaded surface point.
        normal: The unit outward surface normal at ``point``.
        view: Vector from the surface back toward the viewer, i.e. the negated
            incoming ray direction. Need not be unit length.
        object_index: Index of the shaded sphere in ``scene.spheres``, or -1
            to shade without a specular term.

    Returns:
        The light's contribution (diffuse + specular, or the ambient
        intensity). Zero when the point is in shadow.
    """
    if light.kind == LightKind.AMBIENT:
        return light.intensity

    l, t_max = _to_light(light, point)

    # A blocker other than the shaded sphere puts the point in shadow
    blocker = scene.closest_intersection(point, l, SHADOW_T_MIN, t_max)
    if blocker.hit and blocker.object_index != object_index:
        return 0.0

    total = 0.0

    # Diffuse: l is not normalized, dividing by |l| completes the cosine
    n_dot_l = normal.dot(l)
    if n_dot_l > 0.0:
        total += light.intensity * n_dot_l / l.length()

    # Specular
    if object_index != -1:
        sphere = scene.spheres[object_index]
        if sphere.has_specular:
            r = normal.scale(2.0 * n_dot_l) - l
            r_dot_v = r.dot(view)
            if r_dot_v > 0.0:
                cos_alpha = r_dot_v / (r.length() * view.length())
                total += light.intensity * cos_alpha ** sphere.specular

    return total
