"""Whitted-style recursive ray caster.

This module is the reference implementation of the shading pipeline. For
every ray it finds the closest sphere, sums the light contributions at the
hit point (ambient + diffuse + specular with hard shadows), and, for
reflective surfaces, recursively traces the mirror direction and blends:

    color = local * (1 - reflectivity) + reflected * reflectivity

Recursion stops at depth 0 or on a non-reflective surface. Colors are not
clamped here; values above 255 are expected in bright spots and are clamped
by the framebuffer helpers in raycaster.preview.export.

Everything in this module is plain Python over immutable values, evaluated
one pixel at a time. For whole frames, raycaster.core.parallel evaluates the
same model in a Taichi kernel.

Example:
    >>> from raycaster.camera.pinhole import CanvasCamera
    >>> from raycaster.core.integrator import render_pixel
    >>> from raycaster.scene.reference import create_reference_scene
    >>> scene = create_reference_scene()
    >>> color = render_pixel(scene, CanvasCamera(800, 800), 400, 450)
"""

import math
from collections.abc import Callable

import numpy as np
import numpy.typing as npt

from raycaster.camera.pinhole import CanvasCamera
from raycaster.core.vector import Vec3, reflect
from raycaster.lighting.light import light_intensity
from raycaster.scene.manager import Scene

# =============================================================================
# Rendering Constants
# =============================================================================

# Number of reflection bounces traced per camera ray
DEFAULT_DEPTH = 3

# Window for camera and reflected rays; t_min keeps a reflected ray from
# re-hitting the surface it starts on
T_MIN = 1e-3
T_MAX = math.inf

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


def local_intensity(
    scene: Scene,
    point: Vec3,
    normal: Vec3,
    view: Vec3,
    object_index: int,
) -> float:
    """Total light intensity at a surface point, summed over all lights.

    Args:
        scene: The scene being rendered.
        point: The shaded surface point.
        normal: The unit outward normal at ``point``.
        view: The negated incoming ray direction.
        object_index: Index of the shaded sphere.

    Returns:
        The unclamped scalar intensity.
    """
    total = 0.0
    for light in scene.lights:
        total += light_intensity(light, scene, point, normal, view, object_index)
    return total


def cast(scene: Scene, origin: Vec3, direction: Vec3, depth: int = DEFAULT_DEPTH) -> Vec3:
    """Trace a ray through the scene and return its color.

    Args:
        scene: The scene to trace against.
        origin: The starting point of the ray.
        direction: The ray direction (non-zero, need not be unit length).
        depth: Remaining reflection bounces. 0 disables reflection.

    Returns:
        The RGB color seen along the ray, possibly above 255.

    Raises:
        ValueError: If depth is negative or direction is the zero vector.
    """
    if depth < 0:
        raise ValueError(f"Recursion depth must be non-negative, got {depth}")

    hit = scene.closest_intersection(origin, direction, T_MIN, T_MAX)
    if not hit.hit:
        return scene.background

    sphere = scene.spheres[hit.object_index]
    normal = sphere.normal_at(hit.point)
    view = -direction

    intensity = local_intensity(scene, hit.point, normal, view, hit.object_index)
    local_color = sphere.color.scale(intensity)

    reflectivity = sphere.reflectivity
    if depth == 0 or reflectivity == 0.0:
        return local_color

    reflected_direction = reflect(view, normal)
    reflected_color = cast(scene, hit.point, reflected_direction, depth - 1)

    return local_color.scale(1.0 - reflectivity) + reflected_color.scale(reflectivity)


# =============================================================================
# Public Rendering API
# =============================================================================


def render_pixel(
    scene: Scene,
    camera: CanvasCamera,
    x: int,
    y: int,
    depth: int = DEFAULT_DEPTH,
) -> Vec3:
    """Color of canvas pixel (x, y).

    Args:
        scene: The scene to render.
        camera: The canvas camera defining the pixel-to-ray mapping.
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).
        depth: Reflection depth.

    Returns:
        The unclamped RGB color.
    """
    return cast(scene, camera.origin, camera.direction(x, y), depth)


def render_image(
    scene: Scene,
    camera: CanvasCamera,
    depth: int = DEFAULT_DEPTH,
    callback: ProgressCallback | None = None,
) -> npt.NDArray[np.float32]:
    """Render every pixel of the canvas one at a time.

    Args:
        scene: The scene to render.
        camera: The canvas camera; its size is the image size.
        depth: Reflection depth.
        callback: Optional callback called after each row with
            (rows_done, total_rows).

    Returns:
        NumPy array of shape (height, width, 3) with unclamped RGB values.
        Row 0 is the top canvas row.
    """
    image = np.zeros((camera.height, camera.width, 3), dtype=np.float32)

    for y in range(camera.height):
        for x in range(camera.width):
            color = render_pixel(scene, camera, x, y, depth)
            image[y, x] = (color.x, color.y, color.z)

        if callback is not None:
            callback(y + 1, camera.height)

    return image
