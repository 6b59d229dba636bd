"""Canvas camera: a pinhole at the origin looking down +z.

The image plane sits at unit distance (z = 1) and is scaled by the canvas
dimensions so that it spans [-0.5, 0.5] in both x and y. Pixel (x, y), with
y growing downward as on a canvas, maps to the ray direction

    ((x - width/2) / width, (height/2 - y) / height, 1)

from the origin. The directions are not normalized; t = 1 is
the image plane.

Example:
    >>> from raycaster.camera.pinhole import CanvasCamera
    >>> camera = CanvasCamera(800, 800)
    >>> camera.direction(400, 400)
    Vec3(x=0.0, y=0.0, z=1.0)
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from raycaster.core.ray import Ray
from raycaster.core.vector import ZERO, Vec3

# Type alias for 3D vectors in Taichi scope
vec3 = tm.vec3

# Canvas size of the reference renders
DEFAULT_CANVAS_SIZE = (800, 800)


@dataclass(frozen=True)
class CanvasCamera:
    """Maps canvas pixels to primary rays.

    Attributes:
        width: Canvas width in pixels.
        height: Canvas height in pixels.
    """

    width: int = DEFAULT_CANVAS_SIZE[0]
    height: int = DEFAULT_CANVAS_SIZE[1]

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Canvas dimensions must be positive, got {self.width}x{self.height}"
            )

    @property
    def origin(self) -> Vec3:
        return ZERO

    def direction(self, x: float, y: float) -> Vec3:
        """Direction of the primary ray through canvas pixel (x, y)."""
        return Vec3(
            (x - self.width / 2) / self.width,
            (self.height / 2 - y) / self.height,
            1.0,
        )

    def ray(self, x: float, y: float) -> Ray:
        return Ray(self.origin, self.direction(x, y))


@ti.func
def canvas_direction(x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """Taichi counterpart of CanvasCamera.direction for use inside kernels.

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).
        width: Canvas width in pixels.
        height: Canvas height in pixels.

    Returns:
        The unnormalized primary ray direction.
    """
    w = ti.cast(width, ti.f32)
    h = ti.cast(height, ti.f32)
    return vec3(
        (ti.cast(x, ti.f32) - w / 2.0) / w,
        (h / 2.0 - ti.cast(y, ti.f32)) / h,
        1.0,
    )
