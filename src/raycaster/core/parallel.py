"""Parallel frame renderer running the ray caster in a Taichi kernel.

The Python ray caster in raycaster.core.integrator evaluates one pixel at a
time. Because the scene is read-only during a frame, every pixel is
independent, so this module uploads a Scene into Taichi fields once and
evaluates all pixels in parallel.

Taichi functions cannot recurse, so the reflection recursion

    cast(d) = local * (1 - r) + cast(d - 1) * r

is unrolled into a loop that carries the product of reflectivities seen so
far (the blend weight):

    color += weight * (1 - r) * local
    weight *= r

and adds ``weight * local`` on the last bounce or on a non-reflective
surface. This is the same sum the recursion produces.

Each ParallelRenderer owns its fields, so several renderers for different
scenes can coexist.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.core.parallel import ParallelRenderer
    >>> from raycaster.scene.reference import create_reference_scene
    >>>
    >>> renderer = ParallelRenderer(create_reference_scene(), 800, 800)
    >>> renderer.render()
    >>> image = renderer.get_image_numpy()
"""

from collections.abc import Generator

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from raycaster.camera.pinhole import canvas_direction
from raycaster.core.integrator import DEFAULT_DEPTH, T_MIN, ProgressCallback
from raycaster.geometry.sphere import NO_SPECULAR, hit_sphere_t
from raycaster.lighting.light import SHADOW_T_MIN, LightKind
from raycaster.scene.manager import Scene

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Kernel Constants
# =============================================================================

# Stand-in for an unbounded t window (fields are f32)
KERNEL_T_MAX = 1e10

# Capacity limits
MAX_SPHERES = 1024
MAX_LIGHTS = 64
MAX_IMAGE_WIDTH = 4096
MAX_IMAGE_HEIGHT = 4096

# Light type tags as stored in the light fields
_AMBIENT = int(LightKind.AMBIENT)
_POINT = int(LightKind.POINT)


@ti.func
def _reflect(v: vec3, n: vec3) -> vec3:
    """Mirror v about the unit normal n (both pointing away from the surface)."""
    return 2.0 * tm.dot(v, n) * n - v


@ti.data_oriented
class ParallelRenderer:
    """Renders whole frames of a Scene with a Taichi kernel.

    The scene is copied into Taichi fields at construction (Structure of
    Arrays layout); later changes to Python objects are not seen. The color
    buffer holds unclamped RGB values indexed by canvas (x, y), y = 0 at top.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        depth: Reflection depth used by render().
    """

    def __init__(self, scene: Scene, width: int, height: int, depth: int = DEFAULT_DEPTH) -> None:
        """Upload the scene and allocate the color buffer.

        Args:
            scene: The scene to render.
            width: Image width in pixels (max MAX_IMAGE_WIDTH).
            height: Image height in pixels (max MAX_IMAGE_HEIGHT).
            depth: Reflection depth.

        Raises:
            ValueError: If dimensions are out of range or depth is negative.
            RuntimeError: If the scene exceeds the sphere or light capacity.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
            raise ValueError(
                f"Image dimensions ({width}x{height}) exceed maximum supported "
                f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
            )
        if depth < 0:
            raise ValueError(f"Recursion depth must be non-negative, got {depth}")
        if len(scene.spheres) > MAX_SPHERES:
            raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
        if len(scene.lights) > MAX_LIGHTS:
            raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")

        self._width = width
        self._height = height
        self._depth = depth
        self._rows_rendered = 0

        # Sphere storage: Structure of Arrays layout
        n_spheres = max(len(scene.spheres), 1)
        self._centers = ti.Vector.field(3, dtype=ti.f32, shape=n_spheres)
        self._radii = ti.field(dtype=ti.f32, shape=n_spheres)
        self._colors = ti.Vector.field(3, dtype=ti.f32, shape=n_spheres)
        self._speculars = ti.field(dtype=ti.f32, shape=n_spheres)
        self._reflectivities = ti.field(dtype=ti.f32, shape=n_spheres)
        self._num_spheres = ti.field(dtype=ti.i32, shape=())

        # Light storage; _light_vectors holds the position or the direction
        n_lights = max(len(scene.lights), 1)
        self._light_kinds = ti.field(dtype=ti.i32, shape=n_lights)
        self._light_intensities = ti.field(dtype=ti.f32, shape=n_lights)
        self._light_vectors = ti.Vector.field(3, dtype=ti.f32, shape=n_lights)
        self._num_lights = ti.field(dtype=ti.i32, shape=())

        self._background = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._color_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(width, height))

        self._upload(scene)

    def _upload(self, scene: Scene) -> None:
        """Copy the scene into the Taichi fields."""
        for i, sphere in enumerate(scene.spheres):
            self._centers[i] = list(sphere.center)
            self._radii[i] = sphere.radius
            self._colors[i] = list(sphere.color)
            self._speculars[i] = sphere.specular
            self._reflectivities[i] = sphere.reflectivity
        self._num_spheres[None] = len(scene.spheres)

        for k, light in enumerate(scene.lights):
            self._light_kinds[k] = int(light.kind)
            self._light_intensities[k] = light.intensity
            if light.vector is not None:
                self._light_vectors[k] = list(light.vector)
        self._num_lights[None] = len(scene.lights)

        self._background[None] = list(scene.background)
        self._color_buffer.fill(0.0)

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def rows_rendered(self) -> int:
        """Number of canvas rows rendered into the buffer so far."""
        return self._rows_rendered

    # =========================================================================
    # Taichi Functions
    # =========================================================================

    @ti.func
    def _closest_hit(self, origin: vec3, direction: vec3, t_min: ti.f32, t_max: ti.f32):
        """Linear scan for the closest sphere hit with t in (t_min, t_max).

        Returns:
            A tuple (object_index, t); object_index is -1 on a miss.
        """
        closest_t = t_max
        closest_index = -1
        for i in range(self._num_spheres[None]):
            did_hit, t = hit_sphere_t(origin, direction, self._centers[i], self._radii[i])
            if did_hit == 1 and t > t_min and t < closest_t:
                closest_t = t
                closest_index = i
        return closest_index, closest_t

    @ti.func
    def _local_intensity(self, point: vec3, normal: vec3, view: vec3, object_index: ti.i32) -> ti.f32:
        """Sum of all light contributions at a surface point."""
        total = 0.0
        for k in range(self._num_lights[None]):
            kind = self._light_kinds[k]
            intensity = self._light_intensities[k]
            if kind == _AMBIENT:
                total += intensity
            else:
                l = self._light_vectors[k]
                t_max = KERNEL_T_MAX
                if kind == _POINT:
                    l = self._light_vectors[k] - point
                    t_max = 1.0

                blocker, _ = self._closest_hit(point, l, SHADOW_T_MIN, t_max)
                if blocker == -1 or blocker == object_index:
                    n_dot_l = tm.dot(normal, l)
                    if n_dot_l > 0.0:
                        total += intensity * n_dot_l / tm.length(l)

                    specular = self._speculars[object_index]
                    if specular != NO_SPECULAR:
                        r = 2.0 * n_dot_l * normal - l
                        r_dot_v = tm.dot(r, view)
                        if r_dot_v > 0.0:
                            cos_alpha = r_dot_v / (tm.length(r) * tm.length(view))
                            total += intensity * cos_alpha**specular
        return total

    @ti.func
    def _trace_pixel(self, x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32, depth: ti.i32) -> vec3:
        """Trace the primary ray through canvas pixel (x, y) and its reflections."""
        origin = vec3(0.0, 0.0, 0.0)
        direction = canvas_direction(x, y, width, height)

        color = vec3(0.0, 0.0, 0.0)
        weight = 1.0

        # Active flag for path continuation
        active = 1

        for bounce in range(depth + 1):
            if active == 1:
                hit_index, t = self._closest_hit(origin, direction, T_MIN, KERNEL_T_MAX)

                if hit_index == -1:
                    color += weight * self._background[None]
                    active = 0
                else:
                    point = origin + t * direction
                    normal = tm.normalize(point - self._centers[hit_index])
                    view = -direction

                    intensity = self._local_intensity(point, normal, view, hit_index)
                    local_color = intensity * self._colors[hit_index]
                    reflectivity = self._reflectivities[hit_index]

                    if bounce == depth or reflectivity == 0.0:
                        color += weight * local_color
                        active = 0
                    else:
                        color += weight * (1.0 - reflectivity) * local_color
                        weight *= reflectivity
                        origin = point
                        direction = _reflect(view, normal)

        return color

    # =========================================================================
    # Rendering Kernels
    # =========================================================================

    @ti.kernel
    def _render_rows(self, y_start: ti.i32, y_end: ti.i32, width: ti.i32, height: ti.i32, depth: ti.i32):
        """Render canvas rows [y_start, y_end) into the color buffer."""
        for x, y in ti.ndrange(width, (y_start, y_end)):
            self._color_buffer[x, y] = self._trace_pixel(x, y, width, height, depth)

    @ti.kernel
    def _render_single_pixel(self, x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32, depth: ti.i32) -> vec3:
        """Render one pixel without touching the color buffer."""
        return self._trace_pixel(x, y, width, height, depth)

    # =========================================================================
    # Public Rendering API
    # =========================================================================

    def render_pixel(self, x: int, y: int) -> tuple[float, float, float]:
        """Render a single canvas pixel.

        Useful for testing individual pixels against the Python ray caster.

        Returns:
            Tuple of (R, G, B) color values, unclamped.
        """
        color = self._render_single_pixel(x, y, self._width, self._height, self._depth)
        return (float(color[0]), float(color[1]), float(color[2]))

    def render(self, batch_rows: int | None = None, callback: ProgressCallback | None = None) -> None:
        """Render the full frame into the color buffer.

        Args:
            batch_rows: Number of rows rendered per kernel launch. Default
                renders the whole frame in one launch.
            callback: Optional callback called after each batch with
                (rows_done, total_rows).
        """
        for rows_done, total_rows in self.render_progressive(batch_rows):
            if callback is not None:
                callback(rows_done, total_rows)

    def render_progressive(self, batch_rows: int | None = None) -> Generator[tuple[int, int], None, None]:
        """Render the full frame, yielding progress after each batch of rows.

        Args:
            batch_rows: Number of rows rendered per kernel launch.

        Yields:
            Tuple of (rows_done, total_rows).

        Raises:
            ValueError: If batch_rows is not positive.
        """
        if batch_rows is None:
            batch_rows = self._height
        if batch_rows <= 0:
            raise ValueError(f"batch_rows must be positive, got {batch_rows}")

        self._rows_rendered = 0
        y = 0
        while y < self._height:
            y_end = min(y + batch_rows, self._height)
            self._render_rows(y, y_end, self._width, self._height, self._depth)
            y = y_end
            self._rows_rendered = y
            yield (y, self._height)

    def get_image_numpy(self) -> npt.NDArray[np.float32]:
        """Get the rendered image as a NumPy array.

        Returns:
            Unclamped RGB array of shape (height, width, 3), row 0 at the top.
        """
        # Transpose from (width, height, 3) to (height, width, 3)
        image = np.transpose(self._color_buffer.to_numpy(), (1, 0, 2))
        return np.ascontiguousarray(image, dtype=np.float32)

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"ParallelRenderer(width={self.width}, height={self.height}, "
            f"depth={self.depth}, rows_rendered={self.rows_rendered})"
        )
