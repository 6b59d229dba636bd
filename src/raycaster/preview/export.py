"""Framebuffer conversion and image export.

The ray caster produces unclamped colors in the 0-255 range. This module is
the pixel-write boundary: colors are clamped here, written as 4 bytes per
pixel (RGBA, alpha always 255) and saved with Pillow.

Example:
    >>> from raycaster.preview.export import save_png
    >>> from raycaster.core.parallel import ParallelRenderer
    >>>
    >>> renderer = ParallelRenderer(scene, 800, 800)
    >>> renderer.render()
    >>> save_png(renderer, "output.png")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from raycaster.core.vector import Vec3

if TYPE_CHECKING:
    from raycaster.core.parallel import ParallelRenderer

# Alpha written for every pixel
OPAQUE = 255


def clamp_color(color: Vec3) -> tuple[int, int, int]:
    """Clamp a color to [0, 255] and truncate to integer channels."""
    return (
        int(min(max(color.x, 0.0), 255.0)),
        int(min(max(color.y, 0.0), 255.0)),
        int(min(max(color.z, 0.0), 255.0)),
    )


def image_to_rgba8(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert an unclamped RGB image to an 8-bit RGBA buffer.

    Args:
        image: Array of shape (H, W, 3) with colors on the 0-255 scale.

    Returns:
        Array of shape (H, W, 4), dtype uint8, alpha channel 255.

    Raises:
        ValueError: If the image does not have 3 channels.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")

    rgb = np.clip(np.nan_to_num(image, nan=0.0), 0.0, 255.0).astype(np.uint8)
    alpha = np.full(rgb.shape[:2] + (1,), OPAQUE, dtype=np.uint8)
    return np.concatenate([rgb, alpha], axis=2)


class Framebuffer:
    """RGBA pixel buffer written one pixel at a time.

    Pixel (x, y) occupies bytes 4 * (y * width + x) .. + 3 of the flat
    buffer, matching the layout of a canvas image.

    Attributes:
        width: Buffer width in pixels.
        height: Buffer height in pixels.
        data: The (height, width, 4) uint8 backing array.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Framebuffer dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.data = np.zeros((height, width, 4), dtype=np.uint8)

    def put_pixel(self, x: int, y: int, color: Vec3) -> None:
        """Write a clamped color with alpha 255 at (x, y)."""
        r, g, b = clamp_color(color)
        self.data[y, x] = (r, g, b, OPAQUE)

    def tobytes(self) -> bytes:
        return self.data.tobytes()

    def to_pil(self) -> PILImage.Image:
        return PILImage.fromarray(self.data)

    @classmethod
    def from_image(cls, image: npt.NDArray[np.floating]) -> Framebuffer:
        """Build a framebuffer from an unclamped (H, W, 3) RGB image."""
        framebuffer = cls(image.shape[1], image.shape[0])
        framebuffer.data = image_to_rgba8(image)
        return framebuffer


def save_png(renderer: ParallelRenderer, filepath: str) -> None:
    """Save the renderer's current color buffer as an RGBA PNG.

    Args:
        renderer: The ParallelRenderer instance to save.
        filepath: Output file path (should end in .png).
    """
    save_png_from_array(renderer.get_image_numpy(), filepath)


def save_png_from_array(image: npt.NDArray[np.floating], filepath: str) -> None:
    """Save an unclamped (H, W, 3) RGB image as an RGBA PNG.

    Args:
        image: Image array with colors on the 0-255 scale.
        filepath: Output file path (should end in .png).
    """
    Framebuffer.from_image(image).to_pil().save(filepath)


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
