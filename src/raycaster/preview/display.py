"""Matplotlib-based preview display for rendered images.

Images from the ray caster are on the 0-255 scale and unclamped; they are
clamped and rescaled to [0, 1] for display.

Example:
    >>> from raycaster.preview.display import show_preview
    >>> show_preview(renderer.get_image_numpy(), title="Reference scene")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from raycaster.preview.export import compute_rmse


def process_image_for_display(
    image: npt.NDArray[np.floating],
) -> npt.NDArray[np.float32]:
    """Clamp a 0-255 RGB image and rescale it to [0, 1] floats.

    Args:
        image: Unclamped image array of shape (H, W, 3).

    Returns:
        Image ready for display, in [0, 1] range.
    """
    result = np.clip(np.nan_to_num(image, nan=0.0), 0.0, 255.0) / 255.0
    return result.astype(np.float32)


def show_preview(
    image: npt.NDArray[np.floating],
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 8),
    block: bool = True,
) -> None:
    """Display a rendered image as a Matplotlib figure.

    Args:
        image: Unclamped image array of shape (H, W, 3) on the 0-255 scale.
        title: Custom title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = process_image_for_display(image)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")

    if title is None:
        title = f"Render Preview - {image.shape[1]}x{image.shape[0]}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)


def show_comparison(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
    *,
    labels: tuple[str, str] = ("A", "B"),
    diff_scale: float = 10.0,
    figsize: tuple[float, float] = (16, 6),
    block: bool = True,
) -> float:
    """Display side-by-side comparison of two images with difference view.

    Typically used to compare the Python ray caster with the parallel
    renderer.

    Args:
        image_a: First image array (H, W, 3) on the 0-255 scale.
        image_b: Second image array (H, W, 3) on the 0-255 scale.
        labels: Labels for the two images.
        diff_scale: Scale factor for difference amplification.
        figsize: Figure size in inches.
        block: Whether to block execution until figure is closed.

    Returns:
        RMSE between the two images in display space.
    """
    import matplotlib.pyplot as plt

    display_a = process_image_for_display(image_a)
    display_b = process_image_for_display(image_b)

    rmse = compute_rmse(display_a, display_b)
    diff_amplified = np.clip(np.abs(display_a - display_b) * diff_scale, 0.0, 1.0)

    fig, axes = plt.subplots(1, 3, figsize=figsize)

    axes[0].imshow(display_a)
    axes[0].set_title(labels[0])
    axes[0].axis("off")

    axes[1].imshow(display_b)
    axes[1].set_title(labels[1])
    axes[1].axis("off")

    axes[2].imshow(diff_amplified)
    axes[2].set_title(f"Difference ({diff_scale}x) - RMSE: {rmse:.6f}")
    axes[2].axis("off")

    plt.tight_layout()
    plt.show(block=block)

    return rmse
