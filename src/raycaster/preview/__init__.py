"""Preview module for output and visualization.

Components:
    export: Clamping, RGBA framebuffer and PNG export (Pillow)
    display: Matplotlib-based static preview and comparison

Colors leave the ray caster unclamped; this package is where they are
clamped to [0, 255] and written with alpha 255.

Example:
    >>> from raycaster.preview import save_png, show_preview
    >>> renderer.render()
    >>> show_preview(renderer.get_image_numpy())
    >>> save_png(renderer, "output.png")
"""

from raycaster.preview.display import (
    process_image_for_display,
    show_comparison,
    show_preview,
)
from raycaster.preview.export import (
    Framebuffer,
    clamp_color,
    compute_rmse,
    image_to_rgba8,
    save_png,
    save_png_from_array,
)

__all__ = [
    # Display functions
    "show_preview",
    "show_comparison",
    "process_image_for_display",
    # Export functions
    "Framebuffer",
    "clamp_color",
    "image_to_rgba8",
    "save_png",
    "save_png_from_array",
    "compute_rmse",
]
