#!/usr/bin/env python3
"""Render the reference sphere scene.

This script renders the reference scene (or a scene loaded from a JSON file)
with shadows, specular highlights and reflections, and saves it as a PNG.

Usage:
    python -m examples.render_reference_scene [options]

Options:
    --width WIDTH         Image width in pixels (default: 800)
    --height HEIGHT       Image height in pixels (default: 800)
    --depth DEPTH         Reflection depth (default: 3)
    --scene PATH          JSON scene file (default: reference scene)
    --background COLOR    Background for the reference scene: black or white
    --output OUTPUT       Output file path (default: reference_scene.png)
    --batch-rows ROWS     Rows per progress update (default: 50)
    --cpu-reference       Use the pure-Python ray caster instead of Taichi
    --preview             Show the result in a Matplotlib window
    --quiet               Suppress progress output

Example:
    python -m examples.render_reference_scene --width 400 --height 400 --depth 2
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the reference sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=800,
        help="Image width in pixels (default: 800)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=800,
        help="Image height in pixels (default: 800)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=3,
        help="Reflection depth (default: 3)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene file (default: built-in reference scene)",
    )
    parser.add_argument(
        "--background",
        choices=["black", "white"],
        default="black",
        help="Background color of the reference scene (default: black)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="reference_scene.png",
        help="Output file path (default: reference_scene.png)",
    )
    parser.add_argument(
        "--batch-rows",
        type=int,
        default=50,
        help="Rows per progress update (default: 50)",
    )
    parser.add_argument(
        "--cpu-reference",
        action="store_true",
        help="Render with the pure-Python ray caster (slow)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the rendered image in a Matplotlib window",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_reference_scene(
    width: int = 800,
    height: int = 800,
    depth: int = 3,
    scene_path: str | None = None,
    background: str = "black",
    output_path: str = "reference_scene.png",
    batch_rows: int = 50,
    cpu_reference: bool = False,
    preview: bool = False,
    quiet: bool = False,
) -> Path:
    """Render a scene and save it to a file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        depth: Reflection depth.
        scene_path: Optional JSON scene file; the reference scene otherwise.
        background: "black" or "white" background for the reference scene.
        output_path: Output file path (PNG).
        batch_rows: Number of rows rendered between progress updates.
        cpu_reference: If True, use the pure-Python ray caster.
        preview: If True, show the image with Matplotlib after saving.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from raycaster.camera.pinhole import CanvasCamera
    from raycaster.core.integrator import render_image
    from raycaster.core.parallel import ParallelRenderer
    from raycaster.preview.display import show_preview
    from raycaster.preview.export import save_png_from_array
    from raycaster.scene.manager import BLACK, WHITE, load_scene
    from raycaster.scene.reference import ReferenceSceneParams, create_reference_scene

    if scene_path is not None:
        if not quiet:
            print(f"Loading scene from {scene_path}...")
        scene = load_scene(scene_path)
    else:
        color = WHITE if background == "white" else BLACK
        scene = create_reference_scene(ReferenceSceneParams(background=color.to_tuple()))

    if not quiet:
        print(
            f"Rendering {len(scene.spheres)} spheres, {len(scene.lights)} lights "
            f"({width}x{height}, depth {depth})..."
        )

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (current / target) * 100 if target > 0 else 0
            print(
                f"\r  Progress: {current}/{target} rows "
                f"({progress_pct:.1f}%) - {elapsed:.1f}s",
                end="",
                flush=True,
            )

    output_file = Path(output_path)

    if cpu_reference:
        image = render_image(scene, CanvasCamera(width, height), depth, callback=progress_callback)
    else:
        renderer = ParallelRenderer(scene, width, height, depth)
        renderer.render(batch_rows=batch_rows, callback=progress_callback)
        image = renderer.get_image_numpy()
    save_png_from_array(image, str(output_file))

    total_time = time.time() - start_time
    if not quiet:
        print()  # Newline after progress
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    if preview:
        show_preview(image, title=f"{output_file.name} - {width}x{height}, depth {depth}")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu)
        if not args.quiet:
            print("Using GPU backend")
    except Exception:
        ti.init(arch=ti.cpu)
        if not args.quiet:
            print("Using CPU backend")

    try:
        render_reference_scene(
            width=args.width,
            height=args.height,
            depth=args.depth,
            scene_path=args.scene,
            background=args.background,
            output_path=args.output,
            batch_rows=args.batch_rows,
            cpu_reference=args.cpu_reference,
            preview=args.preview,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
