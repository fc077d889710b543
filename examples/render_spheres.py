#!/usr/bin/env python3
"""Render the sphere scene in all four shading modes.

This script builds a scene (the built-in three-sphere scene or one loaded
from JSON), renders it step by step into a single reused image and saves
one file per step:

    output_distance   distance to the closest sphere
    output_materials  flat material colors
    output_diffuse    ambient + diffuse lighting
    output_final      ambient + diffuse lighting with hard shadows

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH        Image width in pixels (default: 800)
    --height HEIGHT      Image height in pixels (default: 600)
    --scene FILE         JSON scene file (default: built-in scene)
    --output-dir DIR     Directory for output files (default: .)
    --format {ppm,png}   Output image format (default: ppm)
    --modes MODE [...]   Subset of distance, material, diffuse, shadows
    --show               Show all rendered modes side by side when done
    --quiet              Suppress progress output

Example:
    python -m examples.render_spheres --width 400 --height 300 --format png
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import taichi as ti

MODE_CHOICES = ("distance", "material", "diffuse", "shadows")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the sphere scene in all four shading modes.",
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
        default=600,
        help="Image height in pixels (default: 600)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene file (default: built-in scene)",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=".",
        help="Directory for output files (default: current directory)",
    )
    parser.add_argument(
        "--format",
        choices=("ppm", "png"),
        default="ppm",
        help="Output image format (default: ppm)",
    )
    parser.add_argument(
        "--modes",
        nargs="+",
        choices=MODE_CHOICES,
        default=list(MODE_CHOICES),
        help="Shading modes to render, in order (default: all four)",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Show the rendered modes side by side when done",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def render_spheres(
    width: int = 800,
    height: int = 600,
    scene_file: str | None = None,
    output_dir: str = ".",
    image_format: str = "ppm",
    modes: list[str] | None = None,
    show: bool = False,
    quiet: bool = False,
) -> list[Path]:
    """Render the requested shading modes and save one file per mode.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        scene_file: Optional JSON scene description.
        output_dir: Directory to write images into (created if missing).
        image_format: "ppm" or "png".
        modes: Mode names to render; defaults to all four in pipeline order.
        show: If True, display the results side by side at the end.
        quiet: If True, suppress progress output.

    Returns:
        Paths of the saved image files, in rendering order.
    """
    # Lazy imports to allow Taichi initialization first
    from src.spheretrace.core.image import Image
    from src.spheretrace.core.renderer import MODE_OUTPUT_NAMES, ShadingMode, render_all_modes
    from src.spheretrace.preview.export import save_image
    from src.spheretrace.scene.default_scene import create_default_scene
    from src.spheretrace.scene.manager import load_scene_file

    mode_by_name = {
        "distance": ShadingMode.DISTANCE,
        "material": ShadingMode.MATERIAL,
        "diffuse": ShadingMode.DIFFUSE,
        "shadows": ShadingMode.SHADOWS,
    }
    selected = [mode_by_name[name] for name in (modes or MODE_CHOICES)]

    config = load_scene_file(scene_file) if scene_file else None
    scene, camera = create_default_scene(config)
    image = Image(width, height)

    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    if not quiet:
        print(f"Rendering images ({width}x{height}, {scene!r})...")

    start_time = time.time()
    saved: list[Path] = []
    previews = []
    for mode, rendered in render_all_modes(image, camera, scene, selected):
        path = save_image(rendered, out_dir / f"{MODE_OUTPUT_NAMES[mode]}.{image_format}")
        saved.append(path)
        if show:
            previews.append(rendered.to_numpy())
        if not quiet:
            print(f"  {mode.name.lower()} rendering... saved {path}")

    if not quiet:
        print(f"Done in {time.time() - start_time:.2f}s! Generated images:")
        for path in saved:
            print(f"  - {path}")

    if show and previews:
        from src.spheretrace.preview.display import show_comparison

        show_comparison(previews, [mode.name.lower() for mode in selected])

    return saved


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Single-threaded CPU rendering
    ti.init(arch=ti.cpu)

    try:
        render_spheres(
            width=args.width,
            height=args.height,
            scene_file=args.scene,
            output_dir=args.output_dir,
            image_format=args.format,
            modes=args.modes,
            show=args.show,
            quiet=args.quiet,
        )
        return 0
    except (OSError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
