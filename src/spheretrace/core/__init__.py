"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    ray: Ray data structure and vector utilities
    image: Image buffer receiving per-pixel colors
    renderer: Shading pipeline (distance, material, diffuse, shadows)

The shading pipeline casts one ray per pixel, resolves the closest sphere
and computes a local (non-recursive) lighting result with optional hard
shadows. Pixel loops are Taichi kernels run serially on the CPU backend.
"""

from .image import Image
from .ray import (
    Ray,
    add,
    cross,
    dot,
    length,
    length_squared,
    make_ray,
    multiply,
    normalize,
    ray_at,
    scale,
    subtract,
    vec3,
)

# Note: renderer is NOT imported here to avoid circular imports.
# Import directly from src.spheretrace.core.renderer when needed.

__all__ = [
    "Image",
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "add",
    "subtract",
    "scale",
    "multiply",
    "dot",
    "cross",
    "length",
    "length_squared",
    "normalize",
]
