"""Material registry and Lambertian diffuse lighting term.

A material is a single reflectance tint (RGB). It is used unlit by the
material visualization and as the albedo of the ambient and diffuse terms:

    color = ambient * albedo
          + sum over lights of albedo * light_color * max(0, N . L) * intensity

where L is the unit direction from the hit point toward the light. Values
are not clamped here; out-of-range colors are clamped by the image sink.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.materials.material import add_material
    >>> red = add_material((1.0, 0.0, 0.0))
    >>> # Use get_material_color(red) within a Taichi kernel
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from src.spheretrace.core.ray import normalize

# Type alias for 3D vectors
vec3 = tm.vec3


@dataclass
class Material:
    """Surface material of a sphere.

    Attributes:
        color: Reflectance tint as (R, G, B). Nominally in [0, 1] per
            channel; this is not enforced.
    """

    color: tuple[float, float, float] = (1.0, 1.0, 1.0)


@ti.func
def lambert_term(normal: vec3, to_light: vec3) -> ti.f32:
    """Cosine of the angle between normal and light, clamped at zero.

    Args:
        normal: The surface normal (unit length).
        to_light: Unit direction from the surface toward the light.

    Returns:
        max(0, normal . to_light). Backfacing light contributes nothing.
    """
    return tm.max(0.0, tm.dot(normal, to_light))


@ti.func
def lambert_contribution(
    albedo: vec3,
    normal: vec3,
    hit_point: vec3,
    light_position: vec3,
    light_color: vec3,
    intensity: ti.f32,
) -> vec3:
    """Diffuse contribution of one point light at a surface point.

    Point lights have no distance attenuation. A light located exactly at
    the hit point yields a zero direction and therefore no contribution.

    Args:
        albedo: The material color of the surface.
        normal: The surface normal at the hit point (unit length).
        hit_point: The shaded surface point.
        light_position: The position of the point light.
        light_color: The RGB color of the light.
        intensity: The scalar intensity of the light.

    Returns:
        albedo * light_color * max(0, N . L) * intensity.
    """
    to_light = normalize(light_position - hit_point)
    return albedo * light_color * (lambert_term(normal, to_light) * intensity)


# =============================================================================
# Material Field Storage (for scene-level material management)
# =============================================================================

# Maximum number of materials in the scene
MAX_MATERIALS = 1024

# Storage for material colors
material_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_MATERIALS)
num_materials = ti.field(dtype=ti.i32, shape=())


def clear_materials() -> None:
    """Clear all materials.

    Resets the material count to zero. Existing data in the field will be
    overwritten when new materials are added.
    """
    num_materials[None] = 0


def add_material(color: tuple[float, float, float]) -> int:
    """Add a material to the material registry.

    Args:
        color: The reflectance tint as (R, G, B). Not range checked.

    Returns:
        The index of the added material.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
    """
    idx = num_materials[None]
    if idx >= MAX_MATERIALS:
        raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")

    material_colors[idx] = vec3(color[0], color[1], color[2])
    num_materials[None] = idx + 1
    return idx


def get_material_count() -> int:
    """Get the number of materials in the registry."""
    return int(num_materials[None])


@ti.func
def get_material_color(material_idx: ti.i32) -> vec3:
    """Get the color for a material by index.

    Args:
        material_idx: The index of the material in the registry.

    Returns:
        The material color (RGB).
    """
    return material_colors[material_idx]
