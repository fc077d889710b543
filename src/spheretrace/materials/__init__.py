"""Materials module.

Components:
    material: Material record, field-backed material registry and the
        Lambertian diffuse term used by the shading pipeline

Each sphere owns exactly one material, referenced by index into the
registry so kernels can look the color up on the device.
"""

from .material import (
    MAX_MATERIALS,
    Material,
    add_material,
    clear_materials,
    get_material_color,
    get_material_count,
    lambert_contribution,
    lambert_term,
)

__all__ = [
    "Material",
    "add_material",
    "clear_materials",
    "get_material_color",
    "get_material_count",
    "lambert_contribution",
    "lambert_term",
    "MAX_MATERIALS",
]
