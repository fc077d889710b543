"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with ray-sphere intersection and normals

Primitives are tagged with a GeometryKind. The scene dispatches
intersection and normal queries on that tag, so new primitive types only
need a kind, a hit function and a normal function; the closest-hit loop
stays unchanged.

All intersection routines are Taichi functions (@ti.func) following the
pattern:
    hit, t = hit_shape(ray, shape, t_min, t_max)
"""

from enum import IntEnum

from .sphere import Sphere, hit_sphere, make_sphere, sphere_normal


class GeometryKind(IntEnum):
    """Enumeration of supported primitive types."""

    SPHERE = 0


__all__ = [
    "GeometryKind",
    "Sphere",
    "hit_sphere",
    "make_sphere",
    "sphere_normal",
]
