"""Scene-level closest-hit and shadow queries.

The scene stores spheres in Taichi fields (Structure-of-Arrays). Every
primitive carries a GeometryKind tag and a material ID; intersection and
normal queries dispatch on the tag.

Closest hit:
    The running closest distance starts unbounded and is passed as t_max to
    each subsequent primitive test, so primitives that only intersect behind
    the current closest hit are rejected without further work. A later
    primitive replaces the current hit only if it is strictly closer, so
    exact ties keep the primitive that was added first.

Shadow query:
    A ray is cast from the surface point toward the light, starting at the
    self-intersection epsilon T_MIN. The point is shadowed only if a hit lies
    strictly closer than the light itself.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.scene.intersection import (
    ...     add_sphere, clear_scene, query_closest_hit
    ... )
    >>> clear_scene()
    >>> add_sphere((0.0, 0.0, 0.0), 1.0, material_id=0)
    0
    >>> query_closest_hit((0.0, 0.0, 5.0), (0.0, 0.0, -1.0))
    (True, 4.0, 0)
"""

import taichi as ti
import taichi.math as tm

from src.spheretrace.core.ray import Ray, length, make_ray, vec3
from src.spheretrace.geometry import GeometryKind
from src.spheretrace.geometry.sphere import Sphere, hit_sphere, sphere_normal

# Self-intersection epsilon for all ray queries
T_MIN = 0.001

# Far clip distance, large enough to act as "unbounded"
T_MAX = 1e30


@ti.dataclass
class SceneHit:
    """Record of a ray-scene intersection.

    Attributes:
        hit: Whether the ray intersected any primitive (1 if hit, 0 if miss).
        t: The distance along the ray to the closest hit. Only valid if hit == 1.
        index: The index of the hit primitive, -1 on a miss.
        material_id: The material ID of the hit primitive, -1 on a miss.
    """

    hit: ti.i32
    t: ti.f32
    index: ti.i32
    material_id: ti.i32


# Maximum number of primitives supported in the scene
MAX_SPHERES = 1024

# Sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_material_ids = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
geometry_kinds = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())

# Result slots for the Python-side query wrappers
_query_hit = ti.field(dtype=ti.i32, shape=())
_query_t = ti.field(dtype=ti.f32, shape=())
_query_index = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Clear all primitives from the scene.

    Resets the primitive count to zero. The actual field data is not
    cleared but will be overwritten when new primitives are added.
    """
    num_spheres[None] = 0


def add_sphere(
    center: tuple[float, float, float],
    radius: float,
    material_id: int = 0,
) -> int:
    """Append a sphere to the scene.

    No validation is performed: non-positive radii and duplicate spheres
    are stored as given.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere.
        material_id: The material ID to associate with this sphere.

    Returns:
        The index of the added sphere (insertion order).

    Raises:
        RuntimeError: If the maximum number of spheres is exceeded.
    """
    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    sphere_centers[idx] = vec3(center[0], center[1], center[2])
    sphere_radii[idx] = radius
    sphere_material_ids[idx] = material_id
    geometry_kinds[idx] = int(GeometryKind.SPHERE)
    num_spheres[None] = idx + 1
    return idx


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


@ti.func
def _get_sphere(i: ti.i32) -> Sphere:
    return Sphere(center=sphere_centers[i], radius=sphere_radii[i])


@ti.func
def hit_geometry(i: ti.i32, ray: Ray, t_min: ti.f32, t_max: ti.f32):
    """Intersect the ray with primitive i, dispatching on its kind.

    Returns:
        A tuple (hit, t) as returned by the primitive's hit function.
    """
    did_hit = 0
    hit_t = 0.0
    if geometry_kinds[i] == int(GeometryKind.SPHERE):
        did_hit, hit_t = hit_sphere(ray, _get_sphere(i), t_min, t_max)
    return did_hit, hit_t


@ti.func
def geometry_normal(i: ti.i32, point: vec3) -> vec3:
    """Surface normal of primitive i at a point on its surface."""
    normal = vec3(0.0, 0.0, 0.0)
    if geometry_kinds[i] == int(GeometryKind.SPHERE):
        normal = sphere_normal(_get_sphere(i), point)
    return normal


@ti.func
def _make_miss_record() -> SceneHit:
    """Create a SceneHit indicating no intersection."""
    return SceneHit(hit=0, t=0.0, index=-1, material_id=-1)


@ti.func
def intersect_scene(ray: Ray, t_min: ti.f32) -> SceneHit:
    """Find the closest primitive hit by the ray.

    Args:
        ray: The ray to test (unit direction).
        t_min: Minimum accepted distance (self-intersection epsilon).

    Returns:
        A SceneHit for the closest intersection, or a miss record.
    """
    closest_t = T_MAX
    result = _make_miss_record()

    for i in range(num_spheres[None]):
        did_hit, t = hit_geometry(i, ray, t_min, closest_t)
        if did_hit == 1 and (result.hit == 0 or t < closest_t):
            closest_t = t
            result = SceneHit(hit=1, t=t, index=i, material_id=sphere_material_ids[i])

    return result


@ti.func
def is_in_shadow(point: vec3, light_position: vec3) -> ti.i32:
    """Test whether a light is occluded as seen from a surface point.

    Args:
        point: The surface point being shaded.
        light_position: The position of the point light.

    Returns:
        1 if some primitive lies strictly between the point (beyond T_MIN)
        and the light, 0 otherwise. An occluder exactly at the light's
        distance does not shadow.
    """
    to_light = light_position - point
    dist_to_light = length(to_light)
    shadow_ray = make_ray(point, to_light)

    shadowed = 0
    rec = intersect_scene(shadow_ray, T_MIN)
    if rec.hit == 1 and rec.t < dist_to_light:
        shadowed = 1
    return shadowed


# =============================================================================
# Python-side Query Wrappers
# =============================================================================


@ti.kernel
def _closest_hit_kernel(origin: vec3, direction: vec3, t_min: ti.f32):
    rec = intersect_scene(make_ray(origin, direction), t_min)
    _query_hit[None] = rec.hit
    _query_t[None] = rec.t
    _query_index[None] = rec.index


@ti.kernel
def _shadow_kernel(point: vec3, light_position: vec3) -> ti.i32:
    return is_in_shadow(point, light_position)


def query_closest_hit(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    t_min: float = T_MIN,
) -> tuple[bool, float, int]:
    """Find the closest hit for a single ray from Python.

    Intended for tests and debugging; rendering uses intersect_scene()
    inside kernels.

    Args:
        origin: Ray origin.
        direction: Ray direction of any magnitude (normalized here).
        t_min: Minimum accepted distance.

    Returns:
        Tuple of (hit, t, sphere_index). On a miss: (False, inf, -1).
    """
    _closest_hit_kernel(
        vec3(origin[0], origin[1], origin[2]),
        vec3(direction[0], direction[1], direction[2]),
        t_min,
    )
    if _query_hit[None] == 0:
        return False, float("inf"), -1
    return True, float(_query_t[None]), int(_query_index[None])


def query_shadow(
    point: tuple[float, float, float],
    light_position: tuple[float, float, float],
) -> bool:
    """Test from Python whether a light is occluded at a point."""
    return bool(
        _shadow_kernel(
            vec3(point[0], point[1], point[2]),
            vec3(light_position[0], light_position[1], light_position[2]),
        )
    )
