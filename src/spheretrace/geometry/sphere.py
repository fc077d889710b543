"""Sphere primitive with analytic ray-sphere intersection.

The intersection solves |O + tD - C|^2 = r^2 for t, which expands to the
quadratic a*t^2 + b*t + c = 0 with:

    a = D . D
    b = 2 (O - C) . D
    c = |O - C|^2 - r^2

The discriminant is evaluated as a * (r^2 - |l|^2), where l is the vector
from the center to the closest point on the ray's line. This equals
(b^2 - 4ac) / 4 but keeps full float32 precision for distant and grazing
rays, where |O - C|^2 and (b/2)^2 are large and nearly equal.

Both roots are computed and the nearer one inside [t_min, t_max] is taken.
If the near root falls outside the interval (the origin is inside the sphere,
or the near surface is within the self-intersection epsilon) the far root is
tried before reporting a miss.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, 0), radius=1.0)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from src.spheretrace.core.ray import Ray, normalize

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere. Non-positive values are accepted
            but describe no meaningful surface.
    """

    center: vec3
    radius: ti.f32


@ti.func
def hit_sphere(ray: Ray, sphere: Sphere, t_min: ti.f32, t_max: ti.f32):
    """Test for ray-sphere intersection.

    Args:
        ray: The ray to test. Its direction is expected to be unit length,
            which keeps a > 0 and the roots ordered t0 <= t1.
        sphere: The sphere to test intersection against.
        t_min: Minimum accepted distance (inclusive).
        t_max: Maximum accepted distance (inclusive).

    Returns:
        A tuple (hit, t) where hit is 1 for an intersection and 0 for a miss.
        t is only meaningful when hit == 1.
    """
    oc = ray.origin - sphere.center
    a = tm.dot(ray.direction, ray.direction)
    half_b = tm.dot(oc, ray.direction)

    # half_b^2 - a*c == a * (r^2 - |l|^2), l = center-to-line offset
    l = oc - (half_b / a) * ray.direction
    discriminant = a * (sphere.radius * sphere.radius - tm.dot(l, l))

    did_hit = 0
    hit_t = 0.0

    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)
        t0 = (-half_b - sqrt_d) / a
        t1 = (-half_b + sqrt_d) / a

        if t_min <= t0 and t0 <= t_max:
            did_hit = 1
            hit_t = t0
        elif t_min <= t1 and t1 <= t_max:
            did_hit = 1
            hit_t = t1

    return did_hit, hit_t


@ti.func
def sphere_normal(sphere: Sphere, point: vec3) -> vec3:
    """Compute the outward unit normal at a point on the sphere.

    Args:
        sphere: The sphere.
        point: A point on the sphere surface.

    Returns:
        normalize(point - center). Zero only when point == center.
    """
    return normalize(point - sphere.center)


@ti.func
def make_sphere(center: vec3, radius: ti.f32) -> Sphere:
    """Create a sphere from center and radius.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere.

    Returns:
        A new Sphere instance.
    """
    return Sphere(center=center, radius=radius)
