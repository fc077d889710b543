"""Ray data structure and vector utilities.

Vectors are Taichi ``vec3`` values and serve as points, directions and RGB
colors alike; the component-wise product is the color blend operator.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> origin = ti.math.vec3(0.0, 0.0, 0.0)
    >>> direction = ti.math.vec3(0.0, 0.0, -2.0)
    >>> ray = make_ray(origin, direction)  # direction becomes (0, 0, -1)
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Ray:
    """A ray with an origin point and unit direction.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction of the ray (vec3). Unit length when built
            with make_ray(), or the zero vector for a zero-length input.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Negative values lie behind the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray, normalizing the direction.

    Args:
        origin: The starting point of the ray.
        direction: The direction vector of any magnitude.

    Returns:
        A new Ray whose direction is normalize(direction).
    """
    return Ray(origin=origin, direction=normalize(direction))


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def add(a: vec3, b: vec3) -> vec3:
    """Component-wise sum a + b."""
    return a + b


@ti.func
def subtract(a: vec3, b: vec3) -> vec3:
    """Component-wise difference a - b."""
    return a - b


@ti.func
def scale(v: vec3, s: ti.f32) -> vec3:
    """Scale a vector by a scalar."""
    return v * s


@ti.func
def multiply(a: vec3, b: vec3) -> vec3:
    """Component-wise product, used to tint one color by another."""
    return a * b


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product of two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        The dot product a . b.
    """
    return tm.dot(a, b)


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Compute the cross product of two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        The cross product a x b.
    """
    return tm.cross(a, b)


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Compute the squared length of a vector."""
    return tm.dot(v, v)


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector."""
    return ti.sqrt(tm.dot(v, v))


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    Unlike ``tm.normalize``, a zero-length input does not produce NaN.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v, or the zero vector if v
        has zero length.
    """
    result = vec3(0.0, 0.0, 0.0)
    len_v = length(v)
    if len_v > 0.0:
        result = v / len_v
    return result
