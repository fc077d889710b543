"""Point lights and the ambient light term.

Lights are zero-size point sources with a color and a scalar intensity and
no falloff with distance. The ambient term is a single constant color that
is applied to every hit regardless of visibility.

Light data lives in Taichi fields so the shading kernels can iterate over
all lights per hit point.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.scene.lights import add_light, set_ambient
    >>> add_light((5.0, 5.0, 5.0), (1.0, 1.0, 1.0), 0.8)
    0
    >>> set_ambient((0.1, 0.1, 0.1))
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors
vec3 = tm.vec3

# Maximum number of point lights supported in the scene
MAX_LIGHTS = 64

# Ambient color used until set_ambient() is called
DEFAULT_AMBIENT = (0.1, 0.1, 0.1)

light_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_intensities = ti.field(dtype=ti.f32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())

_ambient_color = ti.Vector.field(3, dtype=ti.f32, shape=())


def clear_lights() -> None:
    """Remove all lights and restore the default ambient color."""
    num_lights[None] = 0
    set_ambient(DEFAULT_AMBIENT)


def add_light(
    position: tuple[float, float, float],
    color: tuple[float, float, float] = (1.0, 1.0, 1.0),
    intensity: float = 1.0,
) -> int:
    """Add a point light to the scene.

    Args:
        position: World-space position of the light.
        color: RGB color of the light.
        intensity: Scalar intensity multiplier (expected >= 0).

    Returns:
        The index of the added light.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
    """
    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    light_positions[idx] = vec3(position[0], position[1], position[2])
    light_colors[idx] = vec3(color[0], color[1], color[2])
    light_intensities[idx] = intensity
    num_lights[None] = idx + 1
    return idx


def get_light_count() -> int:
    """Get the number of lights in the scene."""
    return int(num_lights[None])


def set_ambient(color: tuple[float, float, float]) -> None:
    """Set the ambient light color."""
    _ambient_color[None] = vec3(color[0], color[1], color[2])


def get_ambient_color() -> tuple[float, float, float]:
    """Get the ambient light color as a Python tuple."""
    c = _ambient_color[None]
    return (float(c[0]), float(c[1]), float(c[2]))


@ti.func
def get_ambient() -> vec3:
    """Get the ambient light color inside a kernel."""
    return _ambient_color[None]


@ti.func
def get_num_lights() -> ti.i32:
    """Get the number of lights inside a kernel."""
    return num_lights[None]
