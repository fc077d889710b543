"""Shading pipeline: one ray per pixel, closest hit, local lighting.

Every rendering mode shares the same pixel loop:

    1. Generate the camera ray for pixel (x, y)
    2. Find the closest sphere along the ray
    3. On a miss, write the background color
    4. On a hit, write a mode-specific color

Modes (ShadingMode):
    DISTANCE: grayscale 1 - min(1, t / DISTANCE_FALLOFF), nearer is brighter
    MATERIAL: the unlit material color of the hit sphere
    DIFFUSE: ambient * albedo plus the Lambertian term of every light
    SHADOWS: like DIFFUSE, but a light only contributes if no sphere lies
        strictly between the hit point and the light

Colors are not clamped here; the image sink clamps on conversion to 8-bit.

The mode is a compile-time (template) argument, so each mode gets its own
specialized kernel with the unused branches removed. Pixels are processed
serially, rows top to bottom and columns left to right.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.core.image import Image
    >>> from src.spheretrace.core.renderer import ShadingMode, render
    >>> from src.spheretrace.scene.default_scene import create_default_scene
    >>>
    >>> scene, camera = create_default_scene()
    >>> image = Image(800, 600)
    >>> render(image, camera, scene, ShadingMode.SHADOWS)
"""

from collections.abc import Generator, Iterable
from enum import IntEnum

import taichi as ti
import taichi.math as tm

from src.spheretrace.camera.pinhole import PinholeCamera, get_ray, setup_camera
from src.spheretrace.core.image import Image
from src.spheretrace.core.ray import Ray, ray_at
from src.spheretrace.materials.material import get_material_color, lambert_contribution
from src.spheretrace.scene.intersection import (
    T_MIN,
    geometry_normal,
    intersect_scene,
    is_in_shadow,
)
from src.spheretrace.scene.lights import (
    get_ambient,
    get_num_lights,
    light_colors,
    light_intensities,
    light_positions,
)
from src.spheretrace.scene.manager import Scene

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Rendering Constants
# =============================================================================

# Sky blue written for rays that hit nothing
BACKGROUND_COLOR = vec3(0.5, 0.7, 1.0)

# Distance at which the DISTANCE visualization reaches black
DISTANCE_FALLOFF = 20.0


class ShadingMode(IntEnum):
    """Color computation applied to each hit."""

    DISTANCE = 0
    MATERIAL = 1
    DIFFUSE = 2
    SHADOWS = 3


# Output file stem for each mode, in rendering order
MODE_OUTPUT_NAMES = {
    ShadingMode.DISTANCE: "output_distance",
    ShadingMode.MATERIAL: "output_materials",
    ShadingMode.DIFFUSE: "output_diffuse",
    ShadingMode.SHADOWS: "output_final",
}


# =============================================================================
# Shading
# =============================================================================


@ti.func
def shade_distance(t: ti.f32) -> vec3:
    """Grayscale encoding of hit distance."""
    g = 1.0 - tm.min(1.0, t / DISTANCE_FALLOFF)
    return vec3(g, g, g)


@ti.func
def shade_lit(
    ray: Ray,
    t: ti.f32,
    index: ti.i32,
    material_id: ti.i32,
    shadows: ti.template(),
) -> vec3:
    """Ambient plus diffuse lighting at a hit point.

    Args:
        ray: The primary ray.
        t: Distance along the ray to the hit.
        index: Index of the hit primitive.
        material_id: Material of the hit primitive.
        shadows: Compile-time flag; when true each light is gated by a
            shadow ray.

    Returns:
        The unclamped RGB color.
    """
    hit_point = ray_at(ray, t)
    normal = geometry_normal(index, hit_point)
    albedo = get_material_color(material_id)

    color = get_ambient() * albedo

    for k in range(get_num_lights()):
        visible = 1
        if ti.static(shadows):
            if is_in_shadow(hit_point, light_positions[k]) == 1:
                visible = 0
        if visible == 1:
            color += lambert_contribution(
                albedo,
                normal,
                hit_point,
                light_positions[k],
                light_colors[k],
                light_intensities[k],
            )

    return color


@ti.func
def render_pixel_impl(
    x: ti.i32,
    y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    mode: ti.template(),
) -> vec3:
    """Compute the color of pixel (x, y).

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.
        mode: ShadingMode value (compile-time).

    Returns:
        The pixel color.
    """
    ray = get_ray(ti.cast(x, ti.f32), ti.cast(y, ti.f32), width, height)
    rec = intersect_scene(ray, T_MIN)

    color = BACKGROUND_COLOR
    if rec.hit == 1:
        if ti.static(mode == int(ShadingMode.DISTANCE)):
            color = shade_distance(rec.t)
        if ti.static(mode == int(ShadingMode.MATERIAL)):
            color = get_material_color(rec.material_id)
        if ti.static(mode == int(ShadingMode.DIFFUSE)):
            color = shade_lit(ray, rec.t, rec.index, rec.material_id, False)
        if ti.static(mode == int(ShadingMode.SHADOWS)):
            color = shade_lit(ray, rec.t, rec.index, rec.material_id, True)

    return color


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_kernel(pixels: ti.template(), width: ti.i32, height: ti.i32, mode: ti.template()):
    """Shade every pixel of the target field.

    Args:
        pixels: Vector field of shape (width, height) to overwrite.
        width: Image width in pixels.
        height: Image height in pixels.
        mode: ShadingMode value (compile-time).
    """
    ti.loop_config(serialize=True)
    for y, x in ti.ndrange(height, width):
        pixels[x, y] = render_pixel_impl(x, y, width, height, mode)


@ti.kernel
def _render_single_pixel(
    x: ti.i32,
    y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    mode: ti.template(),
) -> vec3:
    """Shade a single pixel. Used for testing and debugging."""
    return render_pixel_impl(x, y, width, height, mode)


# =============================================================================
# Public Rendering API
# =============================================================================


def render(
    image: Image,
    camera: PinholeCamera,
    scene: Scene,
    mode: ShadingMode = ShadingMode.SHADOWS,
) -> None:
    """Render the scene into the image, overwriting every pixel once.

    Args:
        image: Target image; its dimensions define the raster.
        camera: Camera to generate primary rays from.
        scene: Scene to render. Bound to the kernel fields if necessary.
        mode: Shading mode.

    Raises:
        ValueError: If the camera basis is degenerate.
    """
    setup_camera(camera)
    scene.bind()
    _render_kernel(image.pixels, image.width, image.height, int(mode))


def render_pixel(
    x: int,
    y: int,
    width: int,
    height: int,
    mode: ShadingMode = ShadingMode.SHADOWS,
) -> tuple[float, float, float]:
    """Render one pixel with the current camera and bound scene.

    Call setup_camera() and bind the scene first. For full images use
    render(), which shades all pixels in one kernel launch.

    Returns:
        Tuple of (R, G, B) color values.
    """
    color = _render_single_pixel(x, y, width, height, int(mode))
    return (float(color[0]), float(color[1]), float(color[2]))


def render_all_modes(
    image: Image,
    camera: PinholeCamera,
    scene: Scene,
    modes: Iterable[ShadingMode] = tuple(ShadingMode),
) -> Generator[tuple[ShadingMode, Image], None, None]:
    """Render several modes in turn into the same image.

    The image is overwritten by each mode, so consume (save or copy) each
    yielded result before advancing the generator.

    Yields:
        Tuple of (mode, image) after each mode has been rendered.

    Example:
        >>> for mode, img in render_all_modes(image, camera, scene):
        ...     save_image(img, f"{MODE_OUTPUT_NAMES[mode]}.ppm")
    """
    for mode in modes:
        render(image, camera, scene, mode)
        yield mode, image
