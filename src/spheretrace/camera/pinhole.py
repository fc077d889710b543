"""Pinhole camera model for perspective projection ray generation.

This module implements a look-at pinhole camera that generates one primary
ray per pixel. The camera supports:
- Look-at positioning (position, look_at, up)
- Vertical field of view in degrees
- Aspect ratio taken from the image dimensions at ray generation time

The camera builds a right-handed basis from the view parameters:
- forward: normalize(look_at - position)
- right: normalize(forward x up)
- up: right x forward (unit length because right and forward are orthonormal)

Pixel (u, v) maps to the view plane one unit in front of the camera:
    x = (2u / width - 1) * aspect * tan(fov / 2)
    y = (1 - 2v / height) * tan(fov / 2)
Row 0 is the top of the image, so y is flipped.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.camera.pinhole import PinholeCamera, setup_camera
    >>>
    >>> camera = PinholeCamera(
    ...     position=(0.0, 0.0, 5.0),
    ...     look_at=(0.0, 0.0, 0.0),
    ...     up=(0.0, 1.0, 0.0),
    ...     fov=60.0,
    ... )
    >>> setup_camera(camera)
    >>>
    >>> @ti.kernel
    ... def render():
    ...     ray = get_ray(400.0, 300.0, 800, 600)  # Ray through image center
"""

import math
from dataclasses import dataclass
from typing import Any

import numpy as np
import taichi as ti

from src.spheretrace.core.ray import Ray, make_ray

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class PinholeCamera:
    """Configuration for a pinhole (perspective) camera.

    Attributes:
        position: Camera position in world space (x, y, z).
        look_at: Point the camera is looking at in world space (x, y, z).
        up: Up direction for camera orientation. Need not be orthogonal to
            the view direction, only not parallel to it.
        fov: Vertical field of view in degrees.
    """

    position: tuple[float, float, float] = (0.0, 0.0, 5.0)
    look_at: tuple[float, float, float] = (0.0, 0.0, 0.0)
    up: tuple[float, float, float] = (0.0, 1.0, 0.0)
    fov: float = 60.0


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())

# Basis vectors
_camera_forward = ti.Vector.field(3, dtype=ti.f32, shape=())
_camera_right = ti.Vector.field(3, dtype=ti.f32, shape=())
_camera_up = ti.Vector.field(3, dtype=ti.f32, shape=())

# tan(fov / 2)
_fov_scale = ti.field(dtype=ti.f32, shape=())

# Result slot for generate_ray()
_ray_direction = ti.Vector.field(3, dtype=ti.f32, shape=())


# =============================================================================
# Camera Setup (Python-side, called once per camera configuration)
# =============================================================================


def compute_camera_basis(
    camera: PinholeCamera,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Compute the (forward, right, up) basis for a camera.

    Args:
        camera: Camera configuration.

    Returns:
        Tuple of float64 arrays (forward, right, up).

    Raises:
        ValueError: If position and look_at coincide, or up is parallel to
            the view direction. Either leaves the basis undefined.
    """
    position = np.array(camera.position, dtype=np.float64)
    look_at = np.array(camera.look_at, dtype=np.float64)
    up = np.array(camera.up, dtype=np.float64)

    forward = look_at - position
    forward_len = np.linalg.norm(forward)
    if forward_len == 0.0:
        raise ValueError(
            f"Camera position {camera.position} and look_at {camera.look_at} coincide"
        )
    forward = forward / forward_len

    right = np.cross(forward, up)
    right_len = np.linalg.norm(right)
    if right_len == 0.0:
        raise ValueError(f"Camera up {camera.up} is parallel to the view direction")
    right = right / right_len

    true_up = np.cross(right, forward)

    return forward, right, true_up


def setup_camera(camera: PinholeCamera) -> None:
    """Initialize camera state from configuration.

    Computes the camera basis and the field-of-view scale and stores them
    in Taichi fields. This must be called before rendering.

    Args:
        camera: Camera configuration with position, orientation, and FOV.

    Raises:
        ValueError: If the camera basis is degenerate.

    Note:
        This function writes to Taichi fields and should be called from
        Python (not from within a Taichi kernel).
    """
    forward, right, true_up = compute_camera_basis(camera)

    _camera_origin[None] = [float(c) for c in camera.position]
    _camera_forward[None] = forward.tolist()
    _camera_right[None] = right.tolist()
    _camera_up[None] = true_up.tolist()
    _fov_scale[None] = math.tan(math.radians(camera.fov) / 2.0)


# =============================================================================
# Ray Generation (Taichi-compatible)
# =============================================================================


@ti.func
def get_ray(u: ti.f32, v: ti.f32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate the primary ray through pixel coordinates (u, v).

    Args:
        u: Horizontal pixel coordinate in [0, width), 0 = left.
        v: Vertical pixel coordinate in [0, height), 0 = top.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A Ray from the camera position with unit direction.
    """
    w = ti.cast(width, ti.f32)
    h = ti.cast(height, ti.f32)
    aspect = w / h
    scale = _fov_scale[None]

    x = (2.0 * u / w - 1.0) * aspect * scale
    y = (1.0 - 2.0 * v / h) * scale

    direction = _camera_forward[None] + x * _camera_right[None] + y * _camera_up[None]
    return make_ray(_camera_origin[None], direction)


@ti.kernel
def _generate_ray_kernel(u: ti.f32, v: ti.f32, width: ti.i32, height: ti.i32):
    ray = get_ray(u, v, width, height)
    _ray_direction[None] = ray.direction


def generate_ray(
    u: float, v: float, width: int, height: int
) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
    """Generate a primary ray from Python.

    Uses the camera configured by the last setup_camera() call.

    Returns:
        Tuple of (origin, direction).
    """
    _generate_ray_kernel(u, v, width, height)
    o = _camera_origin[None]
    d = _ray_direction[None]
    return (
        (float(o[0]), float(o[1]), float(o[2])),
        (float(d[0]), float(d[1]), float(d[2])),
    )


# =============================================================================
# Utility Functions
# =============================================================================


def get_camera_info() -> dict[str, Any]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with origin, forward, right, up and fov_scale.
    """
    origin_vec = _camera_origin[None]
    forward_vec = _camera_forward[None]
    right_vec = _camera_right[None]
    up_vec = _camera_up[None]

    return {
        "origin": (float(origin_vec[0]), float(origin_vec[1]), float(origin_vec[2])),
        "forward": (float(forward_vec[0]), float(forward_vec[1]), float(forward_vec[2])),
        "right": (float(right_vec[0]), float(right_vec[1]), float(right_vec[2])),
        "up": (float(up_vec[0]), float(up_vec[1]), float(up_vec[2])),
        "fov_scale": float(_fov_scale[None]),
    }
