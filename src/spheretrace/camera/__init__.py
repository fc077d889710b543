"""Camera module for view and ray generation.

Components:
    pinhole: Look-at pinhole (perspective) camera

Camera responsibilities:
    - Transform (u, v) pixel coordinates to world-space rays
    - Support look-at positioning with an up vector
    - Apply vertical field of view and image aspect ratio

Pixel coordinates follow image convention:
    u in [0, width): left to right
    v in [0, height): top to bottom
"""

from .pinhole import (
    PinholeCamera,
    compute_camera_basis,
    generate_ray,
    get_camera_info,
    get_ray,
    setup_camera,
)

__all__ = [
    "PinholeCamera",
    "compute_camera_basis",
    "setup_camera",
    "get_ray",
    "generate_ray",
    "get_camera_info",
]
