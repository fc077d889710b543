"""Built-in demonstration scene.

Three colored unit spheres resting above a large ground sphere, lit by a
white key light and a warm fill light:

- Red sphere at the origin, green to the left, blue to the right
  (both pushed back by one unit)
- Ground: a radius-100 sphere whose top touches y = -1
- Key light at (5, 5, 5), white, intensity 0.8
- Fill light at (-5, 3, 3), warm white, intensity 0.4
- Camera at (0, 0, 5) looking at the origin with a 60 degree vertical FOV

The scene is returned as data (SceneConfig) so drivers can serialize,
modify or replace it instead of relying on hard-coded construction.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.scene.default_scene import create_default_scene
    >>> scene, camera = create_default_scene()
    >>> scene.get_sphere_count()
    4
"""

from src.spheretrace.camera.pinhole import PinholeCamera
from src.spheretrace.scene.manager import Scene, SceneConfig

# =============================================================================
# Default Scene Constants
# =============================================================================

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600

RED = (1.0, 0.3, 0.3)
GREEN = (0.3, 1.0, 0.3)
BLUE = (0.3, 0.3, 1.0)
GROUND = (0.8, 0.8, 0.8)

AMBIENT = (0.1, 0.1, 0.1)


def default_scene_config() -> SceneConfig:
    """Describe the built-in scene as a SceneConfig.

    Returns:
        A fresh SceneConfig; callers may mutate it freely.
    """
    return SceneConfig(
        spheres=[
            {"center": [0.0, 0.0, 0.0], "radius": 1.0, "color": list(RED)},
            {"center": [-2.5, 0.0, -1.0], "radius": 1.0, "color": list(GREEN)},
            {"center": [2.5, 0.0, -1.0], "radius": 1.0, "color": list(BLUE)},
            {"center": [0.0, -101.0, 0.0], "radius": 100.0, "color": list(GROUND)},
        ],
        lights=[
            {"position": [5.0, 5.0, 5.0], "color": [1.0, 1.0, 1.0], "intensity": 0.8},
            {"position": [-5.0, 3.0, 3.0], "color": [1.0, 0.9, 0.8], "intensity": 0.4},
        ],
        ambient=AMBIENT,
    )


def default_camera() -> PinholeCamera:
    """Camera used with the built-in scene."""
    return PinholeCamera(
        position=(0.0, 0.0, 5.0),
        look_at=(0.0, 0.0, 0.0),
        up=(0.0, 1.0, 0.0),
        fov=60.0,
    )


def create_default_scene(
    config: SceneConfig | None = None,
) -> tuple[Scene, PinholeCamera]:
    """Build the built-in scene (or a supplied configuration) and its camera.

    Args:
        config: Optional scene configuration to build instead of the
            built-in one. The camera is the default camera either way.

    Returns:
        A tuple of (Scene, PinholeCamera). The scene is bound and ready
        to render.
    """
    if config is None:
        config = default_scene_config()
    scene = Scene.from_scene_config(config)
    return scene, default_camera()
