"""Scene module for scene storage and ray-scene queries.

Components:
    intersection: Primitive storage, closest-hit and shadow queries
    lights: Point lights and the ambient term
    manager: Scene builder and declarative scene configuration
    default_scene: Built-in demonstration scene

Scene data is organized for kernel access:
    - Structure-of-Arrays layout for geometric data
    - Per-primitive geometry kind and material ID arrays
    - Flat light arrays iterated per shaded point

A scene is populated before rendering and is read-only during a render
pass, so kernels can read it without synchronization.
"""

from .default_scene import (
    create_default_scene,
    default_camera,
    default_scene_config,
)
from .intersection import (
    MAX_SPHERES,
    T_MAX,
    T_MIN,
    SceneHit,
    add_sphere,
    clear_scene,
    geometry_normal,
    get_sphere_count,
    hit_geometry,
    intersect_scene,
    is_in_shadow,
    query_closest_hit,
    query_shadow,
)
from .lights import (
    DEFAULT_AMBIENT,
    MAX_LIGHTS,
    add_light,
    clear_lights,
    get_ambient_color,
    get_light_count,
    set_ambient,
)
from .manager import (
    LightInfo,
    Scene,
    SceneConfig,
    SphereInfo,
    load_scene_file,
    save_scene_file,
)

__all__ = [
    # Intersection module
    "SceneHit",
    "add_sphere",
    "clear_scene",
    "get_sphere_count",
    "hit_geometry",
    "geometry_normal",
    "intersect_scene",
    "is_in_shadow",
    "query_closest_hit",
    "query_shadow",
    "MAX_SPHERES",
    "T_MIN",
    "T_MAX",
    # Lights module
    "add_light",
    "clear_lights",
    "get_light_count",
    "set_ambient",
    "get_ambient_color",
    "DEFAULT_AMBIENT",
    "MAX_LIGHTS",
    # Manager module
    "Scene",
    "SceneConfig",
    "SphereInfo",
    "LightInfo",
    "load_scene_file",
    "save_scene_file",
    # Default scene
    "create_default_scene",
    "default_scene_config",
    "default_camera",
]
