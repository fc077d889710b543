"""Scene builder coordinating spheres, materials and lights.

This module provides the high-level scene API used by drivers. A Scene is
populated once before rendering (spheres, lights, ambient color) and is
read-only while any render pass runs.

The Scene keeps a Python-side record of everything it contains and mirrors
it into the Taichi fields used by the kernels. Only one scene can occupy
those fields at a time; bind() re-uploads a scene whose data was replaced
by another scene in between.

Scenes can be described declaratively with a SceneConfig (ordered sphere
descriptors, light descriptors and an ambient value), which round-trips
through plain dictionaries and JSON files.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.scene.manager import Scene
    >>> scene = Scene()
    >>> scene.add_sphere(center=(0, 0, 0), radius=1.0, material=(1.0, 0.3, 0.3))
    0
    >>> scene.add_light(position=(5, 5, 5), color=(1, 1, 1), intensity=0.8)
    0
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from src.spheretrace.materials.material import (
    Material,
    add_material,
    clear_materials,
)
from src.spheretrace.scene.intersection import (
    MAX_SPHERES,
    add_sphere,
    clear_scene,
    get_sphere_count,
)
from src.spheretrace.scene.lights import (
    DEFAULT_AMBIENT,
    MAX_LIGHTS,
    add_light,
    clear_lights,
    get_light_count,
    set_ambient,
)

Color = tuple[float, float, float]

# Scene currently mirrored into the Taichi fields
_bound_scene: "Scene | None" = None


def _unbind_all() -> None:
    """Forget which scene occupies the Taichi fields."""
    global _bound_scene
    _bound_scene = None


def _as_vec3(value: Any, name: str) -> tuple[float, float, float]:
    """Convert a 3-element sequence to a float tuple.

    Raises:
        ValueError: If value does not have exactly three numeric components.
    """
    try:
        x, y, z = value
        return (float(x), float(y), float(z))
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a sequence of 3 numbers, got {value!r}") from e


@dataclass
class SphereInfo:
    """Information about a sphere in the scene.

    Attributes:
        sphere_index: The index in the sphere storage arrays.
        center: The center of the sphere.
        radius: The radius of the sphere.
        material: The material owned by the sphere.
        material_id: The index of the material in the material registry.
    """

    sphere_index: int
    center: tuple[float, float, float]
    radius: float
    material: Material
    material_id: int


@dataclass
class LightInfo:
    """Information about a point light in the scene.

    Attributes:
        light_index: The index in the light storage arrays.
        position: The position of the light.
        color: The RGB color of the light.
        intensity: The scalar intensity of the light.
    """

    light_index: int
    position: tuple[float, float, float]
    color: tuple[float, float, float]
    intensity: float


@dataclass
class SceneConfig:
    """Declarative scene description.

    Attributes:
        spheres: Ordered sphere descriptors with keys center, radius, color.
        lights: Ordered light descriptors with keys position, color, intensity.
        ambient: The ambient light color.
    """

    spheres: list[dict[str, Any]] = field(default_factory=list)
    lights: list[dict[str, Any]] = field(default_factory=list)
    ambient: tuple[float, float, float] = DEFAULT_AMBIENT


class Scene:
    """Collection of spheres, point lights and an ambient term.

    Spheres and lights are kept in insertion order and are addressed by
    index; the closest-hit query resolves exact distance ties in favour of
    the sphere added first. There is no removal operation other than
    clearing the whole scene.

    Attributes:
        spheres: List of SphereInfo in insertion order.
        lights: List of LightInfo in insertion order.

    Example:
        >>> scene = Scene()
        >>> scene.ambient = (0.1, 0.1, 0.1)
        >>> scene.add_sphere((0, 0, 0), 1.0, Material(color=(1.0, 0.0, 0.0)))
        0
        >>> scene.add_light((5, 5, 5), intensity=0.8)
        0
    """

    def __init__(self, ambient: Color = DEFAULT_AMBIENT) -> None:
        """Initialize an empty scene and bind it to the device fields."""
        self.spheres: list[SphereInfo] = []
        self.lights: list[LightInfo] = []
        self._ambient: tuple[float, float, float] = _as_vec3(ambient, "ambient")
        self._clear_all()

    def _clear_all(self) -> None:
        """Clear all scene data including Taichi fields."""
        global _bound_scene
        clear_scene()
        clear_materials()
        clear_lights()
        set_ambient(self._ambient)
        self.spheres.clear()
        self.lights.clear()
        _bound_scene = self

    def clear(self) -> None:
        """Remove every sphere and light. The ambient color is kept."""
        self._clear_all()

    @property
    def is_bound(self) -> bool:
        """Whether this scene currently occupies the Taichi fields."""
        return _bound_scene is self

    def bind(self) -> None:
        """Make this scene the one visible to the kernels.

        Does nothing if the scene is already bound. Otherwise the fields are
        cleared and refilled from this scene's records, preserving order.
        """
        global _bound_scene
        if _bound_scene is self:
            return

        clear_scene()
        clear_materials()
        clear_lights()
        set_ambient(self._ambient)
        for sphere in self.spheres:
            material_id = add_material(sphere.material.color)
            add_sphere(sphere.center, sphere.radius, material_id)
            sphere.material_id = material_id
        for light in self.lights:
            add_light(light.position, light.color, light.intensity)
        _bound_scene = self

    # =========================================================================
    # Scene Construction
    # =========================================================================

    @property
    def ambient(self) -> tuple[float, float, float]:
        """The ambient light color."""
        return self._ambient

    @ambient.setter
    def ambient(self, color: Color) -> None:
        self._ambient = _as_vec3(color, "ambient")
        if self.is_bound:
            set_ambient(self._ambient)

    def add_sphere(
        self,
        center: Color,
        radius: float,
        material: Material | Color | None = None,
    ) -> int:
        """Append a sphere with its own material.

        Args:
            center: The center point of the sphere as (x, y, z).
            radius: The radius of the sphere. Not validated.
            material: A Material, a bare (R, G, B) color, or None for white.

        Returns:
            The index of the added sphere.

        Raises:
            RuntimeError: If the maximum number of spheres or materials is
                exceeded.
            ValueError: If center or color is not a 3-component sequence.
        """
        if material is None:
            material = Material()
        elif not isinstance(material, Material):
            material = Material(color=_as_vec3(material, "material color"))

        center_t = _as_vec3(center, "center")
        self.bind()
        if len(self.spheres) >= MAX_SPHERES:
            raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
        material_id = add_material(material.color)
        sphere_index = add_sphere(center_t, float(radius), material_id)

        info = SphereInfo(
            sphere_index=sphere_index,
            center=center_t,
            radius=float(radius),
            material=material,
            material_id=material_id,
        )
        self.spheres.append(info)

        return sphere_index

    def add_light(
        self,
        position: Color,
        color: Color = (1.0, 1.0, 1.0),
        intensity: float = 1.0,
    ) -> int:
        """Append a point light.

        Args:
            position: The position of the light as (x, y, z).
            color: The RGB color of the light.
            intensity: The scalar intensity of the light.

        Returns:
            The index of the added light.

        Raises:
            RuntimeError: If the maximum number of lights is exceeded.
            ValueError: If position or color is not a 3-component sequence.
        """
        position_t = _as_vec3(position, "position")
        color_t = _as_vec3(color, "color")
        self.bind()
        if len(self.lights) >= MAX_LIGHTS:
            raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
        light_index = add_light(position_t, color_t, float(intensity))

        info = LightInfo(
            light_index=light_index,
            position=position_t,
            color=color_t,
            intensity=float(intensity),
        )
        self.lights.append(info)

        return light_index

    # =========================================================================
    # Scene Queries
    # =========================================================================

    def get_sphere_count(self) -> int:
        """Get the number of spheres in the scene."""
        return len(self.spheres)

    def get_light_count(self) -> int:
        """Get the number of lights in the scene."""
        return len(self.lights)

    def get_material(self, sphere_index: int) -> Material:
        """Get the material owned by a sphere."""
        return self.spheres[sphere_index].material

    def get_device_counts(self) -> tuple[int, int]:
        """Get (spheres, lights) as currently stored in the Taichi fields."""
        return get_sphere_count(), get_light_count()

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object.

        Returns:
            A SceneConfig containing all spheres, lights and the ambient term.
        """
        config = SceneConfig(ambient=self._ambient)

        for sphere in self.spheres:
            config.spheres.append(
                {
                    "center": list(sphere.center),
                    "radius": sphere.radius,
                    "color": list(sphere.material.color),
                }
            )

        for light in self.lights:
            config.lights.append(
                {
                    "position": list(light.position),
                    "color": list(light.color),
                    "intensity": light.intensity,
                }
            )

        return config

    def from_config(self, config: SceneConfig) -> None:
        """Load a scene from a configuration object.

        Clears the current scene and loads the configuration in order.

        Args:
            config: The scene configuration to load.

        Raises:
            ValueError: If the configuration contains invalid data.
        """
        self._ambient = _as_vec3(config.ambient, "ambient")
        self.clear()

        for sphere_config in config.spheres:
            if "center" not in sphere_config:
                raise ValueError(f"Sphere descriptor missing 'center': {sphere_config!r}")
            self.add_sphere(
                center=sphere_config["center"],
                radius=sphere_config.get("radius", 1.0),
                material=Material(
                    color=_as_vec3(sphere_config.get("color", [1.0, 1.0, 1.0]), "color")
                ),
            )

        for light_config in config.lights:
            if "position" not in light_config:
                raise ValueError(f"Light descriptor missing 'position': {light_config!r}")
            self.add_light(
                position=light_config["position"],
                color=light_config.get("color", [1.0, 1.0, 1.0]),
                intensity=light_config.get("intensity", 1.0),
            )

    @classmethod
    def from_scene_config(cls, config: SceneConfig) -> "Scene":
        """Build a new scene from a configuration object."""
        scene = cls(ambient=config.ambient)
        scene.from_config(config)
        return scene

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization).

        Returns:
            A dictionary representation of the scene.
        """
        config = self.to_config()
        return {
            "ambient": list(config.ambient),
            "spheres": config.spheres,
            "lights": config.lights,
        }

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary.

        Args:
            data: Dictionary with 'spheres', 'lights' and 'ambient' keys.
        """
        config = SceneConfig(
            spheres=data.get("spheres", []),
            lights=data.get("lights", []),
            ambient=_as_vec3(data.get("ambient", DEFAULT_AMBIENT), "ambient"),
        )
        self.from_config(config)

    # =========================================================================
    # Capacity Information
    # =========================================================================

    @staticmethod
    def get_max_spheres() -> int:
        """Get the maximum number of spheres supported."""
        return MAX_SPHERES

    @staticmethod
    def get_max_lights() -> int:
        """Get the maximum number of lights supported."""
        return MAX_LIGHTS

    def __repr__(self) -> str:
        """Return a string representation of the scene."""
        return f"Scene(spheres={len(self.spheres)}, lights={len(self.lights)})"


def load_scene_file(path: str | Path) -> SceneConfig:
    """Read a scene configuration from a JSON file.

    Raises:
        ValueError: If the file does not contain a JSON object.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Scene file {path} must contain a JSON object")
    return SceneConfig(
        spheres=data.get("spheres", []),
        lights=data.get("lights", []),
        ambient=_as_vec3(data.get("ambient", DEFAULT_AMBIENT), "ambient"),
    )


def save_scene_file(config: SceneConfig, path: str | Path) -> None:
    """Write a scene configuration to a JSON file."""
    data = {
        "ambient": list(config.ambient),
        "spheres": config.spheres,
        "lights": config.lights,
    }
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
