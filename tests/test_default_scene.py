"""Tests for the built-in demonstration scene."""

import pytest


class TestDefaultScene:
    """Tests for the default scene configuration and camera."""

    def test_config_contents(self):
        """Test the built-in scene has four spheres and two lights."""
        from src.spheretrace.scene.default_scene import AMBIENT, default_scene_config

        config = default_scene_config()
        assert len(config.spheres) == 4
        assert len(config.lights) == 2
        assert config.ambient == AMBIENT

    def test_config_is_fresh_each_call(self):
        """Test mutating one config does not affect the next."""
        from src.spheretrace.scene.default_scene import default_scene_config

        config = default_scene_config()
        config.spheres.clear()
        assert len(default_scene_config().spheres) == 4

    def test_ground_touches_unit_spheres(self):
        """Test the ground sphere's top is at y = -1."""
        from src.spheretrace.scene.default_scene import default_scene_config

        ground = default_scene_config().spheres[3]
        assert ground["center"][1] + ground["radius"] == pytest.approx(-1.0)

    def test_create_default_scene(self):
        """Test the scene and camera are built and bound."""
        from src.spheretrace.scene.default_scene import create_default_scene

        scene, camera = create_default_scene()
        assert scene.is_bound
        assert scene.get_sphere_count() == 4
        assert scene.get_light_count() == 2
        assert scene.get_device_counts() == (4, 2)
        assert camera.position == (0.0, 0.0, 5.0)
        assert camera.fov == 60.0

    def test_create_from_custom_config(self):
        """Test a supplied configuration replaces the built-in one."""
        from src.spheretrace.scene.default_scene import create_default_scene
        from src.spheretrace.scene.manager import SceneConfig

        config = SceneConfig(spheres=[{"center": [0, 0, 0], "radius": 2.0}])
        scene, _ = create_default_scene(config)
        assert scene.get_sphere_count() == 1
        assert scene.get_light_count() == 0

    def test_center_pixel_is_red_sphere(self):
        """Test the view axis hits the red sphere first."""
        from src.spheretrace.core.image import Image
        from src.spheretrace.core.renderer import ShadingMode, render
        from src.spheretrace.scene.default_scene import RED, create_default_scene

        scene, camera = create_default_scene()
        image = Image(8, 6)
        render(image, camera, scene, ShadingMode.MATERIAL)
        assert image.get_pixel(4, 3) == pytest.approx(RED)

    def test_bottom_row_sees_ground(self):
        """Test the lowest row looks down onto the ground sphere."""
        from src.spheretrace.core.image import Image
        from src.spheretrace.core.renderer import ShadingMode, render
        from src.spheretrace.scene.default_scene import GROUND, create_default_scene

        scene, camera = create_default_scene()
        image = Image(8, 6)
        render(image, camera, scene, ShadingMode.MATERIAL)
        assert image.get_pixel(0, 5) == pytest.approx(GROUND)
