"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls, which would
    discard every field allocated by previously imported modules.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear scene data before and after each test.

    This ensures tests are isolated from each other.
    """
    # Import here to avoid circular imports and ensure Taichi is initialized
    from src.spheretrace.materials.material import clear_materials
    from src.spheretrace.scene.intersection import clear_scene
    from src.spheretrace.scene.lights import clear_lights
    from src.spheretrace.scene.manager import _unbind_all

    def _clear_all():
        clear_scene()
        clear_materials()
        clear_lights()
        _unbind_all()

    _clear_all()

    yield

    _clear_all()
