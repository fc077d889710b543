"""Unit tests for scene-wide intersection and shadow queries.

Tests cover:
- Closest-hit selection independent of insertion order
- Tie-breaking between coincident spheres
- Empty scenes
- Shadow queries against occluders before, at and beyond the light
"""

import math


class TestSceneStorage:
    """Tests for primitive storage in the scene fields."""

    def test_add_sphere_returns_insertion_index(self):
        """Test indices are assigned in insertion order."""
        from src.spheretrace.scene.intersection import add_sphere, get_sphere_count

        assert add_sphere((0.0, 0.0, 0.0), 1.0) == 0
        assert add_sphere((1.0, 0.0, 0.0), 1.0) == 1
        assert get_sphere_count() == 2

    def test_clear_scene(self):
        """Test clearing resets the sphere count."""
        from src.spheretrace.scene.intersection import (
            add_sphere,
            clear_scene,
            get_sphere_count,
        )

        add_sphere((0.0, 0.0, 0.0), 1.0)
        clear_scene()
        assert get_sphere_count() == 0

    def test_add_sphere_accepts_nonpositive_radius(self):
        """Test that radii are stored without validation."""
        from src.spheretrace.scene.intersection import add_sphere, sphere_radii

        idx = add_sphere((0.0, 0.0, 0.0), -2.0)
        assert sphere_radii[idx] == -2.0

    def test_sphere_capacity(self, monkeypatch):
        """Test exceeding the sphere capacity raises RuntimeError."""
        import pytest

        from src.spheretrace.scene import intersection

        monkeypatch.setattr(intersection, "MAX_SPHERES", 2)
        intersection.add_sphere((0.0, 0.0, 0.0), 1.0)
        intersection.add_sphere((0.0, 0.0, 0.0), 1.0)
        with pytest.raises(RuntimeError):
            intersection.add_sphere((0.0, 0.0, 0.0), 1.0)


class TestClosestHit:
    """Tests for intersect_scene through query_closest_hit."""

    def test_empty_scene_misses(self):
        """Test an empty scene reports a miss."""
        from src.spheretrace.scene.intersection import query_closest_hit

        hit, t, index = query_closest_hit((0.0, 0.0, 5.0), (0.0, 0.0, -1.0))
        assert hit is False
        assert math.isinf(t)
        assert index == -1

    def test_single_sphere_hit(self):
        """Test a single sphere in front of the ray."""
        from src.spheretrace.scene.intersection import add_sphere, query_closest_hit

        add_sphere((0.0, 0.0, 0.0), 1.0)
        hit, t, index = query_closest_hit((0.0, 0.0, 5.0), (0.0, 0.0, -1.0))
        assert hit is True
        assert abs(t - 4.0) < 1e-5
        assert index == 0

    def test_closest_wins_when_added_first(self):
        """Test the nearer sphere wins when it is inserted first."""
        from src.spheretrace.scene.intersection import add_sphere, query_closest_hit

        near = add_sphere((0.0, 0.0, 0.0), 1.0)
        add_sphere((0.0, 0.0, -1.0), 1.5)
        hit, t, index = query_closest_hit((0.0, 0.0, 5.0), (0.0, 0.0, -1.0))
        assert hit is True
        assert abs(t - 4.0) < 1e-5
        assert index == near

    def test_closest_wins_when_added_last(self):
        """Test the nearer sphere wins when it is inserted last."""
        from src.spheretrace.scene.intersection import add_sphere, query_closest_hit

        add_sphere((0.0, 0.0, -1.0), 1.5)
        near = add_sphere((0.0, 0.0, 0.0), 1.0)
        hit, t, index = query_closest_hit((0.0, 0.0, 5.0), (0.0, 0.0, -1.0))
        assert hit is True
        assert abs(t - 4.0) < 1e-5
        assert index == near

    def test_identical_spheres_keep_first(self):
        """Test equal distances resolve to the earliest inserted sphere."""
        from src.spheretrace.scene.intersection import add_sphere, query_closest_hit

        add_sphere((0.0, 0.0, 0.0), 1.0)
        add_sphere((0.0, 0.0, 0.0), 1.0)
        add_sphere((0.0, 0.0, 0.0), 1.0)
        hit, _, index = query_closest_hit((0.0, 0.0, 5.0), (0.0, 0.0, -1.0))
        assert hit is True
        assert index == 0

    def test_hit_from_inside_sphere(self):
        """Test a ray from inside a sphere hits its far wall."""
        from src.spheretrace.scene.intersection import add_sphere, query_closest_hit

        add_sphere((0.0, 0.0, 0.0), 2.0)
        hit, t, _ = query_closest_hit((0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
        assert hit is True
        assert abs(t - 2.0) < 1e-5

    def test_miss_all_spheres(self):
        """Test a ray pointing away from every sphere."""
        from src.spheretrace.scene.intersection import add_sphere, query_closest_hit

        add_sphere((0.0, 0.0, 0.0), 1.0)
        add_sphere((3.0, 0.0, 0.0), 1.0)
        hit, _, index = query_closest_hit((0.0, 0.0, 5.0), (0.0, 0.0, 1.0))
        assert hit is False
        assert index == -1

    def test_material_id_reported(self):
        """Test the hit record carries the sphere's material id."""
        import taichi as ti

        from src.spheretrace.core.ray import make_ray, vec3
        from src.spheretrace.scene.intersection import T_MIN, add_sphere, intersect_scene

        add_sphere((0.0, 0.0, 0.0), 1.0, material_id=7)
        material_id = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            rec = intersect_scene(make_ray(vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0)), T_MIN)
            material_id[None] = rec.material_id

        test_kernel()
        assert material_id[None] == 7


class TestShadows:
    """Tests for is_in_shadow through query_shadow."""

    def test_sphere_between_point_and_light(self):
        """Test an occluder strictly between point and light shadows it."""
        from src.spheretrace.scene.intersection import add_sphere, query_shadow

        add_sphere((0.0, 0.0, 0.0), 1.0)
        assert query_shadow((0.0, 0.0, 5.0), (0.0, 0.0, -5.0)) is True

    def test_light_off_to_the_side(self):
        """Test a light whose segment misses the sphere is unoccluded."""
        from src.spheretrace.scene.intersection import add_sphere, query_shadow

        add_sphere((0.0, 0.0, 0.0), 1.0)
        assert query_shadow((0.0, 0.0, 5.0), (0.0, 5.0, 5.0)) is False

    def test_occluder_at_light_distance_does_not_shadow(self):
        """Test a hit exactly at the light's distance is not a shadow."""
        from src.spheretrace.scene.intersection import add_sphere, query_shadow

        add_sphere((0.0, 0.0, 0.0), 1.0)
        assert query_shadow((0.0, 0.0, 5.0), (0.0, 0.0, 1.0)) is False

    def test_occluder_beyond_light_does_not_shadow(self):
        """Test a sphere behind the light does not shadow."""
        from src.spheretrace.scene.intersection import add_sphere, query_shadow

        add_sphere((0.0, 0.0, 0.0), 1.0)
        assert query_shadow((0.0, 0.0, 5.0), (0.0, 0.0, 1.5)) is False

    def test_surface_point_facing_light_is_lit(self):
        """Test a point on the surface is not shadowed by its own sphere."""
        from src.spheretrace.scene.intersection import add_sphere, query_shadow

        add_sphere((0.0, 0.0, 0.0), 1.0)
        assert query_shadow((0.0, 0.0, 1.0), (0.0, 0.0, 5.0)) is False

    def test_surface_point_facing_away_is_shadowed(self):
        """Test the far side of the same sphere occludes a backlit point."""
        from src.spheretrace.scene.intersection import add_sphere, query_shadow

        add_sphere((0.0, 0.0, 0.0), 1.0)
        assert query_shadow((0.0, 0.0, 1.0), (0.0, 0.0, -5.0)) is True

    def test_empty_scene_never_shadowed(self):
        """Test no primitives means no shadows."""
        from src.spheretrace.scene.intersection import query_shadow

        assert query_shadow((0.0, 0.0, 0.0), (10.0, 10.0, 10.0)) is False
