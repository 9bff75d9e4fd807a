"""Unit tests for the scene element table and nearest-hit search.

Tests cover:
- Adding spheres and planes, element IDs in insertion order
- Validation of degenerate geometry and capacity
- Nearest-hit selection across shape kinds
- Ties resolving to the element added first
"""

import pytest


class TestElementTable:
    """Tests for adding elements."""

    def test_element_ids_follow_insertion_order(self):
        from src.tracer.scene.intersection import (
            add_plane,
            add_sphere,
            get_element_count,
            get_plane_count,
            get_sphere_count,
        )

        assert add_plane((0.0, -2.0, 0.0), (0.0, -1.0, 0.0), material_id=3) == 0
        assert add_sphere((0.0, 0.0, -5.0), 1.0, material_id=1) == 1
        assert add_sphere((2.0, 0.0, -5.0), 1.0, material_id=2) == 2
        assert get_element_count() == 3
        assert get_sphere_count() == 2
        assert get_plane_count() == 1

    def test_clear_scene(self):
        from src.tracer.scene.intersection import add_sphere, clear_scene, get_element_count

        add_sphere((0.0, 0.0, -5.0), 1.0)
        clear_scene()
        assert get_element_count() == 0

    @pytest.mark.parametrize("radius", [0.0, -1.0, float("inf"), float("nan")])
    def test_invalid_radius_rejected(self, radius):
        from src.tracer.scene.intersection import add_sphere

        with pytest.raises(ValueError, match="positive"):
            add_sphere((0.0, 0.0, -5.0), radius)

    def test_zero_normal_rejected(self):
        from src.tracer.scene.intersection import add_plane

        with pytest.raises(ValueError, match="zero-length"):
            add_plane((0.0, 0.0, 0.0), (0.0, 0.0, 0.0))

    def test_plane_capacity_exceeded(self):
        from src.tracer.scene.intersection import MAX_PLANES, add_plane

        for _ in range(MAX_PLANES):
            add_plane((0.0, -2.0, 0.0), (0.0, -1.0, 0.0))
        with pytest.raises(RuntimeError, match="Maximum number of planes"):
            add_plane((0.0, -2.0, 0.0), (0.0, -1.0, 0.0))


class TestNearestHit:
    """Tests for intersect_scene via trace_ray."""

    def test_empty_scene_misses(self):
        from src.tracer.scene.intersection import trace_ray

        assert trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)) is None

    def test_nearest_sphere_wins(self):
        """Test that the closer sphere is reported regardless of order."""
        from src.tracer.scene.intersection import add_sphere, trace_ray

        add_sphere((0.0, 0.0, -10.0), 1.0, material_id=7)
        add_sphere((0.0, 0.0, -5.0), 1.0, material_id=4)

        result = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert result is not None
        assert result.element_id == 1
        assert result.material_id == 4
        assert result.distance == pytest.approx(4.0)
        assert result.normal[2] == pytest.approx(1.0)

    def test_sphere_in_front_of_plane(self):
        """Test nearest-hit selection across shape kinds."""
        from src.tracer.scene.intersection import add_plane, add_sphere, trace_ray

        add_plane((0.0, 0.0, -20.0), (0.0, 0.0, -1.0), material_id=0)
        add_sphere((0.0, 0.0, -5.0), 1.0, material_id=1)

        result = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert result.element_id == 1

        # Beside the sphere only the back wall is hit
        result = trace_ray((5.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert result.element_id == 0
        assert result.distance == pytest.approx(20.0)
        assert result.normal[2] == pytest.approx(1.0)

    def test_tie_resolves_to_first_element(self):
        """Test that equally distant hits report the element added first."""
        from src.tracer.scene.intersection import add_sphere, trace_ray

        add_sphere((0.0, 0.0, -5.0), 1.0, material_id=10)
        add_sphere((0.0, 0.0, -5.0), 1.0, material_id=20)

        result = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert result.element_id == 0
        assert result.material_id == 10

    def test_tie_between_plane_and_sphere(self):
        """Test a sphere touching a plane at the hit point: first added wins."""
        from src.tracer.scene.intersection import add_plane, add_sphere, trace_ray

        add_sphere((0.0, 0.0, -6.0), 1.0, material_id=1)
        add_plane((0.0, 0.0, -5.0), (0.0, 0.0, -1.0), material_id=2)

        result = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert result.distance == pytest.approx(5.0)
        assert result.element_id == 0
