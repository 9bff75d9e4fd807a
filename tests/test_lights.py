"""Unit tests for point and directional lights.

Tests cover:
- Light registration and capacity
- Direction, brightness and distance for each light kind
- Validation of directional light directions
"""

import math

import pytest
import taichi as ti


def _query_light(light_id, point):
    """Evaluate direction, brightness and distance of a stored light at a point."""
    from src.tracer.core.ray import vec3
    from src.tracer.lights.registry import light_brightness, light_direction, light_distance

    direction = ti.field(dtype=vec3, shape=())
    brightness = ti.field(dtype=ti.f64, shape=())
    distance = ti.field(dtype=ti.f64, shape=())

    @ti.kernel
    def test_kernel(i: ti.i32, px: ti.f64, py: ti.f64, pz: ti.f64):
        p = vec3(px, py, pz)
        direction[None] = light_direction(i, p)
        brightness[None] = light_brightness(i, p)
        distance[None] = light_distance(i, p)

    test_kernel(light_id, *point)
    return direction[None], brightness[None], distance[None]


class TestLightRegistration:
    """Tests for storing lights in Taichi fields."""

    def test_add_lights_returns_indices(self):
        from src.tracer.core.color import Color
        from src.tracer.lights import DirectionalLight, PointLight, add_light, get_light_count

        white = Color(255, 255, 255, 255)
        assert add_light(PointLight((0.0, 5.0, 0.0), 100.0, white)) == 0
        assert add_light(DirectionalLight((0.0, -1.0, 0.0), 1.0, white)) == 1
        assert get_light_count() == 2

    def test_clear_lights(self):
        from src.tracer.core.color import Color
        from src.tracer.lights import PointLight, add_light, clear_lights, get_light_count

        add_light(PointLight((0.0, 5.0, 0.0), 100.0, Color(255, 255, 255, 255)))
        clear_lights()
        assert get_light_count() == 0

    def test_unknown_light_type_rejected(self):
        from src.tracer.lights import add_light

        with pytest.raises(TypeError):
            add_light("sun")

    def test_capacity_exceeded(self):
        from src.tracer.core.color import Color
        from src.tracer.lights import MAX_LIGHTS, PointLight, add_light

        light = PointLight((0.0, 5.0, 0.0), 100.0, Color(255, 255, 255, 255))
        for _ in range(MAX_LIGHTS):
            add_light(light)
        with pytest.raises(RuntimeError, match="Maximum number of lights"):
            add_light(light)

    def test_zero_direction_rejected(self):
        from src.tracer.core.color import Color
        from src.tracer.lights import DirectionalLight

        with pytest.raises(ValueError, match="zero-length"):
            DirectionalLight((0.0, 0.0, 0.0), 1.0, Color(255, 255, 255, 255))


class TestPointLight:
    """Tests for point light evaluation."""

    def test_inverse_square_falloff(self):
        """Test brightness = intensity / (4 pi d^2)."""
        from src.tracer.core.color import Color
        from src.tracer.lights import PointLight, add_light

        add_light(PointLight((0.0, 2.0, 0.0), 1000.0, Color(255, 255, 255, 255)))
        direction, brightness, distance = _query_light(0, (0.0, 0.0, 0.0))

        assert direction[0] == pytest.approx(0.0)
        assert direction[1] == pytest.approx(1.0)
        assert direction[2] == pytest.approx(0.0)
        assert brightness == pytest.approx(1000.0 / (4.0 * math.pi * 4.0))
        assert distance == pytest.approx(2.0)


class TestDirectionalLight:
    """Tests for directional light evaluation."""

    def test_direction_points_toward_light(self):
        """Test that the light direction is the negated, normalised travel direction."""
        from src.tracer.core.color import Color
        from src.tracer.lights import DirectionalLight, add_light

        add_light(DirectionalLight((0.0, -3.0, -4.0), 2.5, Color(255, 255, 255, 255)))
        direction, brightness, distance = _query_light(0, (10.0, -3.0, 7.0))

        assert direction[0] == pytest.approx(0.0)
        assert direction[1] == pytest.approx(0.6)
        assert direction[2] == pytest.approx(0.8)
        assert brightness == pytest.approx(2.5)
        assert math.isinf(distance)
