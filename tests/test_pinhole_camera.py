"""Unit tests for the pinhole camera.

Tests cover:
- Camera configuration and validation
- Primary ray direction for the image center and corners
- Unit-length ray directions
- Pixel range checks for host-side ray generation
"""

import math

import pytest


class TestCameraConfig:
    """Tests for Camera and setup_camera."""

    def test_derived_values(self):
        from src.tracer.camera.pinhole import Camera

        camera = Camera(width=320, height=240, fov=90.0)
        assert camera.aspect_ratio == pytest.approx(4.0 / 3.0)
        assert camera.fov_adjustment == pytest.approx(1.0)

    def test_setup_and_resolution(self):
        from src.tracer.camera.pinhole import Camera, get_camera_resolution, setup_camera

        setup_camera(Camera(width=64, height=48, fov=60.0))
        assert get_camera_resolution() == (64, 48)

    def test_portrait_rejected(self):
        """Test that images taller than wide are rejected."""
        from src.tracer.camera.pinhole import Camera, setup_camera

        with pytest.raises(ValueError, match="at least its height"):
            setup_camera(Camera(width=48, height=64, fov=60.0))

    def test_zero_dimension_rejected(self):
        from src.tracer.camera.pinhole import Camera, setup_camera

        with pytest.raises(ValueError, match="positive"):
            setup_camera(Camera(width=0, height=0, fov=60.0))


class TestPrimeRays:
    """Tests for primary ray generation."""

    def test_center_ray_points_forward(self, camera_setup):
        """Test that the center pixel of an odd image looks straight down -z."""
        from src.tracer.camera.pinhole import get_prime_ray

        camera_setup(width=91, height=91, fov=90.0)
        origin, direction = get_prime_ray(45, 45)
        assert origin == (0.0, 0.0, 0.0)
        assert direction[0] == pytest.approx(0.0, abs=1e-12)
        assert direction[1] == pytest.approx(0.0, abs=1e-12)
        assert direction[2] == pytest.approx(-1.0)

    def test_top_left_points_up_and_left(self, camera_setup):
        """Test that pixel (0, 0) is the top-left corner."""
        from src.tracer.camera.pinhole import get_prime_ray

        camera_setup(width=100, height=100, fov=90.0)
        _, direction = get_prime_ray(0, 0)
        assert direction[0] < 0.0
        assert direction[1] > 0.0
        assert direction[2] < 0.0

    def test_direction_matches_formula(self, camera_setup):
        """Test the sensor mapping against a direct evaluation."""
        from src.tracer.camera.pinhole import get_prime_ray

        camera = camera_setup(width=320, height=240, fov=60.0)
        px, py = 17, 201
        fov_adjustment = math.tan(math.radians(60.0) / 2.0)
        x = ((px + 0.5) / 320 * 2.0 - 1.0) * (320 / 240) * fov_adjustment
        y = (1.0 - (py + 0.5) / 240 * 2.0) * fov_adjustment
        norm = math.sqrt(x * x + y * y + 1.0)

        _, direction = get_prime_ray(px, py)
        assert camera.width == 320
        assert direction[0] == pytest.approx(x / norm)
        assert direction[1] == pytest.approx(y / norm)
        assert direction[2] == pytest.approx(-1.0 / norm)

    @pytest.mark.parametrize("pixel", [(0, 0), (10, 50), (89, 89)])
    def test_directions_are_unit_length(self, camera_setup, pixel):
        from src.tracer.camera.pinhole import get_prime_ray

        camera_setup(width=90, height=90, fov=75.0)
        _, d = get_prime_ray(*pixel)
        assert d[0] ** 2 + d[1] ** 2 + d[2] ** 2 == pytest.approx(1.0)

    def test_pixel_outside_image_rejected(self, camera_setup):
        from src.tracer.camera.pinhole import get_prime_ray

        camera_setup(width=90, height=90)
        with pytest.raises(ValueError, match="outside"):
            get_prime_ray(91, 0)
        with pytest.raises(ValueError, match="outside"):
            get_prime_ray(0, -1)
