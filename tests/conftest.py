"""Pytest configuration for tracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls, which would
    invalidate the module-level fields. Double precision and exact float
    arithmetic match the CLI.
    """
    ti.init(arch=ti.cpu, default_fp=ti.f64, fast_math=False, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear elements, materials, lights and sky colour around each test."""
    # Import here so the fields are created after ti.init()
    from src.tracer.core.color import Color
    from src.tracer.core.integrator import set_sky_color
    from src.tracer.lights.registry import clear_lights
    from src.tracer.materials.material import clear_materials
    from src.tracer.scene.intersection import clear_scene

    def _clear_all():
        clear_scene()
        clear_materials()
        clear_lights()
        set_sky_color(Color(0, 0, 0, 255))

    _clear_all()
    yield
    _clear_all()


@pytest.fixture
def camera_setup():
    """Set up a camera and return a function to reconfigure it."""
    from src.tracer.camera.pinhole import Camera, setup_camera

    def _setup(width: int = 90, height: int = 90, fov: float = 90.0) -> Camera:
        camera = Camera(width=width, height=height, fov=fov)
        setup_camera(camera)
        return camera

    _setup()
    return _setup
