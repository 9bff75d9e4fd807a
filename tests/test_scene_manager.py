"""Unit tests for the SceneManager.

Tests cover:
- Loading a scene description into the Taichi fields
- Element and material ID assignment
- Light registration
- Scene clearing
- Export back to a Scene / dictionary
"""

import pytest


@pytest.fixture
def fresh_scene():
    """Create a fresh SceneManager for each test."""
    from src.tracer.scene.manager import SceneManager

    scene = SceneManager()
    yield scene
    scene.clear()


def _material(r=255, g=255, b=255, reflectiveness=0.0):
    from src.tracer.core.color import Color
    from src.tracer.materials import Material

    return Material(Color(r, g, b, 255), albedo=0.18, reflectiveness=reflectiveness)


class TestElementManagement:
    """Tests for adding elements through the manager."""

    def test_add_sphere_and_plane(self, fresh_scene):
        from src.tracer.scene.intersection import ShapeKind

        assert fresh_scene.add_sphere((0.0, 0.0, -5.0), 1.0, _material()) == 0
        assert fresh_scene.add_plane((0.0, -2.0, 0.0), (0.0, -1.0, 0.0), _material()) == 1
        assert fresh_scene.get_element_count() == 2
        assert fresh_scene.get_sphere_count() == 1
        assert fresh_scene.get_plane_count() == 1
        assert fresh_scene.get_element_info(1).kind == ShapeKind.PLANE
        assert fresh_scene.get_element_info(5) is None

    def test_each_element_gets_its_material(self, fresh_scene):
        """Test that traced hits report the element's own material."""
        from src.tracer.materials import get_material_count
        from src.tracer.scene.intersection import trace_ray

        fresh_scene.add_sphere((0.0, 0.0, -5.0), 1.0, _material(r=10))
        fresh_scene.add_sphere((3.0, 0.0, -5.0), 1.0, _material(r=20))

        assert get_material_count() == 2
        result = trace_ray((3.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert result.element_id == 1
        assert fresh_scene.materials[result.material_id].base_color.r == 20

    def test_invalid_shape_rejected(self, fresh_scene):
        from src.tracer.scene.description import Renderable

        with pytest.raises(TypeError):
            fresh_scene.add_renderable(Renderable("cube", _material()))

    def test_add_light(self, fresh_scene):
        from src.tracer.core.color import Color
        from src.tracer.lights import PointLight

        light_id = fresh_scene.add_light(PointLight((0.0, 5.0, 0.0), 100.0, Color(255, 255, 255, 255)))
        assert light_id == 0
        assert fresh_scene.get_light_count() == 1

    def test_clear(self, fresh_scene):
        from src.tracer.core.color import Color
        from src.tracer.lights import PointLight

        fresh_scene.add_sphere((0.0, 0.0, -5.0), 1.0, _material())
        fresh_scene.add_light(PointLight((0.0, 5.0, 0.0), 100.0, Color(255, 255, 255, 255)))
        fresh_scene.clear()

        assert fresh_scene.get_element_count() == 0
        assert fresh_scene.get_light_count() == 0
        assert fresh_scene.elements == []
        assert fresh_scene.lights == []


class TestSceneLoading:
    """Tests for load() and export."""

    def test_load_scene(self, fresh_scene):
        from src.tracer.camera.pinhole import get_camera_resolution
        from src.tracer.core.integrator import get_sky_color
        from src.tracer.scene.showcase import create_showcase_scene

        scene = create_showcase_scene(width=64, height=48)
        fresh_scene.load(scene)

        assert fresh_scene.get_element_count() == len(scene.elements)
        assert fresh_scene.get_light_count() == len(scene.lights)
        assert get_camera_resolution() == (64, 48)
        assert get_sky_color() == scene.sky_color

    def test_load_replaces_previous_scene(self, fresh_scene):
        from src.tracer.scene.showcase import create_showcase_scene

        scene = create_showcase_scene(width=64, height=48)
        fresh_scene.load(scene)
        fresh_scene.load(scene)
        assert fresh_scene.get_element_count() == len(scene.elements)

    def test_load_rejects_portrait_camera(self, fresh_scene):
        from src.tracer.camera.pinhole import Camera
        from src.tracer.scene.description import Scene

        with pytest.raises(ValueError):
            fresh_scene.load(Scene(camera=Camera(width=48, height=64, fov=90.0)))

    def test_to_scene_round_trip(self, fresh_scene):
        from src.tracer.scene.showcase import create_showcase_scene

        scene = create_showcase_scene(width=64, height=48)
        fresh_scene.load(scene)
        assert fresh_scene.to_scene() == scene

    def test_to_dict_without_camera(self, fresh_scene):
        with pytest.raises(RuntimeError, match="Camera not set"):
            fresh_scene.to_dict()

    def test_capacities(self):
        from src.tracer.scene.manager import SceneManager

        assert SceneManager.get_max_elements() == (
            SceneManager.get_max_spheres() + SceneManager.get_max_planes()
        )
