"""Showcase scene configuration.

This module provides a factory for a small demonstration scene that exercises
every feature of the tracer:

- A grey floor plane and a blue back wall
- A red diffuse sphere in the middle
- A green diffuse sphere to the right, partly shadowing the floor
- A mirror sphere to the left reflecting the other spheres
- A warm point light above the scene and a dim directional fill light

The camera sits at the origin looking down -z, with y up.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.tracer.core.renderer import Renderer
    >>> from src.tracer.scene.showcase import create_showcase_scene
    >>>
    >>> renderer = Renderer(create_showcase_scene())
    >>> renderer.render(max_depth=3)
    >>> renderer.save_image("showcase.png")
"""

from src.tracer.camera.pinhole import Camera
from src.tracer.core.color import Color
from src.tracer.lights.directional import DirectionalLight
from src.tracer.lights.point import PointLight
from src.tracer.materials.material import Material
from src.tracer.scene.description import PlaneShape, Renderable, Scene, SphereShape

# =============================================================================
# Showcase Constants
# =============================================================================

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
DEFAULT_FOV = 90.0

SKY_COLOR = Color(40, 60, 110, 255)

FLOOR_Y = -2.0
BACK_WALL_Z = -20.0

# Albedo 0.18 is middle grey; bright lights are needed to reach full colour
DIFFUSE_ALBEDO = 0.18
MIRROR_REFLECTIVENESS = 0.8

POINT_LIGHT_POSITION = (-2.0, 6.0, -3.0)
POINT_LIGHT_BRIGHTNESS = 6000.0
DIRECTIONAL_LIGHT_DIRECTION = (-0.25, -1.0, -1.0)
DIRECTIONAL_LIGHT_BRIGHTNESS = 8.0


# =============================================================================
# Showcase Factory
# =============================================================================


def create_showcase_scene(
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    fov: float = DEFAULT_FOV,
) -> Scene:
    """Create the showcase scene.

    Args:
        width: Image width in pixels. Must be at least height.
        height: Image height in pixels.
        fov: Vertical field of view in degrees.

    Returns:
        The scene description, ready for Renderer or SceneManager.load().
    """
    floor = Renderable(
        shape=PlaneShape(point=(0.0, FLOOR_Y, 0.0), normal=(0.0, -1.0, 0.0)),
        material=Material(Color(200, 200, 200, 255), DIFFUSE_ALBEDO, 0.0),
    )
    back_wall = Renderable(
        shape=PlaneShape(point=(0.0, 0.0, BACK_WALL_Z), normal=(0.0, 0.0, -1.0)),
        material=Material(Color(60, 90, 200, 255), DIFFUSE_ALBEDO, 0.0),
    )
    red_sphere = Renderable(
        shape=SphereShape(origin=(0.0, 0.0, -5.0), radius=1.0),
        material=Material(Color(230, 40, 40, 255), DIFFUSE_ALBEDO, 0.0),
    )
    green_sphere = Renderable(
        shape=SphereShape(origin=(2.5, -0.5, -4.5), radius=1.5),
        material=Material(Color(40, 200, 60, 255), DIFFUSE_ALBEDO, 0.0),
    )
    mirror_sphere = Renderable(
        shape=SphereShape(origin=(-3.0, 0.5, -6.5), radius=2.0),
        material=Material(Color(255, 255, 255, 255), DIFFUSE_ALBEDO, MIRROR_REFLECTIVENESS),
    )

    lights = [
        PointLight(
            position=POINT_LIGHT_POSITION,
            brightness=POINT_LIGHT_BRIGHTNESS,
            color=Color(255, 240, 220, 255),
        ),
        DirectionalLight(
            direction=DIRECTIONAL_LIGHT_DIRECTION,
            brightness=DIRECTIONAL_LIGHT_BRIGHTNESS,
            color=Color(180, 200, 255, 255),
        ),
    ]

    return Scene(
        camera=Camera(width=width, height=height, fov=fov),
        elements=[floor, back_wall, red_sphere, green_sphere, mirror_sphere],
        lights=lights,
        sky_color=SKY_COLOR,
    )
