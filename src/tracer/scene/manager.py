"""Scene manager for uploading a scene description to Taichi fields.

The integrator reads the scene from module-level Taichi fields (element
table, materials, lights, camera, sky colour). SceneManager is the single
place that fills those fields from a host-side Scene, keeping the element
order, and the material assigned to each element, in step with the
description.

The SceneManager maintains:
- One material per element, registered in element order
- Host-side ElementInfo records mirroring the element table
- The camera, sky colour and lights of the loaded scene
- Round-tripping back to a Scene / JSON dictionary

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.tracer.scene.loader import load_scene
    >>> from src.tracer.scene.manager import SceneManager
    >>> manager = SceneManager()
    >>> manager.load(load_scene("scene.json"))
    >>> manager.get_element_count()
    2
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from src.tracer.camera.pinhole import Camera, setup_camera
from src.tracer.core.color import Color
from src.tracer.core.integrator import set_sky_color
from src.tracer.lights.registry import add_light, clear_lights, get_light_count
from src.tracer.materials.material import Material, add_material, clear_materials
from src.tracer.scene.description import (
    Light,
    PlaneShape,
    Renderable,
    Scene,
    Shape,
    SphereShape,
)
from src.tracer.scene.intersection import (
    MAX_ELEMENTS,
    MAX_PLANES,
    MAX_SPHERES,
    ShapeKind,
    add_plane,
    add_sphere,
    clear_scene,
    get_element_count,
    get_plane_count,
    get_sphere_count,
)
from src.tracer.scene.loader import scene_to_dict

logger = logging.getLogger(__name__)


@dataclass
class ElementInfo:
    """Information about an element in the scene.

    Attributes:
        element_id: Position in the element table (insertion order).
        kind: Shape kind of the element.
        shape: The shape description as provided.
        material_id: The material ID assigned to the element.
    """

    element_id: int
    kind: ShapeKind
    shape: Shape
    material_id: int


class SceneManager:
    """Uploads scene descriptions and tracks what is on the device.

    Attributes:
        camera: Camera of the loaded scene, or None before load().
        sky_color: Colour for rays that miss every element.
        elements: ElementInfo for every element, in element order.
        materials: Materials indexed by material ID.
        lights: Lights in registration order.

    Example:
        >>> manager = SceneManager()
        >>> manager.set_camera(Camera(width=320, height=240, fov=90.0))
        >>> red = Material(Color(255, 0, 0, 255), albedo=0.18, reflectiveness=0.0)
        >>> manager.add_renderable(Renderable(SphereShape((0, 0, -5), 1.0), red))
        0
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.camera: Camera | None = None
        self.sky_color = Color(0, 0, 0, 255)
        self.elements: list[ElementInfo] = []
        self.materials: list[Material] = []
        self.lights: list[Light] = []
        self._clear_all()

    def _clear_all(self) -> None:
        clear_scene()
        clear_materials()
        clear_lights()
        set_sky_color(self.sky_color)
        self.elements.clear()
        self.materials.clear()
        self.lights.clear()

    def clear(self) -> None:
        """Clear elements, materials and lights.

        The camera and sky colour are kept.
        """
        self._clear_all()

    # =========================================================================
    # Scene Loading
    # =========================================================================

    def load(self, scene: Scene) -> None:
        """Replace the current scene with a scene description.

        Args:
            scene: The scene to upload.

        Raises:
            ValueError: If the camera is invalid.
            RuntimeError: If the scene exceeds a field capacity.
        """
        self.clear()
        self.set_camera(scene.camera)
        self.set_sky_color(scene.sky_color)
        for renderable in scene.elements:
            self.add_renderable(renderable)
        for light in scene.lights:
            self.add_light(light)
        logger.debug(
            f"Uploaded scene: {len(self.elements)} elements, {len(self.lights)} lights, "
            f"{scene.camera.width}x{scene.camera.height}"
        )

    def set_camera(self, camera: Camera) -> None:
        """Set the camera used for primary rays.

        Raises:
            ValueError: If a dimension is not positive or width < height.
        """
        setup_camera(camera)
        self.camera = camera

    def set_sky_color(self, color: Color) -> None:
        """Set the colour returned for rays that miss every element."""
        set_sky_color(color)
        self.sky_color = color

    # =========================================================================
    # Element Management
    # =========================================================================

    def add_renderable(self, renderable: Renderable) -> int:
        """Add a shape and its material to the scene.

        Args:
            renderable: Shape plus material.

        Returns:
            The element ID of the added element.

        Raises:
            RuntimeError: If a capacity is exceeded.
            TypeError: If the shape type is not supported.
        """
        shape = renderable.shape
        if not isinstance(shape, (SphereShape, PlaneShape)):
            raise TypeError(f"Unsupported shape type: {type(shape).__name__}")

        material_id = add_material(renderable.material)
        self.materials.append(renderable.material)

        if isinstance(shape, SphereShape):
            element_id = add_sphere(shape.origin, shape.radius, material_id)
            kind = ShapeKind.SPHERE
        else:
            element_id = add_plane(shape.point, shape.normal, material_id)
            kind = ShapeKind.PLANE

        self.elements.append(
            ElementInfo(element_id=element_id, kind=kind, shape=shape, material_id=material_id)
        )
        return element_id

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        material: Material,
    ) -> int:
        """Add a sphere with its material. Returns the element ID."""
        return self.add_renderable(Renderable(SphereShape(center, radius), material))

    def add_plane(
        self,
        point: tuple[float, float, float],
        normal: tuple[float, float, float],
        material: Material,
    ) -> int:
        """Add a plane with its material. Returns the element ID."""
        return self.add_renderable(Renderable(PlaneShape(point, normal), material))

    def add_light(self, light: Light) -> int:
        """Add a light source. Returns the light ID.

        Raises:
            RuntimeError: If the maximum number of lights is exceeded.
            TypeError: If the light type is not supported.
        """
        light_id = add_light(light)
        self.lights.append(light)
        return light_id

    def get_element_count(self) -> int:
        return get_element_count()

    def get_sphere_count(self) -> int:
        return get_sphere_count()

    def get_plane_count(self) -> int:
        return get_plane_count()

    def get_light_count(self) -> int:
        return get_light_count()

    def get_element_info(self, element_id: int) -> ElementInfo | None:
        """Get information about an element by ID, or None if not found."""
        if 0 <= element_id < len(self.elements):
            return self.elements[element_id]
        return None

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_scene(self) -> Scene:
        """Rebuild a Scene from the tracked host-side state.

        Raises:
            RuntimeError: If no camera has been set.
        """
        if self.camera is None:
            raise RuntimeError("Camera not set. Call set_camera() or load() first.")
        return Scene(
            camera=self.camera,
            elements=[
                Renderable(info.shape, self.materials[info.material_id]) for info in self.elements
            ],
            lights=list(self.lights),
            sky_color=self.sky_color,
        )

    def to_dict(self) -> dict[str, Any]:
        """Export the scene in the JSON scene file layout."""
        return scene_to_dict(self.to_scene())

    @staticmethod
    def get_max_elements() -> int:
        return MAX_ELEMENTS

    @staticmethod
    def get_max_spheres() -> int:
        return MAX_SPHERES

    @staticmethod
    def get_max_planes() -> int:
        return MAX_PLANES
