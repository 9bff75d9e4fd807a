"""Host-side scene graph.

These dataclasses describe a scene before it is uploaded to Taichi fields:
a camera, a list of renderables (shape + material), a list of lights and a
sky colour. They are constructed once, either in code or by the JSON loader,
and stay read-only for the whole render.

Degenerate geometry is rejected at construction: sphere radii must be
positive and plane normals / light directions must have non-zero length.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from src.tracer.camera.pinhole import Camera
from src.tracer.core.color import Color
from src.tracer.core.ray import require_nonzero
from src.tracer.lights.directional import DirectionalLight
from src.tracer.lights.point import PointLight
from src.tracer.materials.material import Material


@dataclass(frozen=True)
class SphereShape:
    """A sphere given by its center (origin) and radius."""

    origin: tuple[float, float, float]
    radius: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.radius) and self.radius > 0.0):
            raise ValueError(f"Sphere radius must be positive and finite, got {self.radius}")


@dataclass(frozen=True)
class PlaneShape:
    """A one-sided plane given by a point on it and its unit normal."""

    point: tuple[float, float, float]
    normal: tuple[float, float, float]

    def __post_init__(self) -> None:
        require_nonzero(self.normal, "Plane normal")


Shape = SphereShape | PlaneShape
Light = PointLight | DirectionalLight


@dataclass(frozen=True)
class Renderable:
    """A scene object: geometry plus appearance.

    A renderable has no identity beyond its position in Scene.elements.
    """

    shape: Shape
    material: Material


@dataclass
class Scene:
    """A complete scene description.

    Attributes:
        camera: Image resolution and field of view.
        elements: Renderables in insertion order. Order only matters for
            equally distant hits, where the earlier element wins.
        lights: Light sources.
        sky_color: Colour of rays that miss every element.
    """

    camera: Camera
    elements: list[Renderable] = field(default_factory=list)
    lights: list[Light] = field(default_factory=list)
    sky_color: Color = field(default_factory=lambda: Color(0, 0, 0, 255))


__all__ = [
    "Camera",
    "Color",
    "DirectionalLight",
    "Light",
    "Material",
    "PlaneShape",
    "PointLight",
    "Renderable",
    "Scene",
    "Shape",
    "SphereShape",
]
