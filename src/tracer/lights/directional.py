"""Directional light: parallel rays from a source at infinity (e.g. the sun)."""

from dataclasses import dataclass

import taichi as ti

from src.tracer.core.color import Color
from src.tracer.core.ray import INFINITY, normalize, require_nonzero, vec3


@dataclass(frozen=True)
class DirectionalLight:
    """A light shining along a fixed direction everywhere in the scene.

    Attributes:
        direction: The direction the light travels (need not be unit length,
            must not be zero).
        brightness: Constant brightness, independent of position.
        color: Light colour (alpha is ignored).
    """

    direction: tuple[float, float, float]
    brightness: float
    color: Color

    def __post_init__(self) -> None:
        require_nonzero(self.direction, "Directional light direction")


@ti.func
def directional_light_direction(direction: vec3) -> vec3:
    """Unit direction from any surface point toward the light."""
    return -normalize(direction)


@ti.func
def directional_light_distance() -> ti.f64:
    # Every occluder is closer than a light at infinity
    return INFINITY


