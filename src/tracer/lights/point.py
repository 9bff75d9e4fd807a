"""Point light: an isotropic emitter at a position in space.

Brightness falls off with the inverse square of the distance:

    brightness(p) = intensity / (4 * pi * |position - p|^2)
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from src.tracer.core.color import Color
from src.tracer.core.ray import length, length_squared, normalize, vec3


@dataclass(frozen=True)
class PointLight:
    """A light emitting uniformly from a single point.

    Attributes:
        position: World-space position of the light.
        brightness: Total emitted intensity.
        color: Light colour (alpha is ignored).
    """

    position: tuple[float, float, float]
    brightness: float
    color: Color


@ti.func
def point_light_direction(position: vec3, point: vec3) -> vec3:
    """Unit direction from a surface point toward the light."""
    return normalize(position - point)


@ti.func
def point_light_brightness(position: vec3, brightness: ti.f64, point: vec3) -> ti.f64:
    """Brightness arriving at a surface point."""
    return brightness / (4.0 * tm.pi * length_squared(position - point))


@ti.func
def point_light_distance(position: vec3, point: vec3) -> ti.f64:
    return length(position - point)
