"""Field-backed light storage and per-kind dispatch.

Lights are a closed union of point and directional emitters. Each light is
stored as a kind tag plus a vector (position for point lights, travel
direction for directional lights), a brightness and a colour. The Taichi
functions below dispatch on the kind tag and expose the four queries the
integrator needs:

    light_direction(i, p)   unit direction from p toward the light
    light_brightness(i, p)  brightness arriving at p
    light_distance(i, p)    distance from p to the light (inf for directional)
    light_color(i)          light colour as an rgba vector
"""

from enum import IntEnum

import taichi as ti

from src.tracer.core.color import rgba
from src.tracer.core.ray import INFINITY, require_nonzero, vec3

from .directional import (
    DirectionalLight,
    directional_light_direction,
    directional_light_distance,
)
from .point import (
    PointLight,
    point_light_brightness,
    point_light_direction,
    point_light_distance,
)


class LightKind(IntEnum):
    """Tag of the light union."""

    POINT = 0
    DIRECTIONAL = 1


_POINT = int(LightKind.POINT)
_DIRECTIONAL = int(LightKind.DIRECTIONAL)

MAX_LIGHTS = 64

light_kinds = ti.field(dtype=ti.i32, shape=MAX_LIGHTS)
# Position for point lights, travel direction for directional lights
light_vectors = ti.Vector.field(3, dtype=ti.f64, shape=MAX_LIGHTS)
light_brightness_values = ti.field(dtype=ti.f64, shape=MAX_LIGHTS)
light_colors = ti.Vector.field(4, dtype=ti.i32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())


def clear_lights() -> None:
    """Remove all lights."""
    num_lights[None] = 0


def _store_light(kind: LightKind, vector: tuple[float, float, float], brightness: float, color) -> int:
    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    light_kinds[idx] = int(kind)
    light_vectors[idx] = list(vector)
    light_brightness_values[idx] = float(brightness)
    light_colors[idx] = list(color.as_tuple())
    num_lights[None] = idx + 1
    return idx


def add_point_light(light: PointLight) -> int:
    """Add a point light.

    Args:
        light: The point light to store.

    Returns:
        The light index.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
    """
    position = tuple(float(c) for c in light.position)
    return _store_light(LightKind.POINT, position, light.brightness, light.color)


def add_directional_light(light: DirectionalLight) -> int:
    """Add a directional light.

    Args:
        light: The directional light to store.

    Returns:
        The light index.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
        ValueError: If the light direction has zero length.
    """
    direction = require_nonzero(light.direction, "Directional light direction")
    return _store_light(LightKind.DIRECTIONAL, direction, light.brightness, light.color)


def add_light(light: PointLight | DirectionalLight) -> int:
    """Add a light of either kind."""
    if isinstance(light, PointLight):
        return add_point_light(light)
    if isinstance(light, DirectionalLight):
        return add_directional_light(light)
    raise TypeError(f"Unsupported light type: {type(light).__name__}")


def get_light_count() -> int:
    """Get the number of lights in the scene."""
    return int(num_lights[None])


@ti.func
def get_num_lights() -> ti.i32:
    return num_lights[None]


@ti.func
def light_direction(light_id: ti.i32, point: vec3) -> vec3:
    """Unit direction from a surface point toward a light."""
    result = vec3(0.0, 0.0, 0.0)
    kind = light_kinds[light_id]
    if kind == _POINT:
        result = point_light_direction(light_vectors[light_id], point)
    elif kind == _DIRECTIONAL:
        result = directional_light_direction(light_vectors[light_id])
    return result


@ti.func
def light_brightness(light_id: ti.i32, point: vec3) -> ti.f64:
    """Brightness of a light arriving at a surface point."""
    result = 0.0
    kind = light_kinds[light_id]
    if kind == _POINT:
        result = point_light_brightness(
            light_vectors[light_id], light_brightness_values[light_id], point
        )
    elif kind == _DIRECTIONAL:
        result = light_brightness_values[light_id]
    return result


@ti.func
def light_distance(light_id: ti.i32, point: vec3) -> ti.f64:
    """Distance from a surface point to a light."""
    result = INFINITY
    kind = light_kinds[light_id]
    if kind == _POINT:
        result = point_light_distance(light_vectors[light_id], point)
    elif kind == _DIRECTIONAL:
        result = directional_light_distance()
    return result


@ti.func
def light_color(light_id: ti.i32) -> rgba:
    return light_colors[light_id]
