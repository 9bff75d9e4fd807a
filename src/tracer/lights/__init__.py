"""Lights module.

Components:
    point: Point light with inverse-square falloff
    directional: Directional light at infinity
    registry: Field storage and kind dispatch used by the integrator

Lights are a closed union; there is no emissive geometry.
"""

from .directional import DirectionalLight
from .point import PointLight
from .registry import (
    MAX_LIGHTS,
    LightKind,
    add_directional_light,
    add_light,
    add_point_light,
    clear_lights,
    get_light_count,
    light_brightness,
    light_color,
    light_direction,
    light_distance,
)

Light = PointLight | DirectionalLight

__all__ = [
    "Light",
    "PointLight",
    "DirectionalLight",
    "LightKind",
    "MAX_LIGHTS",
    "add_light",
    "add_point_light",
    "add_directional_light",
    "clear_lights",
    "get_light_count",
    "light_direction",
    "light_brightness",
    "light_distance",
    "light_color",
]
