"""JSON scene loading and serialization.

Scene files use externally tagged unions for shapes and lights:

    {
      "camera": {"width": 800, "height": 600, "fov": 90.0},
      "elements": [
        {
          "shape": {"SPHERE": {"origin": {"x": 0, "y": 0, "z": -5}, "radius": 1.0}},
          "material": {
            "base_color": {"r": 255, "g": 0, "b": 0, "a": 255},
            "albedo": 0.18,
            "reflectiveness": 0.0
          }
        },
        {
          "shape": {"PLANE": {"point": {"x": 0, "y": -2, "z": 0},
                              "normal": {"x": 0, "y": -1, "z": 0}}},
          "material": {...}
        }
      ],
      "lights": [
        {"POINT": {"position": {...}, "brightness": 5000.0, "color": {...}}},
        {"DIRECTIONAL": {"direction": {...}, "brightness": 2.0, "color": {...}}}
      ],
      "sky_color": {"r": 30, "g": 30, "b": 60, "a": 255}
    }

Vectors may also be written as [x, y, z] lists. Any malformed input raises
SceneLoadError; nothing is rendered from a partially parsed scene.

Example:
    >>> from src.tracer.scene.loader import load_scene
    >>> scene = load_scene("scene.json")
    >>> len(scene.elements)
    2
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from src.tracer.camera.pinhole import Camera
from src.tracer.core.color import Color
from src.tracer.lights.directional import DirectionalLight
from src.tracer.lights.point import PointLight
from src.tracer.materials.material import Material

from .description import Light, PlaneShape, Renderable, Scene, Shape, SphereShape

logger = logging.getLogger(__name__)


class SceneLoadError(ValueError):
    """Raised when a scene description cannot be parsed."""


# =============================================================================
# Field Parsers
# =============================================================================


def _require(data: dict[str, Any], key: str, context: str) -> Any:
    if not isinstance(data, dict):
        raise SceneLoadError(f"{context} must be an object, got {type(data).__name__}")
    if key not in data:
        raise SceneLoadError(f"{context} is missing '{key}'")
    return data[key]


def _number(value: Any, context: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SceneLoadError(f"{context} must be a number, got {value!r}")
    return float(value)


def _integer(value: Any, context: str, minimum: int, maximum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SceneLoadError(f"{context} must be an integer, got {value!r}")
    if value < minimum or value > maximum:
        raise SceneLoadError(f"{context} = {value} is outside [{minimum}, {maximum}]")
    return value


def _vector(value: Any, context: str) -> tuple[float, float, float]:
    if isinstance(value, (list, tuple)):
        if len(value) != 3:
            raise SceneLoadError(f"{context} must have 3 components, got {len(value)}")
        x, y, z = value
    else:
        x = _require(value, "x", context)
        y = _require(value, "y", context)
        z = _require(value, "z", context)
    return (_number(x, f"{context}.x"), _number(y, f"{context}.y"), _number(z, f"{context}.z"))


def _color(value: Any, context: str) -> Color:
    channels = [
        _integer(_require(value, name, context), f"{context}.{name}", 0, 255)
        for name in ("r", "g", "b", "a")
    ]
    return Color(*channels)


def _tagged(value: Any, context: str) -> tuple[str, Any]:
    if not isinstance(value, dict) or len(value) != 1:
        raise SceneLoadError(f"{context} must be an object with exactly one variant tag")
    ((tag, body),) = value.items()
    return tag, body


def _camera(value: Any) -> Camera:
    return Camera(
        width=_integer(_require(value, "width", "camera"), "camera.width", 1, 2**32 - 1),
        height=_integer(_require(value, "height", "camera"), "camera.height", 1, 2**32 - 1),
        fov=_number(_require(value, "fov", "camera"), "camera.fov"),
    )


def _shape(value: Any, context: str) -> Shape:
    tag, body = _tagged(value, context)
    if tag == "SPHERE":
        return SphereShape(
            origin=_vector(_require(body, "origin", context), f"{context}.origin"),
            radius=_number(_require(body, "radius", context), f"{context}.radius"),
        )
    if tag == "PLANE":
        return PlaneShape(
            point=_vector(_require(body, "point", context), f"{context}.point"),
            normal=_vector(_require(body, "normal", context), f"{context}.normal"),
        )
    raise SceneLoadError(f"{context} has unknown shape type: {tag}")


def _material(value: Any, context: str) -> Material:
    return Material(
        base_color=_color(_require(value, "base_color", context), f"{context}.base_color"),
        albedo=_number(_require(value, "albedo", context), f"{context}.albedo"),
        reflectiveness=_number(
            _require(value, "reflectiveness", context), f"{context}.reflectiveness"
        ),
    )


def _light(value: Any, context: str) -> Light:
    tag, body = _tagged(value, context)
    brightness = _number(_require(body, "brightness", context), f"{context}.brightness")
    color = _color(_require(body, "color", context), f"{context}.color")
    if tag == "POINT":
        position = _vector(_require(body, "position", context), f"{context}.position")
        return PointLight(position=position, brightness=brightness, color=color)
    if tag == "DIRECTIONAL":
        direction = _vector(_require(body, "direction", context), f"{context}.direction")
        return DirectionalLight(direction=direction, brightness=brightness, color=color)
    raise SceneLoadError(f"{context} has unknown light type: {tag}")


def _list(value: Any, context: str) -> list[Any]:
    if not isinstance(value, list):
        raise SceneLoadError(f"{context} must be a list, got {type(value).__name__}")
    return value


# =============================================================================
# Public API
# =============================================================================


def scene_from_dict(data: dict[str, Any]) -> Scene:
    """Build a Scene from parsed JSON data.

    Args:
        data: Dictionary with 'camera', 'elements', 'lights' and 'sky_color'.

    Returns:
        The scene description.

    Raises:
        SceneLoadError: If any field is missing, has the wrong type, or
            describes degenerate geometry.
    """
    try:
        camera = _camera(_require(data, "camera", "scene"))
        elements = []
        for i, item in enumerate(_list(_require(data, "elements", "scene"), "elements")):
            context = f"elements[{i}]"
            elements.append(
                Renderable(
                    shape=_shape(_require(item, "shape", context), f"{context}.shape"),
                    material=_material(_require(item, "material", context), f"{context}.material"),
                )
            )
        lights = [
            _light(item, f"lights[{i}]")
            for i, item in enumerate(_list(_require(data, "lights", "scene"), "lights"))
        ]
        sky_color = _color(_require(data, "sky_color", "scene"), "sky_color")
    except SceneLoadError:
        raise
    except ValueError as e:
        # Degenerate geometry rejected by the scene dataclasses
        raise SceneLoadError(str(e)) from e

    return Scene(camera=camera, elements=elements, lights=lights, sky_color=sky_color)


def scene_from_json(text: str) -> Scene:
    """Parse a Scene from JSON text.

    Raises:
        SceneLoadError: If the text is not valid JSON or not a valid scene.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SceneLoadError(f"Invalid scene JSON: {e}") from e
    return scene_from_dict(data)


def load_scene(filepath: str | Path) -> Scene:
    """Load a Scene from a JSON file.

    Args:
        filepath: Path to the scene file.

    Returns:
        The scene description.

    Raises:
        SceneLoadError: If the file cannot be read or parsed.
    """
    path = Path(filepath)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SceneLoadError(f"Could not read scene file {path}: {e}") from e

    scene = scene_from_json(text)
    logger.debug(
        f"Loaded scene {path}: {len(scene.elements)} elements, {len(scene.lights)} lights, "
        f"{scene.camera.width}x{scene.camera.height}"
    )
    return scene


def _vector_dict(vector: tuple[float, float, float]) -> dict[str, float]:
    return {"x": vector[0], "y": vector[1], "z": vector[2]}


def _color_dict(color: Color) -> dict[str, int]:
    return {"r": color.r, "g": color.g, "b": color.b, "a": color.a}


def scene_to_dict(scene: Scene) -> dict[str, Any]:
    """Export a Scene to a dictionary (for JSON serialization).

    The output uses the same layout scene_from_dict() reads.
    """
    elements = []
    for renderable in scene.elements:
        shape = renderable.shape
        if isinstance(shape, SphereShape):
            shape_data = {"SPHERE": {"origin": _vector_dict(shape.origin), "radius": shape.radius}}
        else:
            shape_data = {
                "PLANE": {"point": _vector_dict(shape.point), "normal": _vector_dict(shape.normal)}
            }
        material = renderable.material
        elements.append(
            {
                "shape": shape_data,
                "material": {
                    "base_color": _color_dict(material.base_color),
                    "albedo": material.albedo,
                    "reflectiveness": material.reflectiveness,
                },
            }
        )

    lights = []
    for light in scene.lights:
        if isinstance(light, PointLight):
            lights.append(
                {
                    "POINT": {
                        "position": _vector_dict(light.position),
                        "brightness": light.brightness,
                        "color": _color_dict(light.color),
                    }
                }
            )
        else:
            lights.append(
                {
                    "DIRECTIONAL": {
                        "direction": _vector_dict(light.direction),
                        "brightness": light.brightness,
                        "color": _color_dict(light.color),
                    }
                }
            )

    return {
        "camera": {
            "width": scene.camera.width,
            "height": scene.camera.height,
            "fov": scene.camera.fov,
        },
        "elements": elements,
        "lights": lights,
        "sky_color": _color_dict(scene.sky_color),
    }
