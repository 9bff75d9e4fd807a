"""Whitted-style recursive shading with hard shadows and mirror reflection.

Given a ray and its nearest hit, get_color() computes an 8-bit RGBA colour:

- Miss: the sky colour, unmodified (including its alpha).
- Hit with depth >= max_depth: opaque black; the reflection budget is spent.
- Hit otherwise: for every light, cast a shadow ray from the biased hit point
  toward the light. If anything is hit no farther than the light, that light
  contributes nothing. The remaining lights add a Lambertian term per channel

      light_c / 255 * max(0, n . l) * brightness * (albedo / pi) * base_c / 255

  and the sum is clamped to [0, 1]. For reflective materials the diffuse
  colour is scaled by (1 - reflectiveness) and the colour of the mirror
  reflection ray, shaded at depth + 1, is added with saturating addition.
  Computed hit colours are opaque.

Taichi functions cannot recurse, so the reflection chain runs as a loop.
Every contribution is non-negative, so the nested saturating additions of
the recursive definition equal one running sum clamped at 255 per channel:
the loop produces exactly the recursive result. The chain ends on a miss, on
a non-reflective hit, or when the depth reaches max_depth.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.tracer.core.color import Color
    >>> from src.tracer.core.integrator import set_sky_color, shade_ray
    >>> set_sky_color(Color(135, 206, 235, 255))
    >>> shade_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), depth=0, max_depth=3)
"""

import taichi as ti
import taichi.math as tm

from src.tracer.camera.pinhole import compute_prime_ray, get_camera_resolution
from src.tracer.core.color import Color, rgba, saturating_add, unit_to_channel
from src.tracer.core.ray import Ray, compute_reflection_ray, offset_origin, vec3
from src.tracer.lights.registry import (
    get_num_lights,
    light_brightness,
    light_color,
    light_direction,
    light_distance,
)
from src.tracer.materials.material import amount_reflected, get_base_color, get_reflectiveness
from src.tracer.scene.intersection import SceneHitRecord, intersect_scene


# =============================================================================
# Sky Colour
# =============================================================================

_sky_color = ti.Vector.field(4, dtype=ti.i32, shape=())


def set_sky_color(color: Color) -> None:
    """Set the colour returned for rays that miss every element."""
    _sky_color[None] = list(color.as_tuple())


def get_sky_color() -> Color:
    """Get the current sky colour."""
    c = _sky_color[None]
    return Color(int(c[0]), int(c[1]), int(c[2]), int(c[3]))


# =============================================================================
# Shading
# =============================================================================


@ti.func
def _direct_lighting(record: SceneHitRecord) -> vec3:
    """Sum the diffuse contribution of every unoccluded light at a hit.

    Returns:
        Linear RGB in [0, 1].
    """
    base_color = get_base_color(record.material_id)
    amount = amount_reflected(record.material_id)
    shadow_origin = offset_origin(record.point, record.normal)

    color = vec3(0.0, 0.0, 0.0)
    for light_id in range(get_num_lights()):
        direction = light_direction(light_id, record.point)
        brightness = light_brightness(light_id, record.point)

        shadow = intersect_scene(shadow_origin, direction)
        if shadow.hit == 1 and shadow.distance <= light_distance(light_id, record.point):
            brightness = 0.0

        power = ti.max(tm.dot(record.normal, direction), 0.0) * brightness
        emitted = light_color(light_id)
        for c in ti.static(range(3)):
            color[c] += ((ti.cast(emitted[c], ti.f64) / 255.0) * power * amount) * (
                ti.cast(base_color[c], ti.f64) / 255.0
            )

    return tm.clamp(color, 0.0, 1.0)


@ti.func
def _opaque(color: vec3) -> rgba:
    return rgba(unit_to_channel(color[0]), unit_to_channel(color[1]), unit_to_channel(color[2]), 255)


@ti.func
def get_color(ray: Ray, record: SceneHitRecord, depth: ti.i32, max_depth: ti.i32) -> rgba:
    """Shade a ray given its nearest hit.

    Args:
        ray: The ray that produced record.
        record: Result of intersect_scene() for ray.
        depth: Current reflection depth (0 for primary rays).
        max_depth: Reflection budget ("number of passes").

    Returns:
        The 8-bit RGBA colour seen along the ray.
    """
    color = rgba(0, 0, 0, 0)
    current_ray = ray
    current = record
    level = depth
    active = 1

    while active == 1:
        if current.hit == 0:
            color = saturating_add(color, _sky_color[None])
            active = 0
        elif level >= max_depth:
            color = saturating_add(color, rgba(0, 0, 0, 255))
            active = 0
        else:
            diffuse = _direct_lighting(current)
            reflectiveness = get_reflectiveness(current.material_id)
            if reflectiveness > 0.0:
                diffuse *= 1.0 - reflectiveness
                color = saturating_add(color, _opaque(diffuse))
                current_ray = compute_reflection_ray(current.normal, current_ray.direction, current.point)
                current = intersect_scene(current_ray.origin, current_ray.direction)
                level += 1
            else:
                color = saturating_add(color, _opaque(diffuse))
                active = 0

    return color


@ti.func
def shade_primary(pixel_x: ti.i32, pixel_y: ti.i32, max_depth: ti.i32) -> rgba:
    """Trace and shade the primary ray of one pixel."""
    ray = compute_prime_ray(pixel_x, pixel_y)
    record = intersect_scene(ray.origin, ray.direction)
    return get_color(ray, record, 0, max_depth)


# =============================================================================
# Host-side Queries
# =============================================================================

_query_color = ti.Vector.field(4, dtype=ti.i32, shape=())


@ti.kernel
def _shade_ray_kernel(
    ox: ti.f64,
    oy: ti.f64,
    oz: ti.f64,
    dx: ti.f64,
    dy: ti.f64,
    dz: ti.f64,
    depth: ti.i32,
    max_depth: ti.i32,
):
    # Single-iteration outer loop keeps the scene scans serial
    for _ in range(1):
        ray = Ray(origin=vec3(ox, oy, oz), direction=vec3(dx, dy, dz))
        record = intersect_scene(ray.origin, ray.direction)
        _query_color[None] = get_color(ray, record, depth, max_depth)


@ti.kernel
def _shade_pixel_kernel(pixel_x: ti.i32, pixel_y: ti.i32, max_depth: ti.i32):
    for _ in range(1):
        _query_color[None] = shade_primary(pixel_x, pixel_y, max_depth)


def _read_query_color() -> Color:
    c = _query_color[None]
    return Color(int(c[0]), int(c[1]), int(c[2]), int(c[3]))


def shade_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    depth: int = 0,
    max_depth: int = 3,
) -> Color:
    """Trace and shade a single ray from Python.

    Intended for tests and debugging; rendering runs the same functions
    inside the pixel kernel.

    Args:
        origin: Ray origin.
        direction: Unit ray direction.
        depth: Starting reflection depth.
        max_depth: Reflection budget.

    Returns:
        The shaded colour.
    """
    _shade_ray_kernel(
        *(float(c) for c in origin),
        *(float(c) for c in direction),
        depth,
        max_depth,
    )
    return _read_query_color()


def shade_pixel(pixel_x: int, pixel_y: int, max_depth: int = 3) -> Color:
    """Shade the primary ray of one pixel from Python.

    Raises:
        RuntimeError: If the camera has not been set up.
        ValueError: If the pixel lies outside the image.
    """
    width, height = get_camera_resolution()
    if not (0 <= pixel_x < width and 0 <= pixel_y < height):
        raise ValueError(f"Pixel ({pixel_x}, {pixel_y}) is outside the {width}x{height} image")
    _shade_pixel_kernel(pixel_x, pixel_y, max_depth)
    return _read_query_color()
