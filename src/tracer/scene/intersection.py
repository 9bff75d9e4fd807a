"""Scene-level primitive intersection testing.

This module stores the scene's renderables and answers nearest-hit queries.
A renderable is a shape (sphere or plane) paired with a material ID.

Storage uses Structure-of-Arrays Taichi fields: one table per primitive type
plus an element table that records, in insertion order, each element's
shape kind, its index in the per-type table and its material ID. Keeping a
single element order makes the nearest-hit scan deterministic: among equally
distant hits the first element added wins.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.tracer.scene.intersection import add_sphere, add_plane, trace_ray
    >>> add_sphere((0.0, 0.0, -5.0), 1.0, material_id=0)
    >>> add_plane((0.0, -2.0, 0.0), (0.0, -1.0, 0.0), material_id=1)
    >>> result = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
    >>> result.element_id
    0
"""

import math
from dataclasses import dataclass
from enum import IntEnum

import taichi as ti

from src.tracer.core.ray import INFINITY, require_nonzero, vec3
from src.tracer.geometry.plane import Plane, hit_plane
from src.tracer.geometry.sphere import HitRecord, Sphere, hit_sphere, make_miss_record


class ShapeKind(IntEnum):
    """Tag of the shape union."""

    SPHERE = 0
    PLANE = 1


_SPHERE = int(ShapeKind.SPHERE)
_PLANE = int(ShapeKind.PLANE)


@ti.dataclass
class SceneHitRecord:
    """Record of a ray-scene intersection.

    Attributes:
        hit: Whether the ray intersected any element (1 if hit, 0 if miss).
        distance: Parametric distance along the ray. Only valid if hit == 1.
        point: World-space intersection point. Only valid if hit == 1.
        normal: Unit surface normal at the intersection. Only valid if
            hit == 1.
        element_id: Index of the hit element in insertion order, -1 on miss.
        material_id: Material ID of the hit element, -1 on miss.
    """

    hit: ti.i32
    distance: ti.f64
    point: vec3
    normal: vec3
    element_id: ti.i32
    material_id: ti.i32


@dataclass(frozen=True)
class TraceResult:
    """Host-side copy of a SceneHitRecord, returned by trace_ray()."""

    element_id: int
    material_id: int
    distance: float
    point: tuple[float, float, float]
    normal: tuple[float, float, float]


# Maximum number of primitives supported in the scene
MAX_SPHERES = 1024
MAX_PLANES = 256
MAX_ELEMENTS = MAX_SPHERES + MAX_PLANES

# Sphere storage
sphere_centers = ti.Vector.field(3, dtype=ti.f64, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f64, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())

# Plane storage
plane_points = ti.Vector.field(3, dtype=ti.f64, shape=MAX_PLANES)
plane_normals = ti.Vector.field(3, dtype=ti.f64, shape=MAX_PLANES)
num_planes = ti.field(dtype=ti.i32, shape=())

# Element table: the scene's renderables in insertion order
element_kinds = ti.field(dtype=ti.i32, shape=MAX_ELEMENTS)
element_shape_indices = ti.field(dtype=ti.i32, shape=MAX_ELEMENTS)
element_material_ids = ti.field(dtype=ti.i32, shape=MAX_ELEMENTS)
num_elements = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Clear all primitives from the scene.

    Resets the primitive counts to zero. The actual field data is not
    cleared but will be overwritten when new primitives are added.
    """
    num_spheres[None] = 0
    num_planes[None] = 0
    num_elements[None] = 0


def _append_element(kind: ShapeKind, shape_index: int, material_id: int) -> int:
    idx = num_elements[None]
    element_kinds[idx] = int(kind)
    element_shape_indices[idx] = shape_index
    element_material_ids[idx] = material_id
    num_elements[None] = idx + 1
    return idx


def add_sphere(center: tuple[float, float, float], radius: float, material_id: int = 0) -> int:
    """Add a sphere element to the scene.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere.
        material_id: The material ID to associate with this sphere.

    Returns:
        The element index of the added sphere.

    Raises:
        RuntimeError: If the maximum number of spheres is exceeded.
        ValueError: If the radius is not positive and finite.
    """
    if not (math.isfinite(radius) and radius > 0.0):
        raise ValueError(f"Sphere radius must be positive and finite, got {radius}")
    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    sphere_centers[idx] = [float(c) for c in center]
    sphere_radii[idx] = float(radius)
    num_spheres[None] = idx + 1
    return _append_element(ShapeKind.SPHERE, idx, material_id)


def add_plane(
    point: tuple[float, float, float],
    normal: tuple[float, float, float],
    material_id: int = 0,
) -> int:
    """Add a plane element to the scene.

    The normal is stored as given; it is expected to be unit length.

    Args:
        point: Any point on the plane.
        normal: The plane normal. Rays travelling along it can hit the plane.
        material_id: The material ID to associate with this plane.

    Returns:
        The element index of the added plane.

    Raises:
        RuntimeError: If the maximum number of planes is exceeded.
        ValueError: If the normal has zero length.
    """
    normal = require_nonzero(normal, "Plane normal")
    idx = num_planes[None]
    if idx >= MAX_PLANES:
        raise RuntimeError(f"Maximum number of planes ({MAX_PLANES}) exceeded")
    plane_points[idx] = [float(c) for c in point]
    plane_normals[idx] = list(normal)
    num_planes[None] = idx + 1
    return _append_element(ShapeKind.PLANE, idx, material_id)


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


def get_plane_count() -> int:
    """Get the number of planes in the scene."""
    return int(num_planes[None])


def get_element_count() -> int:
    """Get the number of elements (renderables) in the scene."""
    return int(num_elements[None])


@ti.func
def _make_miss_record() -> SceneHitRecord:
    return SceneHitRecord(
        hit=0,
        distance=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        element_id=-1,
        material_id=-1,
    )


@ti.func
def intersect_element(element_id: ti.i32, ray_origin: vec3, ray_direction: vec3) -> HitRecord:
    """Intersect a ray with one element, dispatching on its shape kind."""
    rec = make_miss_record()
    kind = element_kinds[element_id]
    shape_index = element_shape_indices[element_id]
    if kind == _SPHERE:
        sphere = Sphere(center=sphere_centers[shape_index], radius=sphere_radii[shape_index])
        rec = hit_sphere(ray_origin, ray_direction, sphere)
    elif kind == _PLANE:
        plane = Plane(point=plane_points[shape_index], normal=plane_normals[shape_index])
        rec = hit_plane(ray_origin, ray_direction, plane)
    return rec


@ti.func
def intersect_scene(ray_origin: vec3, ray_direction: vec3) -> SceneHitRecord:
    """Find the nearest element hit by a ray.

    Tests every element in insertion order. A hit replaces the current best
    only when its distance is strictly smaller, so ties resolve to the
    element added first.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.

    Returns:
        A SceneHitRecord for the nearest hit, or a miss record.
    """
    closest = INFINITY
    result = _make_miss_record()

    for i in range(num_elements[None]):
        rec = intersect_element(i, ray_origin, ray_direction)
        if rec.hit == 1 and rec.distance < closest:
            closest = rec.distance
            result = SceneHitRecord(
                hit=1,
                distance=rec.distance,
                point=rec.point,
                normal=rec.normal,
                element_id=i,
                material_id=element_material_ids[i],
            )

    return result


# =============================================================================
# Host-side Query
# =============================================================================

_trace_hit = ti.field(dtype=ti.i32, shape=())
_trace_element = ti.field(dtype=ti.i32, shape=())
_trace_material = ti.field(dtype=ti.i32, shape=())
_trace_distance = ti.field(dtype=ti.f64, shape=())
_trace_point = ti.Vector.field(3, dtype=ti.f64, shape=())
_trace_normal = ti.Vector.field(3, dtype=ti.f64, shape=())


@ti.kernel
def _trace_kernel(ox: ti.f64, oy: ti.f64, oz: ti.f64, dx: ti.f64, dy: ti.f64, dz: ti.f64):
    # Single-iteration outer loop keeps the element scan serial
    for _ in range(1):
        rec = intersect_scene(vec3(ox, oy, oz), vec3(dx, dy, dz))
        _trace_hit[None] = rec.hit
        _trace_element[None] = rec.element_id
        _trace_material[None] = rec.material_id
        _trace_distance[None] = rec.distance
        _trace_point[None] = rec.point
        _trace_normal[None] = rec.normal


def trace_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
) -> TraceResult | None:
    """Run a nearest-hit query from Python.

    Intended for tests and debugging; rendering calls intersect_scene()
    inside kernels.

    Args:
        origin: Ray origin.
        direction: Ray direction (should be unit length).

    Returns:
        The nearest hit, or None if the ray misses every element.
    """
    _trace_kernel(*(float(c) for c in origin), *(float(c) for c in direction))
    if _trace_hit[None] == 0:
        return None
    point = _trace_point[None]
    normal = _trace_normal[None]
    return TraceResult(
        element_id=int(_trace_element[None]),
        material_id=int(_trace_material[None]),
        distance=float(_trace_distance[None]),
        point=(float(point[0]), float(point[1]), float(point[2])),
        normal=(float(normal[0]), float(normal[1]), float(normal[2])),
    )
