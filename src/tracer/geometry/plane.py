"""Infinite one-sided plane primitive with ray-plane intersection.

A plane is defined by any point on it and a unit normal. Intersection is
one-sided: only rays travelling along the stored normal
(``dot(normal, direction) > 0``) can hit the plane, so a floor whose stored
normal points down (0, -1, 0) is visible from above. The reported hit normal
is the negated stored normal, facing back toward the ray.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.tracer.core.ray import vec3
    >>> from src.tracer.geometry.plane import Plane, hit_plane
    >>> # Floor at y = -2 seen from above
    >>> floor = Plane(point=vec3(0, -2, 0), normal=vec3(0, -1, 0))
    >>> # Use hit_plane within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from src.tracer.core.ray import vec3

from .sphere import HitRecord, make_miss_record


@ti.dataclass
class Plane:
    """A plane defined by a point and a normal.

    Attributes:
        point: Any point on the plane (vec3).
        normal: The plane normal (vec3, unit length). Rays are only tested
            when they travel in the same direction as this normal.
    """

    point: vec3
    normal: vec3


@ti.func
def hit_plane(ray_origin: vec3, ray_direction: vec3, plane: Plane) -> HitRecord:
    """Test for ray-plane intersection.

    The distance along the ray is

        dot(plane.point - ray_origin, normal) / dot(normal, ray_direction)

    and is only evaluated when the denominator is strictly positive.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.
        plane: The plane to test intersection against.

    Returns:
        A HitRecord with normal = -plane.normal, or a miss when the ray
        faces the plane's declared side, runs parallel to it, or the plane
        lies behind the origin.
    """
    result = make_miss_record()

    denom = tm.dot(plane.normal, ray_direction)
    if denom > 0.0:
        distance = tm.dot(plane.point - ray_origin, plane.normal) / denom
        if distance >= 0.0:
            result = HitRecord(
                hit=1,
                distance=distance,
                point=ray_origin + ray_direction * distance,
                normal=-plane.normal,
            )

    return result


@ti.func
def make_plane(point: vec3, normal: vec3) -> Plane:
    """Create a plane from a point and a normal."""
    return Plane(point=point, normal=normal)
