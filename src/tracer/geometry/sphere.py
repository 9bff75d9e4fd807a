"""Sphere primitive with geometric ray-sphere intersection.

This module provides a Sphere dataclass, the HitRecord shared by all
primitives, and the sphere intersection function.

The intersection uses the geometric (projection) method rather than solving
the quadratic directly:

1. Project the vector from the ray origin to the sphere center onto the ray
   direction (``adj``).
2. The squared distance from the center to the ray line is
   ``|L|^2 - adj^2``. If that exceeds ``radius^2`` the ray misses.
3. Otherwise the two hits lie at ``adj -/+ thickness`` with
   ``thickness = sqrt(radius^2 - d^2)``.

The ray direction must be unit length for the distances to be parametric.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.tracer.core.ray import vec3
    >>> from src.tracer.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=vec3(0, 0, -5), radius=1.0)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from src.tracer.core.ray import normalize, vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f64


@ti.dataclass
class HitRecord:
    """Record of a ray-primitive intersection.

    Attributes:
        hit: Whether the ray intersected the primitive (1 if hit, 0 if miss).
        distance: Parametric distance along the ray (>= 0). Only valid if
            hit == 1.
        point: World-space intersection point. Only valid if hit == 1.
        normal: Unit surface normal at the intersection. For spheres it
            always points outward; for planes it is the negated plane normal.
            Only valid if hit == 1.
    """

    hit: ti.i32
    distance: ti.f64
    point: vec3
    normal: vec3


@ti.func
def make_miss_record() -> HitRecord:
    """Create a HitRecord indicating no intersection."""
    return HitRecord(
        hit=0,
        distance=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
    )


@ti.func
def hit_sphere(ray_origin: vec3, ray_direction: vec3, sphere: Sphere) -> HitRecord:
    """Test for ray-sphere intersection.

    Reports the nearest non-negative hit:
    - both intersection parameters negative: miss (sphere behind the origin)
    - first negative, second non-negative: the ray starts inside the sphere,
      report the second
    - otherwise report the first

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.
        sphere: The sphere to test intersection against.

    Returns:
        A HitRecord whose normal is normalize(point - center), outward
        regardless of which side the ray came from.
    """
    result = make_miss_record()

    to_center = sphere.center - ray_origin
    adj = tm.dot(to_center, ray_direction)
    dist_sq = tm.dot(to_center, to_center) - adj * adj
    radius_sq = sphere.radius * sphere.radius

    if dist_sq <= radius_sq:
        thickness = ti.sqrt(radius_sq - dist_sq)
        t0 = adj - thickness
        t1 = adj + thickness
        if t0 > t1:
            temp = t0
            t0 = t1
            t1 = temp

        if t0 >= 0.0 or t1 >= 0.0:
            t = t0
            if t0 < 0.0:
                t = t1
            point = ray_origin + ray_direction * t
            result = HitRecord(
                hit=1,
                distance=t,
                point=point,
                normal=normalize(point - sphere.center),
            )

    return result


@ti.func
def make_sphere(center: vec3, radius: ti.f64) -> Sphere:
    """Create a sphere from center and radius."""
    return Sphere(center=center, radius=radius)
