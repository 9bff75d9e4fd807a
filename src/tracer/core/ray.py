"""Ray data structure and vector utilities for the recursive ray tracer.

This module provides the Ray dataclass and the small vector algebra layer the
rest of the tracer is built on. Everything runs in double precision: the
Taichi runtime must be initialised with ``default_fp=ti.f64`` and all vectors
use the explicit ``vec3`` type defined here.

Componentwise add/sub/negate/scale are native Taichi vector operators; the
functions below cover the remaining operations (dot, length, normalize,
reflection) plus the shadow-bias offset used for secondary rays.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> origin = vec3(0.0, 0.0, 0.0)
    >>> direction = vec3(0.0, 0.0, -1.0)
    >>> # Inside a Taichi kernel:
    >>> # ray = make_ray(origin, direction)
    >>> # point = ray_at(ray, 5.0)
"""

import math

import taichi as ti
import taichi.math as tm

# Double precision 3-vector; Point is the same type used for positions
vec3 = ti.types.vector(3, ti.f64)
Point = vec3

# Offset applied along the surface normal before casting shadow and
# reflection rays, so they do not re-hit their own surface
SHADOW_BIAS = 1e-13

# Distance reported for lights at infinity and used as the initial
# closest-hit bound
INFINITY = float("inf")


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction of the ray (vec3). Every producer in the
            tracer (camera and reflection) hands out unit-length directions,
            so consumers may assume it.
    """

    origin: vec3
    direction: vec3


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


@ti.func
def ray_at(ray: Ray, t: ti.f64) -> vec3:
    """Compute the point ray.origin + t * ray.direction."""
    return ray.origin + ray.direction * t


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def dot(a: vec3, b: vec3) -> ti.f64:
    """Compute the dot product of two vectors."""
    return tm.dot(a, b)


@ti.func
def length_squared(v: vec3) -> ti.f64:
    """Compute the squared length of a vector.

    Cheaper than length() when only comparing magnitudes.
    """
    return tm.dot(v, v)


@ti.func
def length(v: vec3) -> ti.f64:
    """Compute the Euclidean length of a vector."""
    return ti.sqrt(length_squared(v))


@ti.func
def normalize(v: vec3) -> vec3:
    """Scale a vector to unit length.

    Computed as ``v * (1 / length(v))``. A zero-length input yields a
    non-finite vector; host-side entry points reject zero-length directions
    before they reach the kernels (see require_nonzero).

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.
    """
    return v * (1.0 / length(v))


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Mirror an incident direction about a surface normal.

    Args:
        incident: The incoming direction (pointing toward the surface).
        normal: The unit surface normal.

    Returns:
        incident - normal * 2 * dot(incident, normal). Unit length whenever
        both inputs are unit length.
    """
    return incident - normal * 2.0 * tm.dot(incident, normal)


@ti.func
def offset_origin(point: vec3, normal: vec3) -> vec3:
    """Push a surface point off the surface by SHADOW_BIAS along the normal."""
    return point + normal * SHADOW_BIAS


@ti.func
def compute_reflection_ray(normal: vec3, incident: vec3, point: vec3) -> Ray:
    """Build the mirror reflection ray leaving a surface point.

    Args:
        normal: The unit surface normal at the hit point.
        incident: The direction of the ray that hit the surface.
        point: The hit point.

    Returns:
        A ray starting SHADOW_BIAS above the surface, travelling along the
        mirrored direction.
    """
    return make_ray(offset_origin(point, normal), reflect(incident, normal))


# =============================================================================
# Host-side Helpers
# =============================================================================


def require_nonzero(vector: tuple[float, float, float], name: str) -> tuple[float, float, float]:
    """Validate that a host-side vector can be normalised.

    Args:
        vector: The (x, y, z) components.
        name: The name used in the error message.

    Returns:
        The vector as a tuple of floats.

    Raises:
        ValueError: If the vector does not have three finite components or
            has zero length.
    """
    if len(vector) != 3:
        raise ValueError(f"{name} must have 3 components, got {len(vector)}")
    x, y, z = (float(c) for c in vector)
    if not all(math.isfinite(c) for c in (x, y, z)):
        raise ValueError(f"{name} must be finite, got {(x, y, z)}")
    if x * x + y * y + z * z == 0.0:
        raise ValueError(f"{name} must not be a zero-length vector")
    return (x, y, z)
