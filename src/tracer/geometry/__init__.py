"""Geometry module for shape primitives.

This module provides geometric primitives and intersection algorithms:

Components:
    sphere: Sphere primitive with geometric ray-sphere intersection
    plane: One-sided infinite plane primitive

All intersection routines are implemented as Taichi functions (@ti.func)
and report the nearest non-negative hit along the ray:
    record = hit_shape(ray_origin, ray_direction, shape)

There is no acceleration structure; the scene module tests every primitive
for every ray.
"""

from .plane import Plane, hit_plane, make_plane
from .sphere import HitRecord, Sphere, hit_sphere, make_miss_record, make_sphere

__all__ = [
    "HitRecord",
    "make_miss_record",
    "Sphere",
    "hit_sphere",
    "make_sphere",
    "Plane",
    "hit_plane",
    "make_plane",
]
