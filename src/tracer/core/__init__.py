"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    ray: Ray data structure and vector utilities
    color: 8-bit RGBA colour with saturating arithmetic
    integrator: Recursive Whitted-style shading (shadows and reflections)
    renderer: Pixel loop, render target and the render() entry point

All per-ray computation runs in Taichi functions in double precision.
"""

from .color import Color, rgba, saturating_add, unit_to_channel
from .ray import (
    INFINITY,
    SHADOW_BIAS,
    Point,
    Ray,
    compute_reflection_ray,
    dot,
    length,
    length_squared,
    make_ray,
    normalize,
    offset_origin,
    ray_at,
    reflect,
    require_nonzero,
    vec3,
)

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from src.tracer.core.integrator or src.tracer.core.renderer.

__all__ = [
    "Color",
    "rgba",
    "saturating_add",
    "unit_to_channel",
    "Ray",
    "Point",
    "vec3",
    "make_ray",
    "ray_at",
    "dot",
    "length",
    "length_squared",
    "normalize",
    "reflect",
    "offset_origin",
    "compute_reflection_ray",
    "require_nonzero",
    "SHADOW_BIAS",
    "INFINITY",
]
