"""Camera module for primary ray generation.

Components:
    pinhole: Fixed pinhole camera at the origin looking down -z

Ray generation maps pixel coordinates (x to the right, y down from the top
row) to unit-length world-space rays through the pixel centers.
"""

from .pinhole import (
    Camera,
    compute_prime_ray,
    get_camera_resolution,
    get_prime_ray,
    setup_camera,
)

__all__ = [
    "Camera",
    "setup_camera",
    "compute_prime_ray",
    "get_prime_ray",
    "get_camera_resolution",
]
