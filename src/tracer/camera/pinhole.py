"""Fixed pinhole camera for primary ray generation.

The camera sits at the world origin looking down -z with +y up. It maps a
discrete pixel coordinate to a unit-length primary ray through the center of
that pixel (no sub-pixel jitter, no anti-aliasing):

    fov_adjustment = tan(radians(fov) / 2)
    aspect_ratio   = width / height
    dir_x = ((px + 0.5) / width  * 2 - 1) * aspect_ratio * fov_adjustment
    dir_y = (1 - (py + 0.5) / height * 2) * fov_adjustment
    direction = normalize(dir_x, dir_y, -1)

Pixel (0, 0) is the top-left corner of the image. The field of view applies
to the vertical axis; the horizontal extent is widened by the aspect ratio,
which is why landscape or square images (width >= height) are required.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.tracer.camera.pinhole import Camera, setup_camera, get_prime_ray
    >>> setup_camera(Camera(width=320, height=240, fov=90.0))
    >>> origin, direction = get_prime_ray(160, 120)
"""

import math
from dataclasses import dataclass

import taichi as ti

from src.tracer.core.ray import Ray, make_ray, normalize, vec3

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass(frozen=True)
class Camera:
    """Configuration of the pinhole camera.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels (must not exceed width).
        fov: Vertical field of view in degrees.
    """

    width: int
    height: int
    fov: float

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    @property
    def fov_adjustment(self) -> float:
        """Half-height of the image plane at unit distance."""
        return math.tan(math.radians(self.fov) / 2.0)


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_width = ti.field(dtype=ti.i32, shape=())
_camera_height = ti.field(dtype=ti.i32, shape=())
_fov_adjustment = ti.field(dtype=ti.f64, shape=())
_aspect_ratio = ti.field(dtype=ti.f64, shape=())
_camera_initialized = ti.field(dtype=ti.i32, shape=())


def setup_camera(camera: Camera) -> None:
    """Initialize camera state from configuration.

    Must be called before rendering.

    Args:
        camera: Camera resolution and field of view.

    Raises:
        ValueError: If a dimension is not positive or width < height.
    """
    if camera.width <= 0 or camera.height <= 0:
        raise ValueError(
            f"Camera dimensions must be positive, got {camera.width}x{camera.height}"
        )
    if camera.width < camera.height:
        raise ValueError(
            f"Camera width ({camera.width}) must be at least its height ({camera.height})"
        )

    _camera_width[None] = camera.width
    _camera_height[None] = camera.height
    _fov_adjustment[None] = camera.fov_adjustment
    _aspect_ratio[None] = camera.aspect_ratio
    _camera_initialized[None] = 1


def get_camera_resolution() -> tuple[int, int]:
    """Get the configured (width, height).

    Raises:
        RuntimeError: If setup_camera() has not been called.
    """
    if _camera_initialized[None] == 0:
        raise RuntimeError("Camera not set up. Call setup_camera() first.")
    return int(_camera_width[None]), int(_camera_height[None])


# =============================================================================
# Ray Generation
# =============================================================================


@ti.func
def compute_prime_ray(pixel_x: ti.i32, pixel_y: ti.i32) -> Ray:
    """Generate the primary ray through the center of a pixel.

    Args:
        pixel_x: Pixel column (0 = left).
        pixel_y: Pixel row (0 = top).

    Returns:
        A ray from the origin with unit direction pointing into the scene.
    """
    width = ti.cast(_camera_width[None], ti.f64)
    height = ti.cast(_camera_height[None], ti.f64)
    fov_adjustment = _fov_adjustment[None]

    dir_x = (((ti.cast(pixel_x, ti.f64) + 0.5) / width) * 2.0 - 1.0) * _aspect_ratio[None] * fov_adjustment
    dir_y = (1.0 - ((ti.cast(pixel_y, ti.f64) + 0.5) / height) * 2.0) * fov_adjustment

    return make_ray(vec3(0.0, 0.0, 0.0), normalize(vec3(dir_x, dir_y, -1.0)))


@ti.kernel
def _prime_ray_kernel(pixel_x: ti.i32, pixel_y: ti.i32) -> vec3:
    ray = compute_prime_ray(pixel_x, pixel_y)
    return ray.direction


def get_prime_ray(
    pixel_x: int, pixel_y: int
) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
    """Generate a primary ray from Python.

    Args:
        pixel_x: Pixel column, 0 <= pixel_x <= width.
        pixel_y: Pixel row, 0 <= pixel_y <= height.

    Returns:
        Tuple of (origin, direction).

    Raises:
        RuntimeError: If setup_camera() has not been called.
        ValueError: If the pixel lies outside the image.
    """
    width, height = get_camera_resolution()
    if not (0 <= pixel_x <= width and 0 <= pixel_y <= height):
        raise ValueError(
            f"Pixel ({pixel_x}, {pixel_y}) is outside the {width}x{height} image"
        )
    direction = _prime_ray_kernel(pixel_x, pixel_y)
    return (0.0, 0.0, 0.0), (float(direction[0]), float(direction[1]), float(direction[2]))
