"""Pixel loop, render target and the render entry point.

Every pixel of the image is evaluated independently: its primary ray is
traced, shaded with get_color() at depth 0, and the resulting 8-bit RGBA
colour is stored in the raster. Taichi parallelises the pixel loop; the
work done for a single pixel runs in a fixed order, so the output is the
same whatever the thread count.

The raster is a (height, width, 4) uint8 numpy array allocated at the
camera resolution for each Renderer and handed to the kernel as an
ndarray argument. Row 0 is the top of the image, so the array is already
in image layout and needs no transpose or flip.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.tracer.core.renderer import Renderer
    >>> from src.tracer.scene.loader import load_scene
    >>>
    >>> renderer = Renderer(load_scene("scene.json"))
    >>> renderer.render(max_depth=3)
    >>> renderer.save_image("output.png")
"""

import logging
import time
from pathlib import Path

import numpy as np
import numpy.typing as npt
import taichi as ti

from src.tracer.core.integrator import shade_primary
from src.tracer.output.export import save_png_from_array
from src.tracer.scene.description import Scene
from src.tracer.scene.manager import SceneManager

logger = logging.getLogger(__name__)


# =============================================================================
# Render Target (Image Buffer)
# =============================================================================


def create_render_target(width: int, height: int) -> npt.NDArray[np.uint8]:
    """Allocate a cleared (height, width, 4) uint8 raster.

    Raises:
        ValueError: If a dimension is not positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    return np.zeros((height, width, 4), dtype=np.uint8)


@ti.kernel
def _render_kernel(raster: ti.types.ndarray(dtype=ti.u8, ndim=3), max_depth: ti.i32):
    for y, x in ti.ndrange(raster.shape[0], raster.shape[1]):
        color = shade_primary(x, y, max_depth)
        for c in ti.static(range(4)):
            raster[y, x, c] = ti.cast(color[c], ti.u8)


def render_image(raster: npt.NDArray[np.uint8], max_depth: int) -> None:
    """Render every pixel of the current camera into raster.

    Args:
        raster: Target array from create_render_target(), sized to the camera.
        max_depth: Reflection budget.
    """
    _render_kernel(raster, max_depth)


# =============================================================================
# Renderer
# =============================================================================


class Renderer:
    """Renders one scene description.

    Creating a Renderer uploads the scene into the Taichi fields through a
    SceneManager and allocates a raster at the scene camera's resolution.
    Only one scene is resident at a time: a new Renderer replaces the
    previous scene.

    Attributes:
        scene: The scene being rendered.
        manager: The SceneManager holding the uploaded scene.
    """

    def __init__(self, scene: Scene, manager: SceneManager | None = None) -> None:
        """Upload a scene and prepare the render target.

        Args:
            scene: The scene to render.
            manager: Existing SceneManager to load into. A new one is created
                when omitted.

        Raises:
            ValueError: If the camera is invalid.
            RuntimeError: If the scene exceeds a field capacity.
        """
        self.scene = scene
        self.manager = manager if manager is not None else SceneManager()
        self.manager.load(scene)
        self._image = create_render_target(scene.camera.width, scene.camera.height)
        self._max_depth: int | None = None

    @property
    def width(self) -> int:
        return self.scene.camera.width

    @property
    def height(self) -> int:
        return self.scene.camera.height

    def render(self, max_depth: int = 3) -> None:
        """Render the full image.

        Args:
            max_depth: Reflection budget. Hits at this depth shade black.
        """
        if max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {max_depth}")

        logger.info(f"Rendering {self.width}x{self.height} image, max depth {max_depth}")
        start = time.perf_counter()
        render_image(self._image, max_depth)
        ti.sync()
        logger.info(f"Render finished in {time.perf_counter() - start:.3f}s")
        self._max_depth = max_depth

    def get_image_numpy(self) -> npt.NDArray[np.uint8]:
        """Get a copy of the rendered image as a (height, width, 4) uint8 array."""
        return self._image.copy()

    def save_image(self, filepath: str | Path) -> Path:
        """Save the rendered image to a file.

        Raises:
            ImageEncodingError: If the image cannot be encoded or written.
        """
        return save_png_from_array(self._image, filepath)

    def __repr__(self) -> str:
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"elements={len(self.scene.elements)}, lights={len(self.scene.lights)}, "
            f"max_depth={self._max_depth})"
        )


def render(max_depth: int, scene: Scene, output_path: str | Path) -> Path:
    """Render a scene and write the image.

    Args:
        max_depth: Reflection budget.
        scene: The scene to render.
        output_path: Destination file. The extension selects the format.

    Returns:
        The path that was written.

    Raises:
        ImageEncodingError: If the image cannot be encoded or written. This
            happens only after the full raster has been computed.
    """
    renderer = Renderer(scene)
    renderer.render(max_depth)
    return renderer.save_image(output_path)
