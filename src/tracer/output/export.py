"""Image export for rendered RGBA rasters.

The renderer produces an 8-bit RGBA raster of shape (height, width, 4) with
row 0 at the top. This module hands it to Pillow, which chooses the encoder
from the file extension (PNG by default).

Every encoding or I/O failure is reported as ImageEncodingError, the only
error the render entry point lets escape.

Example:
    >>> from src.tracer.output.export import save_png_from_array
    >>> save_png_from_array(raster, "output.png")
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

logger = logging.getLogger(__name__)


class ImageEncodingError(OSError):
    """Raised when a rendered image cannot be encoded or written."""


def raster_to_image(raster: npt.NDArray[np.uint8]) -> PILImage.Image:
    """Wrap an RGBA raster in a Pillow image.

    Args:
        raster: Array of shape (height, width, 4) with dtype uint8.

    Returns:
        An RGBA Pillow image.

    Raises:
        ValueError: If the array does not have the expected shape or dtype.
    """
    if raster.ndim != 3 or raster.shape[2] != 4:
        raise ValueError(f"Expected a (height, width, 4) raster, got shape {raster.shape}")
    if raster.dtype != np.uint8:
        raise ValueError(f"Expected a uint8 raster, got dtype {raster.dtype}")
    # (H, W, 4) uint8 is inferred as RGBA
    return PILImage.fromarray(np.ascontiguousarray(raster))


def save_png_from_array(raster: npt.NDArray[np.uint8], filepath: str | Path) -> Path:
    """Save an RGBA raster to an image file.

    Args:
        raster: Array of shape (height, width, 4) with dtype uint8.
        filepath: Output file path. The extension selects the format.

    Returns:
        The path that was written.

    Raises:
        ImageEncodingError: If the raster cannot be encoded in the requested
            format or the file cannot be written.
    """
    path = Path(filepath)
    image = raster_to_image(raster)
    try:
        image.save(path)
    except (OSError, ValueError, KeyError) as e:
        # Pillow raises ValueError/KeyError for unknown extensions and
        # OSError for write failures and unsupported modes
        raise ImageEncodingError(f"Could not write image to {path}: {e}") from e

    logger.info(f"Saved {image.width}x{image.height} image: {path}")
    return path
