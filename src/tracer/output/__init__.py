"""Output module for encoding rendered rasters.

Components:
    export: Pillow-based image writer for 8-bit RGBA rasters
"""

from .export import ImageEncodingError, raster_to_image, save_png_from_array

__all__ = [
    "ImageEncodingError",
    "raster_to_image",
    "save_png_from_array",
]
