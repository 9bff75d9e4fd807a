"""Tests for image export.

Tests cover:
- Raster validation
- PNG output readable by Pillow with the same pixels
- Encoding and I/O failures reported as ImageEncodingError
"""

import numpy as np
import pytest
from PIL import Image


def _raster(height=4, width=6):
    raster = np.zeros((height, width, 4), dtype=np.uint8)
    raster[..., 3] = 255
    raster[0, 0] = (255, 0, 0, 255)
    raster[-1, -1] = (0, 0, 255, 128)
    return raster


class TestRasterToImage:
    """Tests for raster_to_image."""

    def test_rgba_image(self):
        from src.tracer.output.export import raster_to_image

        image = raster_to_image(_raster())
        assert image.mode == "RGBA"
        assert image.size == (6, 4)

    def test_wrong_shape_rejected(self):
        from src.tracer.output.export import raster_to_image

        with pytest.raises(ValueError, match="shape"):
            raster_to_image(np.zeros((4, 6, 3), dtype=np.uint8))

    def test_wrong_dtype_rejected(self):
        from src.tracer.output.export import raster_to_image

        with pytest.raises(ValueError, match="uint8"):
            raster_to_image(np.zeros((4, 6, 4), dtype=np.float32))


class TestSavePng:
    """Tests for save_png_from_array."""

    def test_png_round_trip(self, tmp_path):
        from src.tracer.output.export import save_png_from_array

        raster = _raster()
        path = save_png_from_array(raster, tmp_path / "out.png")

        with Image.open(path) as image:
            assert image.mode == "RGBA"
            np.testing.assert_array_equal(np.asarray(image), raster)

    def test_unknown_extension(self, tmp_path):
        from src.tracer.output.export import ImageEncodingError, save_png_from_array

        with pytest.raises(ImageEncodingError):
            save_png_from_array(_raster(), tmp_path / "out.unknownformat")

    def test_unwritable_path(self, tmp_path):
        from src.tracer.output.export import ImageEncodingError, save_png_from_array

        with pytest.raises(ImageEncodingError, match="Could not write"):
            save_png_from_array(_raster(), tmp_path / "missing_dir" / "out.png")

    def test_image_encoding_error_is_os_error(self):
        from src.tracer.output.export import ImageEncodingError

        assert issubclass(ImageEncodingError, OSError)
