"""Unit tests for the Taichi-backed RenderTarget."""

import numpy as np
import pytest


class TestRenderTarget:
    """Tests for frame buffer storage and readback."""

    def test_initial_fill_is_grey(self):
        """Test that a new target is filled with mid grey."""
        from csgtrace.core.render_target import RenderTarget

        image = RenderTarget(4, 3).get_image_numpy()

        assert image.shape == (3, 4, 3)
        assert image.dtype == np.float32
        assert np.allclose(image, 0.5)

    def test_custom_fill(self):
        """Test filling with a chosen colour."""
        from csgtrace.core.colour import Colour
        from csgtrace.core.render_target import RenderTarget

        target = RenderTarget(2, 2, fill=Colour(0.0, 0.25, 1.0))

        assert target.get_pixel(1, 1).as_tuple() == pytest.approx((0.0, 0.25, 1.0))

    def test_store_row_orientation(self):
        """Test that row y of the buffer is row y of the image."""
        from csgtrace.core.render_target import RenderTarget

        target = RenderTarget(3, 2)
        row = np.array([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]])
        target.store_row(0, row)
        image = target.get_image_numpy()

        assert np.allclose(image[0], row)
        assert np.allclose(image[1], 0.5)
        assert target.get_pixel(2, 0).as_tuple() == pytest.approx((0.0, 0.0, 1.0))

    def test_store_row_clips(self):
        """Test that stored values are clipped into [0, 1]."""
        from csgtrace.core.render_target import RenderTarget

        target = RenderTarget(2, 1)
        target.store_row(0, [[2.0, -1.0, 0.5], [0.0, 3.0, -0.2]])
        image = target.get_image_numpy()

        assert np.allclose(image[0], [[1.0, 0.0, 0.5], [0.0, 1.0, 0.0]])

    def test_store_row_bad_index(self):
        """Test that an out-of-range row raises IndexError."""
        from csgtrace.core.render_target import RenderTarget

        target = RenderTarget(2, 2)

        with pytest.raises(IndexError):
            target.store_row(2, np.zeros((2, 3)))

    def test_store_row_bad_shape(self):
        """Test that a row of the wrong width raises ValueError."""
        from csgtrace.core.render_target import RenderTarget

        target = RenderTarget(2, 2)

        with pytest.raises(ValueError):
            target.store_row(0, np.zeros((3, 3)))

    def test_get_pixel_out_of_range(self):
        """Test reading a pixel outside the image."""
        from csgtrace.core.render_target import RenderTarget

        with pytest.raises(IndexError):
            RenderTarget(2, 2).get_pixel(2, 0)

    def test_uint8_quantisation(self):
        """Test that 8-bit output is int(255 * c)."""
        from csgtrace.core.render_target import RenderTarget

        target = RenderTarget(2, 1)
        target.store_row(0, [[1.0, 0.5, 0.0], [0.2, 0.0, 1.0]])
        image = target.get_image_uint8()

        assert image.dtype == np.uint8
        assert image[0, 0].tolist() == [255, 127, 0]
        assert image[0, 1].tolist() == [51, 0, 255]

    @pytest.mark.parametrize("size", [(0, 10), (10, -1), (5000, 10), (10, 5000)])
    def test_invalid_size(self, size):
        """Test that non-positive or oversized images are rejected."""
        from csgtrace.core.render_target import RenderTarget

        with pytest.raises(ValueError):
            RenderTarget(*size)
