"""Unit tests for the pinhole camera.

Tests cover:
- Ray origin and direction in the camera's own frame
- Focal length validation
- Placing and turning the camera with its transform
"""

import numpy as np
import pytest


class TestPinholeCamera:
    """Tests for primary ray generation."""

    def test_default_camera(self):
        """Test a camera at the origin looking along +z."""
        from csgtrace.camera.pinhole import PinholeCamera

        ray = PinholeCamera().cast_ray(0.0, 0.0)

        assert np.allclose(ray.origin, [0, 0, 0])
        assert np.allclose(ray.direction, [0, 0, 1])

    def test_image_plane_offsets(self):
        """Test that (x, y) offsets the ray through the image plane."""
        from csgtrace.camera.pinhole import PinholeCamera

        ray = PinholeCamera(focal_length=2.0).cast_ray(0.5, -0.25)

        assert np.allclose(ray.direction, [0.5, -0.25, 2.0])

    def test_default_field_of_view(self):
        """Test that the image edge is 45 degrees off axis at focal length 1."""
        from csgtrace.camera.pinhole import PinholeCamera
        from csgtrace.core.ray import dot, normalize

        ray = PinholeCamera().cast_ray(1.0, 0.0)
        angle = np.degrees(np.arccos(dot(normalize(ray.direction), [0.0, 0.0, 1.0])))

        assert angle == pytest.approx(45.0)

    @pytest.mark.parametrize("focal_length", [0.0, -1.0])
    def test_non_positive_focal_length_rejected(self, focal_length):
        """Test that the focal length must be positive."""
        from csgtrace.camera.pinhole import PinholeCamera

        with pytest.raises(ValueError):
            PinholeCamera(focal_length=focal_length)

    def test_translated_camera(self):
        """Test that translation moves the ray origin only."""
        from csgtrace.camera.pinhole import PinholeCamera
        from csgtrace.core.transform import AffineTransform

        camera = PinholeCamera(1.0, AffineTransform().translated(1.0, 2.0, -5.0))
        ray = camera.cast_ray(0.0, 0.0)

        assert np.allclose(ray.origin, [1, 2, -5])
        assert np.allclose(ray.direction, [0, 0, 1])

    def test_rotated_camera(self):
        """Test that rotating the camera turns its view direction."""
        from csgtrace.camera.pinhole import PinholeCamera
        from csgtrace.core.transform import AffineTransform

        camera = PinholeCamera(1.0, AffineTransform().rotated_y(90.0))
        ray = camera.cast_ray(0.0, 0.0)

        assert np.allclose(ray.direction, [1, 0, 0], atol=1e-12)

    def test_transform_can_be_replaced(self):
        """Test assigning a new transform after construction."""
        from csgtrace.camera.pinhole import PinholeCamera

        camera = PinholeCamera()
        camera.transform = camera.transform.translated(0.0, 0.0, -3.0)

        assert np.allclose(camera.cast_ray(0.0, 0.0).origin, [0, 0, -3])
