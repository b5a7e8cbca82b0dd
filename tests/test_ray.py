"""Unit tests for the Ray dataclass and vector helpers.

Tests cover:
- Ray construction and validation
- ray_at evaluation
- Vector utilities (dot, cross, length, normalize, reflect)
- Epsilon-aware sign
"""

import math

import numpy as np
import pytest


class TestRay:
    """Tests for Ray construction."""

    def test_ray_stores_origin_and_direction(self):
        """Test that origin and direction are kept as float vectors."""
        from csgtrace.core.ray import Ray

        ray = Ray(origin=(1, 2, 3), direction=(0, 0, 2))

        assert ray.origin.dtype == np.float64
        assert np.allclose(ray.origin, [1.0, 2.0, 3.0])
        assert np.allclose(ray.direction, [0.0, 0.0, 2.0])

    def test_ray_direction_not_normalized(self):
        """Test that the direction length is preserved."""
        from csgtrace.core.ray import Ray, length, vec3

        ray = Ray(vec3(0, 0, 0), vec3(3, 4, 0))

        assert abs(length(ray.direction) - 5.0) < 1e-12

    def test_zero_direction_rejected(self):
        """Test that a zero-length direction raises ValueError."""
        from csgtrace.core.ray import Ray, vec3

        with pytest.raises(ValueError, match="non-zero"):
            Ray(vec3(0, 0, 0), vec3(0, 0, 0))

    def test_short_direction_accepted(self):
        """Test that a tiny but non-zero direction is a valid ray."""
        from csgtrace.core.ray import Ray, vec3

        ray = Ray(vec3(0, 0, 0), vec3(0, 0, 1e-9))

        assert ray.direction[2] == 1e-9

    def test_non_finite_direction_rejected(self):
        """Test that infinite or NaN directions raise ValueError."""
        from csgtrace.core.ray import Ray, vec3

        with pytest.raises(ValueError):
            Ray(vec3(0, 0, 0), vec3(0, 0, math.inf))
        with pytest.raises(ValueError):
            Ray(vec3(0, 0, 0), vec3(math.nan, 0, 1))

    def test_wrong_component_count_rejected(self):
        """Test that vectors must have three components."""
        from csgtrace.core.ray import Ray

        with pytest.raises(ValueError):
            Ray((0, 0), (0, 0, 1))

    def test_ray_is_immutable(self):
        """Test that fields cannot be reassigned."""
        import dataclasses

        from csgtrace.core.ray import Ray, vec3

        ray = Ray(vec3(0, 0, 0), vec3(1, 0, 0))
        with pytest.raises(dataclasses.FrozenInstanceError):
            ray.origin = vec3(1, 1, 1)

    def test_ray_at(self):
        """Test evaluating points along a ray."""
        from csgtrace.core.ray import Ray, ray_at, vec3

        ray = Ray(vec3(1, 0, 0), vec3(0, 2, 0))

        assert np.allclose(ray_at(ray, 0.0), [1, 0, 0])
        assert np.allclose(ray_at(ray, 1.5), [1, 3, 0])
        assert np.allclose(ray_at(ray, -1.0), [1, -2, 0])


class TestVectorHelpers:
    """Tests for vector utility functions."""

    def test_dot_and_cross(self):
        """Test dot and cross products of axis vectors."""
        from csgtrace.core.ray import cross, dot, vec3

        x, y = vec3(1, 0, 0), vec3(0, 1, 0)

        assert dot(x, y) == 0.0
        assert dot(x, x) == 1.0
        assert np.allclose(cross(x, y), [0, 0, 1])

    def test_length(self):
        """Test vector length and squared length."""
        from csgtrace.core.ray import length, length_squared, vec3

        v = vec3(1, 2, 2)

        assert length_squared(v) == 9.0
        assert length(v) == 3.0

    def test_normalize(self):
        """Test that normalize returns a unit vector."""
        from csgtrace.core.ray import length, normalize, vec3

        n = normalize(vec3(0, 3, 4))

        assert abs(length(n) - 1.0) < 1e-12
        assert np.allclose(n, [0, 0.6, 0.8])

    def test_normalize_zero_vector_unchanged(self):
        """Test that a zero vector is returned as-is."""
        from csgtrace.core.ray import normalize, vec3

        assert np.allclose(normalize(vec3(0, 0, 0)), [0, 0, 0])

    def test_reflect(self):
        """Test reflection about a normal."""
        from csgtrace.core.ray import reflect, vec3

        incident = vec3(1, -1, 0)
        normal = vec3(0, 1, 0)

        assert np.allclose(reflect(incident, normal), [1, 1, 0])

    def test_reflect_head_on(self):
        """Test that a head-on ray bounces straight back."""
        from csgtrace.core.ray import reflect, vec3

        assert np.allclose(reflect(vec3(0, 0, 1), vec3(0, 0, -1)), [0, 0, -1])


class TestSign:
    """Tests for the epsilon-aware sign function."""

    @pytest.mark.parametrize(
        "value,expected",
        [(2.0, 1), (-0.5, -1), (0.0, 0), (1e-9, 0), (-1e-9, 0), (1e-3, 1)],
    )
    def test_sign(self, value, expected):
        """Test that values within EPSILON of zero have sign 0."""
        from csgtrace.core.ray import sign

        assert sign(value) == expected

    def test_constants(self):
        """Test the numeric tolerance constants."""
        from csgtrace.core.ray import EPSILON, INFINITY

        assert EPSILON == 1e-6
        assert math.isinf(INFINITY)
