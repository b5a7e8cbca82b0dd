"""Unit tests for AffineTransform.

Tests cover:
- Elementary rotations, scales and translations
- Composition order
- Inverse kept in lock-step with the forward matrix
- Normal mapping with the inverse transpose
- Ray mapping
- Rejection of zero scale factors
"""

import numpy as np
import pytest


def _assert_vec(actual, expected, tol=1e-9):
    assert np.allclose(actual, expected, atol=tol), f"{actual} != {expected}"


class TestElementaryTransforms:
    """Tests for single-step transforms."""

    def test_identity_by_default(self):
        """Test that a new transform is the identity."""
        from csgtrace.core.transform import AffineTransform

        t = AffineTransform()

        assert np.array_equal(t.matrix, np.eye(4))
        assert np.array_equal(t.inverse, np.eye(4))

    def test_translate_point_but_not_direction(self):
        """Test that translation moves points and leaves directions alone."""
        from csgtrace.core.ray import vec3
        from csgtrace.core.transform import AffineTransform

        t = AffineTransform().translated(1.0, 2.0, 3.0)

        _assert_vec(t.apply_point(vec3(0, 0, 0)), [1, 2, 3])
        _assert_vec(t.apply_direction(vec3(0, 0, 1)), [0, 0, 1])

    @pytest.mark.parametrize(
        "axis,vector,expected",
        [
            ("x", (0, 1, 0), (0, 0, 1)),
            ("y", (0, 0, 1), (1, 0, 0)),
            ("z", (1, 0, 0), (0, 1, 0)),
        ],
    )
    def test_rotation_90_degrees(self, axis, vector, expected):
        """Test right-handed 90 degree rotations about each axis."""
        from csgtrace.core.ray import vec3
        from csgtrace.core.transform import AffineTransform

        t = getattr(AffineTransform(), f"rotated_{axis}")(90.0)

        _assert_vec(t.apply_direction(vec3(*vector)), expected)

    def test_uniform_scale(self):
        """Test that a single factor scales all axes."""
        from csgtrace.core.ray import vec3
        from csgtrace.core.transform import AffineTransform

        t = AffineTransform().scaled(2.0)

        _assert_vec(t.apply_point(vec3(1, 2, 3)), [2, 4, 6])

    def test_non_uniform_scale(self):
        """Test per-axis scale factors."""
        from csgtrace.core.ray import vec3
        from csgtrace.core.transform import AffineTransform

        t = AffineTransform().scaled(1.0, 2.0, 3.0)

        _assert_vec(t.apply_point(vec3(1, 1, 1)), [1, 2, 3])

    @pytest.mark.parametrize("factors", [(0.0,), (1.0, 0.0, 1.0), (1.0, 1.0, 0.0)])
    def test_zero_scale_rejected(self, factors):
        """Test that scaling by zero raises ValueError."""
        from csgtrace.core.transform import AffineTransform

        with pytest.raises(ValueError):
            AffineTransform().scaled(*factors)

    def test_two_scale_factors_rejected(self):
        """Test that giving exactly two factors is an error."""
        from csgtrace.core.transform import AffineTransform

        with pytest.raises(ValueError):
            AffineTransform().scaled(1.0, 2.0)

    def test_mismatched_constructor_arguments(self):
        """Test that matrix and inverse must be supplied together."""
        from csgtrace.core.transform import AffineTransform

        with pytest.raises(ValueError):
            AffineTransform(np.eye(4))


class TestComposition:
    """Tests for chaining transforms."""

    def test_composers_return_new_transform(self):
        """Test that composing leaves the original untouched."""
        from csgtrace.core.transform import AffineTransform

        original = AffineTransform()
        moved = original.translated(1.0, 0.0, 0.0)

        assert moved is not original
        assert np.array_equal(original.matrix, np.eye(4))

    def test_matrices_are_read_only(self):
        """Test that the stored matrices cannot be modified in place."""
        from csgtrace.core.transform import AffineTransform

        t = AffineTransform().translated(1.0, 0.0, 0.0)

        with pytest.raises(ValueError):
            t.matrix[0, 0] = 5.0

    def test_order_follows_calls(self):
        """Test that scale-then-translate differs from translate-then-scale."""
        from csgtrace.core.ray import vec3
        from csgtrace.core.transform import AffineTransform

        scale_first = AffineTransform().scaled(2.0).translated(1.0, 0.0, 0.0)
        translate_first = AffineTransform().translated(1.0, 0.0, 0.0).scaled(2.0)

        _assert_vec(scale_first.apply_point(vec3(1, 0, 0)), [3, 0, 0])
        _assert_vec(translate_first.apply_point(vec3(1, 0, 0)), [4, 0, 0])

    def test_rotate_then_translate(self):
        """Test a rotation followed by a translation."""
        from csgtrace.core.ray import vec3
        from csgtrace.core.transform import AffineTransform

        t = AffineTransform().rotated_z(90.0).translated(1.0, 0.0, 0.0)

        _assert_vec(t.apply_point(vec3(1, 0, 0)), [1, 1, 0])

    def test_composed_with_matches_chained_calls(self):
        """Test the generic composer against the named ones."""
        from csgtrace.core.transform import AffineTransform

        chained = AffineTransform().rotated_x(30.0).translated(1.0, 2.0, 3.0)
        generic = AffineTransform().composed_with(
            AffineTransform.rotation_x(30.0)
        ).composed_with(AffineTransform.translation(1.0, 2.0, 3.0))

        assert np.allclose(chained.matrix, generic.matrix)
        assert np.allclose(chained.inverse, generic.inverse)

    def test_inverse_stays_in_lock_step(self):
        """Test that matrix @ inverse is the identity after many steps."""
        from csgtrace.core.transform import AffineTransform

        t = (
            AffineTransform()
            .rotated_x(17.0)
            .scaled(2.0, 0.5, 3.0)
            .translated(-1.0, 4.0, 2.5)
            .rotated_y(-63.0)
            .scaled(0.25)
            .rotated_z(120.0)
            .translated(0.0, 0.0, 10.0)
        )

        assert np.allclose(t.matrix @ t.inverse, np.eye(4), atol=1e-12)
        assert np.allclose(t.inverse @ t.matrix, np.eye(4), atol=1e-12)

    def test_point_round_trip(self):
        """Test apply_inverse_point(apply_point(p)) == p."""
        from csgtrace.core.ray import vec3
        from csgtrace.core.transform import AffineTransform

        t = AffineTransform().scaled(3.0, 1.0, 0.2).rotated_y(45.0).translated(5.0, -2.0, 1.0)
        p = vec3(0.3, -1.7, 2.2)

        _assert_vec(t.apply_inverse_point(t.apply_point(p)), p)
        _assert_vec(t.apply_point(t.apply_inverse_point(p)), p)


class TestNormalsAndRays:
    """Tests for normal and ray mapping."""

    def test_normal_stays_perpendicular_under_non_uniform_scale(self):
        """Test that mapped normals stay perpendicular to mapped tangents."""
        from csgtrace.core.ray import dot, normalize, vec3
        from csgtrace.core.transform import AffineTransform

        t = AffineTransform().scaled(4.0, 1.0, 1.0).rotated_z(30.0)
        # Point on the unit sphere with a tangent direction there
        normal = normalize(vec3(1, 1, 0))
        tangent = vec3(-1, 1, 0)

        mapped_normal = t.apply_normal(normal)
        mapped_tangent = t.apply_direction(tangent)

        assert abs(dot(mapped_normal, mapped_tangent)) < 1e-9

    def test_normal_ignores_translation(self):
        """Test that normals are unaffected by translation."""
        from csgtrace.core.ray import vec3
        from csgtrace.core.transform import AffineTransform

        t = AffineTransform().translated(5.0, 5.0, 5.0)

        _assert_vec(t.apply_normal(vec3(0, 0, 1)), [0, 0, 1])
        _assert_vec(t.apply_inverse_normal(vec3(0, 0, 1)), [0, 0, 1])

    def test_inverse_normal_round_trip(self):
        """Test that the inverse normal mapping undoes the forward one."""
        from csgtrace.core.ray import vec3
        from csgtrace.core.transform import AffineTransform

        t = AffineTransform().scaled(2.0, 3.0, 4.0).rotated_x(33.0)
        n = vec3(0.2, 0.5, -0.8)

        _assert_vec(t.apply_inverse_normal(t.apply_normal(n)), n)

    def test_ray_round_trip(self):
        """Test mapping a ray to local space and back."""
        from csgtrace.core.ray import Ray, vec3
        from csgtrace.core.transform import AffineTransform

        t = AffineTransform().scaled(2.0).rotated_y(10.0).translated(0.0, 1.0, 0.0)
        ray = Ray(vec3(1, 2, 3), vec3(0, 0, 1))

        local = t.apply_inverse_ray(ray)
        back = t.apply_ray(local)

        _assert_vec(back.origin, ray.origin)
        _assert_vec(back.direction, ray.direction)

    def test_inverse_ray_into_scaled_frame(self):
        """Test that a ray into a scaled frame has a shrunken direction."""
        from csgtrace.core.ray import Ray, vec3
        from csgtrace.core.transform import AffineTransform

        t = AffineTransform().scaled(2.0).translated(0.0, 0.0, 10.0)
        local = t.apply_inverse_ray(Ray(vec3(0, 0, 0), vec3(0, 0, 1)))

        _assert_vec(local.origin, [0, 0, -5])
        _assert_vec(local.direction, [0, 0, 0.5])
