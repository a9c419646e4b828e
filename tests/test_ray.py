"""Unit tests for the ray and transform modules.

Tests cover:
- Ray dataclass, ray.at and immutability
- Vector utility functions (dot, cross, length, normalize, reflect)
- Reflected ray construction
- Rotation matrices and their composition order
"""

import math

import numpy as np
import pytest


class TestRayBasics:
    """Tests for the Ray dataclass."""

    def test_ray_at_origin(self):
        """Test ray.at returns the origin when t=0."""
        from glint.core.ray import Ray, vec3

        ray = Ray(origin=vec3(1.0, 2.0, 3.0), direction=vec3(0.0, 0.0, -1.0))
        assert np.allclose(ray.at(0.0), [1.0, 2.0, 3.0])

    def test_ray_at_positive_t(self):
        """Test ray.at computes the point along the ray."""
        from glint.core.ray import Ray, vec3

        ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(1.0, 0.0, 0.0))
        assert np.allclose(ray.at(5.0), [5.0, 0.0, 0.0])

    def test_ray_at_negative_t(self):
        """Test ray.at handles points behind the origin."""
        from glint.core.ray import Ray, vec3

        ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 1.0, 0.0))
        assert np.allclose(ray.at(-3.0), [0.0, -3.0, 0.0])

    def test_ray_accepts_tuples(self):
        """Test Ray converts sequences to float64 vectors."""
        from glint.core.ray import Ray

        ray = Ray(origin=(1, 2, 3), direction=(0, 0, 1))
        assert ray.origin.dtype == np.float64
        assert ray.direction.shape == (3,)

    def test_ray_vectors_are_read_only(self):
        """Test a ray's vectors cannot be modified in place."""
        from glint.core.ray import Ray, vec3

        ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, 1.0))
        with pytest.raises(ValueError):
            ray.origin[0] = 1.0

    def test_ray_does_not_alias_input(self):
        """Test mutating the source array does not change the ray."""
        from glint.core.ray import Ray, vec3

        origin = vec3(1.0, 1.0, 1.0)
        ray = Ray(origin=origin, direction=vec3(0.0, 0.0, 1.0))
        origin[0] = 9.0
        assert ray.origin[0] == 1.0

    def test_ray_is_frozen(self):
        """Test ray fields cannot be reassigned."""
        from dataclasses import FrozenInstanceError

        from glint.core.ray import Ray, vec3

        ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, 1.0))
        with pytest.raises(FrozenInstanceError):
            ray.origin = vec3(1.0, 0.0, 0.0)

    def test_as_vec3_rejects_wrong_size(self):
        """Test as_vec3 raises for vectors that are not 3D."""
        from glint.core.ray import as_vec3

        with pytest.raises(ValueError):
            as_vec3((1.0, 2.0))


class TestVectorUtilities:
    """Tests for vector utility functions."""

    def test_length(self):
        """Test vector length computation."""
        from glint.core.ray import length, vec3

        assert length(vec3(3.0, 4.0, 0.0)) == pytest.approx(5.0)

    def test_dot(self):
        """Test dot product."""
        from glint.core.ray import dot, vec3

        assert dot(vec3(1.0, 2.0, 3.0), vec3(4.0, -5.0, 6.0)) == pytest.approx(12.0)

    def test_cross(self):
        """Test cross product of the x and y axes is z."""
        from glint.core.ray import cross, vec3

        assert np.allclose(cross(vec3(1.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0)), [0.0, 0.0, 1.0])

    def test_normalize(self):
        """Test normalize returns a unit vector."""
        from glint.core.ray import normalize, vec3

        n = normalize(vec3(3.0, 0.0, 4.0))
        assert np.allclose(n, [0.6, 0.0, 0.8])

    def test_normalize_zero_vector(self):
        """Test normalize maps the zero vector to zero instead of NaN."""
        from glint.core.ray import normalize, vec3

        assert np.array_equal(normalize(vec3(0.0, 0.0, 0.0)), [0.0, 0.0, 0.0])

    def test_reflect(self):
        """Test reflection about a horizontal surface flips the y component."""
        from glint.core.ray import reflect, vec3

        r = reflect(vec3(1.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0))
        assert np.allclose(r, [1.0, 1.0, 0.0])

    def test_reflect_ray(self):
        """Test reflected ray starts just short of the hit and mirrors the direction."""
        from glint.core.ray import REFLECTION_EPSILON, Ray, reflect_ray, vec3

        ray = Ray(origin=vec3(0.0, 0.0, 5.0), direction=vec3(0.0, 0.0, -1.0))
        reflected = reflect_ray(ray, vec3(0.0, 0.0, 1.0), 5.0)

        assert reflected.origin[2] == pytest.approx(REFLECTION_EPSILON, abs=1e-12)
        assert reflected.origin[2] > 0.0
        assert np.allclose(reflected.direction, [0.0, 0.0, 1.0])
        # The incoming ray is left untouched
        assert np.array_equal(ray.direction, [0.0, 0.0, -1.0])


class TestRotation:
    """Tests for rotation matrices."""

    def test_zero_rotation_is_identity(self):
        """Test rotate_xyz of zero angles is exactly the identity."""
        from glint.core.transform import rotate_xyz

        assert np.array_equal(rotate_xyz((0.0, 0.0, 0.0)), np.identity(3))

    def test_rotate_z_quarter_turn(self):
        """Test a quarter turn around z maps +x to -y."""
        from glint.core.transform import rotate_z, transform

        assert np.allclose(transform(rotate_z(math.pi / 2), (1.0, 0.0, 0.0)), [0.0, -1.0, 0.0])

    def test_rotate_y_quarter_turn(self):
        """Test a quarter turn around y maps -z to +x."""
        from glint.core.transform import rotate_y, transform

        assert np.allclose(transform(rotate_y(math.pi / 2), (0.0, 0.0, -1.0)), [1.0, 0.0, 0.0])

    def test_rotations_are_orthonormal(self):
        """Test combined rotations preserve lengths."""
        from glint.core.transform import rotate_xyz

        rot = rotate_xyz((0.3, -1.1, 2.0))
        assert np.allclose(rot @ rot.T, np.identity(3))

    def test_rotate_xyz_applies_z_then_x_then_y(self):
        """Test the composition order of rotate_xyz."""
        from glint.core.transform import rotate_x, rotate_xyz, rotate_y, rotate_z

        angles = (0.4, 0.7, -0.2)
        expected = rotate_y(0.7) @ rotate_x(0.4) @ rotate_z(-0.2)
        assert np.allclose(rotate_xyz(angles), expected)

    def test_rot_deg(self):
        """Test degree conversion."""
        from glint.core.transform import rot_deg

        assert np.allclose(rot_deg((180.0, 90.0, 0.0)), [math.pi, math.pi / 2, 0.0])
