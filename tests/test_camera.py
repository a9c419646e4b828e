"""Unit tests for the perspective camera.

Tests cover:
- Working data lifecycle (init required, setters invalidate)
- Primary ray directions through the image plane
- Camera rotation and animation
"""

import math

import numpy as np
import pytest


@pytest.fixture
def output():
    from glint.scene.params import OutputParams

    return OutputParams(width=4, height=2)


class TestCameraLifecycle:
    """Tests for init and invalidation."""

    def test_make_ray_requires_init(self, output):
        """Test rays cannot be generated before init."""
        from glint.camera.perspective import PerspectiveCamera
        from glint.core.errors import NotInitializedError

        camera = PerspectiveCamera(output)
        with pytest.raises(NotInitializedError):
            camera.make_ray(0.0, 0.0)

    def test_get_direction_requires_init(self, output):
        """Test the view direction is unavailable before init."""
        from glint.camera.perspective import PerspectiveCamera
        from glint.core.errors import NotInitializedError

        camera = PerspectiveCamera(output)
        with pytest.raises(NotInitializedError):
            camera.get_direction()

    def test_setters_invalidate(self, output):
        """Test changing the position requires a new init."""
        from glint.camera.perspective import PerspectiveCamera
        from glint.core.errors import NotInitializedError

        camera = PerspectiveCamera(output)
        camera.init(0)
        camera.set_position((1.0, 0.0, 0.0))
        with pytest.raises(NotInitializedError):
            camera.make_ray(0.0, 0.0)

    def test_distance_must_be_positive(self, output):
        """Test a non-positive plane distance is rejected."""
        from glint.camera.perspective import PerspectiveCamera

        with pytest.raises(ValueError):
            PerspectiveCamera(output, distance=0.0)


class TestCameraRays:
    """Tests for primary ray generation."""

    def test_default_direction(self, output):
        """Test an unrotated camera looks down -z."""
        from glint.camera.perspective import PerspectiveCamera

        camera = PerspectiveCamera(output)
        camera.init(0)
        assert np.allclose(camera.get_direction(), [0.0, 0.0, -1.0])

    def test_center_ray(self, output):
        """Test the ray through the image center points straight ahead."""
        from glint.camera.perspective import PerspectiveCamera

        camera = PerspectiveCamera(output)
        camera.set_position((1.0, 2.0, 3.0))
        camera.init(0)
        ray = camera.make_ray(2.0, 1.0)

        assert np.allclose(ray.origin, [1.0, 2.0, 3.0])
        assert np.allclose(ray.direction, [0.0, 0.0, -1.0])

    def test_corner_ray(self, output):
        """Test pixel (0, 0) is the top-left corner of the image plane."""
        from glint.camera.perspective import PerspectiveCamera

        # Aspect 4:2 with scale 1 gives a 2 x 1 image plane at distance 1
        camera = PerspectiveCamera(output, scale=1.0, distance=1.0)
        camera.init(0)
        ray = camera.make_ray(0.0, 0.0)

        expected = np.array([-1.0, 0.5, -1.0])
        assert np.allclose(ray.direction, expected / np.linalg.norm(expected))

    def test_directions_are_unit_length(self, output):
        """Test every primary ray has a unit direction."""
        from glint.camera.perspective import PerspectiveCamera

        camera = PerspectiveCamera(output, scale=2.0, distance=0.5)
        camera.init(0)
        for x in range(output.width):
            for y in range(output.height):
                ray = camera.make_ray(x + 0.5, y + 0.5)
                assert np.linalg.norm(ray.direction) == pytest.approx(1.0)

    def test_rows_grow_downwards(self, output):
        """Test larger y values produce rays pointing further down."""
        from glint.camera.perspective import PerspectiveCamera

        camera = PerspectiveCamera(output)
        camera.init(0)
        assert camera.make_ray(2.0, 0.5).direction[1] > camera.make_ray(2.0, 1.5).direction[1]

    def test_with_plane(self, output):
        """Test an explicit image plane size."""
        from glint.camera.perspective import PerspectiveCamera

        camera = PerspectiveCamera.with_plane(output, width=8.0, height=2.0, distance=2.0)
        camera.init(0)
        center = camera.make_ray(2.0, 1.0)
        left = camera.make_ray(0.0, 1.0)
        right = camera.make_ray(4.0, 1.0)

        assert np.allclose(center.direction, [0.0, 0.0, -1.0])
        assert np.allclose(left.direction, np.array([-4.0, 0.0, -2.0]) / math.sqrt(20.0))
        assert np.allclose(right.direction, np.array([4.0, 0.0, -2.0]) / math.sqrt(20.0))

    def test_rotation(self, output):
        """Test a quarter turn about y makes the camera look down +x."""
        from glint.camera.perspective import PerspectiveCamera

        camera = PerspectiveCamera(output)
        camera.set_rotation((0.0, math.pi / 2, 0.0))
        camera.init(0)

        assert np.allclose(camera.get_direction(), [1.0, 0.0, 0.0])
        assert np.allclose(camera.make_ray(2.0, 1.0).direction, [1.0, 0.0, 0.0])

    def test_animation(self, output):
        """Test position and rotation animations are evaluated in init."""
        from glint.anim.animation import FuncAnimation, LinearAnimation
        from glint.camera.perspective import PerspectiveCamera

        camera = PerspectiveCamera(output)
        camera.set_anim_pos(LinearAnimation((0.0, 0.0, 10.0), (0.0, 0.0, -1.0)))
        camera.set_anim_rot(FuncAnimation(lambda frame: (0.0, math.pi / 2 if frame else 0.0, 0.0)))

        camera.init(0)
        assert np.allclose(camera.make_ray(2.0, 1.0).origin, [0.0, 0.0, 10.0])
        assert np.allclose(camera.get_direction(), [0.0, 0.0, -1.0])

        camera.init(4)
        assert np.allclose(camera.make_ray(2.0, 1.0).origin, [0.0, 0.0, 6.0])
        assert np.allclose(camera.get_direction(), [1.0, 0.0, 0.0])
