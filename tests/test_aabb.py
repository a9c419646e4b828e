"""Unit tests for axis-aligned bounding boxes.

Tests cover:
- Corner normalization and construction from points
- Fast ray rejection (is_hit), including parallel axes and rays pointing away
- First-hit distance from outside and inside the box
"""

import math

import numpy as np
import pytest


@pytest.fixture
def unit_box():
    """The box [-1, 1]^3."""
    from glint.core.aabb import AABB

    return AABB((-1.0, -1.0, -1.0), (1.0, 1.0, 1.0))


class TestAABBConstruction:
    """Tests for building boxes."""

    def test_corners_are_normalized(self):
        """Test corners given in any order produce start <= end."""
        from glint.core.aabb import AABB

        box = AABB((1.0, -2.0, 3.0), (-1.0, 2.0, -3.0))
        assert np.array_equal(box.start, [-1.0, -2.0, -3.0])
        assert np.array_equal(box.end, [1.0, 2.0, 3.0])

    def test_from_points(self):
        """Test the minimal box around a point set."""
        from glint.core.aabb import AABB

        box = AABB.from_points([(0.0, 0.0, 0.0), (2.0, -1.0, 0.5), (-1.0, 3.0, 0.0)])
        assert box == AABB((-1.0, -1.0, 0.0), (2.0, 3.0, 0.5))

    def test_from_points_empty(self):
        """Test an empty point set is rejected."""
        from glint.core.aabb import AABB

        with pytest.raises(ValueError):
            AABB.from_points([])

    def test_expand_and_contains(self, unit_box):
        """Test expanding the box to cover a new point."""
        assert not unit_box.contains((2.0, 0.0, 0.0))
        unit_box.expand((2.0, 0.0, 0.0))
        assert unit_box.contains((2.0, 0.0, 0.0))
        assert unit_box.contains((1.0, 1.0, 1.0))

    def test_repr(self, unit_box):
        """Test the repr lists both corners."""
        assert repr(unit_box) == "AABB(start=[-1.0, -1.0, -1.0], end=[1.0, 1.0, 1.0])"


class TestAABBIsHit:
    """Tests for fast ray rejection."""

    def test_head_on(self, unit_box):
        """Test a ray aimed at the box is accepted."""
        from glint.core.ray import Ray

        assert unit_box.is_hit(Ray((0.0, 0.0, 5.0), (0.0, 0.0, -1.0)))

    def test_pointing_away(self, unit_box):
        """Test a ray pointing away from the box is rejected."""
        from glint.core.ray import Ray

        assert not unit_box.is_hit(Ray((0.0, 0.0, 5.0), (0.0, 0.0, 1.0)))

    def test_parallel_outside_slab(self, unit_box):
        """Test a ray parallel to a slab whose origin lies outside it is rejected."""
        from glint.core.ray import Ray

        assert not unit_box.is_hit(Ray((0.0, 3.0, 5.0), (0.0, 0.0, -1.0)))

    def test_parallel_below_threshold(self, unit_box):
        """Test tiny direction components count as parallel."""
        from glint.core.ray import Ray

        assert not unit_box.is_hit(Ray((0.0, 3.0, 5.0), (0.0, 1e-12, -1.0)))

    def test_non_overlapping_intervals(self, unit_box):
        """Test a diagonal ray passing beside a corner is rejected."""
        from glint.core.ray import Ray

        # x slab is crossed for t in [2, 4], z slab for t in [-1, 1]
        assert not unit_box.is_hit(Ray((3.0, 0.0, 0.0), (-1.0, 0.0, 1.0)))

    def test_diagonal_hit(self, unit_box):
        """Test a diagonal ray through the box is accepted."""
        from glint.core.ray import Ray

        assert unit_box.is_hit(Ray((3.0, 3.0, 3.0), (-1.0, -1.0, -1.0)))

    @pytest.mark.parametrize(
        "origin",
        [
            (0.2, 0.1, 0.0),
            (0.0, 0.0, 0.0),
            (-0.9, 0.95, -0.5),
            (1.0, 0.0, 0.0),
            (-1.0, 1.0, 0.3),
            (1.0, 1.0, 1.0),
        ],
    )
    @pytest.mark.parametrize(
        "direction",
        [
            (0.3, -0.5, 1.0),
            (1.0, 0.0, 0.0),
            (-1.0, 0.0, 0.0),
            (0.0, 1.0, 0.0),
            (0.0, 0.0, -1.0),
            (1.0, 1.0, 0.0),
            (-1.0, -2.0, 3.0),
        ],
    )
    def test_origin_inside(self, unit_box, origin, direction):
        """Test every ray starting inside or on the box is accepted."""
        from glint.core.ray import Ray

        assert unit_box.is_hit(Ray(origin, direction))
        assert unit_box.first_hit(Ray(origin, direction)) is not None

    def test_flat_box(self):
        """Test a box with zero thickness is still hit when crossed."""
        from glint.core.aabb import AABB
        from glint.core.ray import Ray

        flat = AABB((-1.0, -1.0, 0.0), (1.0, 1.0, 0.0))
        assert flat.is_hit(Ray((0.0, 0.0, 2.0), (0.0, 0.0, -1.0)))
        assert not flat.is_hit(Ray((0.0, 0.0, 2.0), (0.0, 0.0, 1.0)))


class TestAABBFirstHit:
    """Tests for the first-hit distance."""

    def test_from_outside(self, unit_box):
        """Test the entry distance of a head-on ray."""
        from glint.core.ray import Ray

        assert unit_box.first_hit(Ray((0.0, 0.0, 5.0), (0.0, 0.0, -1.0))) == pytest.approx(4.0)

    def test_from_inside_uses_exit(self, unit_box):
        """Test a ray starting inside reports the exit distance."""
        from glint.core.ray import Ray

        assert unit_box.first_hit(Ray((0.0, 0.0, 0.0), (1.0, 0.0, 0.0))) == pytest.approx(1.0)

    def test_miss_returns_none(self, unit_box):
        """Test a rejected ray has no first hit."""
        from glint.core.ray import Ray

        assert unit_box.first_hit(Ray((0.0, 0.0, 5.0), (0.0, 0.0, 1.0))) is None

    def test_all_axes_parallel_inside(self, unit_box):
        """Test a zero direction from inside the box reports infinity."""
        from glint.core.ray import Ray

        assert unit_box.first_hit(Ray((0.0, 0.0, 0.0), (0.0, 0.0, 0.0))) == math.inf
