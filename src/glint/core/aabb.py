"""Axis-aligned bounding boxes for cheap ray rejection.

Objects expose an AABB so the shading pipeline can skip their exact (and more
expensive) intersection routine for rays that cannot reach them.

The ray test projects the box onto the ray's parameter line one axis at a
time. For each axis the two slab planes are crossed at parameters

    t0 = (start[i] - origin[i]) / direction[i]
    t1 = (end[i] - origin[i]) / direction[i]

ordered so that t0 <= t1. An axis whose direction component is within
PARALLEL_THRESHOLD of zero is "parallel": it contributes no interval and only
requires the origin to lie inside the slab. The box is missed if any slab
lies entirely behind the ray, or if the intervals of two active axes do not
overlap.

Example:
    >>> from glint.core.aabb import AABB
    >>> from glint.core.ray import Ray, vec3
    >>> box = AABB(vec3(-1, -1, -1), vec3(1, 1, 1))
    >>> box.is_hit(Ray(vec3(0, 0, 5), vec3(0, 0, -1)))
    True
    >>> box.first_hit(Ray(vec3(0, 0, 5), vec3(0, 0, -1)))
    4.0
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from itertools import combinations

import numpy as np

from glint.core.ray import Ray, Vec3, as_vec3

# Direction components below this magnitude are treated as parallel to a slab
PARALLEL_THRESHOLD = 1e-10

# (t_start, t_end) per axis, or None for an axis the ray runs parallel to
_Interval = tuple[float, float] | None


class AABB:
    """An axis-aligned box with corners ``start <= end`` on every axis.

    Attributes:
        start: The minimum corner.
        end: The maximum corner.
    """

    __slots__ = ("start", "end")

    def __init__(self, p1: Sequence[float] | Vec3, p2: Sequence[float] | Vec3) -> None:
        """Build the minimal box containing both corners.

        The corners may be given in any order; the box is normalized by a
        componentwise min/max rather than by rejecting the input.
        """
        a = as_vec3(p1)
        b = as_vec3(p2)
        self.start: Vec3 = np.minimum(a, b)
        self.end: Vec3 = np.maximum(a, b)

    @classmethod
    def from_points(cls, points: Iterable[Sequence[float] | Vec3]) -> AABB:
        """Build the minimal box containing every point of a non-empty set.

        Raises:
            ValueError: If no points are given.
        """
        it = iter(points)
        try:
            first = next(it)
        except StopIteration:
            raise ValueError("Cannot build a bounding box from an empty point set") from None
        box = cls(first, first)
        for p in it:
            box.expand(p)
        return box

    def expand(self, p: Sequence[float] | Vec3) -> None:
        """Grow the box to also contain point p."""
        v = as_vec3(p)
        self.start = np.minimum(self.start, v)
        self.end = np.maximum(self.end, v)

    def contains(self, p: Sequence[float] | Vec3) -> bool:
        """Check whether point p lies inside or on the box."""
        v = as_vec3(p)
        return bool(np.all(v >= self.start) and np.all(v <= self.end))

    def _project(self, ray: Ray) -> list[_Interval] | None:
        """Project the box onto the ray's parameter line.

        Returns:
            The per-axis intervals, or None if a parallel axis puts the origin
            outside the slab or a slab lies entirely behind the ray.
        """
        origin = ray.origin
        direction = ray.direction
        intervals: list[_Interval] = []

        for axis in range(3):
            d = direction[axis]
            o = origin[axis]
            if abs(d) < PARALLEL_THRESHOLD:
                if o < self.start[axis] or o > self.end[axis]:
                    return None
                intervals.append(None)
                continue

            t0 = (self.start[axis] - o) / d
            t1 = (self.end[axis] - o) / d
            if t1 < t0:
                t0, t1 = t1, t0
            if t0 < 0.0 and t1 < 0.0:
                return None
            intervals.append((float(t0), float(t1)))

        for a, b in combinations(intervals, 2):
            if a is None or b is None:
                continue
            # b entirely before or entirely after a
            if (b[0] < a[0] and b[1] < a[0]) or (b[0] > a[1] and b[1] > a[1]):
                return None

        return intervals

    def is_hit(self, ray: Ray) -> bool:
        """Fast test whether the ray can hit the box.

        Args:
            ray: The ray to test.

        Returns:
            False if the ray certainly misses the box, True otherwise.
        """
        return self._project(ray) is not None

    def first_hit(self, ray: Ray) -> float | None:
        """Compute the parametric distance of the first box hit.

        For each active axis the entry distance is used if it is non-negative,
        otherwise the exit distance (the origin lies inside that slab). The
        minimum over the active axes is returned.

        Args:
            ray: The ray to test.

        Returns:
            The first-hit distance, ``math.inf`` if the ray is parallel to
            every axis and starts inside the box, or None on a miss.
        """
        intervals = self._project(ray)
        if intervals is None:
            return None

        ray_min = math.inf
        for interval in intervals:
            if interval is None:
                continue
            t0, t1 = interval
            ray_min = min(ray_min, t0 if t0 >= 0.0 else t1)
        return ray_min

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AABB):
            return NotImplemented
        return bool(np.array_equal(self.start, other.start) and np.array_equal(self.end, other.end))

    def __repr__(self) -> str:
        return f"AABB(start={self.start.tolist()}, end={self.end.tolist()})"
