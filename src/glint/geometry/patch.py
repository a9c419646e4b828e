"""Planar patch primitive: a rectangle, or an unbounded plane.

A patch is defined by:
- center: The center point of the patch
- basis1, basis2: In-plane basis vectors
- half_extents: Limits (h1, h2) on the basis coefficients, or None for an
  infinite plane

The patch covers ``center + u*basis1 + v*basis2`` for ``|u| <= h1`` and
``|v| <= h2``. Its normal is ``normalize(cross(basis1, basis2))`` unless one
is given explicitly.

Example:
    >>> from glint.core.color import Color
    >>> from glint.geometry.patch import Patch
    >>> from glint.materials.material import Material
    >>> # Floor at y=0 spanning x=[-1,1] and z=[-1,1], facing up
    >>> floor = Patch(
    ...     center=(0, 0, 0),
    ...     basis1=(0, 0, 1),
    ...     basis2=(1, 0, 0),
    ...     half_extents=(1.0, 1.0),
    ...     material=Material(Color(0.8, 0.8, 0.8)),
    ... )
    >>> floor.init(0)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from glint.anim.animation import Animation
from glint.core.aabb import AABB
from glint.core.errors import NotInitializedError
from glint.core.hit import RayHit
from glint.core.ray import Ray, Vec3, as_vec3, cross, normalize
from glint.core.solver import hit_patch
from glint.materials.material import Material


@dataclass(frozen=True)
class _PatchData:
    center: Vec3
    aabb: AABB | None


class Patch:
    """A rectangle or infinite plane satisfying the SceneObject contract.

    Attributes:
        center: The patch center (overridden per frame by anim_pos).
        basis1: First in-plane basis vector.
        basis2: Second in-plane basis vector.
        half_extents: (h1, h2), or None for an unbounded plane.
        normal: Unit outward normal reported for hits.
        material: The surface material.
    """

    def __init__(
        self,
        center: Sequence[float],
        basis1: Sequence[float],
        basis2: Sequence[float],
        half_extents: tuple[float, float] | None,
        material: Material,
        normal: Sequence[float] | None = None,
    ) -> None:
        self.center = as_vec3(center)
        self.basis1 = as_vec3(basis1)
        self.basis2 = as_vec3(basis2)
        if half_extents is not None and (half_extents[0] < 0.0 or half_extents[1] < 0.0):
            raise ValueError(f"Half extents must be non-negative, got {half_extents}")
        self.half_extents = half_extents
        self.normal = normalize(as_vec3(normal) if normal is not None else cross(self.basis1, self.basis2))
        self.material = material
        self.anim_pos: Animation[Vec3] | None = None
        self._data: _PatchData | None = None

    def set_position(self, center: Sequence[float]) -> None:
        self.center = as_vec3(center)
        self._data = None

    def set_anim_pos(self, anim: Animation[Vec3] | None) -> None:
        self.anim_pos = anim
        self._data = None

    def corners(self, center: Vec3 | None = None) -> list[Vec3]:
        """Return the four corners of a bounded patch.

        Raises:
            ValueError: If the patch is unbounded.
        """
        if self.half_extents is None:
            raise ValueError("An unbounded plane has no corners")
        c = self.center if center is None else center
        e1 = self.basis1 * self.half_extents[0]
        e2 = self.basis2 * self.half_extents[1]
        return [c + e1 + e2, c + e1 - e2, c - e1 + e2, c - e1 - e2]

    def init(self, frame: int) -> None:
        if self.anim_pos is not None:
            self.center = as_vec3(self.anim_pos.next_frame(frame))

        aabb = None
        if self.half_extents is not None:
            aabb = AABB.from_points(self.corners(self.center))
        self._data = _PatchData(center=np.array(self.center), aabb=aabb)

    def _require_data(self) -> _PatchData:
        if self._data is None:
            raise NotInitializedError("Patch")
        return self._data

    def get_aabb(self) -> AABB | None:
        return self._require_data().aabb

    def next_hit(self, ray: Ray) -> RayHit | None:
        data = self._require_data()
        return hit_patch(
            ray,
            data.center,
            self.basis1,
            self.basis2,
            self.half_extents,
            self.normal,
            self.material,
        )
