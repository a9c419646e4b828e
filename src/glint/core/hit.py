"""Ray hit records produced by object intersection tests."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from glint.core.ray import Vec3

if TYPE_CHECKING:
    from glint.materials.material import Material


@dataclass(frozen=True)
class RayHit:
    """Record of a ray-surface intersection.

    Hits are created per intersection test and discarded once the pixel they
    contribute to has been shaded.

    Attributes:
        distance: The ray parameter of the hit. Only hits with distance > 0
            are valid.
        position: The 3D point where the ray struck the surface.
        normal: Unit surface normal, outward-facing for the struck face.
        material: The surface material at the hit point.
    """

    distance: float
    position: Vec3
    normal: Vec3
    material: Material

    @property
    def is_valid(self) -> bool:
        """True if the hit lies in front of the ray origin at a finite distance."""
        return math.isfinite(self.distance) and self.distance > 0.0
