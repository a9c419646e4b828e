"""Directed spot light.

The light sits at ``position`` and points along the local +x axis rotated by
``rotation`` (radians, ``rotate_xyz``). Its strength is carried in the alpha
channel of its color and falls off with the angle between the light's axis
and the direction towards the lit point:

    strength = a * max(0, cos(clamp(angle - offset, 0, pi)))

where ``offset = (cone - 180) / 2`` degrees. A cone of 180 degrees gives a
plain cosine falloff; wider cones keep full strength over a larger angle.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from glint.anim.animation import Animation
from glint.core.color import Color
from glint.core.errors import NotInitializedError
from glint.core.ray import Ray, Vec3, as_vec3, normalize
from glint.core.transform import DEG_TO_RAD, rotate_xyz, transform


@dataclass(frozen=True)
class _LightData:
    position: Vec3
    direction: Vec3
    offset: float


class DirectedSpotLight:
    """Spot light satisfying the Light contract.

    Attributes:
        position: Light position (overridden per frame by anim_pos).
        color: Light color; alpha is the light strength.
        cone: Cone angle in degrees (overridden per frame by anim_cone).
        rotation: Per-axis rotation in radians (overridden by anim_rot).
    """

    def __init__(self, position: Sequence[float], color: Color, cone: float = 180.0) -> None:
        self.position = as_vec3(position)
        self.color = color
        self.cone = float(cone)
        self.rotation = np.zeros(3, dtype=np.float64)
        self.anim_pos: Animation[Vec3] | None = None
        self.anim_cone: Animation[float] | None = None
        self.anim_rot: Animation[Vec3] | None = None
        self._data: _LightData | None = None

    def set_position(self, position: Sequence[float]) -> None:
        self.position = as_vec3(position)
        self._data = None

    def set_rotation(self, rotation: Sequence[float]) -> None:
        self.rotation = as_vec3(rotation)
        self._data = None

    def set_cone(self, cone: float) -> None:
        self.cone = float(cone)
        self._data = None

    def set_color(self, color: Color) -> None:
        self.color = color

    def init(self, frame: int) -> None:
        if self.anim_pos is not None:
            self.position = as_vec3(self.anim_pos.next_frame(frame))
        if self.anim_cone is not None:
            self.cone = float(self.anim_cone.next_frame(frame))
        if self.anim_rot is not None:
            self.rotation = as_vec3(self.anim_rot.next_frame(frame))

        self._data = _LightData(
            position=np.array(self.position),
            direction=transform(rotate_xyz(self.rotation), (1.0, 0.0, 0.0)),
            offset=(self.cone - 180.0) / 2.0,
        )

    def _require_data(self) -> _LightData:
        if self._data is None:
            raise NotInitializedError("DirectedSpotLight")
        return self._data

    def get_position(self) -> Vec3:
        return np.array(self._require_data().position)

    def get_light(self, ray: Ray) -> Color:
        """Return the light reaching a point, given the ray from that point to the light."""
        data = self._require_data()
        cos_angle = float(np.clip(-np.dot(normalize(ray.direction), data.direction), -1.0, 1.0))
        angle = abs(math.acos(cos_angle)) - data.offset * DEG_TO_RAD
        angle = min(max(angle, 0.0), math.pi)
        return self.color.with_alpha(self.color.a * max(math.cos(angle), 0.0))
