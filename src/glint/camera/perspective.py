"""Perspective camera model for primary ray generation.

The camera sits at ``position`` and, before rotation, looks down the -z
axis. The image plane lies ``distance`` units in front of it and spans
``width`` x ``height`` world units; each pixel step moves along the plane by
one of two per-pixel vectors:

- plane_vec1: ``(width / screen_width, 0, 0)`` (rightwards)
- plane_vec2: ``(0, -height / screen_height, 0)`` (downwards, so pixel rows
  grow top to bottom)

``init(frame)`` evaluates the position/rotation animations and rotates the
plane vectors and the view normal with ``rotate_xyz``. The resulting working
data is cleared by every setter, so a camera that was changed must be
re-initialized before it can produce rays again.

Example:
    >>> from glint.camera.perspective import PerspectiveCamera
    >>> from glint.scene.params import OutputParams
    >>> output = OutputParams(width=640, height=480)
    >>> camera = PerspectiveCamera(output, scale=1.0, distance=1.0)
    >>> camera.set_position((0.0, 0.0, 5.0))
    >>> camera.init(0)
    >>> ray = camera.make_ray(320.0, 240.0)  # Ray through image center
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from glint.anim.animation import Animation
from glint.core.errors import NotInitializedError
from glint.core.ray import Ray, Vec3, as_vec3, normalize, vec3
from glint.core.transform import rotate_xyz, transform
from glint.scene.params import OutputParams


@dataclass(frozen=True)
class _CameraData:
    position: Vec3
    plane_vec1: Vec3
    plane_vec2: Vec3
    plane_normal: Vec3
    plane_offset: Vec3


class PerspectiveCamera:
    """Pinhole perspective camera satisfying the Camera contract.

    Attributes:
        position: Camera position in world space.
        rotation: Per-axis rotation in radians.
        width: Image plane width in world units.
        height: Image plane height in world units.
        distance: Distance from the camera to the image plane.
        screen_width: Output width in pixels.
        screen_height: Output height in pixels.
    """

    def __init__(self, output: OutputParams, scale: float = 1.0, distance: float = 1.0) -> None:
        """Create a camera whose image plane matches the output aspect ratio.

        Args:
            output: Output parameters providing the pixel dimensions.
            scale: Image plane height in world units.
            distance: Distance from the camera to the image plane.
        """
        self._setup(output, output.width / output.height * scale, scale, distance)

    @classmethod
    def with_plane(cls, output: OutputParams, width: float, height: float, distance: float) -> PerspectiveCamera:
        """Create a camera with an explicit image plane size."""
        camera = cls.__new__(cls)
        camera._setup(output, width, height, distance)
        return camera

    def _setup(self, output: OutputParams, width: float, height: float, distance: float) -> None:
        if distance <= 0.0:
            raise ValueError(f"Image plane distance must be positive, got {distance}")
        self.position = vec3(0.0, 0.0, 0.0)
        self.rotation = vec3(0.0, 0.0, 0.0)
        self.width = float(width)
        self.height = float(height)
        self.distance = float(distance)
        self.screen_width = float(output.width)
        self.screen_height = float(output.height)
        self.anim_pos: Animation[Vec3] | None = None
        self.anim_rot: Animation[Vec3] | None = None
        self._data: _CameraData | None = None

    def set_position(self, position: Sequence[float]) -> None:
        self.position = as_vec3(position)
        self._data = None

    def set_rotation(self, rotation: Sequence[float]) -> None:
        self.rotation = as_vec3(rotation)
        self._data = None

    def set_anim_pos(self, anim: Animation[Vec3] | None) -> None:
        self.anim_pos = anim
        self._data = None

    def set_anim_rot(self, anim: Animation[Vec3] | None) -> None:
        self.anim_rot = anim
        self._data = None

    def init(self, frame: int) -> None:
        if self.anim_pos is not None:
            self.position = as_vec3(self.anim_pos.next_frame(frame))
        if self.anim_rot is not None:
            self.rotation = as_vec3(self.anim_rot.next_frame(frame))

        rot = rotate_xyz(self.rotation)
        plane_normal = transform(rot, (0.0, 0.0, -1.0))
        self._data = _CameraData(
            position=np.array(self.position),
            plane_vec1=transform(rot, (self.width / self.screen_width, 0.0, 0.0)),
            plane_vec2=transform(rot, (0.0, -self.height / self.screen_height, 0.0)),
            plane_normal=plane_normal,
            plane_offset=plane_normal * self.distance,
        )

    def _require_data(self) -> _CameraData:
        if self._data is None:
            raise NotInitializedError("Camera")
        return self._data

    def make_ray(self, x: float, y: float) -> Ray:
        data = self._require_data()
        offset = (
            data.plane_vec1 * (x - self.screen_width / 2.0)
            + data.plane_vec2 * (y - self.screen_height / 2.0)
        )
        return Ray(origin=data.position, direction=normalize(data.plane_offset + offset))

    def get_direction(self) -> Vec3:
        return np.array(self._require_data().plane_normal)
