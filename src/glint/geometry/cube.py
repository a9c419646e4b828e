"""Rotatable box primitive built from six planar faces.

The box is described by its center, its edge lengths along the local x, y
and z axes, and a rotation (radians, applied by ``rotate_xyz``). ``init``
rotates the local axes, places the six face centers at
``center +/- axis * size/2`` and bounds the eight rotated corners with an
AABB. Each face is tested with the shared patch solver and the closest valid
hit wins; on an exact tie the face listed first in FACE_NAMES wins.

Faces are named in local (unrotated) coordinates: "+x", "-x", "+y", "-y",
"+z", "-z". Every face can carry its own material.

Example:
    >>> from glint.core.color import Color
    >>> from glint.geometry.cube import Cube
    >>> from glint.materials.material import Material
    >>> cube = Cube(center=(0, 0, 0), size=(2, 2, 2), material=Material(Color.white()))
    >>> cube.set_rotation((0.0, 0.5, 0.0))
    >>> cube.init(0)
"""

from __future__ import annotations

import itertools
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

import numpy as np

from glint.anim.animation import Animation
from glint.core.aabb import AABB
from glint.core.errors import NotInitializedError
from glint.core.hit import RayHit
from glint.core.ray import Ray, Vec3, as_vec3
from glint.core.solver import hit_patch
from glint.core.transform import rotate_xyz, transform
from glint.materials.material import Material

FACE_NAMES = ("+x", "-x", "+y", "-y", "+z", "-z")

# (normal axis, sign, basis axis 1, basis axis 2) per face
_FACE_LAYOUT = (
    (0, 1.0, 1, 2),
    (0, -1.0, 1, 2),
    (1, 1.0, 0, 2),
    (1, -1.0, 0, 2),
    (2, 1.0, 0, 1),
    (2, -1.0, 0, 1),
)


@dataclass(frozen=True)
class _Face:
    center: Vec3
    normal: Vec3
    basis1: Vec3
    basis2: Vec3
    half_extents: tuple[float, float]
    material: Material


@dataclass(frozen=True)
class _CubeData:
    faces: tuple[_Face, ...]
    aabb: AABB


class Cube:
    """An oriented box satisfying the SceneObject contract.

    Attributes:
        center: Box center (overridden per frame by anim_pos).
        size: Edge lengths along the local axes.
        rotation: Per-axis rotation in radians (overridden by anim_rot).
        material: Default material for every face.
        face_materials: Per-face overrides keyed by face name.
    """

    def __init__(
        self,
        center: Sequence[float],
        size: Sequence[float],
        material: Material,
        face_materials: Mapping[str, Material] | None = None,
    ) -> None:
        self.center = as_vec3(center)
        self.size = as_vec3(size)
        if np.any(self.size < 0.0):
            raise ValueError(f"Cube size must be non-negative, got {self.size.tolist()}")
        self.rotation = np.zeros(3, dtype=np.float64)
        self.material = material
        self.face_materials: dict[str, Material] = dict(face_materials or {})
        unknown = set(self.face_materials) - set(FACE_NAMES)
        if unknown:
            raise ValueError(f"Unknown face names: {sorted(unknown)}")
        self.anim_pos: Animation[Vec3] | None = None
        self.anim_rot: Animation[Vec3] | None = None
        self._data: _CubeData | None = None

    def set_position(self, center: Sequence[float]) -> None:
        self.center = as_vec3(center)
        self._data = None

    def set_rotation(self, rotation: Sequence[float]) -> None:
        self.rotation = as_vec3(rotation)
        self._data = None

    def set_face_material(self, face: str, material: Material) -> None:
        if face not in FACE_NAMES:
            raise ValueError(f"Unknown face name: {face!r}")
        self.face_materials[face] = material
        self._data = None

    def set_anim_pos(self, anim: Animation[Vec3] | None) -> None:
        self.anim_pos = anim
        self._data = None

    def set_anim_rot(self, anim: Animation[Vec3] | None) -> None:
        self.anim_rot = anim
        self._data = None

    def init(self, frame: int) -> None:
        if self.anim_pos is not None:
            self.center = as_vec3(self.anim_pos.next_frame(frame))
        if self.anim_rot is not None:
            self.rotation = as_vec3(self.anim_rot.next_frame(frame))

        rot = rotate_xyz(self.rotation)
        axes = [transform(rot, unit) for unit in np.identity(3)]
        half = 0.5 * self.size

        faces = []
        for name, (n_axis, sign, b1, b2) in zip(FACE_NAMES, _FACE_LAYOUT):
            normal = sign * axes[n_axis]
            faces.append(
                _Face(
                    center=self.center + normal * half[n_axis],
                    normal=normal,
                    basis1=axes[b1],
                    basis2=axes[b2],
                    half_extents=(float(half[b1]), float(half[b2])),
                    material=self.face_materials.get(name, self.material),
                )
            )

        corners = (
            self.center + sx * half[0] * axes[0] + sy * half[1] * axes[1] + sz * half[2] * axes[2]
            for sx, sy, sz in itertools.product((-1.0, 1.0), repeat=3)
        )
        self._data = _CubeData(faces=tuple(faces), aabb=AABB.from_points(corners))

    def _require_data(self) -> _CubeData:
        if self._data is None:
            raise NotInitializedError("Cube")
        return self._data

    def get_aabb(self) -> AABB | None:
        return self._require_data().aabb

    def next_hit(self, ray: Ray) -> RayHit | None:
        best: RayHit | None = None
        for face in self._require_data().faces:
            hit = hit_patch(
                ray,
                face.center,
                face.basis1,
                face.basis2,
                face.half_extents,
                face.normal,
                face.material,
            )
            if hit is not None and (best is None or hit.distance < best.distance):
                best = hit
        return best
