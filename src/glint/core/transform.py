"""Rotation helpers for animated objects and cameras.

Rotation matrices are applied to column vectors as ``matrix @ v``.
``rotate_xyz`` applies the z rotation first, then x, then y. Angles are in radians; ``rot_deg`` converts a
vector of degrees.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from glint.core.ray import Vec3, as_vec3

Mat3 = npt.NDArray[np.float64]

DEG_TO_RAD = math.pi / 180.0


def rotate_x(angle: float) -> Mat3:
    s, c = math.sin(angle), math.cos(angle)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, s], [0.0, -s, c]])


def rotate_y(angle: float) -> Mat3:
    s, c = math.sin(angle), math.cos(angle)
    return np.array([[c, 0.0, -s], [0.0, 1.0, 0.0], [s, 0.0, c]])


def rotate_z(angle: float) -> Mat3:
    s, c = math.sin(angle), math.cos(angle)
    return np.array([[c, s, 0.0], [-s, c, 0.0], [0.0, 0.0, 1.0]])


def rotate_xyz(angle: Sequence[float] | Vec3) -> Mat3:
    """Build the combined rotation for per-axis angles (radians).

    Zero angles are skipped, so ``rotate_xyz((0, 0, 0))`` is the identity.
    """
    ax, ay, az = as_vec3(angle)
    rot = np.identity(3)
    if az != 0.0:
        rot = rotate_z(az)
    if ax != 0.0:
        rot = rotate_x(ax) @ rot
    if ay != 0.0:
        rot = rotate_y(ay) @ rot
    return rot


def rot_deg(angle: Sequence[float] | Vec3) -> Vec3:
    """Convert per-axis angles from degrees to radians."""
    return as_vec3(angle) * DEG_TO_RAD


def transform(rot: Mat3, v: Sequence[float] | Vec3) -> Vec3:
    """Apply a rotation matrix to a vector."""
    return rot @ as_vec3(v)
