"""Ray intersection with bounded planar patches.

Every planar primitive (rectangles, the faces of a box, unbounded planes) is
described by a center point and two in-plane basis vectors. A ray hits the
patch where

    origin + t * direction = center + u * basis1 + v * basis2

This is a 3x3 linear system in (t, u, v), solved here by Gauss-Jordan
elimination with row pivoting on the augmented matrix

    [direction | -basis1 | -basis2 | center - origin]

Pivots with magnitude below SINGULAR_THRESHOLD are treated as zero. A system
without a usable pivot (the ray is parallel to the patch, or the basis is
degenerate) has no hit; that is a normal outcome, not an error.

Example:
    >>> from glint.core.ray import Ray, vec3
    >>> from glint.core.solver import solve_plane_hit
    >>> ray = Ray(vec3(0, 0, 5), vec3(0, 0, -1))
    >>> t, u, v = solve_plane_hit(ray, vec3(0, 0, 0), vec3(1, 0, 0), vec3(0, 1, 0))
    >>> t
    5.0
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from glint.core.hit import RayHit
from glint.core.ray import Ray, Vec3

if TYPE_CHECKING:
    from glint.materials.material import Material

logger = logging.getLogger(__name__)

SINGULAR_THRESHOLD = 1e-10


def _augmented_matrix(ray: Ray, center: Vec3, basis1: Vec3, basis2: Vec3) -> npt.NDArray[np.float64]:
    mat = np.empty((3, 4), dtype=np.float64)
    mat[:, 0] = ray.direction
    mat[:, 1] = -np.asarray(basis1, dtype=np.float64)
    mat[:, 2] = -np.asarray(basis2, dtype=np.float64)
    mat[:, 3] = np.asarray(center, dtype=np.float64) - ray.origin
    return mat


def _swap(mat: npt.NDArray[np.float64], i: int, j: int) -> None:
    mat[[i, j]] = mat[[j, i]]


def _eliminate(mat: npt.NDArray[np.float64], target: int, pivot: int, column: int) -> None:
    """Subtract a multiple of the pivot row so mat[target, column] becomes zero."""
    mat[target] -= mat[pivot] * (mat[target, column] / mat[pivot, column])


def solve_plane_hit(
    ray: Ray,
    center: Vec3,
    basis1: Vec3,
    basis2: Vec3,
) -> tuple[float, float, float] | None:
    """Solve for the ray parameter and patch coordinates of a plane hit.

    Args:
        ray: The ray to intersect.
        center: A point on the plane (the patch center).
        basis1: First in-plane basis vector.
        basis2: Second in-plane basis vector.

    Returns:
        A tuple (t, u, v) such that ray.at(t) == center + u*basis1 + v*basis2,
        or None if the system has no usable pivot.
    """
    mat = _augmented_matrix(ray, center, basis1, basis2)
    debug = logger.isEnabledFor(logging.DEBUG)
    if debug:
        logger.debug("augmented matrix %s", mat.tolist())

    # Column 0
    if abs(mat[0, 0]) < SINGULAR_THRESHOLD:
        if abs(mat[1, 0]) < SINGULAR_THRESHOLD:
            if abs(mat[2, 0]) < SINGULAR_THRESHOLD:
                return None
            _swap(mat, 0, 2)
        else:
            if abs(mat[2, 0]) > SINGULAR_THRESHOLD:
                _eliminate(mat, 2, 1, 0)
            _swap(mat, 0, 1)
    else:
        if abs(mat[1, 0]) > SINGULAR_THRESHOLD:
            _eliminate(mat, 1, 0, 0)
        if abs(mat[2, 0]) > SINGULAR_THRESHOLD:
            _eliminate(mat, 2, 0, 0)

    # Column 1
    if abs(mat[1, 1]) < SINGULAR_THRESHOLD:
        if abs(mat[2, 1]) < SINGULAR_THRESHOLD:
            return None
        _swap(mat, 1, 2)
    elif abs(mat[2, 1]) > SINGULAR_THRESHOLD:
        _eliminate(mat, 2, 1, 1)

    if abs(mat[2, 2]) < SINGULAR_THRESHOLD:
        return None

    # Back substitution
    _eliminate(mat, 0, 1, 1)
    _eliminate(mat, 0, 2, 2)
    _eliminate(mat, 1, 2, 2)

    if debug:
        logger.debug("reduced matrix %s", mat.tolist())

    t = mat[0, 3] / mat[0, 0]
    u = mat[1, 3] / mat[1, 1]
    v = mat[2, 3] / mat[2, 2]
    return float(t), float(u), float(v)


def hit_patch(
    ray: Ray,
    center: Vec3,
    basis1: Vec3,
    basis2: Vec3,
    half_extents: tuple[float | None, float | None] | None,
    normal: Vec3,
    material: Material,
) -> RayHit | None:
    """Test a ray against a bounded planar patch.

    The patch covers ``center + u*basis1 + v*basis2`` for ``|u| <= h1`` and
    ``|v| <= h2``. Only hits in front of the ray origin (t > 0) count.

    Args:
        ray: The ray to test.
        center: The patch center.
        basis1: First in-plane basis vector.
        basis2: Second in-plane basis vector.
        half_extents: (h1, h2) limits on |u| and |v|. None, or a None entry,
            leaves the patch unbounded along that direction.
        normal: The outward normal reported for a hit.
        material: The material reported for a hit.

    Returns:
        A RayHit, or None if the ray misses the patch.
    """
    solution = solve_plane_hit(ray, center, basis1, basis2)
    if solution is None:
        return None

    t, u, v = solution
    h1, h2 = half_extents if half_extents is not None else (None, None)
    if h1 is not None and abs(u) > h1:
        return None
    if h2 is not None and abs(v) > h2:
        return None
    if not t > 0.0:
        return None

    return RayHit(
        distance=t,
        position=ray.at(t),
        normal=np.asarray(normal, dtype=np.float64),
        material=material,
    )
