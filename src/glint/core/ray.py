"""Ray data structure and vector utilities.

This module provides the immutable Ray dataclass and the small set of vector
helpers used throughout the renderer. Vectors are float64 NumPy arrays of
shape (3,). Rays store read-only copies of their origin and direction so a
ray can be shared between worker threads without defensive copying.

Example:
    >>> from glint.core.ray import Ray, vec3
    >>> ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
    >>> point = ray.at(5.0)  # Point 5 units along the ray
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
import numpy.typing as npt

# Type alias for 3D vectors
Vec3 = npt.NDArray[np.float64]

# Ray origin offset used when spawning reflected rays
REFLECTION_EPSILON = 1e-10


def vec3(x: float, y: float, z: float) -> Vec3:
    """Create a 3D vector.

    Args:
        x: The x component.
        y: The y component.
        z: The z component.

    Returns:
        A float64 array of shape (3,).
    """
    return np.array([x, y, z], dtype=np.float64)


def as_vec3(value: Sequence[float] | Vec3) -> Vec3:
    """Convert a tuple, list or array to a float64 3-vector.

    Raises:
        ValueError: If the value does not have exactly three components.
    """
    arr = np.array(value, dtype=np.float64).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"Expected 3 components, got {arr.shape[0]}")
    return arr


def _frozen(value: Sequence[float] | Vec3) -> Vec3:
    arr = as_vec3(value)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Cameras produce unit
            directions; the intersection math does not require it.
    """

    origin: Vec3
    direction: Vec3

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", _frozen(self.origin))
        object.__setattr__(self, "direction", _frozen(self.direction))

    def at(self, t: float) -> Vec3:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. Positive values are in front of the origin.

        Returns:
            The point origin + t * direction.
        """
        return self.origin + t * self.direction


# =============================================================================
# Vector Utility Functions
# =============================================================================


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product of two vectors."""
    return float(np.dot(a, b))


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Compute the cross product of two vectors."""
    return np.cross(a, b)


def length(v: Vec3) -> float:
    """Compute the Euclidean length of a vector."""
    return float(np.linalg.norm(v))


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.
        If v is zero-length, returns a zero vector.
    """
    n = np.linalg.norm(v)
    if n == 0.0:
        return np.zeros(3, dtype=np.float64)
    return v / n


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident vector about a normal.

    The normal should be unit length for correct results.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal.

    Returns:
        The reflected direction d - 2(d . n)n.
    """
    return incident - 2.0 * np.dot(incident, normal) * normal


def reflect_ray(ray: Ray, normal: Vec3, distance: float) -> Ray:
    """Build the mirror-reflected ray leaving a hit point.

    The new origin is placed along the incoming ray just short of the hit
    distance so the reflected ray does not immediately re-hit the surface.

    Args:
        ray: The incoming ray.
        normal: The unit surface normal at the hit.
        distance: The hit distance along the incoming ray.

    Returns:
        A new Ray; the incoming ray is left untouched.
    """
    origin = ray.at(distance - REFLECTION_EPSILON)
    return Ray(origin=origin, direction=reflect(ray.direction, normal))
