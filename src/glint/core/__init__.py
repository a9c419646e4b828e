"""Core rendering module.

This module contains the rendering kernel:

Components:
    ray: Ray data structure and vector utilities
    color: RGBA colors and blending
    aabb: Axis-aligned bounding boxes for ray rejection
    solver: Gauss-Jordan ray/planar-patch intersection shared by all planar shapes
    hit: Ray hit records
    transform: Rotation matrices for animated objects and cameras
    integrator: Recursive reflection shading and jittered pixel sampling
    scheduler: Frame-sequential, pixel-parallel execution
    errors: Exception types

The integrator is pure Python over NumPy vectors. Parallelism comes from the
scheduler's worker pool, one task per pixel.
"""

from .color import Color, mix_color
from .ray import (
    Ray,
    Vec3,
    as_vec3,
    cross,
    dot,
    length,
    normalize,
    reflect,
    reflect_ray,
    vec3,
)
from .aabb import AABB
from .errors import GlintError, NotInitializedError, RenderError
from .hit import RayHit
from .solver import hit_patch, solve_plane_hit

# Note: integrator and scheduler are NOT imported here; they depend on the scene layer.
# Import directly from glint.core.integrator or glint.core.scheduler when needed.

__all__ = [
    "Ray",
    "Vec3",
    "vec3",
    "as_vec3",
    "dot",
    "cross",
    "length",
    "normalize",
    "reflect",
    "reflect_ray",
    "Color",
    "mix_color",
    "AABB",
    "RayHit",
    "solve_plane_hit",
    "hit_patch",
    "GlintError",
    "NotInitializedError",
    "RenderError",
]
