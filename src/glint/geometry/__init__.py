"""Geometry module containing scene object implementations.

Components:
    patch: Rectangles and unbounded planes
    cube: Rotatable six-faced boxes

Both are independent implementations of the SceneObject contract and share
the ray/patch solver in glint.core.solver for their intersection math.
"""

from .cube import FACE_NAMES, Cube
from .patch import Patch

__all__ = ["Cube", "Patch", "FACE_NAMES"]
