"""Materials module.

Materials describe how a surface contributes to a pixel's color: a base color
and a reflectance controlling how much of the mirror-reflected ray is blended
in. Richer lighting is layered on top through shading functions
(see glint.light.shading).
"""

from .material import Material

__all__ = ["Material"]
