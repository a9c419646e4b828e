"""Surface material definition.

A material carries the base color a surface shows when no shading function
is configured, and the reflectance used by the shading pipeline to blend in
the mirror-reflected color:

    result = color * (1 - reflectance) + reflected * reflectance

Example:
    >>> from glint.core.color import Color
    >>> from glint.materials.material import Material
    >>> mirror = Material(Color(0.9, 0.9, 0.9), reflectance=0.8)
"""

from dataclasses import dataclass

from glint.core.color import Color


@dataclass(frozen=True)
class Material:
    """Surface material properties.

    Attributes:
        color: The base surface color.
        reflectance: Fraction of the reflected color blended into the
            surface color, in [0, 1]. 0 disables reflection.
    """

    color: Color
    reflectance: float = 0.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.reflectance <= 1.0:
            raise ValueError(f"Reflectance must be in [0, 1], got {self.reflectance}")

    def get_color(self) -> Color:
        return self.color

    def get_reflectance(self) -> float:
        return self.reflectance
