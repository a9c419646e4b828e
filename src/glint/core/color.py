"""RGBA color values used by the shading pipeline and sinks.

Colors are immutable float quadruples. Channels are nominally in [0, 1] but
are not clamped until a sink converts them to 8-bit values, so intermediate
results of blending and averaging keep their full precision.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt


def _clamp_channel(value: float) -> int:
    scaled = value * 255.0
    if scaled <= 0.0:
        return 0
    if scaled >= 255.0:
        return 255
    return int(scaled)


@dataclass(frozen=True)
class Color:
    """An RGBA color.

    Attributes:
        r: Red channel.
        g: Green channel.
        b: Blue channel.
        a: Alpha channel (coverage / strength). Defaults to opaque.
    """

    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def white(cls) -> Color:
        return cls(1.0, 1.0, 1.0, 1.0)

    @classmethod
    def black(cls) -> Color:
        return cls(0.0, 0.0, 0.0, 1.0)

    @classmethod
    def transparent(cls) -> Color:
        return cls(0.0, 0.0, 0.0, 0.0)

    def __add__(self, other: Color) -> Color:
        return Color(self.r + other.r, self.g + other.g, self.b + other.b, self.a + other.a)

    def __mul__(self, scale: float) -> Color:
        return Color(self.r * scale, self.g * scale, self.b * scale, self.a * scale)

    __rmul__ = __mul__

    def __truediv__(self, scale: float) -> Color:
        return Color(self.r / scale, self.g / scale, self.b / scale, self.a / scale)

    def with_alpha(self, a: float) -> Color:
        """Return a copy of this color with a different alpha channel."""
        return Color(self.r, self.g, self.b, a)

    def to_tuple(self) -> tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)

    def to_array(self) -> npt.NDArray[np.float32]:
        """Return the channels as a float32 array of shape (4,)."""
        return np.array(self.to_tuple(), dtype=np.float32)

    def to_rgba8(self) -> tuple[int, int, int, int]:
        """Convert to 8-bit channels, clamping to [0, 255]."""
        return (
            _clamp_channel(self.r),
            _clamp_channel(self.g),
            _clamp_channel(self.b),
            _clamp_channel(self.a),
        )


def mix_color(base: Color, other: Color, factor: float) -> Color:
    """Linearly blend two colors.

    Args:
        base: The color weighted by (1 - factor).
        other: The color weighted by factor.
        factor: Blend factor, typically a surface reflectance in [0, 1].

    Returns:
        base * (1 - factor) + other * factor, applied to every channel.
    """
    return base * (1.0 - factor) + other * factor
