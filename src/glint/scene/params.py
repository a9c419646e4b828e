"""Render and output parameters.

RenderParams configures the shading pipeline (recursion depth, fallback
colors, anti-aliasing, optional shading function). OutputParams fixes the
image size and frame count for a whole render.

Example:
    >>> from glint.core.color import Color
    >>> from glint.scene.params import Jitter, OutputParams, RenderParams
    >>> params = RenderParams(max_depth=2, background_color=Color.black())
    >>> params.jitter = Jitter(size=0.25, ray_count=4)
    >>> output = OutputParams(width=320, height=240, frames=24)
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from glint.core.color import Color

if TYPE_CHECKING:
    from glint.core.hit import RayHit
    from glint.core.ray import Ray
    from glint.scene.scene import Scene


class ShadingFunction(Protocol):
    """Computes the pre-reflection color of a hit, replacing the material color."""

    def __call__(self, ray: Ray, hit: RayHit, scene: Scene, params: RenderParams) -> Color: ...


@dataclass(frozen=True)
class Jitter:
    """Anti-aliasing configuration: several rays per pixel, averaged.

    The sample pattern is deterministic. The first sample is always the pixel
    center; the remaining ``ray_count - 1`` samples lie on a circle of radius
    ``size`` pixels around it at evenly spaced angles. A single-ray jitter is
    therefore identical to unjittered sampling.

    Attributes:
        size: Jitter radius in pixels.
        ray_count: Number of rays traced per pixel.
    """

    size: float = 0.2
    ray_count: int = 5

    def __post_init__(self) -> None:
        if self.ray_count < 1:
            raise ValueError(f"Jitter ray_count must be at least 1, got {self.ray_count}")
        if self.size < 0.0:
            raise ValueError(f"Jitter size must be non-negative, got {self.size}")

    def sample_positions(self, x: int, y: int) -> Iterator[tuple[float, float]]:
        """Yield the sub-pixel positions to trace for pixel (x, y)."""
        cx = x + 0.5
        cy = y + 0.5
        yield cx, cy

        ring = self.ray_count - 1
        for k in range(ring):
            angle = 2.0 * math.pi * k / ring
            yield cx + self.size * math.cos(angle), cy + self.size * math.sin(angle)


@dataclass
class RenderParams:
    """Shading pipeline configuration.

    Attributes:
        max_depth: Maximum reflection depth. A ray at depth > max_depth is
            terminated with indirect_color.
        background_color: Returned for primary rays that miss every object.
        indirect_color: Returned for secondary rays that miss, and for rays
            cut off by max_depth.
        jitter: Optional multi-sample anti-aliasing.
        shading: Optional shading function overriding the material color.
    """

    max_depth: int = 3
    background_color: Color = field(default_factory=Color.transparent)
    indirect_color: Color = field(default_factory=Color.white)
    jitter: Jitter | None = None
    shading: ShadingFunction | None = None

    def __post_init__(self) -> None:
        depth = self.max_depth
        if isinstance(depth, bool) or not isinstance(depth, numbers.Integral) or depth < 0:
            raise ValueError(f"max_depth must be a non-negative integer, got {self.max_depth!r}")


@dataclass(frozen=True)
class OutputParams:
    """Image size and frame count, fixed for a render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        frames: Number of frames to render.
    """

    width: int
    height: int
    frames: int = 1

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Output size must be positive, got {self.width}x{self.height}")
        if self.frames <= 0:
            raise ValueError(f"Frame count must be positive, got {self.frames}")
