"""Diffuse light shading function.

LightShading replaces a hit's flat material color with a simple diffuse
estimate: an ambient term plus, for every scene light that is not blocked by
another object, the light's color weighted by its strength and by
``max(0, n . l)``. The reflection blend of the shading pipeline is applied on
top of this result.

Example:
    >>> from glint.light.shading import LightShading
    >>> from glint.scene.params import RenderParams
    >>> params = RenderParams(max_depth=2, shading=LightShading(ambient=0.1))
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from glint.core.color import Color
from glint.core.integrator import collect_hits
from glint.core.ray import Ray

if TYPE_CHECKING:
    from glint.core.hit import RayHit
    from glint.scene.params import RenderParams
    from glint.scene.scene import Scene

# Offset of shadow ray origins along the light direction
SHADOW_EPSILON = 1e-6


class LightShading:
    """ShadingFunction computing ambient plus unshadowed diffuse lighting.

    Attributes:
        ambient: Fraction of the material color always visible.
        shadows: Whether blocked lights are skipped.
    """

    def __init__(self, ambient: float = 0.1, shadows: bool = True) -> None:
        if ambient < 0.0:
            raise ValueError(f"Ambient term must be non-negative, got {ambient}")
        self.ambient = ambient
        self.shadows = shadows

    def _occluded(self, scene: Scene, origin: np.ndarray, direction: np.ndarray, distance: float) -> bool:
        shadow_ray = Ray(origin=origin + direction * SHADOW_EPSILON, direction=direction)
        return any(hit.distance < distance - SHADOW_EPSILON for hit in collect_hits(shadow_ray, scene))

    def __call__(self, ray: Ray, hit: RayHit, scene: Scene, params: RenderParams) -> Color:
        base = hit.material.color
        light_rgb = np.full(3, self.ambient, dtype=np.float64)

        for light in scene.lights:
            to_light = light.get_position() - hit.position
            distance = float(np.linalg.norm(to_light))
            if distance == 0.0:
                continue
            direction = to_light / distance
            cos_theta = float(np.dot(hit.normal, direction))
            if cos_theta <= 0.0:
                continue
            if self.shadows and self._occluded(scene, hit.position, direction, distance):
                continue

            contribution = light.get_light(Ray(origin=hit.position, direction=direction))
            weight = cos_theta * contribution.a
            light_rgb += weight * np.array([contribution.r, contribution.g, contribution.b])

        return Color(
            base.r * light_rgb[0],
            base.g * light_rgb[1],
            base.b * light_rgb[2],
            base.a,
        )
