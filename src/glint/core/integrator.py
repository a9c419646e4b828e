"""Recursive ray shading with mirror reflection and jittered sampling.

This module resolves the color seen along a ray:

1. Rays deeper than ``params.max_depth`` stop with the indirect color.
2. Every scene object whose bounding box admits the ray is asked for a hit;
   hits at non-positive or non-finite distances are discarded.
3. A ray that hits nothing gets the background color if it is a primary
   ray (depth 0) and the indirect color otherwise.
4. The nearest hit is selected; on equal distances the object that comes
   first in scene order wins.
5. The material color (or the configured shading function's result) is
   blended with the recursively traced mirror reflection:

       color * (1 - reflectance) + reflected * reflectance

Pixels are resolved by tracing one ray through the pixel center, or several
jittered rays averaged with equal weight.

Example:
    >>> from glint.core.integrator import render_pixel, trace_ray
    >>> color = render_pixel(camera, scene, params, x=10, y=20)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from glint.core.color import Color, mix_color
from glint.core.hit import RayHit
from glint.core.ray import Ray, reflect_ray

if TYPE_CHECKING:
    from glint.camera.base import Camera
    from glint.scene.params import RenderParams
    from glint.scene.scene import Scene

logger = logging.getLogger(__name__)


def collect_hits(ray: Ray, scene: Scene) -> list[RayHit]:
    """Gather the valid hits of a ray against every scene object, in scene order.

    Objects whose bounding box rejects the ray are skipped without calling
    their intersection routine.
    """
    hits = []
    for obj in scene.objects:
        aabb = obj.get_aabb()
        if aabb is not None and not aabb.is_hit(ray):
            continue
        hit = obj.next_hit(ray)
        if hit is not None and hit.is_valid:
            hits.append(hit)
    return hits


def nearest_hit(hits: Iterable[RayHit]) -> RayHit | None:
    """Select the hit with the smallest distance.

    Hits with non-finite distances are treated as invalid and skipped, so the
    comparison below is a strict total order. On equal distances the earlier
    hit is kept.

    Args:
        hits: Candidate hits in scene order.

    Returns:
        The nearest valid hit, or None if there is none.
    """
    best: RayHit | None = None
    for hit in hits:
        if not hit.is_valid:
            continue
        if best is None or hit.distance < best.distance:
            best = hit
    return best


def trace_ray(ray: Ray, scene: Scene, params: RenderParams, depth: int = 0) -> Color:
    """Resolve the color seen along a ray.

    Args:
        ray: The ray to trace.
        scene: The initialized scene (read-only).
        params: Shading configuration.
        depth: Reflection depth of this ray; 0 for primary rays.

    Returns:
        The resolved color.
    """
    if depth > params.max_depth:
        return params.indirect_color

    hit = nearest_hit(collect_hits(ray, scene))
    if hit is None:
        return params.background_color if depth == 0 else params.indirect_color

    if params.shading is not None:
        material_color = params.shading(ray, hit, scene, params)
    else:
        material_color = hit.material.color

    reflectance = hit.material.reflectance
    if reflectance != 0.0:
        reflected = reflect_ray(ray, hit.normal, hit.distance)
        reflected_color = trace_ray(reflected, scene, params, depth + 1)
        return mix_color(material_color, reflected_color, reflectance)

    return material_color


def render_pixel(camera: Camera, scene: Scene, params: RenderParams, x: int, y: int) -> Color:
    """Resolve the color of pixel (x, y).

    Without jitter a single ray is traced through the pixel center. With
    jitter, ``jitter.ray_count`` rays are traced through the sample positions
    the jitter configuration produces and averaged with weight 1/n.

    Args:
        camera: The initialized camera (read-only).
        scene: The initialized scene (read-only).
        params: Shading configuration.
        x: Pixel column.
        y: Pixel row.

    Returns:
        The pixel color.
    """
    logger.debug("Rendering pixel %d, %d", x, y)
    jitter = params.jitter
    if jitter is None:
        ray = camera.make_ray(x + 0.5, y + 0.5)
        return trace_ray(ray, scene, params, 0)

    weight = 1.0 / jitter.ray_count
    color = Color(0.0, 0.0, 0.0, 0.0)
    for jx, jy in jitter.sample_positions(x, y):
        ray = camera.make_ray(jx, jy)
        color = color + trace_ray(ray, scene, params, 0) * weight
    return color
