"""Scene container and the object/light capability contracts.

A Scene is an ordered collection of objects plus the lights that shading
functions may consult. Object order matters: when two objects report hits at
the same distance, the one added first wins.

``init(frame)`` must be called once per frame before any intersection query;
it lets every object and light recompute its animated working data. During
the parallel dispatch phase that follows, the scene is only read.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from glint.camera.base import Camera
    from glint.core.aabb import AABB
    from glint.core.color import Color
    from glint.core.hit import RayHit
    from glint.core.ray import Ray, Vec3
    from glint.scene.params import OutputParams, RenderParams


class SceneObject(Protocol):
    """Capability contract for renderable objects."""

    def init(self, frame: int) -> None:
        """Recompute per-frame geometry (positions, rotations, bounds)."""
        ...

    def get_aabb(self) -> AABB | None:
        """Return the object's bounding box, or None if it is unbounded."""
        ...

    def next_hit(self, ray: Ray) -> RayHit | None:
        """Return the closest valid hit of the ray, or None."""
        ...


class Light(Protocol):
    """Capability contract for light sources used by shading functions."""

    def init(self, frame: int) -> None: ...

    def get_position(self) -> Vec3: ...

    def get_light(self, ray: Ray) -> Color:
        """Return the light emitted along a ray leaving the light.

        The alpha channel carries the light strength.
        """
        ...


class Scene:
    """Ordered collection of scene objects and lights.

    Attributes:
        objects: Objects in insertion order.
        lights: Lights in insertion order.
    """

    def __init__(
        self,
        objects: list[SceneObject] | None = None,
        lights: list[Light] | None = None,
    ) -> None:
        self.objects: list[SceneObject] = list(objects) if objects is not None else []
        self.lights: list[Light] = list(lights) if lights is not None else []

    def add(self, obj: SceneObject) -> int:
        """Append an object and return its index in scene order."""
        self.objects.append(obj)
        return len(self.objects) - 1

    def add_light(self, light: Light) -> int:
        """Append a light and return its index."""
        self.lights.append(light)
        return len(self.lights) - 1

    def init(self, frame: int) -> None:
        """Initialize every object, then every light, for a frame."""
        for obj in self.objects:
            obj.init(frame)
        for light in self.lights:
            light.init(frame)

    def __len__(self) -> int:
        return len(self.objects)

    def __repr__(self) -> str:
        return f"Scene(objects={len(self.objects)}, lights={len(self.lights)})"


@dataclass
class RenderSource:
    """Everything the frame scheduler consumes for one render.

    Attributes:
        scene: The scene, re-initialized for every frame.
        camera: The camera, re-initialized for every frame.
        params: Shading configuration.
        output: Image size and frame count.
    """

    scene: Scene
    camera: Camera
    params: RenderParams
    output: OutputParams
