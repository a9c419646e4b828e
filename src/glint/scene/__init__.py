"""Scene module for scene containers and render configuration.

Components:
    scene: Ordered object/light container and the SceneObject/Light contracts
    params: RenderParams, Jitter and OutputParams configuration dataclasses

Objects are selected at scene-construction time from independent
implementations (glint.geometry) that satisfy the SceneObject contract; there
is no shape class hierarchy.
"""

from .params import Jitter, OutputParams, RenderParams, ShadingFunction
from .scene import Light, RenderSource, Scene, SceneObject

__all__ = [
    "Scene",
    "SceneObject",
    "Light",
    "RenderSource",
    "RenderParams",
    "Jitter",
    "OutputParams",
    "ShadingFunction",
]
