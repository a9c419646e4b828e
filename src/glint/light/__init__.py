"""Light module.

Components:
    spot: Directed spot light with animated position, cone and rotation
    shading: LightShading, a shading function using the scene's lights

Lights are stored on the Scene and initialized with it every frame; only
shading functions consult them.
"""

from .shading import LightShading
from .spot import DirectedSpotLight

__all__ = ["DirectedSpotLight", "LightShading"]
