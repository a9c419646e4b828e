"""Deterministic, animation-capable CPU raytracer.

Scenes are built from rectangular patches and cubes, viewed through a
perspective camera and rendered frame by frame on a thread pool, with one
task per pixel. Shading is flat material color plus recursive mirror
reflection, optionally replaced by a light-based shading function.

Subpackages:
    core: Vectors, colors, AABBs, the plane-hit solver, the shading
        integrator and the frame scheduler
    geometry: Patch and Cube scene objects
    materials: Material (color and reflectance)
    camera: Perspective camera producing primary rays
    scene: Scene container and render parameters
    anim: Per-frame value animations
    light: Spot light and light-based shading
    preview: Output sinks (memory, PNG, live preview) and display helpers
"""

__version__ = "0.1.0"
