#!/usr/bin/env python3
"""Render an animated scene: a spinning cube above a mirror floor.

The cube turns around its vertical axis while the camera slowly rises. Every
frame is written as a numbered PNG file next to the output prefix.

Usage:
    python examples/render_spinning_cube.py [options]

Options:
    --width WIDTH       Image width in pixels (default: 320)
    --height HEIGHT     Image height in pixels (default: 240)
    --frames FRAMES     Number of frames (default: 24)
    --output OUTPUT     Output path prefix (default: spinning_cube.png)
    --workers WORKERS   Pixel worker threads (default: 8)
    --jitter N          Rays per pixel, 1 disables anti-aliasing (default: 1)
    --lights            Use spot-light shading instead of flat colors
    --preview           Show frames in a Taichi window while rendering
    --verbose           Enable debug logging

Example:
    python examples/render_spinning_cube.py --frames 12 --jitter 5 --output out/cube
"""

from __future__ import annotations

import argparse
import logging
import math
import sys

from glint.anim.animation import FuncAnimation, LinearAnimation
from glint.camera.perspective import PerspectiveCamera
from glint.core.color import Color
from glint.core.errors import RenderError
from glint.core.scheduler import FrameScheduler
from glint.geometry.cube import Cube
from glint.geometry.patch import Patch
from glint.light.shading import LightShading
from glint.light.spot import DirectedSpotLight
from glint.materials.material import Material
from glint.preview.png import PngSink
from glint.scene.params import Jitter, OutputParams, RenderParams
from glint.scene.scene import RenderSource, Scene

logger = logging.getLogger("render_spinning_cube")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a spinning cube above a mirror floor.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=320, help="Image width in pixels (default: 320)")
    parser.add_argument("--height", type=int, default=240, help="Image height in pixels (default: 240)")
    parser.add_argument("--frames", type=int, default=24, help="Number of frames (default: 24)")
    parser.add_argument(
        "--output",
        type=str,
        default="spinning_cube.png",
        help="Output path prefix (default: spinning_cube.png)",
    )
    parser.add_argument("--workers", type=int, default=8, help="Pixel worker threads (default: 8)")
    parser.add_argument("--jitter", type=int, default=1, help="Rays per pixel (default: 1)")
    parser.add_argument("--lights", action="store_true", help="Use spot-light shading")
    parser.add_argument("--preview", action="store_true", help="Show a live Taichi preview window")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def build_source(args: argparse.Namespace) -> RenderSource:
    """Assemble scene, camera and parameters for the animation."""
    output = OutputParams(width=args.width, height=args.height, frames=args.frames)

    scene = Scene()
    floor = Patch(
        center=(0.0, -1.5, 0.0),
        basis1=(1.0, 0.0, 0.0),
        basis2=(0.0, 0.0, -1.0),
        half_extents=(6.0, 6.0),
        material=Material(Color(0.2, 0.2, 0.25), reflectance=0.6),
    )
    scene.add(floor)

    cube = Cube(
        center=(0.0, 0.0, 0.0),
        size=(2.0, 2.0, 2.0),
        material=Material(Color(0.9, 0.9, 0.9)),
        face_materials={
            "+x": Material(Color(0.9, 0.2, 0.2)),
            "-x": Material(Color(0.2, 0.9, 0.2)),
            "+z": Material(Color(0.2, 0.3, 0.9)),
            "-z": Material(Color(0.9, 0.8, 0.2)),
        },
    )
    turn = 2.0 * math.pi / max(args.frames, 1)
    cube.set_anim_rot(LinearAnimation((0.0, 0.0, 0.0), (0.0, turn, 0.0)))
    scene.add(cube)

    shading = None
    if args.lights:
        light = DirectedSpotLight(position=(3.0, 4.0, 4.0), color=Color(1.0, 1.0, 1.0, 1.2), cone=240.0)
        light.set_rotation((0.0, math.radians(-135.0), math.radians(-35.0)))
        scene.add_light(light)
        shading = LightShading(ambient=0.15)

    camera = PerspectiveCamera(output, scale=1.0, distance=1.2)
    camera.set_anim_pos(FuncAnimation(lambda frame: (0.0, 0.5 + 0.05 * frame, 6.0)))
    camera.set_anim_rot(FuncAnimation(lambda frame: (-math.atan2(0.5 + 0.05 * frame, 6.0), 0.0, 0.0)))

    params = RenderParams(
        max_depth=3,
        background_color=Color(0.05, 0.05, 0.08),
        indirect_color=Color(0.05, 0.05, 0.08),
        jitter=Jitter(size=0.3, ray_count=args.jitter) if args.jitter > 1 else None,
        shading=shading,
    )
    return RenderSource(scene=scene, camera=camera, params=params, output=output)


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    source = build_source(args)
    sink = PngSink(args.output)

    preview = None
    if args.preview:
        import taichi as ti

        from glint.preview.interactive import PreviewSink

        ti.init(arch=ti.cpu)
        preview = PreviewSink(inner=sink, title="glint - spinning cube")

    def report(done: int, total: int) -> None:
        logger.info("Progress: %d/%d frames", done, total)

    scheduler = FrameScheduler(workers=args.workers, progress=report)
    try:
        stats = scheduler.render(source, preview if preview is not None else sink)
    except RenderError as exc:
        logger.error("Render failed: %s (caused by %r)", exc, exc.__cause__)
        return 1

    logger.info("Rendered %d frame(s) in %.2fs", stats.frames_rendered, stats.total_time)
    if preview is not None:
        preview.wait_for_close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
