"""Pytest configuration for glint tests.

Shared fixtures build small scenes that many test modules render: a 2x2x2
cube at the origin seen by a camera on the +z axis, and helper objects that
record or fail on demand.
"""

import pytest


@pytest.fixture
def face_colors():
    """Distinct colors for the six cube faces, keyed by face name."""
    from glint.core.color import Color

    return {
        "+x": Color(1.0, 0.0, 0.0, 1.0),
        "-x": Color(0.0, 1.0, 0.0, 1.0),
        "+y": Color(1.0, 1.0, 0.0, 1.0),
        "-y": Color(0.0, 1.0, 1.0, 1.0),
        "+z": Color(0.2, 0.3, 0.9, 1.0),
        "-z": Color(1.0, 0.0, 1.0, 1.0),
    }


@pytest.fixture
def colored_cube(face_colors):
    """A 2x2x2 cube at the origin with a different material on every face."""
    from glint.core.color import Color
    from glint.geometry.cube import Cube
    from glint.materials.material import Material

    return Cube(
        center=(0.0, 0.0, 0.0),
        size=(2.0, 2.0, 2.0),
        material=Material(Color.white()),
        face_materials={name: Material(color) for name, color in face_colors.items()},
    )


@pytest.fixture
def make_source():
    """Factory for a RenderSource with a camera at (0, 0, 5) looking down -z."""
    from glint.camera.perspective import PerspectiveCamera
    from glint.scene.params import OutputParams, RenderParams
    from glint.scene.scene import RenderSource, Scene

    def _make(objects, width=3, height=3, frames=1, params=None, lights=None):
        output = OutputParams(width=width, height=height, frames=frames)
        camera = PerspectiveCamera(output, scale=1.0, distance=1.0)
        camera.set_position((0.0, 0.0, 5.0))
        return RenderSource(
            scene=Scene(objects=list(objects), lights=lights),
            camera=camera,
            params=params if params is not None else RenderParams(),
            output=output,
        )

    return _make


class RecordingObject:
    """Scene object that never hits and records the frames it was initialized for."""

    def __init__(self, fail_on_frame=None):
        self.frames = []
        self.fail_on_frame = fail_on_frame
        self._frame = None

    def init(self, frame):
        self.frames.append(frame)
        self._frame = frame

    def get_aabb(self):
        return None

    def next_hit(self, ray):
        if self._frame == self.fail_on_frame:
            raise ValueError(f"intersection failed in frame {self._frame}")
        return None


@pytest.fixture
def recording_object():
    """Factory for RecordingObject instances."""
    return RecordingObject
