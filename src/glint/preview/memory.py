"""In-memory frame sink.

MemorySink keeps every finished frame as a float32 RGBA array of shape
(height, width, 4). It is the sink to use when frames are post-processed in
Python, previewed, or inspected in tests.

Example:
    >>> from glint.core.scheduler import FrameScheduler
    >>> from glint.preview.memory import MemorySink
    >>> sink = MemorySink()
    >>> FrameScheduler().render(source, sink)
    >>> first = sink.frames[0]  # (H, W, 4) float32
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from glint.core.color import Color


class MemorySink:
    """Sink storing finished frames as NumPy arrays.

    Attributes:
        width: Image width in pixels (0 before init).
        height: Image height in pixels (0 before init).
        frames: Finished frames in frame order.
        events: Lifecycle calls received, e.g. ("start_frame", 0).
        sample_count: Number of set_sample calls received.
    """

    def __init__(self) -> None:
        self.width = 0
        self.height = 0
        self.expected_frames = 0
        self.frames: list[npt.NDArray[np.float32]] = []
        self.events: list[tuple[str, int]] = []
        self.sample_count = 0
        self._buffer: npt.NDArray[np.float32] | None = None

    def init(self, width: int, height: int, frames: int) -> None:
        self.width = width
        self.height = height
        self.expected_frames = frames
        self.frames.clear()
        self.events.clear()
        self.sample_count = 0
        self._buffer = np.zeros((height, width, 4), dtype=np.float32)
        self.events.append(("init", frames))

    def _require_buffer(self) -> npt.NDArray[np.float32]:
        if self._buffer is None:
            raise RuntimeError("MemorySink was not initialized. Call init() first.")
        return self._buffer

    def start_frame(self, frame: int) -> None:
        self._require_buffer().fill(0.0)
        self.events.append(("start_frame", frame))

    def set_sample(self, x: int, y: int, color: Color) -> None:
        buffer = self._require_buffer()
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Sample ({x}, {y}) outside {self.width}x{self.height} image")
        buffer[y, x] = color.to_array()
        self.sample_count += 1

    def finish_frame(self, frame: int) -> None:
        self.frames.append(self._require_buffer().copy())
        self.events.append(("finish_frame", frame))

    def get_pixel(self, frame: int, x: int, y: int) -> Color:
        """Return a stored pixel of a finished frame as a Color."""
        r, g, b, a = (float(c) for c in self.frames[frame][y, x])
        return Color(r, g, b, a)
