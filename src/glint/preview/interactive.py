"""Live frame preview using Taichi GGUI.

PreviewSink shows every finished frame in a ti.ui.Window while forwarding
all sink calls to an optional inner sink, so a render can be watched and
written to disk at the same time. Requires the ``preview`` extra (taichi)
and an initialized Taichi runtime (``ti.init``) before ``init`` is called.

Example:
    >>> import taichi as ti
    >>> from glint.core.scheduler import FrameScheduler
    >>> from glint.preview.interactive import PreviewSink
    >>> from glint.preview.png import PngSink
    >>>
    >>> ti.init(arch=ti.cpu)
    >>> sink = PreviewSink(inner=PngSink("out/cube"), gamma=2.2)
    >>> FrameScheduler().render(source, sink)
    >>> sink.wait_for_close()
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import numpy as np
import taichi as ti

from glint.core.color import Color
from glint.preview.display import ToneMapMethod, process_image_for_display

if TYPE_CHECKING:
    import numpy.typing as npt

    from glint.preview.sink import Sink


class PreviewSink:
    """Sink displaying finished frames in a Taichi GGUI window.

    Attributes:
        inner: Sink receiving every call as well, or None.
        show_window: Whether a window is opened; False keeps only the field.
        display_image: Taichi field of shape (width, height) holding the last
            finished frame as RGB, origin at the bottom left. None before init.
    """

    def __init__(
        self,
        inner: Sink | None = None,
        *,
        title: str = "glint preview",
        show_window: bool | None = None,
        tone_map: ToneMapMethod = "none",
        gamma: float = 2.2,
    ) -> None:
        self.inner = inner
        self._title = title
        self.show_window = self.is_display_available() if show_window is None else show_window
        self.tone_map: ToneMapMethod = tone_map
        self.gamma = gamma
        self.width = 0
        self.height = 0
        self.display_image: ti.MatrixField | None = None
        self._frame: npt.NDArray[np.float32] | None = None
        self._window: ti.ui.Window | None = None
        self._canvas: ti.ui.Canvas | None = None

    def init(self, width: int, height: int, frames: int) -> None:
        self.width = width
        self.height = height
        self._frame = np.zeros((height, width, 4), dtype=np.float32)
        self.display_image = ti.Vector.field(3, dtype=ti.f32, shape=(width, height))
        if self.inner is not None:
            self.inner.init(width, height, frames)

    def start_frame(self, frame: int) -> None:
        if self._frame is None:
            raise RuntimeError("PreviewSink was not initialized. Call init() first.")
        self._frame.fill(0.0)
        if self.inner is not None:
            self.inner.start_frame(frame)

    def set_sample(self, x: int, y: int, color: Color) -> None:
        if self._frame is None:
            raise RuntimeError("PreviewSink was not initialized. Call init() first.")
        self._frame[y, x] = color.to_array()
        if self.inner is not None:
            self.inner.set_sample(x, y, color)

    def finish_frame(self, frame: int) -> None:
        if self.inner is not None:
            self.inner.finish_frame(frame)
        self._update_field()
        if self.show_window:
            self._show()

    def _update_field(self) -> None:
        assert self._frame is not None and self.display_image is not None
        rgb = process_image_for_display(self._frame, tone_map=self.tone_map, gamma=self.gamma)[..., :3]
        # Images are (H, W) with y down, the field is (W, H) with y up
        self.display_image.from_numpy(np.ascontiguousarray(np.transpose(np.flipud(rgb), (1, 0, 2))))

    def _ensure_window(self) -> ti.ui.Window:
        if self._window is None:
            self._window = ti.ui.Window(name=self._title, res=(self.width, self.height), vsync=True)
            self._canvas = self._window.get_canvas()
        return self._window

    def _show(self) -> None:
        window = self._ensure_window()
        assert self._canvas is not None
        self._canvas.set_image(self.display_image)
        window.show()

    def is_running(self) -> bool:
        return self._window is not None and self._window.running

    def wait_for_close(self) -> None:
        """Keep showing the last frame until the window is closed."""
        if not self.show_window:
            return
        while self.is_running():
            self._show()

    def close(self) -> None:
        if self._window is not None:
            self._window.running = False

    @staticmethod
    def is_display_available() -> bool:
        """Return False for headless environments."""
        if os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY"):
            return True
        if os.name == "nt":
            return True
        if os.uname().sysname == "Darwin":
            return not os.environ.get("SSH_CONNECTION")
        return False
