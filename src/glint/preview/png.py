"""PNG frame sink.

PngSink writes one RGBA PNG per finished frame, named
``<file_name><frame:04d>.png``. A trailing ``.png`` on ``file_name`` is
stripped first, so ``"out/cube.png"`` yields ``out/cube0000.png``,
``out/cube0001.png`` and so on. The target directory must exist; I/O errors
propagate to the scheduler and abort the render.

By default samples are stored exactly as ``Color.to_rgba8`` converts them
(clamped, truncated). Passing a tone map or a gamma other than 1.0 keeps a
float buffer instead and runs it through ``process_image_for_display`` when
the frame is written.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from glint.core.color import Color
from glint.preview.display import ToneMapMethod, image_to_uint8, process_image_for_display

logger = logging.getLogger(__name__)


class PngSink:
    """Sink writing each frame to a numbered PNG file.

    Attributes:
        file_name: Output path prefix (without the ``.png`` suffix).
        written: Paths of the files written so far.
    """

    def __init__(
        self,
        file_name: str | Path,
        *,
        tone_map: ToneMapMethod = "none",
        gamma: float = 1.0,
        exposure: float = 1.0,
    ) -> None:
        name = str(file_name)
        if name.lower().endswith(".png"):
            name = name[: -len(".png")]
        self.file_name = name
        self.tone_map: ToneMapMethod = tone_map
        self.gamma = gamma
        self.exposure = exposure
        self.written: list[Path] = []
        self._width = 0
        self._height = 0
        self._buffer8: npt.NDArray[np.uint8] | None = None
        self._buffer: npt.NDArray[np.float32] | None = None

    @property
    def _post_process(self) -> bool:
        return self.tone_map != "none" or self.gamma != 1.0

    def frame_path(self, frame: int) -> Path:
        return Path(f"{self.file_name}{frame:04d}.png")

    def init(self, width: int, height: int, frames: int) -> None:
        self._width = width
        self._height = height
        self.written.clear()
        if self._post_process:
            self._buffer = np.zeros((height, width, 4), dtype=np.float32)
            self._buffer8 = None
        else:
            self._buffer8 = np.zeros((height, width, 4), dtype=np.uint8)
            self._buffer = None
        logger.debug("PngSink prepared %dx%d buffer for %d frame(s)", width, height, frames)

    def start_frame(self, frame: int) -> None:
        if self._buffer is None and self._buffer8 is None:
            raise RuntimeError("PngSink was not initialized. Call init() first.")
        if self._buffer is not None:
            self._buffer.fill(0.0)
        if self._buffer8 is not None:
            self._buffer8.fill(0)

    def set_sample(self, x: int, y: int, color: Color) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Sample ({x}, {y}) outside {self._width}x{self._height} image")
        if self._buffer is not None:
            self._buffer[y, x] = color.to_array()
        elif self._buffer8 is not None:
            self._buffer8[y, x] = color.to_rgba8()
        else:
            raise RuntimeError("PngSink was not initialized. Call init() first.")

    def _encoded(self) -> npt.NDArray[np.uint8]:
        if self._buffer is not None:
            processed = process_image_for_display(
                self._buffer, tone_map=self.tone_map, gamma=self.gamma, exposure=self.exposure
            )
            return image_to_uint8(processed)
        if self._buffer8 is None:
            raise RuntimeError("PngSink was not initialized. Call init() first.")
        return self._buffer8

    def finish_frame(self, frame: int) -> None:
        path = self.frame_path(frame)
        PILImage.fromarray(np.ascontiguousarray(self._encoded())).save(path, format="PNG")
        self.written.append(path)
        logger.info("Wrote %s", path)
