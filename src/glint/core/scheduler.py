"""Frame-sequential, pixel-parallel render scheduling.

The FrameScheduler drives a render through the per-frame state machine

    IDLE -> (INITIALIZING -> DISPATCHING -> FINALIZING) per frame -> DONE

- INITIALIZING runs on the calling thread: ``sink.start_frame``, then
  ``camera.init(frame)`` and ``scene.init(frame)``. All animated working data
  is rebuilt before any worker looks at the camera or scene.
- DISPATCHING submits one task per pixel to a fixed-size thread pool. Each
  task resolves its pixel and writes it to the sink while holding the single
  sink lock. Camera and scene are only read during this phase.
- FINALIZING waits for every pixel task of the frame and then calls
  ``sink.finish_frame``.

Frames never overlap. Any failure in a sink call, a per-frame ``init``, a
pixel task or the progress callback aborts the render. Outstanding pixel
tasks are cancelled, no further frame starts, and a RenderError chaining the
original exception is raised.

Example:
    >>> from glint.core.scheduler import FrameScheduler
    >>> from glint.preview.png import PngSink
    >>> scheduler = FrameScheduler(workers=8)
    >>> stats = scheduler.render(source, PngSink("out/frame.png"))
    >>> print(f"{stats.frames_rendered} frames in {stats.total_time:.2f}s")
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, TypeVar

from glint.core.errors import RenderError
from glint.core.integrator import render_pixel

if TYPE_CHECKING:
    from glint.preview.sink import Sink
    from glint.scene.scene import RenderSource

logger = logging.getLogger(__name__)

# Default size of the pixel worker pool
DEFAULT_WORKERS = 8

# Callback receives (frames_finished, total_frames)
ProgressCallback = Callable[[int, int], None]

R = TypeVar("R")


class RenderState(Enum):
    """Lifecycle state of a FrameScheduler."""

    IDLE = "idle"
    INITIALIZING = "initializing"
    DISPATCHING = "dispatching"
    FINALIZING = "finalizing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class RenderStats:
    """Timing summary of a finished render.

    Attributes:
        frames_rendered: Number of frames passed to ``finish_frame``.
        frame_times: Wall-clock seconds spent on each frame.
    """

    frames_rendered: int = 0
    frame_times: list[float] = field(default_factory=list)

    @property
    def total_time(self) -> float:
        return sum(self.frame_times)


class FrameScheduler:
    """Renders every frame of a RenderSource into a Sink.

    Attributes:
        workers: Number of pixel worker threads.
        progress: Optional callback invoked after each finished frame.
    """

    def __init__(self, workers: int = DEFAULT_WORKERS, progress: ProgressCallback | None = None) -> None:
        if workers < 1:
            raise ValueError(f"Worker count must be at least 1, got {workers}")
        self.workers = workers
        self.progress = progress
        self._state = RenderState.IDLE
        self._state_lock = threading.Lock()

    @property
    def state(self) -> RenderState:
        """The current lifecycle state."""
        with self._state_lock:
            return self._state

    def _enter(self, state: RenderState) -> None:
        with self._state_lock:
            self._state = state
        logger.debug("Scheduler state: %s", state.value)

    def _fail(self, message: str, frame: int | None, exc: BaseException) -> RenderError:
        self._enter(RenderState.FAILED)
        logger.error("%s: %s", message, exc)
        return RenderError(message, frame)

    def _sequential(self, message: str, frame: int | None, fn: Callable[..., R], *args: object) -> R:
        """Run a scheduling-thread step, converting failures into RenderError."""
        try:
            return fn(*args)
        except Exception as exc:
            raise self._fail(message, frame, exc) from exc

    def render(self, source: RenderSource, sink: Sink) -> RenderStats:
        """Render all frames of the source into the sink.

        Args:
            source: Scene, camera and parameters to render.
            sink: Destination for pixel samples and frame lifecycle calls.

        Returns:
            Timing statistics for the render.

        Raises:
            RenderError: If any sink call, per-frame init, pixel task or progress
                callback fails. The original exception is available as ``__cause__``.
        """
        output = source.output
        stats = RenderStats()
        sink_lock = threading.Lock()

        self._sequential("Sink initialization failed", None, sink.init, output.width, output.height, output.frames)
        logger.info(
            "Rendering %d frame(s) at %dx%d with %d workers",
            output.frames,
            output.width,
            output.height,
            self.workers,
        )

        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="glint-pixel") as pool:
            for frame in range(output.frames):
                start = time.perf_counter()

                self._enter(RenderState.INITIALIZING)
                with sink_lock:
                    self._sequential(f"Starting frame {frame} failed", frame, sink.start_frame, frame)
                self._sequential(f"Camera init for frame {frame} failed", frame, source.camera.init, frame)
                self._sequential(f"Scene init for frame {frame} failed", frame, source.scene.init, frame)

                self._enter(RenderState.DISPATCHING)
                self._dispatch_frame(pool, source, sink, sink_lock, frame)

                self._enter(RenderState.FINALIZING)
                with sink_lock:
                    self._sequential(f"Finishing frame {frame} failed", frame, sink.finish_frame, frame)

                elapsed = time.perf_counter() - start
                stats.frames_rendered += 1
                stats.frame_times.append(elapsed)
                logger.info("Rendered frame %d in %.3fs", frame + 1, elapsed)

                if self.progress is not None:
                    self._sequential(
                        f"Progress callback for frame {frame} failed",
                        frame,
                        self.progress,
                        frame + 1,
                        output.frames,
                    )

        self._enter(RenderState.DONE)
        return stats

    def _dispatch_frame(
        self,
        pool: ThreadPoolExecutor,
        source: RenderSource,
        sink: Sink,
        sink_lock: threading.Lock,
        frame: int,
    ) -> None:
        """Fan out one task per pixel and wait for all of them."""
        camera = source.camera
        scene = source.scene
        params = source.params

        def shade(x: int, y: int) -> None:
            color = render_pixel(camera, scene, params, x, y)
            with sink_lock:
                sink.set_sample(x, y, color)

        futures = [
            pool.submit(shade, x, y)
            for y in range(source.output.height)
            for x in range(source.output.width)
        ]
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)

        failed = next((f for f in done if f.exception() is not None), None)
        if failed is None:
            return

        for future in pending:
            future.cancel()
        # Tasks already running finish before the frame is abandoned
        wait(pending)
        exc = failed.exception()
        assert exc is not None
        raise self._fail(f"Pixel task failed in frame {frame}", frame, exc) from exc
