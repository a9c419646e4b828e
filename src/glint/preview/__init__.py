"""Output sinks and display helpers.

Components:
    sink: Sink protocol (init, start_frame, set_sample, finish_frame)
    memory: MemorySink, frames kept as NumPy arrays
    png: PngSink, one numbered PNG file per frame (Pillow)
    display: Tone mapping, gamma and Matplotlib display
    interactive: PreviewSink, live Taichi GGUI window (``preview`` extra)

The interactive module is not imported here because it needs taichi.
"""

from .display import apply_gamma, process_image_for_display, tone_map_exposure, tone_map_reinhard
from .memory import MemorySink
from .png import PngSink
from .sink import Sink

__all__ = [
    "MemorySink",
    "PngSink",
    "Sink",
    "apply_gamma",
    "process_image_for_display",
    "tone_map_exposure",
    "tone_map_reinhard",
]
