"""Sink capability contract.

A sink receives the rendered output: one ``init`` per render, then for each
frame ``start_frame``, one ``set_sample`` per pixel and ``finish_frame``.
``set_sample`` calls arrive from worker threads in no particular order but
are serialized by the scheduler's sink lock, so implementations need no
locking of their own. Any method may raise (typically ``OSError``); the
scheduler treats that as fatal for the whole render.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from glint.core.color import Color


class Sink(Protocol):
    """Output boundary receiving pixel samples and frame lifecycle calls."""

    def init(self, width: int, height: int, frames: int) -> None: ...

    def start_frame(self, frame: int) -> None: ...

    def set_sample(self, x: int, y: int, color: Color) -> None: ...

    def finish_frame(self, frame: int) -> None: ...
