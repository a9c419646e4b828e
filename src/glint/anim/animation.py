"""Frame-indexed animations for object, camera and light parameters.

An animation maps a frame index to a value. Objects that accept animations
evaluate them in ``init(frame)`` and store the result in their working data;
the renderer itself never calls an animation.

Example:
    >>> from glint.anim.animation import LinearAnimation
    >>> spin = LinearAnimation(initial=(0.0, 0.0, 0.0), delta=(0.0, 0.1, 0.0))
    >>> spin.next_frame(10)
    array([0., 1., 0.])
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Generic, Protocol, TypeVar

import numpy as np

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class Animation(Protocol[T_co]):
    """Capability contract: value of an animated parameter at a frame."""

    def next_frame(self, frame: int) -> T_co: ...


class LinearAnimation:
    """Linear interpolation ``initial + delta * frame``.

    Works for floats and for 3-vectors; vector inputs are converted to
    float64 arrays.
    """

    def __init__(self, initial: float | Sequence[float], delta: float | Sequence[float]) -> None:
        if isinstance(initial, (int, float)) and isinstance(delta, (int, float)):
            self._scalar = True
            self.initial: float | np.ndarray = float(initial)
            self.delta: float | np.ndarray = float(delta)
        else:
            self._scalar = False
            self.initial = np.asarray(initial, dtype=np.float64)
            self.delta = np.asarray(delta, dtype=np.float64)
            if self.initial.shape != self.delta.shape:
                raise ValueError(
                    f"initial and delta shapes differ: {self.initial.shape} vs {self.delta.shape}"
                )

    def next_frame(self, frame: int) -> float | np.ndarray:
        if self._scalar:
            return self.initial + self.delta * frame
        return self.initial + self.delta * float(frame)


class SequenceAnimation(Generic[T]):
    """Explicit per-frame values; frames past the end hold the last value."""

    def __init__(self, values: Sequence[T]) -> None:
        if len(values) == 0:
            raise ValueError("SequenceAnimation requires at least one value")
        self.values = list(values)

    def next_frame(self, frame: int) -> T:
        return self.values[min(frame, len(self.values) - 1)]


class FuncAnimation(Generic[T]):
    """Animation computed by an arbitrary function of the frame index."""

    def __init__(self, fn: Callable[[int], T]) -> None:
        self.fn = fn

    def next_frame(self, frame: int) -> T:
        return self.fn(frame)
