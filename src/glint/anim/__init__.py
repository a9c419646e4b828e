"""Animation module.

Animations produce per-frame values for positions, rotations and sizes. They
are consumed by cameras, objects and lights during ``init(frame)``.
"""

from .animation import Animation, FuncAnimation, LinearAnimation, SequenceAnimation

__all__ = ["Animation", "LinearAnimation", "SequenceAnimation", "FuncAnimation"]
