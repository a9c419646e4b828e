"""Camera module for view and ray generation.

Components:
    base: The Camera capability contract
    perspective: Perspective (pinhole) camera with animated position/rotation

Camera responsibilities:
    - Recompute per-frame working data in init(frame)
    - Map pixel coordinates (x, y) to world-space rays, read-only
    - Report the viewing direction

Pixel coordinates grow right and down: (0, 0) is the top-left corner of the
image and (x + 0.5, y + 0.5) is the center of pixel (x, y).
"""

from .base import Camera
from .perspective import PerspectiveCamera

__all__ = ["Camera", "PerspectiveCamera"]
