"""Camera capability contract."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from glint.core.ray import Ray, Vec3


class Camera(Protocol):
    """Generates primary rays for pixel positions.

    ``init(frame)`` runs once per frame on the scheduling thread;
    ``make_ray`` is then called concurrently from worker threads and must
    not mutate the camera.
    """

    def init(self, frame: int) -> None: ...

    def make_ray(self, x: float, y: float) -> Ray:
        """Return the ray through pixel coordinates (x, y).

        Pixel (0, 0) is the top-left corner; (x + 0.5, y + 0.5) is the center
        of pixel (x, y).
        """
        ...

    def get_direction(self) -> Vec3:
        """Return the unit viewing direction."""
        ...
