"""Exception types raised by the renderer.

Numeric degeneracy in intersection math is never an error: unsolvable
systems are reported as "no hit". The exceptions here cover misuse of the
per-frame lifecycle and failures that abort a render.
"""


class GlintError(Exception):
    """Base class for renderer errors."""


class NotInitializedError(GlintError, RuntimeError):
    """Geometry or rays were requested before ``init(frame)`` ran."""

    def __init__(self, what: str) -> None:
        super().__init__(f"{what} was not initialized; call init(frame) first")
        self.what = what


class RenderError(GlintError, RuntimeError):
    """A pixel task or sink operation failed and the render was aborted.

    Attributes:
        frame: The frame being rendered when the failure happened, or None if
            the sink failed during setup.
    """

    def __init__(self, message: str, frame: int | None = None) -> None:
        super().__init__(message)
        self.frame = frame
