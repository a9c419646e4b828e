"""Tone mapping, gamma correction and Matplotlib display for rendered frames.

Rendered frames are float RGBA arrays of shape (H, W, 4) in linear space.
The functions here operate on the RGB channels and leave alpha untouched, so
they accept both (H, W, 3) and (H, W, 4) images.

Example:
    >>> from glint.preview.display import process_image_for_display, show_frame
    >>> shown = process_image_for_display(sink.frames[0], tone_map="reinhard")
    >>> show_frame(sink.frames[0], gamma=2.2, title="Frame 0")
"""

from __future__ import annotations

from typing import Literal

import numpy as np
import numpy.typing as npt

ToneMapMethod = Literal["none", "reinhard", "exposure"]


def _split_alpha(
    image: npt.NDArray[np.floating],
) -> tuple[npt.NDArray[np.float32], npt.NDArray[np.float32] | None]:
    if image.ndim != 3 or image.shape[2] not in (3, 4):
        raise ValueError(f"Expected an (H, W, 3) or (H, W, 4) image, got shape {image.shape}")
    rgb = image[..., :3].astype(np.float32)
    alpha = image[..., 3:].astype(np.float32) if image.shape[2] == 4 else None
    return rgb, alpha


def _join_alpha(
    rgb: npt.NDArray[np.float32], alpha: npt.NDArray[np.float32] | None
) -> npt.NDArray[np.float32]:
    if alpha is None:
        return rgb
    return np.concatenate([rgb, alpha], axis=2)


def tone_map_reinhard(image: npt.NDArray[np.float32]) -> npt.NDArray[np.float32]:
    """Apply Reinhard tone mapping ``c / (1 + c)`` to the color channels."""
    rgb, alpha = _split_alpha(image)
    rgb = np.maximum(rgb, 0.0)
    return _join_alpha((rgb / (1.0 + rgb)).astype(np.float32), alpha)


def tone_map_exposure(
    image: npt.NDArray[np.float32],
    exposure: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Apply exposure tone mapping ``1 - exp(-c * exposure)``.

    Args:
        image: Linear image of shape (H, W, 3) or (H, W, 4).
        exposure: Higher values brighten the image.
    """
    rgb, alpha = _split_alpha(image)
    rgb = np.maximum(rgb, 0.0)
    return _join_alpha((1.0 - np.exp(-rgb * exposure)).astype(np.float32), alpha)


def apply_gamma(
    image: npt.NDArray[np.float32],
    gamma: float = 2.2,
) -> npt.NDArray[np.float32]:
    """Gamma-encode the color channels (``c ** (1 / gamma)``).

    A gamma of 1.0 returns the image unchanged.
    """
    if gamma <= 0.0:
        raise ValueError(f"Gamma must be positive, got {gamma}")
    if gamma == 1.0:
        return image
    rgb, alpha = _split_alpha(image)
    # Clamp first, negative values would produce NaN
    rgb = np.power(np.clip(rgb, 0.0, 1.0), 1.0 / gamma)
    return _join_alpha(rgb.astype(np.float32), alpha)


def process_image_for_display(
    image: npt.NDArray[np.float32],
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Run the display pipeline: tone mapping, gamma, clamp to [0, 1].

    Args:
        image: Linear image of shape (H, W, 3) or (H, W, 4).
        tone_map: "none", "reinhard" or "exposure".
        gamma: Gamma encoding value (2.2 for sRGB, 1.0 to keep linear).
        exposure: Exposure for the "exposure" tone map.

    Returns:
        A new float32 image of the same shape with all channels in [0, 1].

    Raises:
        ValueError: If the tone mapping method is unknown.
    """
    result = np.array(image, dtype=np.float32, copy=True)

    if tone_map == "reinhard":
        result = tone_map_reinhard(result)
    elif tone_map == "exposure":
        result = tone_map_exposure(result, exposure)
    elif tone_map != "none":
        raise ValueError(f"Unknown tone mapping method: {tone_map}")

    result = apply_gamma(result, gamma)
    return np.clip(result, 0.0, 1.0).astype(np.float32)


def image_to_uint8(image: npt.NDArray[np.float32]) -> npt.NDArray[np.uint8]:
    """Convert a [0, 1] float image to 8-bit channels, truncating like Color.to_rgba8."""
    return (np.clip(image, 0.0, 1.0) * 255.0).astype(np.uint8)


def show_frame(
    image: npt.NDArray[np.float32],
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 8),
    block: bool = True,
) -> None:
    """Display a rendered frame in a Matplotlib figure.

    Requires the ``preview`` extra (matplotlib).
    """
    import matplotlib.pyplot as plt

    shown = process_image_for_display(image, tone_map=tone_map, gamma=gamma, exposure=exposure)

    _, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(shown)
    ax.axis("off")

    if title is None:
        height, width = shown.shape[:2]
        title = f"Frame {width}x{height}"
        if tone_map != "none":
            title += f" ({tone_map})"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
