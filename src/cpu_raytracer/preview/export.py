"""Image export utilities for rendered frame buffers.

This module converts linear colors to display-ready 8-bit channels and
writes finished frame buffers to files.

The 8-bit conversion is fixed so that output is reproducible byte for
byte: a square-root gamma transform (gamma 2.0), a clamp to [0, 0.999],
then scaling by 256 and truncating to an integer.

Supported formats:
    - PPM (plain "P3" text, row-major)
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from cpu_raytracer.preview.export import save_image
    >>> buffer = render_image(scene, config)
    >>> save_image(buffer, "out.ppm")
    >>> save_image(buffer, "out.png")
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import TextIO

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from cpu_raytracer.core.interval import Interval
from cpu_raytracer.core.vec3 import Color

# Channel range before scaling to [0, 255]
INTENSITY = Interval(0.000, 0.999)

MAX_CHANNEL_VALUE = 255


def linear_to_gamma(linear_component: float) -> float:
    """Apply the gamma 2.0 transform to one linear channel.

    Non-positive inputs map to 0.
    """
    if linear_component > 0.0:
        return math.sqrt(linear_component)
    return 0.0


def write_color(pixel_color: Color) -> tuple[int, int, int]:
    """Convert an averaged linear color to 8-bit RGB.

    Args:
        pixel_color: Linear color, normally with channels in [0, 1].

    Returns:
        Tuple of integer channels in [0, 255].
    """
    r = linear_to_gamma(pixel_color.x)
    g = linear_to_gamma(pixel_color.y)
    b = linear_to_gamma(pixel_color.z)

    return (
        int(256 * INTENSITY.clamp(r)),
        int(256 * INTENSITY.clamp(g)),
        int(256 * INTENSITY.clamp(b)),
    )


def write_ppm(buffer: npt.NDArray[np.uint8], stream: TextIO) -> None:
    """Write a frame buffer as a plain-text PPM image.

    The header is the format tag, ``<width> <height>`` and the maximum
    channel value, followed by one ``r g b`` line per pixel, rows top to
    bottom and columns left to right.

    Args:
        buffer: Frame buffer of shape (height, width, 3).
        stream: Text stream to write to.
    """
    height, width, _ = buffer.shape
    stream.write(f"P3\n{width} {height}\n{MAX_CHANNEL_VALUE}\n")
    for row in buffer:
        stream.write("".join(f"{r} {g} {b}\n" for r, g, b in row.tolist()))


def save_ppm(buffer: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Save a frame buffer as a plain-text PPM file."""
    with open(filepath, "w", encoding="ascii", newline="\n") as f:
        write_ppm(buffer, f)


def save_png(buffer: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Save a frame buffer as an 8-bit RGB PNG file.

    The buffer already holds gamma-corrected 8-bit channels, so no further
    processing is applied.
    """
    # (H, W, 3) uint8 arrays are read as RGB
    pil_image = PILImage.fromarray(np.ascontiguousarray(buffer, dtype=np.uint8))
    pil_image.save(filepath)


def save_image(buffer: npt.NDArray[np.uint8], filepath: str | Path) -> Path:
    """Save a frame buffer, choosing the format from the file suffix.

    Args:
        buffer: Frame buffer of shape (height, width, 3).
        filepath: Output path ending in .ppm or .png.

    Returns:
        The path written.

    Raises:
        ValueError: If the suffix is not a supported format.
    """
    path = Path(filepath)
    suffix = path.suffix.lower()
    if suffix == ".ppm":
        save_ppm(buffer, path)
    elif suffix == ".png":
        save_png(buffer, path)
    else:
        raise ValueError(f"Unsupported image format '{suffix}' (expected .ppm or .png)")
    return path


def compute_rmse(
    image_a: npt.NDArray[np.generic],
    image_b: npt.NDArray[np.generic],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
