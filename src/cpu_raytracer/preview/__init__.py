"""Preview module for color conversion and image output.

Components:
    export: Gamma correction, PPM/PNG export and image comparison

Example:
    >>> from cpu_raytracer.preview import save_image
    >>> save_image(buffer, "output.png")
"""

from cpu_raytracer.preview.export import (
    INTENSITY,
    compute_rmse,
    linear_to_gamma,
    save_image,
    save_png,
    save_ppm,
    write_color,
    write_ppm,
)

__all__ = [
    "INTENSITY",
    "linear_to_gamma",
    "write_color",
    "write_ppm",
    "save_ppm",
    "save_png",
    "save_image",
    "compute_rmse",
]
