"""Camera module for view and ray generation.

Components:
    thin_lens: Camera with depth of field (a pinhole camera when the
        defocus angle is 0)

Camera responsibilities:
    - Derive viewport geometry from look-at positioning and field of view
    - Apply anti-aliasing jitter for sub-pixel sampling
    - Sample ray origins on the lens for depth of field
    - Average samples into gamma-corrected 8-bit pixels
"""

from .thin_lens import CameraConfig, RowCallback, ThinLensCamera

__all__ = [
    "CameraConfig",
    "ThinLensCamera",
    "RowCallback",
]
