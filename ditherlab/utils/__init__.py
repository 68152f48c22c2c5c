"""Utility functions for ditherlab.

Modules:
- loader: Load/save Pillow <-> NumPy conversion utilities.
- pixelate: Working-size computation and box-filter downscaling.
- upscale: Nearest-neighbor upscaling back to display size.
"""
from .loader import load_image, save_image
from .pixelate import downscale_box, working_size
from .upscale import upscale_nearest

__all__ = [
    "load_image",
    "save_image",
    "downscale_box",
    "working_size",
    "upscale_nearest",
]
