"""ditherlab: palette quantization with error-diffusion dithering.

For debug logging, enable with:

    import logging
    logging.basicConfig(level=logging.DEBUG)
"""
from __future__ import annotations

import logging

from .dithers import Algorithm, ErrorKernel, KERNELS, apply_dither, closest, kernel_for
from .engine import dither_image, dither_many, render_image
from .errors import DitherError, InvalidBufferError, InvalidPaletteError
from .palettes import DEFAULT_PALETTE, PALETTES, Color, Palette, palette_names, resolve
from .settings import DitherSettings
from .utils.loader import load_image, save_image
from .utils.pixelate import downscale_box, working_size
from .utils.upscale import upscale_nearest

# Silent unless the application configures logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "Algorithm",
    "Color",
    "DEFAULT_PALETTE",
    "DitherError",
    "DitherSettings",
    "ErrorKernel",
    "InvalidBufferError",
    "InvalidPaletteError",
    "KERNELS",
    "PALETTES",
    "Palette",
    "apply_dither",
    "closest",
    "dither_image",
    "dither_many",
    "downscale_box",
    "kernel_for",
    "load_image",
    "palette_names",
    "render_image",
    "resolve",
    "save_image",
    "upscale_nearest",
    "working_size",
]
