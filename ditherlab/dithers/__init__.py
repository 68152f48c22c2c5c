"""Dithering algorithms and a unified entry-point for application.

Exported API
------------
- apply_dither(rgb, algorithm, palette)
- Algorithm, ErrorKernel, KERNELS, kernel_for
- closest, quantize_nearest

Supported methods
-----------------
- "none"     : nearest palette colour per pixel, no error diffusion
- "floyd"    : Floyd-Steinberg error diffusion
- "atkinson" : Atkinson error diffusion (diffuses 6/8 of the error)
- "stucki"   : Stucki error diffusion
- "burkes"   : Burkes error diffusion
- "sierra"   : Sierra-3 error diffusion
- "jarvis"   : Jarvis-Judice-Ninke error diffusion

Implementation notes
--------------------
All dithers operate on NumPy arrays and quantize to an explicit palette.
Every diffusing method runs the same sequential scan; only the kernel
table differs, so dispatch is a single lookup in ``KERNELS``.
"""
from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from ..palettes import Color
from .diffusion import diffuse
from .kernels import KERNELS, Algorithm, ErrorKernel, kernel_for
from .quantize import closest, closest_index, quantize_nearest

Array = np.ndarray


def apply_dither(
    rgb: Array,
    algorithm: Union[Algorithm, str],
    palette: Sequence[Color],
) -> Array:
    """Apply the selected dithering method to a working buffer.

    Parameters
    ----------
    rgb : np.ndarray
        RGB image array of shape (H, W, 3), dtype=uint8, already at the
        working resolution.
    algorithm : Algorithm | str
        Dithering method. Unknown identifiers fall back to ``"none"``.
    palette : sequence of Color
        Resolved, non-empty target palette.

    Returns
    -------
    np.ndarray
        Quantized (H, W, 3) uint8 array; every pixel is a palette entry.
    """
    if not isinstance(rgb, np.ndarray) or rgb.ndim != 3 or rgb.shape[2] != 3:
        raise ValueError("rgb must be an RGB array with shape (H, W, 3)")

    kernel = kernel_for(algorithm)
    if kernel is None:
        return quantize_nearest(rgb, palette)
    return diffuse(rgb, palette, kernel)


__all__ = [
    "Algorithm",
    "ErrorKernel",
    "KERNELS",
    "apply_dither",
    "closest",
    "closest_index",
    "diffuse",
    "kernel_for",
    "quantize_nearest",
]
