"""Pixelation by downsampling before quantization.

The image is shrunk by ``pixel_size`` with area (box) averaging, dithered at
that reduced resolution, and later blown back up with nearest-neighbour
sampling so every working pixel becomes a crisp block.
"""
from __future__ import annotations

import math
from typing import Tuple

import numpy as np
from PIL import Image

Array = np.ndarray


def working_size(width: int, height: int, pixel_size: float) -> Tuple[int, int]:
    """Return the (width, height) the image is dithered at.

    ``floor(dimension / pixel_size)``, never below 1. ``pixel_size`` may be
    fractional.
    """
    if not math.isfinite(pixel_size) or pixel_size < 1:
        raise ValueError("pixel_size must be a finite number >= 1")
    w = max(1, int(math.floor(width / pixel_size)))
    h = max(1, int(math.floor(height / pixel_size)))
    return w, h


def downscale_box(arr: Array, pixel_size: float) -> Array:
    """Downscale an RGB/RGBA image by ``pixel_size`` using box averaging.

    Parameters
    ----------
    arr : np.ndarray
        Input array of shape (H, W, 3) or (H, W, 4), dtype=uint8.
    pixel_size : float
        Downscale factor (>=1).

    Returns
    -------
    np.ndarray
        Array of shape (floor(H/pixel_size), floor(W/pixel_size), C), each
        dimension at least 1. A copy when the size does not change.
    """
    if not isinstance(arr, np.ndarray) or arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise ValueError("arr must be an image with shape (H, W, 3) or (H, W, 4)")

    H, W, _ = arr.shape
    target_w, target_h = working_size(W, H, pixel_size)
    if (target_w, target_h) == (W, H):
        return arr.copy()

    # Colour and alpha are averaged independently; an RGBA resize would
    # premultiply and turn transparent pixels black.
    bands = []
    for c in range(arr.shape[2]):
        band = Image.fromarray(np.ascontiguousarray(arr[:, :, c], dtype=np.uint8))
        band = band.resize((target_w, target_h), resample=Image.Resampling.BOX)
        bands.append(np.array(band, dtype=np.uint8))
    return np.stack(bands, axis=2)
