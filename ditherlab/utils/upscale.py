"""Nearest-neighbor upscaling for NumPy arrays."""
from __future__ import annotations

import numpy as np

Array = np.ndarray


def upscale_nearest(arr: Array, height: int, width: int) -> Array:
    """Resize an image to (height, width) via nearest-neighbor, no smoothing.

    Output pixel ``(y, x)`` takes source pixel
    ``(floor(y * H / height), floor(x * W / width))`` so block edges stay hard.

    Parameters
    ----------
    arr : np.ndarray
        Input array of shape (H, W, C).
    height : int
        Target height (>=1).
    width : int
        Target width (>=1).

    Returns
    -------
    np.ndarray
        Resized image with the input dtype.
    """
    if not isinstance(arr, np.ndarray) or arr.ndim != 3:
        raise ValueError("arr must be an image with shape (H, W, C)")
    if height < 1 or width < 1:
        raise ValueError("height and width must be >= 1")

    H, W, _ = arr.shape
    if H == height and W == width:
        return arr.copy()

    yi = (np.arange(height, dtype=np.int64) * H) // height
    xi = (np.arange(width, dtype=np.int64) * W) // width
    return arr[yi[:, None], xi[None, :], :]
