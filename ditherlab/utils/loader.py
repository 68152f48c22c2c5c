"""Decode and encode image files for the engine.

Files are read into RGBA ``uint8`` buffers, the form ``dither_image``
consumes, and dithered buffers are written back out. Formats without an
alpha channel get an RGB copy on save.
"""
from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

Array = np.ndarray

_NO_ALPHA_SUFFIXES = (".jpg", ".jpeg", ".bmp")


def load_image(path: Union[str, Path]) -> Array:
    """Read ``path`` into an (H, W, 4) RGBA uint8 buffer.

    Palette, greyscale and RGB files are expanded to RGBA; missing alpha
    becomes 255.
    """
    with Image.open(Path(path)) as im:
        return np.array(im.convert("RGBA"), dtype=np.uint8)


def save_image(arr: Array, path: Union[str, Path]) -> None:
    """Write a dithered buffer to ``path``.

    Parameters
    ----------
    arr : np.ndarray
        (H, W, 3) RGB or (H, W, 4) RGBA buffer, dtype=uint8.
    path : str | Path
        Destination; the extension selects the encoder.
    """
    if not isinstance(arr, np.ndarray):
        raise TypeError("arr must be a NumPy array")
    if arr.dtype != np.uint8:
        raise TypeError("arr must have dtype=uint8")
    if arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise ValueError("arr must have shape (H, W, 3) or (H, W, 4)")

    dest = Path(path)
    im = Image.fromarray(np.ascontiguousarray(arr))
    if im.mode == "RGBA" and dest.suffix.lower() in _NO_ALPHA_SUFFIXES:
        im = im.convert("RGB")
    im.save(dest)
