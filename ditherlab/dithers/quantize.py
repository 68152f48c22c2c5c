"""Nearest-colour lookup against a fixed palette.

Distance is squared Euclidean distance in RGB with no perceptual weighting.
When two palette entries are equally close the earlier one wins.
"""
from __future__ import annotations

from typing import Sequence

import numpy as np

from ..palettes import Color, palette_array

Array = np.ndarray

# Pixels per block in quantize_nearest; bounds the (N, P) distance matrix.
_CHUNK = 1 << 16


def closest_index(observed: Sequence[int], palette: Sequence[Color]) -> int:
    """Index of the palette entry nearest to ``observed``."""
    r, g, b = int(observed[0]), int(observed[1]), int(observed[2])
    best = 0
    best_dist = -1
    for i, (pr, pg, pb) in enumerate(palette):
        dr = r - pr
        dg = g - pg
        db = b - pb
        dist = dr * dr + dg * dg + db * db
        if best_dist < 0 or dist < best_dist:
            best = i
            best_dist = dist
    return best


def closest(observed: Sequence[int], palette: Sequence[Color]) -> Color:
    """Return the palette colour nearest to ``observed``.

    Parameters
    ----------
    observed : sequence of int
        RGB triple (extra channels are ignored).
    palette : sequence of Color
        Non-empty list of candidate colours.

    Returns
    -------
    Color
        The first palette entry with minimal squared distance.
    """
    if not palette:
        raise ValueError("palette must not be empty")
    return tuple(palette[closest_index(observed, palette)])  # type: ignore[return-value]


def quantize_nearest(rgb: Array, palette: Sequence[Color]) -> Array:
    """Map every pixel of an (H, W, 3) buffer to its nearest palette colour.

    No error is propagated, so pixels are independent and the lookup is
    vectorised. ``argmin`` returns the first minimum, which keeps the same
    tie-break as ``closest``.
    """
    H, W, _ = rgb.shape
    pal = palette_array(palette)
    flat = rgb.reshape(-1, 3).astype(np.int64)
    index = np.empty(flat.shape[0], dtype=np.intp)

    for start in range(0, flat.shape[0], _CHUNK):
        block = flat[start:start + _CHUNK]
        dist = np.zeros((block.shape[0], pal.shape[0]), dtype=np.int64)
        for c in range(3):
            d = block[:, c, None] - pal[None, :, c]
            dist += d * d
        index[start:start + _CHUNK] = np.argmin(dist, axis=1)

    return pal[index].reshape(H, W, 3).astype(np.uint8)


__all__ = ["closest", "closest_index", "quantize_nearest"]
