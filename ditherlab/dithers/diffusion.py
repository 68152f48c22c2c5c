"""Sequential error-diffusion scan shared by every diffusing kernel.

The scan visits pixels row by row, left to right, with no serpentine
reversal. Each pixel is replaced by its nearest palette colour and the
signed difference is pushed onto not-yet-visited neighbours according to
the kernel. Receiving channels are clamped to [0, 255] and stored as
integers (rounded half to even) straight away, so later pixels read the
same values an 8-bit clamped canvas buffer would hold. Error aimed outside
the image is dropped.

This module uses an optional Numba-accelerated implementation for speed.
If Numba is unavailable, it falls back to a plain Python loop. Both produce
identical output.
"""
from __future__ import annotations

from typing import Sequence

import numpy as np

from ..palettes import Color, palette_array
from .kernels import ErrorKernel
from .quantize import closest_index

try:  # Optional acceleration
    from numba import njit
except ImportError:  # pragma: no cover - optional dependency
    njit = None  # type: ignore

Array = np.ndarray


def _has_numba() -> bool:
    return njit is not None


if njit is not None:  # pragma: no cover - requires numba at runtime
    @njit(cache=True, nogil=True)
    def _diffuse_jit(work: np.ndarray, palette: np.ndarray, offsets: np.ndarray, weights: np.ndarray) -> None:
        H, W, _ = work.shape
        P = palette.shape[0]
        T = offsets.shape[0]
        for y in range(H):
            for x in range(W):
                old0 = work[y, x, 0]
                old1 = work[y, x, 1]
                old2 = work[y, x, 2]

                best = 0
                best_dist = -1
                for i in range(P):
                    d0 = old0 - palette[i, 0]
                    d1 = old1 - palette[i, 1]
                    d2 = old2 - palette[i, 2]
                    dist = d0 * d0 + d1 * d1 + d2 * d2
                    if best_dist < 0 or dist < best_dist:
                        best = i
                        best_dist = dist

                new0 = palette[best, 0]
                new1 = palette[best, 1]
                new2 = palette[best, 2]
                work[y, x, 0] = new0
                work[y, x, 1] = new1
                work[y, x, 2] = new2
                err0 = old0 - new0
                err1 = old1 - new1
                err2 = old2 - new2

                for t in range(T):
                    nx = x + offsets[t, 0]
                    ny = y + offsets[t, 1]
                    if nx < 0 or nx >= W or ny < 0 or ny >= H:
                        continue
                    w = weights[t]
                    v0 = min(255.0, max(0.0, work[ny, nx, 0] + err0 * w))
                    v1 = min(255.0, max(0.0, work[ny, nx, 1] + err1 * w))
                    v2 = min(255.0, max(0.0, work[ny, nx, 2] + err2 * w))
                    work[ny, nx, 0] = int(np.rint(v0))
                    work[ny, nx, 1] = int(np.rint(v1))
                    work[ny, nx, 2] = int(np.rint(v2))


def _diffuse_python(work: list, width: int, height: int, palette: Sequence[Color], kernel: ErrorKernel) -> None:
    """Run the scan in place over a flat, row-major list of [r, g, b] lists."""
    taps = [(dx, dy, n / kernel.divisor) for dx, dy, n in kernel.taps]
    for y in range(height):
        row = y * width
        for x in range(width):
            old = work[row + x]
            new = palette[closest_index(old, palette)]
            err0 = old[0] - new[0]
            err1 = old[1] - new[1]
            err2 = old[2] - new[2]
            work[row + x] = [new[0], new[1], new[2]]

            for dx, dy, w in taps:
                nx = x + dx
                ny = y + dy
                if nx < 0 or nx >= width or ny < 0 or ny >= height:
                    continue
                px = work[ny * width + nx]
                px[0] = round(min(255.0, max(0.0, px[0] + err0 * w)))
                px[1] = round(min(255.0, max(0.0, px[1] + err1 * w)))
                px[2] = round(min(255.0, max(0.0, px[2] + err2 * w)))


def diffuse(rgb: Array, palette: Sequence[Color], kernel: ErrorKernel, accelerate: bool = True) -> Array:
    """Quantize an RGB buffer to ``palette`` with error diffusion.

    Parameters
    ----------
    rgb : np.ndarray
        Working buffer of shape (H, W, 3), dtype=uint8. Not modified.
    palette : sequence of Color
        Non-empty target palette.
    kernel : ErrorKernel
        Error distribution taps.
    accelerate : bool
        Use the Numba path when it is available.

    Returns
    -------
    np.ndarray
        New (H, W, 3) uint8 array whose pixels are all palette entries.
    """
    H, W, _ = rgb.shape

    if accelerate and _has_numba():  # Use accelerated path
        work = rgb.astype(np.int64)
        _diffuse_jit(work, palette_array(palette), kernel.offsets(), kernel.weights())  # type: ignore[name-defined]
        return work.astype(np.uint8)

    work = rgb.reshape(-1, 3).astype(np.int64).tolist()
    _diffuse_python(work, W, H, palette, kernel)
    return np.array(work, dtype=np.uint8).reshape(H, W, 3)


__all__ = ["diffuse"]
