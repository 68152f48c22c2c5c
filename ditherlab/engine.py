"""High-level entry points: buffer in, quantized buffer out.

``dither_image`` is the engine proper. It validates the buffer, resolves the
palette and algorithm (both with forgiving fallbacks), shrinks the image to
its working size and runs the scan. The result has the working size, not the
original one; ``render_image`` adds the nearest-neighbour blow-up that a
display or export step needs.

Calls share no state, so independent images can be processed in parallel
(``dither_many``). A single image is always scanned sequentially.
"""
from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional, Sequence, Union

import numpy as np

from .dithers import Algorithm, apply_dither
from .errors import InvalidBufferError
from .palettes import coerce_palette
from .utils.pixelate import downscale_box
from .utils.upscale import upscale_nearest

logger = logging.getLogger(__name__)

Array = np.ndarray
PaletteSpec = Union[str, Sequence[Sequence[int]]]


def _validate_buffer(image: Array) -> Array:
    if not isinstance(image, np.ndarray):
        raise InvalidBufferError("image must be a NumPy array")
    if image.ndim != 3 or image.shape[2] not in (3, 4):
        raise InvalidBufferError(f"image must have shape (H, W, 3) or (H, W, 4), got {image.shape}")
    if image.shape[0] < 1 or image.shape[1] < 1:
        raise InvalidBufferError(f"image has zero area: {image.shape[1]}x{image.shape[0]}")
    if image.dtype != np.uint8:
        image = np.clip(np.rint(image.astype(np.float64)), 0, 255).astype(np.uint8)
    return image


def dither_image(
    image: Array,
    algorithm: Union[Algorithm, str] = Algorithm.FLOYD_STEINBERG,
    palette: PaletteSpec = "bw",
    pixel_size: float = 1.0,
) -> Array:
    """Quantize an image to a palette, optionally pixelating it first.

    Parameters
    ----------
    image : np.ndarray
        Decoded image of shape (H, W, 3) or (H, W, 4). Not modified.
    algorithm : Algorithm | str
        Dithering method; unknown identifiers mean plain nearest-colour
        mapping.
    palette : str | sequence of RGB triples
        Registered palette name (unknown names fall back to ``bw``) or an
        explicit colour list.
    pixel_size : float
        Downsample factor (>=1). The output is
        ``floor(W / pixel_size) x floor(H / pixel_size)``, at least 1x1.

    Returns
    -------
    np.ndarray
        New (h, w, 4) uint8 RGBA array at the working size. Every RGB triple
        is a palette entry and alpha is 255.
    """
    image = _validate_buffer(image)
    try:
        size = float(pixel_size)
    except (TypeError, ValueError):
        raise ValueError(f"pixel_size must be a number, got {pixel_size!r}") from None
    if not math.isfinite(size) or size < 1:
        raise ValueError(f"pixel_size must be a finite number >= 1, got {pixel_size!r}")

    colors = coerce_palette(palette)
    method = Algorithm.parse(algorithm)

    small = downscale_box(image, size)
    h, w, _ = small.shape
    logger.debug(
        "Dithering %dx%d (from %dx%d) with %s against %d colours",
        w, h, image.shape[1], image.shape[0], method.value, len(colors),
    )

    rgb = apply_dither(np.ascontiguousarray(small[:, :, :3]), method, colors)

    out = np.empty((h, w, 4), dtype=np.uint8)
    out[:, :, :3] = rgb
    out[:, :, 3] = 255
    return out


def render_image(
    image: Array,
    algorithm: Union[Algorithm, str] = Algorithm.FLOYD_STEINBERG,
    palette: PaletteSpec = "bw",
    pixel_size: float = 1.0,
) -> Array:
    """Dither ``image`` and scale the result back to its original size.

    Scaling uses nearest-neighbour sampling so each working pixel becomes a
    hard-edged block.
    """
    out = dither_image(image, algorithm, palette, pixel_size)
    return upscale_nearest(out, image.shape[0], image.shape[1])


def dither_many(
    images: Iterable[Array],
    algorithm: Union[Algorithm, str] = Algorithm.FLOYD_STEINBERG,
    palette: PaletteSpec = "bw",
    pixel_size: float = 1.0,
    max_workers: Optional[int] = None,
) -> list[Array]:
    """Run ``dither_image`` over several independent images concurrently.

    Results are returned in input order. The first failure is re-raised.
    """
    images = list(images)
    if not images:
        return []
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = [
            pool.submit(dither_image, img, algorithm, palette, pixel_size)
            for img in images
        ]
        return [f.result() for f in futures]


__all__ = ["dither_image", "render_image", "dither_many"]
