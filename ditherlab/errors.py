"""Exception types raised by ditherlab."""
from __future__ import annotations


class DitherError(Exception):
    """Base class for errors raised by the dithering engine."""


class InvalidBufferError(DitherError, ValueError):
    """The pixel buffer is empty or not shaped (H, W, 3) / (H, W, 4)."""


class InvalidPaletteError(DitherError, ValueError):
    """An explicit palette is empty or holds out-of-range channels."""


__all__ = ["DitherError", "InvalidBufferError", "InvalidPaletteError"]
