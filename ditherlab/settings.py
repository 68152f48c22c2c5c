"""User-facing dithering settings.

The engine accepts any ``pixel_size >= 1``; keeping it inside a sane range
is up to the caller. ``DitherSettings.clamped`` applies the range and step
the interactive controls use.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace

from .dithers import Algorithm
from .palettes import DEFAULT_PALETTE

PIXEL_SIZE_MIN = 1.0
PIXEL_SIZE_MAX = 5.0
PIXEL_SIZE_STEP = 0.25


@dataclass(frozen=True)
class DitherSettings:
    algorithm: str = Algorithm.FLOYD_STEINBERG.value
    palette: str = DEFAULT_PALETTE
    pixel_size: float = 1.0
    upscale: bool = True

    def clamped(self) -> "DitherSettings":
        """Return a copy with ``pixel_size`` inside 1..5 on the 0.25 grid."""
        size = float(self.pixel_size)
        if not math.isfinite(size):
            size = PIXEL_SIZE_MIN
        size = min(PIXEL_SIZE_MAX, max(PIXEL_SIZE_MIN, size))
        size = round(size / PIXEL_SIZE_STEP) * PIXEL_SIZE_STEP
        return replace(self, pixel_size=size)


__all__ = ["DitherSettings", "PIXEL_SIZE_MIN", "PIXEL_SIZE_MAX", "PIXEL_SIZE_STEP"]
