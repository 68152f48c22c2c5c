"""Error-diffusion kernels and the algorithm selector.

Each kernel lists ``(dx, dy, numerator)`` taps relative to the current
pixel; the fraction of quantization error deposited at a tap is
``numerator / divisor``. Taps only point forward in scan order (same row to
the right, or any later row).

Kernels, drawn with ``*`` at the current pixel:

Floyd-Steinberg (/16)::

        *  7
     3  5  1

Atkinson (/8, only 6/8 of the error is diffused)::

        *  1  1
     1  1  1
        1

Stucki (/42)::

           *  8  4
     2  4  8  4  2
     1  2  4  2  1

Burkes (/32)::

           *  8  4
     2  4  8  4  2

Sierra-3 (/32)::

           *  5  3
     2  4  5  4  2
        2  3  2

Jarvis-Judice-Ninke (/48)::

           *  7  5
     3  5  7  5  3
     1  3  5  3  1
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Optional, Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)

Tap = Tuple[int, int, int]


class Algorithm(str, Enum):
    """Quantization strategies understood by the engine."""

    NONE = "none"
    FLOYD_STEINBERG = "floyd"
    ATKINSON = "atkinson"
    STUCKI = "stucki"
    BURKES = "burkes"
    SIERRA = "sierra"
    JARVIS = "jarvis"

    @classmethod
    def parse(cls, value: Union["Algorithm", str, None]) -> "Algorithm":
        """Map an identifier to an ``Algorithm``.

        Accepts members, their values (``"floyd"``) and their names in any
        spelling (``"FloydSteinberg"``, ``"floyd-steinberg"``). Anything else
        is treated as ``NONE``.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = _normalise(value)
            for member in cls:
                if key in (_normalise(member.value), _normalise(member.name)):
                    return member
        logger.warning("Unsupported dithering algorithm %r, using plain nearest-colour mapping", value)
        return cls.NONE


def _normalise(text: str) -> str:
    return re.sub(r"[\s_\-]+", "", text).lower()


@dataclass(frozen=True)
class ErrorKernel:
    divisor: int
    taps: Tuple[Tap, ...]

    @property
    def total(self) -> Fraction:
        """Fraction of the error the kernel distributes."""
        return Fraction(sum(n for _, _, n in self.taps), self.divisor)

    def offsets(self) -> np.ndarray:
        """Tap offsets as an int64 array of shape (T, 2), columns (dx, dy)."""
        return np.array([(dx, dy) for dx, dy, _ in self.taps], dtype=np.int64).reshape(-1, 2)

    def weights(self) -> np.ndarray:
        """Per-tap weights ``numerator / divisor`` as float64."""
        return np.array([n / self.divisor for _, _, n in self.taps], dtype=np.float64)


KERNELS: dict[Algorithm, ErrorKernel] = {
    Algorithm.FLOYD_STEINBERG: ErrorKernel(
        16,
        (
            (1, 0, 7),
            (-1, 1, 3), (0, 1, 5), (1, 1, 1),
        ),
    ),
    Algorithm.ATKINSON: ErrorKernel(
        8,
        (
            (1, 0, 1), (2, 0, 1),
            (-1, 1, 1), (0, 1, 1), (1, 1, 1),
            (0, 2, 1),
        ),
    ),
    Algorithm.STUCKI: ErrorKernel(
        42,
        (
            (1, 0, 8), (2, 0, 4),
            (-2, 1, 2), (-1, 1, 4), (0, 1, 8), (1, 1, 4), (2, 1, 2),
            (-2, 2, 1), (-1, 2, 2), (0, 2, 4), (1, 2, 2), (2, 2, 1),
        ),
    ),
    Algorithm.BURKES: ErrorKernel(
        32,
        (
            (1, 0, 8), (2, 0, 4),
            (-2, 1, 2), (-1, 1, 4), (0, 1, 8), (1, 1, 4), (2, 1, 2),
        ),
    ),
    Algorithm.SIERRA: ErrorKernel(
        32,
        (
            (1, 0, 5), (2, 0, 3),
            (-2, 1, 2), (-1, 1, 4), (0, 1, 5), (1, 1, 4), (2, 1, 2),
            (-1, 2, 2), (0, 2, 3), (1, 2, 2),
        ),
    ),
    Algorithm.JARVIS: ErrorKernel(
        48,
        (
            (1, 0, 7), (2, 0, 5),
            (-2, 1, 3), (-1, 1, 5), (0, 1, 7), (1, 1, 5), (2, 1, 3),
            (-2, 2, 1), (-1, 2, 3), (0, 2, 5), (1, 2, 3), (2, 2, 1),
        ),
    ),
}


def kernel_for(algorithm: Union[Algorithm, str]) -> Optional[ErrorKernel]:
    """Return the error kernel for ``algorithm``, or None for ``NONE``."""
    return KERNELS.get(Algorithm.parse(algorithm))


__all__ = ["Algorithm", "ErrorKernel", "KERNELS", "kernel_for"]
