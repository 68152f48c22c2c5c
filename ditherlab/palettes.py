"""Built-in colour palettes and name resolution.

Palettes are plain tuples of RGB triples. Order matters only as the
tie-break when two entries are equally close to an observed colour: the
earlier entry wins.

Unknown names never fail. ``resolve`` falls back to the two-colour ``bw``
palette and logs a warning instead.
"""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Sequence, Tuple, Union

import numpy as np

from .errors import InvalidPaletteError

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]
Palette = Tuple[Color, ...]

DEFAULT_PALETTE = "bw"

_PALETTES: dict[str, Palette] = {
    "bw": (
        (0, 0, 0),
        (255, 255, 255),
    ),
    "gameboy": (
        (15, 56, 15),
        (48, 98, 48),
        (139, 172, 15),
        (155, 188, 15),
    ),
    "cga": (
        (0, 0, 0),
        (85, 255, 255),
        (255, 85, 255),
        (255, 255, 255),
    ),
    "cga_warm": (
        (0, 0, 0),
        (85, 255, 85),
        (255, 85, 85),
        (255, 255, 85),
    ),
    "ega": (
        (0, 0, 0),
        (0, 0, 170),
        (0, 170, 0),
        (0, 170, 170),
        (170, 0, 0),
        (170, 0, 170),
        (170, 85, 0),
        (170, 170, 170),
        (85, 85, 85),
        (85, 85, 255),
        (85, 255, 85),
        (85, 255, 255),
        (255, 85, 85),
        (255, 85, 255),
        (255, 255, 85),
        (255, 255, 255),
    ),
    # Same colours as bw, white first: mid-grey ties resolve to white.
    "mac": (
        (255, 255, 255),
        (0, 0, 0),
    ),
    "sepia": (
        (94, 75, 53),
        (166, 142, 116),
        (217, 202, 184),
        (255, 255, 255),
    ),
    "vaporwave": (
        (255, 113, 206),
        (1, 205, 254),
        (5, 255, 161),
        (185, 103, 255),
        (255, 251, 150),
        (20, 20, 40),
    ),
    "cyberpunk": (
        (252, 227, 0),
        (0, 255, 241),
        (255, 0, 60),
        (10, 10, 15),
    ),
    "nord": (
        (46, 52, 64),
        (59, 66, 82),
        (67, 76, 94),
        (76, 86, 106),
        (216, 222, 233),
        (229, 233, 240),
        (236, 239, 244),
        (143, 188, 187),
        (136, 192, 208),
        (129, 161, 193),
        (94, 129, 172),
        (191, 97, 106),
        (208, 135, 112),
        (235, 203, 139),
        (163, 190, 140),
        (180, 142, 173),
    ),
    "gruvbox": (
        (40, 40, 40),
        (204, 36, 29),
        (152, 151, 26),
        (215, 153, 33),
        (69, 133, 136),
        (177, 98, 134),
        (104, 157, 106),
        (168, 153, 132),
        (251, 241, 199),
        (251, 73, 52),
        (184, 187, 38),
        (250, 189, 47),
        (131, 165, 152),
        (211, 134, 155),
        (142, 192, 124),
        (235, 219, 178),
    ),
}

PALETTES: Mapping[str, Palette] = MappingProxyType(_PALETTES)


def palette_names() -> list[str]:
    """Return the registered palette names in display order."""
    return list(PALETTES)


def resolve(name: str) -> Palette:
    """Return the palette registered under ``name``.

    Lookup is exact first, then case-insensitive. Unknown names resolve to
    the default ``bw`` palette.
    """
    palette = PALETTES.get(name)
    if palette is not None:
        return palette
    key = str(name).strip().lower()
    for registered, colors in PALETTES.items():
        if registered.lower() == key:
            return colors
    logger.warning("Unknown palette %r, falling back to %r", name, DEFAULT_PALETTE)
    return PALETTES[DEFAULT_PALETTE]


def coerce_palette(palette: Union[str, Sequence[Sequence[int]]]) -> Palette:
    """Normalise a palette name or an explicit colour list to a ``Palette``.

    Parameters
    ----------
    palette : str | sequence of RGB triples
        Registered palette name, or the colours themselves.

    Returns
    -------
    Palette
        Tuple of ``(r, g, b)`` integer tuples.
    """
    if isinstance(palette, str):
        return resolve(palette)

    colors = []
    for entry in palette:
        rgb = tuple(entry)
        if len(rgb) != 3:
            raise InvalidPaletteError(f"palette entries must be RGB triples, got {entry!r}")
        for channel in rgb:
            if int(channel) != channel or not 0 <= channel <= 255:
                raise InvalidPaletteError(f"palette channel out of range 0..255: {entry!r}")
        colors.append((int(rgb[0]), int(rgb[1]), int(rgb[2])))
    if not colors:
        raise InvalidPaletteError("palette must contain at least one colour")
    return tuple(colors)


def palette_array(palette: Sequence[Sequence[int]]) -> np.ndarray:
    """Return the palette as an int64 array of shape (P, 3)."""
    return np.asarray(palette, dtype=np.int64).reshape(-1, 3)


__all__ = [
    "Color",
    "Palette",
    "DEFAULT_PALETTE",
    "PALETTES",
    "palette_names",
    "resolve",
    "coerce_palette",
    "palette_array",
]
