"""Command-line entry point for ditherlab.

This tool loads an image, optionally pixelates it, reduces it to a fixed
named palette with a selected dithering algorithm, scales it back to its
original size with hard block edges, and saves the result.

All processing occurs on NumPy arrays; Pillow is used only for
loading, saving and the box-filter downscale.

Usage example:
    python -m ditherlab -i input.png -o output.png --dither atkinson --palette gameboy --pixel 2
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from .dithers import Algorithm
from .engine import dither_image
from .palettes import DEFAULT_PALETTE, PALETTES, palette_names
from .settings import DitherSettings
from .utils.loader import load_image, save_image
from .utils.upscale import upscale_nearest


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Parameters
    ----------
    argv : list[str] | None
        Optional list of arguments for testing. If None, uses sys.argv.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="ditherlab",
        description=(
            "Quantize images to a fixed retro palette with error-diffusion "
            "dithering, optionally pixelating them first."
        ),
    )

    parser.add_argument("-i", "--input", help="Path to input image file")
    parser.add_argument("-o", "--output", help="Path to output image file")

    parser.add_argument(
        "--dither",
        type=str,
        default=Algorithm.FLOYD_STEINBERG.value,
        choices=[a.value for a in Algorithm],
        help="Dithering method: " + " | ".join(a.value for a in Algorithm),
    )
    parser.add_argument(
        "--palette",
        type=str,
        default=DEFAULT_PALETTE,
        help=(
            f"Palette name (unknown names fall back to '{DEFAULT_PALETTE}'). "
            "See --list-palettes."
        ),
    )
    parser.add_argument(
        "--pixel",
        type=float,
        default=1.0,
        help="Pixel size (1..5, steps of 0.25). The image is dithered at 1/pixel resolution.",
    )
    parser.add_argument(
        "--no-upscale",
        action="store_true",
        help="Write the result at the reduced working resolution instead of the original size.",
    )
    parser.add_argument(
        "--list-palettes",
        action="store_true",
        help="List the built-in palettes and exit.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return parser.parse_args(argv)


def validate_args(ns: argparse.Namespace) -> None:
    """Validate argument values and raise ValueError for invalid inputs.

    Parameters
    ----------
    ns : argparse.Namespace
        Parsed CLI arguments.
    """
    if not ns.input:
        raise ValueError("--input is required")
    if not ns.output:
        raise ValueError("--output is required")
    if not Path(ns.input).exists():
        raise ValueError(f"Input file not found: {ns.input}")


def settings_from_args(ns: argparse.Namespace) -> DitherSettings:
    return DitherSettings(
        algorithm=ns.dither,
        palette=ns.palette,
        pixel_size=ns.pixel,
        upscale=not ns.no_upscale,
    ).clamped()


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry function for the CLI.

    Parameters
    ----------
    argv : list[str] | None
        Optional list of arguments for testing.

    Returns
    -------
    int
        Exit status code (0 for success, non-zero for failure).
    """
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list_palettes:
        for name in palette_names():
            print(f"{name:<12} {len(PALETTES[name]):>3} colours")
        return 0

    try:
        validate_args(args)
    except ValueError as e:
        print(f"Argument error: {e}")
        return 2

    settings = settings_from_args(args)

    # 1) Load (Pillow -> NumPy RGBA uint8)
    img = load_image(args.input)

    # 2) Downscale, then dither at the working size
    work = dither_image(img, settings.algorithm, settings.palette, settings.pixel_size)

    # 3) Blow back up with hard edges
    if settings.upscale:
        work = upscale_nearest(work, img.shape[0], img.shape[1])

    # 4) Save (NumPy -> Pillow)
    save_image(work, args.output)
    print(f"Wrote {args.output} ({work.shape[1]}x{work.shape[0]})")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
