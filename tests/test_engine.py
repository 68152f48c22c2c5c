"""Tests for the engine entry points."""

import logging

import numpy as np
import pytest

from ditherlab import (
    Algorithm,
    InvalidBufferError,
    PALETTES,
    dither_image,
    dither_many,
    render_image,
)


def rgba(pixels):
    arr = np.array(pixels, dtype=np.uint8)
    alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
    return np.concatenate([arr, alpha], axis=2)


def random_image(seed, h=10, w=12, channels=4):
    return np.random.default_rng(seed).integers(0, 256, size=(h, w, channels), dtype=np.uint8)


class TestScenarios:
    """End-to-end behaviour on tiny images."""

    def test_two_pixels_nearest(self):
        img = rgba([[(10, 10, 10), (250, 250, 250)]])
        out = dither_image(img, "none", "bw")
        np.testing.assert_array_equal(out, [[[0, 0, 0, 255], [255, 255, 255, 255]]])

    @pytest.mark.parametrize("algorithm", [a for a in Algorithm if a is not Algorithm.NONE])
    def test_single_grey_pixel(self, algorithm):
        out = dither_image(rgba([[(128, 128, 128)]]), algorithm, "bw")
        assert tuple(out[0, 0, :3]) in {(0, 0, 0), (255, 255, 255)}

    def test_uniform_grey_floyd_vs_none(self):
        img = rgba([[(127, 127, 127)] * 4] * 4)
        dithered = dither_image(img, "floyd", "bw")
        flat = dither_image(img, "none", "bw")
        assert len({tuple(px) for px in dithered.reshape(-1, 4)}) == 2
        assert len({tuple(px) for px in flat.reshape(-1, 4)}) == 1

    @pytest.mark.parametrize(
        "size, pixel_size, expected",
        [
            ((4, 4), 1, (4, 4)),
            ((4, 4), 2, (2, 2)),
            ((4, 4), 3, (1, 1)),
            ((7, 10), 2.5, (2, 4)),
            ((3, 3), 5, (1, 1)),
        ],
    )
    def test_working_dimensions(self, size, pixel_size, expected):
        h, w = size
        out = dither_image(random_image(0, h, w), "floyd", "cga", pixel_size)
        assert out.shape == expected + (4,)

    def test_unknown_palette_falls_back(self, caplog):
        img = random_image(2)
        with caplog.at_level(logging.WARNING):
            out = dither_image(img, "atkinson", "doesnotexist")
        np.testing.assert_array_equal(out, dither_image(img, "atkinson", "bw"))
        assert "doesnotexist" in caplog.text


class TestProperties:
    """Invariants that hold for every input."""

    @pytest.mark.parametrize("algorithm", list(Algorithm), ids=lambda a: a.value)
    @pytest.mark.parametrize("palette", ["bw", "gameboy", "sepia", "nord"])
    def test_membership_and_alpha(self, algorithm, palette):
        img = random_image(4)
        img[..., 3] = 17
        out = dither_image(img, algorithm, palette, 1.5)
        allowed = set(PALETTES[palette])
        assert out.dtype == np.uint8
        assert (out[..., 3] == 255).all()
        assert all(tuple(px) in allowed for px in out[..., :3].reshape(-1, 3))

    @pytest.mark.parametrize("algorithm", list(Algorithm), ids=lambda a: a.value)
    def test_deterministic(self, algorithm):
        img = random_image(8)
        first = dither_image(img, algorithm, "ega", 2)
        second = dither_image(img, algorithm, "ega", 2)
        np.testing.assert_array_equal(first, second)

    def test_input_not_modified(self):
        img = random_image(9)
        before = img.copy()
        dither_image(img, "jarvis", "vaporwave")
        np.testing.assert_array_equal(img, before)

    @pytest.mark.parametrize("pixel_size", [1, 2])
    def test_transparent_white_stays_white(self, pixel_size):
        img = np.zeros((4, 4, 4), dtype=np.uint8)
        img[..., :3] = 255
        out = dither_image(img, "none", "bw", pixel_size)
        assert (out == 255).all()

    def test_rgb_input_gets_alpha(self):
        out = dither_image(random_image(3, channels=3), "burkes", "cyberpunk")
        assert out.shape == (10, 12, 4)
        assert (out[..., 3] == 255).all()

    def test_float_input_is_clamped(self):
        img = np.array([[[300.0, -20.0, 127.6]]])
        out = dither_image(img, "none", [(255, 0, 128), (0, 0, 0)])
        np.testing.assert_array_equal(out[0, 0], [255, 0, 128, 255])

    def test_explicit_palette(self):
        red = np.zeros((6, 6, 3), dtype=np.uint8)
        red[..., 0] = 255
        out = dither_image(red, "stucki", [(0, 0, 255)])
        assert (out[..., :3] == [0, 0, 255]).all()


class TestErrors:
    """Fail-fast conditions."""

    @pytest.mark.parametrize("shape", [(0, 4, 4), (4, 0, 4), (0, 0, 3)])
    def test_zero_area(self, shape):
        with pytest.raises(InvalidBufferError):
            dither_image(np.zeros(shape, dtype=np.uint8))

    @pytest.mark.parametrize("shape", [(4, 4), (4, 4, 2), (2, 2, 2, 3)])
    def test_bad_shape(self, shape):
        with pytest.raises(InvalidBufferError):
            dither_image(np.zeros(shape, dtype=np.uint8))

    def test_not_an_array(self):
        with pytest.raises(InvalidBufferError):
            dither_image([[(0, 0, 0)]])

    def test_invalid_buffer_is_value_error(self):
        with pytest.raises(ValueError):
            dither_image(np.zeros((0, 1, 4), dtype=np.uint8))

    @pytest.mark.parametrize("pixel_size", [0.5, 0, -1, float("nan"), float("inf"), "big"])
    def test_bad_pixel_size(self, pixel_size):
        with pytest.raises(ValueError):
            dither_image(random_image(1), "floyd", "bw", pixel_size)


class TestRender:
    """Upscaled output for display/export."""

    def test_original_size_with_blocks(self):
        img = random_image(6, 4, 4)
        out = render_image(img, "floyd", "cga", 2)
        assert out.shape == (4, 4, 4)
        small = dither_image(img, "floyd", "cga", 2)
        np.testing.assert_array_equal(out, np.repeat(np.repeat(small, 2, axis=0), 2, axis=1))

    def test_pixel_size_one_is_plain_dither(self):
        img = random_image(12)
        np.testing.assert_array_equal(
            render_image(img, "sierra", "gameboy"),
            dither_image(img, "sierra", "gameboy"),
        )


class TestDitherMany:
    """Independent images processed concurrently."""

    def test_matches_sequential_in_order(self):
        images = [random_image(seed, 6 + seed, 5) for seed in range(5)]
        results = dither_many(images, "atkinson", "ega", max_workers=3)
        assert len(results) == len(images)
        for img, out in zip(images, results):
            np.testing.assert_array_equal(out, dither_image(img, "atkinson", "ega"))

    def test_empty(self):
        assert dither_many([]) == []

    def test_failure_propagates(self):
        with pytest.raises(InvalidBufferError):
            dither_many([random_image(0), np.zeros((0, 2, 4), dtype=np.uint8)])
