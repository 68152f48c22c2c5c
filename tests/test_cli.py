"""Tests for the command-line entry point."""

import numpy as np

from ditherlab.main import main, parse_args, settings_from_args
from ditherlab.palettes import PALETTES
from ditherlab.utils import load_image, save_image


def write_input(tmp_path, h=8, w=6):
    img = np.random.default_rng(1).integers(0, 256, size=(h, w, 3), dtype=np.uint8)
    path = tmp_path / "in.png"
    save_image(img, path)
    return path


class TestMain:
    def test_dither_and_upscale(self, tmp_path, capsys):
        src = write_input(tmp_path)
        dst = tmp_path / "out.png"
        rc = main(["-i", str(src), "-o", str(dst), "--dither", "stucki", "--palette", "cga", "--pixel", "2"])
        assert rc == 0
        out = load_image(dst)
        assert out.shape == (8, 6, 4)
        allowed = set(PALETTES["cga"])
        assert all(tuple(px) in allowed for px in out[..., :3].reshape(-1, 3))
        assert "Wrote" in capsys.readouterr().out

    def test_no_upscale_keeps_working_size(self, tmp_path):
        src = write_input(tmp_path)
        dst = tmp_path / "out.png"
        assert main(["-i", str(src), "-o", str(dst), "--pixel", "2", "--no-upscale"]) == 0
        assert load_image(dst).shape == (4, 3, 4)

    def test_pixel_is_clamped(self, tmp_path):
        src = write_input(tmp_path, 20, 20)
        dst = tmp_path / "out.png"
        assert main(["-i", str(src), "-o", str(dst), "--pixel", "40", "--no-upscale"]) == 0
        assert load_image(dst).shape == (4, 4, 4)

    def test_unknown_palette_falls_back(self, tmp_path):
        src = write_input(tmp_path)
        dst = tmp_path / "out.png"
        assert main(["-i", str(src), "-o", str(dst), "--palette", "doesnotexist"]) == 0
        values = set(map(tuple, load_image(dst)[..., :3].reshape(-1, 3)))
        assert values <= {(0, 0, 0), (255, 255, 255)}

    def test_missing_input(self, tmp_path, capsys):
        rc = main(["-i", str(tmp_path / "nope.png"), "-o", str(tmp_path / "out.png")])
        assert rc == 2
        assert "Input file not found" in capsys.readouterr().out

    def test_output_required(self, tmp_path, capsys):
        src = write_input(tmp_path)
        assert main(["-i", str(src)]) == 2
        assert "--output is required" in capsys.readouterr().out

    def test_list_palettes(self, capsys):
        assert main(["--list-palettes"]) == 0
        out = capsys.readouterr().out
        for name in PALETTES:
            assert name in out


class TestParseArgs:
    def test_defaults(self):
        ns = parse_args(["-i", "a.png", "-o", "b.png"])
        settings = settings_from_args(ns)
        assert settings.algorithm == "floyd"
        assert settings.palette == "bw"
        assert settings.pixel_size == 1.0
        assert settings.upscale is True
