"""Tests for the command-line interface."""

import numpy as np
from PIL import Image

from kquant.cli import create_parser, main


class TestParser:
    """Test cases for argument parsing."""

    def test_defaults(self):
        """Test default option values."""
        parsed = create_parser().parse_args(["in.png", "4"])
        assert parsed.input == "in.png"
        assert parsed.colors == 4
        assert parsed.output == "output.png"
        assert parsed.iterations == 10
        assert parsed.seed is None
        assert parsed.tolerance is None


class TestMain:
    """Test cases for main entry point."""

    def test_success(self, four_color_image, tmp_path):
        """Test a full run writes the output image."""
        output = tmp_path / "cli.png"
        code = main([str(four_color_image), "4", "-o", str(output), "--seed", "5"])

        assert code == 0
        assert output.exists()
        with Image.open(output) as saved:
            colors = np.unique(np.asarray(saved.convert("RGBA")).reshape(-1, 4), axis=0)
        assert len(colors) <= 4

    def test_default_output_in_cwd(self, four_color_image, tmp_path, monkeypatch):
        """Test that output.png is written to the working directory."""
        monkeypatch.chdir(tmp_path)
        assert main([str(four_color_image), "2", "--seed", "1", "-n", "3"]) == 0
        assert (tmp_path / "output.png").exists()

    def test_missing_input(self, tmp_path, capsys):
        """Test that a missing file exits with an error."""
        code = main([str(tmp_path / "missing.png"), "2"])
        assert code == 1
        assert "not found" in capsys.readouterr().err

    def test_invalid_palette_size(self, four_color_image, tmp_path, capsys):
        """Test that k = 0 exits with an error."""
        code = main([str(four_color_image), "0", "-o", str(tmp_path / "x.png")])
        assert code == 1
        assert "Error" in capsys.readouterr().err

    def test_palette_larger_than_image(self, four_color_image, tmp_path):
        """Test that k above the pixel count exits with an error."""
        output = tmp_path / "x.png"
        assert main([str(four_color_image), "401", "-o", str(output)]) == 1
        assert not output.exists()

    def test_unwritable_output(self, four_color_image, tmp_path, capsys):
        """Test that a failed write exits with an error instead of a traceback."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        code = main([str(four_color_image), "2", "--seed", "1", "-o", str(blocker / "out.png")])
        assert code == 1
        assert "Error" in capsys.readouterr().err
