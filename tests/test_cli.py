"""Tests for the command-line interface."""

import os
import pytest
from galaxy_gen.cli.main import main


def test_render_image(tmp_path):
    """Test rendering a still image."""
    output = str(tmp_path / "galaxy")
    main(["--mode", "image", "--count", "500", "--seed", "1", "--output", output])

    assert os.path.getsize(output + ".png") > 0


def test_export_gif(tmp_path):
    """Test exporting a short rotating GIF."""
    pytest.importorskip("imageio")
    output = str(tmp_path / "galaxy")
    main(["--mode", "gif", "--count", "200", "--frames", "3", "--fps", "10",
          "--auto-spin", "--output", output])

    assert os.path.getsize(output + ".gif") > 0


def test_invalid_parameters(tmp_path):
    """Test that parameters the generator cannot accept exit with an error."""
    with pytest.raises(SystemExit):
        main(["--mode", "image", "--branches", "0", "--output", str(tmp_path / "x")])
    with pytest.raises(SystemExit):
        main(["--mode", "image", "--inside-color", "nope", "--output", str(tmp_path / "x")])
