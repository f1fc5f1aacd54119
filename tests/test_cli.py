"""Tests for the command line interface."""

from PIL import Image
from typer.testing import CliRunner

from tilemap2gif.cli import app
from tilemap2gif.constants import FRAME_DELAY_ENV

runner = CliRunner()


def gif_durations(path):
    with Image.open(path) as img:
        durations = []
        for index in range(img.n_frames):
            img.seek(index)
            durations.append(img.info["duration"])
    return durations


def test_converts_tilemap(write_project, tmp_path):
    """Should write the animation and report success."""
    project = write_project()
    output = tmp_path / "level.gif"

    result = runner.invoke(app, [str(project.tmx), "--output", str(output)])

    assert result.exit_code == 0
    assert "saved to" in result.output
    assert gif_durations(output) == [100, 200]


def test_default_output_next_to_input(write_project, tmp_path):
    project = write_project()

    result = runner.invoke(app, [str(project.tsx)])

    assert result.exit_code == 0
    assert (tmp_path / "tiles.gif").is_file()


def test_fps_sets_static_frame_delay(write_project, tmp_path):
    project = write_project(animation="")
    output = tmp_path / "static.gif"

    result = runner.invoke(app, [str(project.tmx), "-o", str(output), "--fps", "4"])

    assert result.exit_code == 0
    assert gif_durations(output) == [250]


def test_frame_delay_from_environment(write_project, tmp_path):
    project = write_project(animation="")
    output = tmp_path / "static.gif"

    result = runner.invoke(app, [str(project.tmx), "-o", str(output)], env={FRAME_DELAY_ENV: "400"})

    assert result.exit_code == 0
    assert gif_durations(output) == [400]


def test_missing_input_argument():
    result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "Input file is required" in result.output


def test_mutual_exclusivity_error(write_project):
    """Should error when both --frame-delay and --fps are provided."""
    project = write_project()

    result = runner.invoke(app, [str(project.tmx), "--frame-delay", "100", "--fps", "10"])

    assert result.exit_code == 1
    assert "Cannot specify both" in result.output


def test_invalid_fps(write_project):
    project = write_project()

    result = runner.invoke(app, [str(project.tmx), "--fps", "0"])

    assert result.exit_code == 1
    assert "Invalid FPS" in result.output


def test_invalid_workers(write_project):
    project = write_project()

    result = runner.invoke(app, [str(project.tmx), "--workers", "0"])

    assert result.exit_code == 1
    assert "Invalid workers" in result.output


def test_nonexistent_input(tmp_path):
    result = runner.invoke(app, [str(tmp_path / "missing.tmx")])

    assert result.exit_code == 1
    assert "Conversion failed" in result.output
