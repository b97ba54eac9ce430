"""Tests for the command-line entry point."""

import json

import numpy as np
import pytest

from regionseg.main import main
from regionseg.utils.image_io import decode, encode
from tests.conftest import framed_dot

OUTPUT_NAMES = ("11_edges.png", "22_components.png", "33_result.png")


@pytest.fixture
def input_png(tmp_path):
    path = tmp_path / "skull.png"
    encode(path, framed_dot(), 3, 3)
    return path


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("REGIONSEG_THRESHOLD", "REGIONSEG_INPUT", "REGIONSEG_OUTPUT_DIR"):
        monkeypatch.delenv(name, raising=False)


def test_writes_three_images(input_png, tmp_path):
    out = tmp_path / "out"
    assert main([str(input_png), "-o", str(out)]) == 0
    for name in OUTPUT_NAMES:
        grid, width, height = decode(out / name)
        assert (width, height) == (3, 3)

    result, _, _ = decode(out / "33_result.png")
    assert tuple(result[1, 1]) == (45, 0, 66, 255)
    components, _, _ = decode(out / "22_components.png")
    assert tuple(components[0, 0]) == (20, 20, 20, 255)


def test_default_input_from_settings(input_png, tmp_path):
    assert main([]) == 0
    for name in OUTPUT_NAMES:
        assert (tmp_path / name).exists()


def test_threshold_from_environment(input_png, tmp_path, monkeypatch):
    monkeypatch.setenv("REGIONSEG_THRESHOLD", "1000")
    assert main(["--json", str(tmp_path / "report.json")]) == 0
    report = json.loads((tmp_path / "report.json").read_text(encoding="utf-8"))
    assert report["threshold"] == 1000
    assert report["num_components"] == 1


def test_missing_input_writes_nothing(tmp_path):
    assert main([str(tmp_path / "absent.png"), "-o", str(tmp_path / "out")]) == 1
    assert not (tmp_path / "out").exists()


def test_summary_is_printed(input_png, capsys):
    assert main([str(input_png), "--summary"]) == 0
    out = capsys.readouterr().out
    assert "REGION SEGMENTATION RESULTS" in out
    assert "Components: 2" in out


def test_encode_failure_reported(input_png, tmp_path, monkeypatch):
    monkeypatch.setenv("REGIONSEG_COMPONENTS_NAME", "22_components.notaformat")
    assert main([str(input_png)]) == 1
    # the other outputs are still written
    assert (tmp_path / "11_edges.png").exists()
    assert (tmp_path / "33_result.png").exists()


def test_outputs_are_stable_across_runs(input_png, tmp_path):
    assert main([str(input_png), "-o", str(tmp_path / "a")]) == 0
    assert main([str(input_png), "-o", str(tmp_path / "b")]) == 0
    for name in OUTPUT_NAMES:
        a, _, _ = decode(tmp_path / "a" / name)
        b, _, _ = decode(tmp_path / "b" / name)
        np.testing.assert_array_equal(a, b)
