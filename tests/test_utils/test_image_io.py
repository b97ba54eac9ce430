"""Tests for Pillow-backed image decode/encode."""

import numpy as np
import pytest
from PIL import Image

from regionseg.utils.image_io import DecodeError, EncodeError, ImageIOError, decode, encode
from tests.conftest import framed_dot


def test_png_roundtrip_preserves_pixels(tmp_path):
    grid = framed_dot()
    grid[0, 0, 3] = 17
    path = tmp_path / "dot.png"
    encode(path, grid, 3, 3)
    decoded, width, height = decode(path)
    assert (width, height) == (3, 3)
    np.testing.assert_array_equal(decoded, grid)


def test_rgb_input_becomes_opaque_rgba(tmp_path):
    path = tmp_path / "rgb.png"
    Image.new("RGB", (5, 2), (10, 20, 30)).save(path)
    grid, width, height = decode(path)
    assert grid.shape == (2, 5, 4)
    assert (width, height) == (5, 2)
    assert tuple(grid[1, 4]) == (10, 20, 30, 255)


def test_decode_missing_file(tmp_path):
    with pytest.raises(DecodeError) as info:
        decode(tmp_path / "nope.png")
    assert info.value.path.name == "nope.png"
    assert isinstance(info.value, ImageIOError)


def test_decode_garbage(tmp_path):
    path = tmp_path / "bad.png"
    path.write_bytes(b"definitely not an image")
    with pytest.raises(DecodeError):
        decode(path)


def test_encode_into_missing_folder(tmp_path):
    with pytest.raises(EncodeError):
        encode(tmp_path / "missing" / "out.png", framed_dot(), 3, 3)


def test_encode_unknown_extension(tmp_path):
    with pytest.raises(EncodeError):
        encode(tmp_path / "out.notaformat", framed_dot(), 3, 3)


def test_encode_size_mismatch(tmp_path):
    with pytest.raises(EncodeError):
        encode(tmp_path / "out.png", framed_dot(), 4, 4)
    assert not (tmp_path / "out.png").exists()


def test_decode_oversized_image(tmp_path, monkeypatch):
    path = tmp_path / "big.png"
    Image.new("RGBA", (64, 64)).save(path)
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    with pytest.raises(DecodeError):
        decode(path)
