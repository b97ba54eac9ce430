"""Tests for the pixel grid helpers and component records."""

import numpy as np
import pytest

from regionseg.models.image import ComponentRecord, as_grid, new_grid, opaque_mask


def test_new_grid_is_transparent_black():
    grid = new_grid(3, 2)
    assert grid.shape == (2, 3, 4)
    assert grid.dtype == np.uint8
    assert not grid.any()


def test_as_grid_from_flat_bytes():
    raw = bytes(range(24))
    grid = as_grid(raw, 3, 2)
    assert grid.shape == (2, 3, 4)
    # row-major: second row, first pixel starts at sample 12
    assert tuple(grid[1, 0]) == (12, 13, 14, 15)


def test_as_grid_from_pixel_tuples():
    grid = as_grid([(1, 2, 3, 4), (5, 6, 7, 8)], 2, 1)
    assert tuple(grid[0, 1]) == (5, 6, 7, 8)


def test_as_grid_keeps_arrays():
    src = np.zeros((2, 2, 4), dtype=np.uint8)
    assert as_grid(src, 2, 2).shape == (2, 2, 4)


@pytest.mark.parametrize("width,height", [(2, 2), (4, 1), (-1, 3)])
def test_as_grid_rejects_wrong_size(width, height):
    with pytest.raises(ValueError):
        as_grid(bytes(12), width, height)


def test_opaque_mask_cutoff():
    grid = as_grid([(0, 0, 0, 128), (0, 0, 0, 129)], 2, 1)
    assert opaque_mask(grid).tolist() == [[False, True]]


def test_component_record_rgba():
    rec = ComponentRecord(component_id=3, pixel_count=7, avg_color=(1, 2, 3))
    assert rec.rgba == (1, 2, 3, 255)


def test_as_grid_rejects_transposed_array():
    with pytest.raises(ValueError):
        as_grid(np.zeros((2, 3, 4), dtype=np.uint8), 2, 3)


def test_as_grid_rejects_out_of_range_samples():
    with pytest.raises(ValueError):
        as_grid([(300, 0, 0, 255)], 1, 1)
