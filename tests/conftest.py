"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from regionseg.engine.pipeline import register_stages

# Make sure every stage module is imported before any test touches the registry.
register_stages()


RED_ISH = (200, 30, 30, 255)
BLUE_ISH = (20, 20, 220, 255)
GRAY = (20, 20, 20, 255)
CLEAR = (0, 0, 0, 0)


def solid(width: int, height: int, rgba: tuple[int, int, int, int]) -> np.ndarray:
    grid = np.empty((height, width, 4), dtype=np.uint8)
    grid[:] = rgba
    return grid


def two_quadrants() -> np.ndarray:
    """4×4: top-left 2×2 reddish, bottom-right 2×2 bluish, rest transparent."""
    grid = solid(4, 4, CLEAR)
    grid[0:2, 0:2] = RED_ISH
    grid[2:4, 2:4] = BLUE_ISH
    return grid


def side_by_side() -> np.ndarray:
    """4×2 fully opaque: left half reddish, right half bluish."""
    grid = solid(4, 2, RED_ISH)
    grid[:, 2:4] = BLUE_ISH
    return grid


def framed_dot() -> np.ndarray:
    """3×3 gray frame around a single (200, 10, 10) pixel."""
    grid = solid(3, 3, GRAY)
    grid[1, 1] = (200, 10, 10, 255)
    return grid


def noisy(width: int, height: int, seed: int = 0) -> np.ndarray:
    """Random colors with roughly a third of the pixels transparent."""
    rng = np.random.default_rng(seed)
    grid = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    # Pull colors into a narrow band so that regions actually grow.
    grid[:, :, :3] = grid[:, :, :3] // 16 + 100
    return grid


@pytest.fixture
def quadrant_grid() -> np.ndarray:
    return two_quadrants()


@pytest.fixture
def transparent_grid() -> np.ndarray:
    return solid(3, 3, CLEAR)


@pytest.fixture
def dot_grid() -> np.ndarray:
    return framed_dot()


@pytest.fixture
def noisy_grid() -> np.ndarray:
    return noisy(24, 16)
