"""Shared fixtures: hand-built square tile arenas."""

import pytest


def _square_grid(cols, rows, size=10.0, x0=0.0, y0=0.0):
    """Square tiles indexed row-major, all wound the same way."""
    tiles = []
    for r in range(rows):
        for c in range(cols):
            x = x0 + c * size
            y = y0 + r * size
            tiles.append(((x, y), (x + size, y), (x + size, y + size), (x, y + size)))
    return tiles


@pytest.fixture
def square_grid():
    """Factory fixture: square_grid(cols, rows, size=10.0, x0=0.0, y0=0.0)."""
    return _square_grid


@pytest.fixture
def grid_4x4():
    return _square_grid(4, 4)
