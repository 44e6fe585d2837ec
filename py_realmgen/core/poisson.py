"""
Bridson Poisson-disk sampling over a rectangle.

Candidates are placed at a random distance between ``min_distance`` and
``max_distance`` from an active sample, which gives blue-noise point sets
whose spacing stays inside that band.
"""

import math
from typing import Dict, List, Tuple

import structlog

from .alea_prng import AleaPRNG
from .geometry import Point

logger = structlog.get_logger()


def poisson_disk_sample(
    width: float,
    height: float,
    min_distance: float,
    max_distance: float,
    tries: int,
    prng: AleaPRNG,
) -> List[Point]:
    """
    Fill a ``width`` x ``height`` rectangle (origin at 0, 0) with blue noise.

    Args:
        width: Domain width
        height: Domain height
        min_distance: Minimum distance between any two samples
        max_distance: Maximum distance of a candidate from its parent
        tries: Candidates tried per active sample before it is retired
        prng: Random source

    Returns:
        Samples in generation order
    """
    if width <= 0 or height <= 0 or min_distance <= 0:
        return []
    max_distance = max(max_distance, min_distance)

    cell_size = min_distance / math.sqrt(2.0)
    grid_w = int(math.ceil(width / cell_size))
    grid_h = int(math.ceil(height / cell_size))
    grid: Dict[Tuple[int, int], int] = {}
    min_dist_sq = min_distance * min_distance

    def grid_coords(x: float, y: float) -> Tuple[int, int]:
        return int(x / cell_size), int(y / cell_size)

    def far_enough(x: float, y: float) -> bool:
        gx, gy = grid_coords(x, y)
        for nx in range(max(0, gx - 2), min(grid_w, gx + 3)):
            for ny in range(max(0, gy - 2), min(grid_h, gy + 3)):
                sidx = grid.get((nx, ny))
                if sidx is None:
                    continue
                sx, sy = samples[sidx]
                if (sx - x) ** 2 + (sy - y) ** 2 < min_dist_sq:
                    return False
        return True

    samples: List[Point] = []
    active: List[int] = []

    x0 = prng.uniform(0, width)
    y0 = prng.uniform(0, height)
    samples.append((x0, y0))
    grid[grid_coords(x0, y0)] = 0
    active.append(0)

    while active:
        slot = int(prng.random() * len(active))
        base_x, base_y = samples[active[slot]]
        found = False

        for _ in range(tries):
            angle = prng.uniform(0, 2.0 * math.pi)
            radius = prng.uniform(min_distance, max_distance)
            x = base_x + radius * math.cos(angle)
            y = base_y + radius * math.sin(angle)

            if x < 0 or y < 0 or x >= width or y >= height:
                continue
            if not far_enough(x, y):
                continue

            samples.append((x, y))
            grid[grid_coords(x, y)] = len(samples) - 1
            active.append(len(samples) - 1)
            found = True
            break

        if not found:
            active.pop(slot)

    logger.debug("Poisson sampling complete", samples=len(samples),
                 width=width, height=height, min_distance=min_distance)
    return samples
