"""
Mainland selection with a radial bump function.

Each tile is classified by where its centroid falls relative to two wavy
radii around an origin. The land candidates are then reduced to their
largest connected component so that the mainland is one contiguous body.
"""

import math
from typing import List, Optional, Sequence

import structlog

from .adjacency import AdjacencyGraph
from .connectivity import largest_component
from .geometry import Point, Tile, polygon_centroid
from ..config.options import LandmassOptions

logger = structlog.get_logger()

ISLAND_FACTOR = 1


def is_land(tile: Tile, origin: Point, start_angle: float, bumps: int,
            scale: float, pixel_scale: float) -> bool:
    """
    Classify a tile as land or water.

    The angle term pairs the y offset with the origin's x coordinate and the
    x offset with its y coordinate; the coastline shape depends on exactly
    this pairing.

    Args:
        tile: Tile polygon
        origin: Center of the landmass
        start_angle: Rotational phase of the lobes
        bumps: Number of lobes
        scale: Radius multiplier
        pixel_scale: Base radius in canvas units

    Returns:
        True when the tile centroid lies inside the coastline
    """
    cx, cy = polygon_centroid(tile)
    ox, oy = origin

    dist_to_center = math.sqrt((cx - ox) ** 2 + (cy - oy) ** 2)
    angle = math.atan2(cy - ox, cx - oy)
    length = 0.5 * (max(abs(cx - ox), abs(cy - oy)) + dist_to_center)

    r1 = (
        (0.5 + 0.4 * math.sin(start_angle + bumps * angle + math.cos((bumps + 3) * angle)))
        * pixel_scale
        * scale
    )
    r2 = (
        (0.7 - 0.2 * math.sin(start_angle + bumps * angle - math.sin((bumps + 2) * angle)))
        * pixel_scale
        * scale
    )

    return length < r1 or (length > r1 * ISLAND_FACTOR and length < r2)


def select_land(tiles: Sequence[Tile], origin: Point, pixel_scale: float,
                options: Optional[LandmassOptions] = None) -> List[int]:
    """Indices of every tile classified as land, in arena order."""
    options = options or LandmassOptions()
    return [
        idx for idx, tile in enumerate(tiles)
        if is_land(tile, origin, options.start_angle, options.bumps,
                   options.scale, pixel_scale)
    ]


def build_mainland(tiles: Sequence[Tile], adjacency: AdjacencyGraph, origin: Point,
                   pixel_scale: float,
                   options: Optional[LandmassOptions] = None) -> List[int]:
    """
    Carve the mainland out of the full tessellation.

    Args:
        tiles: Tile arena
        adjacency: Graph over the arena
        origin: Landmass center (the map center)
        pixel_scale: Base radius in canvas units
        options: Bump function shape

    Returns:
        Arena indices of the largest connected land component, empty when
        no tile qualifies
    """
    candidates = select_land(tiles, origin, pixel_scale, options)
    if not candidates:
        logger.warning("No land tiles selected", tiles=len(tiles))
        return []

    mainland = largest_component(candidates, adjacency)
    logger.info("Mainland selected",
                candidates=len(candidates), mainland=len(mainland),
                dropped=len(candidates) - len(mainland))
    return mainland
