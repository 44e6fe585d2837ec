"""
Blue-noise Voronoi tessellation of a bounding rectangle.

The sites come from Poisson-disk sampling. Like the boundary points of a
pseudo-clipped grid, every site is mirrored across the four rectangle sides
before the diagram is computed: the real cells then close exactly on the
rectangle border, so clipping reduces to clamping rounding noise.

Shared Voronoi edges reference the same vertex entries on both sides, so
neighbouring tiles carry bit-identical endpoint coordinates. Each tile is
wound counter-clockwise around its site, which means a shared edge appears
as (a, b) in one tile and (b, a) in the other.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
import structlog
from scipy.spatial import Voronoi

from .alea_prng import AleaPRNG
from .geometry import BBox, Point, Tile
from .poisson import poisson_disk_sample
from ..config.options import TessellationOptions

logger = structlog.get_logger()

MIN_TILE_VERTICES = 4
SNAP_TOLERANCE = 1e-9


@dataclass
class Tessellation:
    """Immutable tile arena produced once per generation run."""
    bbox: BBox
    tiles: List[Tile]
    sites: np.ndarray
    discarded: List[Tile] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.tiles)


def mirror_sites(sites: np.ndarray, bbox: BBox) -> np.ndarray:
    """Reflect sites across the left, right, top and bottom rectangle sides."""
    left = sites.copy()
    left[:, 0] = 2 * bbox.x0 - left[:, 0]
    right = sites.copy()
    right[:, 0] = 2 * bbox.x1 - right[:, 0]
    top = sites.copy()
    top[:, 1] = 2 * bbox.y0 - top[:, 1]
    bottom = sites.copy()
    bottom[:, 1] = 2 * bbox.y1 - bottom[:, 1]
    return np.vstack([sites, left, right, top, bottom])


def _dedupe_ring(points: List[Point]) -> List[Point]:
    """Drop consecutive duplicates, including a duplicate closing point."""
    ring: List[Point] = []
    for p in points:
        if not ring or ring[-1] != p:
            ring.append(p)
    while len(ring) > 1 and ring[0] == ring[-1]:
        ring.pop()
    return ring


def build_cell_polygons(sites: np.ndarray, bbox: BBox) -> List[Optional[Tile]]:
    """
    Compute the rectangle-clipped Voronoi polygon of every site.

    Args:
        sites: (n, 2) array of sites strictly inside ``bbox``
        bbox: Clipping rectangle

    Returns:
        One counter-clockwise polygon per site, or None for a site whose
        region could not be closed
    """
    n_sites = len(sites)
    if n_sites == 0:
        return []

    vor = Voronoi(mirror_sites(sites, bbox))
    logger.debug("Voronoi diagram calculated",
                 vertices=len(vor.vertices), ridges=len(vor.ridge_points))

    # Clamp and snap once on the shared vertex array so both sides of an edge agree
    vertices = np.clip(vor.vertices, [bbox.x0, bbox.y0], [bbox.x1, bbox.y1])
    tol = SNAP_TOLERANCE * max(bbox.width, bbox.height)
    for col, (lo, hi) in enumerate(((bbox.x0, bbox.x1), (bbox.y0, bbox.y1))):
        vertices[np.abs(vertices[:, col] - lo) < tol, col] = lo
        vertices[np.abs(vertices[:, col] - hi) < tol, col] = hi

    polygons: List[Optional[Tile]] = []
    for i in range(n_sites):
        region = vor.regions[vor.point_region[i]]
        if not region or -1 in region:
            polygons.append(None)
            continue

        sx, sy = sites[i]
        ordered = sorted(
            region,
            key=lambda v: math.atan2(vor.vertices[v][1] - sy, vor.vertices[v][0] - sx),
        )
        ring = _dedupe_ring(
            [(float(vertices[v][0]), float(vertices[v][1])) for v in ordered]
        )
        polygons.append(tuple(ring))

    return polygons


def tessellate(bbox: BBox, prng: AleaPRNG,
               options: Optional[TessellationOptions] = None) -> Tessellation:
    """
    Cover ``bbox`` with Voronoi tiles grown from Poisson-disk sites.

    Cells with fewer than four vertices are treated as degenerate and kept
    out of the arena; they are reported in ``Tessellation.discarded``.

    Args:
        bbox: Bounding rectangle
        prng: Random source for site sampling
        options: Sampling density knobs

    Returns:
        Tessellation with the kept tiles indexed by position
    """
    options = options or TessellationOptions()
    logger.info("Generating tessellation",
                x0=bbox.x0, y0=bbox.y0, width=bbox.width, height=bbox.height,
                min_distance=options.min_distance, max_distance=options.max_distance)

    raw = poisson_disk_sample(bbox.width, bbox.height, options.min_distance,
                              options.max_distance, options.tries, prng)
    sites = np.array(
        [(x + bbox.x0, y + bbox.y0) for x, y in raw
         if 0 < x < bbox.width and 0 < y < bbox.height],
        dtype=float,
    ).reshape(-1, 2)

    tiles: List[Tile] = []
    kept_sites = []
    discarded: List[Tile] = []
    for site, polygon in zip(sites, build_cell_polygons(sites, bbox)):
        if polygon is None:
            continue
        if len(polygon) < MIN_TILE_VERTICES:
            discarded.append(polygon)
            continue
        tiles.append(polygon)
        kept_sites.append(site)

    logger.info("Tessellation complete",
                sites=len(sites), tiles=len(tiles), discarded=len(discarded))

    return Tessellation(
        bbox=bbox,
        tiles=tiles,
        sites=np.array(kept_sites, dtype=float).reshape(-1, 2),
        discarded=discarded,
    )
