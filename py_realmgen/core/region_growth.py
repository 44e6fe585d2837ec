"""
Seeded multi-source region growth.

Seed centers are placed inside the tile set, every tile is labelled with its
nearest center, and each group then grows from its seed region by
simultaneous round-robin flood fill over the adjacency graph. Groups are
connected by construction; whatever no seed region can reach is handed back
as an orphan pool for the rebalancer.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import structlog

from .adjacency import AdjacencyGraph
from .alea_prng import AleaPRNG
from .connectivity import largest_component, split_components
from .geometry import (
    BBox,
    Point,
    Tile,
    convex_hull,
    points_bounds,
    polygon_centroid,
    polygon_contains,
    squared_distance,
)
from .poisson import poisson_disk_sample
from ..config.options import SeedingOptions

logger = structlog.get_logger()


@dataclass
class GrowthResult:
    """Output of one growth pass."""
    groups: List[List[int]]
    pool: List[int]
    adjacency: AdjacencyGraph
    centers: List[Point]


def jittered_centers(count: int, center: Point, jitter: float, prng: AleaPRNG) -> List[Point]:
    """Centers scattered uniformly in a box of half-width ``jitter``."""
    cx, cy = center
    return [
        (cx + prng.uniform(-jitter, jitter), cy + prng.uniform(-jitter, jitter))
        for _ in range(count)
    ]


def ellipse_centers(count: int, frame: BBox, radius: float, prng: AleaPRNG) -> List[Point]:
    """
    Centers evenly spaced in angle on an ellipse around the frame center.

    The vertical radius follows the frame's aspect ratio and the starting
    angle is a random whole degree.
    """
    h, k = frame.center
    a = radius
    b = a * frame.height / frame.width if frame.width else a

    angle = prng.randint(0, 360)
    step = int(math.floor(360 / count + 0.5))
    centers = []
    for _ in range(count):
        t = angle * math.pi / 180
        centers.append((h + a * math.cos(t), k + b * math.sin(t)))
        angle += step
        if angle > 360:
            angle -= 360
    return centers


def generate_seed_centers(tiles: Sequence[Tile], members: Sequence[int], count: int,
                          prng: AleaPRNG, options: Optional[SeedingOptions] = None,
                          frame: Optional[BBox] = None) -> List[Point]:
    """
    Place ``count`` seed centers inside the convex hull of the members.

    Blue-noise samples over the hull's bounding box are kept when they fall
    inside the hull. A shortfall is topped up by uniform rejection sampling
    and, if that budget runs out, by jitter around the fallback center.

    Args:
        tiles: Tile arena
        members: Arena indices of the tile set being partitioned
        count: Number of centers wanted
        prng: Random source
        options: Seeding knobs
        frame: Map rectangle; its center is the fallback center

    Returns:
        Exactly ``count`` centers
    """
    options = options or SeedingOptions()
    if count <= 0:
        return []

    vertices = [p for idx in members for p in tiles[idx]]
    if frame is None:
        frame = points_bounds(vertices) if vertices else BBox(0.0, 0.0, 0.0, 0.0)

    if options.strategy == "ellipse":
        return ellipse_centers(count, frame, options.ellipse_radius, prng)

    hull = convex_hull(vertices) if vertices else None
    if hull is None or len(hull) < 3:
        logger.warning("Degenerate hull, using jittered centers",
                       members=len(members), count=count)
        return jittered_centers(count, frame.center, options.fallback_jitter, prng)

    bounds = points_bounds(hull)
    span = bounds.width + bounds.height
    raw = poisson_disk_sample(
        bounds.width,
        bounds.height,
        max(30.0, span / 40),
        max(60.0, span / 25),
        options.poisson_tries,
        prng,
    )

    centers: List[Point] = []
    for x, y in raw:
        if len(centers) >= count:
            break
        candidate = (x + bounds.x0, y + bounds.y0)
        if polygon_contains(hull, candidate):
            centers.append(candidate)

    attempts = 0
    while len(centers) < count and attempts < options.rejection_attempts:
        attempts += 1
        candidate = (prng.uniform(bounds.x0, bounds.x1), prng.uniform(bounds.y0, bounds.y1))
        if polygon_contains(hull, candidate):
            centers.append(candidate)

    if len(centers) < count:
        logger.warning("Seed sampling short, padding with jitter",
                       wanted=count, sampled=len(centers))
        centers.extend(
            jittered_centers(count - len(centers), frame.center, options.fallback_jitter, prng)
        )

    return centers


def assign_nearest(centroids: Dict[int, Point], members: Sequence[int],
                   centers: Sequence[Point]) -> List[List[int]]:
    """Label every member with its nearest center (first center wins ties)."""
    labels: List[List[int]] = [[] for _ in centers]
    for idx in members:
        best = 0
        best_dist = math.inf
        for i, center in enumerate(centers):
            d = squared_distance(centroids[idx], center)
            if d < best_dist:
                best_dist = d
                best = i
        labels[best].append(idx)
    return labels


def _seed_region(labelled: List[int], center: Point, centroids: Dict[int, Point],
                 adjacency: AdjacencyGraph) -> List[int]:
    """Component of a group's labelled tiles that holds the tile nearest its center."""
    if not labelled:
        return []
    anchor = min(labelled, key=lambda idx: squared_distance(centroids[idx], center))
    for component in split_components(labelled, adjacency):
        if anchor in component:
            return component
    return [anchor]


def flood_fill(seed_regions: List[List[int]], members: Sequence[int],
               adjacency: AdjacencyGraph) -> List[List[int]]:
    """
    Grow every seed region one adjacency layer per round, round-robin.

    A tile goes to the first group that reaches it; group order breaks ties.
    Stops when a full round claims nothing.

    Returns:
        Groups in claim order (seed region first)
    """
    member_set = set(members)
    owner: Dict[int, int] = {}
    groups: List[List[int]] = []
    frontiers: List[List[int]] = []

    for g, region in enumerate(seed_regions):
        claimed = [idx for idx in region if idx not in owner]
        for idx in claimed:
            owner[idx] = g
        groups.append(list(claimed))
        frontiers.append(list(claimed))

    changed = True
    while changed:
        changed = False
        for g in range(len(groups)):
            next_frontier = []
            for idx in frontiers[g]:
                for neighbor in sorted(adjacency.neighbors(idx)):
                    if neighbor in member_set and neighbor not in owner:
                        owner[neighbor] = g
                        groups[g].append(neighbor)
                        next_frontier.append(neighbor)
                        changed = True
            frontiers[g] = next_frontier

    return groups


def grow_regions(tiles: Sequence[Tile], members: Sequence[int], count: int, prng: AleaPRNG,
                 adjacency: Optional[AdjacencyGraph] = None,
                 options: Optional[SeedingOptions] = None,
                 frame: Optional[BBox] = None) -> GrowthResult:
    """
    Grow ``count`` connected groups over a tile subset.

    Args:
        tiles: Tile arena
        members: Arena indices to partition
        count: Number of groups
        prng: Random source for seeding
        adjacency: Graph over the arena (built over ``members`` when None)
        options: Seeding knobs
        frame: Map rectangle for fallback placement

    Returns:
        GrowthResult with ``count`` (possibly empty) connected groups, the
        orphan pool and the adjacency graph
    """
    if adjacency is None:
        adjacency = AdjacencyGraph.build(tiles, members)

    centers = generate_seed_centers(tiles, members, count, prng, options, frame)
    centroids = {idx: polygon_centroid(tiles[idx]) for idx in members}
    labels = assign_nearest(centroids, members, centers)

    seed_regions = [
        _seed_region(labelled, center, centroids, adjacency)
        for labelled, center in zip(labels, centers)
    ]
    grown = flood_fill(seed_regions, members, adjacency)

    claimed = {idx for group in grown for idx in group}
    pool = [idx for idx in members if idx not in claimed]

    groups: List[List[int]] = []
    for group in grown:
        keep = largest_component(group, adjacency)
        keep_set = set(keep)
        pool.extend(idx for idx in group if idx not in keep_set)
        groups.append([idx for idx in group if idx in keep_set])

    logger.info("Regions grown",
                members=len(members), groups=count,
                sizes=[len(g) for g in groups], orphans=len(pool))
    return GrowthResult(groups=groups, pool=pool, adjacency=adjacency, centers=list(centers))
