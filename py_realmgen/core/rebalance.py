"""
Partition repair after growth.

Passes, in order:

1. Orphan absorption - pooled tiles join the group with the nearest centroid.
2. Count repair - the largest group is bisected by index until enough groups
   are populated.
3. Fragment merge - every group keeps its largest component; the other
   components join the neighbouring group they touch most.
4. Boundary exchange - undersized groups pull edge-adjacent tiles from
   larger donors, never disconnecting a donor.

Size minimums are best effort. The group count is not: exactly
``target_count`` groups always come back.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

import structlog

from .adjacency import AdjacencyGraph
from .connectivity import is_connected, split_components
from .geometry import Point, Tile, polygon_centroid, squared_distance

logger = structlog.get_logger()

MAX_EXCHANGE_ROUNDS = 20


class Transfer(NamedTuple):
    """One tile moved by boundary exchange."""
    tile: int
    donor: int
    recipient: int


@dataclass
class RebalanceResult:
    groups: List[List[int]]
    transfers: List[Transfer] = field(default_factory=list)


class _CentroidCache:
    """Lazily computed tile centroids keyed by arena index."""

    def __init__(self, tiles: Sequence[Tile]):
        self.tiles = tiles
        self._cache: Dict[int, Point] = {}

    def __getitem__(self, idx: int) -> Point:
        point = self._cache.get(idx)
        if point is None:
            point = polygon_centroid(self.tiles[idx])
            self._cache[idx] = point
        return point

    def group_centroid(self, group: Sequence[int]) -> Point:
        sx = sum(self[idx][0] for idx in group)
        sy = sum(self[idx][1] for idx in group)
        return (sx / len(group), sy / len(group))


def absorb_orphans(groups: List[List[int]], pool: Sequence[int],
                   centroids: _CentroidCache) -> None:
    """Append each pooled tile to the group whose centroid is nearest."""
    if not pool:
        return

    sums: List[Optional[Tuple[float, float, int]]] = []
    for group in groups:
        if group:
            cx, cy = centroids.group_centroid(group)
            sums.append((cx * len(group), cy * len(group), len(group)))
        else:
            sums.append(None)

    if all(s is None for s in sums):
        groups[0].extend(pool)
        return

    for idx in pool:
        point = centroids[idx]
        best = None
        best_dist = float("inf")
        for g, acc in enumerate(sums):
            if acc is None:
                continue
            sx, sy, n = acc
            d = squared_distance(point, (sx / n, sy / n))
            if d < best_dist:
                best_dist = d
                best = g
        groups[best].append(idx)
        sx, sy, n = sums[best]
        sums[best] = (sx + point[0], sy + point[1], n + 1)


def repair_count(groups: List[List[int]], min_tiles: int, target_count: int) -> int:
    """
    Bisect the largest group by index until ``target_count`` groups are populated.

    The first half of the largest group's tile list moves into an empty slot.
    Stops once the largest group has no more than ``2 * min_tiles`` tiles.

    Returns:
        Number of splits performed
    """
    splits = 0
    while sum(1 for g in groups if g) < target_count:
        largest = max(range(len(groups)), key=lambda i: len(groups[i]))
        if len(groups[largest]) <= min_tiles * 2:
            break
        half = len(groups[largest]) // 2
        empty = next(i for i, g in enumerate(groups) if not g)
        groups[empty] = groups[largest][:half]
        groups[largest] = groups[largest][half:]
        splits += 1
    return splits


def merge_fragments(groups: List[List[int]], adjacency: AdjacencyGraph) -> int:
    """
    Reduce every group to one component.

    Each non-largest component moves to the neighbouring group sharing the
    most adjacency links with it. Components touching no other group stay
    where they are.

    Returns:
        Number of fragments moved
    """
    moved_total = 0
    for _ in range(len(groups) + 1):
        owner = {idx: g for g, group in enumerate(groups) for idx in group}
        moved = 0

        for g in range(len(groups)):
            components = split_components(groups[g], adjacency)
            if len(components) <= 1:
                continue

            keep = max(components, key=len)
            stay = set(keep)
            for fragment in components:
                if fragment is keep:
                    continue
                links = Counter(
                    owner[n]
                    for idx in fragment
                    for n in adjacency.neighbors(idx)
                    if n in owner and owner[n] != g
                )
                if not links:
                    stay.update(fragment)
                    continue
                target = min(links, key=lambda h: (-links[h], h))
                groups[target].extend(fragment)
                for idx in fragment:
                    owner[idx] = target
                moved += 1

            groups[g] = [idx for idx in groups[g] if idx in stay]

        moved_total += moved
        if not moved:
            break

    return moved_total


def _removable(donor: Sequence[int], tile: int, adjacency: AdjacencyGraph) -> bool:
    remaining = [idx for idx in donor if idx != tile]
    return is_connected(remaining, adjacency)


def find_transfer(groups: List[List[int]], recipient: int, adjacency: AdjacencyGraph,
                  min_tiles: int) -> Optional[Tuple[int, int]]:
    """
    First safe (tile, donor) move into ``recipient``.

    A donor must hold more than ``min_tiles`` tiles and stay connected
    without the tile. The tile must share an edge with the recipient, unless
    the recipient is empty, in which case any safe tile of the largest donor
    qualifies.
    """
    members = set(groups[recipient])
    donors = [
        d for d in range(len(groups))
        if d != recipient and len(groups[d]) > min_tiles
    ]

    if not members:
        if not donors:
            return None
        donor = max(donors, key=lambda d: len(groups[d]))
        for idx in groups[donor]:
            if _removable(groups[donor], idx, adjacency):
                return idx, donor
        return None

    for donor in donors:
        for idx in groups[donor]:
            if adjacency.neighbors(idx) & members and _removable(groups[donor], idx, adjacency):
                return idx, donor
    return None


def exchange_boundary_tiles(groups: List[List[int]], adjacency: AdjacencyGraph,
                            min_tiles: int,
                            max_rounds: int = MAX_EXCHANGE_ROUNDS) -> List[Transfer]:
    """Top up undersized groups with safe boundary tiles from larger donors."""
    transfers: List[Transfer] = []

    for _ in range(max_rounds):
        deficient = [g for g in range(len(groups)) if len(groups[g]) < min_tiles]
        if not deficient:
            break

        moved = 0
        for g in deficient:
            while len(groups[g]) < min_tiles:
                move = find_transfer(groups, g, adjacency, min_tiles)
                if move is None:
                    break
                idx, donor = move
                groups[donor].remove(idx)
                groups[g].append(idx)
                transfers.append(Transfer(idx, donor, g))
                moved += 1

        if not moved:
            break

    return transfers


def rebalance(groups: Sequence[Sequence[int]], pool: Sequence[int], tiles: Sequence[Tile],
              adjacency: AdjacencyGraph, min_tiles: int, target_count: int) -> RebalanceResult:
    """
    Repair a grown partition into ``target_count`` connected groups.

    Args:
        groups: Grown groups (arena indices), each ideally connected
        pool: Orphan tiles not held by any group
        tiles: Tile arena, used for centroids
        adjacency: Graph over the arena
        min_tiles: Soft minimum group size
        target_count: Exact number of groups to return

    Returns:
        RebalanceResult with exactly ``target_count`` groups covering every
        input tile once, plus the boundary-exchange transfer log
    """
    working = [list(g) for g in groups[:target_count]]
    orphans = list(pool)
    for extra in groups[target_count:]:
        orphans.extend(extra)
    while len(working) < target_count:
        working.append([])

    centroids = _CentroidCache(tiles)
    absorb_orphans(working, orphans, centroids)
    splits = repair_count(working, min_tiles, target_count)
    fragments = merge_fragments(working, adjacency)
    transfers = exchange_boundary_tiles(working, adjacency, min_tiles)

    undersized = [g for g in range(target_count) if len(working[g]) < min_tiles]
    if undersized:
        logger.warning("Groups left below minimum size",
                       groups=undersized, min_tiles=min_tiles,
                       sizes=[len(working[g]) for g in undersized])

    logger.info("Partition rebalanced",
                orphans=len(orphans), splits=splits, fragments=fragments,
                transfers=len(transfers), sizes=[len(g) for g in working])
    return RebalanceResult(groups=working, transfers=transfers)
