"""One routine for every level of the region/country hierarchy."""

from typing import List, Optional, Sequence

import structlog

from .adjacency import AdjacencyGraph
from .alea_prng import AleaPRNG
from .geometry import BBox, Tile
from .rebalance import rebalance
from .region_growth import grow_regions
from ..config.options import SeedingOptions

logger = structlog.get_logger()


def partition_into_connected_groups(tiles: Sequence[Tile], members: Sequence[int],
                                    group_count: int, min_tiles: int, prng: AleaPRNG,
                                    adjacency: Optional[AdjacencyGraph] = None,
                                    seeding: Optional[SeedingOptions] = None,
                                    frame: Optional[BBox] = None) -> List[List[int]]:
    """
    Split a tile subset into ``group_count`` connected groups.

    Growth seeds and floods the groups, the rebalancer repairs orphans,
    missing groups, fragments and undersized groups.

    Args:
        tiles: Tile arena
        members: Arena indices to split
        group_count: Exact number of groups to return
        min_tiles: Soft minimum group size
        prng: Random source
        adjacency: Graph over the arena, built over ``members`` when None
        seeding: Seed placement knobs
        frame: Map rectangle for fallback seed placement

    Returns:
        ``group_count`` lists of arena indices covering ``members`` once each
    """
    logger.debug("Partitioning tiles",
                 members=len(members), groups=group_count, min_tiles=min_tiles)
    if not members:
        return [[] for _ in range(group_count)]

    if adjacency is None:
        adjacency = AdjacencyGraph.build(tiles, members)

    growth = grow_regions(tiles, members, group_count, prng,
                          adjacency=adjacency, options=seeding, frame=frame)
    result = rebalance(growth.groups, growth.pool, tiles, growth.adjacency,
                       min_tiles, group_count)
    return result.groups
