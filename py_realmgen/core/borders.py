"""Outer boundary of a tile group by edge-pair cancellation."""

from typing import Dict, List, Sequence

from .geometry import Edge, Tile, tile_edges


def boundary_edges(tiles: Sequence[Tile], group: Sequence[int]) -> List[Edge]:
    """
    Directed segments on the outer boundary of a group.

    An edge whose reverse is already recorded is internal: both copies are
    cancelled. The survivors are not stitched into loops.

    Args:
        tiles: Tile arena
        group: Arena indices of the group members

    Returns:
        Boundary edges in first-seen order
    """
    recorded: Dict[Edge, None] = {}
    for idx in group:
        for a, b in tile_edges(tiles[idx]):
            if (b, a) in recorded:
                del recorded[(b, a)]
            else:
                recorded[(a, b)] = None
    return list(recorded)
