"""Tile neighbour relation built from exactly shared, reversed edges."""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Set

import structlog

from .geometry import Edge, Tile, tile_edges

logger = structlog.get_logger()


@dataclass
class AdjacencyGraph:
    """
    Symmetric tile-index -> neighbour-index mapping.

    Two tiles are neighbours iff one holds the directed edge (a, b) and the
    other holds (b, a) with bit-identical coordinates. Built once per arena;
    any subset query filters on membership rather than rebuilding.
    """
    neighbors_by_tile: Dict[int, Set[int]]

    @classmethod
    def build(cls, tiles: Sequence[Tile],
              indices: Optional[Iterable[int]] = None) -> "AdjacencyGraph":
        """
        Pair every directed edge with its reverse.

        Args:
            tiles: Tile arena
            indices: Arena indices to include (all tiles when None)

        Returns:
            AdjacencyGraph over the included indices
        """
        ids = range(len(tiles)) if indices is None else list(indices)
        graph: Dict[int, Set[int]] = {idx: set() for idx in ids}
        edge_owner: Dict[Edge, int] = {}

        for idx in ids:
            for a, b in tile_edges(tiles[idx]):
                other = edge_owner.get((b, a))
                if other is not None and other != idx:
                    graph[idx].add(other)
                    graph[other].add(idx)
                else:
                    edge_owner[(a, b)] = idx

        logger.debug("Adjacency built", tiles=len(graph))
        return cls(graph)

    def neighbors(self, idx: int) -> Set[int]:
        return self.neighbors_by_tile.get(idx, set())

    def subgraph(self, indices: Iterable[int]) -> "AdjacencyGraph":
        members = set(indices)
        return AdjacencyGraph(
            {idx: self.neighbors(idx) & members for idx in members}
        )

    def are_adjacent(self, a: int, b: int) -> bool:
        return b in self.neighbors(a)

    def is_symmetric(self) -> bool:
        return all(
            idx in self.neighbors(other)
            for idx, others in self.neighbors_by_tile.items()
            for other in others
        )

    @property
    def edge_count(self) -> int:
        return sum(len(others) for others in self.neighbors_by_tile.values()) // 2

    def __contains__(self, idx: int) -> bool:
        return idx in self.neighbors_by_tile

    def __len__(self) -> int:
        return len(self.neighbors_by_tile)

    def indices(self) -> List[int]:
        return list(self.neighbors_by_tile)
