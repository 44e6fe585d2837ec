"""Connected-component extraction over a tile subset."""

from collections import deque
from typing import List, Sequence

from .adjacency import AdjacencyGraph


def split_components(members: Sequence[int], adjacency: AdjacencyGraph) -> List[List[int]]:
    """
    Split a tile subset into its connected components.

    Breadth-first traversal from each not-yet-visited member, in member
    order, following only neighbours that are themselves members.

    Args:
        members: Arena indices of the subset
        adjacency: Graph covering at least ``members``

    Returns:
        Components in discovery order, each in BFS order
    """
    member_set = set(members)
    visited = set()
    components: List[List[int]] = []

    for start in members:
        if start in visited:
            continue
        visited.add(start)
        queue = deque([start])
        component = []
        while queue:
            u = queue.popleft()
            component.append(u)
            for v in sorted(adjacency.neighbors(u)):
                if v in member_set and v not in visited:
                    visited.add(v)
                    queue.append(v)
        components.append(component)

    return components


def largest_component(members: Sequence[int], adjacency: AdjacencyGraph) -> List[int]:
    """Largest connected component; ties go to the first one discovered."""
    best: List[int] = []
    for component in split_components(members, adjacency):
        if len(component) > len(best):
            best = component
    return best


def is_connected(members: Sequence[int], adjacency: AdjacencyGraph) -> bool:
    """True for a non-empty subset forming exactly one component."""
    return len(split_components(members, adjacency)) == 1
