"""Tests for partition repair passes."""

import pytest

from py_realmgen.core.adjacency import AdjacencyGraph
from py_realmgen.core.connectivity import is_connected, split_components
from py_realmgen.core.rebalance import (
    _CentroidCache,
    absorb_orphans,
    exchange_boundary_tiles,
    find_transfer,
    merge_fragments,
    rebalance,
    repair_count,
)


def _covers_once(groups, members):
    flat = [idx for group in groups for idx in group]
    return sorted(flat) == sorted(members)


class TestOrphanAbsorption:

    def test_orphans_join_nearest_group(self, square_grid):
        tiles = square_grid(6, 1)
        groups = [[0, 1], [4, 5]]
        absorb_orphans(groups, [2, 3], _CentroidCache(tiles))
        assert groups == [[0, 1, 2], [4, 5, 3]]

    def test_empty_groups_are_not_candidates(self, square_grid):
        tiles = square_grid(4, 1)
        groups = [[], [3]]
        absorb_orphans(groups, [0], _CentroidCache(tiles))
        assert groups == [[], [3, 0]]

    def test_all_empty_goes_to_first(self, square_grid):
        tiles = square_grid(3, 1)
        groups = [[], []]
        absorb_orphans(groups, [0, 1, 2], _CentroidCache(tiles))
        assert groups == [[0, 1, 2], []]


class TestCountRepair:

    def test_bisect_largest_by_index(self):
        groups = [list(range(10)), []]
        splits = repair_count(groups, min_tiles=2, target_count=2)
        assert splits == 1
        assert groups == [[5, 6, 7, 8, 9], [0, 1, 2, 3, 4]]

    def test_stops_when_largest_too_small(self):
        groups = [[0, 1, 2, 3], [], []]
        assert repair_count(groups, min_tiles=2, target_count=3) == 0
        assert groups == [[0, 1, 2, 3], [], []]

    def test_repeats_until_target(self):
        groups = [list(range(40)), [], [], []]
        repair_count(groups, min_tiles=3, target_count=4)
        assert all(groups)
        assert _covers_once(groups, range(40))


class TestFragmentMerge:

    def test_fragment_moves_to_touching_group(self, square_grid):
        tiles = square_grid(5, 1)
        graph = AdjacencyGraph.build(tiles)
        groups = [[0, 1, 4], [2, 3]]
        moved = merge_fragments(groups, graph)
        assert moved == 1
        assert groups == [[0, 1], [2, 3, 4]]

    def test_isolated_fragment_stays(self, square_grid):
        tiles = square_grid(5, 1)
        # 3 is left out of the graph, so 4 touches nothing
        graph = AdjacencyGraph.build(tiles, [0, 1, 4])
        groups = [[0, 1, 4], [3]]
        assert merge_fragments(groups, graph) == 0
        assert groups == [[0, 1, 4], [3]]

    def test_every_group_connected_after_merge(self, square_grid):
        tiles = square_grid(6, 6)
        graph = AdjacencyGraph.build(tiles)
        groups = [list(range(0, 36, 2)), list(range(1, 36, 2))]  # checkerboard stripes
        merge_fragments(groups, graph)
        assert _covers_once(groups, range(36))
        for group in groups:
            assert len(split_components(group, graph)) == 1


class TestBoundaryExchange:
    """Donors never lose connectivity."""

    def test_skips_articulation_tile(self, square_grid):
        # 0 1 2
        # 3 4 5
        # 6 7 8
        tiles = square_grid(3, 3)
        graph = AdjacencyGraph.build(tiles)
        groups = [[0], [3, 4, 6, 1], [2, 5, 7, 8]]
        assert find_transfer(groups, 0, graph, min_tiles=2) == (1, 1)

    def test_no_safe_move(self, square_grid):
        tiles = square_grid(3, 1)
        graph = AdjacencyGraph.build(tiles)
        groups = [[0], [1, 2]]
        assert find_transfer(groups, 0, graph, min_tiles=2) is None

    def test_transfers_keep_donor_connected(self, square_grid):
        tiles = square_grid(6, 6)
        graph = AdjacencyGraph.build(tiles)
        groups = [[0], [idx for idx in range(36) if idx != 0]]
        transfers = exchange_boundary_tiles(groups, graph, min_tiles=8)
        assert len(groups[0]) == 8
        assert len(transfers) == 7

        replay = [[0], [idx for idx in range(36) if idx != 0]]
        for tile, donor, recipient in transfers:
            replay[donor].remove(tile)
            replay[recipient].append(tile)
            assert len(split_components(replay[donor], graph)) == 1
            assert is_connected(replay[recipient], graph)
        assert replay == groups

    def test_empty_recipient_seeded_from_largest(self, square_grid):
        tiles = square_grid(4, 4)
        graph = AdjacencyGraph.build(tiles)
        groups = [list(range(16)), []]
        transfers = exchange_boundary_tiles(groups, graph, min_tiles=3)
        assert len(groups[1]) == 3
        assert transfers[0].donor == 0
        assert is_connected(groups[0], graph)
        assert is_connected(groups[1], graph)

    def test_round_budget(self, square_grid):
        tiles = square_grid(6, 6)
        graph = AdjacencyGraph.build(tiles)
        groups = [[0], [idx for idx in range(36) if idx != 0]]
        exchange_boundary_tiles(groups, graph, min_tiles=8, max_rounds=0)
        assert groups[0] == [0]


class TestRebalance:
    """Whole repair pipeline."""

    @pytest.mark.parametrize("target", [1, 2, 3, 5])
    def test_exact_group_count(self, square_grid, target):
        tiles = square_grid(8, 8)
        graph = AdjacencyGraph.build(tiles)
        result = rebalance([list(range(64))], [], tiles, graph, min_tiles=4, target_count=target)
        assert len(result.groups) == target
        assert _covers_once(result.groups, range(64))

    def test_extra_groups_are_folded_in(self, square_grid):
        tiles = square_grid(4, 4)
        graph = AdjacencyGraph.build(tiles)
        groups = [[0, 1, 4, 5], [2, 3, 6, 7], [8, 9, 12, 13], [10, 11, 14, 15]]
        result = rebalance(groups, [], tiles, graph, min_tiles=1, target_count=2)
        assert len(result.groups) == 2
        assert _covers_once(result.groups, range(16))

    def test_result_connected_and_sized(self, square_grid):
        tiles = square_grid(10, 10)
        graph = AdjacencyGraph.build(tiles)
        groups = [list(range(0, 50)), [], []]
        pool = list(range(50, 100))
        result = rebalance(groups, pool, tiles, graph, min_tiles=10, target_count=3)
        assert _covers_once(result.groups, range(100))
        for group in result.groups:
            assert len(group) >= 10
            assert is_connected(group, graph)

    def test_undersized_when_no_donor(self, square_grid):
        tiles = square_grid(3, 1)
        graph = AdjacencyGraph.build(tiles)
        result = rebalance([[0, 1, 2]], [], tiles, graph, min_tiles=5, target_count=2)
        assert len(result.groups) == 2
        assert result.groups[1] == []
        assert _covers_once(result.groups, range(3))
