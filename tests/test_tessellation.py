"""Tests for the blue-noise Voronoi tessellation."""

import numpy as np
import pytest

from py_realmgen.config.options import TessellationOptions
from py_realmgen.core.adjacency import AdjacencyGraph
from py_realmgen.core.alea_prng import AleaPRNG
from py_realmgen.core.geometry import BBox, polygon_area, tile_edges
from py_realmgen.core.tessellation import MIN_TILE_VERTICES, mirror_sites, tessellate

TEST_BBOX = BBox(100.0, 100.0, 600.0, 400.0)


@pytest.fixture(scope="module")
def tessellation():
    return tessellate(TEST_BBOX, AleaPRNG("test_seed"))


class TestMirrorSites:

    def test_mirror_count_and_positions(self):
        bbox = BBox(0.0, 0.0, 10.0, 10.0)
        sites = np.array([[2.0, 3.0]])
        mirrored = mirror_sites(sites, bbox)
        assert mirrored.shape == (5, 2)
        expected = {(2.0, 3.0), (-2.0, 3.0), (18.0, 3.0), (2.0, -3.0), (2.0, 17.0)}
        assert {tuple(p) for p in mirrored} == expected


class TestTessellation:
    """Coverage, winding and adjacency of generated tiles."""

    def test_tiles_generated(self, tessellation):
        assert len(tessellation) > 50
        assert len(tessellation.sites) == len(tessellation.tiles)

    def test_minimum_vertex_count(self, tessellation):
        for tile in tessellation.tiles:
            assert len(tile) >= MIN_TILE_VERTICES

    def test_vertices_inside_rectangle(self, tessellation):
        for tile in tessellation.tiles:
            for x, y in tile:
                assert TEST_BBOX.x0 <= x <= TEST_BBOX.x1
                assert TEST_BBOX.y0 <= y <= TEST_BBOX.y1

    def test_area_covers_rectangle(self, tessellation):
        """Kept plus discarded cells tile the rectangle without overlap."""
        kept = sum(abs(polygon_area(t)) for t in tessellation.tiles)
        dropped = sum(abs(polygon_area(t)) for t in tessellation.discarded)
        assert kept + dropped == pytest.approx(TEST_BBOX.area, rel=1e-6)
        assert kept <= TEST_BBOX.area * (1 + 1e-9)

    def test_consistent_winding(self, tessellation):
        for tile in tessellation.tiles:
            assert polygon_area(tile) > 0

    def test_no_repeated_consecutive_vertices(self, tessellation):
        for tile in tessellation.tiles:
            for a, b in tile_edges(tile):
                assert a != b

    def test_shared_edges_are_reversed(self, tessellation):
        """Every interior edge is matched by its exact reverse in a neighbour."""
        edges = {}
        for idx, tile in enumerate(tessellation.tiles):
            for a, b in tile_edges(tile):
                edges[(a, b)] = idx
        bbox = TEST_BBOX
        for (a, b), idx in edges.items():
            on_border = (
                (a[0] == b[0] and a[0] in (bbox.x0, bbox.x1))
                or (a[1] == b[1] and a[1] in (bbox.y0, bbox.y1))
            )
            if on_border:
                continue
            if (b, a) in edges:
                assert edges[(b, a)] != idx

    def test_adjacency_symmetric_and_connected(self, tessellation):
        graph = AdjacencyGraph.build(tessellation.tiles)
        assert graph.is_symmetric()
        assert all(graph.neighbors(i) for i in range(len(tessellation)))

    def test_deterministic(self):
        first = tessellate(TEST_BBOX, AleaPRNG("repeat"))
        second = tessellate(TEST_BBOX, AleaPRNG("repeat"))
        assert first.tiles == second.tiles

    def test_different_seeds(self):
        first = tessellate(TEST_BBOX, AleaPRNG("seed1"))
        second = tessellate(TEST_BBOX, AleaPRNG("seed2"))
        assert first.tiles != second.tiles

    def test_density_options(self):
        sparse = tessellate(TEST_BBOX, AleaPRNG("density"),
                            TessellationOptions(min_distance=40, max_distance=80))
        dense = tessellate(TEST_BBOX, AleaPRNG("density"),
                           TessellationOptions(min_distance=15, max_distance=30))
        assert len(dense) > len(sparse)

    def test_single_site_fills_rectangle(self):
        bbox = BBox(0.0, 0.0, 10.0, 10.0)
        result = tessellate(bbox, AleaPRNG("single"),
                            TessellationOptions(min_distance=20, max_distance=40))
        assert len(result.tiles) == 1
        assert set(result.tiles[0]) == {(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)}
        assert polygon_area(result.tiles[0]) == pytest.approx(100.0)


class TestTessellationOptions:

    def test_band_validation(self):
        with pytest.raises(ValueError):
            TessellationOptions(min_distance=30, max_distance=10)
