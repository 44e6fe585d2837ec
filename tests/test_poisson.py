"""Tests for Poisson-disk sampling."""

import itertools
import math

from py_realmgen.core.alea_prng import AleaPRNG
from py_realmgen.core.poisson import poisson_disk_sample


class TestPoissonDiskSample:
    """Blue-noise spacing and bounds."""

    def test_points_inside_domain(self):
        points = poisson_disk_sample(200, 100, 10, 20, 10, AleaPRNG("bounds"))
        assert len(points) > 10
        for x, y in points:
            assert 0 <= x < 200
            assert 0 <= y < 100

    def test_minimum_spacing(self):
        points = poisson_disk_sample(150, 150, 12, 24, 10, AleaPRNG("spacing"))
        for a, b in itertools.combinations(points, 2):
            assert math.dist(a, b) >= 12 - 1e-9

    def test_deterministic(self):
        first = poisson_disk_sample(100, 100, 10, 20, 10, AleaPRNG("same"))
        second = poisson_disk_sample(100, 100, 10, 20, 10, AleaPRNG("same"))
        assert first == second

    def test_fills_domain(self):
        """No large gaps: the sampler keeps going until every active sample is retired."""
        points = poisson_disk_sample(100, 100, 10, 20, 30, AleaPRNG("fill"))
        # a 10-spaced hexagonal packing holds ~115 points; a sparse fill still exceeds 40
        assert len(points) > 40

    def test_degenerate_inputs(self):
        prng = AleaPRNG("degenerate")
        assert poisson_disk_sample(0, 100, 10, 20, 10, prng) == []
        assert poisson_disk_sample(100, 100, 0, 20, 10, prng) == []

    def test_domain_smaller_than_spacing(self):
        points = poisson_disk_sample(5, 5, 20, 40, 10, AleaPRNG("tiny"))
        assert len(points) == 1
