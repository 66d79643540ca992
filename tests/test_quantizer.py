"""Tests for palette_tool.core.quantizer — fixed-budget k-means over RGB samples."""

import re

import numpy as np
import pytest
from palette_tool.core import quantizer
from palette_tool.core.errors import InvalidInput
from palette_tool.core.quantizer import assign, quantize, seed_centroids, update

HEX_RE = re.compile(r'^#[0-9a-f]{6}$')

DARK = (10, 20, 30)
LIGHT = (200, 210, 220)


def _two_tone() -> list[tuple[int, int, int]]:
    return [DARK] * 100 + [LIGHT] * 100


def _noise(n: int = 500, seed: int = 0) -> np.ndarray:
    return np.random.default_rng(seed).integers(0, 256, size=(n, 3))


class TestTwoToneScenario:
    def test_converges_to_both_colours(self):
        result = quantize(_two_tone(), k=2, max_iterations=5, seed_indices=[0, 100])
        assert result.centroids == [DARK, LIGHT]
        assert result.percentages == [50.0, 50.0]

    def test_hex_pairs(self):
        result = quantize(_two_tone(), k=2, max_iterations=5, seed_indices=[0, 100])
        assert result.pairs() == [('#0a141e', 50.0), ('#c8d2dc', 50.0)]

    def test_order_follows_seeds_not_population(self):
        samples = [DARK] * 30 + [LIGHT] * 170
        result = quantize(samples, k=2, max_iterations=3, seed_indices=[0, 30])
        assert result.centroids == [DARK, LIGHT]
        assert result.percentages[0] == pytest.approx(15.0)
        assert result.percentages[1] == pytest.approx(85.0)

    def test_counts_and_total(self):
        result = quantize(_two_tone(), k=2, max_iterations=5, seed_indices=[100, 0])
        assert [c.count for c in result] == [100, 100]
        assert result.total == 200
        assert result.centroids == [LIGHT, DARK]


class TestResultShape:
    @pytest.mark.parametrize('k', [1, 2, 5, 8])
    def test_exactly_k_clusters(self, k):
        result = quantize(_noise(), k=k, max_iterations=4, rng=np.random.default_rng(1))
        assert len(result) == k

    def test_percentages_in_range_and_sum_to_100(self):
        k = 5
        result = quantize(_noise(), k=k, max_iterations=10, rng=np.random.default_rng(2))
        for pct in result.percentages:
            assert 0.0 <= pct <= 100.0
        assert sum(result.percentages) == pytest.approx(100.0, abs=1e-6 * k)

    def test_hex_format(self):
        result = quantize(_noise(), k=6, max_iterations=3, rng=np.random.default_rng(3))
        for hex_colour, _pct in result.pairs():
            assert HEX_RE.match(hex_colour), hex_colour

    def test_k_larger_than_samples(self):
        result = quantize([(1, 2, 3), (4, 5, 6)], k=5, max_iterations=2, rng=np.random.default_rng(4))
        assert len(result) == 5
        assert sum(result.percentages) == pytest.approx(100.0)

    def test_iterations_recorded(self):
        result = quantize(_two_tone(), k=2, max_iterations=7, seed_indices=[0, 100])
        assert result.iterations == 7

    def test_accepts_uint8_array(self):
        """uint8 input must not wrap when differences are squared."""
        samples = np.array([[0, 0, 0], [255, 255, 255]], dtype=np.uint8)
        result = quantize(samples, k=2, max_iterations=2, seed_indices=[0, 1])
        assert result.pairs() == [('#000000', 50.0), ('#ffffff', 50.0)]


class TestDeterminism:
    def test_same_seed_indices_same_result(self):
        samples = _noise(300)
        a = quantize(samples, k=4, max_iterations=6, seed_indices=[3, 50, 120, 299])
        b = quantize(samples, k=4, max_iterations=6, seed_indices=[3, 50, 120, 299])
        assert a == b

    def test_same_generator_seed_same_result(self):
        samples = _noise(300)
        a = quantize(samples, k=4, max_iterations=6, rng=np.random.default_rng(99))
        b = quantize(samples, k=4, max_iterations=6, rng=np.random.default_rng(99))
        assert a.pairs() == b.pairs()

    def test_seeding_draws_with_replacement(self):
        samples = np.array([[9, 9, 9]], dtype=np.int64)
        centroids = seed_centroids(samples, 3, rng=np.random.default_rng(0))
        assert centroids.tolist() == [[9, 9, 9]] * 3

    def test_runs_every_iteration(self, monkeypatch):
        calls = []
        real_assign = quantizer.assign

        def counting_assign(samples, centroids):
            calls.append(1)
            return real_assign(samples, centroids)

        monkeypatch.setattr(quantizer, 'assign', counting_assign)
        # already converged after the first step; all 9 steps still run
        quantize(_two_tone(), k=2, max_iterations=9, seed_indices=[0, 100])
        assert len(calls) == 9


class TestEmptyClusters:
    def test_identical_samples_keep_seed(self):
        samples = [(7, 8, 9)] * 20
        result = quantize(samples, k=3, max_iterations=5, rng=np.random.default_rng(5))
        assert result.centroids == [(7, 8, 9)] * 3
        assert result.percentages == [100.0, 0.0, 0.0]

    def test_empty_cluster_not_reseeded(self):
        samples = [DARK] * 5 + [LIGHT] * 5
        # centroid 1 duplicates centroid 0 and loses every tie, so it never gets members
        result = quantize(samples, k=3, max_iterations=4, seed_indices=[0, 0, 5])
        assert result.centroids == [DARK, DARK, LIGHT]
        assert result.percentages == [50.0, 0.0, 50.0]
        assert result.clusters[1].count == 0

    def test_update_leaves_empty_centroid(self):
        samples = np.array([[10, 10, 10], [20, 20, 20]], dtype=np.int64)
        centroids = np.array([[0, 0, 0], [99, 98, 97]], dtype=np.int64)
        labels = np.array([0, 0])
        assert update(samples, labels, centroids).tolist() == [[15, 15, 15], [99, 98, 97]]


class TestSteps:
    def test_tie_goes_to_lowest_index(self):
        samples = np.array([[5, 5, 5]], dtype=np.int64)
        centroids = np.array([[10, 10, 10], [0, 0, 0]], dtype=np.int64)
        assert assign(samples, centroids).tolist() == [0]

    def test_nearest_centroid_wins(self):
        samples = np.array([[1, 1, 1], [250, 250, 250]], dtype=np.int64)
        centroids = np.array([[255, 255, 255], [0, 0, 0]], dtype=np.int64)
        assert assign(samples, centroids).tolist() == [1, 0]

    def test_mean_uses_floor(self):
        samples = np.array([[0, 0, 0], [1, 1, 1], [1, 1, 1]], dtype=np.int64)
        centroids = np.array([[0, 0, 0]], dtype=np.int64)
        labels = np.array([0, 0, 0])
        # 2/3 floors to 0; rounding would give 1
        assert update(samples, labels, centroids).tolist() == [[0, 0, 0]]

    def test_percentages_use_last_assignment(self):
        # 145 joins centroid 0 (at 100) in the only step; against the
        # updated centroid (81) it would be closer to centroid 1 (at 200)
        samples = [(0, 0, 0), (100, 100, 100), (145, 145, 145), (200, 200, 200)]
        result = quantize(samples, k=2, max_iterations=1, seed_indices=[1, 3])
        assert result.centroids == [(81, 81, 81), (200, 200, 200)]
        assert [c.count for c in result] == [3, 1]
        assert result.percentages == [75.0, 25.0]


class TestRejection:
    def test_empty_samples(self):
        with pytest.raises(InvalidInput):
            quantize([], 5, 10)

    def test_zero_k(self):
        with pytest.raises(InvalidInput):
            quantize(_two_tone(), 0, 10)

    def test_zero_iterations(self):
        with pytest.raises(InvalidInput):
            quantize(_two_tone(), 5, 0)

    def test_negative_k(self):
        with pytest.raises(InvalidInput):
            quantize(_two_tone(), -1, 10)

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            quantize([], 5, 10)

    def test_not_triples(self):
        with pytest.raises(InvalidInput):
            quantize([(1, 2), (3, 4)], 1, 1)

    def test_channel_out_of_range(self):
        with pytest.raises(InvalidInput):
            quantize([(256, 0, 0)], 1, 1)
        with pytest.raises(InvalidInput):
            quantize([(-1, 0, 0)], 1, 1)

    def test_float_channels(self):
        with pytest.raises(InvalidInput):
            quantize([(1.5, 2.0, 3.0)], 1, 1)

    def test_ragged_samples(self):
        with pytest.raises(InvalidInput):
            quantize([(1, 2, 3), (4, 5)], 1, 1)

    @pytest.mark.parametrize('k', [2.5, '2', True])
    def test_non_integer_k(self, k):
        with pytest.raises(InvalidInput):
            quantize(_two_tone(), k, 3)

    def test_non_integer_iterations(self):
        with pytest.raises(InvalidInput):
            quantize(_two_tone(), 2, 1.5)

    def test_numpy_integer_k(self):
        result = quantize(_two_tone(), np.int64(2), np.int32(3), seed_indices=[0, 100])
        assert len(result) == 2

    def test_seed_indices_wrong_length(self):
        with pytest.raises(InvalidInput):
            quantize(_two_tone(), k=2, max_iterations=1, seed_indices=[0])

    def test_seed_indices_out_of_range(self):
        with pytest.raises(InvalidInput):
            quantize(_two_tone(), k=2, max_iterations=1, seed_indices=[0, 200])
