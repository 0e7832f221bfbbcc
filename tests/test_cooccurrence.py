"""
テスト - 共起分析モジュール
"""

import numpy as np
import pytest

from src.common.draws import DrawRecord
from src.common.pool import get_pool_config
from src.cycles.cooccurrence import compute_cooccurrence, top_pairs


@pytest.fixture
def stats():
    """{1,2} と {1,3} の2回分"""
    draws = [DrawRecord.of(1, [1, 2]), DrawRecord.of(2, [1, 3])]
    return compute_cooccurrence(draws, get_pool_config("MEGASENA"))


class TestComputeCooccurrence:
    """compute_cooccurrence() のテスト"""

    def test_pair_counts(self, stats):
        assert stats.matrix[1][2] == 1
        assert stats.matrix[1][3] == 1
        assert stats.matrix[2][3] == 0
        assert stats.frequency[1] == 2
        assert stats.total_draws == 2

    def test_symmetric(self, stats):
        assert np.array_equal(stats.matrix, stats.matrix.T)
        assert np.allclose(stats.correlations, stats.correlations.T)

    def test_shape(self, stats):
        assert stats.matrix.shape == (61, 61)
        assert stats.correlations.shape == (61, 61)
        assert stats.frequency.shape == (61,)

    def test_diagonal_and_unused_index(self, stats):
        """対角は1.0、インデックス0は0"""
        assert np.allclose(np.diag(stats.correlations)[1:], 1.0)
        assert np.all(stats.correlations[0, :] == 0.0)
        assert np.all(stats.correlations[:, 0] == 0.0)

    def test_phi_coefficient(self, stats):
        # 2 と 3 は必ず片方だけ出る → 完全な負の相関
        assert stats.correlations[2][3] == pytest.approx(-1.0)
        # 1 は毎回出る → 分母0で0
        assert stats.correlations[1][2] == pytest.approx(0.0)

    def test_no_nan(self, stats):
        assert np.all(np.isfinite(stats.correlations))

    def test_empty_history(self):
        stats = compute_cooccurrence([], get_pool_config("LOTOFACIL"))
        assert stats.total_draws == 0
        assert np.all(np.isfinite(stats.correlations))


class TestTopPairs:
    """top_pairs() のテスト"""

    def test_by_count(self, stats):
        assert top_pairs(stats, top_n=2) == [(1, 2, 1.0), (1, 3, 1.0)]

    def test_by_correlation_sorted(self, stats):
        pairs = top_pairs(stats, top_n=20, by="correlation")
        values = [p[2] for p in pairs]
        assert values == sorted(values, reverse=True)
        assert all(i < j for i, j, _ in pairs)

    def test_invalid_metric(self, stats):
        with pytest.raises(ValueError, match="不正な指標"):
            top_pairs(stats, by="lift")
