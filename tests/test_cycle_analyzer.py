"""
テスト - サイクル分析モジュール
"""

import math

import pytest

from src.common.draws import DrawRecord
from src.common.pool import get_pool_config
from src.cycles.quadrants import analyze_quadrants
from src.cycles.analyzer import (
    CycleWeights,
    compute_cycle_stats,
    compute_full_cycle_analysis,
)


@pytest.fixture
def lotofacil():
    return get_pool_config("LOTOFACIL")


@pytest.fixture
def megasena():
    return get_pool_config("MEGASENA")


@pytest.fixture
def patterned_draws():
    """
    メガセナ 13回分。

    1, 10〜14 は第1・3・7回に出現（サイクル 2, 4、現在 6）
    20〜25 はそれ以外の回に出現
    """
    draws = []
    for seq in range(1, 14):
        if seq in (1, 3, 7):
            numbers = [1, 10, 11, 12, 13, 14]
        else:
            numbers = [20, 21, 22, 23, 24, 25]
        draws.append(DrawRecord.of(seq, numbers))
    return draws


class TestComputeCycleStats:
    """compute_cycle_stats() のテスト"""

    def test_two_identical_draws(self, lotofacil):
        """同じ15数字が2回続いた場合のサイクル"""
        draws = [
            DrawRecord.of(1, range(1, 16)),
            DrawRecord.of(2, range(1, 16)),
        ]
        stats = compute_cycle_stats(draws, lotofacil)

        assert stats[1].historical_cycles == (1,)
        assert stats[1].current_cycle == 0
        assert stats[25].current_cycle == 2
        assert stats[25].historical_cycles == ()

    def test_all_numbers_present(self, lotofacil):
        """1〜N の全数字のエントリがあること"""
        stats = compute_cycle_stats([DrawRecord.of(1, range(1, 16))], lotofacil)
        assert list(stats.keys()) == list(range(1, 26))

    def test_cycle_gap(self, megasena):
        """第10回と第13回に出た数字のサイクルは 3"""
        draws = [
            DrawRecord.of(10, [7, 1, 2, 3, 4, 5]),
            DrawRecord.of(13, [7, 8, 9, 10, 11, 12]),
        ]
        stats = compute_cycle_stats(draws, megasena)
        assert 3 in stats[7].historical_cycles
        assert stats[7].current_cycle == 0

    def test_zero_division_safety(self, megasena):
        """出現0回・1回の数字は平均・標準偏差・緊急度が0"""
        draws = [
            DrawRecord.of(1, [1, 2, 3, 4, 5, 6]),
            DrawRecord.of(2, [2, 3, 4, 5, 6, 7]),
        ]
        stats = compute_cycle_stats(draws, megasena)

        for num in (1, 60):  # 1回 / 0回
            stat = stats[num]
            assert stat.mean == 0.0
            assert stat.stddev == 0.0
            assert stat.urgency_score == 0.0

        for stat in stats.values():
            assert math.isfinite(stat.urgency_score)
            assert math.isfinite(stat.frequency_z_score)
            assert math.isfinite(stat.weighted_score)

    def test_empty_history(self, megasena):
        """履歴が空でも例外にならないこと"""
        stats = compute_cycle_stats([], megasena)
        assert len(stats) == 60
        for stat in stats.values():
            assert stat.frequency == 0.0
            assert stat.frequency_z_score == pytest.approx(0.0)
            assert stat.current_cycle == 0

    def test_urgency_score(self, megasena, patterned_draws):
        """緊急度 = (現在 − 平均) / 標本標準偏差"""
        stats = compute_cycle_stats(patterned_draws, megasena)
        stat = stats[1]

        assert stat.historical_cycles == (2, 4)
        assert stat.current_cycle == 6
        assert stat.mean == pytest.approx(3.0)
        assert stat.stddev == pytest.approx(math.sqrt(2))
        assert stat.urgency_score == pytest.approx(3 / math.sqrt(2))

    def test_urgency_clipped_at_zero(self, megasena, patterned_draws):
        """直近に出た数字の緊急度は負にならないこと"""
        stats = compute_cycle_stats(patterned_draws, megasena)
        assert stats[20].current_cycle == 0
        assert stats[20].urgency_score == 0.0

    def test_close_probability(self, megasena, patterned_draws):
        stats = compute_cycle_stats(patterned_draws, megasena)
        # 現在6回を超えたサイクルが過去にない
        assert stats[1].close_prob_within_window == 0.0
        # 全サイクルが窓幅5以内に閉じている
        assert stats[20].close_prob_within_window == pytest.approx(1.0)

    def test_close_probability_window(self, megasena, patterned_draws):
        """窓幅を広げても生存サイクルがなければ0のまま"""
        stats = compute_cycle_stats(patterned_draws, megasena, CycleWeights(window=50))
        assert stats[1].close_prob_within_window == 0.0

    def test_frequency_z_score(self, lotofacil):
        """頻度Zスコアは母標準偏差で標準化されること"""
        draws = [
            DrawRecord.of(1, range(1, 16)),
            DrawRecord.of(2, range(1, 16)),
        ]
        stats = compute_cycle_stats(draws, lotofacil)

        # 1〜15: 頻度 0.5、16〜25: 頻度 0.0
        assert stats[1].frequency == pytest.approx(0.5)
        assert stats[20].frequency == pytest.approx(0.0)
        assert stats[1].frequency_z_score == pytest.approx(0.2 / math.sqrt(0.06))
        assert stats[20].frequency_z_score == pytest.approx(-0.3 / math.sqrt(0.06))
        assert sum(s.frequency_z_score for s in stats.values()) == pytest.approx(0.0, abs=1e-9)

    def test_weighted_score(self, megasena, patterned_draws):
        weights = CycleWeights(urgency=0.5, frequency=0.5)
        stats = compute_cycle_stats(patterned_draws, megasena, weights)
        for stat in stats.values():
            expected = 0.5 * stat.urgency_score + 0.5 * stat.frequency_z_score
            assert stat.weighted_score == pytest.approx(expected)


class TestFullCycleAnalysis:
    """compute_full_cycle_analysis() のテスト"""

    def test_completed_cycle(self, lotofacil):
        draws = [
            DrawRecord.of(1, range(1, 16)),
            DrawRecord.of(2, range(11, 26)),
            DrawRecord.of(3, range(1, 16)),
        ]
        analysis = compute_full_cycle_analysis(draws, lotofacil)

        assert analysis.total_completed_cycles == 1
        assert analysis.longest_cycle == 2
        assert analysis.shortest_cycle == 2
        assert analysis.average_cycle_duration == pytest.approx(2.0)
        assert analysis.current_cycle_start == 3
        assert analysis.current_cycle_duration == 1
        assert analysis.missing_numbers == list(range(16, 26))
        assert analysis.numbers_in_current_cycle == list(range(1, 16))

    def test_empty_history(self, lotofacil):
        analysis = compute_full_cycle_analysis([], lotofacil)
        assert analysis.total_completed_cycles == 0
        assert analysis.current_cycle_duration == 0
        assert analysis.average_cycle_duration == 0.0
        assert analysis.missing_numbers == list(range(1, 26))


class TestReports:
    """コンソールレポートのテスト"""

    def test_print_reports(self, megasena, patterned_draws, capsys):
        from src.cycles.cooccurrence import compute_cooccurrence
        from src.cycles.report import (
            print_cooccurrence_report,
            print_cycle_report,
            print_full_cycle_report,
            print_quadrant_report,
        )

        print_cycle_report(compute_cycle_stats(patterned_draws, megasena), megasena, top_n=3)
        print_full_cycle_report(compute_full_cycle_analysis(patterned_draws, megasena), megasena)
        print_cooccurrence_report(compute_cooccurrence(patterned_draws, megasena), top_n=3)
        print_quadrant_report(analyze_quadrants(patterned_draws, megasena), megasena)

        out = capsys.readouterr().out
        assert "サイクル分析結果" in out
        assert "大サイクル" in out
        assert "(20, 21)" in out
        assert "象限分析" in out
        assert "Q3 (31〜45)" in out


class TestAnalyzeQuadrants:
    """analyze_quadrants() のテスト"""

    def test_classification(self, megasena):
        """出現数の順に ホット1・ミディアム2・コールド1 に分類されること"""
        draws = [
            DrawRecord.of(1, [1, 2, 3, 16, 17, 31]),
            DrawRecord.of(2, [4, 5, 18, 19, 32, 46]),
        ]
        analysis = analyze_quadrants(draws, megasena)

        assert [s.quadrant for s in analysis.stats] == [1, 2, 3, 4]
        assert [s.frequency for s in analysis.stats] == [5, 4, 2, 1]
        assert analysis.hot == [1]
        assert analysis.medium == [2, 3]
        assert analysis.cold == [4]
        assert analysis.total_numbers == 12
        assert analysis.expected_per_quadrant == pytest.approx(3.0)
        assert analysis.stats[0].percentage == pytest.approx(5 / 12 * 100)
        assert analysis.stats[0].numbers_drawn == [1, 2, 3, 4, 5]

    def test_last_n(self, megasena):
        """直近 last_n 回だけを集計すること"""
        draws = [DrawRecord.of(seq, [46, 47, 48, 49, 50, 51]) for seq in range(1, 6)]
        draws.append(DrawRecord.of(6, [1, 2, 3, 4, 5, 6]))
        analysis = analyze_quadrants(draws, megasena, last_n=1)
        assert analysis.draws_analyzed == 1
        assert analysis.hot == [1]
        assert analysis.stats[-1].quadrant == 4
        assert analysis.stats[-1].frequency == 0

    def test_tie_keeps_quadrant_order(self, megasena):
        draws = [DrawRecord.of(1, [46, 31, 16])]
        analysis = analyze_quadrants(draws, megasena)
        assert analysis.hot == [2]
        assert analysis.medium == [3, 4]
        assert analysis.cold == [1]

    def test_empty_history(self, megasena):
        analysis = analyze_quadrants([], megasena)
        assert analysis.total_numbers == 0
        assert all(s.percentage == 0.0 for s in analysis.stats)
        assert analysis.cold == [4]

    def test_cold_numbers(self, megasena):
        draws = [DrawRecord.of(1, [16, 17, 31, 32, 46, 47])]
        analysis = analyze_quadrants(draws, megasena)
        assert analysis.cold == [1]
        assert analysis.cold_numbers(megasena) == list(range(1, 16))

    def test_invalid_last_n(self, megasena):
        with pytest.raises(ValueError):
            analyze_quadrants([], megasena, last_n=0)
