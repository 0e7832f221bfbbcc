"""
テスト - ゲーム生成モジュール
"""

import random
from collections import Counter

import pytest

from src.common.draws import DrawRecord
from src.common.errors import ConfigurationError, InsufficientPoolError
from src.common.pool import get_pool_config
from src.cycles.analyzer import NumberCycleStat
from src.cycles.quadrants import analyze_quadrants
from src.generator.exclusion import (
    ExclusionFilters,
    generate_games_with_exclusions,
    twin_numbers,
)
from src.generator.generator import (
    GameFilters,
    GeneratorConfig,
    RangeFilter,
    build_sampling_pool,
    generate_games,
    generate_random_games,
    weighted_sample,
)
from src.generator.suggestions import MetricStats, suggest_filters, summarize_metric
from src.generator.weights import calculate_score_weights


def _mock_stats(range_max: int, urgency: dict[int, float] | None = None) -> dict[int, NumberCycleStat]:
    """緊急度だけを指定した統計を作る（指定なしの数字は1.0）"""
    urgency = urgency or {}
    return {
        n: NumberCycleStat(
            number=n,
            historical_cycles=(),
            current_cycle=0,
            urgency_score=urgency.get(n, 1.0),
            weighted_score=urgency.get(n, 1.0),
        )
        for n in range(1, range_max + 1)
    }


@pytest.fixture
def megasena():
    return get_pool_config("MEGASENA")


class TestGenerateGames:
    """generate_games() のテスト"""

    def test_urgency_bias(self):
        """緊急度10の数字は0.1の数字より多く選ばれること"""
        config = get_pool_config("LOTOFACIL")
        stats = _mock_stats(25, {1: 10.0, 2: 0.1, **{n: 0.0 for n in range(3, 26)}})
        options = GeneratorConfig(num_games=1000, top_n=25)

        games = generate_games(stats, config, options, rng=random.Random(42))
        counts = Counter(n for game in games for n in game.numbers)
        assert counts[1] > counts[2]

    def test_sum_filter(self, megasena):
        """合計フィルタを満たすゲームのみ返すこと"""
        options = GeneratorConfig(
            num_games=20,
            top_n=60,
            filters=GameFilters(sum=RangeFilter(150, 200)),
        )
        games = generate_games(_mock_stats(60), megasena, options, rng=random.Random(1))
        assert len(games) == 20
        for game in games:
            assert 150 <= game.sum <= 200
            assert game.sum == sum(game.numbers)

    def test_even_filter(self, megasena):
        options = GeneratorConfig(
            num_games=10,
            top_n=60,
            filters=GameFilters(even_count=RangeFilter(3, 3)),
        )
        games = generate_games(_mock_stats(60), megasena, options, rng=random.Random(2))
        assert all(game.even_count == 3 and game.odd_count == 3 for game in games)

    def test_frame_filter(self, megasena):
        """枠の個数フィルタを満たすゲームのみ返すこと"""
        options = GeneratorConfig(
            num_games=15,
            top_n=60,
            filters=GameFilters(frame_count=RangeFilter(2, 3)),
        )
        games = generate_games(_mock_stats(60), megasena, options, rng=random.Random(5))
        assert len(games) == 15
        for game in games:
            assert 2 <= game.frame_count <= 3
            assert game.frame_count == game.candidate.frame_count(megasena.frame_numbers)

    def test_no_duplicates(self, megasena):
        """バッチ内・ゲーム内に重複がないこと"""
        options = GeneratorConfig(num_games=50, game_size=8)
        games = generate_games(_mock_stats(60), megasena, options, rng=random.Random(3))
        assert len({game.numbers for game in games}) == len(games)
        for game in games:
            assert len(set(game.numbers)) == 8
            assert all(1 <= n <= 60 for n in game.numbers)

    def test_partial_result(self, megasena):
        """満たせないフィルタでも例外にならず、件数が減るだけ"""
        options = GeneratorConfig(
            num_games=3,
            filters=GameFilters(sum=RangeFilter(min=10_000)),
        )
        games = generate_games(_mock_stats(60), megasena, options, rng=random.Random(4))
        assert games == []

    def test_reproducible(self, megasena):
        options = GeneratorConfig(num_games=5)
        first = generate_games(_mock_stats(60), megasena, options, rng=random.Random(7))
        second = generate_games(_mock_stats(60), megasena, options, rng=random.Random(7))
        assert [g.numbers for g in first] == [g.numbers for g in second]

    def test_game_size_out_of_range(self, megasena):
        with pytest.raises(ConfigurationError):
            generate_games(_mock_stats(60), megasena, GeneratorConfig(num_games=1, game_size=16))

    def test_insufficient_pool(self, megasena):
        with pytest.raises(InsufficientPoolError):
            generate_games(_mock_stats(5), megasena, GeneratorConfig(num_games=1))

    def test_custom_score_requires_weights(self, megasena):
        options = GeneratorConfig(num_games=1, score_source="custom")
        with pytest.raises(ValueError, match="custom"):
            generate_games(_mock_stats(60), megasena, options)

    def test_custom_score(self, megasena):
        options = GeneratorConfig(
            num_games=5,
            score_source="custom",
            urgency_weight=1.0,
            frequency_weight=0.0,
        )
        games = generate_games(_mock_stats(60), megasena, options, rng=random.Random(5))
        assert len(games) == 5
        assert all(game.avg_score == pytest.approx(1.0) for game in games)


class TestSampling:
    """プール構築と重み付き抽出のテスト"""

    def test_pool_padding(self, megasena):
        """上位が少ない場合は番号順に補充されること"""
        scores = {n: float(n) for n in range(1, 61)}
        pool = build_sampling_pool(scores, megasena, top_n=5, game_size=6)
        assert pool[:5] == [60, 59, 58, 57, 56]
        assert len(pool) == 15
        assert pool[5:] == list(range(1, 11))

    def test_pool_capped_at_range(self):
        config = get_pool_config("LOTOFACIL")
        scores = {n: 1.0 for n in range(1, 26)}
        pool = build_sampling_pool(scores, config, top_n=3, game_size=15)
        assert sorted(pool) == list(range(1, 26))

    def test_weighted_sample_distinct(self):
        pool = list(range(1, 11))
        picked = weighted_sample(pool, {}, 10, random.Random(0))
        assert sorted(picked) == pool

    def test_weighted_sample_exhausts_pool(self):
        picked = weighted_sample([1, 2, 3], {1: 5.0}, 5, random.Random(0))
        assert sorted(picked) == [1, 2, 3]


class TestRandomGames:
    """generate_random_games() のテスト"""

    def test_random_games(self, megasena):
        games = generate_random_games(megasena, 10, rng=random.Random(0))
        assert len(games) == 10
        assert len({g.numbers for g in games}) == 10
        assert all(len(g.numbers) == 6 and g.avg_score == 0.0 for g in games)

    def test_invalid_size(self, megasena):
        with pytest.raises(ConfigurationError):
            generate_random_games(megasena, 1, game_size=5)


class TestExclusionGenerator:
    """generate_games_with_exclusions() のテスト"""

    def test_excluded_and_fixed(self, megasena):
        games = generate_games_with_exclusions(
            megasena,
            10,
            excluded=range(1, 31),
            fixed=[60],
            rng=random.Random(0),
        )
        assert len(games) == 10
        for game in games:
            assert 60 in game
            assert all(n > 30 for n in game)

    def test_exclude_primes(self, megasena):
        filters = ExclusionFilters(exclude_primes=True, sum=RangeFilter(100, 250))
        games = generate_games_with_exclusions(megasena, 5, filters=filters, rng=random.Random(1))
        for game in games:
            assert not any(n in megasena.prime_numbers for n in game)
            assert 100 <= game.total <= 250

    def test_twin_numbers(self, megasena):
        assert twin_numbers(megasena) == [11, 22, 33, 44, 55]

    def test_too_many_fixed(self, megasena):
        with pytest.raises(ConfigurationError):
            generate_games_with_exclusions(megasena, 1, fixed=range(1, 8))

    def test_insufficient_after_exclusion(self, megasena):
        with pytest.raises(InsufficientPoolError):
            generate_games_with_exclusions(megasena, 1, excluded=range(1, 58))

    def test_exclude_cold_quadrant(self, megasena):
        """コールド象限の数字を除外して生成できること"""
        draws = [DrawRecord.of(seq, [1, 2, 16, 17, 31, 32]) for seq in range(1, 11)]
        analysis = analyze_quadrants(draws, megasena)
        assert analysis.cold == [4]

        games = generate_games_with_exclusions(
            megasena,
            5,
            excluded=analysis.cold_numbers(megasena),
            rng=random.Random(3),
        )
        assert len(games) == 5
        assert all(n <= 45 for game in games for n in game)


class TestScoreWeights:
    """calculate_score_weights() のテスト"""

    def test_sources(self):
        stats = _mock_stats(3, {1: 2.0, 2: -1.0})
        assert calculate_score_weights(stats, "urgency") == {1: 2.0, 2: -1.0, 3: 1.0}
        assert calculate_score_weights(stats, "weighted") == {1: 2.0, 2: -1.0, 3: 1.0}

    def test_custom(self):
        stats = _mock_stats(2, {1: 2.0})
        scores = calculate_score_weights(stats, "custom", urgency_weight=0.5, frequency_weight=1.0)
        assert scores[1] == pytest.approx(2.0 * 0.5 + stats[1].frequency_z_score)

    def test_invalid_source(self):
        with pytest.raises(ValueError):
            calculate_score_weights(_mock_stats(3), "frequency")


def _draws_from(number_sets: list[list[int]]) -> list[DrawRecord]:
    return [DrawRecord.of(seq, numbers) for seq, numbers in enumerate(number_sets, 1)]


class TestSuggestFilters:
    """suggest_filters() のテスト"""

    def test_percentile_bands(self, megasena):
        """10件なら下限は2番目に小さい値（floor(10 × 0.1) = 1）、上限は最大値（floor(10 × 0.9) = 9）"""
        number_sets = [
            [1, 3, 5, 7, 9, 11],   # 偶0
            [2, 3, 5, 7, 9, 11],   # 偶1
            [2, 4, 5, 7, 9, 11],   # 偶2
            [2, 4, 6, 7, 9, 11],   # 偶3
            [2, 4, 6, 7, 9, 13],   # 偶3
            [2, 4, 6, 7, 9, 15],   # 偶3
            [2, 4, 6, 7, 9, 17],   # 偶3
            [2, 4, 6, 8, 9, 11],   # 偶4
            [2, 4, 6, 8, 10, 11],  # 偶5
            [2, 4, 6, 8, 10, 12],  # 偶6
        ]
        suggestions = suggest_filters(_draws_from(number_sets), megasena, last_n=10)

        assert suggestions.draws_analyzed == 10
        assert suggestions.even_count == MetricStats(min=1, max=6, average=3, most_common=3)
        sums = sorted(sum(s) for s in number_sets)
        assert suggestions.sum.min == sums[1]
        assert suggestions.sum.max == sums[9]

    def test_percentile_index(self):
        """20件なら下限は2番目、上限は18番目の値"""
        stats = summarize_metric(list(range(100, 120)))
        assert stats.min == 102
        assert stats.max == 118
        assert stats.average == 110  # 109.5 は切り上げ

    def test_mode_tie_takes_smallest(self):
        assert summarize_metric([5, 5, 2, 2, 9]).most_common == 2

    def test_empty_values(self):
        assert summarize_metric([]) == MetricStats(0, 0, 0, 0)

    def test_uses_latest_draws(self, megasena):
        """直近 last_n 回だけを集計すること"""
        old = [[1, 3, 5, 7, 9, 11]] * 20
        new = [[2, 4, 6, 8, 10, 12]] * 10
        suggestions = suggest_filters(_draws_from(old + new), megasena, last_n=10)
        assert suggestions.draws_analyzed == 10
        assert suggestions.even_count.min == 6
        assert suggestions.sum.average == 42

    def test_frame_count(self, megasena):
        """枠の個数は config.frame_numbers で数えること"""
        # 1, 2, 60 は枠、23, 34, 45 は内側
        suggestions = suggest_filters(_draws_from([[1, 2, 23, 34, 45, 60]] * 10), megasena, last_n=10)
        assert suggestions.frame_count == MetricStats(3, 3, 3, 3)

    def test_to_game_filters(self, megasena):
        suggestions = suggest_filters(_draws_from([[1, 2, 23, 34, 45, 60]] * 10), megasena, last_n=10)
        filters = suggestions.to_game_filters()
        assert filters.sum == RangeFilter(165, 165)
        assert filters.accepts(even_count=3, total=165, frame_count=3)
        assert not filters.accepts(even_count=3, total=166, frame_count=3)

    def test_suggested_filters_drive_generation(self, megasena):
        """推奨フィルタで生成したゲームが範囲内に収まること"""
        rng = random.Random(7)
        history = _draws_from([sorted(rng.sample(range(1, 61), 6)) for _ in range(100)])
        filters = suggest_filters(history, megasena).to_game_filters()

        options = GeneratorConfig(num_games=5, top_n=60, filters=filters)
        games = generate_games(_mock_stats(60), megasena, options, rng=random.Random(8))
        assert games
        for game in games:
            assert filters.accepts(game.even_count, game.sum, game.frame_count)

    @pytest.mark.parametrize("last_n", [9, 501])
    def test_last_n_out_of_range(self, megasena, last_n):
        with pytest.raises(ValueError):
            suggest_filters(_draws_from([[1, 2, 3, 4, 5, 6]] * 10), megasena, last_n=last_n)

    def test_empty_history(self, megasena):
        with pytest.raises(ValueError):
            suggest_filters([], megasena)
