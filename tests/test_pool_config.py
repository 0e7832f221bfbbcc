"""
テスト - 数字プール設定モジュール
"""

import pytest

from src.common.pool import (
    build_frame_numbers,
    column_numbers,
    count_combinations,
    fibonacci_up_to,
    get_column,
    get_pool_config,
    get_row,
    line_numbers,
    primes_up_to,
    quadrant_numbers,
    quadrant_of,
)


class TestGrid:
    """行・列・枠の判定のテスト"""

    def test_row_and_column(self):
        """10列のマークシートで行・列が正しいこと"""
        assert get_row(1, 10) == 1
        assert get_row(10, 10) == 1
        assert get_row(11, 10) == 2
        assert get_row(60, 10) == 6
        assert get_column(10, 10) == 10
        assert get_column(11, 10) == 1
        assert get_column(58, 10) == 8

    def test_megasena_frame(self):
        """メガセナの枠は 28 個（最初/最後の行と列）"""
        frame = build_frame_numbers(60, 10)
        assert len(frame) == 28
        for n in (1, 10, 11, 20, 41, 50, 51, 60):
            assert n in frame, f"{n} は枠"
        for n in (15, 25, 35, 45):
            assert n not in frame, f"{n} は中央"

    def test_lotofacil_frame(self):
        """ロトファシル（5×5）の枠は 16 個"""
        frame = build_frame_numbers(25, 5)
        assert len(frame) == 16
        assert 13 not in frame

    def test_line_numbers(self):
        megasena = get_pool_config("MEGASENA")
        assert line_numbers(megasena, 1) == list(range(1, 11))
        assert line_numbers(megasena, 6) == list(range(51, 61))
        assert line_numbers(megasena, 0) == []
        assert line_numbers(megasena, 7) == []

    def test_column_numbers(self):
        megasena = get_pool_config("MEGASENA")
        assert column_numbers(megasena, 1) == [1, 11, 21, 31, 41, 51]
        assert column_numbers(megasena, 10) == [10, 20, 30, 40, 50, 60]
        assert column_numbers(megasena, 11) == []

    def test_megasena_quadrants(self):
        """メガセナの象限は 1-15, 16-30, 31-45, 46-60"""
        megasena = get_pool_config("MEGASENA")
        assert quadrant_numbers(megasena, 1) == list(range(1, 16))
        assert quadrant_numbers(megasena, 4) == list(range(46, 61))
        assert quadrant_of(15, megasena) == 1
        assert quadrant_of(16, megasena) == 2
        assert quadrant_numbers(megasena, 5) == []

    def test_lotofacil_quadrants(self):
        """N=25 なら幅7（最後の象限は 22-25）"""
        lotofacil = get_pool_config("LOTOFACIL")
        assert quadrant_numbers(lotofacil, 1) == list(range(1, 8))
        assert quadrant_numbers(lotofacil, 4) == [22, 23, 24, 25]
        covered = [n for q in range(1, 5) for n in quadrant_numbers(lotofacil, q)]
        assert covered == list(lotofacil.numbers)


class TestNumberSets:
    """素数・フィボナッチ数のテスト"""

    def test_primes(self):
        primes = primes_up_to(60)
        assert len(primes) == 17
        assert {2, 3, 5, 7, 59} <= primes
        assert 1 not in primes
        assert 57 not in primes

    def test_primes_small_limit(self):
        assert primes_up_to(1) == frozenset()

    def test_fibonacci(self):
        assert fibonacci_up_to(60) == frozenset({1, 2, 3, 5, 8, 13, 21, 34, 55})

    def test_count_combinations(self):
        assert count_combinations(60, 6) == 50_063_860
        assert count_combinations(5, 6) == 0


class TestGetPoolConfig:
    """get_pool_config() のテスト"""

    def test_megasena(self):
        config = get_pool_config("megasena")
        assert config.key == "MEGASENA"
        assert config.range_max == 60
        assert config.pick_size == 6
        assert config.grid_rows == 6
        assert config.pool_average == pytest.approx(30.5)
        assert len(config.frame_numbers) == 28

    def test_lotofacil(self):
        config = get_pool_config("LOTOFACIL")
        assert config.range_max == 25
        assert config.min_per_game == 15
        assert config.grid_rows == 5
        assert config.pool_average == pytest.approx(13.0)

    def test_price_table(self):
        """料金表にない選択数は既定価格になること"""
        config = get_pool_config("MEGASENA")
        assert config.price_for(6) == pytest.approx(5.0)
        assert config.price_for(7) == pytest.approx(35.0)
        assert config.price_for(99) == pytest.approx(config.default_price)

    def test_override_sets(self):
        """数字集合を明示的に差し替えられること"""
        config = get_pool_config("LOTO6", frame_numbers=frozenset({1, 2}))
        assert config.frame_numbers == frozenset({1, 2})
        assert config.prime_numbers == primes_up_to(43)

    def test_invalid_game_key(self):
        """不正なゲームキーで ValueError が発生すること"""
        with pytest.raises(ValueError, match="不正なゲームキー"):
            get_pool_config("INVALID")

    def test_numbers_range(self):
        config = get_pool_config("MINILOTO")
        assert list(config.numbers) == list(range(1, 32))
