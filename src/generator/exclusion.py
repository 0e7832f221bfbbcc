"""
ロト統計エンジン - 除外数字つき ゲーム生成モジュール

除外した数字を使わず、固定数字を必ず含むゲームを一様ランダムに生成する。
"""

import random
from dataclasses import dataclass
from typing import Iterable, Optional

from src.common.errors import ConfigurationError, InsufficientPoolError
from src.common.game import GameCandidate
from src.common.pool import PoolConfig
from src.generator.generator import RangeFilter, validate_game_size

# ゾロ目（11, 22, 33, ...）
_TWIN_DIVISOR = 11


@dataclass(frozen=True)
class ExclusionFilters:
    """除外生成で使うフィルタ"""

    sum: Optional[RangeFilter] = None
    even_count: Optional[RangeFilter] = None
    frame_count: Optional[RangeFilter] = None
    exclude_twins: bool = False
    """ゾロ目を含むゲームを除外する"""

    exclude_primes: bool = False
    """素数を含むゲームを除外する"""


def twin_numbers(config: PoolConfig) -> list[int]:
    """N以下のゾロ目（11, 22, ...）"""
    return [n for n in config.numbers if n >= _TWIN_DIVISOR and n % _TWIN_DIVISOR == 0 and n < 100]


def passes_filters(
    candidate: GameCandidate,
    config: PoolConfig,
    filters: ExclusionFilters,
) -> bool:
    """ゲームがフィルタをすべて満たすか判定する"""
    if filters.sum is not None and not filters.sum.accepts(candidate.total):
        return False
    if filters.even_count is not None and not filters.even_count.accepts(candidate.even_count):
        return False
    if filters.frame_count is not None and not filters.frame_count.accepts(
        candidate.frame_count(config.frame_numbers)
    ):
        return False
    if filters.exclude_twins and any(n in candidate for n in twin_numbers(config)):
        return False
    if filters.exclude_primes and any(n in config.prime_numbers for n in candidate):
        return False
    return True


def generate_games_with_exclusions(
    config: PoolConfig,
    count: int,
    excluded: Iterable[int] = (),
    fixed: Iterable[int] = (),
    game_size: Optional[int] = None,
    filters: Optional[ExclusionFilters] = None,
    rng: Optional[random.Random] = None,
    max_attempts: int = 10_000,
) -> list[GameCandidate]:
    """
    除外数字・固定数字・フィルタを満たすゲームを生成する。

    Args:
        config: 数字プール設定
        count: 生成するゲーム数
        excluded: 使わない数字
        fixed: 全ゲームに含める数字
        game_size: 1口の選択数（省略時はゲームの最小選択数）
        filters: 合計・偶数・枠・ゾロ目・素数のフィルタ
        rng: 乱数生成器
        max_attempts: 試行回数の上限

    Returns:
        重複なしのゲームのリスト（上限に達した場合は count 未満）

    Raises:
        ConfigurationError: 選択数が範囲外、または固定数字が選択数を超える
        InsufficientPoolError: 除外後の数字で1口を埋められない
    """
    if rng is None:
        rng = random.Random()
    if filters is None:
        filters = ExclusionFilters()
    if game_size is None:
        game_size = config.min_per_game
    validate_game_size(game_size, config)

    fixed_numbers = sorted(set(fixed))
    excluded_set = set(excluded)
    needed = game_size - len(fixed_numbers)
    if needed < 0:
        raise ConfigurationError(f"固定数字が多すぎます（{len(fixed_numbers)}個 > {game_size}個）")

    available = [n for n in config.numbers if n not in excluded_set and n not in fixed_numbers]
    if len(available) < needed:
        raise InsufficientPoolError(
            f"除外後の数字が足りません（残り{len(available)}個、必要{needed}個）"
        )

    games: list[GameCandidate] = []
    seen: set[tuple[int, ...]] = set()
    attempts = 0

    while len(games) < count and attempts < max_attempts:
        attempts += 1
        candidate = GameCandidate.of(fixed_numbers + rng.sample(available, needed))
        if not passes_filters(candidate, config, filters):
            continue
        if candidate.numbers in seen:
            continue
        seen.add(candidate.numbers)
        games.append(candidate)

    return games
