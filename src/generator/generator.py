"""
ロト統計エンジン - サイクルベース ゲーム生成モジュール

サイクル統計のスコアで数字を重み付けし、非復元抽出で候補ゲームを生成する。

手順:
    1. スコア降順で上位 top_n 個を基本プールとする
    2. プールが max(2 × 選択数, 15) 未満なら残りの数字で補充する
    3. 各ゲームは max(score, ε) を重みとする非復元の重み付き抽出
       （累積重み配列 + 二分探索）
    4. 偶数個数・合計・枠個数のフィルタ（両端含む）を満たさなければ再試行
    5. 同一バッチ内の重複ゲームは除外
    6. 試行回数の上限は num_games × 200。上限に達したら見つかった分だけ返す
       （例外にはしない。呼び出し側で件数を確認すること）
"""

import random
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from src.common.errors import ConfigurationError, InsufficientPoolError
from src.common.game import GameCandidate
from src.common.pool import PoolConfig
from src.generator.weights import calculate_score_weights
from src.cycles.analyzer import NumberCycleStat


@dataclass(frozen=True)
class RangeFilter:
    """両端を含む範囲フィルタ（None の端は無制限）"""

    min: Optional[int] = None
    max: Optional[int] = None

    def accepts(self, value: int) -> bool:
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True


@dataclass(frozen=True)
class GameFilters:
    """生成ゲームに適用するフィルタ"""

    even_count: Optional[RangeFilter] = None
    sum: Optional[RangeFilter] = None
    frame_count: Optional[RangeFilter] = None

    def accepts(self, even_count: int, total: int, frame_count: int) -> bool:
        checks = (
            (self.even_count, even_count),
            (self.sum, total),
            (self.frame_count, frame_count),
        )
        return all(f is None or f.accepts(value) for f, value in checks)


@dataclass
class GeneratorConfig:
    """ゲーム生成のパラメータ"""

    num_games: int
    game_size: Optional[int] = None
    """1口の選択数（省略時はゲームの最小選択数）"""

    top_n: int = 20
    """基本プールに使う上位数字の個数"""

    filters: GameFilters = field(default_factory=GameFilters)
    score_source: str = "urgency"
    """スコアの種類（urgency / weighted / custom）"""

    urgency_weight: Optional[float] = None
    frequency_weight: Optional[float] = None
    epsilon: float = 0.1
    """スコア0以下の数字にも残す最小重み"""

    attempts_per_game: int = 200
    min_pool_size: int = 15


@dataclass
class GeneratedGame:
    """生成されたゲームとその指標"""

    candidate: GameCandidate
    sum: int
    even_count: int
    odd_count: int
    frame_count: int
    avg_score: float

    @property
    def numbers(self) -> tuple[int, ...]:
        return self.candidate.numbers


def validate_game_size(game_size: int, config: PoolConfig) -> None:
    """
    選択数がゲームの許容範囲内か検証する。

    Raises:
        ConfigurationError: 範囲外の場合
    """
    if game_size < config.min_per_game or game_size > config.max_per_game:
        raise ConfigurationError(
            f"選択数は{config.min_per_game}〜{config.max_per_game}の範囲で指定してください（{game_size}）"
        )


def build_sampling_pool(
    scores: dict[int, float],
    config: PoolConfig,
    top_n: int,
    game_size: int,
    min_pool_size: int = 15,
) -> list[int]:
    """
    スコア上位 top_n 個の基本プールを作り、小さすぎる場合は補充する。

    補充は max(2 × game_size, min_pool_size) 個（最大 N 個）まで、
    基本プールに入っていない数字を番号順に追加する。
    """
    ranked = sorted(scores, key=lambda n: (-scores[n], n))
    pool = ranked[:top_n]

    floor = min(max(game_size * 2, min_pool_size), config.range_max)
    if len(pool) < floor:
        in_pool = set(pool)
        for num in config.numbers:
            if len(pool) >= floor:
                break
            if num not in in_pool:
                pool.append(num)
                in_pool.add(num)

    return pool


def weighted_sample(
    pool: list[int],
    scores: dict[int, float],
    count: int,
    rng: random.Random,
    epsilon: float = 0.1,
) -> list[int]:
    """
    重み max(score, ε) による非復元抽出。

    各ステップで累積重み配列を作り、[0, 合計) の一様乱数を二分探索で引く。
    選ばれた数字はプールから取り除く。
    """
    remaining = list(pool)
    selected: list[int] = []

    for _ in range(count):
        if not remaining:
            break

        weights = np.maximum(
            np.array([scores.get(num, 0.0) for num in remaining], dtype=np.float64),
            epsilon,
        )
        cumulative = np.cumsum(weights)
        target = rng.random() * cumulative[-1]
        index = int(np.searchsorted(cumulative, target, side="right"))
        index = min(index, len(remaining) - 1)

        selected.append(remaining.pop(index))

    return selected


def generate_games(
    stats: dict[int, NumberCycleStat],
    config: PoolConfig,
    options: GeneratorConfig,
    rng: Optional[random.Random] = None,
) -> list[GeneratedGame]:
    """
    サイクル統計のスコアに基づいて候補ゲームを生成する。

    Args:
        stats: compute_cycle_stats() の戻り値
        config: 数字プール設定
        options: 生成パラメータ
        rng: 乱数生成器（テストでの再現用。省略時は新規の Random）

    Returns:
        生成されたゲームのリスト。試行上限に達した場合は
        options.num_games より少ないことがある

    Raises:
        ConfigurationError: 選択数が範囲外
        InsufficientPoolError: プール全体が選択数に満たない
    """
    if rng is None:
        rng = random.Random()

    game_size = options.game_size if options.game_size is not None else config.min_per_game
    validate_game_size(game_size, config)

    scores = calculate_score_weights(
        stats,
        source=options.score_source,
        urgency_weight=options.urgency_weight,
        frequency_weight=options.frequency_weight,
    )
    if len(scores) < game_size:
        raise InsufficientPoolError(f"候補の数字が足りません（{len(scores)}個 < {game_size}個）")

    pool = build_sampling_pool(scores, config, options.top_n, game_size, options.min_pool_size)

    games: list[GeneratedGame] = []
    seen: set[tuple[int, ...]] = set()
    max_attempts = options.num_games * options.attempts_per_game
    attempts = 0

    while len(games) < options.num_games and attempts < max_attempts:
        attempts += 1

        picked = weighted_sample(pool, scores, game_size, rng, options.epsilon)
        if len(picked) < game_size:
            break
        candidate = GameCandidate.of(picked)

        total = candidate.total
        even_count = candidate.even_count
        frame_count = candidate.frame_count(config.frame_numbers)

        if not options.filters.accepts(even_count, total, frame_count):
            continue
        if candidate.numbers in seen:
            continue

        seen.add(candidate.numbers)
        games.append(
            GeneratedGame(
                candidate=candidate,
                sum=total,
                even_count=even_count,
                odd_count=game_size - even_count,
                frame_count=frame_count,
                avg_score=sum(scores.get(n, 0.0) for n in candidate) / game_size,
            )
        )

    return games


def generate_random_games(
    config: PoolConfig,
    num_games: int,
    game_size: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> list[GeneratedGame]:
    """
    サイクル統計を使わずに一様ランダムなゲームを生成する。

    重複は除外し、試行回数は num_games × 100 までとする。
    """
    if rng is None:
        rng = random.Random()

    if game_size is None:
        game_size = config.min_per_game
    validate_game_size(game_size, config)

    population = list(config.numbers)
    games: list[GeneratedGame] = []
    seen: set[tuple[int, ...]] = set()
    max_attempts = num_games * 100
    attempts = 0

    while len(games) < num_games and attempts < max_attempts:
        attempts += 1
        candidate = GameCandidate.of(rng.sample(population, game_size))
        if candidate.numbers in seen:
            continue

        seen.add(candidate.numbers)
        even_count = candidate.even_count
        games.append(
            GeneratedGame(
                candidate=candidate,
                sum=candidate.total,
                even_count=even_count,
                odd_count=game_size - even_count,
                frame_count=candidate.frame_count(config.frame_numbers),
                avg_score=0.0,
            )
        )

    return games
