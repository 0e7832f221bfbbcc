"""
ロト統計エンジン - ホイール（フェシャメント）生成モジュール

候補プールから上限付きのゲーム集合を組み、将来の抽選に対して
最低限の当選数を狙う。戦略は3種類:

    - balanced:  1回シャッフルしたプールをラウンドロビンで各ゲームに割り当てる
    - coverage:  出現回数の少ない数字を優先して貪欲に組み立てる
    - optimized: シャッフルしたプールを連続ブロックに分割する

いずれも経験則であり、要求された保証当選数を数学的には証明しない。
WheelResult.guaranteed_hits は要求値をそのまま返すだけで、
実際の達成度は verification.verify_hits() / replay_wheel() で確認する。
"""

import math
import random
from dataclasses import dataclass
from typing import Callable, Optional

from src.common.errors import ConfigurationError, InsufficientPoolError
from src.common.game import GameCandidate
from src.common.pool import PoolConfig

# 戦略ごとの最大ゲーム数の既定値
_DEFAULT_MAX_GAMES: dict[str, int] = {
    "balanced": 100,
    "coverage": 100,
    "optimized": 50,
}

# coverage 戦略で「出現回数の少ない数字」から取る割合
_LEAST_USED_RATIO = 0.7


@dataclass(frozen=True)
class WheelConfiguration:
    """ホイール生成の入力"""

    available_numbers: tuple[int, ...]
    """候補の数字"""

    guaranteed_hits: int
    """要求する最低当選数"""

    fixed_numbers: tuple[int, ...] = ()
    """全ゲームに含める数字（available_numbers の部分集合）"""

    game_size: Optional[int] = None
    """1口の選択数（省略時はゲームの最小選択数）"""

    max_games: Optional[int] = None
    """ゲーム数の上限（省略時は戦略ごとの既定値）"""


@dataclass
class WheelResult:
    """ホイール生成の結果"""

    games: list[GameCandidate]
    total_games: int
    total_cost: float
    cost_per_game: float
    coverage_percent: float
    """少なくとも1ゲームに現れた候補数字の割合（%）"""

    guaranteed_hits: int
    """要求値をそのまま返す（検証済みではない）"""

    average_hits_per_game: float
    """選択数 / 2 による大まかな見積もり"""

    strategy: str = ""
    configuration: Optional[WheelConfiguration] = None


@dataclass
class WheelSizeEstimate:
    """ホイールに必要なゲーム数の見積もり"""

    min_games_theoretical: int
    recommended_games: int
    estimated_cost: float


@dataclass
class _PreparedWheel:
    """検証済みの入力と派生値"""

    available: list[int]
    fixed: list[int]
    variable: list[int]
    game_size: int
    variable_count: int
    max_games: int


def _prepare(config: WheelConfiguration, pool: PoolConfig, strategy: str) -> _PreparedWheel:
    """
    入力を検証し、固定数字と変動数字に分ける。

    Raises:
        ConfigurationError: 選択数・保証当選数・固定数字の指定が不正
        InsufficientPoolError: 変動数字が1口を埋めるのに足りない
    """
    game_size = config.game_size if config.game_size is not None else pool.min_per_game
    if game_size < pool.min_per_game or game_size > pool.max_per_game:
        raise ConfigurationError(
            f"選択数は{pool.min_per_game}〜{pool.max_per_game}の範囲で指定してください（{game_size}）"
        )
    if config.guaranteed_hits < 1 or config.guaranteed_hits > game_size:
        raise ConfigurationError(
            f"保証当選数は1〜{game_size}の範囲で指定してください（{config.guaranteed_hits}）"
        )

    available = list(dict.fromkeys(config.available_numbers))
    available_set = set(available)
    fixed = list(dict.fromkeys(config.fixed_numbers))

    not_available = [n for n in fixed if n not in available_set]
    if not_available:
        raise ConfigurationError(f"固定数字が候補に含まれていません: {sorted(not_available)}")
    if len(fixed) >= game_size:
        raise ConfigurationError(f"固定数字が多すぎます（{len(fixed)}個、選択数{game_size}）")

    fixed_set = set(fixed)
    variable = [n for n in available if n not in fixed_set]
    variable_count = game_size - len(fixed)
    if len(variable) < variable_count:
        raise InsufficientPoolError(
            f"候補の数字が足りません（固定以外{len(variable)}個、必要{variable_count}個）"
        )

    max_games = config.max_games if config.max_games is not None else _DEFAULT_MAX_GAMES[strategy]
    if max_games < 1:
        raise ConfigurationError(f"最大ゲーム数は1以上で指定してください（{max_games}）")

    return _PreparedWheel(
        available=available,
        fixed=fixed,
        variable=variable,
        game_size=game_size,
        variable_count=variable_count,
        max_games=max_games,
    )


def _coverage_percent(games: list[GameCandidate], available: list[int]) -> float:
    """候補数字のうちゲームに現れたものの割合（%）"""
    if not available:
        return 0.0
    used = set()
    for game in games:
        used.update(game.numbers)
    return len(used & set(available)) / len(available) * 100


def _build_result(
    games: list[GameCandidate],
    prepared: _PreparedWheel,
    config: WheelConfiguration,
    pool: PoolConfig,
    strategy: str,
) -> WheelResult:
    cost_per_game = pool.price_for(prepared.game_size)
    return WheelResult(
        games=games,
        total_games=len(games),
        total_cost=len(games) * cost_per_game,
        cost_per_game=cost_per_game,
        coverage_percent=_coverage_percent(games, prepared.available),
        guaranteed_hits=config.guaranteed_hits,
        average_hits_per_game=prepared.game_size / 2,
        strategy=strategy,
        configuration=config,
    )


def wheel_balanced(
    config: WheelConfiguration,
    pool: PoolConfig,
    rng: Optional[random.Random] = None,
) -> WheelResult:
    """
    バランス型ホイール。

    変動数字を1回シャッフルし、ゲーム i には位置
    (i × 変動枠 + j) mod プール長 の数字を割り当てる（ラウンドロビン）。
    ゲーム数は min(ceil(変動数字数 / 変動枠), max_games)。
    """
    if rng is None:
        rng = random.Random()
    prepared = _prepare(config, pool, "balanced")
    variable_count = prepared.variable_count

    shuffled = list(prepared.variable)
    rng.shuffle(shuffled)

    desired_games = min(math.ceil(len(shuffled) / variable_count), prepared.max_games)
    games: list[GameCandidate] = []
    for i in range(desired_games):
        picks = [shuffled[(i * variable_count + j) % len(shuffled)] for j in range(variable_count)]
        games.append(GameCandidate.of(prepared.fixed + picks))

    return _build_result(games, prepared, config, pool, "balanced")


def wheel_coverage(
    config: WheelConfiguration,
    pool: PoolConfig,
    rng: Optional[random.Random] = None,
) -> WheelResult:
    """
    カバレッジ最大化ホイール。

    各ゲームを「出現回数の少ない変動数字 約70%」+「残りからランダムに 約30%」で組む。
    全変動数字が ceil(保証当選数 / 2) 回以上出現し、かつゲーム数が
    max(3, その回数) 以上になった時点で打ち切る。試行は max_games × 10 回まで。
    """
    if rng is None:
        rng = random.Random()
    prepared = _prepare(config, pool, "coverage")
    variable_count = prepared.variable_count

    appearances = {num: 0 for num in prepared.variable}
    min_appearances = math.ceil(config.guaranteed_hits / 2)
    least_used_count = math.floor(variable_count * _LEAST_USED_RATIO)

    games: list[GameCandidate] = []
    seen: set[tuple[int, ...]] = set()
    max_attempts = prepared.max_games * 10
    attempts = 0

    while len(games) < prepared.max_games and attempts < max_attempts:
        attempts += 1

        # 出現回数の少ない順（同数なら元の並び順）
        ranked = sorted(prepared.variable, key=lambda n: appearances[n])
        least_used = ranked[:least_used_count]
        rest = ranked[least_used_count:]
        rng.shuffle(rest)
        picks = least_used + rest[: variable_count - len(least_used)]

        candidate = GameCandidate.of(prepared.fixed + picks)
        for num in picks:
            appearances[num] += 1

        if candidate.numbers not in seen:
            seen.add(candidate.numbers)
            games.append(candidate)

        all_covered = all(count >= min_appearances for count in appearances.values())
        if all_covered and len(games) >= max(3, min_appearances):
            break

    return _build_result(games, prepared, config, pool, "coverage")


def wheel_optimized(
    config: WheelConfiguration,
    pool: PoolConfig,
    rng: Optional[random.Random] = None,
) -> WheelResult:
    """
    最適化ホイール。

    変動数字が変動枠以下なら、候補全体から補充した1ゲームだけを返す。
    それ以外はシャッフルした変動数字を min(ceil(変動数字数 / 変動枠), max_games) 個の
    連続ブロックに分け、足りないブロックは先頭に巻き戻って補う。
    """
    if rng is None:
        rng = random.Random()
    prepared = _prepare(config, pool, "optimized")
    variable_count = prepared.variable_count
    variable = prepared.variable

    if len(variable) <= variable_count:
        numbers = prepared.fixed + variable
        for num in prepared.available:
            if len(numbers) >= prepared.game_size:
                break
            if num not in numbers:
                numbers.append(num)
        return _build_result([GameCandidate.of(numbers)], prepared, config, pool, "optimized")

    actual_games = min(math.ceil(len(variable) / variable_count), prepared.max_games)
    group_size = math.ceil(len(variable) / actual_games)
    shuffled = list(variable)
    rng.shuffle(shuffled)

    games: list[GameCandidate] = []
    for i in range(actual_games):
        start = i * group_size
        block = shuffled[start:start + group_size]

        # 巻き戻して補充（ブロック末尾の次の位置から順に）
        offset = start + len(block)
        while len(block) < variable_count:
            extra = shuffled[offset % len(shuffled)]
            if extra not in block:
                block.append(extra)
            offset += 1

        games.append(GameCandidate.of(prepared.fixed + block[:variable_count]))

    return _build_result(games, prepared, config, pool, "optimized")


STRATEGIES: dict[str, Callable[..., WheelResult]] = {
    "balanced": wheel_balanced,
    "coverage": wheel_coverage,
    "optimized": wheel_optimized,
}


def generate_wheel(
    config: WheelConfiguration,
    pool: PoolConfig,
    strategy: str = "optimized",
    rng: Optional[random.Random] = None,
) -> WheelResult:
    """
    指定した戦略でホイールを生成する。

    Args:
        config: ホイールの入力
        pool: 数字プール設定（選択数の範囲・料金表）
        strategy: "balanced" / "coverage" / "optimized"
        rng: 乱数生成器（テストでの再現用）

    Returns:
        WheelResult

    Raises:
        ValueError: 不正な戦略
        ConfigurationError: 選択数・保証当選数・固定数字の指定が不正
        InsufficientPoolError: 候補の数字が足りない
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"不正な戦略: '{strategy}' (有効: {', '.join(STRATEGIES.keys())})")
    return STRATEGIES[strategy](config, pool, rng)


def estimate_wheel_size(
    available_count: int,
    guaranteed_hits: int,
    pool: PoolConfig,
    game_size: Optional[int] = None,
) -> WheelSizeEstimate:
    """
    ホイールに必要なゲーム数の目安を求める。

    最小ゲーム数 = max(1, ceil(候補数 / 選択数))。
    推奨ゲーム数は保証当選数に応じて ×2.0（5以上）、×1.5（4）、×1.2（それ以外）。

    Raises:
        ConfigurationError: 選択数がゲームの許容範囲外の場合
    """
    if game_size is None:
        game_size = pool.min_per_game
    if game_size < pool.min_per_game or game_size > pool.max_per_game:
        raise ConfigurationError(
            f"選択数は{pool.min_per_game}〜{pool.max_per_game}の範囲で指定してください（{game_size}）"
        )

    min_games = max(1, math.ceil(available_count / game_size))
    if guaranteed_hits >= 5:
        factor = 2.0
    elif guaranteed_hits >= 4:
        factor = 1.5
    else:
        factor = 1.2
    recommended = math.ceil(min_games * factor)

    return WheelSizeEstimate(
        min_games_theoretical=min_games,
        recommended_games=recommended,
        estimated_cost=recommended * pool.price_for(game_size),
    )
