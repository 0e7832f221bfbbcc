"""
ロト統計エンジン - モンテカルロ・シミュレーション エンジン

一様ランダムなゲームを大量に抽選し、「バランスの取れたゲーム」が
偶然だけでどの程度の割合で現れるかを推定する。
品質スコアなど他のしきい値を調整する際の基準値として使う。
"""

import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from src.common.pool import PoolConfig, get_row


@dataclass(frozen=True)
class BalanceBands:
    """
    「バランスが取れている」と判定する各指標の許容範囲（両端含む）。

    既定値はメガセナ 6個選択向けの経験値。
    """

    repeats: tuple[int, int] = (0, 2)
    """参照回の当選番号との重複数"""

    even_count: tuple[int, int] = (2, 4)
    sum: tuple[int, int] = (90, 240)
    frame_count: tuple[int, int] = (1, 4)
    prime_count: tuple[int, int] = (0, 3)
    min_rows: int = 3
    """数字が現れる行の最小数"""


# ゲームごとのプリセット
BALANCE_PRESETS: dict[str, BalanceBands] = {
    "MEGASENA": BalanceBands(),
    "LOTOFACIL": BalanceBands(
        repeats=(7, 11),
        even_count=(6, 9),
        sum=(170, 220),
        frame_count=(8, 11),
        prime_count=(4, 7),
        min_rows=5,
    ),
}


def get_balance_bands(game_key: str) -> BalanceBands:
    """ゲームキーに対応するプリセット（なければメガセナ向けの既定値）"""
    return BALANCE_PRESETS.get(game_key.upper(), BalanceBands())


def _within(value: int, band: tuple[int, int]) -> bool:
    return band[0] <= value <= band[1]


def is_balanced(
    game: Iterable[int],
    reference_draw: Iterable[int],
    config: PoolConfig,
    bands: BalanceBands,
) -> bool:
    """
    ゲームがバランス条件をすべて満たすか判定する。

    品質スコアとは独立した判定で、重複数・偶数・合計・枠・素数・行の
    いずれかが範囲外なら False を返す。
    参照回が空のときは重複数の判定を行わない。
    """
    numbers = set(game)
    reference = set(reference_draw)

    if reference and not _within(len(numbers & reference), bands.repeats):
        return False
    if not _within(sum(1 for n in numbers if n % 2 == 0), bands.even_count):
        return False
    if not _within(sum(numbers), bands.sum):
        return False
    if not _within(sum(1 for n in numbers if n in config.frame_numbers), bands.frame_count):
        return False
    if not _within(sum(1 for n in numbers if n in config.prime_numbers), bands.prime_count):
        return False

    rows = {get_row(n, config.grid_cols) for n in numbers}
    return len(rows) >= bands.min_rows


@dataclass
class SimulationResult:
    """シミュレーション結果"""

    trials: int
    balanced_trials: int
    probability_of_balanced: float
    frame_count: dict[int, int] = field(default_factory=dict)
    """枠の個数 → 試行回数"""

    prime_count: dict[int, int] = field(default_factory=dict)
    fibonacci_count: dict[int, int] = field(default_factory=dict)
    sum: dict[int, int] = field(default_factory=dict)

    def histograms(self) -> dict[str, dict[int, int]]:
        """4つのヒストグラムを名前つきで返す"""
        return {
            "frame_count": self.frame_count,
            "prime_count": self.prime_count,
            "fibonacci_count": self.fibonacci_count,
            "sum": self.sum,
        }


class MonteCarloSimulator:
    """
    一様ランダム抽選によるバランス判定のモンテカルロ・シミュレーション。

    プールから game_size 個の部分集合を一様に抽選し（スコアによる重み付けなし）、
    バランス判定と4つの指標のヒストグラムを集計する。

    使用例:
        >>> from src.common.pool import get_pool_config
        >>> config = get_pool_config("MEGASENA")
        >>> sim = MonteCarloSimulator(config, trials=100_000)
        >>> result = sim.run(reference_draw=[4, 15, 23, 37, 41, 58])
    """

    def __init__(
        self,
        config: PoolConfig,
        trials: int = 100_000,
        game_size: Optional[int] = None,
        bands: Optional[BalanceBands] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Args:
            config: 数字プール設定
            trials: シミュレーション試行回数
            game_size: 1ゲームの選択数（省略時はゲームの最小選択数）
            bands: バランス判定の範囲（省略時はゲームのプリセット）
            rng: 乱数生成器（テストでの再現用）
        """
        if trials < 1:
            raise ValueError(f"試行回数は1以上で指定してください（{trials}）")

        self.config = config
        self.trials = trials
        self.game_size = game_size if game_size is not None else config.min_per_game
        if not 1 <= self.game_size <= config.range_max:
            raise ValueError(f"選択数は1〜{config.range_max}の範囲で指定してください（{self.game_size}）")
        self.bands = bands if bands is not None else get_balance_bands(config.key)
        self.rng = rng if rng is not None else random.Random()

        self.population: list[int] = list(config.numbers)

    def run(
        self,
        reference_draw: Iterable[int] = (),
        trials: Optional[int] = None,
        progress_callback: Optional[Callable[[int, int], None]] = None,
        progress_interval: int = 10_000,
    ) -> SimulationResult:
        """
        シミュレーションを実行する。

        Args:
            reference_draw: 重複数を数える参照回の当選番号（通常は直近の回）。
                空なら重複数の判定を省く
            trials: 試行回数（省略時はコンストラクタの値）
            progress_callback: 進行状況通知関数 fn(current, total)
            progress_interval: コールバック呼び出し間隔（試行回数）

        Returns:
            SimulationResult
        """
        total = trials if trials is not None else self.trials
        if total < 1:
            raise ValueError(f"試行回数は1以上で指定してください（{total}）")
        reference = frozenset(reference_draw)

        balanced = 0
        frame_hist: Counter = Counter()
        prime_hist: Counter = Counter()
        fibonacci_hist: Counter = Counter()
        sum_hist: Counter = Counter()

        for i in range(total):
            game = self.rng.sample(self.population, self.game_size)

            if is_balanced(game, reference, self.config, self.bands):
                balanced += 1

            frame_hist[sum(1 for n in game if n in self.config.frame_numbers)] += 1
            prime_hist[sum(1 for n in game if n in self.config.prime_numbers)] += 1
            fibonacci_hist[sum(1 for n in game if n in self.config.fibonacci_numbers)] += 1
            sum_hist[sum(game)] += 1

            # 進行状況の通知
            if progress_callback and (i + 1) % progress_interval == 0:
                progress_callback(i + 1, total)

        return SimulationResult(
            trials=total,
            balanced_trials=balanced,
            probability_of_balanced=balanced / total,
            frame_count=dict(sorted(frame_hist.items())),
            prime_count=dict(sorted(prime_hist.items())),
            fibonacci_count=dict(sorted(fibonacci_hist.items())),
            sum=dict(sorted(sum_hist.items())),
        )
