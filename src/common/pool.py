"""
ロト統計エンジン - 数字プール設定モジュール

LOTTERY_CONFIG の1エントリを不変の PoolConfig に変換する。
枠（モルドゥラ）・素数・フィボナッチ数の集合もここで一度だけ求め、
各エンジンには引数として明示的に渡す。

マークシートの配置（メガセナ: 6行×10列）:
    [ 01  02  03  04  05  06  07  08  09  10 ]  <- 1行目（枠）
    [ 11  12  13  14  15  16  17  18  19  20 ]
    ...
    [ 51  52  53  54  55  56  57  58  59  60 ]  <- 最終行（枠）
      ^                                     ^
      1列目（枠）                    最終列（枠）
"""

import math
from dataclasses import dataclass, field
from typing import Optional

from src.common import LOTTERY_CONFIG


@dataclass(frozen=True)
class PoolConfig:
    """数字プールとゲームの定数（生成後は変更しない）"""

    key: str
    """ゲームキー（"MEGASENA" など）"""

    name: str
    """表示用のゲーム名"""

    range_max: int
    """数字の最大値（N）。数字は 1〜N"""

    pick_size: int
    """1回の抽選で選ばれる数字の個数（k）"""

    min_per_game: int
    """1口あたりの最小選択数"""

    max_per_game: int
    """1口あたりの最大選択数"""

    grid_cols: int
    """マークシートの列数"""

    frame_numbers: frozenset[int]
    """枠（最初/最後の行・列）に位置する数字"""

    prime_numbers: frozenset[int]
    """N以下の素数"""

    fibonacci_numbers: frozenset[int]
    """N以下のフィボナッチ数"""

    prices: dict[int, float] = field(default_factory=dict, hash=False, compare=False)
    """選択数 → 1口の価格"""

    default_price: float = 0.0
    """料金表にない選択数の価格"""

    @property
    def numbers(self) -> range:
        """プール内の全数字（1〜N）"""
        return range(1, self.range_max + 1)

    @property
    def grid_rows(self) -> int:
        """マークシートの行数"""
        return math.ceil(self.range_max / self.grid_cols)

    @property
    def pool_average(self) -> float:
        """プール内の数字の平均値"""
        return (self.range_max + 1) / 2

    def price_for(self, game_size: int) -> float:
        """選択数に対応する1口の価格を返す"""
        return self.prices.get(game_size, self.default_price)


def get_row(number: int, grid_cols: int) -> int:
    """数字のマークシート上の行（1始まり）"""
    return math.ceil(number / grid_cols)


def get_column(number: int, grid_cols: int) -> int:
    """数字のマークシート上の列（1始まり）"""
    return ((number - 1) % grid_cols) + 1


def line_numbers(config: PoolConfig, row: int) -> list[int]:
    """マークシートの row 行目（1始まり）の数字。範囲外なら空リスト"""
    if row < 1 or row > config.grid_rows:
        return []
    start = (row - 1) * config.grid_cols + 1
    return list(range(start, min(start + config.grid_cols, config.range_max + 1)))


def column_numbers(config: PoolConfig, col: int) -> list[int]:
    """マークシートの col 列目（1始まり）の数字。範囲外なら空リスト"""
    if col < 1 or col > config.grid_cols:
        return []
    return list(range(col, config.range_max + 1, config.grid_cols))


# 象限の数（1〜N を値の順に4等分する）
QUADRANT_COUNT = 4


def quadrant_of(number: int, config: PoolConfig) -> int:
    """
    数字の象限（1〜4）を返す。

    象限の幅は ceil(N / 4)。メガセナなら 1-15, 16-30, 31-45, 46-60。
    """
    width = math.ceil(config.range_max / QUADRANT_COUNT)
    return (number - 1) // width + 1


def quadrant_numbers(config: PoolConfig, quadrant: int) -> list[int]:
    """象限（1〜4）に属する数字。範囲外なら空リスト"""
    if quadrant < 1 or quadrant > QUADRANT_COUNT:
        return []
    return [n for n in config.numbers if quadrant_of(n, config) == quadrant]


def build_frame_numbers(range_max: int, grid_cols: int) -> frozenset[int]:
    """最初/最後の行と最初/最後の列に位置する数字の集合を求める"""
    last_row = math.ceil(range_max / grid_cols)
    frame = set()
    for n in range(1, range_max + 1):
        row = get_row(n, grid_cols)
        col = get_column(n, grid_cols)
        if row in (1, last_row) or col in (1, grid_cols):
            frame.add(n)
    return frozenset(frame)


def primes_up_to(limit: int) -> frozenset[int]:
    """limit 以下の素数（エラトステネスの篩）"""
    if limit < 2:
        return frozenset()
    sieve = [True] * (limit + 1)
    sieve[0] = sieve[1] = False
    for i in range(2, math.isqrt(limit) + 1):
        if sieve[i]:
            for j in range(i * i, limit + 1, i):
                sieve[j] = False
    return frozenset(i for i, is_prime in enumerate(sieve) if is_prime)


def fibonacci_up_to(limit: int) -> frozenset[int]:
    """limit 以下の正のフィボナッチ数（1, 2, 3, 5, 8, ...）"""
    result = set()
    a, b = 1, 2
    while a <= limit:
        result.add(a)
        a, b = b, a + b
    return frozenset(result)


def count_combinations(n: int, r: int) -> int:
    """組み合わせ数 C(n, r)。r > n なら 0"""
    if r < 0 or r > n:
        return 0
    return math.comb(n, r)


def get_pool_config(
    game_key: str,
    frame_numbers: Optional[frozenset[int]] = None,
    prime_numbers: Optional[frozenset[int]] = None,
    fibonacci_numbers: Optional[frozenset[int]] = None,
) -> PoolConfig:
    """
    LOTTERY_CONFIG のエントリから PoolConfig を生成する。

    Args:
        game_key: ゲームキー（大文字小文字は問わない）
        frame_numbers: 枠の数字集合（省略時はマークシート配置から算出）
        prime_numbers: 素数集合（省略時は N 以下の素数）
        fibonacci_numbers: フィボナッチ数集合（省略時は N 以下のフィボナッチ数）

    Returns:
        PoolConfig

    Raises:
        ValueError: 不正なゲームキーが指定された場合
    """
    game_key = game_key.upper()
    if game_key not in LOTTERY_CONFIG:
        raise ValueError(f"不正なゲームキー: '{game_key}' (有効: {', '.join(LOTTERY_CONFIG.keys())})")

    entry = LOTTERY_CONFIG[game_key]
    range_max = entry["range_max"]
    grid_cols = entry["grid_cols"]

    return PoolConfig(
        key=game_key,
        name=entry["name"],
        range_max=range_max,
        pick_size=entry["pick_size"],
        min_per_game=entry["min_per_game"],
        max_per_game=entry["max_per_game"],
        grid_cols=grid_cols,
        frame_numbers=frame_numbers if frame_numbers is not None else build_frame_numbers(range_max, grid_cols),
        prime_numbers=prime_numbers if prime_numbers is not None else primes_up_to(range_max),
        fibonacci_numbers=fibonacci_numbers if fibonacci_numbers is not None else fibonacci_up_to(range_max),
        prices=dict(entry["prices"]),
        default_price=entry["default_price"],
    )
