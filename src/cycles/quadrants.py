"""
ロト統計エンジン - 象限分析モジュール

1〜N を値の順に4等分した象限ごとに、直近の抽選での出現数を集計し、
象限を「ホット（1位）・ミディアム（2〜3位）・コールド（4位）」に分類する。

コールドの象限の数字は、除外生成（generate_games_with_exclusions）の
除外候補としてそのまま渡せる。
"""

from dataclasses import dataclass, field
from typing import Sequence

from src.common.draws import DrawRecord
from src.common.pool import QUADRANT_COUNT, PoolConfig, quadrant_numbers, quadrant_of


@dataclass
class QuadrantStat:
    """1象限分の集計"""

    quadrant: int
    frequency: int
    """対象期間に出現した数字の延べ個数"""

    percentage: float
    """全出現数に占める割合（%）"""

    numbers_drawn: list[int] = field(default_factory=list)
    """1回以上出現した数字（昇順）"""


@dataclass
class QuadrantAnalysis:
    """象限分析の結果"""

    draws_analyzed: int
    stats: list[QuadrantStat]
    """出現数の降順（同数なら象限番号順）"""

    hot: list[int]
    medium: list[int]
    cold: list[int]
    total_numbers: int
    """対象期間の出現数字の延べ個数"""

    expected_per_quadrant: float

    def cold_numbers(self, config: PoolConfig) -> list[int]:
        """コールドに分類された象限の数字"""
        return [n for q in self.cold for n in quadrant_numbers(config, q)]


def analyze_quadrants(
    draws: Sequence[DrawRecord],
    config: PoolConfig,
    last_n: int = 50,
) -> QuadrantAnalysis:
    """
    直近 last_n 回の抽選を象限ごとに集計する。

    Args:
        draws: 開催回昇順の抽選履歴
        config: 数字プール設定
        last_n: 集計する直近の回数

    Returns:
        QuadrantAnalysis
    """
    if last_n < 1:
        raise ValueError(f"集計回数は1以上を指定してください（{last_n}）")

    recent = list(draws[-last_n:])
    counts = {q: 0 for q in range(1, QUADRANT_COUNT + 1)}
    drawn: dict[int, set[int]] = {q: set() for q in counts}

    for draw in recent:
        for num in draw.numbers:
            q = quadrant_of(num, config)
            counts[q] += 1
            drawn[q].add(num)

    total_numbers = sum(counts.values())
    stats = [
        QuadrantStat(
            quadrant=q,
            frequency=counts[q],
            percentage=counts[q] / total_numbers * 100 if total_numbers else 0.0,
            numbers_drawn=sorted(drawn[q]),
        )
        for q in counts
    ]
    stats.sort(key=lambda s: (-s.frequency, s.quadrant))

    order = [s.quadrant for s in stats]
    return QuadrantAnalysis(
        draws_analyzed=len(recent),
        stats=stats,
        hot=order[:1],
        medium=order[1:3],
        cold=order[3:],
        total_numbers=total_numbers,
        expected_per_quadrant=total_numbers / QUADRANT_COUNT,
    )
