"""
ロト統計エンジン - 共起分析モジュール

各回で同時に選ばれた数字ペアを数え、ペアごとの関連の強さを
ファイ係数（2値変数のピアソン相関）で表す。

N×N の行列を保持するため、N が数十程度のゲームを想定している。
N が大きいゲーム（数百以上）には向かない。
"""

from dataclasses import dataclass
from itertools import combinations

import numpy as np

from src.common.draws import DrawRecord
from src.common.pool import PoolConfig


@dataclass
class CooccurrenceStats:
    """共起分析の結果（インデックス0は未使用）"""

    matrix: np.ndarray
    """shape=(N+1, N+1)。[i][j] は i と j が同じ回に出た回数（対称）"""

    correlations: np.ndarray
    """shape=(N+1, N+1)。ファイ係数（対角は1.0）"""

    frequency: np.ndarray
    """shape=(N+1,)。各数字の出現回数"""

    total_draws: int


def compute_cooccurrence(
    draws: list[DrawRecord],
    config: PoolConfig,
) -> CooccurrenceStats:
    """
    共起行列とファイ係数行列を計算する。

    ファイ係数は各ペア (i, j) の2×2分割表から求める:
        n11 = i と j が同時に出た回数
        n10 = i のみ、n01 = j のみ、n00 = どちらも出ていない回数
        phi = (n11*n00 − n10*n01) / sqrt(n1x * n0x * nx1 * nx0)
    分母が0のペアは0とする。

    Args:
        draws: 抽選履歴
        config: 数字プール設定

    Returns:
        CooccurrenceStats
    """
    size = config.range_max + 1
    matrix = np.zeros((size, size), dtype=np.int64)
    frequency = np.zeros(size, dtype=np.int64)

    for draw in draws:
        numbers = draw.sorted_numbers
        for num in numbers:
            frequency[num] += 1
        for a, b in combinations(numbers, 2):
            matrix[a, b] += 1
            matrix[b, a] += 1

    total = float(len(draws))
    n11 = matrix.astype(np.float64)
    freq_i = frequency.astype(np.float64)[:, np.newaxis]
    freq_j = frequency.astype(np.float64)[np.newaxis, :]

    n10 = freq_i - n11
    n01 = freq_j - n11
    n00 = total - freq_i - freq_j + n11

    numerator = n11 * n00 - n10 * n01
    denominator = np.sqrt(freq_i * (total - freq_i) * freq_j * (total - freq_j))

    correlations = np.zeros((size, size), dtype=np.float64)
    np.divide(numerator, denominator, out=correlations, where=denominator != 0)
    np.clip(correlations, -1.0, 1.0, out=correlations)

    # インデックス0は使わない。対角は慣例で1.0
    correlations[0, :] = 0.0
    correlations[:, 0] = 0.0
    idx = np.arange(1, size)
    correlations[idx, idx] = 1.0

    return CooccurrenceStats(
        matrix=matrix,
        correlations=correlations,
        frequency=frequency,
        total_draws=len(draws),
    )


def top_pairs(
    stats: CooccurrenceStats,
    top_n: int = 10,
    by: str = "count",
) -> list[tuple[int, int, float]]:
    """
    共起回数またはファイ係数の上位ペアを返す。

    Args:
        stats: compute_cooccurrence() の戻り値
        top_n: 返す件数
        by: "count"（共起回数）または "correlation"（ファイ係数）

    Returns:
        [(i, j, 値), ...]（i < j、降順）
    """
    if by not in ("count", "correlation"):
        raise ValueError(f"不正な指標: '{by}' (有効: count, correlation)")

    source = stats.matrix if by == "count" else stats.correlations
    size = source.shape[0]
    pairs = [
        (i, j, float(source[i, j]))
        for i in range(1, size)
        for j in range(i + 1, size)
    ]
    pairs.sort(key=lambda p: (-p[2], p[0], p[1]))
    return pairs[:top_n]
