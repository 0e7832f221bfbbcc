"""
ロト統計エンジン - サイクル分析モジュール

抽選履歴から各数字の「出現間隔（サイクル）」を求め、
現在の未出現期間が過去の間隔と比べてどれだけ長いか（緊急度）を算出する。

用語:
    サイクル      : 同じ数字が連続して出現するまでの開催回数
    現在サイクル  : 最後の出現から現在までの未出現回数（出現した回に0へ戻る）
    緊急度スコア  : (現在サイクル − 平均) / 標準偏差 を0で下限クリップした値
    重み付きスコア: 緊急度と出現頻度Zスコアの加重和

入力は開催回昇順・範囲内の数字であることを前提とする（validate_draws() 参照）。
"""

import statistics
from dataclasses import dataclass, field

import numpy as np
from sklearn.preprocessing import StandardScaler

from src.common.draws import DrawRecord
from src.common.pool import PoolConfig


@dataclass(frozen=True)
class CycleWeights:
    """重み付きスコアの係数と経験確率の窓幅"""

    urgency: float = 0.6
    frequency: float = 0.4
    window: int = 5


@dataclass(frozen=True)
class NumberCycleStat:
    """1つの数字のサイクル統計（生成後は読み取り専用）"""

    number: int
    historical_cycles: tuple[int, ...]
    """過去の出現間隔（すべて正の整数）"""

    current_cycle: int
    """最後の出現からの未出現回数"""

    mean: float = 0.0
    """過去サイクルの平均（標本なしなら0）"""

    stddev: float = 0.0
    """過去サイクルの標本標準偏差（標本2未満なら0）"""

    close_prob_within_window: float = 0.0
    """現在サイクル以上だった過去サイクルのうち、窓幅以内に閉じた割合"""

    frequency: float = 0.0
    """過去サイクル数 / 総開催回数"""

    frequency_z_score: float = 0.0
    urgency_score: float = 0.0
    weighted_score: float = 0.0


@dataclass
class FullCycleAnalysis:
    """全数字が出揃うまでの「大サイクル」の分析結果"""

    total_completed_cycles: int
    current_cycle_start: int
    """現在の大サイクルが始まった開催回"""

    current_cycle_duration: int
    longest_cycle: int
    shortest_cycle: int
    average_cycle_duration: float
    missing_numbers: list[int] = field(default_factory=list)
    """現在の大サイクルでまだ出ていない数字"""

    numbers_in_current_cycle: list[int] = field(default_factory=list)


def _track_cycles(
    draws: list[DrawRecord],
    range_max: int,
) -> tuple[list[list[int]], list[int]]:
    """
    履歴を1回走査し、各数字の過去サイクルと現在サイクルを求める。

    Returns:
        (historical[1..N], current[1..N])。インデックス0は未使用
    """
    last_seen = [0] * (range_max + 1)
    current = [0] * (range_max + 1)
    historical: list[list[int]] = [[] for _ in range(range_max + 1)]

    for draw in draws:
        present = draw.numbers
        for num in range(1, range_max + 1):
            if num in present:
                if last_seen[num] > 0:
                    historical[num].append(draw.sequence_number - last_seen[num])
                last_seen[num] = draw.sequence_number
                current[num] = 0
            else:
                current[num] += 1

    return historical, current


def _close_probability(cycles: list[int], current: int, window: int) -> float:
    """
    生存関数による経験確率。

    現在サイクル以上まで続いた過去サイクルのうち、
    current + window 以内に閉じたものの割合を返す。
    """
    survivors = [c for c in cycles if c >= current]
    if not survivors:
        return 0.0
    closing = [c for c in survivors if c <= current + window]
    return len(closing) / len(survivors)


def _frequency_z_scores(frequencies: list[float]) -> list[float]:
    """出現頻度を母集団平均・母標準偏差で標準化する（分散0なら全て0）"""
    if not frequencies:
        return []
    scaler = StandardScaler()
    scaled = scaler.fit_transform(np.array(frequencies, dtype=np.float64).reshape(-1, 1))
    return [float(z) for z in scaled.ravel()]


def compute_cycle_stats(
    draws: list[DrawRecord],
    config: PoolConfig,
    weights: CycleWeights | None = None,
) -> dict[int, NumberCycleStat]:
    """
    抽選履歴から全数字のサイクル統計を計算する。

    Args:
        draws: 開催回昇順の抽選履歴
        config: 数字プール設定
        weights: 重み付きスコアの係数（省略時は 0.6 / 0.4、窓幅5）

    Returns:
        {数字: NumberCycleStat} の辞書（1〜range_max、数字順）
    """
    if weights is None:
        weights = CycleWeights()

    range_max = config.range_max
    historical, current = _track_cycles(draws, range_max)
    total_draws = len(draws)

    # ── 1. サイクルの平均・標準偏差・緊急度 ──
    base: dict[int, dict] = {}
    for num in range(1, range_max + 1):
        cycles = historical[num]
        mean = statistics.fmean(cycles) if cycles else 0.0
        stddev = statistics.stdev(cycles) if len(cycles) >= 2 else 0.0
        urgency = max(0.0, (current[num] - mean) / stddev) if stddev != 0 else 0.0

        base[num] = {
            "cycles": tuple(cycles),
            "mean": mean,
            "stddev": stddev,
            "close_prob": _close_probability(cycles, current[num], weights.window),
            "urgency": urgency,
            "frequency": len(cycles) / total_draws if total_draws > 0 else 0.0,
        }

    # ── 2. 出現頻度のZスコア ──
    numbers = list(range(1, range_max + 1))
    z_scores = _frequency_z_scores([base[n]["frequency"] for n in numbers])

    # ── 3. 重み付きスコア ──
    stats: dict[int, NumberCycleStat] = {}
    for num, freq_z in zip(numbers, z_scores):
        entry = base[num]
        stats[num] = NumberCycleStat(
            number=num,
            historical_cycles=entry["cycles"],
            current_cycle=current[num],
            mean=entry["mean"],
            stddev=entry["stddev"],
            close_prob_within_window=entry["close_prob"],
            frequency=entry["frequency"],
            frequency_z_score=freq_z,
            urgency_score=entry["urgency"],
            weighted_score=weights.urgency * entry["urgency"] + weights.frequency * freq_z,
        )

    return stats


def compute_full_cycle_analysis(
    draws: list[DrawRecord],
    config: PoolConfig,
) -> FullCycleAnalysis:
    """
    全数字（1〜N）が少なくとも1回ずつ出揃うまでを1つの大サイクルとして分析する。

    大サイクルは全数字が出揃った回で閉じ、次の開催回から新しいサイクルが始まる。

    Args:
        draws: 開催回昇順の抽選履歴
        config: 数字プール設定

    Returns:
        FullCycleAnalysis
    """
    completed: list[int] = []
    seen: set[int] = set()
    cycle_start = draws[0].sequence_number if draws else 0

    for draw in draws:
        seen.update(draw.numbers)
        if len(seen) == config.range_max:
            completed.append(draw.sequence_number - cycle_start + 1)
            seen.clear()
            cycle_start = draw.sequence_number + 1

    current_duration = draws[-1].sequence_number - cycle_start + 1 if draws else 0

    return FullCycleAnalysis(
        total_completed_cycles=len(completed),
        current_cycle_start=cycle_start,
        current_cycle_duration=max(current_duration, 0),
        longest_cycle=max(completed, default=0),
        shortest_cycle=min(completed, default=0),
        average_cycle_duration=statistics.fmean(completed) if completed else 0.0,
        missing_numbers=[n for n in config.numbers if n not in seen],
        numbers_in_current_cycle=sorted(seen),
    )
