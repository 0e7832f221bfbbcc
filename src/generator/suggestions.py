"""
ロト統計エンジン - フィルタ推奨モジュール

直近の抽選結果から偶数個数・合計・枠個数の分布を集計し、
生成フィルタ（GameFilters）の推奨範囲を求める。

推奨範囲:
    下限 = 昇順に並べた値の floor(件数 × 0.10) 番目（10パーセンタイル）
    上限 = 昇順に並べた値の floor(件数 × 0.90) 番目（90パーセンタイル）
平均は四捨五入、最頻値は同数なら小さい値を採用する。
"""

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from src.common.draws import DrawRecord
from src.common.game import GameCandidate
from src.common.pool import PoolConfig
from src.generator.generator import GameFilters, RangeFilter

# 集計対象の回数の許容範囲
MIN_DRAWS_TO_ANALYZE = 10
MAX_DRAWS_TO_ANALYZE = 500

_LOWER_PERCENTILE = 0.10
_UPPER_PERCENTILE = 0.90


@dataclass(frozen=True)
class MetricStats:
    """1指標の分布の要約"""

    min: int
    max: int
    average: int
    most_common: int

    def to_range(self) -> RangeFilter:
        return RangeFilter(self.min, self.max)


@dataclass(frozen=True)
class FilterSuggestions:
    """直近の抽選から求めた推奨フィルタ"""

    draws_analyzed: int
    even_count: MetricStats
    sum: MetricStats
    frame_count: MetricStats

    def to_game_filters(self) -> GameFilters:
        """推奨範囲をそのまま GameFilters に変換する"""
        return GameFilters(
            even_count=self.even_count.to_range(),
            sum=self.sum.to_range(),
            frame_count=self.frame_count.to_range(),
        )


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def summarize_metric(values: Sequence[int]) -> MetricStats:
    """値の列を10〜90パーセンタイル・平均・最頻値に要約する（空なら全て0）"""
    if len(values) == 0:
        return MetricStats(0, 0, 0, 0)

    arr = np.sort(np.asarray(values, dtype=np.int64))
    lower = arr[int(len(arr) * _LOWER_PERCENTILE)]
    upper = arr[int(len(arr) * _UPPER_PERCENTILE)]

    # np.unique は昇順なので、argmax は同数の中で最小の値を返す
    unique, counts = np.unique(arr, return_counts=True)
    mode = unique[int(np.argmax(counts))]

    return MetricStats(
        min=int(lower),
        max=int(upper),
        average=_round_half_up(float(arr.mean())),
        most_common=int(mode),
    )


def suggest_filters(
    draws: Sequence[DrawRecord],
    config: PoolConfig,
    last_n: int = 100,
) -> FilterSuggestions:
    """
    直近 last_n 回の抽選から推奨フィルタを求める。

    Args:
        draws: 開催回昇順の抽選履歴
        config: 数字プール設定
        last_n: 集計する直近の回数（10〜500）

    Returns:
        FilterSuggestions

    Raises:
        ValueError: last_n が範囲外、または抽選履歴が空の場合
    """
    if last_n < MIN_DRAWS_TO_ANALYZE or last_n > MAX_DRAWS_TO_ANALYZE:
        raise ValueError(
            f"集計回数は{MIN_DRAWS_TO_ANALYZE}〜{MAX_DRAWS_TO_ANALYZE}の範囲で指定してください（{last_n}）"
        )
    if not draws:
        raise ValueError("抽選履歴がありません")

    even_counts: list[int] = []
    sums: list[int] = []
    frame_counts: list[int] = []

    recent = draws[-last_n:]
    for draw in recent:
        candidate = GameCandidate.of(draw.numbers)
        even_counts.append(candidate.even_count)
        sums.append(candidate.total)
        frame_counts.append(candidate.frame_count(config.frame_numbers))

    return FilterSuggestions(
        draws_analyzed=len(recent),
        even_count=summarize_metric(even_counts),
        sum=summarize_metric(sums),
        frame_count=summarize_metric(frame_counts),
    )
