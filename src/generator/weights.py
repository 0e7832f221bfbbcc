"""
ロト統計エンジン - 重み計算モジュール

サイクル統計から各数字のサンプリング用スコアを取り出し、
ゲーム生成用の重み辞書を生成する。
"""

from typing import Optional

from src.cycles.analyzer import NumberCycleStat

SCORE_SOURCES = ("urgency", "weighted", "custom")


def calculate_score_weights(
    stats: dict[int, NumberCycleStat],
    source: str = "urgency",
    urgency_weight: Optional[float] = None,
    frequency_weight: Optional[float] = None,
) -> dict[int, float]:
    """
    サイクル統計から各数字のスコアを計算する。

    スコアの計算式:
        urgency:  score[num] = 緊急度スコア
        weighted: score[num] = 重み付きスコア（CycleWeights の係数）
        custom:   score[num] = 緊急度 × urgency_weight + 頻度Zスコア × frequency_weight

    Args:
        stats: compute_cycle_stats() の戻り値
        source: スコアの種類（"urgency", "weighted", "custom"）
        urgency_weight: custom 時の緊急度係数
        frequency_weight: custom 時の頻度Zスコア係数

    Returns:
        {数字: スコア} の辞書（負の値もありうる）
    """
    if source not in SCORE_SOURCES:
        raise ValueError(f"不正なスコア種別: '{source}' (有効: {', '.join(SCORE_SOURCES)})")

    if source == "custom" and (urgency_weight is None or frequency_weight is None):
        raise ValueError("custom スコアには urgency_weight と frequency_weight が必要です")

    scores: dict[int, float] = {}
    for num, stat in stats.items():
        if source == "urgency":
            scores[num] = stat.urgency_score
        elif source == "weighted":
            scores[num] = stat.weighted_score
        else:
            scores[num] = (
                stat.urgency_score * urgency_weight
                + stat.frequency_z_score * frequency_weight
            )

    return scores
