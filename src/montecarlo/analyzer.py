"""
ロト統計エンジン - シミュレーション結果分析モジュール

モンテカルロ・シミュレーションのヒストグラムを集計・分析し、
コンソールにレポートを出力する。
"""

import numpy as np

from src.common.pool import PoolConfig
from src.montecarlo.simulator import SimulationResult

# ヒストグラムの表示名
HISTOGRAM_LABELS: dict[str, str] = {
    "frame_count": "枠の個数",
    "prime_count": "素数の個数",
    "fibonacci_count": "フィボナッチ数の個数",
    "sum": "合計",
}


def summarize_histogram(histogram: dict[int, int]) -> dict[str, float]:
    """
    ヒストグラムの要約統計を返す。

    Args:
        histogram: {値: 回数}

    Returns:
        {"mean", "std", "mode", "p05", "p95"}（空なら全て0）
    """
    if not histogram:
        return {"mean": 0.0, "std": 0.0, "mode": 0.0, "p05": 0.0, "p95": 0.0}

    values = np.array(list(histogram.keys()), dtype=np.float64)
    counts = np.array(list(histogram.values()), dtype=np.float64)
    order = np.argsort(values)
    values, counts = values[order], counts[order]

    total = counts.sum()
    mean = float((values * counts).sum() / total)
    std = float(np.sqrt(((values - mean) ** 2 * counts).sum() / total))

    # 累積割合から分位点を求める
    cumulative = np.cumsum(counts) / total
    p05 = float(values[np.searchsorted(cumulative, 0.05)])
    p95 = float(values[min(np.searchsorted(cumulative, 0.95), len(values) - 1)])

    return {
        "mean": mean,
        "std": std,
        "mode": float(values[int(np.argmax(counts))]),
        "p05": p05,
        "p95": p95,
    }


def print_report(result: SimulationResult, config: PoolConfig) -> None:
    """
    シミュレーション結果のレポートをコンソールに出力する。

    Args:
        result: MonteCarloSimulator.run() の戻り値
        config: 数字プール設定
    """
    print()
    print("=" * 60)
    print(f"  🎰 {config.name} モンテカルロ・シミュレーション結果")
    print("=" * 60)
    print(f"  試行回数: {result.trials:,} 回")
    print(f"  バランス判定を満たした回数: {result.balanced_trials:,} 回")
    print(f"  バランスの取れたゲームの確率: {result.probability_of_balanced * 100:.4f}%")
    print()

    for key, histogram in result.histograms().items():
        summary = summarize_histogram(histogram)
        print(f"  【{HISTOGRAM_LABELS[key]}】")
        print(
            f"    平均 {summary['mean']:.2f}  標準偏差 {summary['std']:.2f}  "
            f"最頻値 {summary['mode']:.0f}  5%〜95%: {summary['p05']:.0f}〜{summary['p95']:.0f}"
        )

        # 合計はビンが多いので要約のみ
        if key != "sum":
            peak = max(histogram.values()) if histogram else 1
            for value, count in histogram.items():
                bar = "█" * int(count / peak * 20)
                pct = count / result.trials * 100
                print(f"    {value:>3}: {count:>8,} ({pct:>5.2f}%) {bar}")
        print()

    print("=" * 60)
