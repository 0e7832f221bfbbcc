"""
ロト統計エンジン - サイクル分析レポート

サイクル統計・大サイクル・共起分析・象限分析の結果をコンソールに出力する。
"""

from src.common.pool import PoolConfig, quadrant_numbers
from src.cycles.analyzer import FullCycleAnalysis, NumberCycleStat
from src.cycles.cooccurrence import CooccurrenceStats, top_pairs
from src.cycles.quadrants import QuadrantAnalysis


def print_cycle_report(
    stats: dict[int, NumberCycleStat],
    config: PoolConfig,
    top_n: int = 10,
) -> None:
    """
    緊急度の高い数字と、出現頻度の上位・下位をコンソールに出力する。

    Args:
        stats: compute_cycle_stats() の戻り値
        config: 数字プール設定
        top_n: 表示件数
    """
    print()
    print("=" * 60)
    print(f"  🔁 {config.name} サイクル分析結果")
    print("=" * 60)

    by_urgency = sorted(stats.values(), key=lambda s: (-s.urgency_score, s.number))
    print(f"\n  【緊急度 上位{top_n}】")
    print(f"  {'数字':>4}  {'現在':>4}  {'平均':>6}  {'標準偏差':>8}  {'緊急度':>6}  {'窓内確率':>8}")
    print("  " + "-" * 50)
    for stat in by_urgency[:top_n]:
        print(
            f"  {stat.number:>4}  {stat.current_cycle:>4}  {stat.mean:>6.2f}  "
            f"{stat.stddev:>8.2f}  {stat.urgency_score:>6.2f}  {stat.close_prob_within_window:>8.1%}"
        )

    by_frequency = sorted(stats.values(), key=lambda s: (-s.frequency_z_score, s.number))
    print(f"\n  【出現頻度 上位{top_n}】")
    for stat in by_frequency[:top_n]:
        print(f"    {stat.number:>3}: 頻度 {stat.frequency:.3f}  Z {stat.frequency_z_score:+.2f}")

    print(f"\n  【出現頻度 下位{top_n}】")
    for stat in by_frequency[-top_n:][::-1]:
        print(f"    {stat.number:>3}: 頻度 {stat.frequency:.3f}  Z {stat.frequency_z_score:+.2f}")

    print()
    print("=" * 60)


def print_full_cycle_report(analysis: FullCycleAnalysis, config: PoolConfig) -> None:
    """大サイクル（全数字が出揃うまで）の分析結果を出力する"""
    print()
    print(f"  【大サイクル】 全{config.range_max}数字が出揃うまで")
    print(f"    完了したサイクル数: {analysis.total_completed_cycles}")
    if analysis.total_completed_cycles > 0:
        print(
            f"    平均 {analysis.average_cycle_duration:.1f}回  "
            f"最長 {analysis.longest_cycle}回  最短 {analysis.shortest_cycle}回"
        )
    print(
        f"    現在のサイクル: 第{analysis.current_cycle_start}回から "
        f"{analysis.current_cycle_duration}回経過"
    )
    print(f"    未出現の数字 ({len(analysis.missing_numbers)}個): {analysis.missing_numbers}")


def print_cooccurrence_report(stats: CooccurrenceStats, top_n: int = 10) -> None:
    """共起回数とファイ係数の上位ペアを出力する"""
    print()
    print(f"  【共起回数 上位{top_n}ペア】 （{stats.total_draws:,}回中）")
    for i, j, count in top_pairs(stats, top_n, by="count"):
        print(f"    ({i:>2}, {j:>2}): {int(count):>5}回")

    print(f"\n  【ファイ係数 上位{top_n}ペア】")
    for i, j, phi in top_pairs(stats, top_n, by="correlation"):
        print(f"    ({i:>2}, {j:>2}): {phi:+.4f}")


_QUADRANT_LABELS = {"hot": "🔥 ホット", "medium": "🌤 ミディアム", "cold": "❄️ コールド"}


def print_quadrant_report(analysis: QuadrantAnalysis, config: PoolConfig) -> None:
    """象限ごとの出現数と分類を出力する"""
    print()
    print(f"  【象限分析】 直近{analysis.draws_analyzed}回  （期待値 {analysis.expected_per_quadrant:.1f}個/象限）")
    for stat in analysis.stats:
        numbers = quadrant_numbers(config, stat.quadrant)
        print(
            f"    Q{stat.quadrant} ({numbers[0]:>2}〜{numbers[-1]:>2}): "
            f"{stat.frequency:>5}個  {stat.percentage:>5.1f}%  "
            f"出現した数字 {len(stat.numbers_drawn)}/{len(numbers)}"
        )
    for key in ("hot", "medium", "cold"):
        quadrants = getattr(analysis, key)
        print(f"    {_QUADRANT_LABELS[key]}: {', '.join(f'Q{q}' for q in quadrants)}")
