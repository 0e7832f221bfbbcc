"""
ロト統計エンジン - ホイール レポート

生成したホイールと過去抽選との照合結果をコンソールに出力する。
"""

from src.common.pool import PoolConfig, count_combinations
from src.wheel.engine import WheelResult
from src.wheel.verification import ReplaySummary


def print_wheel_report(result: WheelResult, config: PoolConfig) -> None:
    """
    ホイールの内容と費用をコンソールに出力する。

    Args:
        result: generate_wheel() の戻り値
        config: 数字プール設定（金額表示用）
    """
    print()
    print("=" * 60)
    print(f"  🎡 {config.name} ホイール（{result.strategy}）")
    print("=" * 60)
    print(f"  ゲーム数: {result.total_games}口")
    print(f"  1口の価格: {result.cost_per_game:,.2f}  合計: {result.total_cost:,.2f}")
    print(f"  カバレッジ: {result.coverage_percent:.1f}%")
    if result.games:
        # 1口で買える k 個の組み合わせ数
        per_game = count_combinations(len(result.games[0]), config.pick_size)
        total = count_combinations(config.range_max, config.pick_size)
        print(f"  1口あたりの組み合わせ: {per_game:,}  （全{total:,}通り）")
    # 要求値であり、照合で確認するまでは保証ではない
    print(f"  要求した保証当選数: {result.guaranteed_hits}（未検証）")
    print()

    for i, game in enumerate(result.games, 1):
        nums = " ".join(f"{n:02d}" for n in game.numbers)
        print(f"  {i:>3}. [{nums}]")

    print()
    print("=" * 60)


def print_replay_report(summary: ReplaySummary, guaranteed_hits: int) -> None:
    """過去の抽選履歴との照合結果を出力する"""
    print()
    print(f"  【過去{summary.total_draws_tested}回との照合】")
    if summary.total_draws_tested == 0:
        print("    照合できる抽選がありません")
        return

    print(f"    保証（{guaranteed_hits}個以上）達成率: {summary.guarantee_success_rate:.1f}%")
    print(
        f"    最高当選数の平均: {summary.average_best_hits:.2f}  "
        f"最低当選数の平均: {summary.average_worst_hits:.2f}"
    )

    peak = max(summary.distribution.values())
    print("    最高当選数の分布:")
    for hits, count in summary.distribution.items():
        bar = "█" * int(count / peak * 20)
        pct = count / summary.total_draws_tested * 100
        print(f"      {hits:>2}個: {count:>5}回 ({pct:>5.1f}%) {bar}")
