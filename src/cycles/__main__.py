"""
ロト統計エンジン - サイクル分析 CLIエントリーポイント

使用方法:
    python -m src.cycles [オプション]

実行例:
    # メガセナ（デフォルト）
    python -m src.cycles

    # ロトファシル、直近300回、上位15件
    python -m src.cycles --game lotofacil --recent 300 --top 15
"""

import argparse
import sys

from src.common import LOTTERY_CONFIG
from src.common.data_loader import load_draws
from src.common.draws import validate_draws
from src.common.pool import get_pool_config
from src.cycles.analyzer import CycleWeights, compute_cycle_stats, compute_full_cycle_analysis
from src.cycles.cooccurrence import compute_cooccurrence
from src.cycles.quadrants import analyze_quadrants
from src.cycles.report import (
    print_cooccurrence_report,
    print_cycle_report,
    print_full_cycle_report,
    print_quadrant_report,
)


def _parse_args() -> argparse.Namespace:
    """コマンドライン引数を解析する"""
    parser = argparse.ArgumentParser(
        prog="python -m src.cycles",
        description="ロト統計 サイクル・共起分析",
    )
    parser.add_argument(
        "--game",
        type=str,
        default="megasena",
        choices=[key.lower() for key in LOTTERY_CONFIG],
        help="対象ゲーム（デフォルト: megasena）",
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="CSVファイルのディレクトリ（省略時: data/raw/）",
    )
    parser.add_argument(
        "--recent",
        type=int,
        default=None,
        help="直近N回のデータのみ使用（省略時: 全データ）",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=10,
        help="表示件数（デフォルト: 10）",
    )
    parser.add_argument(
        "--window",
        type=int,
        default=5,
        help="経験確率の窓幅（デフォルト: 5）",
    )
    parser.add_argument(
        "--quadrant-draws",
        type=int,
        default=50,
        help="象限分析に使う直近の回数（デフォルト: 50）",
    )
    return parser.parse_args()


def main() -> None:
    """メイン処理"""
    args = _parse_args()
    game_key = args.game.upper()
    config = get_pool_config(game_key)

    print(f"\n🔁 {config.name} サイクル分析")

    # 1. CSVデータの読み込み
    print(f"\n📂 過去データを読み込み中...")
    try:
        draws = load_draws(game_key, args.data_dir)
        if args.recent:
            draws = draws[-args.recent:]
        validate_draws(draws, config)
    except (FileNotFoundError, ValueError) as e:
        print(f"\n❌ エラー: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"   {len(draws):,}回分のデータを使用します")

    # 2. 分析
    stats = compute_cycle_stats(draws, config, CycleWeights(window=args.window))
    full_cycle = compute_full_cycle_analysis(draws, config)
    cooccurrence = compute_cooccurrence(draws, config)
    try:
        quadrants = analyze_quadrants(draws, config, last_n=args.quadrant_draws)
    except ValueError as e:
        print(f"\n❌ エラー: {e}", file=sys.stderr)
        sys.exit(1)

    # 3. 結果の表示
    print_cycle_report(stats, config, top_n=args.top)
    print_full_cycle_report(full_cycle, config)
    print_cooccurrence_report(cooccurrence, top_n=args.top)
    print_quadrant_report(quadrants, config)


if __name__ == "__main__":
    main()
