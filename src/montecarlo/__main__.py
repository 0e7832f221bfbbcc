"""
ロト統計エンジン - モンテカルロ・シミュレーション CLIエントリーポイント

使用方法:
    python -m src.montecarlo [オプション]

実行例:
    # メガセナ（デフォルト）
    python -m src.montecarlo

    # ロトファシル、試行50万回、HTMLレポート出力
    python -m src.montecarlo --game lotofacil --trials 500000 --visualize

    # 8個選択のゲームをJSONで保存
    python -m src.montecarlo --game-size 8 --export json
"""

import argparse
import random
import sys
import time
from typing import Optional

from src.common import LOTTERY_CONFIG
from src.common.data_loader import load_draws
from src.common.pool import get_pool_config
from src.montecarlo.analyzer import print_report
from src.montecarlo.exporter import export_csv, export_json
from src.montecarlo.simulator import MonteCarloSimulator
from src.montecarlo.visualizer import generate_report_html


def _parse_args() -> argparse.Namespace:
    """コマンドライン引数を解析する"""
    parser = argparse.ArgumentParser(
        prog="python -m src.montecarlo",
        description="ロト統計 モンテカルロ・シミュレーション",
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
        "--trials",
        type=int,
        default=100_000,
        help="シミュレーション試行回数（デフォルト: 100,000）",
    )
    parser.add_argument(
        "--game-size",
        type=int,
        default=None,
        help="1ゲームの選択数（省略時: ゲームの最小選択数）",
    )
    parser.add_argument(
        "--no-reference",
        action="store_true",
        help="直近回との重複判定を行わない",
    )
    parser.add_argument(
        "--export",
        type=str,
        choices=["csv", "json"],
        default=None,
        help="結果をファイルに保存する形式",
    )
    parser.add_argument(
        "--visualize",
        action="store_true",
        help="インタラクティブHTMLレポートを出力する",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="乱数シード（再現用）",
    )
    return parser.parse_args()


def _progress_printer(current: int, total: int) -> None:
    """シミュレーション進行状況をコンソールに表示"""
    pct = current / total * 100
    print(f"\r  進行中... {current:>10,} / {total:,} ({pct:.1f}%)", end="", flush=True)


def _latest_draw(game_key: str, data_dir: Optional[str]) -> list[int]:
    """直近回の当選番号（CSVがなければ空）"""
    try:
        draws = load_draws(game_key, data_dir)
    except FileNotFoundError:
        print("   ⚠️  CSVファイルが見つからないため、重複判定なしで実行します")
        return []
    if not draws:
        return []
    latest = draws[-1]
    print(f"   参照回: 第{latest.sequence_number}回 {latest.sorted_numbers}")
    return latest.sorted_numbers


def main() -> None:
    """メイン処理"""
    args = _parse_args()
    game_key = args.game.upper()
    config = get_pool_config(game_key)

    try:
        simulator = MonteCarloSimulator(
            config,
            trials=args.trials,
            game_size=args.game_size,
            rng=random.Random(args.seed),
        )
    except ValueError as e:
        print(f"\n❌ エラー: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"\n🎲 {config.name} モンテカルロ・シミュレーション")
    print(f"   範囲: 1〜{config.range_max}  選択数: {simulator.game_size}個")
    print(f"   試行回数: {args.trials:,}")

    # 1. 参照回の読み込み
    reference: list[int] = []
    if not args.no_reference:
        print(f"\n📂 直近の当選番号を読み込み中...")
        reference = _latest_draw(game_key, args.data_dir)

    # 2. シミュレーションの実行
    print(f"\n🎰 シミュレーション実行中...")
    start_time = time.time()

    result = simulator.run(
        reference_draw=reference,
        progress_callback=_progress_printer,
        progress_interval=max(args.trials // 20, 1),  # 5%刻みで進捗表示
    )
    print()  # 改行（進捗表示の後）

    elapsed = time.time() - start_time
    print(f"   完了！ 実行時間: {elapsed:.2f}秒")

    # 3. 結果の表示
    print_report(result, config)

    # 4. ファイル出力
    if args.export == "csv":
        path = export_csv(result, config)
        print(f"\n💾 CSVを保存しました: {path}")
    elif args.export == "json":
        path = export_json(result, config)
        print(f"\n💾 JSONを保存しました: {path}")

    if args.visualize:
        path = generate_report_html(result, config)
        print(f"\n📊 HTMLレポートを保存しました: {path}")


if __name__ == "__main__":
    main()
