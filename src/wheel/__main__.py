"""
ロト統計エンジン - ホイール CLIエントリーポイント

使用方法:
    python -m src.wheel --numbers 数字,数字,... [オプション]

実行例:
    # メガセナ 15数字から最適化ホイール（4個保証を要求）
    python -m src.wheel --numbers 3,7,12,18,21,25,29,33,37,41,44,48,52,55,59 --hits 4

    # 固定数字つき、カバレッジ戦略、直近100回と照合
    python -m src.wheel --numbers 1-20 --fixed 10 --strategy coverage --replay 100
"""

import argparse
import random
import sys

from src.common import LOTTERY_CONFIG
from src.common.data_loader import load_draws
from src.common.pool import get_pool_config
from src.wheel.engine import STRATEGIES, WheelConfiguration, estimate_wheel_size, generate_wheel
from src.wheel.report import print_replay_report, print_wheel_report
from src.wheel.verification import replay_wheel


def _parse_numbers(text: str) -> tuple[int, ...]:
    """「1,5,9」や「1-20」形式の数字リストを解析する"""
    numbers: list[int] = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            start, end = part.split("-", 1)
            numbers.extend(range(int(start), int(end) + 1))
        else:
            numbers.append(int(part))
    return tuple(numbers)


def _parse_args() -> argparse.Namespace:
    """コマンドライン引数を解析する"""
    parser = argparse.ArgumentParser(
        prog="python -m src.wheel",
        description="ロト統計 ホイール（フェシャメント）生成",
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
    parser.add_argument("--numbers", type=_parse_numbers, required=True, help="候補の数字（例: 1,5,9 / 1-20）")
    parser.add_argument("--fixed", type=_parse_numbers, default=(), help="全ゲームに含める数字")
    parser.add_argument("--size", type=int, default=None, help="1口の選択数")
    parser.add_argument("--hits", type=int, default=4, help="要求する保証当選数（デフォルト: 4）")
    parser.add_argument("--max-games", type=int, default=None, help="ゲーム数の上限")
    parser.add_argument(
        "--strategy",
        type=str,
        default="optimized",
        choices=list(STRATEGIES),
        help="生成戦略（デフォルト: optimized）",
    )
    parser.add_argument(
        "--replay",
        type=int,
        default=None,
        help="直近N回の抽選と照合する",
    )
    parser.add_argument("--seed", type=int, default=None, help="乱数シード（再現用）")
    return parser.parse_args()


def main() -> None:
    """メイン処理"""
    args = _parse_args()
    game_key = args.game.upper()
    config = get_pool_config(game_key)

    wheel_config = WheelConfiguration(
        available_numbers=args.numbers,
        guaranteed_hits=args.hits,
        fixed_numbers=args.fixed,
        game_size=args.size,
        max_games=args.max_games,
    )

    print(f"\n🎡 {config.name} ホイール生成")
    print(f"   候補: {len(args.numbers)}個  固定: {len(args.fixed)}個")

    try:
        result = generate_wheel(wheel_config, config, args.strategy, rng=random.Random(args.seed))
        estimate = estimate_wheel_size(len(args.numbers), args.hits, config, args.size)
    except ValueError as e:
        print(f"\n❌ エラー: {e}", file=sys.stderr)
        sys.exit(1)

    print(
        f"   目安: 最小{estimate.min_games_theoretical}口 / 推奨{estimate.recommended_games}口 "
        f"（約{estimate.estimated_cost:,.2f}）"
    )
    print_wheel_report(result, config)

    if args.replay:
        try:
            draws = load_draws(game_key, args.data_dir)[-args.replay:]
        except FileNotFoundError as e:
            print(f"\n❌ エラー: {e}", file=sys.stderr)
            sys.exit(1)
        summary = replay_wheel(result.games, draws, args.hits)
        print_replay_report(summary, args.hits)


if __name__ == "__main__":
    main()
