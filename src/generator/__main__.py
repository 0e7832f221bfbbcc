"""
ロト統計エンジン - ゲーム生成 CLIエントリーポイント

使用方法:
    python -m src.generator [オプション]

実行例:
    # メガセナ 10口（緊急度スコア）
    python -m src.generator

    # ロトファシル 5口、合計170〜220に限定
    python -m src.generator --game lotofacil --games 5 --sum-min 170 --sum-max 220

    # 直近100回の分布から推奨フィルタを作り、枠の個数だけ 2〜3 に固定
    python -m src.generator --suggest 100 --frame-min 2 --frame-max 3

    # 過去データを使わず一様ランダムに生成
    python -m src.generator --random
"""

import argparse
import random
import sys
from typing import Optional

from src.common import LOTTERY_CONFIG
from src.common.data_loader import load_draws
from src.common.draws import validate_draws
from src.common.pool import get_pool_config
from src.cycles.analyzer import compute_cycle_stats
from src.generator.generator import (
    GameFilters,
    GeneratorConfig,
    RangeFilter,
    generate_games,
    generate_random_games,
)
from src.generator.suggestions import suggest_filters
from src.generator.weights import SCORE_SOURCES
from src.scoring.quality import score_game


def _parse_args() -> argparse.Namespace:
    """コマンドライン引数を解析する"""
    parser = argparse.ArgumentParser(
        prog="python -m src.generator",
        description="ロト統計 サイクルベース ゲーム生成",
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
    parser.add_argument("--games", type=int, default=10, help="生成する口数（デフォルト: 10）")
    parser.add_argument("--size", type=int, default=None, help="1口の選択数")
    parser.add_argument("--top", type=int, default=20, help="基本プールの数字数（デフォルト: 20）")
    parser.add_argument(
        "--score",
        type=str,
        default="urgency",
        choices=list(SCORE_SOURCES),
        help="重みに使うスコア（デフォルト: urgency）",
    )
    parser.add_argument("--urgency-weight", type=float, default=None, help="custom 時の緊急度係数")
    parser.add_argument("--frequency-weight", type=float, default=None, help="custom 時の頻度係数")
    parser.add_argument("--sum-min", type=int, default=None, help="合計の下限")
    parser.add_argument("--sum-max", type=int, default=None, help="合計の上限")
    parser.add_argument("--even-min", type=int, default=None, help="偶数個数の下限")
    parser.add_argument("--even-max", type=int, default=None, help="偶数個数の上限")
    parser.add_argument("--frame-min", type=int, default=None, help="枠の数字の個数の下限")
    parser.add_argument("--frame-max", type=int, default=None, help="枠の数字の個数の上限")
    parser.add_argument(
        "--suggest",
        type=int,
        default=None,
        metavar="N",
        help="直近N回（10〜500）の分布から推奨フィルタを作る（個別指定が優先）",
    )
    parser.add_argument(
        "--random",
        action="store_true",
        help="過去データを使わず一様ランダムに生成する",
    )
    parser.add_argument("--seed", type=int, default=None, help="乱数シード（再現用）")
    return parser.parse_args()


def _range_filter(low: Optional[int], high: Optional[int]) -> Optional[RangeFilter]:
    if low is None and high is None:
        return None
    return RangeFilter(low, high)


def main() -> None:
    """メイン処理"""
    args = _parse_args()
    game_key = args.game.upper()
    config = get_pool_config(game_key)
    rng = random.Random(args.seed)

    print(f"\n🎯 {config.name} ゲーム生成（{args.games}口）")

    try:
        if args.random:
            games = generate_random_games(config, args.games, args.size, rng=rng)
        else:
            print(f"\n📂 過去データを読み込み中...")
            draws = load_draws(game_key, args.data_dir)
            validate_draws(draws, config)
            print(f"   {len(draws):,}回分のデータを読み込みました")

            filters = GameFilters()
            if args.suggest is not None:
                suggestions = suggest_filters(draws, config, last_n=args.suggest)
                filters = suggestions.to_game_filters()
                print(f"\n📐 直近{suggestions.draws_analyzed}回から求めた推奨フィルタ")
                for label, metric in (
                    ("偶数個数", suggestions.even_count),
                    ("合計", suggestions.sum),
                    ("枠の個数", suggestions.frame_count),
                ):
                    print(
                        f"   {label}: {metric.min}〜{metric.max}  "
                        f"（平均 {metric.average}、最頻値 {metric.most_common}）"
                    )

            stats = compute_cycle_stats(draws, config)
            options = GeneratorConfig(
                num_games=args.games,
                game_size=args.size,
                top_n=args.top,
                filters=GameFilters(
                    even_count=_range_filter(args.even_min, args.even_max) or filters.even_count,
                    sum=_range_filter(args.sum_min, args.sum_max) or filters.sum,
                    frame_count=_range_filter(args.frame_min, args.frame_max) or filters.frame_count,
                ),
                score_source=args.score,
                urgency_weight=args.urgency_weight,
                frequency_weight=args.frequency_weight,
            )
            games = generate_games(stats, config, options, rng=rng)
    except (FileNotFoundError, ValueError) as e:
        print(f"\n❌ エラー: {e}", file=sys.stderr)
        sys.exit(1)

    if len(games) < args.games:
        print(f"\n⚠️  条件を満たすゲームは{len(games)}口のみでした")

    print()
    print("=" * 60)
    for i, game in enumerate(games, 1):
        quality = score_game(game.numbers, config)
        nums = " ".join(f"{n:02d}" for n in game.numbers)
        print(
            f"  {i:>3}. [{nums}]  合計 {game.sum:>4}  偶{game.even_count}/奇{game.odd_count}  "
            f"枠{game.frame_count}  品質 {quality.score:>3}"
        )
        for violation in quality.violations:
            print(f"         - {violation}")
    print("=" * 60)


if __name__ == "__main__":
    main()
