"""
ロト統計エンジン - ゲーム生成モジュール

サイクル統計による重み付き抽出と、除外数字つきの一様抽出で候補ゲームを生成する。
直近の抽選の分布からフィルタの推奨範囲も求める。

使用方法:
    python -m src.generator [--game megasena|lotofacil|...] [--games N]
"""

from src.generator.generator import (
    GameFilters,
    GeneratedGame,
    GeneratorConfig,
    RangeFilter,
    generate_games,
    generate_random_games,
)
from src.generator.exclusion import ExclusionFilters, generate_games_with_exclusions
from src.generator.suggestions import FilterSuggestions, MetricStats, suggest_filters
from src.generator.weights import SCORE_SOURCES, calculate_score_weights

__all__ = [
    "GameFilters",
    "GeneratedGame",
    "GeneratorConfig",
    "RangeFilter",
    "generate_games",
    "generate_random_games",
    "ExclusionFilters",
    "generate_games_with_exclusions",
    "FilterSuggestions",
    "MetricStats",
    "suggest_filters",
    "SCORE_SOURCES",
    "calculate_score_weights",
]
