"""
ロト統計エンジン - サイクル分析モジュール

各数字の出現間隔・緊急度・出現頻度と、数字ペアの共起を分析する。

使用方法:
    python -m src.cycles [--game megasena|lotofacil|...] [--top N]
"""

from src.cycles.analyzer import (
    CycleWeights,
    FullCycleAnalysis,
    NumberCycleStat,
    compute_cycle_stats,
    compute_full_cycle_analysis,
)
from src.cycles.cooccurrence import CooccurrenceStats, compute_cooccurrence, top_pairs
from src.cycles.quadrants import QuadrantAnalysis, QuadrantStat, analyze_quadrants
from src.cycles.report import (
    print_cooccurrence_report,
    print_cycle_report,
    print_full_cycle_report,
    print_quadrant_report,
)

__all__ = [
    "CycleWeights",
    "FullCycleAnalysis",
    "NumberCycleStat",
    "compute_cycle_stats",
    "compute_full_cycle_analysis",
    "CooccurrenceStats",
    "compute_cooccurrence",
    "top_pairs",
    "QuadrantAnalysis",
    "QuadrantStat",
    "analyze_quadrants",
    "print_cycle_report",
    "print_full_cycle_report",
    "print_cooccurrence_report",
    "print_quadrant_report",
]
