"""
ロト統計エンジン - モンテカルロ・シミュレーション モジュール

一様ランダムなゲームを大量試行し、バランス判定の基準確率と
各指標のヒストグラムを求める。

使用方法:
    python -m src.montecarlo [--game megasena|lotofacil|...] [--trials N]
"""

from src.montecarlo.simulator import (
    BalanceBands,
    MonteCarloSimulator,
    SimulationResult,
    get_balance_bands,
    is_balanced,
)
from src.montecarlo.analyzer import print_report, summarize_histogram
from src.montecarlo.exporter import export_csv, export_json
from src.montecarlo.visualizer import generate_report_html

__all__ = [
    "BalanceBands",
    "MonteCarloSimulator",
    "SimulationResult",
    "get_balance_bands",
    "is_balanced",
    "print_report",
    "summarize_histogram",
    "export_csv",
    "export_json",
    "generate_report_html",
]
