"""
ロト統計エンジン - シミュレーション結果エクスポーター

シミュレーション結果をCSV/JSON形式でファイルに保存する。
"""

import csv
import json
import os
from datetime import datetime
from typing import Optional

from src.common.pool import PoolConfig
from src.montecarlo.analyzer import HISTOGRAM_LABELS
from src.montecarlo.simulator import SimulationResult


def _ensure_output_dir(output_dir: str) -> None:
    """出力ディレクトリが存在しない場合は作成する"""
    os.makedirs(output_dir, exist_ok=True)


def _generate_filename(game_key: str, ext: str) -> str:
    """タイムスタンプ付きのファイル名を生成する"""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"mc_{game_key.lower()}_{timestamp}.{ext}"


def export_csv(
    result: SimulationResult,
    config: PoolConfig,
    output_dir: str = "output",
    filepath: Optional[str] = None,
) -> str:
    """
    シミュレーション結果をCSVファイルに保存する。

    メタデータの後に、4つのヒストグラムを
    「# 見出し」行で区切ったセクションとして書き出す。

    Returns:
        保存したファイルのパス
    """
    _ensure_output_dir(output_dir)

    if filepath is None:
        filepath = os.path.join(output_dir, _generate_filename(config.key, "csv"))

    with open(filepath, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)

        # ── メタデータ ──
        writer.writerow(["# メタデータ"])
        writer.writerow(["ゲーム", config.name])
        writer.writerow(["試行回数", result.trials])
        writer.writerow(["バランス判定回数", result.balanced_trials])
        writer.writerow(["バランス確率", f"{result.probability_of_balanced:.6f}"])
        writer.writerow(["実行日時", datetime.now().strftime("%Y-%m-%d %H:%M:%S")])
        writer.writerow([])

        # ── ヒストグラム ──
        for key, histogram in result.histograms().items():
            writer.writerow([f"# {HISTOGRAM_LABELS[key]}"])
            writer.writerow(["値", "回数", "割合(%)"])
            for value, count in histogram.items():
                writer.writerow([value, count, f"{count / result.trials * 100:.4f}"])
            writer.writerow([])

    return filepath


def export_json(
    result: SimulationResult,
    config: PoolConfig,
    output_dir: str = "output",
    filepath: Optional[str] = None,
) -> str:
    """
    シミュレーション結果をJSONファイルに保存する。

    Returns:
        保存したファイルのパス
    """
    _ensure_output_dir(output_dir)

    if filepath is None:
        filepath = os.path.join(output_dir, _generate_filename(config.key, "json"))

    data = {
        "metadata": {
            "game": config.name,
            "game_key": config.key,
            "range_max": config.range_max,
            "trials": result.trials,
            "timestamp": datetime.now().isoformat(),
        },
        "balanced_trials": result.balanced_trials,
        "probability_of_balanced": result.probability_of_balanced,
        # JSONのキーは文字列になる
        "distributions": {
            key: {str(value): count for value, count in histogram.items()}
            for key, histogram in result.histograms().items()
        },
    }

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return filepath
