"""
ロト統計エンジン - ホイール（フェシャメント）モジュール

候補プールから上限付きのゲーム集合を生成し、過去の抽選と照合する。

使用方法:
    python -m src.wheel --numbers 1,5,9,... [--strategy balanced|coverage|optimized]
"""

from src.wheel.engine import (
    STRATEGIES,
    WheelConfiguration,
    WheelResult,
    WheelSizeEstimate,
    estimate_wheel_size,
    generate_wheel,
    wheel_balanced,
    wheel_coverage,
    wheel_optimized,
)
from src.wheel.verification import (
    DrawReplay,
    ReplaySummary,
    VerificationResult,
    replay_wheel,
    verify_hits,
)
from src.wheel.report import print_replay_report, print_wheel_report

__all__ = [
    "STRATEGIES",
    "WheelConfiguration",
    "WheelResult",
    "WheelSizeEstimate",
    "estimate_wheel_size",
    "generate_wheel",
    "wheel_balanced",
    "wheel_coverage",
    "wheel_optimized",
    "DrawReplay",
    "ReplaySummary",
    "VerificationResult",
    "replay_wheel",
    "verify_hits",
    "print_replay_report",
    "print_wheel_report",
]
