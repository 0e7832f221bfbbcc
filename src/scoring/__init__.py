"""ロト統計エンジン - 品質スコアモジュール"""

from src.scoring.quality import QualityMetrics, QualityScoreResult, ScoringRules, score_game

__all__ = ["QualityMetrics", "QualityScoreResult", "ScoringRules", "score_game"]
