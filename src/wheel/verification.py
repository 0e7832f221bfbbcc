"""
ロト統計エンジン - ホイール検証モジュール

ホイールの各ゲームを実際の（またはシミュレーションの）当選番号と照合する。
ホイール生成は保証当選数を証明しないため、要求値と実績の差は
ここでの照合によってのみ確認できる。
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from src.common.draws import DrawRecord
from src.common.game import GameCandidate


@dataclass
class VerificationResult:
    """1回分の照合結果"""

    hits: list[int]
    """ゲームごとの当選数"""

    best: int
    worst: int
    average: float
    guarantee_achieved: bool
    """best ≥ guaranteed_hits"""

    guaranteed_hits: int


@dataclass
class DrawReplay:
    """過去の1開催回に対する照合結果"""

    sequence_number: int
    drawn_numbers: list[int]
    best_hits: int
    worst_hits: int
    average_hits: float
    guarantee_achieved: bool


@dataclass
class ReplaySummary:
    """過去の抽選履歴に対する照合のまとめ"""

    total_draws_tested: int
    guarantee_success_rate: float
    """保証達成回の割合（%）"""

    average_best_hits: float
    average_worst_hits: float
    distribution: dict[int, int] = field(default_factory=dict)
    """最高当選数 → 回数"""

    results: list[DrawReplay] = field(default_factory=list)


def verify_hits(
    games: Iterable[GameCandidate | Iterable[int]],
    drawn: Iterable[int],
    guaranteed_hits: int,
) -> VerificationResult:
    """
    各ゲームの当選数を数える。

    Args:
        games: ホイールのゲーム（GameCandidate または数字のイテラブル）
        drawn: 当選番号
        guaranteed_hits: ホイールに要求した保証当選数

    Returns:
        VerificationResult（ゲームが空なら全て0で未達成）
    """
    drawn_set = set(drawn)
    hits = [sum(1 for num in game if num in drawn_set) for game in games]

    if not hits:
        return VerificationResult(
            hits=[],
            best=0,
            worst=0,
            average=0.0,
            guarantee_achieved=False,
            guaranteed_hits=guaranteed_hits,
        )

    best = max(hits)
    return VerificationResult(
        hits=hits,
        best=best,
        worst=min(hits),
        average=sum(hits) / len(hits),
        guarantee_achieved=best >= guaranteed_hits,
        guaranteed_hits=guaranteed_hits,
    )


def replay_wheel(
    games: list[GameCandidate],
    draws: list[DrawRecord],
    guaranteed_hits: int,
) -> ReplaySummary:
    """
    ホイールを過去の抽選履歴の各回と照合し、保証の達成率を求める。

    Args:
        games: ホイールのゲーム
        draws: 照合する抽選履歴
        guaranteed_hits: ホイールに要求した保証当選数

    Returns:
        ReplaySummary（履歴が空なら全て0）
    """
    results: list[DrawReplay] = []
    distribution: Counter = Counter()
    successes = 0
    total_best = 0
    total_worst = 0

    for draw in draws:
        verification = verify_hits(games, draw.numbers, guaranteed_hits)
        results.append(
            DrawReplay(
                sequence_number=draw.sequence_number,
                drawn_numbers=draw.sorted_numbers,
                best_hits=verification.best,
                worst_hits=verification.worst,
                average_hits=verification.average,
                guarantee_achieved=verification.guarantee_achieved,
            )
        )
        if verification.guarantee_achieved:
            successes += 1
        total_best += verification.best
        total_worst += verification.worst
        distribution[verification.best] += 1

    tested = len(draws)
    if tested == 0:
        return ReplaySummary(
            total_draws_tested=0,
            guarantee_success_rate=0.0,
            average_best_hits=0.0,
            average_worst_hits=0.0,
        )

    return ReplaySummary(
        total_draws_tested=tested,
        guarantee_success_rate=successes / tested * 100,
        average_best_hits=total_best / tested,
        average_worst_hits=total_worst / tested,
        distribution=dict(sorted(distribution.items())),
        results=results,
    )
