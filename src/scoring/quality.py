"""
ロト統計エンジン - 品質スコアモジュール

候補ゲームを経験的な統計バンドと照らし合わせ、0〜100の品質スコアを付ける。
100点から開始し、違反したルールごとに固定の減点を行う（下限0）。

| # | チェック                 | しきい値                        | 減点 |
|---|--------------------------|---------------------------------|------|
| 1 | 最長連番                 | ≥ min(m−2, 5)                   | 25   |
| 2 | 偶数の割合               | m の 30%〜70% の外              | 20   |
| 3 | 合計                     | m × 平均値 の 50%〜130% の外    | 20   |
| 4 | 枠の割合                 | m の 20%〜55% の外              | 15   |
| 5 | 素数の割合               | m の 15%〜45% の外              | 12   |
| 6 | フィボナッチ数の割合     | m の 30% 超（上側のみ）         | 8    |
| 7 | いずれかの行の個数       | > min(m, 3)                     | 8    |
| 8 | 2列以上の個数            | > min(m, 2)                     | 8    |
| 9 | 振れ幅（最大−最小）      | N の 35% 未満                   | 10   |

しきい値はメガセナ（N=60, k=6）で調整された経験値であり、
他のゲームでは ScoringRules を差し替えて使う。
履歴には依存しない純粋関数で、数字の並び順にも依存しない。
"""

import math
from dataclasses import dataclass, field
from typing import Iterable, Optional

from src.common.game import GameCandidate
from src.common.pool import PoolConfig, get_column, get_row


@dataclass(frozen=True)
class ScoringRules:
    """品質スコアのしきい値と減点"""

    # 1. 連番
    max_run_cap: int = 5
    run_penalty: int = 25

    # 2. 偶数
    even_min_pct: float = 0.30
    even_max_pct: float = 0.70
    even_penalty: int = 20

    # 3. 合計（プール平均値に対する比率）
    sum_min_pct: float = 0.50
    sum_max_pct: float = 1.30
    sum_penalty: int = 20

    # 4. 枠
    frame_min_pct: float = 0.20
    frame_max_pct: float = 0.55
    frame_penalty: int = 15

    # 5. 素数
    prime_min_pct: float = 0.15
    prime_max_pct: float = 0.45
    prime_penalty: int = 12

    # 6. フィボナッチ数
    fibonacci_max_pct: float = 0.30
    fibonacci_penalty: int = 8

    # 7. 行
    max_per_row: int = 3
    row_penalty: int = 8

    # 8. 列（max_per_column を超える列が column_overflow_limit 個以上で減点）
    max_per_column: int = 2
    column_overflow_limit: int = 2
    column_penalty: int = 8

    # 9. 振れ幅（N に対する比率）
    amplitude_min_pct: float = 0.35
    amplitude_penalty: int = 10


@dataclass
class QualityMetrics:
    """スコアとは独立に計算される指標のスナップショット"""

    even_count: int
    odd_count: int
    frame_count: int
    center_count: int
    sum: int
    sequences: list[str]
    """長さ2以上の連番（"12-14" 形式）"""

    prime_count: int
    fibonacci_count: int
    rows: list[int]
    """行ごとの個数"""

    columns: list[int]
    """列ごとの個数"""

    amplitude: int
    longest_run: int
    consecutive_pairs: int
    consecutive_trios: int
    repeated_count: Optional[int] = None
    """参照回の当選番号との重複数（参照回を渡した場合のみ）"""


@dataclass
class QualityScoreResult:
    """品質スコアの結果"""

    score: int
    violations: list[str] = field(default_factory=list)
    metrics: Optional[QualityMetrics] = None


def _band(size: int, min_pct: float, max_pct: float) -> tuple[int, int]:
    """選択数に比例した許容範囲 [floor(m*min), ceil(m*max)]"""
    return math.floor(size * min_pct), math.ceil(size * max_pct)


def _count_consecutive(sorted_game: list[int]) -> tuple[int, int]:
    """隣接ペア数と連続トリオ数（厳密な連続のみ）"""
    pairs = 0
    trios = 0
    for i in range(len(sorted_game) - 1):
        if sorted_game[i + 1] == sorted_game[i] + 1:
            pairs += 1
            if i < len(sorted_game) - 2 and sorted_game[i + 2] == sorted_game[i] + 2:
                trios += 1
    return pairs, trios


def score_game(
    game: Iterable[int],
    config: PoolConfig,
    rules: Optional[ScoringRules] = None,
    reference_draw: Optional[Iterable[int]] = None,
) -> QualityScoreResult:
    """
    候補ゲームの品質スコアを計算する。

    Args:
        game: 数字のイテラブル（順序・重複は無視される）
        config: 数字プール設定（枠・素数・フィボナッチ集合とグリッド）
        rules: しきい値（省略時はメガセナ向けの既定値）
        reference_draw: 重複数を数える参照回の当選番号（任意）

    Returns:
        QualityScoreResult
    """
    if rules is None:
        rules = ScoringRules()

    candidate = GameCandidate.of(sorted(set(game)))
    sorted_game = list(candidate.numbers)
    size = len(sorted_game)

    score = 100
    violations: list[str] = []

    # ── 1. 連番 ──
    longest_run = candidate.longest_run
    sequences = [f"{start}-{end}" for start, end in candidate.runs]
    max_acceptable_run = min(size - 2, rules.max_run_cap)
    if longest_run >= max_acceptable_run:
        score -= rules.run_penalty
        violations.append(f"連番が長すぎます（{longest_run}個）")

    consecutive_pairs, consecutive_trios = _count_consecutive(sorted_game)

    # ── 2. 偶数・奇数 ──
    even_count = candidate.even_count
    even_min, even_max = _band(size, rules.even_min_pct, rules.even_max_pct)
    if even_count < even_min or even_count > even_max:
        score -= rules.even_penalty
        violations.append(f"偶数・奇数の偏り（偶数{even_count}個 / {size}個、理想: {even_min}-{even_max}）")

    # ── 3. 合計 ──
    total = candidate.total
    sum_min = math.floor(size * config.pool_average * rules.sum_min_pct)
    sum_max = math.ceil(size * config.pool_average * rules.sum_max_pct)
    if total < sum_min or total > sum_max:
        score -= rules.sum_penalty
        violations.append(f"合計が範囲外（{total}、理想: {sum_min}-{sum_max}、{size}個）")

    # ── 4. 枠と中央 ──
    frame_count = candidate.frame_count(config.frame_numbers)
    frame_min, frame_max = _band(size, rules.frame_min_pct, rules.frame_max_pct)
    if frame_count < frame_min or frame_count > frame_max:
        score -= rules.frame_penalty
        violations.append(f"枠の数字が範囲外（{frame_count}個 / {size}個、理想: {frame_min}-{frame_max}）")

    # ── 5. 素数 ──
    prime_count = sum(1 for n in sorted_game if n in config.prime_numbers)
    prime_min, prime_max = _band(size, rules.prime_min_pct, rules.prime_max_pct)
    if prime_count < prime_min or prime_count > prime_max:
        score -= rules.prime_penalty
        violations.append(f"素数が範囲外（{prime_count}個 / {size}個、理想: {prime_min}-{prime_max}）")

    # ── 6. フィボナッチ数（上側のみ） ──
    fibonacci_count = sum(1 for n in sorted_game if n in config.fibonacci_numbers)
    fibonacci_max = math.ceil(size * rules.fibonacci_max_pct)
    if fibonacci_count > fibonacci_max:
        score -= rules.fibonacci_penalty
        violations.append(f"フィボナッチ数が多すぎます（{fibonacci_count}個 / {size}個、上限: {fibonacci_max}）")

    # ── 7, 8. 行と列 ──
    rows = [0] * config.grid_rows
    columns = [0] * config.grid_cols
    for n in sorted_game:
        row = get_row(n, config.grid_cols)
        if 1 <= row <= config.grid_rows:
            rows[row - 1] += 1
        columns[get_column(n, config.grid_cols) - 1] += 1

    row_cap = min(size, rules.max_per_row)
    if any(count > row_cap for count in rows):
        score -= rules.row_penalty
        violations.append("行の分布が偏っています")

    column_cap = min(size, rules.max_per_column)
    if sum(1 for count in columns if count > column_cap) >= rules.column_overflow_limit:
        score -= rules.column_penalty
        violations.append("列（末尾数字）の分布が偏っています")

    # ── 9. 振れ幅 ──
    amplitude = candidate.amplitude
    min_amplitude = math.floor(config.range_max * rules.amplitude_min_pct)
    if amplitude < min_amplitude:
        score -= rules.amplitude_penalty
        violations.append(f"振れ幅が小さすぎます（{amplitude}、理想: >{min_amplitude}）")

    repeated_count = None
    if reference_draw is not None:
        repeated_count = candidate.hits(reference_draw)

    metrics = QualityMetrics(
        even_count=even_count,
        odd_count=size - even_count,
        frame_count=frame_count,
        center_count=size - frame_count,
        sum=total,
        sequences=sequences,
        prime_count=prime_count,
        fibonacci_count=fibonacci_count,
        rows=rows,
        columns=columns,
        amplitude=amplitude,
        longest_run=longest_run,
        consecutive_pairs=consecutive_pairs,
        consecutive_trios=consecutive_trios,
        repeated_count=repeated_count,
    )

    return QualityScoreResult(score=max(0, score), violations=violations, metrics=metrics)
