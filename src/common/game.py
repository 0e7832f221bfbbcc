"""
ロト統計エンジン - 候補ゲーム（1口）のデータモデル

派生指標（合計・偶数個数・枠個数・振れ幅・連番）は
エンティティ内にキャッシュせず、参照のたびに計算する。
"""

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class GameCandidate:
    """昇順・重複なしの数字セット"""

    numbers: tuple[int, ...]

    def __post_init__(self) -> None:
        if len(set(self.numbers)) != len(self.numbers):
            raise ValueError(f"重複した数字があります: {self.numbers}")
        object.__setattr__(self, "numbers", tuple(sorted(self.numbers)))

    @classmethod
    def of(cls, numbers: Iterable[int]) -> "GameCandidate":
        return cls(tuple(numbers))

    def __len__(self) -> int:
        return len(self.numbers)

    def __iter__(self):
        return iter(self.numbers)

    def __contains__(self, number: object) -> bool:
        return number in self.numbers

    @property
    def total(self) -> int:
        """数字の合計"""
        return sum(self.numbers)

    @property
    def even_count(self) -> int:
        return sum(1 for n in self.numbers if n % 2 == 0)

    @property
    def odd_count(self) -> int:
        return len(self.numbers) - self.even_count

    @property
    def amplitude(self) -> int:
        """最大値 − 最小値（空なら 0）"""
        if not self.numbers:
            return 0
        return self.numbers[-1] - self.numbers[0]

    @property
    def runs(self) -> list[tuple[int, int]]:
        """長さ2以上の連番を (開始, 終了) のリストで返す"""
        return [(run[0], run[-1]) for run in _split_runs(self.numbers) if len(run) >= 2]

    @property
    def longest_run(self) -> int:
        """最長の連番の長さ（空なら 0）"""
        return max((len(run) for run in _split_runs(self.numbers)), default=0)

    def frame_count(self, frame_numbers: frozenset[int]) -> int:
        """枠に含まれる数字の個数"""
        return sum(1 for n in self.numbers if n in frame_numbers)

    def hits(self, drawn: Iterable[int]) -> int:
        """当選番号との一致数"""
        drawn_set = set(drawn)
        return sum(1 for n in self.numbers if n in drawn_set)


def _split_runs(sorted_numbers: tuple[int, ...]) -> list[list[int]]:
    """昇順の数字列を連続する区間に分割する"""
    runs: list[list[int]] = []
    for n in sorted_numbers:
        if runs and n == runs[-1][-1] + 1:
            runs[-1].append(n)
        else:
            runs.append([n])
    return runs
