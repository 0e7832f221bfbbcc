"""
ロト統計エンジン - 抽選結果データモデル

DrawRecord は取り込み後に変更しない。
各アナライザは開催回昇順・範囲内の数字であることを前提とするため、
外部から受け取った履歴は validate_draws() で検証してから渡すこと。
"""

from dataclasses import dataclass, field
from typing import Iterable

from src.common.pool import PoolConfig


@dataclass(frozen=True)
class DrawRecord:
    """1開催回分の当選番号"""

    sequence_number: int
    """開催回（昇順・一意）"""

    numbers: frozenset[int]
    """本数字"""

    date: str = ""
    """開催日（YYYY-MM-DD、不明なら空文字）"""

    bonus_numbers: tuple[int, ...] = field(default=())
    """ボーナス数字（ゲームによっては空）"""

    @classmethod
    def of(cls, sequence_number: int, numbers: Iterable[int], **kwargs) -> "DrawRecord":
        """任意のイテラブルから DrawRecord を作る"""
        return cls(sequence_number=sequence_number, numbers=frozenset(numbers), **kwargs)

    @property
    def sorted_numbers(self) -> list[int]:
        """本数字の昇順リスト"""
        return sorted(self.numbers)


def validate_draws(draws: list[DrawRecord], config: PoolConfig) -> None:
    """
    抽選履歴がアナライザの前提を満たしているか検証する。

    - 各回の本数字が pick_size 個であること
    - 数字が 1〜range_max に収まること
    - 開催回が厳密に昇順であること

    Raises:
        ValueError: いずれかの条件を満たさない場合
    """
    previous = None
    for draw in draws:
        if len(draw.numbers) != config.pick_size:
            raise ValueError(
                f"第{draw.sequence_number}回: 本数字は{config.pick_size}個必要です（{len(draw.numbers)}個）"
            )
        out_of_range = [n for n in draw.numbers if not 1 <= n <= config.range_max]
        if out_of_range:
            raise ValueError(f"第{draw.sequence_number}回: 範囲外の数字 {sorted(out_of_range)}")
        if previous is not None and draw.sequence_number <= previous:
            raise ValueError(f"開催回が昇順ではありません: {previous} → {draw.sequence_number}")
        previous = draw.sequence_number
