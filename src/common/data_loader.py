"""
ロト統計エンジン - CSVデータ読み込みモジュール

過去の当選番号CSVファイルを読み込み、DrawRecord のリストに変換する。
エンジン本体はストレージに直接アクセスしないため、
このモジュールが抽選履歴の供給元となる。

データソース:
    ロト6/ロト7/ミニロト: loto-life.net (Shift-JIS)
    メガセナ/ロトファシル: Caixa 公開結果の CSV 変換 (UTF-8)
"""

import csv
import os
from typing import Optional

from src.common import LOTTERY_CONFIG
from src.common.draws import DrawRecord

# ゲームキーからCSVファイル名へのマッピング
_CSV_FILENAMES: dict[str, str] = {
    "MEGASENA": "megasena.csv",
    "LOTOFACIL": "lotofacil.csv",
    "LOTO6": "loto6.csv",
    "LOTO7": "loto7.csv",
    "MINILOTO": "miniloto.csv",
}

# CSVごとの文字コード
_ENCODINGS: dict[str, str] = {
    "MEGASENA": "utf-8",
    "LOTOFACIL": "utf-8",
    "LOTO6": "shift_jis",
    "LOTO7": "shift_jis",
    "MINILOTO": "shift_jis",
}

# CSVカラムインデックス定義（0始まり）
# 共通: 列0=開催回, 列1=開催日
_COLUMN_MAP: dict[str, dict] = {
    "MEGASENA": {
        "main_start": 2,   # 第1数字
        "main_end": 8,     # 第6数字（排他）
        "bonus_start": 8,  # ボーナス数字なし
        "bonus_end": 8,
    },
    "LOTOFACIL": {
        "main_start": 2,
        "main_end": 17,    # 第15数字（排他）
        "bonus_start": 17,
        "bonus_end": 17,
    },
    "LOTO6": {
        "main_start": 2,
        "main_end": 8,
        "bonus_start": 8,  # ボーナス数字
        "bonus_end": 9,    # （排他）
    },
    "LOTO7": {
        "main_start": 2,
        "main_end": 9,
        "bonus_start": 9,  # ボーナス数字1
        "bonus_end": 11,   # ボーナス数字2（排他）
    },
    "MINILOTO": {
        "main_start": 2,
        "main_end": 7,
        "bonus_start": 7,
        "bonus_end": 8,
    },
}


def _get_data_dir() -> str:
    """データディレクトリのパスを返す"""
    # プロジェクトルート/data/raw/
    base_dir = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    return os.path.join(base_dir, "data", "raw")


def load_draws(
    game_key: str,
    data_dir: Optional[str] = None,
) -> list[DrawRecord]:
    """
    指定ゲームのCSVファイルを読み込み、当選番号データを返す。

    Args:
        game_key: ゲームキー（"MEGASENA", "LOTO6" など）
        data_dir: CSVファイルのディレクトリパス（省略時はデフォルト）

    Returns:
        開催回昇順の DrawRecord のリスト

    Raises:
        ValueError: 不正なゲームキーが指定された場合
        FileNotFoundError: CSVファイルが見つからない場合
    """
    # ゲームキーの検証
    game_key = game_key.upper()
    if game_key not in LOTTERY_CONFIG:
        raise ValueError(
            f"不正なゲームキー: '{game_key}' "
            f"(有効: {', '.join(LOTTERY_CONFIG.keys())})"
        )

    # ファイルパスの組み立て
    if data_dir is None:
        data_dir = _get_data_dir()
    csv_path = os.path.join(data_dir, _CSV_FILENAMES[game_key])

    if not os.path.exists(csv_path):
        raise FileNotFoundError(f"CSVファイルが見つかりません: {csv_path}")

    col = _COLUMN_MAP[game_key]
    pick_size = LOTTERY_CONFIG[game_key]["pick_size"]

    results: list[DrawRecord] = []
    with open(csv_path, encoding=_ENCODINGS[game_key], newline="") as f:
        reader = csv.reader(f)
        next(reader, None)  # ヘッダー行をスキップ

        for row in reader:
            # 空行やデータ不足行をスキップ
            if len(row) < max(col["main_end"], col["bonus_end"]):
                continue

            try:
                draw_no = int(row[0])
                date_str = row[1].strip()
                main_numbers = [int(row[i]) for i in range(col["main_start"], col["main_end"])]
                bonus_numbers = tuple(
                    sorted(int(row[i]) for i in range(col["bonus_start"], col["bonus_end"]))
                )
            except (ValueError, IndexError):
                # 数値変換に失敗した行はスキップ
                continue

            # 重複を含む行は壊れたデータとして扱う
            if len(set(main_numbers)) != pick_size:
                continue

            results.append(
                DrawRecord.of(draw_no, main_numbers, date=date_str, bonus_numbers=bonus_numbers)
            )

    results.sort(key=lambda d: d.sequence_number)
    return results
