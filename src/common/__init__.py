"""
ロト統計エンジン - 共通設定

各ゲームの数字範囲・選択数・購入単位・料金表を定義する。
エンジン側はこの辞書を直接参照せず、get_pool_config() で
不変の PoolConfig に変換してから受け取る。
"""

# ゲームごとの設定
#   range_max:    数字の最大値（N）
#   pick_size:    1回の抽選で選ばれる数字の個数（k）
#   min_per_game: 1口あたりの最小選択数
#   max_per_game: 1口あたりの最大選択数
#   grid_cols:    マークシートの列数（枠・行・列の判定に使用）
#   prices:       選択数ごとの1口の価格
LOTTERY_CONFIG: dict[str, dict] = {
    "MEGASENA": {
        "name": "メガセナ",
        "range_max": 60,
        "pick_size": 6,
        "min_per_game": 6,
        "max_per_game": 15,
        "grid_cols": 10,
        "prices": {
            6: 5.00,
            7: 35.00,
            8: 140.00,
            9: 420.00,
            10: 1050.00,
            11: 2310.00,
            12: 4620.00,
            13: 8580.00,
            14: 15015.00,
            15: 25025.00,
        },
        "default_price": 5.00,
    },
    "LOTOFACIL": {
        "name": "ロトファシル",
        "range_max": 25,
        "pick_size": 15,
        "min_per_game": 15,
        "max_per_game": 20,
        "grid_cols": 5,
        "prices": {
            15: 3.00,
            16: 48.00,
            17: 408.00,
            18: 2448.00,
            19: 11628.00,
            20: 46512.00,
        },
        "default_price": 3.00,
    },
    "LOTO6": {
        "name": "ロト6",
        "range_max": 43,
        "pick_size": 6,
        "min_per_game": 6,
        "max_per_game": 6,
        "grid_cols": 10,
        "prices": {6: 200.0},
        "default_price": 200.0,
    },
    "LOTO7": {
        "name": "ロト7",
        "range_max": 37,
        "pick_size": 7,
        "min_per_game": 7,
        "max_per_game": 7,
        "grid_cols": 10,
        "prices": {7: 300.0},
        "default_price": 300.0,
    },
    "MINILOTO": {
        "name": "ミニロト",
        "range_max": 31,
        "pick_size": 5,
        "min_per_game": 5,
        "max_per_game": 5,
        "grid_cols": 10,
        "prices": {5: 200.0},
        "default_price": 200.0,
    },
}
