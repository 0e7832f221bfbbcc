"""
ロト統計エンジン - 例外定義

生成処理の前に検出できる設定ミスを表す例外。
どちらも ValueError のサブクラスなので、呼び出し側は
ValueError としてまとめて捕捉することもできる。
"""


class ConfigurationError(ValueError):
    """選択数・保証当選数などの指定がゲームの許容範囲外"""


class InsufficientPoolError(ValueError):
    """固定数字を除いた候補プールが、1口を埋めるのに足りない"""
