"""
ロト統計エンジン - インタラクティブ可視化モジュール

plotly を使用してシミュレーションのヒストグラムを
インタラクティブなHTMLグラフとして出力する。
"""

import os
from datetime import datetime
from typing import Optional

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from src.common.pool import PoolConfig
from src.montecarlo.analyzer import HISTOGRAM_LABELS, summarize_histogram
from src.montecarlo.simulator import SimulationResult


def _ensure_output_dir(output_dir: str) -> None:
    """出力ディレクトリが存在しない場合は作成する"""
    os.makedirs(output_dir, exist_ok=True)


def build_histogram_figure(result: SimulationResult, config: PoolConfig) -> go.Figure:
    """
    4つのヒストグラムを2×2のサブプロットにまとめた Figure を作る。

    Args:
        result: シミュレーション結果
        config: 数字プール設定

    Returns:
        plotly Figure
    """
    # ── カラーパレット ──
    bg_color = "#0d1117"
    card_color = "#161b22"
    text_color = "#e6edf3"
    grid_color = "#30363d"
    bar_colors = ["#58a6ff", "#ff6b6b", "#4ecdc4", "#e3b341"]

    histograms = result.histograms()
    fig = make_subplots(
        rows=2,
        cols=2,
        subplot_titles=[HISTOGRAM_LABELS[key] for key in histograms],
        horizontal_spacing=0.08,
        vertical_spacing=0.15,
    )

    for idx, (key, histogram) in enumerate(histograms.items()):
        row, col = idx // 2 + 1, idx % 2 + 1
        values = list(histogram.keys())
        counts = list(histogram.values())
        pcts = [c / result.trials * 100 for c in counts]

        fig.add_trace(
            go.Bar(
                x=values,
                y=counts,
                name=HISTOGRAM_LABELS[key],
                marker_color=bar_colors[idx % len(bar_colors)],
                marker_line_width=0,
                customdata=pcts,
                hovertemplate=("<b>%{x}</b><br>回数: %{y:,}<br>割合: %{customdata:.2f}%<extra></extra>"),
            ),
            row=row,
            col=col,
        )

        # 平均値ライン
        summary = summarize_histogram(histogram)
        fig.add_vline(
            x=summary["mean"],
            line_dash="dash",
            line_color="#8b949e",
            line_width=1,
            row=row,
            col=col,
        )

    fig.update_layout(
        title=dict(
            text=f"🎰 {config.name} 一様抽選の指標分布",
            font=dict(size=20, color=text_color),
            x=0.5,
        ),
        showlegend=False,
        plot_bgcolor=card_color,
        paper_bgcolor=bg_color,
        font=dict(color=text_color),
        hoverlabel=dict(
            bgcolor=card_color,
            font_size=13,
            font_color=text_color,
        ),
        margin=dict(l=60, r=30, t=80, b=40),
        height=720,
    )
    fig.update_xaxes(gridcolor=grid_color, color=text_color)
    fig.update_yaxes(gridcolor=grid_color, color=text_color)

    return fig


def generate_report_html(
    result: SimulationResult,
    config: PoolConfig,
    output_dir: str = "output",
    filepath: Optional[str] = None,
) -> str:
    """
    シミュレーション結果のインタラクティブHTMLレポートを生成する。

    Args:
        result: シミュレーション結果
        config: 数字プール設定
        output_dir: 出力ディレクトリ
        filepath: 出力ファイルパス（省略時は自動生成）

    Returns:
        保存したHTMLファイルのパス
    """
    _ensure_output_dir(output_dir)

    if filepath is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = os.path.join(output_dir, f"mc_{config.key.lower()}_{timestamp}.html")

    bg_color = "#0d1117"
    card_color = "#161b22"
    text_color = "#e6edf3"
    accent_color = "#58a6ff"
    grid_color = "#30363d"

    chart_html = build_histogram_figure(result, config).to_html(full_html=False, include_plotlyjs=False)
    generated_at = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    # 指標ごとの要約統計の表
    summary_rows = []
    for key, histogram in result.histograms().items():
        s = summarize_histogram(histogram)
        summary_rows.append(
            f"<tr><td>{HISTOGRAM_LABELS[key]}</td><td>{s['mean']:.2f}</td><td>{s['std']:.2f}</td>"
            f"<td>{s['mode']:.0f}</td><td>{s['p05']:.0f} 〜 {s['p95']:.0f}</td></tr>"
        )
    summary_table = "\n".join(summary_rows)

    html_content = f"""<!DOCTYPE html>
<html lang="ja">
<head>
<meta charset="UTF-8">
<title>{config.name} バランス判定の基準確率</title>
<script src="https://cdn.plot.ly/plotly-3.0.1.min.js"></script>
<style>
    body {{ margin: 0; padding: 24px; background: {bg_color}; color: {text_color};
           font-family: "Hiragino Sans", "Noto Sans JP", sans-serif; }}
    h1 {{ font-size: 1.6em; margin: 0 0 4px; }}
    .sub {{ color: #8b949e; margin-bottom: 24px; }}
    .cards {{ display: grid; grid-template-columns: repeat(4, 1fr); gap: 16px; margin-bottom: 24px; }}
    .card {{ background: {card_color}; border: 1px solid {grid_color}; border-radius: 8px; padding: 14px; }}
    .card span {{ display: block; color: #8b949e; font-size: 0.8em; }}
    .card strong {{ font-size: 1.4em; color: {accent_color}; }}
    table {{ width: 100%; border-collapse: collapse; margin-bottom: 24px; background: {card_color}; }}
    th, td {{ padding: 8px 12px; border-bottom: 1px solid {grid_color}; text-align: right; }}
    th:first-child, td:first-child {{ text-align: left; }}
    .chart {{ background: {card_color}; border: 1px solid {grid_color}; border-radius: 8px; padding: 12px; }}
</style>
</head>
<body>
<h1>🎰 {config.name} 一様抽選シミュレーション</h1>
<div class="sub">{generated_at} 生成</div>

<div class="cards">
    <div class="card"><span>数字範囲</span><strong>1 〜 {config.range_max}</strong></div>
    <div class="card"><span>試行回数</span><strong>{result.trials:,}</strong></div>
    <div class="card"><span>バランス判定</span><strong>{result.balanced_trials:,}</strong></div>
    <div class="card"><span>基準確率</span><strong>{result.probability_of_balanced * 100:.2f}%</strong></div>
</div>

<table>
    <tr><th>指標</th><th>平均</th><th>標準偏差</th><th>最頻値</th><th>5% 〜 95%</th></tr>
{summary_table}
</table>

<div class="chart">
{chart_html}
</div>
</body>
</html>"""

    with open(filepath, "w", encoding="utf-8") as f:
        f.write(html_content)

    return filepath
