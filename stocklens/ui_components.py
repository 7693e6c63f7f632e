from __future__ import annotations

import math

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from .currency import format_market_cap, unit_label
from .models import ChartPoint, Currency, PriceStats, StockReport, Tier

FACTOR_LABELS = {
    "market_cap": ("時価総額", "◎5-50兆円/$50-500B ○1-100兆円/$10-1000B △0.1-1兆円/$1-10B"),
    "roe": ("ROE", "◎15%以上 ○10%以上 △5%以上"),
    "psr": ("PSR", "◎1倍未満 ○2倍未満 △3倍未満"),
    "cash_rich": ("キャッシュリッチ", "◎50%以上 ○20%以上 △10%以上"),
    "positive_cf": ("営業CF", "◎プラス ○-10%超 △-20%超"),
    "per": ("PER", "◎15倍以下 ○20倍以下 △30倍以下"),
    "pbr": ("PBR", "◎1倍未満 ○2倍未満 △3倍未満"),
    "roa": ("ROA", "◎8%以上 ○5%以上 △3%以上"),
    "equity_ratio": ("自己資本比率", "◎60%以上 ○40%以上 △20%以上"),
    "eps": ("EPS", "◎$1/¥100以上 ○$0.5/¥50以上 △$0.1/¥10以上"),
}

SUITABILITY_TEXT = {
    Tier.EXCELLENT: "長期保有に適している",
    Tier.GOOD: "まあまあ",
    Tier.FAIR: "やや不安",
    Tier.POOR: "致命的な弱点あり",
}


def _fmt_value(key: str, value: float, currency: Currency) -> str:
    if value is None or not math.isfinite(value):
        return "-"
    if key == "market_cap":
        return format_market_cap(value, currency)
    if key in ("roe", "cash_rich", "positive_cf", "roa", "equity_ratio"):
        return f"{value:.1f}%"
    if key == "eps":
        return f"{value:,.2f}{unit_label(currency)}"
    return f"{value:.2f}倍"


def render_price_chart(points: list[ChartPoint], symbol: str, currency: Currency) -> None:
    if not points:
        st.info("価格データがありません。")
        return
    frame = pd.DataFrame({"date": [p.x for p in points], "price": [p.y for p in points]})
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=frame["date"],
            y=frame["price"],
            mode="lines",
            name=symbol,
            line=dict(color="#1565c0", width=2),
        )
    )
    fig.update_layout(
        height=420,
        margin=dict(t=16, b=12, l=12, r=12),
        xaxis_title="Date",
        yaxis_title=f"Price ({currency.value})",
    )
    st.plotly_chart(fig, use_container_width=True)


def render_stats(stats: PriceStats | None, currency: Currency) -> None:
    if stats is None:
        st.info("統計を計算できるデータがありません。")
        return
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("最高値", f"{stats.max_price:,.2f} {currency.value}", stats.max_price_date.isoformat(), delta_color="off")
    c2.metric("最安値", f"{stats.min_price:,.2f} {currency.value}", stats.min_price_date.isoformat(), delta_color="off")
    c3.metric("変動幅", f"{stats.price_range:,.2f}")
    c4.metric("変動率", f"{stats.price_range_percent:.2f}%")


def render_screening(report: StockReport) -> None:
    st.subheader("スクリーニング結果")
    rows = []
    for key, tier in report.screening.items():
        label, criteria = FACTOR_LABELS[key]
        rows.append(
            {
                "項目": label,
                "評価": tier.value,
                "実績値": _fmt_value(key, report.actual_values.get(key), report.currency),
                "基準": criteria,
            }
        )
    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)
    if report.currency == Currency.JPY and report.exchange_rate:
        usd_cap = report.actual_values.get("market_cap_usd")
        if usd_cap:
            st.caption(f"USD/JPY {report.exchange_rate:.2f} 換算の時価総額: ${usd_cap / 1e9:.1f}B")


def render_scores(report: StockReport) -> None:
    c1, c2 = st.columns(2)
    suitability = report.long_term_suitability
    c1.metric("長期保有適性", suitability.value, SUITABILITY_TEXT[suitability], delta_color="off")
    growth = report.growth_score
    c2.metric("成長ポテンシャル", growth.rating.value, f"{growth.score}点", delta_color="off")

    st.subheader("スコア内訳")
    for line in growth.rationale:
        st.markdown(f"- {line}")


def render_sector_rankings(payload: dict | None) -> None:
    st.subheader("セクター騰落ランキング")
    if not payload:
        st.info("ランキングがまだ作成されていません。`python -m stocklens.jobs.update_sectors` を実行してください。")
        return

    st.caption(f"更新: {payload.get('updated_at_utc', 'N/A')}")
    labels = {"1day": "1日", "1week": "1週間", "1month": "1ヶ月"}
    tabs = st.tabs([labels[p] for p in labels])
    for tab, period in zip(tabs, labels):
        ranking = payload.get("rankings", {}).get(period, {})
        with tab:
            c1, c2 = st.columns(2)
            c1.markdown("**上昇**")
            c1.dataframe(pd.DataFrame(ranking.get("rising", [])), use_container_width=True, hide_index=True)
            c2.markdown("**下落**")
            c2.dataframe(pd.DataFrame(ranking.get("falling", [])), use_container_width=True, hide_index=True)
