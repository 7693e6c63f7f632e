from __future__ import annotations

import streamlit as st

from stocklens.cache_store import TTLCache, load_sector_rankings
from stocklens.config import CACHE_TTL_SECONDS, PRICE_CACHE_TTL_SECONDS
from stocklens.currency import detect_currency, normalize_symbol
from stocklens.errors import MarketDataError
from stocklens.logging_config import setup_logging
from stocklens.models import Granularity
from stocklens.prices import to_chart_points
from stocklens.report import build_price_series, build_stock_report
from stocklens.ui_components import (
    render_price_chart,
    render_scores,
    render_screening,
    render_sector_rankings,
    render_stats,
)
from stocklens.ui_theme import inject_theme

TIMEFRAME_LABELS = {
    Granularity.DAY: "日足",
    Granularity.WEEK: "週足",
    Granularity.MONTH: "月足",
}


@st.cache_resource
def _report_cache() -> TTLCache:
    return TTLCache(ttl_seconds=CACHE_TTL_SECONDS)


@st.cache_data(show_spinner=False, ttl=PRICE_CACHE_TTL_SECONDS)
def _price_series(symbol: str, granularity: Granularity):
    return build_price_series(symbol, granularity)


def _render_analysis() -> None:
    st.sidebar.subheader("銘柄")
    symbol_input = st.sidebar.text_input("ティッカー", value="", placeholder="例: AAPL, 7203, 6758.T")
    granularity = st.sidebar.radio(
        "時間軸",
        options=list(TIMEFRAME_LABELS.keys()),
        format_func=lambda g: TIMEFRAME_LABELS[g],
        horizontal=True,
    )

    symbol = normalize_symbol(symbol_input)
    if not symbol:
        st.info("サイドバーでティッカーを入力してください。")
        return
    currency = detect_currency(symbol)

    st.markdown(f'<div class="hero"><h2 style="margin:0">{symbol}</h2><p>{currency.value}</p></div>', unsafe_allow_html=True)

    with st.spinner("価格データを取得しています..."):
        try:
            series = _price_series(symbol, granularity)
        except MarketDataError as exc:
            st.error(f"価格データ取得失敗: {exc}")
            return
    render_price_chart(to_chart_points(series), symbol, currency)

    with st.spinner("財務データを分析しています..."):
        report = build_stock_report(symbol, cache=_report_cache())
    if report is None:
        st.error("財務データを取得できませんでした。しばらく待ってから再試行してください。")
        return

    render_stats(report.stats, report.currency)
    render_scores(report)
    render_screening(report)


def main() -> None:
    setup_logging()
    st.set_page_config(page_title="Stock Lens", layout="wide")
    st.markdown(inject_theme(), unsafe_allow_html=True)

    st.sidebar.title("メニュー")
    menu = st.sidebar.radio("選択", options=["銘柄分析", "セクターランキング"])
    if menu == "セクターランキング":
        render_sector_rankings(load_sector_rankings())
        return
    _render_analysis()


if __name__ == "__main__":
    main()
