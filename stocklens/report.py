from __future__ import annotations

import logging

from .cache_store import TTLCache
from .currency import detect_currency, normalize_symbol
from .errors import MarketDataError
from .market_data import fetch_daily_prices, fetch_exchange_rate, fetch_fundamentals, fetch_revenue_history
from .models import Currency, Granularity, PricePoint, StockReport
from .prices import resample
from .scoring import compute_revenue_growth, evaluate_growth_potential, evaluate_long_term_suitability
from .screening import compute_actual_values, screen
from .stats import summarize

logger = logging.getLogger(__name__)


def build_price_series(symbol: str, granularity: Granularity = Granularity.DAY) -> list[PricePoint]:
    ticker = normalize_symbol(symbol)
    return resample(fetch_daily_prices(ticker), granularity)


def _latest_price(prices: list[PricePoint]) -> float | None:
    if not prices:
        return None
    return max(prices, key=lambda p: p.date).price


def build_stock_report(symbol_input: str, cache: TTLCache | None = None) -> StockReport | None:
    symbol = normalize_symbol(symbol_input)
    if not symbol:
        return None

    cache_key = f"report:{symbol}"
    if cache is not None:
        cached = cache.get(cache_key)
        if cached is not None:
            return cached

    currency = detect_currency(symbol)
    try:
        prices = fetch_daily_prices(symbol)
        snapshot = fetch_fundamentals(symbol)
    except MarketDataError as exc:
        logger.warning("No report for %s (%s): %s", symbol, exc.code, exc)
        return None

    try:
        revenue_growth = compute_revenue_growth(fetch_revenue_history(symbol))
    except MarketDataError as exc:
        logger.warning("Revenue history unavailable for %s: %s", symbol, exc)
        revenue_growth = None

    usd_jpy = fetch_exchange_rate() if currency == Currency.JPY else 0.0

    screening = screen(snapshot, currency)
    actual_values = compute_actual_values(snapshot)
    if usd_jpy:
        actual_values["market_cap_usd"] = snapshot.market_cap / usd_jpy

    current_price = snapshot.current_price or _latest_price(prices)
    report = StockReport(
        symbol=symbol,
        currency=currency,
        stats=summarize(prices),
        screening=screening,
        actual_values=actual_values,
        long_term_suitability=evaluate_long_term_suitability(screening),
        growth_score=evaluate_growth_potential(
            snapshot,
            currency,
            revenue_growth=revenue_growth,
            current_price=current_price,
            usd_jpy_rate=usd_jpy,
        ),
        exchange_rate=usd_jpy,
    )
    if cache is not None:
        cache.set(cache_key, report)
    return report
