from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import pandas as pd
import yfinance as yf
from yfinance.exceptions import YFRateLimitError

from .config import DEFAULT_USD_JPY_RATE, EXCHANGE_RATE_SYMBOL, PRICE_HISTORY_YEARS
from .errors import FetchError, MarketDataError, NoDataError, RateLimitError
from .models import FundamentalsSnapshot, PricePoint
from .prices import points_from_frame
from .screening import equity_ratio_from_debt_to_equity

logger = logging.getLogger(__name__)

REVENUE_KEYS = [
    "Total Revenue",
    "Revenue",
    "Operating Revenue",
    "TotalRevenue",
]


def _safe_float(value) -> float | None:
    if value is None:
        return None
    try:
        num = float(value)
    except (TypeError, ValueError):
        return None
    if pd.isna(num):
        return None
    return num


def _num(info: dict, *keys: str) -> float:
    for key in keys:
        val = _safe_float(info.get(key))
        if val is not None:
            return val
    return 0.0


def _series_to_float_list(series: pd.Series | None, max_len: int | None = None) -> list[float]:
    if series is None:
        return []
    work = series
    if isinstance(series.index, pd.DatetimeIndex):
        work = series.sort_index(ascending=True)
    vals = pd.to_numeric(work, errors="coerce").dropna().tolist()
    if max_len is None:
        return vals
    return vals[-max_len:]


def _pick_row(df: pd.DataFrame | None, keys: list[str]) -> pd.Series | None:
    if df is None or df.empty:
        return None
    for key in keys:
        if key in df.index:
            selected = df.loc[key]
            return selected.iloc[0] if isinstance(selected, pd.DataFrame) else selected
    for idx in df.index:
        idx_text = str(idx).lower()
        if any(key.lower().replace(" ", "") in idx_text.replace(" ", "") for key in keys):
            selected = df.loc[idx]
            return selected.iloc[0] if isinstance(selected, pd.DataFrame) else selected
    return None


def _wrap_error(exc: Exception, symbol: str, what: str) -> MarketDataError:
    if isinstance(exc, MarketDataError):
        return exc
    if isinstance(exc, YFRateLimitError):
        return RateLimitError(f"Rate limited while fetching {what} for {symbol}")
    return FetchError(f"Failed to fetch {what} for {symbol}: {exc}")


def fetch_daily_prices(symbol: str, years: int = PRICE_HISTORY_YEARS) -> list[PricePoint]:
    end = datetime.now(timezone.utc)
    start = end - timedelta(days=365 * years)
    try:
        hist = yf.Ticker(symbol).history(start=start, end=end, interval="1d", auto_adjust=False)
    except Exception as exc:
        raise _wrap_error(exc, symbol, "prices") from exc

    prices = points_from_frame(symbol, hist if isinstance(hist, pd.DataFrame) else None)
    if not prices:
        raise NoDataError(f"No data available for symbol: {symbol}")
    logger.info("Fetched %d prices for %s", len(prices), symbol)
    return prices


def snapshot_from_info(symbol: str, info: dict) -> FundamentalsSnapshot:
    debt_to_equity = _safe_float(info.get("debtToEquity"))
    return FundamentalsSnapshot(
        symbol=symbol,
        return_on_equity=_num(info, "returnOnEquity"),
        market_cap=_num(info, "marketCap"),
        revenue=_num(info, "totalRevenue"),
        total_cash=_num(info, "totalCash"),
        operating_cashflow=_num(info, "operatingCashflow"),
        per=_num(info, "trailingPE"),
        pbr=_num(info, "priceToBook"),
        roa=_num(info, "returnOnAssets"),
        equity_ratio=equity_ratio_from_debt_to_equity(debt_to_equity),
        eps=_num(info, "trailingEps"),
        fifty_two_week_low=_num(info, "fiftyTwoWeekLow"),
        fifty_two_week_high=_num(info, "fiftyTwoWeekHigh"),
        revenue_growth=_num(info, "revenueGrowth"),
        current_price=_num(info, "currentPrice", "regularMarketPrice"),
        reported_currency=str(info.get("financialCurrency") or info.get("currency") or ""),
    )


def fetch_fundamentals(symbol: str) -> FundamentalsSnapshot:
    try:
        info = yf.Ticker(symbol).info or {}
    except Exception as exc:
        raise _wrap_error(exc, symbol, "fundamentals") from exc

    if not info:
        raise NoDataError(f"No quote data available for {symbol}")
    snapshot = snapshot_from_info(symbol, info)
    missing = [k for k in ("marketCap", "totalRevenue", "operatingCashflow", "trailingPE") if info.get(k) is None]
    if missing:
        logger.info("Incomplete fundamentals for %s, defaulted to 0: %s", symbol, ", ".join(missing))
    return snapshot


def extract_revenue_history(ticker) -> list[float]:
    """Annual revenues, oldest first. Falls back to summed quarters."""
    for attr in ("financials", "income_stmt"):
        row = _pick_row(getattr(ticker, attr, pd.DataFrame()), REVENUE_KEYS)
        revenue = _series_to_float_list(row, max_len=5)
        if revenue:
            return revenue

    q_income = getattr(ticker, "quarterly_income_stmt", pd.DataFrame())
    q_row = _pick_row(q_income, REVENUE_KEYS)
    if q_row is None:
        return []
    q_series = pd.to_numeric(q_row, errors="coerce").dropna()
    if q_series.empty or not isinstance(q_series.index, pd.DatetimeIndex):
        return []
    q_series = q_series.sort_index()
    y_series = q_series.groupby(q_series.index.year).sum().sort_index()
    return [float(v) for v in y_series.tolist()][-5:]


def fetch_revenue_history(symbol: str) -> list[float]:
    try:
        return extract_revenue_history(yf.Ticker(symbol))
    except Exception as exc:
        raise _wrap_error(exc, symbol, "revenue history") from exc


def fetch_exchange_rate() -> float:
    try:
        hist = yf.Ticker(EXCHANGE_RATE_SYMBOL).history(period="5d", interval="1d")
        close = pd.to_numeric(hist["Close"], errors="coerce").dropna()
        rate = float(close.iloc[-1])
    except Exception as exc:
        logger.warning("USD/JPY rate unavailable, using %.1f: %s", DEFAULT_USD_JPY_RATE, exc)
        return DEFAULT_USD_JPY_RATE
    if rate <= 0:
        return DEFAULT_USD_JPY_RATE
    return rate
