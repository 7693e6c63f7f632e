from __future__ import annotations

from .config import BILLION, DOMESTIC_SUFFIXES, OKU
from .models import Currency


def normalize_symbol(symbol: str) -> str:
    ticker = (symbol or "").strip().upper()
    if ticker.isdigit() and len(ticker) == 4:
        return f"{ticker}.T"
    return ticker


def detect_currency(symbol: str) -> Currency:
    ticker = (symbol or "").strip().upper()
    if ticker.endswith(DOMESTIC_SUFFIXES):
        return Currency.JPY
    if ticker.isdigit() and len(ticker) == 4:
        return Currency.JPY
    return Currency.USD


def to_usd(amount: float, currency: Currency, usd_jpy_rate: float) -> float:
    if currency == Currency.JPY:
        if usd_jpy_rate <= 0:
            return 0.0
        return amount / usd_jpy_rate
    return amount


def format_market_cap(value: float, currency: Currency) -> str:
    if currency == Currency.JPY:
        return f"{value / OKU:,.0f}億円"
    return f"{value / BILLION:.1f}B"


def unit_label(currency: Currency) -> str:
    return "円" if currency == Currency.JPY else "$"
