from __future__ import annotations

from datetime import date, timedelta

import pytest

from stocklens.cache_store import TTLCache
from stocklens.errors import FetchError, NoDataError
from stocklens.models import Currency, FundamentalsSnapshot, Granularity, PricePoint, Tier
from stocklens.report import build_price_series, build_stock_report


def _prices(symbol: str, n: int = 30) -> list[PricePoint]:
    start = date(2024, 1, 1)
    return [PricePoint(symbol, start + timedelta(days=i), 100.0 + i) for i in range(n)]


def _fundamentals(symbol: str) -> FundamentalsSnapshot:
    return FundamentalsSnapshot(
        symbol=symbol,
        return_on_equity=0.20,
        market_cap=30e9,
        revenue=20e9,
        total_cash=15e9,
        operating_cashflow=2e9,
        per=18.0,
        pbr=4.0,
        roa=0.09,
        equity_ratio=55.0,
        eps=2.1,
        fifty_two_week_low=100.0,
    )


@pytest.fixture
def fake_market(monkeypatch):
    calls = {"prices": 0, "rate": 0}

    def _fetch_prices(symbol, years=3):
        calls["prices"] += 1
        return _prices(symbol)

    def _fetch_rate():
        calls["rate"] += 1
        return 150.0

    monkeypatch.setattr("stocklens.report.fetch_daily_prices", _fetch_prices)
    monkeypatch.setattr("stocklens.report.fetch_fundamentals", _fundamentals)
    monkeypatch.setattr("stocklens.report.fetch_revenue_history", lambda symbol: [10e9, 14e9, 20e9])
    monkeypatch.setattr("stocklens.report.fetch_exchange_rate", _fetch_rate)
    return calls


def test_build_stock_report_usd(fake_market):
    report = build_stock_report("aapl")

    assert report.symbol == "AAPL"
    assert report.currency == Currency.USD
    assert report.stats.max_price == 129.0
    assert report.stats.min_price == 100.0
    assert report.screening["pbr"] == Tier.POOR
    assert report.long_term_suitability == Tier.EXCELLENT
    assert len(report.growth_score.rationale) == 7
    # last close is used when the snapshot has no quote
    assert report.growth_score.rationale[3].startswith("〇 52週安値比: 1.3倍")
    assert report.exchange_rate == 0.0
    assert fake_market["rate"] == 0


def test_build_stock_report_jpy_uses_exchange_rate(fake_market):
    report = build_stock_report("7203")

    assert report.symbol == "7203.T"
    assert report.currency == Currency.JPY
    assert report.exchange_rate == 150.0
    assert report.actual_values["market_cap_usd"] == 30e9 / 150.0
    assert report.screening["eps"] == Tier.POOR


def test_build_stock_report_returns_none_without_prices(monkeypatch, fake_market):
    def _no_prices(symbol, years=3):
        raise NoDataError(f"No data available for symbol: {symbol}")

    monkeypatch.setattr("stocklens.report.fetch_daily_prices", _no_prices)
    assert build_stock_report("ZZZZ") is None
    assert build_stock_report("   ") is None


def test_revenue_failure_degrades_to_missing_growth(monkeypatch, fake_market):
    def _boom(symbol):
        raise FetchError("timeout")

    monkeypatch.setattr("stocklens.report.fetch_revenue_history", _boom)
    report = build_stock_report("AAPL")
    assert report is not None
    assert report.growth_score.rationale[0] == "× 売上CAGR: - (データ取得不可)"


def test_build_stock_report_uses_cache(fake_market):
    cache = TTLCache(ttl_seconds=60)
    first = build_stock_report("AAPL", cache=cache)
    second = build_stock_report("AAPL", cache=cache)

    assert second is first
    assert fake_market["prices"] == 1


def test_build_price_series_resamples(fake_market):
    weekly = build_price_series("AAPL", Granularity.WEEK)
    assert [p.date for p in weekly] == sorted(p.date for p in weekly)
    assert len(weekly) == 5
    assert weekly[0].date == date(2024, 1, 7)
