from __future__ import annotations

import math
from dataclasses import replace

import pytest

from stocklens.config import LEGACY_ROA_BANDS, ScreeningThresholds
from stocklens.models import Currency, FundamentalsSnapshot, Tier
from stocklens.screening import (
    SCREENING_FACTORS,
    compute_actual_values,
    equity_ratio_from_debt_to_equity,
    screen,
)


def _snapshot(**overrides) -> FundamentalsSnapshot:
    base = dict(
        symbol="AAPL",
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
    )
    base.update(overrides)
    return FundamentalsSnapshot(**base)


def test_screen_reference_snapshot_usd():
    result = screen(_snapshot(), Currency.USD)

    assert result["roe"] == Tier.EXCELLENT
    assert result["psr"] == Tier.GOOD
    assert result["cash_rich"] == Tier.EXCELLENT
    assert result["positive_cf"] == Tier.EXCELLENT
    assert result["per"] == Tier.GOOD
    assert result["pbr"] == Tier.POOR
    assert result["roa"] == Tier.EXCELLENT
    assert result["equity_ratio"] == Tier.GOOD
    assert result["eps"] == Tier.EXCELLENT
    assert result["market_cap"] == Tier.GOOD


@pytest.mark.parametrize("currency", [Currency.USD, Currency.JPY])
def test_screen_is_total_for_empty_snapshot(currency):
    result = screen(FundamentalsSnapshot(symbol="EMPTY"), currency)
    assert tuple(result) == SCREENING_FACTORS
    assert all(isinstance(t, Tier) for t in result.values())
    assert result["psr"] == Tier.POOR
    assert result["per"] == Tier.POOR
    assert result["pbr"] == Tier.POOR


def test_zero_revenue_psr_is_worst_tier():
    values = compute_actual_values(_snapshot(revenue=0.0))
    assert math.isnan(values["psr"])
    assert screen(_snapshot(revenue=0.0), Currency.USD)["psr"] == Tier.POOR


def test_negative_per_is_worst_tier():
    assert screen(_snapshot(per=-12.0), Currency.USD)["per"] == Tier.POOR
    assert screen(_snapshot(per=15.0), Currency.USD)["per"] == Tier.EXCELLENT
    assert screen(_snapshot(per=30.0), Currency.USD)["per"] == Tier.FAIR
    assert screen(_snapshot(per=30.1), Currency.USD)["per"] == Tier.POOR


def test_positive_cf_bands():
    assert screen(_snapshot(operating_cashflow=0.0), Currency.USD)["positive_cf"] == Tier.GOOD
    assert screen(_snapshot(operating_cashflow=-4.5e9), Currency.USD)["positive_cf"] == Tier.FAIR
    assert screen(_snapshot(operating_cashflow=-9e9), Currency.USD)["positive_cf"] == Tier.POOR


def test_eps_bands_depend_on_currency():
    snap = _snapshot(eps=60.0)
    assert screen(snap, Currency.USD)["eps"] == Tier.EXCELLENT
    assert screen(snap, Currency.JPY)["eps"] == Tier.GOOD
    assert screen(_snapshot(eps=0.6), Currency.JPY)["eps"] == Tier.POOR


def test_market_cap_bands_depend_on_currency():
    assert screen(_snapshot(market_cap=100e9), Currency.USD)["market_cap"] == Tier.EXCELLENT
    assert screen(_snapshot(market_cap=5e9), Currency.USD)["market_cap"] == Tier.FAIR
    assert screen(_snapshot(market_cap=2000e9), Currency.USD)["market_cap"] == Tier.POOR
    assert screen(_snapshot(market_cap=30e12), Currency.JPY)["market_cap"] == Tier.EXCELLENT
    assert screen(_snapshot(market_cap=3e12), Currency.JPY)["market_cap"] == Tier.GOOD
    assert screen(_snapshot(market_cap=3e11), Currency.JPY)["market_cap"] == Tier.FAIR
    assert screen(_snapshot(market_cap=30e9), Currency.JPY)["market_cap"] == Tier.POOR


def test_legacy_roa_table_is_selectable():
    legacy = replace(ScreeningThresholds(), roa=LEGACY_ROA_BANDS)
    snap = _snapshot(roa=0.06)
    assert screen(snap, Currency.USD)["roa"] == Tier.GOOD
    assert screen(snap, Currency.USD, legacy)["roa"] == Tier.EXCELLENT


def test_equity_ratio_from_debt_to_equity():
    assert equity_ratio_from_debt_to_equity(0.0) == 100.0
    assert equity_ratio_from_debt_to_equity(None) == 100.0
    assert round(equity_ratio_from_debt_to_equity(100.0), 4) == 50.0
