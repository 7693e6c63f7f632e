from __future__ import annotations

import math

from .config import DEFAULT_SCREENING, Bands, RangeBands, ScreeningThresholds
from .models import Currency, FundamentalsSnapshot, Tier

SCREENING_FACTORS = (
    "market_cap",
    "roe",
    "psr",
    "cash_rich",
    "positive_cf",
    "per",
    "pbr",
    "roa",
    "equity_ratio",
    "eps",
)


def equity_ratio_from_debt_to_equity(debt_to_equity: float | None) -> float:
    dte = debt_to_equity or 0.0
    if dte > 0:
        return (1.0 / (1.0 + dte / 100.0)) * 100.0
    return 100.0


def _ratio(numerator: float, denominator: float, scale: float = 1.0) -> float:
    if not denominator or denominator <= 0:
        return math.nan
    return numerator / denominator * scale


def compute_actual_values(snapshot: FundamentalsSnapshot) -> dict[str, float]:
    """Derived metrics behind each screening factor.

    Ratios that cannot be measured (zero revenue or market cap) are NaN.
    """
    return {
        "market_cap": snapshot.market_cap or 0.0,
        "roe": (snapshot.return_on_equity or 0.0) * 100.0,
        "psr": _ratio(snapshot.market_cap, snapshot.revenue),
        "cash_rich": _ratio(snapshot.total_cash, snapshot.market_cap, 100.0),
        "positive_cf": _ratio(snapshot.operating_cashflow, snapshot.market_cap, 100.0),
        "per": snapshot.per or 0.0,
        "pbr": snapshot.pbr or 0.0,
        "roa": (snapshot.roa or 0.0) * 100.0,
        "equity_ratio": snapshot.equity_ratio or 0.0,
        "eps": snapshot.eps or 0.0,
    }


def _at_least(value: float, bands: Bands, strict: bool = False) -> Tier:
    if not math.isfinite(value):
        return Tier.POOR
    for bound, tier in ((bands.excellent, Tier.EXCELLENT), (bands.good, Tier.GOOD), (bands.fair, Tier.FAIR)):
        if value > bound or (not strict and value == bound):
            return tier
    return Tier.POOR


def _positive_below(value: float, bands: Bands, inclusive: bool = False) -> Tier:
    if not math.isfinite(value) or value <= 0:
        return Tier.POOR
    for bound, tier in ((bands.excellent, Tier.EXCELLENT), (bands.good, Tier.GOOD), (bands.fair, Tier.FAIR)):
        if value < bound or (inclusive and value == bound):
            return tier
    return Tier.POOR


def _within(value: float, bands: RangeBands) -> Tier:
    if not math.isfinite(value) or value <= 0:
        return Tier.POOR
    for (low, high), tier in ((bands.excellent, Tier.EXCELLENT), (bands.good, Tier.GOOD), (bands.fair, Tier.FAIR)):
        if low <= value <= high:
            return tier
    return Tier.POOR


def screen(
    snapshot: FundamentalsSnapshot,
    currency: Currency,
    thresholds: ScreeningThresholds = DEFAULT_SCREENING,
) -> dict[str, Tier]:
    values = compute_actual_values(snapshot)
    result = {
        "market_cap": _within(values["market_cap"], thresholds.market_cap[currency]),
        "roe": _at_least(values["roe"], thresholds.roe),
        "psr": _positive_below(values["psr"], thresholds.psr),
        "cash_rich": _at_least(values["cash_rich"], thresholds.cash_rich),
        "positive_cf": _at_least(values["positive_cf"], thresholds.positive_cf, strict=True),
        "per": _positive_below(values["per"], thresholds.per, inclusive=True),
        "pbr": _positive_below(values["pbr"], thresholds.pbr),
        "roa": _at_least(values["roa"], thresholds.roa),
        "equity_ratio": _at_least(values["equity_ratio"], thresholds.equity_ratio),
        "eps": _at_least(values["eps"], thresholds.eps[currency]),
    }
    return {key: result[key] for key in SCREENING_FACTORS}
